import os
import asyncio
import logging
from typing import List

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session

from core import state
from core.constants import main_values
from models.db import Base, LogEntry

logger = logging.getLogger("donorbook.logs")


def get_engine() -> Engine:
    if state.db_engine is None:
        url = make_url(main_values.DATABASE_URL)
        if url.drivername.startswith("sqlite") and url.database:
            parent = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(parent, exist_ok=True)
        state.db_engine = create_engine(url, future=True)
    return state.db_engine


def ensure_schema() -> None:
    """Creates the logs table when it is missing."""
    try:
        Base.metadata.create_all(get_engine())
    except Exception as e:
        logger.error(f"Failed to ensure logs table exists: {e}")


def dispose_engine() -> None:
    if state.db_engine is not None:
        state.db_engine.dispose()
        state.db_engine = None


def _append_line(line: str):
    """Synchronous helper for appending to the log file"""
    with open(main_values.LOG_FILE, 'a', encoding='utf-8') as f:
        f.write(line + "\n")
        f.flush()
        os.fsync(f.fileno())


def _insert_row(data: str):
    with Session(get_engine()) as session:
        session.add(LogEntry(data=data))
        session.commit()


async def ingest(body: str) -> None:
    """
    Stores one client log entry in the log file and the logs table.
    Failures are logged and swallowed, the client never sees them.
    """
    try:
        async with state.log_lock:
            await asyncio.to_thread(_append_line, body)
    except OSError as e:
        logger.error(f"Failed to write log: {e}")

    try:
        await asyncio.to_thread(_insert_row, body)
    except Exception as e:
        logger.error(f"Failed to insert log: {e}")


def _select_recent(limit: int) -> List[LogEntry]:
    with Session(get_engine()) as session:
        stmt = select(LogEntry).order_by(LogEntry.id.desc()).limit(limit)
        return list(session.scalars(stmt))


async def recent(limit: int = 50) -> List[LogEntry]:
    return await asyncio.to_thread(_select_recent, limit)
