import asyncio

from sqlalchemy.engine import Engine

db_engine: Engine | None = None

log_lock = asyncio.Lock()
upload_lock = asyncio.Lock()
email_lock = asyncio.Lock()
