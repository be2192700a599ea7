import os
import base64
import asyncio
import binascii
import logging

from core import state
from core.constants import main_values

logger = logging.getLogger("donorbook.uploads")


def resolve_upload_path(file_name: str) -> str:
    """
    Maps a client file name into the upload directory.
    Raises ValueError for names that would escape it.
    """
    upload_dir = os.path.realpath(main_values.UPLOAD_DIR)
    path = os.path.realpath(os.path.join(upload_dir, file_name))

    if not file_name or os.path.dirname(path) != upload_dir:
        raise ValueError(f"Invalid file name: '{file_name}'")
    return path


def _write_file(path: str, data: bytes):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'wb') as f:
        f.write(data)


async def save_upload(file_name: str, content: str) -> str:
    path = resolve_upload_path(file_name)

    try:
        data = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Content is not valid base64: {e}")

    async with state.upload_lock:
        await asyncio.to_thread(_write_file, path, data)

    logger.info(f"Saved upload {file_name} ({len(data)} bytes)")
    return f"/uploads/{os.path.basename(path)}"


def find_upload(file_name: str) -> str:
    path = resolve_upload_path(file_name)
    if not os.path.isfile(path):
        raise LookupError(f"Upload '{file_name}' not found")
    return path
