import os
from contextlib import asynccontextmanager
from fastapi import FastAPI

from core import log_store
from core.constants import main_values


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("--- DonorBook: Starting up... ---")

    os.makedirs(main_values.UPLOAD_DIR, exist_ok=True)
    for log_file in (main_values.LOG_FILE, main_values.EMAIL_LOG_FILE):
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)

    log_store.ensure_schema()

    print("--- DonorBook: Startup complete. Service is running. ---")

    yield

    log_store.dispose_engine()
    print("--- DonorBook: Shut down. ---")
