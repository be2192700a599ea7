from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import FileResponse, JSONResponse
from typing import List, Dict, Any
from datetime import date
import uvicorn
import logging

from slowapi.errors import RateLimitExceeded
from core import log_store, mailer, uploads
from core.constants.main_values import RATE_LIMIT, PORT
from core.hebrew_date import to_hebrew_date, to_short_hebrew_date
from core.lifespan import lifespan
from core.query_engine import apply_query, export_delimited
from core.receipts import create_receipt_from_charge, format_receipt_for_email
from models.api import (QueryRequest, ExportRequest, UploadRequest, UploadResponse, EmailRequest, EmailResponse,
                        ReceiptRequest, HebrewDateResponse, LogEntryResponse)
from models.records import Receipt
from models.structure.presets import get_preset, list_presets
from models.structure.table import TableConfiguration
from starlette.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address

app = FastAPI(
    title="DonorBook",
    description="Donor and donation management API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
)

Instrumentator().instrument(app).expose(app)

limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler("donorbook.log"),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger("donorbook")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/logs", status_code=204)
@limiter.limit(RATE_LIMIT)
async def ingest_log(request: Request):
    body = (await request.body()).decode("utf-8", errors="replace")
    await log_store.ingest(body)
    return Response(status_code=204)


@app.get("/logs", response_model=List[LogEntryResponse])
async def list_logs(limit: int = Query(default=50, ge=1, le=1000)):
    return await log_store.recent(limit)


@app.post("/upload", response_model=UploadResponse)
@limiter.limit(RATE_LIMIT)
async def upload_file(request: Request, payload: UploadRequest):
    try:
        url = await uploads.save_upload(payload.file_name, payload.content)
        return UploadResponse(success=True, url=url)
    except ValueError as e:
        logger.error(f"Failed to process upload: {e}")
        return JSONResponse(status_code=400, content={"success": False})
    except OSError as e:
        logger.error(f"Failed to save file: {e}")
        return JSONResponse(status_code=500, content={"success": False})


@app.get("/uploads/{file_name}")
async def get_upload(file_name: str):
    try:
        path = uploads.find_upload(file_name)
    except (LookupError, ValueError):
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)


@app.post("/email", response_model=EmailResponse)
@limiter.limit(RATE_LIMIT)
async def send_email(request: Request, payload: EmailRequest):
    try:
        await mailer.send_email(payload.to, payload.subject, payload.text, payload.html)
    except (OSError, ValueError):
        return JSONResponse(status_code=500, content={"success": False})
    return EmailResponse(success=True)


@app.post("/table/query",response_model=List[Dict[str, Any]])
@limiter.limit(RATE_LIMIT)
async def query_table(request: Request, payload: QueryRequest):
    return apply_query(payload.records, payload.configuration, payload.query_state)


@app.post("/table/export")
@limiter.limit(RATE_LIMIT)
async def export_table(request: Request, payload: ExportRequest):
    if not payload.configuration.exportable:
        raise HTTPException(status_code=400, detail="Export is disabled for this table")

    text = export_delimited(
        payload.records,
        payload.configuration,
        query_state=payload.query_state,
        delimiter=payload.delimiter,
        locale=payload.locale,
        quote=payload.quote,
    )
    logger.info(f"Exported {len(payload.records)} records to {payload.file_name}")

    return Response(
        content=text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{payload.file_name}"'},
    )


@app.get("/table/presets", response_model=List[str])
async def list_table_presets():
    return list_presets()


@app.get("/table/presets/{name}", response_model=TableConfiguration)
async def get_table_preset(name: str):
    preset = get_preset(name)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Table preset '{name}' not found")
    return preset


@app.post("/receipt/from-charge", response_model=Receipt)
@limiter.limit(RATE_LIMIT)
async def receipt_from_charge(request: Request, payload: ReceiptRequest):
    try:
        return create_receipt_from_charge(payload.charge, payload.donor, payload.items)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating receipt: {e}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {e}")


@app.post("/receipt/email-text")
async def receipt_email_text(receipt: Receipt):
    return {"text": format_receipt_for_email(receipt)}


@app.get("/hebrew-date", response_model=HebrewDateResponse)
async def hebrew_date(value: date = Query(..., alias="date")):
    return HebrewDateResponse(
        gregorian=value,
        hebrew=to_hebrew_date(value),
        short=to_short_hebrew_date(value),
    )


if __name__ == "__main__":
    print(f"--- Starting DonorBook on http://0.0.0.0:{PORT} ---")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=PORT,
        workers=1,
        reload=False,
        limit_concurrency=100,
    )
