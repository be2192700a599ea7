from datetime import date, datetime
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from core.constants.main_values import DEFAULT_LOCALE
from models.query import QueryState
from models.records import Charge, Donor, ReceiptItem
from models.structure.table import TableConfiguration


class QueryRequest(BaseModel):
    records: List[Dict[str, Any]]
    configuration: TableConfiguration
    query_state: QueryState = Field(default_factory=QueryState)


class ExportRequest(BaseModel):
    records: List[Dict[str, Any]]
    configuration: TableConfiguration
    query_state: QueryState | None = Field(
        default=None,
        description="Export the current view when set, the full data set otherwise"
    )
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    quote: bool = False
    locale: str = DEFAULT_LOCALE
    file_name: str = "export.csv"


class UploadRequest(BaseModel):
    file_name: str = Field(..., alias="fileName")
    content: str = Field(..., description="Base64 encoded file content")

    model_config = {"populate_by_name": True}


class UploadResponse(BaseModel):
    success: bool
    url: str | None = None


class EmailRequest(BaseModel):
    to: str
    subject: str = ""
    text: str | None = None
    html: str | None = None


class EmailResponse(BaseModel):
    success: bool


class ReceiptRequest(BaseModel):
    charge: Charge
    donor: Donor
    items: List[ReceiptItem] | None = None


class HebrewDateResponse(BaseModel):
    gregorian: date
    hebrew: str
    short: str


class LogEntryResponse(BaseModel):
    id: int
    data: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
