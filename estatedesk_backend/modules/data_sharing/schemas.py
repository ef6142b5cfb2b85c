"""Data sharing schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ..commons import OptionalEmail, OptionalInt, OptionalStr


class ShareCreate(BaseModel):
    recipient_email: OptionalEmail = None
    data_type: OptionalStr = None
    expires_in_days: OptionalInt = None


class ShareCreated(BaseModel):
    share_token: str
    share_link: str
    expires_at: datetime


class ShareImportRequest(BaseModel):
    share_token: OptionalStr = None


class ShareImportResult(BaseModel):
    imported_count: int
    errors: list[str]


SharedSnapshot = dict[str, Any]
