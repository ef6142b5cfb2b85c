"""Bulk import schemas."""

from datetime import date

from pydantic import BaseModel, Field


class ImportResult(BaseModel):
    """Outcome of one import section; failed rows do not stop the others."""

    success_count: int = 0
    error_count: int = 0
    errors: list[str] = Field(default_factory=list)

    def add_error(self, row_number: int, message: str) -> None:
        self.errors.append(f"Row {row_number}: {message}")
        self.error_count += 1


class ImportedProperty(BaseModel):
    id: int
    name: str
    address: str
    type: str
    status: str
    rent_amount: float | None = None
    currency: str


class ImportedTenant(BaseModel):
    id: int
    name: str
    email: str
    property_name: str | None = None
    rent_amount: float | None = None
    currency: str
    lease_start: date | None = None
    lease_end: date | None = None


class CombinedSummary(BaseModel):
    properties: list[ImportedProperty] = Field(default_factory=list)
    tenants: list[ImportedTenant] = Field(default_factory=list)


class CombinedImportResult(BaseModel):
    properties: ImportResult
    tenants: ImportResult
    summary: CombinedSummary
    total_success: int
    total_errors: int
