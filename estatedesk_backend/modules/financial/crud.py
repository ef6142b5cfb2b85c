"""CRUD operations for the financial ledger."""

from ...core.base_crud import BaseCRUD
from .models import FinancialRecord


class FinancialRecordCRUD(BaseCRUD[FinancialRecord]):
    default_relationships = ["assigned_property", "tenant"]
    default_order_by = "record_date"


financial_crud = FinancialRecordCRUD(FinancialRecord)
