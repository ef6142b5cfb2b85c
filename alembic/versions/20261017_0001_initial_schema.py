"""Initial schema for EstateDesk

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Creates all tables for:
- Accounts
- Properties, tenants and cheques
- Maintenance requests
- Financial records and rent tracking
- Data shares
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _account_fk() -> list:
    return [
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
    ]


def upgrade() -> None:
    """Create all tables."""

    # accounts - logins owning every other row
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("preferences", sa.JSON(), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="manager"),
        sa.Column("failed_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("locked_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_password_change", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )

    # properties
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=True),
        sa.Column("bathrooms", sa.Numeric(4, 1), nullable=True),
        sa.Column("square_feet", sa.Integer(), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.String(10), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(20), nullable=False, server_default="vacant"),
        sa.Column("electricity_number", sa.String(100), nullable=True),
        sa.Column("water_number", sa.String(100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_properties_account_id", "properties", ["account_id"])
    op.create_index("ix_properties_account_name", "properties", ["account_id", "name"])

    # tenants
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("first_name", sa.String(120), nullable=False),
        sa.Column("last_name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("nationality", sa.String(100), nullable=True),
        sa.Column("property_id", sa.Integer(), nullable=True),
        sa.Column("lease_start", sa.Date(), nullable=True),
        sa.Column("lease_end", sa.Date(), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.String(10), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("free_month_type", sa.String(10), nullable=True),
        sa.Column("free_month_date", sa.String(7), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_tenants_account_id", "tenants", ["account_id"])
    op.create_index("ix_tenants_property_id", "tenants", ["property_id"])
    op.create_index("ix_tenants_status", "tenants", ["status"])

    # cheques - owned through their tenant
    op.create_table(
        "cheques",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("cheque_number", sa.String(100), nullable=True),
        sa.Column("bank_name", sa.String(255), nullable=True),
        sa.Column("cheque_date", sa.Date(), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_security", sa.Boolean(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_cheques_tenant_id", "cheques", ["tenant_id"])

    # maintenance_requests
    op.create_table(
        "maintenance_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("property_id", sa.Integer(), nullable=True),
        sa.Column("tenant_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(50), nullable=False, server_default="pending"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_maintenance_requests_account_id", "maintenance_requests", ["account_id"])
    op.create_index("ix_maintenance_requests_property_id", "maintenance_requests", ["property_id"])
    op.create_index("ix_maintenance_requests_tenant_id", "maintenance_requests", ["tenant_id"])
    op.create_index("ix_maintenance_requests_status", "maintenance_requests", ["status"])

    # financial_records - the ledger
    op.create_table(
        "financial_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("property_id", sa.Integer(), nullable=True),
        sa.Column("tenant_id", sa.Integer(), nullable=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False, server_default="USD"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("record_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_financial_records_account_id", "financial_records", ["account_id"])
    op.create_index("ix_financial_records_property_id", "financial_records", ["property_id"])
    op.create_index("ix_financial_records_tenant_id", "financial_records", ["tenant_id"])
    op.create_index("ix_financial_records_record_date", "financial_records", ["record_date"])

    # rent_tracking - one row per payment
    op.create_table(
        "rent_tracking",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("rent_month", sa.String(7), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False, server_default="USD"),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("payment_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("cash_received_by", sa.String(255), nullable=True),
        sa.Column("cash_receipt_number", sa.String(100), nullable=True),
        sa.Column("cheque_number", sa.String(100), nullable=True),
        sa.Column("cheque_bank", sa.String(255), nullable=True),
        sa.Column("cheque_date", sa.Date(), nullable=True),
        sa.Column("cheque_status", sa.String(20), nullable=True),
        sa.Column("online_reference", sa.String(255), nullable=True),
        sa.Column("online_bank", sa.String(255), nullable=True),
        sa.Column("partial_reason", sa.Text(), nullable=True),
        sa.Column("partial_balance", sa.Numeric(12, 2), nullable=True),
        sa.Column("partial_notes", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_rent_tracking_account_id", "rent_tracking", ["account_id"])
    op.create_index("ix_rent_tracking_account_month", "rent_tracking", ["account_id", "rent_month"])

    # data_shares - expiring read-only links
    op.create_table(
        "data_shares",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        *_account_fk(),
        sa.Column("share_token", sa.String(64), nullable=False),
        sa.Column("recipient_email", sa.String(255), nullable=True),
        sa.Column("data_type", sa.String(20), nullable=False, server_default="all"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("share_token"),
    )
    op.create_index("ix_data_shares_account_id", "data_shares", ["account_id"])


def downgrade() -> None:
    """Drop all tables in reverse order."""
    op.drop_table("data_shares")
    op.drop_table("rent_tracking")
    op.drop_table("financial_records")
    op.drop_table("maintenance_requests")
    op.drop_table("cheques")
    op.drop_table("tenants")
    op.drop_table("properties")
    op.drop_table("accounts")
