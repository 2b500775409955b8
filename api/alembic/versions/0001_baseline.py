"""baseline schema for the local service directory

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Companies with their served ZIP codes, the global service catalog,
company/catalog assignments and the legacy per-company services table.
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_baseline"
down_revision = None
branch_labels = None
depends_on = None

PRICE_UNITS = (
    "per_service",
    "per_hour",
    "per_sqft",
    "per_day",
    "per_week",
    "per_month",
)


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.Column(
            "service_category",
            sa.String(100),
            nullable=False,
            server_default="garage_doors",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_companies_service_category", "companies", ["service_category"]
    )
    op.create_index("ix_companies_created_at", "companies", ["created_at"])

    op.create_table(
        "company_zip_codes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "zip_code", name="uq_company_zip_codes"),
    )
    op.create_index(
        "ix_company_zip_codes_zip_code", "company_zip_codes", ["zip_code"]
    )

    op.create_table(
        "global_services",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "price_unit",
            sa.Enum(*PRICE_UNITS, name="price_unit", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "category", sa.String(100), nullable=False, server_default="general"
        ),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_global_services_created_at", "global_services", ["created_at"]
    )

    op.create_table(
        "company_services",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("service_id", sa.Uuid(), nullable=False),
        sa.Column("custom_price", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "is_available", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["service_id"], ["global_services.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "company_id", "service_id", name="uq_company_services_company_service"
        ),
    )
    op.create_index(
        "ix_company_services_company_id", "company_services", ["company_id"]
    )
    op.create_index(
        "ix_company_services_service_id", "company_services", ["service_id"]
    )

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "price_unit",
            sa.String(50),
            nullable=False,
            server_default="per_service",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_company_id", "services", ["company_id"])
    op.create_index("ix_services_created_at", "services", ["created_at"])


def downgrade() -> None:
    op.drop_table("services")
    op.drop_table("company_services")
    op.drop_table("global_services")
    op.drop_table("company_zip_codes")
    op.drop_table("companies")
