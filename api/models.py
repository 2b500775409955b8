"""SQLAlchemy models for the local service directory."""

import uuid
from datetime import UTC, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from core.database import Base

DEFAULT_SERVICE_CATEGORY = "garage_doors"
DEFAULT_CATALOG_CATEGORY = "general"


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class PriceUnit(str, PyEnum):
    """Billing granularity of a catalog service."""

    PER_SERVICE = "per_service"
    PER_HOUR = "per_hour"
    PER_SQFT = "per_sqft"
    PER_DAY = "per_day"
    PER_WEEK = "per_week"
    PER_MONTH = "per_month"


class Company(TimestampMixin, Base):
    """A service provider listed in the directory."""

    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    service_category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_SERVICE_CATEGORY,
        index=True,
    )

    zip_code_rows: Mapped[list["CompanyZipCode"]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="CompanyZipCode.id",
    )
    company_services: Mapped[list["CompanyService"]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="CompanyService.created_at.desc()",
    )
    legacy_services: Mapped[list["LegacyService"]] = relationship(
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def zip_codes(self) -> list[str]:
        return [row.zip_code for row in self.zip_code_rows]

    def set_zip_codes(self, codes: list[str]) -> None:
        """Replace the served ZIP set, keeping rows that are still present.

        Unchanged codes keep their rows so the flush never inserts a
        duplicate (company_id, zip_code) before the old row is deleted.
        """
        wanted = list(dict.fromkeys(code.strip() for code in codes if code.strip()))
        wanted_set = set(wanted)

        kept = [row for row in self.zip_code_rows if row.zip_code in wanted_set]
        existing = {row.zip_code for row in kept}
        kept.extend(
            CompanyZipCode(zip_code=code) for code in wanted if code not in existing
        )
        self.zip_code_rows = kept


class CompanyZipCode(Base):
    """One ZIP code served by a company."""

    __tablename__ = "company_zip_codes"
    __table_args__ = (
        UniqueConstraint("company_id", "zip_code", name="uq_company_zip_codes"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    company: Mapped["Company"] = relationship(back_populates="zip_code_rows")


class GlobalService(TimestampMixin, Base):
    """Catalog-level service definition shared across companies."""

    __tablename__ = "global_services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False
    )
    price_unit: Mapped[PriceUnit] = mapped_column(
        Enum(
            PriceUnit,
            name="price_unit",
            native_enum=False,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_CATALOG_CATEGORY
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CompanyService(Base):
    """A company's adoption of a catalog service.

    At most one row per (company, service); the unique constraint is the
    source of truth for the "already assigned" condition.
    """

    __tablename__ = "company_services"
    __table_args__ = (
        UniqueConstraint(
            "company_id", "service_id", name="uq_company_services_company_service"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("global_services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    custom_price: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    company: Mapped["Company"] = relationship(back_populates="company_services")
    service: Mapped["GlobalService"] = relationship(lazy="selectin")


class LegacyService(TimestampMixin, Base):
    """Per-company service rows that predate the global catalog."""

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False
    )
    price_unit: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PriceUnit.PER_SERVICE.value
    )

    company: Mapped["Company"] = relationship(back_populates="legacy_services")
