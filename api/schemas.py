"""Pydantic schemas for API request/response validation."""

from datetime import datetime
from typing import Annotated, ClassVar, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models import DEFAULT_CATALOG_CATEGORY, DEFAULT_SERVICE_CATEGORY, PriceUnit


class PartialUpdate(BaseModel):
    """Base for presence-checked patches.

    Only fields present in the request body are written. Explicit null is
    rejected for columns that cannot hold it.
    """

    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required_columns(self) -> Self:
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.NULLABLE_FIELDS:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Matches the String(10) column on company_zip_codes.zip_code
ZipCode = Annotated[str, Field(max_length=10)]


def _clean_zip_codes(codes: list[str]) -> list[str]:
    return list(dict.fromkeys(code.strip() for code in codes if code.strip()))


# ============ Company Schemas ============


class CompanyBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    phone: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    address: str = Field(min_length=1, max_length=500)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=50)
    zip_codes: list[ZipCode] = Field(default_factory=list)
    service_category: str = Field(
        default=DEFAULT_SERVICE_CATEGORY, min_length=1, max_length=100
    )


class CompanyCreate(CompanyBase):
    """Flat company record from the admin form or API."""

    @field_validator("zip_codes")
    @classmethod
    def dedupe_zip_codes(cls, v: list[str]) -> list[str]:
        return _clean_zip_codes(v)


class CompanyUpdate(PartialUpdate):
    """Partial company patch."""

    NULLABLE_FIELDS = frozenset({"description", "website"})

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    email: str | None = Field(default=None, min_length=1, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    address: str | None = Field(default=None, min_length=1, max_length=500)
    city: str | None = Field(default=None, min_length=1, max_length=100)
    state: str | None = Field(default=None, min_length=1, max_length=50)
    zip_codes: list[ZipCode] | None = None
    service_category: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("zip_codes")
    @classmethod
    def dedupe_zip_codes(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return _clean_zip_codes(v)


# ============ Global Service Schemas ============


class GlobalServiceCreate(BaseModel):
    """Catalog entry. name, base_price and price_unit are required."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    base_price: float = Field(ge=0)
    price_unit: PriceUnit
    category: str = Field(
        default=DEFAULT_CATALOG_CATEGORY, min_length=1, max_length=100
    )
    is_active: bool = True


class GlobalServiceUpdate(PartialUpdate):
    NULLABLE_FIELDS = frozenset({"description"})

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    base_price: float | None = Field(default=None, ge=0)
    price_unit: PriceUnit | None = None
    category: str | None = Field(default=None, max_length=100)
    is_active: bool | None = None


# ============ Assignment Schemas ============


class AssignmentCreate(BaseModel):
    service_id: UUID
    custom_price: float | None = Field(default=None, ge=0)
    is_available: bool = True


class AssignmentUpdate(PartialUpdate):
    """Price override and availability toggle. Null clears the override."""

    NULLABLE_FIELDS = frozenset({"custom_price"})

    custom_price: float | None = Field(default=None, ge=0)
    is_available: bool | None = None


# ============ Response Data ============


class GlobalServiceData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    base_price: float
    price_unit: PriceUnit
    category: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AssignmentData(BaseModel):
    """Assignment joined with its catalog entry (None when it is gone)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_id: UUID
    service_id: UUID
    custom_price: float | None = None
    is_available: bool
    created_at: datetime
    service: GlobalServiceData | None = None


class LegacyServiceData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_id: UUID
    name: str
    description: str | None = None
    base_price: float
    price_unit: str
    created_at: datetime
    updated_at: datetime


class CompanyData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    phone: str
    email: str
    website: str | None = None
    address: str
    city: str
    state: str
    zip_codes: list[str]
    service_category: str
    created_at: datetime
    updated_at: datetime
    company_services: list[AssignmentData] = Field(default_factory=list)


class CompanyDetailData(CompanyData):
    """Public detail view; carries the legacy per-company services too."""

    services: list[LegacyServiceData] = Field(default_factory=list)


# ============ Envelopes ============


class CompanyListResponse(BaseModel):
    companies: list[CompanyData]


class CompanyResponse(BaseModel):
    company: CompanyData


class CompanyDetailResponse(BaseModel):
    company: CompanyDetailData


class GlobalServiceListResponse(BaseModel):
    services: list[GlobalServiceData]


class GlobalServiceResponse(BaseModel):
    service: GlobalServiceData


class AssignmentListResponse(BaseModel):
    assignments: list[AssignmentData]


class AssignmentResponse(BaseModel):
    assignment: AssignmentData


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Error body. ``code`` is a stable identifier clients can branch on."""

    detail: str
    code: str | None = None


# ============ Health ============


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str


class PoolStatusResponse(BaseModel):
    pool_size: int
    checked_out: int
    overflow: int
    checked_in: int


class DetailedHealthResponse(BaseModel):
    """Component-level health."""

    status: str
    service: str
    database: bool
    pool: PoolStatusResponse | None = None
