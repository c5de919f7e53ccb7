# app/schemas/assets_schemas.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field, model_validator

from shared.core.schemas import CommonQueryParams
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .category_schemas import CategoryLookup
from .company_schemas import CompanyLookup


class AssetBase(EmptyStringModel):
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=14, decimal_places=2)
    supplier: Optional[str] = Field(None, max_length=255)
    model_number: Optional[str] = Field(None, max_length=255)
    asset_info: Optional[str] = None
    specs: Optional[str] = None
    remarks: Optional[str] = None
    invoice_date: Optional[date] = None
    invoice_number: Optional[str] = Field(None, max_length=255)
    date_deployed: Optional[date] = None
    date_returned: Optional[date] = None


class AssetCreate(AssetBase):
    person_in_charge: str = Field(..., max_length=255)
    department: str = Field(..., max_length=255)
    company_id: UUID
    category_id: UUID


class AssetUpdate(AssetBase):
    person_in_charge: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    company_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def required_fields_not_cleared(self):
        for field in ("person_in_charge", "department", "company_id", "category_id", "is_active"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self


class AssetsRequest(CommonQueryParams):
    has_unique_code: Optional[bool] = None
    limit: Optional[int] = None


class AssetOut(BaseModel):
    id: UUID
    person_in_charge: str
    department: str
    company_id: UUID
    category_id: UUID
    company: Optional[CompanyLookup] = None
    category: Optional[CategoryLookup] = None
    unique_code: Optional[str] = None
    cost: Optional[float] = None
    supplier: Optional[str] = None
    model_number: Optional[str] = None
    asset_info: Optional[str] = None
    specs: Optional[str] = None
    remarks: Optional[str] = None
    invoice_date: Optional[date] = None
    invoice_number: Optional[str] = None
    date_deployed: Optional[date] = None
    date_returned: Optional[date] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetListItem(BaseModel):
    id: UUID
    person_in_charge: str
    company_name: Optional[str] = None
    is_active: bool


class AssetListResponse(BaseModel):
    assets: List[AssetOut]
    total: int
