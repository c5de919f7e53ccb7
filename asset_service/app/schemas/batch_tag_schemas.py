from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.asset_enum import PrintStatus
from .asset_code_schemas import check_code


class BatchTagCreate(EmptyStringModel):
    unique_code: str = Field(..., min_length=1, max_length=50)

    _check_code = field_validator("unique_code")(check_code)


class BatchTagOut(BaseModel):
    id: UUID
    asset_id: UUID
    unique_code: str
    file_path: str
    url: str
    print_status: PrintStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MarkPrintedOut(BaseModel):
    updated: int
