import re
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .assets_schemas import AssetOut


CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def check_code(value: str) -> str:
    if "/" in value or "\\" in value:
        raise ValueError("Unique code cannot contain '/' or '\\'")
    if CONTROL_CHARS.search(value):
        raise ValueError("Unique code cannot contain control characters")
    return value


class UniqueCodeCreate(EmptyStringModel):
    asset_id: UUID
    unique_code: str = Field(..., min_length=1, max_length=50)

    _check_code = field_validator("unique_code")(check_code)


class UniqueCodeOut(BaseModel):
    id: UUID
    asset_id: UUID
    unique_code: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetByCodeOut(BaseModel):
    asset: AssetOut
    unique_code: UniqueCodeOut
