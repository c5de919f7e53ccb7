import re
from uuid import UUID
from pydantic import BaseModel, model_validator
from typing import Any, ClassVar, Set

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively convert empty strings to None and strip invisible chars."""

    if isinstance(value, BaseModel):
        data = value.model_dump()
        cleaned = deep_clean(data)
        return type(value)(**cleaned)

    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    if isinstance(value, UUID):
        return value

    return value


class EmptyStringModel(BaseModel):
    """Input struct base: blank strings from the frontend arrive as None."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    # secrets are taken exactly as typed
    untrimmed_fields: ClassVar[Set[str]] = {"password", "password_confirmation", "server_password"}

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return {
                k: (v if k in cls.untrimmed_fields else deep_clean(v))
                for k, v in values.items()
            }
        return values

