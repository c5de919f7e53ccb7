from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .userschema import UserOut


class RegisterRequest(EmptyStringModel):
    """Self sign-up. There is no role field: new accounts are always staff."""
    name: str = Field(min_length=1, max_length=200)
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, max_length=72)
    password_confirmation: str
    email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match")
        return self


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthenticationResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class LogoutResponse(BaseModel):
    message: str
