from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime

EMAIL_MAX_LENGTH = 50


def normalize_email(value):
    """Trim surrounding whitespace and enforce the column length."""
    if isinstance(value, str):
        value = value.strip()
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)

    class Config:
        title = "SignupRequest"


class VerifyOtpRequest(BaseModel):
    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=10)
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)

    @field_validator("otp", mode="before")
    @classmethod
    def strip_otp(cls, v):
        return v.strip() if isinstance(v, str) else v

    class Config:
        title = "VerifyOtpRequest"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)

    class Config:
        title = "LoginRequest"


class JwtResponse(BaseModel):
    token: str
    type: str = "Bearer"
    email: str


class MessageResponse(BaseModel):
    message: str


class AccountResponse(BaseModel):
    id: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
