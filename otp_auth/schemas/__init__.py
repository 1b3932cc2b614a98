# otp_auth/schemas/__init__.py
from .auth import (
    SignupRequest,
    VerifyOtpRequest,
    LoginRequest,
    JwtResponse,
    MessageResponse,
    AccountResponse,
)

__all__ = [
    "SignupRequest",
    "VerifyOtpRequest",
    "LoginRequest",
    "JwtResponse",
    "MessageResponse",
    "AccountResponse",
]
