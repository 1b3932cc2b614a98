# otp_auth/models/__init__.py

from .account import Account
from .otp_record import OtpRecord

__all__ = ["Account", "OtpRecord"]
