from .account_store import AccountStore
from .otp_store import OtpStore

__all__ = ["AccountStore", "OtpStore"]
