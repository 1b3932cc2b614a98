# otp_auth/exceptions.py
"""
Error taxonomy for the signup and login flows.

Each error carries the HTTP status and the public ``detail`` the API
returns for it. Internal failures share one opaque detail so nothing about
the storage, mail or token backends leaks to the caller.
"""

INTERNAL_ERROR_DETAIL = "Internal server error"


class AuthError(Exception):
    status_code = 500
    detail = INTERNAL_ERROR_DETAIL

    def __init__(self, message: str = None):
        super().__init__(message or self.detail)


# -------------------- USER-VISIBLE OUTCOMES --------------------
class DuplicateAccount(AuthError):
    status_code = 400
    detail = "Error: Email is already taken!"


class InvalidOrExpiredOtp(AuthError):
    """Wrong, expired, reused and never-issued codes all look the same."""
    status_code = 400
    detail = "Invalid or expired verification code"


class UnknownEmail(AuthError):
    status_code = 404
    detail = "Email not found"


class InvalidCredentials(AuthError):
    status_code = 401
    detail = "Incorrect password"


class AuthenticationUnavailable(AuthError):
    status_code = 500
    detail = "An error occurred during login"


# -------------------- INTERNAL FAILURES --------------------
class StorageError(AuthError):
    pass


class DeliveryError(AuthError):
    pass


class IssuanceError(AuthError):
    pass
