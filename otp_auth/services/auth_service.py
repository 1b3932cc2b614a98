# otp_auth/services/auth_service.py
from dataclasses import dataclass
import logging

from otp_auth.exceptions import (
    AuthenticationUnavailable,
    InvalidCredentials,
    UnknownEmail,
)
from otp_auth.models.account import Account
from otp_auth.repositories.account_store import AccountStore
from otp_auth.utils.hash import verify_password

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    email: str
    token_type: str = "Bearer"


class PasswordAuthenticator:
    """Checks a password against the stored bcrypt hash."""

    def __init__(self, accounts: AccountStore):
        self.accounts = accounts

    def authenticate(self, email: str, password: str) -> Account:
        account = self.accounts.get(email)
        if account is None or not verify_password(password, account.hashed_password):
            raise InvalidCredentials()
        return account


class AuthService:
    def __init__(self, accounts: AccountStore, authenticator: PasswordAuthenticator, token_issuer):
        self.accounts = accounts
        self.authenticator = authenticator
        self.token_issuer = token_issuer

    def login(self, email: str, password: str) -> LoginResult:
        """
        Exchange email and password for a bearer token.

        Unknown emails are reported separately from wrong passwords, which
        tells unauthenticated callers whether an address is registered.
        """
        if not self.accounts.exists(email):
            logger.warning(f"Login for unknown email: {email}")
            raise UnknownEmail()

        try:
            account = self.authenticator.authenticate(email, password)
        except InvalidCredentials:
            logger.warning(f"Incorrect password for: {email}")
            raise
        except Exception as e:
            logger.exception(f"Authentication failed unexpectedly for {email}: {str(e)}")
            raise AuthenticationUnavailable() from e

        try:
            token = self.token_issuer.issue(account.email)
        except Exception as e:
            logger.exception(f"Token issuance failed for {email}: {str(e)}")
            raise AuthenticationUnavailable() from e

        logger.info(f"Login successful: {email}")
        return LoginResult(token=token, email=email)
