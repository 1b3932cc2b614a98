# otp_auth/dependencies.py
"""
Per-request composition of the signup and login flows.

Every collaborator comes from a provider below, so tests (or another
deployment) swap one through ``app.dependency_overrides``.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from otp_auth.database import get_db
from otp_auth.models.account import Account
from otp_auth.repositories.account_store import AccountStore
from otp_auth.repositories.otp_store import OtpStore
from otp_auth.services.auth_service import AuthService, PasswordAuthenticator
from otp_auth.services.email_service import EmailNotifier
from otp_auth.services.otp_service import OtpService
from otp_auth.services.registration_service import RegistrationService
from otp_auth.utils.clock import utcnow
from otp_auth.utils.jwt_handler import JwtTokenIssuer

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_otp_store(db: Session = Depends(get_db)) -> OtpStore:
    return OtpStore(db)


def get_rng():
    """None selects the OTP service's process-wide random source."""
    return None


def get_clock():
    return utcnow


def get_notifier() -> EmailNotifier:
    return EmailNotifier()


def get_token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer()


def get_otp_service(
    store: OtpStore = Depends(get_otp_store),
    rng=Depends(get_rng),
    clock=Depends(get_clock),
) -> OtpService:
    return OtpService(store, rng=rng, clock=clock)


def get_registration_service(
    accounts: AccountStore = Depends(get_account_store),
    otp_service: OtpService = Depends(get_otp_service),
    notifier=Depends(get_notifier),
) -> RegistrationService:
    return RegistrationService(accounts, otp_service, notifier)


def get_auth_service(
    accounts: AccountStore = Depends(get_account_store),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(accounts, PasswordAuthenticator(accounts), token_issuer)


def get_current_account(
    token: str = Depends(oauth2_scheme),
    accounts: AccountStore = Depends(get_account_store),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
) -> Account:
    """Resolve the account named by a bearer token presented on this request."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = token_issuer.decode(token)
    if payload is None:
        raise credentials_exception

    account = accounts.get(payload["sub"])
    if account is None:
        raise credentials_exception
    return account
