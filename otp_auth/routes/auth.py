from fastapi import APIRouter, Depends
import logging

from otp_auth.dependencies import (
    get_auth_service,
    get_current_account,
    get_registration_service,
)
from otp_auth.models.account import Account
from otp_auth.schemas.auth import (
    AccountResponse,
    JwtResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    VerifyOtpRequest,
)
from otp_auth.services.auth_service import AuthService
from otp_auth.services.registration_service import RegistrationService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=MessageResponse)
async def signup(
    data: SignupRequest,
    registration: RegistrationService = Depends(get_registration_service),
):
    """Send a verification code to an email that has no account yet."""
    await registration.request_signup(data.email, data.password)
    return {"message": "Verification code sent to your email"}


@router.post("/verify-otp", response_model=MessageResponse)
def verify_otp(
    data: VerifyOtpRequest,
    registration: RegistrationService = Depends(get_registration_service),
):
    """Consume the emailed code and create the account."""
    registration.confirm_signup(data.email, data.otp, data.password)
    return {"message": "User registered successfully!"}


@router.post("/login", response_model=JwtResponse)
def login(
    data: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
):
    result = auth.login(data.email, data.password)
    return JwtResponse(token=result.token, type=result.token_type, email=result.email)


@router.get("/me", response_model=AccountResponse)
def me(account: Account = Depends(get_current_account)):
    return account
