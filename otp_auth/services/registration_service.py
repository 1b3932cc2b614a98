# otp_auth/services/registration_service.py
"""
Signup: request a verification code, then confirm it to create the account.

No pending-signup state is kept besides the OTP record itself, so the
client resupplies email and password at the confirmation step.
"""
import logging

from otp_auth.exceptions import DuplicateAccount, InvalidOrExpiredOtp
from otp_auth.models.account import Account
from otp_auth.repositories.account_store import AccountStore
from otp_auth.services.otp_service import OtpService
from otp_auth.utils.hash import hash_password

logger = logging.getLogger(__name__)


class RegistrationService:
    def __init__(self, accounts: AccountStore, otp_service: OtpService, notifier):
        self.accounts = accounts
        self.otp_service = otp_service
        self.notifier = notifier

    async def request_signup(self, email: str, password: str) -> None:
        """Issue and send a code for an unregistered email.

        ``password`` is accepted for the request shape only and is not stored.
        """
        logger.info(f"Signup requested for: {email}")

        # The accounts.email unique constraint is the real guard; this is an early exit
        if self.accounts.exists(email):
            logger.warning(f"Email already registered: {email}")
            raise DuplicateAccount()

        code = self.otp_service.issue(email)

        # Delivery is fire-and-forget: the code is already stored and a new
        # request always issues a fresh one
        try:
            await self.notifier.send_verification(email, code)
            logger.info(f"Verification email sent to {email}")
        except Exception as e:
            logger.error(f"Verification email to {email} failed: {str(e)}")

    def confirm_signup(self, email: str, code: str, password: str) -> Account:
        if not self.otp_service.verify(email, code):
            logger.warning(f"Signup confirmation rejected for {email}")
            raise InvalidOrExpiredOtp()

        account = Account(email=email, hashed_password=hash_password(password))
        account = self.accounts.save(account)
        logger.info(f"Account registered: {email}")
        return account
