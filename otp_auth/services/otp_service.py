# otp_auth/services/otp_service.py
from datetime import timedelta
import logging
import random
import string

from otp_auth.config import settings
from otp_auth.models.otp_record import OtpRecord
from otp_auth.repositories.otp_store import OtpStore
from otp_auth.utils.clock import utcnow

logger = logging.getLogger(__name__)

# Process-wide default source; tests inject a deterministic one
_default_rng = random.SystemRandom()


class OtpService:
    """
    Issues and validates single-use numeric verification codes.

    ``rng`` is any object exposing ``choices(population, k=...)`` and
    ``clock`` a zero-argument callable returning naive UTC datetimes.
    """

    def __init__(
        self,
        store: OtpStore,
        rng=None,
        clock=utcnow,
        length: int = None,
        ttl_minutes: int = None,
    ):
        self.store = store
        self.rng = rng or _default_rng
        self.clock = clock
        self.length = length or settings.OTP_LENGTH
        self.ttl = timedelta(minutes=ttl_minutes or settings.OTP_EXPIRE_MINUTES)

    # -------------------- OTP GENERATOR --------------------
    def generate_code(self) -> str:
        """Numeric code of ``length`` digits, leading zeros allowed."""
        return ''.join(self.rng.choices(string.digits, k=self.length))

    # -------------------- ISSUE OTP --------------------
    def issue(self, email: str) -> str:
        """Persist a fresh code for ``email`` and return it.

        Earlier outstanding codes for the same email stay valid.
        """
        code = self.generate_code()
        now = self.clock()
        record = OtpRecord(
            email=email,
            code=code,
            used=False,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.store.save(record)

        if settings.DEBUG:
            logger.debug(f"[OTP ISSUE] {email} | Code: {code}")
        logger.info(f"[OTP ISSUE] Code issued for {email}, valid until {now + self.ttl}")
        return code

    # -------------------- VERIFY OTP --------------------
    def verify(self, email: str, code: str) -> bool:
        """Consume a matching unused, unexpired code. True at most once per code."""
        record = self.store.find_valid(email, code, self.clock())
        if record is None:
            logger.info(f"[OTP VERIFICATION] No valid code for {email}")
            return False

        if not self.store.mark_used(record):
            logger.warning(f"[OTP VERIFICATION] Code for {email} consumed concurrently")
            return False

        logger.info(f"[OTP VERIFICATION] Code verified for {email}")
        return True
