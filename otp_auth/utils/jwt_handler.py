# otp_auth/utils/jwt_handler.py
from datetime import timedelta
from typing import Optional
import logging

from jose import JWTError, jwt

from otp_auth.config import settings
from otp_auth.exceptions import IssuanceError
from otp_auth.utils.clock import utcnow

logger = logging.getLogger(__name__)


class JwtTokenIssuer:
    """
    Signs stateless bearer tokens bound to an email identity.

    Nothing is stored server-side; ``decode`` is all a protected route
    needs to recover the identity.
    """

    def __init__(
        self,
        secret_key: str = None,
        algorithm: str = None,
        expires_delta: Optional[timedelta] = None,
        clock=utcnow,
    ):
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.ALGORITHM
        self.expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.clock = clock

    def issue(self, identity: str) -> str:
        now = self.clock()
        to_encode = {
            "sub": identity,
            "iat": now,
            "exp": now + self.expires_delta,
            "type": "access",
        }
        try:
            return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        except JWTError as e:
            logger.error(f"JWT signing failed for {identity}: {str(e)}")
            raise IssuanceError(str(e)) from e

    def decode(self, token: str) -> Optional[dict]:
        """Verified claims, or None for a bad, expired or non-access token."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            return None

        if payload.get("type") != "access" or not payload.get("sub"):
            return None
        return payload
