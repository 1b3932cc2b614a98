# otp_auth/repositories/otp_store.py
from datetime import datetime
from typing import Optional
import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from otp_auth.exceptions import StorageError
from otp_auth.models.otp_record import OtpRecord

logger = logging.getLogger(__name__)


class OtpStore:
    """OTP store: issued verification codes, keyed by (email, code)."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, record: OtpRecord) -> OtpRecord:
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[OTP STORAGE ERROR] {record.email}: {str(e)}")
            raise StorageError(str(e)) from e

        logger.info(f"[OTP STORAGE] Stored code {record.id} for {record.email}, expires {record.expires_at}")
        return record

    def find_valid(self, email: str, code: str, now: datetime) -> Optional[OtpRecord]:
        """Newest unused, unexpired record matching email and code exactly."""
        try:
            return self.db.query(OtpRecord).filter(
                OtpRecord.email == email,
                OtpRecord.code == code,
                OtpRecord.used == False,  # noqa: E712
                OtpRecord.expires_at > now
            ).order_by(OtpRecord.created_at.desc(), OtpRecord.id.desc()).first()
        except SQLAlchemyError as e:
            logger.error(f"[OTP LOOKUP ERROR] {email}: {str(e)}")
            raise StorageError(str(e)) from e

    def mark_used(self, record: OtpRecord) -> bool:
        """
        Flip ``used`` only if it is still false.

        Returns False when a concurrent verification already consumed the
        record; the row lock taken by the UPDATE serialises the two writers.
        """
        record_id = record.id
        try:
            result = self.db.execute(
                update(OtpRecord)
                .where(OtpRecord.id == record_id, OtpRecord.used == False)  # noqa: E712
                .values(used=True)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[OTP STORAGE ERROR] mark used {record_id}: {str(e)}")
            raise StorageError(str(e)) from e

        return result.rowcount == 1
