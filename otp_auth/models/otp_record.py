# otp_auth/models/otp_record.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from otp_auth.database import Base
from otp_auth.utils.clock import utcnow

class OtpRecord(Base):
    __tablename__ = "otp_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(50), nullable=False, index=True)
    code = Column(String(10), nullable=False)
    used = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    def is_valid(self, code: str, now) -> bool:
        return not self.used and self.expires_at > now and self.code == code

    def __repr__(self):
        return f"<OtpRecord email={self.email} used={self.used} expires_at={self.expires_at}>"
