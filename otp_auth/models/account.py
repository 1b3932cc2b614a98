# otp_auth/models/account.py
from sqlalchemy import Column, String, DateTime
from otp_auth.database import Base
from otp_auth.utils.clock import utcnow
import uuid

class Account(Base):
    __tablename__ = "accounts"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Unique constraint is the authoritative duplicate guard
    email = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Account email={self.email}>"
