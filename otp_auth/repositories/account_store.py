# otp_auth/repositories/account_store.py
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from otp_auth.exceptions import DuplicateAccount, StorageError
from otp_auth.models.account import Account

logger = logging.getLogger(__name__)


class AccountStore:
    """Credential store: verified accounts keyed by email."""

    def __init__(self, db: Session):
        self.db = db

    def exists(self, email: str) -> bool:
        try:
            return self.db.query(Account.id).filter(Account.email == email).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"[ACCOUNT LOOKUP ERROR] {email}: {str(e)}")
            raise StorageError(str(e)) from e

    def get(self, email: str) -> Optional[Account]:
        try:
            return self.db.query(Account).filter(Account.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"[ACCOUNT LOOKUP ERROR] {email}: {str(e)}")
            raise StorageError(str(e)) from e

    def save(self, account: Account) -> Account:
        try:
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        except IntegrityError as e:
            # Another confirmation for the same email won the insert
            self.db.rollback()
            logger.warning(f"[ACCOUNT STORAGE] Duplicate email rejected: {account.email}")
            raise DuplicateAccount() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[ACCOUNT STORAGE ERROR] {account.email}: {str(e)}")
            raise StorageError(str(e)) from e

        logger.info(f"[ACCOUNT STORAGE] Created account {account.id} for {account.email}")
        return account
