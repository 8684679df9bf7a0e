"""
User store over SQLAlchemy: lookup by Telegram id for access control, registration for /start.
Returned users are detached from the session (read-only snapshots).
"""
import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from moneyflow.database import SessionLocal
from moneyflow.models.user import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def find_one(self, telegram_id: int) -> User | None:
        ...


class SqlUserStore:
    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory or SessionLocal

    def find_one(self, telegram_id: int) -> User | None:
        db: Session = self._session_factory()
        try:
            return db.query(User).filter(User.telegram_id == telegram_id).first()
        finally:
            db.close()

    def register(self, telegram_id: int, first_name: str | None = None) -> User:
        """Create the user if missing (unpaid, no tier); return the stored row."""
        db: Session = self._session_factory()
        try:
            user = db.query(User).filter(User.telegram_id == telegram_id).first()
            if user:
                return user
            user = User(telegram_id=telegram_id, first_name=first_name, is_paid=False)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                # Registered concurrently by another request
                db.rollback()
                logger.debug("User %s already registered", telegram_id)
                return db.query(User).filter(User.telegram_id == telegram_id).one()
            db.refresh(user)
            logger.info("Registered user %s", telegram_id)
            return user
        finally:
            db.close()
