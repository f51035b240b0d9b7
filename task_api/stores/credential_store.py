from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.exceptions import Conflict
from ..core.logger import setup_logger
from ..models.user import User

logger = setup_logger(__name__)


class CredentialStore:
    """Persists user records. The unique index on ``email`` is authoritative."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user: User) -> User:
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent signup won the race for this email
            self.session.rollback()
            logger.info("Signup rejected by unique email constraint")
            raise Conflict()
        self.session.refresh(user)
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()
