"""
Signup and login.

Passwords are hashed with bcrypt before they reach the store and are never
returned; both successful flows hand back a signed token carrying the
user's ``id`` and ``email``.
"""

from dataclasses import dataclass
from datetime import timedelta

from ..core.exceptions import Conflict, InvalidCredentials
from ..core.logger import setup_logger
from ..core.security import create_access_token, get_password_hash, verify_password
from ..models.user import User
from ..schemas.user import UserCreate, UserLogin
from ..stores.credential_store import CredentialStore

logger = setup_logger(__name__)


@dataclass
class AuthResult:
    token: str
    user: User


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        secret_key: str,
        algorithm: str = "HS256",
        token_expires: timedelta = timedelta(days=7),
    ):
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_expires = token_expires

    def issue_token(self, user: User) -> str:
        return create_access_token(
            {"id": str(user.id), "email": user.email},
            self.secret_key,
            self.algorithm,
            self.token_expires,
        )

    def signup(self, data: UserCreate) -> AuthResult:
        # Fast path only; the unique index decides concurrent signups
        if self.store.find_by_email(data.email) is not None:
            raise Conflict()

        user = self.store.create(
            User(
                email=data.email,
                password_hash=get_password_hash(data.password),
                name=data.name,
            )
        )
        logger.info("Created user %s", user.id)
        return AuthResult(token=self.issue_token(user), user=user)

    def login(self, data: UserLogin) -> AuthResult:
        user = self.store.find_by_email(data.email)

        # Same failure whether the email or the password is wrong
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        logger.info("User %s logged in", user.id)
        return AuthResult(token=self.issue_token(user), user=user)
