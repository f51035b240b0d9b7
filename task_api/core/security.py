import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .exceptions import InvalidToken, TokenExpired, Unauthorized
from ..schemas.user import Identity

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_SCHEME = "Bearer"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# JWT token functions
def create_access_token(
    data: dict, secret_key: str, algorithm: str, expires_delta: timedelta
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


class TokenVerifier:
    """
    Turns a raw ``Authorization`` header into an ``Identity``.

    Stateless: only the signing secret and algorithm are needed, the user
    store is never consulted.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def verify_header(self, authorization: Optional[str]) -> Identity:
        if not authorization:
            raise Unauthorized()

        # "Bearer eyJ..." -> ["Bearer", "eyJ..."]
        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != BEARER_SCHEME:
            raise Unauthorized("Authorization header must be in format: Bearer <token>")

        return self.verify_token(parts[1])

    def verify_token(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired()
        except jwt.PyJWTError:
            raise InvalidToken()

        user_id = payload.get("id")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise InvalidToken()
        try:
            return Identity(id=uuid.UUID(user_id), email=email)
        except ValueError:
            raise InvalidToken()
