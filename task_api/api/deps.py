from typing import Optional

from fastapi import Depends, Header, Request
from sqlmodel import Session

from task_api.core.config import Settings
from task_api.core.security import TokenVerifier
from task_api.db.session import get_session
from task_api.schemas.user import Identity
from task_api.services.auth_service import AuthService
from task_api.services.task_service import TaskService
from task_api.stores.credential_store import CredentialStore
from task_api.stores.task_store import TaskStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_verifier(settings: Settings = Depends(get_settings)) -> TokenVerifier:
    return TokenVerifier(settings.SECRET_KEY, settings.ALGORITHM)


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    return verifier.verify_header(authorization)


def get_auth_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        CredentialStore(session),
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        token_expires=settings.access_token_expires,
    )


def get_task_service(request: Request, session: Session = Depends(get_session)) -> TaskService:
    return TaskService(TaskStore(session), clock=request.app.state.clock)
