# tests/helpers.py

from __future__ import annotations

from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlmodel import Session

from task_api.models.user import User
from task_api.schemas.user import Identity
from task_api.stores.credential_store import CredentialStore


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


def make_user(session: Session, email: str = "a@x.com", name: str = "A") -> User:
    return CredentialStore(session).create(
        User(email=email, name=name, password_hash="not-a-real-hash")
    )


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, email=user.email)


def signup(
    client: TestClient,
    email: str = "a@x.com",
    password: str = "longenough1",
    name: str = "A",
) -> str:
    resp = client.post(
        "/api/auth/signup", json={"name": name, "email": email, "password": password}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["token"]


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
