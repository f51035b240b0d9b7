from .credential_store import CredentialStore
from .task_store import TaskStore

__all__ = ["CredentialStore", "TaskStore"]
