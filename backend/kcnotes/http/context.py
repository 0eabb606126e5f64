from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from kcnotes.config import Settings
from kcnotes.storage.database import Database
from kcnotes.storage.notes_store import NotesStore
from kcnotes.storage.users_store import UsersStore


class RequestState(str, enum.Enum):
    RECEIVING = "receiving"
    PARSED = "parsed"
    AUTHORIZING = "authorizing"
    HANDLING = "handling"
    RESPONDED = "responded"


_ORDER = list(RequestState)


@dataclass(frozen=True)
class Identity:
    """Decoded, verified session claim."""

    user_id: int
    username: Optional[str]
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None


@dataclass
class Services:
    """Everything a handler may touch besides the request itself."""

    settings: Settings
    db: Database
    users: UsersStore
    notes: NotesStore

    @classmethod
    def build(cls, settings: Settings, db: Database) -> "Services":
        return cls(settings=settings, db=db, users=UsersStore(db), notes=NotesStore(db))


@dataclass
class RequestContext:
    method: str
    path: str
    headers: Mapping[str, str]
    services: Services
    params: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    payload: Any = None
    identity: Optional[Identity] = None
    state: RequestState = RequestState.RECEIVING

    def advance(self, new_state: RequestState) -> None:
        # states only move forward; skipping (e.g. AUTHORIZING) is fine
        if _ORDER.index(new_state) <= _ORDER.index(self.state):
            raise RuntimeError(f"cannot move request from {self.state.value} to {new_state.value}")
        self.state = new_state

    def require_identity(self) -> Identity:
        if self.identity is None:
            raise RuntimeError("handler requires an authenticated route")
        return self.identity
