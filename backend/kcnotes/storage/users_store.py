from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from kcnotes.errors import InternalError
from kcnotes.storage.database import Database


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    hashed_password: str
    created_at: str

    def to_public_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "created_at": self.created_at}


def _record(raw: Optional[dict[str, Any]]) -> Optional[UserRecord]:
    if raw is None:
        return None
    return UserRecord(
        id=int(raw["id"]),
        username=raw["username"],
        hashed_password=raw["password"],
        created_at=str(raw["created_at"]),
    )


class UsersStore:
    def __init__(self, db: Database):
        self.db = db

    def get(self, username: str) -> Optional[UserRecord]:
        return _record(self.db.fetch_one("SELECT * FROM users WHERE username = ?", (username,)))

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        return _record(self.db.fetch_one("SELECT * FROM users WHERE id = ?", (user_id,)))

    def create(self, username: str, hashed_password: str) -> UserRecord:
        cur = self.db.execute(
            "INSERT INTO users (username, password) VALUES (?, ?)",
            (username, hashed_password),
        )
        rec = self.get_by_id(cur.lastrowid)
        if rec is None:
            raise InternalError("Error creating user.")
        return rec

    def delete(self, user_id: int) -> bool:
        # notes go with the user (ON DELETE CASCADE)
        cur = self.db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cur.rowcount > 0

    def count(self, username: Optional[str] = None) -> int:
        if username is None:
            row = self.db.fetch_one("SELECT COUNT(*) AS n FROM users")
        else:
            row = self.db.fetch_one("SELECT COUNT(*) AS n FROM users WHERE username = ?", (username,))
        return int(row["n"]) if row else 0
