from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from kcnotes.errors import InternalError
from kcnotes.storage.database import Database

_COLUMNS = "id, title, content, user_id, created_at, updated_at"


@dataclass(frozen=True)
class Note:
    id: int
    title: str
    content: str
    user_id: int
    created_at: str
    updated_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _note(raw: dict[str, Any]) -> Note:
    return Note(
        id=int(raw["id"]),
        title=raw["title"],
        content=raw["content"],
        user_id=int(raw["user_id"]),
        created_at=str(raw["created_at"]),
        updated_at=raw.get("updated_at"),
    )


class NotesStore:
    def __init__(self, db: Database):
        self.db = db

    def list_all(self) -> list[Note]:
        rows = self.db.fetch_all(f"SELECT {_COLUMNS} FROM notes ORDER BY id")
        return [_note(r) for r in rows]

    def list_notes(self, user_id: int) -> list[Note]:
        rows = self.db.fetch_all(f"SELECT {_COLUMNS} FROM notes WHERE user_id = ? ORDER BY id", (user_id,))
        return [_note(r) for r in rows]

    def create_note(self, user_id: int, title: str, content: str) -> Note:
        cur = self.db.execute(
            "INSERT INTO notes (title, content, user_id) VALUES (?, ?, ?)",
            (title, content, user_id),
        )
        note = self.get_note(user_id=user_id, note_id=cur.lastrowid)
        if note is None:
            raise InternalError("Error creating note.")
        return note

    def get_note(self, user_id: int, note_id: int) -> Optional[Note]:
        raw = self.db.fetch_one(
            f"SELECT {_COLUMNS} FROM notes WHERE id = ? AND user_id = ?",
            (note_id, user_id),
        )
        return _note(raw) if raw is not None else None

    def update_note(
        self,
        user_id: int,
        note_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Optional[Note]:
        existing = self.get_note(user_id=user_id, note_id=note_id)
        if existing is None:
            return None

        self.db.execute(
            "UPDATE notes SET title = ?, content = ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ? AND user_id = ?",
            (
                existing.title if title is None else title,
                existing.content if content is None else content,
                note_id,
                user_id,
            ),
        )
        return self.get_note(user_id=user_id, note_id=note_id)

    def delete_note(self, user_id: int, note_id: int) -> Optional[Note]:
        existing = self.get_note(user_id=user_id, note_id=note_id)
        if existing is None:
            return None
        self.db.execute("DELETE FROM notes WHERE id = ? AND user_id = ?", (note_id, user_id))
        return existing
