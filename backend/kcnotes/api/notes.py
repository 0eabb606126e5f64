from __future__ import annotations

import re

from fastapi import status

from kcnotes.errors import BadRequest, Unauthorized
from kcnotes.http.context import RequestContext
from kcnotes.http.responses import send_success
from kcnotes.http.router import Router
from kcnotes.http.validation import validate_body
from kcnotes.models.notes import NoteCreate, NoteUpdate

router = Router(prefix="/notes", not_found_message="Notes route not found.")

# a missing note and another user's note answer the same way
NOTE_NOT_FOUND = "Note not found."

_NOTE_ID = re.compile(r"[0-9]+")
# sqlite INTEGER is a signed 64-bit value
MAX_NOTE_ID = 2**63 - 1


def _note_id(ctx: RequestContext) -> int:
    raw = ctx.params.get("note_id", "")
    if not _NOTE_ID.fullmatch(raw):
        raise BadRequest("Invalid note id.")
    note_id = int(raw)
    if not 1 <= note_id <= MAX_NOTE_ID:
        raise BadRequest("Invalid note id.")
    return note_id


@router.get("")
async def list_notes(ctx: RequestContext):
    # public and global, unlike the owner-scoped /notes/{id}
    notes = ctx.services.notes.list_all()
    return send_success({"notes": [n.to_dict() for n in notes]})


@router.post("", auth=True)
async def create_note(ctx: RequestContext):
    payload = validate_body(NoteCreate, ctx.payload)
    identity = ctx.require_identity()
    if ctx.services.users.get_by_id(identity.user_id) is None:
        # signed token for an account that no longer exists
        raise Unauthorized()
    note = ctx.services.notes.create_note(user_id=identity.user_id, title=payload.title, content=payload.content)
    return send_success({"note": note.to_dict()}, message="Note created.", status_code=status.HTTP_201_CREATED)


@router.get("/{note_id}", auth=True)
async def get_note(ctx: RequestContext):
    note = ctx.services.notes.get_note(user_id=ctx.require_identity().user_id, note_id=_note_id(ctx))
    if note is None:
        raise BadRequest(NOTE_NOT_FOUND)
    return send_success({"note": note.to_dict()})


@router.patch("/{note_id}", auth=True)
async def update_note(ctx: RequestContext):
    note_id = _note_id(ctx)
    payload = validate_body(NoteUpdate, ctx.payload)
    updated = ctx.services.notes.update_note(
        user_id=ctx.require_identity().user_id,
        note_id=note_id,
        title=payload.title,
        content=payload.content,
    )
    if updated is None:
        raise BadRequest(NOTE_NOT_FOUND)
    return send_success({"note": updated.to_dict()}, message="Note updated.")


@router.delete("/{note_id}", auth=True)
async def delete_note(ctx: RequestContext):
    deleted = ctx.services.notes.delete_note(user_id=ctx.require_identity().user_id, note_id=_note_id(ctx))
    if deleted is None:
        raise BadRequest(NOTE_NOT_FOUND)
    return send_success({"note": deleted.to_dict()}, message="Note deleted.")
