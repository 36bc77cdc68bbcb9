"""Saved business notes: highlights and summaries the user keeps."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from bizcoach.api.models import DeleteResponse, NoteCreate, NoteCreated
from bizcoach.errors import InvalidRequestError, NotFoundError
from bizcoach.storage.client import get_supabase_client
from bizcoach.storage.notes import create_note, delete_note, get_note, list_notes

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/notes")
async def list_all(type: str | None = None) -> list[dict[str, Any]]:
    """Notes newest first; ``type`` filters on the stored category."""
    return list_notes(get_supabase_client(), type)


@router.post("/api/notes", response_model=NoteCreated)
async def create(request: NoteCreate) -> NoteCreated:
    if not request.content:
        raise InvalidRequestError("Content is required")
    if not request.title:
        raise InvalidRequestError("Title is required")

    note = create_note(get_supabase_client(), request.title, request.content, request.type)
    logger.info("Saved %s note %s", request.type, note["id"])
    return NoteCreated(id=note["id"], title=note["title"], created_at=note["created_at"])


@router.get("/api/notes/{note_id}")
async def get_one(note_id: str) -> dict[str, Any]:
    note = get_note(get_supabase_client(), note_id)
    if note is None:
        raise NotFoundError("Note not found")
    return note


@router.delete("/api/notes/{note_id}", response_model=DeleteResponse)
async def delete(note_id: str) -> DeleteResponse:
    if not delete_note(get_supabase_client(), note_id):
        raise NotFoundError("Note not found")
    logger.info("Deleted note %s", note_id)
    return DeleteResponse()
