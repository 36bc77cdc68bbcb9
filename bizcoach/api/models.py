"""Pydantic request/response schemas for the Business Coach API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    details: str | None = None


class MessageIn(BaseModel):
    """A chat message as sent by the client."""

    role: str
    content: str


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


# ---------------------------------------------------------------------------
# Action items
# ---------------------------------------------------------------------------


class ActionItemCreate(BaseModel):
    """Request body for a single ``POST /api/action-items``."""

    content: str | None = None
    is_completed: bool = False
    notes: str | None = None
    ordinal: int | None = None
    parent_id: str | None = None
    conversation_id: str | None = None
    message_id: str | None = None
    list_id: str | None = None


class ActionItemUpdate(BaseModel):
    """Request body for ``PUT /api/action-items/{id}``; only sent fields change."""

    model_config = ConfigDict(extra="forbid")

    content: str | None = None
    is_completed: bool | None = None
    notes: str | None = None
    ordinal: int | None = None
    parent_id: str | None = None
    list_id: str | None = None

    @field_validator("content", "is_completed", "ordinal")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class BulkCreateRequest(BaseModel):
    """Request body for ``POST /api/action-items/bulk-create``."""

    content: str
    conversation_id: str | None = None


class ExtractFromMessageRequest(BaseModel):
    """Request body for ``POST /api/action-items/extract``."""

    message_id: str


class CreatedItemSummary(BaseModel):
    id: str
    content: str


class CreatedItemsResponse(BaseModel):
    count: int
    items: list[CreatedItemSummary] = []


class BatchCreateResponse(BaseModel):
    success: bool = True
    count: int


class DeleteResponse(BaseModel):
    success: bool = True


# ---------------------------------------------------------------------------
# Action item lists
# ---------------------------------------------------------------------------


class ActionListCreate(BaseModel):
    title: str | None = None
    items: list[str] = []
    color: str | None = None
    topic_id: str | None = None
    parent_id: str | None = None
    ordinal: int = 0


class ActionListUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    items: list[str] | None = None
    color: str | None = None
    topic_id: str | None = None
    parent_id: str | None = None
    ordinal: int | None = None

    @field_validator("title", "items", "color", "ordinal")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ExtractActionListsRequest(BaseModel):
    content: str


class ExtractedList(BaseModel):
    """A titled group of action item strings, optionally nested under a parent list."""

    id: str
    title: str
    items: list[str]
    parent_id: str | None = None


class ExtractActionListsResponse(BaseModel):
    action_lists: list[ExtractedList]


class SummarizeRequest(BaseModel):
    """Request body for ``POST /api/ai/summarize``; ``maxLength`` is in characters."""

    model_config = ConfigDict(populate_by_name=True)

    content: str | None = None
    max_length: int | None = Field(default=None, alias="maxLength", gt=0)


class SummarizeResponse(BaseModel):
    summary: str


# ---------------------------------------------------------------------------
# Conversations and chat
# ---------------------------------------------------------------------------


class ConversationCreate(BaseModel):
    title: str = Field(min_length=1)
    messages: list[MessageIn]
    thread_id: str | None = None


class ConversationUpdate(BaseModel):
    messages: list[MessageIn]


class ChatRequest(BaseModel):
    """Request body for ``POST /api/chat``."""

    messages: list[MessageIn] = Field(min_length=1)
    is_first_message: bool = False


class ContentAnalysis(BaseModel):
    has_actionable_items: bool
    action_items_summary: str | None = None
    action_items: list[str] = []


class ChatResponse(BaseModel):
    model: str
    message: MessageIn
    content_analysis: ContentAnalysis
    title: str | None = None


# ---------------------------------------------------------------------------
# Business plans
# ---------------------------------------------------------------------------


class BusinessPlanCreate(BaseModel):
    title: str = "New Business Plan"
    description: str | None = None


class BusinessPlanUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    status: str | None = None
    content: dict[str, Any] | None = None

    @field_validator("title", "status", "content")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class SectionUpdate(BaseModel):
    section: str = Field(min_length=1)
    data: dict[str, Any]


class BreakEvenRequest(BaseModel):
    """A break-even chat turn: either ``message`` or a ``messages`` history."""

    message: str | None = None
    messages: list[MessageIn] | None = None
    is_help_request: bool = False


class BreakEvenState(BaseModel):
    break_even_analysis: str = ""
    break_even_data: dict[str, Any] = {}


class BreakEvenReply(BaseModel):
    message: str
    break_even_data: dict[str, Any]
    break_even_analysis: str


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


class NoteCreate(BaseModel):
    """Request body for ``POST /api/notes``; ``type`` is stored as the note's category."""

    title: str | None = None
    content: str | None = None
    type: str = "note"


class NoteCreated(BaseModel):
    id: str
    title: str
    created_at: str
