"""Editor models — what the canvas client sends and receives."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from engine.kernel.types import EditorState, ReduceResult


class IntentRequest(BaseModel):
    """One gesture from the canvas: add, drop, resize, edit, delete, duplicate, select."""

    model_config = {"extra": "forbid"}

    type: str = Field(min_length=1, max_length=64)
    payload: dict[str, Any] = Field(default_factory=dict)


class IntentBatchRequest(BaseModel):
    """Several gestures applied in order (e.g. the moves of one resize drag)."""

    model_config = {"extra": "forbid"}

    intents: list[IntentRequest] = Field(min_length=1, max_length=500)


class EditorStateResponse(BaseModel):
    """The current document, selection, and drag source."""

    document: list[dict[str, Any]]
    selection: str | None = None
    drag_source: str | None = None

    @classmethod
    def from_state(cls, state: EditorState) -> EditorStateResponse:
        return cls(**state.to_dict())


class IntentResponse(EditorStateResponse):
    """State after an intent, plus whether the intent applied."""

    applied: bool
    error: str | None = None

    @classmethod
    def from_result(cls, result: ReduceResult) -> IntentResponse:
        return cls(applied=result.applied, error=result.error, **result.state.to_dict())


class SaveResponse(BaseModel):
    storage_key: str
    blocks: int


class SuggestionResponse(EditorStateResponse):
    """State after a suggestion request. applied=False means nothing changed."""

    applied: bool
