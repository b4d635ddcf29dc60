"""
Pydantic models for Lumina.

All request/response shapes defined here. No imports from routes or services.
"""

from backend.models.editor import (
    EditorStateResponse,
    IntentBatchRequest,
    IntentRequest,
    IntentResponse,
    SaveResponse,
    SuggestionResponse,
)

__all__ = [
    "IntentRequest",
    "IntentBatchRequest",
    "IntentResponse",
    "EditorStateResponse",
    "SaveResponse",
    "SuggestionResponse",
]
