"""Suggestion routes — rewrite a block's text, or pick colours for its background."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.models.editor import SuggestionResponse
from backend.services.editor_session import EditorSession, get_editor_session

router = APIRouter(prefix="/api/blocks", tags=["suggestions"])


@router.post("/{block_id}/suggest-content", status_code=200)
async def suggest_content(
    block_id: str,
    session: EditorSession = Depends(get_editor_session),
) -> SuggestionResponse:
    """Replace a title/text block's content with a suggestion, if one comes back."""
    result = await session.suggest_content(block_id)
    applied = result is not None and result.applied
    return SuggestionResponse(applied=applied, **session.state.to_dict())


@router.post("/{block_id}/suggest-colors", status_code=200)
async def suggest_colors(
    block_id: str,
    session: EditorSession = Depends(get_editor_session),
) -> SuggestionResponse:
    """Set color/border-color from a pairing for the block's background colour."""
    result = await session.suggest_colors(block_id)
    applied = result is not None and result.applied
    return SuggestionResponse(applied=applied, **session.state.to_dict())
