"""
Editor session — owns the process-wide EditorState.

Intents are applied one at a time through the kernel reducer; the session only
ever swaps in a complete new state. The suggestion calls are the one place
that awaits: the reply is applied to whatever state is current when it
arrives (no staleness check), as a single update.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from backend.config import settings
from backend.services.suggestions import SuggestionService, get_suggestion_service
from engine.kernel.assembly import DocumentStorage, FileStorage, load_document, save_document
from engine.kernel.intents import make_intent
from engine.kernel.reducer import initial_state, reduce
from engine.kernel.renderer import export_to_markup
from engine.kernel.tree import update_styles
from engine.kernel.types import SUGGESTIBLE_KINDS, EditorState, Intent, ReduceResult, find_by_id

logger = logging.getLogger(__name__)


class EditorSession:
    """Single-writer holder of the document, selection, and drag source."""

    def __init__(
        self,
        storage: DocumentStorage,
        storage_key: str,
        suggestions: SuggestionService | None = None,
    ) -> None:
        self.storage = storage
        self.storage_key = storage_key
        self.suggestions = suggestions
        self.state: EditorState = initial_state()

    # -- intents -----------------------------------------------------------

    def dispatch(self, intent: Intent) -> ReduceResult:
        result = reduce(self.state, intent)
        if result.applied:
            self.state = result.state
        else:
            logger.debug("editor: rejected %s: %s", intent.type, result.error)
        return result

    def dispatch_all(self, intents: list[Intent]) -> list[ReduceResult]:
        return [self.dispatch(i) for i in intents]

    # -- persistence -------------------------------------------------------

    async def load(self) -> EditorState:
        document = await load_document(self.storage, self.storage_key)
        self.state = EditorState(document=document)
        return self.state

    async def save(self) -> None:
        await save_document(self.storage, self.storage_key, self.state.document)

    # -- export ------------------------------------------------------------

    def export(self) -> str:
        return export_to_markup(self.state.document)

    # -- suggestions -------------------------------------------------------

    async def suggest_content(self, block_id: str) -> ReduceResult | None:
        """
        Rewrite a title/text block's content with a suggestion.
        Returns None when nothing was requested or nothing came back.
        """
        if self.suggestions is None:
            logger.warning("editor: suggestions disabled (no API key)")
            return None
        block = find_by_id(self.state.document, block_id)
        if block is None or block.kind not in SUGGESTIBLE_KINDS:
            return None

        suggestion = await self.suggestions.suggest_content(block.content, block.kind)
        if not suggestion:
            return None
        return self.dispatch(make_intent("block.update_content", id=block_id, content=suggestion))

    async def suggest_colors(self, block_id: str) -> ReduceResult | None:
        """
        Apply a suggested text colour (color) and accent (border-color)
        for the block's background colour.
        """
        if self.suggestions is None:
            logger.warning("editor: suggestions disabled (no API key)")
            return None
        block = find_by_id(self.state.document, block_id)
        if block is None:
            return None
        background = block.style.get("background-color")
        if not background:
            return None

        pair = await self.suggestions.suggest_colors(background)
        if pair is None:
            return None

        text_color, accent_color = pair
        current = self.state
        document = update_styles(current.document, block_id, {"color": text_color, "border-color": accent_color})
        if document is current.document:
            # Block deleted while the request was in flight
            return ReduceResult(state=current, applied=False, error=f"BLOCK_NOT_FOUND: {block_id}")
        self.state = replace(current, document=tuple(document))
        return ReduceResult(state=self.state, applied=True)

    def snapshot(self) -> dict[str, Any]:
        return self.state.to_dict()


def _default_session() -> EditorSession:
    return EditorSession(
        storage=FileStorage(settings.STORAGE_DIR),
        storage_key=settings.STORAGE_KEY,
        suggestions=get_suggestion_service(),
    )


# Singleton instance
editor_session = _default_session()


def get_editor_session() -> EditorSession:
    """FastAPI dependency — the process-wide session."""
    return editor_session
