"""
Suggestion collaborator — Anthropic Messages API.

Two single-shot requests, no retry:
  suggest_content(text, kind)  → replacement text for a title/text block
  suggest_colors(background)   → (text colour, accent colour)

Every failure (API error, empty reply, unparseable pair) is logged and
returned as None. Callers treat None as "no suggestion, change nothing".
"""

from __future__ import annotations

import logging
import re

import anthropic

from backend.config import settings
from engine.kernel.types import SUGGESTIBLE_KINDS, BlockKind

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"#[0-9a-fA-F]{3,8}\b")

CONTENT_PROMPT = (
    "Generate a catchy and professional {kind} for a website section about: {text}. "
    "Return ONLY the generated text, no quotes or additional formatting."
)

COLORS_PROMPT = (
    "Given a background color of {color}, suggest a contrasting text color (hex) "
    "and a secondary accent color (hex). Format: text_color, accent_color. Return nothing else."
)


class SuggestionService:
    """Asks the model for content rewrites and colour pairings."""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model or settings.SUGGESTION_MODEL
        self.max_tokens = max_tokens or settings.SUGGESTION_MAX_TOKENS

    async def suggest_content(self, text: str, kind: BlockKind | str) -> str | None:
        """Return a replacement string for a title/text block, or None."""
        try:
            kind = BlockKind(kind)
        except ValueError:
            logger.warning("suggestions: unknown block kind %r", kind)
            return None
        if kind not in SUGGESTIBLE_KINDS:
            logger.warning("suggestions: content suggestions not supported for %s blocks", kind.value)
            return None

        reply = await self._complete(CONTENT_PROMPT.format(kind=kind.value, text=text))
        if not reply:
            return None
        return reply.strip().strip('"').strip()

    async def suggest_colors(self, background: str) -> tuple[str, str] | None:
        """Return (text_color, accent_color) for a background colour, or None."""
        reply = await self._complete(COLORS_PROMPT.format(color=background))
        if not reply:
            return None
        pair = parse_color_pair(reply)
        if pair is None:
            logger.warning("suggestions: unparseable colour pair: %r", reply[:200])
        return pair

    async def _complete(self, prompt: str) -> str | None:
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.warning("suggestions: request failed: %s", e)
            return None

        text = "".join(getattr(block, "text", "") for block in message.content).strip()
        if not text:
            logger.warning("suggestions: empty response from %s", self.model)
            return None
        return text


def parse_color_pair(reply: str) -> tuple[str, str] | None:
    """
    Parse "text_color, accent_color" where both are hex colours.
    Falls back to the first two hex colours found anywhere in the reply.
    """
    parts = [p.strip() for p in reply.strip().split(",")]
    if len(parts) == 2 and all(_HEX_RE.fullmatch(p) for p in parts):
        return parts[0], parts[1]

    found = _HEX_RE.findall(reply)
    if len(found) >= 2:
        return found[0], found[1]
    return None


def get_suggestion_service() -> SuggestionService | None:
    """The configured service, or None when no API key is set."""
    if not settings.SUGGESTIONS_ENABLED:
        return None
    return SuggestionService(api_key=settings.ANTHROPIC_API_KEY)
