"""
Lumina Kernel — Intent Construction

Factory functions for creating well-formed intents.
Used by the editor session to wrap presentation-layer gestures before feeding
them to the reducer, and by tests to build intents concisely.
"""

from __future__ import annotations

from typing import Any

from engine.kernel.types import Intent


def make_intent(type: str, payload: dict[str, Any] | None = None, **fields: Any) -> Intent:
    """
    Build an Intent from a type plus payload fields.

    Fields may be given as a dict, as keyword arguments, or both
    (keywords win on conflict).
    """
    merged: dict[str, Any] = dict(payload or {})
    merged.update(fields)
    return Intent(type=type, payload=merged)


def intents_from_dicts(raw: list[dict[str, Any]]) -> list[Intent]:
    """Turn raw {type, payload} dicts (e.g. a JSON request body) into Intents."""
    return [Intent.from_dict(d) for d in raw]
