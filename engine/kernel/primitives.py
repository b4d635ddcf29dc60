"""
Lumina Kernel — Intent & Document Validation

Validates intent payloads before they reach the reducer, and persisted
document JSON before it is turned into Blocks.
Validation is structural (well-formed?) not semantic (will it apply?).
The reducer handles semantic checks (does the block exist? is the move legal?).
"""

from __future__ import annotations

from typing import Any

from engine.kernel.types import BLOCK_KINDS, normalize_style_key

INTENT_TYPES: set[str] = {
    "block.add",
    "block.drop",
    "block.remove",
    "block.duplicate",
    "block.update_content",
    "block.update_style",
    "block.resize",
    "selection.set",
    "selection.clear",
    "drag.start",
    "drag.end",
    "document.clear",
    "document.replace",
}

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_intent(type: str, payload: dict[str, Any]) -> list[str]:
    """
    Validate an intent's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    It does NOT check whether referenced blocks exist.
    That's the reducer's job.
    """
    errors: list[str] = []

    if type not in INTENT_TYPES:
        errors.append(f"Unknown intent type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


def validate_document_data(data: Any) -> list[str]:
    """
    Validate a persisted document (list of block dicts) recursively.
    Also checks that no id appears twice anywhere in the forest.
    """
    if not isinstance(data, list):
        return ["Document must be a list of blocks"]

    errors: list[str] = []
    seen: set[str] = set()
    for i, item in enumerate(data):
        errors.extend(validate_block_dict(item, path=f"[{i}]", seen=seen))
    return errors


def validate_block_dict(d: Any, path: str = "", seen: set[str] | None = None) -> list[str]:
    """Validate one persisted block and its children."""
    if seen is None:
        seen = set()
    if not isinstance(d, dict):
        return [f"{path}: block must be an object"]

    errors: list[str] = []

    block_id = d.get("id")
    if not isinstance(block_id, str) or not block_id:
        errors.append(f"{path}: block requires a non-empty string 'id'")
    elif block_id in seen:
        errors.append(f"{path}: duplicate block id {block_id!r}")
    else:
        seen.add(block_id)

    kind = d.get("type")
    if kind not in BLOCK_KINDS:
        errors.append(f"{path}: invalid block type {kind!r}")

    if not isinstance(d.get("content", ""), str):
        errors.append(f"{path}: 'content' must be a string")

    styles = d.get("styles", {})
    if not isinstance(styles, dict):
        errors.append(f"{path}: 'styles' must be an object")
    else:
        for key, value in styles.items():
            if normalize_style_key(key) is None:
                errors.append(f"{path}: unknown style key {key!r}")
            elif value is not None and not isinstance(value, str):
                errors.append(f"{path}: style {key!r} must be a string")

    children = d.get("children")
    if kind == "container":
        if children is None:
            errors.append(f"{path}: container requires 'children'")
        elif not isinstance(children, list):
            errors.append(f"{path}: 'children' must be a list")
        else:
            for i, child in enumerate(children):
                errors.extend(validate_block_dict(child, path=f"{path}.children[{i}]", seen=seen))
    elif children is not None:
        errors.append(f"{path}: only containers may have 'children'")

    return errors


# ---------------------------------------------------------------------------
# Per-intent validators
# ---------------------------------------------------------------------------


def _require_id(p: dict, key: str, intent: str) -> list[str]:
    if key not in p:
        return [f"{intent} requires '{key}'"]
    if not isinstance(p[key], str) or not p[key]:
        return [f"'{key}' must be a non-empty string"]
    return []


def _validate_kind(p: dict, intent: str) -> list[str]:
    if "kind" not in p:
        return [f"{intent} requires 'kind'"]
    if p["kind"] not in BLOCK_KINDS:
        return [f"Invalid block kind: {p['kind']}"]
    return []


def _validate_block_add(p: dict) -> list[str]:
    return _validate_kind(p, "block.add")


def _validate_block_drop(p: dict) -> list[str]:
    errors: list[str] = []
    has_source = p.get("source_id") is not None
    has_kind = p.get("kind") is not None

    if has_source == has_kind:
        errors.append("block.drop requires exactly one of 'source_id' or 'kind'")
    if has_source:
        errors.extend(_require_id(p, "source_id", "block.drop"))
    if has_kind:
        errors.extend(_validate_kind(p, "block.drop"))

    if p.get("target_id") is None:
        if has_source:
            errors.append("block.drop of an existing block requires 'target_id'")
    else:
        errors.extend(_require_id(p, "target_id", "block.drop"))
    return errors


def _validate_block_remove(p: dict) -> list[str]:
    return _require_id(p, "id", "block.remove")


def _validate_block_duplicate(p: dict) -> list[str]:
    return _require_id(p, "id", "block.duplicate")


def _validate_block_update_content(p: dict) -> list[str]:
    errors = _require_id(p, "id", "block.update_content")
    if "content" not in p:
        errors.append("block.update_content requires 'content'")
    elif not isinstance(p["content"], str):
        errors.append("'content' must be a string")
    return errors


def _validate_block_update_style(p: dict) -> list[str]:
    errors = _require_id(p, "id", "block.update_style")
    if "key" not in p:
        errors.append("block.update_style requires 'key'")
    elif normalize_style_key(str(p["key"])) is None:
        errors.append(f"Unknown style key: {p['key']}")
    if "value" not in p:
        errors.append("block.update_style requires 'value'")
    elif p["value"] is not None and not isinstance(p["value"], str):
        errors.append("'value' must be a string or null")
    return errors


def _validate_block_resize(p: dict) -> list[str]:
    errors = _require_id(p, "id", "block.resize")
    width = p.get("width")
    if width is None:
        errors.append("block.resize requires 'width'")
    elif isinstance(width, bool) or not isinstance(width, int | float):
        errors.append("'width' must be a number (percent)")
    elif width != width:
        errors.append("'width' must not be NaN")
    return errors


def _validate_selection_set(p: dict) -> list[str]:
    return _require_id(p, "id", "selection.set")


def _validate_drag_start(p: dict) -> list[str]:
    return _require_id(p, "id", "drag.start")


def _validate_document_replace(p: dict) -> list[str]:
    if "blocks" not in p:
        return ["document.replace requires 'blocks'"]
    try:
        return validate_document_data(p["blocks"])
    except RecursionError:
        return ["document.replace 'blocks' nested too deeply"]


_VALIDATORS: dict[str, Any] = {
    "block.add": _validate_block_add,
    "block.drop": _validate_block_drop,
    "block.remove": _validate_block_remove,
    "block.duplicate": _validate_block_duplicate,
    "block.update_content": _validate_block_update_content,
    "block.update_style": _validate_block_update_style,
    "block.resize": _validate_block_resize,
    "selection.set": _validate_selection_set,
    "drag.start": _validate_drag_start,
    "document.replace": _validate_document_replace,
}
