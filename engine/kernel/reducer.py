"""
Lumina Kernel — Reducer

Pure function: (state, intent) → ReduceResult
No side effects. No IO. No AI calls.

Every gesture from the presentation layer (add, drop, resize, edit, delete,
duplicate, select) arrives as one Intent. The reducer computes a whole new
EditorState from the old one; compound edits such as a move finish on a
private value before it is returned, so no caller ever sees a half-applied tree.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from engine.kernel import layout, selection, tree
from engine.kernel.primitives import validate_intent
from engine.kernel.types import (
    Block,
    BlockKind,
    EditorState,
    Intent,
    ReduceResult,
    find_by_id,
    is_descendant,
    normalize_style_key,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_document() -> tuple[Block, ...]:
    """The welcome page shown when nothing valid has been saved yet."""
    return (
        Block(
            id="initial-container",
            kind=BlockKind.CONTAINER,
            style={
                "padding": "40px",
                "background-color": "#ffffff",
                "display": "flex",
                "flex-direction": "column",
                "align-items": "center",
                "justify-content": "center",
                "gap": "20px",
                "width": "100%",
                "min-height": "200px",
            },
            children=(
                Block(
                    id="initial-title",
                    kind=BlockKind.TITLE,
                    content="Welcome to Lumina Builder",
                    style={
                        "font-size": "36px",
                        "font-weight": "700",
                        "color": "#1e293b",
                        "text-align": "center",
                    },
                ),
                Block(
                    id="initial-text",
                    kind=BlockKind.TEXT,
                    content="Start building your amazing HTML template by adding blocks from the left sidebar.",
                    style={
                        "font-size": "18px",
                        "color": "#64748b",
                        "text-align": "center",
                        "width": "80%",
                    },
                ),
            ),
        ),
    )


def initial_state() -> EditorState:
    return EditorState(document=default_document())


def reduce(state: EditorState, intent: Intent) -> ReduceResult:
    """
    Apply one intent to the current state.
    Returns the new state + applied flag + error.

    The input state is never modified; on rejection it is returned as-is.
    """
    errors = validate_intent(intent.type, intent.payload)
    if errors:
        code = "UNKNOWN_INTENT" if intent.type not in _HANDLERS else "INVALID_PAYLOAD"
        return _reject(state, code, "; ".join(errors))

    handler = _HANDLERS[intent.type]
    return handler(state, intent.payload)


def replay(intents: list[Intent], state: EditorState | None = None) -> EditorState:
    """
    Fold a sequence of intents over a state (initial_state() by default).
    Rejected intents are skipped.
    """
    current = state if state is not None else initial_state()
    for intent in intents:
        result = reduce(current, intent)
        if result.applied:
            current = result.state
    return current


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: EditorState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: EditorState) -> ReduceResult:
    return ReduceResult(state=state, applied=True)


def _with_document(state: EditorState, document: Any, **changes: Any) -> EditorState:
    return replace(state, document=tuple(document), **changes)


def _missing(state: EditorState, block_id: str) -> ReduceResult:
    return _reject(state, "BLOCK_NOT_FOUND", block_id)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_block_add(state: EditorState, p: dict) -> ReduceResult:
    document, new_id = tree.add_as_child_of_selection(state.document, state.selection, p["kind"])
    return _ok(_with_document(state, document, selection=new_id))


def _handle_block_drop(state: EditorState, p: dict) -> ReduceResult:
    source_id = p.get("source_id")
    target_id = p.get("target_id")

    # Palette drop with no target (empty canvas) → plain add
    if target_id is None:
        return _handle_block_add(state, p)

    if source_id is not None:
        if source_id == target_id:
            return _reject(state, "INVALID_MOVE", "cannot drop a block onto itself")
        source = find_by_id(state.document, source_id)
        if source is None:
            return _missing(state, source_id)
        if is_descendant(source, target_id):
            return _reject(state, "INVALID_MOVE", f"'{target_id}' is inside '{source_id}'")
        if find_by_id(state.document, target_id) is None:
            return _missing(state, target_id)
        document = tree.relocate(state.document, source_id, target_id)
        inserted_id = source_id
    else:
        if find_by_id(state.document, target_id) is None:
            return _missing(state, target_id)
        new_block = tree.create_block(p["kind"])
        document = tree.insert(state.document, new_block, target_id)
        inserted_id = new_block.id

    return _ok(_with_document(state, document, selection=inserted_id, drag_source=None))


def _handle_block_remove(state: EditorState, p: dict) -> ReduceResult:
    block_id = p["id"]
    document = tree.remove(state.document, block_id)
    if document is state.document:
        return _missing(state, block_id)
    return _ok(selection.prune_selection(_with_document(state, document)))


def _handle_block_duplicate(state: EditorState, p: dict) -> ReduceResult:
    block_id = p["id"]
    document = tree.duplicate(state.document, block_id)
    if document is state.document:
        return _missing(state, block_id)
    return _ok(_with_document(state, document))


def _handle_block_update_content(state: EditorState, p: dict) -> ReduceResult:
    block_id = p["id"]
    block = find_by_id(state.document, block_id)
    if block is None:
        return _missing(state, block_id)
    if block.is_container:
        return _reject(state, "NO_CONTENT", f"container '{block_id}' has no content")
    document = tree.update_content(state.document, block_id, p["content"])
    return _ok(_with_document(state, document))


def _handle_block_update_style(state: EditorState, p: dict) -> ReduceResult:
    block_id = p["id"]
    if find_by_id(state.document, block_id) is None:
        return _missing(state, block_id)
    key = normalize_style_key(p["key"])
    document = tree.update_style(state.document, block_id, key, p["value"])
    return _ok(_with_document(state, document))


def _handle_block_resize(state: EditorState, p: dict) -> ReduceResult:
    block_id = p["id"]
    document = layout.resize(state.document, block_id, float(p["width"]))
    if document is state.document:
        return _missing(state, block_id)
    return _ok(_with_document(state, document))


def _handle_selection_set(state: EditorState, p: dict) -> ReduceResult:
    if find_by_id(state.document, p["id"]) is None:
        return _missing(state, p["id"])
    return _ok(selection.select(state, p["id"]))


def _handle_selection_clear(state: EditorState, p: dict) -> ReduceResult:
    return _ok(selection.deselect(state))


def _handle_drag_start(state: EditorState, p: dict) -> ReduceResult:
    if find_by_id(state.document, p["id"]) is None:
        return _missing(state, p["id"])
    return _ok(selection.start_drag(state, p["id"]))


def _handle_drag_end(state: EditorState, p: dict) -> ReduceResult:
    return _ok(selection.end_drag(state))


def _handle_document_clear(state: EditorState, p: dict) -> ReduceResult:
    return _ok(EditorState())


def _handle_document_replace(state: EditorState, p: dict) -> ReduceResult:
    document = tuple(Block.from_dict(d) for d in p["blocks"])
    return _ok(selection.prune_selection(_with_document(state, document)))


# ---------------------------------------------------------------------------
# Handler dispatch table
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    "block.add": _handle_block_add,
    "block.drop": _handle_block_drop,
    "block.remove": _handle_block_remove,
    "block.duplicate": _handle_block_duplicate,
    "block.update_content": _handle_block_update_content,
    "block.update_style": _handle_block_update_style,
    "block.resize": _handle_block_resize,
    "selection.set": _handle_selection_set,
    "selection.clear": _handle_selection_clear,
    "drag.start": _handle_drag_start,
    "drag.end": _handle_drag_end,
    "document.clear": _handle_document_clear,
    "document.replace": _handle_document_replace,
}
