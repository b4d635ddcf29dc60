"""
Lumina Kernel — Selection State

The selection is a single optional block id: a reference into the current
document, never a cached copy. Resolving it is a lookup against whatever the
document is now, so it always reflects the latest edits.
"""

from __future__ import annotations

from dataclasses import replace

from engine.kernel.types import Block, EditorState, find_by_id


def select(state: EditorState, block_id: str) -> EditorState:
    """Select a block. Unknown ids leave the state unchanged."""
    if find_by_id(state.document, block_id) is None:
        return state
    return replace(state, selection=block_id)


def deselect(state: EditorState) -> EditorState:
    if state.selection is None:
        return state
    return replace(state, selection=None)


def resolve_selection(state: EditorState) -> Block | None:
    if state.selection is None:
        return None
    return find_by_id(state.document, state.selection)


def prune_selection(state: EditorState) -> EditorState:
    """Clear selection and drag source when they no longer name a block."""
    selection = state.selection
    if selection is not None and find_by_id(state.document, selection) is None:
        selection = None
    drag_source = state.drag_source
    if drag_source is not None and find_by_id(state.document, drag_source) is None:
        drag_source = None
    if selection == state.selection and drag_source == state.drag_source:
        return state
    return replace(state, selection=selection, drag_source=drag_source)


def start_drag(state: EditorState, block_id: str) -> EditorState:
    if find_by_id(state.document, block_id) is None:
        return state
    return replace(state, drag_source=block_id)


def end_drag(state: EditorState) -> EditorState:
    if state.drag_source is None:
        return state
    return replace(state, drag_source=None)
