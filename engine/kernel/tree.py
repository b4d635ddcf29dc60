"""
Lumina Kernel — Tree Operations

Pure functions: (forest, ...) → forest
No side effects. No IO. Never raises for a missing id.

Every structural edit rebuilds only the path from the touched node up to the
top level; siblings off that path are reused by reference, so the previous
forest stays valid and unchanged.

Failure policy: an id that cannot be found, or a move that would create a cycle,
returns the input forest object itself (callers can test `result is forest`).
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from dataclasses import replace

from engine.kernel.types import (
    Block,
    BlockKind,
    Document,
    collect_ids,
    find_by_id,
    is_descendant,
    is_style_key,
)

# ---------------------------------------------------------------------------
# Block factory
# ---------------------------------------------------------------------------

DEFAULT_CONTENT: dict[BlockKind, str] = {
    BlockKind.TITLE: "New Title",
    BlockKind.TEXT: "New Text Content",
    BlockKind.IMAGE: "https://picsum.photos/800/400",
    BlockKind.BUTTON: "Click Me",
    BlockKind.CONTAINER: "",
}

CONTAINER_STYLE: dict[str, str] = {
    "padding": "20px",
    "background-color": "#f8fafc",
    "display": "flex",
    "flex-direction": "column",
    "width": "100%",
    "min-height": "100px",
    "align-items": "stretch",
    "justify-content": "flex-start",
    "gap": "20px",
}

LEAF_STYLE: dict[str, str] = {"padding": "10px 0", "width": "100%"}


def new_block_id() -> str:
    """A fresh, never-reused block id."""
    return f"block-{uuid.uuid4().hex[:16]}"


def create_block(kind: BlockKind | str) -> Block:
    """Build a new block with a fresh id and the kind's default content and style."""
    kind = BlockKind(kind)
    is_container = kind == BlockKind.CONTAINER
    return Block(
        id=new_block_id(),
        kind=kind,
        content=DEFAULT_CONTENT[kind],
        style=dict(CONTAINER_STYLE if is_container else LEAF_STYLE),
        children=() if is_container else None,
    )


def clone_block(block: Block) -> Block:
    """Deep copy of a subtree where every node gets a fresh id."""
    children = None
    if block.children is not None:
        children = tuple(clone_block(c) for c in block.children)
    return replace(block, id=new_block_id(), style=dict(block.style), children=children)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _splice(
    forest: Document,
    block_id: str,
    fn: Callable[[Block], tuple[Block, ...]],
) -> tuple[Document, bool]:
    """
    Replace the first block matching `block_id` (pre-order) with fn(block),
    which may return zero, one, or several blocks. Rebuilds ancestors only.
    Returns (new_forest, found).
    """
    for i, block in enumerate(forest):
        if block.id == block_id:
            return forest[:i] + fn(block) + forest[i + 1 :], True
        if block.children:
            children, found = _splice(block.children, block_id, fn)
            if found:
                return forest[:i] + (replace(block, children=children),) + forest[i + 1 :], True
    return forest, False


def _edit(forest: Sequence[Block], block_id: str, fn: Callable[[Block], tuple[Block, ...]]) -> Sequence[Block]:
    result, found = _splice(tuple(forest), block_id, fn)
    return result if found else forest


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def insert(forest: Sequence[Block], source: Block, target_id: str) -> Sequence[Block]:
    """
    Drop `source` onto the block `target_id`.

    Container target: source becomes its first child.
    Any other target: source becomes the sibling right after it.
    No-op if source.id == target_id, the target is missing, or any id in the
    source subtree is already in the forest.
    """
    if source.id == target_id:
        return forest
    existing = set(collect_ids(forest))
    if existing.intersection(collect_ids((source,))):
        return forest

    def drop(target: Block) -> tuple[Block, ...]:
        if target.is_container:
            return (replace(target, children=(source, *target.children)),)
        return (target, source)

    return _edit(forest, target_id, drop)


def relocate(forest: Sequence[Block], source_id: str, target_id: str) -> Sequence[Block]:
    """
    Move the block `source_id` (with its subtree) onto `target_id` using the
    insert rules. Remove and insert happen on the same value before it is
    returned, so either both apply or neither does.
    """
    if source_id == target_id:
        return forest
    source = find_by_id(forest, source_id)
    if source is None:
        return forest
    if is_descendant(source, target_id):
        return forest
    if find_by_id(forest, target_id) is None:
        return forest

    detached = remove(forest, source_id)
    return insert(detached, source, target_id)


def remove(forest: Sequence[Block], block_id: str) -> Sequence[Block]:
    """Delete a block and its entire subtree."""
    return _edit(forest, block_id, lambda b: ())


def duplicate(forest: Sequence[Block], block_id: str) -> Sequence[Block]:
    """Insert a fresh-id deep copy right after the original, at the same level."""
    return _edit(forest, block_id, lambda b: (b, clone_block(b)))


def update_content(forest: Sequence[Block], block_id: str, content: str) -> Sequence[Block]:
    """Replace a block's content. Containers carry no content, so they are left alone."""
    block = find_by_id(forest, block_id)
    if block is None or block.is_container or block.content == content:
        return forest
    return _edit(forest, block_id, lambda b: (replace(b, content=content),))


def update_style(
    forest: Sequence[Block],
    block_id: str,
    key: str,
    value: str | None,
) -> Sequence[Block]:
    """
    Set one style entry, keeping every other key.
    An empty or None value removes the key so the kind default applies again.
    Unknown keys are ignored.
    """
    if not is_style_key(key):
        return forest

    def restyle(b: Block) -> tuple[Block, ...]:
        style = dict(b.style)
        if value is None or value == "":
            style.pop(key, None)
        else:
            style[key] = value
        return (replace(b, style=style),)

    return _edit(forest, block_id, restyle)


def update_styles(forest: Sequence[Block], block_id: str, updates: dict[str, str | None]) -> Sequence[Block]:
    """Apply several style entries as one edit."""
    result = forest
    for key, value in updates.items():
        result = update_style(result, block_id, key, value)
    return result


def add_as_child_of_selection(
    forest: Sequence[Block],
    selected_id: str | None,
    kind: BlockKind | str,
    block: Block | None = None,
) -> tuple[Sequence[Block], str]:
    """
    Add a new block of `kind`: appended as the last child of the selected
    container, or appended to the top level when the selection is not a container.
    Returns (new_forest, new_block_id) — the new id becomes the selection.
    """
    new_block = block or create_block(kind)
    parent = find_by_id(forest, selected_id) if selected_id else None
    if parent is not None and parent.is_container:
        result = _edit(forest, parent.id, lambda b: (replace(b, children=(*b.children, new_block)),))
        return result, new_block.id
    return (*forest, new_block), new_block.id
