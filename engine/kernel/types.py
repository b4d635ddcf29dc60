"""
Lumina Kernel — Shared Types (Block Model)

Data classes used across tree operations, layout, reducer, renderer, and assembly.
These are the contracts that bind the kernel together.

Key rules:
- A Document is a forest: an ordered tuple of top-level Blocks
- Blocks are frozen; every edit produces a new Block (untouched siblings are shared)
- `children` is a tuple iff kind is CONTAINER, None for every other kind
- Style keys come from a closed set (STYLE_KEYS); values are free CSS-like strings
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Block kinds
# ---------------------------------------------------------------------------


class BlockKind(StrEnum):
    TITLE = "title"
    TEXT = "text"
    IMAGE = "image"
    BUTTON = "button"
    CONTAINER = "container"


BLOCK_KINDS: set[str] = {k.value for k in BlockKind}

# Kinds whose content can be rewritten by the suggestion collaborator
SUGGESTIBLE_KINDS: set[BlockKind] = {BlockKind.TITLE, BlockKind.TEXT}


# ---------------------------------------------------------------------------
# Style keys
# ---------------------------------------------------------------------------

# Order here is the canonical order used by the renderer.
STYLE_KEYS: tuple[str, ...] = (
    "width",
    "height",
    "min-height",
    "color",
    "font-size",
    "text-align",
    "font-weight",
    "background-color",
    "background-image",
    "background-size",
    "background-position",
    "object-fit",
    "padding",
    "margin",
    "border-radius",
    "display",
    "flex-direction",
    "flex-wrap",
    "flex-grow",
    "flex-shrink",
    "align-items",
    "justify-content",
    "gap",
    "border-width",
    "border-color",
)

STYLE_KEY_SET: frozenset[str] = frozenset(STYLE_KEYS)

# camelCase spelling used by older saved pages → canonical key
STYLE_KEY_ALIASES: dict[str, str] = {
    "".join(w if i == 0 else w.capitalize() for i, w in enumerate(k.split("-"))): k
    for k in STYLE_KEYS
    if "-" in k
}


def is_style_key(key: str) -> bool:
    return key in STYLE_KEY_SET


def normalize_style_key(key: str) -> str | None:
    """Return the canonical style key for `key` (kebab or camelCase), or None."""
    if key in STYLE_KEY_SET:
        return key
    return STYLE_KEY_ALIASES.get(key)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Block:
    """
    A node in the document tree.

    `style` is never mutated in place — edits build a new dict and a new Block.
    `children` is a tuple for containers and None for leaf kinds.
    Compared by value; unhashable because `style` is a dict.
    """

    __hash__ = None  # type: ignore[assignment]

    id: str
    kind: BlockKind
    content: str = ""
    style: dict[str, str] = field(default_factory=dict)
    children: tuple[Block, ...] | None = None

    def __post_init__(self) -> None:
        if (self.kind == BlockKind.CONTAINER) != (self.children is not None):
            raise ValueError(f"Block {self.id!r}: children must be present iff kind is container")

    @property
    def is_container(self) -> bool:
        return self.kind == BlockKind.CONTAINER

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "content": self.content,
            "styles": {k: self.style[k] for k in STYLE_KEYS if k in self.style},
        }
        if self.children is not None:
            d["children"] = [c.to_dict() for c in self.children]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Block:
        """
        Build a Block from its persisted shape.
        Assumes the dict already passed primitives.validate_block_dict.
        """
        kind = BlockKind(d["type"])
        style: dict[str, str] = {}
        for key, value in d.get("styles", {}).items():
            canonical = normalize_style_key(key)
            if canonical is not None and value is not None and value != "":
                style[canonical] = value
        children = None
        if kind == BlockKind.CONTAINER:
            children = tuple(cls.from_dict(c) for c in d.get("children", []))
        return cls(id=d["id"], kind=kind, content=d.get("content", ""), style=style, children=children)


Document = tuple[Block, ...]


@dataclass(frozen=True)
class EditorState:
    """
    The whole editing session: the forest, the selected block, the block being dragged.
    Replaced wholesale by the reducer — never mutated.
    """

    document: Document = ()
    selection: str | None = None
    drag_source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": document_to_list(self.document),
            "selection": self.selection,
            "drag_source": self.drag_source,
        }


@dataclass
class Intent:
    """
    One discrete user gesture from the presentation layer.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Intent:
        return cls(type=d["type"], payload=d.get("payload", {}))


@dataclass
class ReduceResult:
    """
    Result of applying one intent to the editor state.
    The reducer never throws — it always returns one of these.
    """

    state: EditorState
    applied: bool
    error: str | None = None


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def find_by_id(forest: Sequence[Block], block_id: str) -> Block | None:
    """Pre-order depth-first search. Returns the first match or None."""
    for block in forest:
        if block.id == block_id:
            return block
        if block.children:
            found = find_by_id(block.children, block_id)
            if found is not None:
                return found
    return None


def is_descendant(ancestor: Block, target_id: str) -> bool:
    """True iff target_id names a node strictly inside ancestor's subtree."""
    if not ancestor.children:
        return False
    for child in ancestor.children:
        if child.id == target_id or is_descendant(child, target_id):
            return True
    return False


def iter_blocks(forest: Sequence[Block]) -> Iterator[Block]:
    """Yield every block in pre-order."""
    for block in forest:
        yield block
        if block.children:
            yield from iter_blocks(block.children)


def collect_ids(forest: Sequence[Block]) -> list[str]:
    return [b.id for b in iter_blocks(forest)]


def document_to_list(forest: Sequence[Block]) -> list[dict[str, Any]]:
    return [b.to_dict() for b in forest]
