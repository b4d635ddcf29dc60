"""
Lumina Kernel — the pure page-builder engine.

Components:
  types      — Block model + traversal (find_by_id, is_descendant)
  tree       — insert, relocate, remove, duplicate, update content/style
  layout     — width resize with row-sibling compensation
  selection  — the single selected block id (and the drag source)
  reducer    — (state, intent) → state  (pure, never raises)
  renderer   — forest → standalone HTML document
  assembly   — load/save the forest through a key-value storage
"""

from engine.kernel.assembly import FileStorage, MemoryStorage, load_document, save_document
from engine.kernel.intents import make_intent
from engine.kernel.layout import resize
from engine.kernel.primitives import validate_intent
from engine.kernel.reducer import default_document, initial_state, reduce, replay
from engine.kernel.renderer import export_to_markup
from engine.kernel.tree import (
    add_as_child_of_selection,
    create_block,
    duplicate,
    insert,
    relocate,
    remove,
    update_content,
    update_style,
)
from engine.kernel.types import Block, BlockKind, EditorState, Intent, find_by_id, is_descendant

__all__ = [
    "Block",
    "BlockKind",
    "EditorState",
    "Intent",
    "find_by_id",
    "is_descendant",
    "create_block",
    "insert",
    "relocate",
    "remove",
    "duplicate",
    "update_content",
    "update_style",
    "add_as_child_of_selection",
    "resize",
    "validate_intent",
    "make_intent",
    "reduce",
    "replay",
    "initial_state",
    "default_document",
    "export_to_markup",
    "MemoryStorage",
    "FileStorage",
    "load_document",
    "save_document",
]
