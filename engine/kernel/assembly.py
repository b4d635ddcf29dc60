"""
Lumina Kernel — Assembly Layer

Sits between the pure functions (reducer, renderer) and the outside world
(a key-value store holding the saved page). Coordinates load and save of the
document JSON.

This is where IO happens. The reducer and renderer are pure.

Persisted shape: a JSON array of blocks, each
  {"id", "type", "content", "styles": {...}, "children": [...]?}
Anything else (bad JSON, wrong kind, children on a leaf, duplicate ids, ...)
is treated as no saved page at all: the default document is used instead.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path

from engine.kernel.primitives import validate_document_data
from engine.kernel.reducer import default_document
from engine.kernel.types import Block, Document, document_to_list

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MalformedDocument(Exception):
    """Stored JSON exists but does not describe a valid block forest."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class DocumentStorage:
    """
    Abstract key-value storage interface.
    Implement with files for the host app, or in-memory for tests.
    """

    async def get(self, key: str) -> str | None:
        """Fetch the raw JSON stored under key. Returns None if not found."""
        raise NotImplementedError

    async def put(self, key: str, data: str) -> None:
        """Write raw JSON under key."""
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(DocumentStorage):
    """In-memory storage for testing."""

    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.items.get(key)

    async def put(self, key: str, data: str) -> None:
        self.items[key] = data

    async def delete(self, key: str) -> None:
        self.items.pop(key, None)


_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")


class FileStorage(DocumentStorage):
    """One JSON file per key under a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    async def get(self, key: str) -> str | None:
        path = self._path(key)
        return await asyncio.to_thread(self._read, path)

    async def put(self, key: str, data: str) -> None:
        path = self._path(key)
        await asyncio.to_thread(self._write, path, data)

    async def delete(self, key: str) -> None:
        path = self._path(key)
        await asyncio.to_thread(path.unlink, missing_ok=True)

    @staticmethod
    def _read(path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _write(path: Path, data: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(data, encoding="utf-8")
        tmp.replace(path)


# ---------------------------------------------------------------------------
# JSON codec
# ---------------------------------------------------------------------------


def document_to_json(forest: Sequence[Block]) -> str:
    return json.dumps(document_to_list(forest), ensure_ascii=False)


def document_from_json(text: str) -> Document:
    """
    Parse and validate stored JSON into a forest.
    Raises MalformedDocument on any structural problem, including nesting
    too deep to walk.
    """
    try:
        data = json.loads(text)
    except (ValueError, TypeError) as e:
        raise MalformedDocument([f"Invalid JSON: {e}"]) from e
    except RecursionError as e:
        raise MalformedDocument(["Invalid JSON: nested too deeply"]) from e

    try:
        errors = validate_document_data(data)
        if errors:
            raise MalformedDocument(errors)
        return tuple(Block.from_dict(d) for d in data)
    except RecursionError as e:
        raise MalformedDocument(["Document nested too deeply"]) from e


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


async def load_document(storage: DocumentStorage, key: str) -> Document:
    """
    Load the saved forest for key.
    Missing, unreadable, or malformed data falls back to the default document
    (logged, never raised).
    """
    try:
        raw = await storage.get(key)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("assembly: cannot read page under %r: %s", key, e)
        return default_document()

    if raw is None:
        logger.info("assembly: no saved page under %r, using default document", key)
        return default_document()

    try:
        document = document_from_json(raw)
    except MalformedDocument as e:
        logger.warning("assembly: discarding malformed page under %r: %s", key, e)
        return default_document()

    logger.info("assembly: loaded %d top-level blocks from %r", len(document), key)
    return document


async def save_document(storage: DocumentStorage, key: str, forest: Sequence[Block]) -> None:
    await storage.put(key, document_to_json(forest))
    logger.info("assembly: saved %d top-level blocks to %r", len(forest), key)
