"""
Engine kernel test configuration.

Shared block fixtures. Kernel tests are pure except for the assembly tests,
which use MemoryStorage or a FileStorage rooted in tmp_path.
"""

import pytest

from engine.kernel.reducer import default_document
from engine.kernel.types import Block, BlockKind


@pytest.fixture
def default_forest():
    return default_document()


@pytest.fixture
def mixed_forest():
    """One block of every kind: a row container holding an image and a button, then a loose title."""
    return (
        Block(
            id="hero",
            kind=BlockKind.CONTAINER,
            style={"flex-direction": "row", "gap": "12px", "background-color": "#0f172a"},
            children=(
                Block(
                    id="hero-image",
                    kind=BlockKind.IMAGE,
                    content="https://example.com/hero.png",
                    style={"width": "60%", "object-fit": "contain"},
                ),
                Block(
                    id="hero-cta",
                    kind=BlockKind.BUTTON,
                    content="Sign up",
                    style={"width": "40%", "border-width": "2px", "border-color": "#ff0000"},
                ),
            ),
        ),
        Block(id="footer-note", kind=BlockKind.TEXT, content="Fine print"),
    )
