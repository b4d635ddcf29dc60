"""
Lumina Kernel — Renderer (markup export)

Pure function: forest → standalone HTML document string
No AI. No IO. Deterministic: same forest → same bytes, always.

Each block becomes an outer `.block-wrapper` div carrying the layout concern
(width, height, min-height, flex-grow, flex-shrink, margin) and an inner
element carrying the content concern (colours, typography, flex, background,
border). Containers render their children, in order, inside the inner div.

Style properties are emitted in STYLE_KEYS order, never in dict insertion
order, so the output does not depend on edit history.
"""

from __future__ import annotations

from collections.abc import Sequence
from html import escape as _html_escape

import chevron

from engine.kernel.types import STYLE_KEYS, Block, BlockKind

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def export_to_markup(forest: Sequence[Block], title: str = "Exported Template - Lumina") -> str:
    """
    Render a complete HTML document from the forest.
    Returns a UTF-8 HTML string.
    """
    body = "".join(render_block(b) for b in forest)
    return chevron.render(PAGE_TEMPLATE, {"title": title, "base_css": BASE_CSS, "body": body})


def render_block(block: Block) -> str:
    """
    Render a single block and its children recursively.
    Returns an HTML fragment string.
    """
    layout_style, content_style = split_styles(block)
    layout_css = style_to_css(layout_style)
    content_css = style_to_css(content_style)
    content = escape(block.content)

    if block.kind == BlockKind.TITLE:
        inner = f'<h1 style="{content_css}">{content}</h1>'
    elif block.kind == BlockKind.TEXT:
        inner = f'<p style="{content_css}">{content}</p>'
    elif block.kind == BlockKind.IMAGE:
        inner = f'<img src="{content}" style="{content_css}" alt="Image" />'
    elif block.kind == BlockKind.BUTTON:
        inner = f'<button style="{content_css}">{content}</button>'
    else:
        children = "".join(render_block(c) for c in block.children or ())
        inner = f'<div style="{content_css}">{children}</div>'

    return f'<div class="block-wrapper" style="{layout_css}">{inner}</div>'


def split_styles(block: Block) -> tuple[list[tuple[str, str]], list[tuple[str, str]]]:
    """
    Split a block's stored style into (layout, content) declaration lists.
    Absent properties fall back to per-kind defaults here, never in storage.
    """
    s = block.style

    layout: list[tuple[str, str]] = [
        ("width", s.get("width") or "100%"),
        ("height", s.get("height") or "auto"),
        ("min-height", s.get("min-height", "")),
        ("flex-grow", s.get("flex-grow") or "0"),
        ("flex-shrink", s.get("flex-shrink") or "0"),
        ("margin", s.get("margin", "")),
        ("max-width", "100%"),
        ("box-sizing", "border-box"),
    ]

    content: list[tuple[str, str]] = []
    for key in STYLE_KEYS:
        if key in _LAYOUT_KEYS or key in _COMPOSED_KEYS:
            continue
        if block.kind != BlockKind.CONTAINER and key in _CONTAINER_ONLY_KEYS:
            continue
        if block.kind != BlockKind.IMAGE and key == "object-fit":
            continue
        value = s.get(key, "")
        if key == "background-image" and value:
            value = f"url({value})"
        content.append((key, value))

    border_width = s.get("border-width") or "0px"
    border_color = s.get("border-color") or "transparent"
    content.extend(
        [
            ("width", "100%"),
            ("height", "100%" if s.get("height") else "auto"),
            ("border", f"{border_width} solid {border_color}"),
            ("box-sizing", "border-box"),
            ("font-family", "inherit"),
        ]
    )

    if block.kind == BlockKind.CONTAINER:
        content.extend(
            [
                ("display", s.get("display") or "flex"),
                ("flex-direction", s.get("flex-direction") or "column"),
            ]
        )
    else:
        content.append(("display", "block"))

    if block.kind == BlockKind.IMAGE:
        content.append(("object-fit", s.get("object-fit") or "cover"))
    elif block.kind == BlockKind.BUTTON:
        content.append(("cursor", "pointer"))

    return layout, content


def style_to_css(declarations: list[tuple[str, str]]) -> str:
    """Join declarations into an inline style string, dropping empty values."""
    return escape("; ".join(f"{k}: {v}" for k, v in declarations if v))


# ---------------------------------------------------------------------------
# Page shell
# ---------------------------------------------------------------------------

_LAYOUT_KEYS: frozenset[str] = frozenset(
    {"width", "height", "min-height", "flex-grow", "flex-shrink", "margin", "display"}
)
_COMPOSED_KEYS: frozenset[str] = frozenset({"border-width", "border-color", "object-fit", "flex-direction"})
_CONTAINER_ONLY_KEYS: frozenset[str] = frozenset({"flex-wrap", "gap", "align-items", "justify-content"})

BASE_CSS = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body {
  font-family: 'Inter', -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
  background-color: #f8fafc;
  line-height: 1.5;
  -webkit-font-smoothing: antialiased;
}
.page-container {
  width: 100%;
  max-width: 1200px;
  margin: 0 auto;
  background-color: #ffffff;
  min-height: 100vh;
  overflow-x: hidden;
}
.block-wrapper {
  display: flex;
  flex-direction: column;
}
img { max-width: 100%; height: auto; }
button { font-family: inherit; }
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{title}}</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap" rel="stylesheet">
  <style>{{{base_css}}}</style>
</head>
<body>
  <div class="page-container">
    {{{body}}}
  </div>
</body>
</html>
"""


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)
