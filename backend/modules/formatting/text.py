"""
Structured text formatting for CV content.

Turns the freeform multi-line text users type into job descriptions,
summaries and the like into paragraphs and bullet lists. For example
"Led the team\\n\\n• Hired 4\\n- Shipped v2" becomes a paragraph
"Led the team" followed by a list of "Hired 4" and "Shipped v2".

Everything here is pure: the same input always yields the same blocks.
"""

import html
import re

from .models import Block, BulletList, Paragraph

BULLET_PATTERN = re.compile(r"^[•-]\s+")
STRONG_PATTERN = re.compile(r"\*\*(.+?)\*\*")
EMPHASIS_PATTERN = re.compile(r"(?<!\*)\*([^*]+?)\*(?!\*)")

LIST_CLASS = "list-disc list-inside space-y-1"


def group_lines(text: str) -> list[list[str]]:
    """
    Split text into paragraphs of trimmed lines.

    Blank lines delimit paragraphs; runs of blank lines, and blank lines at
    either end, never produce an empty group.
    """
    if not text:
        return []

    groups: list[list[str]] = []
    current: list[str] = []

    for line in text.split("\n"):
        stripped = line.strip()
        if stripped:
            current.append(stripped)
        elif current:
            groups.append(current)
            current = []

    if current:
        groups.append(current)

    return groups


def split_paragraphs(text: str) -> list[str]:
    """Return each paragraph as its lines joined with single spaces."""
    return [" ".join(lines) for lines in group_lines(text)]


def detect_list_block(lines: list[str]) -> bool:
    """True if any line starts with a ``•`` or ``-`` bullet followed by whitespace."""
    return any(BULLET_PATTERN.match(line.strip()) for line in lines)


def render_inline(text: str) -> str:
    """
    Convert inline emphasis to HTML.

    ``**bold**`` becomes ``<strong>``, then ``*italic*`` becomes ``<em>``.
    Matching is non-greedy and per line; a lone or unbalanced asterisk is
    left as typed. Any newline left in the text becomes ``<br>``.
    """
    if not text:
        return ""

    rendered_lines = []
    for line in html.escape(text, quote=False).split("\n"):
        line = STRONG_PATTERN.sub(r"<strong>\1</strong>", line)
        line = EMPHASIS_PATTERN.sub(r"<em>\1</em>", line)
        rendered_lines.append(line)
    return "<br>".join(rendered_lines)


def _list_items(lines: list[str]) -> list[str]:
    items: list[str] = []
    current: str | None = None

    for raw in lines:
        line = raw.strip()
        if BULLET_PATTERN.match(line):
            if current:
                items.append(current)
            current = BULLET_PATTERN.sub("", line, count=1).strip()
        elif current is not None:
            # continuation of the previous bullet
            current = f"{current} {line}".strip()

    if current:
        items.append(current)
    return items


def render_block(lines: list[str]) -> Block:
    """
    Render one paragraph's lines as a block.

    In a list block, text before the first bullet has no item to attach to
    and is dropped, as are bullets with no text.
    """
    if detect_list_block(lines):
        return BulletList(items=tuple(_list_items(lines)))
    return Paragraph(text=render_inline(" ".join(line.strip() for line in lines)))


def format_description(text: str) -> list[Block]:
    """Format freeform text into an ordered list of blocks."""
    blocks: list[Block] = []
    for lines in group_lines(text):
        block = render_block(lines)
        if isinstance(block, BulletList) and not block.items:
            continue
        blocks.append(block)
    return blocks


def blocks_to_html(blocks: list[Block]) -> list[str]:
    """Render blocks to HTML fragments, one per block."""
    fragments = []
    for block in blocks:
        if isinstance(block, BulletList):
            items = "".join(f"<li>{html.escape(item, quote=False)}</li>" for item in block.items)
            fragments.append(f'<ul class="{LIST_CLASS}">{items}</ul>')
        else:
            fragments.append(block.text)
    return fragments
