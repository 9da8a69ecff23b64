"""
Formatting module.

Converts freeform CV text into paragraphs and bullet lists.

Public API:
- format_description: text -> list of blocks
- split_paragraphs, detect_list_block, render_block, render_inline
- Paragraph, BulletList, Block
"""

from .models import Block, BulletList, Paragraph
from .text import (
    blocks_to_html,
    detect_list_block,
    format_description,
    group_lines,
    render_block,
    render_inline,
    split_paragraphs,
)

__all__ = [
    # Models
    "Block",
    "BulletList",
    "Paragraph",
    # Functions
    "blocks_to_html",
    "detect_list_block",
    "format_description",
    "group_lines",
    "render_block",
    "render_inline",
    "split_paragraphs",
]
