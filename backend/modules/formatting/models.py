"""
Formatter output blocks.

A block is one unit of display content derived from freeform text:
either a paragraph or a bullet list. Blocks are transient and never stored.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class Paragraph(BaseModel):
    """A run of prose. ``text`` already carries inline emphasis markup."""

    kind: Literal["paragraph"] = "paragraph"
    text: str

    model_config = {"frozen": True}


class BulletList(BaseModel):
    """An ordered sequence of bullet items with the bullet markers stripped."""

    kind: Literal["list"] = "list"
    items: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}


Block = Union[Paragraph, BulletList]
