"""
CV data module.

Loads a user's CV sections (master or variant) for the content editor.
"""

from .interfaces import ICvRepository
from .service import (
    CvService,
    apply_visibility_defaults,
    decode_entities,
    public_profile,
    with_formatted_description,
)

__all__ = [
    "ICvRepository",
    "CvService",
    "apply_visibility_defaults",
    "decode_entities",
    "public_profile",
    "with_formatted_description",
]
