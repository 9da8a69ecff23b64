"""
JSON response safe for embedding in HTML.

Inside string values ``<``, ``>``, ``&``, ``'`` and ``"`` are written as
``\\u003C``-style escapes, as are the U+2028 and U+2029 line separators,
so the body can be dropped into a ``<script>`` block without closing it.
"""

import json
import re
from typing import Any

from fastapi.responses import JSONResponse

HTML_ESCAPES = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "'": "\\u0027",
    # JavaScript line terminators
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# Consume escape sequences as units so ``\\"`` is never misread
ESCAPE_SEQUENCE = re.compile(r'\\.|[<>&\'\u2028\u2029]')


def _hex_escape(match: re.Match) -> str:
    token = match.group(0)
    if token == '\\"':
        return "\\u0022"
    return HTML_ESCAPES.get(token, token)


def hex_escaped_dumps(content: Any) -> str:
    return ESCAPE_SEQUENCE.sub(
        _hex_escape,
        json.dumps(content, ensure_ascii=False, separators=(",", ":"), default=str),
    )


class HexEscapedJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return hex_escaped_dumps(content).encode("utf-8")
