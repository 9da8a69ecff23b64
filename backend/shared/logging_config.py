"""
Logging setup shared by every module.

Modules log through ``logging.getLogger(__name__)``. Structured context is
passed through ``safe_context`` so tokens and keys never reach the log sink.
"""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

REDACTED = "[REDACTED]"

_SENSITIVE_MARKERS = ("token", "secret", "password", "key", "authorization", "cookie")

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    global _configured

    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def _is_sensitive(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in _SENSITIVE_MARKERS)


def safe_context(**fields: Any) -> dict[str, Any]:
    """
    Return a copy of ``fields`` with secret-looking values redacted.

    Nested dicts are redacted recursively so a logged CSP report or
    webhook payload cannot smuggle a credential into the logs.
    """
    cleaned: dict[str, Any] = {}
    for name, value in fields.items():
        if _is_sensitive(name) and value is not None:
            cleaned[name] = REDACTED
        elif isinstance(value, dict):
            cleaned[name] = safe_context(**{str(k): v for k, v in value.items()})
        else:
            cleaned[name] = value
    return cleaned
