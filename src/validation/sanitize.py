# src/validation/sanitize.py - v1
"""String hygiene helpers shared by the validator and the fallback engine."""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_JS_URL_RE = re.compile(r"javascript\s*:", re.IGNORECASE)
_HANDLER_RE = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
_WS_RE = re.compile(r"[ \t\r\f\v]+")

_PHONE_RE = re.compile(r"^\+?[1-9]\d{6,15}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def sanitize_text(value: object) -> str:
    """Coerce to str and strip markup, script URLs and inline handlers.

    Non-scalar values become the empty string.
    """
    if value is None or isinstance(value, (dict, list, tuple, set, bool)):
        return ""
    text = str(value)
    text = _SCRIPT_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _JS_URL_RE.sub("", text)
    text = _HANDLER_RE.sub("", text)
    return _WS_RE.sub(" ", text).strip()


def truncate(text: str, limit: int, ellipsis: str = "...") -> str:
    """Cut ``text`` to at most ``limit`` characters, ending with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(ellipsis)].rstrip() + ellipsis


def is_valid_phone(phone: str) -> bool:
    return bool(_PHONE_RE.match(re.sub(r"[\s\-().]", "", phone)))


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))
