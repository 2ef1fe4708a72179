"""
Markup stripping for free-text input.

Every string that reaches the database from the public form passes
through :func:`sanitize_data`.  Script and style elements are dropped
together with their content; any other tag is removed and its text
kept.

The result is HTML-escaped text, not raw text: a bare ``&``, ``<`` or
``>`` is entity-escaped, while a complete entity such as ``&amp;`` is
kept as it is.  An entity missing its semicolon is not complete, so
``a &amp b`` is stored as ``a &amp;amp b`` and still renders as typed.
Stored values are never unescaped, since that would turn ``&lt;script&gt;``
back into markup.  Both functions are idempotent.
"""
from __future__ import annotations

import re
from typing import Any

import bleach

_SCRIPT_BLOCK = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)


def sanitize(value: str) -> str:
    value = _SCRIPT_BLOCK.sub('', value)
    return bleach.clean(value, tags=[], attributes={}, strip=True, strip_comments=True).strip()


def sanitize_data(value: Any) -> Any:
    """Return a copy of ``value`` with every string leaf sanitized.

    Dicts and lists are walked recursively; numbers, booleans and
    ``None`` come back unchanged.
    """
    if isinstance(value, str):
        return sanitize(value)
    if isinstance(value, dict):
        return {k: sanitize_data(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_data(v) for v in value]
    return value
