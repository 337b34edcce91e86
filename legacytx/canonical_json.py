"""Canonical JSON — compact, keys sorted at every level.

Output matches the Cosmos SDK ``sdk.SortJSON`` bytes so that signatures
over it verify on chain: no whitespace, lexicographic keys, UTF-8 kept
as-is, and ``<``, ``>``, ``&``, U+2028, U+2029 written as ``\\uXXXX``
escapes.
"""

from __future__ import annotations

import json
from typing import Any

from core.errors import InternalFault

_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def canonical_dumps(obj: Any) -> bytes:
    """Serialize *obj* with sorted keys and SDK-compatible escaping."""
    text = json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    # These characters can only occur inside JSON strings.
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text.encode("utf-8")


def sort_json(data: bytes | str) -> bytes:
    """Decode JSON *data* and re-encode it canonically.

    Raises ``ValueError`` (``json.JSONDecodeError``) on invalid input.
    """
    return canonical_dumps(json.loads(data))


def must_sort_json(data: bytes | str) -> bytes:
    """Like :func:`sort_json`, for bytes produced by trusted code.

    A failure here means an upstream encoder emitted invalid JSON.
    """
    try:
        return sort_json(data)
    except (ValueError, TypeError) as exc:
        raise InternalFault("failed to sort JSON sign bytes", cause=exc) from exc
