"""Coerce any value to a boolean."""
from __future__ import annotations

import numbers
from typing import Any

from typeex.stringify import stringify
from typeex.values import ValueKind, classify


def _text_truth(text: str) -> bool:
    stripped = text.strip()
    try:
        return float(stripped) > 0
    except ValueError:
        return stripped.lower() == "true"


def boolify(value: Any) -> bool:
    """Convert any value to bool.

    Numbers and numeric strings are true when greater than zero, other
    strings only when they read ``"true"``. Collections are true when not
    empty. Deferred values are evaluated first; objects with their own
    text form are judged by that text.
    """
    kind = classify(value)
    while kind is ValueKind.DEFERRED:
        value = value()
        kind = classify(value)

    if kind is ValueKind.NULL:
        return False
    if kind is ValueKind.BOOLEAN:
        return value
    if kind is ValueKind.TEXT:
        return _text_truth(value)
    if kind is ValueKind.SEQUENCE:
        return len(value) > 0
    if kind is ValueKind.PRIMITIVE:
        if isinstance(value, numbers.Real):
            return value > 0
        return bool(value)
    if kind is ValueKind.RENDERABLE:
        return _text_truth(stringify(value))
    return True


__all__ = ["boolify"]
