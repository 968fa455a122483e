"""Immutable string wrapper with comparison, trimming and codec helpers."""
from __future__ import annotations

import base64
import binascii
import re
import warnings
from typing import Any, Optional

from typeex.config import get_setting
from typeex.exceptions import CannotDecodeBase64StringError
from typeex.interpolation import TRIM_CHARS, Replacements, interpolate
from typeex.stringify import stringify
from typeex.values import Serializer

_TRAILING_WORD_RE = re.compile(r"\w+$")
_NON_ALPHABET_RE = re.compile(r"[^A-Za-z0-9+/]")


def _lenient_base64(string: str) -> str:
    data = _NON_ALPHABET_RE.sub("", string)
    if len(data) % 4 == 1:
        data = data[:-1]
    return data + "=" * (-len(data) % 4)


class StringEx:
    """Wrap a ``str``; every transforming method returns a new ``StringEx``."""

    __slots__ = ("_string",)

    def __init__(self, string: str) -> None:
        self._string = string

    @staticmethod
    def is_null_or_empty(string: Optional[str]) -> bool:
        return string is None or string == ""

    @staticmethod
    def stringify(value: Any, serializer: Optional[Serializer] = None) -> str:
        """Convert any value to string (see :func:`typeex.stringify.stringify`)."""
        return stringify(value, serializer)

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"StringEx({self._string!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StringEx):
            return self._string == other._string
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._string)

    def to_string(self) -> str:
        return self._string

    def contains(self, needle: Any) -> bool:
        """True if ``needle`` (or, for a list, any of its items) occurs."""
        if isinstance(needle, list):
            return any(stringify(n) in self._string for n in needle)
        return stringify(needle) in self._string

    def ellipsis(self, max_length: Optional[int] = None) -> "StringEx":
        """Truncate to ``max_length`` characters and append the marker.

        When the text has spaces, a partial word at the cut is dropped.
        """
        if max_length is None:
            max_length = get_setting("strings.ellipsis.max_length")
        marker = get_setting("strings.ellipsis.marker")
        string = self._string
        if len(string) <= max_length:
            return StringEx(string)
        result = string[:max_length]
        if " " not in string:
            return StringEx(result + marker)
        return StringEx(_TRAILING_WORD_RE.sub("", result) + marker)

    def encode_base64(self) -> "StringEx":
        return StringEx(base64.b64encode(self._string.encode("utf-8")).decode("ascii"))

    def decode_base64(self, strict: Optional[bool] = None) -> "StringEx":
        """Decode base64 text to a UTF-8 string.

        Non-strict decoding drops characters outside the alphabet, restores
        missing padding and ignores a dangling final character, so a
        truncated ``"Zm9"`` still yields ``"fo"``.

        Raises:
            CannotDecodeBase64StringError: If strict and the text is not
                canonical base64, or the decoded bytes are not UTF-8.
        """
        if strict is None:
            strict = get_setting("strings.base64.strict")
        try:
            if strict:
                raw = base64.b64decode(self._string, validate=True)
            else:
                raw = base64.b64decode(_lenient_base64(self._string), validate=True)
            return StringEx(raw.decode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise CannotDecodeBase64StringError(
                self._string, context={"strict": strict, "reason": str(exc)}
            ) from exc

    def starts_with(self, needle: str) -> bool:
        return self._string.startswith(needle)

    def starts_with_invariant_case(self, needle: str) -> bool:
        return self._string.lower().startswith(needle.lower())

    def ends_with(self, needle: str) -> bool:
        return self._string.endswith(needle)

    def ends_with_invariant_case(self, needle: str) -> bool:
        return self._string.lower().endswith(needle.lower())

    def equals(self, string: str) -> bool:
        """Case sensitive string comparison."""
        return self._string == string

    def equals_invariant_case(self, string: str) -> bool:
        """Case insensitive string comparison."""
        return self._string.lower() == string.lower()

    def remove_prefix(self, prefix: str) -> "StringEx":
        return StringEx(self._string.removeprefix(prefix))

    def trim(self) -> "StringEx":
        return StringEx(self._string.strip(TRIM_CHARS))

    def interpolate(self, replacements: Replacements) -> "StringEx":
        """Replace variables surrounded with ``{{ }}``."""
        return StringEx(interpolate(self._string, replacements))

    def template(self, replacements: Replacements) -> "StringEx":
        """Deprecated alias of :meth:`interpolate`."""
        warnings.warn(
            "StringEx.template() is deprecated; use StringEx.interpolate()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.interpolate(replacements)


__all__ = ["StringEx"]
