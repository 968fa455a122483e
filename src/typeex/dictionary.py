"""Ordered, optionally validated string-keyed dictionary with a cursor.

Keys keep the order in which they were first set; setting a key to
``None`` removes it. Every ``set`` recomputes the key list and rewinds the
single shared cursor to the first key.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from typeex.exceptions import InvalidDictionaryValueError

logger = logging.getLogger(__name__)

Validator = Callable[[Any], bool]


class Dictionary:
    """Insertion-ordered mapping of ``str`` keys to arbitrary values.

    Args:
        validator: Optional ``validator(value) -> bool``; rejected values
            raise :class:`InvalidDictionaryValueError` and leave the
            dictionary unchanged.
    """

    def __init__(self, validator: Optional[Validator] = None) -> None:
        self._data: Dict[str, Any] = {}
        self._keys: List[str] = []
        self._position: int = 0
        self._validator = validator

    # ----- storage -----

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, or remove ``key`` when value is None.

        Raises:
            InvalidDictionaryValueError: If the validator rejects ``value``.
        """
        if value is None:
            self._data.pop(key, None)
        else:
            if self._validator is not None and not self._validator(value):
                logger.debug("Validator rejected value for key %r", key)
                raise InvalidDictionaryValueError(value, context={"key": key})
            self._data[key] = value
        self._keys = list(self._data)
        self.rewind()

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def keys(self) -> List[str]:
        return list(self._keys)

    def values(self) -> List[Any]:
        return [self._data[k] for k in self._keys]

    def to_dict(self) -> Dict[str, Any]:
        """Return a snapshot of the stored key/value pairs."""
        return dict(self._data)

    # ----- cursor -----

    def rewind(self) -> None:
        self._position = 0

    def next(self) -> None:
        if self._position < len(self._keys):
            self._position += 1

    def valid(self) -> bool:
        return self._position < len(self._keys)

    def key(self) -> Optional[str]:
        """Key under the cursor, or None when the cursor is exhausted."""
        return self._keys[self._position] if self.valid() else None

    def current(self) -> Any:
        """Value under the cursor, or None when the cursor is exhausted."""
        return self._data[self._keys[self._position]] if self.valid() else None

    # ----- python protocols -----

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Walk the shared cursor from the first key, yielding pairs."""
        self.rewind()
        while self.valid():
            yield self.key(), self.current()  # type: ignore[misc]
            self.next()

    def __iter__(self) -> Iterator[str]:
        for key, _ in self.items():
            yield key

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class StringDictionary(Dictionary):
    """Dictionary that only accepts ``str`` values."""

    def __init__(self) -> None:
        super().__init__(validator=lambda value: isinstance(value, str))


__all__ = ["Validator", "Dictionary", "StringDictionary"]
