from __future__ import annotations

from typing import Any, Dict, Mapping


class TypeExError(Exception):
    """Base exception for typeex."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidDictionaryValueError(TypeExError, ValueError):
    """Raised when a dictionary validator rejects a value."""

    def __init__(self, value: Any, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx.setdefault("value_type", type(value).__name__)
        message = f"Dictionary value rejected by validator: {value!r}"
        TypeExError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.value = value


# Name used by callers that think of the store generically.
InvalidValueError = InvalidDictionaryValueError


class CannotDecodeBase64StringError(TypeExError, ValueError):
    """Raised when a string cannot be decoded from base64."""

    def __init__(self, string: str, *, context: Mapping[str, Any] | None = None) -> None:
        message = f"Cannot decode base64 string: {string!r}"
        TypeExError.__init__(self, message, context=context)
        ValueError.__init__(self, message)
        self.string = string


class ConfigError(TypeExError, RuntimeError):
    """Raised when configuration cannot be loaded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        TypeExError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "TypeExError",
    "InvalidDictionaryValueError",
    "InvalidValueError",
    "CannotDecodeBase64StringError",
    "ConfigError",
]
