"""Value kinds understood by the stringification engine.

Every runtime value is classified into exactly one :class:`ValueKind` by
:func:`classify`; the engine dispatches on that kind alone.
"""
from __future__ import annotations

import enum
import functools
import inspect
import numbers
from collections.abc import Mapping, Sequence, Set
from typing import Any, Callable, Protocol, runtime_checkable

from typeex.dictionary import Dictionary

# (value) -> text, invoked on SEQUENCE and OPAQUE values only.
Serializer = Callable[[Any], str]

# () -> value, forced by the engine before rendering.
DeferredValue = Callable[[], Any]


class ValueKind(enum.Enum):
    NULL = "null"
    TEXT = "text"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    DEFERRED = "deferred"
    OPAQUE = "opaque"
    RENDERABLE = "renderable"
    PRIMITIVE = "primitive"


@runtime_checkable
class Renderable(Protocol):
    """Explicit self-render capability, preferred over ``__str__``."""

    def __typeex_render__(self) -> str: ...


class Deferred:
    """Wrap a zero-argument callable so it is evaluated at stringify time.

    Plain functions and lambdas are already treated as deferred; use this
    wrapper for callables that would otherwise be rendered as objects.
    """

    __slots__ = ("func",)

    def __init__(self, func: DeferredValue) -> None:
        self.func = func

    def __call__(self) -> Any:
        return self.func()

    def __repr__(self) -> str:
        return f"Deferred({self.func!r})"


def is_keyed(value: Any) -> bool:
    return isinstance(value, (Mapping, Dictionary))


def is_unordered(value: Any) -> bool:
    return isinstance(value, Set)


def is_sequence(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return False
    return isinstance(value, (Sequence, Set)) or is_keyed(value)


def is_deferred(value: Any) -> bool:
    if isinstance(value, (Deferred, functools.partial)):
        return True
    # Classes are callable but construct values; they are not deferred.
    return inspect.isroutine(value)


def is_renderable(value: Any) -> bool:
    # A class defining __typeex_render__ is not itself renderable; its
    # instances are.
    return not isinstance(value, type) and isinstance(value, Renderable)


def has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def classify(value: Any) -> ValueKind:
    """Return the single :class:`ValueKind` for ``value``."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.TEXT
    # bool before numbers: bool subclasses int.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if is_sequence(value):
        return ValueKind.SEQUENCE
    if is_deferred(value):
        return ValueKind.DEFERRED
    if is_renderable(value):
        return ValueKind.RENDERABLE
    if isinstance(value, numbers.Number):
        return ValueKind.PRIMITIVE
    if has_own_str(value):
        return ValueKind.RENDERABLE
    return ValueKind.OPAQUE


def iter_items(sequence: Any) -> list:
    """Return the members of a SEQUENCE value in their canonical order.

    Keyed sequences yield their values in insertion order. Sets have no
    order of their own, so the caller sorts them after rendering.
    """
    if is_keyed(sequence):
        return list(sequence.values())
    return list(sequence)


__all__ = [
    "Serializer",
    "DeferredValue",
    "ValueKind",
    "Renderable",
    "Deferred",
    "classify",
    "is_keyed",
    "is_sequence",
    "is_unordered",
    "is_renderable",
    "is_deferred",
    "has_own_str",
    "iter_items",
]
