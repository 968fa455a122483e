"""Convert any value to its canonical text form.

Dispatch is by :class:`~typeex.values.ValueKind`:

* NULL -> ``""``; TEXT unchanged; BOOLEAN -> ``"true"`` / ``"false"``
* SEQUENCE and OPAQUE -> a serializer, resolved as the per-call
  ``serializer`` argument, else the process-wide default, else
  :func:`builtin_serializer`
* DEFERRED -> evaluated (repeatedly, if it yields another deferred value)
  and the result rendered with the same ``serializer``
* RENDERABLE -> the value's own text form
* PRIMITIVE -> ``str(value)``

The process-wide default serializer is a single module-level slot. Installing
or removing it is a global, non-reentrant configuration change: set it from
one control thread and remove it before handing control elsewhere, or use
:func:`default_serializer` to scope it.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import yaml

from typeex.config import get_setting
from typeex.values import (
    Serializer,
    ValueKind,
    classify,
    is_renderable,
    is_unordered,
    iter_items,
)

logger = logging.getLogger(__name__)

_default_serializer: Optional[Serializer] = None


def set_default_serializer(serializer: Serializer) -> None:
    """Install ``serializer`` for every later call that passes none."""
    global _default_serializer
    _default_serializer = serializer
    logger.debug("Installed default serializer %r", serializer)


def remove_default_serializer() -> None:
    """Revert to :func:`builtin_serializer`."""
    global _default_serializer
    _default_serializer = None
    logger.debug("Removed default serializer")


def get_default_serializer() -> Optional[Serializer]:
    """Return the installed process-wide serializer, or None."""
    return _default_serializer


@contextmanager
def default_serializer(serializer: Serializer) -> Iterator[Serializer]:
    """Install ``serializer`` for the duration of the block.

    The previously installed serializer (or none) is restored on exit.
    """
    global _default_serializer
    previous = _default_serializer
    set_default_serializer(serializer)
    try:
        yield serializer
    finally:
        _default_serializer = previous


_OBJECT_TAG = "tag:yaml.org,2002:python/object:"


def _instance_fields(data: Any) -> Optional[dict]:
    fields = dict(getattr(data, "__dict__", None) or {})
    for klass in type(data).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in fields:
                continue
            if hasattr(data, name):
                fields[name] = getattr(data, name)
    return fields or None


class StructuralDumper(yaml.Dumper):
    """Full YAML dumper that never gives up on an object.

    Objects that cannot be reduced (generators, locks, sockets) are written
    under their ``module.qualname`` tag as a mapping of their fields, or as
    their ``repr`` when they have none.
    """

    def represent_object(self, data: Any) -> yaml.Node:
        try:
            return super().represent_object(data)
        except (TypeError, yaml.representer.RepresenterError):
            cls = type(data)
            tag = f"{_OBJECT_TAG}{cls.__module__}.{cls.__qualname__}"
            fields = _instance_fields(data)
            if fields is None:
                return self.represent_scalar(tag, repr(data))
            return self.represent_mapping(tag, fields)


StructuralDumper.add_multi_representer(object, StructuralDumper.represent_object)


def structural_dump(value: Any) -> str:
    """Encode an object's type and fields as single-line YAML.

    Mapping keys are sorted, so equal objects give identical text.
    """
    return yaml.dump(
        value,
        Dumper=StructuralDumper,
        default_flow_style=True,
        sort_keys=True,
        allow_unicode=True,
        width=float("inf"),
    ).rstrip("\n")


def builtin_serializer(value: Any) -> str:
    """Join sequence items with the configured separator; dump other objects.

    Items are rendered with :func:`stringify` and no explicit serializer,
    so nested sequences are joined the same way. Keyed sequences contribute
    their values only. Set members are ordered by their rendered text.
    """
    if classify(value) is not ValueKind.SEQUENCE:
        return structural_dump(value)
    rendered = [stringify(item) for item in iter_items(value)]
    if is_unordered(value):
        rendered.sort()
    return get_setting("stringify.sequence_separator").join(rendered)


def _resolve(serializer: Optional[Serializer]) -> Serializer:
    if serializer is not None:
        return serializer
    if _default_serializer is not None:
        return _default_serializer
    return builtin_serializer


def stringify(value: Any, serializer: Optional[Serializer] = None) -> str:
    """Convert any value to string.

    Args:
        value: Anything.
        serializer: ``serializer(value) -> str`` used for sequences and
            objects that cannot render themselves. Errors it raises
            propagate unchanged.
    """
    kind = classify(value)
    # Deferred values may produce further deferred values; unwind them
    # iteratively so nesting depth is not bounded by the recursion limit.
    while kind is ValueKind.DEFERRED:
        value = value()
        kind = classify(value)

    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.SEQUENCE or kind is ValueKind.OPAQUE:
        return _resolve(serializer)(value)
    if kind is ValueKind.RENDERABLE:
        if is_renderable(value):
            return value.__typeex_render__()
        return str(value)
    return str(value)


__all__ = [
    "set_default_serializer",
    "remove_default_serializer",
    "get_default_serializer",
    "default_serializer",
    "structural_dump",
    "builtin_serializer",
    "stringify",
]
