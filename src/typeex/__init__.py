"""
typeex - runtime value helpers

Universal stringification with pluggable serializers, ``{{name}}``
interpolation, string helpers, boolean coercion and an ordered,
validated dictionary.
"""

from .boolex import boolify
from .dictionary import Dictionary, StringDictionary
from .exceptions import (
    CannotDecodeBase64StringError,
    ConfigError,
    InvalidDictionaryValueError,
    InvalidValueError,
    TypeExError,
)
from .interpolation import interpolate
from .string_ex import StringEx
from .stringify import (
    default_serializer,
    get_default_serializer,
    remove_default_serializer,
    set_default_serializer,
    stringify,
)
from .values import Deferred, Renderable, ValueKind, classify

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "boolify",
    "Dictionary",
    "StringDictionary",
    "TypeExError",
    "InvalidDictionaryValueError",
    "InvalidValueError",
    "CannotDecodeBase64StringError",
    "ConfigError",
    "interpolate",
    "StringEx",
    "stringify",
    "set_default_serializer",
    "remove_default_serializer",
    "get_default_serializer",
    "default_serializer",
    "Deferred",
    "Renderable",
    "ValueKind",
    "classify",
]
