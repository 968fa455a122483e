"""``{{name}}`` substitution driven by a :class:`~typeex.dictionary.Dictionary`.

Markers are matched literally. All markers are replaced in one pass, longest
marker first at any position, and substituted text is never scanned again.
Markers with no matching key are left as they are.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Dict, Union

from typeex.dictionary import Dictionary
from typeex.stringify import stringify

OPEN_MARKER = "{{"
CLOSE_MARKER = "}}"

# Characters stripped from keys, matching the trim of StringEx.trim().
TRIM_CHARS = " \t\n\r\0\x0b"

Replacements = Union[Dictionary, Mapping]


def marker_for(key: Any) -> str:
    return f"{OPEN_MARKER}{str(key).strip(TRIM_CHARS)}{CLOSE_MARKER}"


def _as_dictionary(replacements: Replacements) -> Dictionary:
    if isinstance(replacements, Dictionary):
        return replacements
    dictionary = Dictionary()
    for key, value in replacements.items():
        dictionary.set(str(key), value)
    return dictionary


def interpolate(template: str, replacements: Replacements) -> str:
    """Replace ``{{variable}}`` markers in ``template``.

    Each value is rendered with :func:`~typeex.stringify.stringify` using
    the process-wide default serializer, if any. Keys are trimmed before
    the marker is built, so ``" foo "`` fills ``{{foo}}``.
    """
    store = _as_dictionary(replacements)
    if len(store) == 0:
        return template

    table: Dict[str, str] = {}
    store.rewind()
    while store.valid():
        table[marker_for(store.key())] = stringify(store.current())
        store.next()

    pattern = re.compile(
        "|".join(re.escape(m) for m in sorted(table, key=len, reverse=True))
    )
    return pattern.sub(lambda match: table[match.group(0)], template)


__all__ = [
    "OPEN_MARKER",
    "CLOSE_MARKER",
    "TRIM_CHARS",
    "marker_for",
    "interpolate",
]
