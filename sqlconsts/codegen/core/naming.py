"""
Naming utilities for generated constants.

Converts raw SQL identifiers into exported names and provides the
case-folding helpers that templates call by name.
"""

import json
import re
from typing import Any, Dict

# Words that do not follow the regular title-casing rule.
IRREGULAR_NAMES: Dict[str, str] = {
    "id": "ID",
}

_SEPARATOR_RE = re.compile(r"([ _])")
_WORD_START_RE = re.compile(r"(^|\s)(\S)")


def _title_char(char: str) -> str:
    """Title-case one character, unless that would change its length (ß)."""
    titled = char.title()
    return titled if len(titled) == 1 else char


def export_name(name: str) -> str:
    """
    Convert a SQL identifier into an exported, title-cased name.

    The first character and every character following a space or an
    underscore is title-cased, one character at a time. Underscores are
    dropped, spaces are kept.
    Words listed in IRREGULAR_NAMES are replaced verbatim (case-sensitive),
    so ``id`` becomes ``ID`` and ``user_id`` becomes ``UserID``.

    Args:
        name: Raw SQL identifier

    Returns:
        Exported name
    """
    if name in IRREGULAR_NAMES:
        return IRREGULAR_NAMES[name]

    parts = []
    for token in _SEPARATOR_RE.split(name):
        if token == "_":
            continue
        if token == " ":
            parts.append(token)
        elif token in IRREGULAR_NAMES:
            parts.append(IRREGULAR_NAMES[token])
        else:
            parts.append(_title_char(token[:1]) + token[1:])

    return "".join(parts)


def title_words(value: str) -> str:
    """Title-case the first letter of each whitespace-separated word."""
    return _WORD_START_RE.sub(
        lambda m: m.group(1) + _title_char(m.group(2)), str(value)
    )


def to_upper(value: str) -> str:
    """Upper-case the whole string."""
    return str(value).upper()


def to_lower(value: str) -> str:
    """Lower-case the whole string."""
    return str(value).lower()


def quote(value: Any) -> str:
    """Render a value as a double-quoted Python string literal."""
    # JSON string escapes are a subset of Python's
    return json.dumps(str(value), ensure_ascii=False)
