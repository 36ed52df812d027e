from __future__ import annotations

import re
from typing import Any

_NAME_CHARS = re.compile(r"^[а-яёА-ЯЁa-zA-Z\s-]+$")


def _capitalize(word: str) -> str:
    # Letters like "ß" or "ŉ" titlecase to two characters; those stay as typed.
    head = word[:1].title()
    if len(head) != 1 or head.title() != head:
        head = word[:1]
    return head + word[1:].lower()


def normalize_name(name: Any) -> str:
    """Trim, collapse inner whitespace and capitalise every word.

    ``normalize_name(normalize_name(x)) == normalize_name(x)`` for any input.
    """
    if not name:
        return ""
    words = str(name).split()
    return " ".join(_capitalize(w) for w in words)


def is_valid_name(name: Any) -> bool:
    """At least two words made of Cyrillic/Latin letters, hyphens and spaces."""
    normalized = normalize_name(name)
    if len(normalized.split(" ")) < 2:
        return False
    return bool(_NAME_CHARS.match(normalized))
