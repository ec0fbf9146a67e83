"""Display forms of engine error messages.

Engines report errors as free text. DuckDB leads with a category
("Conversion Error: ...") and may append the offending statement after a
blank line; SQLite reports a bare sentence. The parsed form keeps the
sentence and moves the category aside.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_PREFIX = re.compile(r"^\s*(?P<kind>[A-Z][A-Za-z]*(?: [A-Za-z]+)*) Error:\s*")
_CONTEXT = re.compile(r"\n\s*(?:LINE \d+:|\n)")


@dataclass(frozen=True, slots=True)
class EngineMessage:
    """An engine error message split into category and text.

    Attributes:
        kind: Category prefix without the "Error" suffix (e.g. "Conversion"),
            or None when the engine gave none
        text: The message with prefix and statement context removed
        raw: The message exactly as the engine reported it
    """

    kind: str | None
    text: str
    raw: str

    def __str__(self) -> str:
        return self.text


def parse_error_message(raw: str) -> EngineMessage:
    """Strip the category prefix and trailing statement context from a message."""
    text = raw
    kind = None
    match = _PREFIX.match(text)
    if match:
        kind = match.group("kind")
        text = text[match.end():]
    context = _CONTEXT.search(text)
    if context:
        text = text[:context.start()]
    text = " ".join(text.split())
    return EngineMessage(kind=kind, text=text or raw.strip(), raw=raw)


def shorten(text: str, width: int = 80) -> str:
    """Single-line form of ``text`` no longer than ``width`` characters."""
    if width < 4:
        raise ValueError(f"width must be at least 4, got {width}")
    line = " ".join(str(text).split())
    if len(line) <= width:
        return line
    return line[: width - 3].rstrip() + "..."
