"""Splitting and classifying QIF lines.

A QIF line is one of:
- a header, starting with "!" (e.g. "!Account", "!Type:Cat", "!Type:Bank")
- a terminator, a single "^" closing the current record
- a field, whose first character is the tag and the rest the value
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

ACCOUNT_HEADER = "!account"
CATEGORY_HEADER = "!type:cat"


class LineKind(Enum):
    HEADER = "header"
    FIELD = "field"
    TERMINATOR = "terminator"


@dataclass(frozen=True)
class QifLine:
    """One classified, non-blank line of a QIF file.

    Attributes:
        number: 1-based line number in the source text.
        kind: Header, field or terminator.
        tag: Field tag (first character); None for headers and terminators.
        value: Field value, or the header text for headers.
    """

    number: int
    kind: LineKind
    tag: Optional[str] = None
    value: str = ""

    @property
    def header(self) -> Optional[str]:
        """Lower-cased header text, None when this is not a header."""
        if self.kind is not LineKind.HEADER:
            return None
        return self.value.lower()

    @property
    def is_account_header(self) -> bool:
        return self.header == ACCOUNT_HEADER

    @property
    def is_category_header(self) -> bool:
        return self.header == CATEGORY_HEADER


def classify_line(raw: str, number: int = 0) -> Optional[QifLine]:
    """Classify a single line of QIF text.

    Args:
        raw: Line content without its line break.
        number: 1-based line number, kept for error messages.

    Returns:
        The classified line, or None for blank lines.
    """
    if not raw.strip():
        return None

    if raw.startswith("!"):
        return QifLine(number, LineKind.HEADER, value=raw.strip())

    if raw.rstrip() == "^":
        return QifLine(number, LineKind.TERMINATOR)

    return QifLine(number, LineKind.FIELD, tag=raw[0], value=raw[1:])


def iter_lines(text: str) -> Iterator[QifLine]:
    """Yield the classified non-blank lines of a QIF document.

    Line breaks may be any of "\\r\\n", "\\r" or "\\n".
    """
    # A leading byte-order mark would otherwise hide the first header
    if text.startswith("\ufeff"):
        text = text[1:]

    for index, raw in enumerate(_LINE_BREAK_RE.split(text), start=1):
        line = classify_line(raw, index)
        if line is not None:
            yield line
