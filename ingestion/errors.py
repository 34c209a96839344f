"""Errors raised while importing a QIF file.

Every error except UnreconciledTransferError aborts the import.
"""

from contextlib import contextmanager
from typing import List, Optional


class QifImportError(ValueError):
    """Base class for QIF import failures.

    Args:
        message: Human-readable description of the problem.
        line_number: 1-based line of the QIF file the problem was found on.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class MalformedRecordError(QifImportError):
    """Duplicate field, unterminated record, or field on the wrong record kind."""


class UnknownReferenceError(QifImportError):
    """A name was used that must have been declared first."""


class DuplicateDefinitionError(QifImportError):
    """The same account, category or payee name was declared twice."""


class UnsupportedValueError(QifImportError):
    """A field value has no mapping to the ledger schema."""


class UnreconciledTransferError(QifImportError):
    """Transfer legs were left without a matching leg in the file.

    Records already written stay in place; callers decide whether to keep them.

    Args:
        legs: The transfer records still waiting for a peer.
    """

    def __init__(self, legs: List):
        self.legs = legs
        super().__init__(
            f"{len(legs)} transfer(s) have no matching transaction in the QIF file"
        )


@contextmanager
def at_line(line_number: int):
    """Attach a line number to QIF errors raised inside the block that lack one."""
    try:
        yield
    except QifImportError as e:
        if e.line_number is None:
            e.line_number = line_number
            e.args = (f"Line {line_number}: {e.message}",)
        raise
