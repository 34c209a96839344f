"""First pass over a QIF file: account and category declarations.

Transactions name their category and their transfer target in the same "L"
field, so every account has to be known before the first transaction is read.
This pass creates all declared accounts and categories and skips everything
else.

Recognized record fields:
- N: name (full colon-delimited path for categories)
- T: account type, account records only
- D: description
"""

from typing import Iterable, Optional

from ingestion.context import ImportContext
from ingestion.drafts import Draft, EntryKind
from ingestion.errors import MalformedRecordError, at_line
from ingestion.lines import LineKind, QifLine
from logger import get_logger

logger = get_logger("registry")


class RegistryPass:
    """Declares every account and category of a QIF file.

    Args:
        context: The import context whose resolver receives the declarations.
    """

    def __init__(self, context: ImportContext):
        self.context = context
        self.section: Optional[EntryKind] = None
        self.draft: Optional[Draft] = None

    def run(self, lines: Iterable[QifLine]) -> None:
        """Scan all lines, declaring accounts and categories as their records close.

        Raises:
            MalformedRecordError: On duplicate fields, a "T" field in a
                category, or a record left open by a header or the end of file.
            DuplicateDefinitionError: If a name is declared twice.
            UnsupportedValueError: If an account type has no mapping.
        """
        for line in lines:
            with at_line(line.number):
                self._handle(line)

        if self.draft is not None and not self.draft.is_empty:
            raise MalformedRecordError(
                "File ends inside an unterminated account or category record"
            )

        resolver = self.context.resolver
        logger.info(
            f"Declared {len(resolver.accounts)} account(s) and "
            f"{len(resolver.categories)} category(ies)"
        )

    def _handle(self, line: QifLine) -> None:
        if line.kind is LineKind.HEADER:
            if self.draft is not None and not self.draft.is_empty:
                raise MalformedRecordError(
                    "Found header before closing previous record"
                )
            if line.is_account_header:
                self.section = EntryKind.ACCOUNT
            elif line.is_category_header:
                self.section = EntryKind.CATEGORY
            else:
                self.section = None
            self.draft = None
            return

        # Looking for the next account or category header
        if self.section is None:
            return

        if line.kind is LineKind.TERMINATOR:
            self._declare()
            # an account header introduces a single account record
            if self.section is EntryKind.ACCOUNT:
                self.section = None
            return

        if self.draft is None:
            self.draft = Draft(kind=self.section)
        self._collect(self.draft, line.tag, line.value)

    def _collect(self, draft: Draft, tag: str, value: str) -> None:
        if draft.has(tag):
            raise MalformedRecordError(
                f"Duplicate field '{tag}' in {draft.kind.value} record"
            )

        if tag == "N":
            draft.name = value
        elif tag == "T":
            if draft.kind is not EntryKind.ACCOUNT:
                raise MalformedRecordError(
                    f"Found type field in {draft.kind.value} record"
                )
            draft.account_type = value
        elif tag == "D":
            draft.description = value
        else:
            logger.debug(f"Ignoring field '{tag}' in {draft.kind.value} record")
            return

        draft.mark(tag)

    def _declare(self) -> None:
        draft = self.draft
        self.draft = None

        if draft is None or draft.is_empty:
            raise MalformedRecordError(f"Empty {self.section.value} record")

        if draft.kind is EntryKind.ACCOUNT:
            self.context.resolver.declare_account(draft)
        else:
            self.context.resolver.declare_category(draft)
