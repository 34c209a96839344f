"""Second pass over a QIF file: transactions, transfers and splits.

The active account is set by "!Account" blocks, which only carry the account
name here (the Registry Pass already created the account). Category sections
are skipped. Every other "!Type:" header opens a list of transaction records.

Transaction fields:
- D date, T/U amount, M memo, C cleared status, N check number
- P payee, created on first use
- L category path, or "[Account]" for a transfer
- S/E/$ split category (or "[Account]"), memo and amount; these repeat once
  per split leg inside a single record
"""

from enum import Enum
from typing import Sequence

from ingestion.context import ImportContext
from ingestion.drafts import Draft, EntryKind
from ingestion.errors import MalformedRecordError, UnknownReferenceError, at_line
from ingestion.lines import LineKind, QifLine
from logger import get_logger
from models.category import SPLIT_CATEGORY_ID

logger = get_logger("ledger")

SPLIT_TAGS = frozenset("SE$")

# Tags stored verbatim on the draft
_PLAIN_FIELDS = {
    "D": "date",
    "T": "amount",
    "U": "amount",
    "M": "memo",
    "C": "cleared_status",
    "N": "check_number",
    "E": "memo",
    "$": "amount",
}


class _Section(Enum):
    ACCOUNT = "account"
    CATEGORIES = "categories"
    TRANSACTIONS = "transactions"


class LedgerPass:
    """Builds and inserts every transaction of a QIF file in file order.

    Args:
        context: The import context of a run whose Registry Pass is complete.
        progress_every: Log progress every this many lines.
    """

    def __init__(self, context: ImportContext, progress_every: int = 1000):
        self.context = context
        self.progress_every = progress_every
        self.section = _Section.TRANSACTIONS
        self.account_id = None
        self.draft = Draft()

    def run(self, lines: Sequence[QifLine]) -> None:
        """Process all lines.

        Raises:
            MalformedRecordError: On duplicate or unknown fields, records
                without a category/transfer or account, and records left open
                by a header or the end of the file.
            UnknownReferenceError: If an account named in an "!Account" block
                or a bracketed transfer target was never declared.
            UnsupportedValueError: On unparseable dates, amounts or cleared codes.
        """
        total = len(lines)
        for index, line in enumerate(lines, start=1):
            if index % self.progress_every == 0:
                logger.info(f"Processed {index} of {total} lines")
            with at_line(line.number):
                self._handle(line)

        if self.section is _Section.ACCOUNT or not self.draft.is_empty:
            raise MalformedRecordError("File ends inside an unterminated record")

    def _handle(self, line: QifLine) -> None:
        if line.kind is LineKind.HEADER:
            self._switch_section(line)
        elif self.section is _Section.CATEGORIES:
            return
        elif self.section is _Section.ACCOUNT:
            self._handle_account_line(line)
        elif line.kind is LineKind.TERMINATOR:
            self._finish_record()
        else:
            self._collect(line.tag, line.value)

    def _switch_section(self, line: QifLine) -> None:
        if self.section is _Section.ACCOUNT:
            raise MalformedRecordError("Found header inside an unterminated account block")
        if not self.draft.is_empty:
            raise MalformedRecordError("Found header before closing previous record")

        if line.is_account_header:
            self.section = _Section.ACCOUNT
            self.account_id = None
        elif line.is_category_header:
            self.section = _Section.CATEGORIES
            self.account_id = None
        elif line.header.startswith("!type:"):
            self.section = _Section.TRANSACTIONS
        else:
            # "!Option:..." and "!Clear:..." switches carry no records
            logger.debug(f"Ignoring header {line.value}")

        self.draft = Draft(account_id=self.account_id)

    def _handle_account_line(self, line: QifLine) -> None:
        if line.kind is LineKind.TERMINATOR:
            if self.account_id is None:
                raise MalformedRecordError("Account block without a name")
            self.section = _Section.TRANSACTIONS
            self.draft = Draft(account_id=self.account_id)
        elif line.tag == "N":
            self.account_id = self.context.resolver.require_account(line.value)
            logger.debug(f"Active account: {line.value} ({self.account_id})")

    def _collect(self, tag: str, value: str) -> None:
        draft = self.draft
        if not draft.is_split and draft.has(tag):
            raise MalformedRecordError(f"Duplicate field '{tag}' in transaction")

        if tag in SPLIT_TAGS:
            draft = self._split_leg_for(tag)

        if tag in _PLAIN_FIELDS:
            setattr(draft, _PLAIN_FIELDS[tag], value)
        elif tag == "P":
            draft.payee_id = self.context.resolver.payee_id(value)
        elif tag == "L":
            self._assign_target(draft, value, EntryKind.TRANSACTION, EntryKind.TRANSFER)
        elif tag == "S":
            self._assign_target(draft, value, EntryKind.SPLIT, EntryKind.SPLIT_TRANSFER)
        else:
            raise MalformedRecordError(f"Unknown field '{tag}' in transaction")

        draft.mark(tag)

    def _assign_target(
        self,
        draft: Draft,
        value: str,
        category_kind: EntryKind,
        transfer_kind: EntryKind,
    ) -> None:
        """Point a draft at a category, or at a peer account for transfers."""
        bracketed = len(value) >= 2 and value.startswith("[") and value.endswith("]")
        name = value[1:-1] if bracketed else value

        account_id = self.context.resolver.find_account(name)
        if account_id is not None:
            draft.kind = transfer_kind
            draft.transfer_account_id = account_id
            draft.category_id = None
        elif bracketed:
            raise UnknownReferenceError(f"Transfer to unknown account: {name}")
        else:
            draft.kind = category_kind
            draft.category_id = self.context.resolver.category_id(name)
            draft.transfer_account_id = None

    def _split_leg_for(self, tag: str) -> Draft:
        """Return the draft a split field belongs to.

        The field continues the open split leg unless the leg already has this
        tag, or no leg is open yet. In both cases the current draft is inserted
        (as the split parent, or as the finished leg) and a new leg is opened.
        """
        draft = self.draft
        if draft.is_split and not draft.has(tag):
            return draft

        if draft.is_split:
            self._commit(draft)
            parent_id = draft.parent_id
        else:
            if draft.kind is None:
                draft.kind = EntryKind.TRANSACTION
            if draft.kind is EntryKind.TRANSACTION:
                draft.category_id = SPLIT_CATEGORY_ID
            parent_id = self._commit(draft)

        self.draft = draft.start_split(parent_id)
        return self.draft

    def _finish_record(self) -> None:
        draft = self.draft
        if draft.kind is None:
            raise MalformedRecordError(
                "Undetermined kind for transaction: no category, transfer or split"
            )
        if draft.account_id is None:
            raise MalformedRecordError("Undetermined account for transaction")

        self._commit(draft)
        self.draft = Draft(account_id=self.account_id)

    def _commit(self, draft: Draft) -> int:
        resolver = self.context.resolver
        transaction = self.context.builder.build(
            draft, resolver.account_type(draft.account_id)
        )
        if transaction.kind.is_transfer:
            return self.context.reconciler.insert(transaction)
        return self.context.insert(transaction)
