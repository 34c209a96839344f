"""Draft records collected field by field while scanning a QIF file."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set

from models.transaction import TransactionKind


class EntryKind(Enum):
    """Every kind of record the builder knows how to construct."""

    ACCOUNT = "account"
    CATEGORY = "category"
    PAYEE = "payee"
    TRANSACTION = "transaction"
    TRANSFER = "transfer"
    SPLIT = "split"
    SPLIT_TRANSFER = "split_transfer"

    @property
    def is_split(self) -> bool:
        return self in (EntryKind.SPLIT, EntryKind.SPLIT_TRANSFER)

    @property
    def transaction_kind(self) -> TransactionKind:
        return _ANNOTATION_KINDS[self]


_ANNOTATION_KINDS = {
    EntryKind.TRANSACTION: TransactionKind.TRANSACTION,
    EntryKind.TRANSFER: TransactionKind.TRANSFER,
    EntryKind.SPLIT: TransactionKind.SPLIT,
    EntryKind.SPLIT_TRANSFER: TransactionKind.SPLIT_TRANSFER,
}


@dataclass
class Draft:
    """Fields gathered for one record before it is built.

    Account, category and payee drafts use name/account_type/description;
    transaction drafts use the remaining fields. Amount and date keep their
    QIF text until the builder converts them.
    """

    kind: Optional[EntryKind] = None
    parsed_fields: Set[str] = field(default_factory=set)

    # accounts, categories, payees
    name: Optional[str] = None
    account_type: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    sort_key: Optional[int] = None

    # transactions
    account_id: Optional[int] = None
    date: Optional[str] = None
    amount: Optional[str] = None
    memo: Optional[str] = None
    cleared_status: Optional[str] = None
    check_number: Optional[str] = None
    payee_id: Optional[int] = None
    category_id: Optional[int] = None
    transfer_account_id: Optional[int] = None

    @property
    def is_split(self) -> bool:
        return self.kind is not None and self.kind.is_split

    @property
    def is_empty(self) -> bool:
        return not self.parsed_fields

    def has(self, tag: str) -> bool:
        return tag in self.parsed_fields

    def mark(self, tag: str) -> None:
        self.parsed_fields.add(tag)

    def start_split(self, parent_id: int) -> "Draft":
        """Open the next split leg under parent_id, inheriting date and account."""
        return Draft(
            kind=EntryKind.SPLIT,
            parent_id=parent_id,
            account_id=self.account_id,
            date=self.date,
        )
