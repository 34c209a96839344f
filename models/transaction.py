from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class TransactionKind(str, Enum):
    """The four shapes a ledger record can take."""

    TRANSACTION = "transaction"
    TRANSFER = "transfer"
    SPLIT = "split"
    SPLIT_TRANSFER = "split_transfer"

    @property
    def is_transfer(self) -> bool:
        return self in (TransactionKind.TRANSFER, TransactionKind.SPLIT_TRANSFER)

    @property
    def is_split(self) -> bool:
        return self in (TransactionKind.SPLIT, TransactionKind.SPLIT_TRANSFER)


class ClearedStatus(str, Enum):
    UNRECONCILED = "UNRECONCILED"
    CLEARED = "CLEARED"
    RECONCILED = "RECONCILED"


# (account, peer account, date, amount, category, memo)
TransferKey = Tuple[int, int, int, int, Optional[int], str]


@dataclass
class Transaction:
    id: Optional[int]  # assigned by the record sink on insert
    kind: TransactionKind
    account_id: int
    date: int  # epoch seconds
    value_date: int  # epoch seconds, defaults to date
    amount: int  # signed, minor currency units
    cr_status: ClearedStatus
    uuid: str  # shared by both legs of a transfer
    comment: Optional[str] = None
    category_id: Optional[int] = None
    payee_id: Optional[int] = None
    transfer_account_id: Optional[int] = None
    transfer_peer: Optional[int] = None
    parent_id: Optional[int] = None
    number: Optional[str] = None

    def transfer_key(self) -> TransferKey:
        """Key under which this leg waits for its peer."""
        return (
            self.account_id,
            self.transfer_account_id,
            self.date,
            self.amount,
            self.category_id,
            self.comment or "",
        )

    def peer_transfer_key(self) -> TransferKey:
        """Key the opposite leg of this transfer is waiting under."""
        return (
            self.transfer_account_id,
            self.account_id,
            self.date,
            -self.amount,
            self.category_id,
            self.comment or "",
        )

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for database storage."""
        return {
            "_id": self.id,
            "comment": self.comment,
            "date": self.date,
            "value_date": self.value_date,
            "amount": self.amount,
            "cat_id": self.category_id,
            "account_id": self.account_id,
            "payee_id": self.payee_id,
            "transfer_peer": self.transfer_peer,
            "transfer_account": self.transfer_account_id,
            "parent_id": self.parent_id,
            "cr_status": self.cr_status.value,
            "number": self.number,
            "uuid": self.uuid,
        }
