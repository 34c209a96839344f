from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Account types understood by the ledger schema."""

    CASH = "CASH"
    BANK = "BANK"
    CCARD = "CCARD"
    LIABILITY = "LIABILITY"
    ASSET = "ASSET"


@dataclass
class Account:
    id: Optional[int]  # assigned by the record sink on insert
    label: str  # unique, as named in the QIF file
    type: AccountType
    description: Optional[str]
    currency: str
    sort_key: int  # insertion order, starting at 1
    uuid: str
    opening_balance: int = 0  # minor units, always zero for QIF imports

    def to_dict(self) -> dict:
        """Convert account to dictionary for database storage."""
        return {
            "_id": self.id,
            "label": self.label,
            "opening_balance": self.opening_balance,
            "description": self.description,
            "currency": self.currency,
            "type": self.type.value,
            "last_used": 0,
            "sort_key": self.sort_key,
            "uuid": self.uuid,
            "criterion": 0,
        }
