"""Base interface for the store the importer writes records to."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union

from models.account import Account
from models.category import Category
from models.payee import Payee
from models.transaction import Transaction

Record = Union[Account, Category, Payee, Transaction]


class RecordSink(ABC):
    """Abstract base class for append-only record stores.

    The importer awaits each call before reading the next QIF line, because
    later lines may refer to the id an insert just assigned.
    """

    @abstractmethod
    def insert(self, entity: Record) -> int:
        """Store a new record.

        Args:
            entity: Account, category, payee or transaction to store.

        Returns:
            The id assigned to the record. Ids are never reused.
        """
        pass

    @abstractmethod
    def update(self, record_id: int, changes: Dict[str, Any]) -> None:
        """Patch columns of a transaction inserted earlier.

        Args:
            record_id: Id returned by insert().
            changes: Column name to new value.
        """
        pass
