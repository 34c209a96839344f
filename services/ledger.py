"""Record sink writing imported QIF records to the SQLite ledger."""

from typing import Any, Dict

from ingestion.sink import Record, RecordSink
from models.account import Account
from models.category import Category
from models.payee import Payee
from models.transaction import Transaction


class LedgerSink(RecordSink):
    """Routes inserted records to the service owning their table.

    Args:
        services: Services container holding the per-table services.
    """

    def __init__(self, services):
        self.services = services

    def insert(self, entity: Record) -> int:
        match entity:
            case Account():
                return self.services.accounts.create(entity).id
            case Category():
                return self.services.categories.create(entity).id
            case Payee():
                return self.services.payees.create(entity).id
            case Transaction():
                return self.services.transactions.create(entity).id
            case _:
                raise TypeError(f"Cannot store {type(entity).__name__} records")

    def update(self, record_id: int, changes: Dict[str, Any]) -> None:
        if not self.services.transactions.update(record_id, changes):
            raise LookupError(f"Transaction {record_id} not found")
