"""State shared by the passes of one QIF import run."""

from collections import Counter
from typing import Any, Dict, Optional

from ingestion.builder import EntityBuilder
from ingestion.identity import IdentityResolver
from ingestion.reconciler import TransferReconciler
from ingestion.sink import Record, RecordSink
from models.account import Account
from models.category import Category
from models.payee import Payee

_TABLES = {
    Account: "accounts",
    Category: "categories",
    Payee: "payees",
}


class ImportContext:
    """Namespaces, waiting transfer legs and the record sink of one run.

    A context lives for exactly one import; nothing in it is shared between runs.

    Args:
        sink: Where records are written.
        builder: Entity builder; a default one is created when omitted.
    """

    def __init__(self, sink: RecordSink, builder: Optional[EntityBuilder] = None):
        self.sink = sink
        self.builder = builder or EntityBuilder()
        self.resolver = IdentityResolver(self)
        self.reconciler = TransferReconciler(self)
        self.counts: Counter = Counter()

    def insert(self, entity: Record) -> int:
        """Insert an entity through the sink and record its new id on it."""
        entity.id = self.sink.insert(entity)
        self.counts[_TABLES.get(type(entity), "transactions")] += 1
        return entity.id

    def update(self, record_id: int, changes: Dict[str, Any]) -> None:
        self.sink.update(record_id, changes)
