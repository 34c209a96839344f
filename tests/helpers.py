"""Helper utilities for tests."""

from pathlib import Path
import sqlite3

from ingestion.sink import RecordSink
from models.account import Account
from models.category import Category
from models.payee import Payee
from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def qif(*lines: str) -> str:
    """Join QIF lines into a document."""
    return "\n".join(lines) + "\n"


class RecordingSink(RecordSink):
    """Record sink keeping everything in memory.

    Ids are assigned from one counter across all record types.
    """

    def __init__(self):
        self.records = {}
        self.updates = []
        self._next_id = 1

    def insert(self, entity) -> int:
        record_id = self._next_id
        self._next_id += 1
        self.records[record_id] = entity
        return record_id

    def update(self, record_id, changes) -> None:
        self.updates.append((record_id, dict(changes)))
        for name, value in changes.items():
            setattr(self.records[record_id], name, value)

    def of_type(self, cls):
        return [r for r in self.records.values() if isinstance(r, cls)]

    @property
    def accounts(self):
        return self.of_type(Account)

    @property
    def categories(self):
        return self.of_type(Category)

    @property
    def payees(self):
        return self.of_type(Payee)

    @property
    def transactions(self):
        return self.of_type(Transaction)
