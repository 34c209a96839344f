"""Transaction service for database operations."""

from typing import Any, Dict, List, Optional
from models.transaction import ClearedStatus, Transaction, TransactionKind

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """_id, account_id, date, value_date, amount, cr_status, uuid,
       comment, cat_id, payee_id, transfer_account, transfer_peer, parent_id, number"""

_TRANSACTION_INSERT_FIELDS = """comment, date, value_date, amount, cat_id, account_id,
    payee_id, transfer_peer, transfer_account, parent_id, cr_status, number, uuid"""

# Automatically generate placeholders from field count
_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_INSERT_FIELDS.split(',')))})"
)

# Columns update() may change, keyed by the name callers use
_UPDATABLE_COLUMNS = {
    "transfer_peer": "transfer_peer",
    "comment": "comment",
    "cr_status": "cr_status",
    "category_id": "cat_id",
    "payee_id": "payee_id",
}


class TransactionService:
    """Service for managing transactions, transfers and split legs."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, transaction: Transaction) -> Transaction:
        """Insert a single transaction.

        Args:
            transaction: Transaction object to insert; its id is ignored.

        Returns:
            The same Transaction object with id populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                (
                    transaction.comment,
                    transaction.date,
                    transaction.value_date,
                    transaction.amount,
                    transaction.category_id,
                    transaction.account_id,
                    transaction.payee_id,
                    transaction.transfer_peer,
                    transaction.transfer_account_id,
                    transaction.parent_id,
                    transaction.cr_status.value,
                    transaction.number,
                    transaction.uuid,
                ),
            )
            conn.commit()
            transaction.id = cursor.lastrowid

        return transaction

    def update(self, transaction_id: int, changes: Dict[str, Any]) -> bool:
        """Update columns of a single transaction.

        Args:
            transaction_id: ID of the transaction to update.
            changes: Mapping of field name to new value. Supported fields:
                     'transfer_peer', 'comment', 'cr_status', 'category_id', 'payee_id'

        Returns:
            True if a transaction was updated, False if the ID was not found.

        Raises:
            ValueError: If changes is empty or names unsupported fields.
        """
        if not changes:
            raise ValueError("changes cannot be empty")

        invalid_fields = set(changes) - set(_UPDATABLE_COLUMNS)
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        fields = list(changes)
        set_clause = ", ".join(f"{_UPDATABLE_COLUMNS[name]} = ?" for name in fields)
        values = [
            changes[name].value
            if isinstance(changes[name], ClearedStatus)
            else changes[name]
            for name in fields
        ]

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"UPDATE transactions SET {set_clause} WHERE _id = ?",
                (*values, transaction_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions WHERE _id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_all(self) -> List[Transaction]:
        """Get all transactions in insertion order."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions ORDER BY _id"
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_by_account(self, account_id: int) -> List[Transaction]:
        """Get all transactions of an account, split legs included.

        Args:
            account_id: The account ID to filter by.

        Returns:
            List of Transaction objects ordered by date, then insertion order.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE account_id = ?
                ORDER BY date, _id
                """,
                (account_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def find_splits(self, parent_id: int) -> List[Transaction]:
        """Get the split legs of a split transaction, in insertion order."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE parent_id = ?
                ORDER BY _id
                """,
                (parent_id,),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def delete_all(self) -> int:
        """Delete every transaction.

        Returns:
            Number of transactions deleted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM transactions")
            conn.commit()
            return cursor.rowcount

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        is_transfer = row[10] is not None
        is_split = row[12] is not None
        if is_split:
            kind = TransactionKind.SPLIT_TRANSFER if is_transfer else TransactionKind.SPLIT
        else:
            kind = TransactionKind.TRANSFER if is_transfer else TransactionKind.TRANSACTION

        return Transaction(
            id=row[0],
            kind=kind,
            account_id=row[1],
            date=row[2],
            value_date=row[3],
            amount=row[4],
            cr_status=ClearedStatus(row[5]),
            uuid=row[6],
            comment=row[7],
            category_id=row[8],
            payee_id=row[9],
            transfer_account_id=row[10],
            transfer_peer=row[11],
            parent_id=row[12],
            number=row[13],
        )
