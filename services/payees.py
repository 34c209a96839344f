"""Payee service for database operations."""

from typing import List, Optional
from models.payee import Payee


class PayeeService:
    """Service for managing payees."""

    def __init__(self, db_manager):
        """Initialize the payee service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Payee]:
        """Get all payees, ordered by id."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT _id, name FROM payee ORDER BY _id")
            return [Payee(id=row[0], name=row[1]) for row in cursor.fetchall()]

    def find_by_name(self, name: str) -> Optional[Payee]:
        """Get a single payee by name.

        Args:
            name: The payee name to find.

        Returns:
            Payee object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT _id, name FROM payee WHERE name = ?", (name,)
            )
            row = cursor.fetchone()

            if row:
                return Payee(id=row[0], name=row[1])
            return None

    def create(self, payee: Payee) -> Payee:
        """Insert a new payee.

        Returns:
            The same Payee object with id populated.

        Raises:
            sqlite3.IntegrityError: If a payee with the same name exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO payee (name, name_normalized) VALUES (?, ?)",
                (payee.name, payee.name_normalized),
            )
            conn.commit()
            payee.id = cursor.lastrowid

        return payee

    def delete_all(self) -> int:
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM payee")
            conn.commit()
            return cursor.rowcount
