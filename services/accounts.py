"""Account service for database operations."""

from typing import List, Optional
from models.account import Account, AccountType

_ACCOUNT_SELECT_FIELDS = (
    "_id, label, type, description, currency, sort_key, uuid, opening_balance"
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db_manager):
        """Initialize the account service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Account]:
        """Get all accounts from the database.

        Returns:
            List of Account objects, ordered by sort key.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts ORDER BY sort_key, _id"
            )
            return [self._row_to_account(row) for row in cursor.fetchall()]

    def find(self, account_id: int) -> Optional[Account]:
        """Get a single account by ID.

        Args:
            account_id: The account ID to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts WHERE _id = ?",
                (account_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_account(row)
            return None

    def find_by_label(self, label: str) -> Optional[Account]:
        """Get a single account by label.

        Args:
            label: The account label to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM accounts WHERE label = ?",
                (label,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_account(row)
            return None

    def create(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: Account to insert; its id is ignored.

        Returns:
            The same Account object with id populated.

        Raises:
            sqlite3.IntegrityError: If an account with the same label exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO accounts (label, opening_balance, description, currency,
                                      type, last_used, sort_key, uuid, criterion)
                VALUES (?, ?, ?, ?, ?, 0, ?, ?, 0)
                """,
                (
                    account.label,
                    account.opening_balance,
                    account.description,
                    account.currency,
                    account.type.value,
                    account.sort_key,
                    account.uuid,
                ),
            )
            conn.commit()
            account.id = cursor.lastrowid

        return account

    def delete_all(self) -> int:
        """Delete every account.

        Returns:
            Number of accounts deleted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM accounts")
            conn.commit()
            return cursor.rowcount

    def _row_to_account(self, row: tuple) -> Account:
        return Account(
            id=row[0],
            label=row[1],
            type=AccountType(row[2]),
            description=row[3],
            currency=row[4],
            sort_key=row[5],
            uuid=row[6],
            opening_balance=row[7],
        )
