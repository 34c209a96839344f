"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.accounts import AccountService
        from services.backups import BackupService
        from services.categories import CategoryService
        from services.payees import PayeeService
        from services.transactions import TransactionService

        self.accounts = AccountService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.payees = PayeeService(self.db_manager)
        self.transactions = TransactionService(self.db_manager)
        self.backups = BackupService(config)

    def clear_ledger(self) -> None:
        """Delete all imported records, children before the rows they reference."""
        self.transactions.delete_all()
        self.payees.delete_all()
        self.categories.delete_all()
        self.accounts.delete_all()

    def record_sink(self):
        """Create a record sink that writes through these services."""
        from services.ledger import LedgerSink

        return LedgerSink(self)
