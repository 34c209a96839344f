"""QIF import: the Registry Pass followed by the Ledger Pass."""

from dataclasses import dataclass, field
from typing import List, Optional, TextIO, Union

from config import Config
from ingestion.builder import EntityBuilder
from ingestion.context import ImportContext
from ingestion.converters import resolve_timezone
from ingestion.errors import UnreconciledTransferError
from ingestion.ledger import LedgerPass
from ingestion.lines import iter_lines
from ingestion.registry import RegistryPass
from ingestion.sink import RecordSink
from logger import get_logger
from models.account import AccountType
from models.transaction import Transaction

logger = get_logger()


@dataclass
class ImportResult:
    """Outcome of a QIF import.

    Attributes:
        accounts: Number of accounts inserted.
        categories: Number of categories inserted.
        payees: Number of payees inserted.
        transactions: Number of transaction records inserted, split legs included.
        unreconciled: Transfer legs that never met their peer.
    """

    accounts: int = 0
    categories: int = 0
    payees: int = 0
    transactions: int = 0
    unreconciled: List[Transaction] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.unreconciled

    def raise_for_unreconciled(self) -> None:
        """Raise UnreconciledTransferError if any transfer leg is unmatched."""
        if self.unreconciled:
            raise UnreconciledTransferError(self.unreconciled)


def builder_from_config(config: Config) -> EntityBuilder:
    """Create an EntityBuilder using the [import] settings of a Config."""
    return EntityBuilder(
        currency=config.default_currency,
        default_account_type=AccountType(config.default_account_type),
        tzinfo=resolve_timezone(config.timezone),
    )


def ingest(
    source: Union[str, TextIO],
    sink: RecordSink,
    builder: Optional[EntityBuilder] = None,
) -> ImportResult:
    """Import a QIF document into a record sink.

    Fatal errors abort the import and leave whatever was already written in the
    sink. Unmatched transfers do not abort; they are returned in the result.

    Args:
        source: QIF text, or a text stream to read it from.
        sink: Where accounts, categories, payees and transactions are written.
        builder: Entity builder to use; defaults to EUR and CASH accounts in UTC.

    Returns:
        ImportResult with the number of records written per table.

    Raises:
        QifImportError: Any fatal import error (see ingestion.errors).
    """
    text = source if isinstance(source, str) else source.read()
    lines = list(iter_lines(text))
    logger.info(f"Read {len(lines)} QIF lines")

    context = ImportContext(sink, builder)
    RegistryPass(context).run(lines)
    LedgerPass(context).run(lines)

    unreconciled = context.reconciler.unmatched()
    for leg in unreconciled:
        logger.warning(
            f"Transfer {leg.id} (account {leg.account_id} -> {leg.transfer_account_id}, "
            f"amount {leg.amount}) has no matching transaction"
        )

    result = ImportResult(
        accounts=context.counts["accounts"],
        categories=context.counts["categories"],
        payees=context.counts["payees"],
        transactions=context.counts["transactions"],
        unreconciled=unreconciled,
    )
    logger.info(
        f"Imported {result.accounts} account(s), {result.categories} category(ies), "
        f"{result.payees} payee(s), {result.transactions} transaction(s)"
    )
    return result
