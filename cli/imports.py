#!/usr/bin/env python3

import sys
from pathlib import Path

from cli.migrate import apply_pending
from ingestion import QifImportError, builder_from_config, ingest
from logger import get_logger

logger = get_logger()


def cmd_import(args, services):
    """Import a QIF file into the ledger database, replacing its contents.

    Args:
        args: Parsed command-line arguments with qif_file, output and no_archive
        services: Services container for the ledger database
    """
    config = services.config

    qif_path = Path(args.qif_file)
    if not qif_path.exists():
        logger.error(f"File not found: {args.qif_file}")
        logger.info(
            "Export a single QIF file with all accounts, all transactions and "
            "splits enabled, then pass its path to this command."
        )
        sys.exit(1)

    write_archive = config.archive_enabled and not args.no_archive
    archive_path = Path(args.output) if args.output else config.archive_path
    if write_archive and archive_path.exists():
        logger.error(
            f"Output file already exists, remove it first (it is never overwritten): "
            f"{archive_path}"
        )
        sys.exit(1)

    applied = apply_pending(services.db_manager)
    if applied:
        logger.info(f"Applied {len(applied)} migration(s)")

    logger.info(f"Clearing ledger database: {services.db_manager.get_db_path()}")
    services.clear_ledger()

    logger.info(f"Importing {qif_path}")
    logger.info("-" * 80)
    try:
        with open(qif_path, "r", encoding=args.encoding or config.encoding) as f:
            result = ingest(f, services.record_sink(), builder_from_config(config))
    except QifImportError as e:
        logger.error(f"Invalid QIF file: {e}")
        sys.exit(1)

    logger.info(f"Accounts:     {result.accounts}")
    logger.info(f"Categories:   {result.categories}")
    logger.info(f"Payees:       {result.payees}")
    logger.info(f"Transactions: {result.transactions}")

    if not result.ok:
        logger.error(
            "All data was converted but some transfers have no matching "
            "transaction in the QIF file:"
        )
        for leg in result.unreconciled:
            logger.error(
                f"  transaction {leg.id}: account {leg.account_id} -> "
                f"{leg.transfer_account_id}, amount {leg.amount}"
            )
        sys.exit(1)

    if write_archive:
        services.backups.write(services.db_manager.get_db_path(), archive_path)
        logger.info(f"✓ Import complete. Restore {archive_path} in the app.")
    else:
        logger.info("✓ Import complete.")


def setup_parser(subparsers):
    """Setup import subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "import",
        help="Import a QIF file",
        description="Convert a QIF export into the ledger database and a restore archive",
    )
    parser.add_argument("qif_file", help="Path to the QIF file")
    parser.add_argument(
        "--output",
        "-o",
        help="Restore archive to write (default: archive_dir/filename from config)",
    )
    parser.add_argument(
        "--encoding", help="Text encoding of the QIF file (default from config)"
    )
    parser.add_argument(
        "--no-archive",
        action="store_true",
        help="Only fill the database, do not write a restore archive",
    )
    parser.set_defaults(func=cmd_import)
