#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def _format_amount(minor_units: int) -> str:
    return f"{minor_units / 100:,.2f}"


def cmd_list(args, services):
    """List all accounts in the database."""
    accounts = services.accounts.find_all()

    if not accounts:
        logger.info("No accounts found.")
        return

    logger.info("\nAccounts:")
    logger.info("=" * 80)
    for account in accounts:
        transactions = services.transactions.find_by_account(account.id)
        balance = sum(t.amount for t in transactions if t.parent_id is None)

        logger.info(f"ID: {account.id}")
        logger.info(f"Label: {account.label}")
        logger.info(f"Type: {account.type.value}")
        if account.description:
            logger.info(f"Description: {account.description}")
        logger.info(f"Transactions: {len(transactions)}")
        logger.info(f"Balance: {_format_amount(balance)} {account.currency}")
        logger.info("-" * 80)

    logger.info(f"\nTotal accounts: {len(accounts)}")


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="Inspect accounts",
        description="List imported financial accounts",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    list_parser = accounts_subparsers.add_parser("list", help="List all accounts")
    list_parser.set_defaults(func=cmd_list)
