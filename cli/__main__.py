#!/usr/bin/env python3
"""
qifledger CLI - convert QIF exports into a personal-finance ledger database.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    import       Import a QIF file (replaces the ledger contents)
    accounts     Inspect imported accounts
    categories   Inspect imported categories
    migrate      Database migrations

Examples:
    python -m cli import export.qif
    python -m cli import export.qif --output ~/BACKUP.zip
    python -m cli accounts list
    python -m cli categories show Food:Groceries
    python -m cli migrate status
"""

import sys
import argparse
from cli import accounts, categories, imports, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="qifledger - QIF to personal-finance ledger converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only print warnings and errors"
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    imports.setup_parser(subparsers)
    accounts.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config, quiet=args.quiet)

            # migrate works on the raw database, everything else through services
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
