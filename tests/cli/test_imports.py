import argparse
import logging
import zipfile

import pytest

from cli.imports import cmd_import, setup_parser
from services.base import Services
from tests.helpers import qif

EXPORT = qif(
    "!Account",
    "NChecking",
    "TBank",
    "^",
    "!Type:Bank",
    "D01/02/2024",
    "T-100.00",
    "L[Savings]",
    "^",
    "D01/05/2024",
    "T-9.50",
    "PMarket",
    "LFood:Groceries",
    "^",
    "!Account",
    "NSavings",
    "TBank",
    "^",
    "!Type:Bank",
    "D01/02/2024",
    "T100.00",
    "L[Checking]",
    "^",
)


@pytest.fixture
def qif_file(tmp_path):
    path = tmp_path / "export.qif"
    path.write_text(EXPORT, encoding="utf-8")
    return path


def import_args(qif_file, output=None, no_archive=False, encoding=None):
    return argparse.Namespace(
        qif_file=str(qif_file), output=output, no_archive=no_archive, encoding=encoding
    )


class TestCmdImport:
    """Tests for the import command."""

    def test_import_fills_ledger(self, services, qif_file):
        """Test that a valid file is imported into the database."""
        cmd_import(import_args(qif_file), services)

        assert [a.label for a in services.accounts.find_all()] == ["Checking", "Savings"]
        assert len(services.transactions.find_all()) == 3
        assert services.categories.find_by_path("Food:Groceries") is not None

    def test_import_replaces_previous_contents(self, services, qif_file):
        """Test that importing twice does not duplicate records."""
        cmd_import(import_args(qif_file), services)
        cmd_import(import_args(qif_file), services)

        assert len(services.accounts.find_all()) == 2
        assert len(services.transactions.find_all()) == 3
        assert len(services.payees.find_all()) == 1

    def test_missing_file(self, services, tmp_path):
        """Test that a missing QIF file exits with an error."""
        with pytest.raises(SystemExit) as exc_info:
            cmd_import(import_args(tmp_path / "missing.qif"), services)

        assert exc_info.value.code == 1

    def test_invalid_file(self, services, tmp_path, caplog):
        """Test that a malformed QIF file exits with the offending line."""
        path = tmp_path / "broken.qif"
        path.write_text(qif("!Account", "NChecking", "NAgain", "^"))

        with caplog.at_level(logging.ERROR, logger="qifledger"):
            with pytest.raises(SystemExit) as exc_info:
                cmd_import(import_args(path), services)

        assert exc_info.value.code == 1
        assert "Line 3" in caplog.text

    def test_unmatched_transfer_exits_with_error(self, services, tmp_path, caplog):
        """Test that an unmatched transfer is reported but the data is kept."""
        path = tmp_path / "unmatched.qif"
        path.write_text(
            qif(
                "!Account",
                "NChecking",
                "^",
                "!Type:Cash",
                "D01/02/2024",
                "T-100.00",
                "L[Savings]",
                "^",
                "!Account",
                "NSavings",
                "^",
            )
        )

        with caplog.at_level(logging.ERROR, logger="qifledger"):
            with pytest.raises(SystemExit) as exc_info:
                cmd_import(import_args(path), services)

        assert exc_info.value.code == 1
        assert "no matching transaction" in caplog.text
        assert len(services.transactions.find_all()) == 1


class TestCmdImportArchive:
    """Tests for restore archives written by the import command."""

    @pytest.fixture
    def file_services(self, test_config):
        test_config.archive_enabled = True
        return Services(test_config)

    def test_writes_archive(self, file_services, qif_file):
        """Test that a successful import writes the restore archive."""
        cmd_import(import_args(qif_file), file_services)

        archive_path = file_services.config.archive_path
        with zipfile.ZipFile(archive_path) as archive:
            assert "BACKUP" in archive.namelist()

    def test_output_option(self, file_services, qif_file, tmp_path):
        """Test that --output overrides the configured archive path."""
        output = tmp_path / "custom.zip"

        cmd_import(import_args(qif_file, output=str(output)), file_services)

        assert output.exists()
        assert not file_services.config.archive_path.exists()

    def test_no_archive_option(self, file_services, qif_file):
        """Test that --no-archive only fills the database."""
        cmd_import(import_args(qif_file, no_archive=True), file_services)

        assert not file_services.config.archive_path.exists()
        assert len(file_services.accounts.find_all()) == 2

    def test_existing_archive_aborts_before_import(self, file_services, qif_file):
        """Test that an existing archive stops the import before touching the database."""
        archive_path = file_services.config.archive_path
        archive_path.parent.mkdir(parents=True)
        archive_path.write_bytes(b"old")

        with pytest.raises(SystemExit):
            cmd_import(import_args(qif_file), file_services)

        assert archive_path.read_bytes() == b"old"
        assert not file_services.config.db_path.exists()


class TestSetupParser:
    """Tests for the import argument parser."""

    def test_arguments(self):
        """Test parsing the import command line."""
        parser = argparse.ArgumentParser()
        setup_parser(parser.add_subparsers(dest="command"))

        args = parser.parse_args(
            ["import", "export.qif", "-o", "out.zip", "--encoding", "latin-1", "--no-archive"]
        )

        assert args.qif_file == "export.qif"
        assert args.output == "out.zip"
        assert args.encoding == "latin-1"
        assert args.no_archive is True
        assert args.func is cmd_import
