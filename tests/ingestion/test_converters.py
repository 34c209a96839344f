import pytest
from dateutil import tz

from ingestion.converters import (
    convert_account_type,
    convert_cleared_status,
    parse_amount,
    parse_date,
    resolve_timezone,
)
from ingestion.errors import UnsupportedValueError
from models.account import AccountType
from models.transaction import ClearedStatus

JAN_2_2024_UTC = 1704153600


class TestConvertAccountType:
    """Tests for convert_account_type function."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("Cash", AccountType.CASH),
            ("Bank", AccountType.BANK),
            ("CCard", AccountType.CCARD),
            ("Oth L", AccountType.LIABILITY),
            ("Oth A", AccountType.ASSET),
            ("Invst", AccountType.ASSET),
        ],
    )
    def test_known_codes(self, code, expected):
        """Test mapping each supported QIF account type."""
        assert convert_account_type(code) == expected

    def test_missing_code_uses_default(self):
        """Test that accounts without a type get the default type."""
        assert convert_account_type(None) == AccountType.CASH
        assert convert_account_type("") == AccountType.CASH
        assert convert_account_type(None, AccountType.BANK) == AccountType.BANK

    def test_invoice_is_rejected(self):
        """Test that invoice accounts are not supported."""
        with pytest.raises(UnsupportedValueError, match="Invoice"):
            convert_account_type("Invoice")

    def test_unknown_code_is_rejected(self):
        with pytest.raises(UnsupportedValueError, match="Unknown account type"):
            convert_account_type("Port")


class TestConvertClearedStatus:
    """Tests for convert_cleared_status function."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            (None, ClearedStatus.UNRECONCILED),
            ("", ClearedStatus.UNRECONCILED),
            ("*", ClearedStatus.CLEARED),
            ("c", ClearedStatus.CLEARED),
            ("X", ClearedStatus.RECONCILED),
            ("R", ClearedStatus.RECONCILED),
        ],
    )
    def test_codes(self, code, expected):
        """Test mapping each cleared-status code."""
        assert convert_cleared_status(code, AccountType.BANK) == expected

    def test_cash_accounts_are_always_unreconciled(self):
        """Test that cash account transactions ignore their cleared status."""
        assert (
            convert_cleared_status("R", AccountType.CASH)
            == ClearedStatus.UNRECONCILED
        )
        assert (
            convert_cleared_status("*", AccountType.CASH)
            == ClearedStatus.UNRECONCILED
        )

    def test_unknown_code_is_rejected(self):
        with pytest.raises(UnsupportedValueError, match="cleared status"):
            convert_cleared_status("V", AccountType.BANK)

    def test_unknown_code_is_rejected_for_cash_accounts_too(self):
        """Test that cash accounts still reject invalid codes."""
        with pytest.raises(UnsupportedValueError):
            convert_cleared_status("?", AccountType.CASH)


class TestParseAmount:
    """Tests for parse_amount function."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0.1", 10),
            ("19.99", 1999),
            ("-9.50", -950),
            ("12.345", 1235),
            ("-5.005", -501),
            ("100", 10000),
            ("1,234.56", 123456),
            (" 42.00 ", 4200),
            ("-0.01", -1),
        ],
    )
    def test_amounts(self, value, expected):
        """Test converting amounts to minor units, rounding half away from zero."""
        assert parse_amount(value) == expected

    def test_result_is_int(self):
        assert isinstance(parse_amount("19.99"), int)

    @pytest.mark.parametrize("value", ["", "abc", "NaN", "Infinity", "1.2.3"])
    def test_invalid_amounts(self, value):
        """Test that non-numeric amounts are rejected."""
        with pytest.raises(UnsupportedValueError, match="Invalid amount"):
            parse_amount(value)


class TestParseDate:
    """Tests for parse_date function."""

    def test_month_day_year(self):
        """Test parsing a month/day/year date to midnight UTC."""
        assert parse_date("01/02/2024") == JAN_2_2024_UTC

    def test_short_forms(self):
        assert parse_date("1/2/2024") == JAN_2_2024_UTC
        assert parse_date("1/2/24") == JAN_2_2024_UTC

    def test_quicken_apostrophe_year(self):
        """Test parsing the Quicken apostrophe year form."""
        assert parse_date("1/ 2'24") == JAN_2_2024_UTC
        assert parse_date("1/2'2024") == JAN_2_2024_UTC

    def test_timezone_midnight(self):
        """Test that midnight is taken in the given timezone."""
        berlin = tz.gettz("Europe/Berlin")

        assert parse_date("01/02/2024", berlin) == JAN_2_2024_UTC - 3600

    @pytest.mark.parametrize("value", ["", "not a date", "13/45/2024"])
    def test_invalid_dates(self, value):
        """Test that unrecognizable dates are rejected."""
        with pytest.raises(UnsupportedValueError, match="Invalid date"):
            parse_date(value)

    @pytest.mark.parametrize("value", ["13/01/2024", "31/12/2024", "2/30/2024"])
    def test_day_first_dates_are_rejected(self, value):
        """Test that a day in the month position is not silently swapped."""
        with pytest.raises(UnsupportedValueError, match="Invalid date"):
            parse_date(value)

    @pytest.mark.parametrize("value", ["1/2", "01/02/", "2024-01-02", "1/2/202"])
    def test_incomplete_and_iso_dates_are_rejected(self, value):
        """Test that dates without a year or in other layouts are rejected."""
        with pytest.raises(UnsupportedValueError, match="Invalid date"):
            parse_date(value)


class TestResolveTimezone:
    """Tests for resolve_timezone function."""

    def test_default_is_utc(self):
        assert resolve_timezone(None) == tz.UTC
        assert resolve_timezone("") == tz.UTC

    def test_named_zone(self):
        assert resolve_timezone("Europe/Berlin") is not None

    def test_unknown_zone(self):
        with pytest.raises(UnsupportedValueError):
            resolve_timezone("Mars/Olympus_Mons")
