"""Conversions from QIF field encodings to ledger values."""

import re
from datetime import tzinfo
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz

from ingestion.errors import UnsupportedValueError
from models.account import AccountType
from models.transaction import ClearedStatus

_ACCOUNT_TYPES = {
    "Cash": AccountType.CASH,
    "Bank": AccountType.BANK,
    "CCard": AccountType.CCARD,
    "Oth L": AccountType.LIABILITY,
    "Oth A": AccountType.ASSET,
    "Invst": AccountType.ASSET,
}

_CLEARED_STATUSES = {
    "*": ClearedStatus.CLEARED,
    "c": ClearedStatus.CLEARED,
    "X": ClearedStatus.RECONCILED,
    "R": ClearedStatus.RECONCILED,
}

# Significant digits kept before an amount is cut to whole minor units
AMOUNT_PRECISION = 12

# month/day/year; Quicken writes the year after an apostrophe
_QIF_DATE = re.compile(r"^\s*(\d{1,2})\s*/\s*(\d{1,2})\s*[/']\s*(\d{4}|\d{2})\s*$")


def convert_account_type(
    code: Optional[str], default: AccountType = AccountType.CASH
) -> AccountType:
    """Map a QIF account type code (the "T" field of an account) to AccountType.

    Raises:
        UnsupportedValueError: For "Invoice" accounts and unknown codes.
    """
    if not code:
        return default

    code = code.strip()
    if code == "Invoice":
        raise UnsupportedValueError(
            "Invoice accounts are not supported: no matching account type"
        )

    try:
        return _ACCOUNT_TYPES[code]
    except KeyError:
        raise UnsupportedValueError(f"Unknown account type: {code}") from None


def convert_cleared_status(
    code: Optional[str], account_type: Optional[AccountType] = None
) -> ClearedStatus:
    """Map a QIF cleared-status code (the "C" field) to ClearedStatus.

    Transactions of cash accounts are always unreconciled.

    Raises:
        UnsupportedValueError: If the code is not one of "*", "c", "X", "R".
    """
    if not code:
        status = ClearedStatus.UNRECONCILED
    else:
        try:
            status = _CLEARED_STATUSES[code.strip()]
        except KeyError:
            raise UnsupportedValueError(f"Unknown cleared status: {code}") from None

    if account_type == AccountType.CASH:
        return ClearedStatus.UNRECONCILED
    return status


def parse_amount(value: str) -> int:
    """Convert a textual amount to signed integer minor units.

    The value is scaled by 100 and rounded to AMOUNT_PRECISION significant
    digits before being reduced to a whole number, half away from zero:
    "12.345" -> 1235, "-9.50" -> -950, "1,234.56" -> 123456.

    Raises:
        UnsupportedValueError: If the value is not a finite number.
    """
    text = value.strip().replace(",", "")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise UnsupportedValueError(f"Invalid amount: {value!r}") from None

    if not amount.is_finite():
        raise UnsupportedValueError(f"Invalid amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        minor_units = +(amount * 100)

    return int(minor_units.to_integral_value(rounding=ROUND_HALF_UP))


def parse_date(value: str, tzinfo: Optional[tzinfo] = None) -> int:
    """Convert a QIF date (month/day/year) to epoch seconds at local midnight.

    Accepts "01/02/2024", "1/2/24" and the Quicken form "1/ 2'24". Day-first,
    ISO and year-less dates are rejected rather than guessed at.

    Args:
        value: Date text from a "D" field.
        tzinfo: Timezone whose midnight is used; UTC when omitted.

    Raises:
        UnsupportedValueError: If the text is not a valid month/day/year date.
    """
    match = _QIF_DATE.match(value)
    if not match:
        raise UnsupportedValueError(f"Invalid date: {value!r}")

    month, day, year = match.groups()
    try:
        parsed = date_parser.parse(
            f"{month}/{day}/{year}", dayfirst=False, yearfirst=False
        )
    except (ValueError, OverflowError):
        raise UnsupportedValueError(f"Invalid date: {value!r}") from None

    # dateutil swaps fields it cannot place, e.g. month 13
    if (parsed.month, parsed.day) != (int(month), int(day)):
        raise UnsupportedValueError(f"Invalid date: {value!r}")

    midnight = parsed.replace(
        hour=0, minute=0, second=0, microsecond=0, tzinfo=tzinfo or tz.UTC
    )
    return int(midnight.timestamp())


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve a configured timezone name, falling back to UTC."""
    if not name:
        return tz.UTC
    zone = tz.gettz(name)
    if zone is None:
        raise UnsupportedValueError(f"Unknown timezone: {name}")
    return zone
