"""Construction of ledger entities from QIF drafts."""

import random
import uuid
from datetime import tzinfo
from typing import Optional, Set, Union

from dateutil import tz

from ingestion.converters import (
    convert_account_type,
    convert_cleared_status,
    parse_amount,
    parse_date,
)
from ingestion.drafts import Draft, EntryKind
from ingestion.errors import MalformedRecordError
from models.account import Account, AccountType
from models.category import PATH_SEPARATOR, Category
from models.payee import Payee
from models.transaction import Transaction

Entity = Union[Account, Category, Payee, Transaction]

# Upper bound (exclusive) of the random display color given to root categories
_COLOR_RANGE = 255 * 255 * 255


class IdentifierPool:
    """Issues UUIDs that are distinct from every UUID issued before by this pool."""

    def __init__(self):
        self._issued: Set[str] = set()

    def issue(self) -> str:
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def __len__(self) -> int:
        return len(self._issued)


class EntityBuilder:
    """Turns drafts into entities ready to be inserted.

    Args:
        identifiers: Pool used to give every entity its uuid.
        currency: Currency assigned to every account.
        default_account_type: Type used when an account has no "T" field.
        tzinfo: Timezone whose midnight QIF dates refer to.
        rng: Random source for category colors.
    """

    def __init__(
        self,
        identifiers: Optional[IdentifierPool] = None,
        currency: str = "EUR",
        default_account_type: AccountType = AccountType.CASH,
        tzinfo: Optional[tzinfo] = None,
        rng: Optional[random.Random] = None,
    ):
        self.identifiers = identifiers or IdentifierPool()
        self.currency = currency
        self.default_account_type = default_account_type
        self.tzinfo = tzinfo or tz.UTC
        self.rng = rng or random.Random()

    def build(
        self, draft: Draft, account_type: Optional[AccountType] = None
    ) -> Entity:
        """Build the entity described by a draft.

        Args:
            draft: A draft whose kind is set.
            account_type: Type of the owning account, for transaction drafts.

        Raises:
            MalformedRecordError: If the kind is unset or a mandatory field is missing.
            UnsupportedValueError: If a field value cannot be converted.
        """
        match draft.kind:
            case EntryKind.ACCOUNT:
                return self._build_account(draft)
            case EntryKind.CATEGORY:
                return self._build_category(draft)
            case EntryKind.PAYEE:
                return self._build_payee(draft)
            case EntryKind.TRANSACTION | EntryKind.TRANSFER:
                return self._build_annotation(draft, account_type)
            case EntryKind.SPLIT | EntryKind.SPLIT_TRANSFER:
                if draft.parent_id is None:
                    raise MalformedRecordError("Split is missing its parent transaction")
                return self._build_annotation(draft, account_type)
            case _:
                raise MalformedRecordError("Undetermined kind for record")

    def _build_account(self, draft: Draft) -> Account:
        if not draft.name:
            raise MalformedRecordError("Account is missing a name")

        return Account(
            id=None,
            label=draft.name,
            type=convert_account_type(draft.account_type, self.default_account_type),
            description=draft.description,
            currency=self.currency,
            sort_key=draft.sort_key or 1,
            uuid=self.identifiers.issue(),
        )

    def _build_category(self, draft: Draft) -> Category:
        path = draft.name
        if not path:
            raise MalformedRecordError("Category is missing a name")

        label = path.rsplit(PATH_SEPARATOR, 1)[-1]
        if not label:
            raise MalformedRecordError(f"Category path ends without a name: {path}")

        return Category(
            id=None,
            label=label,
            path=path,
            parent_id=draft.parent_id,
            color=self.rng.randrange(_COLOR_RANGE) if draft.parent_id is None else None,
            uuid=self.identifiers.issue(),
        )

    def _build_payee(self, draft: Draft) -> Payee:
        if not draft.name:
            raise MalformedRecordError("Payee is missing a name")
        return Payee(id=None, name=draft.name)

    def _build_annotation(
        self, draft: Draft, account_type: Optional[AccountType]
    ) -> Transaction:
        missing = [
            name
            for name, value in (
                ("date", draft.date),
                ("amount", draft.amount),
                ("account", draft.account_id),
            )
            if value is None
        ]
        if missing:
            raise MalformedRecordError(
                f"Transaction is missing mandatory field(s): {', '.join(missing)}"
            )

        kind = draft.kind.transaction_kind
        if kind.is_transfer and draft.transfer_account_id is None:
            raise MalformedRecordError("Transfer is missing its peer account")

        date = parse_date(draft.date, self.tzinfo)
        return Transaction(
            id=None,
            kind=kind,
            account_id=draft.account_id,
            date=date,
            value_date=date,
            amount=parse_amount(draft.amount),
            cr_status=convert_cleared_status(draft.cleared_status, account_type),
            uuid=self.identifiers.issue(),
            comment=draft.memo,
            category_id=draft.category_id,
            payee_id=draft.payee_id,
            transfer_account_id=draft.transfer_account_id if kind.is_transfer else None,
            parent_id=draft.parent_id if kind.is_split else None,
            number=draft.check_number,
        )
