"""Name to id resolution for accounts, categories and payees."""

from typing import Dict, Optional, Set

from ingestion.drafts import Draft, EntryKind
from ingestion.errors import DuplicateDefinitionError, UnknownReferenceError
from logger import get_logger
from models.account import AccountType
from models.category import PATH_SEPARATOR

logger = get_logger("identity")


class IdentityResolver:
    """Owns the accounts, categories and payees namespaces of one import run.

    Each namespace maps a name (the full path for categories) to the id the
    record sink assigned when the entity was inserted. Lookups of an unknown
    category or payee create it; accounts only come into existence through
    declare_account().

    Args:
        context: The import context, used to build and insert entities.
    """

    def __init__(self, context):
        self.context = context
        self.accounts: Dict[str, int] = {}
        self.categories: Dict[str, int] = {}
        self.payees: Dict[str, int] = {}
        self.account_types: Dict[int, AccountType] = {}
        # categories created on demand that an explicit declaration may still claim
        self._implicit_categories: Set[str] = set()

    # Accounts

    def declare_account(self, draft: Draft) -> int:
        """Create the account described by a Registry Pass draft.

        Raises:
            DuplicateDefinitionError: If the name is already an account or a category.
        """
        name = draft.name
        if name in self.accounts:
            raise DuplicateDefinitionError(f"Account declared twice: {name}")
        if name in self.categories:
            raise DuplicateDefinitionError(
                f"Account name is already used by a category: {name}"
            )

        draft.sort_key = len(self.accounts) + 1
        account = self.context.builder.build(draft)
        account_id = self.context.insert(account)

        self.accounts[account.label] = account_id
        self.account_types[account_id] = account.type
        logger.debug(f"Account '{account.label}' ({account.type.value}) -> {account_id}")
        return account_id

    def find_account(self, name: str) -> Optional[int]:
        return self.accounts.get(name)

    def require_account(self, name: str) -> int:
        """Return the id of a declared account.

        Raises:
            UnknownReferenceError: If no account of that name was declared.
        """
        account_id = self.accounts.get(name)
        if account_id is None:
            raise UnknownReferenceError(f"Unknown account: {name}")
        return account_id

    def account_type(self, account_id: Optional[int]) -> Optional[AccountType]:
        return self.account_types.get(account_id)

    # Categories

    def declare_category(self, draft: Draft) -> int:
        """Create the category declared by a Registry Pass draft.

        A category that was only created as the ancestor of another one may be
        declared once; the existing id is returned.

        Raises:
            DuplicateDefinitionError: If the path was already declared, or is an account name.
        """
        path = draft.name
        if path in self.accounts:
            raise DuplicateDefinitionError(
                f"Category name is already used by an account: {path}"
            )
        if path in self.categories:
            if path in self._implicit_categories:
                self._implicit_categories.discard(path)
                return self.categories[path]
            raise DuplicateDefinitionError(f"Category declared twice: {path}")

        return self._create_category(draft)

    def category_id(self, path: str) -> int:
        """Return the id of a category path, creating it and its ancestors if needed."""
        category_id = self.categories.get(path)
        if category_id is not None:
            return category_id

        category_id = self._create_category(Draft(kind=EntryKind.CATEGORY, name=path))
        self._implicit_categories.add(path)
        return category_id

    def _create_category(self, draft: Draft) -> int:
        path = draft.name
        if path and PATH_SEPARATOR in path:
            draft.parent_id = self.category_id(path.rsplit(PATH_SEPARATOR, 1)[0])

        category = self.context.builder.build(draft)
        category_id = self.context.insert(category)
        self.categories[category.path] = category_id
        logger.debug(f"Category '{category.path}' -> {category_id}")
        return category_id

    # Payees

    def payee_id(self, name: str) -> int:
        """Return the id of a payee, creating it on first use."""
        payee_id = self.payees.get(name)
        if payee_id is not None:
            return payee_id

        payee = self.context.builder.build(Draft(kind=EntryKind.PAYEE, name=name))
        payee_id = self.context.insert(payee)
        self.payees[payee.name] = payee_id
        return payee_id
