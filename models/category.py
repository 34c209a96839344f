"""Category model for hierarchical transaction categories."""

from dataclasses import dataclass
from typing import Optional

PATH_SEPARATOR = ":"

# Category id carried by the parent record of a split transaction.
SPLIT_CATEGORY_ID = 0


@dataclass
class Category:
    """Represents one node of the category tree.

    Attributes:
        id: Unique identifier (assigned on insert).
        label: Leaf segment of the category path, e.g. "Groceries".
        path: Full colon-delimited path, e.g. "Food:Groceries".
        parent_id: Parent category ID, None for root categories.
        color: Display color; only root categories receive one.
        uuid: Run-unique identifier.
    """

    id: Optional[int]
    label: str
    path: str
    parent_id: Optional[int]
    color: Optional[int]
    uuid: str

    @property
    def label_normalized(self) -> str:
        return self.label.lower()

    def to_dict(self) -> dict:
        """Convert category to dictionary for database storage."""
        return {
            "_id": self.id,
            "label": self.label,
            "label_normalized": self.label_normalized,
            "parent_id": self.parent_id,
            "last_used": 0,
            "icon": "",
            "color": self.color,
            "uuid": self.uuid,
        }
