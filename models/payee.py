from dataclasses import dataclass
from typing import Optional


@dataclass
class Payee:
    id: Optional[int]
    name: str

    @property
    def name_normalized(self) -> str:
        return self.name.lower()

    def to_dict(self) -> dict:
        """Convert payee to dictionary for database storage."""
        return {
            "_id": self.id,
            "name": self.name,
            "name_normalized": self.name_normalized,
        }
