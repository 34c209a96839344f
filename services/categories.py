"""Category service for database operations."""

from typing import Dict, List, Optional
from models.category import PATH_SEPARATOR, SPLIT_CATEGORY_ID, Category


class CategoryService:
    """Service for managing categories.

    The placeholder category used by split parents (id 0) is part of the
    schema and is never returned or deleted by this service.
    """

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects ordered by id, each with its full path.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT _id, label, parent_id, color, uuid
                FROM categories
                WHERE _id != ?
                ORDER BY _id
                """,
                (SPLIT_CATEGORY_ID,),
            )
            rows = cursor.fetchall()

        # Parents are always inserted before their children
        paths: Dict[int, str] = {}
        categories = []
        for row in rows:
            category_id, label, parent_id = row[0], row[1], row[2]
            if parent_id is not None and parent_id in paths:
                path = f"{paths[parent_id]}{PATH_SEPARATOR}{label}"
            else:
                path = label
            paths[category_id] = path
            categories.append(
                Category(
                    id=category_id,
                    label=label,
                    path=path,
                    parent_id=parent_id,
                    color=row[3],
                    uuid=row[4],
                )
            )
        return categories

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object (with its full path) if found, None otherwise.
        """
        for category in self.find_all():
            if category.id == category_id:
                return category
        return None

    def find_by_path(self, path: str) -> Optional[Category]:
        """Get a single category by its full colon-delimited path.

        Args:
            path: The category path to find, e.g. "Food:Groceries".

        Returns:
            Category object if found, None otherwise.
        """
        for category in self.find_all():
            if category.path == path:
                return category
        return None

    def find_children(self, parent_id: int) -> List[Category]:
        """Get the direct children of a category."""
        return [c for c in self.find_all() if c.parent_id == parent_id]

    def create(self, category: Category) -> Category:
        """Insert a new category.

        Args:
            category: Category to insert; its parent must already exist.

        Returns:
            The same Category object with id populated.

        Raises:
            sqlite3.IntegrityError: If the parent already has a child with this label.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (label, label_normalized, parent_id,
                                        last_used, icon, color, uuid)
                VALUES (?, ?, ?, 0, '', ?, ?)
                """,
                (
                    category.label,
                    category.label_normalized,
                    category.parent_id,
                    category.color,
                    category.uuid,
                ),
            )
            conn.commit()
            category.id = cursor.lastrowid

        return category

    def delete_all(self) -> int:
        """Delete every category except the split placeholder.

        Returns:
            Number of categories deleted.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM categories WHERE _id != ?", (SPLIT_CATEGORY_ID,)
            )
            conn.commit()
            return cursor.rowcount
