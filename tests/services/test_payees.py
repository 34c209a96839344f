import pytest
import sqlite3

from models.payee import Payee


class TestPayeeService:
    """Tests for PayeeService."""

    def test_create_payee(self, services):
        """Test creating a payee."""
        payee = services.payees.create(Payee(id=None, name="Corner Shop"))

        assert payee.id is not None
        assert payee.name == "Corner Shop"

    def test_stores_normalized_name(self, services, test_db):
        """Test that the normalized name column is filled."""
        payee = services.payees.create(Payee(id=None, name="Corner Shop"))

        row = test_db.execute(
            "SELECT name_normalized FROM payee WHERE _id = ?", (payee.id,)
        ).fetchone()
        assert row == (payee.name_normalized,)

    def test_find_by_name(self, services):
        """Test finding a payee by name."""
        created = services.payees.create(Payee(id=None, name="Market"))

        found = services.payees.find_by_name("Market")

        assert found == created

    def test_find_by_name_not_found(self, services):
        """Test finding a non-existent payee returns None."""
        assert services.payees.find_by_name("Nobody") is None

    def test_find_all(self, services):
        """Test listing payees in insertion order."""
        services.payees.create(Payee(id=None, name="Market"))
        services.payees.create(Payee(id=None, name="Bakery"))

        assert [p.name for p in services.payees.find_all()] == ["Market", "Bakery"]

    def test_duplicate_name_fails(self, services):
        """Test that payee names are unique."""
        services.payees.create(Payee(id=None, name="Market"))

        with pytest.raises(sqlite3.IntegrityError):
            services.payees.create(Payee(id=None, name="Market"))

    def test_delete_all(self, services):
        """Test deleting every payee."""
        services.payees.create(Payee(id=None, name="Market"))

        assert services.payees.delete_all() == 1
        assert services.payees.find_all() == []

    def test_payee_to_dict(self):
        """Test that Payee.to_dict() includes the normalized name."""
        assert Payee(id=4, name="Corner Shop").to_dict() == {
            "_id": 4,
            "name": "Corner Shop",
            "name_normalized": "corner shop",
        }
