"""
Tests for the generic Repository

Staging vs commit, read-only (detached) reads, and error translation.
"""
import pytest
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from backoffice.core.exceptions import ConflictError, PersistenceError
from backoffice.models import Category, Payment, Product
from backoffice.repositories.base import Repository


class TestRepositoryReads:
    """get_all / get_by_id / find / count"""

    def test_needs_a_model(self, db_session):
        """Test a Repository without a model class is refused"""
        with pytest.raises(ValueError):
            Repository(db_session)

    def test_get_all_returns_detached_rows(self, db_session, products):
        """Test get_all returns every row in id order, detached from the session"""
        repo = Repository(db_session, Product)

        rows = repo.get_all()

        assert len(rows) == 25
        assert [p.id for p in rows] == list(range(1, 26))
        assert all(p not in db_session for p in rows)

    def test_get_all_keeps_already_tracked_rows_tracked(self, db_session, products):
        """Test a read-only query does not detach rows loaded earlier"""
        # Arrange
        repo = Repository(db_session, Product)
        tracked = repo.get_by_id(3)

        # Act
        repo.get_all()

        # Assert
        assert tracked in db_session

    def test_get_by_id_is_tracked(self, db_session, category):
        """Test get_by_id returns a row the session tracks"""
        repo = Repository(db_session, Category)

        found = repo.get_by_id(category.id)

        assert found is not None
        assert found.name == "Coffee"
        assert found in db_session

    def test_get_by_id_returns_none_when_not_found(self, db_session):
        """Test get_by_id returns None for an unknown key"""
        assert Repository(db_session, Category).get_by_id(999) is None

    def test_find_filters_by_predicate(self, db_session, products):
        """Test find applies the predicate and detaches the result"""
        repo = Repository(db_session, Product)

        cheap = repo.find(Product.price < 80)

        assert [p.name for p in cheap] == [f"Product {n:02d}" for n in range(21, 26)]
        assert all(p not in db_session for p in cheap)

    def test_find_combines_criteria(self, db_session, products):
        """Test several criteria are ANDed"""
        repo = Repository(db_session, Product)

        rows = repo.find(Product.stock <= 10, Product.is_featured.is_(True))

        assert [p.id for p in rows] == [5, 10]

    def test_find_without_criteria_returns_everything(self, db_session, products):
        """Test find() with no criteria behaves like get_all"""
        assert len(Repository(db_session, Product).find()) == 25

    def test_count(self, db_session, products):
        """Test count with and without criteria"""
        repo = Repository(db_session, Product)

        assert repo.count() == 25
        assert repo.count(Product.stock <= 5) == 6


class TestRepositoryWrites:
    """add / update / remove only hit the database on save_changes"""

    def test_add_is_not_persisted_until_save_changes(self, db_session, other_session):
        """Test add stages the row and save_changes commits it"""
        # Arrange
        repo = Repository(db_session, Category)

        # Act: stage only
        repo.add(Category(name="Tea"))

        # Assert: invisible to other sessions until committed
        assert Repository(other_session, Category).count() == 0

        affected = repo.save_changes()

        assert affected == 1
        assert [c.name for c in Repository(other_session, Category).get_all()] == ["Tea"]

    def test_save_changes_batches_several_mutations(self, db_session, other_session, category):
        """Test one save_changes commits inserts and updates together"""
        # Arrange
        repo = Repository(db_session, Category)
        existing = repo.get_by_id(category.id)

        # Act
        repo.add(Category(name="Tea"))
        repo.add(Category(name="Cocoa"))
        existing.name = "Coffee & Espresso"
        repo.update(existing)

        # Assert
        assert repo.save_changes() == 3
        names = sorted(c.name for c in Repository(other_session, Category).get_all())
        assert names == ["Cocoa", "Coffee & Espresso", "Tea"]

    def test_update_detached_row(self, db_session, other_session, products):
        """Test update re-attaches a detached row and writes its changes"""
        # Arrange
        repo = Repository(db_session, Product)
        product = repo.find(Product.id == 7)[0]

        product.price = Decimal("12.50")
        # Detached: the session does not see the change on its own
        assert len(db_session.dirty) == 0

        # Act
        tracked = repo.update(product)

        # Assert
        assert tracked in db_session
        assert repo.save_changes() == 1
        assert Repository(other_session, Product).get_by_id(7).price == Decimal("12.50")

    def test_update_without_changes_still_counts(self, db_session, category):
        """Test an update with identical values counts as one affected row"""
        repo = Repository(db_session, Category)
        row = repo.get_by_id(category.id)

        repo.update(row)

        assert repo.save_changes() == 1

    def test_update_of_missing_row_is_not_an_insert(self, db_session, other_session, category):
        """Test update of an unknown primary key raises instead of inserting"""
        # Arrange
        repo = Repository(db_session, Category)

        # Act
        with pytest.raises(PersistenceError, match="could not be found to update"):
            repo.update(Category(id=42, name="Ghost"))

        # Assert: nothing staged, nothing written
        assert len(db_session.new) == 0
        assert repo.save_changes() == 0
        assert Repository(other_session, Category).get_by_id(42) is None
        assert Repository(other_session, Category).count() == 1

    def test_update_without_primary_key(self, db_session):
        """Test update of a row with no id raises PersistenceError"""
        with pytest.raises(PersistenceError):
            Repository(db_session, Category).update(Category(name="No id"))

        assert len(db_session.new) == 0

    def test_remove(self, db_session, other_session, category):
        """Test remove stages a delete that save_changes commits"""
        repo = Repository(db_session, Category)

        repo.remove(repo.get_by_id(category.id))
        assert Repository(other_session, Category).count() == 1

        assert repo.save_changes() == 1
        assert Repository(other_session, Category).count() == 0

    def test_remove_detached_row(self, db_session, other_session, category):
        """Test remove accepts a row returned by a read-only query"""
        repo = Repository(db_session, Category)
        detached = repo.get_all()[0]

        repo.remove(detached)
        repo.save_changes()

        assert Repository(other_session, Category).count() == 0

    def test_remove_row_deleted_elsewhere(self, db_session, other_session, category):
        """Test remove of a detached row that is already gone raises PersistenceError"""
        # Arrange: detach the row, then delete it through another session
        repo = Repository(db_session, Category)
        detached = repo.get_all()[0]
        other = Repository(other_session, Category)
        other.remove(other.get_by_id(category.id))
        other.save_changes()

        # Act / Assert
        with pytest.raises(PersistenceError, match="could not be found to remove"):
            repo.remove(detached)

        assert len(db_session.deleted) == 0

    def test_save_changes_with_nothing_staged(self, db_session):
        """Test save_changes reports zero when nothing is staged"""
        assert Repository(db_session, Category).save_changes() == 0

    def test_integrity_error_becomes_conflict_and_rolls_back(self, db_session, other_session):
        """Test a foreign key violation raises ConflictError and rolls back"""
        repo = Repository(db_session, Product)
        repo.add(Product(name="Orphan", price=Decimal("1"), stock=1, category_id=999))

        with pytest.raises(ConflictError):
            repo.save_changes()

        # Session is usable again and nothing was written
        assert repo.count() == 0
        assert Repository(other_session, Product).count() == 0

    def test_database_error_becomes_persistence_error(self, db_session):
        """Test other database errors raise PersistenceError chained to the cause"""
        # Arrange
        repo = Repository(db_session, Payment)
        error = OperationalError("COMMIT", {}, Exception("database is locked"))

        # Act
        with patch.object(db_session, "commit", side_effect=error), \
                patch.object(db_session, "rollback") as mock_rollback:
            with pytest.raises(PersistenceError) as exc_info:
                repo.save_changes()

        # Assert
        assert not isinstance(exc_info.value, ConflictError)
        assert exc_info.value.__cause__ is error
        mock_rollback.assert_called_once()
