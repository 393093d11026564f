"""
Generic Repository - Data Access over one mapped entity

Every repository is bound to one Session (one per request). Writes are
staged with add/update/remove and only reach the database on
save_changes(), so a caller can batch several mutations into a single
commit.

Read-only queries (get_all, find) hand back detached rows: later changes
to them are not picked up by the session unless passed to update().
"""
import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_dirty

from backoffice.core.exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(Generic[T]):
    """
    CRUD over the rows of one ORM model

    Subclasses set `model`; the generic form takes it as an argument:

        payments = Repository(db, Payment)
        pending = payments.find(Payment.payment_status == "Pending")
    """

    model: Optional[Type[T]] = None

    def __init__(self, session: Session, model: Optional[Type[T]] = None):
        self.session = session
        if model is not None:
            self.model = model
        if self.model is None:
            raise ValueError(f"{type(self).__name__} needs a model class")

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> List[T]:
        """All rows, read-only"""
        return self._read_only(self._select())

    def get_by_id(self, key) -> Optional[T]:
        """
        Row by primary key, tracked by the session

        Returns:
            The row or None if not found
        """
        return self.session.get(self.model, key)

    def find(self, *criteria) -> List[T]:
        """
        Rows matching every criterion, read-only

        Args:
            *criteria: SQLAlchemy boolean expressions over the model's
                columns, e.g. ``Product.stock <= 5``. None given = all rows.
        """
        return self._read_only(self._select().where(*criteria))

    def count(self, *criteria) -> int:
        """Number of rows matching every criterion, counted by the database"""
        statement = select(func.count()).select_from(self.model).where(*criteria)
        return self.session.scalar(statement) or 0

    # ── STAGE ─────────────────────────────────────────────

    def add(self, entity: T) -> T:
        """Stage a new row for insertion"""
        self.session.add(entity)
        return entity

    def update(self, entity: T) -> T:
        """
        Stage a full-row update

        Accepts tracked or detached instances. Returns the instance the
        session tracks, which is what later reads in this session see.

        Raises:
            PersistenceError: no row has the entity's primary key (nothing
                is staged, an update never turns into an insert)
        """
        if entity not in self.session:
            self._existing_row(entity, "update")
        tracked = self.session.merge(entity)
        flag_dirty(tracked)
        return tracked

    def remove(self, entity: T) -> None:
        """
        Stage a row deletion

        Raises:
            PersistenceError: the row is already gone from the database
        """
        if entity not in self.session:
            entity = self._existing_row(entity, "remove")
        self.session.delete(entity)

    # ── COMMIT ────────────────────────────────────────────

    def save_changes(self) -> int:
        """
        Commit everything staged in the session

        Returns:
            Number of entities inserted, updated or deleted

        Raises:
            ConflictError: a constraint (FK, unique, not null) rejected the write
            PersistenceError: any other database failure
        """
        staged = len(self.session.new) + len(self.session.dirty) + len(self.session.deleted)

        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Integrity error committing {self.model.__name__} changes: {e.orig}")
            raise ConflictError(f"{self.model.__name__} changes conflict with existing data") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error committing {self.model.__name__} changes: {e}")
            raise PersistenceError(f"{self.model.__name__} changes could not be saved") from e

        logger.debug(f"Committed {staged} {self.model.__name__} change(s)")
        return staged

    # ── HELPERS ───────────────────────────────────────────

    def _select(self):
        """SELECT over the model in primary key order"""
        return select(self.model).order_by(*inspect(self.model).primary_key)

    def _existing_row(self, entity: T, action: str) -> T:
        """Tracked row with the entity's primary key, loaded if needed"""
        identity = tuple(inspect(self.model).primary_key_from_instance(entity))
        row = None if None in identity else self.session.get(self.model, identity)

        if row is None:
            logger.error(f"Cannot {action} {self.model.__name__} {identity}: row does not exist")
            raise PersistenceError(f"{self.model.__name__} could not be found to {action}")
        return row

    def _read_only(self, statement) -> List[T]:
        """
        Run a query and detach the rows it loaded

        Rows the session was already tracking before the query stay
        tracked, so pending changes on them are not lost.
        """
        known = set(self.session.identity_map.keys())
        rows = list(self.session.scalars(statement).unique().all())

        for row in rows:
            if inspect(row).identity_key not in known and row in self.session:
                self.session.expunge(row)

        return rows
