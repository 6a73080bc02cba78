"""
repositories/crud_repo.py
-------------------------
Generic CRUD repository over a DB-API 2.0 connection.

Concrete repositories declare their SQL (see `repositories.statements`)
and implement three hooks:

- ``bind_for_save(entity)``: parameters for the insert statement.
- ``bind_for_update(entity)``: parameters for the update statement,
  without the identity, which is appended last.
- ``extract_from_row(row)``: build an entity from one result row.

Rows reach the hooks as dicts keyed by lower-cased column name.

Writes are strict: a failed insert raises `UnableToSave`. Reads degrade:
a store error during find/count is logged and an empty result returned.
Delete and update follow the reads and report 0 affected rows.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterator, Optional, Sequence, TypeVar

from repositories.exceptions import UnableToSave
from repositories.identity import require_identity, set_identity
from repositories.statements import CrudOperation, StatementRegistry
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

IDS_PLACEHOLDER = ":ids"


class CrudRepository(ABC, Generic[T]):
    """Base repository implementing CRUD for one entity type."""

    entity_type: type = object
    statements: tuple = ()

    def __init__(self, connection):
        self.connection = connection
        self._registry = StatementRegistry(self.entity_type.__name__, self.statements)
        self._fallbacks = {
            CrudOperation.SAVE: self.get_save_sql,
            CrudOperation.FIND_BY_ID: self.get_find_by_id_sql,
            CrudOperation.FIND_ALL: self.get_find_all_sql,
            CrudOperation.COUNT: self.get_count_sql,
            CrudOperation.UPDATE: self.get_update_sql,
            CrudOperation.DELETE_ONE: self.get_delete_one_sql,
            CrudOperation.DELETE_MANY: self.get_delete_many_sql,
        }

    # ── CREATE ────────────────────────────────────────────

    def save(self, entity: T) -> T:
        """
        Insert the entity and stamp the generated identity on it.

        The SAVE statement must return the new key as its first column
        (``RETURNING id``). Cascades run in `bind_for_save` (before the
        insert) and `after_save` (once the identity exists).

        Returns:
            The same entity, now carrying its identity.

        Raises:
            UnableToSave: If the insert or a cascaded insert fails.
        """
        sql = self._sql(CrudOperation.SAVE)
        params = self.bind_for_save(entity)
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
        except self.connection.Error as e:
            logger.error(f"Failed to save {entity!r}: {e}")
            raise UnableToSave(entity) from e
        if row is None:
            logger.error(f"Insert returned no key for {entity!r}")
            raise UnableToSave(entity)

        set_identity(entity, int(row[0]))
        logger.info(f"Saved {self.entity_type.__name__} #{row[0]}")
        self.after_save(entity)
        return entity

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, entity_id: int) -> Optional[T]:
        """
        Fetch one entity by primary key.

        Returns:
            The entity, or None if no row matched or the query failed.
        """
        sql = self._sql(CrudOperation.FIND_BY_ID)
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql, (entity_id,))
                rows = self._iter_rows(cur)
                first = next(rows, None)
                if first is None:
                    return None
                return self.extract_entity(first, rows)
        except self.connection.Error as e:
            logger.error(f"Failed to find {self.entity_type.__name__} #{entity_id}: {e}")
            return None

    def find_all(self) -> list[T]:
        """Fetch every entity the FIND_ALL statement returns, in result order."""
        sql = self._sql(CrudOperation.FIND_ALL)
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql)
                return [self.extract_from_row(r) for r in self._iter_rows(cur)]
        except self.connection.Error as e:
            logger.error(f"Failed to list {self.entity_type.__name__}: {e}")
            return []

    def count(self) -> int:
        """Return the aggregate from the COUNT statement's first column."""
        sql = self._sql(CrudOperation.COUNT)
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql)
                row = cur.fetchone()
                return int(row[0]) if row else 0
        except self.connection.Error as e:
            logger.error(f"Failed to count {self.entity_type.__name__}: {e}")
            return 0

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: T) -> int:
        """
        Update the entity's row.

        Returns:
            Number of rows updated (0 if the statement failed).
        """
        sql = self._sql(CrudOperation.UPDATE)
        params = list(self.bind_for_update(entity))
        params.append(require_identity(entity))
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql, params)
                return cur.rowcount
        except self.connection.Error as e:
            logger.error(f"Failed to update {entity!r}: {e}")
            return 0

    # ── DELETE ────────────────────────────────────────────

    def delete(self, entity: T) -> int:
        """
        Delete the entity's row.

        Returns:
            Number of rows deleted (0 if the statement failed).
        """
        sql = self._sql(CrudOperation.DELETE_ONE)
        entity_id = require_identity(entity)
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql, (entity_id,))
                deleted = cur.rowcount
        except self.connection.Error as e:
            logger.error(f"Failed to delete {entity!r}: {e}")
            return 0
        logger.info(f"Deleted records: {deleted}")
        return deleted

    def delete_many(self, entities: Sequence[T]) -> int:
        """
        Delete several entities with one statement.

        The identities are inlined into the SQL in place of ``:ids``, not
        bound as parameters.

        Returns:
            Number of rows deleted (0 if the statement failed).
        """
        sql = self._sql(CrudOperation.DELETE_MANY)
        if IDS_PLACEHOLDER not in sql:
            raise ValueError(f"DELETE_MANY statement lacks the {IDS_PLACEHOLDER} placeholder: {sql}")
        ids = [require_identity(e) for e in entities]
        if not ids:
            return 0
        sql = sql.replace(IDS_PLACEHOLDER, ",".join(str(int(i)) for i in ids))
        try:
            with self.connection.cursor() as cur:
                cur.execute(sql)
                deleted = cur.rowcount
        except self.connection.Error as e:
            logger.error(f"Failed to delete {len(ids)} {self.entity_type.__name__} records: {e}")
            return 0
        logger.info(f"Deleted records: {deleted}")
        return deleted

    # ── HOOKS ─────────────────────────────────────────────

    @abstractmethod
    def bind_for_save(self, entity: T) -> Sequence:
        ...

    @abstractmethod
    def bind_for_update(self, entity: T) -> Sequence:
        ...

    @abstractmethod
    def extract_from_row(self, row: dict) -> T:
        ...

    def extract_entity(self, first: dict, rows: Iterator[dict]) -> T:
        """Decode `find_by_id` results. The default reads the first row only."""
        return self.extract_from_row(first)

    def after_save(self, entity: T) -> None:
        """Called once the entity's identity has been stamped."""

    # ── DEFAULT SQL ───────────────────────────────────────

    def get_save_sql(self) -> str:
        raise NotImplementedError

    def get_find_by_id_sql(self) -> str:
        """SQL with exactly one parameter, bound to the entity's id."""
        raise NotImplementedError

    def get_find_all_sql(self) -> str:
        raise NotImplementedError

    def get_count_sql(self) -> str:
        raise NotImplementedError

    def get_update_sql(self) -> str:
        """SQL whose last parameter is bound to the entity's id."""
        raise NotImplementedError

    def get_delete_one_sql(self) -> str:
        raise NotImplementedError

    def get_delete_many_sql(self) -> str:
        """SQL like ``DELETE FROM people WHERE id IN (:ids)``."""
        raise NotImplementedError

    # ── HELPERS ───────────────────────────────────────────

    def _sql(self, operation: CrudOperation) -> str:
        return self._registry.resolve(operation, self._fallbacks[operation])

    @staticmethod
    def _iter_rows(cur) -> Iterator[dict]:
        """Yield the cursor's rows lazily as dicts keyed by lower-cased column name."""
        columns = [col[0].lower() for col in cur.description]
        for row in cur:
            yield dict(zip(columns, row))
