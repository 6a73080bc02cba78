"""
repositories/statements.py
--------------------------
Maps operation kinds to the SQL text a repository declares for them.

A repository lists its statements in a ``statements`` class attribute.
Each item is either a single `Statement` or a bundle (tuple or list) of
them, so one declaration can cover several operations at once::

    statements = (
        Statement(CrudOperation.SAVE, SAVE_SQL),
        (
            Statement(CrudOperation.FIND_ALL, FIND_ALL_SQL),
            Statement(CrudOperation.COUNT, COUNT_SQL),
        ),
    )

Operations with no declaration fall back to the repository's
``get_*_sql()`` methods.
"""

from enum import Enum
from typing import Callable, Iterable, NamedTuple, Union

from repositories.exceptions import StatementNotDefined


class CrudOperation(Enum):
    SAVE = "save"
    FIND_BY_ID = "find_by_id"
    FIND_ALL = "find_all"
    COUNT = "count"
    UPDATE = "update"
    DELETE_ONE = "delete_one"
    DELETE_MANY = "delete_many"


class Statement(NamedTuple):
    operation: CrudOperation
    sql: str


Declaration = Union[Statement, Iterable[Statement]]


def _flatten(declarations: Iterable[Declaration]) -> list[Statement]:
    flat: list[Statement] = []
    for declaration in declarations:
        if isinstance(declaration, Statement):
            flat.append(declaration)
        else:
            flat.extend(declaration)
    return flat


class StatementRegistry:
    """Resolves the SQL text for one entity type's operations."""

    def __init__(self, entity_name: str, declarations: Iterable[Declaration] = ()):
        self.entity_name = entity_name
        self._statements = _flatten(declarations)

    def declared(self, operation: CrudOperation) -> bool:
        return any(s.operation is operation for s in self._statements)

    def resolve(self, operation: CrudOperation, fallback: Callable[[], str]) -> str:
        """
        Return the SQL to run for `operation`.

        The first declared statement for the operation wins and is
        returned verbatim. Only when none is declared is `fallback` called.

        Raises:
            StatementNotDefined: If the fallback raises NotImplementedError.
        """
        for statement in self._statements:
            if statement.operation is operation:
                return statement.sql
        try:
            return fallback()
        except NotImplementedError:
            raise StatementNotDefined(operation, self.entity_name) from None
