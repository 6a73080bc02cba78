"""
tests.test_statements

Statement resolution: declared SQL first, lazy fallback second.
"""

from unittest.mock import Mock

import pytest

from repositories.exceptions import StatementNotDefined
from repositories.statements import CrudOperation, Statement, StatementRegistry


def _not_defined():
    raise NotImplementedError


def test_declared_statement_wins_without_calling_fallback():
    registry = StatementRegistry("Person", [Statement(CrudOperation.COUNT, "SELECT COUNT(*) FROM people")])
    fallback = Mock(return_value="SELECT 0")

    sql = registry.resolve(CrudOperation.COUNT, fallback)

    assert sql == "SELECT COUNT(*) FROM people"
    fallback.assert_not_called()


def test_statements_in_a_bundle_are_found():
    registry = StatementRegistry(
        "Person",
        [
            Statement(CrudOperation.SAVE, "INSERT"),
            (
                Statement(CrudOperation.FIND_ALL, "SELECT ALL"),
                Statement(CrudOperation.DELETE_MANY, "DELETE (:ids)"),
            ),
        ],
    )

    assert registry.resolve(CrudOperation.FIND_ALL, _not_defined) == "SELECT ALL"
    assert registry.resolve(CrudOperation.DELETE_MANY, _not_defined) == "DELETE (:ids)"
    assert registry.declared(CrudOperation.SAVE)
    assert not registry.declared(CrudOperation.UPDATE)


def test_first_declaration_wins():
    registry = StatementRegistry(
        "Person",
        [
            [Statement(CrudOperation.COUNT, "first")],
            Statement(CrudOperation.COUNT, "second"),
        ],
    )

    assert registry.resolve(CrudOperation.COUNT, _not_defined) == "first"


def test_fallback_is_used_when_nothing_declared():
    registry = StatementRegistry("Person")
    fallback = Mock(return_value="SELECT 1")

    assert registry.resolve(CrudOperation.FIND_BY_ID, fallback) == "SELECT 1"
    fallback.assert_called_once_with()


def test_undefined_fallback_names_operation_and_entity():
    registry = StatementRegistry("Address")

    with pytest.raises(StatementNotDefined) as excinfo:
        registry.resolve(CrudOperation.UPDATE, _not_defined)

    assert excinfo.value.operation is CrudOperation.UPDATE
    assert excinfo.value.entity_name == "Address"


def test_statement_text_is_returned_verbatim():
    sql = "  DELETE FROM people WHERE id IN (:ids) -- %s stays\n"
    registry = StatementRegistry("Person", [Statement(CrudOperation.DELETE_MANY, sql)])

    assert registry.resolve(CrudOperation.DELETE_MANY, _not_defined) is sql
