"""
tests.test_crud_repo

Error policy of the generic repository: strict writes, degrading reads,
fallback SQL and identity checks.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from models.person import Person
from repositories.address_repo import AddressRepository
from repositories.exceptions import IdentityNotAssigned, StatementNotDefined, UnableToSave
from repositories.people_repo import PeopleRepository


def _person(name="test"):
    return Person(name, "testtest", datetime(2000, 1, 1, tzinfo=timezone.utc))


class FallbackAddressRepository(AddressRepository):
    """Declares nothing; relies on the get_*_sql defaults."""

    statements = ()

    def get_save_sql(self):
        return (
            "INSERT INTO addresses (street_address, address2, city, state, postcode, county, region, country) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s) RETURNING id"
        )

    def get_count_sql(self):
        return "SELECT COUNT(*) FROM addresses"

    def get_delete_many_sql(self):
        return "DELETE FROM addresses WHERE id IN (:ids)"


class BrokenDeleteManyRepository(PeopleRepository):
    statements = ()

    def get_delete_many_sql(self):
        return "DELETE FROM people WHERE id = 1"


def test_fallback_sql_is_used_when_nothing_is_declared(store, beale_street):
    repo = FallbackAddressRepository(store)

    repo.save(beale_street)

    assert beale_street.id > 0
    assert repo.count() == 1
    assert repo.delete_many([beale_street]) == 1


def test_missing_fallback_raises_statement_not_defined(store):
    repo = FallbackAddressRepository(store)

    with pytest.raises(StatementNotDefined):
        repo.find_all()
    with pytest.raises(StatementNotDefined):
        repo.find_by_id(1)


def test_delete_many_requires_ids_placeholder(store):
    repo = BrokenDeleteManyRepository(store)

    with pytest.raises(ValueError, match=":ids"):
        repo.delete_many([])


def test_save_failure_raises_unable_to_save(store, people_repo):
    store.raw.execute("DROP TABLE people")
    person = _person()

    with pytest.raises(UnableToSave) as excinfo:
        people_repo.save(person)

    assert excinfo.value.entity is person
    assert "test" in str(excinfo.value)
    assert person.id is None


def test_cascade_failure_surfaces_as_unable_to_save(store, people_repo, john, beale_street):
    store.raw.execute("DROP TABLE addresses")
    john.home_address = beale_street

    with pytest.raises(UnableToSave) as excinfo:
        people_repo.save(john)

    assert excinfo.value.entity is beale_street


def test_reads_degrade_to_empty_results(store, people_repo):
    store.raw.execute("DROP TABLE people")

    assert people_repo.find_by_id(1) is None
    assert people_repo.find_all() == []
    assert people_repo.count() == 0


def test_delete_and_update_failures_report_zero(store, people_repo, caplog):
    person = people_repo.save(_person())
    store.raw.execute("DROP TABLE people")
    person.salary = Decimal("10")

    assert people_repo.delete(person) == 0
    assert people_repo.delete_many([person]) == 0
    assert people_repo.update(person) == 0
    assert "Failed to delete" in caplog.text
    assert "Failed to update" in caplog.text


def test_unsaved_entity_cannot_be_deleted_or_updated(people_repo):
    person = _person()

    with pytest.raises(IdentityNotAssigned):
        people_repo.delete(person)
    with pytest.raises(IdentityNotAssigned):
        people_repo.update(person)
    with pytest.raises(IdentityNotAssigned):
        people_repo.delete_many([person])


def test_delete_of_missing_row_reports_zero(people_repo):
    person = people_repo.save(_person())
    people_repo.delete(person)

    assert people_repo.delete(person) == 0
