"""
repositories/people_repo.py
---------------------------
Data access layer for people.
All SQL queries related to the `people` table live here.

Saving a person cascades through its relations:

1. home and business addresses are inserted first (through
   `AddressRepository`) so their ids can go into the person's row;
2. an unsaved spouse is saved recursively for the same reason;
3. the parent foreign key comes from the back-reference set by
   ``Person.add_child``;
4. children are saved after the person's own insert, once their parent
   id exists; a child saved earlier has its parent column updated instead.

Known limitation: two unsaved people who are each other's spouse recurse
without end (``RecursionError``). Save one side first, or link the
spouses after both are saved.
"""

import itertools
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator, Optional

from models.address import Address
from models.person import Person
from repositories.address_repo import AddressRepository, extract_address
from repositories.crud_repo import CrudRepository
from repositories.exceptions import UnableToSave
from repositories.identity import get_identity, set_identity
from repositories.statements import CrudOperation, Statement
from utils.logger import get_logger

logger = get_logger(__name__)

SAVE_PERSON_SQL = """
    INSERT INTO people
    (first_name, last_name, dob, salary, email, home_address, business_address, spouse, parent)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
    RETURNING id;
"""
FIND_BY_ID_SQL = """
    SELECT
    parent.id AS parent_id, parent.first_name AS parent_first_name, parent.last_name AS parent_last_name,
    parent.dob AS parent_dob, parent.salary AS parent_salary, parent.email AS parent_email,
    child.id AS child_id, child.first_name AS child_first_name, child.last_name AS child_last_name,
    child.dob AS child_dob, child.salary AS child_salary, child.email AS child_email,
    spouse.id AS spouse_id, spouse.first_name AS spouse_first_name, spouse.last_name AS spouse_last_name,
    spouse.dob AS spouse_dob, spouse.salary AS spouse_salary, spouse.email AS spouse_email,
    home.id AS home_id, home.street_address AS home_street_address, home.address2 AS home_address2,
    home.city AS home_city, home.state AS home_state, home.postcode AS home_postcode,
    home.country AS home_country, home.county AS home_county, home.region AS home_region,
    business.id AS business_id, business.street_address AS business_street_address,
    business.address2 AS business_address2, business.city AS business_city, business.state AS business_state,
    business.postcode AS business_postcode, business.country AS business_country,
    business.county AS business_county, business.region AS business_region
    FROM people AS parent
    LEFT OUTER JOIN people AS child ON parent.id = child.parent
    LEFT OUTER JOIN people AS spouse ON parent.spouse = spouse.id
    LEFT OUTER JOIN addresses AS home ON parent.home_address = home.id
    LEFT OUTER JOIN addresses AS business ON parent.business_address = business.id
    WHERE parent.id = %s
    ORDER BY child.id;
"""
FIND_ALL_SQL = "SELECT id, first_name, last_name, dob, salary, email FROM people ORDER BY id LIMIT 100;"
COUNT_SQL = "SELECT COUNT(*) AS count FROM people;"
DELETE_ONE_SQL = "DELETE FROM people WHERE id = %s;"
DELETE_MANY_SQL = "DELETE FROM people WHERE id IN (:ids);"
UPDATE_SQL = "UPDATE people SET first_name = %s, last_name = %s, dob = %s, salary = %s WHERE id = %s;"
SET_PARENT_SQL = "UPDATE people SET parent = %s WHERE id = %s;"


class PeopleRepository(CrudRepository[Person]):
    """Repository for the people table, cascading into addresses, spouse and children."""

    entity_type = Person
    statements = (
        Statement(CrudOperation.SAVE, SAVE_PERSON_SQL),
        Statement(CrudOperation.UPDATE, UPDATE_SQL),
        (
            Statement(CrudOperation.FIND_BY_ID, FIND_BY_ID_SQL),
            Statement(CrudOperation.FIND_ALL, FIND_ALL_SQL),
            Statement(CrudOperation.COUNT, COUNT_SQL),
            Statement(CrudOperation.DELETE_ONE, DELETE_ONE_SQL),
            Statement(CrudOperation.DELETE_MANY, DELETE_MANY_SQL),
        ),
    )

    def __init__(self, connection):
        super().__init__(connection)
        self.address_repository = AddressRepository(connection)

    # ── SAVE CASCADE ──────────────────────────────────────

    def bind_for_save(self, entity: Person) -> tuple:
        return (
            entity.first_name,
            entity.last_name,
            _dob_to_utc(entity.dob),
            entity.salary,
            entity.email,
            self._save_address(entity.home_address),
            self._save_address(entity.business_address),
            self._save_spouse(entity.spouse),
            get_identity(entity.parent) if entity.parent is not None else None,
        )

    def after_save(self, entity: Person) -> None:
        for child in entity.children:
            if get_identity(child) is None:
                self.save(child)
            else:
                self._link_child(child, get_identity(entity))

    def _link_child(self, child: Person, parent_id: int) -> None:
        """Point an already-saved child's row at its parent."""
        try:
            with self.connection.cursor() as cur:
                cur.execute(SET_PARENT_SQL, (parent_id, get_identity(child)))
        except self.connection.Error as e:
            logger.error(f"Failed to link {child!r} to parent #{parent_id}: {e}")
            raise UnableToSave(child) from e

    def _save_address(self, address: Optional[Address]) -> Optional[int]:
        if address is None:
            return None
        if get_identity(address) is None:
            self.address_repository.save(address)
        return get_identity(address)

    def _save_spouse(self, spouse: Optional[Person]) -> Optional[int]:
        if spouse is None:
            return None
        if get_identity(spouse) is None:
            self.save(spouse)
        return get_identity(spouse)

    # ── UPDATE ────────────────────────────────────────────

    def bind_for_update(self, entity: Person) -> tuple:
        return (
            entity.first_name,
            entity.last_name,
            _dob_to_utc(entity.dob),
            entity.salary,
        )

    # ── DECODING ──────────────────────────────────────────

    def extract_from_row(self, row: dict) -> Person:
        """Decode one flat row from the people table (no joins)."""
        return _extract_person(row)

    def extract_entity(self, first: dict, rows: Iterator[dict]) -> Person:
        """
        Fold the denormalized `find_by_id` rows into one person.

        Every row repeats the parent's columns next to at most one
        child's. Parent, spouse and addresses are read from the first
        row; each row with a child id contributes that child once.
        """
        parent = _extract_person(first, "parent_")
        parent.home_address = _extract_optional_address(first, "home_")
        parent.business_address = _extract_optional_address(first, "business_")
        if first["spouse_id"] is not None:
            parent.spouse = _extract_person(first, "spouse_")

        children: dict[int, Person] = {}
        for row in itertools.chain([first], rows):
            child_id = row["child_id"]
            if child_id is None or child_id in children:
                continue
            children[child_id] = _extract_person(row, "child_")

        for child in children.values():
            parent.add_child(child)
        logger.debug(f"Decoded {parent!r} with {len(children)} children")
        return parent


def _dob_to_utc(dob: datetime) -> datetime:
    """Store birth instants as naive UTC timestamps."""
    return dob.astimezone(timezone.utc).replace(tzinfo=None)


def _dob_from_store(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _extract_person(row: dict, prefix: str = "") -> Person:
    salary = row[prefix + "salary"]
    person = Person(
        first_name=row[prefix + "first_name"],
        last_name=row[prefix + "last_name"],
        dob=_dob_from_store(row[prefix + "dob"]),
        salary=Decimal(str(salary)) if salary is not None else Decimal("0"),
        email=row.get(prefix + "email"),
    )
    set_identity(person, int(row[prefix + "id"]))
    return person


def _extract_optional_address(row: dict, prefix: str) -> Optional[Address]:
    if row[prefix + "id"] is None:
        return None
    return extract_address(row, prefix)
