"""
repositories/address_repo.py
----------------------------
Data access layer for addresses.
All SQL queries related to the `addresses` table live here.
"""

from models.address import Address
from models.region import Region
from repositories.crud_repo import CrudRepository
from repositories.identity import set_identity
from repositories.statements import CrudOperation, Statement

SAVE_ADDRESS_SQL = """
    INSERT INTO addresses (street_address, address2, city, state, postcode, county, region, country)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
    RETURNING id;
"""
FIND_BY_ID_SQL = """
    SELECT id, street_address, address2, city, state, postcode, country, county, region
    FROM addresses
    WHERE id = %s;
"""
FIND_ALL_SQL = """
    SELECT id, street_address, address2, city, state, postcode, country, county, region
    FROM addresses
    ORDER BY id
    LIMIT 100;
"""
COUNT_SQL = "SELECT COUNT(*) AS count FROM addresses;"
DELETE_ONE_SQL = "DELETE FROM addresses WHERE id = %s;"


class AddressRepository(CrudRepository[Address]):
    """Repository for the addresses table. Addresses are never updated."""

    entity_type = Address
    statements = (
        Statement(CrudOperation.SAVE, SAVE_ADDRESS_SQL),
        Statement(CrudOperation.FIND_BY_ID, FIND_BY_ID_SQL),
        Statement(CrudOperation.FIND_ALL, FIND_ALL_SQL),
        Statement(CrudOperation.COUNT, COUNT_SQL),
        Statement(CrudOperation.DELETE_ONE, DELETE_ONE_SQL),
    )

    def bind_for_save(self, entity: Address) -> tuple:
        return (
            entity.street_address, entity.address2, entity.city,
            entity.state, entity.postcode, entity.county,
            str(entity.region), entity.country,
        )

    def bind_for_update(self, entity: Address) -> tuple:
        return ()

    def extract_from_row(self, row: dict) -> Address:
        return extract_address(row)


def extract_address(row: dict, prefix: str = "") -> Address:
    """
    Build an Address from the columns named ``<prefix><column>``.

    Raises:
        UnknownRegion: If the region column holds an unrecognized value.
    """
    address = Address(
        street_address=row[prefix + "street_address"],
        address2=row[prefix + "address2"],
        city=row[prefix + "city"],
        state=row[prefix + "state"],
        postcode=row[prefix + "postcode"],
        country=row[prefix + "country"],
        county=row[prefix + "county"],
        region=Region.from_text(row[prefix + "region"]),
    )
    set_identity(address, int(row[prefix + "id"]))
    return address
