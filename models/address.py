"""
models/address.py
-----------------
Domain model for postal addresses.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.entity import Entity
from models.region import Region


@dataclass(frozen=True)
class Address(Entity):
    """
    An immutable postal address.

    Attributes:
        street_address: First street line.
        address2: Optional second street line (apartment, suite).
        city: City or town.
        state: State or province.
        postcode: Postal / ZIP code.
        country: Country name.
        county: County name.
        region: Coarse `Region` classification.
        id: Database primary key (None for new records); not compared.
    """
    street_address: str
    address2: Optional[str]
    city: str
    state: str
    postcode: str
    country: str
    county: str
    region: Region
    id: Optional[int] = field(default=None, compare=False)

    def get_identity(self) -> Optional[int]:
        return self.id

    def set_identity(self, value: int) -> None:
        # The only field ever written after construction.
        object.__setattr__(self, "id", value)

    def __str__(self) -> str:
        line2 = f", {self.address2}" if self.address2 else ""
        return f"{self.street_address}{line2}, {self.city}, {self.state} {self.postcode}, {self.country}"
