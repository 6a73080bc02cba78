"""
models/ - Domain Layer
======================
Plain domain objects persisted by the repositories. No SQL lives here.
"""

from models.address import Address
from models.entity import Entity
from models.person import Person
from models.region import Region, UnknownRegion

__all__ = ["Address", "Entity", "Person", "Region", "UnknownRegion"]
