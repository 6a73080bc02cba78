"""
repositories/identity.py
------------------------
Reads and writes the store-managed identity of an entity.
"""

from typing import Optional

from models.entity import Entity
from repositories.exceptions import IdentityNotAssigned, NoIdentityField


def get_identity(entity) -> Optional[int]:
    """
    Return the entity's identity, or None if it was never saved.

    Raises:
        NoIdentityField: If the object is not an `Entity`.
    """
    if not isinstance(entity, Entity):
        raise NoIdentityField(type(entity).__name__)
    return entity.get_identity()


def require_identity(entity) -> int:
    """Like `get_identity`, but an unsaved entity is an error."""
    identity = get_identity(entity)
    if identity is None:
        raise IdentityNotAssigned(entity)
    return identity


def set_identity(entity, value: int) -> None:
    """Stamp a store-generated identity onto the entity."""
    if not isinstance(entity, Entity):
        raise NoIdentityField(type(entity).__name__)
    entity.set_identity(value)
