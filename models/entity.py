"""
models/entity.py
----------------
Base interface for persisted records.
"""

from abc import ABC, abstractmethod
from typing import Optional


class Entity(ABC):
    """
    A record with exactly one store-assigned integer identity.

    Implementing this interface is what designates a type's identity
    attribute. The identity is ``None`` until the first successful save
    and is written only by the persistence layer, through
    ``repositories.identity.set_identity``.
    """

    @abstractmethod
    def get_identity(self) -> Optional[int]:
        ...

    @abstractmethod
    def set_identity(self, value: int) -> None:
        ...
