"""
models/person.py
----------------
Domain model for people and their family relations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from models.address import Address
from models.entity import Entity


@dataclass(eq=False, repr=False)
class Person(Entity):
    """
    A person, optionally linked to addresses, a spouse and children.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        dob: Timezone-aware date and time of birth.
        salary: Yearly salary (default: 0).
        email: Optional e-mail address.
        home_address: Owned home `Address`, if any.
        business_address: Owned business `Address`, if any.
        spouse: Referenced spouse, if any.

    Two people are equal when their names match and they were born at the
    same instant, whatever offset each `dob` carries. The identity does
    not take part in equality.
    """
    first_name: str
    last_name: str
    dob: datetime
    salary: Decimal = Decimal("0")
    email: Optional[str] = None
    home_address: Optional[Address] = None
    business_address: Optional[Address] = None
    spouse: Optional["Person"] = None
    _id: Optional[int] = field(default=None, init=False)
    _children: list = field(default_factory=list, init=False)
    _parent: Optional["Person"] = field(default=None, init=False)

    # ── IDENTITY ──────────────────────────────────────────

    @property
    def id(self) -> Optional[int]:
        return self._id

    def get_identity(self) -> Optional[int]:
        return self._id

    def set_identity(self, value: int) -> None:
        self._id = value

    # ── FAMILY ────────────────────────────────────────────

    def add_child(self, child: "Person") -> None:
        """Attach `child` to this person and point its parent reference here."""
        if child not in self._children:
            self._children.append(child)
        child._parent = self

    @property
    def children(self) -> tuple:
        return tuple(self._children)

    @property
    def parent(self) -> Optional["Person"]:
        """The person whose `add_child` adopted this one."""
        return self._parent

    # ── EQUALITY ──────────────────────────────────────────

    def _dob_utc(self) -> datetime:
        return self.dob.astimezone(timezone.utc)

    def __eq__(self, other) -> bool:
        if self is other:
            return True
        if not isinstance(other, Person):
            return NotImplemented
        return (
            self.first_name == other.first_name
            and self.last_name == other.last_name
            and self._dob_utc() == other._dob_utc()
        )

    def __hash__(self) -> int:
        return hash((self.first_name, self.last_name, self._dob_utc()))

    def __repr__(self) -> str:
        return (
            f"Person(id={self._id!r}, first_name={self.first_name!r}, "
            f"last_name={self.last_name!r}, dob={self.dob.isoformat()})"
        )
