"""
repositories/exceptions.py
--------------------------
Errors raised by the repository layer.
"""


class PeopleDbError(Exception):
    """Base class for repository errors."""


class StatementNotDefined(PeopleDbError):
    """No declared or default SQL exists for an operation."""

    def __init__(self, operation, entity_name: str):
        super().__init__(f"SQL not defined for {operation.name} on {entity_name}")
        self.operation = operation
        self.entity_name = entity_name


class NoIdentityField(PeopleDbError):
    """The entity type does not designate an identity attribute."""

    def __init__(self, entity_name: str, message: str = ""):
        super().__init__(message or f"No identity field found on {entity_name}")
        self.entity_name = entity_name


class IdentityNotAssigned(NoIdentityField):
    """The entity has not been saved yet, so it has no identity to read."""

    def __init__(self, entity):
        super().__init__(type(entity).__name__, f"Entity has no identity yet: {entity!r}")
        self.entity = entity


class UnableToSave(PeopleDbError):
    """An insert, or one of the cascaded inserts it triggered, failed."""

    def __init__(self, entity):
        super().__init__(f"Tried to save entity: {entity!r}")
        self.entity = entity
