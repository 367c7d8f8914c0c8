"""Exceptions raised by catalog entities."""


class EntityValidationError(ValueError):
    """Raised when an atomic update contains at least one invalid field."""

    def __init__(self, errors: dict[str, list[str]], entity_name: str = "entity") -> None:
        self.errors = errors
        self.entity_name = entity_name
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid {entity_name} fields: {fields}")


class InvalidProductGroupError(ValueError):
    """Raised when a value that is not a product group is used as one."""


class UnknownValidatorError(KeyError):
    """Raised when a field validator table names an unregistered validator."""
