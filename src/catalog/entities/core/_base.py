import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, ClassVar

import sqlalchemy as sa
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from src.catalog.entities.core.errors import EntityValidationError
from src.catalog.entities.core.validators import run_validators

FieldErrors = dict[str, list[str]]


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier.

    Subclasses declare their fields as pydantic fields and describe validation
    declaratively through ``get_field_validators``. Field changes after
    construction go through ``update``, which validates the incoming data
    against that table before anything is assigned.
    """

    model_config = ConfigDict(validate_assignment=True)

    COLLECTION: ClassVar[str] = ""
    TIMESTAMP_FIELDS: ClassVar[frozenset[str]] = frozenset({"created_at", "updated_at"})

    id: str = PydanticField(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))

    def __init__(self, /, **data: Any) -> None:
        # Only the constructor checks the table; assignment and model_validate do not
        errors = self.validate_data(data)
        if errors:
            raise EntityValidationError(errors, type(self).__name__)
        super().__init__(**data)

    @classmethod
    def get_fields(cls) -> list[str]:
        """Names of the fields the generic update path may assign."""
        return [name for name in cls.model_fields if name not in cls.TIMESTAMP_FIELDS]

    @classmethod
    def get_field_validators(cls) -> dict[str, list[str]]:
        return {}

    @classmethod
    def validate_data(cls, data: Mapping[str, Any]) -> FieldErrors:
        """Run the validator table over the known fields present in ``data``."""
        validators = cls.get_field_validators()
        errors: FieldErrors = {}
        for name in cls.get_fields():
            if name not in data:
                continue
            messages = run_validators(data[name], validators.get(name, ()))
            if messages:
                errors[name] = messages
        return errors

    def update(self, data: Mapping[str, Any], is_atomic: bool = True) -> FieldErrors:
        """Validate and assign the known fields in ``data``.

        Unknown keys are ignored. With ``is_atomic`` any invalid field raises
        ``EntityValidationError`` and nothing is assigned; otherwise the valid
        fields are assigned and the errors of the rest are returned.
        """
        fields = self.get_fields()
        known = {name: value for name, value in data.items() if name in fields}
        errors = self.validate_data(known)

        # Coerce on a draft so a type failure cannot leave a partial update behind
        draft = self.model_copy()
        coerced: dict[str, Any] = {}
        for name, value in known.items():
            if name in errors:
                continue
            try:
                setattr(draft, name, value)
            except ValidationError as e:
                errors[name] = [error["msg"] for error in e.errors()]
                continue
            coerced[name] = getattr(draft, name)

        entity_name = type(self).__name__
        if errors:
            if is_atomic:
                logger.debug(f"Rejected atomic update of {entity_name} {self.id}: {errors}")
                raise EntityValidationError(errors, entity_name)
            logger.warning(
                f"Skipping invalid fields on {entity_name} {self.id}: {sorted(errors)}"
            )

        for name, value in coerced.items():
            setattr(self, name, value)
        if coerced:
            self.updated_at = datetime.now(UTC)

        return errors


class EntityTable(SQLModel, table=False):
    """Base entity class with auto-generated UUID identifier."""

    id: str = Field(
        primary_key=True,
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
