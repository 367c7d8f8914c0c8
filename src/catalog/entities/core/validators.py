"""Named field validators used by entity validator tables.

Each validator takes a value and returns an error message, or ``None`` when the
value passes. Entities refer to validators by name, e.g.
``{"price": ["NonEmpty", "Number"]}``.
"""

from collections.abc import Callable, Iterable, Sized
from decimal import Decimal, InvalidOperation
from typing import Any

from src.catalog.entities.core.errors import UnknownValidatorError

Validator = Callable[[Any], str | None]


def _as_number(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    if number.is_nan() or number.is_infinite():
        return None
    return number


def non_empty(value: Any) -> str | None:
    if value is None:
        return "must not be empty"
    if isinstance(value, str):
        return "must not be empty" if not value.strip() else None
    if isinstance(value, Sized) and len(value) == 0:
        return "must not be empty"
    return None


def number(value: Any) -> str | None:
    return None if _as_number(value) is not None else "must be a number"


def non_negative(value: Any) -> str | None:
    parsed = _as_number(value)
    if parsed is not None and parsed < 0:
        return "must not be negative"
    return None


VALIDATORS: dict[str, Validator] = {
    "NonEmpty": non_empty,
    "Number": number,
    "NonNegative": non_negative,
}


def get_validator(name: str) -> Validator:
    try:
        return VALIDATORS[name]
    except KeyError:
        raise UnknownValidatorError(name) from None


def run_validators(value: Any, names: Iterable[str]) -> list[str]:
    """Run the named validators against ``value`` and collect their messages.

    ``NonEmpty`` failures stop the chain: an empty value is not also reported
    as a non-number.
    """
    errors = []
    for name in names:
        message = get_validator(name)(value)
        if message is None:
            continue
        errors.append(message)
        if name == "NonEmpty":
            break
    return errors
