"""Decoding helpers shared by protocol models."""

from enum import Enum
from typing import Any, TypeVar

from stackbind.core.log_categories import PROTOCOL
from stackbind.core.logging import get_logger


logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


def decode_open_enum(enum_cls: type[E], value: Any, *, field: str) -> E:
    """Decode a service-controlled string into ``enum_cls``.

    Unrecognized strings decode to ``enum_cls.UNKNOWN`` with a warning
    instead of failing, so new server-side values do not break parsing.
    A null or missing value is ``UNKNOWN`` as well.

    Raises:
        ValueError: If ``value`` is neither a string nor null
    """
    unknown: E = getattr(enum_cls, "UNKNOWN")
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return unknown
    if not isinstance(value, str):
        raise ValueError(
            f"{field} must be a string, got {type(value).__name__}"
        )
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "unknown_enum_value",
            enum=enum_cls.__name__,
            field=field,
            value=value,
            category=PROTOCOL,
        )
        return unknown


def empty_as_none(value: Any) -> Any:
    """Treat an empty string as a missing value."""
    if value == "":
        return None
    return value
