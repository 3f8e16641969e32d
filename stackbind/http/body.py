"""Body parser capability: turning a complete response body into a value."""

from functools import lru_cache
from typing import Any, Protocol, Self, TypeVar, cast, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from stackbind.exceptions import ParseError


__all__ = ["JsonBody", "ParseBody", "parse_body_as"]


T = TypeVar("T")


@runtime_checkable
class ParseBody(Protocol):
    """Something that can be built from a complete response body."""

    @classmethod
    def parse_body(cls, body: bytes) -> Self:
        """Parse the value from the body.

        Raises:
            ParseError: If the body does not match the type
        """
        ...


def _parse_error(target: str, error: ValidationError) -> ParseError:
    return ParseError(
        f"Cannot parse {target} from response body: {error.error_count()} error(s)",
        target=target,
        details={"errors": error.errors(include_url=False)},
    )


class JsonBody(BaseModel):
    """Pydantic model parsed from a JSON response body."""

    @classmethod
    def parse_body(cls, body: bytes) -> Self:
        try:
            return cls.model_validate_json(body)
        except ValidationError as e:
            raise _parse_error(cls.__name__, e) from e


@lru_cache(maxsize=128)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def parse_body_as(target: type[T], body: bytes) -> T:
    """Parse ``body`` into ``target``.

    Types implementing ``ParseBody`` parse themselves; ``bytes`` gets the raw
    buffer; anything else goes through a pydantic ``TypeAdapter`` as JSON.
    """
    if target is bytes:
        return cast(T, bytes(body))
    if isinstance(target, ParseBody):
        return cast(T, target.parse_body(body))
    try:
        return cast(T, _adapter_for(target).validate_json(body))
    except ValidationError as e:
        raise _parse_error(getattr(target, "__name__", repr(target)), e) from e
