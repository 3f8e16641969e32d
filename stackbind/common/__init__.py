"""Protocol pieces shared between services."""

from .decoding import decode_open_enum, empty_as_none
from .protocol import Link


__all__ = ["Link", "decode_open_enum", "empty_as_none"]
