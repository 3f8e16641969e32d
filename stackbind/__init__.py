from ._version import __version__
from .exceptions import (
    ApiError,
    ConfigurationError,
    HttpError,
    ParseError,
    StackbindError,
    TransportError,
)


__all__ = [
    "ApiError",
    "ConfigurationError",
    "HttpError",
    "ParseError",
    "StackbindError",
    "TransportError",
    "__version__",
]
