"""Typed asynchronous HTTP response pipeline."""

from .body import JsonBody, ParseBody, parse_body_as
from .client import Client
from .response import ApiResponse, ApiResult, ResultState


__all__ = [
    "ApiResponse",
    "ApiResult",
    "Client",
    "JsonBody",
    "ParseBody",
    "ResultState",
    "parse_body_as",
]
