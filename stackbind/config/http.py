"""HTTP client configuration settings."""

from pydantic import BaseModel, Field


class HTTPSettings(BaseModel):
    """HTTP client configuration settings.

    Controls timeouts, TLS verification and default headers of the
    transport client built by ``HTTPClientFactory``.
    """

    timeout_connect: float = Field(
        default=5.0,
        gt=0,
        description="Connection timeout in seconds",
    )

    timeout_read: float = Field(
        default=60.0,
        gt=0,
        description="Read timeout in seconds",
    )

    timeout_write: float = Field(
        default=30.0,
        gt=0,
        description="Write timeout in seconds",
    )

    timeout_pool: float = Field(
        default=30.0,
        gt=0,
        description="Timeout waiting for a connection from the pool, in seconds",
    )

    verify: bool | str = Field(
        default=True,
        description="TLS verification: True, False, or a path to a CA bundle",
    )

    user_agent: str = Field(
        default="stackbind",
        min_length=1,
        description="User-Agent header sent with every request",
    )

    compression_enabled: bool = Field(
        default=True,
        description="Enable compression for API requests (Accept-Encoding header)",
    )

    accept_encoding: str = Field(
        default="gzip, deflate",
        description="Accept-Encoding header value when compression is enabled",
    )
