"""Compute service settings."""

from pydantic import BaseModel, Field, SecretStr, field_validator


class ComputeSettings(BaseModel):
    """Where the Compute API lives and how to authenticate against it."""

    endpoint: str | None = Field(
        default=None,
        description="Base URL of the Compute v2 API, e.g. https://cloud:8774/v2.1",
    )

    auth_token: SecretStr | None = Field(
        default=None,
        description="Pre-issued token sent as X-Auth-Token",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Compute endpoint must be an http(s) URL, got: {v}")
        return v.rstrip("/")
