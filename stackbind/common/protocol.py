"""JSON structures shared by all services."""

from pydantic import BaseModel, ConfigDict


class Link(BaseModel):
    """A link to a related resource."""

    model_config = ConfigDict(extra="ignore")

    href: str
    rel: str
