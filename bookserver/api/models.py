from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MessageBody(BaseModel):
    """Payload of a matched JSON route."""
    model_config = ConfigDict(extra="forbid")

    message: str


class ErrorBody(BaseModel):
    """Payload of the 404 fallback."""
    model_config = ConfigDict(extra="forbid")

    error: str
