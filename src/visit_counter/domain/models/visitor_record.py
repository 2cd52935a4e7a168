"""Visitor record domain model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class VisitorRecord(BaseModel):
    """A stored visitor: one client IP and how often it was seen."""

    model_config = ConfigDict(frozen=True)

    id: int
    ip: str
    visits: int = 1
    created_at: datetime | None = None
    updated_at: datetime | None = None
