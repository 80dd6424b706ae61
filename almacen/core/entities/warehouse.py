"""Warehouse entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Warehouse(BaseModel):
    """A physical location that holds parts."""

    id: int | None = None
    name: str
    address: str
    department: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
