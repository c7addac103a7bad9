"""Dashboard DTOs, pure Pydantic."""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from pawshop.api.schemas.dogs import DogRead


class Statistics(BaseModel):
    total_dogs: int = 0
    unique_breeds: int = 0
    breed_distribution: dict[str, int] = Field(default_factory=dict)
    total_inventory_value: float = 0.0
    average_price: float = 0.0


class DashboardResponse(BaseModel):
    dogs: list[DogRead] = Field(default_factory=list)
    statistics: Statistics | None = None

    @field_validator("dogs", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return v or []

    @field_validator("statistics", mode="before")
    @classmethod
    def empty_is_none(cls, v):
        return v or None
