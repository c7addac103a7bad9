"""Dog listing DTOs, pure Pydantic. Mirrors the remote catalog service."""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


DogId = int | str


class DogRead(BaseModel):
    model_config = {"from_attributes": True}

    id: DogId
    name: str
    image: str = ""
    breed: str = ""
    price: float = 0.0


class DogCreate(BaseModel):
    name: str
    image: str
    breed: str
    price: float = Field(ge=0)

    @field_validator("name", "image", "breed")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class DogUpdate(DogCreate):
    """Full merged record for ``PUT /admin``.

    Listings may have been stored without an image, so only name and breed
    are required to be non-blank here.
    """

    id: DogId
    image: str = ""

    @field_validator("name", "breed")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @classmethod
    def from_dog(cls, dog: DogRead) -> "DogUpdate":
        return cls(id=dog.id, name=dog.name, image=dog.image, breed=dog.breed, price=dog.price)


class DogList(BaseModel):
    """One page of ``GET /dogs``.

    ``total`` and ``has_more`` are optional; older backends only send ``dogs``.
    """

    dogs: list[DogRead] = Field(default_factory=list)
    total: int | None = None
    has_more: bool | None = None

    @field_validator("dogs", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return v or []

    def breeds(self) -> list[str]:
        return sorted({d.breed for d in self.dogs if d.breed})
