from __future__ import annotations

from pydantic import BaseModel


class Pet(BaseModel):
    id: str
    name: str
    species: str
    age: int


class PetsResponse(BaseModel):
    pets: list[Pet]
