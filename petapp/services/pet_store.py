from __future__ import annotations

import logging
import re

from petapp.models.schemas import Pet
from petapp.observability.metrics import get_metrics

_AGE_PATTERN = re.compile(r"[+-]?[0-9]+")
_NUMERIC_ID = re.compile(r"[0-9]+")

# Same bounds as a 64-bit signed integer.
_AGE_MIN = -(2**63)
_AGE_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


class InvalidAgeError(ValueError):
    """Raised when the submitted age is not a plain base-10 integer."""


def parse_age(raw: str | None) -> int:
    # int() alone would also accept whitespace and underscores.
    if raw is None or not _AGE_PATTERN.fullmatch(raw):
        raise InvalidAgeError(f"invalid age {raw!r}")
    try:
        age = int(raw)
    except ValueError as exc:
        # Digit strings past the interpreter's conversion limit.
        raise InvalidAgeError("age out of range") from exc
    if not _AGE_MIN <= age <= _AGE_MAX:
        raise InvalidAgeError("age out of range")
    return age


class PetStore:
    """Process-local pet records keyed by id. Not persisted; resets on restart."""

    def __init__(self) -> None:
        self._pets: dict[str, Pet] = {}
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._pets)

    def _next_id(self) -> str:
        self._last_id += 1
        while str(self._last_id) in self._pets:
            self._last_id += 1
        return str(self._last_id)

    def add_pet(self, name: str, species: str, age: int) -> Pet:
        pet = Pet(id=self._next_id(), name=name, species=species, age=age)
        self._pets[pet.id] = pet
        get_metrics().observe_pet_added()
        logger.info("pet.added", extra={"pet_id": pet.id, "pet_name": name, "species": species, "age": age})
        return pet

    def edit_pet(self, pet_id: str, name: str, species: str, age: int) -> Pet:
        created = pet_id not in self._pets
        pet = Pet(id=pet_id, name=name, species=species, age=age)
        self._pets[pet_id] = pet
        get_metrics().observe_pet_edited()
        logger.info(
            "pet.edited",
            extra={"pet_id": pet_id, "pet_name": name, "species": species, "age": age, "created": created},
        )
        return pet

    def delete_pet(self, pet_id: str) -> bool:
        removed = self._pets.pop(pet_id, None) is not None
        if removed:
            get_metrics().observe_pet_deleted()
        logger.info("pet.deleted", extra={"pet_id": pet_id, "removed": removed})
        return removed

    def get_pet(self, pet_id: str) -> Pet | None:
        return self._pets.get(pet_id)

    def list_pets(self) -> list[Pet]:
        return sorted(self._pets.values(), key=_sort_key)

    def clear(self) -> None:
        self._pets.clear()
        self._last_id = 0


def _sort_key(pet: Pet) -> tuple[int, int, str]:
    # Ids created through edit_pet may be arbitrary strings; keep them after numeric ids.
    # Numeric ids compare by (length, digits) so arbitrarily long ids never go through int().
    if _NUMERIC_ID.fullmatch(pet.id):
        digits = pet.id.lstrip("0") or "0"
        return (0, len(digits), digits)
    return (1, 0, pet.id)


_STORE: PetStore | None = None


def get_pet_store() -> PetStore:
    global _STORE
    if _STORE is None:
        _STORE = PetStore()
    return _STORE


def set_pet_store(store: PetStore | None) -> None:
    """Swap the shared store (used by tests)."""

    global _STORE
    _STORE = store
