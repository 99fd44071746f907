from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import PlainTextResponse

from petapp.models.schemas import PetsResponse
from petapp.rendering import FragmentRenderer, get_renderer
from petapp.services.pet_store import InvalidAgeError, PetStore, get_pet_store, parse_age

router = APIRouter(tags=["pets"])

logger = logging.getLogger(__name__)


@router.post("/add-pet")
async def add_pet(
    request: Request,
    name: str = Form(default=""),
    species: str = Form(default=""),
    age: str | None = Form(default=None),
    store: PetStore = Depends(get_pet_store),
    renderer: FragmentRenderer = Depends(get_renderer),
) -> Response:
    try:
        parsed_age = parse_age(age)
    except InvalidAgeError as exc:
        logger.error("pet.add.invalid_age", extra={"error": str(exc)})
        return PlainTextResponse("Invalid age", status_code=400)

    pet = store.add_pet(name=name, species=species, age=parsed_age)
    return renderer.render(request, "petListItem", pet)


@router.delete("/delete-pet/{pet_id}")
async def delete_pet(pet_id: str, store: PetStore = Depends(get_pet_store)) -> Response:
    store.delete_pet(pet_id)
    return Response(status_code=200)


@router.post("/edit-pet/{pet_id}")
async def edit_pet(
    request: Request,
    pet_id: str,
    name: str = Form(default=""),
    species: str = Form(default=""),
    age: str | None = Form(default=None),
    store: PetStore = Depends(get_pet_store),
    renderer: FragmentRenderer = Depends(get_renderer),
) -> Response:
    try:
        parsed_age = parse_age(age)
    except InvalidAgeError as exc:
        logger.error("pet.edit.invalid_age", extra={"pet_id": pet_id, "error": str(exc)})
        return PlainTextResponse("Invalid age", status_code=400)

    pet = store.edit_pet(pet_id, name=name, species=species, age=parsed_age)
    return renderer.render(request, "petListItem", pet)


@router.get("/edit-pet/{pet_id}")
async def get_edit_pet_form(
    request: Request,
    pet_id: str,
    store: PetStore = Depends(get_pet_store),
    renderer: FragmentRenderer = Depends(get_renderer),
) -> Response:
    pet = store.get_pet(pet_id)
    if pet is None:
        logger.warning("pet.edit_form.not_found", extra={"pet_id": pet_id})
        return PlainTextResponse("Pet not found", status_code=404)

    logger.info("pet.edit_form", extra={"pet_id": pet_id})
    return renderer.render(request, "editPetForm", pet)


@router.get("/pets")
async def list_pets_fragment(
    request: Request,
    store: PetStore = Depends(get_pet_store),
    renderer: FragmentRenderer = Depends(get_renderer),
) -> Response:
    return renderer.render(request, "petList", store.list_pets())


@router.get("/api/pets", response_model=PetsResponse)
async def list_pets(store: PetStore = Depends(get_pet_store)) -> PetsResponse:
    return PetsResponse(pets=store.list_pets())
