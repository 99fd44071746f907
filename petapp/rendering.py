"""Named HTML fragments for HTMX partial updates.

Handlers ask for a fragment by name instead of a template path; the table
below maps each name to its Jinja template and the data it expects, so a
handler passing the wrong object fails loudly rather than rendering blanks.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from petapp.models.schemas import Pet

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class FragmentNotFoundError(LookupError):
    pass


class FragmentDataError(TypeError):
    pass


@dataclass(frozen=True)
class Fragment:
    template: str
    build_context: Callable[[Any], dict[str, Any] | None]


def _pet_context(data: Any) -> dict[str, Any] | None:
    if not isinstance(data, Pet):
        return None
    return {"id": data.id, "name": data.name, "species": data.species, "age": data.age}


def _pet_list_context(data: Any) -> dict[str, Any] | None:
    if not isinstance(data, list) or not all(isinstance(p, Pet) for p in data):
        return None
    return {"pets": data}


class FragmentRenderer:
    def __init__(self, env: Jinja2Templates, fragments: dict[str, Fragment]) -> None:
        self.env = env
        self.fragments = dict(fragments)

    def render(self, request: Request, name: str, data: Any, status_code: int = 200) -> Response:
        fragment = self.fragments.get(name)
        if fragment is None:
            raise FragmentNotFoundError(f"template {name} not found")

        context = fragment.build_context(data)
        if context is None:
            raise FragmentDataError(f"invalid data type for {name}")

        return self.env.TemplateResponse(request, fragment.template, context, status_code=status_code)


renderer = FragmentRenderer(
    templates,
    {
        "petListItem": Fragment("partials/pet_list_item.html", _pet_context),
        "editPetForm": Fragment("partials/edit_pet_form.html", _pet_context),
        "petList": Fragment("partials/pet_list.html", _pet_list_context),
    },
)


def get_renderer() -> FragmentRenderer:
    return renderer
