from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from petapp.api.metrics import router as metrics_router
from petapp.api.pets import router as pets_router
from petapp.config import get_settings
from petapp.observability.logging import configure_logging
from petapp.observability.middleware import RequestContextMiddleware
from petapp.rendering import templates
from petapp.services.pet_store import PetStore, get_pet_store


app = FastAPI(title="Pet Board", version="0.1.0")
app.add_middleware(RequestContextMiddleware)
app.mount("/static", StaticFiles(directory=str(Path(__file__).parent / "static")), name="static")
app.include_router(pets_router)
app.include_router(metrics_router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, log_file=settings.log_path)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, store: PetStore = Depends(get_pet_store)) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"pets": store.list_pets()})


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
