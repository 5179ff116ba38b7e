from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardscout.api import cards_router, health_router
from cardscout.config import settings
from cardscout.services.card_search import CardSearchService
from cardscout.services.catalog_loader import default_catalog_source


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the search service and load the catalog once at startup."""
    service = CardSearchService(default_catalog_source())
    app.state.search_service = service
    await service.load_catalog()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardscout"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
