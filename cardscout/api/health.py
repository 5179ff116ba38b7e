"""
Health check endpoints.

Provides liveness and readiness probes. Readiness reflects whether the
card catalog and its search indexes are loaded.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from cardscout.api.dependencies import get_search_service
from cardscout.services.card_search import CardSearchService

router = APIRouter(tags=["health"])


class CatalogInfoResponse(BaseModel):
    """Freshness info for the loaded catalog."""

    generated_at: str
    total_cards: int
    min_price: float


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    catalog_info: CatalogInfoResponse | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check the catalog.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    service: Annotated[CardSearchService, Depends(get_search_service)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns ready with catalog info once the catalog is loaded.
    Returns 503 while it is loading or if it was unavailable.
    """
    info = service.get_catalog_info()
    if info is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog=service.state.value)

    return HealthResponse(
        status="ready",
        catalog=service.state.value,
        catalog_info=CatalogInfoResponse(
            generated_at=info.generated_at,
            total_cards=info.total_cards,
            min_price=info.min_price,
        ),
    )
