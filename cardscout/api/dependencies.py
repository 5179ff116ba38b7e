from fastapi import HTTPException, Request, status

from cardscout.services.card_search import CardSearchService


def get_search_service(request: Request) -> CardSearchService:
    """The process-wide search service created in the app lifespan."""
    service: CardSearchService | None = getattr(request.app.state, "search_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search service is not initialized",
        )
    return service
