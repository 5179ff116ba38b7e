"""
Card search API endpoints.

Thin wrappers over CardSearchService. An unloaded catalog is not an
error here: searches return an empty list and the caller falls back to
another data source.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from cardscout.api.dependencies import get_search_service
from cardscout.models.card import CardRecord
from cardscout.services.card_search import CardSearchService

router = APIRouter(prefix="/cards", tags=["cards"])


class VariantPriceResponse(BaseModel):
    """Prices for one printing variant."""

    market: float
    low: float | None = None
    high: float | None = None


class CardResponse(BaseModel):
    """A card record as returned to clients."""

    id: str
    name: str
    rarity: str
    number: str
    set_id: str
    set_name: str
    series: str
    release_date: str
    image_small: str
    image_large: str
    tcgplayer_url: str
    price_updated_at: str
    prices: dict[str, VariantPriceResponse] = Field(default_factory=dict)
    highest_price: float

    @classmethod
    def from_record(cls, card: CardRecord) -> "CardResponse":
        return cls(
            id=card.id,
            name=card.name,
            rarity=card.rarity,
            number=card.number,
            set_id=card.set_id,
            set_name=card.set_name,
            series=card.series,
            release_date=card.release_date,
            image_small=card.image_small,
            image_large=card.image_large,
            tcgplayer_url=card.tcgplayer_url,
            price_updated_at=card.price_updated_at,
            prices={
                key: VariantPriceResponse(market=p.market, low=p.low, high=p.high)
                for key, p in card.prices.items()
            },
            highest_price=card.highest_price,
        )


class SearchResponse(BaseModel):
    """Search results, best first."""

    query: str
    ready: bool
    count: int
    cards: list[CardResponse] = Field(default_factory=list)


def _respond(query: str, ready: bool, cards: list[CardRecord]) -> SearchResponse:
    return SearchResponse(
        query=query,
        ready=ready,
        count=len(cards),
        cards=[CardResponse.from_record(card) for card in cards],
    )


@router.get("/search", response_model=SearchResponse)
async def search_cards(
    service: Annotated[CardSearchService, Depends(get_search_service)],
    q: Annotated[str, Query(max_length=200)] = "",
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> SearchResponse:
    """
    Smart search: card numbers ("4/102"), set + number ("base set 4"),
    or names ("charizard").
    """
    return _respond(q, service.is_ready(), service.smart_search(q, limit=limit))


@router.get("/fuzzy", response_model=SearchResponse)
async def fuzzy_search_cards(
    service: Annotated[CardSearchService, Depends(get_search_service)],
    q: Annotated[str, Query(max_length=200)] = "",
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> SearchResponse:
    """Plain approximate name/set/rarity search."""
    return _respond(q, service.is_ready(), service.search(q, limit=limit))
