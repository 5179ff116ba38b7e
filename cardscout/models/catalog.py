"""
Catalog models.

A Catalog is one generated snapshot of priced cards. It is created once
per load and replaced wholesale on reload, never patched in place.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from cardscout.models.card import CardRecord


@dataclass(frozen=True, slots=True)
class CatalogInfo:
    """Freshness metadata for a loaded catalog."""

    generated_at: str
    total_cards: int
    min_price: float


@dataclass(frozen=True, slots=True)
class Catalog:
    """
    An ordered, read-only collection of card records plus metadata.

    Attributes:
        generated_at: When the catalog was generated (ISO timestamp)
        min_price: Price cutoff used when the catalog was generated
        total_cards: Card count as reported by the generator
        cards: Card records in catalog order
    """

    generated_at: str
    min_price: float
    total_cards: int
    cards: tuple[CardRecord, ...]

    def info(self) -> CatalogInfo:
        return CatalogInfo(
            generated_at=self.generated_at,
            total_cards=self.total_cards,
            min_price=self.min_price,
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Catalog":
        """
        Build a catalog from the generated JSON document.

        Raises:
            KeyError: If the "cards" list or a card's id/name is missing
            TypeError: If "cards" is not a list of objects
            ValueError: If a price is not numeric
        """
        cards = tuple(CardRecord.from_dict(card) for card in raw["cards"])
        return cls(
            generated_at=str(raw.get("generatedAt", "")),
            min_price=float(raw.get("minPrice", 0)),
            total_cards=int(raw.get("totalCards", len(cards))),
            cards=cards,
        )
