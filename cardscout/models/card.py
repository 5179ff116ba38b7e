"""
Card record models.

A CardRecord is one printed card from the generated price catalog,
together with its per-variant market prices.

INVARIANTS:
- CardRecord is immutable after construction
- highest_price == max(prices[*].market), or 0 when prices is empty
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class VariantPrice:
    """
    Market prices for one printing variant (e.g. "holofoil").

    Attributes:
        market: Current market price, always positive
        low: Lowest listed price, if known
        high: Highest listed price, if known
    """

    market: float
    low: float | None = None
    high: float | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "VariantPrice":
        low = raw.get("low")
        high = raw.get("high")
        return cls(
            market=float(raw["market"]),
            low=float(low) if low is not None else None,
            high=float(high) if high is not None else None,
        )


def compute_highest_price(prices: Mapping[str, VariantPrice]) -> float:
    """Highest market price across all variants, 0 when there are none."""
    return max((p.market for p in prices.values()), default=0.0)


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A single catalog entry with cached market prices.

    Attributes:
        id: Unique card identifier (e.g. "base1-4")
        name: Display name (e.g. "Charizard")
        rarity: Rarity label (e.g. "Rare Holo")
        number: In-set number, may carry a prefix or a "/size" suffix
        set_id: Set identifier (e.g. "base1")
        set_name: Set display name (e.g. "Base Set")
        series: Series name (e.g. "Base")
        release_date: Set release date as published
        image_small: Small image reference
        image_large: Large image reference
        tcgplayer_url: Marketplace URL
        price_updated_at: When the prices were last refreshed
        prices: Variant key -> VariantPrice
        highest_price: Max market price across variants (derived)
    """

    id: str
    name: str
    rarity: str = "Unknown"
    number: str = ""
    set_id: str = ""
    set_name: str = ""
    series: str = ""
    release_date: str = ""
    image_small: str = ""
    image_large: str = ""
    tcgplayer_url: str = ""
    price_updated_at: str = ""
    prices: dict[str, VariantPrice] = field(default_factory=dict)
    highest_price: float = field(init=False)

    def __post_init__(self) -> None:
        # Derived, never trusted from input
        object.__setattr__(self, "highest_price", compute_highest_price(self.prices))

    @property
    def set_size(self) -> str | None:
        """Printed set size after the slash in the number ("4/102" -> "102")."""
        if "/" not in self.number:
            return None
        return self.number.split("/", 1)[1]

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CardRecord":
        """
        Build a record from the catalog JSON shape (camelCase keys).

        Null text fields become empty strings. Variants without a positive
        market price are dropped.

        Raises:
            KeyError: If "id" or "name" is missing
            ValueError: If a variant market price is not numeric
        """
        prices = {
            key: VariantPrice.from_dict(value)
            for key, value in (raw.get("prices") or {}).items()
            if value and value.get("market") is not None and float(value["market"]) > 0
        }
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            rarity=raw.get("rarity") or "Unknown",
            number=str(raw.get("number") or ""),
            set_id=raw.get("setId") or "",
            set_name=raw.get("setName") or "",
            series=raw.get("series") or "",
            release_date=raw.get("releaseDate") or "",
            image_small=raw.get("imageSmall") or "",
            image_large=raw.get("imageLarge") or "",
            tcgplayer_url=raw.get("tcgplayerUrl") or "",
            price_updated_at=raw.get("priceUpdatedAt") or "",
            prices=prices,
        )
