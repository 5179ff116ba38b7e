from collections.abc import Callable
from typing import Any

import pytest

from cardscout.models.card import CardRecord, VariantPrice
from cardscout.models.catalog import Catalog


def _make_card(
    card_id: str,
    name: str,
    number: str = "1",
    set_name: str = "Base Set",
    price: float = 10.0,
    rarity: str = "Rare",
    **fields: Any,
) -> CardRecord:
    prices = {"holofoil": VariantPrice(market=price)} if price > 0 else {}
    return CardRecord(
        id=card_id,
        name=name,
        number=number,
        set_name=set_name,
        rarity=rarity,
        prices=prices,
        **fields,
    )


@pytest.fixture
def make_card() -> Callable[..., CardRecord]:
    """Factory for card records with a single holofoil price."""
    return _make_card


@pytest.fixture
def charizards() -> list[CardRecord]:
    """Two Base Set Charizard printings with very different prices."""
    return [
        _make_card("a", "Charizard", number="4/102", set_name="Base Set", price=300.0),
        _make_card(
            "b",
            "Charizard",
            number="4/102",
            set_name="Base Set (Shadowless)",
            price=5000.0,
        ),
    ]


@pytest.fixture
def sample_catalog(charizards: list[CardRecord]) -> Catalog:
    """Small catalog covering number, set and name queries."""
    cards = [
        *charizards,
        _make_card("c", "Pikachu", number="58/102", set_name="Base Set", price=5.0),
        _make_card("d", "Pikachu VMAX", number="44/185", set_name="Vivid Voltage", price=50.0),
        _make_card("e", "Dark Charizard", number="4/82", set_name="Team Rocket", price=400.0),
        _make_card("f", "Latias", number="8/68", set_name="Hidden Fates", rarity="Rare Holo"),
        _make_card("g", "Latios", number="9/68", set_name="Hidden Fates", rarity="Rare Holo"),
        _make_card("h", "Blastoise", number="2/102", set_name="Base Set", price=120.0),
        _make_card("i", "Umbreon VMAX", number="215/203", set_name="Evolving Skies", price=900.0),
    ]
    return Catalog(
        generated_at="2024-06-01T00:00:00Z",
        min_price=10.0,
        total_cards=len(cards),
        cards=tuple(cards),
    )


@pytest.fixture
def catalog_json() -> dict[str, Any]:
    """Catalog document in the generated cards-data.json shape."""
    return {
        "generatedAt": "2024-06-01T00:00:00Z",
        "minPrice": 10,
        "totalCards": 2,
        "cards": [
            {
                "id": "base1-4",
                "name": "Charizard",
                "rarity": "Rare Holo",
                "number": "4",
                "setId": "base1",
                "setName": "Base Set",
                "series": "Base",
                "releaseDate": "1999/01/09",
                "imageSmall": "https://images.example/base1/4.png",
                "imageLarge": "https://images.example/base1/4_hires.png",
                "tcgplayerUrl": "https://prices.example/base1-4",
                "priceUpdatedAt": "2024/05/31",
                "prices": {
                    "holofoil": {"market": 350.5, "low": 200, "high": 999.99},
                    "1stEditionHolofoil": {"market": 4100, "low": None, "high": None},
                },
                "highestPrice": 4100,
            },
            {
                "id": "base1-58",
                "name": "Pikachu",
                "number": "58",
                "setId": "base1",
                "setName": "Base Set",
                "series": "Base",
                "releaseDate": "1999/01/09",
                "prices": {},
                "highestPrice": 0,
            },
        ],
    }
