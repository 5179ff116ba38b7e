from typing import Any

import pytest

from cardscout.models.card import CardRecord, VariantPrice, compute_highest_price
from cardscout.models.catalog import Catalog, CatalogInfo


class TestHighestPrice:
    def test_max_market_across_variants(self) -> None:
        """highest_price is the max market price over all variants."""
        card = CardRecord(
            id="x",
            name="Lugia",
            prices={
                "normal": VariantPrice(market=12.5),
                "holofoil": VariantPrice(market=80.0, low=60.0, high=120.0),
                "reverseHolofoil": VariantPrice(market=30.0),
            },
        )

        assert card.highest_price == 80.0

    def test_zero_without_prices(self) -> None:
        """Cards without any variant price have highest_price 0."""
        assert CardRecord(id="x", name="Lugia").highest_price == 0
        assert compute_highest_price({}) == 0

    def test_cannot_be_overridden(self) -> None:
        """highest_price is not a constructor argument."""
        with pytest.raises(TypeError):
            CardRecord(id="x", name="Lugia", highest_price=99.0)  # type: ignore[call-arg]

    def test_records_are_immutable(self) -> None:
        """Card records are frozen after construction."""
        card = CardRecord(id="x", name="Lugia")

        with pytest.raises(AttributeError):
            card.name = "Ho-Oh"  # type: ignore[misc]


class TestSetSize:
    def test_suffix_after_slash(self) -> None:
        assert CardRecord(id="x", name="Charizard", number="4/102").set_size == "102"

    def test_none_without_slash(self) -> None:
        assert CardRecord(id="x", name="Charizard", number="4").set_size is None


class TestCardFromDict:
    def test_reads_catalog_shape(self, catalog_json: dict[str, Any]) -> None:
        """camelCase catalog keys map onto record fields."""
        card = CardRecord.from_dict(catalog_json["cards"][0])

        assert card.id == "base1-4"
        assert card.set_id == "base1"
        assert card.set_name == "Base Set"
        assert card.image_large.endswith("4_hires.png")
        assert card.prices["holofoil"] == VariantPrice(market=350.5, low=200.0, high=999.99)
        assert card.prices["1stEditionHolofoil"].low is None

    def test_recomputes_highest_price(self, catalog_json: dict[str, Any]) -> None:
        """Stored highestPrice is ignored in favour of the variant prices."""
        raw = dict(catalog_json["cards"][0], highestPrice=1)

        assert CardRecord.from_dict(raw).highest_price == 4100

    def test_missing_rarity_defaults_to_unknown(self, catalog_json: dict[str, Any]) -> None:
        card = CardRecord.from_dict(catalog_json["cards"][1])

        assert card.rarity == "Unknown"
        assert card.prices == {}
        assert card.highest_price == 0

    def test_skips_variants_without_market(self) -> None:
        card = CardRecord.from_dict(
            {
                "id": "x",
                "name": "Mew",
                "prices": {"normal": {"market": None, "low": 1}, "holofoil": {"market": 20}},
            }
        )

        assert list(card.prices) == ["holofoil"]

    def test_skips_variants_without_positive_market(self) -> None:
        """Zero or negative market prices are dropped, so highest_price stays 0."""
        card = CardRecord.from_dict(
            {
                "id": "x",
                "name": "Mew",
                "prices": {"normal": {"market": -3}, "holofoil": {"market": 0}},
            }
        )

        assert card.prices == {}
        assert card.highest_price == 0

    def test_null_text_fields_become_empty(self) -> None:
        card = CardRecord.from_dict(
            {
                "id": "x",
                "name": "Charizard",
                "number": "4/102",
                "setId": None,
                "setName": None,
                "series": None,
                "imageSmall": None,
                "tcgplayerUrl": None,
            }
        )

        assert card.set_name == ""
        assert card.set_id == ""
        assert card.series == ""
        assert card.image_small == ""
        assert card.tcgplayer_url == ""

    def test_missing_id_raises(self) -> None:
        with pytest.raises(KeyError):
            CardRecord.from_dict({"name": "Mew"})


class TestCatalog:
    def test_from_dict(self, catalog_json: dict[str, Any]) -> None:
        catalog = Catalog.from_dict(catalog_json)

        assert catalog.generated_at == "2024-06-01T00:00:00Z"
        assert catalog.min_price == 10.0
        assert catalog.total_cards == 2
        assert [c.name for c in catalog.cards] == ["Charizard", "Pikachu"]

    def test_total_defaults_to_card_count(self, catalog_json: dict[str, Any]) -> None:
        del catalog_json["totalCards"]

        assert Catalog.from_dict(catalog_json).total_cards == 2

    def test_info(self, catalog_json: dict[str, Any]) -> None:
        info = Catalog.from_dict(catalog_json).info()

        assert info == CatalogInfo(
            generated_at="2024-06-01T00:00:00Z",
            total_cards=2,
            min_price=10.0,
        )
