"""Tests for the command-line search job."""

import json
from pathlib import Path
from typing import Any

import pytest

from cardscout.jobs.search_cards import format_card_line, main, run_search
from cardscout.models.card import CardRecord, VariantPrice


@pytest.fixture
def catalog_file(catalog_json: dict[str, Any], tmp_path: Path) -> Path:
    path = tmp_path / "cards-data.json"
    path.write_text(json.dumps(catalog_json), encoding="utf-8")
    return path


class TestFormatCardLine:
    def test_formats_price(self) -> None:
        card = CardRecord(
            id="base1-4",
            name="Charizard",
            number="4",
            set_name="Base Set",
            prices={"holofoil": VariantPrice(market=4100.0)},
        )

        assert format_card_line(card) == "Charizard | Base Set #4 | $4,100.00"


class TestRunSearch:
    @pytest.mark.asyncio
    async def test_smart_search_from_file(self, catalog_file: Path) -> None:
        results = await run_search("base 4", limit=10, catalog=str(catalog_file))

        assert [c.id for c in results] == ["base1-4"]

    @pytest.mark.asyncio
    async def test_fuzzy_only(self, catalog_file: Path) -> None:
        results = await run_search("pikachu", limit=10, catalog=str(catalog_file), fuzzy_only=True)

        assert [c.id for c in results] == ["base1-58"]

    @pytest.mark.asyncio
    async def test_missing_catalog_returns_empty(self, tmp_path: Path) -> None:
        results = await run_search("charizard", limit=10, catalog=str(tmp_path / "missing.json"))

        assert results == []


class TestMain:
    def test_prints_results(self, catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["charizard", "--catalog", str(catalog_file)])

        assert "Charizard | Base Set #4 | $4,100.00" in capsys.readouterr().out

    def test_prints_no_results(self, catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["zzzzzz", "--catalog", str(catalog_file)])

        assert "No cards found" in capsys.readouterr().out
