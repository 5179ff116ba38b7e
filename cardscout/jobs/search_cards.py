"""
Search the card catalog from the command line.

Loads the catalog once and prints ranked matches:

    python -m cardscout.jobs.search_cards "base set 4"
    python -m cardscout.jobs.search_cards pikachu --limit 5 --catalog data/cards-data.json
"""

import argparse
import asyncio
import logging

from cardscout.config import settings
from cardscout.models.card import CardRecord
from cardscout.services.card_search import CardSearchService
from cardscout.services.catalog_loader import default_catalog_source, source_from_location

logger = logging.getLogger(__name__)


def format_card_line(card: CardRecord) -> str:
    """One result line: name, set, number and highest price."""
    return f"{card.name} | {card.set_name} #{card.number} | ${card.highest_price:,.2f}"


async def run_search(
    query: str,
    limit: int,
    catalog: str | None = None,
    fuzzy_only: bool = False,
) -> list[CardRecord]:
    """Load the catalog from `catalog` (or settings) and run one search."""
    source = source_from_location(catalog) if catalog else default_catalog_source()
    service = CardSearchService(source)
    await service.load_catalog()

    if not service.is_ready():
        logger.warning("No card catalog available from %r", source)
        return []

    if fuzzy_only:
        return service.search(query, limit=limit)
    return service.smart_search(query, limit=limit)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Search the cached card price catalog")
    parser.add_argument("query", help='Card name, "25/102", "base set 4" or "charizard #4"')
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.default_search_limit,
        help="Maximum results to print",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog file path or URL (defaults to configured catalog)",
    )
    parser.add_argument(
        "--fuzzy",
        action="store_true",
        help="Plain fuzzy search, no number parsing or exact-first pass",
    )
    args = parser.parse_args(argv)

    results = asyncio.run(run_search(args.query, args.limit, args.catalog, args.fuzzy))

    if not results:
        print(f"No cards found for {args.query!r}")
        return

    for card in results:
        print(format_card_line(card))


if __name__ == "__main__":
    main()
