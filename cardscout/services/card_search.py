"""
Hybrid card search service.

Owns one loaded catalog plus its number and fuzzy indexes, and answers
free-text queries against them.

Search policy:
1. Classify the query (card number, set + number, or name)
2. Number queries go to the number index, ranked by highest price
3. Name queries take exact substring hits first, supplemented with fuzzy
   hits only when exact hits are scarce
4. A number query that finds nothing is retried as a name search on the
   raw query

INVARIANTS:
- Searching never raises and never mutates state
- The catalog and both indexes are swapped together as one snapshot
- Concurrent loads collapse into a single fetch
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from cardscout.config import EXACT_MATCH_SUFFICIENT, FUZZY_SUPPLEMENT_LIMIT, settings
from cardscout.models.card import CardRecord
from cardscout.models.catalog import Catalog, CatalogInfo
from cardscout.models.query import ParsedQuery, QueryType
from cardscout.services.catalog_loader import CatalogSource
from cardscout.services.fuzzy_index import FuzzyIndex, FuzzyOptions
from cardscout.services.number_index import NumberIndex
from cardscout.services.query_parser import match_set_name, parse_query

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Lifecycle of the service's catalog."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SearchSnapshot:
    """A catalog and the indexes built from it."""

    catalog: Catalog
    number_index: NumberIndex
    fuzzy_index: FuzzyIndex

    @classmethod
    def build(
        cls,
        catalog: Catalog,
        fuzzy_weights: dict[str, float] | None = None,
        fuzzy_options: FuzzyOptions | None = None,
    ) -> "SearchSnapshot":
        return cls(
            catalog=catalog,
            number_index=NumberIndex.build(catalog.cards),
            fuzzy_index=FuzzyIndex.build(catalog.cards, fuzzy_weights, fuzzy_options),
        )


def _by_price(cards: list[CardRecord] | tuple[CardRecord, ...]) -> list[CardRecord]:
    return sorted(cards, key=lambda c: c.highest_price, reverse=True)


class CardSearchService:
    """
    Searchable card catalog.

    Create one per process and share it. Call load_catalog() once (it is
    safe to call repeatedly and concurrently), then search synchronously.

    Example:
        >>> service = CardSearchService(FileCatalogSource("data/cards-data.json"))
        >>> await service.load_catalog()
        >>> [c.name for c in service.smart_search("base set 4")]
        ['Charizard', 'Charizard']
    """

    def __init__(
        self,
        source: CatalogSource,
        fuzzy_weights: dict[str, float] | None = None,
        fuzzy_options: FuzzyOptions | None = None,
    ) -> None:
        """
        Initialize an unloaded service.

        Args:
            source: Async callable returning a Catalog, or None if unavailable
            fuzzy_weights: Field weights for the fuzzy index
            fuzzy_options: Threshold/distance/min length for the fuzzy index
        """
        self._source = source
        self._fuzzy_weights = fuzzy_weights
        self._fuzzy_options = fuzzy_options
        self._snapshot: SearchSnapshot | None = None
        self._state = LoadState.UNLOADED
        self._inflight: asyncio.Task[None] | None = None

    # =========================================================================
    # Loading
    # =========================================================================

    @property
    def state(self) -> LoadState:
        return self._state

    def _start_load(self) -> asyncio.Task[None]:
        # No await between the check in the caller and this assignment, so
        # only one task can ever be in flight on the event loop.
        self._state = LoadState.LOADING
        self._inflight = asyncio.create_task(self._run_load())
        return self._inflight

    async def _run_load(self) -> None:
        snapshot: SearchSnapshot | None = None
        try:
            catalog = await self._source()
            if catalog is not None:
                snapshot = SearchSnapshot.build(catalog, self._fuzzy_weights, self._fuzzy_options)
        except Exception as e:
            logger.error("Failed to load card catalog: %s", e)
            self._settle_failed()
            raise
        finally:
            self._inflight = None

        if snapshot is None:
            self._settle_failed()
            return

        self._snapshot = snapshot
        self._state = LoadState.LOADED
        logger.info(
            "Loaded %d cached cards (from %s)",
            snapshot.catalog.total_cards,
            snapshot.catalog.generated_at or "unknown date",
        )

    def _settle_failed(self) -> None:
        # A failed reload keeps serving the previous snapshot
        self._state = LoadState.LOADED if self._snapshot is not None else LoadState.FAILED

    async def load_catalog(self) -> None:
        """
        Load the catalog and build both indexes, once.

        Returns immediately after a completed load, successful or not; a
        failed load is not retried (use reload_catalog). Concurrent callers
        share the in-flight load. Cancelling a caller does not cancel the
        load itself.

        Raises:
            CatalogFormatError: If the fetched catalog could not be parsed
        """
        if self._state in (LoadState.LOADED, LoadState.FAILED):
            return
        task = self._inflight if self._inflight is not None else self._start_load()
        await asyncio.shield(task)

    async def reload_catalog(self) -> None:
        """
        Replace the catalog and indexes wholesale with a fresh load.

        Joins a load already in flight instead of starting a second one.
        If the new catalog is unavailable the previous one stays in use.

        Raises:
            CatalogFormatError: If the fetched catalog could not be parsed
        """
        task = self._inflight if self._inflight is not None else self._start_load()
        await asyncio.shield(task)

    def is_ready(self) -> bool:
        """True once a catalog and both indexes are available."""
        return self._snapshot is not None

    def get_catalog_info(self) -> CatalogInfo | None:
        """Freshness info for the loaded catalog, or None if not loaded."""
        if self._snapshot is None:
            return None
        return self._snapshot.catalog.info()

    def get_all_cards(self) -> tuple[CardRecord, ...]:
        """Every catalog card in catalog order (empty if not loaded)."""
        if self._snapshot is None:
            return ()
        return self._snapshot.catalog.cards

    def _ready_snapshot(self) -> SearchSnapshot | None:
        snapshot = self._snapshot
        if snapshot is None:
            logger.warning("Card catalog not loaded yet")
        return snapshot

    # =========================================================================
    # Searching
    # =========================================================================

    def search(self, query: str, limit: int | None = None) -> list[CardRecord]:
        """
        Plain fuzzy search with no classification or exact-first pass.

        Args:
            query: Free text
            limit: Maximum results, defaults to settings.default_search_limit
        """
        snapshot = self._ready_snapshot()
        if snapshot is None or not query.strip():
            return []

        limit = settings.default_search_limit if limit is None else limit
        return [m.card for m in snapshot.fuzzy_index.search(query, limit=limit)]

    def smart_search(self, query: str, limit: int | None = None) -> list[CardRecord]:
        """
        Hybrid search: number lookups, then exact-first name matching.

        Args:
            query: Free text ("25/102", "base set 4", "charizard #4", "pikachu")
            limit: Maximum results, defaults to settings.default_search_limit

        Returns:
            Matching cards, best first. Empty if the catalog isn't loaded.
        """
        snapshot = self._ready_snapshot()
        if snapshot is None or not query.strip():
            return []

        limit = settings.default_search_limit if limit is None else limit
        parsed = parse_query(query)

        if parsed.type is QueryType.CARD_NUMBER:
            results = self._search_card_number(snapshot, parsed)
        elif parsed.type is QueryType.SET_NUMBER:
            results = self._search_set_number(snapshot, parsed)
        else:
            results = self._search_by_name(snapshot, parsed.name_query)

        if not results and parsed.type is not QueryType.NAME:
            logger.debug("No %s match for %r, retrying as name search", parsed.type.value, query)
            results = self._search_by_name(snapshot, parsed.original_query)

        return results[:limit]

    def search_by_name(self, text: str) -> list[CardRecord]:
        """Exact-substring-first name search, supplemented by fuzzy hits."""
        snapshot = self._ready_snapshot()
        if snapshot is None:
            return []
        return self._search_by_name(snapshot, text)

    @staticmethod
    def _search_card_number(snapshot: SearchSnapshot, parsed: ParsedQuery) -> list[CardRecord]:
        bucket = snapshot.number_index.lookup(parsed.card_number or "")
        if parsed.set_size is not None:
            bucket = tuple(c for c in bucket if c.set_size == parsed.set_size)
        return _by_price(bucket)

    @staticmethod
    def _search_set_number(snapshot: SearchSnapshot, parsed: ParsedQuery) -> list[CardRecord]:
        bucket = snapshot.number_index.lookup(parsed.card_number or "")
        if parsed.set_hint:
            hint = parsed.set_hint
            bucket = tuple(c for c in bucket if match_set_name(hint, c.set_name))
        return _by_price(bucket)

    @staticmethod
    def _search_by_name(snapshot: SearchSnapshot, text: str) -> list[CardRecord]:
        needle = text.strip().lower()
        if not needle:
            return []

        exact = [c for c in snapshot.catalog.cards if needle in c.name.lower()]
        if not exact:
            matches = snapshot.fuzzy_index.search(text, limit=FUZZY_SUPPLEMENT_LIMIT)
            return [m.card for m in matches]

        # Exact name equality first, then most valuable
        exact.sort(key=lambda c: (c.name.lower() != needle, -c.highest_price))
        if len(exact) >= EXACT_MATCH_SUFFICIENT:
            return exact

        seen = {c.id for c in exact}
        matches = snapshot.fuzzy_index.search(text, limit=FUZZY_SUPPLEMENT_LIMIT)
        return exact + [m.card for m in matches if m.card.id not in seen]
