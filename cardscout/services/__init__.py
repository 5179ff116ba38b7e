"""
CardScout services.

Query classification, card indexes, catalog loading and hybrid search.
"""

from cardscout.services.card_search import CardSearchService, LoadState, SearchSnapshot
from cardscout.services.catalog_loader import (
    CatalogFormatError,
    CatalogSource,
    CatalogUnavailableError,
    FileCatalogSource,
    HttpCatalogSource,
    default_catalog_source,
    fetch_catalog,
    read_catalog_file,
    source_from_location,
)
from cardscout.services.fuzzy_index import FuzzyIndex, FuzzyMatch, FuzzyOptions
from cardscout.services.number_index import NumberIndex, normalize_card_number
from cardscout.services.query_parser import (
    SET_ABBREVIATIONS,
    is_likely_set_hint,
    match_set_name,
    parse_query,
)

__all__ = [
    # Hybrid search
    "CardSearchService",
    "LoadState",
    "SearchSnapshot",
    # Catalog loading
    "CatalogFormatError",
    "CatalogSource",
    "CatalogUnavailableError",
    "FileCatalogSource",
    "HttpCatalogSource",
    "default_catalog_source",
    "fetch_catalog",
    "read_catalog_file",
    "source_from_location",
    # Indexes
    "FuzzyIndex",
    "FuzzyMatch",
    "FuzzyOptions",
    "NumberIndex",
    "normalize_card_number",
    # Query classification
    "SET_ABBREVIATIONS",
    "is_likely_set_hint",
    "match_set_name",
    "parse_query",
]
