from cardscout.models.card import CardRecord, VariantPrice, compute_highest_price
from cardscout.models.catalog import Catalog, CatalogInfo
from cardscout.models.query import ParsedQuery, QueryType

__all__ = [
    "CardRecord",
    "VariantPrice",
    "compute_highest_price",
    "Catalog",
    "CatalogInfo",
    "ParsedQuery",
    "QueryType",
]
