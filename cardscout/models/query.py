from dataclasses import dataclass
from enum import Enum


class QueryType(str, Enum):
    """What a search query is asking for."""

    CARD_NUMBER = "card-number"  # "25/102"
    SET_NUMBER = "set-number"  # "base set 4", "charizard #4"
    NAME = "name"  # anything else


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """
    A classified search query.

    Attributes:
        type: Which lookup strategy applies
        card_number: Normalized card number (no leading zeros)
        set_size: Printed set size from a "25/102" query
        set_hint: Text believed to name the card's set
        name_query: Text to use for a name search
        original_query: The raw query, kept for fallback
    """

    type: QueryType
    original_query: str
    name_query: str = ""
    card_number: str | None = None
    set_size: str | None = None
    set_hint: str | None = None
