"""
Card number index.

Groups catalog cards by normalized in-set number so number queries
("4/102", "base set 4") are a dictionary lookup instead of a scan.
"""

import re
from collections.abc import Iterable

from cardscout.models.card import CardRecord

_LEADING_DIGITS = re.compile(r"^0*(\d+)", re.ASCII)


def normalize_card_number(number: str) -> str:
    """
    Normalize a card number for comparison.

    Only the leading digit run matters: leading zeros are stripped and
    anything after the digits ("/102", letter suffixes) is ignored.
    Numbers without a leading digit ("SWSH050", "TG12") are returned
    unchanged.

    Examples:
        >>> normalize_card_number("025")
        '25'
        >>> normalize_card_number("000")
        '0'
        >>> normalize_card_number("4/102")
        '4'
    """
    match = _LEADING_DIGITS.match(number)
    return match.group(1) if match else number


class NumberIndex:
    """Read-only mapping of normalized number -> cards bearing that number."""

    def __init__(self, buckets: dict[str, tuple[CardRecord, ...]]) -> None:
        self._buckets = buckets

    @classmethod
    def build(cls, cards: Iterable[CardRecord]) -> "NumberIndex":
        """
        Group cards by normalized number, keeping catalog order per bucket.

        Cards with an empty number are left out of every bucket.
        """
        grouped: dict[str, list[CardRecord]] = {}
        for card in cards:
            if not card.number:
                continue
            grouped.setdefault(normalize_card_number(card.number), []).append(card)
        return cls({key: tuple(bucket) for key, bucket in grouped.items()})

    def lookup(self, normalized_number: str) -> tuple[CardRecord, ...]:
        """Cards with this normalized number, or an empty tuple."""
        return self._buckets.get(normalized_number, ())

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, normalized_number: object) -> bool:
        return normalized_number in self._buckets
