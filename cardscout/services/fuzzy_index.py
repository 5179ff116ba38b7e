"""
Weighted fuzzy index over card name, set name and rarity.

Scores follow the usual approximate-search convention: 0 is a perfect
match and 1 is no match at all. A field's score is the edit cost of the
query against the closest substring of the field, divided by the query
length, plus a small penalty for how far into the field the match
starts. Substitutions cost two edits (a deletion plus an insertion), so
names one letter apart ("latias" / "latios") stay outside the threshold
while a dropped or doubled letter ("charzard") is still found.

Matched fields are combined as a weighted geometric product, so a strong
hit on a heavy field (name) dominates the ranking.

INVARIANTS:
- The index is a read-only snapshot of one catalog; rebuild on reload
- A card is returned only if at least one field is within the threshold
- Equal scores keep catalog order
"""

import logging
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rapidfuzz import fuzz

from cardscout.config import (
    FUZZY_DISTANCE,
    FUZZY_KEY_WEIGHTS,
    FUZZY_MIN_MATCH_LENGTH,
    FUZZY_THRESHOLD,
)
from cardscout.models.card import CardRecord

logger = logging.getLogger(__name__)

# Stand-in for a perfect (0.0) field score inside the product
EPSILON = sys.float_info.epsilon


@dataclass(frozen=True, slots=True)
class FuzzyOptions:
    """Matching parameters for a FuzzyIndex."""

    threshold: float = FUZZY_THRESHOLD
    distance: int = FUZZY_DISTANCE
    min_match_length: int = FUZZY_MIN_MATCH_LENGTH

    @property
    def prefilter_cutoff(self) -> float:
        # Any substring within the threshold has an Indel similarity of at
        # least 100 * (1 - threshold) against some fixed-width window.
        return max(0.0, 100.0 * (1.0 - 2.0 * self.threshold))


@dataclass(frozen=True, slots=True)
class FuzzyMatch:
    """A card and its combined score (lower is better)."""

    card: CardRecord
    score: float


def substring_distance(query: str, text: str) -> int:
    """
    Cheapest edit cost turning query into any substring of text.

    Insertions and deletions cost 1, substitutions cost 2.
    """
    previous = [0] * (len(text) + 1)
    for i, q_char in enumerate(query, start=1):
        current = [i] + [0] * len(text)
        for j, t_char in enumerate(text, start=1):
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (0 if q_char == t_char else 2),
            )
        previous = current
    return min(previous)


def field_score(query: str, text: str, options: FuzzyOptions) -> float | None:
    """
    Score a lower-cased query against one lower-cased field.

    Returns:
        errors / len(query) + match_start / distance, or None if the field
        does not match within the threshold
    """
    if len(text) < options.min_match_length:
        return None

    position = text.find(query)
    if position >= 0:
        score = position / options.distance
        return score if score <= options.threshold else None

    alignment = fuzz.partial_ratio_alignment(
        query, text, score_cutoff=options.prefilter_cutoff
    )
    if alignment is None:
        return None

    position = alignment.dest_start if len(query) <= len(text) else 0
    score = substring_distance(query, text) / len(query) + position / options.distance
    return score if score <= options.threshold else None


class FuzzyIndex:
    """
    Approximate text search over a card catalog.

    Example:
        >>> index = FuzzyIndex.build(catalog.cards)
        >>> [m.card.name for m in index.search("charzard", limit=3)]
        ['Charizard', 'Charizard', 'Dark Charizard']
    """

    def __init__(
        self,
        cards: tuple[CardRecord, ...],
        fields: tuple[tuple[str, ...], ...],
        weights: Mapping[str, float],
        options: FuzzyOptions,
    ) -> None:
        self._cards = cards
        # Lower-cased field values, parallel to self._cards
        self._fields = fields
        self._keys = tuple(weights)
        total = sum(weights.values())
        self._norm_weights = tuple(weights[key] / total for key in self._keys)
        self.options = options

    @classmethod
    def build(
        cls,
        cards: Iterable[CardRecord],
        weights: Mapping[str, float] | None = None,
        options: FuzzyOptions | None = None,
    ) -> "FuzzyIndex":
        """
        Precompute searchable field text for every card.

        Args:
            cards: Catalog cards in order
            weights: CardRecord attribute -> relative weight.
                     Defaults to name 2, set_name 0.5, rarity 0.3
            options: Matching parameters, defaults from config

        Raises:
            ValueError: If weights are empty or not all positive
        """
        weights = dict(weights or FUZZY_KEY_WEIGHTS)
        if not weights or any(w <= 0 for w in weights.values()):
            raise ValueError(f"Fuzzy weights must be positive: {weights}")

        snapshot = tuple(cards)
        fields = tuple(
            tuple(str(getattr(card, key) or "").lower() for key in weights) for card in snapshot
        )
        return cls(snapshot, fields, weights, options or FuzzyOptions())

    def __len__(self) -> int:
        return len(self._cards)

    def _score_card(self, query: str, values: tuple[str, ...]) -> float | None:
        combined: float | None = None
        for value, weight in zip(values, self._norm_weights, strict=True):
            score = field_score(query, value, self.options)
            if score is None:
                continue
            combined = (1.0 if combined is None else combined) * max(score, EPSILON) ** weight
        return combined

    def search(self, text: str, limit: int | None = None) -> list[FuzzyMatch]:
        """
        Find cards approximately matching text.

        Args:
            text: Query text (case-insensitive)
            limit: Maximum matches to return, None for all

        Returns:
            Matches sorted by score ascending, ties in catalog order
        """
        query = text.strip().lower()
        if len(query) < self.options.min_match_length:
            return []

        matches: list[FuzzyMatch] = []
        for card, values in zip(self._cards, self._fields, strict=True):
            score = self._score_card(query, values)
            if score is not None:
                matches.append(FuzzyMatch(card=card, score=score))

        matches.sort(key=lambda m: m.score)
        logger.debug("Fuzzy search %r matched %d cards", text, len(matches))

        if limit is not None:
            return matches[:limit]
        return matches
