"""
Query classification for card search.

Decides whether a free-text query asks for a specific card by number
or is a plain name search.

Supports queries like:
- "25/102" -> card-number, number "25", set size "102"
- "base set 4" / "swsh 025" -> set-number, set hint + number
- "charizard #4" -> set-number, number "4", hint "charizard"
- "pikachu vmax" -> name

Classification is total: every input maps to some ParsedQuery, with the
name variant as the universal fallback.
"""

import re

from cardscout.models.query import ParsedQuery, QueryType

# Short set keys -> substrings of the full set names they stand for
SET_ABBREVIATIONS: dict[str, list[str]] = {
    "base": ["base set", "base set (shadowless)", "base set 2"],
    "shadowless": ["base set (shadowless)"],
    "jungle": ["jungle"],
    "fossil": ["fossil"],
    "rocket": ["team rocket", "team rocket returns"],
    "neo": ["neo destiny", "neo genesis", "neo revelation", "neo discovery"],
    "gym": ["gym heroes", "gym challenge"],
    "swsh": ["swsh", "sword & shield"],
    "sm": ["sm -", "sun & moon"],
    "xy": ["xy -", "xy:"],
    "bw": ["black & white", "bw -"],
    "dp": ["diamond & pearl", "dp -"],
    "ex": ["ex -", "ex:"],
    "evolving": ["evolving skies"],
    "brilliant": ["brilliant stars"],
    "astral": ["astral radiance"],
    "fusion": ["fusion strike"],
    "chilling": ["chilling reign"],
    "vivid": ["vivid voltage"],
    "champions": ["champion's path"],
    "hidden": ["hidden fates"],
    "cosmic": ["cosmic eclipse"],
    "unified": ["unified minds"],
    "unbroken": ["unbroken bonds"],
    "lost": ["lost origin"],
    "silver": ["silver tempest"],
    "crown": ["crown zenith"],
    "paldea": ["paldea evolved"],
    "obsidian": ["obsidian flames"],
    "scarlet": ["scarlet & violet"],
    "temporal": ["temporal forces"],
    "twilight": ["twilight masquerade"],
    "shrouded": ["shrouded fable"],
    "stellar": ["stellar crown"],
    "surging": ["surging sparks"],
}

# Prefixes this short are treated as set codes ("swsh", "sm", "xy")
MAX_SET_CODE_LENGTH = 4

_SLASH_PATTERN = re.compile(r"^(\d{1,3})/(\d{1,3})$", re.ASCII)
_TRAILING_NUMBER_PATTERN = re.compile(r"^(.+?)\s+#?(\d{1,3})$", re.ASCII)
_HASH_PATTERN = re.compile(r"#(\d{1,3})(?:\s|$)", re.ASCII)
_HASH_TOKEN = re.compile(r"#\d{1,3}", re.ASCII)


def _strip_zeros(digits: str) -> str:
    return digits.lstrip("0") or "0"


def is_likely_set_hint(hint: str) -> bool:
    """
    Heuristic: does this (lower-cased) text look like it names a set?

    Accepts a known abbreviation key, anything that contains or is
    contained in a known alias, anything mentioning "set", and any text of
    four characters or fewer.

    Note: the length rule also accepts short card names, so "mew 12" is
    read as set "mew" card 12 rather than a name search.
    """
    if hint in SET_ABBREVIATIONS:
        return True
    for aliases in SET_ABBREVIATIONS.values():
        if any(hint in alias or alias in hint for alias in aliases):
            return True
    return "set" in hint or len(hint) <= MAX_SET_CODE_LENGTH


def parse_query(query: str) -> ParsedQuery:
    """
    Classify a raw search query.

    Args:
        query: Raw user input, possibly empty

    Returns:
        ParsedQuery; never raises
    """
    normalized = query.strip()
    lower = normalized.lower()

    slash = _SLASH_PATTERN.match(lower)
    if slash:
        return ParsedQuery(
            type=QueryType.CARD_NUMBER,
            card_number=_strip_zeros(slash.group(1)),
            set_size=slash.group(2),
            original_query=query,
        )

    trailing = _TRAILING_NUMBER_PATTERN.match(lower)
    if trailing:
        set_hint = trailing.group(1).strip()
        if is_likely_set_hint(set_hint):
            return ParsedQuery(
                type=QueryType.SET_NUMBER,
                card_number=_strip_zeros(trailing.group(2)),
                set_hint=set_hint,
                name_query=set_hint,
                original_query=query,
            )

    hashed = _HASH_PATTERN.search(lower)
    if hashed:
        remaining = _HASH_TOKEN.sub("", lower, count=1).strip()
        return ParsedQuery(
            type=QueryType.SET_NUMBER,
            card_number=_strip_zeros(hashed.group(1)),
            set_hint=remaining or None,
            name_query=remaining,
            original_query=query,
        )

    return ParsedQuery(
        type=QueryType.NAME,
        name_query=normalized,
        original_query=query,
    )


def match_set_name(hint: str, actual_set_name: str) -> bool:
    """
    Check whether a set hint refers to a set name (case-insensitive).

    Matches when the set name contains the hint, when the hint is an
    abbreviation key with an alias inside the set name, or when some alias
    contains the hint and is itself inside the set name.

    Examples:
        >>> match_set_name("base set", "Base Set (Shadowless)")
        True
        >>> match_set_name("swsh", "Sword & Shield")
        True
        >>> match_set_name("jungle", "Fossil")
        False
    """
    hint_lower = hint.lower()
    set_lower = actual_set_name.lower()

    if hint_lower in set_lower:
        return True

    possible_sets = SET_ABBREVIATIONS.get(hint_lower, [])
    if any(alias in set_lower for alias in possible_sets):
        return True

    for aliases in SET_ABBREVIATIONS.values():
        if any(hint_lower in alias and alias in set_lower for alias in aliases):
            return True

    return False
