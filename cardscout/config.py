from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "CardScout"
    debug: bool = False

    # Where the generated catalog lives. A non-empty URL wins over the file path.
    catalog_url: str = ""
    catalog_path: str = "data/cards-data.json"

    request_timeout: float = 30.0

    default_search_limit: int = 50


settings = Settings()


# =============================================================================
# FUZZY INDEX TUNING
# =============================================================================

# 0 is a perfect match, 1 matches anything. Kept strict so that names one
# letter apart (Latias / Latios) do not cross-match.
FUZZY_THRESHOLD = 0.2

# How far from the start of a field a match may drift before it is penalised
# out of the threshold (location / distance is added to the score)
FUZZY_DISTANCE = 100

# Fields and queries shorter than this never match
FUZZY_MIN_MATCH_LENGTH = 2

# Relative field weights: name 4x set name, set name > 1.5x rarity
FUZZY_KEY_WEIGHTS = {
    "name": 2.0,
    "set_name": 0.5,
    "rarity": 0.3,
}


# =============================================================================
# HYBRID SEARCH LIMITS
# =============================================================================

# At or above this many exact name hits, fuzzy results are not appended
EXACT_MATCH_SUFFICIENT = 10

# Internal limit for the fuzzy pass of a name search
FUZZY_SUPPLEMENT_LIMIT = 100
