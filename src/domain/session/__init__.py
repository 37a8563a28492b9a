"""Client-side curation session: recommendations, kept tracks, saving."""

from .recommendations import (
    DEFAULT_GENRES,
    GENRE_SEEDS,
    PAGE_SIZE,
    RecommendationSession,
    get_genre_seed,
)

__all__ = [
    "DEFAULT_GENRES",
    "GENRE_SEEDS",
    "PAGE_SIZE",
    "RecommendationSession",
    "get_genre_seed",
]
