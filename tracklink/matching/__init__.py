"""
Matching engine for tracklink.

Components:
    - normalizer: Text normalization and the immutable Vocabulary
    - similarity: Title, artist, duration and quality sub-scores
    - scorer: Weighted confidence with the joint-evidence penalty
    - matcher: One-to-one assignment (greedy or optimal) and MatchResult

Usage:
    from tracklink.matching import find_best_matches, calculate_match_score

    matches = find_best_matches(catalog_records, video_records, threshold=25)
"""

from tracklink.matching.matcher import (
    PRIMARY_SOURCE_CATALOG,
    Matcher,
    MatchResult,
    find_best_matches,
)
from tracklink.matching.normalizer import (
    DEFAULT_VOCABULARY,
    Vocabulary,
    extract_artist_candidates,
    normalize,
    remove_noise_words,
)
from tracklink.matching.scorer import (
    ScoreBreakdown,
    calculate_match_score,
    score_breakdown,
)
from tracklink.matching.similarity import (
    artist_similarity,
    duration_similarity,
    quality_score,
    title_similarity,
)

__all__ = [
    # Normalizer
    "Vocabulary",
    "DEFAULT_VOCABULARY",
    "normalize",
    "remove_noise_words",
    "extract_artist_candidates",
    # Similarity
    "title_similarity",
    "artist_similarity",
    "duration_similarity",
    "quality_score",
    # Scorer
    "ScoreBreakdown",
    "score_breakdown",
    "calculate_match_score",
    # Matcher
    "Matcher",
    "MatchResult",
    "PRIMARY_SOURCE_CATALOG",
    "find_best_matches",
]
