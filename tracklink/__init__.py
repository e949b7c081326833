"""
tracklink: Link catalog tracks to video search results.

Given a list of catalog tracks (title, artist, album, duration) and a
list of video search results (title, channel, duration, popularity),
tracklink picks at most one video per track and scores each pairing
with a confidence between 0 and 100.

Architecture:
    core/       - Configuration, logging, exceptions
    catalog/    - CatalogRecord model and payload parsing
    video/      - VideoRecord model and payload parsing
    matching/   - Normalizer, similarity sub-scores, scorer, matcher
    cli.py      - Command-line interface

Usage:
    Command Line:
        tracklink catalog.json videos.json
        tracklink catalog.json videos.json --strategy optimal --threshold 40

    Python API:
        from tracklink import CatalogRecord, VideoRecord, find_best_matches

        catalog = [CatalogRecord.from_dict(item) for item in catalog_items]
        videos = [VideoRecord.from_dict(item) for item in video_items]

        for match in find_best_matches(catalog, videos):
            print(match.title, match.video_id, match.confidence)

Dependencies:
    - rapidfuzz: Levenshtein edit distance
    - scipy / numpy: Optimal assignment strategy
    - pyyaml: Configuration file parsing
    - rich-click: CLI framework with colored help
    - tqdm: Progress-bar-safe console logging
"""

__version__ = "0.1.0"
__author__ = "tracklink"
__license__ = "MIT"

from tracklink.catalog import CatalogRecord
from tracklink.core import (
    Config,
    ConfigError,
    MatchingError,
    RecordError,
    TrackLinkError,
    get_logger,
    load_config,
    setup_logging,
)
from tracklink.matching import (
    Matcher,
    MatchResult,
    calculate_match_score,
    find_best_matches,
)
from tracklink.video import VideoRecord

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "TrackLinkError",
    "ConfigError",
    "RecordError",
    "MatchingError",
    # Models
    "CatalogRecord",
    "VideoRecord",
    "MatchResult",
    # Matching
    "Matcher",
    "calculate_match_score",
    "find_best_matches",
]
