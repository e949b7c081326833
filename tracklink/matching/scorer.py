"""
Weighted match confidence for a catalog/video pair.

Title and artist are the discriminating signals. Duration and the
quality heuristic only break ties, so a pair whose title and artist are
both implausible is scaled down regardless of how well the rest agrees.

Formula:
    base = 0.4*title + 0.3*artist + 0.2*duration + 0.1*quality

    (title + artist) / 2 < 30      -> multiplier 0.3
    title < 20 or artist < 20      -> multiplier 0.7
    otherwise                      -> multiplier 1.0

    confidence = clamp(base * multiplier, 0, 100)
"""

from dataclasses import asdict, dataclass

from tracklink.catalog.models import CatalogRecord
from tracklink.core.logger import get_logger, log_score
from tracklink.matching.normalizer import DEFAULT_VOCABULARY, Vocabulary
from tracklink.matching.similarity import (
    artist_similarity,
    duration_similarity,
    quality_score,
    title_similarity,
)
from tracklink.video.models import VideoRecord


logger = get_logger(__name__)


TITLE_WEIGHT = 0.4
ARTIST_WEIGHT = 0.3
DURATION_WEIGHT = 0.2
QUALITY_WEIGHT = 0.1

# Joint title+artist evidence penalty
WEAK_PAIR_THRESHOLD = 30
WEAK_PAIR_MULTIPLIER = 0.3
WEAK_SIGNAL_THRESHOLD = 20
WEAK_SIGNAL_MULTIPLIER = 0.7


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    All intermediate values behind one confidence score.

    Attributes:
        title: Title similarity (0-100).
        artist: Artist similarity (0-100).
        duration: Duration similarity (0-100).
        quality: Quality heuristic (0-100).
        base: Weighted sum before the penalty multiplier.
        multiplier: 1.0, 0.7 or 0.3.
        confidence: Final clamped score (0-100).
    """
    title: float
    artist: float
    duration: float
    quality: float
    base: float
    multiplier: float
    confidence: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def evidence_multiplier(title: float, artist: float) -> float:
    """Penalty multiplier for weak title/artist evidence."""
    if (title + artist) / 2 < WEAK_PAIR_THRESHOLD:
        return WEAK_PAIR_MULTIPLIER
    if title < WEAK_SIGNAL_THRESHOLD or artist < WEAK_SIGNAL_THRESHOLD:
        return WEAK_SIGNAL_MULTIPLIER
    return 1.0


def score_breakdown(
    catalog: CatalogRecord,
    video: VideoRecord,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> ScoreBreakdown:
    """
    Score a pair and return every intermediate value.

    Emits one structured DEBUG record ("score" event) per call.
    """
    title = title_similarity(catalog.title, video.title, vocabulary)
    artist = artist_similarity(catalog.artist, video.channel, vocabulary)
    duration = duration_similarity(catalog.duration, video.duration)
    quality = quality_score(video, vocabulary)

    base = (
        title * TITLE_WEIGHT
        + artist * ARTIST_WEIGHT
        + duration * DURATION_WEIGHT
        + quality * QUALITY_WEIGHT
    )
    multiplier = evidence_multiplier(title, artist)
    confidence = min(100.0, max(0.0, base * multiplier))

    breakdown = ScoreBreakdown(
        title=title,
        artist=artist,
        duration=duration,
        quality=quality,
        base=base,
        multiplier=multiplier,
        confidence=confidence,
    )
    log_score(logger, catalog.catalog_id, video.video_id, breakdown.to_dict())
    return breakdown


def calculate_match_score(
    catalog: CatalogRecord,
    video: VideoRecord,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> float:
    """
    Confidence (0-100) that a video is the catalog track.

    Example:
        score = calculate_match_score(catalog_record, video_record)
        if score >= 25:
            ...
    """
    return score_breakdown(catalog, video, vocabulary).confidence
