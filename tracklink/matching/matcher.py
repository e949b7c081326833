"""
One-to-one assignment of catalog records to video records.

This module pairs each catalog record with at most one video record
using the pairwise confidence from the scorer.

Strategies:
    greedy (default):
        Catalog records are processed in input order. Each one takes the
        highest-scoring video not yet used (first-seen wins ties) if that
        score reaches the threshold. Earlier records can claim a video a
        later record would have matched better; the result depends on
        input order.

    optimal:
        The full score matrix is solved as a maximum-weight bipartite
        assignment (scipy's linear_sum_assignment). Pairs below the
        threshold are never emitted.

Either way, every catalog id and every video id appears in at most one
result, and results are sorted by confidence, highest first (stable).

Usage:
    from tracklink.matching.matcher import find_best_matches

    matches = find_best_matches(catalog_records, video_records)
    for match in matches:
        print(f"{match.title} -> {match.video_id} ({match.confidence:.1f})")
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np
from scipy.optimize import linear_sum_assignment

from tracklink.catalog.models import CatalogRecord
from tracklink.core.config import (
    DEFAULT_THRESHOLD,
    STRATEGIES,
    STRATEGY_GREEDY,
    STRATEGY_OPTIMAL,
    Config,
    MatchingConfig,
)
from tracklink.core.exceptions import MatchingError
from tracklink.core.logger import (
    get_logger,
    log_match_close_alternatives,
    log_match_decision,
)
from tracklink.matching.normalizer import DEFAULT_VOCABULARY, Vocabulary
from tracklink.matching.scorer import calculate_match_score
from tracklink.video.models import VideoRecord


logger = get_logger(__name__)


# The catalog side is authoritative for title/artist/album/duration
PRIMARY_SOURCE_CATALOG = "catalog"


@dataclass(frozen=True)
class MatchResult:
    """
    A catalog record paired with its matched video.

    Title, artist, album and duration come from the catalog record
    (primary_source is always "catalog"); the video contributes its
    identifier and display fields.

    Attributes:
        catalog_id: Catalog record identifier.
        video_id: Video record identifier.
        title: Catalog title.
        artist: Catalog artist.
        album: Catalog album, if known.
        duration: Catalog duration in seconds.
        confidence: Match confidence (0-100).
        artwork_url: Catalog album cover.
        explicit: Catalog explicit flag.
        share_url: Catalog share link.
        thumbnail_url: Video thumbnail.
        channel: Video channel name.
        views: Video view count.
        published_time: Video publish time as displayed.
        badges: Video badges.
        is_live: Video live flag.
        primary_source: Which side's metadata is authoritative.
    """

    catalog_id: str
    video_id: str
    title: str
    artist: str
    album: str | None
    duration: int
    confidence: float

    artwork_url: str | None = None
    explicit: bool = False
    share_url: str | None = None
    thumbnail_url: str | None = None
    channel: str = ""
    views: int = 0
    published_time: str | None = None
    badges: frozenset[str] = field(default_factory=frozenset)
    is_live: bool = False
    primary_source: str = PRIMARY_SOURCE_CATALOG

    @classmethod
    def from_pair(
        cls,
        catalog: CatalogRecord,
        video: VideoRecord,
        confidence: float
    ) -> "MatchResult":
        """Combine a catalog record and a video record into a result."""
        return cls(
            catalog_id=catalog.catalog_id,
            video_id=video.video_id,
            title=catalog.title,
            artist=catalog.artist,
            album=catalog.album,
            duration=catalog.duration,
            confidence=confidence,
            artwork_url=catalog.artwork_url,
            explicit=catalog.explicit,
            share_url=catalog.share_url,
            thumbnail_url=video.thumbnail_url,
            channel=video.channel,
            views=video.views,
            published_time=video.published_time,
            badges=video.badges,
            is_live=video.is_live,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the camelCase shape callers send to their clients.

        Badges are emitted as a sorted list so the output is deterministic.
        """
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "catalogId": self.catalog_id,
            "videoId": self.video_id,
            "albumCover": self.artwork_url,
            "thumbnail": self.thumbnail_url,
            "explicit": self.explicit,
            "shareUrl": self.share_url,
            "channel": self.channel,
            "views": self.views,
            "publishedTime": self.published_time,
            "badges": sorted(self.badges),
            "isLive": self.is_live,
            "confidence": self.confidence,
            "primarySource": self.primary_source,
        }


def _unique(records: list, key) -> list:
    """Drop records whose key was already seen, keeping input order."""
    seen = set()
    unique = []
    for record in records:
        if key(record) not in seen:
            seen.add(key(record))
            unique.append(record)
    return unique


class Matcher:
    """
    Pairs catalog records with video records.

    A Matcher holds validated settings and a vocabulary so one configured
    instance can be reused. It keeps no state between calls: match() is a
    pure function of its inputs and safe to call from several threads.

    Attributes:
        config: Threshold, strategy and close-match window.
        vocabulary: Word lists used by the scorer.

    Example:
        matcher = Matcher.from_config(load_config())
        matches = matcher.match(catalog_records, video_records)
    """

    def __init__(
        self,
        config: MatchingConfig | None = None,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY
    ) -> None:
        """
        Initialize the Matcher.

        Raises:
            MatchingError: If the threshold is outside [0, 100] or the
                           strategy is unknown.
        """
        config = config or MatchingConfig()

        if not 0 <= config.threshold <= 100:
            raise MatchingError(
                f"Threshold must be between 0 and 100, got {config.threshold}",
                details={"threshold": config.threshold}
            )
        if config.strategy not in STRATEGIES:
            raise MatchingError(
                f"Unknown matching strategy: {config.strategy!r}",
                details={"strategy": config.strategy, "allowed": list(STRATEGIES)}
            )

        self.config = config
        self.vocabulary = vocabulary

    @classmethod
    def from_config(cls, config: Config) -> "Matcher":
        """Create a Matcher from a loaded Config."""
        return cls(config.matching, Vocabulary.from_config(config.vocabulary))

    def match(
        self,
        catalog_records: Iterable[CatalogRecord],
        video_records: Iterable[VideoRecord]
    ) -> list[MatchResult]:
        """
        Find the best video for each catalog record.

        Args:
            catalog_records: Catalog records, in priority order for greedy mode.
            video_records: Candidate video records.

        Returns:
            MatchResult list sorted by confidence, highest first. Catalog
            records without a video reaching the threshold are absent.
            Empty input on either side returns an empty list.
        """
        catalog_records = list(catalog_records)
        video_records = list(video_records)

        logger.debug(
            f"Matching {len(catalog_records)} catalog records against "
            f"{len(video_records)} videos ({self.config.strategy}, "
            f"threshold {self.config.threshold})"
        )

        if self.config.strategy == STRATEGY_OPTIMAL:
            results = self._match_optimal(catalog_records, video_records)
        else:
            results = self._match_greedy(catalog_records, video_records)

        # list.sort is stable: ties keep emission order
        results.sort(key=lambda r: r.confidence, reverse=True)

        logger.debug(f"Matching complete: {len(results)} matches")
        return results

    def _score(self, catalog: CatalogRecord, video: VideoRecord) -> float:
        return calculate_match_score(catalog, video, self.vocabulary)

    def _match_greedy(
        self,
        catalog_records: list[CatalogRecord],
        video_records: list[VideoRecord]
    ) -> list[MatchResult]:
        results: list[MatchResult] = []
        used_catalog_ids: set[str] = set()
        used_video_ids: set[str] = set()

        for catalog in catalog_records:
            if catalog.catalog_id in used_catalog_ids:
                continue

            scored: list[tuple[VideoRecord, float]] = []
            best_video: VideoRecord | None = None
            best_score = 0.0

            for video in video_records:
                if video.video_id in used_video_ids:
                    continue

                score = self._score(catalog, video)
                scored.append((video, score))

                # Strict comparison: the first-seen maximum wins ties
                if best_video is None or score > best_score:
                    best_video = video
                    best_score = score

            if best_video is None or best_score < self.config.threshold:
                log_match_decision(
                    logger, catalog.catalog_id, catalog.title, catalog.artist,
                    None, best_score
                )
                continue

            results.append(MatchResult.from_pair(catalog, best_video, best_score))
            used_catalog_ids.add(catalog.catalog_id)
            used_video_ids.add(best_video.video_id)

            log_match_decision(
                logger, catalog.catalog_id, catalog.title, catalog.artist,
                best_video.video_id, best_score
            )
            self._report_close_alternatives(catalog, best_video, best_score, scored)

        return results

    def _report_close_alternatives(
        self,
        catalog: CatalogRecord,
        best_video: VideoRecord,
        best_score: float,
        scored: list[tuple[VideoRecord, float]]
    ) -> None:
        alternatives = [
            (video, score) for video, score in scored
            if video is not best_video
            and score >= self.config.threshold
            and best_score - score <= self.config.close_match_threshold
        ]
        if not alternatives:
            return

        alternatives.sort(key=lambda pair: pair[1], reverse=True)
        log_match_close_alternatives(
            logger,
            catalog_id=catalog.catalog_id,
            title=catalog.title,
            artist=catalog.artist,
            video_id=best_video.video_id,
            video_title=best_video.title,
            score=best_score,
            alternatives=[(v.title, v.video_id, s) for v, s in alternatives],
        )

    def _match_optimal(
        self,
        catalog_records: list[CatalogRecord],
        video_records: list[VideoRecord]
    ) -> list[MatchResult]:
        # Repeated identifiers collapse to their first occurrence
        catalogs = _unique(catalog_records, lambda c: c.catalog_id)
        videos = _unique(video_records, lambda v: v.video_id)

        if not catalogs or not videos:
            for catalog in catalogs:
                log_match_decision(
                    logger, catalog.catalog_id, catalog.title, catalog.artist, None, 0.0
                )
            return []

        scores = np.array([
            [self._score(catalog, video) for video in videos]
            for catalog in catalogs
        ])

        # Below-threshold pairs must not steer the assignment
        weights = np.where(scores >= self.config.threshold, scores, 0.0)
        rows, cols = linear_sum_assignment(weights, maximize=True)
        assigned = dict(zip(rows.tolist(), cols.tolist()))

        results: list[MatchResult] = []
        for i, catalog in enumerate(catalogs):
            j = assigned.get(i)
            if j is None or scores[i, j] < self.config.threshold:
                log_match_decision(
                    logger, catalog.catalog_id, catalog.title, catalog.artist,
                    None, float(scores[i].max())
                )
                continue

            confidence = float(scores[i, j])
            results.append(MatchResult.from_pair(catalog, videos[j], confidence))
            log_match_decision(
                logger, catalog.catalog_id, catalog.title, catalog.artist,
                videos[j].video_id, confidence
            )

        return results


def find_best_matches(
    catalog_records: Iterable[CatalogRecord],
    video_records: Iterable[VideoRecord],
    threshold: float = DEFAULT_THRESHOLD,
    strategy: str = STRATEGY_GREEDY,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[MatchResult]:
    """
    Convenience function: match two record lists with the given settings.

    Args:
        catalog_records: Catalog records (input order matters for greedy).
        video_records: Candidate video records.
        threshold: Minimum confidence for a match. Default: 25.
        strategy: "greedy" (default) or "optimal".
        vocabulary: Word lists for the scorer.

    Returns:
        MatchResult list sorted by confidence, highest first.

    Raises:
        MatchingError: If threshold or strategy is invalid.
    """
    config = MatchingConfig(threshold=threshold, strategy=strategy)
    return Matcher(config, vocabulary).match(catalog_records, video_records)
