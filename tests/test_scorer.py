# tests/test_scorer.py
"""Test the weighted match score"""

import logging

import pytest

from tracklink.catalog import CatalogRecord
from tracklink.matching.scorer import (
    calculate_match_score,
    evidence_multiplier,
    score_breakdown,
)
from tracklink.video import VideoRecord


class TestEvidenceMultiplier:
    """Test evidence_multiplier()"""

    @pytest.mark.parametrize("title,artist,expected", [
        (100.0, 100.0, 1.0),
        (29.0, 31.0, 1.0),
        (10.0, 10.0, 0.3),
        (40.0, 19.0, 0.3),
        (100.0, 10.0, 0.7),
        (50.0, 10.0, 0.7),
        (19.9, 80.0, 0.7),
    ])
    def test_branches(self, title, artist, expected):
        assert evidence_multiplier(title, artist) == expected


class TestMatchScore:
    """Test score_breakdown() and calculate_match_score()"""

    def test_official_video_on_vevo_channel(self, bad_romance_catalog, bad_romance_video):
        """Official video on the artist's VEVO channel scores high"""
        breakdown = score_breakdown(bad_romance_catalog, bad_romance_video)

        assert breakdown.title == 80.0
        assert breakdown.artist == 90.0
        assert breakdown.duration == 100.0
        assert breakdown.quality == 20.0
        assert breakdown.multiplier == 1.0
        assert breakdown.confidence == pytest.approx(81.0)
        assert breakdown.confidence >= 80.0

    def test_karaoke_upload_penalized(self, yesterday_catalog, yesterday_karaoke_video):
        """Right title from an unrelated channel gets the 0.7 multiplier"""
        breakdown = score_breakdown(yesterday_catalog, yesterday_karaoke_video)

        assert breakdown.title == 80.0
        assert breakdown.artist < 20.0
        assert breakdown.duration == 100.0
        assert breakdown.quality == 0.0
        assert breakdown.multiplier == 0.7
        assert breakdown.confidence == pytest.approx(0.7 * breakdown.base)

    def test_unrelated_pair_heavily_penalized(self):
        """Agreeing duration and popularity cannot rescue wrong title and artist"""
        catalog = CatalogRecord(
            catalog_id="cat", title="Bohemian Rhapsody", artist="Queen", duration=354
        )
        video = VideoRecord(
            video_id="vid", title="zzz", channel="xxx", duration=354, views=20_000_000
        )

        breakdown = score_breakdown(catalog, video)

        assert breakdown.title == 0.0
        assert breakdown.artist == 0.0
        assert breakdown.multiplier == 0.3
        assert breakdown.base == pytest.approx(21.0)
        assert breakdown.confidence == pytest.approx(6.3)

    def test_confidence_matches_breakdown(self, bad_romance_catalog, bad_romance_video):
        assert calculate_match_score(bad_romance_catalog, bad_romance_video) == \
            score_breakdown(bad_romance_catalog, bad_romance_video).confidence

    def test_range(
        self,
        bad_romance_catalog,
        yesterday_catalog,
        bad_romance_video,
        yesterday_karaoke_video,
        bad_romance_cover_video,
    ):
        """Every pair scores within [0, 100]"""
        for catalog in (bad_romance_catalog, yesterday_catalog):
            for video in (bad_romance_video, yesterday_karaoke_video, bad_romance_cover_video):
                assert 0.0 <= calculate_match_score(catalog, video) <= 100.0

    def test_empty_fields(self):
        """Empty text scores without raising"""
        catalog = CatalogRecord(catalog_id="cat", title="", artist="", duration=0)
        video = VideoRecord(video_id="vid", title="", channel="", duration=0)

        assert 0.0 <= calculate_match_score(catalog, video) <= 100.0

    def test_non_string_fields(self):
        """Records built with numeric text still score"""
        catalog = CatalogRecord(catalog_id="cat", title=1984, artist="Eurythmics", duration=250)
        video = VideoRecord(video_id="vid", title="Eurythmics - 1984", channel=2024, duration=251)

        assert 0.0 <= calculate_match_score(catalog, video) <= 100.0

    def test_to_dict(self, bad_romance_catalog, bad_romance_video):
        data = score_breakdown(bad_romance_catalog, bad_romance_video).to_dict()
        assert set(data) == {
            "title", "artist", "duration", "quality", "base", "multiplier", "confidence"
        }


class TestScoreLogging:
    """Test the structured score record"""

    def test_score_event_emitted(self, caplog, bad_romance_catalog, bad_romance_video):
        caplog.set_level(logging.DEBUG, logger="tracklink")

        calculate_match_score(bad_romance_catalog, bad_romance_video)

        events = [r for r in caplog.records if getattr(r, "match_event", None) == "score"]
        assert len(events) == 1
        assert events[0].match_catalog_id == bad_romance_catalog.catalog_id
        assert events[0].match_video_id == bad_romance_video.video_id
        assert events[0].match_score["confidence"] == pytest.approx(81.0)

    def test_no_score_event_above_debug(self, caplog, bad_romance_catalog, bad_romance_video):
        caplog.set_level(logging.INFO, logger="tracklink")

        calculate_match_score(bad_romance_catalog, bad_romance_video)

        assert not [r for r in caplog.records if getattr(r, "match_event", None) == "score"]
