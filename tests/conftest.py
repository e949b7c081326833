"""Test configuration and fixtures"""

import json

import pytest

from tracklink.catalog import CatalogRecord
from tracklink.video import VideoRecord


@pytest.fixture
def bad_romance_catalog():
    """Catalog record for 'Bad Romance' by Lady Gaga"""
    return CatalogRecord(
        catalog_id="0SiywuOBRcynK0uKGWdCnn",
        title="Bad Romance",
        artist="Lady Gaga",
        duration=294,
        album="The Fame Monster",
    )


@pytest.fixture
def bad_romance_video():
    """Official music video on the artist's VEVO channel"""
    return VideoRecord(
        video_id="qrO4YZeyl0I",
        title="Lady Gaga - Bad Romance (Official Music Video)",
        channel="LadyGagaVEVO",
        duration=296,
        badges=frozenset({"Official Artist Channel"}),
    )


@pytest.fixture
def poker_face_catalog():
    """Catalog record for 'Poker Face' by Lady Gaga"""
    return CatalogRecord(
        catalog_id="1QV6tiMFM6fSOKOGLMHYYg",
        title="Poker Face",
        artist="Lady Gaga",
        duration=237,
    )


@pytest.fixture
def poker_face_video():
    """Official music video for 'Poker Face'"""
    return VideoRecord(
        video_id="bESGLojNYSo",
        title="Lady Gaga - Poker Face (Official Music Video)",
        channel="LadyGagaVEVO",
        duration=239,
        badges=frozenset({"Official Artist Channel"}),
    )


@pytest.fixture
def bad_romance_cover_video():
    """Cover of 'Bad Romance' by an unrelated channel"""
    return VideoRecord(
        video_id="cov3rV1de0s",
        title="Bad Romance (Cover)",
        channel="Random Singer",
        duration=290,
    )


@pytest.fixture
def yesterday_catalog():
    """Catalog record for 'Yesterday' by The Beatles"""
    return CatalogRecord(
        catalog_id="3BQHpFgAp4l80e1XslIjNI",
        title="Yesterday",
        artist="The Beatles",
        duration=125,
    )


@pytest.fixture
def yesterday_karaoke_video():
    """Karaoke upload: right title, unrelated channel"""
    return VideoRecord(
        video_id="kara0keYest",
        title="Yesterday - Karaoke Version",
        channel="Sing King",
        duration=130,
    )


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a file under tmp_path and return its path"""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
