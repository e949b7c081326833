# tests/test_cli.py
"""Test the command-line interface"""

import json

import pytest
from click.testing import CliRunner

from tracklink import __version__
from tracklink.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def catalog_file(write_json):
    return write_json("catalog.json", [
        {"id": "br", "title": "Bad Romance", "artist": "Lady Gaga", "duration": 294},
        {"id": "pf", "title": "Poker Face", "artist": "Lady Gaga", "duration": 237},
    ])


@pytest.fixture
def video_file(write_json):
    return write_json("videos.json", {"results": [
        {"type": "channel", "channel": {"channelId": "UC07Kxew-cMIaykMOkzqHtBQ"}},
        {
            "type": "video",
            "video": {
                "videoId": "qrO4YZeyl0I",
                "title": "Lady Gaga - Bad Romance (Official Music Video)",
                "lengthSeconds": 296,
                "badges": ["Official Artist Channel"],
                "author": {"title": "LadyGagaVEVO"},
            },
        },
        {
            "id": "bESGLojNYSo",
            "title": "Lady Gaga - Poker Face (Official Music Video)",
            "channel": "LadyGagaVEVO",
            "duration": "3:59",
        },
    ]})


class TestCli:
    """Test the tracklink command"""

    def test_writes_matches_to_file(self, runner, catalog_file, video_file, tmp_path):
        output = tmp_path / "matches.json"

        result = runner.invoke(cli, [str(catalog_file), str(video_file), "--output", str(output)])

        assert result.exit_code == 0
        matches = json.loads(output.read_text(encoding="utf-8"))
        assert {m["catalogId"]: m["videoId"] for m in matches} == {
            "br": "qrO4YZeyl0I",
            "pf": "bESGLojNYSo",
        }
        assert matches[0]["confidence"] >= matches[1]["confidence"]
        assert all(m["primarySource"] == "catalog" for m in matches)

    def test_prints_matches(self, runner, catalog_file, video_file):
        result = runner.invoke(cli, [str(catalog_file), str(video_file)])

        assert result.exit_code == 0
        assert '"videoId": "qrO4YZeyl0I"' in result.output

    def test_optimal_strategy_and_threshold(self, runner, catalog_file, video_file, tmp_path):
        output = tmp_path / "matches.json"

        result = runner.invoke(cli, [
            str(catalog_file), str(video_file),
            "--strategy", "optimal", "--threshold", "99", "--output", str(output),
        ])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8")) == []

    def test_config_file(self, runner, catalog_file, video_file, tmp_path):
        config_path = tmp_path / "tracklink.yaml"
        config_path.write_text("matching:\n  threshold: 99\n", encoding="utf-8")
        output = tmp_path / "matches.json"

        result = runner.invoke(cli, [
            str(catalog_file), str(video_file),
            "--config", str(config_path), "--output", str(output),
        ])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8")) == []

    def test_log_dir(self, runner, catalog_file, video_file, tmp_path):
        log_dir = tmp_path / "logs"

        result = runner.invoke(cli, [
            str(catalog_file), str(video_file),
            "--log-dir", str(log_dir), "--output", str(tmp_path / "matches.json"),
        ])

        assert result.exit_code == 0
        assert len(list(log_dir.glob("log_full_*.log"))) == 1
        assert len(list(log_dir.glob("log_errors_*.log"))) == 1
        assert len(list(log_dir.glob("match_close_alternatives_*.log"))) == 1

    def test_unusable_log_dir(self, runner, catalog_file, video_file, tmp_path):
        """A log directory that cannot be created is a configuration error"""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")

        result = runner.invoke(cli, [
            str(catalog_file), str(video_file), "--log-dir", str(blocker / "logs"),
        ])

        assert result.exit_code == 1
        assert "Cannot create log directory" in result.output

    def test_missing_config_file(self, runner, catalog_file, video_file, tmp_path):
        result = runner.invoke(cli, [
            str(catalog_file), str(video_file), "--config", str(tmp_path / "missing.yaml"),
        ])

        assert result.exit_code == 1

    def test_invalid_json(self, runner, video_file, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("[{", encoding="utf-8")

        result = runner.invoke(cli, [str(broken), str(video_file)])

        assert result.exit_code == 2

    def test_not_a_list(self, runner, write_json, video_file):
        catalog_path = write_json("object.json", {"id": "br"})

        result = runner.invoke(cli, [str(catalog_path), str(video_file)])

        assert result.exit_code == 2

    def test_record_without_id(self, runner, write_json, video_file):
        catalog_path = write_json("noid.json", [{"title": "Bad Romance"}])

        result = runner.invoke(cli, [str(catalog_path), str(video_file)])

        assert result.exit_code == 2

    def test_invalid_threshold(self, runner, catalog_file, video_file):
        result = runner.invoke(cli, [str(catalog_file), str(video_file), "--threshold", "150"])

        assert result.exit_code == 3

    def test_unknown_strategy_rejected(self, runner, catalog_file, video_file):
        result = runner.invoke(cli, [str(catalog_file), str(video_file), "--strategy", "random"])

        assert result.exit_code == 2

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
