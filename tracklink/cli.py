"""
Command-line interface for tracklink.

This module implements the CLI using Click, matching two local JSON
files of search results and printing the links as JSON.
rich-click is used for the output colors.

Usage:
    tracklink catalog.json videos.json
    tracklink catalog.json videos.json --threshold 40 --strategy optimal
    tracklink catalog.json videos.json --output matches.json --log-dir logs/

Input Files:
    Each file holds either a JSON list of payloads or an object with the
    list under "results", "items", "tracks" or "contents". Payloads may
    be flattened records or raw search items (see CatalogRecord.from_dict
    and VideoRecord.from_dict).

Configuration:
    tracklink.yaml in the current directory is read if present; --config
    points at another file. Command-line options override the file.

Exit Codes:
    0 success, 1 configuration error, 2 unreadable input, 3 invalid
    matcher arguments, 130 interrupted.
"""

import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Matching",
            "options": ["--threshold", "--strategy", "--config"],
        },
        {
            "name": "Output",
            "options": ["--output", "--log-dir", "--verbose"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from tracklink import __version__
from tracklink.catalog import CatalogRecord
from tracklink.core import (
    STRATEGIES,
    ConfigError,
    MatchingError,
    RecordError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from tracklink.matching import Matcher
from tracklink.video import VideoRecord

logger = get_logger(__name__)


# Keys under which a JSON object may hold its list of payloads
LIST_KEYS = ("results", "items", "tracks", "contents")

# Raw video search items of these types are skipped (channels, playlists, ...)
VIDEO_TYPES = ("video", "youtube")


def load_records(path: Path, factory: Callable[[dict[str, Any]], Any], video: bool = False) -> list:
    """
    Read a JSON file of payloads and build records from it.

    Args:
        path: JSON file to read.
        factory: CatalogRecord.from_dict or VideoRecord.from_dict.
        video: Skip payloads whose "type" marks them as non-video results.

    Returns:
        List of records in file order.

    Raises:
        RecordError: If the file cannot be read, is not valid JSON, holds
                     no list of payloads, or a payload cannot be parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise RecordError(
            f"Failed to read input file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
    except json.JSONDecodeError as e:
        raise RecordError(
            f"Invalid JSON in input file {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    if isinstance(data, dict):
        data = next((data[key] for key in LIST_KEYS if isinstance(data.get(key), list)), None)

    if not isinstance(data, list):
        raise RecordError(
            f"Input file {path} must contain a JSON list of records",
            details={"file_path": str(path)}
        )

    records = []
    for index, payload in enumerate(data):
        if video and isinstance(payload, dict) and payload.get("type") not in (None, *VIDEO_TYPES):
            logger.debug(f"Skipping non-video item {index} ({payload.get('type')}) in {path}")
            continue

        try:
            records.append(factory(payload))
        except RecordError as e:
            e.details.update({"file_path": str(path), "index": index})
            raise

    return records


@click.command()
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("video_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--threshold",
    type=float,
    default=None,
    metavar="<0-100>",
    help="Minimum confidence for a match (default: 25)"
)
@click.option(
    "--strategy",
    type=click.Choice(STRATEGIES),
    default=None,
    help="Assignment strategy (default: greedy)"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<tracklink.yaml>",
    help="Configuration file"
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<matches.json>",
    help="Write matches to a file instead of stdout"
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Also write full, error and close-match logs here"
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show every pairwise score"
)
@click.version_option(__version__, prog_name="tracklink")
def cli(
    catalog_file: Path,
    video_file: Path,
    threshold: Optional[float],
    strategy: Optional[str],
    config_path: Optional[Path],
    output: Optional[Path],
    log_dir: Optional[Path],
    verbose: bool
) -> None:
    """
    tracklink: Link catalog tracks to video search results.

    Reads CATALOG_FILE and VIDEO_FILE (JSON), pairs each catalog track with
    at most one video and prints the matches, highest confidence first.

    \b
    EXAMPLES:
        tracklink catalog.json videos.json
        tracklink catalog.json videos.json --strategy optimal
        tracklink catalog.json videos.json --threshold 40 --output matches.json
    """
    try:
        setup_logging(log_dir, verbose=verbose)

        config = load_config(config_path)
        matching = config.matching
        if threshold is not None:
            matching = replace(matching, threshold=threshold)
        if strategy is not None:
            matching = replace(matching, strategy=strategy)
        config = replace(config, matching=matching)

        matcher = Matcher.from_config(config)

        catalog = load_records(catalog_file, CatalogRecord.from_dict)
        videos = load_records(video_file, VideoRecord.from_dict, video=True)
        logger.info(f"Loaded {len(catalog)} catalog records and {len(videos)} videos")

        matches = matcher.match(catalog, videos)
        logger.info(f"Matched {len(matches)}/{len(catalog)} catalog records")

        payload = json.dumps([m.to_dict() for m in matches], indent=2, ensure_ascii=False)
        if output is not None:
            output.write_text(payload + "\n", encoding="utf-8")
            logger.info(f"Matches written to {output}")
        else:
            click.echo(payload)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except RecordError as e:
        click.echo(f"Input error: {e.message}", err=True)
        logger.debug(f"Input error details: {e.details}")
        sys.exit(2)

    except MatchingError as e:
        click.echo(f"Matching error: {e.message}", err=True)
        sys.exit(3)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)

    finally:
        shutdown_logging()


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `tracklink` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
