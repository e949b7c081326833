"""
Logging configuration for tracklink.

This module sets up the logging system with multiple outputs:
    - Console: Colored, tqdm-compatible output
    - log_full_{timestamp}.log: Complete log of all events (DEBUG and above)
    - log_errors_{timestamp}.log: Only ERROR and CRITICAL level messages
    - match_close_alternatives_{timestamp}.log: Ambiguous matches to review

File outputs are only created when setup_logging() is given a directory.

Structured Match Events:
    The scorer and matcher never print. Every decision is a log record
    carrying a 'match_event' attribute plus event-specific fields in
    'extra', so handlers (and tests) can read decisions without parsing
    message text:

        "score"              DEBUG    match_catalog_id, match_video_id, match_score (dict)
        "matched"            INFO     match_catalog_id, match_video_id, match_confidence
        "unmatched"          INFO     match_catalog_id, match_best_score
        "close_alternatives" WARNING  match_alt_* fields (see log_match_close_alternatives)

Usage:
    from tracklink.core.logger import setup_logging, get_logger

    setup_logging(log_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from tqdm import tqdm

from tracklink.core.exceptions import ConfigError


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Values of the 'match_event' record attribute
MATCH_EVENT_SCORE = "score"
MATCH_EVENT_MATCHED = "matched"
MATCH_EVENT_UNMATCHED = "unmatched"
MATCH_EVENT_CLOSE_ALTERNATIVES = "close_alternatives"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking tqdm progress bars.

    tqdm progress bars write to stderr and use carriage returns to update
    in-place. This handler uses tqdm.write() so messages appear above any
    active progress bar instead of corrupting it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        # Resolved per instance so a swapped sys.stderr is honored
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class MatchCloseAlternativesHandler(logging.Handler):
    """
    Handler that captures matches with close alternatives for review.

    Listens for records emitted by log_match_close_alternatives() and
    writes them to the report file in a human-readable format:

        Bad Romance - Lady Gaga [catalog: 0SiywuOBRcynK0uKGWdCnn]
        Selected: Lady Gaga - Bad Romance (Official Music Video) [qrO4YZeyl0I] (score: 81.0)
        Alternatives:
          - Bad Romance (Live) [abc123] (score: 77.5)
        Multiple close matches found. Verify if correct.

    Records without the 'match_alt_catalog_id' attribute are ignored.

    Attributes:
        report_path: Path to the report file.
        report_file: Open file handle (set by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "match_alt_catalog_id"):
            return

        if self.report_file is None:
            return

        try:
            catalog_id = getattr(record, "match_alt_catalog_id", "")
            title = getattr(record, "match_alt_title", "Unknown")
            artist = getattr(record, "match_alt_artist", "Unknown")
            video_id = getattr(record, "match_alt_video_id", "")
            video_title = getattr(record, "match_alt_video_title", "")
            score = getattr(record, "match_alt_score", 0.0)
            alternatives = getattr(record, "match_alt_alternatives", [])

            self.report_file.write(f"{title} - {artist} [catalog: {catalog_id}]\n")
            self.report_file.write(f"Selected: {video_title} [{video_id}] (score: {score:.1f})\n")

            if alternatives:
                self.report_file.write("Alternatives:\n")
                for alt_title, alt_id, alt_score in alternatives:
                    self.report_file.write(f"  - {alt_title} [{alt_id}] (score: {alt_score:.1f})\n")

            self.report_file.write("Multiple close matches found. Verify if correct.\n\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup (the CLI
    does this). Library callers that only use find_best_matches() can
    skip it and configure logging themselves.

    Args:
        log_dir: Optional directory for log files. When None, only the
                 console handler is installed.
        verbose: When True the console shows DEBUG records (including
                 every pairwise score). Otherwise INFO and above.

    Behavior:
        1. Set root logger level to DEBUG, then close and remove old handlers
        2. Add colored TqdmLoggingHandler for the console
        3. If log_dir is given, create it and add:
           - full log file handler (DEBUG)
           - error-only log file handler (ErrorOnlyFilter)
           - MatchCloseAlternativesHandler report file

    Raises:
        ConfigError: If log_dir cannot be created.

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before starting any worker threads.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Close and remove any existing handlers
    for handler in root_logger.handlers[:]:
        handler.close()
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(
            f"Cannot create log directory {log_dir}: {e}",
            details={"log_dir": str(log_dir), "original_error": str(e)}
        ) from e

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_handler = logging.FileHandler(
        log_dir / f"log_full_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"log_errors_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    match_alt_handler = MatchCloseAlternativesHandler(
        log_dir / f"match_close_alternatives_{timestamp}.log"
    )
    match_alt_handler.open()
    root_logger.addHandler(match_alt_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.
              This creates a hierarchy like 'tracklink.matching.scorer'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def format_matched_message(artist: str, title: str, video_id: str, confidence: float) -> str:
    """Format a 'Matched' message with colors."""
    return (
        f"{Colors.GREEN}Matched{Colors.RESET}: "
        f"{artist} - {title} -> "
        f"{Colors.CYAN}{video_id}{Colors.RESET} ({confidence:.1f})"
    )


def format_no_match_message(artist: str, title: str, best_score: float) -> str:
    """Format a 'No match' message with colors."""
    return (
        f"{Colors.RED}No match{Colors.RESET}: "
        f"{artist} - {title} "
        f"(best score: {best_score:.1f})"
    )


def log_score(
    logger: logging.Logger,
    catalog_id: str,
    video_id: str,
    breakdown: dict[str, Any]
) -> None:
    """
    Log one pairwise score as a structured DEBUG record.

    Args:
        logger: The logger to use for the message.
        catalog_id: Identifier of the catalog record.
        video_id: Identifier of the video record.
        breakdown: Sub-scores, base, multiplier and confidence.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug(
        f"Score {catalog_id} vs {video_id}: {breakdown['confidence']:.1f} "
        f"(title {breakdown['title']:.1f}, artist {breakdown['artist']:.1f}, "
        f"duration {breakdown['duration']:.1f}, quality {breakdown['quality']:.1f}, "
        f"x{breakdown['multiplier']})",
        extra={
            "match_event": MATCH_EVENT_SCORE,
            "match_catalog_id": catalog_id,
            "match_video_id": video_id,
            "match_score": breakdown,
        }
    )


def log_match_decision(
    logger: logging.Logger,
    catalog_id: str,
    title: str,
    artist: str,
    video_id: str | None,
    score: float
) -> None:
    """
    Log the outcome for one catalog record.

    A video_id of None means the record was left unmatched; score is then
    the best score seen (0.0 when there were no candidates).
    """
    if video_id is not None:
        logger.info(
            format_matched_message(artist, title, video_id, score),
            extra={
                "match_event": MATCH_EVENT_MATCHED,
                "match_catalog_id": catalog_id,
                "match_video_id": video_id,
                "match_confidence": score,
            }
        )
    else:
        logger.info(
            format_no_match_message(artist, title, score),
            extra={
                "match_event": MATCH_EVENT_UNMATCHED,
                "match_catalog_id": catalog_id,
                "match_best_score": score,
            }
        )


def log_match_close_alternatives(
    logger: logging.Logger,
    catalog_id: str,
    title: str,
    artist: str,
    video_id: str,
    video_title: str,
    score: float,
    alternatives: list[tuple[str, str, float]]
) -> None:
    """
    Log a match that has close alternatives requiring verification.

    Should be called when the runner-up video scored within the
    configured close-match window of the selected one.

    Args:
        logger: The logger to use for the message.
        catalog_id: Identifier of the catalog record.
        title: Catalog track title.
        artist: Catalog artist.
        video_id: Identifier of the selected video.
        video_title: Title of the selected video.
        score: Confidence of the selected match.
        alternatives: (video_title, video_id, score) tuples for close alternatives.
    """
    logger.warning(
        f"Multiple close matches for: {artist} - {title} (selected score: {score:.1f})",
        extra={
            "match_event": MATCH_EVENT_CLOSE_ALTERNATIVES,
            "match_alt_catalog_id": catalog_id,
            "match_alt_title": title,
            "match_alt_artist": artist,
            "match_alt_video_id": video_id,
            "match_alt_video_title": video_title,
            "match_alt_score": score,
            "match_alt_alternatives": alternatives,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove all handlers from the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
