"""
Configuration management for tracklink.

This module handles loading, validating, and providing access to the
matcher configuration stored in tracklink.yaml.

The configuration file contains:
    - Minimum confidence threshold for emitting a match
    - Assignment strategy (greedy or optimal)
    - Score window used to report close alternatives
    - Optional replacements for the text vocabularies

Configuration File Location:
    By default tracklink.yaml is looked up in the current working
    directory. The file is optional: when it is absent the defaults
    below are used. An explicitly passed path must exist.

Example tracklink.yaml:
    matching:
      threshold: 25
      strategy: greedy          # or "optimal"
      close_match_threshold: 5.0

    vocabulary:
      noise_words: [official, video, lyrics, hd, remastered]
      penalty_words: [cover, remix, live, karaoke]
      channel_suffixes: [vevo]
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tracklink.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "tracklink.yaml"

DEFAULT_THRESHOLD = 25.0
DEFAULT_CLOSE_MATCH_THRESHOLD = 5.0

STRATEGY_GREEDY = "greedy"
STRATEGY_OPTIMAL = "optimal"
STRATEGIES = (STRATEGY_GREEDY, STRATEGY_OPTIMAL)


@dataclass(frozen=True)
class MatchingConfig:
    """
    Matcher behavior configuration.

    Attributes:
        threshold: Minimum confidence (0-100) a pair must reach to be emitted.
                   Default: 25.
        strategy: "greedy" processes catalog records in input order and
                  commits to each one's local best video. "optimal" solves
                  the global maximum-weight one-to-one assignment.
                  Default: "greedy".
        close_match_threshold: When the runner-up video scores within this
                               many points of the winner, the match is
                               reported as ambiguous. Default: 5.0.
    """
    threshold: float = DEFAULT_THRESHOLD
    strategy: str = STRATEGY_GREEDY
    close_match_threshold: float = DEFAULT_CLOSE_MATCH_THRESHOLD


@dataclass(frozen=True)
class VocabularyConfig:
    """
    Optional replacements for the normalizer vocabularies.

    A None value keeps the built-in list. A given list replaces it
    completely (it is not merged).

    Attributes:
        noise_words: Tokens stripped from titles before comparison.
        penalty_words: Title substrings that cost a video its quality bonus.
        channel_suffixes: Brand suffixes stripped from channel names.
    """
    noise_words: tuple[str, ...] | None = None
    penalty_words: tuple[str, ...] | None = None
    channel_suffixes: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Config:
    """
    Complete tracklink configuration.

    Attributes:
        matching: Matcher settings.
        vocabulary: Vocabulary overrides.

    Example:
        config = load_config()
        print(f"Threshold: {config.matching.threshold}")
    """
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from tracklink.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for tracklink.yaml in current working
                     directory and falls back to defaults if it is absent.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, the file has
                     invalid YAML syntax, or contains invalid values.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return Config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "use the defaults" file
    if raw_config is None:
        return Config()

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return parse_config(raw_config)


def parse_config(raw_config: dict[str, Any]) -> Config:
    """
    Build a Config from an already-parsed dictionary.

    Args:
        raw_config: Dictionary with optional 'matching' and 'vocabulary' sections.

    Returns:
        Config with defaults applied for anything not specified.

    Raises:
        ConfigError: If a section is not a dictionary or a value is invalid.
    """
    for section in ("matching", "vocabulary"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    return Config(
        matching=_parse_matching_config(raw_config.get("matching")),
        vocabulary=_parse_vocabulary_config(raw_config.get("vocabulary")),
    )


def _parse_matching_config(matching_section: dict[str, Any] | None) -> MatchingConfig:
    """
    Parse and validate the matching configuration section.

    Raises:
        ConfigError: If threshold is not a number in [0, 100], strategy is
                     unknown, or close_match_threshold is negative.
    """
    if matching_section is None:
        return MatchingConfig()

    threshold = matching_section.get("threshold", DEFAULT_THRESHOLD)
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) \
            or not 0 <= threshold <= 100:
        raise ConfigError(
            "'matching.threshold' must be a number between 0 and 100",
            details={"field": "matching.threshold", "value": threshold}
        )

    strategy = matching_section.get("strategy", STRATEGY_GREEDY)
    if strategy not in STRATEGIES:
        raise ConfigError(
            f"'matching.strategy' must be one of: {', '.join(STRATEGIES)}",
            details={"field": "matching.strategy", "value": strategy}
        )

    close = matching_section.get("close_match_threshold", DEFAULT_CLOSE_MATCH_THRESHOLD)
    if isinstance(close, bool) or not isinstance(close, (int, float)) or close < 0:
        raise ConfigError(
            "'matching.close_match_threshold' must be a non-negative number",
            details={"field": "matching.close_match_threshold", "value": close}
        )

    return MatchingConfig(
        threshold=float(threshold),
        strategy=strategy,
        close_match_threshold=float(close)
    )


def _parse_vocabulary_config(vocabulary_section: dict[str, Any] | None) -> VocabularyConfig:
    """
    Parse the vocabulary overrides section.

    Each entry must be a list of strings. Entries are lowercased and
    stripped; empty strings are dropped.

    Raises:
        ConfigError: If an entry is not a list of strings.
    """
    if vocabulary_section is None:
        return VocabularyConfig()

    parsed: dict[str, tuple[str, ...] | None] = {}
    for key in ("noise_words", "penalty_words", "channel_suffixes"):
        raw = vocabulary_section.get(key)
        if raw is None:
            parsed[key] = None
            continue

        if not isinstance(raw, list) or not all(isinstance(w, str) for w in raw):
            raise ConfigError(
                f"'vocabulary.{key}' must be a list of strings",
                details={"field": f"vocabulary.{key}"}
            )
        parsed[key] = tuple(w.strip().lower() for w in raw if w.strip())

    return VocabularyConfig(**parsed)
