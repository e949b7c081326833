"""
Core module for tracklink.

This module provides the foundational components used throughout the package:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system and structured match events

Usage:
    from tracklink.core import (
        Config, load_config,
        setup_logging, get_logger,
        TrackLinkError, ConfigError
    )
"""

from tracklink.core.config import (
    Config,
    MatchingConfig,
    VocabularyConfig,
    STRATEGIES,
    STRATEGY_GREEDY,
    STRATEGY_OPTIMAL,
    load_config,
    parse_config,
)
from tracklink.core.exceptions import (
    ConfigError,
    MatchingError,
    RecordError,
    TrackLinkError,
)
from tracklink.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "MatchingConfig",
    "VocabularyConfig",
    "STRATEGIES",
    "STRATEGY_GREEDY",
    "STRATEGY_OPTIMAL",
    "load_config",
    "parse_config",
    # Exceptions
    "TrackLinkError",
    "ConfigError",
    "RecordError",
    "MatchingError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
