"""
Text normalization for track matching.

Titles and channel names from the two sources differ in case,
punctuation and decoration ("(Official Music Video)", "[HD]", "VEVO").
This module reduces them to a comparable form.

The vocabularies used here (noise words, penalty words, channel
suffixes) are immutable data held by a Vocabulary instance. The module
default is DEFAULT_VOCABULARY; a custom one can be built from
configuration and passed to the scorer.
"""

import re
from dataclasses import dataclass

from tracklink.core.config import VocabularyConfig


# Tokens that carry no identity information in a title
NOISE_WORDS = frozenset({
    "official", "video", "lyrics", "lyric", "hd", "remastered", "remaster",
    "radio", "edit", "version", "audio", "music", "song", "track", "vevo",
    "live", "performance", "acoustic", "instrumental", "cover", "remix",
    "extended", "explicit", "clean", "album", "single", "ep", "deluxe",
})

# Substrings of a video title that indicate an alternative version
PENALTY_WORDS = ("cover", "remix", "live", "acoustic", "instrumental", "karaoke")

# Brand suffixes appended to artist channel handles ("LadyGagaVEVO")
CHANNEL_SUFFIXES = ("vevo",)

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")

# Separator heuristics, tried in order. Each one that fires contributes
# its captured groups as artist candidates.
ARTIST_PATTERNS = (
    re.compile(r"^(.+?)\s*[-–]\s*(.+)$"),          # Artist - Title
    re.compile(r"^(.+?)\s*:\s*(.+)$"),             # Artist: Title
    re.compile(r"^(.+?)\s+by\s+(.+)$", re.IGNORECASE),  # Title by Artist
    re.compile(r"\((.+?)\)$"),                     # Title (Artist)
    re.compile(r"\[(.+?)\]$"),                     # Title [Artist]
)


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable word lists used by normalization and scoring.

    Attributes:
        noise_words: Tokens dropped by remove_noise_words().
        penalty_words: Title substrings that trigger the quality penalty.
        channel_suffixes: Trailing brand suffixes stripped from channel names.
    """
    noise_words: frozenset[str] = NOISE_WORDS
    penalty_words: tuple[str, ...] = PENALTY_WORDS
    channel_suffixes: tuple[str, ...] = CHANNEL_SUFFIXES

    @classmethod
    def from_config(cls, config: VocabularyConfig) -> "Vocabulary":
        """Build a Vocabulary, keeping the defaults for lists the config leaves unset."""
        return cls(
            noise_words=(
                frozenset(config.noise_words)
                if config.noise_words is not None else NOISE_WORDS
            ),
            penalty_words=(
                config.penalty_words
                if config.penalty_words is not None else PENALTY_WORDS
            ),
            channel_suffixes=(
                config.channel_suffixes
                if config.channel_suffixes is not None else CHANNEL_SUFFIXES
            ),
        )


DEFAULT_VOCABULARY = Vocabulary()


def normalize(text: str | None) -> str:
    """
    Lowercase, replace punctuation with spaces and collapse whitespace.

    Idempotent: normalize(normalize(x)) == normalize(x).

    Examples:
        normalize("Hello!!") -> "hello"
        normalize("  AC/DC -- Thunderstruck ") -> "ac dc thunderstruck"
        normalize(None) -> ""
        normalize(1984) -> "1984"
    """
    if text is None or text == "":
        return ""
    if not isinstance(text, str):
        text = str(text)
    text = _NON_WORD_RE.sub(" ", text.lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_noise_words(text: str | None, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """
    Normalize text and drop every token found in the noise vocabulary.

    Never returns more tokens than normalize(text) contains.

    Example:
        remove_noise_words("Bad Romance (Official Music Video)") -> "bad romance"
    """
    return " ".join(
        word for word in normalize(text).split()
        if word not in vocabulary.noise_words
    )


def extract_artist_candidates(title: str | None) -> list[str]:
    """
    Extract possible artist names from a compound title or channel name.

    Every pattern in ARTIST_PATTERNS that matches contributes its
    normalized captured groups, so one input can yield several
    candidates (and both halves of a split, since either side may be
    the artist).

    Example:
        extract_artist_candidates("Queen - Bohemian Rhapsody")
        -> ["queen", "bohemian rhapsody"]
    """
    if title is None or title == "":
        return []
    if not isinstance(title, str):
        title = str(title)

    candidates = []
    for pattern in ARTIST_PATTERNS:
        match = pattern.search(title)
        if match:
            candidates.extend(normalize(group) for group in match.groups())
    return candidates
