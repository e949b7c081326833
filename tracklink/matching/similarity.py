"""
Similarity sub-scores for catalog/video pairs.

Four independent scorers, each returning a float in [0, 100]:

    title_similarity     Title text after noise-word removal
    artist_similarity    Catalog artist vs video channel name
    duration_similarity  Banded step function on the length difference
    quality_score        Popularity and officialness of the video itself

Edit distance uses rapidfuzz's Levenshtein implementation (unit-cost
insertions, deletions and substitutions).
"""

from rapidfuzz.distance import Levenshtein

from tracklink.matching.normalizer import (
    DEFAULT_VOCABULARY,
    Vocabulary,
    extract_artist_candidates,
    normalize,
    remove_noise_words,
)
from tracklink.video.models import VideoRecord


# Title scores
TITLE_EXACT_SCORE = 100.0
TITLE_CONTAINMENT_SCORE = 80.0

# Artist scores
ARTIST_EXACT_SCORE = 100.0
ARTIST_SUFFIX_SCORE = 90.0
ARTIST_CONTAINMENT_SCORE = 85.0
ARTIST_CANDIDATE_SCORE = 75.0

# Duration bands: (max difference in seconds, score)
DURATION_BANDS = (
    (5, 100.0),
    (15, 80.0),
    (30, 60.0),
    (60, 40.0),
)

# Quality heuristic
OFFICIAL_ARTIST_BADGE = "Official Artist Channel"
VERIFIED_BADGE = "Verified"
OFFICIAL_ARTIST_BONUS = 20
VERIFIED_BONUS = 10
VIEWS_HIGH_THRESHOLD = 10_000_000
VIEWS_HIGH_BONUS = 10
VIEWS_MEDIUM_THRESHOLD = 1_000_000
VIEWS_MEDIUM_BONUS = 5
PENALTY_WORD_PENALTY = 15


def levenshtein_similarity(a: str, b: str) -> float:
    """
    Edit-distance similarity as a percentage of the longer string.

    Returns ((maxLen - distance) / maxLen) * 100, or 0 when both
    strings are empty.
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 0.0

    distance = Levenshtein.distance(a, b)
    return max(0.0, (max_length - distance) / max_length * 100)


def _contains_all_words(words: list[str], text: str) -> bool:
    return all(word in text for word in words)


def title_similarity(
    title_a: str,
    title_b: str,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> float:
    """
    Compare two titles after stripping noise words.

    Scoring:
        1. Cleaned titles identical -> 100
        2. Either cleaned title empty -> 0
        3. Every word of one appears inside the other (either way) -> 80
        4. Otherwise normalized Levenshtein similarity
    """
    clean_a = remove_noise_words(title_a, vocabulary)
    clean_b = remove_noise_words(title_b, vocabulary)

    if clean_a == clean_b:
        return TITLE_EXACT_SCORE

    # An empty word list would vacuously "contain" anything
    if not clean_a or not clean_b:
        return 0.0

    if _contains_all_words(clean_a.split(), clean_b) or \
            _contains_all_words(clean_b.split(), clean_a):
        return TITLE_CONTAINMENT_SCORE

    return levenshtein_similarity(clean_a, clean_b)


def _strip_channel_suffix(channel: str, suffixes: tuple[str, ...]) -> str | None:
    for suffix in suffixes:
        if suffix and channel.endswith(suffix):
            stripped = channel[:-len(suffix)].strip()
            if stripped:
                return stripped
    return None


def artist_similarity(
    catalog_artist: str,
    video_channel: str,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> float:
    """
    Compare the catalog artist with the video's channel name.

    Scoring:
        1. Either side empty after normalization -> 0
        2. Identical -> 100
        3. One contains the other -> 85
        4. Channel minus a brand suffix ("vevo") equals the artist,
           with or without the artist's spaces -> 90
        5. Artist equals a candidate extracted from the channel -> 75
        6. Otherwise normalized Levenshtein similarity

    Candidates are pieces of the channel name, so a channel such as
    "Hello - Adele" already scores 85 under rule 3. Rule 5 only fires
    when normalizing a piece differs from normalizing the whole.
    """
    artist = normalize(catalog_artist)
    channel = normalize(video_channel)

    if not artist or not channel:
        return 0.0

    if artist == channel:
        return ARTIST_EXACT_SCORE

    if artist in channel or channel in artist:
        return ARTIST_CONTAINMENT_SCORE

    stripped = _strip_channel_suffix(channel, vocabulary.channel_suffixes)
    if stripped is not None and stripped in (artist, artist.replace(" ", "")):
        return ARTIST_SUFFIX_SCORE

    if artist in extract_artist_candidates(video_channel):
        return ARTIST_CANDIDATE_SCORE

    return levenshtein_similarity(artist, channel)


def duration_similarity(seconds_a: int, seconds_b: int) -> float:
    """
    Score the length difference in bands.

    |a - b| <= 5 -> 100, <= 15 -> 80, <= 30 -> 60, <= 60 -> 40, else 0.
    Symmetric in its arguments.
    """
    difference = abs(seconds_a - seconds_b)
    for max_difference, score in DURATION_BANDS:
        if difference <= max_difference:
            return score
    return 0.0


def quality_score(video: VideoRecord, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> float:
    """
    Heuristic for how likely a video is the original release.

    Bonuses:
        +20 "Official Artist Channel" badge
        +10 "Verified" badge
        +10 views > 10M, else +5 views > 1M

    Penalty:
        -15 (once) if the normalized title contains any penalty word

    The result is floored at 0.
    """
    score = 0

    if OFFICIAL_ARTIST_BADGE in video.badges:
        score += OFFICIAL_ARTIST_BONUS
    if VERIFIED_BADGE in video.badges:
        score += VERIFIED_BONUS

    if video.views > VIEWS_HIGH_THRESHOLD:
        score += VIEWS_HIGH_BONUS
    elif video.views > VIEWS_MEDIUM_THRESHOLD:
        score += VIEWS_MEDIUM_BONUS

    title = normalize(video.title)
    if any(word in title for word in vocabulary.penalty_words):
        score -= PENALTY_WORD_PENALTY

    return float(max(0, score))
