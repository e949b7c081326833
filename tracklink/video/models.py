"""
Data models for video search results.

A video record is one candidate playable-media entry from the secondary
source. Only its identity and popularity signals are used in a match;
the catalog side stays authoritative for track metadata.
"""

from dataclasses import dataclass, field
from typing import Any

from tracklink.core.exceptions import RecordError


UNKNOWN_CHANNEL = "Unknown Channel"


def parse_duration(duration: Any) -> int:
    """
    Parse a duration value to seconds.

    Args:
        duration: Seconds as int/float, a numeric string, or a clock
                  string in "M:SS" or "H:MM:SS" format.

    Returns:
        Duration in seconds, or 0 if parsing fails (including NaN and
        infinite values).

    Examples:
        "3:33" -> 213
        "1:02:15" -> 3735
        296 -> 296
        None -> 0
    """
    if duration is None or isinstance(duration, bool):
        return 0

    try:
        if isinstance(duration, (int, float)):
            return max(0, int(duration))

        parts = str(duration).strip().split(":")
        if len(parts) == 1:
            return max(0, int(float(parts[0])))
        elif len(parts) == 2:
            # M:SS format
            minutes, seconds = int(parts[0]), int(parts[1])
            return minutes * 60 + seconds
        elif len(parts) == 3:
            # H:MM:SS format
            hours, minutes, seconds = int(parts[0]), int(parts[1]), int(parts[2])
            return hours * 3600 + minutes * 60 + seconds
        else:
            return 0
    except (ValueError, TypeError, OverflowError):
        return 0


def parse_views(views: Any) -> int:
    """
    Parse a view count to an integer.

    Accepts plain integers and display strings such as "1,234 views",
    "1.5M views", "950K" or "2.1B".

    Returns:
        View count, or 0 if parsing fails.
    """
    if views is None or isinstance(views, bool):
        return 0

    try:
        if isinstance(views, (int, float)):
            return max(0, int(views))

        views_str = str(views).lower().replace(",", "").replace("views", "").strip()
        if views_str.endswith("b"):
            return int(float(views_str[:-1]) * 1_000_000_000)
        elif views_str.endswith("m"):
            return int(float(views_str[:-1]) * 1_000_000)
        elif views_str.endswith("k"):
            return int(float(views_str[:-1]) * 1_000)
        else:
            return int(float(views_str))
    except (ValueError, TypeError, OverflowError):
        return 0


def _as_text(value: Any, default: str = "") -> str:
    """Coerce a payload value to text; None and "" become default."""
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def _as_badges(badges: Any) -> frozenset[str]:
    """
    Collect badge labels from a list of strings or a single string.

    Non-string list items are ignored.
    """
    if isinstance(badges, str):
        return frozenset({badges}) if badges else frozenset()
    if not isinstance(badges, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(b for b in badges if isinstance(b, str) and b)


@dataclass(frozen=True)
class VideoRecord:
    """
    Immutable representation of a video search result.

    Attributes:
        video_id: Video identifier (11-character string on YouTube).
                  Example: "qrO4YZeyl0I"

        title: Video title as uploaded.
               Example: "Lady Gaga - Bad Romance (Official Music Video)"

        channel: Channel name.
                 Example: "LadyGagaVEVO"

        duration: Video length in whole seconds.

        thumbnail_url: Thumbnail URL, if known.

        views: View count (0 when unknown).

        published_time: Relative publish time as displayed ("14 years ago").

        badges: Badges shown on the result, e.g. "Official Artist Channel",
                "Verified".

        is_live: Whether the video is a live stream.

        channel_id: Channel identifier, if known.

        description: Description snippet, if known.
    """

    video_id: str
    title: str
    channel: str
    duration: int

    # Optional fields
    thumbnail_url: str | None = None
    views: int = 0
    published_time: str | None = None
    badges: frozenset[str] = field(default_factory=frozenset)
    is_live: bool = False
    channel_id: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoRecord":
        """
        Create a VideoRecord from a video payload.

        Args:
            data: Either the flattened shape
                  {"id", "title", "channel", "duration", "thumbnail", "views",
                   "publishedTime", "badges", "isLive", "channelId", "description"}
                  or a raw search item {"type": "video", "video": {...}} whose
                  inner object uses videoId, author.title, lengthSeconds,
                  thumbnails[0].url, stats.views, badges, isLiveNow,
                  publishedTimeText and descriptionSnippet.

        Returns:
            VideoRecord populated from the payload.

        Raises:
            RecordError: If data is not a dictionary or has no identifier.
        """
        if not isinstance(data, dict):
            raise RecordError(
                "Video payload must be a dictionary",
                details={"type": type(data).__name__}
            )

        if isinstance(data.get("video"), dict):
            return cls._from_search_item(data["video"])

        video_id = data.get("id") or data.get("videoId")
        if not video_id:
            raise RecordError(
                "Video payload has no identifier",
                details={"keys": sorted(data.keys())}
            )

        return cls(
            video_id=str(video_id),
            title=_as_text(data.get("title")),
            channel=_as_text(data.get("channel")),
            duration=parse_duration(data.get("duration")),
            thumbnail_url=data.get("thumbnail") or None,
            views=parse_views(data.get("views")),
            published_time=data.get("publishedTime") or None,
            badges=_as_badges(data.get("badges")),
            is_live=bool(data.get("isLive", False)),
            channel_id=data.get("channelId") or None,
            description=data.get("description") or None,
        )

    @classmethod
    def _from_search_item(cls, video: dict[str, Any]) -> "VideoRecord":
        """Build a record from the inner 'video' object of a raw search item."""
        video_id = video.get("videoId")
        if not video_id:
            raise RecordError(
                "Video payload has no identifier",
                details={"keys": sorted(video.keys())}
            )

        author = video.get("author")
        if not isinstance(author, dict):
            author = {}
        thumbnails = video.get("thumbnails")
        thumbnail = None
        if isinstance(thumbnails, list) and thumbnails and isinstance(thumbnails[0], dict):
            thumbnail = thumbnails[0].get("url")
        stats = video.get("stats")
        if not isinstance(stats, dict):
            stats = {}

        return cls(
            video_id=str(video_id),
            title=_as_text(video.get("title")),
            channel=_as_text(author.get("title"), UNKNOWN_CHANNEL),
            duration=parse_duration(video.get("lengthSeconds")),
            thumbnail_url=thumbnail or None,
            views=parse_views(stats.get("views")),
            published_time=video.get("publishedTimeText") or None,
            badges=_as_badges(video.get("badges")),
            is_live=bool(video.get("isLiveNow", False)),
            channel_id=author.get("channelId") or None,
            description=video.get("descriptionSnippet") or None,
        )
