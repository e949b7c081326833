"""
Data models for catalog tracks.

A catalog record is one track from the canonical metadata source. Its
title, artist, album and duration are authoritative for any match it
takes part in.

Design Decisions:
    - The dataclass is frozen (immutable); records are read-only inputs
    - Parsing tolerates missing optional fields; only a missing
      identifier is an error
    - Two payload shapes are accepted: the flattened shape a caller
      serializes, and the raw item returned by the catalog search API

Usage:
    from tracklink.catalog.models import CatalogRecord

    record = CatalogRecord(
        catalog_id="0SiywuOBRcynK0uKGWdCnn",
        title="Bad Romance",
        artist="Lady Gaga",
        duration=294,
    )
    record = CatalogRecord.from_dict(api_item)
"""

from dataclasses import dataclass
from typing import Any

from tracklink.core.exceptions import RecordError


UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"

# Cover widths in order of preference
ARTWORK_WIDTHS = (640, 300, 64)


def _select_artwork(covers: Any) -> str | None:
    """
    Pick the preferred artwork URL from a list of cover images.

    Prefers the 640px image, then 300px, then 64px. Returns None if none
    of these sizes is present.
    """
    if not isinstance(covers, list) or not covers:
        return None

    by_width = {
        c.get("width"): c.get("url")
        for c in covers
        if isinstance(c, dict) and c.get("url")
    }
    for width in ARTWORK_WIDTHS:
        if by_width.get(width):
            return by_width[width]
    return None


def _artist_names(artists: Any) -> tuple[str, ...]:
    """Collect artist names from a list of {"name": ...} dicts or plain strings."""
    if not isinstance(artists, list):
        return ()

    names = []
    for artist in artists:
        name = artist.get("name") if isinstance(artist, dict) else artist
        if isinstance(name, str) and name:
            names.append(name)
    return tuple(names)


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default


def _as_text(value: Any, default: str | None = "") -> str | None:
    """Coerce a payload value to text; None and "" become default."""
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class CatalogRecord:
    """
    Immutable representation of a catalog track.

    Attributes:
        catalog_id: Unique identifier in the catalog source.
                    Example: "0SiywuOBRcynK0uKGWdCnn"

        title: Track title as it appears in the catalog.
               Example: "Bad Romance"

        artist: Primary artist name.
                Example: "Lady Gaga"

        duration: Track length in whole seconds.
                  Example: 294

        album: Album name, if known.

        artwork_url: Album cover URL, if known.

        explicit: Whether the track is marked explicit.

        share_url: Public link to the track, if known.

        artists: All credited artist names, primary first.
                 Empty when the payload did not list them.

        duration_text: Display duration from the source ("4:54"), if given.
    """

    catalog_id: str
    title: str
    artist: str
    duration: int

    # Optional fields
    album: str | None = None
    artwork_url: str | None = None
    explicit: bool = False
    share_url: str | None = None
    artists: tuple[str, ...] = ()
    duration_text: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogRecord":
        """
        Create a CatalogRecord from a catalog payload.

        Args:
            data: Either the flattened shape
                  {"id", "title", "artist", "album", "duration", "albumCover",
                   "explicit", "shareUrl"}
                  or a raw search item
                  {"id", "name", "artists": [{"name"}], "album": {"name", "cover": [...]},
                   "durationMs", "durationText", "explicit", "shareUrl"}.

        Returns:
            CatalogRecord populated from the payload.

        Raises:
            RecordError: If data is not a dictionary or has no "id".

        Behavior:
            - Raw items: artist is the first credited artist ("Unknown Artist"
              if none), album defaults to "Unknown Album", duration is
              durationMs rounded to seconds, artwork prefers 640/300/64px.
            - Flattened payloads are taken as-is; missing text fields become "".
        """
        if not isinstance(data, dict):
            raise RecordError(
                "Catalog payload must be a dictionary",
                details={"type": type(data).__name__}
            )

        catalog_id = data.get("id")
        if not catalog_id:
            raise RecordError(
                "Catalog payload has no identifier",
                details={"keys": sorted(data.keys())}
            )

        if "title" in data or "duration" in data:
            return cls(
                catalog_id=str(catalog_id),
                title=_as_text(data.get("title")),
                artist=_as_text(data.get("artist")),
                duration=_as_int(data.get("duration")),
                album=_as_text(data.get("album"), None),
                artwork_url=data.get("albumCover"),
                explicit=bool(data.get("explicit", False)),
                share_url=data.get("shareUrl"),
                artists=_artist_names(data.get("artists")),
                duration_text=data.get("durationText"),
            )

        # Raw search item
        artists = _artist_names(data.get("artists"))
        album_info = data.get("album") or {}
        if not isinstance(album_info, dict):
            album_info = {"name": str(album_info)}

        return cls(
            catalog_id=str(catalog_id),
            title=_as_text(data.get("name")),
            artist=artists[0] if artists else UNKNOWN_ARTIST,
            duration=(_as_int(data.get("durationMs")) + 500) // 1000,
            album=_as_text(album_info.get("name"), UNKNOWN_ALBUM),
            artwork_url=_select_artwork(album_info.get("cover")),
            explicit=bool(data.get("explicit", False)),
            share_url=data.get("shareUrl"),
            artists=artists,
            duration_text=data.get("durationText"),
        )

