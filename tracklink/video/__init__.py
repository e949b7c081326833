"""
Video source models for tracklink.

Components:
    - VideoRecord: Immutable video search result
    - parse_duration / parse_views: Helpers for display-formatted values
"""

from tracklink.video.models import VideoRecord, parse_duration, parse_views

__all__ = ["VideoRecord", "parse_duration", "parse_views"]
