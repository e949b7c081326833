"""
Catalog source models for tracklink.

Components:
    - CatalogRecord: Immutable catalog track, authoritative for match metadata
"""

from tracklink.catalog.models import CatalogRecord

__all__ = ["CatalogRecord"]
