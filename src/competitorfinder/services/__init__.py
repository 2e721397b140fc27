"""Service layer entry points for Competitor Finder."""

from __future__ import annotations

from .mapper import map_competitor_results, map_content_results  # noqa: F401
from .passthrough import PassthroughClient  # noqa: F401

__all__ = ["PassthroughClient", "map_competitor_results", "map_content_results"]
