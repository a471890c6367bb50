"""Public interface for the Warcraft Logs discovery adapter."""

from __future__ import annotations

from .client import WarcraftLogsAPIError, WarcraftLogsDiscovery, parse_sidebar, to_slug
from .schema import ZoneSidebarResponse

__all__ = [
    "WarcraftLogsAPIError",
    "WarcraftLogsDiscovery",
    "ZoneSidebarResponse",
    "parse_sidebar",
    "to_slug",
]
