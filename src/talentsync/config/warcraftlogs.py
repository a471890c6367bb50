"""Warcraft Logs content-discovery configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .archon import user_agent
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

WARCRAFT_LOGS_ZONE_SIDEBAR_URL = "https://www.warcraftlogs.com/zone-sidebar/v2/"
WARCRAFT_LOGS_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class WarcraftLogsConfig:
    zone_sidebar_url: str
    resilience: ResilienceConfig


def get_warcraftlogs_config() -> WarcraftLogsConfig:
    return WarcraftLogsConfig(
        zone_sidebar_url=WARCRAFT_LOGS_ZONE_SIDEBAR_URL,
        resilience=ResilienceConfig(
            name="warcraftlogs",
            timeout_seconds=WARCRAFT_LOGS_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
            cache=CacheConfig(enabled=False),
            default_headers={"User-Agent": user_agent(), "Accept": "application/json"},
        ),
    )
