"""Archon build-page configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_ARCHON_BASE_URL = "https://www.archon.gg/wow/builds"
DEFAULT_USER_AGENT = "talentsync (+https://pypi.org/project/talentsync/)"
ARCHON_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class ArchonConfig:
    base_url: str
    resilience: ResilienceConfig


def user_agent() -> str:
    return os.getenv("TALENTSYNC_USER_AGENT") or DEFAULT_USER_AGENT


def get_archon_config(*, resilience: ResilienceConfig | None = None) -> ArchonConfig:
    base_url = (os.getenv("TALENTSYNC_ARCHON_BASE_URL") or DEFAULT_ARCHON_BASE_URL).rstrip("/")
    return ArchonConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="archon",
            timeout_seconds=ARCHON_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            cache=CacheConfig(enabled=True),
            default_headers={"User-Agent": user_agent(), "Accept": "text/html"},
        ),
    )
