"""Build source backed by Archon build pages."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from talentsync.adapters.http_resilience import ResilientClient
from talentsync.config.archon import ArchonConfig, get_archon_config
from talentsync.domain.errors import BuildSourceError

from .parser import extract_talent_string

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from talentsync.config.http_resilience import ResilienceConfig
    from talentsync.domain.ports import BuildSource

log = getLogger(__name__)


class ArchonBuildSource:
    """Scrapes talent export strings from Archon.

    One HTTP client is shared by every lookup of a run so the rate limit and cache
    apply across the whole sync; close it with ``aclose`` or ``async with``.
    """

    def __init__(
        self,
        *,
        config: ArchonConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_archon_config()
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def __aenter__(self) -> ArchonBuildSource:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_build(self, url: str) -> str | None:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise BuildSourceError(f"Request to {url} failed: {exc}", url=url) from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("Archon has no page at %s", url)
            return None
        if response.is_error:
            raise BuildSourceError(
                f"Archon returned HTTP {response.status_code} for {url}",
                url=url,
                status_code=response.status_code,
            )

        build = extract_talent_string(response.text)
        if build is None:
            log.debug("No talent string found on %s", url)
        return build


if TYPE_CHECKING:
    _source_check: BuildSource = ArchonBuildSource()
