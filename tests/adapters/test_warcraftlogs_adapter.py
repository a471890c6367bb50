from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from talentsync.adapters.warcraftlogs import (
    WarcraftLogsAPIError,
    WarcraftLogsDiscovery,
    ZoneSidebarResponse,
    parse_sidebar,
    to_slug,
)
from talentsync.config.http_resilience import ResilienceConfig
from talentsync.config.warcraftlogs import WarcraftLogsConfig
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

SIDEBAR: list[dict[str, object]] = [
    {
        "title": "Raids",
        "id": "raid-content",
        "expansions": [
            {
                "title": "The War Within",
                "id": "tww",
                "panel": {
                    "sections": [
                        {
                            "header": {"contentTypeName": "zones"},
                            "children": [
                                {"title": "Ulgrax the Devourer", "type": "boss"},
                                {"title": "Sikran, Captain of the Sureki", "type": "boss"},
                                {"title": "Queen Ansurek", "type": "boss"},
                                {"title": "Overview", "type": "link"},
                            ],
                        },
                        {
                            "header": {"contentTypeName": "rankings"},
                            "children": [{"title": "Not A Boss", "type": "boss"}],
                        },
                    ]
                },
            },
            {
                "title": "Dragonflight",
                "id": "df",
                "panel": {
                    "sections": [
                        {
                            "header": {"contentTypeName": "zones"},
                            "children": [{"title": "Fyrakk the Blazing", "type": "boss"}],
                        }
                    ]
                },
            },
        ],
    },
    {
        "title": "Dungeons",
        "id": "dungeons-content",
        "expansions": [
            {
                "title": "The War Within",
                "id": "tww",
                "panel": {
                    "sections": [
                        {
                            "children": [
                                {"title": "Ara-Kara, City of Echoes", "type": "boss"},
                                {"title": "Mists of Tirna Scithe", "type": "boss"},
                                {"title": "The Dawnbreaker", "type": "boss"},
                            ]
                        },
                        {"children": [{"title": "Old Season Dungeon", "type": "boss"}]},
                    ]
                },
            }
        ],
    },
]


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("Queen Ansurek", "queen-ansurek"),
        ("Sikran, Captain of the Sureki", "sikran-captain-of-the-sureki"),
        ("Ara-Kara, City of Echoes", "ara-kara-city-of-echoes"),
        ("Rasha'nan", "rashanan"),
        ("  The Stonevault  ", "the-stonevault"),
        ("Operation: Floodgate", "operation-floodgate"),
    ],
)
def test_to_slug(name: str, slug: str) -> None:
    assert to_slug(name) == slug


def test_parse_sidebar_picks_current_tier_and_season() -> None:
    sidebar = ZoneSidebarResponse.model_validate({"entries": SIDEBAR})

    content = parse_sidebar(sidebar)

    assert content.raid_bosses == [
        "ulgrax-the-devourer",
        "sikran-captain-of-the-sureki",
        "queen-ansurek",
    ]
    assert content.dungeons == [
        "ara-kara-city-of-echoes",
        "mists-of-tirna-scithe",
        "the-dawnbreaker",
    ]


def test_parse_sidebar_without_sections_is_empty() -> None:
    sidebar = ZoneSidebarResponse.model_validate({"entries": [{"id": "raid-content"}]})

    content = parse_sidebar(sidebar)

    assert content.raid_bosses == []
    assert content.dungeons == []


def _discovery(handler: Callable[[httpx.Request], httpx.Response]) -> WarcraftLogsDiscovery:
    return WarcraftLogsDiscovery(
        config=WarcraftLogsConfig(
            zone_sidebar_url="https://www.warcraftlogs.com/zone-sidebar/v2/",
            resilience=ResilienceConfig(name="warcraftlogs-test", cache=None),
        ),
        client_factory=make_client_factory(handler),
    )


def test_discover_fetches_and_parses_sidebar() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/zone-sidebar/v2/"
        return httpx.Response(200, json=SIDEBAR)

    content = asyncio.run(_discovery(handler).discover())

    assert "queen-ansurek" in content.raid_bosses
    assert content.dungeons[0] == "ara-kara-city-of-echoes"


def test_discover_http_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(WarcraftLogsAPIError, match="Failed to fetch"):
        asyncio.run(_discovery(handler).discover())


def test_discover_unexpected_payload() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"entries": "nope"})

    with pytest.raises(WarcraftLogsAPIError, match="Failed to parse"):
        asyncio.run(_discovery(handler).discover())
