"""Pydantic models for the Warcraft Logs zone sidebar payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WarcraftLogsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SidebarChild(WarcraftLogsBaseModel):
    title: str = ""
    child_type: str = Field(default="", alias="type")


class SidebarHeader(WarcraftLogsBaseModel):
    content_type_name: str = Field(default="", alias="contentTypeName")


class SidebarSection(WarcraftLogsBaseModel):
    header: SidebarHeader | None = None
    children: list[SidebarChild] = Field(default_factory=list)


class SidebarPanel(WarcraftLogsBaseModel):
    sections: list[SidebarSection] = Field(default_factory=list)


class SidebarExpansion(WarcraftLogsBaseModel):
    title: str = ""
    id: str = ""
    panel: SidebarPanel | None = None


class ZoneSidebarEntry(WarcraftLogsBaseModel):
    title: str = ""
    id: str
    expansions: list[SidebarExpansion] = Field(default_factory=list)


class ZoneSidebarResponse(WarcraftLogsBaseModel):
    entries: list[ZoneSidebarEntry]

    def find(self, entry_id: str) -> ZoneSidebarEntry | None:
        return next((entry for entry in self.entries if entry.id == entry_id), None)
