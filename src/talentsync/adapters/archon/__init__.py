"""Public interface for the Archon build-page adapter."""

from __future__ import annotations

from .client import ArchonBuildSource
from .parser import extract_talent_string

__all__ = ["ArchonBuildSource", "extract_talent_string"]
