"""Shared enumerations used across the helper."""

from __future__ import annotations

from enum import StrEnum

# -- Workspace resolution ----------------------------------------------------


class SelectionMethod(StrEnum):
    """Which strategy produced the active workspace."""

    INDEX_MATCH = "index_match"
    FIRST_CANDIDATE = "first_candidate"
    DIRECTORY_INDICATOR = "directory_indicator"
    RECENT_STORE = "recent_store"
    CWD_FALLBACK = "cwd_fallback"


# -- Search ------------------------------------------------------------------


class SearchType(StrEnum):
    FILES = "files"
    CONTENT = "content"
