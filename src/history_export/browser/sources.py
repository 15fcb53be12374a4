"""Discover browser history databases in Windows user profiles."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from history_export.browser.models import (
    CHROMIUM_QUERY,
    FIREFOX_QUERY,
    SourceDescriptor,
)

logger = logging.getLogger(__name__)

# Chromium browsers keyed by family, relative to %LOCALAPPDATA%.
CHROMIUM_USER_DATA = {
    "Chrome": Path("Google") / "Chrome" / "User Data",
    "Edge": Path("Microsoft") / "Edge" / "User Data",
    "Brave": Path("BraveSoftware") / "Brave-Browser" / "User Data",
}

# Relative to %APPDATA%.
OPERA_PROFILE = Path("Opera Software") / "Opera Stable"
FIREFOX_PROFILES = Path("Mozilla") / "Firefox" / "Profiles"


def _env_path(value: str | Path | None, env_var: str) -> Path | None:
    if value is None:
        value = os.environ.get(env_var)
    return Path(value) if value else None


def chromium_sources(family: str, user_data: Path) -> list[SourceDescriptor]:
    """Default profile first, then every "Profile N" directory."""
    sources = [
        SourceDescriptor(family, user_data / "Default" / "History", CHROMIUM_QUERY, "Default"),
    ]
    if user_data.is_dir():
        for child in sorted(user_data.iterdir()):
            if child.is_dir() and child.name.startswith("Profile "):
                sources.append(
                    SourceDescriptor(family, child / "History", CHROMIUM_QUERY, child.name)
                )
    return sources


def firefox_sources(profiles_dir: Path) -> list[SourceDescriptor]:
    if not profiles_dir.is_dir():
        return []
    return [
        SourceDescriptor("Firefox", child / "places.sqlite", FIREFOX_QUERY, child.name)
        for child in sorted(profiles_dir.iterdir())
        if child.is_dir()
    ]


def default_sources(
    local_appdata: str | Path | None = None,
    roaming_appdata: str | Path | None = None,
) -> list[SourceDescriptor]:
    """Candidate history databases for the current user, grouped by family.

    Paths are returned whether or not they exist; the extractor skips the
    missing ones. Families whose environment root is unset are omitted.
    """
    local = _env_path(local_appdata, "LOCALAPPDATA")
    roaming = _env_path(roaming_appdata, "APPDATA")
    sources: list[SourceDescriptor] = []

    if local is not None:
        for family, rel in CHROMIUM_USER_DATA.items():
            sources.extend(chromium_sources(family, local / rel))
    else:
        logger.debug("LOCALAPPDATA not set; skipping Chromium browsers")

    if roaming is not None:
        sources.append(
            SourceDescriptor("Opera", roaming / OPERA_PROFILE / "History", CHROMIUM_QUERY, "Opera Stable")
        )
        sources.extend(firefox_sources(roaming / FIREFOX_PROFILES))
    else:
        logger.debug("APPDATA not set; skipping Opera and Firefox")

    return sources


def group_by_family(
    sources: list[SourceDescriptor],
) -> dict[str, list[SourceDescriptor]]:
    grouped: dict[str, list[SourceDescriptor]] = {}
    for source in sources:
        grouped.setdefault(source.family, []).append(source)
    return grouped
