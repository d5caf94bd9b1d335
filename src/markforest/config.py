"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class MarkforestConfig(BaseModel):
    """Configuration for the markforest adapters.

    The core range and forest algorithms are not configurable; these
    settings only affect the wikitext and HTML adapters.
    """

    # HTML rendering
    html_escape: bool = True
    html_tag_map: dict[str, str] = Field(default_factory=dict)

    # Wikitext parsing
    wiki_skip_tags: list[str] = Field(default_factory=lambda: ["ref"])
    wiki_line_break_tags: list[str] = Field(default_factory=lambda: ["br"])
    wiki_unsupported_tags: list[str] = Field(default_factory=lambda: ["table"])
    wiki_drop_templates: bool = False


@lru_cache(maxsize=1)
def load_config() -> MarkforestConfig:
    """Return the adapter settings for this process, read once and cached.

    Settings come from the ``[tool.markforest]`` table of the first
    pyproject.toml found by ``_find_pyproject``. A missing file or table
    leaves every setting at its default.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return MarkforestConfig()

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("markforest", {})
    return MarkforestConfig(**tool_config)


def _find_pyproject(start: Path | None = None) -> Path | None:
    """Locate the pyproject.toml that configures this run.

    The working directory and its parents are searched first, so an
    installed markforest picks up the caller's project settings. The
    package's own location is the fallback for source checkouts.
    """
    roots = [start or Path.cwd(), Path(__file__).resolve().parent]
    for root in roots:
        current = root.resolve()
        for _ in range(10):  # Max 10 levels up
            candidate = current / "pyproject.toml"
            if candidate.exists():
                return candidate
            if current.parent == current:
                break
            current = current.parent
    return None


# Convenience accessor
config = load_config()
