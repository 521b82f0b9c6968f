"""Runtime configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _get_default_cache_path() -> Path:
    """Get the default cache database path, honouring ``XDG_CACHE_HOME``."""
    cache_home = os.environ.get("XDG_CACHE_HOME")
    base = Path(cache_home) if cache_home else Path.home() / ".cache"
    return base / "nixdocs" / "cache.db"


@dataclass(slots=True)
class Settings:
    """Settings for the nix-build fetcher and the on-disk cache."""

    nix_build: str = "nix-build"
    cache_path: Path | None = None

    def __post_init__(self) -> None:
        if self.cache_path is None:
            self.cache_path = _get_default_cache_path()

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``NIXDOCS_*`` environment variables."""
        cache_path = os.environ.get("NIXDOCS_CACHE_PATH")
        return cls(
            nix_build=os.environ.get("NIXDOCS_NIX_BUILD", "nix-build"),
            cache_path=Path(cache_path) if cache_path else None,
        )

    def resolve_cache_path(self) -> Path:
        """Return the cache database path with ``~`` expanded."""
        return Path(self.cache_path or _get_default_cache_path()).expanduser()
