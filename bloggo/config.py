"""Site configuration for Bloggo.

The CLI resolves every setting from an explicit flag, then an environment
variable, then the defaults below, and hands the result to the build as a
frozen SiteConfig.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_SOURCE_DIR = "source/"
DEFAULT_DEST_DIR = "build/"
DEFAULT_BASE_URL = ""

ENV_SOURCE_DIR = "BLOGGO_SOURCE"
ENV_DEST_DIR = "BLOGGO_DEST"
ENV_BASE_URL = "BLOGGO_BASE_URL"
ENV_LOG_LEVEL = "BLOGGO_LOG"


@dataclass(frozen=True)
class SiteConfig:
    """Immutable settings for one build.

    Attributes:
        source_dir: Directory holding posts/, templates/ and assets/.
        dest_dir: Directory the site is written to.
        base_url: Prefix for post URLs, stored without a trailing slash.
    """

    source_dir: Path = field(default_factory=lambda: Path(DEFAULT_SOURCE_DIR))
    dest_dir: Path = field(default_factory=lambda: Path(DEFAULT_DEST_DIR))
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_dir", Path(self.source_dir))
        object.__setattr__(self, "dest_dir", Path(self.dest_dir))
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/"))

    @property
    def posts_dir(self) -> Path:
        return self.source_dir / "posts"

    @property
    def templates_dir(self) -> Path:
        return self.source_dir / "templates"

    @property
    def assets_dir(self) -> Path:
        return self.source_dir / "assets"
