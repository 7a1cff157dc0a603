"""Asset copying for Bloggo.

Everything below ``<source>/assets`` is copied verbatim to the root of the
destination directory, keeping its directory structure. Hidden files, and
files inside hidden directories, are skipped.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from .config import SiteConfig
from .utils import is_hidden, walk_files


class AssetCopier:
    """Copies static assets into the destination directory.

    Attributes:
        assets_dir (Path): Directory containing source assets.
        output_dir (Path): Directory the assets are copied into.
    """

    def __init__(self, config: SiteConfig, logger=None):
        self.assets_dir = config.assets_dir
        self.output_dir = config.dest_dir
        self.log = logger or structlog.get_logger(__name__)

    def run(self) -> int:
        """Copy every non-hidden asset.

        Returns:
            Number of files copied. Zero when there is no assets directory.
        """
        if not self.assets_dir.is_dir():
            self.log.info("no assets directory", path=str(self.assets_dir))
            return 0

        count = 0
        for src in walk_files(self.assets_dir):
            rel = src.relative_to(self.assets_dir)
            if is_hidden(rel):
                continue
            dest = self.output_dir / rel
            self.log.info("copying asset", src=str(src), dest=str(dest))
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
            count += 1
        return count
