"""Site building for Bloggo.

This module drives a whole build: it copies assets, loads and sorts the
posts, indexes them by tag, and renders every output file.

Output layout:
- index.html: the index template over all posts
- atom.xml: feed over all posts
- <tag>/index.html and <tag>/atom.xml: the same, for each tag
- one page per post at its ``path``, rendered with its ``layout`` template

Key classes:
- Site: Builds or cleans a site for a SiteConfig.
- BuildResult: What a build produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import structlog

from .assets import AssetCopier
from .collections import PostCollection, TagIndex
from .config import SiteConfig
from .content import PostLoader
from .errors import FileSystemError, PathError
from .feeds import AtomFeedGenerator, FeedGenerator
from .templates import TemplateEngine
from .utils import remove_dir
from .value import Map

INDEX_TEMPLATE = "index"
DEFAULT_LAYOUT = "default"


@dataclass
class BuildResult:
    """Result of a site build.

    Attributes:
        posts: All posts, newest first.
        tags: Tag index over posts.
        output_dir: Directory where the site was built.
        assets_copied: Number of asset files copied.
        written: Every page and feed file written, in write order.
    """

    posts: PostCollection
    tags: TagIndex
    output_dir: Path
    assets_copied: int = 0
    written: list[Path] = field(default_factory=list)


class Site:
    """Builds a static site from a source directory.

    Attributes:
        config: Site configuration.
        log: structlog logger used for progress reporting.
        feed_generator: Generator for the site and tag feeds.
    """

    def __init__(
        self,
        config: SiteConfig,
        logger=None,
        post_loader: PostLoader | None = None,
        feed_generator: FeedGenerator | None = None,
    ):
        self.config = config
        self.log = logger or structlog.get_logger(__name__)
        self.post_loader = post_loader or PostLoader(config, logger=self.log)
        self.feed_generator = feed_generator or AtomFeedGenerator()

    def clean(self) -> bool:
        """Remove the destination directory.

        Returns:
            True if something was removed.

        Raises:
            FileSystemError: If the directory cannot be removed.
        """
        dest = self.config.dest_dir
        self.log.info("cleaning build directory", path=str(dest))
        try:
            removed = remove_dir(dest)
        except OSError as exc:
            raise FileSystemError(exc) from exc
        if not removed:
            self.log.info("nothing to clean", path=str(dest))
        return removed

    def build(self) -> BuildResult:
        """Build the site.

        All posts are loaded and sorted before anything is rendered. The
        first failure aborts the build; files written before it remain.

        Returns:
            BuildResult describing the output.

        Raises:
            BloggoError: On the first failing step. OSErrors are wrapped in
                FileSystemError.
        """
        try:
            return self._build()
        except OSError as exc:
            raise FileSystemError(exc) from exc

    def _build(self) -> BuildResult:
        config = self.config
        self.log.info(
            "building site", source=str(config.source_dir), dest=str(config.dest_dir)
        )
        engine = TemplateEngine(config.templates_dir, {"base_url": config.base_url})

        config.dest_dir.mkdir(parents=True, exist_ok=True)
        copied = AssetCopier(config, logger=self.log).run()

        posts = self.post_loader.load()
        tags = TagIndex.build(posts)
        result = BuildResult(
            posts=posts, tags=tags, output_dir=config.dest_dir, assets_copied=copied
        )

        result.written.append(self.render_index(engine, posts, tags.names(), None))
        for tag, bucket in tags.items():
            result.written.append(self.render_index(engine, bucket, tags.names(), tag))
            result.written.append(self.feed_generator.write(self._tag_dir(tag), bucket))
        for post in posts:
            result.written.append(self.render_post(engine, post))
        result.written.append(self.feed_generator.write(config.dest_dir, posts))

        self.log.info("build complete", posts=len(posts), tags=len(tags))
        return result

    def render_index(
        self,
        engine: TemplateEngine,
        posts: PostCollection,
        tag_names: list[str],
        tag: str | None,
    ) -> Path:
        """Render the index template for all posts or for one tag.

        Args:
            engine: Template engine.
            posts: Posts to list.
            tag_names: Every known tag, sorted.
            tag: The current tag, or None for the site index.

        Returns:
            Path of the written index.html.
        """
        directory = self.config.dest_dir if tag is None else self._tag_dir(tag)
        target = directory / "index.html"
        self.log.info("rendering index", path=str(target), tag=tag)
        context = {"posts": posts.to_data(), "tags": tag_names, "tag": tag}
        engine.render_to(INDEX_TEMPLATE, context, target)
        return target

    def render_post(self, engine: TemplateEngine, post: Map) -> Path:
        """Render a single post with its layout template.

        Args:
            engine: Template engine.
            post: Normalized post.

        Returns:
            Path of the written page.
        """
        layout = post.get_string("layout") or DEFAULT_LAYOUT
        target = (self.config.dest_dir / post.get_string("path")).with_suffix(".html")
        self.log.info("rendering post", path=str(target), layout=layout)
        engine.render_to(layout, post.to_data(), target)
        return target

    def _tag_dir(self, tag: str) -> Path:
        rel = PurePosixPath(tag)
        if not rel.parts or rel.is_absolute() or ".." in rel.parts:
            raise PathError(
                f"Tag {tag!r} does not name a directory inside {self.config.dest_dir}"
            )
        return self.config.dest_dir / rel
