"""Post loading for Bloggo.

This module turns the files below ``<source>/posts`` into normalized posts.
A post is a front matter Map extended with derived fields:

- text: the rendered body
- path: destination path relative to the output directory, ending in .html
- url: base URL joined with path
- date: derived from a YYYY-MM-DD path prefix when the front matter has none

Key classes:
- PostBuilder: Parses and normalizes a single post file.
- PostLoader: Discovers every post file and builds the sorted collection.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from .collections import PostCollection
from .config import SiteConfig
from .errors import BloggoError, PathError
from .frontmatter import parse_front_matter
from .renderers import MarkdownRenderer, render_body
from .utils import extract_date_from_name, is_hidden, walk_files
from .value import Map


class PostBuilder:
    """Builds normalized posts from source files.

    Attributes:
        config: Site configuration.
        markdown: Renderer for Markdown bodies, shared by every post.
    """

    def __init__(
        self,
        config: SiteConfig,
        markdown: MarkdownRenderer | None = None,
        logger=None,
    ):
        self.config = config
        self.markdown = markdown or MarkdownRenderer()
        self.log = logger or structlog.get_logger(__name__)

    def build(self, path: Path) -> Map:
        """Parse a post file and add its derived fields.

        Args:
            path: Path to the source file, below the posts directory.

        Returns:
            The normalized post.

        Raises:
            OSError: If the file cannot be read.
            BloggoError: If the front matter is invalid or the path is not
                below the posts directory.
        """
        self.log.debug("parsing post", path=str(path))
        try:
            with open(path, encoding="utf-8") as f:
                post, body = parse_front_matter(f, path)
        except UnicodeDecodeError as exc:
            raise BloggoError(f"{path} is not valid UTF-8: {exc.reason}", path) from exc

        post.insert("text", render_body(path, body, self.markdown))

        filename = self.destination_path(path)
        post.insert("path", filename)
        post.insert("url", f"{self.config.base_url}/{filename}")

        if "date" not in post:
            date = extract_date_from_name(filename)
            if date is not None:
                post.insert("date", date.isoformat())
        return post

    def destination_path(self, path: Path) -> str:
        """Compute the destination path of a post.

        Args:
            path: Path to the source file.

        Returns:
            POSIX path relative to the posts directory, with a .html suffix.

        Raises:
            PathError: If path is not below the posts directory.
        """
        try:
            rel = path.relative_to(self.config.source_dir).relative_to("posts")
        except ValueError as exc:
            raise PathError(
                f"{path} is not inside {self.config.posts_dir}", path
            ) from exc
        return rel.with_suffix(".html").as_posix()


class PostLoader:
    """Discovers post files and assembles them into a collection.

    Attributes:
        config: Site configuration.
        post_builder: Builder used for each post file.
    """

    def __init__(
        self,
        config: SiteConfig,
        post_builder: PostBuilder | None = None,
        logger=None,
    ):
        self.config = config
        self.log = logger or structlog.get_logger(__name__)
        self.post_builder = post_builder or PostBuilder(config, logger=self.log)

    def iter_files(self) -> list[Path]:
        """List every non-hidden file below the posts directory.

        Returns:
            Paths sorted by their POSIX path relative to the posts directory,
            which fixes the order of posts that share a date.
        """
        root = self.config.posts_dir
        files = [p for p in walk_files(root) if not is_hidden(p.relative_to(root))]
        return sorted(files, key=lambda p: p.relative_to(root).as_posix())

    def load(self) -> PostCollection:
        """Build every post, newest first.

        Returns:
            The sorted collection.

        Raises:
            OSError, BloggoError: On the first post that fails.
        """
        posts = [self.post_builder.build(path) for path in self.iter_files()]
        self.log.info("loaded posts", count=len(posts))
        return PostCollection(posts).sorted()
