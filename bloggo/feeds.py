"""Feed generation for Bloggo.

Classes:
    FeedGenerator: Base class for feed generators.
    AtomFeedGenerator: Generates a minimal Atom feed.

The Atom output only carries one entry per post with its title, publish
date and link. Feed-level elements such as <id> and <updated> are not
written, so the result is well-formed XML but not a conformant Atom feed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from markupsafe import escape

from .value import Map


class FeedGenerator(ABC):
    """Base class for feed generators.

    Subclasses name their output file and turn a sequence of posts into
    the feed document.
    """

    @property
    @abstractmethod
    def filename(self) -> str:
        """Return the output filename for this feed."""
        ...

    @abstractmethod
    def generate(self, posts: Iterable[Map]) -> str:
        """Generate feed content from posts.

        Args:
            posts: Posts to include, in feed order.

        Returns:
            Feed content as a string.
        """
        ...

    def write(self, output_dir: Path, posts: Iterable[Map]) -> Path:
        """Generate and write the feed into a directory.

        Args:
            output_dir: Directory to write the feed file to.
            posts: Posts to include, in feed order.

        Returns:
            Path of the written file.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / self.filename
        output_path.write_text(self.generate(posts), encoding="utf-8")
        return output_path


class AtomFeedGenerator(FeedGenerator):
    """Generates atom.xml from the title, date and url fields of posts."""

    @property
    def filename(self) -> str:
        return "atom.xml"

    def generate(self, posts: Iterable[Map]) -> str:
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            '<feed xmlns="http://www.w3.org/2005/Atom">',
        ]
        for post in posts:
            lines.append("  <entry>")
            title = post.get_string("title")
            if title is not None:
                lines.append(f"    <title>{escape(title)}</title>")
            published = post.get_string("date")
            if published is not None:
                lines.append(f"    <published>{escape(published)}</published>")
            link = post.get_string("url")
            if link is not None:
                lines.append(f'    <link href="{escape(link)}" />')
            lines.append("  </entry>")
        lines.append("</feed>")
        return "\n".join(lines) + "\n"
