from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from datetime import datetime
from typing import Any

from .utils import UNIX_EPOCH, parse_iso_datetime
from .value import Array, Map, String


def date_key(post: Map) -> datetime:
    """Sort key of a post: its parsed date, or the Unix epoch."""
    text = post.get_string("date")
    parsed = parse_iso_datetime(text) if text is not None else None
    return parsed or UNIX_EPOCH


def post_tags(post: Map) -> list[str]:
    """Tag names of a post, in source order.

    A String ``tags`` field is a single tag; an Array contributes its String
    elements, repeats included. Anything else carries no tags, and blank
    names are skipped.
    """
    value = post.get("tags")
    if isinstance(value, String):
        names = [value.value]
    elif isinstance(value, Array):
        names = value.strings()
    else:
        names = []
    return [name for name in names if name.strip()]


class PostCollection(Sequence[Map]):
    """Ordered list of posts, with helpers for sorting and templates."""

    def __init__(self, posts: Iterable[Map]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Map]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def sorted(self) -> PostCollection:
        """Sort posts by date, newest first.

        Posts without a parseable date sort as the Unix epoch. The sort is
        stable, so posts sharing a date keep their current relative order
        and sorting a sorted collection changes nothing.

        Returns:
            A new PostCollection.
        """
        return PostCollection(sorted(self._posts, key=date_key, reverse=True))

    def to_data(self) -> list[dict[str, Any]]:
        return [post.to_data() for post in self._posts]

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"


class TagIndex(Mapping[str, PostCollection]):
    """Mapping of tag name to the posts carrying it.

    Tags iterate in lexicographic order. Each bucket keeps the order of the
    collection it was built from and holds the same post objects. A post
    whose tags repeat a name is added to that bucket once per occurrence.
    """

    def __init__(self, mapping: Mapping[str, Iterable[Map]] | None = None):
        self._mapping = {k: PostCollection(v) for k, v in (mapping or {}).items()}

    @classmethod
    def build(cls, posts: Iterable[Map]) -> TagIndex:
        """Index posts by tag in a single pass.

        Args:
            posts: Posts in collection order.

        Returns:
            The tag index.
        """
        buckets: dict[str, list[Map]] = {}
        for post in posts:
            for tag in post_tags(post):
                buckets.setdefault(tag, []).append(post)
        return cls(buckets)

    def __getitem__(self, key: str) -> PostCollection:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._mapping))

    def __len__(self) -> int:
        return len(self._mapping)

    def names(self) -> list[str]:
        return list(self)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TagIndex({len(self._mapping)} tags)"
