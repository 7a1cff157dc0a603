"""Front matter parsing for Bloggo.

A post starts with a YAML block between two ``---`` lines. Everything after
the closing delimiter is the body, which is returned untouched so renderers
can process it.

Key functions:
- parse_front_matter: Split a text stream into a front matter Map and body.
- load_front_matter: Decode a YAML block into a front matter Map.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import yaml

from .errors import (
    BloggoError,
    DeserializationError,
    MissingFrontMatterError,
    NotAMappingError,
    UnexpectedEOFError,
)
from .value import Map, Tagged, Value

DELIMITER = "---"

_STR_TAG = "tag:yaml.org,2002:str"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader variant used for front matter.

    Timestamps stay strings, and nodes with explicit tags that SafeLoader
    would turn into bytes, sets or pairs (or reject outright) are wrapped in
    Tagged so the value model can unwrap them. Entries whose key is a
    sequence or a mapping are dropped.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            node.value = [
                (key, value)
                for key, value in node.value
                if isinstance(key, yaml.ScalarNode)
            ]
        return super().construct_mapping(node, deep=deep)


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_tagged(loader: FrontMatterLoader, node: yaml.Node) -> Tagged:
    if isinstance(node, yaml.ScalarNode):
        tag = loader.resolve(yaml.ScalarNode, node.value, (node.style is None, False))
        if tag not in loader.yaml_constructors or tag == node.tag:
            tag = _STR_TAG
        plain = yaml.ScalarNode(
            tag, node.value, node.start_mark, node.end_mark, style=node.style
        )
        inner = loader.construct_object(plain, deep=True)
    elif isinstance(node, yaml.SequenceNode):
        inner = loader.construct_sequence(node, deep=True)
    else:
        inner = loader.construct_mapping(node, deep=True)
    return Tagged(node.tag, inner)


for _tag in (
    None,
    _TIMESTAMP_TAG,
    "tag:yaml.org,2002:binary",
    "tag:yaml.org,2002:omap",
    "tag:yaml.org,2002:pairs",
    "tag:yaml.org,2002:set",
):
    FrontMatterLoader.add_constructor(_tag, _construct_tagged)


def load_front_matter(text: str, source: str | Path | None = None) -> Map:
    """Decode a YAML front matter block.

    Args:
        text: YAML source, without delimiters.
        source: Identifier of the document, used in error context.

    Returns:
        The decoded front matter.

    Raises:
        DeserializationError: If the YAML is malformed.
        NotAMappingError: If the document is not a mapping.
        UnrepresentableNumberError: If a number is out of range.
    """
    source_path = Path(source) if source is not None else None
    try:
        data = yaml.load(text, Loader=FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise DeserializationError(str(exc), source_path) from exc
    try:
        value = Value.from_data(data)
    except BloggoError as exc:
        exc.source_path = exc.source_path or source_path
        raise
    if not isinstance(value, Map):
        raise NotAMappingError(source_path)
    return value


def parse_front_matter(stream: TextIO, source: str | Path) -> tuple[Map, str]:
    """Split a document into its front matter and its raw body.

    The first line must start with the delimiter. Lines are then collected
    until the next line starting with the delimiter, and the rest of the
    stream is the body.

    Args:
        stream: Text stream positioned at the start of the document.
        source: Identifier of the document (usually its path).

    Returns:
        Tuple of (front matter Map, body text).

    Raises:
        UnexpectedEOFError: If the stream is empty or ends inside the block.
        MissingFrontMatterError: If the first line is not a delimiter.
    """
    first = stream.readline()
    if not first:
        raise UnexpectedEOFError(source)
    if not first.startswith(DELIMITER):
        raise MissingFrontMatterError(Path(source))

    lines: list[str] = []
    for line in iter(stream.readline, ""):
        if line.startswith(DELIMITER):
            break
        lines.append(line)
    else:
        raise UnexpectedEOFError(source)

    front_matter = load_front_matter("".join(lines), source)
    return front_matter, stream.read()
