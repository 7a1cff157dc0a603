from io import StringIO

import pytest

from bloggo.errors import (
    DeserializationError,
    MissingFrontMatterError,
    NotAMappingError,
    UnexpectedEOFError,
)
from bloggo.frontmatter import load_front_matter, parse_front_matter
from bloggo.value import Array, Integer, Map, Null, String


def parse(text: str, source: str = "posts/test.md"):
    return parse_front_matter(StringIO(text), source)


def test_splits_front_matter_and_body():
    front_matter, body = parse("---\ntitle: Hi\ntags: [a]\n---\n# Body\n\nMore.\n")
    assert front_matter == Map({"title": "Hi", "tags": ["a"]})
    assert body == "# Body\n\nMore.\n"


def test_closing_delimiter_only_needs_prefix():
    front_matter, body = parse("--- yaml\ntitle: Hi\n-----\nbody")
    assert front_matter.get_string("title") == "Hi"
    assert body == "body"


def test_empty_stream_is_unexpected_eof():
    with pytest.raises(UnexpectedEOFError) as excinfo:
        parse("", source="posts/empty.md")
    assert str(excinfo.value) == "Unexpected end of file: posts/empty.md"


def test_missing_closing_delimiter_is_unexpected_eof():
    with pytest.raises(UnexpectedEOFError) as excinfo:
        parse("---\ntitle: Hi\nno end in sight\n", source="posts/open.md")
    assert excinfo.value.source == "posts/open.md"


def test_first_line_must_be_delimiter():
    with pytest.raises(MissingFrontMatterError) as excinfo:
        parse("title: Hi\n---\nbody\n")
    assert str(excinfo.value) == "Missing front matter."


def test_invalid_yaml_is_deserialization_error():
    with pytest.raises(DeserializationError) as excinfo:
        parse("---\ntitle: [unclosed\n---\n")
    assert str(excinfo.value).startswith("YAML deserialization failure:")
    assert excinfo.value.detail


def test_front_matter_must_be_a_mapping():
    with pytest.raises(NotAMappingError):
        parse("---\n- one\n- two\n---\n")
    with pytest.raises(NotAMappingError):
        parse("---\n---\nbody\n")


def test_timestamps_stay_strings():
    front_matter = load_front_matter("date: 2024-01-01\nwhen: 2023-02-04T15:38:42Z\n")
    assert front_matter["date"] == String("2024-01-01")
    assert front_matter["when"] == String("2023-02-04T15:38:42Z")


def test_tags_are_unwrapped():
    front_matter = load_front_matter(
        "count: !custom 5\n"
        "name: !custom 'quoted'\n"
        "items: !list [1, 2]\n"
        "data: !!binary aGVsbG8=\n"
        "flags: !!set {a, b}\n"
    )
    assert front_matter["count"] == Integer(5)
    assert front_matter["name"] == String("quoted")
    assert front_matter["items"] == Array([1, 2])
    assert front_matter["data"] == String("aGVsbG8=")
    assert front_matter["flags"] == Map({"a": Null(), "b": Null()})


def test_non_string_keys_are_dropped():
    front_matter = load_front_matter("1: one\ntrue: yes\nname: x\n")
    assert list(front_matter) == ["name"]


def test_collection_keys_are_dropped():
    front_matter = load_front_matter("? [a, b]\n: c\n? {k: v}\n: d\nname: x\n")
    assert list(front_matter) == ["name"]
    nested = load_front_matter("outer:\n  ? [1]\n  : skipped\n  kept: 1\n")
    assert nested["outer"] == Map({"kept": 1})
