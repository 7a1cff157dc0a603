from xml.etree import ElementTree

from bloggo.feeds import AtomFeedGenerator
from bloggo.value import Map

ATOM = "{http://www.w3.org/2005/Atom}"


def test_atom_feed_has_one_entry_per_post():
    posts = [
        Map({"title": "One", "date": "2024-06-01T00:00:00+00:00", "url": "/one.html"}),
        Map({"title": "Two", "url": "/two.html"}),
        Map({"date": "2024-01-01"}),
    ]
    xml = AtomFeedGenerator().generate(posts)

    assert xml.startswith('<?xml version="1.0" encoding="utf-8"?>\n')
    root = ElementTree.fromstring(xml.encode("utf-8"))
    entries = root.findall(f"{ATOM}entry")
    assert len(entries) == 3

    first, second, third = entries
    assert first.findtext(f"{ATOM}title") == "One"
    assert first.findtext(f"{ATOM}published") == "2024-06-01T00:00:00+00:00"
    assert first.find(f"{ATOM}link").get("href") == "/one.html"

    assert second.find(f"{ATOM}published") is None
    assert third.find(f"{ATOM}title") is None
    assert third.find(f"{ATOM}link") is None
    assert '<link href="/one.html" />' in xml


def test_atom_feed_skips_non_string_fields_and_escapes():
    posts = [Map({"title": "Fish & <Chips>", "date": 2024, "url": '/q?a="1"&b=2'})]
    xml = AtomFeedGenerator().generate(posts)
    root = ElementTree.fromstring(xml.encode("utf-8"))
    entry = root.find(f"{ATOM}entry")
    assert entry.findtext(f"{ATOM}title") == "Fish & <Chips>"
    assert entry.find(f"{ATOM}published") is None
    assert entry.find(f"{ATOM}link").get("href") == '/q?a="1"&b=2'


def test_empty_feed_and_write(tmp_path):
    generator = AtomFeedGenerator()
    assert generator.generate([]).endswith("</feed>\n")

    target = generator.write(tmp_path / "python", [Map({"title": "T"})])
    assert target == tmp_path / "python" / "atom.xml"
    assert "<title>T</title>" in target.read_text(encoding="utf-8")
