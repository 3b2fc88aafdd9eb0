import re
from datetime import UTC, datetime

import pytest
from freezegun import freeze_time

from atomwriter.core.content import html_content
from atomwriter.core.feed import Entry, Feed
from atomwriter.core.identifiers import tag_uri
from atomwriter.core.tree import XHTML_NS, XmlNode

RFC3339_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}[+-]\d{2}:\d{2}")
CREATED = datetime(2025, 12, 25, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def feed(config):
    return Feed.create("My feed", "http://example.org", updated=CREATED, config=config)


def tags(node: XmlNode) -> list[str]:
    return [child.tag for child in node.elements()]


def test_create_builds_singleton_fields_in_order(config):
    feed = Feed.create(
        "My feed",
        "http://example.org",
        self_link="http://example.org/feed.xml",
        updated=CREATED,
        config=config,
    )

    assert tags(feed) == ["title", "link", "link", "author", "updated", "id"]
    assert feed.find("title").text == "My feed"
    assert feed.find("link").attributes == {"href": "http://example.org"}
    assert feed.find_all("link")[1].attributes == {
        "href": "http://example.org/feed.xml",
        "rel": "self",
        "type": "application/atom+xml",
    }
    assert feed.find("updated").text == "2025-12-25T12:00:00+00:00"
    assert feed.entries == []


def test_id_defaults_to_link(feed):
    assert feed.find("id").text == "http://example.org"


def test_explicit_id_and_author(config):
    feed = Feed.create("t", "http://example.org", author=("Jane", "jane@example.org"), id="urn:x", config=config)
    assert feed.find("id").text == "urn:x"
    assert feed.find("author").find("email").text == "jane@example.org"


def test_default_author_comes_from_injected_config(feed):
    author = feed.find("author")
    assert author.find("name").text == "Default Person"
    assert author.find("email").text == "default@example.org"


@freeze_time("2025-12-25 12:00:00")
def test_updated_defaults_to_now(config):
    feed = Feed.create("t", "http://example.org", config=config)
    assert RFC3339_PATTERN.fullmatch(feed.find("updated").text)
    assert feed.find("updated").text.startswith("2025-12-25T12:00:00")


def test_updated_string_is_kept_verbatim(config):
    feed = Feed.create("t", "http://example.org", updated="2003-12-13T18:30:02Z", config=config)
    assert feed.find("updated").text == "2003-12-13T18:30:02Z"


def test_missing_required_fields_are_not_rejected(config):
    feed = Feed.create(None, None, config=config)
    assert tags(feed) == ["author", "updated"]

    entry = feed.add_entry(None, None, None)
    assert tags(entry) == ["updated"]


def test_set_singleton_replaces_text_in_place(feed):
    title = feed.find("title")
    returned = feed.set_singleton("title", "Renamed")

    assert returned is title
    assert title.children == ["Renamed"]
    assert tags(feed).index("title") == 0


def test_set_singleton_replaces_structured_fields(feed):
    link = feed.find("link")
    feed.set_singleton("link", {"href": "http://example.org/new"})
    assert link.attributes == {"href": "http://example.org/new"}

    feed.set_author("Jane Doe")
    author = feed.find("author")
    assert author.find("name").text == "Jane Doe"
    assert author.find("email") is None
    assert len(feed.find_all("author")) == 1


def test_set_singleton_appends_missing_fields_before_entries(feed):
    feed.add_text_entry("First", "http://example.org/1", "one", updated=CREATED)
    subtitle = feed.set_singleton("subtitle", "About things")

    assert tags(feed) == ["title", "link", "author", "updated", "id", "subtitle", "entry"]
    assert subtitle.text == "About things"


def test_append_repeatable_always_adds(feed):
    feed.append_repeatable("category", {"term": "python"})
    feed.append_repeatable("category", {"term": "atom"})
    assert [node.get("term") for node in feed.find_all("category")] == ["python", "atom"]


def test_set_singleton_rejects_unknown_values(feed):
    with pytest.raises(TypeError):
        feed.set_singleton("title", 42)


def test_add_entry_returns_the_appended_entry(feed):
    entry = feed.add_entry("Hello world", "http://example.org/hello", "Hello the world!", updated=CREATED)

    assert isinstance(entry, Entry)
    assert feed.entries == [entry]
    assert tags(entry) == ["title", "link", "id", "updated", "content"]
    assert entry.find("id").text == "http://example.org/hello"
    assert entry.find("content") == XmlNode("content", None, ["Hello the world!"])


def test_entry_can_be_mutated_after_append(feed):
    entry = feed.add_text_entry("Hello", "http://example.org/hello", "body", updated=CREATED)
    entry.set_singleton("link", {"href": "http://example.org/moved"})
    entry.set_singleton("id", tag_uri("http://example.org/hello", CREATED))

    stored = feed.entries[0]
    assert stored.find("link").get("href") == "http://example.org/moved"
    assert stored.find("id").text == "tag:example.org,2025-12-25:/20251225120000"


def test_entries_keep_append_order(feed):
    titles = [f"Entry {n}" for n in range(5)]
    for title in titles:
        feed.add_text_entry(title, f"http://example.org/{title}", "x", updated=CREATED)

    assert [entry.find("title").text for entry in feed.entries] == titles


def test_entry_with_summary(feed):
    entry = feed.add_text_entry("t", "http://example.org/t", "body", summary="short", updated=CREATED)
    assert tags(entry) == ["title", "link", "id", "updated", "summary", "content"]
    assert entry.find("summary").text == "short"


def test_add_html_entry(feed):
    entry = feed.add_html_entry("t", "http://example.org/t", "<p>body</p>", summary="<b>s</b>", updated=CREATED)
    assert entry.find("content") == XmlNode("content", {"type": "html"}, ["<p>body</p>"])
    assert entry.find("summary") == XmlNode("summary", {"type": "html"}, ["<b>s</b>"])


def test_add_xhtml_entry(feed):
    entry = feed.add_xhtml_entry("t", "http://example.org/t", "<p>Hi</p>", updated=CREATED)
    content = entry.find("content")

    assert content.attributes == {"type": "xhtml"}
    (div,) = content.children
    assert div.tag == "div"
    assert div.attributes == {"xmlns": XHTML_NS}
    assert div.children == [XmlNode("p", None, ["Hi"])]


def test_add_entry_accepts_massaged_content(feed):
    entry = feed.add_entry("t", "http://example.org/t", html_content("<i>x</i>"), updated=CREATED)
    assert entry.find("content").get("type") == "html"


def test_config_is_loaded_when_not_injected(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ATOMWRITER_AUTHOR__NAME", "Env Person")
    monkeypatch.setenv("ATOMWRITER_AUTHOR__EMAIL", "env@example.org")

    feed = Feed.create("t", "http://example.org", updated=CREATED)

    assert feed.find("author").find("name").text == "Env Person"
    assert feed.config.author.email == "env@example.org"
