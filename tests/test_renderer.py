"""Tests for renderer.py — HTML reduction and entry layout."""

from feedbin_cli.models import Entry
from feedbin_cli.renderer import (
    NO_CONTENT_PLACEHOLDER,
    SEPARATOR,
    format_published,
    html_to_text,
    render,
)


def make_entry(**kwargs):
    defaults = {
        "id": 1,
        "feed_id": 1,
        "title": "A Title",
        "published": "2024-03-05T09:07:00.000000Z",
        "url": "https://example.com/a",
    }
    defaults.update(kwargs)
    return Entry(**defaults)


def body_of(rendered):
    return rendered.split(SEPARATOR)[1].strip()


class TestHtmlToText:
    def test_script_removed_text_kept(self):
        text = html_to_text("<script>bad()</script><p>Hello<br/>World</p>")
        assert "Hello" in text
        assert "World" in text
        assert "bad()" not in text
        assert "<p>" not in text
        assert "<script>" not in text

    def test_br_becomes_newline(self):
        assert html_to_text("<p>Hello<br/>World</p>") == "Hello\nWorld"

    def test_style_removed(self):
        text = html_to_text("<style>p { color: red }</style><p>Visible</p>")
        assert text == "Visible"

    def test_entities_decoded(self):
        assert html_to_text("<p>Fish &amp; Chips &lt;3</p>") == "Fish & Chips <3"

    def test_newline_runs_collapsed(self):
        text = html_to_text("<p>One</p>\n\n\n\n\n<p>Two</p>")
        assert text == "One\n\nTwo"

    def test_adjacent_paragraphs_separated(self):
        assert html_to_text("<p>One</p><p>Two</p>") == "One\n\nTwo"

    def test_block_elements_separated(self):
        text = html_to_text("<h1>Head</h1><div>Body</div><ul><li>a</li><li>b</li></ul>")
        assert text == "Head\n\nBody\n\na\n\nb"

    def test_nested_blocks_single_blank_line(self):
        assert html_to_text("<div><p>One</p></div><div><p>Two</p></div>") == "One\n\nTwo"

    def test_whitespace_only_lines_collapsed(self):
        assert html_to_text("<p>One</p>\n  \n  \n  \n<p>Two</p>") == "One\n\nTwo"

    def test_trailing_spaces_stripped(self):
        assert html_to_text("<p>One   <br/>Two</p>") == "One\nTwo"

    def test_trimmed(self):
        assert html_to_text("\n\n  <div>Body</div>  \n") == "Body"

    def test_control_characters_dropped(self):
        text = html_to_text("<p>Bell\x07 and \x1b[31mred</p>")
        assert "\x07" not in text
        assert "\x1b" not in text
        assert "red" in text

    def test_no_tags_survive(self):
        text = html_to_text('<div class="x"><a href="/y">link</a><img src="z.png"/></div>')
        assert text == "link"


class TestRender:
    def test_header_fields(self):
        rendered = render(
            make_entry(author="Jane Doe", feed_title="Daring Fireball", content="<p>Hi</p>")
        )
        lines = rendered.splitlines()
        assert lines[0] == "Title: A Title"
        assert lines[1] == "Published: 2024-03-05 09:07"
        assert lines[2] == "Author: Jane Doe"
        assert lines[3] == "Feed: Daring Fireball"
        assert lines[4] == "URL: https://example.com/a"

    def test_optional_header_fields_omitted(self):
        rendered = render(make_entry(content="<p>Hi</p>"))
        assert "Author:" not in rendered
        assert "Feed:" not in rendered

    def test_body_follows_separator(self):
        rendered = render(make_entry(content="<p>Hello</p>"))
        assert body_of(rendered) == "Hello"

    def test_absent_content_placeholder(self):
        rendered = render(make_entry(content=None))
        assert body_of(rendered) == NO_CONTENT_PLACEHOLDER

    def test_blank_content_placeholder(self):
        rendered = render(make_entry(content="<script>only()</script>"))
        assert body_of(rendered) == NO_CONTENT_PLACEHOLDER

    def test_malformed_published_shown_raw(self):
        entry = make_entry(published="sometime")
        assert format_published(entry) == "sometime"
        assert "Published: sometime" in render(entry)

    def test_missing_published(self):
        assert format_published(make_entry(published="")) == "unknown"
