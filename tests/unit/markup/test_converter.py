"""Unit tests for the Markdown/HTML converter."""

import pytest

from adosync.markup import to_local_markup, to_remote_markup


@pytest.mark.unit
class TestToRemoteMarkup:
    """Tests for to_remote_markup."""

    def test_single_paragraph_unwrapped(self) -> None:
        """A lone paragraph is stored without its <p> wrapper."""
        assert to_remote_markup("Hello *world*") == "Hello <em>world</em>"

    def test_multiple_paragraphs_keep_tags(self) -> None:
        """Only a wrapper spanning the whole fragment is removed."""
        html = to_remote_markup("First\n\nSecond")

        assert html.startswith("<p>First</p>")
        assert html.endswith("<p>Second</p>")

    def test_no_table_of_contents_or_numbering(self) -> None:
        """Headings render plainly: no TOC, no numbers, no ids."""
        html = to_remote_markup("# Title\n\nBody")

        assert html.startswith("<h1>Title</h1>")
        assert "toc" not in html
        assert "1 Title" not in html

    def test_list_rendered(self) -> None:
        """Lists become HTML lists."""
        html = to_remote_markup("- one\n- two")

        assert "<ul>" in html
        assert "<li>one</li>" in html

    def test_result_trimmed(self) -> None:
        """Surrounding whitespace is trimmed."""
        assert to_remote_markup("\n\n  text  \n\n") == "text"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value: str | None) -> None:
        """Empty input gives an empty string."""
        assert to_remote_markup(value) == ""


@pytest.mark.unit
class TestToLocalMarkup:
    """Tests for to_local_markup."""

    def test_paragraphs_preserved(self) -> None:
        """Paragraphs are separated by one blank line."""
        assert to_local_markup("<p>one</p><p>two</p>") == "one\n\ntwo"

    def test_inline_formatting(self) -> None:
        """Bold text converts to Markdown emphasis."""
        assert to_local_markup("<div>a <b>bold</b> move</div>") == "a **bold** move"

    def test_heading_style_atx(self) -> None:
        """Headings use # markers."""
        assert to_local_markup("<h2>Steps</h2><p>x</p>").startswith("## Steps")

    def test_list_items(self) -> None:
        """List items use - bullets."""
        text = to_local_markup("<ul><li>one</li><li>two</li></ul>")

        assert "- one" in text
        assert "- two" in text

    def test_unknown_tags_removed(self) -> None:
        """Tag-like text left behind is stripped."""
        text = to_local_markup("<p>keep &lt;custom attr=1&gt; this</p>")

        assert "<" not in text
        assert ">" not in text
        assert "keep" in text
        assert "this" in text

    def test_stray_angle_brackets_escaped(self) -> None:
        """Lone comparison signs are escaped as entities."""
        text = to_local_markup("<p>1 &lt; 2</p>")

        assert text == "1 &lt; 2"

    def test_punctuation_not_backslash_escaped(self) -> None:
        """Ordinary punctuation is kept as written."""
        text = to_local_markup("<p>step-1 #tag a+b</p>")

        assert text == "step-1 #tag a+b"

    def test_blockquote_unwrapped(self) -> None:
        """Blockquotes keep their text without a > marker."""
        text = to_local_markup("<blockquote><p>quoted</p></blockquote>")

        assert text == "quoted"

    def test_links_not_autolinked(self) -> None:
        """Links never render as <url> autolinks."""
        text = to_local_markup('<a href="https://example.com">https://example.com</a>')

        assert "<" not in text
        assert "https://example.com" in text

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value: str | None) -> None:
        """Empty input gives an empty string."""
        assert to_local_markup(value) == ""


@pytest.mark.unit
class TestRoundTrip:
    """Weak round-trip properties."""

    @pytest.mark.parametrize(
        "text",
        [
            "plain",
            "a < b > c",
            "<script>alert(1)</script>",
            "# Heading\n\n- item <x>\n- other",
            "Use `<div>` wrappers\n\n> quoted > text",
            "<http://example.com>",
            "mixed <b>html</b> and **markdown**",
        ],
    )
    def test_round_trip_is_tag_free(self, text: str) -> None:
        """Converting there and back never yields angle brackets."""
        local = to_local_markup(to_remote_markup(text))

        assert "<" not in local
        assert ">" not in local

    def test_round_trip_keeps_paragraphs(self) -> None:
        """Paragraph boundaries survive a round trip."""
        local = to_local_markup(to_remote_markup("First paragraph\n\nSecond paragraph"))

        assert local == "First paragraph\n\nSecond paragraph"
