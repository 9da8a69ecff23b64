"""Tests for modules/formatting/text.py."""

import pytest

from modules.formatting import (
    BulletList,
    Paragraph,
    blocks_to_html,
    detect_list_block,
    format_description,
    group_lines,
    render_block,
    render_inline,
    split_paragraphs,
)


class TestSplitParagraphs:
    """Paragraph splitting on blank lines."""

    def test_empty_string(self):
        assert split_paragraphs("") == []

    def test_joins_lines_with_spaces(self):
        assert split_paragraphs("a\nb\n\nc") == ["a b", "c"]

    def test_runs_of_blank_lines_make_one_break(self):
        assert split_paragraphs("a\n\n\n\nb") == ["a", "b"]

    def test_leading_and_trailing_blank_lines_ignored(self):
        assert split_paragraphs("\n\n  a  \n\n") == ["a"]

    def test_whitespace_only_lines_are_blank(self):
        assert split_paragraphs("a\n   \t \nb") == ["a", "b"]

    @pytest.mark.parametrize(
        "text",
        ["one", "one\ntwo", "one\n\ntwo", "x\n\ny\n\nz\nw", "\n\nlead\n\n\ntrail\n"],
    )
    def test_one_paragraph_per_group(self, text):
        """Number of paragraphs equals the number of blank-line-separated groups."""
        assert len(split_paragraphs(text)) == len(group_lines(text))


class TestDetectListBlock:
    """Bullet detection."""

    def test_bullet_dot(self):
        assert detect_list_block(["• item"]) is True

    def test_dash(self):
        assert detect_list_block(["intro", "- item"]) is True

    def test_dash_without_space_is_not_a_bullet(self):
        assert detect_list_block(["-item", "well-known"]) is False

    def test_plain_text(self):
        assert detect_list_block(["just words"]) is False


class TestRenderBlock:
    """Block rendering."""

    def test_continuation_attaches_to_previous_bullet(self):
        block = render_block(["• one", "more", "- two"])
        assert block == BulletList(items=("one more", "two"))

    def test_text_before_first_bullet_dropped(self):
        block = render_block(["Intro", "- first"])
        assert block == BulletList(items=("first",))

    def test_list_items_keep_asterisks(self):
        """Inline emphasis is only applied to paragraphs."""
        block = render_block(["- **bold** item"])
        assert block.items == ("**bold** item",)

    def test_inline_emphasis(self):
        block = render_block(["**bold** and *italic*"])
        assert isinstance(block, Paragraph)
        assert block.text == "<strong>bold</strong> and <em>italic</em>"

    def test_paragraph_lines_joined(self):
        block = render_block(["first", "second"])
        assert block == Paragraph(text="first second")


class TestRenderInline:
    """Inline emphasis substitution."""

    def test_unmatched_asterisks_literal(self):
        assert render_inline("5 * 3 = 15") == "5 * 3 = 15"

    def test_unbalanced_double_asterisk(self):
        assert render_inline("**open") == "**open"

    def test_stray_double_asterisk_stays_literal(self):
        assert render_inline("a ** b * c") == "a ** b * c"

    def test_bold_and_italic_together(self):
        assert render_inline("**a** then *b*") == "<strong>a</strong> then <em>b</em>"

    def test_non_greedy(self):
        assert render_inline("*a* and *b*") == "<em>a</em> and <em>b</em>"

    def test_newline_becomes_br(self):
        assert render_inline("a\nb") == "a<br>b"

    def test_html_is_escaped(self):
        assert render_inline("<script>**x**") == "&lt;script&gt;<strong>x</strong>"

    def test_empty(self):
        assert render_inline("") == ""


class TestFormatDescription:
    """End-to-end formatting."""

    def test_mixed_blocks_in_order(self):
        text = "Led the team\n\n• Hired 4\n- Shipped v2\n\n*Remote*"
        blocks = format_description(text)
        assert blocks == [
            Paragraph(text="Led the team"),
            BulletList(items=("Hired 4", "Shipped v2")),
            Paragraph(text="<em>Remote</em>"),
        ]

    def test_bare_marker_is_not_a_bullet(self):
        """A marker with nothing after it is plain text once the line is trimmed."""
        assert format_description("- \ntext") == [Paragraph(text="- text")]

    def test_deterministic(self):
        text = "a\n\n- b\nc"
        assert format_description(text) == format_description(text)

    def test_blocks_to_html(self):
        blocks = format_description("Intro **here**\n\n- one\n- a<b")
        assert blocks_to_html(blocks) == [
            "Intro <strong>here</strong>",
            '<ul class="list-disc list-inside space-y-1"><li>one</li><li>a&lt;b</li></ul>',
        ]
