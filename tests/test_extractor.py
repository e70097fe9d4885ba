"""Tests for app.services.extractor.extract_blog_content."""

import pytest
from pydantic import ValidationError

from app.models.blog_content import BlogContent, ImageRef
from app.services.extractor import NO_TITLE, extract_blog_content, normalize_whitespace


def _page(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------

class TestTitle:
    def test_title_tag_wins(self):
        html = _page("<title>  Page Title </title>", "<h1>Heading</h1>")
        assert extract_blog_content(html).title == "Page Title"

    def test_falls_back_to_first_h1(self):
        html = _page("", "<h1> First </h1><h1>Second</h1>")
        assert extract_blog_content(html).title == "First"

    def test_blank_title_falls_back_to_h1(self):
        html = _page("<title>   </title>", "<h1>From H1</h1>")
        assert extract_blog_content(html).title == "From H1"

    def test_svg_title_counts_when_head_title_is_empty(self):
        html = _page(
            "<title></title>",
            "<h1>Heading</h1><svg><title>Chart caption</title></svg>",
        )
        assert extract_blog_content(html).title == "Chart caption"

    def test_all_title_elements_are_joined(self):
        html = _page("<title>Post</title>", "<svg><title>Icon</title></svg>")
        assert extract_blog_content(html).title == "PostIcon"

    def test_no_title_and_no_h1(self):
        html = _page("", "<h2>Only a subheading</h2><p>Text</p>")
        assert extract_blog_content(html).title == NO_TITLE == "No title found"

    def test_h1_with_nested_markup_keeps_spacing(self):
        html = _page("", "<h1>Hello <em>big</em> world</h1>")
        assert extract_blog_content(html).title == "Hello big world"


# ---------------------------------------------------------------------------
# Meta description
# ---------------------------------------------------------------------------

class TestMetaDescription:
    def test_meta_name_description(self):
        html = _page(
            '<meta name="description" content="Plain description">'
            '<meta property="og:description" content="OG description">'
        )
        assert extract_blog_content(html).meta_description == "Plain description"

    def test_og_description_fallback(self):
        html = _page('<meta property="og:description" content="OG description">')
        assert extract_blog_content(html).meta_description == "OG description"

    def test_empty_content_attribute_falls_through(self):
        html = _page(
            '<meta name="description" content="">'
            '<meta property="og:description" content="OG description">'
        )
        assert extract_blog_content(html).meta_description == "OG description"

    def test_missing_description_is_empty(self):
        assert extract_blog_content(_page("<title>T</title>")).meta_description == ""


# ---------------------------------------------------------------------------
# Body content
# ---------------------------------------------------------------------------

class TestContent:
    def test_article_content(self):
        html = _page("", "<nav>Menu</nav><article><p>Article body text.</p></article>")
        assert extract_blog_content(html).content == "Article body text."

    def test_longest_candidate_wins_over_priority(self):
        html = _page(
            "",
            "<article>Short teaser.</article>"
            "<main><p>This main element holds the real and much longer article text.</p></main>",
        )
        content = extract_blog_content(html).content
        assert content == "This main element holds the real and much longer article text."

    def test_higher_priority_kept_on_equal_length(self):
        html = _page("", '<article>abcde</article><div class="post-body">vwxyz</div>')
        assert extract_blog_content(html).content == "abcde"

    def test_class_selectors(self):
        html = _page(
            "",
            '<div class="sidebar">Sidebar</div>'
            '<div class="entry-content"><p>Entry content paragraph.</p></div>',
        )
        assert extract_blog_content(html).content == "Entry content paragraph."

    def test_multiple_matches_are_concatenated(self):
        html = _page("", "<article>One</article><article>Two</article>")
        assert extract_blog_content(html).content == "OneTwo"

    def test_container_chrome_can_win(self):
        html = _page(
            "",
            '<div class="container"><header>Site header</header>'
            "<article>Post</article><footer>Footer links</footer></div>",
        )
        content = extract_blog_content(html).content
        assert content.startswith("Site header")
        assert "Footer links" in content

    def test_falls_back_to_body_without_candidates(self):
        html = _page("<title>T</title>", "<div><p>Just a paragraph.</p></div>")
        assert extract_blog_content(html).content == "Just a paragraph."

    def test_falls_back_to_body_when_candidates_are_empty(self):
        html = _page("", "<article>   </article><main></main><p>Loose text</p>")
        assert extract_blog_content(html).content == "Loose text"

    def test_whitespace_is_normalized(self):
        html = _page("", "<article>\n  First   line\n\n\n  second\tline  \n</article>")
        assert extract_blog_content(html).content == "First line second line"

    def test_empty_document(self):
        record = extract_blog_content("")
        assert record.content == ""
        assert record.word_count == 0
        assert record.title == NO_TITLE


class TestNormalizeWhitespace:
    def test_collapses_runs_and_trims(self):
        assert normalize_whitespace("  a \n\n b\t\tc   d ") == "a b c d"

    def test_empty(self):
        assert normalize_whitespace(" \n\t ") == ""


# ---------------------------------------------------------------------------
# Headings and images
# ---------------------------------------------------------------------------

class TestHeadings:
    def test_empty_headings_are_skipped(self):
        html = _page("", "<h2></h2><h2>Intro</h2>")
        assert extract_blog_content(html).headings == ["Intro"]

    def test_document_order_across_levels(self):
        html = _page(
            "",
            "<h1>Title</h1><h3>Deep</h3><h2> Section </h2><h6>Tiny</h6><h4><span> </span></h4>",
        )
        assert extract_blog_content(html).headings == ["Title", "Deep", "Section", "Tiny"]

    def test_no_headings(self):
        assert extract_blog_content(_page("", "<p>Text</p>")).headings == []


class TestImages:
    def test_img_without_src_is_skipped(self):
        html = _page("", '<img alt="x"><img src="a.png">')
        assert extract_blog_content(html).images == [ImageRef(src="a.png", alt="")]

    def test_empty_src_is_skipped(self):
        html = _page("", '<img src="" alt="empty">')
        assert extract_blog_content(html).images == []

    def test_alt_is_kept_in_document_order(self):
        html = _page(
            "",
            '<img src="/one.jpg" alt="First"><p>text</p><img src="https://cdn.example.com/two.png" alt="Second">',
        )
        images = extract_blog_content(html).images
        assert [(i.src, i.alt) for i in images] == [
            ("/one.jpg", "First"),
            ("https://cdn.example.com/two.png", "Second"),
        ]

    def test_images_outside_content_block_are_included(self):
        html = _page("", '<header><img src="/logo.svg" alt="Logo"></header><article>Body</article>')
        assert extract_blog_content(html).images[0].src == "/logo.svg"


# ---------------------------------------------------------------------------
# Word count and robustness
# ---------------------------------------------------------------------------

class TestWordCount:
    def test_word_count_matches_content_tokens(self):
        html = _page("", "<article><p>One two  three</p>\n<p>four\tfive</p></article>")
        record = extract_blog_content(html)
        assert record.word_count == len(record.content.split()) == 5

    def test_word_count_cannot_be_supplied(self):
        record = BlogContent(title="T", content="a b c")
        assert record.word_count == 3
        assert record.model_dump()["word_count"] == 3

    def test_record_is_immutable(self):
        record = BlogContent(title="T", content="a b c")
        with pytest.raises(ValidationError):
            record.content = "changed"


class TestMalformedHtml:
    def test_unclosed_tags(self):
        html = "<html><head><title>Broken</title><body><article><p>Unclosed <b>bold text"
        record = extract_blog_content(html)
        assert record.title == "Broken"
        assert record.content == "Unclosed bold text"
        assert record.word_count == 3

    def test_plain_text_input(self):
        record = extract_blog_content("just some words without markup")
        assert record.content == "just some words without markup"
        assert record.word_count == 5
        assert record.title == NO_TITLE

    def test_stray_closing_tags(self):
        html = "</div></p><article>Text survives</article></span>"
        assert extract_blog_content(html).content == "Text survives"
