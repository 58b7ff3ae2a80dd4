"""Document Export — HTML booklet rendering from an in-memory exhibition.

Invariants tested:
    - Interpolated values are HTML-escaped
    - Empty sections are omitted
    - Default artwork titles are hidden, custom ones shown
    - JSON-wrapped content and marketing reports are rendered as prose
"""

from datetime import datetime, timedelta, timezone

import curator.models  # noqa: F401
from curator.core.domain_types import Locale
from curator.models.artwork import Artwork
from curator.models.exhibition import Exhibition
from curator.models.exhibition_content import ExhibitionContent
from curator.services.document_export import (
    content_text,
    format_marketing_report,
    render_exhibition_document,
)

T0 = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _content(content_type, content, minutes=0):
    return ExhibitionContent(
        content_type=content_type,
        content=content,
        updated_at=T0 + timedelta(minutes=minutes),
    )


def _exhibition(**kwargs):
    exhibition = Exhibition(
        title=kwargs.pop("title", "Blue <Hour>"),
        keywords=kwargs.pop("keywords", ["dusk"]),
        posters=kwargs.pop("posters", []),
    )
    exhibition.contents = kwargs.pop("contents", [])
    exhibition.artworks = kwargs.pop("artworks", [])
    return exhibition


def test_title_is_escaped():
    html = render_exhibition_document(_exhibition(), Locale.EN)
    assert "<h1>Blue &lt;Hour&gt;</h1>" in html
    assert '<html lang="en">' in html


def test_untitled_exhibition_uses_locale_placeholder():
    html = render_exhibition_document(_exhibition(title=None), Locale.KO)
    assert "<h1>제목 없음</h1>" in html


def test_empty_sections_are_omitted():
    html = render_exhibition_document(_exhibition(), Locale.EN)
    assert "Introduction" not in html
    assert "Press Release" not in html
    assert "Exhibition Posters" not in html


def test_newest_block_per_type_wins():
    exhibition = _exhibition(contents=[
        _content("introduction", {"text": "old draft"}, minutes=0),
        _content("introduction", {"text": "final text"}, minutes=5),
    ])
    html = render_exhibition_document(exhibition, Locale.EN)
    assert "final text" in html
    assert "old draft" not in html


def test_snake_case_content_types_are_found():
    exhibition = _exhibition(contents=[
        _content("artist_bio", {"artist_bio": "Works in clay."}),
    ])
    html = render_exhibition_document(exhibition, Locale.EN)
    assert "Artist Biography" in html
    assert "Works in clay." in html


def test_default_artwork_titles_hidden():
    exhibition = _exhibition(artworks=[
        Artwork(title="Artwork 1", image_url="https://x/1.png", order_index=0),
        Artwork(title="Tide", image_url="https://x/2.png", order_index=1,
                description="Waves!!"),
    ])
    html = render_exhibition_document(exhibition, Locale.EN)
    assert "<h3>Artwork 1</h3>" not in html
    assert "<h3>Tide</h3>" in html
    assert '<p class="artwork-desc">Waves!</p>' in html


def test_posters_rendered():
    html = render_exhibition_document(
        _exhibition(posters=["https://x/p.png"]), Locale.EN,
    )
    assert 'src="https://x/p.png"' in html


def test_content_text_unwraps_json_reply():
    content = {"text": '```json\n{"preface": "She writes."}\n```'}
    assert content_text("preface", content, Locale.EN) == "the artist writes."


def test_content_text_missing_block():
    assert content_text("preface", None, Locale.EN) == ""


def test_marketing_report_formatted_with_headings():
    report = {
        "overview": "A quiet show.",
        "targetAudience": ["Collectors", "Students"],
        "pricingStrategy": "Free entry",
        "promotionStrategy": "Instagram",
    }
    text = format_marketing_report(report, Locale.EN)
    assert text == (
        "A quiet show.\n\n"
        "Target Audience:\nCollectors\nStudents\n\n"
        "Pricing Strategy:\nFree entry\n\n"
        "Promotion Strategy:\nInstagram"
    )


def test_content_text_nested_object_reply_stays_text():
    content = {"text": '{"content": {"ko": "a", "en": "b"}}'}
    text = content_text("introduction", content, Locale.EN)
    assert text == '{"content": {"ko": "a", "en": "b"}}'


def test_content_text_object_outside_marketing_is_dropped():
    assert content_text("preface", {"preface": {"ko": "x"}}, Locale.EN) == ""


def test_content_text_list_joined_into_lines():
    content = {"artistBio": ["Paints at night.", "Lives in Seoul."]}
    assert content_text("artistBio", content, Locale.EN) == (
        "Paints at night.\nLives in Seoul."
    )
