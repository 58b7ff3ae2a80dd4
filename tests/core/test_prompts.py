"""Prompt Library — locale dispatch, step selection and the press-release info block."""

from curator.core.domain_types import Locale
from curator.services import prompts, prompts_en, prompts_ko


def test_for_locale_defaults_to_korean():
    assert prompts.for_locale(None) is prompts_ko
    assert prompts.for_locale("de") is prompts_ko
    assert prompts.for_locale("en") is prompts_en


def test_locale_modules_expose_same_builders():
    names = [
        "system_prompt", "titles", "introduction", "preface",
        "press_release_brief", "marketing_report", "artist_bio",
        "summarize_conversation", "artwork_description", "image_analysis",
        "press_release", "regenerate_fallback", "regenerate_request",
        "default_artwork_title",
    ]
    for name in names:
        assert callable(getattr(prompts_ko, name)), name
        assert callable(getattr(prompts_en, name)), name
    assert prompts_ko.DOCUMENT_HEADINGS.keys() == prompts_en.DOCUMENT_HEADINGS.keys()


def test_chat_prompt_selected_by_step():
    data = {"title": "Blue Hour", "keywords": ["dusk", "blue"]}
    prompt = prompts.chat_system_prompt("introduction", data, Locale.EN, "")
    assert prompt == prompts_en.introduction("Blue Hour", ["dusk", "blue"], "")


def test_chat_prompt_unknown_step_uses_generic_curator():
    prompt = prompts.chat_system_prompt("whatever", {}, Locale.KO, "")
    assert prompt == prompts_ko.system_prompt()
    assert prompts.chat_system_prompt(None, {}, Locale.KO, "") == prompts_ko.system_prompt()


def test_regenerate_unknown_content_type_uses_fallback():
    prompt = prompts.regenerate_system_prompt(
        "artistBio", {"title": "T", "keywords": ["k"]}, Locale.EN, "",
    )
    assert "artistBio" in prompt
    assert "Exhibition Title: T" in prompt


def test_default_artwork_titles():
    assert prompts_ko.default_artwork_title(3) == "작품 3"
    assert prompts_en.default_artwork_title(3) == "Artwork 3"


# --- Dates & info block -------------------------------------------------------


def test_format_exhibition_date_per_locale():
    assert prompts.format_exhibition_date("2025-03-01", Locale.KO) == "2025년 3월 1일"
    assert prompts.format_exhibition_date("2025-03-01", Locale.EN) == "March 1, 2025"


def test_format_exhibition_date_keeps_unparseable_input():
    assert prompts.format_exhibition_date("next spring", Locale.EN) == "next spring"
    assert prompts.format_exhibition_date(None, Locale.EN) is None


def test_format_date_range():
    assert prompts.format_date_range("2025-03-01", "2025-04-01", Locale.EN) == (
        "March 1, 2025 - April 1, 2025"
    )
    assert prompts.format_date_range("2025-03-01", None, Locale.EN) == "March 1, 2025"
    assert prompts.format_date_range(None, "2025-04-01", Locale.EN) is None


def test_exhibition_info_empty_when_nothing_known():
    info = prompts.build_exhibition_info(
        Locale.EN, date_range=None, venue=None, location=None,
        opening_hours=None, admission_fee=None,
    )
    assert info == ""


def test_exhibition_info_lists_only_known_fields():
    info = prompts.build_exhibition_info(
        Locale.EN, date_range="March 1, 2025", venue="Gallery A", location=None,
        opening_hours=None, admission_fee="Free",
    )
    assert info == (
        "\n\nExhibition Information:\n"
        "Exhibition Period: March 1, 2025\nVenue: Gallery A\nAdmission: Free"
    )


# --- Posters ------------------------------------------------------------------


def test_poster_prompt_defaults():
    prompt = prompts.poster_image("Echoes", None, None, None)
    assert "Title: Echoes" in prompt
    assert "Style: Modern Contemporary Art" in prompt
    assert "Keywords: art, exhibition" in prompt


def test_poster_style_prompt_mentions_primary_only_for_several_images():
    assert "PRIMARY REFERENCE" in prompts.poster_style_analysis(3)
    assert "PRIMARY REFERENCE" not in prompts.poster_style_analysis(1)
