"""Reply Parsing — JSON extraction and fallbacks for free-text model replies."""

from curator.core.domain_types import Locale
from curator.core.reply_parsing import (
    MARKETING_OVERVIEW_CHARS,
    clean_press_release,
    extract_json_object,
    parse_marketing_report,
    parse_text_field,
    parse_titles,
)


# --- extract_json_object ------------------------------------------------------


def test_extract_plain_json():
    assert extract_json_object('{"a": 1}') == {"a": 1}


def test_extract_from_code_fence():
    assert extract_json_object('```json\n{"a": 1}\n```') == {"a": 1}


def test_extract_from_surrounding_prose():
    text = 'Here you go: {"titles": ["A"]} hope it helps'
    assert extract_json_object(text) == {"titles": ["A"]}


def test_extract_rejects_non_object():
    assert extract_json_object("[1, 2, 3]") is None
    assert extract_json_object("no json here") is None
    assert extract_json_object("") is None
    assert extract_json_object(None) is None


# --- parse_titles -------------------------------------------------------------


def test_parse_titles_from_json():
    assert parse_titles('{"titles": ["Light", "Shadow"]}') == ["Light", "Shadow"]


def test_parse_titles_falls_back_to_first_five_lines():
    text = "One\n\nTwo\nThree\nFour\nFive\nSix"
    assert parse_titles(text) == ["One", "Two", "Three", "Four", "Five"]


# --- parse_text_field ---------------------------------------------------------


def test_parse_text_field_reads_key():
    assert parse_text_field('{"preface": "Hello"}', "preface") == "Hello"


def test_parse_text_field_returns_raw_reply_when_key_missing():
    assert parse_text_field("Just prose", "preface") == "Just prose"


# --- parse_marketing_report ---------------------------------------------------


def test_marketing_report_from_json():
    report = {"overview": "x", "targetAudience": ["a"]}
    text = '{"marketingReport": {"overview": "x", "targetAudience": ["a"]}}'
    assert parse_marketing_report(text) == report


def test_marketing_report_fallback_uses_locale_defaults():
    report = parse_marketing_report("not json " * 100, Locale.EN)
    assert len(report["overview"]) == MARKETING_OVERVIEW_CHARS
    assert report["targetAudience"][0] == "Art collectors"
    assert isinstance(report["promotionStrategy"], list)


def test_marketing_report_fallback_korean_default():
    report = parse_marketing_report("짧은 답변")
    assert report["overview"] == "짧은 답변"
    assert report["targetAudience"][0] == "아트 컬렉터"


# --- clean_press_release ------------------------------------------------------


def test_press_release_strips_headings_and_labels():
    text = "# Press\n\nHeadline: \nBig show\n\n\n\nBody:\nDetails"
    assert clean_press_release(text) == "Big show\n\nDetails"


def test_press_release_strips_korean_labels():
    assert clean_press_release("헤드라인: \n제목\n본문: \n내용") == "제목\n내용"
