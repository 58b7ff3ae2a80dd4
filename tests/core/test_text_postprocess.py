"""Text Post-processing — JSON unwrap, gender-neutral rewrite, tone cleanup."""

from curator.core.text_postprocess import (
    post_process,
    refine_text_tone,
    remove_gendered_language,
    remove_json_artifacts,
)


def test_empty_input_returned_unchanged():
    assert post_process("") == ""
    assert post_process(None) is None


def test_unwraps_known_json_key():
    assert remove_json_artifacts('```json\n{"introduction": "Hi"}\n```') == "Hi"


def test_normalises_escaped_newlines_and_spaces():
    assert remove_json_artifacts("a\\n\\n\\n\\nb   c") == "a\n\nb c"


def test_korean_pronouns_replaced():
    assert remove_gendered_language("그녀는 화가다. 그의 작품") == "작가는 화가다. 작가의 작품"


def test_english_pronouns_replaced_case_insensitively():
    assert remove_gendered_language("She paints. His work.") == "the artist paints. the artist's work."


def test_gendered_artist_terms_neutralised():
    assert remove_gendered_language("여류 작가와 남성예술가") == "작가와 예술가"


def test_tone_collapses_repeated_punctuation():
    assert refine_text_tone("Wow!!! Really??...... ") == "Wow! Really?..."


def test_tone_straightens_curly_quotes():
    assert refine_text_tone("“art” ‘now’") == "\"art\" 'now'"


def test_pipeline_order():
    assert post_process('{"artistBio": "She paints!!"}') == "the artist paints!"


def test_non_string_wrapper_value_left_as_text():
    raw = '{"text": ["line one", "line two"]}'
    assert post_process(raw) == raw


def test_unwrap_skips_non_string_keys():
    raw = '{"content": {"ko": "a"}, "text": "Hello"}'
    assert remove_json_artifacts(raw) == "Hello"
