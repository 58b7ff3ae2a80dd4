"""Domain Types — locale coercion, lifecycle enums and step mapping.

Tests:
    - Locale.coerce falls back to KO for unknown/missing values
    - Enums serialize to their DB/JSON string values
    - Step names map to stored content_type values
"""

from curator.core.domain_types import (
    ExhibitionStatus, Locale, Role, map_step_to_content_type,
)


def test_locale_coerce_accepts_enum():
    assert Locale.coerce(Locale.EN) is Locale.EN


def test_locale_coerce_english_variants():
    assert Locale.coerce("en") is Locale.EN
    assert Locale.coerce("en-US") is Locale.EN
    assert Locale.coerce("EN") is Locale.EN


def test_locale_coerce_falls_back_to_korean():
    assert Locale.coerce(None) is Locale.KO
    assert Locale.coerce("") is Locale.KO
    assert Locale.coerce("fr") is Locale.KO


def test_exhibition_status_values():
    assert [s.value for s in ExhibitionStatus] == ["draft", "in_progress", "complete"]


def test_role_admin_value():
    assert Role.ADMIN == "admin"


def test_step_mapping_renames_titles_and_marketing():
    assert map_step_to_content_type("titles") == "title_suggestions"
    assert map_step_to_content_type("marketing") == "marketing_report"


def test_step_mapping_identity_for_other_steps():
    assert map_step_to_content_type("introduction") == "introduction"
    assert map_step_to_content_type("pressRelease") == "pressRelease"
