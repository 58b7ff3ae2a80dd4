"""Prompt Library — locale dispatch plus the locale-independent prompt builders.

Invariants:
    - for_locale(locale) returns prompts_ko (default) or prompts_en; both expose the
      same builders, so callers never branch on locale themselves
    - chat_system_prompt / regenerate_system_prompt pick the dedicated prompt for
      known steps and fall back to a generic curator prompt otherwise
    - Poster prompts are English-only (image/vision models follow English best)

Design Decisions:
    - Locale modules as plain modules (not classes): prompt text is data, no state
    - Date formatting here, not in the route: the press release info block and the
      prompt must render the same strings
"""

from datetime import date, datetime
from types import ModuleType

from curator.core.domain_types import ChatStep, Locale
from curator.services import prompts_en, prompts_ko

_LOCALE_MODULES: dict[Locale, ModuleType] = {
    Locale.KO: prompts_ko,
    Locale.EN: prompts_en,
}

MAX_POSTER_REFERENCE_IMAGES = 4


def for_locale(locale: Locale | str | None) -> ModuleType:
    return _LOCALE_MODULES[Locale.coerce(locale)]


# ─── Step prompts ────────────────────────────────────────────────

def chat_system_prompt(
    step: str | None, data: dict, locale: Locale, rag_context: str,
) -> str:
    """System prompt for a chat turn, selected by step."""
    p = for_locale(locale)
    keywords = data.get("keywords") or []
    title = data.get("title") or ""
    match step:
        case ChatStep.TITLES.value:
            return p.titles(
                keywords,
                data.get("artwork_descriptions") or [],
                data.get("conversation_context") or "",
            )
        case ChatStep.INTRODUCTION.value:
            return p.introduction(title, keywords, rag_context)
        case ChatStep.PREFACE.value:
            return p.preface(title, keywords, rag_context)
        case ChatStep.PRESS_RELEASE.value:
            return p.press_release_brief(data, rag_context)
        case ChatStep.MARKETING_REPORT.value:
            return p.marketing_report(data, rag_context)
    return p.system_prompt()


def regenerate_system_prompt(
    content_type: str, exhibition_data: dict, locale: Locale, rag_context: str,
) -> str:
    """System prompt for regenerating one stored content block."""
    p = for_locale(locale)
    title = exhibition_data.get("title") or ""
    keywords = exhibition_data.get("keywords") or []
    match content_type:
        case ChatStep.INTRODUCTION.value:
            return p.introduction(title, keywords, rag_context)
        case ChatStep.PREFACE.value:
            return p.preface(title, keywords, rag_context)
        case ChatStep.PRESS_RELEASE.value:
            return p.press_release_brief(exhibition_data, rag_context)
        case ChatStep.MARKETING_REPORT.value:
            return p.marketing_report(exhibition_data, rag_context)
    return p.regenerate_fallback(content_type, title, keywords)


# ─── Press release info block ────────────────────────────────────

_MONTHS_EN = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def format_exhibition_date(value: str | None, locale: Locale) -> str | None:
    """Long-form date ("2025년 3월 1일" / "March 1, 2025"); unparseable input as typed."""
    if not value:
        return None
    try:
        parsed: date = datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return value
    if locale == Locale.EN:
        return f"{_MONTHS_EN[parsed.month - 1]} {parsed.day}, {parsed.year}"
    return f"{parsed.year}년 {parsed.month}월 {parsed.day}일"


def format_date_range(
    start: str | None, end: str | None, locale: Locale,
) -> str | None:
    start_text = format_exhibition_date(start, locale)
    if not start_text:
        return None
    end_text = format_exhibition_date(end, locale)
    return f"{start_text} - {end_text}" if end_text else start_text


def build_exhibition_info(
    locale: Locale,
    *,
    date_range: str | None,
    venue: str | None,
    location: str | None,
    opening_hours: str | None,
    admission_fee: str | None,
) -> str:
    """Labelled info block appended to the press release prompt ("" when empty)."""
    labels = for_locale(locale).PRESS_RELEASE_LABELS
    lines = [
        f"{labels[key]}: {value}"
        for key, value in (
            ("period", date_range),
            ("venue", venue),
            ("address", location),
            ("hours", opening_hours),
            ("admission", admission_fee),
        )
        if value
    ]
    if not lines:
        return ""
    return f"\n\n{labels['exhibition_info']}:\n" + "\n".join(lines)


# ─── Posters ─────────────────────────────────────────────────────

def poster_style_analysis(image_count: int) -> str:
    primary = (
        "IMPORTANT: The FIRST image is the PRIMARY REFERENCE. Focus most heavily "
        "on matching its colors, textures, and style. Other images provide "
        "supporting context."
        if image_count > 1 else ""
    )
    return f"""You are designing an exhibition poster background that should CLOSELY RESEMBLE the provided artworks.

{primary}

Analyze these artworks in EXTREME DETAIL to recreate a similar visual style:

Return JSON:
{{
  "dominantColors": ["exact color names with descriptors like 'deep navy blue #1a3a52', 'warm burnt sienna', 'soft cream white'"],
  "colorPalette": "Precise color relationships and gradients (e.g., 'warm earth tones transitioning to cool blue-grays with touches of golden yellow')",
  "artStyle": "VERY specific style description (e.g., 'loose impressionistic brushwork with visible texture', 'hard-edge geometric abstraction', 'layered mixed media with collage elements')",
  "mood": "Emotional quality (e.g., 'contemplative and serene', 'energetic and dynamic')",
  "visualElements": ["highly specific visual patterns like 'horizontal sweeping brushstrokes', 'overlapping circular forms', 'dripping paint effects', 'sharp angular intersections'"],
  "suggestedPosterStyle": "2-3 sentences describing EXACTLY how to recreate this artwork's visual language as a full-bleed background",
  "detailedDescription": "A detailed 3-4 sentence description of the artwork's visual appearance, textures, layering, and spatial composition that would allow someone to recreate a very similar piece",
  "brushworkStyle": "Describe the mark-making technique (e.g., 'thick impasto with palette knife', 'smooth airbrushed gradients', 'gestural calligraphic strokes')",
  "compositionStyle": "Describe the spatial arrangement (e.g., 'centered focal point with radiating elements', 'all-over field composition', 'asymmetric diagonal movement')"
}}

CRITICAL: Be EXTREMELY specific and detailed. The goal is to create a background that looks like it came from the SAME ARTIST and SAME SERIES as these artworks."""


def poster_image(
    title: str,
    artist_name: str | None,
    style: str | None,
    keywords: list[str] | None,
) -> str:
    return f"""Create a sophisticated exhibition poster with the following details:

Title: {title}
Artist: {artist_name or prompts_ko.DEFAULT_ARTIST}
Style: {style or 'Modern Contemporary Art'}
Keywords: {', '.join(keywords) if keywords else 'art, exhibition'}

Design requirements:
- Clean, minimalist aesthetic with elegant typography
- Warm beige/cream background (#F5F3F0)
- Deep navy text (#1E293B) for title
- Professional gallery poster layout
- Include exhibition title prominently
- Subtle artistic elements that complement the theme
- High-end gallery aesthetic
- Korean and English text if applicable

The poster should evoke a sense of sophistication and artistic excellence, suitable for a contemporary art gallery."""
