"""Reply Parsing — pure extraction of structured data from free-text model replies.

Invariants:
    - Never raises on malformed model output: every parser has a fallback shape
    - extract_json_object returns a dict or None (never a list/str)
    - Fallback strings follow the request locale

Design Decisions:
    - Whole-reply json.loads first, then first-brace-to-last-brace substring:
      models wrap JSON in prose or Markdown fences often enough to matter
    - Pure functions only: routes and services own the IO around them
"""

import json
import re

from curator.core.domain_types import Locale

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

MAX_TITLES = 5
MARKETING_OVERVIEW_CHARS = 300


def extract_json_object(text: str | None) -> dict | None:
    """Parse the JSON object embedded in a model reply, or None."""
    if not text:
        return None
    candidates = [text, _FENCE_RE.sub("", text)]
    for candidate in candidates:
        try:
            parsed = json.loads(candidate.strip())
        except (json.JSONDecodeError, ValueError):
            parsed = None
        if isinstance(parsed, dict):
            return parsed

        match = _OBJECT_RE.search(candidate)
        if not match:
            continue
        try:
            parsed = json.loads(match.group(0))
        except (json.JSONDecodeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def parse_titles(text: str) -> list[str]:
    """Titles from {"titles": [...]} or, failing that, the first non-empty lines."""
    parsed = extract_json_object(text)
    if parsed and isinstance(parsed.get("titles"), list):
        return [str(t) for t in parsed["titles"]]
    lines = [line.strip() for line in (text or "").split("\n")]
    return [line for line in lines if line][:MAX_TITLES]


def parse_text_field(text: str, key: str) -> str:
    """Single text field (introduction, preface, artistBio, ...) or the raw reply."""
    parsed = extract_json_object(text)
    if parsed and isinstance(parsed.get(key), str):
        return parsed[key]
    return text or ""


# --- Marketing report ---------------------------------------------------------

_MARKETING_DEFAULTS: dict[Locale, dict] = {
    Locale.KO: {
        "targetAudience": ["아트 컬렉터", "미술 애호가", "일반 관람객"],
        "marketingPoints": ["독창적인 작품 세계", "현대적 해석", "감각적 표현"],
        "pricingStrategy": "중저가 전략으로 접근성 확보",
        "promotionStrategy": ["SNS 마케팅", "아트 커뮤니티 홍보", "VIP 프리뷰"],
    },
    Locale.EN: {
        "targetAudience": ["Art collectors", "Art enthusiasts", "General visitors"],
        "marketingPoints": [
            "Distinctive artistic world", "Contemporary interpretation",
            "Sensory expression",
        ],
        "pricingStrategy": "Mid-to-low pricing to maximize accessibility",
        "promotionStrategy": [
            "Social media marketing", "Art community outreach", "VIP preview",
        ],
    },
}


def parse_marketing_report(text: str, locale: Locale = Locale.KO) -> dict:
    """Marketing report dict; unparseable replies become a default-filled report."""
    parsed = extract_json_object(text)
    if parsed and isinstance(parsed.get("marketingReport"), dict):
        return parsed["marketingReport"]
    defaults = _MARKETING_DEFAULTS[locale]
    return {
        "overview": (text or "")[:MARKETING_OVERVIEW_CHARS],
        "targetAudience": list(defaults["targetAudience"]),
        "marketingPoints": list(defaults["marketingPoints"]),
        "pricingStrategy": defaults["pricingStrategy"],
        "promotionStrategy": list(defaults["promotionStrategy"]),
    }


# --- Press release ------------------------------------------------------------

_PRESS_CLEANUPS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"^#+\s*.+\n+", re.MULTILINE), ""),
    (re.compile(r"^(헤드라인|리드|본문|전시\s*정보)\s*[:：]\s*\n?",
                re.MULTILINE | re.IGNORECASE), ""),
    (re.compile(r"^(Headline|Lead|Body|Exhibition\s*Info)\s*[:：]\s*\n?",
                re.MULTILINE | re.IGNORECASE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)


def clean_press_release(text: str) -> str:
    """Strip Markdown headings and section labels the model adds despite instructions."""
    result = text or ""
    for pattern, replacement in _PRESS_CLEANUPS:
        result = pattern.sub(replacement, result)
    return result.strip()
