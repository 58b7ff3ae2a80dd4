"""Text Post-processing — cleans model output before it is exported.

Invariants:
    - Order is fixed: JSON artifacts -> gendered language -> tone
    - Empty/None input is returned unchanged
    - Pure: no IO, deterministic

Design Decisions:
    - Regex tables over an NLP dependency: the replacements are a closed list
    - English possessive "her" is rewritten as "the artist's" (ambiguous with the
      object form, accepted: prompts already forbid gendered pronouns)
"""

import json
import re

_GENDER_REPLACEMENTS: tuple[tuple[re.Pattern, str], ...] = (
    # Korean pronouns
    (re.compile(r"그녀는"), "작가는"),
    (re.compile(r"그녀의"), "작가의"),
    (re.compile(r"그녀가"), "작가가"),
    (re.compile(r"그녀를"), "작가를"),
    (re.compile(r"그는"), "작가는"),
    (re.compile(r"그의"), "작가의"),
    (re.compile(r"그가"), "작가가"),
    (re.compile(r"그를"), "작가를"),
    # English pronouns
    (re.compile(r"\bshe\b", re.IGNORECASE), "the artist"),
    (re.compile(r"\bher\b", re.IGNORECASE), "the artist's"),
    (re.compile(r"\bhe\b", re.IGNORECASE), "the artist"),
    (re.compile(r"\bhis\b", re.IGNORECASE), "the artist's"),
    (re.compile(r"\bhim\b", re.IGNORECASE), "the artist"),
    # Gendered artist terms
    (re.compile(r"여류\s*작가"), "작가"),
    (re.compile(r"여성\s*작가"), "작가"),
    (re.compile(r"남성\s*작가"), "작가"),
    (re.compile(r"여류\s*예술가"), "예술가"),
    (re.compile(r"여성\s*예술가"), "예술가"),
    (re.compile(r"남성\s*예술가"), "예술가"),
)

# Keys the prompts ask the model to wrap text in, in lookup order
_WRAPPER_KEYS = (
    "artistBio", "introduction", "preface", "pressRelease", "text", "content",
)


def remove_gendered_language(text: str) -> str:
    if not text:
        return text
    result = text
    for pattern, replacement in _GENDER_REPLACEMENTS:
        result = pattern.sub(replacement, result)
    return result


def remove_json_artifacts(text: str) -> str:
    """Drop code fences, unwrap {"<key>": "..."} replies, normalise whitespace."""
    if not text:
        return text

    result = re.sub(r"```json\s*", "", text, flags=re.IGNORECASE)
    result = re.sub(r"```\s*", "", result)

    if result.strip().startswith("{"):
        try:
            parsed = json.loads(result)
        except (json.JSONDecodeError, ValueError):
            parsed = None
        if isinstance(parsed, dict):
            for key in _WRAPPER_KEYS:
                value = parsed.get(key)
                if isinstance(value, str) and value.strip():
                    return value

    result = result.replace("\\n", "\n").replace("\\t", " ")
    result = re.sub(r"\n{3,}", "\n\n", result)
    result = re.sub(r"[ \t]{2,}", " ", result)
    return result.strip()


def refine_text_tone(text: str) -> str:
    if not text:
        return text
    result = re.sub(r"!{2,}", "!", text)
    result = re.sub(r"\?{2,}", "?", result)
    result = re.sub(r"\.{4,}", "...", result)
    result = re.sub(r"([\U0001F300-\U0001F9FF])\1+", r"\1", result)
    result = re.sub(r"[“”]", '"', result)
    result = re.sub(r"[‘’]", "'", result)
    return result.strip()


def post_process(text: str) -> str:
    """Apply all filters in order."""
    if not text:
        return text
    result = remove_json_artifacts(text)
    result = remove_gendered_language(result)
    return refine_text_tone(result)
