"""Notice Translation — Korean notices to English, HTML markup preserved.

Invariants:
    - Tags are never sent to the translator: content is split on tags and only
      non-blank text segments are translated, then re-joined in order
    - Falls back to the original segment on any translation error (graceful degradation)
    - Identical (text, lang) pairs are translated once per process (module cache)

Design Decisions:
    - deep-translator GoogleTranslator: free, no API key, fast (~100-200ms/call)
    - Per-segment translation with try/except: if one segment fails, others still translate
    - In-memory cache (module-level dict): admin translations repeat boilerplate
      (ADR: single-process, cache lost on restart, acceptable)
"""

import logging
import re

from deep_translator import GoogleTranslator

logger = logging.getLogger(__name__)

_TAG_SPLIT = re.compile(r"(<[^>]+>)")

# --- Translation cache (module-level, lost on restart) ---------------------
# Key: (text, target), Value: translated text
_cache: dict[tuple[str, str], str] = {}


def translate_text(text: str | None, source: str = "ko", target: str = "en") -> str:
    """Translate a single string; returns the original on error or empty input."""
    if not text or not text.strip():
        return text or ""

    cache_key = (text, target)
    if cache_key in _cache:
        return _cache[cache_key]

    try:
        result = GoogleTranslator(source=source, target=target).translate(text)
        if result:
            _cache[cache_key] = result
            return result
        return text
    except Exception as e:
        logger.warning("Translation failed (target=%s): %s", target, e)
        return text  # graceful fallback to original


def translate_html(html: str, source: str = "ko", target: str = "en") -> str:
    """Translate the text between tags, keep every tag byte-for-byte."""
    parts = _TAG_SPLIT.split(html or "")
    out = []
    for part in parts:
        if not part or _TAG_SPLIT.fullmatch(part) or not part.strip():
            out.append(part)
            continue
        leading = part[: len(part) - len(part.lstrip())]
        trailing = part[len(part.rstrip()):]
        out.append(f"{leading}{translate_text(part.strip(), source, target)}{trailing}")
    return "".join(out)


def translate_notice(title: str, content: str) -> dict:
    """Korean notice → {"title_en", "content_en"}; untranslatable parts kept as-is."""
    return {
        "title_en": translate_text(title) or title,
        "content_en": translate_html(content) or content,
    }
