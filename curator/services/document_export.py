"""Document Export — printable HTML booklet for one exhibition.

Invariants:
    - Every interpolated value is HTML-escaped (titles, texts, URLs)
    - Text blocks pass through post_process before rendering
    - Sections without content are omitted entirely
    - Artwork titles that are only the default numbering ("작품 3", "Artwork 3")
      are not printed

Design Decisions:
    - HTML, not PDF: browsers print it to PDF; no headless renderer dependency
    - Newest block per content_type wins (chat can store several drafts)
"""

import html
import json
import re

from curator.core.domain_types import Locale
from curator.core.text_postprocess import post_process
from curator.models.exhibition import Exhibition
from curator.services import prompts
from curator.services.exhibition_service import latest_contents

_DEFAULT_TITLE = re.compile(r"^(작품|Artwork)\s*\d+$")

# content_type aliases: chat steps and generation endpoints store different names
_CONTENT_KEYS: dict[str, tuple[str, ...]] = {
    "introduction": ("introduction",),
    "preface": ("preface",),
    "artistBio": ("artistBio", "artist_bio"),
    "pressRelease": ("pressRelease", "press_release"),
    "marketingReport": ("marketingReport", "marketing_report"),
}

_STYLE = """
  @page { size: A4; margin: 2cm; }
  body { font-family: 'Pretendard', -apple-system, 'Segoe UI', sans-serif;
         line-height: 1.8; color: #1E293B; max-width: 800px; margin: 0 auto; padding: 20px; }
  h1 { font-size: 2.5rem; border-bottom: 3px solid #1E293B; padding-bottom: 1rem; }
  h2 { font-size: 1.8rem; margin-top: 3rem; color: #334155; }
  p { white-space: pre-wrap; text-align: justify; }
  .cover { min-height: 100vh; display: flex; flex-direction: column;
           justify-content: center; align-items: center; page-break-after: always; }
  .keyword { background: #F5F3F0; padding: 0.3rem 0.8rem; border-radius: 999px;
             color: #64748B; margin: 0 0.25rem; }
  .section { margin-bottom: 3rem; page-break-inside: avoid; }
  .page-break { page-break-after: always; }
  .poster { max-width: 100%; margin: 2rem 0; }
  .artwork-page img { max-width: 100%; max-height: 60vh; object-fit: contain; }
  .artwork-desc { color: #64748B; }
"""


def _e(value) -> str:
    return html.escape(str(value), quote=True)


def format_marketing_report(report: dict, locale: Locale) -> str:
    headings = prompts.for_locale(locale).DOCUMENT_HEADINGS
    parts = []
    if report.get("overview"):
        parts.append(str(report["overview"]))
    for key in ("targetAudience", "marketingPoints"):
        items = report.get(key)
        if items:
            lines = items if isinstance(items, list) else [items]
            parts.append(f"{headings[key]}:\n" + "\n".join(map(str, lines)))
    if report.get("pricingStrategy"):
        parts.append(f"{headings['pricingStrategy']}:\n{report['pricingStrategy']}")
    if report.get("promotionStrategy"):
        items = report["promotionStrategy"]
        lines = items if isinstance(items, list) else [items]
        parts.append(f"{headings['promotionStrategy']}:\n" + "\n".join(map(str, lines)))
    return "\n\n".join(parts)


def content_text(section: str, content: dict | None, locale: Locale) -> str:
    """Readable text of one stored block, unwrapping JSON replies."""
    if not content:
        return ""
    snake = re.sub(r"(?<!^)(?=[A-Z])", "_", section).lower()
    value = next(
        (content[k] for k in (section, snake, "text") if content.get(k)), "",
    )
    if isinstance(value, str) and value.strip().startswith(("{", "```")):
        cleaned = re.sub(r"```(?:json)?\s*", "", value).strip()
        try:
            parsed = json.loads(cleaned)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict) and parsed.get(section):
            value = parsed[section]
    if isinstance(value, dict) and section == "marketingReport":
        return format_marketing_report(value, locale)
    if isinstance(value, list):
        value = "\n".join(str(v) for v in value if isinstance(v, (str, int, float)))
    return post_process(value) if isinstance(value, str) else ""


def _section(heading: str, body: str, page_break: bool = False) -> str:
    css = "section page-break" if page_break else "section"
    return f'<div class="{css}"><h2>{_e(heading)}</h2><p>{_e(body)}</p></div>'


def render_exhibition_document(exhibition: Exhibition, locale: Locale) -> str:
    headings = prompts.for_locale(locale).DOCUMENT_HEADINGS
    blocks = latest_contents(list(exhibition.contents))
    title = exhibition.title or prompts.for_locale(locale).UNTITLED

    texts = {}
    for section, keys in _CONTENT_KEYS.items():
        content = next((blocks[k] for k in keys if k in blocks), None)
        texts[section] = content_text(section, content, locale)

    body = [
        '<div class="cover">',
        f"<h1>{_e(title)}</h1>",
    ]
    if exhibition.keywords:
        body.append("<div>" + "".join(
            f'<span class="keyword">{_e(k)}</span>' for k in exhibition.keywords
        ) + "</div>")
    body.append(f"<p>{_e(headings['subtitle'])}</p></div>")

    if exhibition.posters:
        body.append(f'<div class="section page-break"><h2>{_e(headings["posters"])}</h2>')
        body.extend(
            f'<img class="poster" src="{_e(url)}" alt="{_e(headings["posters"])}" />'
            for url in exhibition.posters
        )
        body.append("</div>")

    if texts["introduction"]:
        body.append(_section(headings["introduction"], texts["introduction"]))
    if texts["preface"]:
        body.append(_section(headings["preface"], texts["preface"], page_break=True))
    if texts["artistBio"]:
        body.append(_section(headings["artistBio"], texts["artistBio"]))

    for artwork in sorted(exhibition.artworks, key=lambda a: a.order_index):
        body.append(
            f'<div class="section artwork-page page-break"><h2>{_e(headings["artworks"])}</h2>'
            f'<img src="{_e(artwork.image_url)}" alt="{_e(artwork.title)}" />'
        )
        if not _DEFAULT_TITLE.match(artwork.title or ""):
            body.append(f"<h3>{_e(artwork.title)}</h3>")
        if artwork.description:
            body.append(f'<p class="artwork-desc">{_e(post_process(artwork.description))}</p>')
        body.append("</div>")

    if texts["pressRelease"]:
        body.append(_section(headings["pressRelease"], texts["pressRelease"], page_break=True))
    if texts["marketingReport"]:
        body.append(_section(headings["marketingReport"], texts["marketingReport"]))

    return (
        f'<!DOCTYPE html>\n<html lang="{locale.value}">\n<head>\n'
        '<meta charset="UTF-8">\n'
        f"<title>{_e(title)} - {_e(headings['subtitle'])}</title>\n"
        f"<style>{_STYLE}</style>\n</head>\n<body>\n"
        + "\n".join(body)
        + "\n</body>\n</html>\n"
    )
