"""Curation Prompts (English) — mirrors prompts_ko.py for the "en" locale.

Invariants:
    - Same function names and signatures as prompts_ko.py
    - JSON response keys identical to the Korean prompts
    - Titles stay bilingual ("Korean | English") in both locales
"""

import json

_GENDER_NEUTRAL_RULES = """**Important - Gender-neutral language rules:**
- Never use gendered pronouns (he/she, his/her)
- Use only "the artist", "the creator", "they/their" etc.
- Do not assume or imply gender
- Maintain 100% neutral tone"""

DEFAULT_ARTIST = "Contemporary Artist"
ARTWORK_DESCRIPTION_ERROR = "An error occurred while generating the artwork description."
DUPLICATE_SUFFIX = " (Copy)"
UNTITLED = "Untitled"


def default_artwork_title(position: int) -> str:
    return f"Artwork {position}"


def system_prompt() -> str:
    return (
        "You are an expert art curator. Help users plan their exhibitions by "
        "discussing themes, concepts, and artistic directions. Respond in English. "
        "Be thoughtful, creative, and professional in your guidance."
    )


def titles(
    keywords: list[str],
    artwork_descriptions: list[str],
    conversation_context: str = "",
) -> str:
    conversation = (
        f"Conversation with the user:\n{conversation_context}\n\n"
        if conversation_context else ""
    )
    return f"""
You are an expert contemporary art curator.
Based on the following information, suggest 5 exhibition titles.

{conversation}Keywords: {', '.join(keywords)}
Artwork descriptions: {chr(10).join(artwork_descriptions)}

Each title should:
- Reflect the exhibition concept and ideas from the conversation
- Capture the essence of the keywords
- Use evocative and symbolic expressions
- Convey the core message of the exhibition

**Important - Title format:**
- Each title must be in "Korean Title | English Title" format
- Use " | " (space+pipe+space) as separator between Korean and English
- Do not use parentheses ()
- Example: "도시의 숨결 | Breath of the City"

Respond in JSON format:
{{ "titles": ["한글 타이틀1 | English Title1", "한글 타이틀2 | English Title2", ...] }}
"""


def introduction(title: str, keywords: list[str], context: str) -> str:
    return f"""
You are an expert contemporary art curator.
Based on the following information, write an exhibition introduction in English.

Exhibition title: {title}
Keywords: {', '.join(keywords)}
Reference style: {context}

Exhibition introduction guidelines:
- 150-250 words
- Use an accessible, descriptive tone for visitors
- Convey the core theme and message of the exhibition
- Provide brief context about the works and artist

{_GENDER_NEUTRAL_RULES}

Respond in JSON format:
{{ "introduction": "Introduction content in English" }}
"""


def preface(title: str, keywords: list[str], context: str) -> str:
    return f"""
You are an expert contemporary art curator.
Based on the following information, write an exhibition preface in English with a curatorial voice.

Exhibition title: {title}
Keywords: {', '.join(keywords)}
Reference style: {context}

Exhibition preface guidelines:
- 400-600 words
- Follow a 5-part structure: 'Philosophical inquiry → Sensory description → Conceptual development → Aesthetic context → Lingering impression'
- Use appropriate metaphors of sensory imagery (light, waves, materiality, texture)
- Include descriptions directly connected to the images/artworks
- Naturally incorporate 3-8 art criticism terms
- Avoid overly simple narration, maintain intellectual depth
- Use a neutral, refined tone, avoid exaggeration

{_GENDER_NEUTRAL_RULES}

Respond in JSON format:
{{ "preface": "Preface content in English" }}
"""


def press_release_brief(exhibition_data: dict, context: str) -> str:
    end = exhibition_data.get("exhibition_end_date")
    period = (exhibition_data.get("exhibition_date") or "") + (f" - {end}" if end else "")
    return f"""
You are a journalist writing a news article. Write a short news article about the following exhibition in English.

Exhibition name: {exhibition_data.get('title') or ''}
Artist: {exhibition_data.get('artist_name') or ''}
Period: {period}
Venue: {exhibition_data.get('venue') or ''}
Address: {exhibition_data.get('location') or ''}

Article format:
- 3-4 paragraphs as a general news article
- Write only the body text without section titles or labels
- 300-450 words

{{ "pressRelease": "Write only the article body here. No titles or section divisions, just paragraphs." }}
"""


def marketing_report(exhibition_data: dict, context: str) -> str:
    return f"""
You are an art market analyst.
Based on the following exhibition information, write a marketing report in English.

Exhibition information:
{json.dumps(exhibition_data, ensure_ascii=False, indent=2)}

Reference style: {context}

**Important: Write all content in English.**

Marketing report structure:
1. Exhibition Overview: Summarize the core message and features of the exhibition in 2-3 sentences
2. Target Audience: Groups of visitors who would be interested in this exhibition (3-5 items)
3. Marketing Points: Differentiated strengths and promotional points of the exhibition (3-5 items)
4. Pricing Strategy: Admission fee and pricing policy suggestions
5. Promotion Strategy: Effective promotional methods (3-5 items)

Respond in JSON format (all content in English):
{{
  "marketingReport": {{
    "overview": "Exhibition overview in English...",
    "targetAudience": ["Target 1 in English", "Target 2 in English", ...],
    "marketingPoints": ["Point 1 in English", "Point 2 in English", ...],
    "pricingStrategy": "Pricing strategy in English...",
    "promotionStrategy": ["Strategy 1 in English", "Strategy 2 in English", ...]
  }}
}}
"""


def artist_bio(artist_info: dict, context: str) -> str:
    return f"""
You are an expert contemporary art curator.
Based on the following information, write an artist biography in English as a gender-neutral artist profile.

Artist information:
{json.dumps(artist_info, ensure_ascii=False, indent=2)}

Reference style: {context}

Artist biography guidelines:
- 200-350 words
- Focus on the artist's work tendencies, materials, philosophical interests, and aesthetic orientation
- Avoid simple list-style sentences
- Summarize 'the driving force behind the artist's world' in one sentence
- Harmoniously use art, technology, and sensory language

**Very Important - Gender-neutral language rules (MUST follow):**
- Never use gendered pronouns (he/she, his/her, him/her)
- Use only "the artist", "this creator", "they/their" etc.
- Never assume or imply gender in any expression
- Maintain 100% neutral tone
- Use the artist's name as subject, or phrases like "the artist", "this creator"

Respond in JSON format:
{{ "artistBio": "Artist biography content in English" }}
"""


def summarize_conversation(conversation: list[dict], exhibition_title: str) -> str:
    lines = "\n\n".join(
        f"{'User' if msg.get('role') == 'user' else 'Curator'}: {msg.get('content', '')}"
        for msg in conversation
    )
    return f"""
You are an exhibition planning expert.
The following is a conversation between a curator and user during the planning of the exhibition "{exhibition_title}".
Please organize this conversation content for inclusion in an exhibition planning document.

Conversation:
{lines}

**Do NOT summarize - Very Important**

Organization principles:
- **Do NOT summarize; organize ALL content from the conversation without omission**
- Include all details, ideas, and suggestions mentioned in the conversation as-is
- Organize both user requirements and curator suggestions in detail
- Do NOT abbreviate or omit conversation content; include everything
- Mention all keywords, concepts, and directions from the conversation
- Reconstruct sentences naturally in an objective, professional tone
- Only exclude unnecessary greetings; include everything else

Respond in JSON format:
{{ "summary": "Organized content in English" }}
"""


def artwork_description(
    title: str, keywords: list[str], artwork: dict, context: str,
) -> str:
    return f"""
You are an expert contemporary art curator.
Write a description of the following artwork in English.

Exhibition title: {title}
Exhibition keywords: {', '.join(keywords)}
Artwork information: {json.dumps(artwork, ensure_ascii=False)}

Reference style: {context}

Artwork description guidelines:
- 100-180 words
- Describe the visual characteristics of the work
- Interpret the message or emotion the work conveys
- Connect it to the context of the whole exhibition
- Use clear language that helps visitors understand

Respond in JSON format:
{{ "description": "Artwork description" }}
"""


def image_analysis() -> str:
    return """You are an expert in contemporary art. Analyze this artwork image and provide:

1. The main theme and concept of the work
2. Techniques and style used
3. Characteristics of color and composition
4. Emotion and atmosphere of the work
5. 5-7 keywords that describe the work

Respond in JSON format:
{
  "theme": "theme of the work",
  "technique": "techniques used",
  "style": "artistic style",
  "colors": "color characteristics",
  "composition": "composition characteristics",
  "emotion": "emotion and atmosphere",
  "keywords": ["keyword1", "keyword2", ...]
}"""


# ─── Press release (full, with exhibition info block) ──────────

PRESS_RELEASE_LABELS = {
    "period": "Exhibition Period",
    "venue": "Venue",
    "address": "Address",
    "hours": "Hours",
    "admission": "Admission",
    "exhibition_info": "Exhibition Information",
}

PRESS_RELEASE_SYSTEM = (
    'You are a journalist writing news articles. Never use section titles like '
    '"Headline:", "Lead:", "Body:", "Exhibition Info:". '
    "Just write the article content directly."
)


def press_release(
    *,
    title: str,
    keywords: list[str],
    artist_name: str | None,
    introduction: str | None,
    date_range: str | None,
    venue: str | None,
    location: str | None,
    opening_hours: str | None,
    admission_fee: str | None,
    info_text: str,
    context: str,
) -> str:
    labels = PRESS_RELEASE_LABELS
    info_lines = [
        f"• Artist: {artist_name}" if artist_name else "",
        f"• {labels['period']}: {date_range}" if date_range else "",
        f"• {labels['address']}: {location}" if location else "",
        f"• {labels['venue']}: {venue}" if venue else "",
        f"• {labels['hours']}: {opening_hours}" if opening_hours else "",
        f"• {labels['admission']}: {admission_fee}" if admission_fee else "",
    ]
    return f"""You are a journalist writing a news article.
Based on the exhibition information below, write a press release in news article format.

Exhibition Title: {title}
{f'Artist: {artist_name}' if artist_name else ''}
Keywords: {', '.join(keywords)}
{f'Exhibition Introduction: {introduction}' if introduction else ''}
{info_text}

{context}

**Important rules:**
- Start with the exhibition information in this format:

**Exhibition Information**
• Exhibition Title: [Exhibition Title]
{chr(10).join(line for line in info_lines if line)}

---

- After the exhibition info, write 3-4 paragraphs as continuous prose
- Do NOT use section titles/labels like "Headline", "Lead", "Body"
- 300-450 words
- Maintain a professional and formal tone"""


# ─── Regeneration ───────────────────────────────────────────────

def regenerate_fallback(content_type: str, title: str, keywords: list[str]) -> str:
    return (
        "You are a professional art curator.\n"
        f"Exhibition Title: {title}\n"
        f"Keywords: {', '.join(keywords)}\n"
        f"Based on the above information, please write the {content_type}."
    )


def regenerate_request(content_type: str) -> str:
    return f"Please regenerate the {content_type}."


# ─── Document export headings ───────────────────────────────────

DOCUMENT_HEADINGS = {
    "subtitle": "Exhibition Booklet",
    "posters": "Exhibition Posters",
    "introduction": "Introduction",
    "preface": "Preface",
    "artistBio": "Artist Biography",
    "artworks": "Artwork",
    "pressRelease": "Press Release",
    "marketingReport": "Marketing Report",
    "targetAudience": "Target Audience",
    "marketingPoints": "Marketing Points",
    "pricingStrategy": "Pricing Strategy",
    "promotionStrategy": "Promotion Strategy",
}
