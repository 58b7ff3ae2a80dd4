"""큐레이션 프롬프트 (한국어) — 기본 로케일의 프롬프트 빌더.

Invariants:
    - prompts_en.py와 함수 이름·시그니처가 정확히 같다 (prompts.for_locale가 모듈 단위로 교체)
    - 모든 텍스트 생성 프롬프트는 JSON 응답 키를 명시한다 (reply_parsing 파서와 1:1 대응)
    - 작가/전시 텍스트는 성별 중립 규칙을 포함한다

Design Decisions:
    - 영어판과 별도 파일: 번역문을 한 모듈에 섞지 않는다 (locale별 검토 용이)
    - JSON 키 이름(titles, introduction, artistBio ...)은 번역하지 않는다: 파서가 키로 읽는다
"""

import json

_GENDER_NEUTRAL_RULES = """**중요 - 성별 중립 언어 규칙:**
- 성별 대명사(그/그녀, he/she) 절대 사용 금지
- '작가', '해당 예술가', '창작자', '아티스트' 등의 표현만 사용
- 성별을 추정하거나 암시하는 표현 금지
- 100% 중립적 톤 유지"""

DEFAULT_ARTIST = "현대 작가"
ARTWORK_DESCRIPTION_ERROR = "작품 설명을 생성하는 중 오류가 발생했습니다."
DUPLICATE_SUFFIX = " (복사본)"
UNTITLED = "제목 없음"


def default_artwork_title(position: int) -> str:
    """1-based default title for an untitled artwork."""
    return f"작품 {position}"


def system_prompt() -> str:
    return (
        "당신은 전문 미술 큐레이터입니다. 사용자가 전시를 기획할 수 있도록 "
        "테마, 컨셉, 예술적 방향에 대해 함께 논의해주세요. 한국어로 응답하세요. "
        "사려 깊고 창의적이며 전문적인 안내를 제공하세요."
    )


def titles(
    keywords: list[str],
    artwork_descriptions: list[str],
    conversation_context: str = "",
) -> str:
    conversation = (
        f"사용자와의 대화 내용:\n{conversation_context}\n\n"
        if conversation_context else ""
    )
    return f"""
당신은 한국 현대미술 전문 큐레이터입니다.
다음 정보를 바탕으로 전시 타이틀 5개를 제안해주세요.

{conversation}키워드: {', '.join(keywords)}
작품 설명: {chr(10).join(artwork_descriptions)}

각 타이틀은:
- 사용자와의 대화에서 나온 전시 컨셉과 아이디어를 반영
- 키워드의 핵심 의미를 담기
- 감성적이고 상징적인 표현 사용
- 전시의 핵심 메시지 담기

**중요 - 타이틀 형식:**
- 반드시 "한글 타이틀 | English Title" 형식으로 작성
- 한글과 영어 사이에 " | " (공백+파이프+공백) 구분자 사용
- 괄호() 사용 금지
- 예시: "도시의 숨결 | Breath of the City"

JSON 형식으로 응답:
{{ "titles": ["한글 타이틀1 | English Title1", "한글 타이틀2 | English Title2", ...] }}
"""


def introduction(title: str, keywords: list[str], context: str) -> str:
    return f"""
당신은 한국 현대미술 전문 큐레이터입니다.
다음 정보를 바탕으로 전시 소개문을 작성해주세요.

전시 타이틀: {title}
키워드: {', '.join(keywords)}
참고 스타일: {context}

전시 소개문 작성 원칙:
- 200~300자 분량
- 관람객이 쉽게 이해할 수 있는 설명적 톤
- 전시의 핵심 주제와 메시지 전달
- 작품과 작가에 대한 간략한 맥락 제공

{_GENDER_NEUTRAL_RULES}

JSON 형식으로 응답:
{{ "introduction": "소개문 내용" }}
"""


def preface(title: str, keywords: list[str], context: str) -> str:
    return f"""
당신은 한국 현대미술 전문 큐레이터입니다.
다음 정보를 바탕으로 전시 서문을 예술 큐레이터 문체로 작성해주세요.

전시 타이틀: {title}
키워드: {', '.join(keywords)}
참고 스타일: {context}

전시 서문 작성 원칙:
- 500~800자 분량
- '철학적 질문 → 감각적 묘사 → 사유의 전개 → 미학적 맥락 → 여운'의 5단 구성
- 감각적 이미지(빛, 파동, 물성, 결)의 은유를 적절히 사용
- 이미지/작품과 직접적으로 연동된 묘사 포함
- 예술 비평 용어 3~8개 자연스럽게 배치
- 너무 단순한 서술 금지, 지적 밀도 유지
- 중립적·세련된 톤, 과장 표현 금지

{_GENDER_NEUTRAL_RULES}

JSON 형식으로 응답:
{{ "preface": "서문 내용" }}
"""


def press_release_brief(exhibition_data: dict, context: str) -> str:
    """Chat-step press release: short article from exhibition metadata."""
    end = exhibition_data.get("exhibition_end_date")
    period = (exhibition_data.get("exhibition_date") or "") + (f" - {end}" if end else "")
    return f"""
당신은 신문 기사를 작성하는 기자입니다. 아래 전시 정보로 짧은 뉴스 기사를 작성하세요.

전시명: {exhibition_data.get('title') or ''}
작가: {exhibition_data.get('artist_name') or ''}
기간: {period}
장소: {exhibition_data.get('venue') or ''}
주소: {exhibition_data.get('location') or ''}

기사 형식:
- 3~4개의 문단으로 구성된 일반 뉴스 기사
- 섹션 제목이나 라벨 없이 바로 본문만 작성
- 400~600자

{{ "pressRelease": "기사 본문만 여기에 작성. 제목이나 섹션 구분 없이 문단만." }}
"""


def marketing_report(exhibition_data: dict, context: str) -> str:
    return f"""
당신은 미술 시장 전문 분석가입니다.
다음 전시 정보를 바탕으로 마케팅 리포트를 한글로 작성해주세요.

전시 정보:
{json.dumps(exhibition_data, ensure_ascii=False, indent=2)}

참고 스타일: {context}

**중요: 모든 내용을 한글로 작성하세요. 영어 단어나 영어 문장을 사용하지 마세요.**

마케팅 리포트 구조:
1. 전시 요약: 전시의 핵심 메시지와 특징을 2-3문장으로 요약
2. 주요 타깃: 이 전시에 관심을 가질 관람객 그룹 (3-5개 항목)
3. 마케팅 포인트: 전시의 차별화된 강점과 홍보 포인트 (3-5개 항목)
4. 가격 전략: 입장료 및 가격 정책 제안
5. 추천 홍보 전략: 효과적인 홍보 방법 (3-5개 항목)

JSON 형식으로 응답 (모든 내용은 한글로):
{{
  "marketingReport": {{
    "overview": "전시 요약을 한글로...",
    "targetAudience": ["타깃1 한글로", "타깃2 한글로", ...],
    "marketingPoints": ["포인트1 한글로", "포인트2 한글로", ...],
    "pricingStrategy": "가격 전략을 한글로...",
    "promotionStrategy": ["전략1 한글로", "전략2 한글로", ...]
  }}
}}
"""


def artist_bio(artist_info: dict, context: str) -> str:
    return f"""
당신은 한국 현대미술 전문 큐레이터입니다.
다음 정보를 바탕으로 작가 소개를 성별 중립적 예술가 프로필 형태로 작성해주세요.

작가 정보:
{json.dumps(artist_info, ensure_ascii=False, indent=2)}

참고 스타일: {context}

작가 소개 작성 원칙:
- 300~500자 분량
- 작가의 작업 경향, 재료, 철학적 관심사, 미학적 지향을 중심으로 설명
- 단순한 나열형 문장 금지
- '작가의 세계를 관통하는 핵심 동력'이 무엇인지 한 문장으로 요약
- 예술·기술·감각 언어를 조화롭게 사용

**매우 중요 - 성별 중립 언어 규칙 (필수 준수):**
- 성별 대명사(그/그녀, he/she, 그는/그녀는) 절대 사용 금지
- '작가', '이 예술가', '해당 창작자', '아티스트' 등의 표현만 사용
- 성별을 추정하거나 암시하는 모든 표현 금지 (예: 여류 작가, 남성 작가 등)
- 100% 중립적 톤 유지
- 작가의 이름을 주어로 사용하거나, '작가는', '이 예술가는' 형태로 문장 구성

JSON 형식으로 응답:
{{ "artistBio": "작가 소개 내용" }}
"""


def summarize_conversation(conversation: list[dict], exhibition_title: str) -> str:
    lines = "\n\n".join(
        f"{'사용자' if msg.get('role') == 'user' else '큐레이터'}: {msg.get('content', '')}"
        for msg in conversation
    )
    return f"""
당신은 전시 기획 전문가입니다.
다음은 전시 "{exhibition_title}" 기획 과정에서 큐레이터와 사용자 간의 대화입니다.
이 대화 내용을 전시 기획서에 들어갈 내용으로 정리해주세요.

대화 내용:
{lines}

**절대 요약하지 말 것 - 매우 중요**

정리 원칙:
- **절대 요약하지 말고, 대화에서 나온 모든 내용을 빠짐없이 정리할 것**
- 대화에서 언급된 모든 세부사항, 아이디어, 제안사항을 그대로 포함
- 사용자의 요구사항과 큐레이터의 제안을 모두 상세히 정리
- 대화 내용을 축약하거나 생략하지 말고 전부 포함
- 대화에 나온 키워드, 컨셉, 방향성을 모두 언급
- 객관적이고 전문적인 톤으로 문장을 자연스럽게 재구성
- 불필요한 인사말만 제외하고 나머지는 모두 포함

JSON 형식으로 응답:
{{ "summary": "정리된 내용" }}
"""


def artwork_description(
    title: str, keywords: list[str], artwork: dict, context: str,
) -> str:
    return f"""
당신은 한국 현대미술 전문 큐레이터입니다.
다음 작품에 대한 설명을 작성해주세요.

전시 타이틀: {title}
전시 키워드: {', '.join(keywords)}
작품 정보: {json.dumps(artwork, ensure_ascii=False)}

참고 스타일: {context}

작품 설명 작성 원칙:
- 150~250자 분량
- 작품의 시각적 특징 설명
- 작품이 전달하는 메시지나 감정 해석
- 전시 전체 맥락과 연결
- 관람객의 이해를 돕는 명확한 표현

JSON 형식으로 응답:
{{ "description": "작품 설명 내용" }}
"""


def image_analysis() -> str:
    return """당신은 한국 현대미술 전문가입니다. 이 작품 이미지를 분석하여 다음 정보를 제공해주세요:

1. 작품의 주요 주제와 컨셉
2. 사용된 기법과 스타일
3. 색채와 구도의 특징
4. 작품에서 느껴지는 감정과 분위기
5. 작품을 설명할 수 있는 키워드 5-7개

JSON 형식으로 응답해주세요:
{
  "theme": "작품의 주제",
  "technique": "사용된 기법",
  "style": "예술 스타일",
  "colors": "색채 특징",
  "composition": "구도 특징",
  "emotion": "감정과 분위기",
  "keywords": ["키워드1", "키워드2", ...]
}"""


# ─── Press release (full, with exhibition info block) ──────────

PRESS_RELEASE_LABELS = {
    "period": "전시 기간",
    "venue": "장소",
    "address": "주소",
    "hours": "운영 시간",
    "admission": "입장료",
    "exhibition_info": "전시 정보",
}

PRESS_RELEASE_SYSTEM = (
    '당신은 뉴스 기사를 작성하는 기자입니다. 절대로 "헤드라인:", "리드:", '
    '"본문:", "전시 정보:" 같은 섹션 제목을 사용하지 마세요. '
    "바로 기사 내용만 작성하세요."
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
    info_lines = [
        f"• 작가명: {artist_name}" if artist_name else "",
        f"• 전시기간: {date_range}" if date_range else "",
        f"• 주소: {location}" if location else "",
        f"• 전시장소: {venue}" if venue else "",
        f"• 운영시간: {opening_hours}" if opening_hours else "",
        f"• 입장료: {admission_fee}" if admission_fee else "",
    ]
    return f"""당신은 신문 기사를 작성하는 기자입니다.
아래 전시 정보를 바탕으로 뉴스 기사 형태의 보도자료를 작성해주세요.

전시 제목: {title}
{f'작가: {artist_name}' if artist_name else ''}
키워드: {', '.join(keywords)}
{f'전시 소개: {introduction}' if introduction else ''}
{info_text}

{context}

**중요 규칙:**
- 맨 처음에 다음과 같은 형식으로 전시 정보를 정리해서 제시:

**전시 정보**
• 전시명: [전시 제목]
{chr(10).join(line for line in info_lines if line)}

---

- 전시 정보 다음에 3~4개 문단으로 구성된 연속된 줄글 작성
- "헤드라인", "리드", "본문" 같은 섹션 제목/라벨 사용하지 않기
- 400~600자 분량
- 전문적이고 공식적인 톤 유지"""


# ─── Regeneration ───────────────────────────────────────────────

def regenerate_fallback(content_type: str, title: str, keywords: list[str]) -> str:
    return (
        "당신은 전문 미술 큐레이터입니다.\n"
        f"전시 제목: {title}\n"
        f"키워드: {', '.join(keywords)}\n"
        f"위 정보를 바탕으로 {content_type}를 작성해주세요."
    )


def regenerate_request(content_type: str) -> str:
    return f"{content_type}를 재생성해주세요."


# ─── Document export headings ───────────────────────────────────

DOCUMENT_HEADINGS = {
    "subtitle": "전시 자료집",
    "posters": "전시 포스터",
    "introduction": "전시 소개",
    "preface": "전시 서문",
    "artistBio": "작가 소개",
    "artworks": "작품",
    "pressRelease": "보도자료",
    "marketingReport": "마케팅 리포트",
    "targetAudience": "주요 타깃",
    "marketingPoints": "마케팅 포인트",
    "pricingStrategy": "가격 전략",
    "promotionStrategy": "추천 홍보 전략",
}
