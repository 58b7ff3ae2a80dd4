"""Domain Types — enums and small value types shared across the codebase.

Invariants:
    - Locale is "ko" (default) or "en"; anything else is coerced to KO
    - ExhibitionStatus values match the DB `status` column
    - Step → content_type mapping is the single place where chat step names
      are translated into stored content_type values

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - NewType for user ids: auth provider ids are opaque strings, never UUIDs we mint
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ExhibitionId = NewType("ExhibitionId", UUID)
ArtworkId = NewType("ArtworkId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Locale(str, Enum):
    """Output language for prompts and fallback strings."""
    KO = "ko"
    EN = "en"

    @classmethod
    def coerce(cls, value: "str | Locale | None") -> "Locale":
        """Map any incoming locale string to a supported Locale (KO fallback)."""
        if isinstance(value, Locale):
            return value
        if value and value.lower().startswith("en"):
            return cls.EN
        return cls.KO


class ExhibitionStatus(str, Enum):
    """Exhibition lifecycle — maps to DB `status` column."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class ChatStep(str, Enum):
    """Chat steps that select a dedicated system prompt."""
    TITLES = "titles"
    INTRODUCTION = "introduction"
    PREFACE = "preface"
    PRESS_RELEASE = "pressRelease"
    MARKETING_REPORT = "marketingReport"


class Role(str, Enum):
    """Account role stored in auth provider user_metadata."""
    ADMIN = "admin"
    USER = "user"


# ─── Step mapping ────────────────────────────────────────────────

# ADR: UI step names predate the content_type CHECK values in the DB.
_STEP_TO_CONTENT_TYPE: dict[str, str] = {
    "titles": "title_suggestions",
    "marketing": "marketing_report",
}


def map_step_to_content_type(step: str) -> str:
    """Translate a chat step into the stored content_type (identity by default)."""
    return _STEP_TO_CONTENT_TYPE.get(step, step)
