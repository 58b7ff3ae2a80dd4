"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Exhibition is the aggregate root; artworks, content and virtual galleries
      are scoped by exhibition_id
    - Site-level entities (notices, inquiries, notifications, reference samples)
      stand alone

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from curator.models.exhibition import Exhibition  # noqa: F401
from curator.models.artwork import Artwork  # noqa: F401
from curator.models.exhibition_content import ExhibitionContent  # noqa: F401
from curator.models.virtual_exhibition import VirtualExhibition  # noqa: F401
from curator.models.contact_inquiry import ContactInquiry  # noqa: F401
from curator.models.notice import Notice  # noqa: F401
from curator.models.registration_notification import RegistrationNotification  # noqa: F401
from curator.models.reference_sample import ReferenceSample  # noqa: F401
