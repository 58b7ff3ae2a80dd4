"""Initial schema — exhibitions, artworks, content, galleries and site tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "exhibitions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("keywords", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("public_slug", sa.String(255), nullable=True, unique=True),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("artist_name", sa.String(255), nullable=True),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("location", sa.Text, nullable=True),
        sa.Column("exhibition_date", sa.String(64), nullable=True),
        sa.Column("exhibition_end_date", sa.String(64), nullable=True),
        sa.Column("opening_hours", sa.String(255), nullable=True),
        sa.Column("admission_fee", sa.String(255), nullable=True),
        sa.Column("curator_conversation", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("posters", sa.JSON, nullable=False, server_default="[]"),
        *_timestamps(),
    )
    op.create_index("ix_exhibitions_user_id", "exhibitions", ["user_id"])

    op.create_table(
        "artworks",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "exhibition_id", UUID(as_uuid=True),
            sa.ForeignKey("exhibitions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("aspect_ratio", sa.Float, nullable=False, server_default="1.0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_artworks_exhibition_id", "artworks", ["exhibition_id"])

    op.create_table(
        "exhibition_content",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "exhibition_id", UUID(as_uuid=True),
            sa.ForeignKey("exhibitions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("content_type", sa.String(50), nullable=False),
        sa.Column("content", sa.JSON, nullable=False, server_default="{}"),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
    )
    op.create_index("ix_exhibition_content_exhibition_id", "exhibition_content", ["exhibition_id"])

    op.create_table(
        "virtual_exhibitions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "exhibition_id", UUID(as_uuid=True),
            sa.ForeignKey("exhibitions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("template_type", sa.String(50), nullable=False, server_default="2.5d_fixed"),
        sa.Column("settings", sa.JSON, nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_virtual_exhibitions_exhibition_id", "virtual_exhibitions", ["exhibition_id"])

    op.create_table(
        "contact_inquiries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "notices",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title_ko", sa.Text, nullable=False),
        sa.Column("title_en", sa.Text, nullable=True),
        sa.Column("content_ko", sa.Text, nullable=False),
        sa.Column("content_en", sa.Text, nullable=True),
        sa.Column("author_id", sa.String(64), nullable=False),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "registration_notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=True),
        sa.Column("user_metadata", sa.JSON, nullable=False, server_default="{}"),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "reference_samples",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("content_type", sa.String(50), nullable=False),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reference_samples_content_type", "reference_samples", ["content_type"])


def downgrade() -> None:
    op.drop_table("reference_samples")
    op.drop_table("registration_notifications")
    op.drop_table("notices")
    op.drop_table("contact_inquiries")
    op.drop_table("virtual_exhibitions")
    op.drop_table("exhibition_content")
    op.drop_table("artworks")
    op.drop_table("exhibitions")
