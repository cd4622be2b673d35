"""SQLAlchemy models for uploaded note files."""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.session import Base


class NoteFile(Base):
    """Extracted text of one uploaded file within a subject.

    There is at most one row per ``(owner_id, subject_id, file_name)``;
    re-uploading a file replaces the row instead of merging into it.
    """

    __tablename__ = "note_files"
    __table_args__ = (
        UniqueConstraint("owner_id", "subject_id", "file_name", name="uq_note_files_owner_subject_name"),
        Index("ix_note_files_owner_subject_uploaded", "owner_id", "subject_id", "uploaded_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    owner_id: Mapped[str] = mapped_column(String(255))
    subject_id: Mapped[str] = mapped_column(String(255))
    file_name: Mapped[str] = mapped_column(String(512))
    extracted_text: Mapped[str] = mapped_column(Text)
    remote_blob_ref: Mapped[Optional[str]] = mapped_column(String(1024), default=None)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
    )
