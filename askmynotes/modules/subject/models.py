"""SQLAlchemy models for subject entities."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin
from ...infrastructure.database.session import Base


class Subject(Base, TimestampMixin):
    """A user-defined course or topic grouping uploaded notes.

    ``subject_id`` is chosen by the client and is only unique per owner, so
    the identity key is the ``(owner_id, subject_id)`` pair.
    """

    __tablename__ = "subjects"
    __table_args__ = (UniqueConstraint("owner_id", "subject_id", name="uq_subjects_owner_subject"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    owner_id: Mapped[str] = mapped_column(String(255), index=True)
    subject_id: Mapped[str] = mapped_column(String(255), index=True)
    display_name: Mapped[str] = mapped_column(String(255))
