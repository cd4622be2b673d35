"""Owner-scoped storage for subjects, note files and chat history."""

from .base import NoteStore
from .sql import SQLNoteStore

__all__ = ["NoteStore", "SQLNoteStore"]
