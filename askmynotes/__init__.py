"""AskMyNotes: study assistant backend built on uploaded notes."""

__version__ = "0.1.0"
