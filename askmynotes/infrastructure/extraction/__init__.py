"""Text extraction for uploaded PDF and TXT notes."""

from .extractor import EXTRACTORS, extract_text, extract_text_sync, file_extension

__all__ = ["EXTRACTORS", "extract_text", "extract_text_sync", "file_extension"]
