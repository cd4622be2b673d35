"""Uploaded note files and their extracted text."""
