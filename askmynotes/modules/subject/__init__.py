"""Subjects: user-defined groupings of uploaded notes."""
