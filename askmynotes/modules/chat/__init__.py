"""Question answering over a subject's notes."""
