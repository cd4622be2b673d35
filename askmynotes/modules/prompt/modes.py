from enum import Enum


class StudyMode(str, Enum):
    """Generation behaviours supported by the prompt builder and validator."""

    ANSWER = "answer"
    SUMMARIZE = "summarize"
    PRACTICE = "practice"

    @property
    def is_generation(self) -> bool:
        """Whether the mode builds study material rather than answering a question."""
        return self is not StudyMode.ANSWER
