from __future__ import annotations

import math
import re
from dataclasses import dataclass
from re import Pattern
from typing import Final

__all__: list[str] = ["StringUtils", "TextStats"]

WORDS_PER_MINUTE: Final[int] = 200
BODY_PREVIEW_LIMIT: Final[int] = 200

_SENTENCE_PATTERN: Final[Pattern[str]] = re.compile(r"[^.!?]+[.!?]+")


@dataclass(frozen=True)
class TextStats:
    """Simple statistics for a block of text.

    Attributes:
        words (int): Number of whitespace-separated words.
        characters (int): Raw character count, whitespace included.
        sentences (int): Number of runs terminated by '.', '!' or '?'.
        reading_minutes (int): Estimated reading time, rounded up.
    """

    words: int
    characters: int
    sentences: int
    reading_minutes: int

    @property
    def reading_time(self) -> str:
        """Reading time as a display string such as '3 min' or '< 1 min'."""
        if self.reading_minutes > 0:
            return f"{self.reading_minutes} min"
        return "< 1 min"


class StringUtils:
    """Static helpers for string handling shared by the providers and the HTTP API."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Return the value as a string, mapping None to an empty string.

        Whitespace is preserved; callers decide whether to strip.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def build_body_preview(body: str, limit: int = BODY_PREVIEW_LIMIT) -> str:
        """Shorten a response body to a single line suitable for diagnostics."""
        body_preview: str = StringUtils.ensure_str(body).strip().replace("\n", "\\n")
        if len(body_preview) > limit:
            return f"{body_preview[:limit]}..."
        return body_preview

    @staticmethod
    def count_words(text: str | None) -> int:
        text = StringUtils.ensure_str(text)
        if not text.strip():
            return 0
        return len(text.split())

    @staticmethod
    def count_sentences(text: str | None) -> int:
        text = StringUtils.ensure_str(text)
        if not text.strip():
            return 0
        return len(_SENTENCE_PATTERN.findall(text))

    @staticmethod
    def text_stats(text: str | None, words_per_minute: int = WORDS_PER_MINUTE) -> TextStats:
        """Compute word, character and sentence counts plus an estimated reading time.

        Args:
            text (str | None): The text to analyse.
            words_per_minute (int): Reading speed used for the estimate.

        Returns:
            TextStats: The computed statistics.
        """
        text = StringUtils.ensure_str(text)
        words: int = StringUtils.count_words(text)
        return TextStats(
            words=words,
            characters=len(text),
            sentences=StringUtils.count_sentences(text),
            reading_minutes=math.ceil(words / words_per_minute),
        )
