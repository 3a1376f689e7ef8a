"""Heuristic language detection based on script ranges and stop-word frequency."""

from core.detect.detector import LanguageDetector, detect

__all__: list[str] = ["LanguageDetector", "detect"]
