"""Heuristic language detection.

Detection runs three passes over a read-only DetectionProfile, and the first pass that
produces a signal wins:

1. Script pass: a language with its own writing system is recognised by the presence of its
   characters. The confidence grows with the share of the text written in that script.
2. Stop-word pass: Latin-script languages are scored by how many tokens are common function
   words of the language.
3. Fallback: plain ASCII text with no other signal is guessed to be English.

Detection performs no I/O and keeps no state, so it is safe to call from any thread or task.
"""

from __future__ import annotations

import re
import unicodedata
from re import Pattern
from typing import TYPE_CHECKING, Final

from models.language_models import LanguageSignal
from models.language_profiles import DETECTION_PROFILE
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from models.language_models import DetectionProfile, LexiconProfile, ScriptProfile

__all__: list[str] = ["LanguageDetector", "detect"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

_NON_WORD: Final[Pattern[str]] = re.compile(r"[^\w]+")


class LanguageDetector:
    """Scores text against a detection profile.

    Args:
        profile (DetectionProfile): The table to score against. Defaults to the bundled profile.
    """

    def __init__(self, profile: DetectionProfile = DETECTION_PROFILE) -> None:
        self.profile: DetectionProfile = profile
        logger.debug(
            "Language detector ready: profile %s, %d scripts, %d lexicons",
            profile.version,
            len(profile.scripts),
            len(profile.lexicons),
        )

    def detect(self, text: str | None) -> LanguageSignal | None:
        """Guess the language of a text sample.

        Args:
            text (str | None): The text to analyse.

        Returns:
            LanguageSignal | None: The best guess, or None when the text is too short or no
                signal clears its threshold. None means "unknown", not an error.
        """
        sample: str = unicodedata.normalize("NFC", text or "").strip()
        if len(sample) < self.profile.min_text_length:
            return None

        signal: LanguageSignal | None = self._script_pass(sample)
        if signal is None:
            signal = self._stop_word_pass(sample)
        if signal is None:
            signal = self._fallback(sample)
        return signal

    def _script_pass(self, sample: str) -> LanguageSignal | None:
        for script in self.profile.scripts:
            if not script.pattern.search(sample):
                continue

            confidence: float = self._script_confidence(script, sample)
            refined: LexiconProfile | None = self._refine(script, sample)
            if refined is not None:
                return LanguageSignal(code=refined.code, name=refined.name, confidence=confidence)
            return LanguageSignal(code=script.code, name=script.name, confidence=confidence)
        return None

    def _script_confidence(self, script: ScriptProfile, sample: str) -> float:
        characters: list[str] = [c for c in sample if not c.isspace()]
        covered: int = sum(1 for c in characters if script.coverage.match(c))
        coverage: float = covered / len(characters) if characters else 0.0
        return max(self.profile.script_confidence_floor, min(1.0, 2 * coverage))

    def _refine(self, script: ScriptProfile, sample: str) -> LexiconProfile | None:
        """Pick a more specific language sharing the script, if its stop words say so."""
        if not script.refine:
            return None

        lexicons: list[LexiconProfile] = [lex for code in script.refine if (lex := self.profile.lexicon(code))]
        best: tuple[LexiconProfile, int] | None = self._best_lexicon(self._tokenize(sample), lexicons)
        if best is None:
            return None
        return best[0]

    def _stop_word_pass(self, sample: str) -> LanguageSignal | None:
        tokens: list[str] = self._tokenize(sample)
        if not tokens:
            return None

        best: tuple[LexiconProfile, int] | None = self._best_lexicon(tokens, self.profile.latin_lexicons)
        if best is None:
            return None

        lexicon, count = best
        confidence: float = min(1.0, count / len(tokens))
        if confidence < self.profile.min_acceptance:
            logger.debug("Best stop-word match '%s' rejected: confidence %.3f", lexicon.code, confidence)
            return None
        return LanguageSignal(code=lexicon.code, name=lexicon.name, confidence=confidence)

    @staticmethod
    def _best_lexicon(tokens: list[str], lexicons: Iterable[LexiconProfile]) -> tuple[LexiconProfile, int] | None:
        """Return the qualifying lexicon with the strictly highest match count.

        Ties keep the lexicon declared first.
        """
        best: tuple[LexiconProfile, int] | None = None
        for lexicon in lexicons:
            count: int = sum(1 for token in tokens if token in lexicon.words)
            if count < lexicon.min_matches:
                continue
            if best is None or count > best[1]:
                best = (lexicon, count)
        return best

    @staticmethod
    def _tokenize(sample: str) -> list[str]:
        stripped: Iterable[str] = (_NON_WORD.sub("", token) for token in sample.lower().split())
        return [token for token in stripped if token]

    def _fallback(self, sample: str) -> LanguageSignal | None:
        pattern: Pattern[str] | None = self.profile.fallback_pattern
        if pattern is None or not pattern.match(sample):
            return None
        code: str = self.profile.fallback_code
        fallback_lexicon: LexiconProfile | None = self.profile.lexicon(code)
        name: str = fallback_lexicon.name if fallback_lexicon else code
        return LanguageSignal(code=code, name=name, confidence=self.profile.fallback_confidence)


_default_detector: LanguageDetector | None = None


def detect(text: str | None) -> LanguageSignal | None:
    """Detect the language of a text with the bundled profile. See LanguageDetector.detect."""
    global _default_detector  # noqa: PLW0603
    if _default_detector is None:
        _default_detector = LanguageDetector()
    return _default_detector.detect(text)
