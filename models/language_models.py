"""Data models used by the heuristic language detector."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Literal

if TYPE_CHECKING:
    from re import Pattern

__all__: list[str] = [
    "ConfidenceLabel",
    "DetectionProfile",
    "LanguageSignal",
    "LexiconProfile",
    "ScriptProfile",
]

type ConfidenceLabel = Literal["High", "Medium", "Low"]

HIGH_CONFIDENCE: Final[float] = 0.8
MEDIUM_CONFIDENCE: Final[float] = 0.5


@dataclass(frozen=True)
class LanguageSignal:
    """An advisory guess of the language of a text sample.

    Attributes:
        code (str): Language code, e.g. "es".
        name (str): Display name, e.g. "Spanish".
        confidence (float): Confidence in the range 0.0 to 1.0.
    """

    code: str
    name: str
    confidence: float

    @property
    def label(self) -> ConfidenceLabel:
        if self.confidence >= HIGH_CONFIDENCE:
            return "High"
        if self.confidence >= MEDIUM_CONFIDENCE:
            return "Medium"
        return "Low"


@dataclass(frozen=True)
class ScriptProfile:
    """A language recognised by its writing system.

    Attributes:
        code (str): Language code.
        name (str): Display name.
        pattern (Pattern[str]): Characters whose presence selects this profile.
        coverage (Pattern[str]): Characters counted when computing the script share of the text.
        refine (tuple[str, ...]): Codes of lexicons that may override this profile when they match.
    """

    code: str
    name: str
    pattern: Pattern[str]
    coverage: Pattern[str]
    refine: tuple[str, ...] = ()


@dataclass(frozen=True)
class LexiconProfile:
    """A language recognised by the frequency of its stop words.

    Attributes:
        code (str): Language code.
        name (str): Display name.
        words (frozenset[str]): Lower-case stop words.
        min_matches (int): Matching tokens required before the language qualifies.
        script (str): Script family of the words. Only "latin" lexicons take part in the general pass.
    """

    code: str
    name: str
    words: frozenset[str]
    min_matches: int = 2
    script: str = "latin"


@dataclass(frozen=True)
class DetectionProfile:
    """The complete, versioned table the detector scores against.

    Attributes:
        version (str): Table version, bumped whenever a pattern, word list or threshold changes.
        scripts (tuple[ScriptProfile, ...]): Script profiles in evaluation order.
        lexicons (tuple[LexiconProfile, ...]): Stop-word profiles in tie-break order.
        min_text_length (int): Shortest stripped text that is analysed at all.
        script_confidence_floor (float): Lowest confidence given once a script is present.
        min_acceptance (float): Lowest confidence accepted from the stop-word pass.
        fallback_code (str): Language returned for plain ASCII text with no other signal.
        fallback_confidence (float): Confidence of the fallback guess.
        fallback_pattern (Pattern[str] | None): Text that qualifies for the fallback guess.
    """

    version: str
    scripts: tuple[ScriptProfile, ...]
    lexicons: tuple[LexiconProfile, ...]
    min_text_length: int = 3
    script_confidence_floor: float = 0.7
    min_acceptance: float = 0.15
    fallback_code: str = "en"
    fallback_confidence: float = 0.5
    fallback_pattern: Pattern[str] | None = field(default=None, repr=False)

    def lexicon(self, code: str) -> LexiconProfile | None:
        return next((lex for lex in self.lexicons if lex.code == code), None)

    @property
    def latin_lexicons(self) -> tuple[LexiconProfile, ...]:
        return tuple(lex for lex in self.lexicons if lex.script == "latin")
