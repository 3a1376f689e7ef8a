"""JSON payloads of the HTTP API.

Field names are camelCase on the wire. Optional fields that are None are left out of the
serialized payload, except where a null is part of the contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dataclasses_json import DataClassJsonMixin, LetterCase, config, dataclass_json

from models.translation_models import AUTO_LANGUAGE

if TYPE_CHECKING:
    from models.language_models import LanguageSignal
    from models.translation_models import TranslationResult
    from utils.string_utils import TextStats

__all__: list[str] = [
    "DetectRequestBody",
    "DetectResponseBody",
    "DetectedLanguageBody",
    "ErrorBody",
    "LanguageEntry",
    "LanguagesResponseBody",
    "TextStatsBody",
    "TranslateRequestBody",
    "TranslateResponseBody",
]


def _omit_if_none(value: object) -> bool:
    return value is None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TranslateRequestBody(DataClassJsonMixin):
    """Body of POST /api/translate."""

    text: str = ""
    source_lang: str = AUTO_LANGUAGE
    target_lang: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TranslateResponseBody(DataClassJsonMixin):
    translation: str
    source_lang: str
    target_lang: str
    provider: str
    detected_language: str | None = field(default=None, metadata=config(exclude=_omit_if_none))

    @classmethod
    def from_result(cls, result: TranslationResult) -> TranslateResponseBody:
        return cls(
            translation=result.translated_text,
            source_lang=result.source_language,
            target_lang=result.target_language,
            provider=result.provider_used,
            detected_language=result.detected_source_language,
        )


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class ErrorBody(DataClassJsonMixin):
    """Error payload. `details` is only present for caller errors."""

    error: str
    details: str | None = field(default=None, metadata=config(exclude=_omit_if_none))


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class DetectRequestBody(DataClassJsonMixin):
    text: str = ""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class DetectedLanguageBody(DataClassJsonMixin):
    code: str
    name: str
    confidence: float
    label: str

    @classmethod
    def from_signal(cls, signal: LanguageSignal) -> DetectedLanguageBody:
        return cls(code=signal.code, name=signal.name, confidence=round(signal.confidence, 4), label=signal.label)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class TextStatsBody(DataClassJsonMixin):
    words: int
    characters: int
    sentences: int
    reading_time: str

    @classmethod
    def from_stats(cls, stats: TextStats) -> TextStatsBody:
        return cls(
            words=stats.words,
            characters=stats.characters,
            sentences=stats.sentences,
            reading_time=stats.reading_time,
        )


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class DetectResponseBody(DataClassJsonMixin):
    """Body returned by POST /api/detect. `detectedLanguage` is null when nothing was detected."""

    detected_language: DetectedLanguageBody | None
    stats: TextStatsBody


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class LanguageEntry(DataClassJsonMixin):
    code: str
    name: str


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class LanguagesResponseBody(DataClassJsonMixin):
    languages: list[LanguageEntry] = field(default_factory=list)
