"""Models for translation requests, results and the provider chain.

TranslationRequest and TranslationResult are per-call value objects. ProviderConfig and
ProviderChain describe the provider fallback order; they are built once at startup and
never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

    from models.http_models import HttpRequest, HttpResponse

__all__: list[str] = [
    "AUTO_LANGUAGE",
    "BuildOutcome",
    "FailureReason",
    "ParseOutcome",
    "ParsedTranslation",
    "ProviderChain",
    "ProviderConfig",
    "ProviderFailure",
    "TranslationRequest",
    "TranslationResult",
]

AUTO_LANGUAGE: Final[str] = "auto"
DEFAULT_PROVIDER_TIMEOUT: Final[float] = 10.0


@dataclass(frozen=True)
class TranslationRequest:
    """A caller's translation request.

    Attributes:
        source_text (str): Text to translate.
        target_language (str | None): Target language code. Required; validated by the orchestrator.
        source_language (str): Source language code, or "auto" to let the backend detect it.
    """

    source_text: str
    target_language: str | None
    source_language: str = AUTO_LANGUAGE

    @property
    def is_auto_source(self) -> bool:
        """Whether the source language is left to the backend."""
        return not self.source_language or self.source_language.strip().lower() == AUTO_LANGUAGE


@dataclass(frozen=True)
class TranslationResult:
    """A verified, successful translation.

    The language codes are the ones the caller sent. Outbound aliases used for a provider
    never appear here.

    Attributes:
        translated_text (str): The translation. Never empty.
        provider_used (str): Identifier of the provider that produced it.
        source_language (str): Source language as requested ("auto" included).
        target_language (str): Target language as requested.
        detected_source_language (str | None): Source language reported by the provider, if any.
    """

    translated_text: str
    provider_used: str
    source_language: str
    target_language: str
    detected_source_language: str | None = None


class FailureReason(StrEnum):
    """Why a single provider attempt did not produce a translation."""

    UNSUPPORTED_LANGUAGE = "unsupported_language"
    HTTP_STATUS = "http_status"
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    MALFORMED_RESPONSE = "malformed_response"
    EMBEDDED_ERROR = "embedded_error"
    EMPTY_TRANSLATION = "empty_translation"


@dataclass(frozen=True)
class ProviderFailure:
    """A failed provider attempt, recorded for diagnostics.

    Attributes:
        provider (str): Provider identifier.
        reason (FailureReason): Failure classification.
        detail (str): Human readable detail for the log.
    """

    provider: str
    reason: FailureReason
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.provider}: {self.reason} ({self.detail})"
        return f"{self.provider}: {self.reason}"


@dataclass(frozen=True)
class ParsedTranslation:
    """What a response parser extracts from a successful backend response.

    Attributes:
        text (str): Translated text as returned by the backend.
        detected_source_language (str | None): Normalized detected source language, if reported.
    """

    text: str
    detected_source_language: str | None = None


type BuildOutcome = HttpRequest | ProviderFailure
type ParseOutcome = ParsedTranslation | ProviderFailure


@dataclass(frozen=True)
class ProviderConfig:
    """One entry of the provider fallback chain.

    Attributes:
        identifier (str): Provider identifier, e.g. "deepl".
        priority (int): Lower values are tried first.
        enabled (bool): False when the provider's required credential or setting is absent.
        request_builder (Callable[[TranslationRequest], BuildOutcome]): Shapes the outbound request.
        response_parser (Callable[[HttpResponse], ParseOutcome]): Parses a 2xx response.
        timeout (float): Transport timeout for a single attempt, in seconds.
    """

    identifier: str
    priority: int
    enabled: bool
    request_builder: Callable[[TranslationRequest], BuildOutcome] = field(repr=False)
    response_parser: Callable[[HttpResponse], ParseOutcome] = field(repr=False)
    timeout: float = DEFAULT_PROVIDER_TIMEOUT


@dataclass(frozen=True)
class ProviderChain:
    """The immutable, ordered set of configured providers."""

    providers: tuple[ProviderConfig, ...] = ()

    @property
    def enabled_providers(self) -> tuple[ProviderConfig, ...]:
        """Enabled providers in ascending priority. Equal priorities keep declaration order."""
        return tuple(sorted((p for p in self.providers if p.enabled), key=lambda p: p.priority))

    @property
    def identifiers(self) -> list[str]:
        return [p.identifier for p in self.enabled_providers]
