"""Data models for Nexo Translate.

This package contains dataclass definitions for configuration, translation requests and
results, HTTP exchanges with providers, language detection and the JSON API payloads.
"""

from __future__ import annotations

from models.config_models import Config, ProviderSection
from models.http_models import HttpRequest, HttpResponse
from models.language_models import DetectionProfile, LanguageSignal, LexiconProfile, ScriptProfile
from models.language_profiles import DETECTION_PROFILE, SUPPORTED_LANGUAGES
from models.translation_models import (
    FailureReason,
    ParsedTranslation,
    ProviderChain,
    ProviderConfig,
    ProviderFailure,
    TranslationRequest,
    TranslationResult,
)

__all__: list[str] = [
    "DETECTION_PROFILE",
    "SUPPORTED_LANGUAGES",
    "Config",
    "DetectionProfile",
    "FailureReason",
    "HttpRequest",
    "HttpResponse",
    "LanguageSignal",
    "LexiconProfile",
    "ParsedTranslation",
    "ProviderChain",
    "ProviderConfig",
    "ProviderFailure",
    "ProviderSection",
    "ScriptProfile",
    "TranslationRequest",
    "TranslationResult",
]
