"""Core components of Nexo Translate.

This package contains the translation provider chain and orchestrator, and the heuristic
language detector.
"""

from core.detect import LanguageDetector, detect
from core.trans import TranslationOrchestrator, build_provider_chain
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "LanguageDetector",
    "TranslationOrchestrator",
    "build_provider_chain",
    "detect",
]
