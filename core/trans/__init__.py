"""Translation provider chain and orchestration.

This package provides translation through pluggable provider implementations (DeepL,
LibreTranslate, Google) tried in a configured order until one succeeds.
"""

from core.trans.interface import (
    AllProvidersFailedError,
    HttpTransport,
    InvalidRequestError,
    ProviderInterface,
    TranslateExceptionError,
)
from core.trans.orchestrator import TranslationOrchestrator
from core.trans.provider_config import build_provider_chain

__all__: list[str] = [
    "AllProvidersFailedError",
    "HttpTransport",
    "InvalidRequestError",
    "ProviderInterface",
    "TranslateExceptionError",
    "TranslationOrchestrator",
    "build_provider_chain",
]
