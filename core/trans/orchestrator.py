from __future__ import annotations

from typing import TYPE_CHECKING

from core.trans.interface import AllProvidersFailedError, InvalidRequestError
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError
from models.http_models import HttpRequest
from models.translation_models import (
    AUTO_LANGUAGE,
    FailureReason,
    ParsedTranslation,
    ProviderFailure,
    TranslationResult,
)
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.trans.interface import HttpTransport
    from models.http_models import HttpResponse
    from models.translation_models import ProviderChain, ProviderConfig, TranslationRequest

__all__: list[str] = ["TranslationOrchestrator"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslationOrchestrator:
    """Tries the enabled providers in priority order and returns the first successful translation.

    The orchestrator holds no per-call state, so one instance may serve concurrent requests.
    Providers are called one after another; a provider is only contacted after every provider
    before it has failed.

    Args:
        chain (ProviderChain): The immutable provider chain built at startup.
        transport (HttpTransport): Transport used for every provider call.
    """

    def __init__(self, chain: ProviderChain, transport: HttpTransport) -> None:
        self.chain: ProviderChain = chain
        self.transport: HttpTransport = transport
        logger.debug("Provider order: %s", chain.identifiers)

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate the request with the first provider that succeeds.

        Args:
            request (TranslationRequest): The caller's request.

        Returns:
            TranslationResult: The translation, with the caller's language codes echoed back.

        Raises:
            InvalidRequestError: If the text is blank or the target language is missing or "auto".
                No provider is contacted in that case.
            AllProvidersFailedError: If every enabled provider failed, or none is enabled.
        """
        self._validate(request)
        target_language: str = (request.target_language or "").strip()
        source_language: str = AUTO_LANGUAGE if request.is_auto_source else request.source_language.strip()

        failures: list[ProviderFailure] = []
        for provider in self.chain.enabled_providers:
            logger.debug(
                "Translation attempt with '%s': '%s' -> '%s'", provider.identifier, source_language, target_language
            )
            outcome: ParsedTranslation | ProviderFailure = await self._attempt(provider, request)
            if isinstance(outcome, ProviderFailure):
                logger.warning("Translation provider failed: %s", outcome)
                failures.append(outcome)
                continue

            logger.debug("Translation succeeded with '%s': '%s'", provider.identifier, outcome.text[:50])
            return TranslationResult(
                translated_text=outcome.text.strip(),
                provider_used=provider.identifier,
                source_language=source_language,
                target_language=target_language,
                detected_source_language=outcome.detected_source_language,
            )

        err = AllProvidersFailedError(failures)
        logger.error("%s", err)
        raise err

    @staticmethod
    def _validate(request: TranslationRequest) -> None:
        if not StringUtils.ensure_str(request.source_text).strip():
            msg = "Text to translate is empty"
            raise InvalidRequestError(msg)

        target: str = StringUtils.ensure_str(request.target_language).strip()
        if not target:
            msg = "Target language is required"
            raise InvalidRequestError(msg)
        if target.lower() == AUTO_LANGUAGE:
            msg = "Target language cannot be 'auto'"
            raise InvalidRequestError(msg)

    async def _attempt(
        self, provider: ProviderConfig, request: TranslationRequest
    ) -> ParsedTranslation | ProviderFailure:
        """Run one provider attempt and return its outcome as a value."""
        try:
            built: HttpRequest | ProviderFailure = provider.request_builder(request)
        except Exception as err:  # noqa: BLE001
            logger.debug("Request builder of '%s' raised", provider.identifier, exc_info=True)
            return ProviderFailure(provider.identifier, FailureReason.MALFORMED_RESPONSE, repr(err))
        if not isinstance(built, HttpRequest):
            return built

        try:
            response: HttpResponse = await self.transport.send(built, timeout=provider.timeout)
        except AsyncCommTimeoutError as err:
            return ProviderFailure(provider.identifier, FailureReason.TIMEOUT, str(err))
        except AsyncCommError as err:
            return ProviderFailure(provider.identifier, FailureReason.CONNECTION_ERROR, str(err))

        if not response.ok:
            body_preview: str = StringUtils.build_body_preview(response.body)
            detail: str = f"HTTP {response.status}" + (f". Body: {body_preview}" if body_preview else "")
            return ProviderFailure(provider.identifier, FailureReason.HTTP_STATUS, detail)

        try:
            parsed: ParsedTranslation | ProviderFailure = provider.response_parser(response)
        except Exception as err:  # noqa: BLE001
            logger.debug("Response parser of '%s' raised", provider.identifier, exc_info=True)
            return ProviderFailure(provider.identifier, FailureReason.MALFORMED_RESPONSE, repr(err))
        if isinstance(parsed, ParsedTranslation) and not parsed.text.strip():
            return ProviderFailure(provider.identifier, FailureReason.EMPTY_TRANSLATION, "translated text is empty")
        return parsed
