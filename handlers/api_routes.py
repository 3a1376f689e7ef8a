"""HTTP API of the translation service.

Routes:
    POST /api/translate: translate text with the provider chain.
    POST /api/detect: guess the language of a text and report simple text statistics.
    GET /api/languages: list the languages offered to callers.

Every response carries CORS headers, and OPTIONS pre-flight requests are answered directly.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any, Final

from aiohttp import web

from core.trans.interface import AllProvidersFailedError, InvalidRequestError
from models.api_models import (
    DetectedLanguageBody,
    DetectRequestBody,
    DetectResponseBody,
    ErrorBody,
    LanguageEntry,
    LanguagesResponseBody,
    TextStatsBody,
    TranslateRequestBody,
    TranslateResponseBody,
)
from models.language_profiles import SUPPORTED_LANGUAGES
from models.translation_models import AUTO_LANGUAGE, TranslationRequest
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from core.detect.detector import LanguageDetector
    from core.trans.orchestrator import TranslationOrchestrator
    from handlers.async_comm import AsyncHttp
    from models.config_models import Config
    from models.language_models import LanguageSignal
    from models.translation_models import TranslationResult

__all__: list[str] = [
    "CONFIG_KEY",
    "DETECTOR_KEY",
    "ORCHESTRATOR_KEY",
    "SERVICE_UNAVAILABLE_MESSAGE",
    "create_app",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

SERVICE_UNAVAILABLE_MESSAGE: Final[str] = "Translation service temporarily unavailable. Please try again."
INVALID_JSON_MESSAGE: Final[str] = "Invalid request body"

CONFIG_KEY: Final[web.AppKey[Config]] = web.AppKey("config")
ORCHESTRATOR_KEY: Final[web.AppKey[TranslationOrchestrator]] = web.AppKey("orchestrator")
DETECTOR_KEY: Final[web.AppKey[LanguageDetector]] = web.AppKey("detector")
TRANSPORT_KEY: Final[web.AppKey[AsyncHttp | None]] = web.AppKey("transport")

type Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error_response(status: int, error: str, details: str | None = None) -> web.Response:
    return web.json_response(ErrorBody(error=error, details=details).to_dict(), status=status)


def _cors_headers(config: Config) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": config.SERVER.ALLOW_ORIGIN,
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Answer pre-flight requests and add CORS headers to every response."""
    headers: dict[str, str] = _cors_headers(request.app[CONFIG_KEY])
    if request.method == "OPTIONS":
        return web.Response(status=200, headers=headers)

    try:
        response: web.StreamResponse = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(headers)
        raise
    response.headers.update(headers)
    return response


async def _read_json_object(request: web.Request) -> dict[str, Any]:
    """Read the request body as a JSON object.

    Raises:
        ValueError: If the body is not a JSON object.
    """
    try:
        data: Any = await request.json()
    except json.JSONDecodeError as err:
        msg = f"Body is not valid JSON: {err.msg}"
        raise ValueError(msg) from err
    if not isinstance(data, dict):
        msg = "Body must be a JSON object"
        raise ValueError(msg)
    return data


def _string_field(data: dict[str, Any], key: str) -> None:
    value: Any = data.get(key)
    if value is not None and not isinstance(value, str):
        msg: str = f"'{key}' must be a string"
        raise ValueError(msg)


async def translate_handler(request: web.Request) -> web.Response:
    try:
        data: dict[str, Any] = await _read_json_object(request)
        for key in ("text", "sourceLang", "targetLang"):
            _string_field(data, key)
    except ValueError as err:
        return _error_response(400, INVALID_JSON_MESSAGE, str(err))

    body: TranslateRequestBody = TranslateRequestBody.from_dict(data, infer_missing=True)
    translation_request = TranslationRequest(
        source_text=body.text or "",
        target_language=body.target_lang,
        source_language=body.source_lang or AUTO_LANGUAGE,
    )

    deadline: float = request.app[CONFIG_KEY].TRANSLATION.REQUEST_DEADLINE
    try:
        async with asyncio.timeout(deadline):
            result: TranslationResult = await request.app[ORCHESTRATOR_KEY].translate(translation_request)
    except InvalidRequestError as err:
        return _error_response(400, "Invalid translation request", str(err))
    except AllProvidersFailedError:
        # The orchestrator has already logged the per-provider diagnostics.
        return _error_response(503, SERVICE_UNAVAILABLE_MESSAGE)
    except TimeoutError:
        logger.error("Translation did not finish within the %.1f second deadline", deadline)
        return _error_response(503, SERVICE_UNAVAILABLE_MESSAGE)

    logger.info("Translated with '%s': '%s' -> '%s'", result.provider_used, result.source_language, result.target_language)
    return web.json_response(TranslateResponseBody.from_result(result).to_dict())


async def detect_handler(request: web.Request) -> web.Response:
    try:
        data: dict[str, Any] = await _read_json_object(request)
        _string_field(data, "text")
    except ValueError as err:
        return _error_response(400, INVALID_JSON_MESSAGE, str(err))

    body: DetectRequestBody = DetectRequestBody.from_dict(data, infer_missing=True)
    text: str = body.text or ""
    signal: LanguageSignal | None = request.app[DETECTOR_KEY].detect(text)
    response = DetectResponseBody(
        detected_language=DetectedLanguageBody.from_signal(signal) if signal else None,
        stats=TextStatsBody.from_stats(StringUtils.text_stats(text)),
    )
    return web.json_response(response.to_dict())


async def languages_handler(request: web.Request) -> web.Response:
    _ = request
    body = LanguagesResponseBody(
        languages=[LanguageEntry(code=code, name=name) for code, name in SUPPORTED_LANGUAGES.items()]
    )
    return web.json_response(body.to_dict())


async def _close_transport(app: web.Application) -> None:
    transport: AsyncHttp | None = app[TRANSPORT_KEY]
    if transport is not None:
        await transport.close()


def create_app(
    config: Config,
    orchestrator: TranslationOrchestrator,
    detector: LanguageDetector,
    *,
    transport: AsyncHttp | None = None,
) -> web.Application:
    """Build the aiohttp application.

    Args:
        config (Config): Loaded configuration.
        orchestrator (TranslationOrchestrator): Orchestrator serving /api/translate.
        detector (LanguageDetector): Detector serving /api/detect.
        transport (AsyncHttp | None): Transport to close when the application shuts down.

    Returns:
        web.Application: The configured application.
    """
    app = web.Application(middlewares=[cors_middleware])
    app[CONFIG_KEY] = config
    app[ORCHESTRATOR_KEY] = orchestrator
    app[DETECTOR_KEY] = detector
    app[TRANSPORT_KEY] = transport

    app.router.add_post("/api/translate", translate_handler)
    app.router.add_post("/api/detect", detect_handler)
    app.router.add_get("/api/languages", languages_handler)
    app.on_cleanup.append(_close_transport)
    return app
