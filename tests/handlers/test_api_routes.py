"""Unit tests for handlers.api_routes module."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, ClassVar, cast

import pytest
from aiohttp.test_utils import TestClient, TestServer

from core.detect.detector import LanguageDetector
from core.trans.interface import AllProvidersFailedError, InvalidRequestError
from handlers.api_routes import INVALID_JSON_MESSAGE, SERVICE_UNAVAILABLE_MESSAGE, create_app
from models.config_models import Config
from models.language_profiles import SUPPORTED_LANGUAGES
from models.translation_models import FailureReason, ProviderFailure, TranslationRequest, TranslationResult

if TYPE_CHECKING:
    from aiohttp import web

    from core.trans.orchestrator import TranslationOrchestrator

ORIGIN = "https://app.example.com"


class DummyOrchestrator:
    """Orchestrator stand-in whose outcome is scripted per test."""

    result: ClassVar[TranslationResult] = TranslationResult(
        translated_text="Hola",
        provider_used="deepl",
        source_language="auto",
        target_language="es",
        detected_source_language="en",
    )
    error: ClassVar[Exception | None] = None
    delay: ClassVar[float] = 0.0
    requests: ClassVar[list[TranslationRequest]] = []

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        type(self).requests.append(request)
        if type(self).delay:
            await asyncio.sleep(type(self).delay)
        if type(self).error is not None:
            raise type(self).error
        return type(self).result


class DummyTransport:
    closed: ClassVar[bool] = False

    async def close(self) -> None:
        type(self).closed = True


@pytest.fixture(autouse=True)
def reset_dummies() -> None:
    DummyOrchestrator.result = TranslationResult(
        translated_text="Hola",
        provider_used="deepl",
        source_language="auto",
        target_language="es",
        detected_source_language="en",
    )
    DummyOrchestrator.error = None
    DummyOrchestrator.delay = 0.0
    DummyOrchestrator.requests = []
    DummyTransport.closed = False


def _app(deadline: float = 5.0) -> web.Application:
    config = Config()
    config.SERVER.ALLOW_ORIGIN = ORIGIN
    config.TRANSLATION.REQUEST_DEADLINE = deadline
    return create_app(
        config,
        cast("TranslationOrchestrator", DummyOrchestrator()),
        LanguageDetector(),
        transport=cast("Any", DummyTransport()),
    )


@pytest.mark.asyncio
async def test_translate_success() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", json={"text": "Hello", "targetLang": "es"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 200
    assert body == {
        "translation": "Hola",
        "sourceLang": "auto",
        "targetLang": "es",
        "provider": "deepl",
        "detectedLanguage": "en",
    }
    assert DummyOrchestrator.requests == [TranslationRequest("Hello", target_language="es", source_language="auto")]


@pytest.mark.asyncio
async def test_translate_omits_missing_detected_language() -> None:
    DummyOrchestrator.result = TranslationResult("Hallo", "libretranslate", "en", "de")

    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", json={"text": "Hello", "sourceLang": "en", "targetLang": "de"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 200
    assert "detectedLanguage" not in body
    assert body["sourceLang"] == "en"
    assert DummyOrchestrator.requests[0].source_language == "en"


@pytest.mark.asyncio
async def test_null_source_language_means_auto() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", json={"text": "Hello", "sourceLang": None, "targetLang": "es"})

    assert resp.status == 200
    assert DummyOrchestrator.requests[0].source_language == "auto"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["not json", "[1, 2]", '{"text": 5, "targetLang": "es"}', ""])
async def test_translate_rejects_bad_body(payload: str) -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", data=payload, headers={"Content-Type": "application/json"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 400
    assert body["error"] == INVALID_JSON_MESSAGE
    assert body["details"]
    assert DummyOrchestrator.requests == []


@pytest.mark.asyncio
async def test_translate_invalid_request() -> None:
    DummyOrchestrator.error = InvalidRequestError("Target language is required")

    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", json={"text": "Hello"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 400
    assert body == {"error": "Invalid translation request", "details": "Target language is required"}


@pytest.mark.asyncio
async def test_translate_all_providers_failed_hides_diagnostics() -> None:
    DummyOrchestrator.error = AllProvidersFailedError(
        [ProviderFailure("deepl", FailureReason.HTTP_STATUS, "HTTP 403. Body: secret-key rejected")]
    )

    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/translate", json={"text": "Hello", "targetLang": "es"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 503
    assert body == {"error": SERVICE_UNAVAILABLE_MESSAGE}


@pytest.mark.asyncio
async def test_translate_deadline() -> None:
    DummyOrchestrator.delay = 1.0

    async with TestClient(TestServer(_app(deadline=0.05))) as client:
        resp = await client.post("/api/translate", json={"text": "Hello", "targetLang": "es"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 503
    assert body == {"error": SERVICE_UNAVAILABLE_MESSAGE}


@pytest.mark.asyncio
async def test_cors_headers_and_preflight() -> None:
    async with TestClient(TestServer(_app())) as client:
        preflight = await client.options("/api/translate")
        resp = await client.get("/api/languages")
        missing = await client.get("/api/unknown")

    assert preflight.status == 200
    assert preflight.headers["Access-Control-Allow-Origin"] == ORIGIN
    assert "POST" in preflight.headers["Access-Control-Allow-Methods"]
    assert preflight.headers["Access-Control-Allow-Headers"] == "Content-Type"
    assert resp.headers["Access-Control-Allow-Origin"] == ORIGIN
    assert missing.status == 404
    assert missing.headers["Access-Control-Allow-Origin"] == ORIGIN


@pytest.mark.asyncio
async def test_detect() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/detect", json={"text": "El perro come la comida en la casa"})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 200
    assert body == {
        "detectedLanguage": {"code": "es", "name": "Spanish", "confidence": 0.5, "label": "Medium"},
        "stats": {"words": 8, "characters": 34, "sentences": 0, "readingTime": "1 min"},
    }


@pytest.mark.asyncio
async def test_detect_unknown_text_returns_null() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/detect", json={"text": "  "})
        body: dict[str, Any] = await resp.json()

    assert resp.status == 200
    assert body["detectedLanguage"] is None
    assert body["stats"] == {"words": 0, "characters": 2, "sentences": 0, "readingTime": "< 1 min"}


@pytest.mark.asyncio
async def test_detect_rejects_bad_body() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.post("/api/detect", json={"text": ["a", "b"]})

    assert resp.status == 400


@pytest.mark.asyncio
async def test_languages() -> None:
    async with TestClient(TestServer(_app())) as client:
        resp = await client.get("/api/languages")
        body: dict[str, Any] = await resp.json()

    assert resp.status == 200
    assert len(body["languages"]) == len(SUPPORTED_LANGUAGES)
    assert body["languages"][0] == {"code": "en", "name": "English"}
    assert {"code": "ig", "name": "Igbo (Nigeria)"} in body["languages"]


@pytest.mark.asyncio
async def test_transport_closed_on_cleanup() -> None:
    async with TestClient(TestServer(_app())) as client:
        await client.get("/api/languages")
        assert DummyTransport.closed is False

    assert DummyTransport.closed is True
