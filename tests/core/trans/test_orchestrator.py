"""Unit tests for core.trans.orchestrator module."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from core.trans.interface import AllProvidersFailedError, InvalidRequestError
from core.trans.orchestrator import TranslationOrchestrator
from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError
from models.http_models import HttpRequest, HttpResponse
from models.translation_models import (
    FailureReason,
    ParsedTranslation,
    ProviderChain,
    ProviderConfig,
    ProviderFailure,
    TranslationRequest,
)

if TYPE_CHECKING:
    from models.translation_models import BuildOutcome, ParseOutcome


class DummyTransport:
    """Transport returning scripted responses keyed by URL."""

    def __init__(self, responses: dict[str, HttpResponse | Exception] | None = None) -> None:
        self.responses: dict[str, HttpResponse | Exception] = responses or {}
        self.calls: list[tuple[HttpRequest, float]] = []

    async def send(self, request: HttpRequest, *, timeout: float) -> HttpResponse:  # noqa: ASYNC109
        self.calls.append((request, timeout))
        outcome: HttpResponse | Exception = self.responses.get(request.url, HttpResponse(status=404))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def called_urls(self) -> list[str]:
        return [request.url for request, _ in self.calls]


def _json_parser(name: str):
    def parse(response: HttpResponse) -> ParseOutcome:
        try:
            data = response.json()
        except json.JSONDecodeError:
            return ProviderFailure(name, FailureReason.MALFORMED_RESPONSE, "not json")
        return ParsedTranslation(text=data.get("text", ""), detected_source_language=data.get("detected"))

    return parse


def _provider(name: str, priority: int, *, enabled: bool = True, timeout: float = 5.0) -> ProviderConfig:
    def build(request: TranslationRequest) -> BuildOutcome:
        return HttpRequest(url=f"https://{name}.test/translate", body=request.source_text)

    return ProviderConfig(
        identifier=name,
        priority=priority,
        enabled=enabled,
        request_builder=build,
        response_parser=_json_parser(name),
        timeout=timeout,
    )


def _ok(text: str, detected: str | None = None) -> HttpResponse:
    body: dict[str, str] = {"text": text}
    if detected:
        body["detected"] = detected
    return HttpResponse(status=200, body=json.dumps(body), content_type="application/json")


def _request(text: str = "Hello", target: str | None = "es", source: str = "auto") -> TranslationRequest:
    return TranslationRequest(source_text=text, target_language=target, source_language=source)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_text_is_rejected_without_provider_call(text: str) -> None:
    transport = DummyTransport({"https://p1.test/translate": _ok("hola")})
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0),)), transport)

    with pytest.raises(InvalidRequestError):
        await orchestrator.translate(_request(text=text))

    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("target", [None, "", "  ", "auto", "AUTO"])
async def test_missing_target_language_is_rejected(target: str | None) -> None:
    transport = DummyTransport({"https://p1.test/translate": _ok("hola")})
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0),)), transport)

    with pytest.raises(InvalidRequestError):
        await orchestrator.translate(_request(target=target))

    assert transport.calls == []


@pytest.mark.asyncio
async def test_first_provider_success_short_circuits() -> None:
    transport = DummyTransport(
        {
            "https://p1.test/translate": _ok("hola", detected="en"),
            "https://p2.test/translate": _ok("should not be used"),
        }
    )
    chain = ProviderChain((_provider("p2", 1), _provider("p1", 0)))
    orchestrator = TranslationOrchestrator(chain, transport)

    result = await orchestrator.translate(_request())

    assert result.provider_used == "p1"
    assert result.translated_text == "hola"
    assert result.detected_source_language == "en"
    assert transport.called_urls() == ["https://p1.test/translate"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("first_response", "reason"),
    [
        (HttpResponse(status=500, body="internal error"), FailureReason.HTTP_STATUS),
        (HttpResponse(status=200, body="<html>oops</html>"), FailureReason.MALFORMED_RESPONSE),
        (_ok("   "), FailureReason.EMPTY_TRANSLATION),
        (AsyncCommTimeoutError("timed out"), FailureReason.TIMEOUT),
        (AsyncCommError("refused"), FailureReason.CONNECTION_ERROR),
    ],
)
async def test_falls_back_to_next_provider(first_response: HttpResponse | Exception, reason: FailureReason) -> None:
    transport = DummyTransport(
        {
            "https://p1.test/translate": first_response,
            "https://p2.test/translate": _ok("hola"),
        }
    )
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0), _provider("p2", 1))), transport)

    result = await orchestrator.translate(_request())

    assert result.provider_used == "p2"
    assert result.translated_text == "hola"
    assert transport.called_urls() == ["https://p1.test/translate", "https://p2.test/translate"]


@pytest.mark.asyncio
async def test_all_failures_are_reported_in_order(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    transport = DummyTransport(
        {
            "https://p1.test/translate": HttpResponse(status=503, body="busy"),
            "https://p2.test/translate": AsyncCommTimeoutError("timed out"),
        }
    )
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0), _provider("p2", 1))), transport)

    with pytest.raises(AllProvidersFailedError) as exc_info:
        await orchestrator.translate(_request())

    failures = exc_info.value.failures
    assert [(f.provider, f.reason) for f in failures] == [
        ("p1", FailureReason.HTTP_STATUS),
        ("p2", FailureReason.TIMEOUT),
    ]
    assert "503" in failures[0].detail
    assert "busy" in failures[0].detail
    assert any(rec.levelno == logging.ERROR and "p1" in rec.getMessage() for rec in caplog.records)


@pytest.mark.asyncio
async def test_disabled_providers_are_skipped_silently() -> None:
    transport = DummyTransport({"https://p2.test/translate": HttpResponse(status=500)})
    chain = ProviderChain((_provider("p1", 0, enabled=False), _provider("p2", 1)))
    orchestrator = TranslationOrchestrator(chain, transport)

    with pytest.raises(AllProvidersFailedError) as exc_info:
        await orchestrator.translate(_request())

    assert [f.provider for f in exc_info.value.failures] == ["p2"]
    assert transport.called_urls() == ["https://p2.test/translate"]


@pytest.mark.asyncio
async def test_no_enabled_provider_fails_with_empty_diagnostics() -> None:
    transport = DummyTransport()
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0, enabled=False),)), transport)

    with pytest.raises(AllProvidersFailedError) as exc_info:
        await orchestrator.translate(_request())

    assert exc_info.value.failures == ()
    assert transport.calls == []


@pytest.mark.asyncio
async def test_builder_failure_skips_network_call() -> None:
    def refuse(request: TranslationRequest) -> BuildOutcome:
        return ProviderFailure("picky", FailureReason.UNSUPPORTED_LANGUAGE, f"no {request.target_language}")

    picky = ProviderConfig(
        identifier="picky",
        priority=0,
        enabled=True,
        request_builder=refuse,
        response_parser=_json_parser("picky"),
    )
    transport = DummyTransport({"https://p2.test/translate": _ok("hola")})
    orchestrator = TranslationOrchestrator(ProviderChain((picky, _provider("p2", 1))), transport)

    result = await orchestrator.translate(_request())

    assert result.provider_used == "p2"
    assert transport.called_urls() == ["https://p2.test/translate"]


@pytest.mark.asyncio
async def test_provider_timeout_is_passed_to_transport() -> None:
    transport = DummyTransport({"https://p1.test/translate": _ok("hola")})
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0, timeout=2.5),)), transport)

    await orchestrator.translate(_request())

    assert transport.calls[0][1] == 2.5


@pytest.mark.asyncio
async def test_result_echoes_caller_language_codes() -> None:
    def aliasing_builder(request: TranslationRequest) -> BuildOutcome:
        # Outbound alias, as a provider would apply it.
        target = {"no": "nb"}.get(request.target_language or "", request.target_language)
        return HttpRequest(url="https://alias.test/translate", body=f"{request.source_text}|{target}")

    provider = ProviderConfig(
        identifier="alias",
        priority=0,
        enabled=True,
        request_builder=aliasing_builder,
        response_parser=_json_parser("alias"),
    )
    transport = DummyTransport({"https://alias.test/translate": _ok("hei")})
    orchestrator = TranslationOrchestrator(ProviderChain((provider,)), transport)

    result = await orchestrator.translate(_request(target="no", source="en"))

    assert transport.calls[0][0].body == "Hello|nb"
    assert result.target_language == "no"
    assert result.source_language == "en"


@pytest.mark.asyncio
async def test_blank_source_language_is_reported_as_auto() -> None:
    transport = DummyTransport({"https://p1.test/translate": _ok("  hola  ")})
    orchestrator = TranslationOrchestrator(ProviderChain((_provider("p1", 0),)), transport)

    result = await orchestrator.translate(_request(source=""))

    assert result.source_language == "auto"
    assert result.translated_text == "hola"


@pytest.mark.asyncio
async def test_raising_parser_falls_back_to_next_provider() -> None:
    def explode(response: HttpResponse) -> ParseOutcome:
        raise AttributeError(response.body)

    fragile = ProviderConfig(
        identifier="fragile",
        priority=0,
        enabled=True,
        request_builder=lambda request: HttpRequest(url="https://fragile.test/translate"),
        response_parser=explode,
    )
    transport = DummyTransport(
        {
            "https://fragile.test/translate": _ok("hola"),
            "https://p2.test/translate": _ok("hola"),
        }
    )
    orchestrator = TranslationOrchestrator(ProviderChain((fragile, _provider("p2", 1))), transport)

    result = await orchestrator.translate(_request())

    assert result.provider_used == "p2"
    assert transport.called_urls() == ["https://fragile.test/translate", "https://p2.test/translate"]


@pytest.mark.asyncio
async def test_raising_builder_and_parser_are_reported_as_malformed() -> None:
    def broken_builder(request: TranslationRequest) -> BuildOutcome:
        raise KeyError(request.target_language)

    def broken_parser(response: HttpResponse) -> ParseOutcome:
        raise TypeError("unexpected payload")

    chain = ProviderChain(
        (
            ProviderConfig("builder", 0, True, broken_builder, _json_parser("builder")),
            ProviderConfig(
                "parser",
                1,
                True,
                lambda request: HttpRequest(url="https://parser.test/translate"),
                broken_parser,
            ),
        )
    )
    transport = DummyTransport({"https://parser.test/translate": _ok("hola")})
    orchestrator = TranslationOrchestrator(chain, transport)

    with pytest.raises(AllProvidersFailedError) as exc_info:
        await orchestrator.translate(_request())

    failures = exc_info.value.failures
    assert [(f.provider, f.reason) for f in failures] == [
        ("builder", FailureReason.MALFORMED_RESPONSE),
        ("parser", FailureReason.MALFORMED_RESPONSE),
    ]
    assert failures[0].detail == "KeyError('es')"
    assert failures[1].detail == "TypeError('unexpected payload')"
    assert transport.called_urls() == ["https://parser.test/translate"]
