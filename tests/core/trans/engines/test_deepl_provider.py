from __future__ import annotations

import json

import pytest

from core.trans.engines import deepl_provider as deepl_module
from models.config_models import Config
from models.http_models import HttpRequest, HttpResponse
from models.translation_models import FailureReason, ParsedTranslation, ProviderFailure, TranslationRequest


class DummyLanguage:
    ENGLISH = "en"
    ENGLISH_AMERICAN = "en-US"
    ENGLISH_BRITISH = "en-GB"
    GERMAN = "de"
    JAPANESE = "ja"
    NORWEGIAN = "nb"
    INDONESIAN = "id"
    PORTUGUESE_BRAZILIAN = "pt-BR"
    PORTUGUESE_EUROPEAN = "pt-PT"
    CHINESE = "zh"


@pytest.fixture
def config() -> Config:
    config = Config()
    config.DEEPL.API_KEY = "secret-key:fx"
    config.DEEPL.TIMEOUT = 4.0
    return config


@pytest.fixture
def provider(monkeypatch: pytest.MonkeyPatch, config: Config) -> deepl_module.DeeplProvider:
    monkeypatch.setattr(deepl_module, "Language", DummyLanguage)
    return deepl_module.DeeplProvider(config)


def _payload(request: HttpRequest) -> dict:
    assert request.body is not None
    return json.loads(request.body)


def test_registered_under_its_name() -> None:
    assert deepl_module.DeeplProvider.registered["deepl"] is deepl_module.DeeplProvider


def test_disabled_without_api_key() -> None:
    provider = deepl_module.DeeplProvider(Config())

    assert provider.is_enabled is False
    assert provider.to_provider_config(0).enabled is False


def test_provider_config_carries_priority_and_timeout(provider: deepl_module.DeeplProvider) -> None:
    entry = provider.to_provider_config(2)

    assert entry.identifier == "deepl"
    assert entry.priority == 2
    assert entry.enabled is True
    assert entry.timeout == 4.0


def test_langcode_mappings(provider: deepl_module.DeeplProvider) -> None:
    assert provider._target_codes["en"] == "EN-US"
    assert provider._target_codes["en-gb"] == "EN-GB"
    assert provider._target_codes["pt"] == "PT-BR"
    assert provider._target_codes["pt-pt"] == "PT-PT"
    assert provider._target_codes["zh"] == "ZH"
    assert provider._target_codes["zh-tw"] == "ZH"
    assert provider._source_codes["en"] == "EN"
    assert provider._source_codes["zh-cn"] == "ZH"


@pytest.mark.parametrize(
    ("api_key", "url", "endpoint"),
    [
        ("secret-key:fx", "", deepl_module.DEEPL_FREE_URL),
        ("secret-key", "", deepl_module.DEEPL_PRO_URL),
        ("secret-key", "http://localhost:9000/v2/translate", "http://localhost:9000/v2/translate"),
    ],
)
def test_endpoint_selection(
    monkeypatch: pytest.MonkeyPatch, config: Config, api_key: str, url: str, endpoint: str
) -> None:
    monkeypatch.setattr(deepl_module, "Language", DummyLanguage)
    config.DEEPL.API_KEY = api_key
    config.DEEPL.URL = url

    assert deepl_module.DeeplProvider(config).endpoint == endpoint


def test_build_request_with_auto_source(provider: deepl_module.DeeplProvider) -> None:
    outcome = provider.build_request(TranslationRequest("Hello", target_language="ja"))

    assert isinstance(outcome, HttpRequest)
    assert outcome.url == deepl_module.DEEPL_FREE_URL
    assert outcome.method == "POST"
    assert outcome.headers["Authorization"] == "DeepL-Auth-Key secret-key:fx"
    assert _payload(outcome) == {"text": ["Hello"], "target_lang": "JA"}


def test_build_request_applies_aliases(provider: deepl_module.DeeplProvider) -> None:
    outcome = provider.build_request(TranslationRequest("Selamat pagi", target_language="no", source_language="ms"))

    assert isinstance(outcome, HttpRequest)
    assert _payload(outcome) == {"text": ["Selamat pagi"], "target_lang": "NB", "source_lang": "ID"}


def test_base_target_uses_preferred_variant(provider: deepl_module.DeeplProvider) -> None:
    outcome = provider.build_request(TranslationRequest("Hallo", target_language="EN", source_language="de"))

    assert isinstance(outcome, HttpRequest)
    assert _payload(outcome)["target_lang"] == "EN-US"
    assert _payload(outcome)["source_lang"] == "DE"


@pytest.mark.parametrize(("target", "source"), [("xx", "auto"), ("de", "xx")])
def test_unsupported_language_fails_locally(provider: deepl_module.DeeplProvider, target: str, source: str) -> None:
    outcome = provider.build_request(TranslationRequest("Hello", target_language=target, source_language=source))

    assert isinstance(outcome, ProviderFailure)
    assert outcome.provider == "deepl"
    assert outcome.reason == FailureReason.UNSUPPORTED_LANGUAGE


def test_parse_response_success(provider: deepl_module.DeeplProvider) -> None:
    body = {"translations": [{"detected_source_language": "EN", "text": "こんにちは"}]}

    outcome = provider.parse_response(HttpResponse(200, json.dumps(body), "application/json"))

    assert outcome == ParsedTranslation(text="こんにちは", detected_source_language="en")


def test_parse_response_maps_detected_alias_back(provider: deepl_module.DeeplProvider) -> None:
    body = {"translations": [{"detected_source_language": "NB", "text": "Hello"}]}

    outcome = provider.parse_response(HttpResponse(200, json.dumps(body)))

    assert isinstance(outcome, ParsedTranslation)
    assert outcome.detected_source_language == "no"


def test_parse_response_ignores_non_string_detected_language(provider: deepl_module.DeeplProvider) -> None:
    body = {"translations": [{"detected_source_language": 5, "text": "hola"}]}

    outcome = provider.parse_response(HttpResponse(200, json.dumps(body)))

    assert outcome == ParsedTranslation(text="hola", detected_source_language=None)


def test_parse_response_embedded_error(provider: deepl_module.DeeplProvider) -> None:
    outcome = provider.parse_response(HttpResponse(200, json.dumps({"message": "Quota exceeded"})))

    assert isinstance(outcome, ProviderFailure)
    assert outcome.reason == FailureReason.EMBEDDED_ERROR
    assert outcome.detail == "Quota exceeded"


@pytest.mark.parametrize(
    "body",
    [
        "<html>gateway</html>",
        "[]",
        "{}",
        '{"translations": []}',
        '{"translations": [{"language": "EN"}]}',
        '{"translations": [{"text": 42}]}',
        '{"translations": "text"}',
    ],
)
def test_parse_response_malformed(provider: deepl_module.DeeplProvider, body: str) -> None:
    outcome = provider.parse_response(HttpResponse(200, body))

    assert isinstance(outcome, ProviderFailure)
    assert outcome.reason == FailureReason.MALFORMED_RESPONSE
