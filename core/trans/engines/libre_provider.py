from __future__ import annotations

import json
from json import JSONDecodeError
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from core.trans.interface import ProviderInterface
from models.http_models import HttpRequest
from models.translation_models import AUTO_LANGUAGE, FailureReason, ParsedTranslation
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.http_models import HttpResponse
    from models.translation_models import BuildOutcome, ParseOutcome, TranslationRequest

__all__: list[str] = ["LibreTranslateProvider"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class LibreTranslateProvider(ProviderInterface):
    """LibreTranslate provider.

    Enabled whenever a service URL is configured. Public instances may require an API key, which
    is sent only when one is configured. The service accepts "auto" as source language.
    """

    aliases: ClassVar[Mapping[str, str]] = MappingProxyType({"no": "nb"})

    @staticmethod
    def fetch_engine_name() -> str:
        return "libretranslate"

    @property
    def is_enabled(self) -> bool:
        return bool(self.settings.URL)

    def build_request(self, request: TranslationRequest) -> BuildOutcome:
        payload: dict[str, Any] = {
            "q": request.source_text,
            "source": AUTO_LANGUAGE if request.is_auto_source else self.outbound_code(request.source_language),
            "target": self.outbound_code(request.target_language or ""),
            "format": "text",
        }
        if self.settings.API_KEY:
            payload["api_key"] = self.settings.API_KEY

        return HttpRequest(
            url=self.settings.URL,
            method="POST",
            headers={"Content-Type": "application/json"},
            body=json.dumps(payload, ensure_ascii=False),
        )

    def parse_response(self, response: HttpResponse) -> ParseOutcome:
        try:
            data: Any = response.json()
        except JSONDecodeError as err:
            return self.malformed(f"response is not JSON: {err}")

        if not isinstance(data, dict):
            return self.malformed("response is not a JSON object")

        # Some deployments report errors with a 200 status and an 'error' field.
        if data.get("error"):
            return self.failure(FailureReason.EMBEDDED_ERROR, str(data["error"]))

        text: Any = data.get("translatedText")
        if text is None:
            return self.malformed("'translatedText' is missing")
        if not isinstance(text, str):
            return self.malformed("'translatedText' is not a string")

        return ParsedTranslation(text=text, detected_source_language=self._detected_language(data))

    def _detected_language(self, data: dict[str, Any]) -> str | None:
        detected: Any = data.get("detectedLanguage")
        if isinstance(detected, dict):
            detected = detected.get("language")
        if not isinstance(detected, str):
            return None
        return self.inbound_code(detected)
