from __future__ import annotations

import json
from json import JSONDecodeError
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Final

from deepl import Language
from deepl.util import auth_key_is_free_account

from core.trans.interface import ProviderInterface
from models.http_models import HttpRequest
from models.translation_models import FailureReason, ParsedTranslation
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config
    from models.http_models import HttpResponse
    from models.translation_models import BuildOutcome, ParseOutcome, TranslationRequest

__all__: list[str] = ["DeeplProvider"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEEPL_FREE_URL: Final[str] = "https://api-free.deepl.com/v2/translate"
DEEPL_PRO_URL: Final[str] = "https://api.deepl.com/v2/translate"

# Regional variant used when the caller only gives the base language as target.
PREFERRED_TARGETS: Final[Mapping[str, str]] = MappingProxyType({"en": "EN-US", "pt": "PT-BR", "zh": "ZH"})


class DeeplProvider(ProviderInterface):
    """DeepL REST API provider.

    Enabled only when a DeepL authentication key is configured. Keys of free accounts end with
    ":fx" and are routed to the free endpoint.
    """

    aliases: ClassVar[Mapping[str, str]] = MappingProxyType({"no": "nb", "ms": "id"})

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._source_codes: dict[str, str] = {}
        self._target_codes: dict[str, str] = {}
        self._generate_langcode_mappings()

    @staticmethod
    def fetch_engine_name() -> str:
        return "deepl"

    def _generate_langcode_mappings(self) -> None:
        """Generate language code mappings for DeepL source and target codes.

        The mappings are built from the Language constants of the DeepL library. Source codes are
        always the upper-case base language. Target codes accept both the base language, which
        resolves to the preferred regional variant, and the full regional code.
        """
        language_constants: dict[str, str] = self._get_language_constants(Language)

        for code in language_constants.values():
            base_code: str = code.split("-")[0].lower()
            self._source_codes[base_code] = base_code.upper()
            self._target_codes.setdefault(base_code, code.upper())
            self._target_codes[code.lower()] = code.upper()

        for base_code, preferred in PREFERRED_TARGETS.items():
            if base_code in self._target_codes:
                self._target_codes[base_code] = preferred

        # DeepL uses a unified 'ZH' source code for every Chinese variant.
        if "zh" in self._source_codes:
            for zh_variant in ("zh-cn", "zh-tw"):
                self._source_codes[zh_variant] = "ZH"
                self._target_codes.setdefault(zh_variant, "ZH")

        logger.debug("Language code mapping generated for DeepL.")

    def _get_language_constants(self, cls) -> dict[str, str]:
        """Get the upper-case string constants of the given class."""
        return {name: value for name, value in vars(cls).items() if isinstance(value, str) and name.isupper()}

    @property
    def is_enabled(self) -> bool:
        return bool(self.settings.API_KEY)

    @property
    def endpoint(self) -> str:
        if self.settings.URL:
            return self.settings.URL
        return DEEPL_FREE_URL if auth_key_is_free_account(self.settings.API_KEY) else DEEPL_PRO_URL

    def build_request(self, request: TranslationRequest) -> BuildOutcome:
        target_lang: str | None = self._target_codes.get(self.outbound_code(request.target_language or "").lower())
        if target_lang is None:
            return self.failure(
                FailureReason.UNSUPPORTED_LANGUAGE, f"target language '{request.target_language}' is not supported"
            )

        payload: dict[str, Any] = {"text": [request.source_text], "target_lang": target_lang}
        # DeepL rejects an explicit 'auto' source; omitting the field lets it detect the language.
        if not request.is_auto_source:
            source_lang: str | None = self._source_codes.get(self.outbound_code(request.source_language).lower())
            if source_lang is None:
                return self.failure(
                    FailureReason.UNSUPPORTED_LANGUAGE, f"source language '{request.source_language}' is not supported"
                )
            payload["source_lang"] = source_lang

        return HttpRequest(
            url=self.endpoint,
            method="POST",
            headers={
                "Authorization": f"DeepL-Auth-Key {self.settings.API_KEY}",
                "Content-Type": "application/json",
            },
            body=json.dumps(payload, ensure_ascii=False),
        )

    def parse_response(self, response: HttpResponse) -> ParseOutcome:
        try:
            data: Any = response.json()
        except JSONDecodeError as err:
            return self.malformed(f"response is not JSON: {err}")

        if not isinstance(data, dict):
            return self.malformed("response is not a JSON object")

        translations: Any = data.get("translations")
        if not translations:
            if data.get("message"):
                return self.failure(FailureReason.EMBEDDED_ERROR, str(data["message"]))
            return self.malformed("'translations' is missing or empty")

        try:
            first: dict[str, Any] = translations[0]
            text: Any = first["text"]
        except (IndexError, KeyError, TypeError) as err:
            return self.malformed(f"invalid translation entry: {err!r}")

        if not isinstance(text, str):
            return self.malformed("translated text is not a string")

        return ParsedTranslation(
            text=text,
            detected_source_language=self.inbound_code(first.get("detected_source_language")),
        )
