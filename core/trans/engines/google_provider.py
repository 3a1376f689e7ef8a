"""Google Translate web endpoint provider.

Talks to the same batchexecute RPC the translate.google.com web client uses.

Note:
    The RPC response format is undocumented and may change without notice. Any deviation is
    reported as a malformed response so that the next provider is tried.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Final
from urllib.parse import quote, urlsplit

from core.trans.engines.const_google import LANGUAGES
from core.trans.interface import ProviderInterface
from models.http_models import HttpRequest
from models.translation_models import AUTO_LANGUAGE, FailureReason, ParsedTranslation
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.http_models import HttpResponse
    from models.translation_models import BuildOutcome, ParseOutcome, TranslationRequest

__all__: list[str] = ["GoogleProvider"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

RPC_ID: Final[str] = "MkEWBc"
RPC_PATH: Final[str] = "/_/TranslateWebserverUi/data/batchexecute"
UNDETERMINED: Final[str] = "und"


class GoogleProvider(ProviderInterface):
    aliases: ClassVar[Mapping[str, str]] = MappingProxyType({"he": "iw", "zh": "zh-CN"})

    @staticmethod
    def fetch_engine_name() -> str:
        return "google"

    @property
    def is_enabled(self) -> bool:
        return bool(self.settings.URL)

    @property
    def endpoint(self) -> str:
        return self.settings.URL.rstrip("/") + RPC_PATH

    def build_request(self, request: TranslationRequest) -> BuildOutcome:
        lang_tgt: str | None = self._check_langcode(self.outbound_code(request.target_language or ""))
        if lang_tgt is None:
            return self.failure(
                FailureReason.UNSUPPORTED_LANGUAGE, f"target language '{request.target_language}' is not supported"
            )

        lang_src: str | None = AUTO_LANGUAGE
        if not request.is_auto_source:
            lang_src = self._check_langcode(self.outbound_code(request.source_language))
            if lang_src is None:
                return self.failure(
                    FailureReason.UNSUPPORTED_LANGUAGE, f"source language '{request.source_language}' is not supported"
                )

        return HttpRequest(
            url=self.endpoint,
            method="POST",
            headers=self._build_headers(),
            body=self._package_rpc(request.source_text, lang_src, lang_tgt),
        )

    @staticmethod
    def _check_langcode(lang: str) -> str | None:
        for code in LANGUAGES:
            if lang.lower() == code.lower():
                return code
        return None

    @staticmethod
    def _package_rpc(text: str, lang_src: str, lang_tgt: str) -> str:
        parameter: list[list[str | int | bool]] = [[text.strip(), lang_src, lang_tgt, True], [1]]
        escaped_parameter: str = json.dumps(parameter, separators=(",", ":"))
        rpc: list[list[list[str | None]]] = [[[RPC_ID, escaped_parameter, None, "generic"]]]
        escaped_rpc: str = json.dumps(rpc, separators=(",", ":"))
        return f"f.req={quote(escaped_rpc)}&"

    def _build_headers(self) -> dict[str, str]:
        parts = urlsplit(self.settings.URL)
        return {
            "Referer": f"{parts.scheme or 'https'}://{parts.netloc}/",
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
            ),
            "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
        }

    def parse_response(self, response: HttpResponse) -> ParseOutcome:
        for line in response.body.splitlines():
            if RPC_ID not in line:
                continue

            logger.debug(line)
            try:
                decoded_data: Any = json.loads(json.loads(line)[0][2])
                detect_lang: Any = decoded_data[1][3]
                trans_info: Any = decoded_data[1][0]
            except JSONDecodeError:
                return self.malformed("failed to decode response")
            except (IndexError, KeyError, TypeError):
                return self.malformed("invalid response format")

            try:
                if len(trans_info) == 1:
                    return self._handle_single_translation(trans_info, detect_lang)
                if len(trans_info) == 2:
                    return self._handle_multiple_translations(trans_info, detect_lang)
            except (IndexError, KeyError, TypeError):
                return self.malformed("invalid format for sentences")
            return self.malformed(f"unexpected number of translation entries: {len(trans_info)}")

        return self.malformed("unknown response format")

    def _handle_single_translation(self, trans_info: Any, detect_lang: Any) -> ParseOutcome:
        if len(trans_info[0]) > 5:
            sentences: Any = trans_info[0][5]
            translate_text: str = " ".join(self._as_text(sentence[0]).strip() for sentence in sentences)
            return ParsedTranslation(text=translate_text, detected_source_language=self._detected(detect_lang))

        # Input recognised as a URL comes back untranslated and without a detected language.
        return ParsedTranslation(text=self._as_text(trans_info[0][0]))

    def _handle_multiple_translations(self, trans_info: Any, detect_lang: Any) -> ParseOutcome:
        return ParsedTranslation(
            text=" ".join(self._as_text(i[0]) for i in trans_info),
            detected_source_language=self._detected(detect_lang),
        )

    @staticmethod
    def _as_text(value: Any) -> str:
        if not isinstance(value, str):
            msg: str = f"'{type(value)}' is an unsupported type"
            raise TypeError(msg)
        return value

    def _detected(self, detect_lang: Any) -> str | None:
        if not isinstance(detect_lang, str) or detect_lang.lower() in (UNDETERMINED, AUTO_LANGUAGE):
            return None
        return self.inbound_code(detect_lang)
