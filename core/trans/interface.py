"""Abstract base class for translation providers, the transport protocol and the error taxonomy.

A provider never performs I/O itself. It shapes an HttpRequest for its backend and parses the
HttpResponse the transport brings back; both steps report problems as ProviderFailure values
so that the orchestrator's fallback loop is driven by data, not by exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Protocol

from models.translation_models import FailureReason, ProviderConfig, ProviderFailure
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config, ProviderSection
    from models.http_models import HttpRequest, HttpResponse
    from models.translation_models import BuildOutcome, ParseOutcome, TranslationRequest

__all__: list[str] = [
    "AllProvidersFailedError",
    "HttpTransport",
    "InvalidRequestError",
    "ProviderInterface",
    "TranslateExceptionError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class InvalidRequestError(TranslateExceptionError):
    """The caller's request was rejected before any provider was contacted."""


class AllProvidersFailedError(TranslateExceptionError):
    """Every enabled provider failed, or no provider is enabled.

    Attributes:
        failures (tuple[ProviderFailure, ...]): One entry per attempted provider, in attempt order.
    """

    def __init__(self, failures: tuple[ProviderFailure, ...] | list[ProviderFailure] = ()) -> None:
        self.failures: tuple[ProviderFailure, ...] = tuple(failures)
        if self.failures:
            msg: str = "All translation providers failed: " + "; ".join(str(f) for f in self.failures)
        else:
            msg = "No translation provider is enabled"
        super().__init__(msg)


class HttpTransport(Protocol):
    """Sends one HTTP request and returns the status code and raw body.

    Implementations raise AsyncCommTimeoutError on timeout and AsyncCommError on any other
    transport failure. Non-2xx responses are returned, not raised.
    """

    async def send(self, request: HttpRequest, *, timeout: float) -> HttpResponse: ...  # noqa: ASYNC109


class ProviderInterface(ABC):
    """Abstract base class for translation providers.

    Subclasses are registered under their distinguished name when they are defined, which lets the
    configuration refer to providers by name.

    Attributes:
        registered (ClassVar[dict[str, type[ProviderInterface]]]): Registered provider classes, keyed by name.
        aliases (ClassVar[Mapping[str, str]]): Outbound language code substitutions for this backend.
    """

    registered: ClassVar[dict[str, type[ProviderInterface]]] = {}
    aliases: ClassVar[Mapping[str, str]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs) -> None:
        """Register the subclass under its distinguished name.

        Args:
            **kwargs: Additional keyword arguments passed to parent class.

        Raises:
            TypeError: If the subclass does not provide fetch_engine_name().
            ValueError: If a provider with the same name is already registered.
        """
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_engine_name") or not callable(cls.fetch_engine_name):
            msg = "Subclasses of ProviderInterface must implement the static method fetch_engine_name()."
            raise TypeError(msg)

        name = cls.fetch_engine_name()
        if not isinstance(name, str) or name == "":
            return  # Nameless helper classes are allowed but not registered.

        if name in cls.registered:
            msg: str = f"A translation provider with the name '{name}' is already registered."
            raise ValueError(msg)

        cls.registered[name] = cls

    def __init__(self, config: Config) -> None:
        """Bind the provider to its configuration section.

        Args:
            config (Config): Application configuration. The section named after the provider is used.
        """
        self.settings: ProviderSection = getattr(config, self.fetch_engine_name().upper())
        self._reverse_aliases: dict[str, str] = {v.lower(): k for k, v in self.aliases.items()}

    @property
    def name(self) -> str:
        return self.fetch_engine_name()

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished name of the provider.

        This method is called during class registration in __init_subclass__, so the implementation
        must be available at subclass definition time.

        Returns:
            str: The distinguished name of the provider.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether the required credential or setting is present."""
        raise NotImplementedError

    @abstractmethod
    def build_request(self, request: TranslationRequest) -> BuildOutcome:
        """Shape the outbound request for this backend.

        Args:
            request (TranslationRequest): A validated translation request.

        Returns:
            BuildOutcome: The HttpRequest to send, or a ProviderFailure if the request cannot be served.
        """
        raise NotImplementedError

    @abstractmethod
    def parse_response(self, response: HttpResponse) -> ParseOutcome:
        """Parse a 2xx response of this backend.

        Args:
            response (HttpResponse): The response returned by the transport.

        Returns:
            ParseOutcome: The parsed translation, or a ProviderFailure describing what was wrong.
        """
        raise NotImplementedError

    @property
    def timeout(self) -> float:
        return self.settings.TIMEOUT

    def outbound_code(self, code: str) -> str:
        """Map a caller language code to the code this backend expects."""
        code = code.strip()
        return self.aliases.get(code.lower(), code)

    def inbound_code(self, code: object) -> str | None:
        """Map a language code reported by the backend back to the caller's vocabulary.

        Anything other than a non-empty string is treated as "not reported".
        """
        if not isinstance(code, str) or not code:
            return None
        code = code.strip().lower()
        return self._reverse_aliases.get(code, code) or None

    def failure(self, reason: FailureReason, detail: str = "") -> ProviderFailure:
        return ProviderFailure(provider=self.name, reason=reason, detail=detail)

    def malformed(self, detail: str) -> ProviderFailure:
        return self.failure(FailureReason.MALFORMED_RESPONSE, detail)

    def to_provider_config(self, priority: int) -> ProviderConfig:
        """Freeze this provider into a chain entry.

        Args:
            priority (int): Position in the fallback order. Lower values are tried first.

        Returns:
            ProviderConfig: The chain entry bound to this provider's builder and parser.
        """
        return ProviderConfig(
            identifier=self.name,
            priority=priority,
            enabled=self.is_enabled,
            request_builder=self.build_request,
            response_parser=self.parse_response,
            timeout=self.timeout,
        )
