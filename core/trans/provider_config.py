from __future__ import annotations

from typing import TYPE_CHECKING

from core.trans.engines import (
    DeeplProvider,  # noqa: F401
    GoogleProvider,  # noqa: F401
    LibreTranslateProvider,  # noqa: F401
)
from core.trans.interface import ProviderInterface
from models.translation_models import ProviderChain, ProviderConfig
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = ["build_provider_chain"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


def build_provider_chain(config: Config) -> ProviderChain:
    """Build the immutable provider chain from the configuration.

    The position of a provider in TRANSLATION.PROVIDERS is its priority. Providers whose
    credential or URL is missing are kept in the chain as disabled entries so that the
    startup log shows them, but they are never attempted.

    Args:
        config (Config): Loaded and validated configuration.

    Returns:
        ProviderChain: The chain to hand to the orchestrator.
    """
    logger.debug("Registered translation providers: %s", list(ProviderInterface.registered))

    entries: list[ProviderConfig] = []
    for priority, name in enumerate(config.TRANSLATION.PROVIDERS):
        cls: type[ProviderInterface] | None = ProviderInterface.registered.get(name)
        if cls is None:
            logger.critical("Translation provider class not found: '%s'", name)
            continue

        entry: ProviderConfig = cls(config).to_provider_config(priority)
        if entry.enabled:
            logger.info("Translation provider enabled: '%s' (priority %d)", name, priority)
        else:
            logger.info("Translation provider disabled, credential or URL missing: '%s'", name)
        entries.append(entry)

    chain = ProviderChain(providers=tuple(entries))
    if not chain.enabled_providers:
        logger.warning("No translation provider is enabled; every translation request will fail.")
    return chain
