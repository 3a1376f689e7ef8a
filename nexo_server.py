"""Nexo Translate API server.

Loads nexo.ini and the environment, builds the translation provider chain, and serves the JSON
API until interrupted.

Environment variables:
    DEEPL_API_KEY: Enables the DeepL provider.
    LIBRETRANSLATE_API_KEY: API key sent to the LibreTranslate instance, if it needs one.
    LIBRETRANSLATE_URL, DEEPL_URL, GOOGLE_URL: Override the provider service URLs.
    PORT: Override the listening port.
    HTTPS_PROXY: Outbound proxy for provider calls.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from aiohttp import web

from config.loader import ConfigLoader, ConfigLoaderError
from core.detect.detector import LanguageDetector
from core.trans.orchestrator import TranslationOrchestrator
from core.trans.provider_config import build_provider_chain
from core.version import VERSION
from handlers.api_routes import create_app
from handlers.async_comm import AsyncHttp
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from models.config_models import Config
    from models.translation_models import ProviderChain

CFG_FILE: Final[str] = "nexo.ini"


def check_python_version() -> None:
    """Check if Python version is 3.13 or later.

    Raises:
        RuntimeError: If Python version is below 3.13.
    """
    if sys.version_info < (3, 13):
        msg = "Python 3.13 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv (list[str] | None): Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Nexo Translate API server",
        epilog="Example: python nexo_server.py --port 8080 --debug",
    )
    parser.add_argument("--config", dest="config", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--host", dest="host", metavar="HOST", help="Override the listening address")
    parser.add_argument("--port", dest="port", metavar="PORT", type=int, help="Override the listening port")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    overrides: dict[str, object] = {"host": args.host, "port": args.port, "debug": args.debug}
    return ConfigLoader(config_filename=args.config, script_name=script_name, **overrides).config


def setup_logging(config: Config) -> None:
    log_utils = LoggerUtils(config.GENERAL.LOG_FILE)
    log_utils.set_level("DEBUG" if config.GENERAL.DEBUG else config.GENERAL.LOG_LEVEL)


def build_transport(config: Config) -> AsyncHttp:
    """Create the provider transport, routed through the configured proxy if any."""
    proxy: str = config.SERVER.PROXY.strip()
    return AsyncHttp(proxies={"https": proxy, "http": proxy} if proxy else None)


async def serve(config: Config) -> None:
    """Build the application and serve it until cancelled."""
    logger = LoggerUtils.get_logger(__name__)

    chain: ProviderChain = build_provider_chain(config)
    transport: AsyncHttp = build_transport(config)
    orchestrator = TranslationOrchestrator(chain, transport)
    app: web.Application = create_app(config, orchestrator, LanguageDetector(), transport=transport)

    runner = web.AppRunner(app)
    await runner.setup()
    try:
        site = web.TCPSite(runner, config.SERVER.HOST, config.SERVER.PORT)
        await site.start()
        logger.info("Serving on http://%s:%d", config.SERVER.HOST, config.SERVER.PORT)
        print(f"{config.GENERAL.SCRIPT_NAME} ver.{VERSION} listening on http://{config.SERVER.HOST}:{config.SERVER.PORT}")
        print(f"Translation providers: {', '.join(chain.identifiers) or '(none)'}")
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def main(argv: list[str] | None = None) -> int:
    check_python_version()
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    setup_logging(config)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        print("\nServer stopped.", file=sys.stderr)
    except OSError as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
