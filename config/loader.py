"""Configuration file loader and validator.

Handles reading, formatting, and validating settings from the INI configuration file, then
applies environment variables and command-line overrides on top. Raises exceptions for any
issues encountered during loading.
"""

from __future__ import annotations

import ast
import configparser
import os
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config, ProviderSection
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "ALLOWED_PROVIDERS",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ALLOWED_PROVIDERS: Final[list[str]] = ["deepl", "libretranslate", "google"]

# Options that must only come from the environment.
_SECRET_OPTIONS: Final[frozenset[str]] = frozenset({"API_KEY"})


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    The INI file is read first, then provider credentials and overrides are taken from the
    environment, then command-line overrides are applied, and finally the result is validated.

    Args:
        config_filename (str): INI file name to load.
        script_name (str): Executing script name, used in error messaging.
        environ (Mapping[str, str] | None): Environment to read; defaults to os.environ.
        **args: Command-line overrides: host, port, debug.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str,
        script_name: str,
        environ: Mapping[str, str] | None = None,
        **args,
    ) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name
        self._convert_settings(parser)
        self._apply_environment(os.environ if environ is None else environ)
        # Apply command-line argument overrides
        if args.get("host") is not None:
            self.config.SERVER.HOST = args["host"]
        if args.get("port") is not None:
            self.config.SERVER.PORT = args["port"]
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Convert configuration settings from the parser to the Config object.

        Args:
            parser (ConfigParser): Parsed INI data.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            self._convert_section_field(parser, formatter, section)

    def _convert_section_field(
        self, parser: ConfigParser, formatter: _ConfigFormatter, section: DataclassField[Any]
    ) -> None:
        """Convert all fields in a configuration section.

        Args:
            parser (ConfigParser): Parsed INI data.
            formatter (_ConfigFormatter): Formatter used to coerce string values to typed values.
            section (Field[Any]): Target configuration section dataclass field.

        Raises:
            ConfigFormatError: If a value fails to format correctly.
        """
        for key in fields(getattr(self.config, section.name)):
            try:
                parser[section.name][key.name]
            except KeyError:
                logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                continue

            if key.name in _SECRET_OPTIONS:
                logger.warning(
                    "'%s.%s' in the configuration file is ignored. Set it through the environment instead.",
                    section.name,
                    key.name,
                )
                continue

            formatted_value = formatter.apply_format(section, key)
            setattr(getattr(self.config, section.name), key.name, formatted_value)

    def _apply_environment(self, environ: Mapping[str, str]) -> None:
        """Read credentials and overrides from the environment.

        For every provider section NAME, ``NAME_API_KEY`` sets the credential and ``NAME_URL``
        overrides the service URL. ``PORT`` overrides the listening port and ``HTTPS_PROXY`` sets
        the outbound proxy.

        Raises:
            ConfigValueError: If PORT is not an integer.
        """
        for section in fields(self.config):
            settings = getattr(self.config, section.name)
            if not isinstance(settings, ProviderSection):
                continue

            api_key: str = environ.get(f"{section.name}_API_KEY", "").strip()
            if api_key:
                settings.API_KEY = api_key
                logger.debug("Credential for '%s' taken from the environment", section.name)

            url: str = environ.get(f"{section.name}_URL", "").strip()
            if url:
                settings.URL = url
                logger.debug("URL for '%s' overridden by the environment: %s", section.name, url)

        port: str = environ.get("PORT", "").strip()
        if port:
            try:
                self.config.SERVER.PORT = int(port)
            except ValueError as err:
                msg: str = f"Invalid value for environment variable PORT: {port}"
                raise ConfigValueError(msg) from err

        proxy: str = environ.get("HTTPS_PROXY", "").strip()
        if proxy:
            self.config.SERVER.PROXY = proxy
            logger.debug("Outbound proxy taken from the environment")

    def _validate_settings(self) -> None:
        """Validate configuration settings for providers, port number and timeouts.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        try:
            self._inspect_defined_item("TRANSLATION", "PROVIDERS", ALLOWED_PROVIDERS)
            self._validate_port("SERVER", "PORT")
            self._validate_positive("TRANSLATION", "REQUEST_DEADLINE")
            for name in ALLOWED_PROVIDERS:
                self._validate_positive(name.upper(), "TIMEOUT")
        except (NameError, SyntaxError, AttributeError, TypeError, ValueError) as err:
            msg: str = f"Invalid configuration value: {err}"
            raise ConfigFormatError(msg) from None

    def _inspect_defined_item(self, section_name: str, key_name: str, defined_list: list[str]) -> None:
        """Verify that configuration values match allowed options.

        Unrecognized values are logged and dropped; duplicates keep their first position.

        Args:
            section_name (str): Section name in the config model.
            key_name (str): Field name to inspect.
            defined_list (list[str]): Allowed values.

        Raises:
            ConfigTypeError: If the configured value is neither list nor str.
        """
        value: str | list[str] = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"

        if not isinstance(value, (list, str)):
            msg: str = f"Unsupported type used for '{field_name}': {type(value)}"
            raise ConfigTypeError(msg)

        values: list[str] = value if isinstance(value, list) else [value]
        accepted: list[str] = []
        for val in values:
            normalized = str(val).strip().lower()
            if normalized not in defined_list:
                logger.warning("Unknown value '%s' is set for '%s'", val, field_name)
                continue
            if normalized in accepted:
                logger.warning("Duplicate value '%s' is set for '%s'", val, field_name)
                continue
            accepted.append(normalized)
        setattr(getattr(self.config, section_name), key_name, accepted)

    def _validate_port(self, section_name: str, key_name: str) -> None:
        value: int = getattr(getattr(self.config, section_name), key_name)
        if not isinstance(value, int) or not 1 <= value <= 65535:
            msg: str = f"'{section_name}.{key_name}' must be an integer between 1 and 65535: {value}"
            raise ConfigValueError(msg)

    def _validate_positive(self, section_name: str, key_name: str) -> None:
        value: float = getattr(getattr(self.config, section_name), key_name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            msg: str = f"'{section_name}.{key_name}' must be a positive number: {value}"
            raise ConfigValueError(msg)


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, list, str)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert INI value to the expected Python type based on the Config field type.

        Args:
            section (DataclassField[Any]): Configuration section field containing the key.
            key (DataclassField[Any]): Target field within the section.

        Returns:
            Any: Parsed value coerced to the type declared in the config dataclass.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[
            type[bool | int | float], Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float]
        ] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
        }

        formatter: Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float] | None = formatters.get(
            type(getattr(getattr(self.config, section.name), key.name))
        )
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        """Convert INI string to float."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return float(value)

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        """Convert INI string to integer."""
        value: str = self.parser.get(section.name, key.name)
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return int(float(value))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        """Convert INI string to boolean."""
        return self.parser.getboolean(section.name, key.name)
