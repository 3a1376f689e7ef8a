"""Configuration data models for the translation service.

Each dataclass mirrors one section of the INI file. Attribute names are the upper-case option
names so that the loader can map sections and options onto them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Config",
    "General",
    "ProviderSection",
    "Server",
    "Translation",
]


@dataclass
class General:
    DEBUG: bool = False
    SCRIPT_NAME: str = ""
    LOG_FILE: str = ""
    LOG_LEVEL: str = "INFO"


@dataclass
class Server:
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    ALLOW_ORIGIN: str = "*"
    PROXY: str = ""


@dataclass
class Translation:
    PROVIDERS: list[str] = field(default_factory=lambda: ["deepl", "libretranslate"])
    REQUEST_DEADLINE: float = 30.0


@dataclass
class ProviderSection:
    """Settings shared by every provider section.

    API_KEY is never read from the INI file; the loader fills it from the environment.
    """

    URL: str = ""
    TIMEOUT: float = 10.0
    API_KEY: str = field(default="", repr=False)


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    SERVER: Server = field(default_factory=Server)
    TRANSLATION: Translation = field(default_factory=Translation)
    DEEPL: ProviderSection = field(default_factory=ProviderSection)
    LIBRETRANSLATE: ProviderSection = field(
        default_factory=lambda: ProviderSection(URL="https://libretranslate.com/translate")
    )
    GOOGLE: ProviderSection = field(default_factory=lambda: ProviderSection(URL="https://translate.google.com"))
