"""Translation provider implementations.

Each module contains one ProviderInterface subclass that knows how to shape requests for, and
parse responses from, a single backend. Importing this package registers every provider.

Modules:
- DeeplProvider: DeepL REST API.
- GoogleProvider: Google Translate web endpoint.
- LibreTranslateProvider: LibreTranslate instances.
"""

from core.trans.engines.const_google import LANGUAGES
from core.trans.engines.deepl_provider import DeeplProvider
from core.trans.engines.google_provider import GoogleProvider
from core.trans.engines.libre_provider import LibreTranslateProvider

__all__: list[str] = [
    "LANGUAGES",
    "DeeplProvider",
    "GoogleProvider",
    "LibreTranslateProvider",
]
