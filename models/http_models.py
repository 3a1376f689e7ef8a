"""Value objects exchanged between translation providers and the HTTP transport.

Providers describe the outbound call as an HttpRequest; the transport answers with an
HttpResponse holding the status code and the raw body text. Neither side knows the other's
internals.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal

__all__: list[str] = ["HTTPMethod", "HttpRequest", "HttpResponse"]

type HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@dataclass(frozen=True)
class HttpRequest:
    """An outbound HTTP request built by a provider.

    Attributes:
        url (str): Absolute request URL.
        method (HTTPMethod): HTTP method.
        headers (dict[str, str]): Request headers.
        body (str | None): Serialized request body, already encoded by the provider.
    """

    url: str
    method: HTTPMethod = "POST"
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    def __repr__(self) -> str:
        # Headers may carry credentials, so only their names are shown.
        return f"HttpRequest(method={self.method!r}, url={self.url!r}, headers={sorted(self.headers)!r})"


@dataclass(frozen=True)
class HttpResponse:
    """The transport's answer: status code plus raw body text.

    Attributes:
        status (int): HTTP status code.
        body (str): Response body decoded as text.
        content_type (str): Media type without parameters, empty if unknown.
    """

    status: int
    body: str = ""
    content_type: str = ""

    @property
    def ok(self) -> bool:
        """Whether the status code is in the 2xx range."""
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        return json.loads(self.body)
