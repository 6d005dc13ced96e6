"""Request-scoped value types exchanged with the page router"""

from dataclasses import dataclass, field
from typing import Union
from urllib.parse import parse_qs, parse_qsl, urlparse


@dataclass(frozen=True)
class FormFile:
    """A file blob submitted through a multipart form."""

    filename: str
    content: bytes = b""
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class RouteRequest:
    """The incoming request handed to loaders and actions.

    ``form`` keeps the submitted pairs in order; a key repeats once per
    selected option of a multi-valued control.
    """

    url: str
    form: list[tuple[str, Union[str, FormFile]]] = field(default_factory=list)

    @classmethod
    def from_body(cls, url: str, body: str) -> "RouteRequest":
        """Build a request from an ``application/x-www-form-urlencoded`` body."""
        return cls(url=url, form=parse_qsl(body, keep_blank_values=True))

    def query_param(self, name: str) -> str | None:
        values = parse_qs(urlparse(self.url).query, keep_blank_values=True).get(name)
        return values[0] if values else None
