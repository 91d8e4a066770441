from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..logging_conf import get_logger

__all__ = [
    "JSON",
    "TEXT",
    "ResponseDescriptor",
    "RouteTable",
    "PathRouter",
    "NOT_FOUND",
    "HELLO_WORLD",
    "BOOK_ROUTES",
    "build_router",
]

logger = get_logger("bookserver.routes")

JSON = "application/json"
TEXT = "text/plain"


# ------------------------
# Descriptors
# ------------------------
@dataclass(frozen=True, eq=True)
class ResponseDescriptor:
    """A fixed reply: one status code, one content type, one body.

    A mapping body is frozen behind a read-only proxy and serialized as
    compact JSON; a string body is sent as-is.
    """

    status: int
    content_type: str
    body: str | Mapping[str, Any]

    def __post_init__(self) -> None:
        if not (100 <= self.status <= 599):
            raise ValueError(f"status must be a valid HTTP code, got {self.status}")
        if not self.content_type:
            raise ValueError("content_type must be a non-empty string")
        if isinstance(self.body, Mapping):
            object.__setattr__(self, "body", MappingProxyType(dict(self.body)))
        elif not isinstance(self.body, str):
            raise TypeError("body must be a str or a mapping")

    def __hash__(self) -> int:
        body = self.body if isinstance(self.body, str) else tuple(sorted(self.body.items()))
        return hash((self.status, self.content_type, body))

    def render(self) -> bytes:
        """Return the wire body."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(dict(self.body), separators=(",", ":"), ensure_ascii=False).encode(
            "utf-8"
        )

    def as_tuple(self) -> tuple[int, str, str | dict[str, Any]]:
        body = self.body if isinstance(self.body, str) else dict(self.body)
        return (self.status, self.content_type, body)


# ------------------------
# Table + router
# ------------------------
class RouteTable(Mapping[str, ResponseDescriptor]):
    """Read-only mapping from exact path to descriptor.

    Keys are case-sensitive and must start with "/". Duplicates are rejected
    rather than silently overwritten.
    """

    def __init__(self, routes: Iterable[tuple[str, ResponseDescriptor]] = ()):
        table: dict[str, ResponseDescriptor] = {}
        for path, descriptor in routes:
            if not isinstance(path, str) or not path.startswith("/"):
                raise ValueError(f"route path must start with '/': {path!r}")
            if path in table:
                raise ValueError(f"duplicate route path: {path!r}")
            if not isinstance(descriptor, ResponseDescriptor):
                raise TypeError(f"route {path!r} needs a ResponseDescriptor")
            table[path] = descriptor
        self._table = MappingProxyType(table)

    def __getitem__(self, path: str) -> ResponseDescriptor:
        return self._table[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"RouteTable({sorted(self._table)!r})"


NOT_FOUND = ResponseDescriptor(404, JSON, {"error": "Not Found"})


class PathRouter:
    """Resolve a normalized request path to a ResponseDescriptor.

    Unknown paths get `default` (404 Not Found unless told otherwise), so
    every request has an answer. The request method is never consulted.
    """

    def __init__(self, table: RouteTable, default: ResponseDescriptor = NOT_FOUND):
        self._table = table
        self._default = default

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def default(self) -> ResponseDescriptor:
        return self._default

    def dispatch(self, path: str) -> ResponseDescriptor:
        descriptor = self._table.get(path)
        matched = descriptor is not None
        logger.debug(
            "route.dispatch",
            extra={"event": "route_dispatch", "path": path, "matched": matched},
        )
        return descriptor if matched else self._default


# ------------------------
# Variants
# ------------------------
BOOK_ROUTES = RouteTable(
    [
        ("/", ResponseDescriptor(200, JSON, {"message": "Welcome"})),
        ("/books", ResponseDescriptor(200, JSON, {"message": "List of books"})),
    ]
)

HELLO_WORLD = ResponseDescriptor(200, TEXT, "Hello World")


def build_router(variant: str = "books") -> PathRouter:
    """Return the router for a named route variant.

    - "books": "/" and "/books" as JSON, everything else 404.
    - "hello": "Hello World" as plain text for every path.
    """
    if variant == "books":
        return PathRouter(BOOK_ROUTES)
    if variant == "hello":
        return PathRouter(RouteTable([("/", HELLO_WORLD)]), default=HELLO_WORLD)
    raise ValueError(f"unknown route variant: {variant!r}")
