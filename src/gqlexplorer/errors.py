from typing import Any


class ExplorerError(Exception):
    """Base class for errors raised by gqlexplorer."""


class TransportError(ExplorerError):
    """Raised when the introspection request fails at the network or HTTP level.

    Attributes:
        url: The endpoint that was queried
        status_code: HTTP status code, or None when no response was received
        body: The decoded JSON error body, the raw text, or None
    """

    def __init__(self, message: str, url: str, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body


class MalformedSchemaError(ExplorerError):
    """Raised when an introspection payload lacks the structure of a GraphQL schema."""


class EndpointNotFoundError(ExplorerError):
    """Raised when a named endpoint is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No endpoint registered under the name '{name}'")
        self.name = name


class NavigationError(ExplorerError):
    """Raised when navigating while no root page is loaded or a schema is loading."""
