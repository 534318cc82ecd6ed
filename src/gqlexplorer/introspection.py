import json
from pathlib import Path
from typing import Any

import requests
from graphql import get_introspection_query

from gqlexplorer import log
from gqlexplorer.errors import TransportError

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)

DEFAULT_TIMEOUT = 30.0


def _decode_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class IntrospectionClient:
    """Fetches introspection results from GraphQL endpoints over HTTP."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(
        self,
        url: str,
        extra_body_fields: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST the introspection query to an endpoint.

        Args:
            url: The GraphQL endpoint URL
            extra_body_fields: Additional top-level fields merged into the JSON body
            headers: Additional HTTP headers, e.g. authentication

        Returns:
            The decoded JSON response body

        Raises:
            TransportError: If the request fails, the server answers with a non-2xx
                status, or the body is not a JSON object
        """
        body: dict[str, Any] = {"query": INTROSPECTION_QUERY, **(extra_body_fields or {})}
        request_headers = {"Content-Type": "application/json", "Accept": "application/json", **(headers or {})}

        log.info(f"Fetching introspection from {url}")
        try:
            response = self.session.post(url, json=body, headers=request_headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url) from e

        if not response.ok:
            error_body = _decode_body(response)
            raise TransportError(
                f"Introspection request to {url} failed with status {response.status_code}",
                url,
                status_code=response.status_code,
                body=error_body,
            )

        payload = _decode_body(response)
        if not isinstance(payload, dict):
            raise TransportError(
                f"Introspection response from {url} is not a JSON object",
                url,
                status_code=response.status_code,
                body=payload,
            )
        log.debug(f"Received introspection response from {url} with status {response.status_code}")
        return payload


def load_introspection_file(file_path: Path) -> dict[str, Any]:
    """Load a saved introspection result.

    Args:
        file_path: Path to a JSON file as written by ``gqlexplorer introspect``

    Returns:
        The decoded JSON object

    Raises:
        ValueError: If the file does not contain a JSON object
    """
    with open(file_path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object in {file_path}, got {type(data).__name__}")

    return data
