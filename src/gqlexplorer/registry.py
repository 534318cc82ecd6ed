"""Named GraphQL endpoints, persisted as YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gqlexplorer import log

GQLEXPLORER_HOME = Path.home() / ".gqlexplorer"
DEFAULT_ENDPOINTS_FILE = GQLEXPLORER_HOME / "endpoints.yaml"


class Endpoint(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    extra_body_fields: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)


class RegistryFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    endpoints: dict[str, Endpoint] = Field(default_factory=dict)


class EndpointRegistry:
    def __init__(self, endpoints: dict[str, Endpoint] | None = None) -> None:
        self._endpoints: dict[str, Endpoint] = dict(endpoints or {})

    def register(self, name: str, endpoint: Endpoint | dict[str, Any]) -> Endpoint:
        """Register (or replace) a named endpoint.

        Args:
            name: The name used to open the endpoint later
            endpoint: An Endpoint or a mapping with ``url`` and optional
                ``extra_body_fields`` / ``headers``

        Returns:
            The registered endpoint
        """
        if not isinstance(endpoint, Endpoint):
            endpoint = Endpoint.model_validate(endpoint)
        self._endpoints[name] = endpoint
        return endpoint

    def lookup(self, name: str) -> Endpoint | None:
        return self._endpoints.get(name)

    def remove(self, name: str) -> bool:
        return self._endpoints.pop(name, None) is not None

    def names(self) -> list[str]:
        return sorted(self._endpoints)

    def items(self) -> list[tuple[str, Endpoint]]:
        return [(name, self._endpoints[name]) for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return name in self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)


def load_registry(file_path: Path) -> EndpointRegistry:
    """Load endpoints from a YAML file.

    A missing file yields an empty registry.

    Args:
        file_path: Path to the YAML file

    Returns:
        The loaded registry

    Raises:
        ValueError: If the file is not a valid endpoints file
    """
    if not file_path.exists():
        log.debug(f"No endpoints file at {file_path}, starting with an empty registry")
        return EndpointRegistry()

    with open(file_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid endpoints file {file_path}: {e}") from e

    try:
        registry_file = RegistryFile.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid endpoints file {file_path}: {e}") from e

    return EndpointRegistry(registry_file.endpoints)


def save_registry(registry: EndpointRegistry, file_path: Path) -> None:
    """Write the registry to a YAML file, creating parent directories as needed."""
    data = {"endpoints": {name: endpoint.model_dump() for name, endpoint in registry.items()}}
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
