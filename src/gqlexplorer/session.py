from pathlib import Path
from typing import Any

from gqlexplorer import log
from gqlexplorer.errors import EndpointNotFoundError, NavigationError
from gqlexplorer.introspection import IntrospectionClient, load_introspection_file
from gqlexplorer.navigation import Navigator
from gqlexplorer.pages.builder import PageBuilder
from gqlexplorer.pages.models import Page, Redraw, Target
from gqlexplorer.registry import EndpointRegistry
from gqlexplorer.schema.graph import TypeGraph


class ExplorerSession:
    """One browsing session: the type graph, its page builder and the navigator.

    Opening a schema (by registered name, URL or file) replaces the type graph
    wholesale and resets navigation. A failed open leaves the previous state
    untouched.
    """

    def __init__(
        self,
        client: IntrospectionClient | None = None,
        registry: EndpointRegistry | None = None,
    ) -> None:
        self.client = client or IntrospectionClient()
        self.registry = registry or EndpointRegistry()
        self.graph: TypeGraph | None = None
        self.builder: PageBuilder | None = None
        self.title: str | None = None
        self.navigator = Navigator(self._redraw)

    @property
    def page(self) -> Page | None:
        return self.navigator.active

    @property
    def cursor(self) -> Any:
        return self.navigator.cursor

    def open_registered(self, name: str) -> Page:
        """Open an endpoint registered under ``name``.

        Raises:
            EndpointNotFoundError: If no endpoint has that name
            TransportError: If fetching the introspection result fails
            MalformedSchemaError: If the result is not a usable schema
        """
        endpoint = self.registry.lookup(name)
        if endpoint is None:
            raise EndpointNotFoundError(name)
        return self.open_url(endpoint.url, endpoint.extra_body_fields, endpoint.headers, title=name)

    def open_url(
        self,
        url: str,
        extra_body_fields: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        title: str | None = None,
    ) -> Page:
        with self.navigator.loading():
            raw = self.client.fetch(url, extra_body_fields, headers)
            graph = TypeGraph.parse(raw)
        return self.install(graph, title or url)

    def open_file(self, file_path: Path) -> Page:
        with self.navigator.loading():
            graph = TypeGraph.parse(load_introspection_file(file_path))
        return self.install(graph, file_path.stem)

    def install(self, graph: TypeGraph, title: str) -> Page:
        """Install a parsed type graph and load its root page.

        Args:
            graph: The freshly parsed type graph
            title: Name of the root page

        Returns:
            The root page
        """
        self.navigator.reset()
        self.graph = graph
        self.builder = PageBuilder(graph)
        self.title = title
        root = self.builder.root_page(title)
        self.navigator.load_root(root)
        log.debug(f"Installed schema '{title}' with {len(graph.types)} types")
        return root

    def open_target(self, target: Target, cursor: Any = None) -> Page:
        """Navigate to the page of a target, remembering the cursor on the current page."""
        builder = self._require_builder()
        page = builder.page_for_target(target)
        self.navigator.navigate(page, cursor)
        return page

    def select(self, row_index: int) -> Page | None:
        """Follow the navigable row at ``row_index`` of the active page.

        The index is stored as the cursor of the page being left.

        Returns:
            The new page, or None if the row does not exist or leads nowhere
        """
        page = self.navigator.active
        if page is None:
            raise NavigationError("No page is loaded")

        rows = page.navigable_rows
        if not 0 <= row_index < len(rows):
            log.warning(f"No navigable row {row_index} on page '{page.name}'")
            return None

        target = rows[row_index].target
        if target is None:
            return None
        return self.open_target(target, cursor=row_index)

    def back(self) -> Page | None:
        return self.navigator.back()

    def close(self) -> None:
        self.navigator.reset()
        self.graph = None
        self.builder = None
        self.title = None

    def require_graph(self) -> TypeGraph:
        if self.graph is None:
            raise NavigationError("No schema is loaded")
        return self.graph

    def _require_builder(self) -> PageBuilder:
        if self.builder is None:
            raise NavigationError("No schema is loaded")
        return self.builder

    def _redraw(self, redraw: Redraw) -> Page:
        return self._require_builder().build(redraw)
