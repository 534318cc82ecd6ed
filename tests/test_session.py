from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from gqlexplorer.errors import EndpointNotFoundError, MalformedSchemaError, NavigationError, TransportError
from gqlexplorer.introspection import IntrospectionClient
from gqlexplorer.navigation import NavigationState
from gqlexplorer.pages.models import FieldTarget, TypeTarget
from gqlexplorer.registry import EndpointRegistry
from gqlexplorer.session import ExplorerSession
from tests.conftest import scenario_payload, social_payload


def make_client(*payloads: Any) -> Mock:
    client = Mock(spec=IntrospectionClient)
    client.fetch.side_effect = list(payloads)
    return client


@pytest.fixture
def registry() -> EndpointRegistry:
    registry = EndpointRegistry()
    registry.register(
        "social",
        {"url": "https://social.example/graphql", "headers": {"Authorization": "Bearer t0ken"}},
    )
    return registry


def test_scenario_user_friends_and_back() -> None:
    session = ExplorerSession(client=make_client(scenario_payload()))
    root = session.open_url("https://api.example/graphql")

    assert root.rows[0].text == "user(id: ID!): User"

    user_page = session.select(0)
    assert user_page is not None
    assert user_page.name == "User"
    assert [row.text for row in user_page.rows] == ["friends: [User]"]

    friends_page = session.select(0)
    assert friends_page is not None
    assert friends_page.name == "User"
    assert len(session.navigator.history) == 2

    back_page = session.back()
    assert back_page is not None and back_page.name == "User"
    assert session.cursor == 0

    back_page = session.back()
    assert back_page == root
    assert session.cursor == 0
    assert session.back() is None


def test_cursor_is_restored_for_selected_row() -> None:
    session = ExplorerSession(client=make_client(social_payload()))
    session.open_url("https://social.example/graphql", title="social")

    page = session.select(3)
    assert page is not None and page.name == "User"
    session.back()
    assert session.page is not None and session.page.name == "social"
    assert session.cursor == 3


def test_open_registered_uses_endpoint_settings(registry: EndpointRegistry) -> None:
    client = make_client(social_payload())
    session = ExplorerSession(client=client, registry=registry)

    root = session.open_registered("social")

    client.fetch.assert_called_once_with(
        "https://social.example/graphql", {}, {"Authorization": "Bearer t0ken"}
    )
    assert root.name == "social"
    assert session.title == "social"


def test_open_unknown_registered_name(registry: EndpointRegistry) -> None:
    session = ExplorerSession(client=make_client(), registry=registry)
    with pytest.raises(EndpointNotFoundError, match="missing"):
        session.open_registered("missing")
    assert session.navigator.state == NavigationState.EMPTY


def test_open_file(introspection_file: Path) -> None:
    session = ExplorerSession(client=make_client())
    root = session.open_file(introspection_file)
    assert root.name == "social"
    assert session.graph is not None
    assert session.graph.resolve("Post") is not None


def test_navigator_is_loading_during_fetch() -> None:
    session = ExplorerSession()
    seen: list[bool] = []

    def fetch(*args: Any) -> dict[str, Any]:
        seen.append(session.navigator.is_loading)
        return social_payload()

    session.client = Mock(spec=IntrospectionClient)
    session.client.fetch.side_effect = fetch
    session.open_url("https://social.example/graphql")

    assert seen == [True]
    assert not session.navigator.is_loading


def test_failed_fetch_keeps_previous_session() -> None:
    client = make_client(social_payload(), TransportError("boom", "https://other.example", status_code=500))
    session = ExplorerSession(client=client)
    session.open_url("https://social.example/graphql", title="social")
    session.select(0)
    graph_before, page_before, history_before = session.graph, session.page, session.navigator.history

    with pytest.raises(TransportError):
        session.open_url("https://other.example")

    assert session.graph is graph_before
    assert session.page == page_before
    assert session.navigator.history == history_before
    assert not session.navigator.is_loading


def test_malformed_schema_keeps_previous_session() -> None:
    session = ExplorerSession(client=make_client(social_payload(), {"data": {}}))
    session.open_url("https://social.example/graphql")
    graph_before = session.graph

    with pytest.raises(MalformedSchemaError):
        session.open_url("https://broken.example/graphql")

    assert session.graph is graph_before
    assert session.navigator.state == NavigationState.VIEWING


def test_failed_first_fetch_leaves_session_empty() -> None:
    session = ExplorerSession(client=make_client(TransportError("down", "https://api.example")))
    with pytest.raises(TransportError):
        session.open_url("https://api.example")
    assert session.graph is None
    assert session.navigator.state == NavigationState.EMPTY


def test_reintrospection_replaces_graph_and_resets_history() -> None:
    session = ExplorerSession(client=make_client(social_payload(), scenario_payload()))
    session.open_url("https://social.example/graphql", title="social")
    session.select(0)
    session.select(0)
    old_graph = session.graph

    root = session.open_url("https://api.example/graphql", title="api")

    assert session.graph is not old_graph
    assert session.navigator.history == ()
    assert session.page == root
    assert session.back() is None


def test_select_out_of_range_does_not_navigate() -> None:
    session = ExplorerSession(client=make_client(scenario_payload()))
    session.open_url("https://api.example/graphql")
    assert session.select(5) is None
    assert session.select(-1) is None
    assert session.navigator.history == ()


def test_select_without_page_raises() -> None:
    with pytest.raises(NavigationError):
        ExplorerSession().select(0)


def test_open_target_field_page() -> None:
    session = ExplorerSession(client=make_client(social_payload()))
    session.open_url("https://social.example/graphql")
    page = session.open_target(FieldTarget("Query", "search"), cursor=1)
    assert page.name == "Query.search"
    assert session.navigator.history[-1].cursor == 1

    type_page = session.open_target(TypeTarget("SearchResult"))
    assert type_page.name == "SearchResult"


def test_close_discards_schema() -> None:
    session = ExplorerSession(client=make_client(social_payload()))
    session.open_url("https://social.example/graphql")
    session.close()
    assert session.graph is None
    assert session.page is None
    with pytest.raises(NavigationError, match="No schema is loaded"):
        session.require_graph()
    with pytest.raises(NavigationError):
        session.open_target(TypeTarget("User"))
