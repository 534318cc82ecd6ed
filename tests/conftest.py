import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import strategies as st
from hypothesis.strategies import composite

from gqlexplorer.pages.builder import PageBuilder
from gqlexplorer.schema.graph import TypeGraph
from gqlexplorer.schema.models import TypeKind, TypeRef

BUILTIN_SCALARS = ["ID", "String", "Int", "Float", "Boolean"]


# #########################################################
# Introspection payload builders
# #########################################################


def named(name: str | None, kind: str = "OBJECT") -> dict[str, Any]:
    return {"kind": kind, "name": name, "ofType": None}


def scalar(name: str) -> dict[str, Any]:
    return named(name, "SCALAR")


def non_null(inner: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "NON_NULL", "name": None, "ofType": inner}


def list_of(inner: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "LIST", "name": None, "ofType": inner}


def input_value(
    name: str,
    type_ref: dict[str, Any],
    default_value: str | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    return {"name": name, "description": description, "type": type_ref, "defaultValue": default_value}


def field(
    name: str,
    type_ref: dict[str, Any],
    args: list[dict[str, Any]] | None = None,
    description: str | None = None,
    deprecation_reason: str | None = None,
) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "args": args or [],
        "type": type_ref,
        "isDeprecated": deprecation_reason is not None,
        "deprecationReason": deprecation_reason,
    }


def type_def(
    kind: str,
    name: str,
    description: str | None = None,
    fields: list[dict[str, Any]] | None = None,
    input_fields: list[dict[str, Any]] | None = None,
    interfaces: list[dict[str, Any]] | None = None,
    possible_types: list[dict[str, Any]] | None = None,
    enum_values: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a ``__Type`` entry the way servers send it: lists that do not apply are null."""
    return {
        "kind": kind,
        "name": name,
        "description": description,
        "fields": fields if kind in ("OBJECT", "INTERFACE") else None,
        "inputFields": input_fields if kind == "INPUT_OBJECT" else None,
        "interfaces": (interfaces or []) if kind in ("OBJECT", "INTERFACE") else None,
        "possibleTypes": possible_types if kind in ("INTERFACE", "UNION") else None,
        "enumValues": enum_values if kind == "ENUM" else None,
    }


def enum_value(name: str, description: str | None = None, deprecation_reason: str | None = None) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "isDeprecated": deprecation_reason is not None,
        "deprecationReason": deprecation_reason,
    }


def introspection_payload(
    types: list[dict[str, Any]],
    query: str | None = "Query",
    mutation: str | None = None,
    subscription: str | None = None,
    with_builtin_scalars: bool = True,
) -> dict[str, Any]:
    """Wrap type entries into a full introspection response envelope."""
    all_types = list(types)
    if with_builtin_scalars:
        all_types += [type_def("SCALAR", name) for name in BUILTIN_SCALARS]
    return {
        "data": {
            "__schema": {
                "queryType": {"name": query} if query else None,
                "mutationType": {"name": mutation} if mutation else None,
                "subscriptionType": {"name": subscription} if subscription else None,
                "types": all_types,
            }
        }
    }


# #########################################################
# Sample schemas
# #########################################################


def social_types() -> list[dict[str, Any]]:
    """A small social network schema.

    type Query { user(id: ID!): User  search(term: String!, first: Int = 10): [SearchResult!]!  node(id: ID!): Node }
    type Mutation { createUser(input: CreateUserInput!): User! }
    interface Node { id: ID! }
    type User implements Node { id: ID!  name: String  friends: [User]  role: Role  login: String @deprecated }
    type Post implements Node { id: ID!  author: User!  tags: [String!]! }
    union SearchResult = User | Post
    enum Role { ADMIN MEMBER GUEST @deprecated }
    input CreateUserInput { name: String!  role: Role = MEMBER }
    """
    return [
        type_def(
            "OBJECT",
            "Query",
            fields=[
                field("user", named("User"), args=[input_value("id", non_null(scalar("ID")))], description="Find a user"),
                field(
                    "search",
                    non_null(list_of(non_null(named("SearchResult", "UNION")))),
                    args=[
                        input_value("term", non_null(scalar("String"))),
                        input_value("first", scalar("Int"), default_value="10"),
                    ],
                ),
                field("node", named("Node", "INTERFACE"), args=[input_value("id", non_null(scalar("ID")))]),
            ],
        ),
        type_def(
            "OBJECT",
            "Mutation",
            fields=[
                field(
                    "createUser",
                    non_null(named("User")),
                    args=[input_value("input", non_null(named("CreateUserInput", "INPUT_OBJECT")))],
                )
            ],
        ),
        type_def(
            "INTERFACE",
            "Node",
            description="An object with an ID",
            fields=[field("id", non_null(scalar("ID")))],
            possible_types=[named("User"), named("Post")],
        ),
        type_def(
            "OBJECT",
            "User",
            description="A member of the network",
            fields=[
                field("id", non_null(scalar("ID"))),
                field("name", scalar("String")),
                field("friends", list_of(named("User")), description="People this user follows"),
                field("role", named("Role", "ENUM")),
                field("login", scalar("String"), deprecation_reason="Use name"),
            ],
            interfaces=[named("Node", "INTERFACE")],
        ),
        type_def(
            "OBJECT",
            "Post",
            fields=[
                field("id", non_null(scalar("ID"))),
                field("author", non_null(named("User"))),
                field("tags", non_null(list_of(non_null(scalar("String"))))),
            ],
            interfaces=[named("Node", "INTERFACE")],
        ),
        type_def("UNION", "SearchResult", possible_types=[named("User"), named("Post")]),
        type_def(
            "ENUM",
            "Role",
            enum_values=[enum_value("ADMIN"), enum_value("MEMBER"), enum_value("GUEST", deprecation_reason="No guests")],
        ),
        type_def(
            "INPUT_OBJECT",
            "CreateUserInput",
            input_fields=[
                input_value("name", non_null(scalar("String"))),
                input_value("role", named("Role", "ENUM"), default_value="MEMBER"),
            ],
        ),
        type_def("OBJECT", "__Type", fields=[field("name", scalar("String"))]),
    ]


def social_payload() -> dict[str, Any]:
    return introspection_payload(social_types(), query="Query", mutation="Mutation")


def scenario_payload() -> dict[str, Any]:
    """Query { user(id: ID!): User } and User { friends: [User] }."""
    return introspection_payload(
        [
            type_def(
                "OBJECT",
                "Query",
                fields=[field("user", named("User"), args=[input_value("id", non_null(scalar("ID")))])],
            ),
            type_def("OBJECT", "User", fields=[field("friends", list_of(named("User")))]),
        ]
    )


@pytest.fixture
def social_graph() -> TypeGraph:
    return TypeGraph.parse(social_payload())


@pytest.fixture
def social_builder(social_graph: TypeGraph) -> PageBuilder:
    return PageBuilder(social_graph)


@pytest.fixture
def introspection_file(tmp_path: Path) -> Path:
    path = tmp_path / "social.json"
    path.write_text(json.dumps(social_payload()))
    return path


# #########################################################
# Type reference strategies
# #########################################################

WRAPPER_KINDS = [TypeKind.LIST, TypeKind.NON_NULL]


@composite
def wrapped_type_ref_strategy(
    draw: Callable[[st.SearchStrategy[Any]], Any],
) -> tuple[TypeRef, list[TypeKind], str]:
    """Generate a type reference with a random stack of wrappers around a named type.

    Returns the reference, its wrapper kinds from the outside in, and the terminal name.
    """
    name = draw(st.from_regex(r"[A-Z][A-Za-z0-9_]{0,15}", fullmatch=True))
    wrappers = draw(st.lists(st.sampled_from(WRAPPER_KINDS), max_size=12))

    type_ref = TypeRef(kind=TypeKind.OBJECT, name=name)
    for kind in reversed(wrappers):
        type_ref = TypeRef(kind=kind, of_type=type_ref)
    return type_ref, wrappers, name
