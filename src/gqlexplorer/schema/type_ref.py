from gqlexplorer.schema.models import TypeKind, TypeRef

BUILTIN_SCALARS = {"ID", "String", "Int", "Float", "Boolean"}


def is_introspection_type(type_name: str) -> bool:
    return type_name.startswith("__")


def is_builtin_scalar_type(type_name: str) -> bool:
    return type_name in BUILTIN_SCALARS


def named_type_ref(type_ref: TypeRef) -> TypeRef:
    """Peel LIST and NON_NULL wrappers off a type reference.

    Args:
        type_ref: The possibly wrapped reference

    Returns:
        The innermost reference. For a malformed chain (a wrapper without
        ``of_type``) this is the dangling wrapper itself.
    """
    current = type_ref
    while current.kind.is_wrapper and current.of_type is not None:
        current = current.of_type
    return current


def named_type_name(type_ref: TypeRef) -> str | None:
    return named_type_ref(type_ref).name


def render_type_ref(type_ref: TypeRef) -> str:
    """Render a type reference in GraphQL notation, e.g. ``[String!]!``.

    A terminal without a name renders its raw name instead of raising, so a
    malformed schema shows up as garbled text on screen.

    Args:
        type_ref: The reference to render

    Returns:
        The GraphQL type notation of the reference
    """
    wrappers: list[TypeKind] = []
    current = type_ref
    while current.kind.is_wrapper and current.of_type is not None:
        wrappers.append(current.kind)
        current = current.of_type

    text = str(current.name)
    for kind in reversed(wrappers):
        text = f"[{text}]" if kind == TypeKind.LIST else f"{text}!"
    return text
