from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from gqlexplorer import log
from gqlexplorer.errors import MalformedSchemaError
from gqlexplorer.schema.models import RootTypeName, SchemaDef, TypeDef, TypeRef
from gqlexplorer.schema.type_ref import is_introspection_type, named_type_ref


def _extract_schema_entry(raw: Any) -> Any:
    """Locate the ``__schema`` entry in a bare or enveloped introspection result."""
    if not isinstance(raw, dict):
        raise MalformedSchemaError(f"Expected a JSON object as introspection result, got {type(raw).__name__}")

    if "__schema" in raw:
        return raw["__schema"]

    data = raw.get("data")
    if isinstance(data, dict) and "__schema" in data:
        return data["__schema"]

    errors = raw.get("errors")
    if errors:
        messages = [error.get("message", str(error)) if isinstance(error, dict) else str(error) for error in errors]
        raise MalformedSchemaError(f"Introspection returned errors: {'; '.join(messages)}")

    raise MalformedSchemaError("Introspection result has no '__schema' entry")


def _root_name(root: RootTypeName | None) -> str | None:
    return root.name if root is not None else None


class TypeGraph:
    """Typed view of an introspection result with name-based type resolution.

    Fields reference their types by ``TypeRef`` only, so self-referential and
    mutually referential types are plain table lookups.
    """

    def __init__(self, schema: SchemaDef, types: Mapping[str, TypeDef]) -> None:
        self.schema = schema
        self.types: Mapping[str, TypeDef] = MappingProxyType(dict(types))

    @classmethod
    def parse(cls, raw: Any) -> "TypeGraph":
        """Build a type graph from a raw introspection result.

        Args:
            raw: Decoded JSON, either ``{"data": {"__schema": ...}}`` or ``{"__schema": ...}``

        Returns:
            The parsed type graph

        Raises:
            MalformedSchemaError: If the payload is not a usable introspection result
        """
        schema_entry = _extract_schema_entry(raw)
        if not isinstance(schema_entry, dict):
            raise MalformedSchemaError("Introspection '__schema' entry is not an object")

        try:
            schema = SchemaDef.model_validate(schema_entry)
        except ValidationError as e:
            raise MalformedSchemaError(f"Invalid introspection schema: {e}") from e

        types: dict[str, TypeDef] = {}
        for type_def in schema.types:
            if type_def.kind.is_wrapper or type_def.name is None:
                log.warning(f"Skipping unnamed or wrapper type entry of kind {type_def.kind.value}")
                continue
            if type_def.name in types:
                log.warning(f"Duplicate type '{type_def.name}' in introspection result, keeping the first")
                continue
            types[type_def.name] = type_def

        log.debug(f"Parsed {len(types)} types from introspection result")
        return cls(schema, types)

    @property
    def query_root_name(self) -> str | None:
        return _root_name(self.schema.query_type)

    @property
    def mutation_root_name(self) -> str | None:
        return _root_name(self.schema.mutation_type)

    @property
    def subscription_root_name(self) -> str | None:
        return _root_name(self.schema.subscription_type)

    def resolve(self, name: str | None) -> TypeDef | None:
        if name is None:
            return None
        return self.types.get(name)

    def resolve_ref(self, type_ref: TypeRef) -> TypeDef | None:
        """Resolve a possibly wrapped reference to the definition of its named type."""
        return self.resolve(named_type_ref(type_ref).name)

    def resolve_query_root(self) -> TypeDef | None:
        return self.resolve(self.query_root_name)

    def resolve_mutation_root(self) -> TypeDef | None:
        return self.resolve(self.mutation_root_name)

    def resolve_subscription_root(self) -> TypeDef | None:
        return self.resolve(self.subscription_root_name)

    def named_types(self, include_introspection: bool = False) -> list[TypeDef]:
        return [
            type_def
            for name, type_def in self.types.items()
            if include_introspection or not is_introspection_type(name)
        ]

    def search(
        self,
        term: str,
        partial: bool = True,
        case_insensitive: bool = True,
    ) -> dict[str, list[str]]:
        """
        Search for types and fields whose names match a term.

        Args:
            term: The name (or partial name) to look for.
            partial: If True, allows substring matches.
            case_insensitive: If True, the comparison ignores case.

        Returns:
            dict: {type_name: [matching field names]}. A type whose own name matches
            is listed even when none of its fields do.
        """

        def matches(name: str) -> bool:
            name_cmp = name.lower() if case_insensitive else name
            term_cmp = term.lower() if case_insensitive else term
            return term_cmp in name_cmp if partial else name_cmp == term_cmp

        results: dict[str, list[str]] = {}
        for type_name, type_def in self.types.items():
            if is_introspection_type(type_name):
                continue
            field_names = [field.name for field in type_def.fields if matches(field.name)]
            field_names += [field.name for field in type_def.input_fields if matches(field.name)]
            if field_names or matches(type_name):
                results[type_name] = field_names
        return results
