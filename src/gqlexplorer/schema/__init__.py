"""Typed GraphQL type graph built from introspection results."""

from .graph import TypeGraph
from .models import EnumValueDef, FieldDef, InputValueDef, SchemaDef, TypeDef, TypeKind, TypeRef
from .type_ref import named_type_ref, render_type_ref

__all__ = [
    "EnumValueDef",
    "FieldDef",
    "InputValueDef",
    "SchemaDef",
    "TypeDef",
    "TypeGraph",
    "TypeKind",
    "TypeRef",
    "named_type_ref",
    "render_type_ref",
]
