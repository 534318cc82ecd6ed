"""Pydantic models for the records of a GraphQL introspection result."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TypeKind(str, Enum):
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


class IntrospectionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TypeRef(IntrospectionModel):
    """A possibly wrapped reference to a named type.

    Wrapper kinds (LIST, NON_NULL) carry no name and point at the wrapped
    reference through ``of_type``; the chain ends in a named kind.
    """

    kind: TypeKind
    name: str | None = None
    of_type: "TypeRef | None" = Field(None, alias="ofType")


class InputValueDef(IntrospectionModel):
    """An argument of a field or a field of an input object."""

    name: str
    description: str | None = None
    type: TypeRef
    default_value: Any = Field(None, alias="defaultValue")
    is_deprecated: bool = Field(False, alias="isDeprecated")
    deprecation_reason: str | None = Field(None, alias="deprecationReason")

    @field_validator("is_deprecated", mode="before")
    @classmethod
    def none_is_not_deprecated(cls, value: Any) -> Any:
        return False if value is None else value


class FieldDef(IntrospectionModel):
    name: str
    description: str | None = None
    args: list[InputValueDef] = Field(default_factory=list)
    type: TypeRef
    is_deprecated: bool = Field(False, alias="isDeprecated")
    deprecation_reason: str | None = Field(None, alias="deprecationReason")

    @field_validator("args", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("is_deprecated", mode="before")
    @classmethod
    def none_is_not_deprecated(cls, value: Any) -> Any:
        return False if value is None else value


class EnumValueDef(IntrospectionModel):
    name: str
    description: str | None = None
    is_deprecated: bool = Field(False, alias="isDeprecated")
    deprecation_reason: str | None = Field(None, alias="deprecationReason")

    @field_validator("is_deprecated", mode="before")
    @classmethod
    def none_is_not_deprecated(cls, value: Any) -> Any:
        return False if value is None else value


class TypeDef(IntrospectionModel):
    """A named type from the schema's type list.

    The server answers ``null`` for the lists that do not apply to a kind
    (e.g. ``enumValues`` on an object); those are normalised to empty lists.
    """

    kind: TypeKind
    name: str | None = None
    description: str | None = None
    fields: list[FieldDef] = Field(default_factory=list)
    input_fields: list[InputValueDef] = Field(default_factory=list, alias="inputFields")
    interfaces: list[TypeRef] = Field(default_factory=list)
    possible_types: list[TypeRef] = Field(default_factory=list, alias="possibleTypes")
    enum_values: list[EnumValueDef] = Field(default_factory=list, alias="enumValues")

    @field_validator("fields", "input_fields", "interfaces", "possible_types", "enum_values", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def get_field(self, name: str) -> FieldDef | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class RootTypeName(IntrospectionModel):
    name: str | None = None


class SchemaDef(IntrospectionModel):
    """The ``__schema`` entry of an introspection result."""

    description: str | None = None
    query_type: RootTypeName | None = Field(None, alias="queryType")
    mutation_type: RootTypeName | None = Field(None, alias="mutationType")
    subscription_type: RootTypeName | None = Field(None, alias="subscriptionType")
    types: list[TypeDef]
