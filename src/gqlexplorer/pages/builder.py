from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from gqlexplorer import log
from gqlexplorer.pages.models import (
    FieldRedraw,
    FieldTarget,
    Page,
    Redraw,
    RootEntry,
    RootRedraw,
    Row,
    Section,
    TypeRedraw,
    TypeTarget,
)
from gqlexplorer.schema.graph import TypeGraph
from gqlexplorer.schema.models import EnumValueDef, FieldDef, InputValueDef, TypeDef, TypeRef
from gqlexplorer.schema.type_ref import named_type_name, render_type_ref

DESCRIPTION = "Description"
ARGUMENTS = "Arguments"
IMPLEMENTATIONS = "Implementations"
INTERFACES = "Interfaces"
FIELDS = "Fields"
INPUT_FIELDS = "Input Fields"
ENUM_VALUES = "Enum Values"
TYPE = "Type"

QUERIES = "Queries"
MUTATIONS = "Mutations"
SUBSCRIPTIONS = "Subscriptions"

T = TypeVar("T")


def deprecation_marker(is_deprecated: bool, reason: str | None) -> str | None:
    if not is_deprecated:
        return None
    return f"deprecated: {reason}" if reason else "deprecated"


def argument_signature(args: Sequence[InputValueDef]) -> str:
    if not args:
        return ""
    return "(" + ", ".join(f"{arg.name}: {render_type_ref(arg.type)}" for arg in args) + ")"


def field_label(field: FieldDef) -> str:
    """Label of a field row including its arguments, e.g. ``user(id: ID!)``."""
    return f"{field.name}{argument_signature(field.args)}"


def _join_markers(*markers: str | None) -> str | None:
    present = [marker for marker in markers if marker]
    return "; ".join(present) if present else None


class PageBuilder:
    """Projects type graph entities onto presentation-neutral pages.

    Pages are cheap to rebuild and never cached; a page's ``source`` replays it.
    """

    def __init__(self, graph: TypeGraph) -> None:
        self.graph = graph

    def build(self, redraw: Redraw) -> Page:
        """Rebuild the page described by a redraw descriptor.

        Args:
            redraw: The descriptor stored with a page or history entry

        Returns:
            The rebuilt page
        """
        if isinstance(redraw, TypeRedraw):
            type_def = self.graph.resolve(redraw.type_name)
            if type_def is None:
                return self._unresolved_page(redraw.type_name, redraw)
            return self.page_for_type(type_def)
        if isinstance(redraw, FieldRedraw):
            return self.page_for_field(redraw.type_name, redraw.field_name)
        if isinstance(redraw, RootRedraw):
            return self.page_for_root(redraw.name, redraw.entries)
        raise TypeError(f"Unknown redraw descriptor: {redraw!r}")

    def page_for_target(self, target: TypeTarget | FieldTarget) -> Page:
        if isinstance(target, FieldTarget):
            return self.build(FieldRedraw(target.type_name, target.field_name))
        return self.build(TypeRedraw(target.type_name))

    def page_for_type(self, type_def: TypeDef) -> Page:
        """Build the page of a named type.

        Sections come in a fixed order and are left out when empty: Description,
        Implementations, Interfaces, Fields, Input Fields, Enum Values.

        Args:
            type_def: The type to project

        Returns:
            The page of the type
        """
        name = str(type_def.name)
        sections = [
            self._description_section(type_def.description),
            self._section(IMPLEMENTATIONS, type_def.possible_types, self._reference_row),
            self._section(INTERFACES, type_def.interfaces, self._reference_row),
            self._section(FIELDS, type_def.fields, self._field_row),
            self._section(INPUT_FIELDS, type_def.input_fields, self._input_value_row),
            self._section(ENUM_VALUES, type_def.enum_values, self._enum_value_row),
        ]
        return Page(
            name=name,
            source=TypeRedraw(name),
            sections=tuple(section for section in sections if section is not None),
        )

    def page_for_field(self, type_name: str, field_name: str) -> Page:
        """Build the page of one field: its description, arguments and result type."""
        redraw = FieldRedraw(type_name, field_name)
        type_def = self.graph.resolve(type_name)
        field = type_def.get_field(field_name) if type_def is not None else None
        if field is None:
            return self._unresolved_page(f"{type_name}.{field_name}", redraw)

        sections = [
            self._description_section(field.description),
            self._section(ARGUMENTS, field.args, self._input_value_row),
            self._section(TYPE, [field.type], self._reference_row),
        ]
        return Page(
            name=f"{type_name}.{field_name}",
            source=redraw,
            sections=tuple(section for section in sections if section is not None),
        )

    def page_for_root(self, name: str, entries: Iterable[RootEntry]) -> Page:
        """Build a root listing from caller-synthesised entries.

        Args:
            name: Page title and history key
            entries: Ordered entries; their ``section`` groups them under headings

        Returns:
            The root page
        """
        entries = tuple(entries)
        grouped: dict[str, list[Row]] = {}
        for entry in entries:
            row = Row(
                label=entry.label,
                annotation=entry.annotation,
                description=entry.description,
                target=entry.target,
                marker=entry.marker,
            )
            grouped.setdefault(entry.section or name, []).append(row)

        return Page(
            name=name,
            source=RootRedraw(name, entries),
            sections=tuple(Section(title, tuple(rows)) for title, rows in grouped.items()),
        )

    def root_entries(self) -> list[RootEntry]:
        """Synthesise root entries from the declared query, mutation and subscription roots.

        A root the schema does not declare contributes no entries.
        """
        roots = [
            (QUERIES, self.graph.query_root_name, self.graph.resolve_query_root()),
            (MUTATIONS, self.graph.mutation_root_name, self.graph.resolve_mutation_root()),
            (SUBSCRIPTIONS, self.graph.subscription_root_name, self.graph.resolve_subscription_root()),
        ]
        entries: list[RootEntry] = []
        for section, root_name, root in roots:
            if root is None:
                if root_name is not None:
                    log.warning(f"Root type '{root_name}' for {section.lower()} is not defined in the schema")
                continue
            for field in root.fields:
                target, unresolved = self._target_for(field.type)
                entries.append(
                    RootEntry(
                        label=field_label(field),
                        description=field.description,
                        target=target,
                        annotation=render_type_ref(field.type),
                        section=section,
                        marker=_join_markers(
                            deprecation_marker(field.is_deprecated, field.deprecation_reason), unresolved
                        ),
                    )
                )
        return entries

    def root_page(self, title: str) -> Page:
        return self.page_for_root(title, self.root_entries())

    def _target_for(self, type_ref: TypeRef) -> tuple[TypeTarget | None, str | None]:
        """Target of the terminal named type of a reference, or an unresolved marker."""
        name = named_type_name(type_ref)
        if name is None or self.graph.resolve(name) is None:
            log.warning(f"Unresolved type reference '{name}'")
            return None, f"unresolved type '{name}'"
        return TypeTarget(name), None

    def _section(self, title: str, items: Sequence[T], build_row: Callable[[T], Row]) -> Section | None:
        if not items:
            return None
        rows: list[Row] = []
        for item in items:
            try:
                rows.append(build_row(item))
            except Exception as e:
                label = str(getattr(item, "name", item))
                log.warning(f"Could not build row '{label}' in section '{title}': {e}")
                rows.append(Row(label=label, marker=f"error: {e}"))
        return Section(title, tuple(rows))

    def _description_section(self, description: str | None) -> Section | None:
        if not description:
            return None
        return Section(DESCRIPTION, (Row(label=description),))

    def _field_row(self, field: FieldDef) -> Row:
        target, unresolved = self._target_for(field.type)
        return Row(
            label=field_label(field),
            annotation=render_type_ref(field.type),
            description=field.description,
            target=target,
            marker=_join_markers(deprecation_marker(field.is_deprecated, field.deprecation_reason), unresolved),
        )

    def _input_value_row(self, value: InputValueDef) -> Row:
        target, unresolved = self._target_for(value.type)
        annotation = render_type_ref(value.type)
        if value.default_value is not None:
            annotation = f"{annotation} = {value.default_value}"
        return Row(
            label=value.name,
            annotation=annotation,
            description=value.description,
            target=target,
            marker=_join_markers(deprecation_marker(value.is_deprecated, value.deprecation_reason), unresolved),
        )

    def _reference_row(self, type_ref: TypeRef) -> Row:
        target, unresolved = self._target_for(type_ref)
        return Row(label=render_type_ref(type_ref), target=target, marker=unresolved)

    def _enum_value_row(self, value: EnumValueDef) -> Row:
        return Row(
            label=value.name,
            description=value.description,
            marker=deprecation_marker(value.is_deprecated, value.deprecation_reason),
        )

    def _unresolved_page(self, name: str, redraw: Redraw) -> Page:
        log.warning(f"Cannot build page for unknown entity '{name}'")
        row = Row(label=name, marker="not found in schema")
        return Page(name=name, source=redraw, sections=(Section(DESCRIPTION, (row,)),))
