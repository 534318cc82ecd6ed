"""Presentation-neutral page structures and the descriptors that rebuild them."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeTarget:
    """Opens the page of a named type."""

    type_name: str


@dataclass(frozen=True)
class FieldTarget:
    """Opens the page of a single field of a type."""

    type_name: str
    field_name: str


Target = TypeTarget | FieldTarget


@dataclass(frozen=True)
class RootEntry:
    """One caller-synthesised row of a root listing.

    ``section`` groups entries under a heading; entries without one land in a
    section named after the page.
    """

    label: str
    description: str | None
    target: Target | None
    annotation: str | None = None
    section: str | None = None
    marker: str | None = None


@dataclass(frozen=True)
class TypeRedraw:
    type_name: str


@dataclass(frozen=True)
class FieldRedraw:
    type_name: str
    field_name: str


@dataclass(frozen=True)
class RootRedraw:
    name: str
    entries: tuple[RootEntry, ...]


Redraw = TypeRedraw | FieldRedraw | RootRedraw


@dataclass(frozen=True)
class Row:
    label: str
    annotation: str | None = None
    description: str | None = None
    target: Target | None = None
    marker: str | None = None

    @property
    def text(self) -> str:
        """The label joined with its type annotation, e.g. ``user(id: ID!): User``."""
        if self.annotation is None:
            return self.label
        return f"{self.label}: {self.annotation}"


@dataclass(frozen=True)
class Section:
    title: str
    rows: tuple[Row, ...]


@dataclass(frozen=True)
class Page:
    name: str
    source: Redraw
    sections: tuple[Section, ...] = field(default_factory=tuple)

    @property
    def rows(self) -> list[Row]:
        return [row for section in self.sections for row in section.rows]

    @property
    def navigable_rows(self) -> list[Row]:
        return [row for row in self.rows if row.target is not None]

    def section(self, title: str) -> Section | None:
        for section in self.sections:
            if section.title == title:
                return section
        return None
