"""Presentation-neutral pages derived from the type graph."""

from .builder import PageBuilder
from .models import (
    FieldRedraw,
    FieldTarget,
    Page,
    Redraw,
    RootEntry,
    RootRedraw,
    Row,
    Section,
    Target,
    TypeRedraw,
    TypeTarget,
)

__all__ = [
    "FieldRedraw",
    "FieldTarget",
    "Page",
    "PageBuilder",
    "Redraw",
    "RootEntry",
    "RootRedraw",
    "Row",
    "Section",
    "Target",
    "TypeRedraw",
    "TypeTarget",
]
