from io import StringIO

from rich.console import Console

from gqlexplorer.pages.builder import PageBuilder
from gqlexplorer.pages.models import Page, Row, Section, TypeRedraw
from gqlexplorer.renderer import ConsoleRenderer


def render(page: Page, cursor: object = None, show_descriptions: bool = True) -> str:
    output = StringIO()
    console = Console(file=output, width=120, color_system=None)
    ConsoleRenderer(console=console, show_descriptions=show_descriptions).render(page, cursor)
    return output.getvalue()


def test_render_numbers_navigable_rows(social_builder: PageBuilder) -> None:
    output = render(social_builder.root_page("social"))

    assert "social" in output
    assert "Queries" in output
    assert "Mutations" in output
    assert "  0  user(id: ID!): User" in output
    assert "  3  createUser(input: CreateUserInput!): User!" in output
    assert "Find a user" in output


def test_render_highlights_cursor_row(social_builder: PageBuilder) -> None:
    output = render(social_builder.build(TypeRedraw("User")), cursor=3)
    assert ">  3  friends: [User]" in output
    assert ">  0" not in output


def test_render_markers_and_plain_rows(social_builder: PageBuilder) -> None:
    output = render(social_builder.build(TypeRedraw("Role")))
    assert "GUEST  [deprecated: No guests]" in output
    assert "  0  " not in output


def test_render_hides_descriptions() -> None:
    page = Page(
        name="Custom",
        source=TypeRedraw("Custom"),
        sections=(Section("Fields", (Row(label="a", description="hidden text"),)),),
    )
    assert "hidden text" in render(page)
    assert "hidden text" not in render(page, show_descriptions=False)


def test_render_empty_page() -> None:
    assert "(empty)" in render(Page(name="Nothing", source=TypeRedraw("Nothing")))
