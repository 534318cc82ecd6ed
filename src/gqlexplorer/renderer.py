from typing import Any, Protocol

from rich.console import Console
from rich.text import Text

from gqlexplorer.pages.models import Page


class Renderer(Protocol):
    def render(self, page: Page, cursor: Any = None) -> None: ...


class ConsoleRenderer:
    """Draws pages on a Rich console.

    Navigable rows are numbered from 0 in page order; the cursor is the number
    of the highlighted row.
    """

    def __init__(self, console: Console | None = None, show_descriptions: bool = True) -> None:
        self.console = console or Console()
        self.show_descriptions = show_descriptions

    def render(self, page: Page, cursor: Any = None) -> None:
        self.console.rule(Text(page.name, style="bold blue"))
        if not page.sections:
            self.console.print(Text("(empty)", style="dim"))
            return

        index = 0
        for section in page.sections:
            self.console.print(Text(section.title, style="bold"))
            for row in section.rows:
                number: int | None = None
                if row.target is not None:
                    number = index
                    index += 1
                self.console.print(self._row_text(row.text, number, row.marker, number is not None and number == cursor))
                if self.show_descriptions and row.description and row.description != row.text:
                    self.console.print(Text(f"      {row.description}", style="dim"))
            self.console.print()

    def _row_text(self, text: str, number: int | None, marker: str | None, selected: bool) -> Text:
        prefix = f"{'>' if selected else ' '}{number:>3}  " if number is not None else "      "
        line = Text(prefix)
        line.append(text, style="reverse" if selected else ("cyan" if number is not None else ""))
        if marker:
            line.append(f"  [{marker}]", style="yellow")
        return line
