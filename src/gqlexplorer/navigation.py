"""History of visited pages with cursor capture and restore."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gqlexplorer import log
from gqlexplorer.errors import NavigationError
from gqlexplorer.pages.models import Page, Redraw


class NavigationState(str, Enum):
    EMPTY = "empty"
    VIEWING = "viewing"


@dataclass(frozen=True)
class HistoryEntry:
    """A page the user navigated away from.

    ``cursor`` is an opaque token owned by the renderer (row index, scroll
    offset, ...) and handed back verbatim on ``back()``.
    """

    page_name: str
    redraw: Redraw
    cursor: Any


class Navigator:
    """Stack-based page history.

    The active page is held outside the stack and pushed only when the user
    moves forward, so ``back()`` returns to exactly the page and cursor left.
    Re-rendering on ``back()`` goes through ``redraw``, which must work from
    already parsed data.
    """

    def __init__(self, redraw: Callable[[Redraw], Page]) -> None:
        self._redraw = redraw
        self._history: list[HistoryEntry] = []
        self._active: Page | None = None
        self._cursor: Any = None
        self._loading = False

    @property
    def state(self) -> NavigationState:
        return NavigationState.VIEWING if self._active is not None else NavigationState.EMPTY

    @property
    def active(self) -> Page | None:
        return self._active

    @property
    def cursor(self) -> Any:
        return self._cursor

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @contextmanager
    def loading(self) -> Iterator[None]:
        """Hold the navigator in its loading sub-state; no page is navigable meanwhile."""
        self._loading = True
        try:
            yield
        finally:
            self._loading = False

    def _ensure_not_loading(self, action: str) -> None:
        if self._loading:
            raise NavigationError(f"Cannot {action} while a schema is loading")

    def load_root(self, page: Page) -> None:
        self._ensure_not_loading("load a root page")
        self._history.clear()
        self._active = page
        self._cursor = None
        log.debug(f"Loaded root page '{page.name}'")

    def navigate(self, page: Page, cursor: Any = None) -> None:
        """Move forward to a page, remembering where the user was on the current one.

        Args:
            page: The page to activate
            cursor: The cursor position on the page being left

        Raises:
            NavigationError: If no root page is loaded or a schema is loading
        """
        self._ensure_not_loading("navigate")
        if self._active is None:
            raise NavigationError("Cannot navigate before a root page is loaded")

        self._history.append(HistoryEntry(self._active.name, self._active.source, cursor))
        self._active = page
        self._cursor = None
        log.debug(f"Navigated to '{page.name}' (history depth {len(self._history)})")

    def back(self) -> Page | None:
        """Return to the most recent page in history and restore its cursor.

        Returns:
            The re-rendered page, or None when there is no history to go back to
        """
        self._ensure_not_loading("go back")
        if not self._history:
            return None

        entry = self._history[-1]
        page = self._redraw(entry.redraw)
        self._history.pop()
        self._active = page
        self._cursor = entry.cursor
        log.debug(f"Went back to '{entry.page_name}' (history depth {len(self._history)})")
        return self._active

    def reset(self) -> None:
        self._history.clear()
        self._active = None
        self._cursor = None
