import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from rich.text import Text

from kctx.exceptions import ExternalCommandError
from kctx.kubectl import use_context
from kctx.models import Context
from kctx.ui.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)

CANCEL_KEY = "ctrl+c"
QUIT_TEXT = "Good bye"


class PickerState(Enum):
    BROWSING = "browsing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    ERRORED = "errored"


class FilterState(Enum):
    UNFILTERED = "unfiltered"
    FILTERING = "filtering"  # user is typing the filter
    FILTER_APPLIED = "filter_applied"


@dataclass(frozen=True)
class ListEntry:
    """A context as shown in the list"""
    context: Context
    position: int  # 1-based, among the visible entries
    highlighted: bool = False

    @property
    def title(self) -> str:
        return self.context.name

    @property
    def active(self) -> bool:
        return self.context.selected

    def render(self, theme: Theme) -> Text:
        """Render the row using the style for its highlight/active flags"""
        style = theme.row_style(self.highlighted, self.active)
        return style.render(f"{self.position}. {self.title}")


class ContextPicker:
    """Interactive list of contexts that activates the one picked.

    Keeps the cursor, current page, filter and outcome of the pick. Events come
    in through handle_key() and resize(); view() returns the frame to draw.
    """

    def __init__(
        self,
        contexts: Iterable[Context],
        activate: Callable[[str], None] = None,
        theme: Theme = DEFAULT_THEME,
    ):
        self.contexts = tuple(contexts)
        self.theme = theme
        self.width = theme.default_width
        self.state = PickerState.BROWSING
        self.choice: Optional[str] = None
        self.error: Optional[str] = None
        self.filter_state = FilterState.UNFILTERED
        self.filter_text = ""
        self.cursor = 0
        self.show_full_help = False
        self._activate = activate or use_context

    @property
    def done(self) -> bool:
        """True once the pick has been confirmed, cancelled or has failed"""
        return self.state is not PickerState.BROWSING

    @property
    def visible(self) -> List[Context]:
        """Contexts passing the current filter, in listing order"""
        if not self.filter_text:
            return list(self.contexts)
        needle = self.filter_text.lower()
        return [c for c in self.contexts if needle in c.name.lower()]

    @property
    def highlighted(self) -> Optional[Context]:
        visible = self.visible
        if not visible:
            return None
        return visible[min(self.cursor, len(visible) - 1)]

    @property
    def page_size(self) -> int:
        return self.theme.page_size

    @property
    def page(self) -> int:
        return self.cursor // self.page_size

    @property
    def total_pages(self) -> int:
        count = len(self.visible)
        return max(1, -(-count // self.page_size))

    def entries(self) -> List[ListEntry]:
        """Entries on the current page"""
        start = self.page * self.page_size
        page = self.visible[start:start + self.page_size]
        return [
            ListEntry(context=c, position=start + i + 1, highlighted=start + i == self.cursor)
            for i, c in enumerate(page)
        ]

    def resize(self, width: int) -> None:
        """Track the terminal width; valid in any state"""
        self.width = width

    def handle_key(self, key: str, character: Optional[str] = None) -> None:
        """Apply a key press. Keys arriving after the pick is made are ignored."""
        if self.done:
            return
        if key == CANCEL_KEY:
            self.cancel()
            return
        if self.filter_state is FilterState.FILTERING:
            self._handle_filter_key(key, character)
            return

        char = character or ""
        if key == "enter":
            self.confirm()
        elif key == "escape":
            if self.filter_state is FilterState.FILTER_APPLIED:
                self.clear_filter()
            else:
                self.cancel()
        elif char == "q":
            self.cancel()
        elif key == "up" or char == "k":
            self.move(-1)
        elif key == "down" or char == "j":
            self.move(1)
        elif key in ("left", "pageup") or char == "h":
            self.prev_page()
        elif key in ("right", "pagedown") or char == "l":
            self.next_page()
        elif key == "home" or char == "g":
            self.cursor = 0
        elif key == "end" or char == "G":
            self.cursor = max(0, len(self.visible) - 1)
        elif char == "/":
            self.filter_state = FilterState.FILTERING
        elif char == "?":
            self.show_full_help = not self.show_full_help

    def _handle_filter_key(self, key: str, character: Optional[str]) -> None:
        if key == "enter":
            self.filter_state = (
                FilterState.FILTER_APPLIED if self.filter_text else FilterState.UNFILTERED
            )
        elif key == "escape":
            self.clear_filter()
        elif key == "backspace":
            self.set_filter(self.filter_text[:-1])
        elif character and character.isprintable():
            self.set_filter(self.filter_text + character)

    def move(self, delta: int) -> None:
        """Move the cursor by delta, staying within the visible entries"""
        count = len(self.visible)
        if count:
            self.cursor = max(0, min(count - 1, self.cursor + delta))

    def prev_page(self) -> None:
        """Jump to the first entry of the previous page"""
        if self.page > 0:
            self.cursor = (self.page - 1) * self.page_size

    def next_page(self) -> None:
        """Jump to the first entry of the next page"""
        if self.page < self.total_pages - 1:
            self.cursor = min(len(self.visible) - 1, (self.page + 1) * self.page_size)

    def set_filter(self, text: str) -> None:
        """Replace the filter text and go back to the first match"""
        self.filter_text = text
        self.cursor = 0

    def clear_filter(self) -> None:
        """Drop the filter and show every context again"""
        self.filter_state = FilterState.UNFILTERED
        self.set_filter("")

    def cancel(self) -> None:
        """Finish without activating anything"""
        self.state = PickerState.CANCELLED
        logger.debug("Selection cancelled")

    def confirm(self) -> None:
        """Activate the highlighted context and finish"""
        context = self.highlighted
        if context is None:
            self.cancel()
            return

        self.choice = context.name
        try:
            self._activate(context.name)
        except ExternalCommandError as exc:
            self.error = exc.message
            self.state = PickerState.ERRORED
            logger.debug("Activating %s failed: %s", context.name, exc.message)
        else:
            self.state = PickerState.CONFIRMED
            logger.debug("Activated %s", context.name)

    def view(self) -> Text:
        """The frame for the current state"""
        if self.state is PickerState.CONFIRMED:
            return self.theme.quit_text(f"Activating Context: {self.choice}")
        if self.state is PickerState.ERRORED:
            return self.theme.quit_text(self.error or "", style=self.theme.error_style)
        if self.state is PickerState.CANCELLED:
            return self.theme.quit_text(QUIT_TEXT)
        return self._list_view()

    def _list_view(self) -> Text:
        theme = self.theme
        lines = [Text(""), self._title_line(), Text(""), self._status_line(), Text("")]

        entries = self.entries()
        if entries:
            for entry in entries:
                row = entry.render(theme)
                row.truncate(self.width, overflow="ellipsis")
                lines.append(row)
        else:
            lines.append(Text(" " * theme.item_padding + "No contexts.", style=theme.status_style))

        lines.append(Text(""))
        if self.total_pages > 1:
            lines.append(self._pagination_line())
        lines.extend(self._help_lines())
        lines.append(Text(""))
        return Text("\n").join(lines)

    def _title_line(self) -> Text:
        theme = self.theme
        line = Text(" " * theme.title_margin)
        if self.filter_state is FilterState.FILTERING:
            line.append("Filter: ", style=theme.filter_prompt_style)
            line.append(self.filter_text)
            line.append("█", style=theme.filter_prompt_style)
        else:
            line.append(f" {theme.title} ", style=theme.title_style)
        return line

    def _status_line(self) -> Text:
        total = len(self.contexts)
        noun = "context" if total == 1 else "contexts"
        line = Text(" " * self.theme.title_margin, style=self.theme.status_style)
        if self.filter_state is FilterState.UNFILTERED:
            line.append(f"{total} {noun}")
        elif self.filter_state is FilterState.FILTER_APPLIED:
            line.append(f"“{self.filter_text}” {len(self.visible)} of {total} {noun}")
        else:
            line.append(f"{len(self.visible)} of {total} {noun}")
        return line

    def _pagination_line(self) -> Text:
        theme = self.theme
        line = Text(" " * theme.pagination_padding)
        if self.total_pages > theme.max_pagination_dots:
            line.append(f"{self.page + 1}/{self.total_pages}")
            return line
        for page in range(self.total_pages):
            active = page == self.page
            line.append(
                "•", style=theme.pagination_active_style if active else theme.pagination_inactive_style
            )
        return line

    def _help_lines(self) -> List[Text]:
        if self.filter_state is FilterState.FILTERING:
            groups = [["enter apply filter", "esc cancel"]]
        elif self.show_full_help:
            groups = [
                ["↑/k up", "↓/j down", "←/h/pgup prev page", "→/l/pgdn next page"],
                ["g/home go to start", "G/end go to end"],
                ["/ filter", "esc clear filter", "enter activate"],
                ["q quit", "ctrl+c force quit", "? close help"],
            ]
        else:
            filter_hint = "esc clear filter" if self.filter_state is FilterState.FILTER_APPLIED else "/ filter"
            groups = [["↑/k up", "↓/j down", filter_hint, "enter activate", "q quit", "? more"]]

        indent = " " * self.theme.help_padding
        return [Text(indent + " • ".join(group), style=self.theme.help_style) for group in groups]
