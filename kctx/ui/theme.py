from dataclasses import dataclass
from typing import Tuple

from rich.text import Text


@dataclass(frozen=True)
class RowStyle:
    """How a single list row is drawn"""
    padding: int
    cursor: str = ""
    border: str = ""
    style: str = ""

    def render(self, text: str) -> Text:
        """Render row text with border, padding and cursor applied"""
        row = Text(self.border + " " * self.padding)
        row.append(self.cursor + text, style=self.style)
        return row


@dataclass(frozen=True)
class Theme:
    """Colors, spacing and dimensions of the picker"""
    title: str = "Which Context to load?"
    title_style: str = "#ffffd7 on #5f5fd7"
    title_margin: int = 2
    accent: str = "#94e2d5"
    border: str = "*"
    cursor: str = "> "
    item_padding: int = 4
    highlighted_padding: int = 2
    active_padding: int = 3
    active_highlighted_padding: int = 1
    status_style: str = "#777777"
    filter_prompt_style: str = "#ee6ff8"
    pagination_padding: int = 4
    pagination_active_style: str = "#dddddd"
    pagination_inactive_style: str = "#4a4a4a"
    max_pagination_dots: int = 10
    help_padding: int = 4
    help_style: str = "#626262"
    quit_margin: Tuple[int, int, int, int] = (1, 0, 2, 4)  # top, right, bottom, left
    error_style: str = "red"
    list_height: int = 14
    default_width: int = 20

    @property
    def page_size(self) -> int:
        # title, status bar, pagination and help take 7 lines of list_height
        return max(1, self.list_height - 7)

    def row_style(self, highlighted: bool, active: bool) -> RowStyle:
        """Pick the row treatment for a highlight/active combination"""
        return {
            (False, False): RowStyle(padding=self.item_padding),
            (True, False): RowStyle(
                padding=self.highlighted_padding, cursor=self.cursor, style=self.accent
            ),
            (False, True): RowStyle(padding=self.active_padding, border=self.border),
            (True, True): RowStyle(
                padding=self.active_highlighted_padding,
                cursor=self.cursor,
                border=self.border,
                style=self.accent,
            ),
        }[(highlighted, active)]

    def quit_text(self, message: str, style: str = "") -> Text:
        """Render a final message inside the quit margin"""
        top, _, bottom, left = self.quit_margin
        indent = " " * left
        body = "\n".join(indent + line for line in (message.splitlines() or [""]))
        text = Text("\n" * top)
        text.append(body, style=style)
        text.append("\n" * bottom)
        return text


DEFAULT_THEME = Theme()
