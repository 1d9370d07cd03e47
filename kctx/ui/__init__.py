from kctx.ui.picker import ContextPicker, FilterState, ListEntry, PickerState
from kctx.ui.theme import DEFAULT_THEME, RowStyle, Theme

__all__ = [
    "ContextPicker",
    "FilterState",
    "ListEntry",
    "PickerState",
    "DEFAULT_THEME",
    "RowStyle",
    "Theme",
]
