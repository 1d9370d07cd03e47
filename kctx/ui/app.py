import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from kctx.exceptions import StartupError
from kctx.ui.picker import ContextPicker

logger = logging.getLogger(__name__)


class PickerApp(App):
    """Full screen host for a ContextPicker"""

    # ctrl+c has to reach the picker rather than the default quit handling
    BINDINGS = [Binding("ctrl+c", "cancel", show=False, priority=True)]

    def __init__(self, picker: ContextPicker):
        super().__init__()
        self.picker = picker

    def compose(self) -> ComposeResult:
        yield Static(self.picker.view(), id="picker")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.picker.handle_key(event.key, event.character)
        self._refresh_picker()

    def on_resize(self, event: events.Resize) -> None:
        self.picker.resize(event.size.width)
        self._refresh_picker()

    def action_cancel(self) -> None:
        self.picker.handle_key("ctrl+c")
        self._refresh_picker()

    def _refresh_picker(self) -> None:
        if self.picker.done:
            self.exit(self.picker)
            return
        for view in self.query("#picker").results(Static):
            view.update(self.picker.view())


def run_picker(picker: ContextPicker) -> ContextPicker:
    """Run the picker until a context is picked or the user quits.

    Raises StartupError if the terminal UI fails.
    """
    app = PickerApp(picker)
    try:
        app.run()
    except Exception as exc:
        raise StartupError(str(exc)) from exc

    if app.return_code:
        raise StartupError(f"terminal UI exited with code {app.return_code}")
    if not picker.done:
        # closed by the framework itself, e.g. ctrl+q
        picker.cancel()
    logger.debug("Picker finished in state %s", picker.state.value)
    return picker
