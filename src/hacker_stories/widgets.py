from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button, ListItem, Static
from rich.text import Text

from .datamodels import StoriesState, Story


# --- UI Widgets ---
class StoryItem(ListItem):
    class Dismissed(Message):
        def __init__(self, story: Story) -> None:
            self.story = story
            super().__init__()

    def __init__(self, story: Story):
        super().__init__()
        self.story = story

    def compose(self) -> ComposeResult:
        with Horizontal(classes="story-container"):
            yield Static(self.story.title, classes="story-title")
            yield Static(self.story.author, classes="story-author")
            yield Static(f"{self.story.num_comments} comments", classes="story-comments")
            yield Static(f"{self.story.points} points", classes="story-points")
            yield Button("Dismiss", classes="dismiss")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Dismissed(self.story))


class StatusBar(Static):
    """Fetch phase, how many stories pass the filter, and key hints."""

    is_loading = reactive(False)
    is_error = reactive(False)
    shown = reactive(0)
    total = reactive(0)
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update(self.status_text)

    def set_keybindings(self, hint: str) -> None:
        self.keybinding_hint = hint

    def show_state(self, state: StoriesState, shown: int) -> None:
        self.is_loading = state.is_loading
        self.is_error = state.is_error
        self.shown = shown
        self.total = len(state.data)

    @property
    def status_text(self) -> str:
        if self.is_loading:
            status = "Loading ..."
        elif self.is_error:
            status = "Error loading stories."
        else:
            status = f"{self.shown} of {self.total} stories"
        if self.keybinding_hint:
            return f"{status} | {self.keybinding_hint}"
        return status

    def _refresh_status(self) -> None:
        self.update(self.status_text)

    watch_is_loading = _refresh_status
    watch_is_error = _refresh_status
    watch_shown = _refresh_status
    watch_total = _refresh_status
    watch_keybinding_hint = _refresh_status


class ErrorMessage(Static):
    def __init__(self, message: str, **kwargs):
        super().__init__(Text(message, style="bold red"), **kwargs)
