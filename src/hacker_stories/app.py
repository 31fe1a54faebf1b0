from __future__ import annotations

import logging
import webbrowser
from typing import Any, Awaitable, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Button,
    Header,
    Input,
    ListView,
    LoadingIndicator,
    Static,
)

from .config import DEFAULT_THEME, HN_ITEM_URL, UI_DEFAULTS, load_themes
from .controller import StoriesController
from .datamodels import StoriesState, Story
from .messages import StoriesUpdated
from .search import filter_stories
from .widgets import ErrorMessage, StatusBar, StoryItem

logger = logging.getLogger("hacker_stories")


class HackerStoriesApp(App):
    TITLE = "My Hacker Stories"
    SUB_TITLE = "Hacker News search"

    CSS_PATH = "app.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("d", "dismiss_story", "Dismiss"),
        Binding("o", "open_story", "Open in browser"),
        Binding("/", "focus_search", "Search"),
        Binding("ctrl+p", "command_palette", "Commands"),
    ]

    def __init__(
        self,
        controller: StoriesController,
        theme: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.controller = controller
        self.config = config or {}
        self._theme_name = theme or DEFAULT_THEME

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            with Horizontal(id="search-bar"):
                yield Static("Search:", classes="search-label")
                yield Input(
                    value=self.controller.search_term.value,
                    placeholder="Search Hacker News...",
                    id="search",
                )
                yield Button(
                    "Submit",
                    id="submit",
                    disabled=not self.controller.search_term.value,
                )
            yield ErrorMessage("Something went wrong ...", id="stories-error")
            yield LoadingIndicator(id="stories-loading")
            yield ListView(id="stories-list")
        yield StatusBar()

    def on_mount(self) -> None:
        for name, theme in load_themes(self.config).items():
            if name not in self.available_themes:
                self.register_theme(theme)
        self.theme = self._theme_name

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(
            keybindings_text.format(color="$accent")
        )

        self.controller.subscribe(lambda state: self.post_message(StoriesUpdated(state)))
        self._render_state(self.controller.current_state())
        self.query_one("#search", Input).focus()

        self._run_fetch(self.controller.start())

    def _run_fetch(self, fetch: Awaitable[bool]) -> None:
        self.run_worker(fetch, name="stories_loader", group="stories")

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "stories_loader":
            return
        if event.state is WorkerState.ERROR:
            logger.error("Stories worker failed: %s", event.worker.error)
        elif event.state is WorkerState.SUCCESS and event.worker.result is False:
            logger.debug("Stories worker finished without applying its result")

    def on_stories_updated(self, message: StoriesUpdated) -> None:
        self._render_state(message.state)

    def _render_state(self, state: StoriesState) -> None:
        visible = filter_stories(state.data, self.controller.search_term.value)

        self.query_one("#stories-loading", LoadingIndicator).display = state.is_loading
        self.query_one("#stories-error", ErrorMessage).display = state.is_error
        stories_list = self.query_one("#stories-list", ListView)
        stories_list.display = not state.is_loading

        self.query_one(StatusBar).show_state(state, len(visible))

        self._update_stories_list(visible)

    def _update_stories_list(self, stories: List[Story]) -> None:
        stories_list = self.query_one("#stories-list", ListView)
        stories_list.clear()
        for story in stories:
            stories_list.append(StoryItem(story))

    def _highlighted_story(self) -> Optional[Story]:
        item = self.query_one("#stories-list", ListView).highlighted_child
        if isinstance(item, StoryItem):
            return item.story
        return None

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search":
            return
        self.controller.change_search_term(event.value)
        self.query_one("#submit", Button).disabled = not event.value
        self._render_state(self.controller.current_state())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search":
            self.action_submit_search()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.action_submit_search()

    def on_story_item_dismissed(self, message: StoryItem.Dismissed) -> None:
        self.controller.remove_story(message.story)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, StoryItem):
            self._open_story(event.item.story)

    def _open_story(self, story: Story) -> None:
        url = story.url or HN_ITEM_URL.format(object_id=story.objectID)
        logger.info("Opening %s", url)
        webbrowser.open(url)

    def action_submit_search(self) -> None:
        if not self.controller.search_term.value:
            return
        self._run_fetch(self.controller.submit_search())

    def action_refresh(self) -> None:
        self._run_fetch(self.controller.refresh())

    def action_dismiss_story(self) -> None:
        story = self._highlighted_story()
        if story is not None:
            self.controller.remove_story(story)

    def action_open_story(self) -> None:
        story = self._highlighted_story()
        if story is not None:
            self._open_story(story)

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()
