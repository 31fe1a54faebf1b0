from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .actions import RemoveStory
from .config import API_ENDPOINT, DEFAULT_SEARCH_TERM, SEARCH_STORAGE_KEY
from .datamodels import StoriesState, Story
from .fetcher import FetchOrchestrator
from .search import build_request_url, filter_stories
from .sources.base import Source
from .state import StoriesStore
from .storage import KeyValueStore, SemiPersistentState

logger = logging.getLogger("hacker_stories")


class StoriesController:
    """The operations a front end needs: search, type, dismiss, read state."""

    def __init__(
        self,
        source: Source,
        key_store: KeyValueStore,
        config: Optional[Dict[str, Any]] = None,
    ):
        self.config = config or {}
        self.endpoint = self.config.get("api_endpoint", API_ENDPOINT)
        self.store = StoriesStore()
        self.search_term = SemiPersistentState(
            key_store,
            SEARCH_STORAGE_KEY,
            self.config.get("default_search_term", DEFAULT_SEARCH_TERM),
        )
        self.orchestrator = FetchOrchestrator(self.store, source)

    @property
    def request_url(self) -> Optional[str]:
        return self.orchestrator.request_url

    def current_state(self) -> StoriesState:
        return self.store.state

    def searched_stories(self) -> List[Story]:
        return filter_stories(self.store.state.data, self.search_term.value)

    def subscribe(self, listener: Callable[[StoriesState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    async def start(self) -> bool:
        """Run the initial fetch for the stored search term."""
        url = build_request_url(self.endpoint, self.search_term.value)
        return await self.orchestrator.request(url)

    async def submit_search(self, term: Optional[str] = None) -> bool:
        """Point the request URL at ``term`` (default: the current term) and fetch.

        An empty term is refused and nothing is fetched.
        """
        if term is None:
            term = self.search_term.value
        if not term:
            logger.debug("Ignoring submit of an empty search term")
            return False
        url = build_request_url(self.endpoint, term)
        return await self.orchestrator.request(url)

    async def refresh(self) -> bool:
        if self.request_url is None:
            return await self.start()
        return await self.orchestrator.request(self.request_url)

    def change_search_term(self, term: str) -> None:
        self.search_term.set(term)

    def remove_story(self, story: Story) -> None:
        self.store.dispatch(RemoveStory(story))
