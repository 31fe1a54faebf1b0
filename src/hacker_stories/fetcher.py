from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .actions import FetchFailure, FetchInit, FetchSuccess
from .datamodels import Story
from .exceptions import FetchError
from .sources.base import Source
from .state import StoriesStore

logger = logging.getLogger("hacker_stories")


@dataclass(frozen=True)
class FetchCycle:
    id: int
    url: str


class FetchOrchestrator:
    """Runs one fetch cycle per request URL and feeds the results to the store.

    Every cycle dispatches FETCH_INIT first and at most one terminal action
    afterwards. Only the most recent cycle may deliver that terminal action;
    results of superseded cycles are dropped.
    """

    def __init__(self, store: StoriesStore, source: Source):
        self.store = store
        self.source = source
        self.request_url: Optional[str] = None
        self._current: Optional[FetchCycle] = None
        self._ids = itertools.count(1)

    @property
    def current_cycle(self) -> Optional[FetchCycle]:
        return self._current

    def is_current(self, cycle: FetchCycle) -> bool:
        return cycle == self._current and cycle.url == self.request_url

    def begin(self, url: str) -> FetchCycle:
        self.request_url = url
        cycle = FetchCycle(id=next(self._ids), url=url)
        self._current = cycle
        logger.info("Fetch cycle %d started for %s", cycle.id, url)
        self.store.dispatch(FetchInit())
        return cycle

    def succeed(self, cycle: FetchCycle, stories: Sequence[Story]) -> bool:
        if not self.is_current(cycle):
            logger.info("Discarding stale result of fetch cycle %d", cycle.id)
            return False
        self.store.dispatch(FetchSuccess.of(stories))
        return True

    def fail(self, cycle: FetchCycle, error: FetchError) -> bool:
        if not self.is_current(cycle):
            logger.info("Discarding stale failure of fetch cycle %d: %s", cycle.id, error)
            return False
        logger.warning("Fetch cycle %d failed: %s", cycle.id, error)
        self.store.dispatch(FetchFailure())
        return True

    async def request(self, url: str) -> bool:
        """Fetch ``url``; returns False if a newer cycle superseded this one."""
        cycle = self.begin(url)
        try:
            stories = await asyncio.to_thread(self.source.fetch_stories, url)
        except FetchError as e:
            return self.fail(cycle, e)
        return self.succeed(cycle, stories)
