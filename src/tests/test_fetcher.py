from __future__ import annotations

import asyncio
import threading
from typing import Dict, List
from unittest.mock import MagicMock

import pytest

from hacker_stories.actions import FetchFailure, FetchInit, FetchSuccess
from hacker_stories.datamodels import StoriesState, Story
from hacker_stories.exceptions import FetchError
from hacker_stories.fetcher import FetchOrchestrator
from hacker_stories.sources.base import Source
from hacker_stories.state import StoriesStore


def make_story(object_id, title="React"):
    return Story(objectID=object_id, title=title, url="", author="kim")


class FakeSource(Source):
    def __init__(self, results: Dict[str, object]):
        super().__init__({})
        self.results = results
        self.requested: List[str] = []

    def fetch_stories(self, url: str) -> List[Story]:
        self.requested.append(url)
        result = self.results[url]
        if isinstance(result, Exception):
            raise result
        return result


class BlockingSource(FakeSource):
    """Holds back the answer for ``slow_url`` until ``release`` is set."""

    def __init__(self, results: Dict[str, object], slow_url: str):
        super().__init__(results)
        self.slow_url = slow_url
        self.release = threading.Event()

    def fetch_stories(self, url: str) -> List[Story]:
        if url == self.slow_url:
            self.release.wait(timeout=5)
        return super().fetch_stories(url)


def recording_store():
    store = StoriesStore()
    store.dispatch = MagicMock(wraps=store.dispatch)
    return store


def dispatched_types(store):
    return [type(call.args[0]) for call in store.dispatch.call_args_list]


def test_successful_cycle_dispatches_init_then_success():
    store = recording_store()
    source = FakeSource({"u1": [make_story(1)]})
    orchestrator = FetchOrchestrator(store, source)

    applied = asyncio.run(orchestrator.request("u1"))

    assert applied is True
    assert dispatched_types(store) == [FetchInit, FetchSuccess]
    assert store.state == StoriesState(data=(make_story(1),))
    assert source.requested == ["u1"]
    assert orchestrator.request_url == "u1"


def test_failed_cycle_dispatches_init_then_failure():
    store = recording_store()
    source = FakeSource({"u1": FetchError("u1", "503 Server Error")})
    orchestrator = FetchOrchestrator(store, source)

    applied = asyncio.run(orchestrator.request("u1"))

    assert applied is True
    assert dispatched_types(store) == [FetchInit, FetchFailure]
    assert store.state.is_error
    assert not store.state.is_loading


def test_state_is_loading_while_request_is_in_flight():
    store = StoriesStore()
    source = BlockingSource({"slow": [make_story(1)]}, slow_url="slow")
    orchestrator = FetchOrchestrator(store, source)

    async def scenario():
        task = asyncio.ensure_future(orchestrator.request("slow"))
        await asyncio.sleep(0)
        loading = store.state.is_loading
        source.release.set()
        await task
        return loading

    assert asyncio.run(scenario()) is True
    assert not store.state.is_loading


def test_unexpected_errors_propagate():
    store = StoriesStore()
    source = FakeSource({"u1": RuntimeError("bug")})
    orchestrator = FetchOrchestrator(store, source)

    with pytest.raises(RuntimeError):
        asyncio.run(orchestrator.request("u1"))
    assert store.state.is_loading


def test_stale_result_is_discarded():
    store = recording_store()
    orchestrator = FetchOrchestrator(store, FakeSource({}))

    old = orchestrator.begin("old")
    new = orchestrator.begin("new")

    assert orchestrator.succeed(old, [make_story(1)]) is False
    assert store.state.is_loading
    assert orchestrator.succeed(new, [make_story(2)]) is True
    assert orchestrator.fail(old, FetchError("old", "timeout")) is False

    assert dispatched_types(store) == [FetchInit, FetchInit, FetchSuccess]
    assert store.state.data == (make_story(2),)
    assert not store.state.is_error


def test_repeated_url_starts_a_fresh_cycle():
    orchestrator = FetchOrchestrator(StoriesStore(), FakeSource({}))
    first = orchestrator.begin("same")
    second = orchestrator.begin("same")

    assert first != second
    assert not orchestrator.is_current(first)
    assert orchestrator.is_current(second)


def test_slow_early_response_does_not_overwrite_newer_one():
    store = StoriesStore()
    source = BlockingSource(
        {"react": [make_story(1, "React")], "vue": [make_story(2, "Vue")]},
        slow_url="react",
    )
    orchestrator = FetchOrchestrator(store, source)

    async def scenario():
        slow = asyncio.ensure_future(orchestrator.request("react"))
        await asyncio.sleep(0)
        fast_applied = await orchestrator.request("vue")
        source.release.set()
        slow_applied = await slow
        return fast_applied, slow_applied

    fast_applied, slow_applied = asyncio.run(scenario())

    assert fast_applied is True
    assert slow_applied is False
    assert store.state.data == (make_story(2, "Vue"),)
    assert orchestrator.request_url == "vue"
