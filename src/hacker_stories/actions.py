from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .datamodels import Story

FETCH_INIT = "STORIES_FETCH_INIT"
FETCH_SUCCESS = "STORIES_FETCH_SUCCESS"
FETCH_FAILURE = "STORIES_FETCH_FAILURE"
REMOVE_STORY = "REMOVE_STORY"


@dataclass(frozen=True)
class FetchInit:
    type = FETCH_INIT


@dataclass(frozen=True)
class FetchSuccess:
    payload: Tuple[Story, ...]
    type = FETCH_SUCCESS

    @classmethod
    def of(cls, stories: Sequence[Story]) -> FetchSuccess:
        return cls(payload=tuple(stories))


@dataclass(frozen=True)
class FetchFailure:
    type = FETCH_FAILURE


@dataclass(frozen=True)
class RemoveStory:
    payload: Story
    type = REMOVE_STORY


Action = Union[FetchInit, FetchSuccess, FetchFailure, RemoveStory]
