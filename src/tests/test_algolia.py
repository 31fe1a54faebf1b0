from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests

from hacker_stories.controller import StoriesController
from hacker_stories.datamodels import Story
from hacker_stories.exceptions import FetchError
from hacker_stories.sources.algolia import AlgoliaSource
from hacker_stories.storage import KeyValueStore

URL = "https://hn.algolia.com/api/v1/search?query=react"


@pytest.fixture
def algolia_source():
    return AlgoliaSource({"http_timeout": 3})


def mock_response(body=None, status_error=None, json_error=None):
    resp = MagicMock()
    if status_error:
        resp.raise_for_status.side_effect = status_error
    if json_error:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


def test_fetch_stories_parses_hits(algolia_source):
    body = {
        "hits": [
            {
                "objectID": "16582136",
                "title": "React 16.3",
                "url": "https://reactjs.org/blog",
                "author": "sophiebits",
                "num_comments": 84,
                "points": 412,
            },
            {
                "objectID": "1",
                "title": None,
                "url": None,
                "author": "pg",
                "num_comments": None,
                "points": 7,
            },
        ]
    }
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response(body)
        stories = algolia_source.fetch_stories(URL)

    mock_get.assert_called_once_with(URL, timeout=3)
    assert stories == [
        Story("16582136", "React 16.3", "https://reactjs.org/blog", "sophiebits", 84, 412),
        Story("1", "", "", "pg", 0, 7),
    ]


def test_fetch_stories_keeps_result_order(algolia_source):
    body = {"hits": [{"objectID": str(i), "title": f"t{i}"} for i in (3, 1, 2)]}
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response(body)
        stories = algolia_source.fetch_stories(URL)
    assert [s.objectID for s in stories] == ["3", "1", "2"]


def test_bad_status_raises_fetch_error(algolia_source):
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response(
            status_error=requests.HTTPError("503 Server Error")
        )
        with pytest.raises(FetchError) as excinfo:
            algolia_source.fetch_stories(URL)
    assert excinfo.value.url == URL


def test_network_error_raises_fetch_error(algolia_source):
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(FetchError):
            algolia_source.fetch_stories(URL)


def test_timeout_raises_fetch_error(algolia_source):
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.side_effect = requests.Timeout("read timed out")
        with pytest.raises(FetchError):
            algolia_source.fetch_stories(URL)


def test_invalid_json_raises_fetch_error(algolia_source):
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response(json_error=ValueError("Expecting value"))
        with pytest.raises(FetchError):
            algolia_source.fetch_stories(URL)


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"hits": None},
        {"hits": "nope"},
        ["not", "an", "object"],
        {"hits": ["not a hit"]},
        {"hits": [{"title": "no id"}]},
        {"hits": [{"objectID": "1", "num_comments": "many"}]},
        {"hits": [{"objectID": "1", "title": 123}]},
        {"hits": [{"objectID": "1", "url": {"href": "x"}}]},
        {"hits": [{"objectID": "1", "author": ["pg"]}]},
        {"hits": [{"objectID": "1", "points": float("inf")}]},
        {"hits": [{"objectID": "1", "points": 1.5}]},
        {"hits": [{"objectID": "1", "num_comments": True}]},
        {"hits": [{"objectID": True}]},
        {"hits": [{"objectID": ["1"]}]},
    ],
)
def test_malformed_body_raises_fetch_error(algolia_source, body):
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response(body)
        with pytest.raises(FetchError):
            algolia_source.fetch_stories(URL)


def test_negative_comment_count_is_clamped():
    story = Story.from_hit({"objectID": 5, "title": "x", "num_comments": -2})
    assert story.num_comments == 0
    assert story.objectID == 5


def test_malformed_hit_sets_error_state(algolia_source, tmp_path):
    controller = StoriesController(algolia_source, KeyValueStore(str(tmp_path / "state.json")))
    with patch.object(algolia_source.session, "get") as mock_get:
        mock_get.return_value = mock_response({"hits": [{"objectID": "1", "title": 123}]})
        applied = asyncio.run(controller.start())

    assert applied is True
    state = controller.current_state()
    assert state.is_error
    assert not state.is_loading
    assert controller.searched_stories() == []
