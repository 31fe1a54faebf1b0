from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import HTTP_RETRIES, HTTP_TIMEOUT, REQUEST_HEADERS
from ..datamodels import Story
from ..exceptions import FetchError
from .base import Source

logger = logging.getLogger("hacker_stories")


class AlgoliaSource(Source):
    """Hacker News search through the Algolia API; stories live under ``hits``."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.timeout = self.config.get("http_timeout", HTTP_TIMEOUT)
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        retries = Retry(
            total=self.config.get("http_retries", HTTP_RETRIES),
            backoff_factor=0.3,
            status_forcelist=[429, 500, 502, 503, 504],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def fetch_stories(self, url: str) -> List[Story]:
        logger.debug("Fetching %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as e:
            logger.warning("Search request failed for %s: %s", url, e)
            raise FetchError(url, str(e)) from e
        except ValueError as e:
            logger.warning("Search response from %s is not JSON: %s", url, e)
            raise FetchError(url, "invalid JSON") from e

        stories = _parse_hits(url, body)
        logger.debug("Fetched %d stories from %s", len(stories), url)
        return stories


def _parse_hits(url: str, body: Any) -> List[Story]:
    hits = body.get("hits") if isinstance(body, dict) else None
    if not isinstance(hits, list):
        logger.warning("Search response from %s has no hits list", url)
        raise FetchError(url, "response has no hits list")
    try:
        return [Story.from_hit(hit) for hit in hits]
    except (TypeError, ValueError, OverflowError) as e:
        logger.warning("Malformed hit in response from %s: %s", url, e)
        raise FetchError(url, f"malformed hit: {e}") from e
