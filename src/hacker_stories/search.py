from __future__ import annotations

from typing import Iterable, List
from urllib.parse import quote

from .datamodels import Story


def build_request_url(endpoint: str, term: str) -> str:
    return f"{endpoint}{quote(term)}"


def filter_stories(stories: Iterable[Story], term: str) -> List[Story]:
    """Stories whose title contains ``term``, ignoring case, in original order."""
    query = term.lower()
    return [s for s in stories if query in s.title.lower()]
