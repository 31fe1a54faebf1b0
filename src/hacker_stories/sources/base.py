from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..datamodels import Story


class Source(ABC):
    """Abstract base class for a story search backend."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    def fetch_stories(self, url: str) -> List[Story]:
        """Return the stories found at ``url``.

        Raises FetchError for anything that is not a usable result.
        """
        pass
