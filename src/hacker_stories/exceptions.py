"""Domain-specific exceptions."""


class StoriesError(Exception):
    pass


class FetchError(StoriesError):
    """A search request failed: network, status, timeout or bad payload."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


class UnknownActionError(StoriesError, TypeError):
    """An object that is not a stories action reached the reducer."""
