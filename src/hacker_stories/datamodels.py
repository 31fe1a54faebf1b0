from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Union

ObjectID = Union[int, str]


# --- Data models ---
@dataclass(frozen=True)
class Story:
    objectID: ObjectID
    title: str
    url: str
    author: str
    num_comments: int = 0
    points: int = 0

    @classmethod
    def from_hit(cls, hit: Mapping[str, Any]) -> Story:
        """Build a story from one Algolia search hit.

        Algolia sends ``null`` for missing titles, urls and counts, so those
        are normalised to empty strings and zeros.
        """
        if not isinstance(hit, Mapping):
            raise ValueError(f"hit is not an object: {hit!r}")
        object_id = hit.get("objectID")
        if object_id is None or object_id == "":
            raise ValueError("hit has no objectID")
        if isinstance(object_id, bool) or not isinstance(object_id, (int, str)):
            raise ValueError(f"objectID is not a string or integer: {object_id!r}")
        return cls(
            objectID=object_id,
            title=_text_field(hit, "title"),
            url=_text_field(hit, "url"),
            author=_text_field(hit, "author"),
            num_comments=max(0, _count_field(hit, "num_comments")),
            points=_count_field(hit, "points"),
        )


@dataclass(frozen=True)
class StoriesState:
    data: Tuple[Story, ...] = field(default_factory=tuple)
    is_loading: bool = False
    is_error: bool = False


def _text_field(hit: Mapping[str, Any], name: str) -> str:
    value = hit.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} is not a string: {value!r}")
    return value


def _count_field(hit: Mapping[str, Any], name: str) -> int:
    value = hit.get(name)
    if value is None:
        return 0
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} is not an integer: {value!r}")
    return value
