from textual.message import Message

from .datamodels import StoriesState


class StoriesUpdated(Message):
    """A message carrying the stories state after a dispatch."""
    def __init__(self, state: StoriesState) -> None:
        self.state = state
        super().__init__()
