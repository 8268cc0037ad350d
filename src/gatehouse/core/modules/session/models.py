"""Session models."""

from datetime import datetime

from pydantic import BaseModel, Field

from gatehouse.utils import now


class Session(BaseModel):
    """Per-client volatile state, keyed externally by client host.

    ``authorized`` is only ever set by custom route handlers; nothing
    in the dispatcher grants or revokes it.
    """

    last_connection_time: datetime = Field(default_factory=now)
    authorized: bool = False

    def touch(self) -> None:
        """Record activity at the current time."""
        self.last_connection_time = now()
