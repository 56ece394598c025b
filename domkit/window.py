"""The global window object."""

from __future__ import annotations

from domkit.events import Event, EventTarget


class Window(EventTarget):
    """A browsing context's global object."""

    def __init__(self) -> None:
        super().__init__()
        self.event = Event("click")

    def _passive_by_default(self) -> bool:
        return True