"""Events, event targets and the listener list they keep."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import IntEnum
from functools import partial
from typing import Any, Optional, Union

from domkit.exceptions import InvalidStateError

_log = logging.getLogger(__name__)

_PASSIVE_BY_DEFAULT = frozenset({"touchstart", "touchmove", "wheel", "mousewheel"})


class EventPhase(IntEnum):
    """Phase of an event travelling through its path."""

    NONE = 0
    CAPTURING_PHASE = 1
    AT_TARGET = 2
    BUBBLING_PHASE = 3


@dataclass
class EventInit:
    bubbles: bool = False
    cancelable: bool = False
    composed: bool = False


@dataclass
class CustomEventInit(EventInit):
    detail: Any = None


@dataclass
class PathEntry:
    """One step of an event's propagation path."""

    invocation_target: EventTarget
    invocation_target_in_shadow_tree: bool = False
    shadow_adjusted_target: Optional[EventTarget] = None
    related_target: Optional[EventTarget] = None
    touch_target_list: list = field(default_factory=list)
    root_of_closed_tree: bool = False
    slot_in_closed_tree: bool = False


@dataclass
class EventListenerEntry:
    """A registered listener together with its flattened options."""

    type: str
    callback: Any
    capture: bool = False
    passive: Optional[bool] = None
    once: bool = False
    signal: Any = None
    removed: bool = False

    def matches(self, other: EventListenerEntry) -> bool:
        return (
            self.type == other.type
            and self.callback == other.callback
            and self.capture == other.capture
        )


@dataclass
class AddEventListenerOptions:
    capture: bool = False
    passive: Optional[bool] = None
    once: bool = False
    signal: Any = None


Options = Union[AddEventListenerOptions, bool, None]


def _flatten(type: str, callback: Any, options: Options) -> EventListenerEntry:
    if isinstance(options, AddEventListenerOptions):
        return EventListenerEntry(
            type=type,
            callback=callback,
            capture=options.capture,
            passive=options.passive,
            once=options.once,
            signal=options.signal,
        )
    return EventListenerEntry(type=type, callback=callback, capture=bool(options))


def _call_listener(callback: Any, event: Event) -> None:
    if callable(callback):
        callback(event)
    else:
        callback.handle_event(event)


class EventTarget:
    """An object that listeners can be attached to and events dispatched at."""

    def __init__(self) -> None:
        self.event_listeners: list[EventListenerEntry] = []

    def _passive_by_default(self) -> bool:
        return False

    def _remove_listener(self, listener: EventListenerEntry) -> None:
        listener.removed = True
        self.event_listeners[:] = [
            existing for existing in self.event_listeners if existing is not listener
        ]

    def add_event_listener(self, type: str, callback: Any, options: Options = False) -> None:
        listener = _flatten(type, callback, options)
        if callback is None:
            return
        if listener.signal is not None and listener.signal.aborted:
            return
        if listener.passive is None:
            listener.passive = type in _PASSIVE_BY_DEFAULT and self._passive_by_default()
        if any(existing.matches(listener) for existing in self.event_listeners):
            return
        self.event_listeners.append(listener)
        if listener.signal is not None:
            listener.signal.abort_algorithms.append(partial(self._remove_listener, listener))

    def remove_event_listener(self, type: str, callback: Any, options: Options = False) -> None:
        wanted = _flatten(type, callback, options)
        found = next(
            (existing for existing in self.event_listeners if existing.matches(wanted)), None
        )
        if found is not None:
            self._remove_listener(found)

    def remove_all_event_listeners(self) -> None:
        for listener in self.event_listeners:
            listener.removed = True
        self.event_listeners.clear()

    def get_the_parent(self, event: Event) -> Optional[EventTarget]:
        """Return the next target up the propagation path, or None."""
        return None

    def dispatch_event(self, event: Event) -> bool:
        """Dispatch *event* at this target; return False if it was canceled."""
        if event.dispatch_flag or not event.initialized_flag:
            raise InvalidStateError("Invalid State")
        event.is_trusted = False
        event.dispatch_flag = True
        try:
            event.target = self
            event.path.append(
                PathEntry(
                    invocation_target=self,
                    shadow_adjusted_target=self,
                    related_target=event.related_target,
                    touch_target_list=list(event.touch_target_list),
                )
            )
            parent = self.get_the_parent(event)
            while parent is not None:
                event.path.append(
                    PathEntry(
                        invocation_target=parent,
                        related_target=event.related_target,
                        touch_target_list=list(event.touch_target_list),
                    )
                )
                parent = parent.get_the_parent(event)

            for entry in reversed(event.path):
                event.event_phase = (
                    EventPhase.AT_TARGET
                    if entry.shadow_adjusted_target is not None
                    else EventPhase.CAPTURING_PHASE
                )
                _invoke(entry, event, capturing=True)

            for entry in event.path:
                if entry.shadow_adjusted_target is not None:
                    event.event_phase = EventPhase.AT_TARGET
                elif not event.bubbles:
                    continue
                else:
                    event.event_phase = EventPhase.BUBBLING_PHASE
                _invoke(entry, event, capturing=False)
        finally:
            event.event_phase = EventPhase.NONE
            event.current_target = None
            event.path.clear()
            event.dispatch_flag = False
            event.stop_propagation_flag = False
            event.stop_immediate_propagation_flag = False
        return not event.canceled_flag


def _invoke(entry: PathEntry, event: Event, capturing: bool) -> None:
    if event.stop_propagation_flag:
        return
    target = entry.invocation_target
    event.current_target = target
    for listener in list(target.event_listeners):
        if listener.removed or listener.type != event.type:
            continue
        if listener.capture != capturing:
            continue
        if listener.once:
            target._remove_listener(listener)
        if listener.passive:
            event.in_passive_listener_flag = True
        try:
            _call_listener(listener.callback, event)
        except Exception:
            _log.exception("listener for %r raised", event.type)
        finally:
            event.in_passive_listener_flag = False
        if event.stop_immediate_propagation_flag:
            break


class Event:
    """A plain event."""

    def __init__(self, type: str, event_init: Optional[EventInit] = None) -> None:
        init = event_init if event_init is not None else EventInit()
        self.type = type
        self.target: Optional[EventTarget] = None
        self.related_target: Optional[EventTarget] = None
        self.current_target: Optional[EventTarget] = None
        self.event_phase = EventPhase.NONE
        self.bubbles = init.bubbles
        self.cancelable = init.cancelable
        self.composed = init.composed
        self.is_trusted = False
        self.time_stamp = time.time() * 1000.0

        self.stop_propagation_flag = False
        self.stop_immediate_propagation_flag = False
        self.canceled_flag = False
        self.in_passive_listener_flag = False
        self.composed_flag = False
        self.initialized_flag = True
        self.dispatch_flag = False

        self.path: list[PathEntry] = []
        self.touch_target_list: list[EventTarget] = []

    @property
    def src_element(self) -> Optional[EventTarget]:
        return self.target

    @property
    def default_prevented(self) -> bool:
        return self.canceled_flag

    @property
    def cancel_bubble(self) -> bool:
        return self.stop_propagation_flag

    @cancel_bubble.setter
    def cancel_bubble(self, value: bool) -> None:
        if value:
            self.stop_propagation_flag = True

    @property
    def return_value(self) -> bool:
        return not self.canceled_flag

    @return_value.setter
    def return_value(self, value: bool) -> None:
        if not value:
            self.set_canceled_flag()

    def new_instance(self) -> Event:
        return Event(self.type, EventInit(self.bubbles, self.cancelable, self.composed))

    def init_event(self, type: str, bubbles: bool = False, cancelable: bool = False) -> None:
        if self.dispatch_flag:
            return
        self.is_trusted = False
        self.initialized_flag = True
        self.stop_propagation_flag = False
        self.stop_immediate_propagation_flag = False
        self.canceled_flag = False
        self.target = None
        self.type = type
        self.bubbles = bubbles
        self.cancelable = cancelable

    def stop_propagation(self) -> None:
        self.stop_propagation_flag = True

    def stop_immediate_propagation(self) -> None:
        self.stop_propagation_flag = True
        self.stop_immediate_propagation_flag = True

    def set_canceled_flag(self) -> None:
        if self.cancelable and not self.in_passive_listener_flag:
            self.canceled_flag = True

    def prevent_default(self) -> None:
        self.set_canceled_flag()

    def composed_path(self) -> list[EventTarget]:
        """Targets the listeners of this event can observe, outermost last."""
        path = self.path
        if not path:
            return []
        current = self.current_target
        composed = [current]

        current_index = 0
        hidden_level = 0
        for index in reversed(range(len(path))):
            entry = path[index]
            if entry.root_of_closed_tree:
                hidden_level += 1
            if entry.invocation_target is current:
                current_index = index
                break
            if entry.slot_in_closed_tree:
                hidden_level -= 1

        level = max_level = hidden_level
        for entry in reversed(path[:current_index]):
            if entry.root_of_closed_tree:
                level += 1
            if level <= max_level:
                composed.insert(0, entry.invocation_target)
            if entry.slot_in_closed_tree:
                level -= 1
                max_level = min(max_level, level)

        level = max_level = hidden_level
        for entry in path[current_index + 1:]:
            if entry.slot_in_closed_tree:
                level += 1
            if level <= max_level:
                composed.append(entry.invocation_target)
            if entry.root_of_closed_tree:
                level -= 1
                max_level = min(max_level, level)

        return composed


class MouseEvent(Event):
    """A pointer event."""


class CustomEvent(Event):
    """An event carrying an arbitrary detail value."""

    def __init__(
        self,
        type: str,
        event_init: Optional[CustomEventInit] = None,
        detail: Any = None,
    ) -> None:
        super().__init__(type, event_init)
        if event_init is not None and event_init.detail is not None:
            self.detail = event_init.detail
        else:
            self.detail = detail

    def init_custom_event(
        self,
        type: str,
        bubbles: bool = False,
        cancelable: bool = False,
        detail: Any = None,
    ) -> None:
        if self.dispatch_flag:
            return
        self.detail = detail
        self.init_event(type, bubbles, cancelable)

    def new_instance(self) -> CustomEvent:
        return CustomEvent(
            self.type,
            CustomEventInit(self.bubbles, self.cancelable, self.composed, self.detail),
            self.detail,
        )