import logging

import pytest

from domkit.events import (
    AddEventListenerOptions,
    CustomEvent,
    CustomEventInit,
    Event,
    EventInit,
    EventListenerEntry,
    EventPhase,
    EventTarget,
    MouseEvent,
    PathEntry,
)
from domkit.exceptions import InvalidStateError


class TreeTarget(EventTarget):
    def __init__(self, name, parent=None):
        super().__init__()
        self.name = name
        self.parent = parent

    def get_the_parent(self, event):
        return self.parent


@pytest.fixture
def tree():
    root = TreeTarget("root")
    mid = TreeTarget("mid", root)
    leaf = TreeTarget("leaf", mid)
    return root, mid, leaf


def test_event_defaults():
    event = Event("click")
    assert event.type == "click"
    assert event.bubbles is False
    assert event.cancelable is False
    assert event.initialized_flag is True
    assert event.event_phase == EventPhase.NONE
    assert event.target is None


def test_event_phase_numbers_during_dispatch(tree):
    root, mid, leaf = tree
    phases = []
    root.add_event_listener("click", lambda e: phases.append(int(e.event_phase)), True)
    leaf.add_event_listener("click", lambda e: phases.append(int(e.event_phase)))
    root.add_event_listener("click", lambda e: phases.append(int(e.event_phase)))
    event = Event("click", EventInit(bubbles=True))
    assert int(event.event_phase) == 0
    leaf.dispatch_event(event)
    assert phases == [1, 2, 3]
    assert int(event.event_phase) == 0


def test_event_init_is_applied():
    event = Event("click", EventInit(bubbles=True, cancelable=True, composed=True))
    assert (event.bubbles, event.cancelable, event.composed) == (True, True, True)


def test_prevent_default_requires_cancelable():
    event = Event("click")
    event.prevent_default()
    assert event.default_prevented is False
    assert event.return_value is True


def test_prevent_default_on_cancelable():
    event = Event("click", EventInit(cancelable=True))
    event.prevent_default()
    assert event.default_prevented is True
    assert event.return_value is False


def test_return_value_setter_cancels():
    event = Event("click", EventInit(cancelable=True))
    event.return_value = False
    assert event.default_prevented is True


def test_cancel_bubble_only_sets():
    event = Event("click")
    event.cancel_bubble = True
    event.cancel_bubble = False
    assert event.cancel_bubble is True
    assert event.stop_propagation_flag is True


def test_stop_immediate_propagation_sets_both_flags():
    event = Event("click")
    event.stop_immediate_propagation()
    assert event.stop_propagation_flag and event.stop_immediate_propagation_flag


def test_init_event_resets_state():
    event = Event("click", EventInit(cancelable=True))
    event.prevent_default()
    event.stop_propagation()
    event.init_event("keyup", bubbles=True, cancelable=False)
    assert event.type == "keyup"
    assert event.bubbles is True
    assert event.cancelable is False
    assert event.default_prevented is False
    assert event.stop_propagation_flag is False


def test_init_event_ignored_while_dispatching():
    target = EventTarget()
    event = Event("click")
    target.add_event_listener("click", lambda e: e.init_event("other"))
    target.dispatch_event(event)
    assert event.type == "click"


def test_duplicate_listener_ignored():
    target = EventTarget()
    handler = lambda e: None  # noqa: E731
    target.add_event_listener("click", handler)
    target.add_event_listener("click", handler)
    assert len(target.event_listeners) == 1


def test_capture_makes_distinct_listener():
    target = EventTarget()
    handler = lambda e: None  # noqa: E731
    target.add_event_listener("click", handler)
    target.add_event_listener("click", handler, True)
    assert [entry.capture for entry in target.event_listeners] == [False, True]


def test_options_are_flattened():
    target = EventTarget()
    handler = lambda e: None  # noqa: E731
    target.add_event_listener(
        "click", handler, AddEventListenerOptions(capture=True, passive=True, once=True)
    )
    assert target.event_listeners == [
        EventListenerEntry("click", handler, capture=True, passive=True, once=True)
    ]


def test_passive_defaults_to_false():
    target = EventTarget()
    target.add_event_listener("wheel", lambda e: None)
    assert target.event_listeners[0].passive is False


def test_none_callback_is_ignored():
    target = EventTarget()
    target.add_event_listener("click", None)
    assert target.event_listeners == []


def test_remove_event_listener():
    target = EventTarget()
    handler = lambda e: None  # noqa: E731
    target.add_event_listener("click", handler)
    entry = target.event_listeners[0]
    target.remove_event_listener("click", handler)
    assert target.event_listeners == []
    assert entry.removed is True


def test_remove_event_listener_respects_capture():
    target = EventTarget()
    handler = lambda e: None  # noqa: E731
    target.add_event_listener("click", handler, True)
    target.remove_event_listener("click", handler, False)
    assert len(target.event_listeners) == 1


def test_remove_all_event_listeners():
    target = EventTarget()
    target.add_event_listener("click", lambda e: None)
    target.add_event_listener("keyup", lambda e: None)
    entries = list(target.event_listeners)
    target.remove_all_event_listeners()
    assert target.event_listeners == []
    assert all(entry.removed for entry in entries)


def test_dispatch_calls_listener_and_sets_target():
    target = EventTarget()
    seen = []
    target.add_event_listener("click", lambda e: seen.append((e.target, e.current_target)))
    event = Event("click")
    assert target.dispatch_event(event) is True
    assert seen == [(target, target)]
    assert event.target is target
    assert event.current_target is None
    assert event.event_phase == EventPhase.NONE
    assert event.dispatch_flag is False


def test_dispatch_ignores_other_types():
    target = EventTarget()
    seen = []
    target.add_event_listener("keyup", seen.append)
    target.dispatch_event(Event("click"))
    assert seen == []


def test_dispatch_returns_false_when_canceled():
    target = EventTarget()
    target.add_event_listener("click", lambda e: e.prevent_default())
    assert target.dispatch_event(Event("click", EventInit(cancelable=True))) is False


def test_dispatch_order_through_parents(tree):
    root, mid, leaf = tree
    log = []
    for node in tree:
        node.add_event_listener(
            "click", lambda e, n=node: log.append((n.name, "capture", e.event_phase)), True
        )
        node.add_event_listener(
            "click", lambda e, n=node: log.append((n.name, "bubble", e.event_phase))
        )
    event = Event("click", EventInit(bubbles=True))
    assert leaf.dispatch_event(event) is True
    assert event.target is leaf
    assert log == [
        ("root", "capture", EventPhase.CAPTURING_PHASE),
        ("mid", "capture", EventPhase.CAPTURING_PHASE),
        ("leaf", "capture", EventPhase.AT_TARGET),
        ("leaf", "bubble", EventPhase.AT_TARGET),
        ("mid", "bubble", EventPhase.BUBBLING_PHASE),
        ("root", "bubble", EventPhase.BUBBLING_PHASE),
    ]


def test_non_bubbling_event_skips_ancestors(tree):
    root, mid, leaf = tree
    log = []
    root.add_event_listener("click", lambda e: log.append("root"))
    leaf.add_event_listener("click", lambda e: log.append("leaf"))
    leaf.dispatch_event(Event("click"))
    assert log == ["leaf"]


def test_stop_propagation_in_capture(tree):
    root, mid, leaf = tree
    log = []
    root.add_event_listener("click", lambda e: e.stop_propagation(), True)
    leaf.add_event_listener("click", lambda e: log.append("leaf"))
    leaf.dispatch_event(Event("click", EventInit(bubbles=True)))
    assert log == []


def test_stop_immediate_propagation_skips_remaining_listeners():
    target = EventTarget()
    log = []
    target.add_event_listener("click", lambda e: (log.append("first"), e.stop_immediate_propagation()))
    target.add_event_listener("click", lambda e: log.append("second"))
    target.dispatch_event(Event("click"))
    assert log == ["first"]


def test_once_listener_removed_after_first_dispatch():
    target = EventTarget()
    log = []
    target.add_event_listener("click", log.append, AddEventListenerOptions(once=True))
    target.dispatch_event(Event("click"))
    target.dispatch_event(Event("click"))
    assert len(log) == 1
    assert target.event_listeners == []


def test_passive_listener_cannot_cancel():
    target = EventTarget()
    target.add_event_listener(
        "click", lambda e: e.prevent_default(), AddEventListenerOptions(passive=True)
    )
    event = Event("click", EventInit(cancelable=True))
    assert target.dispatch_event(event) is True
    assert event.default_prevented is False


def test_redispatch_during_dispatch_raises():
    target = EventTarget()
    messages = []

    def handler(event):
        with pytest.raises(InvalidStateError) as info:
            target.dispatch_event(event)
        messages.append(info.value.message)

    target.add_event_listener("click", handler)
    event = Event("click")
    assert target.dispatch_event(event) is True
    assert messages == ["Invalid State"]
    assert event.dispatch_flag is False


def test_uninitialized_event_raises():
    event = Event("click")
    event.initialized_flag = False
    with pytest.raises(InvalidStateError):
        EventTarget().dispatch_event(event)


def test_listener_exception_is_logged_and_dispatch_continues(caplog):
    target = EventTarget()
    log = []

    def broken(event):
        raise RuntimeError("bad listener")

    target.add_event_listener("click", broken)
    target.add_event_listener("click", lambda e: log.append("ok"))
    with caplog.at_level(logging.ERROR):
        target.dispatch_event(Event("click"))
    assert log == ["ok"]
    assert "bad listener" in caplog.text


def test_object_with_handle_event_is_called():
    class Listener:
        def __init__(self):
            self.events = []

        def handle_event(self, event):
            self.events.append(event.type)

    listener = Listener()
    target = EventTarget()
    target.add_event_listener("click", listener)
    target.dispatch_event(Event("click"))
    assert listener.events == ["click"]


def test_composed_path_during_dispatch(tree):
    root, mid, leaf = tree
    paths = []
    for node in tree:
        node.add_event_listener("click", lambda e: paths.append(e.composed_path()))
    event = Event("click", EventInit(bubbles=True))
    leaf.dispatch_event(event)
    assert paths == [[leaf, mid, root]] * 3
    assert event.composed_path() == []


def test_new_instance_copies_init():
    event = Event("click", EventInit(bubbles=True, cancelable=True))
    copy = event.new_instance()
    assert copy is not event
    assert (copy.type, copy.bubbles, copy.cancelable) == ("click", True, True)


def test_mouse_event_is_an_event():
    target = EventTarget()
    seen = []
    target.add_event_listener("click", seen.append)
    event = MouseEvent("click")
    target.dispatch_event(event)
    assert seen == [event]


def test_custom_event_detail_from_init():
    event = CustomEvent("ping", CustomEventInit(bubbles=True, detail={"n": 1}))
    assert event.detail == {"n": 1}
    assert event.bubbles is True


def test_custom_event_detail_argument():
    assert CustomEvent("ping", detail="payload").detail == "payload"


def test_init_custom_event():
    event = CustomEvent("ping")
    event.init_custom_event("pong", True, True, detail=[1, 2])
    assert (event.type, event.bubbles, event.cancelable, event.detail) == ("pong", True, True, [1, 2])


def test_custom_event_new_instance_keeps_detail():
    event = CustomEvent("ping", CustomEventInit(cancelable=True, detail="payload"))
    copy = event.new_instance()
    assert isinstance(copy, CustomEvent)
    assert (copy.type, copy.cancelable, copy.detail) == ("ping", True, "payload")