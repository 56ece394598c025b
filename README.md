# domkit

A small, dependency-free model of the DOM event system in Python. It covers
events, event targets with listener bookkeeping and dispatch, abort signals
and controllers, a minimal node tree with documents, and a window object.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Events

```python
from domkit.events import Event, EventInit, CustomEvent, CustomEventInit

event = Event("click", EventInit(bubbles=True, cancelable=True))
event.prevent_default()
assert event.default_prevented
assert event.return_value is False

custom = CustomEvent("ping", CustomEventInit(detail={"count": 1}))
assert custom.detail == {"count": 1}
custom.init_custom_event("pong", True, False, "payload")
```

- `prevent_default()` (and setting `return_value = False`) marks the event as
  canceled only if it is cancelable and not inside a passive listener.
- `stop_propagation()` and `stop_immediate_propagation()` set the matching
  flags; `cancel_bubble = True` is the same as `stop_propagation()`.
- `init_event()` and `init_custom_event()` reset the event and do nothing
  while the event is being dispatched.
- `composed_path()` returns the targets along the event's path as seen from
  its current target, honouring entries marked as closed shadow roots or
  slots. Outside dispatch it returns an empty list.
- `new_instance()` makes a fresh event of the same class with the same type,
  options and (for `CustomEvent`) detail.
- `MouseEvent` is a plain `Event` subclass. `EventPhase` lists the phases.

## Event targets

```python
from domkit.events import AddEventListenerOptions, Event, EventInit, EventTarget

seen = []

def handler(event):
    seen.append(event.type)

target = EventTarget()
target.add_event_listener("click", handler, False)
target.add_event_listener("keyup", handler, AddEventListenerOptions(once=True))

assert target.dispatch_event(Event("click")) is True
assert seen == ["click"]

target.remove_event_listener("click", handler, False)
target.remove_all_event_listeners()
```

A listener is identified by its type, callback and capture flag; adding the
same triple twice keeps only one entry. A callback may be a callable or an
object with a `handle_event(event)` method. A `None` callback, or a signal
that is already aborted, means the listener is not added.

`dispatch_event(event)` builds the path by following `get_the_parent()`,
runs capturing listeners from the outermost target inwards, then
non-capturing listeners at the target and, for bubbling events, outwards.
`once` listeners are removed before they run, `passive` listeners cannot
cancel the event, and an exception raised by a listener is logged rather
than propagated. It returns `False` if the event was canceled. Dispatching
an event that is already being dispatched raises
`domkit.exceptions.InvalidStateError`.

## Aborting

```python
from domkit.abort import AbortController, AbortSignal
from domkit.events import AddEventListenerOptions, EventTarget
from domkit.exceptions import AbortError

target = EventTarget()
controller = AbortController()
target.add_event_listener(
    "click", print, AddEventListenerOptions(signal=controller.signal)
)
controller.abort("done")          # removes the listener and fires "abort"
assert controller.signal.aborted
try:
    controller.signal.throw_if_aborted()
except AbortError as error:
    assert str(error) == "done"
```

- `AbortSignal.abort(reason)` returns an already-aborted signal; without a
  reason it carries an `AbortError("Aborting...")`.
- `AbortSignal.timeout(milliseconds)` returns a signal that aborts with a
  `TimeoutError` after that many milliseconds, on a background timer. A
  negative value raises `ValueError`.
- `AbortSignal.any(signals)` returns a signal that aborts when any of the
  given signals does, or one already aborted with the first aborted
  signal's reason.
- `throw_if_aborted()` raises the reason if it is an exception, otherwise an
  `AbortError` with the reason as its message.
- On abort the signal runs its abort algorithms, calls `onabort` if set and
  dispatches an `"abort"` event at itself.

## Nodes and windows

`domkit.nodes` provides `NodeType`, `DocumentPosition`, `NodeList`, `Node`
and `Document`:

- `NodeList.item(index)` returns the node or `None`; the list also supports
  `len()`, iteration and indexing.
- `Node` keeps `parent_node` and `child_nodes`, and derives `first_child`,
  `last_child`, `previous_sibling`, `next_sibling`, `is_connected`,
  `owner_document` and `base_uri` from them. `has_child_nodes()` reports
  whether it has children. During dispatch an event travels from a node to
  its `parent_node`.
- `Document` is a node whose parent during dispatch is its `default_view`,
  except for `"load"` events.

`domkit.window` provides `Window`, an event target holding an `event`
attribute. On a window, and on a document, listeners for `touchstart`,
`touchmove`, `wheel` and `mousewheel` are passive unless told otherwise.

## What it does not do

There is no parser, serializer, element or attribute model, text nodes,
ranges or tree-mutation methods such as appending or removing children;
trees are built by setting `parent_node` and `child_nodes` directly.
Dispatch does not compute shadow-tree retargeting or activation behaviour.