"""A DOM-style event model: events, event targets, abort signals, nodes and a window."""

__version__ = "0.1.0"
__all__ = ["abort", "events", "exceptions", "nodes", "window"]