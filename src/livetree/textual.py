"""Textual integration for livetree. Opt-in — requires textual.

Mirrors a live render-tree node into a Textual widget. Guarding, NoMatches
handling and thread marshaling all happen here, not at callsites; the core
engine stays unaware of Textual.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from livetree.dom import Node

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend mirroring during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _text(node: Node) -> str:
    return node.text_content


def mirror(app, node: Node, selector: str, *, render=_text):
    """Keep the widget at selector showing render(node).

    Re-renders on every mutation anywhere in the node's document, not only
    inside the node's subtree: the document keeps a single version counter,
    so a change elsewhere still costs one render(node). Skips updates while
    the app is paused or not running, swallows NoMatches from the widget
    query, and marshals background-thread mutations via call_from_thread.

    Returns the unsubscribe handle.
    """
    if node.owner_document is None:
        raise ValueError(f"{node!r} does not belong to a document")
    _main = threading.get_ident()

    def _guarded(_version):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe)
        else:
            _safe()

    def _safe():
        try:
            app.query_one(selector).update(render(node))
        except NoMatches:
            pass

    return node.owner_document.version.listen(_guarded)
