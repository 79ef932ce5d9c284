"""Tree materializer — turn any supported value into a live render-tree node.

Dispatch is by capability, checked in a fixed order because some values
have more than one (an asyncio.Future is also iterable):

    1. None or ""          -> comment placeholder
    2. a Node              -> itself
    3. str / int / float   -> text node
    4. other iterables     -> <slot> holding each item
    5. BaseObservable      -> <slot> re-rendered wholesale on every change
    6. BaseObservableArray -> <slot> patched per splice diff
    7. futures/awaitables  -> <slot> filled once, on success
    8. anything else       -> UnrenderableValueError

Observable slots subscribe with the slot itself as weak owner, so a slot
dropped from the tree stops listening once it is collected.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable, Mapping

from livetree._errors import UnrenderableValueError
from livetree.dom import Document, Element, Node, get_document
from livetree.observable import BaseObservable, BaseObservableArray, dispatch

logger = logging.getLogger("livetree.render")


def is_sequence(value: object) -> bool:
    """Iterable that should render item by item.

    Text, mappings, observables and awaitables are excluded.
    """
    return (
        isinstance(value, Iterable)
        and not isinstance(value, (str, bytes, bytearray, Mapping))
        and not isinstance(value, (BaseObservable, BaseObservableArray))
        and not inspect.isawaitable(value)
    )


def _is_future(value: object) -> bool:
    return callable(getattr(value, "add_done_callback", None))


def as_node(value: object, document: Document | None = None) -> Node:
    """Materialize value as a node of document (default: the current one)."""
    doc = document if document is not None else get_document()
    if value is None or (isinstance(value, str) and not value):
        return doc.create_comment("")
    if doc.is_node(value):
        return value
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return doc.create_text_node(str(value))
    if is_sequence(value):
        slot = doc.create_element("slot")
        for item in value:
            slot.append_child(as_node(item, doc))
        return slot
    if isinstance(value, BaseObservable):
        slot = doc.create_element("slot")
        value.listen(_update_slot, slot)
        return slot
    if isinstance(value, BaseObservableArray):
        slot = doc.create_element("slot")
        value.listen(_update_array_slot, slot)
        return slot
    if _is_future(value):
        return _await_into_slot(value, doc)
    if inspect.isawaitable(value):
        return _await_into_slot(asyncio.ensure_future(value), doc)
    raise UnrenderableValueError(value)


def _update_slot(slot: Element, value: object) -> None:
    slot.clear()
    slot.append_child(as_node(value, slot.owner_document))


def _update_array_slot(slot: Element, index: int, delete_count: int, *items) -> None:
    for _ in range(delete_count):
        slot.remove_child(slot.children[index])
    # None means append
    following = slot.children[index] if index < len(slot.children) else None
    for item in items:
        slot.insert_before(as_node(item, slot.owner_document), following)


def _await_into_slot(future, doc: Document) -> Element:
    slot = doc.create_element("slot")

    def _resolved(done) -> None:
        if done.cancelled():
            logger.debug("Awaited value was cancelled; keeping placeholder")
            return
        error = done.exception()
        if error is not None:
            logger.warning("Awaited value failed; keeping placeholder: %r", error)
            return
        dispatch(_update_slot, slot, done.result())

    future.add_done_callback(_resolved)
    return slot
