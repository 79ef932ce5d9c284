"""In-memory render tree.

A deliberately small DOM: elements with attributes, classes, properties and
event listeners; text and comment leaves; a Document owning head and body.
This is the node API the materializer and builder drive — create, append,
insert-before, remove, clear — and nothing more.

Every mutation of a node bumps its owner document's ``version`` observable,
so anything that mirrors the tree elsewhere (see livetree.textual) can
subscribe to one place.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Callable, Iterator

from livetree.observable import Observable


class Node:
    """Base render-tree node."""

    def __init__(self, document: Document | None = None) -> None:
        self.owner_document = document
        self.parent: Node | None = None
        self.children: list[Node] = []

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self.children)

    def append_child(self, child: Node) -> Node:
        return self.insert_before(child, None)

    def append(self, *nodes: Node) -> None:
        for node in nodes:
            self.insert_before(node, None)

    def insert_before(self, child: Node, reference: Node | None) -> Node:
        """Insert child before reference, or at the end when reference is None."""
        if child.parent is not None:
            child.parent.remove_child(child)
        if reference is None:
            self.children.append(child)
        else:
            self.children.insert(self.children.index(reference), child)
        child.parent = self
        self._touch()
        return child

    def remove_child(self, child: Node) -> Node:
        self.children.remove(child)
        child.parent = None
        self._touch()
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)

    def clear(self) -> None:
        for child in self.children:
            child.parent = None
        self.children.clear()
        self._touch()

    def _touch(self) -> None:
        if self.owner_document is not None:
            self.owner_document.touch()


class Text(Node):
    def __init__(self, data: str, document: Document | None = None) -> None:
        super().__init__(document)
        self.data = data

    @property
    def text_content(self) -> str:
        return self.data

    def __repr__(self) -> str:
        return f"Text({self.data!r})"


class Comment(Node):
    def __init__(self, data: str = "", document: Document | None = None) -> None:
        super().__init__(document)
        self.data = data

    @property
    def text_content(self) -> str:
        return ""

    def __repr__(self) -> str:
        return f"Comment({self.data!r})"


@dataclass
class Event:
    """What an event listener receives."""

    type: str
    target: Element | None = None
    detail: object = None
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


class ClassList:
    """Ordered set of class names on an element."""

    __slots__ = ("_element", "_names")

    def __init__(self, element: Element) -> None:
        self._element = element
        self._names: dict[str, None] = {}

    def add(self, *names: str) -> None:
        for name in names:
            self._names[name] = None
        self._element._touch()

    def remove(self, *names: str) -> None:
        for name in names:
            self._names.pop(name, None)
        self._element._touch()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ClassList({list(self._names)!r})"


_NODE_FIELDS = frozenset(
    {"owner_document", "parent", "children", "tag", "attributes", "class_list"}
)


class Element(Node):
    """A tagged node.

    Properties are plain Python attributes, written through set_property()
    so the document sees the change.
    """

    def __init__(self, tag: str, document: Document | None = None) -> None:
        super().__init__(document)
        self.tag = tag
        self.attributes: dict[str, str] = {}
        self.class_list = ClassList(self)
        self._event_listeners: dict[str, list[Callable]] = {}

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value
        self._touch()

    def remove_attribute(self, name: str) -> None:
        if self.attributes.pop(name, None) is not None:
            self._touch()

    def set_property(self, name: str, value: object) -> None:
        """Set a property; the node's own fields and methods are off limits."""
        if name.startswith("_") or name in _NODE_FIELDS or hasattr(type(self), name):
            raise ValueError(f"{name!r} is not a settable property of <{self.tag}>")
        setattr(self, name, value)
        self._touch()

    def add_event_listener(self, name: str, listener: Callable) -> None:
        self._event_listeners.setdefault(name, []).append(listener)

    def remove_event_listener(self, name: str, listener: Callable) -> None:
        listeners = self._event_listeners.get(name, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch_event(self, event: Event | str) -> Event:
        """Call the listeners for event.type in registration order."""
        if isinstance(event, str):
            event = Event(event)
        event.target = self
        for listener in list(self._event_listeners.get(event.type, ())):
            listener(event)
        return event

    def __repr__(self) -> str:
        return f"<{self.tag}> ({len(self.children)} children)"


class Document:
    """Node factory plus the head/body mount points."""

    def __init__(self) -> None:
        self.version = Observable(0)
        self.head = self.create_element("head")
        self.body = self.create_element("body")

    def create_element(self, tag: str) -> Element:
        return Element(tag, self)

    def create_text_node(self, data: str) -> Text:
        return Text(data, self)

    def create_comment(self, data: str = "") -> Comment:
        return Comment(data, self)

    def is_node(self, value: object) -> bool:
        return isinstance(value, Node)

    def touch(self) -> None:
        """Record that some node of this document changed."""
        self.version.set(self.version.value + 1)


# ─── Current document ────────────────────────────────────────────────────────
_document = Document()


def get_document() -> Document:
    """The document new nodes are created in."""
    return _document


def set_document(document: Document) -> Document:
    """Swap the current document. Returns the previous one."""
    global _document
    previous, _document = _document, document
    return previous


# ─── Serialization ───────────────────────────────────────────────────────────


def to_html(node: Node) -> str:
    """Serialize node and its subtree to an HTML string."""
    if isinstance(node, Text):
        return html.escape(node.data, quote=False)
    if isinstance(node, Comment):
        return f"<!--{node.data}-->"
    inner = "".join(to_html(child) for child in node.children)
    if not isinstance(node, Element):
        return inner
    attrs = dict(node.attributes)
    if node.class_list:
        attrs["class"] = " ".join(node.class_list)
    rendered = "".join(
        f' {name}="{html.escape(value)}"' if value else f" {name}"
        for name, value in attrs.items()
    )
    return f"<{node.tag}{rendered}>{inner}</{node.tag}>"
