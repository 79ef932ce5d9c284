"""Namespaces — build any tag factory or binder by name, on first use.

    from livetree import tags, attributes, events

    div, button = tags.div, tags.button
    type_ = attributes["type"]
    click = events.click

Members are created by the namespace's factory the first time a name is
asked for and cached afterwards, so ``tags.div is tags.div``. Attribute
access drops one trailing underscore to reach keywords: ``attributes.for_``
is ``attributes["for"]``. Names with dashes need item access.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from livetree.builder import attribute, event, prop, tag

T = TypeVar("T")


class Namespace(Generic[T]):
    """Memoizing registry keyed by name."""

    def __init__(self, factory: Callable[[str], T], name: str = "namespace") -> None:
        self._factory = factory
        self._name = name
        self._members: dict[str, T] = {}

    def get(self, name: str) -> T:
        try:
            return self._members[name]
        except KeyError:
            member = self._members[name] = self._factory(name)
            return member

    __getitem__ = get

    def __getattr__(self, name: str) -> T:
        if name.startswith("_"):
            raise AttributeError(name)
        if name.endswith("_"):
            name = name[:-1]
        return self.get(name)

    def __contains__(self, name: str) -> bool:
        """Has name been built already?"""
        return name in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"Namespace({self._name}, {sorted(self._members)})"


tags: Namespace[Callable] = Namespace(tag, "tags")
attributes: Namespace[Callable] = Namespace(attribute, "attributes")
properties: Namespace[Callable] = Namespace(prop, "properties")
events: Namespace[Callable] = Namespace(event, "events")
