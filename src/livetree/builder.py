"""Declarative builder — binders and element factories.

Binders take (name, value, element) and can be applied all at once or one
argument at a time:

    attribute("type", "button", el)
    attribute("type")("button")(el)

A partially applied binder is just a callable taking the element, which is
exactly what tag factories invoke for callable arguments:

    button = tag("button")
    button(attribute("type", "submit"), "Send", event("click", on_send))

Observable values are bound live, with the element as weak owner.
"""

from __future__ import annotations

import functools
import inspect
from typing import Callable, TypeVar

from livetree.dom import Element, get_document
from livetree.observable import BaseObservable
from livetree.render import as_node, is_sequence

F = TypeVar("F", bound=Callable)


def _arity(fn: Callable) -> int:
    """Number of required positional parameters."""
    return sum(
        1
        for p in inspect.signature(fn).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        and p.default is p.empty
    )


def curry(fn: F) -> F:
    """Allow fn(a, b, c) to also be called as fn(a)(b)(c) or fn(a, b)(c)."""
    arity = _arity(fn)

    @functools.wraps(fn)
    def curried(*args):
        if len(args) < arity:
            return functools.partial(curried, *args)
        return fn(*args)

    return curried


@curry
def prop(name: str, value, element: Element) -> None:
    if isinstance(value, BaseObservable):
        value.listen(lambda el, v: el.set_property(name, v), element)
    else:
        element.set_property(name, value)


@curry
def attribute(name: str, value, element: Element) -> None:
    """True sets a valueless attribute; False and None remove it."""
    if isinstance(value, BaseObservable):
        value.listen(lambda el, v: attribute(name, v, el), element)
    elif value is True:
        element.set_attribute(name, "")
    elif value is False or value is None:
        element.remove_attribute(name)
    else:
        element.set_attribute(name, str(value))


@curry
def class_name(name: str, value, element: Element) -> None:
    if isinstance(value, BaseObservable):
        value.listen(lambda el, v: class_name(name, v, el), element)
    elif value:
        element.class_list.add(name)
    else:
        element.class_list.remove(name)


def classes(*names: str) -> Callable[[Element], None]:
    """Binder adding every name to the element's class list."""

    def apply(element: Element) -> None:
        element.class_list.add(*names)

    return apply


@curry
def event(name: str, listener: Callable, element: Element) -> None:
    element.add_event_listener(name, listener)


@curry
def event_property(event_name: str, prop_name: str, ob, element: Element) -> None:
    """Two-way bind element.<prop_name> to ob.

    The element pushes its property into ob whenever event_name fires; ob
    pushes changes back, skipping writes that would not change anything.
    """
    element.add_event_listener(
        event_name, lambda e: ob.set(getattr(e.target, prop_name, None))
    )

    def _push(el: Element, v) -> None:
        if v != getattr(el, prop_name, None):
            el.set_property(prop_name, v)

    ob.listen(_push, element)


def apply_arg(element: Element, arg) -> None:
    """Apply one factory argument to element.

    Sequences are applied item by item, callables are called with the element,
    anything else is materialized and appended as a child.
    """
    if is_sequence(arg):
        for item in arg:
            apply_arg(element, item)
    elif callable(arg):
        arg(element)
    else:
        element.append_child(as_node(arg, element.owner_document))


def tag(name: str, parse_args: Callable | None = None) -> Callable[..., Element]:
    """Element factory for tag name.

    parse_args, when given, consumes as many leading arguments as it has
    required parameters; its result (spread if a list or tuple) takes their
    place.
    """
    arity = _arity(parse_args) if parse_args is not None else 0

    def create(*args) -> Element:
        element = get_document().create_element(name)
        if parse_args is not None:
            parsed = parse_args(*args[:arity])
            if not isinstance(parsed, (list, tuple)):
                parsed = [parsed]
            args = (*parsed, *args[arity:])
        apply_arg(element, args)
        return element

    create.__name__ = create.__qualname__ = name
    return create


def head(*args) -> None:
    """Apply args to the current document's head."""
    apply_arg(get_document().head, args)


def body(*args) -> None:
    """Apply args to the current document's body."""
    apply_arg(get_document().body, args)
