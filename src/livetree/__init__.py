"""livetree: fine-grained reactive bindings for a live render tree."""

from importlib.metadata import version as _version

__version__ = _version("livetree")

from livetree._errors import (
    LivetreeError,
    AbstractOperationError,
    ReadOnlyViewError,
    UnrenderableValueError,
)
from livetree._listeners import release
from livetree.observable import (
    BaseObservable,
    Observable,
    MappedObservable,
    BaseObservableArray,
    ObservableArray,
    MappedObservableArray,
    set_scheduler,
)
from livetree.dom import (
    Node,
    Element,
    Text,
    Comment,
    Event,
    Document,
    get_document,
    set_document,
    to_html,
)
from livetree.render import as_node
from livetree.builder import (
    curry,
    prop,
    attribute,
    class_name,
    classes,
    event,
    event_property,
    tag,
    head,
    body,
)
from livetree.namespace import Namespace, tags, attributes, properties, events
# textual NOT auto-imported — opt-in only

__all__ = [
    "LivetreeError",
    "AbstractOperationError",
    "ReadOnlyViewError",
    "UnrenderableValueError",
    "release",
    "BaseObservable",
    "Observable",
    "MappedObservable",
    "BaseObservableArray",
    "ObservableArray",
    "MappedObservableArray",
    "set_scheduler",
    "Node",
    "Element",
    "Text",
    "Comment",
    "Event",
    "Document",
    "get_document",
    "set_document",
    "to_html",
    "as_node",
    "curry",
    "prop",
    "attribute",
    "class_name",
    "classes",
    "event",
    "event_property",
    "tag",
    "head",
    "body",
    "Namespace",
    "tags",
    "attributes",
    "properties",
    "events",
]
