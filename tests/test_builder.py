"""Tests for binders, tag factories and root mounting."""

import gc

from livetree import (
    Element,
    Observable,
    ObservableArray,
    attribute,
    body,
    class_name,
    classes,
    curry,
    event,
    event_property,
    head,
    prop,
    tag,
    to_html,
)


class TestCurry:
    def test_full_and_progressive_application(self):
        @curry
        def add3(a, b, c):
            return a + b + c

        assert add3(1, 2, 3) == 6
        assert add3(1)(2)(3) == 6
        assert add3(1, 2)(3) == 6
        assert add3(1)(2, 3) == 6

    def test_defaults_do_not_count(self):
        @curry
        def greet(name, greeting="hi"):
            return f"{greeting} {name}"

        assert greet("bob") == "hi bob"

    def test_keeps_metadata(self):
        assert attribute.__name__ == "attribute"


class TestBinders:
    def test_prop_static(self):
        el = Element("input")
        prop("value", "x", el)
        assert el.value == "x"

    def test_prop_observable(self):
        el = Element("input")
        ob = Observable("a")
        prop("value")(ob)(el)
        assert el.value == "a"
        ob.set("b")
        assert el.value == "b"

    def test_attribute_values(self):
        el = Element("button")
        attribute("disabled", True, el)
        assert el.get_attribute("disabled") == ""
        attribute("disabled", False, el)
        assert not el.has_attribute("disabled")
        attribute("tabindex", 3, el)
        assert el.get_attribute("tabindex") == "3"
        attribute("tabindex", None, el)
        assert not el.has_attribute("tabindex")

    def test_attribute_observable(self):
        el = Element("button")
        disabled = Observable(True)
        attribute("disabled", disabled, el)
        assert el.has_attribute("disabled")
        disabled.set(False)
        assert not el.has_attribute("disabled")

    def test_class_name(self):
        el = Element("li")
        active = Observable(0)
        class_name("active", active, el)
        assert "active" not in el.class_list
        active.set(1)
        assert "active" in el.class_list
        class_name("static", "yes", el)
        assert "static" in el.class_list

    def test_classes(self):
        el = Element("div")
        classes("a", "b")(el)
        assert list(el.class_list) == ["a", "b"]

    def test_event(self):
        el = Element("button")
        log = []
        event("click", lambda e: log.append(e.type))(el)
        el.dispatch_event("click")
        assert log == ["click"]

    def test_binder_released_with_element(self):
        ob = Observable("x")
        el = Element("input")
        prop("value", ob, el)
        assert len(ob._listeners) == 1
        del el
        gc.collect()
        assert len(ob._listeners) == 0


class TestEventProperty:
    def test_two_way_binding(self):
        el = Element("input")
        ob = Observable("start")
        input_value = event_property("input", "value")
        input_value(ob)(el)
        assert el.value == "start"

        el.value = "typed"
        el.dispatch_event("input")
        assert ob.value == "typed"

        ob.set("reset")
        assert el.value == "reset"

    def test_skips_redundant_writes(self, document):
        el = document.create_element("input")
        ob = Observable("same")
        event_property("change", "value", ob, el)
        before = document.version.value
        ob.set("same")
        assert document.version.value == before


class TestTag:
    def test_children_and_binders(self):
        button = tag("button")
        log = []
        el = button(attribute("type", "submit"), "Send", event("click", log.append))
        assert to_html(el) == '<button type="submit">Send</button>'
        el.dispatch_event("click")
        assert len(log) == 1

    def test_nested_sequences_are_flattened(self):
        ul, li = tag("ul"), tag("li")
        el = ul([li("a"), [li("b"), (classes("list"),)]])
        assert to_html(el) == '<ul class="list"><li>a</li><li>b</li></ul>'

    def test_function_escape_hatch(self):
        seen = []
        el = tag("div")(seen.append)
        assert seen == [el]

    def test_observable_children(self):
        ob = Observable(1)
        arr = ObservableArray(["x"])
        el = tag("p")(ob, " and ", arr)
        ob.set(2)
        arr.push("y")
        assert el.text_content == "2 and xy"

    def test_mapped_array_children(self):
        ul, li = tag("ul"), tag("li")
        names = ObservableArray(["a"])
        el = ul(names.map(li))
        names.push("b")
        names.shift()
        assert to_html(el) == "<ul><slot><li>b</li></slot></ul>"

    def test_parse_args(self):
        def link_args(href, label):
            return [attribute("href", href), label]

        link = tag("a", link_args)
        el = link("/home", "Home", classes("nav"))
        assert to_html(el) == '<a href="/home" class="nav">Home</a>'

    def test_parse_args_single_result(self):
        heading = tag("h1", lambda text: text.upper())
        assert heading("hi", "!").text_content == "HI!"

    def test_created_in_current_document(self, document):
        assert tag("div")().owner_document is document

    def test_factory_name(self):
        assert tag("section").__name__ == "section"


class TestRootMount:
    def test_body_and_head(self, document):
        title = tag("title")
        head(title("App"))
        count = Observable(0)
        body(tag("h1")("Count: ", count), [tag("hr")()])
        count.set(3)
        assert to_html(document.head) == "<head><title>App</title></head>"
        assert to_html(document.body) == (
            "<body><h1>Count: <slot>3</slot></h1><hr></hr></body>"
        )
