from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest

from treemark.ui import (
    Element,
    Fragment,
    NodeKind,
    component,
    create_element,
    el,
    escape,
    flatten_children,
    fragment,
    is_component,
    mount,
    node_kind,
    render_to_text,
)


FIXTURE_DIR = Path(__file__).parent / "fixtures" / "treemark_ui"


def _fixture(name: str) -> str:
    return (FIXTURE_DIR / name).read_text(encoding="utf-8").rstrip("\n")


def _lines(*lines: str) -> str:
    return "\n".join(lines)


# ----- building -----


def test_create_element_flattens_nested_children_in_order() -> None:
    node = create_element("p", None, "a", ["b", ("c", ["d"])], [[["e"]]], "f")
    assert node.children == ["a", "b", "c", "d", "e", "f"]
    assert node.props == {"children": ["a", "b", "c", "d", "e", "f"]}


def test_create_element_drops_none_and_booleans_but_keeps_zero_and_empty_string() -> None:
    node = create_element("p", {}, None, True, False, 0, "", [None, 0.0, [False]])
    assert node.children == [0, "", 0.0]


def test_create_element_without_props_or_children() -> None:
    node = create_element("br")
    assert node == Element(type="br", props={"children": []}, children=[])


def test_props_children_are_appended_after_positional_children() -> None:
    node = create_element("ul", {"children": ["x", ["y", None]], "id": "list"}, "a", ["b"])
    assert node.children == ["a", "b", "x", "y"]
    assert node.props == {"id": "list", "children": ["a", "b", "x", "y"]}


def test_props_children_bare_value_is_wrapped() -> None:
    node = create_element("p", {"children": "solo"})
    assert node.children == ["solo"]
    assert create_element("p", {"children": None}).children == []


def test_create_element_does_not_mutate_caller_props() -> None:
    props = {"class": "x", "children": ["kept"]}
    create_element("div", props, "a")
    assert props == {"class": "x", "children": ["kept"]}


def test_rebuilding_from_own_output_is_a_no_op() -> None:
    node = create_element("div", {"id": "a"}, ["x", [create_element("b", None, "y")]], None)
    assert create_element(node.type, node.props) == node
    assert flatten_children(node.children) == node.children


def test_create_element_rejects_non_mapping_props() -> None:
    with pytest.raises(TypeError):
        create_element("div", ["not", "a", "mapping"])


def test_flatten_handles_very_deep_nesting() -> None:
    nested: object = "leaf"
    for _ in range(10_000):
        nested = [nested, None]
    assert create_element("div", None, nested).children == ["leaf"]


def test_el_normalizes_keyword_attribute_names() -> None:
    node = el("label", "Name", class_name="x", html_for="name", data_role="field", aria_hidden="true")
    assert list(node.props) == ["class", "for", "data-role", "aria-hidden", "children"]


def test_el_passes_component_props_untouched() -> None:
    def Greeting(props):
        return props["first_name"]

    node = el(Greeting, first_name="Ada")
    assert node.props == {"first_name": "Ada", "children": []}
    assert render_to_text(node) == "Ada"


def test_node_kind_discriminates_types() -> None:
    assert node_kind("div") is NodeKind.TAG
    assert node_kind(Fragment) is NodeKind.FRAGMENT
    assert node_kind(len) is NodeKind.COMPONENT
    assert node_kind(42) is NodeKind.UNKNOWN
    assert fragment("a").kind is NodeKind.FRAGMENT


def test_component_decorator_marks_callables() -> None:
    @component
    def Marked(props):
        return "m"

    def Plain(props):
        return "p"

    assert is_component(Marked)
    assert not is_component(Plain)


# ----- rendering -----


def test_render_attr_normalization_snapshot() -> None:
    node = el(
        "section",
        "Hello <world>",
        el("span", 'Q"uote', class_name="child"),
        class_name="alpha beta",
        data_role="demo",
        aria_hidden="true",
        hidden=True,
        disabled=False,
        title='5 > 4 "yes"',
    )
    assert render_to_text(node) == _fixture("render_attr_normalization.txt")


@pytest.mark.parametrize(
    ("value", "depth", "expected"),
    [
        ("plain", 0, "plain"),
        ("a<b & 'c'", 2, "    a&lt;b &amp; &apos;c&apos;"),
        (0, 1, "  0"),
        (1.5, 0, "1.5"),
        ("", 3, "      "),
    ],
)
def test_render_primitive_is_indented_escaped_text(value: object, depth: int, expected: str) -> None:
    assert render_to_text(value, depth) == expected


def test_render_none_and_booleans_produce_nothing() -> None:
    assert render_to_text(None) == ""
    assert render_to_text(True) == ""
    assert render_to_text(False, 2) == ""


def test_render_sequence_keeps_depth() -> None:
    assert render_to_text(["a", ["b", None], 3], 1) == _lines("  a", "  b", "  3")


def test_render_hello_world_scenario() -> None:
    node = create_element("div", {"class": "hello"}, "Hello ", "World", "!")
    assert render_to_text(node) == _lines('<div class="hello">', "  Hello ", "  World", "  !", "</div>")


def test_render_array_children_scenario() -> None:
    node = create_element(
        "ul",
        None,
        [create_element("li", {}, "a"), create_element("li", {}, "b")],
    )
    assert render_to_text(node) == _lines(
        "<ul>",
        "  <li>",
        "    a",
        "  </li>",
        "  <li>",
        "    b",
        "  </li>",
        "</ul>",
    )


def test_empty_tag_is_self_closing() -> None:
    assert render_to_text(create_element("br")) == "<br />"
    node = create_element("input", {"type": "text", "disabled": True, "checked": False, "value": None})
    assert render_to_text(node, 1) == '  <input type="text" disabled />'


def test_attribute_values_are_escaped_once() -> None:
    node = create_element("a", {"title": "&amp;", "data-n": 7})
    assert render_to_text(node) == '<a title="&amp;amp;" data-n="7" />'


def test_fragment_is_transparent() -> None:
    a = create_element("p", None, "A")
    b = create_element("i", None)
    wrapped = fragment(a, b)
    for depth in (0, 1, 3):
        assert render_to_text(wrapped, depth) == render_to_text(a, depth) + "\n" + render_to_text(b, depth)
    inside = create_element("div", None, wrapped)
    assert render_to_text(inside) == _lines("<div>", "  <p>", "    A", "  </p>", "  <i />", "</div>")


def test_fragment_with_single_non_sequence_child() -> None:
    node = Element(type=Fragment, props={"children": "solo"})
    assert render_to_text(node, 1) == "  solo"


def test_component_receives_props_with_children() -> None:
    seen = {}

    def Panel(props):
        seen.update(props)
        return create_element("div", {"class": props["kind"]}, props["children"])

    node = create_element(Panel, {"kind": "note"}, "body", ["more"])
    assert render_to_text(node) == _lines('<div class="note">', "  body", "  more", "</div>")
    assert seen == {"kind": "note", "children": ["body", "more"]}


def test_component_output_renders_at_same_depth() -> None:
    def Item(props):
        return ["x", create_element("b", None, "y")]

    parent = create_element("div", None, create_element(Item, None))
    assert render_to_text(parent) == _lines("<div>", "  x", "  <b>", "    y", "  </b>", "</div>")


def test_component_failure_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    def Exploding(props):
        raise RuntimeError("boom")

    def Fine(props):
        return create_element("span", None, "ok")

    tree = create_element(
        "section",
        None,
        create_element(Exploding, None),
        create_element(Fine, None),
    )
    with caplog.at_level(logging.WARNING, logger="treemark.ui.core"):
        html = render_to_text(tree)

    assert html == _lines(
        "<section>",
        "  <!-- Error rendering component Exploding: boom -->",
        "  <span>",
        "    ok",
        "  </span>",
        "</section>",
    )
    assert any("Exploding" in record.getMessage() for record in caplog.records)


def test_component_returning_none_renders_nothing() -> None:
    def Hidden(props):
        return None

    node = create_element("div", None, create_element(Hidden, None), "x")
    assert render_to_text(node) == _lines("<div>", "  x", "</div>")
    assert render_to_text(create_element(Hidden, None)) == ""


def test_unknown_type_renders_placeholder() -> None:
    assert render_to_text(create_element(42), 1) == "  <!-- Unknown element type: 42 -->"
    assert render_to_text({"type": "div"}) == "<!-- Unknown element type: dict -->"


def test_structural_errors_propagate_from_components() -> None:
    def Bad(props):
        return create_element("div", "not-a-mapping")

    # a TypeError from inside a component is still isolated at that component
    assert "Error rendering component Bad" in render_to_text(create_element(Bad, None))
    with pytest.raises(TypeError):
        render_to_text(create_element("div", "not-a-mapping"))


@pytest.mark.parametrize("text", ["", "plain", "<a href='x'>\"&amp;\"</a>", "&&<<>>\"\"''", "émoji ✓ &#39;"])
def test_escape_leaves_no_raw_markup_characters(text: str) -> None:
    escaped = escape(text)
    stripped = re.sub(r"&(amp|lt|gt|quot|apos);", "", escaped)
    assert not any(ch in stripped for ch in "&<>\"'")


def test_element_render_and_mount_helpers() -> None:
    def Hello(props):
        return create_element("p", None, "Hi ", props.get("name", "there"))

    assert create_element("hr").render(2) == "    <hr />"
    assert mount(Hello, {"name": "Ada"}) == _lines("<p>", "  Hi ", "  Ada", "</p>")
    assert mount(create_element(Hello, None), depth=1) == _lines("  <p>", "    Hi ", "    there", "  </p>")


def test_escape_uses_named_references() -> None:
    assert escape("'\"&<>") == "&apos;&quot;&amp;&lt;&gt;"
    assert escape("&#x27;") == "&amp;#x27;"
