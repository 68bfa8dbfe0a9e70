from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from html import escape as _html_escape
from typing import Any, Callable

logger = logging.getLogger(__name__)

INDENT = "  "


class _FragmentMarker:
    """Element type meaning "splice children into the parent, no wrapping tag"."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Fragment"


Fragment = _FragmentMarker()


class NodeKind(enum.Enum):
    TAG = "tag"
    COMPONENT = "component"
    FRAGMENT = "fragment"
    UNKNOWN = "unknown"


def node_kind(node_type: Any) -> NodeKind:
    if node_type is Fragment:
        return NodeKind.FRAGMENT
    if isinstance(node_type, str):
        return NodeKind.TAG
    if callable(node_type):
        return NodeKind.COMPONENT
    return NodeKind.UNKNOWN


@dataclass
class Element:
    type: Any
    props: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        return node_kind(self.type)

    def render(self, depth: int = 0) -> str:
        return render_to_text(self, depth)


def escape(value: Any) -> str:
    """Replace ``& < > " '`` in the text form of ``value`` with named references."""
    return _html_escape(str(value), quote=True).replace("&#x27;", "&apos;")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_absent(value: Any) -> bool:
    # bool is checked separately from int: True/False mean "render nothing".
    return value is None or isinstance(value, bool)


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def flatten_children(children: Iterable[Any]) -> list[Any]:
    """Expand nested lists/tuples in order and drop ``None``/booleans.

    Uses an explicit stack of iterators so nesting depth does not grow the
    Python call stack.
    """
    flat: list[Any] = []
    stack = [iter(children)]
    while stack:
        for child in stack[-1]:
            if _is_sequence(child):
                stack.append(iter(child))
                break
            if not _is_absent(child):
                flat.append(child)
        else:
            stack.pop()
    return flat


def create_element(node_type: Any, props: Mapping[str, Any] | None = None, *children: Any) -> Element:
    """Build a canonical :class:`Element`.

    ``children`` may be nested to any depth. Children already present in
    ``props["children"]`` are appended after the positional ones, and the
    resulting list is stored both on the element and under ``props["children"]``.
    """
    if props is None:
        props = {}
    elif not isinstance(props, Mapping):
        raise TypeError(f"props must be a mapping or None, got {type(props).__name__}")

    attrs = dict(props)
    flat = flatten_children(children)
    if "children" in attrs:
        extra = attrs.pop("children")
        flat.extend(flatten_children(extra if _is_sequence(extra) else [extra]))
    attrs["children"] = flat
    return Element(type=node_type, props=attrs, children=list(flat))


def component(fn: Callable) -> Callable:
    """Marker decorator for function components."""
    fn.__treemark_component__ = True
    return fn


def is_component(obj: Any) -> bool:
    return callable(obj) and bool(getattr(obj, "__treemark_component__", False))


def _normalize_attr_name(name: str) -> str:
    if name == "class_name":
        return "class"
    if name == "html_for":
        return "for"
    return name.rstrip("_").replace("_", "-")


def el(node_type: Any, *children: Any, **props: Any) -> Element:
    """Keyword-friendly :func:`create_element`.

    For tag elements Python keyword names are mapped to attribute names
    (``class_name`` -> ``class``, ``data_role`` -> ``data-role``). Component
    props are passed through untouched.
    """
    if isinstance(node_type, str):
        props = {
            (key if key == "children" else _normalize_attr_name(key)): value
            for key, value in props.items()
        }
    return create_element(node_type, props, *children)


def fragment(*children: Any) -> Element:
    return create_element(Fragment, None, *children)


def _comment(text: str) -> str:
    return f"<!-- {escape(text)} -->"


def _component_name(fn: Any) -> str:
    return getattr(fn, "__name__", None) or type(fn).__name__


def _render_attrs(props: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for key, value in props.items():
        if key == "children" or value is None or value is False:
            continue
        if value is True:
            parts.append(key)
        else:
            parts.append(f'{key}="{escape(value)}"')
    return (" " + " ".join(parts)) if parts else ""


def _render_each(children: Iterable[Any], depth: int) -> list[str]:
    parts: list[str] = []
    for child in children:
        text = _render(child, depth)
        if text is not None:
            parts.append(text)
    return parts


def _join(parts: list[str]) -> str | None:
    return "\n".join(parts) if parts else None


def _render_component(node: Element, depth: int) -> str | None:
    try:
        rendered = node.type(dict(node.props))
    except Exception as exc:
        name = _component_name(node.type)
        logger.warning("component %s failed to render: %s", name, exc)
        return INDENT * depth + _comment(f"Error rendering component {name}: {exc}")
    return _render(rendered, depth)


def _render_tag(node: Element, depth: int) -> str:
    pad = INDENT * depth
    attrs = _render_attrs(node.props)
    if not node.children:
        return f"{pad}<{node.type}{attrs} />"
    lines = [f"{pad}<{node.type}{attrs}>"]
    lines.extend(_render_each(node.children, depth + 1))
    lines.append(f"{pad}</{node.type}>")
    return "\n".join(lines)


def _render(value: Any, depth: int) -> str | None:
    # None means "rendered nothing"; callers skip it when joining lines.
    if _is_absent(value):
        return None
    if _is_primitive(value):
        return INDENT * depth + escape(value)
    if _is_sequence(value):
        return _join(_render_each(value, depth))
    if not isinstance(value, Element):
        logger.warning("unrenderable value of type %s", type(value).__name__)
        return INDENT * depth + _comment(f"Unknown element type: {type(value).__name__}")

    kind = node_kind(value.type)
    if kind is NodeKind.FRAGMENT:
        children = value.props.get("children", value.children)
        if not _is_sequence(children):
            children = [children]
        return _join(_render_each(children, depth))
    if kind is NodeKind.COMPONENT:
        return _render_component(value, depth)
    if kind is NodeKind.TAG:
        return _render_tag(value, depth)
    logger.warning("unknown element type %r", value.type)
    return INDENT * depth + _comment(f"Unknown element type: {value.type!r}")


def render_to_text(value: Any, depth: int = 0) -> str:
    """Serialize a renderable into indented markup, two spaces per level."""
    return _render(value, depth) or ""


def mount(node_or_component: Any, props: Mapping[str, Any] | None = None, *, depth: int = 0) -> str:
    """Render ``node_or_component``; a bare callable is wrapped in an element first."""
    mounted = node_or_component
    if node_kind(node_or_component) is NodeKind.COMPONENT:
        mounted = create_element(node_or_component, props)
    return render_to_text(mounted, depth)
