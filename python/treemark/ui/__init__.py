from .core import (
    INDENT,
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

__all__ = [
    "INDENT",
    "Element",
    "Fragment",
    "NodeKind",
    "component",
    "create_element",
    "el",
    "escape",
    "flatten_children",
    "fragment",
    "is_component",
    "mount",
    "node_kind",
    "render_to_text",
]
