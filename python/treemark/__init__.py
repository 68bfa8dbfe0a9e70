# SPDX-License-Identifier: AGPL-3.0-only
"""Minimal virtual-tree renderer.

Build element trees with :func:`create_element` (or the keyword helper
:func:`el`) and serialize them to indented markup with :func:`render_to_text`.
"""
from .ui import (
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

__version__ = "0.1.0"

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
