"""Demo component tree rendered by ``treemark demo``."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .core import Element, Fragment, component, create_element
from .primitives import Badge, Card, Divider, KeyValueRow, List, ListItem, Stack, Text

DEMO_TODOS = [
    {"text": "Write the renderer", "done": True},
    {"text": "Escape <angle> & \"quoted\" text", "done": True},
    {"text": "Ship it", "done": False},
]


@component
def Greeting(props: Mapping[str, Any]) -> Element:
    return create_element("div", {"class": "hello"}, "Hello ", props.get("name") or "World", "!")


@component
def TodoList(props: Mapping[str, Any]) -> Element:
    todos = props.get("todos") or []
    items = [
        create_element(
            ListItem,
            {"class": "done" if todo.get("done") else None},
            todo["text"],
            create_element(Badge, {"content": "done"}) if todo.get("done") else None,
        )
        for todo in todos
    ]
    remaining = sum(1 for todo in todos if not todo.get("done"))
    return create_element(
        Card,
        {"data-role": "todos"},
        create_element(Text, {"tag": "h2", "content": props.get("title") or "Todos"}),
        create_element(List, {"ordered": True}, items) if items else None,
        create_element(KeyValueRow, {"label": "Remaining", "value": remaining}),
    )


@component
def Profile(props: Mapping[str, Any]) -> Element:
    return create_element(
        Fragment,
        None,
        create_element(KeyValueRow, {"label": "User", "value": props.get("user") or "anonymous"}),
        create_element(KeyValueRow, {"label": "Unread", "value": props.get("unread", 0)}),
    )


@component
def Broken(props: Mapping[str, Any]) -> Element:
    raise RuntimeError(props.get("message") or "demo widget failed")


@component
def App(props: Mapping[str, Any]) -> Element:
    return create_element(
        Stack,
        {"tag": "main", "id": "app"},
        create_element(Greeting, {"name": props.get("name")}),
        create_element(TodoList, {"todos": props.get("todos", DEMO_TODOS)}),
        create_element(Divider, None),
        create_element(Profile, {"user": props.get("user"), "unread": props.get("unread", 0)}),
        create_element(Broken, None) if props.get("show_broken", True) else None,
        create_element("footer", {"hidden": props.get("hide_footer", False)}, "treemark demo"),
    )
