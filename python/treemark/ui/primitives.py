from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .core import Element, component, create_element

# Primitives restrict `tag` overrides to a small subset so shared components
# keep predictable markup.

CONTAINER_TAGS = {
    "div",
    "section",
    "article",
    "header",
    "footer",
    "aside",
    "nav",
    "main",
}

TEXT_TAGS = {
    "span",
    "p",
    "small",
    "strong",
    "em",
    "code",
    "label",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
}

BADGE_TAGS = {
    "span",
    "small",
    "strong",
    "em",
}

_RESERVED = {"children", "tag"}


def _merge_classes(*parts: Any) -> str:
    values: list[str] = []
    for part in parts:
        if not part:
            continue
        text = str(part).strip()
        if text:
            values.append(text)
    return " ".join(values)


def _require_tag(tag: Any, *, allowed: set[str], primitive: str) -> str:
    normalized = str(tag).strip().lower()
    if normalized in allowed:
        return normalized
    choices = ", ".join(sorted(allowed))
    raise ValueError(f"{primitive} tag {tag!r} is not supported. Allowed: {choices}")


def _attrs(props: Mapping[str, Any], base_class: str | None, *, skip: tuple[str, ...] = ()) -> dict[str, Any]:
    attrs = {key: value for key, value in props.items() if key not in _RESERVED and key not in skip}
    merged = _merge_classes(base_class, attrs.pop("class", None))
    if merged:
        attrs["class"] = merged
    return attrs


def _container(props: Mapping[str, Any], *, default_tag: str, base_class: str, primitive: str) -> Element:
    tag = _require_tag(props.get("tag", default_tag), allowed=CONTAINER_TAGS, primitive=primitive)
    return create_element(tag, _attrs(props, base_class), props.get("children"))


@component
def Text(props: Mapping[str, Any]) -> Element:
    tag = _require_tag(props.get("tag", "span"), allowed=TEXT_TAGS, primitive="Text")
    attrs = _attrs(props, None, skip=("content",))
    return create_element(tag, attrs, props.get("content"), props.get("children"))


@component
def Box(props: Mapping[str, Any]) -> Element:
    return _container(props, default_tag="div", base_class="ui-box", primitive="Box")


@component
def Stack(props: Mapping[str, Any]) -> Element:
    return _container(props, default_tag="div", base_class="ui-stack", primitive="Stack")


@component
def Card(props: Mapping[str, Any]) -> Element:
    return _container(props, default_tag="section", base_class="ui-card", primitive="Card")


@component
def List(props: Mapping[str, Any]) -> Element:
    tag = "ol" if props.get("ordered") else "ul"
    return create_element(tag, _attrs(props, "ui-list", skip=("ordered",)), props.get("children"))


@component
def ListItem(props: Mapping[str, Any]) -> Element:
    return create_element("li", _attrs(props, "ui-list-item"), props.get("children"))


@component
def ListItems(props: Mapping[str, Any]) -> Element:
    """Render ``props["items"]`` as list items; ``ordered`` switches to ``<ol>``."""
    item_class = props.get("item_class")
    items = [
        create_element(ListItem, {"class": item_class}, value)
        for value in props.get("items") or ()
    ]
    attrs = _attrs(props, None, skip=("items", "item_class"))
    return create_element(List, attrs, items)


@component
def Badge(props: Mapping[str, Any]) -> Element:
    tag = _require_tag(props.get("tag", "span"), allowed=BADGE_TAGS, primitive="Badge")
    attrs = _attrs(props, "ui-badge", skip=("content",))
    return create_element(tag, attrs, props.get("content"), props.get("children"))


@component
def KeyValueRow(props: Mapping[str, Any]) -> Element:
    attrs = _attrs(props, "ui-key-value", skip=("label", "value"))
    return create_element(
        "div",
        attrs,
        create_element("span", {"class": "ui-kv-label"}, props.get("label")),
        create_element("span", {"class": "ui-kv-value"}, props.get("value")),
    )


@component
def Divider(props: Mapping[str, Any]) -> Element:
    return create_element("hr", _attrs(props, "ui-divider"))
