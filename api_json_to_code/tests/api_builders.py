"""Helpers building small API descriptions for tests."""

from __future__ import annotations

from typing import Any


def type_node(name: str | None, properties: list[dict] | None = None) -> dict[str, Any] | None:
    if name is None:
        return None
    node: dict[str, Any] = {"name": name}
    if properties is not None:
        node["properties"] = {p["name"]: p for p in properties}
    return node


def prop(name: str, type_name: str | None, required: bool = True, properties: list[dict] | None = None) -> dict[str, Any]:
    """A method argument or a field of an inline object."""
    return {"name": name, "kind": "property", "type": type_node(type_name, properties), "required": required}


def method(name: str, type_name: str | None = "Promise", args: list[dict] | None = None, properties: list[dict] | None = None) -> dict[str, Any]:
    raw: dict[str, Any] = {"name": name, "kind": "method", "type": type_node(type_name, properties), "required": True}
    if args:
        raw["args"] = {a["name"]: a for a in args}
    return raw


def event(name: str, type_name: str | None) -> dict[str, Any]:
    return {"name": name, "kind": "event", "type": type_node(type_name), "required": True}


def interface(name: str, *members: dict) -> dict[str, Any]:
    return {"name": name, "members": {m["name"]: m for m in members}}


def api(*interfaces: dict) -> dict[str, Any]:
    return {i["name"]: i for i in interfaces}
