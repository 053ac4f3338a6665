"""Action proxies — typed mirrors of a remote addon action's fields.

A proxy is a dataclass that subclasses :class:`ActionProxy` and declares its
fields with :func:`input_field` / :func:`output_field`::

    @dataclasses.dataclass
    class CountRows(ActionProxy):
        addon_guid = "nL3rXvrUPUGTfSH52Yps7A"
        class_name = "io.addons.tables.CountRows"

        table_id: str = input_field(FieldKind.STRING, wire_name="tableId")
        count: int = output_field(FieldKind.INT32, default=0)

The field declarations form a static binding table (attribute name, wire name,
kind, direction) that is built once per proxy class and used to render the
execution request and to bind the Agent's response back onto the instance.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from typing import Any, ClassVar, Union

from agentbridge.addons.coercion import FieldKind, kind_for

_FIELD_META = "agentbridge.action_field"


@dataclasses.dataclass(frozen=True)
class _FieldSpec:
    kind: FieldKind | None
    wire_name: str | None
    is_output: bool


def input_field(kind: FieldKind | None = None, *, wire_name: str | None = None, default: Any = None) -> Any:
    """Declare a field the client sends to the action. Never written back."""
    return dataclasses.field(default=default, metadata={_FIELD_META: _FieldSpec(kind, wire_name, False)})


def output_field(kind: FieldKind | None = None, *, wire_name: str | None = None, default: Any = None) -> Any:
    """Declare a field the action fills in and the Agent returns."""
    return dataclasses.field(default=default, metadata={_FIELD_META: _FieldSpec(kind, wire_name, True)})


@dataclasses.dataclass(frozen=True)
class ActionField:
    """One row of a proxy's binding table."""

    attr: str
    wire_name: str
    kind: FieldKind | None  # None: unsupported type, value passes through as a string
    is_output: bool


@dataclasses.dataclass(frozen=True)
class Locator:
    """Element locator handed to actions that operate on an element."""

    strategy: str  # css selector, xpath, id, name, ...
    value: str

    @classmethod
    def css(cls, selector: str) -> Locator:
        return cls("css selector", selector)

    @classmethod
    def xpath(cls, expression: str) -> Locator:
        return cls("xpath", expression)

    @classmethod
    def id(cls, element_id: str) -> Locator:
        return cls("id", element_id)

    @classmethod
    def name(cls, element_name: str) -> Locator:
        return cls("name", element_name)

    def to_payload(self) -> dict[str, str]:
        return {"by": self.strategy, "value": self.value}


@dataclasses.dataclass
class ActionDescriptor:
    """Identifies a remote action plus the locator it should act on, if any."""

    addon_guid: str
    class_name: str
    fields: tuple[ActionField, ...]
    locator: Locator | None = None

    def field_for(self, wire_name: str) -> ActionField | None:
        for f in self.fields:
            if f.wire_name == wire_name:
                return f
        return None

    def to_payload(self, proxy: ActionProxy) -> dict[str, Any]:
        """Render the execution request for ``proxy``'s current field values."""
        parameters: dict[str, str] = {}
        for f in self.fields:
            value = getattr(proxy, f.attr)
            if value is None:
                continue
            parameters[f.wire_name] = _to_wire(value)
        return {
            "guid": self.addon_guid,
            "className": self.class_name,
            "parameters": parameters,
            "by": self.locator.to_payload() if self.locator else None,
        }


def _to_wire(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _unwrap_optional(hint: Any) -> Any:
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


class ActionProxy:
    """Base class for action proxies. Subclasses must be dataclasses."""

    addon_guid: ClassVar[str] = ""
    class_name: ClassVar[str] = ""

    @classmethod
    def binding_table(cls) -> tuple[ActionField, ...]:
        """Return the class's binding table, building it on first use."""
        table = cls.__dict__.get("_binding_table")
        if table is None:
            table = _build_binding_table(cls)
            cls._binding_table = table
        return table

    @functools.cached_property
    def descriptor(self) -> ActionDescriptor:
        return ActionDescriptor(
            addon_guid=self.addon_guid,
            class_name=self.class_name,
            fields=self.binding_table(),
        )


def _build_binding_table(cls: type) -> tuple[ActionField, ...]:
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} must be a dataclass to be used as an action proxy")
    if cls.__dataclass_params__.frozen:
        raise TypeError(f"{cls.__name__} must not be frozen: output fields are written back after execution")

    hints: dict[str, Any] | None = None
    rows: list[ActionField] = []
    seen: set[str] = set()

    for f in dataclasses.fields(cls):
        spec = f.metadata.get(_FIELD_META)
        if spec is None:
            continue

        kind = spec.kind
        if kind is None:
            if hints is None:
                hints = typing.get_type_hints(cls)
            kind = kind_for(_unwrap_optional(hints.get(f.name)))

        wire_name = spec.wire_name or f.name
        if wire_name in seen:
            raise TypeError(f"{cls.__name__} declares wire name {wire_name!r} more than once")
        seen.add(wire_name)

        rows.append(ActionField(attr=f.name, wire_name=wire_name, kind=kind, is_output=spec.is_output))

    return tuple(rows)
