"""
Java code generation backend.

Emits one Java interface per analyzed interface:
- Synthesized enums and nested value types owned by the interface
- Event subscription declarations
- Methods, preceded by default-method overloads for trailing optional parameters
"""

from __future__ import annotations

import logging

from ...errors import UnknownEventCategoryError
from ...utils import to_title
from ..analyzer.ir_nodes import (
    EnumDef,
    EventCategory,
    EventDef,
    FieldDef,
    InterfaceDef,
    MethodDef,
    NestedTypeDef,
    Role,
    Scope,
    TypeKind,
    TypeRef,
)
from .base import CodeBackend

logger = logging.getLogger(__name__)


class JavaBackend(CodeBackend):
    """Java code generation backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    TYPE_MAP = {
        "string": "String",
        "number": "int",
        "boolean": "boolean",
    }

    BOXED_TYPE_MAP = {
        "string": "String",
        "number": "Integer",
        "boolean": "Boolean",
        "void": "Void",
    }

    def generate(self, interface: InterfaceDef, generation_comment: str = "") -> str:
        """Generate Java code for an interface."""
        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            license_header=self.config.license_header.rstrip(),
            package=self.config.java_package,
            imports=self.config.imports,
            interface_name=interface.name,
        )

        body: list[str] = []
        body.extend(self._serialize_scope(interface.scope))
        for event in interface.events:
            body.extend(self._serialize_event(event))
        for method in interface.methods:
            body.extend(self._serialize_method(method))

        suffix = self.suffix_template.render()
        lines = [prefix, *self._indent_lines(body, 1), suffix]
        return "\n".join(lines) + "\n"

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Java type string."""
        if type_ref.kind == TypeKind.VOID:
            return "void"

        if type_ref.kind == TypeKind.PRIMITIVE:
            type_map = self.BOXED_TYPE_MAP if type_ref.boxed else self.TYPE_MAP
            return type_map.get(type_ref.name, type_ref.name)

        if type_ref.kind == TypeKind.SEQUENCE:
            return f"List<{self._type_argument(type_ref.type_args[0])}>"

        if type_ref.kind == TypeKind.MAPPING:
            key, value = type_ref.type_args
            return f"Map<{self._type_argument(key)}, {self._type_argument(value)}>"

        if type_ref.type_args:
            args = ", ".join(self._type_argument(arg) for arg in type_ref.type_args)
            return f"{type_ref.name}<{args}>"
        return type_ref.name

    def _type_argument(self, type_ref: TypeRef) -> str:
        """Translate a type used as a generic argument, where primitives are not allowed."""
        if type_ref.kind in (TypeKind.VOID, TypeKind.PRIMITIVE):
            return self.BOXED_TYPE_MAP.get(type_ref.name, type_ref.name)
        return self.translate_type(type_ref)

    # Types

    def _serialize_scope(self, scope: Scope) -> list[str]:
        lines: list[str] = []
        for enum_def in scope.enums:
            lines.extend(self._serialize_enum(enum_def, scope))
        for nested in scope.nested_types:
            lines.extend(self._serialize_nested_type(nested))
        return lines

    def _serialize_enum(self, enum_def: EnumDef, scope: Scope) -> list[str]:
        access = "public " if scope.is_nested else ""
        return [f"{access}enum {enum_def.name} {{ {', '.join(enum_def.labels)} }}"]

    def _serialize_nested_type(self, nested: NestedTypeDef) -> list[str]:
        access = "public " if nested.outer_name else ""
        body: list[str] = []
        body.extend(self._serialize_scope(nested.scope))

        read_only = nested.role == Role.READ_FROM_API
        field_access = "private " if read_only else "public "
        for field_def in nested.fields:
            body.append(f"{field_access}{self._declare(field_def.type_ref, field_def.name)};")
        body.append("")

        if read_only:
            for field_def in nested.fields:
                body.extend(self._serialize_getter(field_def))
        else:
            body.extend(self._serialize_builder_methods(nested))

        return [f"{access}class {nested.name} {{", *self._indent_lines(body, 1), "}"]

    def _serialize_getter(self, field_def: FieldDef) -> list[str]:
        return [
            f"public {self.translate_type(field_def.type_ref)} {field_def.name}() {{",
            f"{self.INDENT}return this.{field_def.name};",
            "}",
        ]

    def _serialize_builder_methods(self, nested: NestedTypeDef) -> list[str]:
        lines: list[str] = []
        if nested.outer_name:
            lines.extend(
                [
                    f"{nested.name}() {{",
                    "}",
                    f"public {nested.outer_name} done() {{",
                    f"{self.INDENT}return {nested.outer_name}.this;",
                    "}",
                    "",
                ]
            )
        for field_def in nested.fields:
            type_name = self.translate_type(field_def.type_ref)
            title = to_title(field_def.name)
            if field_def.type_ref.is_nested:
                lines.extend(
                    [
                        f"public {type_name} set{title}() {{",
                        f"{self.INDENT}if (this.{field_def.name} == null) {{",
                        f"{self.INDENT * 2}this.{field_def.name} = new {type_name}();",
                        f"{self.INDENT}}}",
                        f"{self.INDENT}return this.{field_def.name};",
                        "}",
                    ]
                )
            else:
                lines.extend(
                    [
                        f"public {nested.name} with{title}({type_name} {field_def.name}) {{",
                        f"{self.INDENT}this.{field_def.name} = {field_def.name};",
                        f"{self.INDENT}return this;",
                        "}",
                    ]
                )
        return lines

    # Members

    def _serialize_event(self, event: EventDef) -> list[str]:
        if not self.config.emits_event(event.path):
            logger.debug("Event %s is not in the allow-list, skipping", event.path)
            return []

        payload = self._type_argument(event.type_ref)
        prefix = event.info.prefix
        if event.info.category == EventCategory.WAIT_FOR:
            return [f"Deferred<{payload}> waitFor{prefix}();"]
        if event.info.category in (EventCategory.LISTENER, EventCategory.HANDLER):
            return [
                f"void add{prefix}Listener(Listener<{payload}> listener);",
                f"void remove{prefix}Listener(Listener<{payload}> listener);",
            ]
        raise UnknownEventCategoryError(event.path, event.info.category)

    def _serialize_method(self, method: MethodDef) -> list[str]:
        lines: list[str] = []
        total = len(method.params)
        for count in range(total - 1, total - 1 - method.trailing_optional_count(), -1):
            lines.extend(self._serialize_overload(method, count))
        lines.append(f"{self.translate_type(method.return_type)} {method.name}({self._param_list(method, total)});")
        return lines

    def _serialize_overload(self, method: MethodDef, count: int) -> list[str]:
        """Overload taking the first count params and passing null for the rest."""
        return_type = self.translate_type(method.return_type)
        args = [param.name for param in method.params[:count]]
        args.extend(["null"] * (len(method.params) - count))
        returns = "" if method.return_type.is_void else "return "
        return [
            f"default {return_type} {method.name}({self._param_list(method, count)}) {{",
            f"{self.INDENT}{returns}{method.name}({', '.join(args)});",
            "}",
        ]

    def _param_list(self, method: MethodDef, count: int) -> str:
        return ", ".join(self._declare(param.type_ref, param.name) for param in method.params[:count])

    def _declare(self, type_ref: TypeRef, name: str) -> str:
        return f"{self.translate_type(type_ref)} {name}"
