"""
Tests for Java emission: overloads, accessor vs builder nested types, events.
"""

from __future__ import annotations

import pytest
from api_builders import api, event, interface, method, prop

from api_json_to_code.errors import (
    MissingEventClassificationError,
    TypeMappingMismatchError,
    UnknownEventCategoryError,
)
from api_json_to_code.pipeline import CodeGeneratorConfig, PipelineGenerator
from api_json_to_code.pipeline.analyzer import (
    EventCategory,
    EventDef,
    EventInfo,
    InterfaceDef,
    Scope,
    TypeKind,
    TypeMappingTable,
    TypeRef,
)
from api_json_to_code.pipeline.backends import JavaBackend


def generate(api_dict, name, config=None):
    config = config or CodeGeneratorConfig()
    config.add_generation_comment = False
    return PipelineGenerator(api_dict, config).generate_interface(name)


def block(*lines):
    return "\n".join(lines)


def test_dialog_output():
    dialog = interface(
        "Dialog",
        method("accept", args=[prop("promptText", "string", required=False)]),
        method("dismiss"),
    )
    expected = block(
        "import java.util.*;",
        "import java.util.function.BiConsumer;",
        "",
        "public interface Dialog {",
        "  default void accept() {",
        "    accept(null);",
        "  }",
        "  void accept(String promptText);",
        "  void dismiss();",
        "}",
        "",
    )
    assert generate(api(dialog), "Dialog") == expected


def test_header_and_package():
    config = CodeGeneratorConfig(java_package="com.example.api", license_header="/**\n * Copyright (c) Example.\n */\n")
    code = generate(api(interface("Dialog", method("dismiss"))), "Dialog", config)
    assert code.startswith(
        block(
            "/**",
            " * Copyright (c) Example.",
            " */",
            "",
            "package com.example.api;",
            "",
            "import java.util.*;",
        )
    )


def test_generation_comment():
    code = PipelineGenerator(api(interface("Dialog", method("dismiss"))), generation_comment="// Generated by: test").generate_interface("Dialog")
    assert code.startswith("// Generated by: test\nimport java.util.*;")


class TestOverloads:
    def test_trailing_optional_expansion(self):
        page = interface(
            "Page",
            method(
                "f",
                "Promise<string>",
                args=[prop("a", "string"), prop("b", "number", required=False), prop("c", "boolean", required=False)],
            ),
        )
        expected = block(
            "  default String f(String a, Integer b) {",
            "    return f(a, b, null);",
            "  }",
            "  default String f(String a) {",
            "    return f(a, null, null);",
            "  }",
            "  String f(String a, Integer b, Boolean c);",
        )
        assert expected in generate(api(page), "Page")

    @pytest.mark.parametrize("optional_count", [0, 1, 2, 3])
    def test_overload_count(self, optional_count):
        names = ["a", "b", "c"]
        args = [prop(n, "string", required=i < 3 - optional_count) for i, n in enumerate(names)]
        code = generate(api(interface("Page", method("f", args=args))), "Page")
        assert code.count("default void f(") == optional_count
        param_counts = [line.count("String ") for line in code.splitlines() if "default void f(" in line]
        assert param_counts == list(range(2, 2 - optional_count, -1))
        assert "  void f(String a, String b, String c);" in code

    def test_optional_before_required_is_not_expanded(self):
        args = [prop("a", "string", required=False), prop("b", "string")]
        code = generate(api(interface("Page", method("f", args=args))), "Page")
        assert "default" not in code

    def test_renamed_methods(self):
        page = interface(
            "Page",
            method("goto", "Promise<null|Response>", args=[prop("url", "string")]),
            method("$eval", "Promise<Object>", args=[prop("selector", "string"), prop("pageFunction", "string")]),
            method("$$", "Promise<Array<ElementHandle>>", args=[prop("selector", "string")]),
        )
        code = generate(api(page), "Page")
        assert "  Response navigate(String url);" in code
        assert "  Object evalOnSelector(String selector, String pageFunction);" in code
        assert "  List<ElementHandle> querySelectorAll(String selector);" in code
        assert "goto(" not in code

    def test_custom_renames(self):
        config = CodeGeneratorConfig(method_renames={"close": "closePage"})
        code = generate(api(interface("Page", method("close"))), "Page", config)
        assert "  void closePage();" in code


class TestNestedTypes:
    def test_return_type_gets_accessors(self):
        page = interface("Page", method("viewportSize", "null|Object", properties=[prop("width", "number"), prop("height", "number")]))
        expected = block(
            "  class PageViewportSize {",
            "    private int width;",
            "    private int height;",
            "",
            "    public int width() {",
            "      return this.width;",
            "    }",
            "    public int height() {",
            "      return this.height;",
            "    }",
            "  }",
            "  PageViewportSize viewportSize();",
        )
        code = generate(api(page), "Page")
        assert expected in code
        assert "with" not in code

    def test_parameter_type_gets_builder(self):
        position = prop("position", "Object", required=False, properties=[prop("x", "number"), prop("y", "number")])
        options = prop(
            "options",
            "Object",
            required=False,
            properties=[prop("button", '"left"|"right"', required=False), position, prop("delay", "number", required=False)],
        )
        page = interface("Page", method("click", args=[prop("selector", "string"), options]))
        config = CodeGeneratorConfig(type_mappings=TypeMappingTable().add("Page.click.options.button", '"left"|"right"', "Button"))
        expected = block(
            "  class ClickOptions {",
            "    public enum Button { LEFT, RIGHT }",
            "    public class Position {",
            "      public int x;",
            "      public int y;",
            "",
            "      Position() {",
            "      }",
            "      public ClickOptions done() {",
            "        return ClickOptions.this;",
            "      }",
            "",
            "      public Position withX(int x) {",
            "        this.x = x;",
            "        return this;",
            "      }",
            "      public Position withY(int y) {",
            "        this.y = y;",
            "        return this;",
            "      }",
            "    }",
            "    public Button button;",
            "    public Position position;",
            "    public Integer delay;",
            "",
            "    public ClickOptions withButton(Button button) {",
            "      this.button = button;",
            "      return this;",
            "    }",
        )
        code = generate(api(page), "Page", config)
        assert expected in code
        assert "    public Position setPosition() {" in code
        assert "        this.position = new Position();" in code
        assert "      return this.position;" in code
        assert "private " not in code
        assert "  default void click(String selector) {" in code
        assert "  void click(String selector, ClickOptions options);" in code

    def test_same_shape_from_return_and_param(self):
        properties = [prop("width", "number"), prop("height", "number")]
        page = interface(
            "Page",
            method("viewportSize", "null|Object", properties=properties),
            method("setViewportSize", args=[prop("viewportSize", "Object", properties=properties)]),
        )
        code = generate(api(page), "Page")
        assert "  class PageViewportSize {\n    private int width;" in code
        assert "  class SetViewportSizeViewportSize {\n    public int width;" in code
        assert "    public SetViewportSizeViewportSize withWidth(int width) {" in code

    def test_enum_owned_by_interface(self):
        raw = 'null|"screen"|"print"'
        page = interface("Page", method("emulateMedia", args=[prop("media", raw, required=False)]))
        config = CodeGeneratorConfig(type_mappings=TypeMappingTable().add("Page.emulateMedia.media", raw, "Media"))
        code = generate(api(page), "Page", config)
        assert "  enum Media { SCREEN, PRINT }" in code
        assert "  void emulateMedia(Media media);" in code

    def test_generic_arguments_are_boxed(self):
        page = interface("Page", method("sizes", "Promise<Array<number>>"), method("flags", "Promise<Object<string, boolean>>"))
        code = generate(api(page), "Page")
        assert "  List<Integer> sizes();" in code
        assert "  Map<String, Boolean> flags();" in code


class TestEvents:
    def page(self, *members):
        return api(interface("Page", *members))

    def test_listener_event(self):
        code = generate(self.page(event("console", "ConsoleMessage")), "Page")
        assert "  void addConsoleListener(Listener<ConsoleMessage> listener);" in code
        assert "  void removeConsoleListener(Listener<ConsoleMessage> listener);" in code
        assert "waitFor" not in code

    def test_wait_for_event(self):
        code = generate(self.page(event("popup", "Page")), "Page")
        assert "  Deferred<Page> waitForPopup();" in code
        assert "Listener" not in code

    def test_events_outside_allow_list_are_not_emitted(self):
        code = generate(self.page(event("load", None)), "Page")
        assert "waitForLoad" not in code

    def test_void_payload(self):
        config = CodeGeneratorConfig(event_allow_list=None)
        code = generate(self.page(event("load", None)), "Page", config)
        assert "  Deferred<Void> waitForLoad();" in code

    def test_handler_event(self):
        config = CodeGeneratorConfig(event_allow_list=None)
        code = generate(self.page(event("dialog", "Dialog")), "Page", config)
        assert code.count("DialogListener(Listener<Dialog> listener);") == 2
        assert "waitFor" not in code

    def test_unclassified_event_fails(self):
        with pytest.raises(MissingEventClassificationError) as e:
            generate(self.page(event("unknown", "string")), "Page")
        assert e.value.path == "Page.unknown"

    def test_custom_classification(self):
        config = CodeGeneratorConfig(event_allow_list=["Page.close"])
        config.events.add("Page.close", "Close", EventCategory.WAIT_FOR)
        code = generate(self.page(event("close", "Page")), "Page", config)
        assert "  Deferred<Page> waitForClose();" in code

    def test_unknown_category_fails(self):
        config = CodeGeneratorConfig(event_allow_list=None)
        page = InterfaceDef(
            name="Page",
            scope=Scope("Page"),
            events=[EventDef(name="x", path="Page.x", type_ref=TypeRef(kind=TypeKind.VOID, name="void"), info=EventInfo("X", "BOGUS"))],
        )
        with pytest.raises(UnknownEventCategoryError):
            JavaBackend(config).generate(page)

    def test_order_of_declarations(self):
        raw = '"a"|"b"'
        config = CodeGeneratorConfig(type_mappings=TypeMappingTable().add("Page.m.e", raw, "E"))
        code = generate(self.page(method("m", args=[prop("e", raw)]), event("popup", "Page")), "Page", config)
        assert code.index("enum E") < code.index("waitForPopup") < code.index("void m(E e);")


def test_output_is_deterministic():
    page = interface(
        "Page",
        method("click", args=[prop("selector", "string"), prop("options", "Object", required=False, properties=[prop("delay", "number", required=False)])]),
        method("viewportSize", "null|Object", properties=[prop("width", "number")]),
        event("popup", "Page"),
    )
    assert generate(api(page), "Page") == generate(api(page), "Page")


def test_mapping_mismatch_produces_no_output():
    page = interface("Page", method("emulateMedia", args=[prop("media", '"screen"|"print"')]))
    config = CodeGeneratorConfig(type_mappings=TypeMappingTable().add("Page.emulateMedia.media", '"screen"', "Media"))
    generator = PipelineGenerator(api(page), config)
    with pytest.raises(TypeMappingMismatchError):
        generator.generate()


def test_declared_class_on_return_gets_accessors():
    config = CodeGeneratorConfig.from_dict(
        {
            "type_mappings": {
                "Page.viewportSize": {"from": "null|Object", "to": "Size", "define": {"classes": {"Size": {"width": "number"}}}},
            }
        }
    )
    page = interface("Page", method("viewportSize", "null|Object", properties=[prop("width", "number")]))
    code = generate(api(page), "Page", config)
    assert "    private int width;" in code
    assert "    public int width() {" in code
    assert "withWidth" not in code
    assert "  Size viewportSize();" in code


def test_callback_parameter_mapping():
    config = CodeGeneratorConfig(
        type_mappings=TypeMappingTable().add("Page.route.handler", "function(Route, Request)", "BiConsumer<Route, Request>")
    )
    page = interface("Page", method("route", args=[prop("url", "string"), prop("handler", "function(Route, Request)")]))
    code = generate(api(page), "Page", config)
    assert "  void route(String url, BiConsumer<Route, Request> handler);" in code
