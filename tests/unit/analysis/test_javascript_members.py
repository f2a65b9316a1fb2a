"""Unit tests for accessor_lint.analysis.javascript_members module."""

import pytest

from accessor_lint.analysis.base_parsers import JavaScriptParser, create_parser
from accessor_lint.analysis.javascript_members import (
    argument_key,
    classify_node,
    iter_containers,
)
from accessor_lint.analysis.members import (
    ContainerKind,
    DescriptorEntry,
    Direction,
    KeyKind,
    LiteralAccessor,
    PropertyKey,
)


@pytest.fixture(scope="module")
def parser():
    return JavaScriptParser()


def containers(parser, content):
    tree = parser.parse_tree(content)
    return list(iter_containers(tree.root_node))


class TestLiteralContainers:
    """Tests for object literal and class body classification."""

    def test_object_getter_and_setter(self, parser):
        result = containers(parser, "({ get a() {}, set a(v) {}, b: 1, c() {} })")
        assert len(result) == 1
        container = result[0]
        assert container.kind == ContainerKind.OBJECT
        assert [m.direction for m in container.members] == [Direction.GET, Direction.SET]
        assert all(isinstance(m, LiteralAccessor) for m in container.members)
        assert {m.key for m in container.members} == {PropertyKey(KeyKind.STATIC, "a")}

    def test_object_without_accessors_is_not_a_container(self, parser):
        assert containers(parser, "var o = { a: 1, get: 2, set() {} };") == []

    def test_member_locations(self, parser):
        result = containers(parser, "var o = {\n  set a(v) {}\n};")
        location = result[0].members[0].location
        assert (location.line, location.column) == (2, 2)
        assert location.snippet == "set a(v) {}"

    def test_computed_key_uses_expression_text(self, parser):
        result = containers(parser, "({ set [ foo.bar ](v) {} })")
        assert result[0].members[0].key == PropertyKey(KeyKind.COMPUTED, "foo.bar")

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("a", "a"),
            ("'a b'", "a b"),
            ('"a"', "a"),
            ("1", "1"),
            ("1.50", "1.5"),
            ("0x10", "16"),
            ("1e3", "1000"),
        ],
    )
    def test_static_key_values(self, parser, source, expected):
        result = containers(parser, f"({{ set {source}(v) {{}} }})")
        key = result[0].members[0].key
        assert key.kind == KeyKind.STATIC
        assert key.text == expected

    def test_class_body_static_flag(self, parser):
        result = containers(
            parser, "class A { static set a(v) {} set a(v) {} b() {} }"
        )
        assert len(result) == 1
        assert result[0].kind == ContainerKind.CLASS_BODY
        assert [m.key.is_static for m in result[0].members] == [True, False]

    def test_static_method_named_get_is_not_an_accessor(self, parser):
        # `static get` followed by a line break names a static method `get`
        assert containers(parser, "class A {\n  static get\n  () {}\n}") == []

    def test_containers_in_source_order(self, parser):
        content = "var a = { set x(v) {} };\nclass B { get y() {} }\nvar c = { get z() {} };"
        kinds = [c.kind for c in containers(parser, content)]
        assert kinds == [ContainerKind.OBJECT, ContainerKind.CLASS_BODY, ContainerKind.OBJECT]


class TestDescriptorContainers:
    """Tests for property-definition call classification."""

    def test_define_property(self, parser):
        result = containers(parser, "Object.defineProperty(o, 'a', { set: f });")
        assert len(result) == 1
        entry = result[0].members[0]
        assert result[0].kind == ContainerKind.DESCRIPTOR
        assert isinstance(entry, DescriptorEntry)
        assert entry.key == PropertyKey(KeyKind.STATIC, "a")
        assert (entry.has_get, entry.has_set) == (False, True)

    @pytest.mark.parametrize(
        "descriptor",
        [
            "{ get: g, set: s }",
            "{ get() {}, set(v) {} }",
            "{ get, set }",
            "{ 'get': g, \"set\": s }",
            "({ get: g, set: s })",
        ],
    )
    def test_descriptor_role_shapes(self, parser, descriptor):
        result = containers(parser, f"Object.defineProperty(o, 'a', {descriptor});")
        descriptors = [c for c in result if c.kind == ContainerKind.DESCRIPTOR]
        assert len(descriptors) == 1
        entry = descriptors[0].members[0]
        assert (entry.has_get, entry.has_set) == (True, True)

    def test_descriptor_without_roles_ignored(self, parser):
        assert containers(parser, "Object.defineProperty(o, 'a', { value: 1 });") == []

    def test_define_properties_one_container_per_entry(self, parser):
        content = "Object.defineProperties(o, { a: { get: g }, b: { set: s }, c: 1, ...rest });"
        result = containers(parser, content)
        assert [c.members[0].key.text for c in result] == ["a", "b"]
        assert all(c.kind == ContainerKind.DESCRIPTOR for c in result)

    def test_object_create(self, parser):
        result = containers(parser, "Object.create(null, { a: { set: s } });")
        assert len(result) == 1

    def test_comments_between_arguments(self, parser):
        content = "Object.defineProperty(o, /* key */ 'a', /* desc */ { set: s });"
        result = containers(parser, content)
        assert result[0].members[0].key.text == "a"

    @pytest.mark.parametrize(
        "content",
        [
            "Object.defineProperty(o, 'a', desc);",
            "Object.defineProperty(o, 'a');",
            "Object.defineProperty();",
            "Object.defineProperty(...args);",
            "Object.defineProperties(o, props);",
            "Object['defineProperty'](o, 'a', { set: s });",
            "window.Object.defineProperty(o, 'a', { set: s });",
            "Object.defineProperty`tag`;",
        ],
    )
    def test_unrecognised_calls(self, parser, content):
        assert containers(parser, content) == []

    def test_classify_node_ignores_other_nodes(self, parser):
        tree = parser.parse_tree("var x = 1;")
        assert classify_node(tree.root_node) == []


class TestArgumentKey:
    """Tests for keys taken from definition call arguments."""

    @pytest.mark.parametrize(
        "source,kind,text",
        [
            ("'a'", KeyKind.STATIC, "a"),
            ("`a`", KeyKind.STATIC, "a"),
            ("2", KeyKind.STATIC, "2"),
            ("(('a'))", KeyKind.STATIC, "a"),
            ("name", KeyKind.COMPUTED, "name"),
            ("`a${b}`", KeyKind.COMPUTED, "`a${b}`"),
            ("Symbol.iterator", KeyKind.COMPUTED, "Symbol.iterator"),
        ],
    )
    def test_argument_keys(self, parser, source, kind, text):
        tree = parser.parse_tree(f"Object.defineProperty(o, {source}, {{ set: s }});")
        arguments = tree.root_node.named_children[0].named_children[0].child_by_field_name(
            "arguments"
        )
        key = argument_key(arguments.named_children[1])
        assert key == PropertyKey(kind, text)


class TestParsers:
    """Tests for parser selection."""

    def test_create_parser_languages(self):
        assert create_parser("python") is None
        assert create_parser("javascript").language_name == "javascript"
        assert create_parser("typescript").language_name == "typescript"

    def test_tsx_by_extension(self):
        from pathlib import Path

        parser = create_parser("typescript", Path("view.tsx"))
        assert parser.language_name == "tsx"
        assert parser.parse_tree("<App />").root_node.type == "program"

    def test_lone_surrogates_are_parsed(self, parser):
        tree = parser.parse_tree("var s = '\udc80';\nvar o = { set a(v) {} };")
        assert len(list(iter_containers(tree.root_node))) == 1
