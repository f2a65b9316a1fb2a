"""
Container classification for JavaScript and TypeScript syntax trees.

Maps tree-sitter nodes to accessor Containers:

- object literals and class bodies, whose `get`/`set` members become
  LiteralAccessor values;
- `Object.defineProperty(target, key, descriptor)` and
  `Reflect.defineProperty(...)`, one DescriptorEntry per call;
- `Object.defineProperties(target, map)` and `Object.create(proto, map)`,
  one DescriptorEntry per map entry whose value is an object literal.

Anything else (plain data properties, methods, non-literal descriptors,
short argument lists, spread arguments, error nodes) is not a Container.
"""

from collections.abc import Iterator

from tree_sitter import Node

from .members import (
    Container,
    ContainerKind,
    DescriptorEntry,
    Direction,
    KeyKind,
    LiteralAccessor,
    PropertyKey,
    SourceLocation,
)

CONTAINER_NODE_TYPES = ("object", "class_body", "call_expression")

# (receiver, method) -> index of the descriptor / descriptor map argument
SINGLE_PROPERTY_DEFINITIONS = {
    ("Object", "defineProperty"): 2,
    ("Reflect", "defineProperty"): 2,
}
MULTI_PROPERTY_DEFINITIONS = {
    ("Object", "defineProperties"): 1,
    ("Object", "create"): 1,
}

DESCRIPTOR_ROLES = {"get": Direction.GET, "set": Direction.SET}

_IDENTIFIER_KEYS = (
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "identifier",
)


def node_text(node: Node) -> str:
    """Source text of a node."""
    raw = node.text
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def node_location(node: Node) -> SourceLocation:
    """Location of a node with the first line of its text as snippet."""
    snippet = node_text(node).split("\n", 1)[0].strip()
    return SourceLocation(
        line=node.start_point[0] + 1,
        column=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1],
        snippet=snippet,
    )


def _first_named(node: Node) -> Node | None:
    return next((c for c in node.named_children if c.type != "comment"), None)


def _unwrap_parens(node: Node) -> Node:
    while node.type == "parenthesized_expression":
        inner = _first_named(node)
        if inner is None:
            break
        node = inner
    return node


def _string_value(node: Node) -> str:
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def _number_value(raw: str) -> str:
    """Normalise a numeric literal the way it reads as a property name."""
    text = raw.replace("_", "")
    # Legacy octal and bigint literals keep their raw text
    if len(text) > 1 and text[0] == "0" and text[1].isdigit():
        return raw
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            return str(int(text, 0))
        value = float(text)
    except ValueError:
        return raw
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def property_key(node: Node | None, is_static: bool = False) -> PropertyKey | None:
    """Build the key of a member name node.

    Args:
        node: The `name`/`key` node of a member
        is_static: Whether the member is a `static` class member

    Returns:
        PropertyKey, or None for shapes that cannot name a property
    """
    # Names tree-sitter inserted during error recovery have no source
    if node is None or node.is_missing:
        return None

    if node.type in _IDENTIFIER_KEYS:
        return PropertyKey(KeyKind.STATIC, node_text(node), is_static)
    if node.type == "string":
        return PropertyKey(KeyKind.STATIC, _string_value(node), is_static)
    if node.type == "number":
        return PropertyKey(KeyKind.STATIC, _number_value(node_text(node)), is_static)
    if node.type == "computed_property_name":
        expression = _first_named(node)
        if expression is None:
            return None
        return PropertyKey(KeyKind.COMPUTED, node_text(expression), is_static)
    return None


def argument_key(node: Node) -> PropertyKey:
    """Key named by the property argument of a definition call."""
    node = _unwrap_parens(node)
    if node.type == "string":
        return PropertyKey(KeyKind.STATIC, _string_value(node))
    if node.type == "number":
        return PropertyKey(KeyKind.STATIC, _number_value(node_text(node)))
    if node.type == "template_string" and not any(
        c.type == "template_substitution" for c in node.named_children
    ):
        return PropertyKey(KeyKind.STATIC, _string_value(node))
    return PropertyKey(KeyKind.COMPUTED, node_text(node))


def _member_modifiers(node: Node) -> tuple[Direction | None, bool]:
    """Read the keyword tokens in front of a method_definition's name."""
    direction = None
    is_static = False
    name = node.child_by_field_name("name")

    for child in node.children:
        if name is not None and child.start_byte >= name.start_byte:
            break
        if child.is_named:
            continue
        if child.type in ("static", "static get"):
            is_static = True
        if child.type in ("get", "static get"):
            direction = Direction.GET
        elif child.type == "set":
            direction = Direction.SET

    return direction, is_static


def _literal_container(node: Node, kind: ContainerKind) -> Container | None:
    members = []
    for child in node.named_children:
        if child.type != "method_definition":
            continue

        direction, is_static = _member_modifiers(child)
        if direction is None:
            continue

        key = property_key(
            child.child_by_field_name("name"),
            is_static=is_static and kind == ContainerKind.CLASS_BODY,
        )
        if key is None:
            continue

        members.append(LiteralAccessor(direction, key, node_location(child)))

    if not members:
        return None
    return Container(kind=kind, location=node_location(node), members=members)


def descriptor_roles(descriptor: Node) -> set[Direction]:
    """Reserved role names present on a descriptor object literal."""
    roles = set()
    for child in descriptor.named_children:
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
        elif child.type == "method_definition":
            key_node = child.child_by_field_name("name")
        elif child.type == "shorthand_property_identifier":
            key_node = child
        else:
            continue

        key = property_key(key_node)
        if key is not None and key.kind == KeyKind.STATIC and key.text in DESCRIPTOR_ROLES:
            roles.add(DESCRIPTOR_ROLES[key.text])
    return roles


def _descriptor_container(key: PropertyKey, descriptor: Node) -> Container | None:
    roles = descriptor_roles(descriptor)
    if not roles:
        return None

    location = node_location(descriptor)
    entry = DescriptorEntry(
        key=key,
        has_get=Direction.GET in roles,
        has_set=Direction.SET in roles,
        location=location,
    )
    return Container(kind=ContainerKind.DESCRIPTOR, location=location, members=[entry])


def _callee(call: Node) -> tuple[str, str] | None:
    function = call.child_by_field_name("function")
    if function is None or function.type != "member_expression":
        return None

    receiver = function.child_by_field_name("object")
    method = function.child_by_field_name("property")
    if receiver is None or method is None or receiver.type != "identifier":
        return None
    return node_text(receiver), node_text(method)


def _call_arguments(call: Node, position: int) -> list[Node] | None:
    """Arguments up to and including `position`, when they are all plain."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None

    values = [c for c in arguments.named_children if c.type != "comment"]
    if len(values) <= position:
        return None
    if any(v.type == "spread_element" for v in values[: position + 1]):
        return None
    return values


def _definition_containers(call: Node) -> list[Container]:
    callee = _callee(call)
    if callee is None:
        return []

    if callee in SINGLE_PROPERTY_DEFINITIONS:
        position = SINGLE_PROPERTY_DEFINITIONS[callee]
        arguments = _call_arguments(call, position)
        if arguments is None:
            return []
        descriptor = _unwrap_parens(arguments[position])
        if descriptor.type != "object":
            return []
        container = _descriptor_container(argument_key(arguments[position - 1]), descriptor)
        return [container] if container else []

    if callee in MULTI_PROPERTY_DEFINITIONS:
        position = MULTI_PROPERTY_DEFINITIONS[callee]
        arguments = _call_arguments(call, position)
        if arguments is None:
            return []
        properties = _unwrap_parens(arguments[position])
        if properties.type != "object":
            return []

        containers = []
        for entry in properties.named_children:
            if entry.type != "pair":
                continue
            key = property_key(entry.child_by_field_name("key"))
            value = entry.child_by_field_name("value")
            if key is None or value is None:
                continue
            descriptor = _unwrap_parens(value)
            if descriptor.type != "object":
                continue
            container = _descriptor_container(key, descriptor)
            if container:
                containers.append(container)
        return containers

    return []


def classify_node(node: Node) -> list[Container]:
    """Containers rooted at a single node; empty for anything else."""
    if node.type == "object":
        container = _literal_container(node, ContainerKind.OBJECT)
        return [container] if container else []
    if node.type == "class_body":
        container = _literal_container(node, ContainerKind.CLASS_BODY)
        return [container] if container else []
    if node.type == "call_expression":
        return _definition_containers(node)
    return []


def iter_containers(root: Node) -> Iterator[Container]:
    """Yield every Container in the tree, depth first in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in CONTAINER_NODE_TYPES:
            yield from classify_node(node)
        stack.extend(reversed(node.named_children))
