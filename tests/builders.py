"""
Graph construction helpers shared by the test modules.

GraphBuilder instantiates registry definitions the way the editor does
(create_node + connect), so tests describe graphs by node type and wiring
instead of hand-writing socket maps.
"""

import re

from shader_graph import Graph, create_default_registry, create_node, connect


class GraphBuilder:
    def __init__(self, registry=None):
        self.registry = registry if registry is not None else create_default_registry()
        self.nodes = []

    def add(self, node_type, node_id=None, **params):
        """Add a node of a registered type; params override the defaults."""
        definition = self.registry.lookup(node_type)
        if definition is None:
            raise KeyError(node_type)
        node = create_node(definition, node_id or f"{node_type}_{len(self.nodes) + 1}", params)
        self.nodes.append(node)
        return node

    def wire(self, source, output_key, target, input_key):
        connect(target, input_key, source, output_key)
        return self

    def build(self):
        return Graph(self.nodes)


def declares(code, type_name, variable):
    """True if `code` declares `variable` with GLSL type `type_name`."""
    return re.search(rf"\b{type_name}\s+{re.escape(variable)}\b", code) is not None


def main_body(source):
    """Text between 'void main() {' and the closing brace."""
    start = source.index("void main() {")
    return source[start:]


def assert_before(source, first, second):
    """Assert that `first` appears in `source` before `second`."""
    i, j = source.find(first), source.find(second)
    assert i != -1, f"{first!r} not in source"
    assert j != -1, f"{second!r} not in source"
    assert i < j, f"{first!r} should come before {second!r}"


def assert_single_copy(source, text):
    """Assert that `text` occurs exactly once in `source`."""
    n = source.count(text)
    assert n == 1, f"Expected one copy of {text!r}, found {n}"
