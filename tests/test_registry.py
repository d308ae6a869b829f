import unittest

import pytest

from shader_graph import NodeKind, NodeRegistry, create_default_registry, create_node
from shader_graph.nodes.base import NodeDefinition
from shader_graph.nodes.color import DEFAULT_PRESET, PALETTE_PRESETS, preset_index
from shader_graph.nodes.helpers import fmt_float, vec_literal
from shader_graph.ir.types import SocketType

from builders import declares


class TestRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = create_default_registry()

    def test_builtin_types_present(self):
        for node_type in ('uv', 'time', 'sin', 'smoothMin', 'fbm', 'voronoi', 'palette',
                          'customFn', 'expr', 'loop', 'loopStart', 'loopEnd', 'output'):
            self.assertIn(node_type, self.registry, node_type)

    def test_lookup_unknown_is_none(self):
        self.assertIsNone(self.registry.lookup('legacyNodeFromOldSave'))
        with self.assertRaises(KeyError):
            self.registry['legacyNodeFromOldSave']

    def test_duplicate_type_rejected(self):
        uv = self.registry['uv']
        with self.assertRaises(ValueError):
            NodeRegistry([uv, uv])

    def test_categories_in_palette_order(self):
        categories = self.registry.categories()
        self.assertEqual(categories[0], 'Sources')
        self.assertEqual(categories[-1], 'Output')
        self.assertIn('Loops', categories)
        self.assertEqual(len(categories), len(set(categories)))

    def test_by_category(self):
        outputs = self.registry.by_category('Output')
        self.assertEqual([d.type for d in outputs], ['output', 'vec4Output'])
        self.assertTrue(all(d.kind is NodeKind.TERMINAL for d in outputs))

    def test_registries_are_independent(self):
        """Two registries never share state"""
        other = create_default_registry()
        self.assertIsNot(other, self.registry)
        small = NodeRegistry([self.registry['uv']])
        self.assertEqual(len(small), 1)
        self.assertEqual(len(create_default_registry()), len(self.registry))

    def test_types_listing(self):
        types = self.registry.types()
        self.assertEqual(len(types), len(self.registry))
        self.assertEqual(types[0], 'uv')


# ============ Generator totality ============

ALL_TYPES = create_default_registry().types()


@pytest.mark.parametrize('node_type', ALL_TYPES)
def test_generate_with_nothing_resolved(registry, node_type):
    """Every generator declares all its outputs when no input resolves"""
    definition = registry[node_type]
    node = create_node(definition, 'n1')
    result = definition.generate(node, {})

    if definition.kind is NodeKind.TERMINAL:
        assert 'gl_FragColor' in result.code
        assert result.output_vars == {}
        return

    for key, stype in definition.output_items(node):
        assert result.output_vars[key] == f"n1_{key}"
        assert declares(result.code, stype.value, f"n1_{key}"), (node_type, key)
    assert result.code.endswith('\n')


def test_helper_blocks_are_text(registry):
    for definition in registry:
        for block in definition.helper_blocks():
            assert isinstance(block, str) and block.strip()


def test_category_and_label_filled(registry):
    for definition in registry:
        assert isinstance(definition, NodeDefinition)
        assert definition.label
        assert definition.category


# ============ Literal helpers ============

class TestLiterals(unittest.TestCase):
    def test_fmt_float(self):
        self.assertEqual(fmt_float(5), '5.0')
        self.assertEqual(fmt_float(0.25), '0.25')
        self.assertEqual(fmt_float(-2.0), '-2.0')
        self.assertEqual(fmt_float(float('nan')), '0.0')

    def test_vec_literal(self):
        self.assertEqual(vec_literal(SocketType.VEC2, [0.5, 1]), 'vec2(0.5, 1.0)')
        self.assertEqual(vec_literal(SocketType.VEC3, [1, 0, 0]), 'vec3(1.0, 0.0, 0.0)')
        self.assertEqual(vec_literal(SocketType.FLOAT, 3), '3.0')

    def test_preset_index(self):
        self.assertEqual(preset_index('3'), 3)
        self.assertEqual(preset_index(' 0 '), 0)
        self.assertEqual(preset_index('oops'), DEFAULT_PRESET)
        self.assertEqual(preset_index('-1'), DEFAULT_PRESET)
        self.assertEqual(preset_index('99'), len(PALETTE_PRESETS) - 1)
        self.assertEqual(preset_index(None), DEFAULT_PRESET)


if __name__ == '__main__':
    unittest.main()
