import unittest

from shader_graph import Graph, GraphModelError, SocketType, connect, create_default_registry, create_node
from shader_graph.ir.graph import Connection, GraphNode, InputSlot


def _snapshot():
    return {
        'nodes': [
            {
                'id': 'uv1', 'type': 'uv', 'position': {'x': 10, 'y': 20},
                'outputs': {'uv': {'type': 'vec2', 'label': 'UV'}},
            },
            {
                'id': 'len1', 'type': 'length', 'params': {'scale': 2.0},
                'inputs': {
                    'input': {'type': 'vec2', 'label': 'Input',
                              'connection': {'nodeId': 'uv1', 'outputKey': 'uv'}},
                    'scale': {'type': 'float', 'label': 'Scale'},
                },
                'outputs': {'output': {'type': 'float', 'label': 'Output'}},
            },
        ]
    }


class TestGraphSnapshot(unittest.TestCase):
    def test_from_dict(self):
        """Test that the editor snapshot shape is read into typed slots"""
        graph = Graph.from_dict(_snapshot())
        self.assertEqual(len(graph), 2)
        self.assertIn('uv1', graph)

        uv = graph.get('uv1')
        self.assertEqual(uv.position, (10, 20))
        self.assertIs(uv.outputs['uv'].type, SocketType.VEC2)

        length = graph.get('len1')
        self.assertEqual(length.params, {'scale': 2.0})
        self.assertEqual(length.inputs['input'].connection, Connection('uv1', 'uv'))
        self.assertFalse(length.inputs['scale'].is_connected)

    def test_round_trip_preserves_connections(self):
        graph = Graph.from_dict(_snapshot())
        again = Graph.from_dict(graph.to_dict())
        self.assertEqual(again.canonical_json(), graph.canonical_json())
        self.assertEqual(again.get('len1').inputs['input'].connection.node_id, 'uv1')

    def test_node_order_is_insertion_order(self):
        graph = Graph.from_dict(_snapshot())
        self.assertEqual([n.id for n in graph], ['uv1', 'len1'])

    def test_duplicate_ids_rejected(self):
        data = _snapshot()
        data['nodes'][1]['id'] = 'uv1'
        with self.assertRaises(GraphModelError) as ctx:
            Graph.from_dict(data)
        self.assertEqual(ctx.exception.node_id, 'uv1')

    def test_unknown_socket_type_rejected(self):
        data = _snapshot()
        data['nodes'][0]['outputs']['uv']['type'] = 'mat4'
        with self.assertRaises(GraphModelError) as ctx:
            Graph.from_dict(data)
        self.assertIn('uv1', str(ctx.exception))

    def test_malformed_snapshot(self):
        with self.assertRaises(GraphModelError):
            Graph.from_dict({'nodes': 'nope'})
        with self.assertRaises(GraphModelError):
            Graph.from_dict({'nodes': [{'type': 'uv'}]})

    def test_canonical_json_ignores_position(self):
        """Dragging a node must not change the cache identity"""
        a = _snapshot()
        b = _snapshot()
        b['nodes'][0]['position'] = {'x': 500, 'y': -40}
        self.assertEqual(Graph.from_dict(a).canonical_json(), Graph.from_dict(b).canonical_json())

    def test_canonical_json_tracks_params(self):
        a = _snapshot()
        b = _snapshot()
        b['nodes'][1]['params']['scale'] = 3.0
        self.assertNotEqual(Graph.from_dict(a).canonical_json(), Graph.from_dict(b).canonical_json())


class TestCreateNode(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.registry = create_default_registry()

    def test_params_overlay_defaults(self):
        node = create_node(self.registry['sin'], 's1', {'freq': 2.0})
        self.assertEqual(node.params, {'freq': 2.0, 'amp': 1.0})
        self.assertEqual(sorted(node.inputs), ['amp', 'freq', 'input'])
        self.assertEqual(list(node.outputs), ['output'])

    def test_defaults_are_copied(self):
        a = create_node(self.registry['loop'], 'a')
        b = create_node(self.registry['loop'], 'b')
        a.params['steps'].append('x')
        self.assertEqual(b.params['steps'], [])

    def test_socket_defaults_become_literals(self):
        node = create_node(self.registry['opRepeat'], 'r1')
        self.assertEqual(node.inputs['s'].default_value, 1.0)
        self.assertIsNone(node.inputs['p'].default_value)

    def test_custom_fn_sockets_from_params(self):
        node = create_node(self.registry['customFn'], 'fn1', {
            'inputs': [
                {'name': 'd', 'type': 'float'},
                {'name': 'p', 'type': 'vec2'},
                {'type': 'float'},
            ],
            'outputType': 'vec3',
        })
        self.assertEqual(list(node.inputs), ['d', 'p'])
        self.assertIs(node.inputs['p'].type, SocketType.VEC2)
        self.assertIs(node.outputs['result'].type, SocketType.VEC3)

    def test_expr_output_type(self):
        node = create_node(self.registry['expr'], 'e1', {'outputType': 'vec2'})
        self.assertIs(node.outputs['result'].type, SocketType.VEC2)
        self.assertEqual(list(node.inputs), ['in0', 'in1', 'in2', 'in3'])

    def test_loop_sockets_follow_carry_type(self):
        node = create_node(self.registry['loop'], 'l1', {'carryType': 'float'})
        self.assertIs(node.inputs['carry'].type, SocketType.FLOAT)
        self.assertIs(node.outputs['result'].type, SocketType.FLOAT)


class TestConnect(unittest.TestCase):
    def test_connect_sets_connection(self):
        registry = create_default_registry()
        uv = create_node(registry['uv'], 'uv1')
        length = create_node(registry['length'], 'len1')
        connect(length, 'input', uv, 'uv')
        self.assertEqual(length.inputs['input'].connection, Connection('uv1', 'uv'))

    def test_connect_unknown_input(self):
        source = GraphNode('a', 'time')
        target = GraphNode('b', 'sin', inputs={'input': InputSlot(SocketType.FLOAT)})
        with self.assertRaises(GraphModelError):
            connect(target, 'nope', source, 'time')

    def test_duplicate_node_objects(self):
        with self.assertRaises(GraphModelError):
            Graph([GraphNode('a', 'uv'), GraphNode('a', 'time')])


if __name__ == '__main__':
    unittest.main()
