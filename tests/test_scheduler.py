import unittest

from shader_graph import (
    CompileTarget, CycleDetectedError, Graph, NodeKind, NoTerminalOutputError,
    UnknownNodeTypeError, create_default_registry,
)
from shader_graph.ir.graph import Connection, GraphNode, InputSlot, OutputSlot
from shader_graph.ir.types import SocketType
from shader_graph.planner import schedule, topological_order
from shader_graph.planner.scheduler import walk_pair_chain

from builders import GraphBuilder


class SchedulerTestCase(unittest.TestCase):
    def setUp(self):
        self.registry = create_default_registry()
        self.b = GraphBuilder(self.registry)

    def chain(self):
        """uv1 -> ex1 -> sin1 -> out1"""
        uv = self.b.add('uv', 'uv1')
        ex = self.b.add('extractX', 'ex1')
        sin = self.b.add('sin', 'sin1', freq=2.0)
        out = self.b.add('output', 'out1')
        self.b.wire(uv, 'uv', ex, 'v').wire(ex, 'x', sin, 'input').wire(sin, 'output', out, 'color')
        return uv, ex, sin, out


class TestOrdering(SchedulerTestCase):
    def test_dependency_order(self):
        self.chain()
        plan = schedule(self.b.build(), self.registry)
        self.assertEqual(plan.order, ['uv1', 'ex1', 'sin1', 'out1'])
        self.assertEqual(plan.terminal_id, 'out1')
        self.assertFalse(plan.target.is_preview)
        self.assertEqual(plan.diagnostics, [])

    def test_unreachable_nodes_excluded(self):
        self.chain()
        self.b.add('fbm', 'orphan')
        plan = schedule(self.b.build(), self.registry)
        self.assertNotIn('orphan', plan.order)

    def test_shared_dependency_once(self):
        uv = self.b.add('uv', 'uv1')
        ex = self.b.add('extractX', 'ex1')
        ey = self.b.add('extractY', 'ey1')
        add = self.b.add('add', 'add1')
        out = self.b.add('output', 'out1')
        self.b.wire(uv, 'uv', ex, 'v').wire(uv, 'uv', ey, 'v')
        self.b.wire(ex, 'x', add, 'a').wire(ey, 'y', add, 'b').wire(add, 'result', out, 'color')

        order = schedule(self.b.build(), self.registry).order
        self.assertEqual(order.count('uv1'), 1)
        self.assertLess(order.index('uv1'), order.index('ex1'))
        self.assertLess(order.index('ey1'), order.index('add1'))
        self.assertEqual(order[-1], 'out1')

    def test_deterministic(self):
        self.chain()
        graph = self.b.build()
        self.assertEqual(schedule(graph, self.registry).order, schedule(graph, self.registry).order)


class TestGraphErrors(SchedulerTestCase):
    def test_cycle(self):
        a1 = self.b.add('add', 'a1')
        a2 = self.b.add('add', 'a2')
        out = self.b.add('output', 'out1')
        self.b.wire(a2, 'result', a1, 'a').wire(a1, 'result', a2, 'a').wire(a1, 'result', out, 'color')

        with self.assertRaises(CycleDetectedError) as ctx:
            schedule(self.b.build(), self.registry)
        self.assertEqual(ctx.exception.node_ids, ['a1', 'a2'])
        self.assertIn('a1 -> a2', str(ctx.exception))

    def test_self_loop(self):
        a1 = self.b.add('add', 'a1')
        out = self.b.add('output', 'out1')
        self.b.wire(a1, 'result', a1, 'b').wire(a1, 'result', out, 'color')

        with self.assertRaises(CycleDetectedError) as ctx:
            schedule(self.b.build(), self.registry)
        self.assertEqual(ctx.exception.node_ids, ['a1'])

    def test_cycle_outside_reachable_set_ignored(self):
        self.chain()
        a1 = self.b.add('add', 'a1')
        self.b.wire(a1, 'result', a1, 'b')
        plan = schedule(self.b.build(), self.registry)
        self.assertNotIn('a1', plan.order)

    def test_no_output(self):
        self.b.add('uv', 'uv1')
        with self.assertRaises(NoTerminalOutputError):
            schedule(self.b.build(), self.registry)

    def test_empty_graph(self):
        with self.assertRaises(NoTerminalOutputError):
            schedule(Graph(), self.registry)

    def test_first_output_wins(self):
        self.chain()
        self.b.add('output', 'out2')
        with self.assertLogs('shader_graph', level='WARNING') as logs:
            plan = schedule(self.b.build(), self.registry)
        self.assertEqual(plan.terminal_id, 'out1')
        self.assertNotIn('out2', plan.order)
        self.assertIn('out2', '\n'.join(logs.output))

    def test_missing_preview_node(self):
        self.chain()
        with self.assertRaises(NoTerminalOutputError):
            schedule(self.b.build(), self.registry, CompileTarget.preview('gone'))


class TestDegradedInputs(SchedulerTestCase):
    def test_unknown_type_reported_once(self):
        _, _, sin, _ = self.chain()
        ghost = GraphNode('ghost', 'legacyWobble', outputs={'value': OutputSlot(SocketType.FLOAT)})
        self.b.nodes.append(ghost)
        self.b.wire(ghost, 'value', sin, 'freq').wire(ghost, 'value', sin, 'amp')

        plan = schedule(self.b.build(), self.registry)
        self.assertNotIn('ghost', plan.order)
        self.assertEqual(len(plan.diagnostics), 1)
        self.assertIsInstance(plan.diagnostics[0], UnknownNodeTypeError)
        self.assertEqual(plan.diagnostics[0].node_id, 'ghost')

    def test_dangling_connection(self):
        """A connection to a deleted node counts as unconnected"""
        _, _, sin, _ = self.chain()
        sin.inputs['freq'].connection = Connection('deleted', 'value')
        plan = schedule(self.b.build(), self.registry)
        self.assertEqual(plan.order, ['uv1', 'ex1', 'sin1', 'out1'])
        self.assertEqual(plan.diagnostics, [])


class TestPreviewTarget(SchedulerTestCase):
    def test_preview_disconnected_node(self):
        self.chain()
        t = self.b.add('time', 't1')
        fract = self.b.add('fractRaw', 'fr1')
        self.b.wire(t, 'time', fract, 'input')

        plan = schedule(self.b.build(), self.registry, CompileTarget.preview('fr1'))
        self.assertEqual(plan.order, ['t1', 'fr1'])
        self.assertEqual(plan.terminal_id, 'fr1')

    def test_target_keys(self):
        self.assertEqual(CompileTarget.full_graph().key(), 'full')
        self.assertEqual(CompileTarget.preview('n3').key(), 'preview:n3')
        self.assertEqual(str(CompileTarget.preview('n3')), 'PreviewNode(n3)')
        self.assertEqual(CompileTarget(), CompileTarget.full_graph())


class TestLoopPlans(SchedulerTestCase):
    def loop_graph(self, steps=('st1', 'st2')):
        uv = self.b.add('uv', 'uv1')
        loop = self.b.add('loop', 'l1', steps=list(steps), iterations=3)
        self.b.add('loopRippleStep', 'st1')
        self.b.add('loopRotateStep', 'st2')
        length = self.b.add('length', 'len1')
        out = self.b.add('output', 'out1')
        self.b.wire(uv, 'uv', loop, 'carry').wire(loop, 'result', length, 'input')
        self.b.wire(length, 'output', out, 'color')
        return loop

    def test_steps_are_internal(self):
        self.loop_graph()
        plan = schedule(self.b.build(), self.registry)
        self.assertEqual(plan.order, ['uv1', 'l1', 'len1', 'out1'])
        self.assertEqual(plan.internal_ids, {'st1', 'st2'})
        self.assertEqual(plan.loop_plans['l1'].body, ['st1', 'st2'])
        self.assertIs(plan.loop_plans['l1'].kind, NodeKind.LOOP)

    def test_step_external_input_scheduled_first(self):
        self.loop_graph(steps=('fn1',))
        fn = self.b.add('customFn', 'fn1', inputs=[
            {'name': 'p', 'type': 'vec2'}, {'name': 'k', 'type': 'float'},
        ], outputType='vec2', body='p * k')
        t = self.b.add('time', 't1')
        self.b.wire(t, 'time', fn, 'k')

        order = schedule(self.b.build(), self.registry).order
        self.assertNotIn('fn1', order)
        self.assertLess(order.index('t1'), order.index('l1'))

    def test_step_cycle(self):
        self.loop_graph()
        st1, st2 = self.b.nodes[2], self.b.nodes[3]
        self.b.wire(st2, 'uv', st1, 'uv').wire(st1, 'uv', st2, 'uv')
        with self.assertRaises(CycleDetectedError):
            schedule(self.b.build(), self.registry)

    def test_loop_listing_itself(self):
        self.loop_graph(steps=('l1',))
        with self.assertRaises(CycleDetectedError) as ctx:
            schedule(self.b.build(), self.registry)
        self.assertEqual(ctx.exception.node_ids, ['l1'])

    def test_missing_step_is_not_a_graph_error(self):
        self.loop_graph(steps=('x1',))
        plan = schedule(self.b.build(), self.registry)
        self.assertIn('l1', plan.order)
        self.assertEqual(plan.loop_plans['l1'].body, ['x1'])

    def test_non_string_steps_dropped(self):
        self.loop_graph(steps=('st1', 7, None))
        plan = schedule(self.b.build(), self.registry)
        self.assertEqual(plan.loop_plans['l1'].body, ['st1'])


class TestLoopPair(SchedulerTestCase):
    def pair_graph(self):
        uv = self.b.add('uv', 'uv1')
        start = self.b.add('loopStart', 'ls')
        r1 = self.b.add('loopRippleStep', 'r1')
        r2 = self.b.add('loopRotateStep', 'r2')
        end = self.b.add('loopEnd', 'le', iterations=2)
        length = self.b.add('length', 'len1')
        out = self.b.add('output', 'out1')
        self.b.wire(uv, 'uv', start, 'carry').wire(start, 'carry', r1, 'uv')
        self.b.wire(r1, 'uv', r2, 'uv').wire(r2, 'uv', end, 'carry')
        self.b.wire(end, 'result', length, 'input').wire(length, 'output', out, 'color')
        return start, r1, r2, end

    def test_chain_body(self):
        self.pair_graph()
        plan = schedule(self.b.build(), self.registry)
        pair = plan.loop_plans['le']
        self.assertEqual(pair.body, ['r1', 'r2'])
        self.assertEqual(pair.start_id, 'ls')
        self.assertEqual(plan.internal_ids, {'r1', 'r2'})
        self.assertEqual(plan.order, ['uv1', 'ls', 'le', 'len1', 'out1'])

    def test_end_without_start(self):
        end = self.b.add('loopEnd', 'le')
        uv = self.b.add('uv', 'uv1')
        self.b.wire(uv, 'uv', end, 'carry')
        body, start = walk_pair_chain(self.b.build(), self.registry, end)
        self.assertEqual((body, start), ([], None))

    def test_chain_cycle(self):
        _, r1, r2, _ = self.pair_graph()
        self.b.wire(r2, 'uv', r1, 'uv')
        with self.assertRaises(CycleDetectedError) as ctx:
            schedule(self.b.build(), self.registry)
        self.assertEqual(sorted(ctx.exception.node_ids), ['r1', 'r2'])


class TestTopologicalOrder(unittest.TestCase):
    def test_post_order(self):
        deps = {'out': ['b', 'a'], 'a': ['c'], 'b': ['c'], 'c': []}
        self.assertEqual(topological_order(['out'], deps.__getitem__), ['c', 'b', 'a', 'out'])

    def test_long_chain_without_recursion(self):
        n = 5000
        deps = {str(i): [str(i + 1)] if i < n else [] for i in range(n + 1)}
        order = topological_order(['0'], deps.__getitem__)
        self.assertEqual(order[0], str(n))
        self.assertEqual(order[-1], '0')


if __name__ == '__main__':
    unittest.main()
