"""
Loop unrolling tests.

Loop nodes repeat their `steps` list; Loop Start / Loop End pairs repeat the
wired chain between them. Every iteration gets its own variable names.
"""

import pytest

from shader_graph import CompilerConfig, GraphCompiler, MissingLoopStepError
from shader_graph.ir.types import SocketType

from builders import assert_before, assert_single_copy, main_body


def loop_graph(builder, steps, **loop_params):
    """uv1 -> l1(steps) -> len1 -> out1, with one ripple and one rotate step available"""
    uv = builder.add('uv', 'uv1')
    loop = builder.add('loop', 'l1', steps=list(steps), **loop_params)
    builder.add('loopRippleStep', 'st1')
    builder.add('loopRotateStep', 'st2')
    length = builder.add('length', 'len1')
    out = builder.add('output', 'out1')
    builder.wire(uv, 'uv', loop, 'carry').wire(loop, 'result', length, 'input')
    builder.wire(length, 'output', out, 'color')
    return loop


def assignments(src, var):
    return src.count(f"    {var} = ")


# ============ Loop node ============

class TestLoopNode:
    def test_empty_steps_is_identity(self, builder, compiler):
        loop_graph(builder, [], iterations=8)
        src = compiler.compile(builder.build()).fragment_shader
        assert "    vec2 l1_result = uv1_uv;\n" in src
        assert assignments(src, 'l1_result') == 0
        assert "length(l1_result)" in src

    def test_unrolled_names(self, builder, compiler):
        loop_graph(builder, ['st1', 'st2'], iterations=3)
        src = compiler.compile(builder.build()).fragment_shader
        body = main_body(src)

        assert_before(body, "vec2 l1_result = uv1_uv;", "vec2 st1_L0_s = l1_result * 3.000;")
        assert_before(body, "vec2 st1_L0_uv", "vec2 st2_L0_uv = mat2(st2_L0_c, -st2_L0_s, st2_L0_s, st2_L0_c) * st1_L0_uv * 1.0200;")
        assert_before(body, "l1_result = st2_L0_uv;", "vec2 st1_L1_s = l1_result * 3.000;")
        assert "    l1_result = st2_L2_uv;\n" in body
        assert "_L3" not in body
        assert assignments(body, 'l1_result') == 3

    def test_steps_not_emitted_in_main_pass(self, builder, compiler):
        loop_graph(builder, ['st1', 'st2'], iterations=2)
        shader = compiler.compile(builder.build())
        assert "st1_uv" not in shader.fragment_shader
        assert 'st1' not in shader.order
        assert 'st1' not in shader.node_output_vars

    def test_chained_steps_read_same_iteration(self, builder, compiler):
        loop_graph(builder, ['st1', 'st2'], iterations=2)
        st1, st2 = builder.nodes[2], builder.nodes[3]
        builder.wire(st1, 'uv', st2, 'uv')

        src = compiler.compile(builder.build()).fragment_shader
        assert "* st1_L0_uv * 1.0200;" in src
        assert "* st1_L1_uv * 1.0200;" in src

    @pytest.mark.parametrize('requested, expected', [
        (100, 16),
        (0, 1),
        (-3, 1),
        (2.6, 3),
        (2.5, 3),
        ('lots', 4),
        (None, 4),
    ])
    def test_iterations_clamped(self, builder, compiler, requested, expected):
        loop_graph(builder, ['st1'], iterations=requested)
        src = compiler.compile(builder.build()).fragment_shader
        assert assignments(src, 'l1_result') == expected

    def test_custom_iteration_limit(self, builder, registry):
        loop_graph(builder, ['st1'], iterations=100)
        compiler = GraphCompiler(registry, CompilerConfig(max_loop_iterations=6))
        src = compiler.compile(builder.build()).fragment_shader
        assert assignments(src, 'l1_result') == 6

    def test_float_carry(self, builder, compiler):
        t = builder.add('time', 't1')
        loop = builder.add('loop', 'l1', steps=['acc'], iterations=2, carryType='float')
        builder.add('loopFloatAccumulate', 'acc')
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', loop, 'carry').wire(loop, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    float l1_result = t1_time;\n" in src
        assert ("    float acc_L0_value = l1_result + sin(l1_result * 2.000 + u_time * 1.000) * 0.1500;\n"
                in src)
        assert "    l1_result = acc_L1_value;\n" in src
        assert "gl_FragColor = vec4(vec3(l1_result), 1.0);" in src

    def test_step_output_coerced_to_carry(self, builder, compiler):
        loop_graph(builder, ['acc'], iterations=1)
        builder.add('loopFloatAccumulate', 'acc')
        src = compiler.compile(builder.build()).fragment_shader
        assert "    l1_result = vec2(acc_L0_value);\n" in src

    def test_step_helpers_added_once(self, builder, compiler):
        loop_graph(builder, ['rot'], iterations=4)
        builder.add('rotate2d', 'rot', angle=0.5)
        src = compiler.compile(builder.build()).fragment_shader
        assert_single_copy(src, "vec2 rotate(vec2 v, float angle)")
        assert "vec2 rot_L3_output = rotate(l1_result, 0.5);" in src

    def test_step_reads_outside_node(self, builder, compiler):
        loop_graph(builder, ['fn1'], iterations=2)
        fn = builder.add('customFn', 'fn1', inputs=[
            {'name': 'p', 'type': 'vec2'}, {'name': 'k', 'type': 'float'},
        ], outputType='vec2', body='p * k')
        t = builder.add('time', 't1')
        builder.wire(t, 'time', fn, 'k')

        src = compiler.compile(builder.build()).fragment_shader
        assert_before(src, "float t1_time = u_time;", "vec2 l1_result")
        assert "    vec2 fn1_L0_result = l1_result * t1_time;\n" in src
        assert "    l1_result = fn1_L1_result;\n" in src

    def test_wired_carry_typed_input_keeps_source(self, builder, compiler):
        """The carry goes to the unconnected vec2 input, not the one wired from uv1"""
        loop_graph(builder, ['cf1'], iterations=1)
        fn = builder.add('customFn', 'cf1', inputs=[
            {'name': 'p', 'type': 'vec2'}, {'name': 'q', 'type': 'vec2'},
        ], outputType='vec2', body='p + q')
        builder.wire(builder.nodes[0], 'uv', fn, 'p')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    vec2 cf1_L0_result = uv1_uv + l1_result;\n" in src
        assert "    l1_result = cf1_L0_result;\n" in src


class TestMissingStep:
    def test_dangling_step_degrades(self, builder, compiler):
        """A deleted step leaves the loop at its zero value, nothing raises"""
        loop_graph(builder, ['x1'], iterations=4)
        shader = compiler.compile(builder.build())

        assert shader.success
        assert "    vec2 l1_result = vec2(0.0);\n" in shader.fragment_shader
        assert assignments(shader.fragment_shader, 'l1_result') == 0
        assert len(shader.diagnostics) == 1
        err = shader.diagnostics[0]
        assert isinstance(err, MissingLoopStepError)
        assert (err.loop_node_id, err.missing_step_id) == ('l1', 'x1')

    def test_one_missing_among_valid_steps(self, builder, compiler):
        loop_graph(builder, ['st1', 'x1', 'st2'], iterations=2)
        shader = compiler.compile(builder.build())
        assert "    vec2 l1_result = vec2(0.0);\n" in shader.fragment_shader
        assert "st1_L0" not in shader.fragment_shader
        assert [type(e) for e in shader.diagnostics] == [MissingLoopStepError]

    def test_float_loop_zero_value(self, builder, compiler):
        t = builder.add('time', 't1')
        loop = builder.add('loop', 'l1', steps=['x1'], carryType='float')
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', loop, 'carry').wire(loop, 'result', out, 'color')
        src = compiler.compile(builder.build()).fragment_shader
        assert "    float l1_result = 0.0;\n" in src


# ============ Loop Start / Loop End ============

def pair_graph(builder, iterations=2):
    uv = builder.add('uv', 'uv1')
    start = builder.add('loopStart', 'ls')
    r1 = builder.add('loopRippleStep', 'r1')
    end = builder.add('loopEnd', 'le', iterations=iterations)
    length = builder.add('length', 'len1')
    out = builder.add('output', 'out1')
    builder.wire(uv, 'uv', start, 'carry').wire(start, 'carry', r1, 'uv')
    builder.wire(r1, 'uv', end, 'carry').wire(end, 'result', length, 'input')
    builder.wire(length, 'output', out, 'color')
    return start, r1, end


class TestLoopPair:
    def test_chain_unrolled(self, builder, compiler):
        pair_graph(builder, iterations=2)
        src = compiler.compile(builder.build()).fragment_shader
        body = main_body(src)

        assert_before(body, "vec2 ls_carry = uv1_uv;", "vec2 le_result = ls_carry;")
        assert_before(body, "vec2 le_result = ls_carry;", "vec2 r1_P0_s = le_result * 3.000;")
        assert "    le_result = r1_P0_uv;\n" in body
        assert "    le_result = r1_P1_uv;\n" in body
        assert "r1_P2" not in body
        assert "r1_uv" not in body
        assert "length(le_result)" in body

    def test_two_node_chain(self, builder, compiler):
        start, r1, end = pair_graph(builder, iterations=1)
        rot = builder.add('loopRotateStep', 'rot')
        builder.wire(r1, 'uv', rot, 'uv').wire(rot, 'uv', end, 'carry')

        src = compiler.compile(builder.build()).fragment_shader
        assert_before(src, "vec2 r1_P0_uv", "vec2 rot_P0_uv")
        assert "* r1_P0_uv * 1.0200;" in src
        assert "    le_result = rot_P0_uv;\n" in src

    def test_float_carry(self, builder, compiler):
        t = builder.add('time', 't1')
        start = builder.add('loopStart', 'ls')
        acc = builder.add('loopFloatAccumulate', 'acc')
        end = builder.add('loopEnd', 'le', iterations=1)
        out = builder.add('output', 'out1')
        for slot in (start.inputs['carry'], start.outputs['carry'], end.inputs['carry'], end.outputs['result']):
            slot.type = SocketType.FLOAT
        builder.wire(t, 'time', start, 'carry').wire(start, 'carry', acc, 'value')
        builder.wire(acc, 'value', end, 'carry').wire(end, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    float ls_carry = t1_time;\n" in src
        assert "    float le_result = ls_carry;\n" in src
        assert "    le_result = acc_P0_value;\n" in src
        assert "gl_FragColor = vec4(vec3(le_result), 1.0);" in src

    def test_end_without_start_passes_through(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        end = builder.add('loopEnd', 'le', iterations=5)
        length = builder.add('length', 'len1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', end, 'carry').wire(end, 'result', length, 'input')
        builder.wire(length, 'output', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    vec2 le_result = uv1_uv;\n" in src
        assert assignments(src, 'le_result') == 0

    def test_iterations_clamped(self, builder, compiler):
        pair_graph(builder, iterations=40)
        src = compiler.compile(builder.build()).fragment_shader
        assert assignments(src, 'le_result') == 16
