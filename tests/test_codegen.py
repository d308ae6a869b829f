"""
Code generation tests: statement order, helper dedup, input resolution,
bypass and overrides, and the fragment layout.
"""

import pytest

from shader_graph import CompilerConfig, GraphCompiler, TypeMismatchError, UnknownNodeTypeError
from shader_graph.codegen.assembler import assemble
from shader_graph.errors import InternalConsistencyError
from shader_graph.ir.graph import GraphNode, OutputSlot
from shader_graph.ir.types import SocketType

from builders import assert_before, assert_single_copy, main_body


# ============ Statement order ============

class TestSimpleChain:
    def test_statements_in_dependency_order(self, compiler, simple_chain):
        shader = compiler.compile(simple_chain)
        body = main_body(shader.fragment_shader)

        assert_before(body, "vec2 uv1_uv = (vUv - 0.5) * 2.0;", "float ex1_x = (uv1_uv).x;")
        assert_before(body, "float ex1_x", "float sin1_output = 1.0 * sin(ex1_x * 2.0);")
        assert_before(body, "float sin1_output", "gl_FragColor")

    def test_terminal_write_broadcasts_float(self, compiler, simple_chain):
        shader = compiler.compile(simple_chain)
        assert "    gl_FragColor = vec4(vec3(sin1_output), 1.0);\n}" in shader.fragment_shader

    def test_output_vars_map(self, compiler, simple_chain):
        shader = compiler.compile(simple_chain)
        assert shader.node_output_vars['uv1'] == {'uv': 'uv1_uv'}
        assert shader.node_output_vars['sin1'] == {'output': 'sin1_output'}
        assert shader.node_output_vars['out1'] == {}
        assert shader.order == ('uv1', 'ex1', 'sin1', 'out1')
        assert shader.diagnostics == ()


# ============ Helper dedup ============

class TestHelpers:
    def test_shared_smooth_helpers(self, builder, compiler):
        """Two smoothMin and one smoothMax: one smin body, one smax body"""
        uv = builder.add('uv', 'uv1')
        c1 = builder.add('circleSDF', 'c1')
        c2 = builder.add('boxSDF', 'c2')
        sm1 = builder.add('smoothMin', 'sm1')
        sm2 = builder.add('smoothMin', 'sm2', smoothness=0.2)
        sx = builder.add('smoothMax', 'sx1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', c1, 'position').wire(uv, 'uv', c2, 'position')
        builder.wire(c1, 'distance', sm1, 'a').wire(c2, 'distance', sm1, 'b')
        builder.wire(sm1, 'result', sm2, 'a').wire(c1, 'distance', sm2, 'b')
        builder.wire(sm2, 'result', sx, 'a').wire(c2, 'distance', sx, 'b')
        builder.wire(sx, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert_single_copy(src, "float smin(float a, float b, float k)")
        assert_single_copy(src, "float smax(float a, float b, float k)")
        assert src.count("smin(") == 3
        assert "float sm2_result = smin(sm1_result, c1_distance, 0.2);" in src

    def test_noise_primitives_shared(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        fbm = builder.add('fbm', 'f1')
        vor = builder.add('voronoi', 'v1')
        add = builder.add('add', 'add1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', fbm, 'uv').wire(uv, 'uv', vor, 'uv')
        builder.wire(fbm, 'value', add, 'a').wire(vor, 'dist', add, 'b')
        builder.wire(add, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert_single_copy(src, "float valueNoise(vec2 p)")
        assert_single_copy(src, "float fbm(vec2 p, int octaves, float lacunarity, float gain)")
        assert_single_copy(src, "float voronoi(vec2 p, float jitter)")
        assert_before(src, "float valueNoise(vec2 p)", "float fbm(")
        assert_before(src, "float fbm(", "void main()")

    def test_custom_function_helpers_deduplicated(self, builder, compiler):
        helper = "float bump(float x) {\n    return x * x;\n}"
        t = builder.add('time', 't1')
        fn1 = builder.add('customFn', 'fn1', inputs=[{'name': 'x', 'type': 'float'}],
                          body='bump(x)', glslFunctions=helper)
        fn2 = builder.add('customFn', 'fn2', inputs=[{'name': 'x', 'type': 'float'}],
                          body='bump(x) + 1.0', glslFunctions=helper)
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', fn1, 'x').wire(fn1, 'result', fn2, 'x')
        builder.wire(fn2, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert_single_copy(src, "float bump(float x)")
        assert "float fn1_result = bump(t1_time);" in src
        assert "float fn2_result = bump(fn1_result) + 1.0;" in src


# ============ Input resolution ============

class TestInputResolution:
    def test_socket_default_literal(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        rep = builder.add('opRepeat', 'r1')
        length = builder.add('length', 'len1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', rep, 'p').wire(rep, 'result', length, 'input')
        builder.wire(length, 'output', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "vec2 r1_result = opRepeat(uv1_uv, 1.0);" in src

    def test_vector_default_literal(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        box = builder.add('sdBox', 'b1')
        box.inputs['b'].default_value = [0.2, 0.4]
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', box, 'p').wire(box, 'distance', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float b1_distance = sdBox(uv1_uv, vec2(0.2, 0.4));" in src

    def test_custom_function_slider(self, builder, compiler):
        fn = builder.add('customFn', 'fn1', inputs=[
            {'name': 'k', 'type': 'float', 'slider': {'min': 0.0, 'max': 1.0}},
        ], body='k * 2.0', k=0.75)
        out = builder.add('output', 'out1')
        builder.wire(fn, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float fn1_result = 0.75 * 2.0;" in src

    def test_wired_input_beats_slider(self, builder, compiler):
        t = builder.add('time', 't1')
        fn = builder.add('customFn', 'fn1', inputs=[
            {'name': 'k', 'type': 'float', 'slider': {'min': 0.0, 'max': 1.0}},
        ], body='k * 2.0', k=0.75)
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', fn, 'k').wire(fn, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float fn1_result = t1_time * 2.0;" in src

    def test_float_broadcast_to_vec3_socket(self, builder, compiler):
        t = builder.add('time', 't1')
        tone = builder.add('toneMap', 'tm1')
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', tone, 'color').wire(tone, 'color', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "vec3 tm1_color = toneACES(vec3(t1_time));" in src

    def test_unknown_upstream_falls_back(self, builder, compiler):
        t = builder.add('time', 't1')
        sin = builder.add('sin', 'sin1', freq=3.0)
        out = builder.add('output', 'out1')
        ghost = GraphNode('ghost', 'legacyWobble', outputs={'value': OutputSlot(SocketType.FLOAT)})
        builder.nodes.append(ghost)
        builder.wire(t, 'time', sin, 'input').wire(ghost, 'value', sin, 'freq')
        builder.wire(sin, 'output', out, 'color')

        shader = compiler.compile(builder.build())
        assert "float sin1_output = 1.0 * sin(t1_time * 3.0);" in shader.fragment_shader
        assert len(shader.diagnostics) == 1
        assert isinstance(shader.diagnostics[0], UnknownNodeTypeError)
        assert shader.errors() == ["Unknown node type: legacyWobble (node ghost)"]

    def test_multiline_custom_body(self, builder, compiler):
        t = builder.add('time', 't1')
        fn = builder.add('customFn', 'fn1', inputs=[{'name': 'd', 'type': 'float'}],
                         body="float r = d * 2.0;\nfn1_result = r;")
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', fn, 'd').wire(fn, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    float fn1_result;\n    {\n        float r = t1_time * 2.0;\n        fn1_result = r;\n    }\n" in src


# ============ Type checks ============

class TestTypeChecks:
    def wire_vec2_into_color(self, builder):
        uv = builder.add('uv', 'uv1')
        tone = builder.add('toneMap', 'tm1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', tone, 'color').wire(tone, 'color', out, 'color')
        return builder.build()

    def test_incompatible_wire_is_fatal(self, builder, compiler):
        with pytest.raises(TypeMismatchError) as exc:
            compiler.compile(self.wire_vec2_into_color(builder))
        assert exc.value.node_id == 'tm1'
        assert exc.value.input_key == 'color'
        assert exc.value.expected is SocketType.VEC3
        assert exc.value.actual is SocketType.VEC2
        assert isinstance(exc.value, InternalConsistencyError)

    def test_check_can_be_disabled(self, builder, registry):
        compiler = GraphCompiler(registry, CompilerConfig(check_types=False))
        shader = compiler.compile(self.wire_vec2_into_color(builder))
        assert "toneACES(uv1_uv)" in shader.fragment_shader

    def test_dynamic_sockets_not_checked(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        fn = builder.add('customFn', 'fn1', inputs=[{'name': 'p', 'type': 'float'}], body='p.x')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', fn, 'p').wire(fn, 'result', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float fn1_result = uv1_uv.x;" in src


# ============ Bypass and overrides ============

class TestBypassAndOverride:
    def test_bypass_passes_input_through(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        fr = builder.add('fract', 'fr1')
        fr.bypassed = True
        length = builder.add('length', 'len1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', fr, 'input').wire(fr, 'output', length, 'input')
        builder.wire(length, 'output', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "    vec2 fr1_output = uv1_uv;\n" in src
        assert "fract(" not in main_body(src)
        assert "length(fr1_output)" in src

    def test_bypass_coerces_to_output_type(self, builder, compiler):
        t = builder.add('time', 't1')
        tone = builder.add('toneMap', 'tm1')
        tone.bypassed = True
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', tone, 'color').wire(tone, 'color', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "vec3 tm1_color = vec3(t1_time);" in src

    def test_bypass_without_inputs_generates_normally(self, builder, compiler):
        t = builder.add('time', 't1')
        t.bypassed = True
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float t1_time = u_time;" in src

    def test_code_override(self, builder, compiler):
        t = builder.add('time', 't1')
        sin = builder.add('sin', 'sin1', **{'__codeOverride': "    float sin1_output = t1_time * 0.5;  "})
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', sin, 'input').wire(sin, 'output', out, 'color')

        shader = compiler.compile(builder.build())
        assert "float sin1_output = t1_time * 0.5;\n" in shader.fragment_shader
        assert "sin(t1_time" not in shader.fragment_shader
        assert shader.node_output_vars['sin1'] == {'output': 'sin1_output'}

    def test_blank_override_ignored(self, builder, compiler):
        t = builder.add('time', 't1')
        sin = builder.add('sin', 'sin1', **{'__codeOverride': "   "})
        out = builder.add('output', 'out1')
        builder.wire(t, 'time', sin, 'input').wire(sin, 'output', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert "float sin1_output = 1.0 * sin(t1_time * 1.0);" in src


# ============ Layout ============

class TestLayout:
    def test_section_order(self, compiler, simple_chain):
        src = compiler.compile(simple_chain).fragment_shader
        assert src.startswith("precision mediump float;\n#define PI 3.1415926538\n")
        assert_before(src, "#define TAU", "uniform vec2 u_resolution;")
        assert_before(src, "uniform vec2 u_mouse;", "varying vec2 vUv;")
        assert_before(src, "varying vec2 vUv;", "void main() {")
        assert src.endswith("}")

    def test_helpers_before_prologue(self, builder, compiler):
        uv = builder.add('uv', 'uv1')
        c = builder.add('circleSDF', 'c1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', c, 'position').wire(c, 'distance', out, 'color')

        src = compiler.compile(builder.build()).fragment_shader
        assert_before(src, "float circleSDF(", "uniform float u_time;")

    def test_config_preamble(self, registry, simple_chain):
        config = CompilerConfig(precision='highp', defines=(('STEPS', '8'),))
        src = GraphCompiler(registry, config).compile(simple_chain).fragment_shader
        assert src.startswith("precision highp float;\n#define STEPS 8\n\n")
        assert "#define PI" not in src

    def test_assemble_requires_terminal_write(self):
        with pytest.raises(InternalConsistencyError):
            assemble([], ["    float a = 1.0;\n"], "")

    def test_assemble_layout(self):
        src = assemble(["float f() { return 1.0; }"], ["    float a = f();\n"],
                       "    gl_FragColor = vec4(vec3(a), 1.0);\n")
        assert src.endswith(
            "void main() {\n    float a = f();\n    gl_FragColor = vec4(vec3(a), 1.0);\n}"
        )
        assert "\n\nfloat f() { return 1.0; }\n\nuniform vec2 u_resolution;" in src
