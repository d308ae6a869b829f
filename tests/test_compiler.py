"""
GraphCompiler tests: results, caching and the one-shot helper.
"""

import logging

import pytest

from shader_graph import (
    CompiledShader, CompileTarget, CompilerConfig, CycleDetectedError, Graph,
    GraphCompiler, LRUCache, compile_graph, create_default_registry,
)
from shader_graph.codegen.assembler import VERTEX_SHADER


class TestCompiledShader:
    def test_result_fields(self, compiler, simple_chain):
        shader = compiler.compile(simple_chain)
        assert isinstance(shader, CompiledShader)
        assert shader.success
        assert shader.vertex_shader == VERTEX_SHADER
        assert "gl_Position = vec4(position, 1.0);" in shader.vertex_shader
        assert shader.target == CompileTarget.full_graph()
        assert shader.errors() == []

    def test_deterministic_across_compilers(self, registry, simple_chain):
        a = GraphCompiler(registry).compile(simple_chain)
        b = GraphCompiler(create_default_registry()).compile(simple_chain)
        assert a.fragment_shader == b.fragment_shader
        assert a.node_output_vars == b.node_output_vars

    def test_graph_not_mutated(self, compiler, simple_chain):
        before = simple_chain.canonical_json()
        compiler.compile(simple_chain)
        compiler.compile(simple_chain, CompileTarget.preview('ex1'))
        assert simple_chain.canonical_json() == before

    def test_compile_from_snapshot_dict(self, compiler, simple_chain):
        from_graph = compiler.compile(simple_chain)
        compiler.clear_cache()
        from_dict = compiler.compile(simple_chain.to_dict())
        assert from_dict.fragment_shader == from_graph.fragment_shader

    def test_graph_errors_propagate(self, builder, compiler):
        a1 = builder.add('add', 'a1')
        out = builder.add('output', 'out1')
        builder.wire(a1, 'result', a1, 'a').wire(a1, 'result', out, 'color')
        with pytest.raises(CycleDetectedError):
            compiler.compile(builder.build())

    def test_diagnostics_logged(self, builder, compiler, caplog):
        uv = builder.add('uv', 'uv1')
        loop = builder.add('loop', 'l1', steps=['gone'])
        length = builder.add('length', 'len1')
        out = builder.add('output', 'out1')
        builder.wire(uv, 'uv', loop, 'carry').wire(loop, 'result', length, 'input')
        builder.wire(length, 'output', out, 'color')

        with caplog.at_level(logging.WARNING, logger='shader_graph'):
            shader = compiler.compile(builder.build())
        assert shader.errors() == ["Loop l1: step gone does not exist"]
        assert "1 diagnostic(s)" in caplog.text


class TestCaching:
    def test_second_compile_hits(self, compiler, simple_chain):
        first = compiler.compile(simple_chain)
        second = compiler.compile(simple_chain)
        assert second is first
        stats = compiler.stats()
        assert (stats['hits'], stats['misses'], stats['size']) == (1, 1, 1)

    def test_cached_output_vars_read_only(self, compiler, simple_chain):
        first = compiler.compile(simple_chain)
        with pytest.raises(TypeError):
            first.node_output_vars['sin1'] = {}
        with pytest.raises(TypeError):
            first.node_output_vars['sin1']['output'] = 'broken'

        second = compiler.compile(simple_chain)
        assert second is first
        assert second.node_output_vars['sin1'] == {'output': 'sin1_output'}

    def test_position_change_hits(self, compiler, simple_chain):
        compiler.compile(simple_chain)
        moved = Graph.from_dict(simple_chain.to_dict())
        moved.get('sin1').position = (300.0, 120.0)
        compiler.compile(moved)
        assert compiler.stats()['hits'] == 1

    def test_param_change_misses(self, compiler, simple_chain):
        first = compiler.compile(simple_chain)
        changed = Graph.from_dict(simple_chain.to_dict())
        changed.get('sin1').params['freq'] = 4.0
        second = compiler.compile(changed)
        assert "sin(ex1_x * 4.0)" in second.fragment_shader
        assert second.fragment_shader != first.fragment_shader
        assert compiler.stats()['misses'] == 2

    def test_targets_cached_separately(self, compiler, simple_chain):
        full = compiler.compile(simple_chain)
        preview = compiler.compile(simple_chain, CompileTarget.preview('ex1'))
        assert preview.fragment_shader != full.fragment_shader
        assert compiler.stats()['size'] == 2

    def test_invalidate(self, compiler, simple_chain):
        compiler.compile(simple_chain)
        assert compiler.invalidate(simple_chain) is True
        assert compiler.invalidate(simple_chain) is False
        compiler.compile(simple_chain)
        assert compiler.stats()['misses'] == 2

    def test_clear_cache(self, compiler, simple_chain):
        compiler.compile(simple_chain)
        compiler.compile(simple_chain)
        compiler.clear_cache()
        assert compiler.stats() == {'size': 0, 'capacity': 16, 'hits': 0, 'misses': 0, 'hit_rate': 0}

    def test_capacity_from_config(self, registry, simple_chain):
        compiler = GraphCompiler(registry, CompilerConfig(cache_capacity=1))
        compiler.compile(simple_chain)
        compiler.compile(simple_chain, CompileTarget.preview('uv1'))
        assert compiler.stats()['size'] == 1
        compiler.compile(simple_chain)
        assert compiler.stats()['hits'] == 0


class TestLRUCache:
    def test_evicts_least_recent(self):
        cache = LRUCache(capacity=2)
        cache.put('a', 1)
        cache.put('b', 2)
        cache.get('a')
        cache.put('c', 3)
        assert cache.get('b') is None
        assert cache.get('a') == 1
        assert len(cache) == 2

    def test_hit_rate(self):
        cache = LRUCache(capacity=4)
        cache.put('k', 'v')
        cache.get('k')
        cache.get('missing')
        assert cache.stats()['hit_rate'] == 50.0


class TestCompileGraph:
    def test_one_shot(self, simple_chain):
        shader = compile_graph(simple_chain)
        assert "gl_FragColor = vec4(vec3(sin1_output), 1.0);" in shader.fragment_shader

    def test_one_shot_preview(self, simple_chain):
        shader = compile_graph(simple_chain, CompileTarget.preview('uv1'))
        assert "gl_FragColor = vec4(vec3(uv1_uv, 0.0), 1.0);" in shader.fragment_shader
        assert shader.order == ('uv1',)

    def test_config_errors(self):
        with pytest.raises(ValueError):
            CompilerConfig(min_loop_iterations=0)
        with pytest.raises(ValueError):
            CompilerConfig(min_loop_iterations=8, max_loop_iterations=4)
        with pytest.raises(ValueError):
            CompilerConfig(cache_capacity=0)
