"""
Pytest configuration and shared fixtures for Shader Graph tests.

This file provides:
1. Import path setup so tests run from a source checkout
2. Shared fixtures for registries, compilers and graph builders

Assertion helpers live in builders.py.

Usage:
    pytest tests/ -v
"""

import os
import sys

import pytest

# Source checkout: make shader_graph and the test helpers importable
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
for _path in (_ROOT, os.path.dirname(os.path.abspath(__file__))):
    if _path not in sys.path:
        sys.path.insert(0, _path)

from builders import GraphBuilder  # noqa: E402


# =============================================================================
# PYTEST FIXTURES
# =============================================================================

@pytest.fixture
def registry():
    """A fresh default registry; never shared between tests."""
    from shader_graph import create_default_registry
    return create_default_registry()


@pytest.fixture
def compiler(registry):
    from shader_graph import GraphCompiler
    return GraphCompiler(registry=registry)


@pytest.fixture
def builder(registry):
    """
    Graph builder bound to the test's registry.

    Example:
        def test_something(builder):
            t = builder.add('time', 't')
            out = builder.add('output', 'out')
            builder.wire(t, 'time', out, 'color')
            graph = builder.build()
    """
    return GraphBuilder(registry)


@pytest.fixture
def simple_chain(builder):
    """
    UV -> Extract X -> Sin(freq=2) -> Output.color

    The float sin output reaches the vec3 color socket through a broadcast.
    """
    uv = builder.add('uv', 'uv1')
    ex = builder.add('extractX', 'ex1')
    sn = builder.add('sin', 'sin1', freq=2.0)
    out = builder.add('output', 'out1')
    builder.wire(uv, 'uv', ex, 'v')
    builder.wire(ex, 'x', sn, 'input')
    builder.wire(sn, 'output', out, 'color')
    return builder.build()



