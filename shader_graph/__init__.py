# Shader Graph
# Compiles visual node graphs into GLSL fragment shaders

from .compiler import CompiledShader, GraphCompiler, LRUCache, compile_graph
from .config import CompilerConfig, DEFAULT_CONFIG
from .errors import (
    ShaderGraphError,
    GraphModelError,
    ExpressionError,
    CompilationError,
    GraphError,
    CycleDetectedError,
    NoTerminalOutputError,
    NodeError,
    UnknownNodeTypeError,
    MissingLoopStepError,
    InternalConsistencyError,
    TypeMismatchError,
)
from .ir import Graph, GraphNode, InputSlot, OutputSlot, Connection, SocketType, connect, create_node
from .logger import setup_logger, get_logger
from .nodes import NodeDefinition, NodeKind, NodeRegistry, create_default_registry
from .planner.scheduler import CompileTarget

__version__ = "0.3.0"

__all__ = [
    'CompiledShader',
    'GraphCompiler',
    'LRUCache',
    'compile_graph',
    'CompileTarget',
    'CompilerConfig',
    'DEFAULT_CONFIG',
    'Graph',
    'GraphNode',
    'InputSlot',
    'OutputSlot',
    'Connection',
    'SocketType',
    'connect',
    'create_node',
    'NodeDefinition',
    'NodeKind',
    'NodeRegistry',
    'create_default_registry',
    'setup_logger',
    'get_logger',
    'ShaderGraphError',
    'GraphModelError',
    'ExpressionError',
    'CompilationError',
    'GraphError',
    'CycleDetectedError',
    'NoTerminalOutputError',
    'NodeError',
    'UnknownNodeTypeError',
    'MissingLoopStepError',
    'InternalConsistencyError',
    'TypeMismatchError',
]
