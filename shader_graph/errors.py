"""
Custom exceptions for the Shader Graph compiler.

Graph-level failures abort a compile and are raised; node-level failures
are collected as diagnostics so the rest of the graph keeps compiling.

Exception Hierarchy:
    ShaderGraphError (base)
    ├── GraphModelError
    ├── ExpressionError
    └── CompilationError
        ├── GraphError
        │   ├── CycleDetectedError
        │   └── NoTerminalOutputError
        ├── NodeError
        │   ├── UnknownNodeTypeError
        │   └── MissingLoopStepError
        └── InternalConsistencyError
            └── TypeMismatchError
"""

from typing import List, Sequence


class ShaderGraphError(Exception):
    """Base exception for all Shader Graph errors."""
    pass


class GraphModelError(ShaderGraphError):
    """Raised when a graph snapshot is malformed (duplicate ids, bad socket types)."""

    def __init__(self, message: str, node_id: str = None):
        super().__init__(message)
        self.node_id = node_id


class ExpressionError(ShaderGraphError):
    """
    Raised when a user-authored GLSL expression cannot be parsed.

    Attributes:
        source: The expression text
        position: Character offset where parsing failed
    """

    def __init__(self, message: str, source: str = None, position: int = None):
        super().__init__(message)
        self.source = source
        self.position = position


# =============================================================================
# Compilation Errors
# =============================================================================

class CompilationError(ShaderGraphError):
    """Base exception for compilation/code generation errors."""
    pass


class GraphError(CompilationError):
    """Fatal for the whole compile: no shader source is produced."""
    pass


class CycleDetectedError(GraphError):
    """
    Raised when nodes reachable from the compile target form a cycle.

    Attributes:
        node_ids: Node ids on the cycle, in dependency-path order
    """

    def __init__(self, node_ids: Sequence[str], message: str = None):
        self.node_ids: List[str] = list(node_ids)
        if message is None:
            message = "Circular dependency detected in node graph: " + " -> ".join(self.node_ids)
        super().__init__(message)


class NoTerminalOutputError(GraphError):
    """Raised when there is nothing to show: no Output node, or the preview node is gone."""

    def __init__(self, message: str = "Graph must have an Output node", target=None):
        super().__init__(message)
        self.target = target


class NodeError(CompilationError):
    """
    Local to one node. Never raised out of compile(); collected in
    CompiledShader.diagnostics instead.
    """

    def __init__(self, message: str, node_id: str = None):
        super().__init__(message)
        self.node_id = node_id


class UnknownNodeTypeError(NodeError):
    """A node's type is not in the registry; the node is skipped."""

    def __init__(self, node_id: str, node_type: str):
        super().__init__(f"Unknown node type: {node_type} (node {node_id})", node_id=node_id)
        self.node_type = node_type


class MissingLoopStepError(NodeError):
    """A Loop node references a step id that is no longer in the graph."""

    def __init__(self, loop_node_id: str, missing_step_id: str):
        super().__init__(
            f"Loop {loop_node_id}: step {missing_step_id} does not exist",
            node_id=loop_node_id,
        )
        self.loop_node_id = loop_node_id
        self.missing_step_id = missing_step_id


class InternalConsistencyError(CompilationError):
    """The editor handed over a graph that breaks its own contract."""
    pass


class TypeMismatchError(InternalConsistencyError):
    """A connection joins two socket types the type system does not allow."""

    def __init__(self, node_id: str, input_key: str, expected, actual):
        super().__init__(
            f"Node {node_id}: Type mismatch on input \"{input_key}\". "
            f"Expected {expected}, got {actual}"
        )
        self.node_id = node_id
        self.input_key = input_key
        self.expected = expected
        self.actual = actual
