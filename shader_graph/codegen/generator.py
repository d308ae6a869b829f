"""
CodeGenerator - turns a Schedule into helper blocks and main() statements.

For each scheduled node the generator resolves an expression per input
socket, calls the node definition's generate function and records the
returned output variables so downstream nodes can read them. Loop and
Loop End nodes are handed to the LoopExpander.

Input resolution order for one socket:
1. Connected and the upstream variable is known -> that variable
   (a float feeding a vec3 socket is broadcast with vec3(x))
2. Unconnected slider socket (custom functions) -> the param value
3. Unconnected with a default value -> a literal
4. Otherwise unresolved; the definition's generator picks its own default
"""

import logging
from typing import Dict, List, Mapping, Optional, Set

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..errors import NodeError, TypeMismatchError
from ..ir.graph import Connection, Graph, GraphNode
from ..ir.types import SocketType, coerce_expr, is_compatible
from ..nodes.base import GLSLResult, NodeDefinition, NodeKind
from ..nodes.helpers import fmt_float, is_number, var_name, vec_literal
from ..nodes.registry import NodeRegistry
from .loop_expander import LoopExpander

logger = logging.getLogger(__name__)

# node id -> {output key -> variable}
OutputScope = Mapping[str, Mapping[str, str]]


class CodeGenerator:
    """
    Accumulates the pieces of one fragment shader.

    Attributes:
        helpers: Helper blocks in first-use order, deduplicated by text
        statements: Per-node statement text in schedule order
        output_vars: node id -> {output key -> variable name}
        terminal_write: Code of the TERMINAL node, if one was generated
        diagnostics: Node-local errors collected while generating
    """

    def __init__(self, graph: Graph, registry: NodeRegistry, config: CompilerConfig = DEFAULT_CONFIG):
        self.graph = graph
        self.registry = registry
        self.config = config

        self.helpers: List[str] = []
        self._helper_texts: Set[str] = set()
        self.statements: List[str] = []
        self.output_vars: Dict[str, Dict[str, str]] = {}
        self.terminal_write: str = ""
        self.diagnostics: List[NodeError] = []

        self.loops = LoopExpander(self)

    def generate(self, schedule) -> None:
        """Generate every node of `schedule` in order."""
        for err in schedule.diagnostics:
            self.diagnostics.append(err)

        for node_id in schedule.order:
            node = self.graph.get(node_id)
            definition = self.registry.lookup(node.type)
            self.add_helpers(definition, node)

            if definition.kind in (NodeKind.LOOP, NodeKind.LOOP_END):
                result = self.loops.expand(node, definition, schedule.loop_plans[node_id])
            else:
                result = self.emit(node, definition, self.resolve_inputs(node, definition))

            logger.debug(f"Generated {node.type} node {node.id}: {sorted(result.output_vars)}")
            self.output_vars[node.id] = dict(result.output_vars)

            if definition.kind is NodeKind.TERMINAL:
                self.terminal_write = result.code
            else:
                self.statements.append(result.code)

    # ============ Helpers ============

    def add_helpers(self, definition: NodeDefinition, node: Optional[GraphNode] = None) -> None:
        """Add a definition's helper blocks; identical text is kept once."""
        for block in definition.helper_blocks(node):
            text = block.strip()
            if text and text not in self._helper_texts:
                self._helper_texts.add(text)
                self.helpers.append(text)

    def record(self, error: NodeError) -> None:
        logger.warning(str(error))
        self.diagnostics.append(error)

    # ============ Input resolution ============

    def resolve_inputs(self, node: GraphNode, definition: NodeDefinition,
                       scope: Optional[OutputScope] = None) -> Dict[str, str]:
        """
        Expression per input socket of `node`; unresolved sockets are omitted.

        `scope` holds variables visible only inside a loop iteration and is
        searched before the main pass variables.
        """
        inputs: Dict[str, str] = {}
        for key in definition.input_keys(node):
            slot = node.inputs.get(key)
            stype = definition.input_type(node, key)

            if slot is not None and slot.connection is not None:
                expr = self._connected_expr(node, definition, key, stype, slot.connection, scope)
                if expr:
                    inputs[key] = expr
                    continue

            literal = definition.param_input(node, key) if definition.param_input else None
            if literal is None and slot is not None:
                literal = _default_literal(slot.default_value, stype)
            if literal:
                inputs[key] = literal
        return inputs

    def _connected_expr(self, node: GraphNode, definition: NodeDefinition, key: str,
                        target_type: Optional[SocketType], conn: Connection,
                        scope: Optional[OutputScope]) -> Optional[str]:
        source_vars = scope.get(conn.node_id) if scope else None
        if source_vars is None:
            source_vars = self.output_vars.get(conn.node_id)
        variable = source_vars.get(conn.output_key) if source_vars else None
        if not variable:
            return None

        source_type = self.source_type(conn)
        if source_type is None or target_type is None:
            return variable
        if source_type is SocketType.FLOAT and target_type is SocketType.VEC3:
            return f"vec3({variable})"
        if (self.config.check_types and not definition.dynamic_sockets
                and not is_compatible(source_type, target_type)):
            raise TypeMismatchError(node.id, key, target_type, source_type)
        return variable

    def source_type(self, conn: Connection) -> Optional[SocketType]:
        """Type of the output a connection reads, instance socket first."""
        source = self.graph.get(conn.node_id)
        if source is None:
            return None
        definition = self.registry.lookup(source.type)
        if definition is None:
            return None
        return definition.output_type(source, conn.output_key)

    # ============ Emission ============

    def emit(self, node: GraphNode, definition: NodeDefinition, inputs: Dict[str, str]) -> GLSLResult:
        """Generate one node, honouring bypass and code overrides."""
        if node.bypassed:
            result = self._bypass(node, definition, inputs)
            if result is not None:
                return result

        result = definition.generate(node, inputs)

        override = node.params.get('__codeOverride')
        if isinstance(override, str) and override.strip():
            return GLSLResult(override.strip() + '\n', dict(result.output_vars))
        return result

    def _bypass(self, node: GraphNode, definition: NodeDefinition,
                inputs: Dict[str, str]) -> Optional[GLSLResult]:
        """Pass a resolved input straight through to every output."""
        outputs = definition.output_items(node)
        candidates = [(k, inputs[k]) for k in definition.input_keys(node) if inputs.get(k)]
        if not outputs or not candidates:
            return None

        code = []
        output_vars = {}
        for out_key, out_type in outputs:
            key, expr = next(
                ((k, e) for k, e in candidates if definition.input_type(node, k) is out_type),
                candidates[0],
            )
            in_type = definition.input_type(node, key) or out_type
            name = var_name(node, out_key)
            code.append(f"    {out_type} {name} = {coerce_expr(expr, in_type, out_type)};\n")
            output_vars[out_key] = name
        return GLSLResult(''.join(code), output_vars)


def _default_literal(value, stype: Optional[SocketType]) -> Optional[str]:
    if is_number(value):
        return fmt_float(value)
    if isinstance(value, (list, tuple)) and value and all(is_number(v) for v in value):
        return vec_literal(stype or SocketType.FLOAT, value)
    return None
