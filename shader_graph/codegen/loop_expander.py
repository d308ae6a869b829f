"""
LoopExpander - statically unrolls Loop and Loop Start/End nodes.

Each iteration compiles the loop body against renamed copies of its nodes
(`{id}_L{n}` for Loop steps, `{id}_P{n}` for a wired pair body), so every
unrolled variable gets its own name. The running carry is injected into
one input of each body node and the last body output becomes the carry
of the next iteration. After the final iteration the carry is the loop
node's `result`.
"""

import dataclasses
import logging
from typing import Callable, Dict, List, Optional, Set, Tuple

from ..errors import MissingLoopStepError, UnknownNodeTypeError
from ..ir.graph import GraphNode
from ..ir.types import SocketType, coerce_expr
from ..nodes.base import GLSLResult, NodeDefinition, NodeKind
from ..nodes.helpers import resolved, var_name

logger = logging.getLogger(__name__)

Body = List[Tuple[GraphNode, NodeDefinition]]
# (body node, definition, position in body, member ids) -> input key for the carry
CarrySocket = Callable[[GraphNode, NodeDefinition, int, Set[str]], Optional[str]]


class LoopExpander:
    def __init__(self, generator):
        self.gen = generator

    def expand(self, node: GraphNode, definition: NodeDefinition, plan) -> GLSLResult:
        if definition.kind is NodeKind.LOOP:
            return self.expand_loop(node, definition, plan)
        return self.expand_pair(node, definition, plan)

    # ============ Loop node ============

    def expand_loop(self, node: GraphNode, definition: NodeDefinition, plan) -> GLSLResult:
        config = self.gen.config
        ct = config.carry_type(node.params.get('carryType'))
        iterations = config.clamp_iterations(node.params.get('iterations'))
        out = var_name(node, 'result')

        body: Body = []
        missing = False
        for step_id in plan.body:
            step = self.gen.graph.get(step_id)
            if step is None:
                self.gen.record(MissingLoopStepError(node.id, step_id))
                missing = True
                continue
            step_def = self._lookup(step)
            if step_def is not None:
                body.append((step, step_def))

        if missing:
            # degrade to a safe default, the rest of the graph still compiles
            return GLSLResult(f"    {ct} {out} = {ct.zero_value()};\n", {'result': out})

        inputs = self.gen.resolve_inputs(node, definition)
        carry = resolved(inputs, 'carry', ct.zero_value())
        code = [f"    {ct} {out} = {carry};\n"]
        code += self._unroll(out, ct, body, iterations, 'L', self._loop_carry_socket(ct))
        return GLSLResult(''.join(code), {'result': out})

    def _loop_carry_socket(self, ct: SocketType) -> CarrySocket:
        """First carry-typed input left unconnected; wired inputs keep their source."""
        def pick(step, step_def, index, members):
            for key in step_def.input_keys(step):
                if step_def.input_type(step, key) is not ct:
                    continue
                slot = step.inputs.get(key)
                if slot is None or slot.connection is None:
                    return key
            return None
        return pick

    # ============ Loop Start / Loop End pair ============

    def expand_pair(self, node: GraphNode, definition: NodeDefinition, plan) -> GLSLResult:
        config = self.gen.config
        ct = self._wire_type(node) or config.default_carry_type
        iterations = config.clamp_iterations(node.params.get('iterations'))
        out = var_name(node, 'result')

        body: Body = []
        for body_id in plan.body:
            body_node = self.gen.graph.get(body_id)
            body_def = self._lookup(body_node) if body_node is not None else None
            if body_def is not None:
                body.append((body_node, body_def))

        initial = None
        if plan.start_id is not None:
            initial = self.gen.output_vars.get(plan.start_id, {}).get('carry')
        if not initial:
            inputs = self.gen.resolve_inputs(node, definition)
            initial = resolved(inputs, 'carry', ct.zero_value())

        code = [f"    {ct} {out} = {initial};\n"]
        chain = [plan.start_id] + [n.id for n, _ in body]
        code += self._unroll(out, ct, body, iterations, 'P', self._chain_socket(chain))
        return GLSLResult(''.join(code), {'result': out})

    def _wire_type(self, node: GraphNode) -> Optional[SocketType]:
        slot = node.inputs.get('carry')
        if slot is None or slot.connection is None:
            return None
        return self.gen.source_type(slot.connection)

    def _chain_socket(self, chain: List[Optional[str]]) -> CarrySocket:
        """The input wired to the previous element of the chain."""
        def pick(body_node, body_def, index, members):
            previous = chain[index]
            for key, slot in body_node.connected_inputs():
                if slot.connection.node_id == previous:
                    return key
            return None
        return pick

    # ============ Unrolling ============

    def _unroll(self, out: str, ct: SocketType, body: Body, iterations: int,
                tag: str, carry_socket: CarrySocket) -> List[str]:
        if not body:
            # identity: result stays the initial carry
            return []
        members = {n.id for n, _ in body}
        code: List[str] = []
        for n in range(iterations):
            carry, carry_type = out, ct
            scope: Dict[str, Dict[str, str]] = {}
            for index, (body_node, body_def) in enumerate(body):
                inputs = self.gen.resolve_inputs(body_node, body_def, scope)
                key = carry_socket(body_node, body_def, index, members)
                if key is not None:
                    in_type = body_def.input_type(body_node, key) or carry_type
                    inputs[key] = coerce_expr(carry, carry_type, in_type)

                renamed = dataclasses.replace(body_node, id=f"{body_node.id}_{tag}{n}")
                result = self.gen.emit(renamed, body_def, inputs)
                code.append(result.code)
                scope[body_node.id] = result.output_vars

                out_key = _carry_output(renamed, body_def, ct)
                if out_key is not None and result.output_vars.get(out_key):
                    carry = result.output_vars[out_key]
                    carry_type = body_def.output_type(renamed, out_key) or ct
            code.append(f"    {out} = {coerce_expr(carry, carry_type, ct)};\n")
        return code

    def _lookup(self, node: GraphNode) -> Optional[NodeDefinition]:
        """Definition of a body node; records unknown types. Helpers are added either way."""
        definition = self.gen.registry.lookup(node.type)
        if definition is None:
            self.gen.record(UnknownNodeTypeError(node.id, node.type))
            return None
        self.gen.add_helpers(definition, node)
        return definition


def _carry_output(node: GraphNode, definition: NodeDefinition, ct: SocketType) -> Optional[str]:
    """First output of the carry type, else the first output."""
    items = definition.output_items(node)
    for key, stype in items:
        if stype is ct:
            return key
    return items[0][0] if items else None
