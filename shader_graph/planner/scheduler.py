"""
Scheduler - picks what to compile and in which order.

Given a graph snapshot and a compile target, the scheduler:
- resolves the terminal node (the Output node, or the previewed node)
- marks loop-internal nodes (Loop steps, Loop Start/End body chains),
  which the loop expander compiles inline instead of the main pass
- walks connections backward from the terminal and returns the reachable
  nodes in dependency order

Anything unreachable from the terminal contributes nothing.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..errors import CycleDetectedError, NodeError, NoTerminalOutputError, UnknownNodeTypeError
from ..ir.graph import Connection, Graph, GraphNode
from ..nodes.base import NodeKind
from ..nodes.registry import NodeRegistry

logger = logging.getLogger(__name__)

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(frozen=True)
class CompileTarget:
    """Either the whole graph (through its Output node) or one previewed node."""
    preview_id: Optional[str] = None

    @classmethod
    def full_graph(cls) -> 'CompileTarget':
        return cls()

    @classmethod
    def preview(cls, node_id: str) -> 'CompileTarget':
        return cls(preview_id=node_id)

    @property
    def is_preview(self) -> bool:
        return self.preview_id is not None

    def key(self) -> str:
        return f"preview:{self.preview_id}" if self.is_preview else "full"

    def __str__(self):
        return f"PreviewNode({self.preview_id})" if self.is_preview else "FullGraph"


@dataclass
class LoopPlan:
    """
    Body of a Loop node (its `steps` list) or of a Loop End (the chain
    walked back to its Loop Start), in execution order.
    """
    node_id: str
    kind: NodeKind
    body: List[str] = field(default_factory=list)
    start_id: Optional[str] = None


@dataclass
class Schedule:
    order: List[str]
    terminal_id: str
    target: CompileTarget
    loop_plans: Dict[str, LoopPlan] = field(default_factory=dict)
    internal_ids: Set[str] = field(default_factory=set)
    diagnostics: List[NodeError] = field(default_factory=list)


def schedule(graph: Graph, registry: NodeRegistry, target: Optional[CompileTarget] = None) -> Schedule:
    """
    Compute the ordered node list for one compile.

    Raises:
        NoTerminalOutputError: no Output node, or the preview node is missing
        CycleDetectedError: a cycle among reachable nodes or loop bodies
    """
    target = target or CompileTarget.full_graph()
    plans = collect_loop_plans(graph, registry)

    internal: Set[str] = set()
    for plan in plans.values():
        internal.update(i for i in plan.body if i != plan.node_id)
    if target.is_preview:
        internal.discard(target.preview_id)

    terminal_id = _resolve_terminal(graph, registry, target, internal)

    diagnostics: List[NodeError] = []
    reported: Set[str] = set()

    def live_source(conn: Connection) -> Optional[str]:
        source = graph.get(conn.node_id)
        if source is None or source.id in internal:
            return None
        if registry.lookup(source.type) is None:
            if source.id not in reported:
                reported.add(source.id)
                err = UnknownNodeTypeError(source.id, source.type)
                logger.warning(str(err))
                diagnostics.append(err)
            return None
        return source.id

    def dependencies(node_id: str) -> List[str]:
        node = graph.get(node_id)
        deps = [live_source(slot.connection) for _, slot in node.connected_inputs()]
        plan = plans.get(node_id)
        if plan is not None:
            if node_id in plan.body:
                raise CycleDetectedError([node_id])
            if plan.kind is NodeKind.LOOP:
                check_step_cycles(graph, plan)
            else:
                deps.append(plan.start_id)
            deps.extend(live_source(c) for c in _external_connections(graph, plan))
        return _unique(d for d in deps if d is not None)

    order = topological_order([terminal_id], dependencies)
    logger.debug(f"Scheduled {len(order)} node(s) for {target}: {' -> '.join(order)}")

    return Schedule(
        order=order,
        terminal_id=terminal_id,
        target=target,
        loop_plans=plans,
        internal_ids=internal,
        diagnostics=diagnostics,
    )


def _resolve_terminal(graph: Graph, registry: NodeRegistry, target: CompileTarget, internal: Set[str]) -> str:
    if target.is_preview:
        node = graph.get(target.preview_id)
        if node is None or registry.lookup(node.type) is None:
            raise NoTerminalOutputError(
                f"Preview node {target.preview_id} does not exist", target=target
            )
        return node.id

    terminals = []
    for node in graph:
        definition = registry.lookup(node.type)
        if definition is not None and definition.kind is NodeKind.TERMINAL and node.id not in internal:
            terminals.append(node.id)
    if not terminals:
        raise NoTerminalOutputError(target=target)
    if len(terminals) > 1:
        logger.warning(
            f"Graph has {len(terminals)} Output nodes; using {terminals[0]}, "
            f"ignoring {', '.join(terminals[1:])}"
        )
    return terminals[0]


# ============ Traversal ============

def topological_order(roots: Iterable[str], dependencies: Callable[[str], List[str]]) -> List[str]:
    """
    Iterative DFS post-order: every node comes after its dependencies.

    Roots are visited in the given order, dependencies in the order
    `dependencies` returns them. Meeting a node that is still on the
    current path raises CycleDetectedError with the cycle in path order.
    """
    color: Dict[str, int] = {}
    order: List[str] = []

    for root in roots:
        if color.get(root, WHITE) != WHITE:
            continue
        color[root] = GRAY
        path = [root]
        stack = [iter(dependencies(root))]

        while stack:
            for dep in stack[-1]:
                state = color.get(dep, WHITE)
                if state == GRAY:
                    raise CycleDetectedError(path[path.index(dep):])
                if state == WHITE:
                    color[dep] = GRAY
                    path.append(dep)
                    stack.append(iter(dependencies(dep)))
                    break
            else:
                stack.pop()
                done = path.pop()
                color[done] = BLACK
                order.append(done)

    return order


def check_step_cycles(graph: Graph, plan: LoopPlan) -> None:
    """Loop steps wired among themselves must not form a cycle."""
    steps = [s for s in plan.body if s in graph]
    members = set(steps)

    def step_edges(step_id: str) -> List[str]:
        node = graph.get(step_id)
        return _unique(
            slot.connection.node_id for _, slot in node.connected_inputs()
            if slot.connection.node_id in members
        )

    topological_order(steps, step_edges)


def _external_connections(graph: Graph, plan: LoopPlan) -> List[Connection]:
    """Connections from body nodes to nodes outside the body."""
    members = set(plan.body)
    conns = []
    for body_id in plan.body:
        node = graph.get(body_id)
        if node is None:
            continue
        for _, slot in node.connected_inputs():
            if slot.connection.node_id not in members:
                conns.append(slot.connection)
    return conns


def _unique(ids: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    result = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            result.append(i)
    return result


# ============ Loop bodies ============

def collect_loop_plans(graph: Graph, registry: NodeRegistry) -> Dict[str, LoopPlan]:
    """LoopPlan for every Loop and Loop End node in the graph."""
    plans: Dict[str, LoopPlan] = {}
    for node in graph:
        definition = registry.lookup(node.type)
        if definition is None:
            continue
        if definition.kind is NodeKind.LOOP:
            steps = node.params.get('steps')
            body = [s for s in steps if isinstance(s, str)] if isinstance(steps, list) else []
            plans[node.id] = LoopPlan(node.id, NodeKind.LOOP, body)
        elif definition.kind is NodeKind.LOOP_END:
            body, start_id = walk_pair_chain(graph, registry, node)
            plans[node.id] = LoopPlan(node.id, NodeKind.LOOP_END, body, start_id)
    return plans


def walk_pair_chain(graph: Graph, registry: NodeRegistry, end_node: GraphNode):
    """
    Follow Loop End's carry wire back to a Loop Start.

    Each body node is left through its first connected input. Returns
    (body ids from start to end, start id); ([], None) when no Loop Start
    is reached, in which case Loop End is a plain pass-through.
    """
    slot = end_node.inputs.get('carry')
    conn = slot.connection if slot is not None else None
    walked: List[str] = []

    while conn is not None:
        source = graph.get(conn.node_id)
        if source is None:
            break
        definition = registry.lookup(source.type)
        if definition is not None and definition.kind is NodeKind.LOOP_START:
            walked.reverse()
            return walked, source.id
        if source.id == end_node.id or source.id in walked:
            start = walked.index(source.id) if source.id in walked else 0
            cycle = walked[start:] + ([end_node.id] if source.id == end_node.id else [])
            raise CycleDetectedError(list(reversed(cycle)))
        walked.append(source.id)
        conn = next((s.connection for _, s in source.connected_inputs()), None)

    return [], None
