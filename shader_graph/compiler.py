"""
GraphCompiler - compiles node graphs to GLSL fragment shaders with caching.

Pipeline: Graph -> schedule() -> CodeGenerator (+ LoopExpander) -> assemble()

Caching Strategy:
- Cache key is a sha256 of the canonical JSON snapshot plus the target
- Positions are not part of the snapshot, so dragging nodes around hits
- The cache never changes results; it only skips work
"""

import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .config import CompilerConfig, DEFAULT_CONFIG
from .codegen.assembler import VERTEX_SHADER, assemble, preview_write
from .codegen.generator import CodeGenerator
from .errors import NodeError
from .ir.graph import Graph
from .nodes.base import NodeKind
from .nodes.registry import NodeRegistry, create_default_registry
from .planner.scheduler import CompileTarget, schedule

logger = logging.getLogger(__name__)

GraphLike = Union[Graph, Dict[str, Any]]


class LRUCache:
    """
    Least Recently Used cache with size limit.

    When capacity is exceeded, the least recently accessed items are evicted.
    """

    def __init__(self, capacity: int = 16):
        self.capacity = capacity
        self._cache: OrderedDict = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Get item from cache, marking it as recently used."""
        if key in self._cache:
            self._cache.move_to_end(key)
            self._hits += 1
            return self._cache[key]
        self._misses += 1
        return None

    def put(self, key: str, value: Any) -> None:
        """Add item to cache, evicting oldest if at capacity."""
        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self.capacity:
            self._cache.popitem(last=False)
        self._cache[key] = value

    def invalidate(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def clear(self) -> None:
        """Clear entire cache."""
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def stats(self) -> Dict[str, Any]:
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0
        return {
            'size': len(self._cache),
            'capacity': self.capacity,
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': hit_rate,
        }


@dataclass(frozen=True)
class CompiledShader:
    """
    Result of one successful compile.

    Attributes:
        fragment_shader: Complete GLSL fragment source
        vertex_shader: Fixed pass-through vertex source
        node_output_vars: Read-only node id -> {output key -> variable}, for live value display
        diagnostics: Node-local errors; the shader still compiled around them
        order: Node ids in generation order
        target: What was compiled
    """
    fragment_shader: str
    vertex_shader: str
    node_output_vars: Mapping[str, Mapping[str, str]] = field(default_factory=lambda: MappingProxyType({}))
    diagnostics: Tuple[NodeError, ...] = ()
    order: Tuple[str, ...] = ()
    target: CompileTarget = field(default_factory=CompileTarget.full_graph)
    success: bool = True

    def errors(self) -> List[str]:
        return [str(d) for d in self.diagnostics]


class GraphCompiler:
    """
    Compiles graph snapshots to fragment shaders, caching by snapshot content.

    Example:
        compiler = GraphCompiler()
        shader = compiler.compile(graph)
        # Second call with an unchanged snapshot is cached
        shader = compiler.compile(graph)
        preview = compiler.compile(graph, CompileTarget.preview('node_3'))
    """

    def __init__(self, registry: Optional[NodeRegistry] = None,
                 config: Optional[CompilerConfig] = None):
        self.registry = registry if registry is not None else create_default_registry()
        self.config = config or DEFAULT_CONFIG
        self._cache = LRUCache(capacity=self.config.cache_capacity)

    def compile(self, graph: GraphLike, target: Optional[CompileTarget] = None) -> CompiledShader:
        """
        Compile `graph` for `target` (the whole graph by default).

        Raises:
            GraphError: cycle, or nothing to show
            InternalConsistencyError: the snapshot breaks the editor's typing contract
        """
        graph = _as_graph(graph)
        target = target or CompileTarget.full_graph()
        key = self._cache_key(graph, target)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Graph compile CACHE HIT (hash={key[:8]}...)")
            return cached
        logger.debug(f"Graph compile CACHE MISS (hash={key[:8]}...)")

        result = self._compile(graph, target)
        self._cache.put(key, result)
        return result

    def _compile(self, graph: Graph, target: CompileTarget) -> CompiledShader:
        plan = schedule(graph, self.registry, target)

        gen = CodeGenerator(graph, self.registry, self.config)
        gen.generate(plan)

        terminal = graph.get(plan.terminal_id)
        definition = self.registry.lookup(terminal.type)
        if definition.kind is NodeKind.TERMINAL:
            terminal_write = gen.terminal_write
        else:
            terminal_write = preview_write(definition, terminal, gen.output_vars[terminal.id])

        fragment = assemble(gen.helpers, gen.statements, terminal_write, self.config)
        if gen.diagnostics:
            logger.warning(f"Compiled {target} with {len(gen.diagnostics)} diagnostic(s)")

        return CompiledShader(
            fragment_shader=fragment,
            vertex_shader=VERTEX_SHADER,
            node_output_vars=MappingProxyType(
                {k: MappingProxyType(dict(v)) for k, v in gen.output_vars.items()}),
            diagnostics=tuple(gen.diagnostics),
            order=tuple(plan.order),
            target=target,
        )

    def _cache_key(self, graph: Graph, target: CompileTarget) -> str:
        hasher = hashlib.sha256()
        hasher.update(graph.canonical_json().encode())
        hasher.update(f"target:{target.key()}".encode())
        return hasher.hexdigest()

    def invalidate(self, graph: GraphLike, target: Optional[CompileTarget] = None) -> bool:
        """
        Drop the cached result for one snapshot and target.

        Returns:
            True if cache entry was removed, False if not found
        """
        key = self._cache_key(_as_graph(graph), target or CompileTarget.full_graph())
        return self._cache.invalidate(key)

    def clear_cache(self) -> None:
        """Clear the entire compilation cache."""
        self._cache.clear()
        logger.debug("GraphCompiler cache cleared")

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics."""
        return self._cache.stats()


def _as_graph(graph: GraphLike) -> Graph:
    return graph if isinstance(graph, Graph) else Graph.from_dict(graph)


def compile_graph(graph: GraphLike, target: Optional[CompileTarget] = None,
                  registry: Optional[NodeRegistry] = None,
                  config: Optional[CompilerConfig] = None) -> CompiledShader:
    """One-shot compile with a fresh compiler; nothing is shared between calls."""
    return GraphCompiler(registry=registry, config=config).compile(graph, target)
