# Node Definition Registry
# Maps node type -> NodeDefinition

from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Optional

from .base import NodeDefinition
from . import (
    color, combiners, effects, fractals, loops, math, noise, output, physics,
    presets, primitives, sdf, sources, spaces, threed, transforms, user_code,
)

# Palette order in the editor
_MODULES = (
    sources, transforms, spaces, primitives, sdf, combiners, math, noise,
    color, fractals, physics, threed, effects, presets, user_code, loops, output,
)


class NodeRegistry:
    """
    Immutable type -> definition mapping.

    Built once and handed to the compiler; two registries never share
    state, so tests can build their own with extra or fewer definitions.
    """

    def __init__(self, definitions: Iterable[NodeDefinition] = ()):
        entries: Dict[str, NodeDefinition] = OrderedDict()
        for definition in definitions:
            if definition.type in entries:
                raise ValueError(f"Duplicate node type: {definition.type}")
            entries[definition.type] = definition
        self._entries = entries

    def lookup(self, node_type: str) -> Optional[NodeDefinition]:
        """Definition for a node type, or None if not registered."""
        return self._entries.get(node_type)

    def __getitem__(self, node_type: str) -> NodeDefinition:
        return self._entries[node_type]

    def __contains__(self, node_type) -> bool:
        return node_type in self._entries

    def __iter__(self) -> Iterator[NodeDefinition]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return f"NodeRegistry(types={len(self._entries)})"

    def types(self) -> List[str]:
        return list(self._entries)

    def categories(self) -> List[str]:
        """Categories in first-seen order."""
        seen: List[str] = []
        for definition in self._entries.values():
            if definition.category not in seen:
                seen.append(definition.category)
        return seen

    def by_category(self, category: str) -> List[NodeDefinition]:
        return [d for d in self._entries.values() if d.category == category]


def create_default_registry() -> NodeRegistry:
    """Fresh registry holding every built-in node type."""
    definitions: List[NodeDefinition] = []
    for module in _MODULES:
        definitions.extend(module.DEFINITIONS)
    return NodeRegistry(definitions)


__all__ = ['NodeRegistry', 'create_default_registry']
