# Node Definitions Package
# Built-in node types and the registry that holds them

from .base import NodeKind, SocketDef, GLSLResult, NodeDefinition
from .registry import NodeRegistry, create_default_registry

__all__ = [
    'NodeKind',
    'SocketDef',
    'GLSLResult',
    'NodeDefinition',
    'NodeRegistry',
    'create_default_registry',
]
