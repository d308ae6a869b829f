# Graph Model Package
# Socket types and the read-only graph snapshot the compiler consumes

from .types import SocketType, is_compatible, coerce_expr
from .graph import Connection, InputSlot, OutputSlot, GraphNode, Graph, create_node, connect

__all__ = [
    'SocketType',
    'is_compatible',
    'coerce_expr',
    'Connection',
    'InputSlot',
    'OutputSlot',
    'GraphNode',
    'Graph',
    'create_node',
    'connect',
]
