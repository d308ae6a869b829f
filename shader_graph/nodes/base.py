from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..ir.graph import GraphNode
from ..ir.types import SocketType


class NodeKind(Enum):
    STANDARD = auto()
    TERMINAL = auto()    # writes gl_FragColor
    LOOP = auto()        # unrolls a list of step nodes
    LOOP_START = auto()  # head of a wired loop pair
    LOOP_END = auto()    # tail of a wired loop pair, unrolls the chain


@dataclass(frozen=True)
class SocketDef:
    type: SocketType
    label: str


@dataclass
class GLSLResult:
    """Statement text plus output key -> variable name."""
    code: str
    output_vars: Dict[str, str] = field(default_factory=dict)


# Generator signature: (node, resolved input expressions) -> GLSLResult
Generator = Callable[[GraphNode, Dict[str, str]], GLSLResult]
SocketMaps = Tuple[Dict[str, SocketDef], Dict[str, SocketDef]]


@dataclass(frozen=True)
class NodeDefinition:
    """
    Static description of a node type.

    `generate` must be total: called with any subset of inputs resolved it
    returns code declaring every key in `outputs`, never raising.
    """
    type: str
    label: str
    category: str
    generate: Generator
    inputs: Dict[str, SocketDef] = field(default_factory=dict)
    outputs: Dict[str, SocketDef] = field(default_factory=dict)
    default_params: Dict[str, Any] = field(default_factory=dict)
    # Inputs that carry a literal default instead of reading a param slider
    socket_defaults: Dict[str, Any] = field(default_factory=dict)
    glsl_function: Union[str, Tuple[str, ...]] = ""
    kind: NodeKind = NodeKind.STANDARD
    dynamic_sockets: bool = False
    # Per-instance sockets for dynamic definitions: params -> (inputs, outputs)
    socket_builder: Optional[Callable[[Dict[str, Any]], SocketMaps]] = None
    # Per-instance helper text (e.g. user-authored functions)
    instance_helpers: Optional[Callable[[GraphNode], Tuple[str, ...]]] = None
    # Literal for an unconnected input that reads a param slider, or None
    param_input: Optional[Callable[[GraphNode, str], Optional[str]]] = None
    description: str = ""

    def helper_blocks(self, node: Optional[GraphNode] = None) -> Tuple[str, ...]:
        """Helper GLSL this node needs, definition blocks first."""
        if isinstance(self.glsl_function, str):
            blocks = (self.glsl_function,) if self.glsl_function.strip() else ()
        else:
            blocks = tuple(b for b in self.glsl_function if b.strip())
        if node is not None and self.instance_helpers is not None:
            blocks += tuple(b for b in self.instance_helpers(node) if b.strip())
        return blocks

    def socket_maps(self, params: Dict[str, Any]) -> SocketMaps:
        if self.socket_builder is not None:
            return self.socket_builder(params)
        return dict(self.inputs), dict(self.outputs)

    def input_type(self, node: GraphNode, key: str) -> Optional[SocketType]:
        """Instance socket type first, declaration second."""
        slot = node.inputs.get(key)
        if slot is not None:
            return slot.type
        sock = self.inputs.get(key)
        return sock.type if sock is not None else None

    def output_type(self, node: GraphNode, key: str) -> Optional[SocketType]:
        slot = node.outputs.get(key)
        if slot is not None:
            return slot.type
        sock = self.outputs.get(key)
        return sock.type if sock is not None else None

    def input_keys(self, node: GraphNode):
        return list(node.inputs) if node.inputs else list(self.inputs)

    def output_keys(self, node: GraphNode):
        return list(node.outputs) if node.outputs else list(self.outputs)

    def output_items(self, node: GraphNode):
        """(key, SocketType) pairs for this instance."""
        if node.outputs:
            return [(k, s.type) for k, s in node.outputs.items()]
        return [(k, s.type) for k, s in self.outputs.items()]


def sockets(**entries: Tuple[str, str]) -> Dict[str, SocketDef]:
    """sockets(uv=('vec2', 'UV')) -> {'uv': SocketDef(VEC2, 'UV')}"""
    return {key: SocketDef(SocketType(t), label) for key, (t, label) in entries.items()}
