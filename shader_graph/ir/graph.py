import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..errors import GraphModelError
from .types import SocketType

DefaultValue = Union[int, float, List[float], None]


@dataclass(frozen=True)
class Connection:
    """Incoming edge stored on the target input: (source node, source output key)."""
    node_id: str
    output_key: str


@dataclass
class InputSlot:
    type: SocketType
    label: str = ""
    connection: Optional[Connection] = None
    # Literal used when unconnected; None lets the generator pick its own default
    default_value: DefaultValue = None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None


@dataclass
class OutputSlot:
    type: SocketType
    label: str = ""


@dataclass
class GraphNode:
    """
    A node instance placed in the editor.

    `inputs`/`outputs` are this instance's own socket maps. Nodes with
    dynamic sockets (custom functions, loops, expressions) carry maps that
    differ from their registry declaration; an empty map means "never
    materialized" and the registry declaration applies.
    """
    id: str
    type: str
    position: Tuple[float, float] = (0.0, 0.0)
    params: Dict[str, Any] = field(default_factory=dict)
    inputs: Dict[str, InputSlot] = field(default_factory=dict)
    outputs: Dict[str, OutputSlot] = field(default_factory=dict)
    bypassed: bool = False

    def connected_inputs(self) -> Iterator[Tuple[str, InputSlot]]:
        for key, slot in self.inputs.items():
            if slot.connection is not None:
                yield key, slot


class Graph:
    """
    Read-only snapshot of the editor's node graph.

    Node order is the editor's insertion order and is used as the
    tie-breaker wherever the compiler needs a deterministic choice.
    """

    def __init__(self, nodes: Iterable[GraphNode] = ()):
        self._nodes: Dict[str, GraphNode] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise GraphModelError(f"Duplicate node id: {node.id}", node_id=node.id)
            self._nodes[node.id] = node

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    def get(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    def __contains__(self, node_id) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self):
        return f"Graph(nodes={len(self._nodes)})"

    # -------------------------------------------------------------------------
    # Snapshot adapters
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Graph':
        """
        Build a Graph from the editor snapshot shape:

            {"nodes": [{"id", "type", "position": {"x", "y"}, "params",
                        "inputs": {key: {"type", "label", "connection":
                                         {"nodeId", "outputKey"}, "defaultValue"}},
                        "outputs": {key: {"type", "label"}}, "bypassed"}]}
        """
        if not isinstance(data, dict) or not isinstance(data.get('nodes', []), list):
            raise GraphModelError("Graph snapshot must be an object with a 'nodes' list")
        return cls(_node_from_dict(raw) for raw in data.get('nodes', []))

    def to_dict(self, include_positions: bool = True) -> Dict[str, Any]:
        nodes = []
        for node in self._nodes.values():
            entry: Dict[str, Any] = {
                'id': node.id,
                'type': node.type,
                'params': copy.deepcopy(node.params),
                'inputs': {k: _input_to_dict(s) for k, s in node.inputs.items()},
                'outputs': {k: {'type': s.type.value, 'label': s.label} for k, s in node.outputs.items()},
            }
            if include_positions:
                entry['position'] = {'x': node.position[0], 'y': node.position[1]}
            if node.bypassed:
                entry['bypassed'] = True
            nodes.append(entry)
        return {'nodes': nodes}

    def canonical_json(self) -> str:
        """Stable text form of everything that affects generated code."""
        return json.dumps(self.to_dict(include_positions=False), sort_keys=True, default=repr)


def _input_to_dict(slot: InputSlot) -> Dict[str, Any]:
    entry: Dict[str, Any] = {'type': slot.type.value, 'label': slot.label}
    if slot.connection is not None:
        entry['connection'] = {'nodeId': slot.connection.node_id, 'outputKey': slot.connection.output_key}
    if slot.default_value is not None:
        entry['defaultValue'] = copy.deepcopy(slot.default_value)
    return entry


def _node_from_dict(raw: Dict[str, Any]) -> GraphNode:
    if not isinstance(raw, dict) or 'id' not in raw or 'type' not in raw:
        raise GraphModelError(f"Node entry needs 'id' and 'type': {raw!r}")
    node_id = str(raw['id'])

    inputs: Dict[str, InputSlot] = {}
    for key, sock in (raw.get('inputs') or {}).items():
        conn = sock.get('connection')
        connection = None
        if conn:
            connection = Connection(str(conn['nodeId']), str(conn['outputKey']))
        try:
            stype = SocketType.parse(sock.get('type'))
        except GraphModelError as e:
            raise GraphModelError(f"Node {node_id}, input {key}: {e}", node_id=node_id) from None
        inputs[key] = InputSlot(
            type=stype,
            label=sock.get('label', key),
            connection=connection,
            default_value=sock.get('defaultValue'),
        )

    outputs: Dict[str, OutputSlot] = {}
    for key, sock in (raw.get('outputs') or {}).items():
        try:
            stype = SocketType.parse(sock.get('type'))
        except GraphModelError as e:
            raise GraphModelError(f"Node {node_id}, output {key}: {e}", node_id=node_id) from None
        outputs[key] = OutputSlot(type=stype, label=sock.get('label', key))

    pos = raw.get('position') or {}
    return GraphNode(
        id=node_id,
        type=str(raw['type']),
        position=(pos.get('x', 0.0), pos.get('y', 0.0)),
        params=dict(raw.get('params') or {}),
        inputs=inputs,
        outputs=outputs,
        bypassed=bool(raw.get('bypassed', False)),
    )


def create_node(definition, node_id: str, params: Optional[Dict[str, Any]] = None,
                position: Tuple[float, float] = (0.0, 0.0)) -> GraphNode:
    """
    Instantiate a registry definition the way the editor does.

    Params are the definition defaults overlaid with `params`. Socket maps
    are materialized per instance (dynamic-socket definitions derive them
    from params), and sockets listed in `definition.socket_defaults` carry
    that literal as their unconnected value.
    """
    merged = copy.deepcopy(definition.default_params)
    if params:
        merged.update(copy.deepcopy(params))

    input_defs, output_defs = definition.socket_maps(merged)
    inputs = {
        key: InputSlot(
            type=sock.type,
            label=sock.label,
            default_value=copy.deepcopy(definition.socket_defaults.get(key)),
        )
        for key, sock in input_defs.items()
    }
    outputs = {key: OutputSlot(type=sock.type, label=sock.label) for key, sock in output_defs.items()}
    return GraphNode(id=node_id, type=definition.type, position=position,
                     params=merged, inputs=inputs, outputs=outputs)


def connect(target: GraphNode, input_key: str, source: GraphNode, output_key: str) -> None:
    """Wire source.output_key into target.input_key (editor-side helper)."""
    if input_key not in target.inputs:
        raise GraphModelError(f"Node {target.id} has no input {input_key!r}", node_id=target.id)
    target.inputs[input_key].connection = Connection(source.id, output_key)
