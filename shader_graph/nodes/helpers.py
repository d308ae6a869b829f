# Literal formatting and param access shared by node generators

import math
from typing import Any, Optional, Sequence

from ..ir.graph import GraphNode
from ..ir.types import SocketType


def fmt_float(n) -> str:
    """GLSL float literal: 5 -> '5.0', 0.25 -> '0.25'."""
    n = float(n)
    if not math.isfinite(n):
        return '0.0'
    if n.is_integer():
        return f"{int(n)}.0"
    return repr(n)


def fmt_fixed(n, digits: int) -> str:
    return f"{float(n):.{digits}f}"


def vec3_str(v: Sequence[float]) -> str:
    return f"vec3({', '.join(fmt_fixed(x, 2) for x in v)})"


def vec_literal(stype: SocketType, values) -> str:
    """Socket default literal: a number, or a list rendered with one decimal."""
    if isinstance(values, (list, tuple)):
        return f"{stype.value}({', '.join(fmt_fixed(x, 1) for x in values)})"
    return fmt_float(values)


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def param_float(node: GraphNode, key: str, default: float) -> float:
    value = node.params.get(key)
    return value if is_number(value) else default


def param_lit(node: GraphNode, key: str, default: float) -> str:
    """Param as a GLSL literal, falling back to `default`."""
    return fmt_float(param_float(node, key, default))


def param_str(node: GraphNode, key: str, default: str) -> str:
    value = node.params.get(key)
    return value if isinstance(value, str) else default


def param_vec3(node: GraphNode, key: str, default: Sequence[float]) -> Sequence[float]:
    value = node.params.get(key)
    if isinstance(value, (list, tuple)) and len(value) >= 3 and all(is_number(v) for v in value[:3]):
        return value
    return default


def var_name(node: GraphNode, key: str) -> str:
    return f"{node.id}_{key}"


def resolved(inputs, key: str, fallback: str) -> str:
    """Resolved input expression or the generator's fallback."""
    value: Optional[Any] = inputs.get(key)
    return value if value else fallback


def param_int(node: GraphNode, key: str, default: int) -> int:
    """Param rounded half-up to an int, matching the slider step."""
    return int(math.floor(param_float(node, key, default) + 0.5))


def input_or_param(node: GraphNode, inputs, key: str, default: float) -> str:
    """Wired expression for `key`, else the same-named param as a literal."""
    return resolved(inputs, key, param_lit(node, key, default))
