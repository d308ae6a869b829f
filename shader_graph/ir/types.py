from enum import Enum

from ..errors import GraphModelError


class SocketType(Enum):
    FLOAT = 'float'
    VEC2 = 'vec2'
    VEC3 = 'vec3'
    VEC4 = 'vec4'

    @classmethod
    def parse(cls, name) -> 'SocketType':
        if isinstance(name, SocketType):
            return name
        try:
            return cls(name)
        except ValueError:
            raise GraphModelError(f"Unknown socket type: {name!r}") from None

    def is_vector(self):
        return self is not SocketType.FLOAT

    def component_count(self):
        if self is SocketType.VEC2: return 2
        if self is SocketType.VEC3: return 3
        if self is SocketType.VEC4: return 4
        return 1

    def zero_value(self, alpha: bool = False) -> str:
        """GLSL literal for 'nothing wired here'. Color contexts want opaque vec4."""
        if self is SocketType.FLOAT:
            return '0.0'
        if self is SocketType.VEC4 and alpha:
            return 'vec4(0.0, 0.0, 0.0, 1.0)'
        return f"{self.value}(0.0)"

    def __str__(self):
        return self.value


def is_compatible(source: SocketType, target: SocketType) -> bool:
    """
    Whether an output of type `source` may feed an input of type `target`.

    Only float -> vec3 (scalar broadcast to a color) is allowed besides
    identical types.
    """
    if source == target:
        return True
    return source is SocketType.FLOAT and target is SocketType.VEC3


def coerce_expr(expr: str, source: SocketType, target: SocketType) -> str:
    """Wrap a GLSL expression so a `source` value reads as `target`."""
    if source == target:
        return expr
    if source is SocketType.FLOAT:
        return f"{target.value}({expr})"
    if target is SocketType.FLOAT:
        return f"{expr}.x"
    if source is SocketType.VEC2:
        if target is SocketType.VEC3:
            return f"vec3({expr}, 0.0)"
        return f"vec4({expr}, 0.0, 1.0)"
    if target is SocketType.VEC2:
        return f"{expr}.xy"
    if source is SocketType.VEC3:
        return f"vec4({expr}, 1.0)"
    # vec4 -> vec3
    return f"{expr}.rgb"
