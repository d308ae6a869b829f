"""
Compiler configuration.

Every constant the compiler bakes into generated source (loop limits,
precision, prologue uniforms) lives here so hosts can override it without
patching modules.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

from .ir.types import SocketType


def _default_defines() -> Tuple[Tuple[str, str], ...]:
    return (
        ('PI', '3.1415926538'),
        ('TAU', '6.2831853072'),
    )


def _default_uniforms() -> Tuple[Tuple[str, SocketType], ...]:
    return (
        ('u_resolution', SocketType.VEC2),
        ('u_time', SocketType.FLOAT),
        ('u_mouse', SocketType.VEC2),
    )


def _default_varyings() -> Tuple[Tuple[str, SocketType], ...]:
    return (('vUv', SocketType.VEC2),)


@dataclass(frozen=True)
class CompilerConfig:
    min_loop_iterations: int = 1
    max_loop_iterations: int = 16
    default_loop_iterations: int = 4
    default_carry_type: SocketType = SocketType.VEC2

    precision: str = 'mediump'
    defines: Tuple[Tuple[str, str], ...] = field(default_factory=_default_defines)
    uniforms: Tuple[Tuple[str, SocketType], ...] = field(default_factory=_default_uniforms)
    varyings: Tuple[Tuple[str, SocketType], ...] = field(default_factory=_default_varyings)

    cache_capacity: int = 16
    check_types: bool = True

    def __post_init__(self):
        if self.min_loop_iterations < 1:
            raise ValueError("min_loop_iterations must be >= 1")
        if self.max_loop_iterations < self.min_loop_iterations:
            raise ValueError("max_loop_iterations must be >= min_loop_iterations")
        if self.cache_capacity < 1:
            raise ValueError("cache_capacity must be >= 1")

    def clamp_iterations(self, value) -> int:
        """Round and clamp a user iteration count; non-numbers get the default."""
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            value = self.default_loop_iterations
        # halves round up
        rounded = int(math.floor(value + 0.5))
        return max(self.min_loop_iterations, min(self.max_loop_iterations, rounded))

    def carry_type(self, value) -> SocketType:
        try:
            return SocketType(value)
        except (ValueError, TypeError):
            return self.default_carry_type


DEFAULT_CONFIG = CompilerConfig()
