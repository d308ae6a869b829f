# Fragment Shader Assembler
# Lays out preamble, helpers, prologue and main() into the final source

from typing import Dict, Sequence

from ..config import CompilerConfig, DEFAULT_CONFIG
from ..errors import InternalConsistencyError
from ..ir.graph import GraphNode
from ..ir.types import SocketType, coerce_expr
from ..nodes.base import NodeDefinition

VERTEX_SHADER = '''varying vec2 vUv;

void main() {
    vUv = uv;
    gl_Position = vec4(position, 1.0);
}'''

BLACK_WRITE = "    gl_FragColor = vec4(0.0, 0.0, 0.0, 1.0);\n"


def assemble(helpers: Sequence[str], statements: Sequence[str], terminal_write: str,
             config: CompilerConfig = DEFAULT_CONFIG) -> str:
    """
    Build the fragment shader source.

    Sections:
        1. precision and #defines
        2. helper blocks, blank-line separated
        3. uniforms and varyings
        4. main() with the statements and the terminal write
    """
    if not terminal_write.strip():
        raise InternalConsistencyError("Fragment shader has no terminal write")

    sections = [_preamble(config)]

    blocks = [h.strip() for h in helpers if h.strip()]
    if blocks:
        sections.append("\n\n".join(blocks))

    sections.append(_prologue(config))
    sections.append("void main() {\n" + "".join(statements) + terminal_write + "}")

    return "\n\n".join(sections)


def _preamble(config: CompilerConfig) -> str:
    lines = [f"precision {config.precision} float;"]
    for name, value in config.defines:
        lines.append(f"#define {name} {value}")
    return "\n".join(lines)


def _prologue(config: CompilerConfig) -> str:
    uniforms = "\n".join(f"uniform {t} {name};" for name, t in config.uniforms)
    varyings = "\n".join(f"varying {t} {name};" for name, t in config.varyings)
    return "\n\n".join(part for part in (uniforms, varyings) if part)


# ============ Preview ============

def primary_output(definition: NodeDefinition, node: GraphNode):
    """(key, type) shown when previewing a node: first vec3, else first vec4, else first output."""
    items = definition.output_items(node)
    for wanted in (SocketType.VEC3, SocketType.VEC4):
        for key, stype in items:
            if stype is wanted:
                return key, stype
    return items[0] if items else None


def preview_write(definition: NodeDefinition, node: GraphNode, output_vars: Dict[str, str]) -> str:
    """Terminal write showing one node's primary output as an opaque color."""
    primary = primary_output(definition, node)
    if primary is None:
        return BLACK_WRITE
    key, stype = primary
    variable = output_vars.get(key)
    if not variable:
        return BLACK_WRITE
    return f"    gl_FragColor = vec4({coerce_expr(variable, stype, SocketType.VEC3)}, 1.0);\n"
