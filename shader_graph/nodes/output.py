# Output Node Generators
# Handles: output, vec4Output
#
# Terminal nodes write gl_FragColor and declare no variables.

from .base import GLSLResult, NodeDefinition, NodeKind, sockets
from .helpers import resolved


def gen_output(node, inputs):
    color = resolved(inputs, 'color', 'vec3(0.0)')
    return GLSLResult(f"    gl_FragColor = vec4({color}, 1.0);\n")


def gen_vec4_output(node, inputs):
    color = resolved(inputs, 'color', 'vec4(0.0, 0.0, 0.0, 1.0)')
    return GLSLResult(f"    gl_FragColor = {color};\n")


DEFINITIONS = [
    NodeDefinition(
        type='output', label='Output', category='Output', generate=gen_output,
        inputs=sockets(color=('vec3', 'Color')),
        kind=NodeKind.TERMINAL,
        description='Final color output of the shader',
    ),
    NodeDefinition(
        type='vec4Output', label='Output (RGBA)', category='Output', generate=gen_vec4_output,
        inputs=sockets(color=('vec4', 'Color (RGBA)')),
        kind=NodeKind.TERMINAL,
        description='Final RGBA output, written to gl_FragColor as is',
    ),
]
