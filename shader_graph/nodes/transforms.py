# Transform Node Generators
# Handles: fract, rotate2d

from ..codegen.shader_lib import ROTATE_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import param_lit, resolved, var_name


def gen_fract(node, inputs):
    """Tile space: fract(p * scale) - 0.5"""
    out = var_name(node, 'output')
    p = resolved(inputs, 'input', 'vec2(0.0)')
    scale = resolved(inputs, 'scale', param_lit(node, 'scale', 3.0))
    return GLSLResult(f"    vec2 {out} = fract({p} * {scale}) - 0.5;\n", {'output': out})


def gen_rotate2d(node, inputs):
    out = var_name(node, 'output')
    p = resolved(inputs, 'input', 'vec2(0.0)')
    angle = resolved(inputs, 'angle', param_lit(node, 'angle', 0.0))
    return GLSLResult(f"    vec2 {out} = rotate({p}, {angle});\n", {'output': out})


DEFINITIONS = [
    NodeDefinition(
        type='fract', label='Fract / Tile', category='Transforms', generate=gen_fract,
        inputs=sockets(input=('vec2', 'Input'), scale=('float', 'Scale')),
        outputs=sockets(output=('vec2', 'Output')),
        default_params={'scale': 3.0},
        description='Tile space using fract with a scale multiplier',
    ),
    NodeDefinition(
        type='rotate2d', label='Rotate 2D', category='Transforms', generate=gen_rotate2d,
        inputs=sockets(input=('vec2', 'Input'), angle=('float', 'Angle')),
        outputs=sockets(output=('vec2', 'Output')),
        default_params={'angle': 0.0},
        glsl_function=ROTATE_GLSL,
        description='Rotate a 2D vector by an angle in radians',
    ),
]
