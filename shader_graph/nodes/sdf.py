# SDF Node Generators
# Handles: sdBox, sdSegment, sdEllipse, opRepeat, opRepeatPolar

from ..codegen.shader_lib import (
    OP_REPEAT_GLSL, OP_REPEAT_POLAR_GLSL,
    SD_BOX_GLSL, SD_ELLIPSE_GLSL, SD_SEGMENT_GLSL,
)
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import param_lit, resolved, var_name


def gen_sd_box(node, inputs):
    out = var_name(node, 'distance')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    b = resolved(inputs, 'b', f"vec2({param_lit(node, 'bx', 0.3)}, {param_lit(node, 'by', 0.3)})")
    return GLSLResult(f"    float {out} = sdBox({p}, {b});\n", {'distance': out})


def gen_sd_segment(node, inputs):
    out = var_name(node, 'distance')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    a = resolved(inputs, 'a', 'vec2(-0.5, 0.0)')
    b = resolved(inputs, 'b', 'vec2(0.5, 0.0)')
    return GLSLResult(f"    float {out} = sdSegment({p}, {a}, {b});\n", {'distance': out})


def gen_sd_ellipse(node, inputs):
    out = var_name(node, 'distance')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    ab = resolved(inputs, 'ab', 'vec2(0.5, 0.25)')
    return GLSLResult(f"    float {out} = sdEllipse({p}, {ab});\n", {'distance': out})


def gen_op_repeat(node, inputs):
    out = var_name(node, 'result')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    s = resolved(inputs, 's', param_lit(node, 's', 1.0))
    return GLSLResult(f"    vec2 {out} = opRepeat({p}, {s});\n", {'result': out})


def gen_op_repeat_polar(node, inputs):
    out = var_name(node, 'result')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    n = resolved(inputs, 'n', param_lit(node, 'n', 6.0))
    return GLSLResult(f"    vec2 {out} = opRepeatPolar({p}, {n});\n", {'result': out})


_DISTANCE = sockets(distance=('float', 'Distance'))
_TILED = sockets(result=('vec2', 'Tiled P'))

DEFINITIONS = [
    NodeDefinition(
        type='sdBox', label='sdBox', category='SDF', generate=gen_sd_box,
        inputs=sockets(p=('vec2', 'P'), b=('vec2', 'Half-size')),
        outputs=_DISTANCE,
        default_params={'bx': 0.3, 'by': 0.3},
        glsl_function=SD_BOX_GLSL,
        description='Signed distance to a 2D box',
    ),
    NodeDefinition(
        type='sdSegment', label='sdSegment', category='SDF', generate=gen_sd_segment,
        inputs=sockets(p=('vec2', 'P'), a=('vec2', 'A'), b=('vec2', 'B')),
        outputs=_DISTANCE,
        glsl_function=SD_SEGMENT_GLSL,
        description='Signed distance to a 2D line segment',
    ),
    NodeDefinition(
        type='sdEllipse', label='sdEllipse', category='SDF', generate=gen_sd_ellipse,
        inputs=sockets(p=('vec2', 'P'), ab=('vec2', 'Radii (a,b)')),
        outputs=_DISTANCE,
        glsl_function=SD_ELLIPSE_GLSL,
        description='Signed distance to a 2D ellipse',
    ),
    NodeDefinition(
        type='opRepeat', label='opRepeat', category='SDF', generate=gen_op_repeat,
        inputs=sockets(p=('vec2', 'P'), s=('float', 'Spacing')),
        outputs=_TILED,
        default_params={'s': 1.0},
        socket_defaults={'s': 1.0},
        glsl_function=OP_REPEAT_GLSL,
        description='Infinite domain repetition every s units',
    ),
    NodeDefinition(
        type='opRepeatPolar', label='opRepeatPolar', category='SDF', generate=gen_op_repeat_polar,
        inputs=sockets(p=('vec2', 'P'), n=('float', 'Segments')),
        outputs=_TILED,
        default_params={'n': 6.0},
        socket_defaults={'n': 6.0},
        glsl_function=OP_REPEAT_POLAR_GLSL,
        description='Polar domain repetition, n-fold symmetry',
    ),
]
