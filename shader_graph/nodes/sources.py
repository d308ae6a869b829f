# Source Node Generators
# Handles: uv, pixelUV, time, constant, mouse
#
# Sources have no inputs and read only shader uniforms or varyings.

from .base import GLSLResult, NodeDefinition, sockets
from .helpers import param_lit, var_name


def gen_uv(node, inputs):
    """Centered, aspect-corrected UV in [-aspect, aspect] x [-1, 1]."""
    out = var_name(node, 'uv')
    code = (
        f"    vec2 {out} = (vUv - 0.5) * 2.0;\n"
        f"    {out}.x *= u_resolution.x / u_resolution.y;\n"
    )
    return GLSLResult(code, {'uv': out})


def gen_pixel_uv(node, inputs):
    out = var_name(node, 'uv')
    return GLSLResult(f"    vec2 {out} = gl_FragCoord.xy / u_resolution.y;\n", {'uv': out})


def gen_time(node, inputs):
    out = var_name(node, 'time')
    return GLSLResult(f"    float {out} = u_time;\n", {'time': out})


def gen_constant(node, inputs):
    out = var_name(node, 'value')
    return GLSLResult(f"    float {out} = {param_lit(node, 'value', 1.0)};\n", {'value': out})


def gen_mouse(node, inputs):
    # u_mouse is in pixels, bottom-left origin; map into UV node space
    uv, x, y = var_name(node, 'uv'), var_name(node, 'x'), var_name(node, 'y')
    code = (
        f"    vec2 {uv} = (u_mouse / u_resolution.y - vec2(u_resolution.x / u_resolution.y, 1.0) * 0.5) * 2.0;\n"
        f"    float {x} = {uv}.x;\n"
        f"    float {y} = {uv}.y;\n"
    )
    return GLSLResult(code, {'uv': uv, 'x': x, 'y': y})


DEFINITIONS = [
    NodeDefinition(
        type='uv', label='UV', category='Sources', generate=gen_uv,
        outputs=sockets(uv=('vec2', 'UV')),
        description='Centered, aspect-corrected UV coordinates',
    ),
    NodeDefinition(
        type='pixelUV', label='Pixel UV', category='Sources', generate=gen_pixel_uv,
        outputs=sockets(uv=('vec2', 'UV')),
        description='Raw screen UV: fragCoord / resolution.y',
    ),
    NodeDefinition(
        type='time', label='Time', category='Sources', generate=gen_time,
        outputs=sockets(time=('float', 'Time')),
        description='Current time in seconds',
    ),
    NodeDefinition(
        type='constant', label='Constant', category='Sources', generate=gen_constant,
        outputs=sockets(value=('float', 'Value')),
        default_params={'value': 1.0},
        description='A constant float value',
    ),
    NodeDefinition(
        type='mouse', label='Mouse', category='Sources', generate=gen_mouse,
        outputs=sockets(uv=('vec2', 'Mouse UV'), x=('float', 'X'), y=('float', 'Y')),
        description='Mouse position in UV node space',
    ),
]
