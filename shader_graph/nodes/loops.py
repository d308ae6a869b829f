# Loop Node Definitions
# Handles: loop, loopStart, loopEnd and the loop step nodes
#
# `loop` and `loopEnd` are unrolled by the loop expander, which has the whole
# graph in view. Their generate functions here emit the zero-iteration
# identity so every definition stays callable on its own.

from ..errors import GraphModelError
from ..ir.types import SocketType
from .base import GLSLResult, NodeDefinition, NodeKind, SocketDef, sockets
from .helpers import fmt_fixed, is_number, resolved, var_name


def _carry_type(params) -> SocketType:
    try:
        return SocketType.parse(params.get('carryType', 'vec2'))
    except GraphModelError:
        return SocketType.VEC2


def loop_sockets(params):
    ct = _carry_type(params)
    return {'carry': SocketDef(ct, 'Carry')}, {'result': SocketDef(ct, 'Result')}


def _instance_type(node, outputs=True) -> SocketType:
    slots = node.outputs if outputs else node.inputs
    for slot in slots.values():
        return slot.type
    return SocketType.VEC2


def gen_loop_identity(node, inputs):
    """Zero iterations: result = carry."""
    ct = _instance_type(node) if node.outputs else _carry_type(node.params)
    out = var_name(node, 'result')
    carry = resolved(inputs, 'carry', ct.zero_value())
    return GLSLResult(f"    {ct} {out} = {carry};\n", {'result': out})


def gen_loop_start(node, inputs):
    """Pass-through; the carry type lives on the instance's output socket."""
    ct = _instance_type(node)
    out = var_name(node, 'carry')
    carry = resolved(inputs, 'carry', ct.zero_value())
    return GLSLResult(f"    {ct} {out} = {carry};\n", {'carry': out})


# ============ Step nodes ============

def _fixed(node, key, default, digits):
    value = node.params.get(key)
    return fmt_fixed(value if is_number(value) else default, digits)


def gen_ripple_step(node, inputs):
    """One pass of sin/cos UV ripple."""
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    sc = _fixed(node, 'scale', 3.0, 3)
    sp = _fixed(node, 'speed', 1.0, 3)
    st = _fixed(node, 'strength', 0.12, 4)
    s, out = var_name(node, 's'), var_name(node, 'uv')
    code = (
        f"    vec2 {s} = {uv} * {sc};\n"
        f"    vec2 {out} = {uv} + vec2(\n"
        f"        sin({s}.y + u_time * {sp}) * {st},\n"
        f"        cos({s}.x + u_time * {sp}) * {st}\n"
        f"    );\n"
    )
    return GLSLResult(code, {'uv': out})


def gen_rotate_step(node, inputs):
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    a = _fixed(node, 'angle', 0.3, 5)
    sc = _fixed(node, 'scale', 1.02, 4)
    c, s, out = var_name(node, 'c'), var_name(node, 's'), var_name(node, 'uv')
    code = (
        f"    float {c} = cos({a}), {s} = sin({a});\n"
        f"    vec2 {out} = mat2({c}, -{s}, {s}, {c}) * {uv} * {sc};\n"
    )
    return GLSLResult(code, {'uv': out})


def gen_domain_fold(node, inputs):
    """abs() mirror fold, scale and offset: the classic IFS step."""
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    sc = _fixed(node, 'scale', 1.8, 4)
    ox = _fixed(node, 'offsetX', 0.5, 4)
    oy = _fixed(node, 'offsetY', 0.3, 4)
    out = var_name(node, 'uv')
    return GLSLResult(f"    vec2 {out} = abs({uv}) * {sc} - vec2({ox}, {oy});\n", {'uv': out})


def gen_float_accumulate(node, inputs):
    v = resolved(inputs, 'value', '0.0')
    sc = _fixed(node, 'scale', 2.0, 3)
    sp = _fixed(node, 'speed', 1.0, 3)
    amp = _fixed(node, 'amplitude', 0.15, 4)
    out = var_name(node, 'value')
    code = f"    float {out} = {v} + sin({v} * {sc} + u_time * {sp}) * {amp};\n"
    return GLSLResult(code, {'value': out})


_UV_STEP_IN = sockets(uv=('vec2', 'UV'))
_UV_STEP_OUT = sockets(uv=('vec2', 'UV out'))

DEFINITIONS = [
    NodeDefinition(
        type='loop', label='Loop', category='Loops', generate=gen_loop_identity,
        inputs=sockets(carry=('vec2', 'Carry')),
        outputs=sockets(result=('vec2', 'Result')),
        default_params={'steps': [], 'iterations': 4, 'carryType': 'vec2'},
        kind=NodeKind.LOOP,
        dynamic_sockets=True,
        socket_builder=loop_sockets,
        description='Repeat a list of step nodes N times, feeding each result back',
    ),
    NodeDefinition(
        type='loopStart', label='Loop Start', category='Loops', generate=gen_loop_start,
        inputs=sockets(carry=('vec2', 'Initial value')),
        outputs=sockets(carry=('vec2', 'Carry')),
        kind=NodeKind.LOOP_START,
        dynamic_sockets=True,
        description='Head of a wired loop chain',
    ),
    NodeDefinition(
        type='loopEnd', label='Loop End', category='Loops', generate=gen_loop_identity,
        inputs=sockets(carry=('vec2', 'Carry in')),
        outputs=sockets(result=('vec2', 'Result')),
        default_params={'iterations': 4},
        kind=NodeKind.LOOP_END,
        dynamic_sockets=True,
        description='Tail of a wired loop chain; repeats the chain N times',
    ),
    NodeDefinition(
        type='loopRippleStep', label='Ripple Step', category='Loops', generate=gen_ripple_step,
        inputs=_UV_STEP_IN, outputs=_UV_STEP_OUT,
        default_params={'scale': 3.0, 'speed': 1.0, 'strength': 0.12},
        description='One iteration of UV ripple distortion',
    ),
    NodeDefinition(
        type='loopRotateStep', label='Rotate Step', category='Loops', generate=gen_rotate_step,
        inputs=_UV_STEP_IN, outputs=_UV_STEP_OUT,
        default_params={'angle': 0.3, 'scale': 1.02},
        description='Rotate and scale UV each iteration',
    ),
    NodeDefinition(
        type='loopDomainFold', label='Domain Fold', category='Loops', generate=gen_domain_fold,
        inputs=_UV_STEP_IN, outputs=_UV_STEP_OUT,
        default_params={'scale': 1.8, 'offsetX': 0.5, 'offsetY': 0.3},
        description='abs() fold with scale and offset each iteration',
    ),
    NodeDefinition(
        type='loopFloatAccumulate', label='Float Accumulate', category='Loops',
        generate=gen_float_accumulate,
        inputs=sockets(value=('float', 'Value')),
        outputs=sockets(value=('float', 'Value out')),
        default_params={'scale': 2.0, 'speed': 1.0, 'amplitude': 0.15},
        description='Add sin(carry * scale + time * speed) each iteration',
    ),
]
