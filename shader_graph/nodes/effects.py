# Effect Node Generators
# Handles: makeLight, light, toneMap, grain, forLoop, gravitationalLens

import math
import re

from ..codegen.shader_lib import GRAIN_GLSL, LIGHT_GLSL, MAKE_LIGHT_GLSL, PALETTE_GLSL, TONE_MAP_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import fmt_float, param_float, param_lit, param_str, resolved, var_name


TONE_MAP_FUNCTIONS = {
    'aces': 'toneACES',
    'hable': 'toneHable',
    'unreal': 'toneUnreal',
    'tanh': 'toneTanh',
}


def gen_make_light(node, inputs):
    out = var_name(node, 'glow')
    d = resolved(inputs, 'distance', '0.0')
    b = resolved(inputs, 'brightness', param_lit(node, 'brightness', 10.0))
    return GLSLResult(f"    float {out} = make_light({d}, {b});\n", {'glow': out})


def gen_light(node, inputs):
    """SDF distance to glow; mode is glow (exp), ring or simple (1/d)."""
    out = var_name(node, 'glow')
    d = resolved(inputs, 'distance', '0.0')
    b = resolved(inputs, 'brightness', param_lit(node, 'brightness', 10.0))
    mode = param_str(node, 'mode', 'glow')
    if mode == 'ring':
        expr = f"ringLight({d}, {b}, {param_lit(node, 'ringFreq', 8.0)})"
    elif mode == 'simple':
        expr = f"simpleLight({d}, {b})"
    else:
        expr = f"exp(-{b} * max({d}, 0.0))"
    return GLSLResult(f"    float {out} = {expr};\n", {'glow': out})


def gen_tone_map(node, inputs):
    out = var_name(node, 'color')
    func = TONE_MAP_FUNCTIONS.get(param_str(node, 'mode', 'aces'), 'toneACES')
    color = resolved(inputs, 'color', 'vec3(0.0)')
    return GLSLResult(f"    vec3 {out} = {func}({color});\n", {'color': out})


def gen_grain(node, inputs):
    out, uv_out = var_name(node, 'color'), var_name(node, 'uv')
    color = resolved(inputs, 'color', 'vec3(0.0)')
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    amount = param_lit(node, 'amount', 0.05)
    seed = resolved(inputs, 'seed', param_lit(node, 'seed', 0.0))
    code = (
        f"    vec3 {out} = applyGrain({color}, {uv}, {amount}, {seed});\n"
        f"    vec2 {uv_out} = {uv};\n"
    )
    return GLSLResult(code, {'color': out, 'uv': uv_out})


# ============ For loop ============

LOOP_TOKEN = re.compile(r"@(uv0|uv|color|i|t)")

DEFAULT_LOOP_BODY = '\n'.join((
    '@uv = fract(@uv * 3.0) - 0.5;',
    'float d = length(@uv) * exp(-length(@uv0));',
    'float t2 = length(@uv0) + @i * 0.4 + @t * 0.4;',
    'vec3 col = palette(t2, vec3(0.5), vec3(0.5), vec3(1.0), vec3(0.0, 0.33, 0.67));',
    'float g = sin(d * 8.0 + @t) / 8.0;',
    'g = 0.01 / abs(g);',
    '@color += col * g;',
))


def expand_loop_body(body: str, node_id: str) -> str:
    """Replace @uv0, @uv, @color, @i and @t with the node's own variables."""
    return LOOP_TOKEN.sub(lambda m: f"{node_id}_{m.group(1)}", body)


def gen_for_loop(node, inputs):
    """
    User-written loop body over an accumulator.

    The body sees @uv (walked), @uv0 (entry), @color (accumulated), @i
    (float counter) and @t (time); blank lines are dropped.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    iters = resolved(inputs, 'iterations', fmt_float(math.floor(param_float(node, 'iterations', 4))))
    body = expand_loop_body(param_str(node, 'body', DEFAULT_LOOP_BODY), id_)
    lines = ''.join(f"        {line.strip()}\n" for line in body.split('\n') if line.strip())
    code = (
        f"    vec2 {id_}_uv0 = {uv};\n"
        f"    vec2 {id_}_uv = {uv};\n"
        f"    vec3 {id_}_color = vec3(0.0);\n"
        f"    float {id_}_t = {t};\n"
        f"    for (float {id_}_i = 0.0; {id_}_i < {iters}; {id_}_i++) {{\n"
        f"{lines}"
        f"    }}\n"
        f"    vec2 {id_}_uv_final = {id_}_uv;\n"
    )
    return GLSLResult(code, {'color': f"{id_}_color", 'uv_final': f"{id_}_uv_final"})


# ============ Gravitational lens ============

def _lens_warp(node, id_, t):
    lens = param_str(node, 'lens_type', 'gravity')
    direction, dist = f"{id_}_dir", f"{id_}_dist"
    if lens == 'fisheye':
        scale = fmt_float(param_float(node, 'strength', 0.002) * 5.0)
        return f"{direction} * (tanh({dist} * 10.0) / max({dist}, 0.00001) - 1.0) * {scale}"
    strength = param_lit(node, 'strength', 0.002)
    if lens == 'ripple':
        return (f"{direction} * sin({dist} * {param_lit(node, 'ripple_freq', 20.0)}"
                f" - {t} * {param_lit(node, 'ripple_speed', 2.0)}) * {strength}")
    er = param_lit(node, 'einstein_radius', 0.12)
    return f"{direction} * ({strength} * {er} * {er} / ({dist} * {dist} + {param_lit(node, 'softening', 0.0001)}))"


def gen_gravitational_lens(node, inputs):
    """
    Pull UVs toward lens_center: 1/r^2 gravity scaled by the Einstein
    radius, a tanh barrel, or an animated ripple.

    Also reports a horizon mask, a redshift falloff and a photon ring at
    1.5x the horizon radius. A nonzero spin rotates the offset over time.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    center = resolved(inputs, 'lens_center', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    offset, dist = f"{id_}_offset", f"{id_}_dist"
    horizon = param_float(node, 'horizon_radius', 0.05)
    einstein = param_lit(node, 'einstein_radius', 0.12)
    spin = param_float(node, 'spin', 0.0)

    code = f"    vec2 {offset} = {center} - {uv};\n"
    if param_str(node, 'aspect_correct', 'yes') == 'yes':
        code += f"    {offset}.x *= u_resolution.x / u_resolution.y;\n"
    if abs(spin) > 0.001:
        k = f"{id_}_kerrA"
        code += (
            f"    float {k} = {fmt_float(spin)} * {t} * 0.5;\n"
            f"    {offset} = vec2({offset}.x * cos({k}) - {offset}.y * sin({k}),"
            f" {offset}.x * sin({k}) + {offset}.y * cos({k}));\n"
        )
    code += (
        f"    float {dist} = length({offset});\n"
        f"    vec2 {id_}_dir = {offset} / max({dist}, 0.00001);\n"
        f"    vec2 {id_}_uv_lensed = {uv} + ({_lens_warp(node, id_, t)});\n"
        f"    float {id_}_horizon_mask = step({fmt_float(horizon)}, {dist});\n"
        f"    float {id_}_redshift = 1.0 - exp(-pow(max({dist} - {fmt_float(horizon)}, 0.0)"
        f" / max({einstein}, 0.0001), {param_lit(node, 'redshift_power', 2.0)}));\n"
    )
    width = param_float(node, 'photon_width', 0.008)
    if width > 0.0001:
        code += (f"    float {id_}_photon_ring = smoothstep(0.0, 1.0, 1.0 - abs({dist} - {fmt_float(horizon * 1.5)})"
                 f" / {fmt_float(width)});\n")
    else:
        code += f"    float {id_}_photon_ring = 0.0;\n"
    return GLSLResult(code, {
        'uv_lensed': f"{id_}_uv_lensed",
        'horizon_mask': f"{id_}_horizon_mask",
        'dist': dist,
        'redshift': f"{id_}_redshift",
        'photon_ring': f"{id_}_photon_ring",
    })


_LIGHT_INPUTS = sockets(distance=('float', 'Distance'), brightness=('float', 'Brightness'))

DEFINITIONS = [
    NodeDefinition(
        type='makeLight', label='Make Light', category='Effects', generate=gen_make_light,
        inputs=_LIGHT_INPUTS,
        outputs=sockets(glow=('float', 'Glow')),
        default_params={'brightness': 10.0},
        glsl_function=MAKE_LIGHT_GLSL,
        description='SDF distance to glow with exp falloff',
    ),
    NodeDefinition(
        type='light', label='Light', category='Effects', generate=gen_light,
        inputs=_LIGHT_INPUTS,
        outputs=sockets(glow=('float', 'Glow')),
        default_params={'mode': 'glow', 'brightness': 10.0, 'ringFreq': 8.0},
        glsl_function=LIGHT_GLSL,
        description='SDF distance to glow: exp, ring light or 1/d',
    ),
    NodeDefinition(
        type='toneMap', label='Tone Map', category='Effects', generate=gen_tone_map,
        inputs=sockets(color=('vec3', 'Color')),
        outputs=sockets(color=('vec3', 'Color')),
        default_params={'mode': 'aces'},
        glsl_function=TONE_MAP_GLSL,
        description='ACES, Hable, Unreal or Tanh tone mapping',
    ),
    NodeDefinition(
        type='grain', label='Grain', category='Effects', generate=gen_grain,
        inputs=sockets(color=('vec3', 'Color'), uv=('vec2', 'UV'), seed=('float', 'Seed (animate)')),
        outputs=sockets(color=('vec3', 'Color'), uv=('vec2', 'UV (pass-through)')),
        default_params={'amount': 0.05, 'seed': 0.0},
        glsl_function=GRAIN_GLSL,
        description='Film grain noise on a color',
    ),
    NodeDefinition(
        type='forLoop', label='For Loop', category='Effects', generate=gen_for_loop,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time'), iterations=('float', 'Iterations')),
        outputs=sockets(color=('vec3', 'Color'), uv_final=('vec2', 'UV Final')),
        default_params={'iterations': 4, 'body': DEFAULT_LOOP_BODY},
        glsl_function=PALETTE_GLSL,
        description='Accumulator loop with a GLSL body using @uv, @uv0, @color, @i and @t',
    ),
    NodeDefinition(
        type='gravitationalLens', label='Gravitational Lens', category='Effects', generate=gen_gravitational_lens,
        inputs=sockets(
            uv=('vec2', 'UV'),
            lens_center=('vec2', 'Lens Center'),
            time=('float', 'Time (ripple / spin)'),
        ),
        outputs=sockets(
            uv_lensed=('vec2', 'Lensed UV'),
            horizon_mask=('float', 'Horizon Mask (1=outside)'),
            dist=('float', 'Distance to Lens'),
            redshift=('float', 'Redshift (0=horizon,1=far)'),
            photon_ring=('float', 'Photon Ring glow'),
        ),
        default_params={
            'lens_type': 'gravity',
            'strength': 0.002,
            'einstein_radius': 0.12,
            'horizon_radius': 0.05,
            'softening': 0.0001,
            'aspect_correct': 'yes',
            'ripple_freq': 20.0,
            'ripple_speed': 2.0,
            'spin': 0.0,
            'redshift_power': 2.0,
            'photon_width': 0.008,
        },
        description='Lens UV warp (gravity, fisheye, ripple) with horizon, redshift and photon ring',
    ),
]
