# Preset Loop Node Generators
# Handles: fractalLoop, rotatingLinesLoop, accumulateLoop
#
# Self-contained accumulation loops: each node owns its loop and only
# exposes the accumulated color plus the coordinates it walked.

from ..codegen.shader_lib import PALETTE_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import input_or_param, param_int, param_lit, param_str, param_vec3, resolved, vec3_str


def _is_one(expr: str) -> bool:
    return expr in ('1.0', '1')


def gen_fractal_loop(node, inputs):
    """Tile, measure, ring and glow: the classic fract-and-palette layering."""
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    iters = max(1, param_int(node, 'iterations', 4))
    scale = input_or_param(node, inputs, 'fract_scale', 1.5)
    scale_exp = input_or_param(node, inputs, 'scale_exp', 1.0)
    freq = input_or_param(node, inputs, 'freq', 8.0)
    glow = input_or_param(node, inputs, 'glow', 0.01)
    glow_pow = input_or_param(node, inputs, 'glow_pow', 1.0)
    iter_off = input_or_param(node, inputs, 'iter_offset', 0.4)
    time_scale = input_or_param(node, inputs, 'time_scale', 0.4)
    a = vec3_str(param_vec3(node, 'a', (0.5, 0.5, 0.5)))
    b = vec3_str(param_vec3(node, 'b', (0.5, 0.5, 0.5)))
    c = vec3_str(param_vec3(node, 'c', (1.0, 1.0, 1.0)))
    d = vec3_str(param_vec3(node, 'd', (0.0, 0.33, 0.67)))

    i, cur, uv0, dist = f"{id_}_i", f"{id_}_uv_final", f"{id_}_uv0", f"{id_}_d"
    scale_expr = scale if _is_one(scale_exp) else f"({scale} * pow({scale_exp}, {i}))"
    glow_expr = f"{glow} / max({dist}, 0.0001)"
    if not _is_one(glow_pow):
        glow_expr = f"pow({glow_expr}, {glow_pow})"

    code = (
        f"    vec2 {uv0} = {uv};\n"
        f"    vec2 {cur} = {uv};\n"
        f"    vec3 {id_}_color = vec3(0.0);\n"
        f"    for (float {i} = 0.0; {i} < {iters}.0; {i}++) {{\n"
        f"        {cur} = fract({cur} * {scale_expr}) - 0.5;\n"
        f"        float {dist} = length({cur}) * exp(-length({uv0}));\n"
        f"        float {id_}_t = length({uv0}) + {i} * {iter_off} + {t} * {time_scale};\n"
        f"        vec3 {id_}_col = palette({id_}_t, {a}, {b}, {c}, {d});\n"
        f"        {dist} = sin({dist} * {freq} + {t}) / {freq};\n"
        f"        {dist} = abs({dist});\n"
        f"        {dist} = {glow_expr};\n"
        f"        {id_}_color += {id_}_col * {dist};\n"
        f"    }}\n"
    )
    return GLSLResult(code, {'color': f"{id_}_color", 'uv_final': cur, 'uv0': uv0})


def gen_rotating_lines_loop(node, inputs):
    """
    Layers of rotated, tiled boxes glowing as horizontal stripes.

    Layer i runs over 1.9, 2.9, ... below iterations + 1; each builds a
    cosine matrix from i and the two rotation offsets.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    iters = param_int(node, 'iterations', 20)
    phases = ', '.join(param_lit(node, key, default) for key, default in (
        ('phase_r', 0.0), ('phase_g', 1.0), ('phase_b', 2.0), ('phase_a', 3.0)))
    rot1 = param_lit(node, 'rot_offset_1', 33.0)
    rot2 = param_lit(node, 'rot_offset_2', 11.0)
    i, rot, p = f"{id_}_i", f"{id_}_R", f"{id_}_p"

    code = (
        f"    vec4 {id_}_color = vec4(0.0);\n"
        f"    vec2 {id_}_b = vec2(0.0, {param_lit(node, 'box_half_y', 0.2)});\n"
        f"    vec2 {p};\n"
        f"    mat2 {rot};\n"
        f"    for (float {i} = 1.9; {i} < {iters}.0 + 1.0; {i} += 1.0) {{\n"
        f"        {rot} = mat2(cos({i}), cos({i} + {rot1}), cos({i} + {rot2}), cos({i}));\n"
        f"        vec2 {id_}_q = fract(({uv} * {i} * {param_lit(node, 'uv_scale', 0.1)}"
        f" + {t} * vec2(0.0, {param_lit(node, 'scroll_y', 0.2)})) * {rot}) - 0.5;\n"
        f"        {p} = {id_}_q * {rot};\n"
        f"        float {id_}_d = length(clamp({p}, -{id_}_b, {id_}_b) - {p});\n"
        f"        {id_}_color += {param_lit(node, 'glow', 0.001)} / max({id_}_d, 0.00001)"
        f" * (cos({p}.y / {param_lit(node, 'color_freq', 0.1)} + vec4({phases})) + 1.0);\n"
        f"    }}\n"
        f"    vec2 {id_}_uv = {uv};\n"
    )
    return GLSLResult(code, {'color': f"{id_}_color", 'uv': f"{id_}_uv"})


# ============ Accumulate loop ============

ACCUMULATE_MODES = {
    'position_mode': ('sinusoidal', 'radial', 'direct'),
    'distance_mode': ('circle', 'polar'),
    'atten_mode': ('inverse', 'exp', 'inverse_sq'),
    'color_mode': ('cos_vec3', 'cos_vec4'),
    'tonemap_mode': ('tanh_sq', 'tanh', 'pow_sq', 'none'),
}


def _mode(node, key):
    choices = ACCUMULATE_MODES[key]
    value = param_str(node, key, choices[0])
    return value if value in choices else choices[0]


def gen_accumulate_loop(node, inputs):
    """
    Sum glow from one moving point per iteration, then tone map.

    Position, distance, attenuation, color and tone curve are each picked by
    a select param; stars, orbs, arc rings and plasma all fall out of it.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.5)')
    t = resolved(inputs, 'time', '0.0')
    iters = param_int(node, 'iterations', 50)
    freq = input_or_param(node, inputs, 'freq', 60.0)
    glow = input_or_param(node, inputs, 'glow', 0.0003)
    i, pos, d, acc = f"{id_}_i", f"{id_}_pos", f"{id_}_d", f"{id_}_acc"
    ph = [param_lit(node, f"color_phase_{ch}", default) for ch, default in (('r', 0.0), ('g', 2.0), ('b', 4.0))]

    position = _mode(node, 'position_mode')
    if position == 'radial':
        pos_expr = (f"{uv} + {input_or_param(node, inputs, 'pos_scale', 0.05)}"
                    f" * cos({i} * {input_or_param(node, inputs, 'pos_freq', 0.31)}"
                    f" + vec2(0.0, {input_or_param(node, inputs, 'pos_phase', 5.0)})) * sqrt({i})")
    elif position == 'sinusoidal':
        pos_expr = (f"sin({uv} * {freq} / {i} + {t} * {input_or_param(node, inputs, 'time_scale', 0.2)}"
                    f" + cos({i} * vec2(9.0, 7.0)))")
    else:
        pos_expr = uv

    if _mode(node, 'distance_mode') == 'polar':
        dist_expr = f"abs(length({pos}) * {freq} * 0.02 - {i})"
    else:
        dist_expr = f"length({pos})"

    atten = _mode(node, 'atten_mode')
    if atten == 'exp':
        atten_expr = f"exp(-{d} / {glow})"
    elif atten == 'inverse_sq':
        atten_expr = f"{glow} / max({d} * {d}, 0.000001)"
    else:
        atten_expr = f"{glow} / max({d}, 0.00001)"

    if _mode(node, 'color_mode') == 'cos_vec4':
        color_expr = f"(cos({i} + vec4({ph[0]}, {ph[1]}, {ph[2]}, 0.0)) + 1.0).xyz"
    else:
        color_expr = f"(cos({i} + vec3({ph[0]}, {ph[1]}, {ph[2]})) + 1.0)"

    tone_expr = {
        'tanh': f"tanh({acc})",
        'pow_sq': f"{acc} * {acc}",
        'none': acc,
        'tanh_sq': f"tanh({acc} * {acc})",
    }[_mode(node, 'tonemap_mode')]

    code = (
        f"    vec3 {acc} = vec3(0.0);\n"
        f"    for (float {i} = 1.0; {i} < {iters}.0; {i}++) {{\n"
        f"        vec2 {pos} = {pos_expr};\n"
        f"        float {d} = {dist_expr};\n"
        f"        float {id_}_a = {atten_expr};\n"
        f"        {acc} += {color_expr} * {id_}_a;\n"
        f"    }}\n"
        f"    vec3 {id_}_color = {tone_expr};\n"
        f"    vec2 {id_}_uv = {uv};\n"
    )
    return GLSLResult(code, {'color': f"{id_}_color", 'uv': f"{id_}_uv"})


DEFINITIONS = [
    NodeDefinition(
        type='fractalLoop', label='Fractal Loop', category='Presets', generate=gen_fractal_loop,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            fract_scale=('float', 'Tile Scale'),
            scale_exp=('float', 'Scale Growth'),
            freq=('float', 'Ring Freq'),
            glow=('float', 'Glow'),
            glow_pow=('float', 'Glow Power'),
            iter_offset=('float', 'Layer Offset'),
            time_scale=('float', 'Anim Speed'),
        ),
        outputs=sockets(
            color=('vec3', 'Color'),
            uv_final=('vec2', 'UV Final'),
            uv0=('vec2', 'UV0'),
        ),
        default_params={
            'iterations': 4,
            'fract_scale': 1.5,
            'scale_exp': 1.0,
            'freq': 8.0,
            'glow': 0.01,
            'glow_pow': 1.0,
            'iter_offset': 0.4,
            'time_scale': 0.4,
            'a': [0.5, 0.5, 0.5],
            'b': [0.5, 0.5, 0.5],
            'c': [1.0, 1.0, 1.0],
            'd': [0.0, 0.33, 0.67],
        },
        glsl_function=PALETTE_GLSL,
        description='Iterated UV tiling with glowing palette rings',
    ),
    NodeDefinition(
        type='rotatingLinesLoop', label='Rotating Lines', category='Presets', generate=gen_rotating_lines_loop,
        inputs=sockets(uv=('vec2', 'UV (Pixel)'), time=('float', 'Time')),
        outputs=sockets(color=('vec4', 'Color (RGBA)'), uv=('vec2', 'UV (pass-through)')),
        default_params={
            'iterations': 20, 'uv_scale': 0.1, 'scroll_y': 0.2, 'box_half_y': 0.2,
            'glow': 0.001, 'color_freq': 0.1,
            'phase_r': 0.0, 'phase_g': 1.0, 'phase_b': 2.0, 'phase_a': 3.0,
            'rot_offset_1': 33.0, 'rot_offset_2': 11.0,
        },
        description='Rotated tiled boxes accumulated as glowing RGBA stripes',
    ),
    NodeDefinition(
        type='accumulateLoop', label='Accumulate Loop', category='Presets', generate=gen_accumulate_loop,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            freq=('float', 'UV Freq'),
            glow=('float', 'Glow'),
            time_scale=('float', 'Time Scale'),
            pos_scale=('float', 'Pos Scale'),
            pos_freq=('float', 'Pos Freq'),
            pos_phase=('float', 'Pos Phase'),
        ),
        outputs=sockets(color=('vec3', 'Color'), uv=('vec2', 'UV (pass-through)')),
        default_params={
            'iterations': 50, 'time_scale': 0.2, 'freq': 60.0, 'glow': 0.0003,
            'color_phase_r': 0.0, 'color_phase_g': 2.0, 'color_phase_b': 4.0,
            'pos_scale': 0.05, 'pos_freq': 0.31, 'pos_phase': 5.0, 'arc_freq': 1.0,
            'position_mode': 'sinusoidal', 'distance_mode': 'circle',
            'atten_mode': 'inverse', 'color_mode': 'cos_vec3', 'tonemap_mode': 'tanh_sq',
        },
        description='Iterated point-glow accumulation with selectable position, falloff and tone curve',
    ),
]
