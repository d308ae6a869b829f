# Noise Node Generators
# Handles: fbm, voronoi, domainWarp, flowField, circlePack
#
# All of them list NOISE_HELPERS_GLSL first so the shared value-noise
# primitives collapse to one copy per shader.

from ..codegen.shader_lib import (
    DOMAIN_WARP_GLSL, FBM_GLSL, FLOW_FIELD_GLSL, NOISE_HELPERS_GLSL, VORONOI_GLSL,
)
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import fmt_float, param_float, param_int, param_lit, param_str, param_vec3, resolved, var_name, vec3_str


def _is_zero_literal(expr: str) -> bool:
    try:
        return float(expr) == 0.0
    except ValueError:
        return False


def _animated_uv(node, inputs, default_scale, drift):
    """uv * scale, shifted along `drift` by time * time_scale when animated."""
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    scale = resolved(inputs, 'scale', param_lit(node, 'scale', default_scale))
    ts = resolved(inputs, 'time_scale', param_lit(node, 'time_scale', 0.0))
    if _is_zero_literal(ts):
        return uv, f"{uv} * {scale}"
    return uv, f"({uv} + {t} * {ts} * {drift}) * {scale}"


def gen_fbm(node, inputs):
    out, uv_out = var_name(node, 'value'), var_name(node, 'uv')
    uv, anim = _animated_uv(node, inputs, 1.0, 'vec2(0.31, 0.17)')
    octaves = param_int(node, 'octaves', 4)
    lac = param_lit(node, 'lacunarity', 2.0)
    gain = param_lit(node, 'gain', 0.5)
    code = (
        f"    float {out} = fbm({anim}, {octaves}, {lac}, {gain});\n"
        f"    vec2 {uv_out} = {uv};\n"
    )
    return GLSLResult(code, {'value': out, 'uv': uv_out})


def gen_voronoi(node, inputs):
    out, uv_out = var_name(node, 'dist'), var_name(node, 'uv')
    uv, anim = _animated_uv(node, inputs, 5.0, 'vec2(0.13, 0.27)')
    jitter = resolved(inputs, 'jitter', param_lit(node, 'jitter', 1.0))
    code = (
        f"    float {out} = voronoi({anim}, {jitter});\n"
        f"    vec2 {uv_out} = {uv};\n"
    )
    return GLSLResult(code, {'dist': out, 'uv': uv_out})


def gen_domain_warp(node, inputs):
    warped, offset, inp = var_name(node, 'uv'), var_name(node, 'offset'), var_name(node, 'inp')
    _, anim = _animated_uv(node, inputs, 1.0, 'vec2(0.11, 0.23)')
    strength = resolved(inputs, 'strength', param_lit(node, 'strength', 0.5))
    octaves = param_int(node, 'octaves', 3)
    lac = param_lit(node, 'lacunarity', 2.0)
    gain = param_lit(node, 'gain', 0.5)
    code = (
        f"    vec2 {inp} = {anim};\n"
        f"    vec2 {warped} = domainWarp({inp}, {strength}, {octaves}, {lac}, {gain});\n"
        f"    vec2 {offset} = {warped} - {inp};\n"
    )
    return GLSLResult(code, {'uv': warped, 'offset': offset})


# ============ Generative presets ============

FIELD_MODES = {'perlin': 0, 'curl': 1, 'quantized': 2}
CIRCLE_MODES = {'flat': 0, 'gradient': 1, 'ring': 2, 'noise': 3}

_PALETTE_DEFAULTS = {
    'palette_a': (0.5, 0.5, 0.5),
    'palette_b': (0.5, 0.5, 0.5),
    'palette_c': (1.0, 1.0, 1.0),
    'palette_d': (0.0, 0.33, 0.67),
}


def _inline_palette(node, t):
    """Cosine palette a + b*cos(2pi(c*t + d)) written out from the node's vectors."""
    a, b, c, d = (vec3_str(param_vec3(node, key, default)) for key, default in _PALETTE_DEFAULTS.items())
    return f"{a} + {b} * cos(6.28318 * ({c} * {t} + {d}))"


def gen_flow_field(node, inputs):
    """
    Hobbs-style flow field: each curve starts at a hashed seed and marches
    through a grid of noise-derived angles; every step adds a soft dot.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    curves = max(1, param_int(node, 'curves', 60))
    steps = max(1, param_int(node, 'steps', 24))
    step_size = param_lit(node, 'step_size', 0.04)
    noise_scale = param_lit(node, 'noise_scale', 1.8)
    speed = param_lit(node, 'speed', 0.15)
    width = param_lit(node, 'line_width', 0.006)
    soft = param_lit(node, 'line_softness', 1.5)
    mode = FIELD_MODES.get(param_str(node, 'field_mode', 'perlin'), 0)
    quant = fmt_float(3.141592653589793 / max(param_float(node, 'quant_steps', 10), 2))
    pal_off = param_lit(node, 'palette_offset', 0.0)
    color, density = f"{id_}_color", f"{id_}_density"
    ci, si, pos = f"{id_}_ci", f"{id_}_si", f"{id_}_pos"

    code = (
        f"    vec3 {color} = vec3(0.0);\n"
        f"    float {density} = 0.0;\n"
        f"    for (int {ci} = 0; {ci} < {curves}; {ci}++) {{\n"
        f"        float {id_}_cf = float({ci});\n"
        f"        vec2 {pos} = noiseHash2(vec2({id_}_cf * 0.61803, {id_}_cf * 0.38197)) * 1.2;\n"
        f"        float {id_}_ct = {id_}_cf / {curves}.0 + {pal_off};\n"
        f"        vec3 {id_}_pc = {_inline_palette(node, f'{id_}_ct')};\n"
        f"        for (int {si} = 0; {si} < {steps}; {si}++) {{\n"
        f"            float {id_}_ang = ffAngle({pos} + {t} * {speed}, {noise_scale}, {quant}, {mode});\n"
        f"            float {id_}_d = length({uv} - {pos});\n"
        f"            float {id_}_fw = fwidth({id_}_d);\n"
        f"            float {id_}_line = smoothstep({width} * {soft} + {id_}_fw, {width}, {id_}_d);\n"
        f"            float {id_}_w = {id_}_line * (1.0 - float({si}) / {steps}.0 * 0.4);\n"
        f"            {color} += {id_}_pc * {id_}_w;\n"
        f"            {density} += {id_}_w;\n"
        f"            {pos} += vec2(cos({id_}_ang), sin({id_}_ang)) * {step_size};\n"
        f"        }}\n"
        f"    }}\n"
        f"    {color} = {color} / ({color} + vec3(1.0));\n"
        f"    {density} = clamp({density}, 0.0, 1.0);\n"
        f"    vec2 {id_}_uv = {uv};\n"
    )
    return GLSLResult(code, {'color': color, 'density': density, 'uv': f"{id_}_uv"})


def _circle_fill(id_, mode, uv, t, edge, animate):
    d, r, fill = f"{id_}_d", f"{id_}_r", f"{id_}_fill"
    if mode == 0:
        return (
            f"        float {id_}_fw = fwidth({d});\n"
            f"        {fill} = smoothstep({r} + {id_}_fw, {r} - {id_}_fw, {d});\n"
        )
    if mode == 2:
        return (
            f"        float {id_}_fw = fwidth({d});\n"
            f"        float {id_}_rw = {r} * 0.08;\n"
            f"        {fill} = smoothstep({id_}_rw + {id_}_fw, 0.0, abs({d} - {r}));\n"
        )
    if mode == 3:
        return (
            f"        float {id_}_fw = fwidth({d});\n"
            f"        float {id_}_disc = smoothstep({r} + {id_}_fw, {r} - {id_}_fw, {d});\n"
            f"        float {id_}_nf = valueNoise(({uv} - {id_}_hc) * 6.0 + {t} * {animate}) * 0.5 + 0.5;\n"
            f"        {fill} = {id_}_disc * {id_}_nf;\n"
        )
    return (
        f"        float {id_}_t = clamp({d} / {r}, 0.0, 1.0);\n"
        f"        float {id_}_en = fract(sin(dot({uv} * 31.4, vec2(127.1, 311.7))) * 43758.5453);\n"
        f"        float {id_}_tn = {id_}_t * (1.0 + {id_}_en * 0.3 * {edge});\n"
        f"        {fill} = exp(-{id_}_tn * {id_}_tn * {edge} * 4.0);\n"
    )


def gen_circle_pack(node, inputs):
    """
    Brute-force circle packing: hashed centres and radii, and a circle is
    dropped when it overlaps any earlier one (padding included).
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    circles = max(1, param_int(node, 'circles', 80))
    min_r = param_lit(node, 'min_radius', 0.03)
    max_r = param_lit(node, 'max_radius', 0.15)
    padding = param_lit(node, 'padding', 0.01)
    mode = CIRCLE_MODES.get(param_str(node, 'circle_mode', 'gradient'), 1)
    edge = param_lit(node, 'edge_softness', 1.0)
    animate = param_float(node, 'animate', 0.0)
    pal_off = param_lit(node, 'palette_offset', 0.0)
    color, mask, nearest = f"{id_}_color", f"{id_}_mask", f"{id_}_centers"
    ci, cj = f"{id_}_ci", f"{id_}_cj"

    code = (
        f"    vec3 {color} = vec3(0.0);\n"
        f"    float {mask} = 0.0;\n"
        f"    vec2 {nearest} = vec2(0.0);\n"
        f"    float {id_}_nearD = 99999.0;\n"
        f"    float {id_}_radRange = {max_r} - {min_r};\n"
        f"    for (int {ci} = 0; {ci} < {circles}; {ci}++) {{\n"
        f"        float {id_}_cf = float({ci});\n"
        f"        vec2 {id_}_hc = noiseHash2(vec2({id_}_cf * 0.31415, {id_}_cf * 0.27182)) * 0.9;\n"
        f"        float {id_}_hr = noiseHash1(vec2({id_}_cf * 0.57721, {id_}_cf * 0.41421));\n"
        f"        float {id_}_r = {min_r} + {id_}_hr * {id_}_radRange;\n"
    )
    if animate > 0:
        code += f"        {id_}_r += sin({t} * {fmt_float(animate)} + {id_}_cf * 0.91) * {id_}_r * 0.15;\n"
    code += (
        f"        bool {id_}_ok = true;\n"
        f"        for (int {cj} = 0; {cj} < {circles}; {cj}++) {{\n"
        f"            if ({cj} >= {ci}) break;\n"
        f"            float {id_}_cf2 = float({cj});\n"
        f"            vec2 {id_}_hc2 = noiseHash2(vec2({id_}_cf2 * 0.31415, {id_}_cf2 * 0.27182)) * 0.9;\n"
        f"            float {id_}_hr2 = noiseHash1(vec2({id_}_cf2 * 0.57721, {id_}_cf2 * 0.41421));\n"
        f"            float {id_}_r2 = {min_r} + {id_}_hr2 * {id_}_radRange;\n"
        f"            if (length({id_}_hc - {id_}_hc2) < {id_}_r + {id_}_r2 + {padding}) {{ {id_}_ok = false; break; }}\n"
        f"        }}\n"
        f"        if (!{id_}_ok) continue;\n"
        f"        float {id_}_d = length({uv} - {id_}_hc);\n"
        f"        if ({id_}_d < {id_}_nearD) {{ {id_}_nearD = {id_}_d; {nearest} = {id_}_hc; }}\n"
        f"        float {id_}_ct = {id_}_cf / {circles}.0 + {pal_off};\n"
        f"        vec3 {id_}_pc = {_inline_palette(node, f'{id_}_ct')};\n"
        f"        float {id_}_fill = 0.0;\n"
        + _circle_fill(id_, mode, uv, t, edge, fmt_float(animate))
        + f"        {color} += {id_}_pc * {id_}_fill;\n"
        f"        {mask} += {id_}_fill;\n"
        f"    }}\n"
        f"    {color} = {color} / ({color} + vec3(1.0));\n"
        f"    {mask} = clamp({mask}, 0.0, 1.0);\n"
        f"    vec2 {id_}_uv = {uv};\n"
    )
    return GLSLResult(code, {'color': color, 'mask': mask, 'centers': nearest, 'uv': f"{id_}_uv"})


DEFINITIONS = [
    NodeDefinition(
        type='fbm', label='FBM Noise', category='Noise', generate=gen_fbm,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            scale=('float', 'Scale'),
            time_scale=('float', 'Time Scale'),
        ),
        outputs=sockets(value=('float', 'Value'), uv=('vec2', 'UV (pass-through)')),
        default_params={'octaves': 4, 'lacunarity': 2.0, 'gain': 0.5, 'scale': 1.0, 'time_scale': 0.0},
        glsl_function=(NOISE_HELPERS_GLSL, FBM_GLSL),
        description='Fractal Brownian motion over value noise',
    ),
    NodeDefinition(
        type='voronoi', label='Voronoi', category='Noise', generate=gen_voronoi,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            scale=('float', 'Scale'),
            jitter=('float', 'Jitter'),
            time_scale=('float', 'Anim Speed'),
        ),
        outputs=sockets(dist=('float', 'Distance'), uv=('vec2', 'UV (pass-through)')),
        default_params={'scale': 5.0, 'jitter': 1.0, 'time_scale': 0.0},
        glsl_function=(NOISE_HELPERS_GLSL, VORONOI_GLSL),
        description='Cellular noise, distance to the nearest feature point',
    ),
    NodeDefinition(
        type='domainWarp', label='Domain Warp', category='Noise', generate=gen_domain_warp,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            strength=('float', 'Strength'),
            scale=('float', 'Scale'),
            time_scale=('float', 'Anim Speed'),
        ),
        outputs=sockets(uv=('vec2', 'Warped UV'), offset=('vec2', 'Warp Offset')),
        default_params={
            'strength': 0.5, 'scale': 1.0, 'octaves': 3,
            'lacunarity': 2.0, 'gain': 0.5, 'time_scale': 0.0,
        },
        glsl_function=(NOISE_HELPERS_GLSL, DOMAIN_WARP_GLSL),
        description='Offset UV by FBM noise',
    ),
    NodeDefinition(
        type='flowField', label='Flow Field', category='Presets', generate=gen_flow_field,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time')),
        outputs=sockets(
            color=('vec3', 'Color'),
            density=('float', 'Density'),
            uv=('vec2', 'UV (pass-through)'),
        ),
        default_params={
            'curves': 60,
            'steps': 24,
            'step_size': 0.04,
            'noise_scale': 1.8,
            'speed': 0.15,
            'line_width': 0.006,
            'line_softness': 1.5,
            'field_mode': 'perlin',
            'quant_steps': 10,
            'palette_offset': 0.0,
            **{key: list(value) for key, value in _PALETTE_DEFAULTS.items()},
        },
        glsl_function=(NOISE_HELPERS_GLSL, FLOW_FIELD_GLSL),
        description='Curves marched through a noise angle field: perlin, curl or quantized',
    ),
    NodeDefinition(
        type='circlePack', label='Circle Pack', category='Presets', generate=gen_circle_pack,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time')),
        outputs=sockets(
            color=('vec3', 'Color'),
            mask=('float', 'Mask'),
            centers=('vec2', 'Nearest Centre'),
            uv=('vec2', 'UV (pass-through)'),
        ),
        default_params={
            'circles': 80,
            'min_radius': 0.03,
            'max_radius': 0.15,
            'padding': 0.01,
            'circle_mode': 'gradient',
            'edge_softness': 1.0,
            'animate': 0.0,
            'palette_offset': 0.0,
            **{key: list(value) for key, value in _PALETTE_DEFAULTS.items()},
        },
        glsl_function=NOISE_HELPERS_GLSL,
        description='Hash-placed circles with overlap rejection: flat, gradient, ring or noise fill',
    ),
]
