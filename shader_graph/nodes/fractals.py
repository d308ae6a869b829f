# Fractal Node Generators
# Handles: mandelbrot, ifs
#
# Both color through the shared cosine palette with a preset picked by
# index, so a graph mixing them with Palette nodes keeps one palette().

from ..codegen.shader_lib import COMPLEX_GLSL, IFS_HASH_GLSL, IFS_TRANSFORMS, PALETTE_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .color import preset_index, preset_vectors
from .helpers import fmt_float, param_float, param_int, param_lit, param_str, resolved


ORBIT_TRAPS = ('none', 'point', 'line', 'ring', 'cross')


def _complex_power(id_, power):
    """(z^k expression, derivative update k * z^(k-1) * dz) for integer k >= 2."""
    z, dz = f"{id_}_z", f"{id_}_dz"
    if power == 2:
        return f"cpow2({z})", f"cmul(2.0 * {z}, {dz})"
    if power == 3:
        return f"cpow3({z})", f"cmul(3.0 * cpow2({z}), {dz})"
    return (f"cpow_polar({z}, {power}.0)",
            f"cmul({power}.0 * cpow_polar({z}, {power - 1}.0), {dz})")


def _trap_update(id_, mode, tx, ty, tr):
    trap, z = f"{id_}_trap", f"{id_}_z"
    if mode == 'point':
        return f"        {trap} = min({trap}, length({z} - vec2({tx}, {ty})));\n"
    if mode == 'line':
        return f"        {trap} = min({trap}, abs({z}.y - {ty}));\n"
    if mode == 'ring':
        return f"        {trap} = min({trap}, abs(length({z} - vec2({tx}, {ty})) - {tr}));\n"
    if mode == 'cross':
        return f"        {trap} = min({trap}, min(abs({z}.x - {tx}), abs({z}.y - {ty})));\n"
    return ""


def gen_mandelbrot(node, inputs):
    """
    Generalized z^k + c escape-time fractal, Mandelbrot or Julia mode.

    Outputs a smooth iteration count, a distance estimate from the tracked
    derivative, the orbit trap minimum and a palette color (black inside).
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')

    julia = param_str(node, 'mode', 'mandelbrot') == 'julia'
    power = max(2, param_int(node, 'power', 2))
    max_iter = max(20, param_int(node, 'max_iter', 150))
    bailout = param_lit(node, 'bailout', 256.0)
    zoom_exp = param_float(node, 'zoom_exp', 0.0)
    zoom = f"pow(2.0, {fmt_float(zoom_exp)})" if zoom_exp > 0 else param_lit(node, 'zoom', 1.0)
    offset = f"vec2({param_lit(node, 'offset_x', 0.0)}, {param_lit(node, 'offset_y', 0.0)})"
    trap_mode = param_str(node, 'orbit_trap', 'none')
    if trap_mode not in ORBIT_TRAPS:
        trap_mode = 'none'
    cs = param_lit(node, 'color_scale', 0.3)
    co = param_lit(node, 'color_offset', 0.0)
    pa, pb, pc, pd = preset_vectors(preset_index(node.params.get('palette_preset'), 1))

    mapped = f"{uv} / {zoom} + {offset}"
    if julia:
        c0 = resolved(inputs, 'c_pos', f"vec2({param_lit(node, 'cx', -0.7269)}, {param_lit(node, 'cy', 0.1889)})")
        z0, dz0 = mapped, 'vec2(1.0, 0.0)'
    else:
        c0, z0, dz0 = mapped, 'vec2(0.0)', 'vec2(0.0)'

    zpow, dz_step = _complex_power(id_, power)
    trap_line = _trap_update(id_, trap_mode, param_lit(node, 'trap_x', 0.0),
                             param_lit(node, 'trap_y', 0.0), param_lit(node, 'trap_r', 0.5))
    n, lz2, ldz2 = f"{id_}_n", f"{id_}_lz2", f"{id_}_ldz2"
    color = f"{id_}_color"

    code = (
        f"    vec2 {id_}_c = {c0};\n"
        f"    vec2 {id_}_z = {z0};\n"
        f"    vec2 {id_}_dz = {dz0};\n"
        f"    float {n} = 0.0;\n"
        f"    float {id_}_trap = 1e20;\n"
        f"    float {id_}_B2 = {bailout} * {bailout};\n"
        f"    for (float {id_}_i = 0.0; {id_}_i < {max_iter}.0; {id_}_i++) {{\n"
        f"        {id_}_dz = {dz_step};\n"
        + ("" if julia else f"        {id_}_dz += vec2(1.0, 0.0);\n")
        + f"        {id_}_z = {zpow} + {id_}_c;\n"
        + trap_line
        + f"        if (dot({id_}_z, {id_}_z) > {id_}_B2) break;\n"
        f"        {n} += 1.0;\n"
        f"    }}\n"
        f"    float {id_}_iter;\n"
        f"    float {lz2} = dot({id_}_z, {id_}_z);\n"
        f"    if ({n} >= {max_iter}.0) {{\n"
        f"        {id_}_iter = {max_iter}.0;\n"
        f"    }} else {{\n"
        f"        {id_}_iter = {n} - log(log({lz2}) * 0.5) / log({power}.0);\n"
        f"    }}\n"
        f"    float {id_}_dist = 0.0;\n"
        f"    float {ldz2} = dot({id_}_dz, {id_}_dz);\n"
        f"    if ({ldz2} > 0.0 && {lz2} > 0.0) {{\n"
        f"        {id_}_dist = sqrt({lz2} / {ldz2}) * 0.5 * log({lz2});\n"
        f"    }}\n"
        f"    vec3 {color};\n"
        f"    if ({n} >= {max_iter}.0) {{\n"
        f"        {color} = vec3(0.0);\n"
        f"    }} else {{\n"
        f"        {color} = palette({id_}_iter * {cs} + {co}, {pa}, {pb}, {pc}, {pd});\n"
        f"    }}\n"
    )
    if trap_mode != 'none':
        code += (
            f"    float {id_}_trapNorm = clamp({id_}_trap * 2.0, 0.0, 1.0);\n"
            f"    {color} = mix({color}, palette({id_}_trap * {cs}, {pa}, {pb}, {pc}, {pd}), 1.0 - {id_}_trapNorm);\n"
        )
    return GLSLResult(code, {
        'color': color,
        'iter': f"{id_}_iter",
        'dist': f"{id_}_dist",
        'trap': f"{id_}_trap",
    })


# ============ IFS ============

# Per-preset mapping from UV into the attractor's native frame
_IFS_FRAMES = {
    'fern': "{uv} * {s} * 5.0 + vec2({ox}, {oy} + 5.0)",
    'sierpinski': "{uv} * {s} * 0.5 + vec2(0.5 + {ox}, 0.5 + {oy})",
    'dragon': "{uv} * {s} + vec2(0.5 + {ox}, 0.25 + {oy})",
    'koch': "{uv} * {s} * 0.5 + vec2(0.5 + {ox}, 0.15 + {oy})",
}

_IFS_WARMUP = 20


def _ifs_preset(node) -> str:
    preset = param_str(node, 'preset', 'fern')
    return preset if preset in IFS_TRANSFORMS else 'fern'


def ifs_helpers(node):
    """Only the chosen preset's transform is emitted."""
    return (IFS_TRANSFORMS[_ifs_preset(node)][1],)


def gen_ifs(node, inputs):
    """
    Chaos game: every pixel follows the same time-seeded random walk and
    glows where the walk passes close to it.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    preset = _ifs_preset(node)
    fn = IFS_TRANSFORMS[preset][0]
    iters = max(10, param_int(node, 'iterations', 40))
    glow = param_lit(node, 'glow', 0.004)
    frame = _IFS_FRAMES[preset].format(
        uv=uv, s=param_lit(node, 'scale', 1.0),
        ox=param_lit(node, 'offset_x', 0.0), oy=param_lit(node, 'offset_y', -0.5),
    )
    anim = param_lit(node, 'anim_speed', 0.0)
    cs = param_lit(node, 'color_scale', 1.0)
    co = param_lit(node, 'color_offset', 0.0)
    pa, pb, pc, pd = preset_vectors(preset_index(node.params.get('palette_preset'), 7))
    g = f"{id_}_glow"

    code = (
        f"    vec2 {id_}_uv = {frame};\n"
        f"    float {id_}_seed = ifsHash({t} * {anim} + 0.5);\n"
        f"    vec2 {id_}_p = vec2(0.0);\n"
        f"    for (float {id_}_i = 0.0; {id_}_i < {_IFS_WARMUP}.0; {id_}_i++) {{\n"
        f"        float {id_}_r = fract({id_}_seed + {id_}_i * 0.61803);\n"
        f"        {id_}_p = {fn}({id_}_p, {id_}_r);\n"
        f"    }}\n"
        f"    float {g} = 0.0;\n"
        f"    for (float {id_}_i = {_IFS_WARMUP}.0; {id_}_i < {iters + _IFS_WARMUP}.0; {id_}_i++) {{\n"
        f"        float {id_}_r = fract({id_}_seed + {id_}_i * 0.61803);\n"
        f"        {id_}_p = {fn}({id_}_p, {id_}_r);\n"
        f"        {g} += {glow} / max(length({id_}_uv - {id_}_p), 0.00001);\n"
        f"    }}\n"
        f"    {g} = tanh({g});\n"
        f"    vec3 {id_}_color = palette({g} * {cs} + {co}, {pa}, {pb}, {pc}, {pd}) * {g};\n"
    )
    return GLSLResult(code, {'color': f"{id_}_color", 'glow': g})


DEFINITIONS = [
    NodeDefinition(
        type='mandelbrot', label='Mandelbrot / Julia', category='Presets', generate=gen_mandelbrot,
        inputs=sockets(
            uv=('vec2', 'UV'),
            c_pos=('vec2', 'c (Julia)'),
            time=('float', 'Time'),
        ),
        outputs=sockets(
            color=('vec3', 'Color'),
            iter=('float', 'Smooth Iter'),
            dist=('float', 'Distance (SDF)'),
            trap=('float', 'Orbit Trap'),
        ),
        default_params={
            'mode': 'mandelbrot',
            'power': 2,
            'max_iter': 150,
            'bailout': 256.0,
            'cx': -0.7269,
            'cy': 0.1889,
            'zoom': 1.0,
            'zoom_exp': 0.0,
            'offset_x': 0.0,
            'offset_y': 0.0,
            'orbit_trap': 'none',
            'trap_x': 0.0,
            'trap_y': 0.0,
            'trap_r': 0.5,
            'palette_preset': '1',
            'color_scale': 0.3,
            'color_offset': 0.0,
        },
        glsl_function=(COMPLEX_GLSL, PALETTE_GLSL),
        description='z^k + c escape-time fractal with smooth coloring and orbit traps',
    ),
    NodeDefinition(
        type='ifs', label='IFS Fractal', category='Presets', generate=gen_ifs,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time')),
        outputs=sockets(color=('vec3', 'Color'), glow=('float', 'Glow (raw)')),
        default_params={
            'preset': 'fern',
            'iterations': 60,
            'glow': 0.008,
            'scale': 1.0,
            'offset_x': 0.0,
            'offset_y': -0.5,
            'palette_preset': '7',
            'color_scale': 1.0,
            'color_offset': 0.0,
            'anim_speed': 0.0,
        },
        glsl_function=(IFS_HASH_GLSL, PALETTE_GLSL),
        instance_helpers=ifs_helpers,
        description='Iterated function system via the chaos game: fern, Sierpinski, dragon, Koch',
    ),
]
