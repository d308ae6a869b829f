# Physics Node Generators
# Handles: chladni, electronOrbital
#
# Both draw thin features of a scalar field and anti-alias them with
# fwidth(), so they need derivative support from the host context.

from ..codegen.shader_lib import CHLADNI_GLSL, LAGUERRE_GLSL, ORBITAL_PSI_GLSL, REAL_SH_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import fmt_float, param_float, param_lit, param_str, resolved


def _hash(expr: str, k1: str, k2: str) -> str:
    return f"fract(sin(dot({expr}, vec2({k1}, {k2}))) * 43758.5453)"


def _chladni_turbulence(id_, t, amount, speed, mode):
    """Hash jitter on the plate coordinate: smooth drift, curl swirl or stuttering jumps."""
    p = f"{id_}_p"
    if mode == 'jump':
        return (
            f"    float {id_}_qt = floor({t} * {speed}) / {speed};\n"
            f"    float {id_}_nx = {_hash(f'{p} * 4.0 + {id_}_qt', '127.1', '311.7')};\n"
            f"    float {id_}_ny = {_hash(f'{p} * 4.0 + {id_}_qt + vec2(5.2, 1.3)', '269.5', '183.3')};\n"
            f"    {p} += (vec2({id_}_nx, {id_}_ny) * 2.0 - 1.0) * {amount};\n"
        )
    code = (
        f"    float {id_}_nx = {_hash(f'{p} * 3.0 + {t} * {speed}', '127.1', '311.7')};\n"
        f"    float {id_}_ny = {_hash(f'{p} * 3.0 + {t} * {speed} + vec2(5.2, 1.3)', '269.5', '183.3')};\n"
    )
    if mode == 'swirl':
        return code + f"    {p} += vec2({id_}_ny, -{id_}_nx) * {amount};\n"
    return code + f"    {p} += (vec2({id_}_nx, {id_}_ny) * 2.0 - 1.0) * {amount};\n"


def gen_chladni(node, inputs):
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    m = resolved(inputs, 'm', param_lit(node, 'm', 3.0))
    n = resolved(inputs, 'n', param_lit(node, 'n', 4.0))
    scale = fmt_float(min(param_float(node, 'scale', 1.0), 1.5))
    turbulence = param_float(node, 'turbulence', 0.0)

    code = f"    vec2 {id_}_p = {uv} * {scale};\n"
    if turbulence > 0:
        code += _chladni_turbulence(id_, t, fmt_float(turbulence), param_lit(node, 'turb_speed', 0.5),
                                    param_str(node, 'noise_mode', 'smooth'))
    code += (
        f"    float {id_}_m = {m};\n"
        f"    float {id_}_n = {n};\n"
        f"    float {id_}_field = chladni({id_}_p, {id_}_m, {id_}_n);\n"
        f"    float {id_}_fw = fwidth({id_}_field);\n"
        f"    float {id_}_thresh = {id_}_fw * max({param_lit(node, 'aa', 1.0)}, 0.01);\n"
        f"    float {id_}_density = 1.0 - smoothstep(0.0, {id_}_thresh * {param_lit(node, 'line_width', 1.5)}, abs({id_}_field));\n"
        f"    vec3 {id_}_color = vec3({id_}_density * {param_lit(node, 'brightness', 1.0)});\n"
    )
    return GLSLResult(code, {
        'density': f"{id_}_density",
        'field': f"{id_}_field",
        'color': f"{id_}_color",
    })


def gen_electron_orbital(node, inputs):
    """
    |psi|^2 of a hydrogen-like orbital on the plane z = slice_z.

    Density is anti-aliased against its screen-space derivative, faded
    toward the edge with a noisy exponential and gamma-compressed; the
    color is tinted warm or cool by the sign of psi.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    a0 = param_float(node, 'a0', 0.05)
    if abs(a0) < 0.001:
        a0 = 0.001
    args = ', '.join((param_lit(node, 'n', 2.0), param_lit(node, 'l', 1.0),
                      param_lit(node, 'm_q', 0.0), fmt_float(a0)))
    gamma = fmt_float(max(param_float(node, 'gamma', 0.5), 0.05))
    aa = param_float(node, 'aa', 1.0)
    edge = param_float(node, 'edge_soft', 0.8)
    turbulence = param_float(node, 'turbulence', 0.0)
    density, dens_aa = f"{id_}_density", f"{id_}_densAA"

    code = (
        f"    vec2 {id_}_uv2 = {uv} * {param_lit(node, 'scale', 3.0)};\n"
        f"    vec3 {id_}_p = vec3({id_}_uv2.x, {id_}_uv2.y, {param_lit(node, 'slice_z', 0.0)});\n"
    )
    if turbulence > 0:
        speed = param_lit(node, 'turb_speed', 0.3)
        code += (
            f"    float {id_}_tx = {_hash(f'{id_}_p.xy * 2.0 + {t} * {speed}', '127.1', '311.7')};\n"
            f"    float {id_}_ty = {_hash(f'{id_}_p.xy * 2.0 + {t} * {speed} + vec2(3.7, 8.1)', '269.5', '183.3')};\n"
            f"    {id_}_p.xy += (vec2({id_}_tx, {id_}_ty) * 2.0 - 1.0) * {fmt_float(turbulence)};\n"
        )
    code += (
        f"    float {id_}_psi = orbitalPsi3({id_}_p, {args});\n"
        f"    float {density} = {id_}_psi * {id_}_psi;\n"
    )
    if aa > 0:
        code += (
            f"    float {id_}_fw = max(fwidth({density}), 1e-6);\n"
            f"    float {dens_aa} = {density} / ({density} + {id_}_fw * {fmt_float(aa)});\n"
        )
    else:
        code += f"    float {dens_aa} = {density};\n"
    if edge > 0:
        code += (
            f"    float {id_}_r = length({id_}_uv2);\n"
            f"    float {id_}_enoise = {_hash(f'{id_}_p.xy', '127.1', '311.7')};\n"
            f"    float {id_}_efade = exp(-{id_}_r * {fmt_float(edge)} * (1.0 + {id_}_enoise * 0.6));\n"
            f"    {dens_aa} *= {id_}_efade;\n"
        )
    code += (
        f"    float {id_}_vis = pow(clamp({dens_aa}, 0.0, 1.0), {gamma}) * {param_lit(node, 'brightness', 3.0)};\n"
        f"    {id_}_vis = {id_}_vis / ({id_}_vis + 0.5);\n"
        f"    float {id_}_sign = sign({id_}_psi);\n"
        f"    vec3 {id_}_tint = vec3(1.0 + {id_}_sign * 0.08, 1.0, 1.0 - {id_}_sign * 0.08);\n"
        f"    vec3 {id_}_color = {id_}_vis * {id_}_tint;\n"
    )
    return GLSLResult(code, {
        'density': density,
        'psi': f"{id_}_psi",
        'color': f"{id_}_color",
    })


DEFINITIONS = [
    NodeDefinition(
        type='chladni', label='Chladni Plate', category='Physics', generate=gen_chladni,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            m=('float', 'm'),
            n=('float', 'n'),
        ),
        outputs=sockets(
            density=('float', 'Density'),
            field=('float', 'Raw Field'),
            color=('vec3', 'Color'),
        ),
        default_params={
            'm': 3.0,
            'n': 4.0,
            'scale': 1.0,
            'line_width': 1.5,
            'aa': 1.0,
            'turbulence': 0.0,
            'turb_speed': 0.5,
            'noise_mode': 'smooth',
            'brightness': 1.0,
        },
        glsl_function=CHLADNI_GLSL,
        description='Chladni plate nodal lines for modes (m, n)',
    ),
    NodeDefinition(
        type='electronOrbital', label='Electron Orbital', category='Physics', generate=gen_electron_orbital,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time')),
        outputs=sockets(
            density=('float', 'Density |psi|^2'),
            psi=('float', 'Raw psi'),
            color=('vec3', 'Color'),
        ),
        default_params={
            'n': 2.0,
            'l': 1.0,
            'm_q': 0.0,
            'a0': 0.05,
            'scale': 3.0,
            'slice_z': 0.0,
            'brightness': 3.0,
            'gamma': 0.5,
            'aa': 1.0,
            'edge_soft': 0.8,
            'turbulence': 0.0,
            'turb_speed': 0.3,
        },
        glsl_function=(LAGUERRE_GLSL, REAL_SH_GLSL, ORBITAL_PSI_GLSL),
        description='Cross-section of a hydrogen-like orbital probability density',
    ),
]
