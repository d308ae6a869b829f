# UV Space Node Generators
# Handles: polarSpace, logPolarSpace, hyperbolicSpace, inversionSpace,
#          mobiusSpace, swirlSpace, kaleidoSpace, sphericalSpace,
#          rippleSpace, infiniteRepeatSpace
#
# Every node takes a vec2 on `input` and returns the warped coordinate on
# `output`; anything wired downstream samples the new geometry.

from ..codegen.shader_lib import HYPERBOLIC_GLSL, MOBIUS_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import input_or_param, resolved, var_name


def _input(inputs):
    return resolved(inputs, 'input', 'vec2(0.0)')


def _angle01(id_, p):
    """Polar angle remapped to [0, 1) plus its seam-free (cos, sin) encoding."""
    return (
        f"    float {id_}_angle = fract(atan({p}.y, {p}.x) / 6.28318 + 0.5);\n"
        f"    vec2 {id_}_seamless = vec2(cos({id_}_angle * 6.28318), sin({id_}_angle * 6.28318)) * 0.5 + 0.5;\n"
    )


def gen_polar_space(node, inputs):
    id_ = node.id
    p = _input(inputs)
    twist = input_or_param(node, inputs, 'twist', 0.0)
    rscale = input_or_param(node, inputs, 'radialScale', 1.0)
    code = (
        f"    float {id_}_radius = length({p}) * {rscale};\n"
        + _angle01(id_, p)
        + f"    vec2 {id_}_output = vec2({id_}_angle + {id_}_radius * {twist}, {id_}_radius);\n"
    )
    return GLSLResult(code, {
        'output': f"{id_}_output",
        'seamless': f"{id_}_seamless",
        'angle': f"{id_}_angle",
        'radius': f"{id_}_radius",
    })


def gen_log_polar_space(node, inputs):
    id_ = node.id
    p = _input(inputs)
    scale = input_or_param(node, inputs, 'scale', 1.0)
    code = (
        f"    float {id_}_r = length({p});\n"
        + _angle01(id_, p)
        + f"    vec2 {id_}_output = vec2({id_}_angle, log(max({id_}_r, 0.00001)) * {scale});\n"
    )
    return GLSLResult(code, {
        'output': f"{id_}_output",
        'seamless': f"{id_}_seamless",
        'angle': f"{id_}_angle",
    })


def gen_hyperbolic_space(node, inputs):
    out = var_name(node, 'output')
    k = input_or_param(node, inputs, 'curvature', 0.7)
    return GLSLResult(f"    vec2 {out} = hyperbolicSpace({_input(inputs)}, {k});\n", {'output': out})


def gen_inversion_space(node, inputs):
    id_, out = node.id, var_name(node, 'output')
    p = _input(inputs)
    radius = input_or_param(node, inputs, 'radius', 1.0)
    code = (
        f"    float {id_}_d2 = dot({p}, {p});\n"
        f"    vec2 {out} = {id_}_d2 > 0.00001 ? {p} * ({radius} * {radius} / {id_}_d2) : {p};\n"
    )
    return GLSLResult(code, {'output': out})


def gen_mobius_space(node, inputs):
    out = var_name(node, 'output')
    px = input_or_param(node, inputs, 'poleX', 0.5)
    py = input_or_param(node, inputs, 'poleY', 0.0)
    ang = input_or_param(node, inputs, 'angle', 0.0)
    code = f"    vec2 {out} = mobiusSpace({_input(inputs)}, vec2({px}, {py}), {ang});\n"
    return GLSLResult(code, {'output': out})


def gen_swirl_space(node, inputs):
    """Rotation angle decays exponentially with radius."""
    id_, out = node.id, var_name(node, 'output')
    p = _input(inputs)
    strength = input_or_param(node, inputs, 'strength', 2.0)
    falloff = input_or_param(node, inputs, 'falloff', 1.0)
    code = (
        f"    float {id_}_r = length({p});\n"
        f"    float {id_}_sa = {strength} * exp(-{id_}_r * {falloff});\n"
        f"    float {id_}_sc = cos({id_}_sa);\n"
        f"    float {id_}_ss = sin({id_}_sa);\n"
        f"    vec2 {out} = vec2({p}.x * {id_}_sc - {p}.y * {id_}_ss,\n"
        f"                      {p}.x * {id_}_ss + {p}.y * {id_}_sc);\n"
    )
    return GLSLResult(code, {'output': out})


def gen_kaleido_space(node, inputs):
    id_, out = node.id, var_name(node, 'output')
    p = _input(inputs)
    segs = input_or_param(node, inputs, 'segments', 6.0)
    rot = input_or_param(node, inputs, 'rotate', 0.0)
    code = (
        f"    float {id_}_a = atan({p}.y, {p}.x) + {rot};\n"
        f"    float {id_}_s = 6.28318 / {segs};\n"
        f"    {id_}_a = mod({id_}_a, {id_}_s);\n"
        f"    if ({id_}_a > {id_}_s * 0.5) {id_}_a = {id_}_s - {id_}_a;\n"
        f"    vec2 {out} = vec2(cos({id_}_a), sin({id_}_a)) * length({p});\n"
    )
    return GLSLResult(code, {'output': out})


def gen_spherical_space(node, inputs):
    """Barrel (positive strength) or pincushion (negative) through atan."""
    id_, out = node.id, var_name(node, 'output')
    p = _input(inputs)
    k = input_or_param(node, inputs, 'strength', 0.5)
    code = (
        f"    float {id_}_r = length({p});\n"
        f"    float {id_}_k = {k};\n"
        f"    float {id_}_f = ({id_}_r > 0.0001 && abs({id_}_k) > 0.0001)\n"
        f"        ? atan({id_}_r * {id_}_k * 1.5708) / ({id_}_r * {id_}_k * 1.5708)\n"
        f"        : 1.0;\n"
        f"    vec2 {out} = {p} * {id_}_f;\n"
    )
    return GLSLResult(code, {'output': out})


def gen_ripple_space(node, inputs):
    out = var_name(node, 'output')
    p = _input(inputs)
    fx = input_or_param(node, inputs, 'freqX', 5.0)
    fy = input_or_param(node, inputs, 'freqY', 5.0)
    ax = input_or_param(node, inputs, 'ampX', 0.1)
    ay = input_or_param(node, inputs, 'ampY', 0.1)
    t = resolved(inputs, 'time', '0.0')
    code = (
        f"    vec2 {out} = {p} + vec2(\n"
        f"        sin({p}.y * {fy} + {t}) * {ax},\n"
        f"        sin({p}.x * {fx} + {t}) * {ay});\n"
    )
    return GLSLResult(code, {'output': out})


def gen_infinite_repeat_space(node, inputs):
    out, cell_id = var_name(node, 'output'), var_name(node, 'cellID')
    p = _input(inputs)
    cell = (f"vec2({input_or_param(node, inputs, 'cellX', 1.0)}, "
            f"{input_or_param(node, inputs, 'cellY', 1.0)})")
    code = (
        f"    vec2 {cell_id} = floor({p} / {cell});\n"
        f"    vec2 {out} = mod({p}, {cell}) - {cell} * 0.5;\n"
    )
    return GLSLResult(code, {'output': out, 'cellID': cell_id})


def _space(type_, label, generate, params, description, outputs=None, extra_inputs=None, helper=""):
    """Definition with a vec2 `input` plus one float socket per param."""
    entries = {'input': ('vec2', 'UV')}
    for key, (label_, _) in params.items():
        entries[key] = ('float', label_)
    if extra_inputs:
        entries.update(extra_inputs)
    return NodeDefinition(
        type=type_, label=label, category='Spaces', generate=generate,
        inputs=sockets(**entries),
        outputs=sockets(**(outputs or {'output': ('vec2', 'Output')})),
        default_params={key: default for key, (_, default) in params.items()},
        glsl_function=helper,
        description=description,
    )


DEFINITIONS = [
    _space('polarSpace', 'Polar Space', gen_polar_space,
           {'twist': ('Twist', 0.0), 'radialScale': ('Radial Scale', 1.0)},
           'UV to (angle, radius); twist spins the angle with radius',
           outputs={
               'output': ('vec2', 'Polar UV'),
               'seamless': ('vec2', 'Seamless'),
               'angle': ('float', 'Angle'),
               'radius': ('float', 'Radius'),
           }),
    _space('logPolarSpace', 'Log-Polar Space', gen_log_polar_space,
           {'scale': ('Scale', 1.0)},
           'Log-polar coordinates, spirals become straight lines',
           outputs={
               'output': ('vec2', 'Log-Polar UV'),
               'seamless': ('vec2', 'Seamless'),
               'angle': ('float', 'Angle'),
           }),
    _space('hyperbolicSpace', 'Hyperbolic Space', gen_hyperbolic_space,
           {'curvature': ('Curvature', 0.7)},
           'Poincare disk style compression toward the boundary',
           helper=HYPERBOLIC_GLSL),
    _space('inversionSpace', 'Circle Inversion', gen_inversion_space,
           {'radius': ('Radius', 1.0)},
           'Inversion through a circle: near maps far and far maps near'),
    _space('mobiusSpace', 'Mobius Transform', gen_mobius_space,
           {'poleX': ('Pole X', 0.5), 'poleY': ('Pole Y', 0.0), 'angle': ('Angle', 0.0)},
           'Conformal Mobius map on the complex plane',
           helper=MOBIUS_GLSL),
    _space('swirlSpace', 'Swirl / Vortex', gen_swirl_space,
           {'strength': ('Strength', 2.0), 'falloff': ('Falloff', 1.0)},
           'Rotation that fades with distance from the center'),
    _space('kaleidoSpace', 'Kaleidoscope', gen_kaleido_space,
           {'segments': ('Segments', 6.0), 'rotate': ('Rotate', 0.0)},
           'Fold space into mirrored wedge sectors'),
    _space('sphericalSpace', 'Spherical / Fisheye', gen_spherical_space,
           {'strength': ('Strength', 0.5)},
           'Project through a virtual sphere, barrel or pincushion'),
    _space('rippleSpace', 'Ripple / Wave', gen_ripple_space,
           {'freqX': ('Freq X', 5.0), 'freqY': ('Freq Y', 5.0), 'ampX': ('Amp X', 0.1), 'ampY': ('Amp Y', 0.1)},
           'Sine displacement along both axes',
           extra_inputs={'time': ('float', 'Time')}),
    _space('infiniteRepeatSpace', 'Infinite Repeat', gen_infinite_repeat_space,
           {'cellX': ('Cell W', 1.0), 'cellY': ('Cell H', 1.0)},
           'Tile space into centered cells, with the integer cell id',
           outputs={'output': ('vec2', 'Cell UV'), 'cellID': ('vec2', 'Cell ID')}),
]
