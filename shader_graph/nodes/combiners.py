# Combiner Node Generators
# Handles: smoothMin, min, sdfMax, sdfSubtract, smoothMax, smoothSubtract,
#          blend, mask, addColor, screenBlend, glowLayer, sdfOutline, sdfColorize

from ..codegen.shader_lib import SMAX_GLSL, SMIN_GLSL, SSUBTRACT_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import param_lit, resolved, var_name


# ============ SDF combiners ============

def _smooth(func, default_k):
    def generate(node, inputs):
        out = var_name(node, 'result')
        a = resolved(inputs, 'a', '0.0')
        b = resolved(inputs, 'b', '0.0')
        k = resolved(inputs, 'smoothness', param_lit(node, 'smoothness', default_k))
        return GLSLResult(f"    float {out} = {func}({a}, {b}, {k});\n", {'result': out})
    generate.__name__ = f"gen_{func}"
    return generate


gen_smooth_min = _smooth('smin', 0.5)
gen_smooth_max = _smooth('smax', 0.3)
gen_smooth_subtract = _smooth('ssubtract', 0.3)


def gen_min(node, inputs):
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', '0.0'), resolved(inputs, 'b', '0.0')
    return GLSLResult(f"    float {out} = min({a}, {b});\n", {'result': out})


def gen_sdf_max(node, inputs):
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', '0.0'), resolved(inputs, 'b', '0.0')
    return GLSLResult(f"    float {out} = max({a}, {b});\n", {'result': out})


def gen_sdf_subtract(node, inputs):
    """max(a, -b): cut b out of a"""
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', '0.0'), resolved(inputs, 'b', '0.0')
    return GLSLResult(f"    float {out} = max({a}, -({b}));\n", {'result': out})


# ============ Color combiners ============

def gen_blend(node, inputs):
    out = var_name(node, 'result')
    a = resolved(inputs, 'a', 'vec3(0.0)')
    b = resolved(inputs, 'b', 'vec3(1.0)')
    t = resolved(inputs, 'factor', param_lit(node, 'factor', 0.5))
    return GLSLResult(f"    vec3 {out} = mix({a}, {b}, clamp({t}, 0.0, 1.0));\n", {'result': out})


def gen_mask(node, inputs):
    """Negative mask values are inside and show A."""
    out, mf = var_name(node, 'result'), var_name(node, 'mf')
    a = resolved(inputs, 'a', 'vec3(1.0)')
    b = resolved(inputs, 'b', 'vec3(0.0)')
    m = resolved(inputs, 'mask', '0.0')
    t = resolved(inputs, 'threshold', param_lit(node, 'threshold', 0.0))
    e = resolved(inputs, 'edge', param_lit(node, 'edge', 0.02))
    code = (
        f"    float {mf} = 1.0 - smoothstep({t} - {e}, {t} + {e}, {m});\n"
        f"    vec3 {out} = mix({b}, {a}, {mf});\n"
    )
    return GLSLResult(code, {'result': out})


def gen_add_color(node, inputs):
    out = var_name(node, 'result')
    a = resolved(inputs, 'a', 'vec3(0.0)')
    b = resolved(inputs, 'b', 'vec3(0.0)')
    s = resolved(inputs, 'scale', param_lit(node, 'scale', 1.0))
    return GLSLResult(f"    vec3 {out} = {a} + {b} * {s};\n", {'result': out})


def gen_screen_blend(node, inputs):
    out = var_name(node, 'result')
    a = resolved(inputs, 'a', 'vec3(0.0)')
    b = resolved(inputs, 'b', 'vec3(0.0)')
    return GLSLResult(f"    vec3 {out} = 1.0 - (1.0 - {a}) * (1.0 - {b});\n", {'result': out})


def gen_glow_layer(node, inputs):
    """color * pow(intensity / |d|, power)"""
    out, g = var_name(node, 'result'), var_name(node, 'g')
    d = resolved(inputs, 'd', '1.0')
    color = resolved(inputs, 'color', 'vec3(1.0)')
    i = resolved(inputs, 'intensity', param_lit(node, 'intensity', 0.01))
    p = resolved(inputs, 'power', param_lit(node, 'power', 1.0))
    code = (
        f"    float {g} = pow({i} / max(abs({d}), 0.0001), {p});\n"
        f"    vec3 {out} = {color} * {g};\n"
    )
    return GLSLResult(code, {'result': out})


def gen_sdf_outline(node, inputs):
    nid = node.id
    d = resolved(inputs, 'd', '1.0')
    fill = resolved(inputs, 'fillColor', 'vec3(1.0)')
    stroke = resolved(inputs, 'strokeColor', 'vec3(0.0)')
    sw = resolved(inputs, 'strokeWidth', param_lit(node, 'strokeWidth', 0.02))
    aa = resolved(inputs, 'antialias', param_lit(node, 'antialias', 0.005))
    code = (
        f"    float {nid}_fill   = 1.0 - smoothstep(-{aa}, {aa}, {d});\n"
        f"    float {nid}_stroke = (1.0 - smoothstep(-{aa}, {aa}, abs({d}) - {sw})) * (1.0 - {nid}_fill);\n"
        f"    vec3  {nid}_result = mix({fill}, {stroke}, {nid}_stroke / max({nid}_fill + {nid}_stroke, 0.001));\n"
        f"    float {nid}_alpha  = clamp({nid}_fill + {nid}_stroke, 0.0, 1.0);\n"
    )
    return GLSLResult(code, {'result': f"{nid}_result", 'alpha': f"{nid}_alpha"})


def gen_sdf_colorize(node, inputs):
    out, t = var_name(node, 'result'), var_name(node, 't')
    d = resolved(inputs, 'd', '0.0')
    inside = resolved(inputs, 'inside', 'vec3(1.0)')
    outside = resolved(inputs, 'outside', 'vec3(0.0)')
    e = resolved(inputs, 'edge', param_lit(node, 'edge', 0.01))
    code = (
        f"    float {t} = smoothstep(-{e}, {e}, {d});\n"
        f"    vec3 {out} = mix({inside}, {outside}, {t});\n"
    )
    return GLSLResult(code, {'result': out})


_FLOAT_RESULT = sockets(result=('float', 'Result'))
_PAIR = sockets(a=('float', 'A'), b=('float', 'B'))
_SMOOTH_PAIR = sockets(a=('float', 'A'), b=('float', 'B'), smoothness=('float', 'Smoothness'))
_CUT_PAIR = sockets(a=('float', 'Shape'), b=('float', 'Cutter'))

DEFINITIONS = [
    NodeDefinition(
        type='smoothMin', label='Smooth Min', category='Combiners', generate=gen_smooth_min,
        inputs=_SMOOTH_PAIR, outputs=_FLOAT_RESULT,
        default_params={'smoothness': 0.5},
        glsl_function=SMIN_GLSL,
        description='Smooth union of two SDFs',
    ),
    NodeDefinition(
        type='min', label='Min (Union)', category='Combiners', generate=gen_min,
        inputs=_PAIR, outputs=_FLOAT_RESULT,
        description='SDF union',
    ),
    NodeDefinition(
        type='sdfMax', label='Max (Intersect)', category='Combiners', generate=gen_sdf_max,
        inputs=_PAIR, outputs=_FLOAT_RESULT,
        description='SDF intersection',
    ),
    NodeDefinition(
        type='sdfSubtract', label='Subtract (Cut)', category='Combiners', generate=gen_sdf_subtract,
        inputs=_CUT_PAIR, outputs=_FLOAT_RESULT,
        description='SDF subtraction, max(A, -B)',
    ),
    NodeDefinition(
        type='smoothMax', label='Smooth Max', category='Combiners', generate=gen_smooth_max,
        inputs=_SMOOTH_PAIR, outputs=_FLOAT_RESULT,
        default_params={'smoothness': 0.3},
        glsl_function=SMAX_GLSL,
        description='Smooth intersection of two SDFs',
    ),
    NodeDefinition(
        type='smoothSubtract', label='Smooth Subtract', category='Combiners', generate=gen_smooth_subtract,
        inputs=sockets(a=('float', 'Shape'), b=('float', 'Cutter'), smoothness=('float', 'Smoothness')),
        outputs=_FLOAT_RESULT,
        default_params={'smoothness': 0.3},
        glsl_function=SSUBTRACT_GLSL,
        description='Smooth SDF subtraction',
    ),
    NodeDefinition(
        type='blend', label='Blend', category='Combiners', generate=gen_blend,
        inputs=sockets(a=('vec3', 'A'), b=('vec3', 'B'), factor=('float', 'Factor')),
        outputs=sockets(result=('vec3', 'Result')),
        default_params={'factor': 0.5},
        description='Mix two colors by a factor',
    ),
    NodeDefinition(
        type='mask', label='Mask', category='Combiners', generate=gen_mask,
        inputs=sockets(
            a=('vec3', 'Inside'),
            b=('vec3', 'Outside'),
            mask=('float', 'Mask / SDF'),
            threshold=('float', 'Threshold'),
            edge=('float', 'Edge Width'),
        ),
        outputs=sockets(result=('vec3', 'Result')),
        default_params={'threshold': 0.0, 'edge': 0.02},
        description='Cut between two colors with a float mask',
    ),
    NodeDefinition(
        type='addColor', label='Add Colors', category='Combiners', generate=gen_add_color,
        inputs=sockets(a=('vec3', 'A'), b=('vec3', 'B'), scale=('float', 'Scale')),
        outputs=sockets(result=('vec3', 'Result')),
        default_params={'scale': 1.0},
        description='Additive blend, A + B * Scale',
    ),
    NodeDefinition(
        type='screenBlend', label='Screen Blend', category='Combiners', generate=gen_screen_blend,
        inputs=sockets(a=('vec3', 'A'), b=('vec3', 'B')),
        outputs=sockets(result=('vec3', 'Result')),
        description='Screen blend, 1-(1-A)*(1-B)',
    ),
    NodeDefinition(
        type='glowLayer', label='Glow Layer', category='Combiners', generate=gen_glow_layer,
        inputs=sockets(
            d=('float', 'SDF'),
            color=('vec3', 'Color'),
            intensity=('float', 'Intensity'),
            power=('float', 'Power'),
        ),
        outputs=sockets(result=('vec3', 'Glow')),
        default_params={'intensity': 0.01, 'power': 1.0},
        description='Glow halo, intensity / |d|',
    ),
    NodeDefinition(
        type='sdfOutline', label='SDF Outline', category='Combiners', generate=gen_sdf_outline,
        inputs=sockets(
            d=('float', 'SDF'),
            fillColor=('vec3', 'Fill'),
            strokeColor=('vec3', 'Stroke'),
            strokeWidth=('float', 'Stroke Width'),
            antialias=('float', 'AA Width'),
        ),
        outputs=sockets(result=('vec3', 'Color'), alpha=('float', 'Alpha')),
        default_params={'strokeWidth': 0.02, 'antialias': 0.005},
        description='Filled shape with an outline band',
    ),
    NodeDefinition(
        type='sdfColorize', label='SDF Colorize', category='Combiners', generate=gen_sdf_colorize,
        inputs=sockets(
            d=('float', 'SDF'),
            inside=('vec3', 'Inside Color'),
            outside=('vec3', 'Outside Color'),
            edge=('float', 'Edge Softness'),
        ),
        outputs=sockets(result=('vec3', 'Color')),
        default_params={'edge': 0.01},
        description='Visualize an SDF with inside and outside colors',
    ),
]
