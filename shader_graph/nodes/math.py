# Math Node Generators
# Handles: scalar arithmetic, trig, rounding, vec2/vec3 construction and
#          component access
#
# Most math nodes are one statement with fixed fallbacks, so they are built
# from small generator factories instead of one function each.

from .base import GLSLResult, NodeDefinition, sockets
from .helpers import param_lit, resolved, var_name


def _unary(out_key, out_type, template, fallback='0.0', in_key='input'):
    """One-input node; `template` formats with {x}."""
    def generate(node, inputs):
        out = var_name(node, out_key)
        x = resolved(inputs, in_key, fallback)
        return GLSLResult(f"    {out_type} {out} = {template.format(x=x)};\n", {out_key: out})
    return generate


def _binary(template, a_fallback='0.0', b_param=None, b_default=0.0, b_fallback='0.0'):
    """float a, b -> result. An unwired b reads `b_param` when given."""
    def generate(node, inputs):
        out = var_name(node, 'result')
        a = resolved(inputs, 'a', a_fallback)
        b_alt = param_lit(node, b_param, b_default) if b_param else b_fallback
        b = resolved(inputs, 'b', b_alt)
        return GLSLResult(f"    float {out} = {template.format(a=a, b=b)};\n", {'result': out})
    return generate


def _wave(func):
    def generate(node, inputs):
        """amp * func(input * freq)"""
        out = var_name(node, 'output')
        x = resolved(inputs, 'input', '0.0')
        freq = resolved(inputs, 'freq', param_lit(node, 'freq', 1.0))
        amp = resolved(inputs, 'amp', param_lit(node, 'amp', 1.0))
        return GLSLResult(f"    float {out} = {amp} * {func}({x} * {freq});\n", {'output': out})
    return generate


def gen_exp(node, inputs):
    out = var_name(node, 'output')
    s = resolved(inputs, 'scale', param_lit(node, 'scale', 1.0))
    return GLSLResult(f"    float {out} = exp({resolved(inputs, 'input', '0.0')} * {s});\n", {'output': out})


def gen_pow(node, inputs):
    out = var_name(node, 'result')
    base = resolved(inputs, 'base', '1.0')
    e = resolved(inputs, 'exponent', param_lit(node, 'exponent', 1.2))
    return GLSLResult(f"    float {out} = pow(max({base}, 0.0), {e});\n", {'result': out})


def gen_length(node, inputs):
    out = var_name(node, 'output')
    s = resolved(inputs, 'scale', param_lit(node, 'scale', 1.0))
    v = resolved(inputs, 'input', 'vec2(0.0)')
    return GLSLResult(f"    float {out} = length({v}) * {s};\n", {'output': out})


def gen_multiply_vec3(node, inputs):
    out = var_name(node, 'result')
    s = resolved(inputs, 'scale', param_lit(node, 'scale', 1.0))
    color = resolved(inputs, 'color', 'vec3(1.0)')
    return GLSLResult(f"    vec3 {out} = {color} * {s};\n", {'result': out})


def gen_add_vec3(node, inputs):
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', 'vec3(0.0)'), resolved(inputs, 'b', 'vec3(0.0)')
    return GLSLResult(f"    vec3 {out} = {a} + {b};\n", {'result': out})


def gen_clamp(node, inputs):
    out = var_name(node, 'result')
    lo = resolved(inputs, 'lo', param_lit(node, 'lo', 0.0))
    hi = resolved(inputs, 'hi', param_lit(node, 'hi', 1.0))
    x = resolved(inputs, 'input', '0.0')
    return GLSLResult(f"    float {out} = clamp({x}, {lo}, {hi});\n", {'result': out})


def gen_mix(node, inputs):
    out = var_name(node, 'result')
    t = resolved(inputs, 't', param_lit(node, 't', 0.5))
    a, b = resolved(inputs, 'a', '0.0'), resolved(inputs, 'b', '1.0')
    return GLSLResult(f"    float {out} = mix({a}, {b}, {t});\n", {'result': out})


def gen_mod(node, inputs):
    out = var_name(node, 'output')
    period = resolved(inputs, 'period', param_lit(node, 'period', 1.0))
    x = resolved(inputs, 'input', '0.0')
    return GLSLResult(f"    float {out} = mod({x}, {period});\n", {'output': out})


def gen_atan2(node, inputs):
    out = var_name(node, 'angle')
    y, x = resolved(inputs, 'y', '0.0'), resolved(inputs, 'x', '1.0')
    return GLSLResult(f"    float {out} = atan({y}, {x});\n", {'angle': out})


def gen_dot(node, inputs):
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', 'vec2(0.0)'), resolved(inputs, 'b', 'vec2(0.0)')
    return GLSLResult(f"    float {out} = dot({a}, {b});\n", {'result': out})


def gen_make_vec2(node, inputs):
    out = var_name(node, 'xy')
    x = resolved(inputs, 'x', param_lit(node, 'x', 0.0))
    y = resolved(inputs, 'y', param_lit(node, 'y', 0.0))
    return GLSLResult(f"    vec2 {out} = vec2({x}, {y});\n", {'xy': out})


def gen_make_vec3(node, inputs):
    out = var_name(node, 'rgb')
    r, g, b = (resolved(inputs, k, param_lit(node, k, 0.0)) for k in ('r', 'g', 'b'))
    return GLSLResult(f"    vec3 {out} = vec3({r}, {g}, {b});\n", {'rgb': out})


def gen_smoothstep(node, inputs):
    out = var_name(node, 'result')
    e0 = resolved(inputs, 'edge0', param_lit(node, 'edge0', 0.0))
    e1 = resolved(inputs, 'edge1', param_lit(node, 'edge1', 1.0))
    x = resolved(inputs, 'value', '0.0')
    return GLSLResult(f"    float {out} = smoothstep({e0}, {e1}, {x});\n", {'result': out})


def gen_add_vec2(node, inputs):
    out = var_name(node, 'result')
    a, b = resolved(inputs, 'a', 'vec2(0.0)'), resolved(inputs, 'b', 'vec2(0.0)')
    return GLSLResult(f"    vec2 {out} = ({a}) + ({b});\n", {'result': out})


def gen_multiply_vec2(node, inputs):
    out = var_name(node, 'result')
    s = resolved(inputs, 'scale', param_lit(node, 'scale', 1.0))
    v = resolved(inputs, 'v', 'vec2(0.0)')
    return GLSLResult(f"    vec2 {out} = ({v}) * {s};\n", {'result': out})


# ============ Socket layouts ============

_F_IN = sockets(input=('float', 'Input'))
_F_OUT = sockets(output=('float', 'Output'))
_F_RESULT = sockets(result=('float', 'Result'))
_AB = sockets(a=('float', 'A'), b=('float', 'B'))
_WAVE_IN = sockets(input=('float', 'Input'), freq=('float', 'Freq'), amp=('float', 'Amp'))


def _math(type, label, generate, inputs, outputs, description, **extra):
    return NodeDefinition(
        type=type, label=label, category='Math', generate=generate,
        inputs=inputs, outputs=outputs, description=description, **extra,
    )


DEFINITIONS = [
    _math('add', 'Add', _binary('{a} + {b}', b_param='b', b_default=0.0),
          _AB, _F_RESULT, 'a + b', default_params={'b': 0.0}),
    _math('subtract', 'Subtract', _binary('{a} - {b}', b_param='b', b_default=0.0),
          _AB, _F_RESULT, 'a - b', default_params={'b': 0.0}),
    _math('multiply', 'Multiply', _binary('{a} * {b}', a_fallback='1.0', b_param='b', b_default=1.0),
          _AB, _F_RESULT, 'a * b', default_params={'b': 1.0}),
    _math('divide', 'Divide', _binary('{a} / max({b}, 0.0001)', b_param='b', b_default=1.0),
          _AB, _F_RESULT, 'a / b, divisor floored at 0.0001', default_params={'b': 1.0}),
    _math('sin', 'Sin', _wave('sin'), _WAVE_IN, _F_OUT,
          'amp * sin(input * freq)', default_params={'freq': 1.0, 'amp': 1.0}),
    _math('cos', 'Cos', _wave('cos'), _WAVE_IN, _F_OUT,
          'amp * cos(input * freq)', default_params={'freq': 1.0, 'amp': 1.0}),
    _math('exp', 'Exp', gen_exp, sockets(input=('float', 'Input'), scale=('float', 'Scale')), _F_OUT,
          'exp(input * scale)', default_params={'scale': 1.0}),
    _math('pow', 'Pow', gen_pow, sockets(base=('float', 'Base'), exponent=('float', 'Exponent')), _F_RESULT,
          'base ^ exponent', default_params={'exponent': 1.2}),
    _math('negate', 'Negate', _unary('output', 'float', '-({x})'), _F_IN, _F_OUT, '-x'),
    _math('length', 'Length', gen_length, sockets(input=('vec2', 'Input'), scale=('float', 'Scale')), _F_OUT,
          'length(v) * scale', default_params={'scale': 1.0}),
    _math('multiplyVec3', 'Scale Color', gen_multiply_vec3,
          sockets(color=('vec3', 'Color'), scale=('float', 'Scale')), sockets(result=('vec3', 'Result')),
          'Scale a color by a float', default_params={'scale': 1.0}),
    _math('addVec3', 'Add Colors', gen_add_vec3,
          sockets(a=('vec3', 'A'), b=('vec3', 'B')), sockets(result=('vec3', 'Result')),
          'Add two colors'),
    _math('tanh', 'Tanh', _unary('output', 'float', 'tanh({x})'), _F_IN, _F_OUT, 'Hyperbolic tangent'),
    _math('max', 'Max', _binary('max({a}, {b})', b_param='b', b_default=0.0),
          _AB, _F_RESULT, 'Maximum of two floats', default_params={'b': 0.0}),
    _math('clamp', 'Clamp', gen_clamp,
          sockets(input=('float', 'Input'), lo=('float', 'Min'), hi=('float', 'Max')), _F_RESULT,
          'Clamp between min and max', default_params={'lo': 0.0, 'hi': 1.0}),
    _math('mix', 'Mix', gen_mix, sockets(a=('float', 'A'), b=('float', 'B'), t=('float', 'T')), _F_RESULT,
          'mix(a, b, t)', default_params={'t': 0.5}),
    _math('mod', 'Mod', gen_mod, sockets(input=('float', 'Input'), period=('float', 'Period')), _F_OUT,
          'mod(x, period)', default_params={'period': 1.0}),
    _math('atan2', 'Atan2', gen_atan2, sockets(y=('float', 'Y'), x=('float', 'X')),
          sockets(angle=('float', 'Angle')), 'Polar angle, atan(y, x)'),
    _math('ceil', 'Ceil', _unary('output', 'float', 'ceil({x})'), _F_IN, _F_OUT, 'Round up'),
    _math('floor', 'Floor', _unary('output', 'float', 'floor({x})'), _F_IN, _F_OUT, 'Round down'),
    _math('sqrt', 'Sqrt', _unary('output', 'float', 'sqrt(max({x}, 0.0))'), _F_IN, _F_OUT, 'Square root'),
    _math('round', 'Round', _unary('output', 'float', 'floor({x} + 0.5)'), _F_IN, _F_OUT, 'Round to nearest'),
    _math('dot', 'Dot', gen_dot, sockets(a=('vec2', 'A'), b=('vec2', 'B')), _F_RESULT,
          'Dot product of two vec2'),
    _math('abs', 'Abs', _unary('output', 'float', 'abs({x})'), _F_IN, _F_OUT, 'Absolute value'),
    _math('makeVec2', 'Make Vec2', gen_make_vec2, sockets(x=('float', 'X'), y=('float', 'Y')),
          sockets(xy=('vec2', 'XY')), 'Build a vec2 from two floats',
          default_params={'x': 0.0, 'y': 0.0}),
    _math('extractX', 'Extract X', _unary('x', 'float', '({x}).x', 'vec2(0.0)', 'v'),
          sockets(v=('vec2', 'Vec2')), sockets(x=('float', 'X')), 'X component of a vec2'),
    _math('extractY', 'Extract Y', _unary('y', 'float', '({x}).y', 'vec2(0.0)', 'v'),
          sockets(v=('vec2', 'Vec2')), sockets(y=('float', 'Y')), 'Y component of a vec2'),
    _math('makeVec3', 'Make Vec3', gen_make_vec3,
          sockets(r=('float', 'R'), g=('float', 'G'), b=('float', 'B')), sockets(rgb=('vec3', 'RGB')),
          'Build a color from three floats', default_params={'r': 0.0, 'g': 0.0, 'b': 0.0}),
    _math('floatToVec3', 'Float -> Color', _unary('rgb', 'vec3', 'vec3({x})'),
          sockets(input=('float', 'Float')), sockets(rgb=('vec3', 'Color')), 'Grayscale color from a float'),
    _math('fractRaw', 'Fract (scalar)', _unary('output', 'float', 'fract({x})'), _F_IN, _F_OUT, 'fract(x)'),
    _math('smoothstep', 'Smoothstep', gen_smoothstep,
          sockets(value=('float', 'Value'), edge0=('float', 'Edge 0'), edge1=('float', 'Edge 1')), _F_RESULT,
          'smoothstep(edge0, edge1, x)', default_params={'edge0': 0.0, 'edge1': 1.0}),
    _math('addVec2', 'Add Vec2', gen_add_vec2,
          sockets(a=('vec2', 'A'), b=('vec2', 'B')), sockets(result=('vec2', 'Result')), 'Add two vec2'),
    _math('multiplyVec2', 'Scale Vec2', gen_multiply_vec2,
          sockets(v=('vec2', 'Vec2'), scale=('float', 'Scale')), sockets(result=('vec2', 'Result')),
          'Scale a vec2 by a float', default_params={'scale': 1.0}),
    _math('normalizeVec2', 'Normalize Vec2', _unary('result', 'vec2', 'normalize({x})', 'vec2(1.0, 0.0)', 'v'),
          sockets(v=('vec2', 'Vec2')), sockets(result=('vec2', 'Result')), 'Unit-length vec2'),
]
