# Color Node Generators
# Handles: palette, palettePreset, gradient

from collections import namedtuple
from typing import Tuple

from ..codegen.shader_lib import GRADIENT_GLSL, PALETTE_GLSL
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import fmt_fixed, fmt_float, param_lit, param_str, param_vec3, resolved, var_name, vec3_str


PalettePreset = namedtuple('PalettePreset', ['name', 'a', 'b', 'c', 'd'])

PALETTE_PRESETS = (
    PalettePreset('IQ Blue-Teal', (0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (1.0, 1.0, 1.0), (0.0, 0.1, 0.2)),
    PalettePreset('IQ Rainbow', (0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (1.0, 1.0, 1.0), (0.0, 0.33, 0.67)),
    PalettePreset('IQ Warm', (0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (1.0, 1.0, 1.0), (0.3, 0.2, 0.2)),
    PalettePreset('IQ Lemon', (0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (1.0, 1.0, 0.5), (0.8, 0.9, 0.3)),
    PalettePreset('Sunset', (0.5, 0.5, 0.5), (0.4431, 0.4235, 0.4235), (1.0, 0.7, 0.4), (0.0, 0.15, 0.2)),
    PalettePreset('Fire', (0.5, 0.5, 0.5), (0.4431, 0.4235, 0.4235), (2.0, 1.0, 0.0), (0.5, 0.2, 0.25)),
    PalettePreset('Forest', (0.8, 0.5, 0.4), (0.2, 0.4, 0.2), (2.0, 1.0, 1.0), (0.0, 0.25, 0.25)),
    PalettePreset('Purple Haze', (0.721, 0.328, 0.542), (0.659, 0.181, 0.896),
                  (0.612, 0.14, 0.196), (0.538, 0.978, 0.7)),
    PalettePreset('Deep Purple', (0.412, 0.102, 0.491), (0.397, 0.13, 0.485),
                  (0.612, 0.14, 0.196), (0.538, 0.978, 0.7)),
    PalettePreset('Psychedelic', (0.412, 0.202, 0.491), (0.397, 0.13, 0.485),
                  (1.147, 1.557, 1.197), (1.956, 5.039, 2.541)),
)

DEFAULT_PRESET = 1

GRADIENT_MODES = {'linear_x': 0, 'linear_y': 1, 'radial': 2, 'angular': 3, 'diagonal': 4}

_PALETTE_DEFAULTS = {
    'a': [0.5, 0.5, 0.5],
    'b': [0.5, 0.5, 0.5],
    'c': [1.0, 1.0, 1.0],
    'd': [0.0, 0.33, 0.67],
}


def gen_palette(node, inputs):
    """Cosine palette; each coefficient channel can be wired individually."""
    out = var_name(node, 'color')
    t = resolved(inputs, 't', '0.0')
    vecs = []
    for coeff, default in _PALETTE_DEFAULTS.items():
        values = param_vec3(node, coeff, default)
        channels = [
            resolved(inputs, f"{coeff}_{ch}", fmt_float(values[i]))
            for i, ch in enumerate('rgb')
        ]
        vecs.append(f"vec3({','.join(channels)})")
    code = f"    vec3 {out} = palette({t}, {', '.join(vecs)});\n"
    return GLSLResult(code, {'color': out})


def preset_index(value, default: int = DEFAULT_PRESET) -> int:
    """Preset param ('0'..'9') to an index; anything unparseable is `default`."""
    try:
        idx = int(str(value).strip(), 10)
    except ValueError:
        return default
    if idx < 0:
        return default
    return min(idx, len(PALETTE_PRESETS) - 1)


def preset_vectors(index: int) -> Tuple[str, str, str, str]:
    """The a, b, c, d coefficients of a preset as vec3 literals."""
    p = PALETTE_PRESETS[index]
    return tuple(f"vec3({','.join(fmt_fixed(x, 6) for x in values)})" for values in (p.a, p.b, p.c, p.d))


def gen_palette_preset(node, inputs):
    out = var_name(node, 'color')
    t = resolved(inputs, 't', '0.0')
    pa, pb, pc, pd = preset_vectors(preset_index(node.params.get('preset', str(DEFAULT_PRESET))))
    code = (
        f"    vec3 {out};\n"
        f"    {{\n"
        f"        vec3 _pa = {pa}; vec3 _pb = {pb};\n"
        f"        vec3 _pc = {pc}; vec3 _pd = {pd};\n"
        f"        {out} = _pa + _pb * cos(6.283185 * (_pc * {t} + _pd));\n"
        f"    }}\n"
    )
    return GLSLResult(code, {'color': out})


def gen_gradient(node, inputs):
    out = var_name(node, 'color')
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    offset = resolved(inputs, 't_offset', param_lit(node, 't_offset', 0.0))
    mode = GRADIENT_MODES.get(param_str(node, 'mode', 'linear_x'), 0)
    color_a = resolved(inputs, 'color_a', vec3_str(param_vec3(node, 'color_a', (1.0, 0.2, 0.2))))
    color_b = resolved(inputs, 'color_b', vec3_str(param_vec3(node, 'color_b', (0.2, 0.2, 1.0))))
    code = f"    vec3 {out} = gradientBlend({uv}, {color_a}, {color_b}, {mode}, {offset});\n"
    return GLSLResult(code, {'color': out})


_PALETTE_INPUTS = {'t': ('float', 'T')}
for _coeff in 'abcd':
    for _ch in 'rgb':
        _PALETTE_INPUTS[f"{_coeff}_{_ch}"] = ('float', f"{_coeff}.{_ch}")

DEFINITIONS = [
    NodeDefinition(
        type='palette', label='Palette', category='Color', generate=gen_palette,
        inputs=sockets(**_PALETTE_INPUTS),
        outputs=sockets(color=('vec3', 'Color')),
        default_params={k: list(v) for k, v in _PALETTE_DEFAULTS.items()},
        glsl_function=PALETTE_GLSL,
        description='Cosine color palette, a + b * cos(2pi * (c * t + d))',
    ),
    NodeDefinition(
        type='palettePreset', label='Palette Preset', category='Color', generate=gen_palette_preset,
        inputs=sockets(t=('float', 'T')),
        outputs=sockets(color=('vec3', 'Color')),
        default_params={'preset': str(DEFAULT_PRESET)},
        description='Cosine palette with named presets',
    ),
    NodeDefinition(
        type='gradient', label='Gradient', category='Color', generate=gen_gradient,
        inputs=sockets(
            uv=('vec2', 'UV'),
            color_a=('vec3', 'Color A'),
            color_b=('vec3', 'Color B'),
            t_offset=('float', 'T Offset'),
        ),
        outputs=sockets(color=('vec3', 'Color')),
        default_params={
            'mode': 'linear_x',
            'color_a': [1.0, 0.2, 0.2],
            'color_b': [0.2, 0.2, 1.0],
            't_offset': 0.0,
        },
        glsl_function=GRADIENT_GLSL,
        description='Two-color gradient across UV space',
    ),
]
