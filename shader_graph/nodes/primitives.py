# 2D Primitive Node Generators
# Handles: circleSDF, boxSDF, ringSDF, shapeSDF, simpleSDF
#
# circleSDF, boxSDF and ringSDF evaluate at (position - offset); an unwired
# offset is built from the posX/posY params. shapeSDF and simpleSDF take p as is.

from ..codegen.shader_lib import BOX_SDF_GLSL, CIRCLE_SDF_GLSL, RING_SDF_GLSL, SHAPE_SDF
from .base import GLSLResult, NodeDefinition, sockets
from .helpers import input_or_param, param_lit, param_str, resolved, var_name


def _offset_position(node, inputs):
    pos = resolved(inputs, 'position', 'vec2(0.0)')
    default_offset = f"vec2({param_lit(node, 'posX', 0.0)}, {param_lit(node, 'posY', 0.0)})"
    offset = resolved(inputs, 'offset', default_offset)
    return f"({pos} - {offset})"


def _radial(func):
    def generate(node, inputs):
        out = var_name(node, 'distance')
        radius = resolved(inputs, 'radius', param_lit(node, 'radius', 0.3))
        code = f"    float {out} = {func}({_offset_position(node, inputs)}, {radius});\n"
        return GLSLResult(code, {'distance': out})
    generate.__name__ = f"gen_{func}"
    return generate


gen_circle_sdf = _radial('circleSDF')
gen_ring_sdf = _radial('ringSDF')


def gen_box_sdf(node, inputs):
    out = var_name(node, 'distance')
    dims = resolved(inputs, 'dimensions',
                    f"vec2({param_lit(node, 'width', 0.5)}, {param_lit(node, 'height', 0.5)})")
    code = f"    float {out} = boxSDF({_offset_position(node, inputs)}, {dims});\n"
    return GLSLResult(code, {'distance': out})


# ============ Shape selector ============

SIMPLE_SHAPES = ('circle', 'box', 'ring')


def _shape(node, choices=SHAPE_SDF) -> str:
    shape = param_str(node, 'shape', 'circle')
    return shape if shape in choices else 'circle'


def shape_helpers(node):
    """Only the selected shape's distance function is emitted."""
    return (SHAPE_SDF[_shape(node)],)


def gen_shape_sdf(node, inputs):
    out = var_name(node, 'distance')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    r = input_or_param(node, inputs, 'r', 0.3)
    rnd = param_lit(node, 'roundness', 0.05)
    b = resolved(inputs, 'b', f"vec2({param_lit(node, 'rx', 0.3)}, {param_lit(node, 'ry', 0.3)})")
    calls = {
        'circle': lambda: f"sdCircle2({p}, {r})",
        'box': lambda: f"sdBox({p}, {b})",
        'roundedBox': lambda: f"sdRoundedBox({p}, {b}, {rnd})",
        'segment': lambda: "sdSegment({}, {}, {})".format(
            p, resolved(inputs, 'a', 'vec2(-0.5, 0.0)'), resolved(inputs, 'b2', 'vec2(0.5, 0.0)')),
        'triangle': lambda: f"sdEquilateralTriangle({p}, {r})",
        'hexagon': lambda: f"sdHexagon({p}, {r})",
        'star': lambda: f"sdStar5({p}, {r}, {input_or_param(node, inputs, 'rf', 0.5)})",
        'pie': lambda: "sdPie({}, {}, {})".format(
            p, resolved(inputs, 'c', f"vec2({param_lit(node, 'cx', 0.866)}, {param_lit(node, 'cy', 0.5)})"), r),
        'ring': lambda: "sdRing2({}, {}, {}, {})".format(
            p, resolved(inputs, 'n', f"vec2({param_lit(node, 'nx', 0.0)}, {param_lit(node, 'ny', 1.0)})"),
            r, input_or_param(node, inputs, 'th', 0.05)),
        'cross': lambda: f"sdCross({p}, {b}, {rnd})",
    }
    code = f"    float {out} = {calls[_shape(node)]()};\n"
    return GLSLResult(code, {'distance': out})


def simple_helpers(node):
    return (SHAPE_SDF['box'],) if _shape(node, SIMPLE_SHAPES) == 'box' else ()


def gen_simple_sdf(node, inputs):
    """Circle, box or ring with inline math; only the box needs a helper."""
    out = var_name(node, 'distance')
    p = resolved(inputs, 'p', 'vec2(0.0)')
    r = input_or_param(node, inputs, 'r', 0.3)
    shape = _shape(node, SIMPLE_SHAPES)
    if shape == 'box':
        b = resolved(inputs, 'b', f"vec2({param_lit(node, 'wx', 0.3)}, {param_lit(node, 'wy', 0.3)})")
        call = f"sdBox({p}, {b})"
    elif shape == 'ring':
        call = f"abs(length({p}) - {r})"
    else:
        call = f"length({p}) - {r}"
    return GLSLResult(f"    float {out} = {call};\n", {'distance': out})


_RADIAL_INPUTS = sockets(
    position=('vec2', 'Position'),
    radius=('float', 'Radius'),
    offset=('vec2', 'Offset'),
)
_DISTANCE = sockets(distance=('float', 'Distance'))

DEFINITIONS = [
    NodeDefinition(
        type='circleSDF', label='Circle SDF', category='2D Primitives', generate=gen_circle_sdf,
        inputs=_RADIAL_INPUTS, outputs=_DISTANCE,
        default_params={'radius': 0.3, 'posX': 0.0, 'posY': 0.0},
        glsl_function=CIRCLE_SDF_GLSL,
        description='Signed distance to a circle',
    ),
    NodeDefinition(
        type='boxSDF', label='Box SDF', category='2D Primitives', generate=gen_box_sdf,
        inputs=sockets(
            position=('vec2', 'Position'),
            dimensions=('vec2', 'Dimensions'),
            offset=('vec2', 'Offset'),
        ),
        outputs=_DISTANCE,
        default_params={'width': 0.5, 'height': 0.5, 'posX': 0.0, 'posY': 0.0},
        glsl_function=BOX_SDF_GLSL,
        description='Signed distance to a box',
    ),
    NodeDefinition(
        type='ringSDF', label='Ring SDF', category='2D Primitives', generate=gen_ring_sdf,
        inputs=_RADIAL_INPUTS, outputs=_DISTANCE,
        default_params={'radius': 0.3, 'posX': 0.0, 'posY': 0.0},
        glsl_function=RING_SDF_GLSL,
        description='Absolute circle distance, a ring',
    ),
    NodeDefinition(
        type='shapeSDF', label='Shape SDF', category='2D Primitives', generate=gen_shape_sdf,
        inputs=sockets(
            p=('vec2', 'Position'),
            r=('float', 'Radius / Size'),
            b=('vec2', 'Half-size (box)'),
            a=('vec2', 'Point A (segment)'),
            b2=('vec2', 'Point B (segment)'),
            rf=('float', 'Inner ratio (star)'),
            c=('vec2', 'Angle vec (pie)'),
            th=('float', 'Thickness (ring)'),
            n=('vec2', 'Normal (ring)'),
        ),
        outputs=_DISTANCE,
        default_params={
            'shape': 'circle',
            'r': 0.3, 'rx': 0.3, 'ry': 0.3, 'roundness': 0.05,
            'rf': 0.5,
            'cx': 0.866, 'cy': 0.5,
            'th': 0.05,
            'nx': 0.0, 'ny': 1.0,
        },
        instance_helpers=shape_helpers,
        description='Selectable 2D distance: circle, box, rounded box, segment, triangle, hexagon, star, pie, ring, cross',
    ),
    NodeDefinition(
        type='simpleSDF', label='Simple SDF', category='2D Primitives', generate=gen_simple_sdf,
        inputs=sockets(
            p=('vec2', 'Position'),
            r=('float', 'Radius'),
            b=('vec2', 'Half-size (box)'),
        ),
        outputs=_DISTANCE,
        default_params={'shape': 'circle', 'r': 0.3, 'wx': 0.3, 'wy': 0.3},
        instance_helpers=simple_helpers,
        description='Circle, box or ring distance',
    ),
]
