# User Code Node Generators
# Handles: expr, floatWarp, customFn
#
# These nodes splice user-written GLSL into the shader. Input names are bound
# to generated variables through the expression AST; text that is not a
# single expression falls back to token-level substitution.

from ..codegen.expr import rewrite_expression, substitute_identifiers
from ..errors import GraphModelError
from ..ir.types import SocketType
from .base import GLSLResult, NodeDefinition, SocketDef, sockets
from .helpers import fmt_float, is_number, param_lit, param_str, resolved, var_name

EXPR_SLOTS = 4


def _socket_type(value, default=SocketType.FLOAT) -> SocketType:
    try:
        return SocketType.parse(value)
    except GraphModelError:
        return default


def _output_type(params) -> SocketType:
    return _socket_type(params.get('outputType', 'float'))


# ============ Expr ============

def expr_sockets(params):
    inputs = {f"in{i}": SocketDef(SocketType.FLOAT, f"in{i}") for i in range(EXPR_SLOTS)}
    outputs = {'result': SocketDef(_output_type(params), 'Result')}
    return inputs, outputs


def gen_expr(node, inputs):
    """One-line expression over up to four named input slots."""
    out_type = _output_type(node.params)
    out = var_name(node, 'result')
    source = param_str(node, 'expr', '') or '0.0'
    bindings = {}
    for i in range(EXPR_SLOTS):
        name = param_str(node, f"in{i}Name", f"in{i}").strip()
        if name:
            # first slot wins when two share a name
            bindings.setdefault(name, resolved(inputs, f"in{i}", out_type.zero_value()))
    expr = rewrite_expression(source, bindings)
    return GLSLResult(f"    {out_type} {out} = {expr};\n", {'result': out})


# ============ Float Warp ============

def gen_float_warp(node, inputs):
    """mix(value, expr(value, a, b, c), intensity)"""
    out, warped = var_name(node, 'result'), var_name(node, 'warped')
    value = resolved(inputs, 'value', '0.0')
    bindings = {
        'value': value,
        'a': resolved(inputs, 'a', '0.0'),
        'b': resolved(inputs, 'b', '0.0'),
        'c': resolved(inputs, 'c', '0.0'),
    }
    expr = rewrite_expression(param_str(node, 'expr', '') or 'value', bindings)
    intensity = resolved(inputs, 'intensity', param_lit(node, 'intensity', 1.0))
    code = (
        f"    float {warped} = {expr};\n"
        f"    float {out} = mix({value}, {warped}, clamp({intensity}, 0.0, 1.0));\n"
    )
    return GLSLResult(code, {'result': out})


# ============ Custom Function ============

def custom_inputs(params):
    """Well-formed entries of params['inputs']."""
    entries = params.get('inputs')
    if not isinstance(entries, list):
        return []
    return [e for e in entries if isinstance(e, dict) and isinstance(e.get('name'), str) and e['name']]


def custom_fn_sockets(params):
    inputs = {
        e['name']: SocketDef(_socket_type(e.get('type', 'float')), e['name'])
        for e in custom_inputs(params)
    }
    outputs = {'result': SocketDef(_output_type(params), 'Result')}
    return inputs, outputs


def custom_fn_helpers(node):
    functions = node.params.get('glslFunctions')
    return (functions.strip(),) if isinstance(functions, str) else ()


def custom_fn_slider(node, key):
    """Slider inputs keep their value in params[key], not on the socket."""
    for entry in custom_inputs(node.params):
        if entry['name'] == key and entry.get('slider') is not None:
            value = node.params.get(key)
            return fmt_float(value) if is_number(value) else None
    return None


def gen_custom_fn(node, inputs):
    out_type = _output_type(node.params)
    out = var_name(node, 'result')
    bindings = {}
    for entry in custom_inputs(node.params):
        zero = _socket_type(entry.get('type', 'float')).zero_value()
        bindings.setdefault(entry['name'], resolved(inputs, entry['name'], zero))

    body = (param_str(node, 'body', '') or '0.0').strip()
    if '\n' in body:
        # statement block; the body assigns the result variable itself
        body = substitute_identifiers(body, bindings)
        indented = '\n'.join(f"        {line}" for line in body.split('\n'))
        code = f"    {out_type} {out};\n    {{\n{indented}\n    }}\n"
    else:
        code = f"    {out_type} {out} = {rewrite_expression(body, bindings)};\n"
    return GLSLResult(code, {'result': out})


DEFINITIONS = [
    NodeDefinition(
        type='expr', label='Expr', category='Effects', generate=gen_expr,
        inputs=expr_sockets({})[0],
        outputs=sockets(result=('float', 'Result')),
        default_params={
            'expr': 'in0', 'outputType': 'float',
            'in0Name': 'in0', 'in1Name': 'in1', 'in2Name': 'in2', 'in3Name': 'in3',
        },
        dynamic_sockets=True,
        socket_builder=expr_sockets,
        description='Single-line GLSL expression over named inputs',
    ),
    NodeDefinition(
        type='floatWarp', label='Float Warp', category='Effects', generate=gen_float_warp,
        inputs=sockets(
            value=('float', 'Value'),
            a=('float', 'A'),
            b=('float', 'B'),
            c=('float', 'C'),
            intensity=('float', 'Intensity'),
        ),
        outputs=sockets(result=('float', 'Result')),
        default_params={'expr': 'sin(value)', 'intensity': 1.0},
        description='Transform a float with a one-line expression',
    ),
    NodeDefinition(
        type='customFn', label='Custom Fn', category='Effects', generate=gen_custom_fn,
        outputs=sockets(result=('float', 'Result')),
        default_params={
            'label': 'Custom Fn',
            'inputs': [],
            'outputType': 'float',
            'body': '0.0',
            'glslFunctions': '',
        },
        dynamic_sockets=True,
        socket_builder=custom_fn_sockets,
        instance_helpers=custom_fn_helpers,
        param_input=custom_fn_slider,
        description='User-defined GLSL body with custom input sockets',
    ),
]
