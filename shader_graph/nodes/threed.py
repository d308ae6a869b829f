# 3D Node Generators
# Handles: raymarch3d, volumeClouds, chromaticAberration, combineRGB, orbitalVolume3d
#
# Raymarchers are self-contained: camera, march loop and shading all live
# in the node's statements; helpers only hold the SDF and noise primitives.

from ..codegen.shader_lib import (
    CAMERA3D_GLSL, CLOUD_GLSL, LAGUERRE_GLSL, NOISE3D_GLSL, ORBITAL3D_GLSL,
    ORBITAL_CAMERA_GLSL, ORBITAL_PSI_GLSL, PALETTE_GLSL, REAL_SH_GLSL, SDF3D_GLSL,
)
from .base import GLSLResult, NodeDefinition, sockets
from .color import preset_index, preset_vectors
from .helpers import (
    fmt_float, input_or_param, param_float, param_int, param_lit, param_str,
    param_vec3, resolved, vec3_str,
)


# ============ Raymarch ============

def _scene_sdf(scene, r, k, rep_x, rep_z, noise_scale, noise_strength):
    """Scene distance as a function of the sample position expression."""
    if scene == 'boxes':
        return lambda p: f"sdBox3({p}, vec3({r}))"
    if scene == 'torus':
        return lambda p: f"sdTorus({p}, {r}, max({r} * 0.3, 0.1))"
    if scene == 'blend':
        return lambda p: f"sminSDF(sdSphere({p}, {r}), sdBox3({p} - vec3(0.0, 0.0, 0.3), vec3({r} * 0.8)), {k})"
    if scene == 'repeat':
        return lambda p: f"sdSphere(opRep({p}, vec3({rep_x}, 100.0, {rep_z})), {r} * 0.4)"
    if scene == 'noisy_sphere':
        return lambda p: f"sdSphere({p}, {r} + noise3({p} * {noise_scale}) * {noise_strength})"
    return lambda p: f"sdSphere({p}, {r})"


def gen_raymarch(node, inputs):
    """
    Sphere-traced SDF scene over a ground plane at y = -1, seen from a
    camera orbiting the origin.

    Shading is Blinn-Phong with ambient occlusion sampled along the normal;
    misses show a background palette gradient and exponential fog blends
    everything toward the fog color.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    cam_dist = input_or_param(node, inputs, 'cam_dist', 4.0)
    cam_height = input_or_param(node, inputs, 'cam_height', 1.5)
    cam_speed = input_or_param(node, inputs, 'cam_speed', 0.3)
    fog_dist = input_or_param(node, inputs, 'fog_dist', 15.0)

    scene = param_str(node, 'scene', 'spheres')
    sdf = _scene_sdf(
        scene,
        input_or_param(node, inputs, 'shape_r', 0.8),
        input_or_param(node, inputs, 'blend_k', 0.3),
        param_lit(node, 'repeat_x', 3.0), param_lit(node, 'repeat_z', 3.0),
        input_or_param(node, inputs, 'noise_scale', 1.5),
        param_lit(node, 'noise_strength', 0.3),
    )
    max_steps = max(20, param_int(node, 'max_steps', 80))
    max_dist = param_lit(node, 'max_dist', 30.0)
    surf = param_lit(node, 'surf_dist', 0.001)
    ambient = param_lit(node, 'ambient', 0.05)
    ao_steps = max(0, param_int(node, 'ao_steps', 5))
    pa, pb, pc, pd = preset_vectors(preset_index(node.params.get('palette_preset'), 4))
    ba, bb, bc, bd = preset_vectors(preset_index(node.params.get('bg_preset'), 0))

    light_y = param_lit(node, 'light_y', 5.0)
    light_xz = inputs.get('light_pos')
    if light_xz:
        light = f"vec3({light_xz}.x, {light_y}, {light_xz}.y)"
    else:
        light = f"vec3({param_lit(node, 'light_x', 2.0)}, {light_y}, {param_lit(node, 'light_z', 3.0)})"

    hp, nm, occ, e = f"{id_}_hp", f"{id_}_normal", f"{id_}_occ", f"{id_}_e"
    # Tetrahedron offsets for the normal estimate
    taps = (
        f"vec3({e}.x, {e}.y, {e}.y)",
        f"vec3({e}.y, {e}.y, {e}.x)",
        f"vec3({e}.y, {e}.x, {e}.y)",
        f"vec3({e}.x, {e}.x, {e}.x)",
    )

    code = (
        f"    float {id_}_angle = {t} * {cam_speed};\n"
        f"    vec3 {id_}_ro = vec3(cos({id_}_angle) * {cam_dist}, {cam_height}, sin({id_}_angle) * {cam_dist});\n"
        f"    mat3 {id_}_cam = setCamera({id_}_ro, vec3(0.0), 0.0);\n"
        f"    vec3 {id_}_rd = normalize({id_}_cam * vec3({uv}.x, {uv}.y, {param_lit(node, 'cam_fov', 1.5)}));\n"
        f"    float {id_}_t = 0.001;\n"
        f"    float {id_}_d = 0.0;\n"
        f"    bool {id_}_hit = false;\n"
        f"    for (int {id_}_si = 0; {id_}_si < {max_steps}; {id_}_si++) {{\n"
        f"        vec3 {id_}_p = {id_}_ro + {id_}_rd * {id_}_t;\n"
        f"        {id_}_d = min({sdf(f'{id_}_p')}, sdPlane({id_}_p, -1.0));\n"
        f"        if ({id_}_d < {surf}) {{ {id_}_hit = true; break; }}\n"
        f"        if ({id_}_t > {max_dist}) break;\n"
        f"        {id_}_t += {id_}_d;\n"
        f"    }}\n"
        f"    vec3 {hp} = {id_}_ro + {id_}_rd * {id_}_t;\n"
        f"    vec3 {nm} = vec3(0.0);\n"
        f"    if ({id_}_hit) {{\n"
        f"        vec2 {e} = vec2({surf} * 2.0, -{surf} * 2.0);\n"
        f"        {nm} = normalize(\n"
        + "".join(
            f"            {tap} * {sdf(f'({hp} + {tap})')}{' +' if i < 3 else ''}\n"
            for i, tap in enumerate(taps)
        )
        + "        );\n"
        f"    }}\n"
    )
    if ao_steps:
        code += (
            f"    float {occ} = 0.0;\n"
            f"    for (int {id_}_aoi = 1; {id_}_aoi <= {ao_steps}; {id_}_aoi++) {{\n"
            f"        float {id_}_aoh = float({id_}_aoi) * 0.08;\n"
            f"        vec3 {id_}_aop = {hp} + {nm} * {id_}_aoh;\n"
            f"        {occ} += clamp({id_}_aoh - {sdf(f'{id_}_aop')}, 0.0, 1.0) / {id_}_aoh;\n"
            f"    }}\n"
            f"    {occ} = 1.0 - {occ} / {ao_steps}.0;\n"
        )
    else:
        code += f"    float {occ} = 1.0;\n"
    code += (
        f"    vec3 {id_}_ldir = normalize({light} - {hp});\n"
        f"    float {id_}_diff = max(dot({nm}, {id_}_ldir), 0.0);\n"
        f"    vec3 {id_}_hv = normalize({id_}_ldir - {id_}_rd);\n"
        f"    float {id_}_spec = pow(max(dot({nm}, {id_}_hv), 0.0), {param_lit(node, 'specular', 32.0)});\n"
        f"    vec3 {id_}_objcol = palette({id_}_t / {max_dist}, {pa}, {pb}, {pc}, {pd});\n"
        f"    vec3 {id_}_litcol = {id_}_objcol * ({ambient} + (1.0 - {ambient}) * {id_}_diff * {occ}) + vec3({id_}_spec * 0.3);\n"
        f"    vec3 {id_}_bgcol = palette({uv}.y * 0.5 + 0.5, {ba}, {bb}, {bc}, {bd});\n"
        f"    vec3 {id_}_hitcol = {id_}_hit ? {id_}_litcol : {id_}_bgcol;\n"
        f"    float {id_}_fog = exp(-{id_}_t / {fog_dist});\n"
        f"    vec3 {id_}_color = mix({vec3_str(param_vec3(node, 'fog_color', (0.7, 0.75, 0.85)))}, {id_}_hitcol, {id_}_fog);\n"
        f"    float {id_}_depth = clamp({id_}_t / {max_dist}, 0.0, 1.0);\n"
    )
    return GLSLResult(code, {
        'color': f"{id_}_color",
        'depth': f"{id_}_depth",
        'normal': nm,
        'occ': occ,
        'fog': f"{id_}_fog",
    })


# ============ Volume clouds ============

def gen_volume_clouds(node, inputs):
    """Sky gradient with a sun disk, then a front-to-back march through a cloud slab."""
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    wind = input_or_param(node, inputs, 'cam_speed', 0.1)
    coverage = input_or_param(node, inputs, 'coverage', 0.3)
    density = resolved(inputs, 'density', param_lit(node, 'density_scale', 0.8))
    sun_angle = input_or_param(node, inputs, 'sun_angle', 0.5)
    steps = max(8, param_int(node, 'steps', 40))
    sun_size = param_lit(node, 'sun_size', 0.03)
    shape = (f"{coverage}, {param_lit(node, 'puffiness', 0.6)}, "
             f"{param_lit(node, 'cloud_scale', 0.4)}")

    def color(key, default):
        return vec3_str(param_vec3(node, key, default))

    sun_col = color('sun_col', (1.0, 0.85, 0.4))
    sky, accum, cloud = f"{id_}_sky", f"{id_}_cloudAccum", f"{id_}_cloudCol"

    code = (
        f"    vec3 {id_}_rd = normalize(vec3({uv}.x, {uv}.y, 1.5));\n"
        f"    vec3 {id_}_sunDir = normalize(vec3(sin({sun_angle}), 0.25, cos({sun_angle})));\n"
        f"    float {id_}_skyT = clamp({id_}_rd.y * 0.5 + 0.5, 0.0, 1.0);\n"
        f"    vec3 {sky} = mix({color('sky_ground', (0.3, 0.15, 0.05))}, "
        f"{color('sky_horizon', (0.8, 0.5, 0.3))}, smoothstep(0.0, 0.4, {id_}_skyT));\n"
        f"    {sky} = mix({sky}, {color('sky_top', (0.1, 0.2, 0.5))}, smoothstep(0.3, 1.0, {id_}_skyT));\n"
        f"    float {id_}_sunDot = dot({id_}_rd, {id_}_sunDir);\n"
        f"    float {id_}_sun = smoothstep({sun_size} + 0.005, {sun_size}, acos(clamp({id_}_sunDot, -1.0, 1.0)));\n"
        f"    {sky} += {sun_col} * {id_}_sun * 3.0;\n"
        f"    float {accum} = 0.0;\n"
        f"    vec3 {cloud} = vec3(0.0);\n"
        f"    if ({id_}_rd.y > 0.01) {{\n"
        f"        float {id_}_tMin = {param_lit(node, 'cloud_min_y', 1.5)} / {id_}_rd.y;\n"
        f"        float {id_}_tMax = {param_lit(node, 'cloud_max_y', 5.0)} / {id_}_rd.y;\n"
        f"        float {id_}_dt = ({id_}_tMax - {id_}_tMin) / {steps}.0;\n"
        f"        vec3 {id_}_windOff = vec3({t} * {wind}, 0.0, 0.0);\n"
        f"        for (int {id_}_ci = 0; {id_}_ci < {steps}; {id_}_ci++) {{\n"
        f"            float {id_}_mt = {id_}_tMin + (float({id_}_ci) + 0.5) * {id_}_dt;\n"
        f"            vec3 {id_}_cp = {id_}_rd * {id_}_mt + {id_}_windOff;\n"
        f"            float {id_}_dens = cloudDensity({id_}_cp, {shape}) * {density};\n"
        f"            if ({id_}_dens > 0.001) {{\n"
        f"                float {id_}_lightDens = cloudDensity({id_}_cp + {id_}_sunDir * 0.5, {shape});\n"
        f"                float {id_}_shadow = exp(-{id_}_lightDens * 2.0);\n"
        f"                vec3 {id_}_lit = {color('cloud_col', (1.0, 0.95, 0.85))} * ({id_}_shadow + "
        f"{param_lit(node, 'scatter', 0.3)}) + {sun_col} * pow(max({id_}_sunDot, 0.0), 4.0) * {id_}_shadow;\n"
        f"                float {id_}_alpha = min({id_}_dens * {id_}_dt * 8.0, 1.0 - {accum});\n"
        f"                {cloud} += {id_}_lit * {id_}_alpha;\n"
        f"                {accum} += {id_}_alpha;\n"
        f"                if ({accum} > 0.99) break;\n"
        f"            }}\n"
        f"        }}\n"
        f"    }}\n"
        f"    vec3 {id_}_color = mix({sky}, {cloud} / max({accum}, 0.001), {accum});\n"
        f"    float {id_}_cloud_mask = {accum};\n"
    )
    return GLSLResult(code, {
        'color': f"{id_}_color",
        'cloud_mask': f"{id_}_cloud_mask",
        'sun': f"{id_}_sun",
        'sky': sky,
    })


# ============ Channel split / combine ============

def gen_chromatic_aberration(node, inputs):
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    s = input_or_param(node, inputs, 'strength', 0.03)
    if param_str(node, 'animate', 'false') == 'true':
        s = f"({s} * (0.8 + 0.2 * sin({t} * {param_lit(node, 'anim_speed', 0.5)})))"

    mode = param_str(node, 'mode', 'radial')
    if mode == 'horizontal':
        offset = f"vec2({s}, 0.0)"
    elif mode == 'diagonal':
        offset = f"vec2({s}, {s}) * 0.7071"
    elif mode == 'barrel':
        offset = f"({uv} * dot({uv}, {uv}) * {s})"
    else:
        offset = f"normalize({uv} + vec2(0.00001)) * {s} * length({uv})"

    code = (
        f"    vec2 {id_}_offset = {offset};\n"
        f"    vec2 {id_}_uv_r = {uv} + {id_}_offset;\n"
        f"    vec2 {id_}_uv_g = {uv};\n"
        f"    vec2 {id_}_uv_b = {uv} - {id_}_offset;\n"
    )
    return GLSLResult(code, {key: f"{id_}_{key}" for key in ('uv_r', 'uv_g', 'uv_b', 'offset')})


def gen_combine_rgb(node, inputs):
    id_ = node.id
    full = {ch: f"{id_}_full_{ch}" for ch in 'rgb'}
    code = "".join(f"    vec3 {full[ch]} = vec3({resolved(inputs, ch, '0.0')});\n" for ch in 'rgb')

    mode = param_str(node, 'mode', 'channel')
    total = f"{full['r']} + {full['g']} + {full['b']}"
    if mode == 'add':
        expr = total
    elif mode == 'avg':
        expr = f"({total}) / 3.0"
    else:
        expr = f"vec3({full['r']}.r, {full['g']}.g, {full['b']}.b)"
    code += f"    vec3 {id_}_color = {expr};\n"

    outputs = {'color': f"{id_}_color"}
    outputs.update({f"full_{ch}": var for ch, var in full.items()})
    return GLSLResult(code, outputs)


# ============ Orbital volume ============

def gen_orbital_volume(node, inputs):
    """
    Front-to-back compositing of |psi|^2 along each camera ray.

    The camera orbits on a sphere set by cam_pitch; a wired orbit_angle
    replaces the time-driven azimuth.
    """
    id_ = node.id
    uv = resolved(inputs, 'uv', 'vec2(0.0)')
    t = resolved(inputs, 'time', '0.0')
    cam_angle = param_lit(node, 'cam_angle', 0.0)
    orbit = inputs.get('orbit_angle')
    angle = f"({orbit} + {cam_angle})" if orbit else f"({t} * {param_lit(node, 'cam_speed', 0.2)} + {cam_angle})"
    cam_dist = param_lit(node, 'cam_dist', 2.5)
    pitch = param_lit(node, 'cam_pitch', 0.35)
    args = ', '.join(param_lit(node, key, default) for key, default in
                     (('n', 2.0), ('l', 1.0), ('m', 0.0), ('a0', 0.5)))
    scale = fmt_float(max(param_float(node, 'scale', 0.3), 0.001))
    steps = max(1, param_int(node, 'steps', 80))
    step = param_lit(node, 'step_size', 0.04)
    gamma = fmt_float(max(param_float(node, 'gamma', 0.4), 0.05))
    turbulence = param_float(node, 'turbulence', 0.0)
    color_a = vec3_str(param_vec3(node, 'color_a', (0.3, 0.6, 1.0)))
    color_b = vec3_str(param_vec3(node, 'color_b', (1.0, 0.4, 0.2)))
    color, alpha, depth, ps = f"{id_}_color", f"{id_}_alpha", f"{id_}_depth", f"{id_}_ps"

    code = (
        f"    float {id_}_angle = {angle};\n"
        f"    float {id_}_cp = cos({pitch});\n"
        f"    float {id_}_sp = sin({pitch});\n"
        f"    vec3 {id_}_ro = vec3(cos({id_}_angle) * {id_}_cp * {cam_dist}, {id_}_sp * {cam_dist}, "
        f"sin({id_}_angle) * {id_}_cp * {cam_dist});\n"
        f"    mat3 {id_}_cm = orbital3dCam({id_}_ro, vec3(0.0));\n"
        f"    vec3 {id_}_rd = normalize({id_}_cm * vec3({uv}.x, {uv}.y * (u_resolution.y / u_resolution.x), 1.6));\n"
        f"    vec3 {color} = vec3(0.0);\n"
        f"    float {alpha} = 0.0;\n"
        f"    float {depth} = 0.0;\n"
        f"    float {id_}_t = 0.1;\n"
        f"    for (int {id_}_i = 0; {id_}_i < {steps}; {id_}_i++) {{\n"
        f"        if ({alpha} >= 0.98) break;\n"
        f"        vec3 {id_}_p = {id_}_ro + {id_}_rd * {id_}_t;\n"
        f"        vec3 {ps} = {id_}_p * {scale};\n"
    )
    if turbulence > 0:
        jitter = f"{ps} + {t} * {param_lit(node, 'turb_speed', 0.3)}"
        code += (
            f"        float {id_}_tnx = fract(sin(dot({jitter}, vec3(127.1, 311.7, 74.7))) * 43758.5453);\n"
            f"        float {id_}_tny = fract(sin(dot({jitter} + vec3(5.2, 1.3, 9.7), vec3(269.5, 183.3, 341.1))) * 43758.5453);\n"
            f"        float {id_}_tnz = fract(sin(dot({jitter} + vec3(3.1, 7.4, 2.9), vec3(113.5, 271.9, 93.3))) * 43758.5453);\n"
            f"        {ps} += (vec3({id_}_tnx, {id_}_tny, {id_}_tnz) * 2.0 - 1.0) * {fmt_float(turbulence)};\n"
        )
    code += (
        f"        float {id_}_d = orbital3d({ps}, {args});\n"
        f"        float {id_}_edgeN = fract(sin(dot({ps}, vec3(127.1, 311.7, 74.7))) * 43758.5453);\n"
        f"        float {id_}_edgeFade = exp(-length({ps}) * {param_lit(node, 'edge_softness', 0.6)} * (1.0 + {id_}_edgeN * 0.5));\n"
        f"        float {id_}_ds = pow(max({id_}_d, 0.0), {gamma}) * {param_lit(node, 'density_scale', 6.0)} * {id_}_edgeFade;\n"
        f"        float {id_}_sa = clamp({id_}_ds * {step}, 0.0, 1.0);\n"
        f"        if ({id_}_sa > 0.001) {{\n"
        f"            float {id_}_ax = dot(normalize({ps} + vec3(0.0001)), vec3(0.0, 0.0, 1.0));\n"
        f"            vec3 {id_}_sc = mix({color_b}, {color_a}, clamp({id_}_ax * 0.5 + 0.5, 0.0, 1.0));\n"
        f"            float {id_}_fr = 1.0 - abs(dot(normalize({id_}_p - {id_}_ro), {id_}_rd));\n"
        f"            {id_}_sc *= 1.0 + {id_}_fr * 0.5;\n"
        f"            {color} += (1.0 - {alpha}) * {id_}_sa * {id_}_sc;\n"
        f"            {alpha} += (1.0 - {alpha}) * {id_}_sa;\n"
        f"            {depth} += (1.0 - {alpha}) * {id_}_t;\n"
        f"        }}\n"
        f"        {id_}_t += {step};\n"
        f"    }}\n"
        f"    {color} = {color} / ({color} + vec3(0.6));\n"
        f"    {depth} = {depth} / ({steps}.0 * {step});\n"
    )
    return GLSLResult(code, {'color': color, 'alpha': alpha, 'depth': depth})


DEFINITIONS = [
    NodeDefinition(
        type='raymarch3d', label='Raymarch 3D', category='Effects', generate=gen_raymarch,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            cam_dist=('float', 'Camera Dist'),
            cam_height=('float', 'Cam Height'),
            cam_speed=('float', 'Orbit Speed'),
            shape_r=('float', 'Shape Radius'),
            blend_k=('float', 'Blend K'),
            light_pos=('vec2', 'Light XZ'),
            fog_dist=('float', 'Fog Distance'),
            noise_scale=('float', 'Noise Scale'),
        ),
        outputs=sockets(
            color=('vec3', 'Color'),
            depth=('float', 'Depth'),
            normal=('vec3', 'Normal'),
            occ=('float', 'Occlusion'),
            fog=('float', 'Fog Mask'),
        ),
        default_params={
            'scene': 'spheres',
            'max_steps': 80,
            'max_dist': 30.0,
            'surf_dist': 0.001,
            'cam_dist': 4.0,
            'cam_height': 1.5,
            'cam_speed': 0.3,
            'cam_fov': 1.5,
            'shape_r': 0.8,
            'blend_k': 0.3,
            'repeat_x': 3.0,
            'repeat_z': 3.0,
            'light_x': 2.0,
            'light_y': 5.0,
            'light_z': 3.0,
            'ambient': 0.05,
            'specular': 32.0,
            'fog_dist': 15.0,
            'fog_color': [0.7, 0.75, 0.85],
            'palette_preset': '4',
            'bg_preset': '0',
            'ao_steps': 5,
            'noise_scale': 1.5,
            'noise_strength': 0.3,
        },
        glsl_function=(SDF3D_GLSL, CAMERA3D_GLSL, NOISE3D_GLSL, PALETTE_GLSL),
        description='Raymarched SDF scene with orbit camera, Phong lighting, AO and fog',
    ),
    NodeDefinition(
        type='volumeClouds', label='Volume Clouds', category='Effects', generate=gen_volume_clouds,
        inputs=sockets(
            uv=('vec2', 'UV'),
            time=('float', 'Time'),
            cam_speed=('float', 'Cam Speed'),
            coverage=('float', 'Coverage'),
            density=('float', 'Density Scale'),
            sun_angle=('float', 'Sun Angle'),
        ),
        outputs=sockets(
            color=('vec3', 'Sky+Clouds'),
            cloud_mask=('float', 'Cloud Density'),
            sun=('float', 'Sun Disk'),
            sky=('vec3', 'Sky Only'),
        ),
        default_params={
            'steps': 40,
            'cloud_min_y': 1.5,
            'cloud_max_y': 5.0,
            'coverage': 0.3,
            'puffiness': 0.6,
            'density_scale': 0.8,
            'cloud_scale': 0.4,
            'scatter': 0.3,
            'cam_speed': 0.1,
            'sun_angle': 0.5,
            'sun_size': 0.03,
            'sky_top': [0.1, 0.2, 0.5],
            'sky_horizon': [0.8, 0.5, 0.3],
            'sky_ground': [0.3, 0.15, 0.05],
            'cloud_col': [1.0, 0.95, 0.85],
            'sun_col': [1.0, 0.85, 0.4],
        },
        glsl_function=(NOISE3D_GLSL, CLOUD_GLSL),
        description='Volumetric cloud slab over a sky gradient with a sun disk',
    ),
    NodeDefinition(
        type='chromaticAberration', label='Chromatic Aberration', category='Effects',
        generate=gen_chromatic_aberration,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time'), strength=('float', 'Strength')),
        outputs=sockets(
            uv_r=('vec2', 'UV (Red)'),
            uv_g=('vec2', 'UV (Green)'),
            uv_b=('vec2', 'UV (Blue)'),
            offset=('vec2', 'Offset'),
        ),
        default_params={'strength': 0.03, 'mode': 'radial', 'animate': 'false', 'anim_speed': 0.5},
        description='Per-channel UV offsets for red, green and blue',
    ),
    NodeDefinition(
        type='combineRGB', label='Combine RGB', category='Effects', generate=gen_combine_rgb,
        inputs=sockets(r=('vec3', 'R source'), g=('vec3', 'G source'), b=('vec3', 'B source')),
        outputs=sockets(
            color=('vec3', 'Color'),
            full_r=('vec3', 'R full'),
            full_g=('vec3', 'G full'),
            full_b=('vec3', 'B full'),
        ),
        default_params={'mode': 'channel'},
        description='Reassemble one color from three sources: channel pick, sum or average',
    ),
    NodeDefinition(
        type='orbitalVolume3d', label='Orbital 3D', category='3D', generate=gen_orbital_volume,
        inputs=sockets(uv=('vec2', 'UV'), time=('float', 'Time'), orbit_angle=('float', 'Orbit Angle')),
        outputs=sockets(
            color=('vec3', 'Color'),
            alpha=('float', 'Alpha'),
            depth=('float', 'Density Depth'),
        ),
        default_params={
            'n': 2.0,
            'l': 1.0,
            'm': 0.0,
            'a0': 0.5,
            'scale': 0.3,
            'steps': 80,
            'step_size': 0.04,
            'density_scale': 6.0,
            'gamma': 0.4,
            'edge_softness': 0.6,
            'turbulence': 0.0,
            'turb_speed': 0.3,
            'cam_dist': 2.5,
            'cam_speed': 0.2,
            'cam_angle': 0.0,
            'cam_pitch': 0.35,
            'color_a': [0.3, 0.6, 1.0],
            'color_b': [1.0, 0.4, 0.2],
        },
        glsl_function=(LAGUERRE_GLSL, REAL_SH_GLSL, ORBITAL_PSI_GLSL, ORBITAL3D_GLSL, ORBITAL_CAMERA_GLSL),
        description='Raymarched hydrogen orbital density volume',
    ),
]
