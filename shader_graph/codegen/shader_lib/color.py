# Color GLSL functions
# Cosine palettes (IQ) and two-color gradients

PALETTE_GLSL = '''
vec3 palette(float t, vec3 a, vec3 b, vec3 c, vec3 d) {
    return a + b * cos(6.28318 * (c * t + d));
}'''

# mode: 0 linear x, 1 linear y, 2 radial, 3 angular, 4 diagonal
GRADIENT_GLSL = '''
vec3 gradientBlend(vec2 uv, vec3 colorA, vec3 colorB, int mode, float offset) {
    float t;
    if (mode == 0) { t = uv.x * 0.5 + 0.5; }
    else if (mode == 1) { t = uv.y * 0.5 + 0.5; }
    else if (mode == 2) { t = length(uv); }
    else if (mode == 3) { t = atan(uv.y, uv.x) / 6.28318 + 0.5; }
    else { t = (uv.x + uv.y) * 0.5 * 0.7071 + 0.5; }
    return mix(colorA, colorB, clamp(t + offset, 0.0, 1.0));
}'''
