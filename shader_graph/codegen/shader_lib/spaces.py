# UV space warps
# Poincare disk and complex-plane Mobius maps; the rest are inline expressions

HYPERBOLIC_GLSL = '''
vec2 hyperbolicSpace(vec2 p, float k) {
    float r2 = dot(p, p);
    return p * (2.0 / max(1.0 + k * r2, 0.001));
}'''

# Complex arithmetic on vec2 (x = real, y = imaginary)
MOBIUS_GLSL = '''
vec2 cMul(vec2 a, vec2 b) { return vec2(a.x*b.x - a.y*b.y, a.x*b.y + a.y*b.x); }
vec2 cDiv(vec2 a, vec2 b) {
    float d = dot(b, b);
    if (d <= 0.00001) return vec2(0.0);
    return vec2(dot(a, b), a.y*b.x - a.x*b.y) / d;
}
vec2 mobiusSpace(vec2 z, vec2 pole, float ang) {
    vec2 rot = vec2(cos(ang), sin(ang));
    vec2 num = cMul(rot, z - pole);
    vec2 den = vec2(1.0, 0.0) - cMul(vec2(pole.x, -pole.y), z);
    return cDiv(num, den);
}'''
