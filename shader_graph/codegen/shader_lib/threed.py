# 3D helpers for raymarched nodes
# Value noise, SDF primitives, camera matrices, cloud density, orbital volume

NOISE3D_GLSL = '''
float hash3(vec3 p) {
    p = fract(p * vec3(127.1, 311.7, 74.7));
    p += dot(p, p.yzx + 19.19);
    return fract((p.x + p.y) * p.z);
}
float noise3(vec3 p) {
    vec3 i = floor(p);
    vec3 f = fract(p);
    vec3 u = f * f * (3.0 - 2.0 * f);
    return mix(mix(mix(hash3(i+vec3(0,0,0)), hash3(i+vec3(1,0,0)), u.x),
                   mix(hash3(i+vec3(0,1,0)), hash3(i+vec3(1,1,0)), u.x), u.y),
               mix(mix(hash3(i+vec3(0,0,1)), hash3(i+vec3(1,0,1)), u.x),
                   mix(hash3(i+vec3(0,1,1)), hash3(i+vec3(1,1,1)), u.x), u.y), u.z);
}
float fbm3(vec3 p, int octaves, float lacunarity, float gain) {
    float v = 0.0; float a = 0.5; float f2 = 1.0;
    for (int i = 0; i < 8; i++) {
        if (i >= octaves) break;
        v += a * noise3(p * f2);
        a *= gain; f2 *= lacunarity;
    }
    return v;
}'''

SDF3D_GLSL = '''
float sdSphere(vec3 p, float r) { return length(p) - r; }
float sdBox3(vec3 p, vec3 b) {
    vec3 d = abs(p) - b;
    return length(max(d, 0.0)) + min(max(d.x, max(d.y, d.z)), 0.0);
}
float sdTorus(vec3 p, float R, float r) {
    return length(vec2(length(p.xz) - R, p.y)) - r;
}
float sdCapsule(vec3 p, vec3 a, vec3 b, float r) {
    vec3 ab = b - a; vec3 ap = p - a;
    float t = clamp(dot(ap, ab) / dot(ab, ab), 0.0, 1.0);
    return length(ap - ab * t) - r;
}
float sdPlane(vec3 p, float height) { return p.y - height; }
float sminSDF(float a, float b, float k) {
    float h = clamp(0.5 + 0.5*(b-a)/k, 0.0, 1.0);
    return mix(b, a, h) - k*h*(1.0-h);
}
vec3 opRep(vec3 p, vec3 c) { return mod(p + 0.5*c, c) - 0.5*c; }'''

# Look-at matrix: ro origin, ta target, cr roll
CAMERA3D_GLSL = '''
mat3 setCamera(vec3 ro, vec3 ta, float cr) {
    vec3 cw = normalize(ta - ro);
    vec3 cp = vec3(sin(cr), cos(cr), 0.0);
    vec3 cu = normalize(cross(cw, cp));
    vec3 cv = normalize(cross(cu, cw));
    return mat3(cu, cv, cw);
}'''

# Needs NOISE3D_GLSL first; billowy abs-noise turbulence with height falloff
CLOUD_GLSL = '''
float turbulence(vec3 p, int oct) {
    float v = 0.0; float a = 0.5; float f = 1.0;
    for (int i = 0; i < 6; i++) {
        if (i >= oct) break;
        v += a * abs(noise3(p * f) * 2.0 - 1.0);
        a *= 0.5; f *= 2.0;
    }
    return v;
}
float cloudDensity(vec3 p, float coverage, float puffiness, float scale) {
    float base = -p.y * 0.5 + coverage;
    float turb = turbulence(p * scale, 4);
    return max(base - turb * puffiness, 0.0);
}'''

# |psi|^2 on top of orbitalPsi3 from the physics helpers
ORBITAL3D_GLSL = '''
float orbital3d(vec3 p, float n, float l, float m, float a0) {
    float psi = orbitalPsi3(p, n, l, m, a0);
    return psi * psi;
}'''

ORBITAL_CAMERA_GLSL = '''
mat3 orbital3dCam(vec3 ro, vec3 ta) {
    vec3 cw = normalize(ta - ro);
    vec3 cu = normalize(cross(cw, vec3(0.0, 1.0, 0.0)));
    vec3 cv = cross(cu, cw);
    return mat3(cu, cv, cw);
}'''
