# Escape-time and chaos-game fractal helpers
# Complex numbers are vec2 (x = real, y = imaginary)

COMPLEX_GLSL = '''
vec2 cmul(vec2 a, vec2 b) {
    return vec2(a.x*b.x - a.y*b.y, a.x*b.y + a.y*b.x);
}
vec2 cpow2(vec2 z) {
    return vec2(z.x*z.x - z.y*z.y, 2.0*z.x*z.y);
}
vec2 cpow3(vec2 z) {
    return vec2(z.x*(z.x*z.x - 3.0*z.y*z.y), z.y*(3.0*z.x*z.x - z.y*z.y));
}
vec2 cpow_polar(vec2 z, float k) {
    float r = length(z);
    float a = atan(z.y, z.x);
    return pow(max(r, 0.00001), k) * vec2(cos(k*a), sin(k*a));
}'''

IFS_HASH_GLSL = '''
float ifsHash(float n) {
    return fract(sin(n * 127.1 + 311.7) * 43758.5453);
}
vec2 ifsHash2(vec2 p) {
    float h = ifsHash(p.x + p.y * 57.0);
    return vec2(h, ifsHash(h + 1.0));
}'''

# ============ IFS transforms ============
# Each picks one affine map from a uniform random r in [0, 1)

# Barnsley fern, weights 1% / 85% / 7% / 7%
IFS_FERN_GLSL = '''
vec2 ifsFern(vec2 p, float r) {
    if (r < 0.01) {
        return vec2(0.0, 0.16 * p.y);
    } else if (r < 0.86) {
        return vec2(0.85*p.x + 0.04*p.y, -0.04*p.x + 0.85*p.y + 1.6);
    } else if (r < 0.93) {
        return vec2(0.2*p.x - 0.26*p.y,  0.23*p.x + 0.22*p.y + 1.6);
    } else {
        return vec2(-0.15*p.x + 0.28*p.y, 0.26*p.x + 0.24*p.y + 0.44);
    }
}'''

IFS_SIERPINSKI_GLSL = '''
vec2 ifsSierpinski(vec2 p, float r) {
    if (r < 0.333) {
        return p * 0.5;
    } else if (r < 0.667) {
        return p * 0.5 + vec2(0.5, 0.0);
    } else {
        return p * 0.5 + vec2(0.25, 0.5);
    }
}'''

IFS_DRAGON_GLSL = '''
vec2 ifsDragon(vec2 p, float r) {
    if (r < 0.5) {
        return vec2(p.x + p.y, p.y - p.x) * 0.7071;
    } else {
        return vec2(p.x - p.y - 1.0, p.y + p.x) * 0.7071;
    }
}'''

IFS_KOCH_GLSL = '''
vec2 ifsKoch(vec2 p, float r) {
    if (r < 0.25) {
        return p * 0.333;
    } else if (r < 0.5) {
        mat2 rot60 = mat2(0.5, 0.866, -0.866, 0.5);
        return rot60 * p * 0.333 + vec2(0.333, 0.0);
    } else if (r < 0.75) {
        mat2 rotm60 = mat2(0.5, -0.866, 0.866, 0.5);
        return rotm60 * p * 0.333 + vec2(0.5, 0.2887);
    } else {
        return p * 0.333 + vec2(0.667, 0.0);
    }
}'''

# preset -> (function name, helper block)
IFS_TRANSFORMS = {
    'fern': ('ifsFern', IFS_FERN_GLSL),
    'sierpinski': ('ifsSierpinski', IFS_SIERPINSKI_GLSL),
    'dragon': ('ifsDragon', IFS_DRAGON_GLSL),
    'koch': ('ifsKoch', IFS_KOCH_GLSL),
}
