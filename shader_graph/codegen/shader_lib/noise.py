# 2D value noise, FBM, Voronoi and domain warp
#
# NOISE_HELPERS_GLSL is its own block: FBM, Voronoi and Domain Warp all list
# it, and text dedup keeps a single copy per shader.

NOISE_HELPERS_GLSL = '''
// 2D value noise helpers (shared by FBM, Voronoi, DomainWarp)
vec2 noiseHash2(vec2 p) {
    p = vec2(dot(p, vec2(127.1, 311.7)), dot(p, vec2(269.5, 183.3)));
    return -1.0 + 2.0 * fract(sin(p) * 43758.5453123);
}
float noiseHash1(vec2 p) {
    return fract(sin(dot(p, vec2(127.1, 311.7))) * 43758.5453123);
}
float valueNoise(vec2 p) {
    vec2 i = floor(p);
    vec2 f = fract(p);
    vec2 u = f * f * (3.0 - 2.0 * f);
    return mix(mix(noiseHash1(i + vec2(0.0,0.0)),
                   noiseHash1(i + vec2(1.0,0.0)), u.x),
               mix(noiseHash1(i + vec2(0.0,1.0)),
                   noiseHash1(i + vec2(1.0,1.0)), u.x), u.y);
}'''

FBM_GLSL = '''
float fbm(vec2 p, int octaves, float lacunarity, float gain) {
    float value = 0.0;
    float amp = 0.5;
    float freq = 1.0;
    for (int i = 0; i < 8; i++) {
        if (i >= octaves) break;
        value += amp * valueNoise(p * freq);
        amp  *= gain;
        freq *= lacunarity;
    }
    return value;
}'''

VORONOI_GLSL = '''
// IQ-style 2D Voronoi returning minimum distance
float voronoi(vec2 p, float jitter) {
    vec2 i = floor(p);
    vec2 f = fract(p);
    float minDist = 8.0;
    for (int y = -1; y <= 1; y++) {
        for (int x = -1; x <= 1; x++) {
            vec2 neighbor = vec2(float(x), float(y));
            vec2 point = noiseHash2(i + neighbor);
            point = 0.5 + 0.5 * sin(jitter * 6.2831853 * point);
            vec2 diff = neighbor + point - f;
            float dist = length(diff);
            minDist = min(minDist, dist);
        }
    }
    return minDist;
}'''

# Own fbm copy (fbmW) so it never clashes with FBM_GLSL
DOMAIN_WARP_GLSL = '''
float fbmW(vec2 p, int octaves, float lacunarity, float gain) {
    float value = 0.0;
    float amp = 0.5;
    float freq = 1.0;
    for (int i = 0; i < 8; i++) {
        if (i >= octaves) break;
        value += amp * valueNoise(p * freq);
        amp  *= gain;
        freq *= lacunarity;
    }
    return value;
}
vec2 domainWarp(vec2 p, float strength, int octaves, float lacunarity, float gain) {
    vec2 q = vec2(fbmW(p              , octaves, lacunarity, gain),
                  fbmW(p + vec2(5.2, 1.3), octaves, lacunarity, gain));
    return p + strength * q;
}'''

# Needs NOISE_HELPERS_GLSL first; fbmFF keeps clear of FBM_GLSL's fbm.
# ffAngle mode: 0 perlin, 1 curl, 2 quantized to multiples of quant
FLOW_FIELD_GLSL = '''
float fbmFF(vec2 p, int octaves, float lacunarity, float gain) {
    float value = 0.0; float amp = 0.5; float freq = 1.0;
    for (int i = 0; i < 8; i++) {
        if (i >= octaves) break;
        value += amp * valueNoise(p * freq);
        amp *= gain; freq *= lacunarity;
    }
    return value;
}
float ffAngle(vec2 p, float scale, float quant, int mode) {
    vec2  sp = p * scale;
    float n  = fbmFF(sp, 4, 2.0, 0.5);
    if (mode == 1) {
        float eps = 0.01;
        float nx  = fbmFF(sp + vec2(eps, 0.0), 4, 2.0, 0.5);
        float ny  = fbmFF(sp + vec2(0.0, eps), 4, 2.0, 0.5);
        return atan((ny - n) / eps, -(nx - n) / eps);
    }
    float angle = n * 6.28318;
    if (mode == 2 && quant > 0.001) {
        angle = floor(angle / quant + 0.5) * quant;
    }
    return angle;
}'''
