# Physics pattern helpers
# Chladni plate modes and hydrogen-like orbital wavefunctions

CHLADNI_GLSL = '''
float chladni(vec2 p, float m, float n) {
    return cos(n * 3.14159265 * p.x) * cos(m * 3.14159265 * p.y)
         - cos(m * 3.14159265 * p.x) * cos(n * 3.14159265 * p.y);
}'''

# Associated Laguerre polynomial L_p^alpha(x), exact for p <= 5
LAGUERRE_GLSL = '''
float laguerre(int p, float alpha, float x) {
    if (p <= 0) return 1.0;
    if (p == 1) return 1.0 + alpha - x;
    float Lprev2 = 1.0;
    float Lprev1 = 1.0 + alpha - x;
    float Lcur = 0.0;
    for (int k = 2; k <= 5; k++) {
        if (k > p) break;
        float kf = float(k);
        Lcur = ((2.0*kf - 1.0 + alpha - x)*Lprev1 - (kf - 1.0 + alpha)*Lprev2) / kf;
        Lprev2 = Lprev1;
        Lprev1 = Lcur;
    }
    return Lcur;
}'''

# Real spherical harmonics Y_l^m for l <= 4
REAL_SH_GLSL = '''
float realSH(int l, int m, float cosT, float sinT, float phi) {
    if (l == 0) return 0.2821;
    if (l == 1) {
        if (m ==  0) return 0.4886 * cosT;
        if (m ==  1) return 0.4886 * sinT * cos(phi);
        if (m == -1) return 0.4886 * sinT * sin(phi);
    }
    if (l == 2) {
        if (m ==  0) return 0.3153 * (3.0*cosT*cosT - 1.0);
        if (m ==  1) return 1.0925 * sinT * cosT * cos(phi);
        if (m == -1) return 1.0925 * sinT * cosT * sin(phi);
        if (m ==  2) return 0.5462 * sinT*sinT * cos(2.0*phi);
        if (m == -2) return 0.5462 * sinT*sinT * sin(2.0*phi);
    }
    if (l == 3) {
        if (m ==  0) return 0.3731 * cosT*(5.0*cosT*cosT - 3.0);
        if (m ==  1) return 0.4572 * sinT*(5.0*cosT*cosT - 1.0)*cos(phi);
        if (m == -1) return 0.4572 * sinT*(5.0*cosT*cosT - 1.0)*sin(phi);
        if (m ==  2) return 1.4457 * sinT*sinT*cosT*cos(2.0*phi);
        if (m == -2) return 1.4457 * sinT*sinT*cosT*sin(2.0*phi);
        if (m ==  3) return 0.5900 * sinT*sinT*sinT*cos(3.0*phi);
        if (m == -3) return 0.5900 * sinT*sinT*sinT*sin(3.0*phi);
    }
    float c2 = cosT*cosT;
    float s2 = sinT*sinT;
    if (m ==  0) return 0.1057*(35.0*c2*c2 - 30.0*c2 + 3.0);
    if (m ==  1) return 0.4730*sinT*cosT*(7.0*c2 - 3.0)*cos(phi);
    if (m == -1) return 0.4730*sinT*cosT*(7.0*c2 - 3.0)*sin(phi);
    if (m ==  2) return 0.3345*s2*(7.0*c2 - 1.0)*cos(2.0*phi);
    if (m == -2) return 0.3345*s2*(7.0*c2 - 1.0)*sin(2.0*phi);
    if (m ==  3) return 1.2517*s2*sinT*cosT*cos(3.0*phi);
    if (m == -3) return 1.2517*s2*sinT*cosT*sin(3.0*phi);
    if (m ==  4) return 0.6267*s2*s2*cos(4.0*phi);
    if (m == -4) return 0.6267*s2*s2*sin(4.0*phi);
    return 0.0;
}'''

# Radial part times angular part; needs LAGUERRE_GLSL and REAL_SH_GLSL first
ORBITAL_PSI_GLSL = '''
float orbitalPsi3(vec3 p, float n, float l, float mq, float a0) {
    float r    = length(p);
    float cosT = (r < 0.00001) ? 1.0 : p.z / r;
    float sinT = sqrt(max(1.0 - cosT*cosT, 0.0));
    float phi  = atan(p.y, p.x);
    float rho  = 2.0 * r / max(n * a0, 0.0001);
    float lc   = clamp(l, 0.0, 4.0);
    int   lagp = int(clamp(floor(n) - floor(lc) - 1.0, 0.0, 5.0));
    float R    = pow(max(rho, 0.00001), l) * exp(-rho * 0.5)
                 * laguerre(lagp, 2.0*l + 1.0, rho);
    float Y    = realSH(int(lc), int(clamp(mq, -4.0, 4.0)), cosT, sinT, phi);
    return R * Y;
}'''
