# 2D signed distance functions, domain operators and SDF combiners
# Mostly Inigo Quilez formulations

# ============ Primitives ============

CIRCLE_SDF_GLSL = '''
float circleSDF(vec2 point, float size) {
    return length(point) - size;
}'''

BOX_SDF_GLSL = '''
float boxSDF(in vec2 position, in vec2 dimensions) {
    vec2 d = abs(position) - dimensions;
    return length(max(d, 0.0)) + min(max(d.x, d.y), 0.0);
}'''

RING_SDF_GLSL = '''
float ringSDF(vec2 point, float size) {
    float dist = length(point) - size;
    return abs(dist);
}'''

SD_BOX_GLSL = '''float sdBox(vec2 p, vec2 b) {
  vec2 d = abs(p) - b;
  return length(max(d,0.0)) + min(max(d.x,d.y),0.0);
}'''

SD_SEGMENT_GLSL = '''float sdSegment(vec2 p, vec2 a, vec2 b) {
  vec2 pa = p-a, ba = b-a;
  float h = clamp(dot(pa,ba)/dot(ba,ba), 0.0, 1.0);
  return length(pa - ba*h);
}'''

SD_ELLIPSE_GLSL = '''float sdEllipse(vec2 p, vec2 ab) {
  p = abs(p);
  if(p.x > p.y){ p = p.yx; ab = ab.yx; }
  float l = ab.y*ab.y - ab.x*ab.x;
  float m = ab.x*p.x/l; float m2 = m*m;
  float n = ab.y*p.y/l; float n2 = n*n;
  float c = (m2+n2-1.0)/3.0;
  float c3 = c*c*c;
  float q = c3 + m2*n2*2.0;
  float d = c3 + m2*n2;
  float g = m + m*n2;
  float co;
  if(d < 0.0){
    float h2 = acos(q/c3)/3.0;
    float s2 = cos(h2); float t2 = sin(h2)*sqrt(3.0);
    float rx2 = sqrt(-c*(s2+t2+2.0)+m2);
    float ry2 = sqrt(-c*(s2-t2+2.0)+m2);
    co = (ry2+sign(l)*rx2+abs(g)/(rx2*ry2)-m)/2.0;
  } else {
    float h2 = 2.0*m*n*sqrt(d);
    float s2 = sign(q+h2)*pow(abs(q+h2),1.0/3.0);
    float t2 = sign(q-h2)*pow(abs(q-h2),1.0/3.0);
    float rx2 = -(s2+t2)-c*4.0+2.0*m2;
    float ry2 = (s2-t2)*sqrt(3.0);
    float rm2 = sqrt(rx2*rx2+ry2*ry2);
    co = (ry2/sqrt(rm2-rx2)+2.0*g/rm2-m)/2.0;
  }
  vec2 r2 = ab*vec2(co, sqrt(1.0-co*co));
  return length(r2-p)*sign(p.y-r2.y);
}'''

# ============ Domain operators ============

ROTATE_GLSL = '''
vec2 rotate(vec2 v, float angle) {
    return vec2(
        v.x * cos(angle) - v.y * sin(angle),
        v.x * sin(angle) + v.y * cos(angle)
    );
}'''

OP_REPEAT_GLSL = '''vec2 opRepeat(vec2 p, float s) {
  return mod(p + s*0.5, s) - s*0.5;
}'''

# Relies on the TAU define from the shader preamble
OP_REPEAT_POLAR_GLSL = '''vec2 opRepeatPolar(vec2 p, float n) {
  float angle = TAU / n;
  float a = atan(p.y, p.x) + angle * 0.5;
  a = mod(a, angle) - angle * 0.5;
  return vec2(cos(a), sin(a)) * length(p);
}'''

# ============ Smooth combiners ============
# Cubic polynomial blend, h*h*h*k/6 seam

SMIN_GLSL = '''
float smin(float a, float b, float k) {
    float h = max(k - abs(a - b), 0.0) / k;
    return min(a, b) - h * h * h * k * (1.0 / 6.0);
}'''

SMAX_GLSL = '''
float smax(float a, float b, float k) {
    float h = max(k - abs(a - b), 0.0) / k;
    return max(a, b) + h * h * h * k * (1.0 / 6.0);
}'''

SSUBTRACT_GLSL = '''
float ssubtract(float a, float b, float k) {
    float h = max(k - abs(-b - a), 0.0) / k;
    return max(a, -b) + h * h * h * k * (1.0 / 6.0);
}'''

# ============ Shape selector ============
# One block per shape so a Shape SDF only pulls the function it calls.
# Box and segment reuse the sdBox/sdSegment blocks above.

SD_CIRCLE2_GLSL = '''float sdCircle2(vec2 p, float r) { return length(p) - r; }'''

SD_ROUNDED_BOX_GLSL = '''float sdRoundedBox(vec2 p, vec2 b, float r) {
  vec2 q = abs(p) - b + r;
  return length(max(q,0.0)) + min(max(q.x,q.y),0.0) - r;
}'''

SD_TRIANGLE_GLSL = '''float sdEquilateralTriangle(vec2 p, float r) {
  const float k = 1.7320508;
  p.x = abs(p.x) - r;
  p.y = p.y + r/k;
  if(p.x+k*p.y>0.0) p=vec2(p.x-k*p.y,-k*p.x-p.y)/2.0;
  p.x -= clamp(p.x,-2.0*r,0.0);
  return -length(p)*sign(p.y);
}'''

SD_HEXAGON_GLSL = '''float sdHexagon(vec2 p, float r) {
  const vec3 k = vec3(-0.866025,0.5,0.577350);
  p = abs(p);
  p -= 2.0*min(dot(k.xy,p),0.0)*k.xy;
  p -= vec2(clamp(p.x,-k.z*r,k.z*r),r);
  return length(p)*sign(p.y);
}'''

SD_STAR5_GLSL = '''float sdStar5(vec2 p, float r, float rf) {
  const vec2 k1 = vec2(0.809016994375,-0.587785252192);
  const vec2 k2 = vec2(-0.809016994375,-0.587785252192);
  p.x = abs(p.x);
  p -= 2.0*max(dot(k1,p),0.0)*k1;
  p -= 2.0*max(dot(k2,p),0.0)*k2;
  p.x = abs(p.x);
  p.y -= r;
  vec2 ba = rf*vec2(-k1.y,k1.x) - vec2(0,1);
  float h = clamp(dot(p,ba)/dot(ba,ba),-r,0.0);
  return length(p-ba*h)*sign(p.x*ba.y-p.y*ba.x);
}'''

SD_PIE_GLSL = '''float sdPie(vec2 p, vec2 c, float r) {
  p.x = abs(p.x);
  float l = length(p) - r;
  float m = length(p - c*clamp(dot(p,c),0.0,r));
  return max(l, m*sign(c.y*p.x-c.x*p.y));
}'''

SD_RING2_GLSL = '''float sdRing2(vec2 p, vec2 n, float r, float th) {
  p.x = abs(p.x);
  p = mat2(n.x,n.y,-n.y,n.x)*p;
  return max(abs(length(p)-r)-th*0.5,
             length(vec2(p.x,max(0.0,abs(r-p.y)-th*0.5)))*sign(p.x));
}'''

SD_CROSS_GLSL = '''float sdCross(vec2 p, vec2 b, float r) {
  p = abs(p); p = (p.y>p.x) ? p.yx : p.xy;
  vec2 q = p - b;
  float k = max(q.y,q.x);
  vec2 w = (k>0.0) ? q : vec2(b.y-p.x,0.0-k);
  return sign(k)*length(max(w,0.0)) + r;
}'''

SHAPE_SDF = {
    'circle': SD_CIRCLE2_GLSL,
    'box': SD_BOX_GLSL,
    'roundedBox': SD_ROUNDED_BOX_GLSL,
    'segment': SD_SEGMENT_GLSL,
    'triangle': SD_TRIANGLE_GLSL,
    'hexagon': SD_HEXAGON_GLSL,
    'star': SD_STAR5_GLSL,
    'pie': SD_PIE_GLSL,
    'ring': SD_RING2_GLSL,
    'cross': SD_CROSS_GLSL,
}
