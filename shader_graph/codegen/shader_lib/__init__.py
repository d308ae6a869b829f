# Shader GLSL Library Package
# Re-exports all GLSL helper constants used by node definitions

from .sdf import (
    CIRCLE_SDF_GLSL, BOX_SDF_GLSL, RING_SDF_GLSL,
    SD_BOX_GLSL, SD_SEGMENT_GLSL, SD_ELLIPSE_GLSL,
    ROTATE_GLSL, OP_REPEAT_GLSL, OP_REPEAT_POLAR_GLSL,
    SMIN_GLSL, SMAX_GLSL, SSUBTRACT_GLSL,
    SHAPE_SDF,
)
from .noise import NOISE_HELPERS_GLSL, FBM_GLSL, VORONOI_GLSL, DOMAIN_WARP_GLSL, FLOW_FIELD_GLSL
from .color import PALETTE_GLSL, GRADIENT_GLSL
from .effects import MAKE_LIGHT_GLSL, LIGHT_GLSL, TONE_MAP_GLSL, GRAIN_GLSL
from .spaces import HYPERBOLIC_GLSL, MOBIUS_GLSL
from .fractals import COMPLEX_GLSL, IFS_HASH_GLSL, IFS_TRANSFORMS
from .physics import CHLADNI_GLSL, LAGUERRE_GLSL, REAL_SH_GLSL, ORBITAL_PSI_GLSL
from .threed import (
    NOISE3D_GLSL, SDF3D_GLSL, CAMERA3D_GLSL, CLOUD_GLSL,
    ORBITAL3D_GLSL, ORBITAL_CAMERA_GLSL,
)

__all__ = [
    'CIRCLE_SDF_GLSL',
    'BOX_SDF_GLSL',
    'RING_SDF_GLSL',
    'SD_BOX_GLSL',
    'SD_SEGMENT_GLSL',
    'SD_ELLIPSE_GLSL',
    'ROTATE_GLSL',
    'OP_REPEAT_GLSL',
    'OP_REPEAT_POLAR_GLSL',
    'SMIN_GLSL',
    'SMAX_GLSL',
    'SSUBTRACT_GLSL',
    'SHAPE_SDF',
    'NOISE_HELPERS_GLSL',
    'FBM_GLSL',
    'VORONOI_GLSL',
    'DOMAIN_WARP_GLSL',
    'FLOW_FIELD_GLSL',
    'PALETTE_GLSL',
    'GRADIENT_GLSL',
    'MAKE_LIGHT_GLSL',
    'LIGHT_GLSL',
    'TONE_MAP_GLSL',
    'GRAIN_GLSL',
    'HYPERBOLIC_GLSL',
    'MOBIUS_GLSL',
    'COMPLEX_GLSL',
    'IFS_HASH_GLSL',
    'IFS_TRANSFORMS',
    'CHLADNI_GLSL',
    'LAGUERRE_GLSL',
    'REAL_SH_GLSL',
    'ORBITAL_PSI_GLSL',
    'NOISE3D_GLSL',
    'SDF3D_GLSL',
    'CAMERA3D_GLSL',
    'CLOUD_GLSL',
    'ORBITAL3D_GLSL',
    'ORBITAL_CAMERA_GLSL',
]
