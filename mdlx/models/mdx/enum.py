from enum import Enum, IntFlag


class InterpolationType(Enum):
    '''How the values between two keyframes of a track are computed;
    the last two carry the tangents for each keyframe.'''
    NONE    = 0
    LINEAR  = 1
    HERMITE = 2
    BEZIER  = 3

    @property
    def has_tangents(self):
        return self.value > InterpolationType.LINEAR.value


class NodeFlags(IntFlag):
    HELPER                   = 0x0
    DONT_INHERIT_TRANSLATION = 0x1
    DONT_INHERIT_ROTATION    = 0x2
    DONT_INHERIT_SCALING     = 0x4
    BILLBOARDED              = 0x8
    BILLBOARDED_LOCK_X       = 0x10
    BILLBOARDED_LOCK_Y       = 0x20
    BILLBOARDED_LOCK_Z       = 0x40
    CAMERA_ANCHORED          = 0x80
    BONE                     = 0x100
    LIGHT                    = 0x200
    EVENT_OBJECT             = 0x400
    ATTACHMENT               = 0x800
    PARTICLE_EMITTER         = 0x1000
    COLLISION_SHAPE          = 0x2000
    RIBBON_EMITTER           = 0x4000
    EMITTER_MOD_1            = 0x8000  # particle emitter: uses mdl, particle emitter 2: unshaded
    EMITTER_MOD_2            = 0x10000  # particle emitter: uses tga, particle emitter 2: sort primitives far z
    LINE_EMITTER             = 0x20000
    UNFOGGED                 = 0x40000
    MODEL_SPACE              = 0x80000
    XY_QUAD                  = 0x100000


class FilterMode(Enum):
    '''Blending of a material layer'''
    NONE        = 0
    TRANSPARENT = 1
    BLEND       = 2
    ADDITIVE    = 3
    ADD_ALPHA   = 4
    MODULATE    = 5
    MODULATE_2X = 6


class ShadingFlags(IntFlag):
    UNSHADED       = 0x01
    SPHERE_ENV_MAP = 0x02
    UNKNOWN4       = 0x04
    UNKNOWN8       = 0x08
    TWO_SIDED      = 0x10
    UNFOGGED       = 0x20
    NO_DEPTH_TEST  = 0x40
    NO_DEPTH_SET   = 0x80


class FaceType(Enum):
    '''Primitive used by a group of faces of a geoset'''
    POINTS         = 0
    LINES          = 1
    LINE_LOOP      = 2
    LINE_STRIP     = 3
    TRIANGLES      = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN   = 6
    QUADS          = 7
    QUAD_STRIP     = 8
    POLYGONS       = 9


class LightType(Enum):
    OMNI        = 0
    DIRECTIONAL = 1
    AMBIENT     = 2


class ParticleFilterMode(Enum):
    BLEND       = 0
    ADDITIVE    = 1
    MODULATE    = 2
    MODULATE_2X = 3
    ALPHA_KEY   = 4


class HeadOrTail(Enum):
    HEAD = 0
    TAIL = 1
    BOTH = 2


class CollisionShapeType(Enum):
    BOX      = 0
    PLANE    = 1
    SPHERE   = 2
    CYLINDER = 3
