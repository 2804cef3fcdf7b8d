'''
# Materials

A material is a stack of layers, each one drawing a texture with its
blending mode. Newer versions of the format add shaders, emissive gain
and fresnel parameters to them.
'''
from mdlx.core import Chunk, InclusiveChunk
from mdlx.enum import Compliant
from mdlx import fields

from .enum import FilterMode, ShadingFlags
from .tracks import TrackChunk


class Texture(Chunk):
    replaceable_id = fields.StructField('I')
    file_name      = fields.LiteralField(260)
    flags          = fields.StructField('I')


class TextureAnimation(InclusiveChunk):
    tracks = fields.TaggedField([
        TrackChunk(b'KTAT', '3f'),  # translation
        TrackChunk(b'KTAR', '4f'),  # rotation
        TrackChunk(b'KTAS', '3f'),  # scaling
    ])


class Layer(InclusiveChunk):
    filter_mode          = fields.StructField('I', enum=FilterMode, compliant=Compliant.ENUM)
    shading_flags        = fields.StructField('I', enum=ShadingFlags)
    texture_id           = fields.StructField('I')
    texture_animation_id = fields.StructField('I', default=0xffffffff)
    coord_id             = fields.StructField('I')
    alpha                = fields.StructField('f', default=1.0)
    emissive_gain        = fields.VersionField(fields.StructField('f', default=1.0), greater_than=800)
    fresnel_color        = fields.VersionField(fields.StructField('3f', default=(1.0, 1.0, 1.0)), greater_than=900)
    fresnel_opacity      = fields.VersionField(fields.StructField('f'), greater_than=900)
    fresnel_team_color   = fields.VersionField(fields.StructField('f'), greater_than=900)
    tracks               = fields.TaggedField([
        TrackChunk(b'KMTF', 'I'),  # texture id
        TrackChunk(b'KMTA', 'f'),  # alpha
        TrackChunk(b'KMTE', 'f'),  # emissive gain
        TrackChunk(b'KFC3', '3f'),  # fresnel color
        TrackChunk(b'KFCA', 'f'),  # fresnel opacity
        TrackChunk(b'KFTC', 'f'),  # fresnel team color
    ])


class Material(InclusiveChunk):
    priority_plane = fields.StructField('I')
    flags          = fields.StructField('I')
    shader         = fields.VersionField(fields.LiteralField(80), greater_than=800)
    layers_tag     = fields.TagField(b'LAYS')
    layers         = fields.ArrayField(Layer(), prefix='I')
