'''
# Emitters

Particle emitters spawning models (PREM), textured quads (PRE2), ribbons
(RIBB) and, in the newer versions, popcorn effects (CORN).
'''
from mdlx.core import InclusiveChunk
from mdlx.enum import Compliant
from mdlx import fields

from .enum import ParticleFilterMode, HeadOrTail
from .nodes import Node
from .tracks import TrackChunk


class ParticleEmitter(InclusiveChunk):
    node          = Node()
    emission_rate = fields.StructField('f')
    gravity       = fields.StructField('f')
    longitude     = fields.StructField('f')
    latitude      = fields.StructField('f')
    path          = fields.LiteralField(260)  # model spawned
    lifespan      = fields.StructField('f')
    speed         = fields.StructField('f')
    tracks        = fields.TaggedField([
        TrackChunk(b'KPEE', 'f'),  # emission rate
        TrackChunk(b'KPEG', 'f'),  # gravity
        TrackChunk(b'KPLN', 'f'),  # longitude
        TrackChunk(b'KPLT', 'f'),  # latitude
        TrackChunk(b'KPEL', 'f'),  # lifespan
        TrackChunk(b'KPES', 'f'),  # speed
        TrackChunk(b'KPEV', 'f'),  # visibility
    ])


class ParticleEmitter2(InclusiveChunk):
    node            = Node()
    speed           = fields.StructField('f')
    variation       = fields.StructField('f')
    latitude        = fields.StructField('f')
    gravity         = fields.StructField('f')
    lifespan        = fields.StructField('f')
    emission_rate   = fields.StructField('f')
    width           = fields.StructField('f')
    length          = fields.StructField('f')
    filter_mode     = fields.StructField('I', enum=ParticleFilterMode, compliant=Compliant.ENUM)
    rows            = fields.StructField('I', default=1)
    columns         = fields.StructField('I', default=1)
    head_or_tail    = fields.StructField('I', enum=HeadOrTail, compliant=Compliant.ENUM)
    tail_length     = fields.StructField('f')
    time            = fields.StructField('f')
    segment_color   = fields.StructField('9f')  # three RGB colors
    segment_alpha   = fields.StructField('3B')
    segment_scaling = fields.StructField('3f')
    head_intervals  = fields.StructField('6I')  # head interval and head decay interval
    tail_intervals  = fields.StructField('6I')  # tail interval and tail decay interval
    texture_id      = fields.StructField('I')
    squirt          = fields.StructField('I')
    priority_plane  = fields.StructField('I')
    replaceable_id  = fields.StructField('I')
    tracks          = fields.TaggedField([
        TrackChunk(b'KP2S', 'f'),  # speed
        TrackChunk(b'KP2R', 'f'),  # variation
        TrackChunk(b'KP2L', 'f'),  # latitude
        TrackChunk(b'KP2G', 'f'),  # gravity
        TrackChunk(b'KP2E', 'f'),  # emission rate
        TrackChunk(b'KP2N', 'f'),  # length
        TrackChunk(b'KP2W', 'f'),  # width
        TrackChunk(b'KP2V', 'f'),  # visibility
    ])


class RibbonEmitter(InclusiveChunk):
    node          = Node()
    height_above  = fields.StructField('f')
    height_below  = fields.StructField('f')
    alpha         = fields.StructField('f', default=1.0)
    color         = fields.StructField('3f', default=(1.0, 1.0, 1.0))
    lifespan      = fields.StructField('f')
    texture_slot  = fields.StructField('I')
    emission_rate = fields.StructField('I')
    rows          = fields.StructField('I', default=1)
    columns       = fields.StructField('I', default=1)
    material_id   = fields.StructField('I')
    gravity       = fields.StructField('f')
    tracks        = fields.TaggedField([
        TrackChunk(b'KRHA', 'f'),  # height above
        TrackChunk(b'KRHB', 'f'),  # height below
        TrackChunk(b'KRAL', 'f'),  # alpha
        TrackChunk(b'KRCO', '3f'),  # color
        TrackChunk(b'KRTX', 'I'),  # texture slot
        TrackChunk(b'KRVS', 'f'),  # visibility
    ])


class ParticleEmitterPopcorn(InclusiveChunk):
    node                       = Node()
    lifespan                   = fields.StructField('f')
    emission_rate              = fields.StructField('f')
    speed                      = fields.StructField('f')
    color                      = fields.StructField('3f', default=(1.0, 1.0, 1.0))
    alpha                      = fields.StructField('f', default=1.0)
    replaceable_id             = fields.StructField('I')
    path                       = fields.LiteralField(260)
    animation_visibility_guide = fields.LiteralField(260)
    tracks                     = fields.TaggedField([
        TrackChunk(b'KPPA', 'f'),  # alpha
        TrackChunk(b'KPPC', '3f'),  # color
        TrackChunk(b'KPPE', 'f'),  # emission rate
        TrackChunk(b'KPPL', 'f'),  # lifespan
        TrackChunk(b'KPPS', 'f'),  # speed
        TrackChunk(b'KPPV', 'f'),  # visibility
    ])
