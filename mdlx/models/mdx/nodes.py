'''
# Nodes

Every object of the scene graph (bones, lights, helpers, attachments,
emitters, ...) starts with a Node that gives it a name, an identity
and a parent, together with its animated transformation.
'''
from mdlx.core import Chunk, InclusiveChunk
from mdlx.enum import Compliant
from mdlx import fields

from .enum import NodeFlags, LightType, CollisionShapeType
from .tracks import TrackChunk


NO_ID = 0xffffffff


class Node(InclusiveChunk):
    name      = fields.LiteralField(80)
    object_id = fields.StructField('I')
    parent_id = fields.StructField('I', default=NO_ID)
    flags     = fields.StructField('I', enum=NodeFlags)
    tracks    = fields.TaggedField([
        TrackChunk(b'KGTR', '3f'),  # translation
        TrackChunk(b'KGRT', '4f'),  # rotation
        TrackChunk(b'KGSC', '3f'),  # scaling
    ])

    def __str__(self):
        return self.name.text


class Bone(Chunk):
    node                 = Node()
    geoset_id            = fields.StructField('I', default=NO_ID)
    geoset_animation_id  = fields.StructField('I', default=NO_ID)


class Light(InclusiveChunk):
    node              = Node()
    light_type        = fields.StructField('I', enum=LightType, compliant=Compliant.ENUM)
    attenuation_start = fields.StructField('f')
    attenuation_end   = fields.StructField('f')
    color             = fields.StructField('3f', default=(1.0, 1.0, 1.0))
    intensity         = fields.StructField('f')
    ambient_color     = fields.StructField('3f', default=(1.0, 1.0, 1.0))
    ambient_intensity = fields.StructField('f')
    tracks            = fields.TaggedField([
        TrackChunk(b'KLAS', 'f'),  # attenuation start
        TrackChunk(b'KLAE', 'f'),  # attenuation end
        TrackChunk(b'KLAC', '3f'),  # color
        TrackChunk(b'KLAI', 'f'),  # intensity
        TrackChunk(b'KLBI', 'f'),  # ambient intensity
        TrackChunk(b'KLBC', '3f'),  # ambient color
        TrackChunk(b'KLAV', 'f'),  # visibility
    ])


class Attachment(InclusiveChunk):
    node          = Node()
    path          = fields.LiteralField(260)
    attachment_id = fields.StructField('I')
    tracks        = fields.TaggedField([
        TrackChunk(b'KATV', 'f'),  # visibility
    ])


class EventObject(Chunk):
    '''The tracks of an event object are the frames at which the event fires.'''
    node               = Node()
    tracks_tag         = fields.TagField(b'KEVT')
    tracks_count       = fields.StructField('I')
    global_sequence_id = fields.StructField('I', default=NO_ID)
    tracks             = fields.ArrayField(fields.StructField('I'), n='tracks_count')

    def pack(self, version=None) -> bytes:
        self.tracks_count.value = len(self.tracks.value)
        return super().pack(version)


shape2vertices = {
    CollisionShapeType.SPHERE: fields.StructField('3f'),
    fields.SelectField.Type.DEFAULT: fields.StructField('6f'),
}

shape2radius = {
    CollisionShapeType.SPHERE: fields.StructField('f'),
    CollisionShapeType.CYLINDER: fields.StructField('f'),
}


class CollisionShape(Chunk):
    '''Boxes, planes and cylinders have two vertices, spheres only one;
    spheres and cylinders have a radius too.'''
    node       = Node()
    shape_type = fields.StructField('I', enum=CollisionShapeType, compliant=Compliant.ENUM)
    vertices   = fields.SelectField('shape_type', shape2vertices)
    radius     = fields.SelectField('shape_type', shape2radius)


class Camera(InclusiveChunk):
    name                = fields.LiteralField(80)
    position            = fields.StructField('3f')
    field_of_view       = fields.StructField('f')
    far_clipping_plane  = fields.StructField('f')
    near_clipping_plane = fields.StructField('f')
    target_position     = fields.StructField('3f')
    tracks              = fields.TaggedField([
        TrackChunk(b'KCTR', '3f'),  # translation
        TrackChunk(b'KTTR', '3f'),  # target translation
        TrackChunk(b'KCRL', 'f'),  # rotation
    ])
