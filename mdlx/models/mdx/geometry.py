'''
# Geometry

The records describing the meshes of the model (the geosets), their
animated visibility and the sequences with their bounding extents.
'''
from mdlx.core import Chunk, InclusiveChunk, TaggedChunk
from mdlx.enum import Compliant
from mdlx.tags import Tag
from mdlx import fields

from .enum import FaceType
from .tracks import TrackChunk


class Extent(Chunk):
    bounds_radius = fields.StructField('f')
    minimum       = fields.StructField('3f')
    maximum       = fields.StructField('3f')


class Sequence(Chunk):
    name       = fields.LiteralField(80)
    interval   = fields.StructField('2I')
    move_speed = fields.StructField('f')
    flags      = fields.StructField('I')  # 0: looping, 1: non looping
    rarity     = fields.StructField('f')
    sync_point = fields.StructField('I')
    extent     = Extent()


class Tangents(TaggedChunk):
    tag = Tag(b'TANG')

    tangents = fields.ArrayField(fields.StructField('4f'), prefix='I')


class Skin(TaggedChunk):
    tag = Tag(b'SKIN')

    weights = fields.ArrayField(fields.StructField('B'), prefix='I')


class UVSet(TaggedChunk):
    tag = Tag(b'UVBS')

    coordinates = fields.ArrayField(fields.StructField('2f'), prefix='I')


class Geoset(InclusiveChunk):
    '''
        VRTX, uint32 count, float[count][3] vertexPositions
        NRMS, uint32 count, float[count][3] vertexNormals
        PTYP, uint32 count, uint32[count] faceTypeGroups
        PCNT, uint32 count, uint32[count] faceGroups
        PVTX, uint32 count, uint16[count] faces
        GNDX, uint32 count, uint8[count] vertexGroups
        MTGC, uint32 count, uint32[count] matrixGroups
        MATS, uint32 count, uint32[count] matrixIndices
        uint32 materialId
        uint32 selectionGroup
        uint32 selectionFlags
        if (version > 800) {
            uint32 lod
            char[80] lodName
        }
        Extent extent
        uint32 extentsCount
        Extent[extentsCount] sequenceExtents
        (TANG)
        (SKIN)
        UVAS, uint32 count, UVBS[count]

    The optional tangents and skin blocks end at the UVAS tag.
    '''
    vertices_tag       = fields.TagField(b'VRTX')
    vertices           = fields.ArrayField(fields.StructField('3f'), prefix='I')
    normals_tag        = fields.TagField(b'NRMS')
    normals            = fields.ArrayField(fields.StructField('3f'), prefix='I')
    face_types_tag     = fields.TagField(b'PTYP')
    face_types         = fields.ArrayField(fields.StructField('I', enum=FaceType, compliant=Compliant.ENUM), prefix='I')
    face_groups_tag    = fields.TagField(b'PCNT')
    face_groups        = fields.ArrayField(fields.StructField('I'), prefix='I')
    faces_tag          = fields.TagField(b'PVTX')
    faces              = fields.ArrayField(fields.StructField('H'), prefix='I')
    vertex_groups_tag  = fields.TagField(b'GNDX')
    vertex_groups      = fields.ArrayField(fields.StructField('B'), prefix='I')
    matrix_groups_tag  = fields.TagField(b'MTGC')
    matrix_groups      = fields.ArrayField(fields.StructField('I'), prefix='I')
    matrix_indices_tag = fields.TagField(b'MATS')
    matrix_indices     = fields.ArrayField(fields.StructField('I'), prefix='I')
    material_id        = fields.StructField('I')
    selection_group    = fields.StructField('I')
    selection_flags    = fields.StructField('I')
    lod                = fields.VersionField(fields.StructField('I'), greater_than=800)
    lod_name           = fields.VersionField(fields.LiteralField(80), greater_than=800)
    extent             = Extent()
    sequence_extents   = fields.ArrayField(Extent(), prefix='I')
    extra              = fields.TaggedField([Tangents(), Skin()], terminated=True)
    uv_sets_tag        = fields.TagField(b'UVAS')
    uv_sets            = fields.ArrayField(UVSet(), prefix='I')


class GeosetAnimation(InclusiveChunk):
    alpha     = fields.StructField('f', default=1.0)
    flags     = fields.StructField('I')
    color     = fields.StructField('3f', default=(1.0, 1.0, 1.0))
    geoset_id = fields.StructField('I')
    tracks    = fields.TaggedField([
        TrackChunk(b'KGAO', 'f'),  # alpha
        TrackChunk(b'KGAC', '3f'),  # color
    ])
