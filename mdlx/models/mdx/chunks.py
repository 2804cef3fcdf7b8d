'''
# Top level chunks

Each chunk of the file has an header with its tag and the size of the body;
the body is a list of elements, with a fixed size or self sized.
'''
from mdlx.core import Chunk, SizedChunk
from mdlx.tags import Tag
from mdlx import fields

from .geometry import Extent, Sequence, Geoset, GeosetAnimation
from .materials import Texture, TextureAnimation, Material
from .nodes import Node, Bone, Light, Attachment, EventObject, CollisionShape, Camera
from .emitters import ParticleEmitter, ParticleEmitter2, RibbonEmitter, ParticleEmitterPopcorn


class VersionChunk(SizedChunk):
    '''The version of the format: it decides the layout of some of the records that follow.'''
    tag = Tag(b'VERS')
    keep_first = True

    version = fields.StructField('I', default=800)

    def propagate_version(self, version):
        # only the first VERS sets the version
        return self.version.value if version is None else version


class ModelChunk(SizedChunk):
    tag = Tag(b'MODL')

    name           = fields.LiteralField(80)
    animation_file = fields.LiteralField(260)
    extent         = Extent()
    blend_time     = fields.StructField('I')


class SequencesChunk(SizedChunk):
    tag = Tag(b'SEQS')

    sequences = fields.ArrayField(Sequence())
    padding   = fields.PaddingField()


class GlobalSequencesChunk(SizedChunk):
    tag = Tag(b'GLBS')

    durations = fields.ArrayField(fields.StructField('I'))
    padding   = fields.PaddingField()


class TexturesChunk(SizedChunk):
    tag = Tag(b'TEXS')

    textures = fields.ArrayField(Texture())
    padding  = fields.PaddingField()


class SoundTrack(Chunk):
    file_name = fields.LiteralField(260)
    volume    = fields.StructField('f')
    pitch     = fields.StructField('f')
    flags     = fields.StructField('I')


class SoundTracksChunk(SizedChunk):
    tag = Tag(b'SNDS')

    sound_tracks = fields.ArrayField(SoundTrack())
    padding      = fields.PaddingField()


class MaterialsChunk(SizedChunk):
    tag = Tag(b'MTLS')

    materials = fields.ArrayField(Material())


class TextureAnimationsChunk(SizedChunk):
    tag = Tag(b'TXAN')

    texture_animations = fields.ArrayField(TextureAnimation())


class GeosetsChunk(SizedChunk):
    tag = Tag(b'GEOS')

    geosets = fields.ArrayField(Geoset())


class GeosetAnimationsChunk(SizedChunk):
    tag = Tag(b'GEOA')

    geoset_animations = fields.ArrayField(GeosetAnimation())


class BonesChunk(SizedChunk):
    tag = Tag(b'BONE')

    bones = fields.ArrayField(Bone())


class LightsChunk(SizedChunk):
    tag = Tag(b'LITE')

    lights = fields.ArrayField(Light())


class HelpersChunk(SizedChunk):
    tag = Tag(b'HELP')

    helpers = fields.ArrayField(Node())


class AttachmentsChunk(SizedChunk):
    tag = Tag(b'ATCH')

    attachments = fields.ArrayField(Attachment())


class PivotPointsChunk(SizedChunk):
    tag = Tag(b'PIVT')

    points  = fields.ArrayField(fields.StructField('3f'))
    padding = fields.PaddingField()


class ParticleEmittersChunk(SizedChunk):
    tag = Tag(b'PREM')

    emitters = fields.ArrayField(ParticleEmitter())


class ParticleEmitters2Chunk(SizedChunk):
    tag = Tag(b'PRE2')

    emitters = fields.ArrayField(ParticleEmitter2())


class RibbonEmittersChunk(SizedChunk):
    tag = Tag(b'RIBB')

    emitters = fields.ArrayField(RibbonEmitter())


class EventObjectsChunk(SizedChunk):
    tag = Tag(b'EVTS')

    event_objects = fields.ArrayField(EventObject())


class CamerasChunk(SizedChunk):
    tag = Tag(b'CAMS')

    cameras = fields.ArrayField(Camera())


class CollisionShapesChunk(SizedChunk):
    tag = Tag(b'CLID')

    shapes = fields.ArrayField(CollisionShape())


class BindPoseChunk(SizedChunk):
    '''One 4x3 matrix for each node.'''
    tag = Tag(b'BPOS')

    matrices = fields.ArrayField(fields.StructField('12f'), prefix='I')


class FaceEffect(Chunk):
    target = fields.LiteralField(80)
    path   = fields.LiteralField(260)


class FaceEffectsChunk(SizedChunk):
    tag = Tag(b'FAFX')

    face_effects = fields.ArrayField(FaceEffect())
    padding      = fields.PaddingField()


class PopcornEmittersChunk(SizedChunk):
    tag = Tag(b'CORN')

    emitters = fields.ArrayField(ParticleEmitterPopcorn())


# in the canonical order used to pack a model never unpacked
CHUNKS = [
    VersionChunk,
    ModelChunk,
    SequencesChunk,
    GlobalSequencesChunk,
    TexturesChunk,
    SoundTracksChunk,
    MaterialsChunk,
    TextureAnimationsChunk,
    GeosetsChunk,
    GeosetAnimationsChunk,
    BonesChunk,
    LightsChunk,
    HelpersChunk,
    AttachmentsChunk,
    PivotPointsChunk,
    ParticleEmittersChunk,
    ParticleEmitters2Chunk,
    RibbonEmittersChunk,
    EventObjectsChunk,
    CamerasChunk,
    CollisionShapesChunk,
    BindPoseChunk,
    FaceEffectsChunk,
    PopcornEmittersChunk,
]
