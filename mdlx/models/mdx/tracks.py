'''
# Animation tracks

A track is an optional block introduced by its own tag (like KGTR for the
translation of a node) that contains the keyframes of an animated value:

    char[4] tag
    uint32  keyframesCount
    uint32  interpolationType
    uint32  globalSequenceId
    Keyframe[keyframesCount] {
        int32 frame
        X     value
        if (interpolationType > 1) {
            X inTan
            X outTan
        }
    }

where X is the type of the animated value (a float, a vector, a quaternion).
'''
import struct

from mdlx.core import TaggedChunk
from mdlx.tags import Tag
from mdlx.enum import Compliant
from mdlx import fields
from mdlx.exceptions import ValueEncodeException

from .enum import InterpolationType


def _items_count(fmt):
    return len(struct.unpack('<' + fmt, bytes(struct.calcsize('<' + fmt))))


def _value(items):
    return items[0] if len(items) == 1 else tuple(items)


class Keyframe(object):
    '''The value of a track at a given frame: the tangents are present only
    for the interpolations that need them.'''
    __slots__ = ('frame', 'data', 'in_tan', 'out_tan')

    def __init__(self, frame, data, in_tan=None, out_tan=None):
        self.frame = frame
        self.data = data
        self.in_tan = in_tan
        self.out_tan = out_tan

    def __repr__(self):
        if self.in_tan is None:
            return f'<{self.__class__.__name__}({self.frame}: {self.data!r})>'
        return f'<{self.__class__.__name__}({self.frame}: {self.data!r}, in={self.in_tan!r}, out={self.out_tan!r})>'

    def __eq__(self, other):
        if not isinstance(other, Keyframe):
            return NotImplemented

        return self.astuple() == other.astuple()

    def astuple(self):
        return (self.frame, self.data, self.in_tan, self.out_tan)


class KeyframesField(fields.Field):
    '''The keyframes of the track that is the father of this field: the number,
    the format of the values and the presence of the tangents are taken from it.'''

    def __init__(self, **kw):
        kw.setdefault('default', [])
        super().__init__(**kw)

    def value_from_default(self):
        return list(self.default)

    def __len__(self):
        return len(self.value)

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def get_format(self, with_tangents):
        fmt = self.father.format
        return '<i' + (fmt * 3 if with_tangents else fmt)

    def unpack(self, stream, version=None):
        with_tangents = self.father.interpolation.value.has_tangents
        fmt = self.get_format(with_tangents)
        count = self.father.keyframes_count.value
        n = _items_count(self.father.format)

        raw = stream.read(count * struct.calcsize(fmt))
        self.value = []
        for items in struct.iter_unpack(fmt, raw):
            frame, items = items[0], items[1:]
            data = _value(items[:n])
            if with_tangents:
                self.value.append(Keyframe(frame, data, _value(items[n:2 * n]), _value(items[2 * n:])))
            else:
                self.value.append(Keyframe(frame, data))

        self._remember(self.snapshot(with_tangents), raw)

    def snapshot(self, with_tangents):
        return (with_tangents, tuple(_.astuple() for _ in self.value))

    def _items(self, value):
        return (value,) if not isinstance(value, (tuple, list)) else tuple(value)

    def pack(self, version=None) -> bytes:
        with_tangents = self.father.interpolation.value.has_tangents
        raw = self._recall(self.snapshot(with_tangents))
        if raw is not None:
            return raw

        fmt = self.get_format(with_tangents)
        result = []
        for keyframe in self.value:
            items = (keyframe.frame,) + self._items(keyframe.data)
            if with_tangents:
                items += self._items(keyframe.in_tan) + self._items(keyframe.out_tan)
            try:
                result.append(struct.pack(fmt, *items))
            except struct.error as e:
                raise ValueEncodeException(reason=f'keyframe {keyframe!r} doesn\'t fit: {e}')

        return b''.join(result)


class TrackChunk(TaggedChunk):
    '''Track with the given tag, the format of the animated value
    follows the struct module conventions (like 'f' or '3f').'''
    keyframes_count    = fields.StructField('I')
    interpolation      = fields.StructField('I', enum=InterpolationType, compliant=Compliant.ENUM)
    global_sequence_id = fields.StructField('I', default=0xffffffff)
    keyframes          = KeyframesField()

    def __init__(self, tag, format, **kwargs):
        self.tag = Tag(tag)
        self.format = format
        super().__init__(**kwargs)

    def __repr__(self):
        return '<%s(%s, %s, %d keyframes)>' % (
            self.__class__.__name__, self.tag, self.interpolation.value, len(self.keyframes))

    def append(self, frame, data, in_tan=None, out_tan=None):
        self.keyframes.value.append(Keyframe(frame, data, in_tan, out_tan))

    def pack(self, version=None) -> bytes:
        self.keyframes_count.value = len(self.keyframes.value)
        return super().pack(version)

