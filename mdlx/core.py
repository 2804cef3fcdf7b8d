"""
Core module for the abstraction of a chunked file format

"""
import struct
from typing import Tuple, List

from .fields import Field, PaddingField
from .meta import MetaChunk
from .streams import Stream
from .tags import Tag, Header, U32_MAX
from .exceptions import (
    MdlxException,
    ChunkNotEnoughInputException,
    ChunkLeftoverException,
    InclusiveSizeTooSmallException,
    InclusiveNotEnoughInputException,
    InclusiveLeftoverException,
    SizeOverflowException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    a sequence of fields, declared as class attributes, that are unpacked
    and packed in the order of declaration.

    A Chunk can contain sub-chunks, since a Chunk is a Field itself.

    If a path or some bytes are passed to the constructor, the chunk is
    unpacked from them.
    """

    def __init__(self, filepath=None, version=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if filepath is not None:
            stream = Stream(filepath)
            self.logger.debug('unpacking \'%s\' from %s', self.__class__.__name__, stream)
            self.unpack(stream, version)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, str(field))
        return msg

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        return all(field == getattr(other, name) for name, field in self.get_fields())

    def init(self):
        '''Reset the fields already created to their defaults.'''
        for name in self.get_ordered_fields_name():
            if name in self.__dict__:
                self.__dict__[name].init()

    @property
    def value(self):
        return self

    @value.setter
    def value(self, value):
        raise AttributeError(f'a {self.__class__.__name__} can be set only with another chunk')

    @property
    def static_size(self):
        widths = [field.static_size for _, field in self.get_fields()]

        return None if None in widths else sum(widths)

    def propagate_version(self, version):
        '''Return the version to use for the chunks following this one.'''
        return version

    def unpack(self, stream, version=None):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        If a field fails, the exception is re-raised with its name prepended to the chain.'''
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset 0x%x',
                              self.__class__.__name__, field_name, stream.base + stream.tell())

            try:
                field.unpack(stream, version)
            except MdlxException as e:
                e.chain.insert(0, field_name)
                raise

    def pack(self, version=None) -> bytes:
        '''Encode the fields one after the other.'''
        result = []
        for field_name, field in self.get_fields():
            self.logger.debug('packing %s.%s', self.__class__.__name__, field_name)

            try:
                result.append(field.pack(version))
            except MdlxException as e:
                e.chain.insert(0, field_name)
                raise

        return b''.join(result)


class InclusiveChunk(Chunk):
    '''Chunk prefixed by an u32 with its own size, the u32 itself included.'''
    SIZE = 4

    @property
    def static_size(self):
        return None

    def unpack(self, stream, version=None):
        size, = struct.unpack('<I', stream.read(InclusiveChunk.SIZE))

        if size < InclusiveChunk.SIZE:
            raise InclusiveSizeTooSmallException(size=size)

        if size - InclusiveChunk.SIZE > stream.remaining:
            raise InclusiveNotEnoughInputException(size=size, available=stream.remaining)

        body = stream.window(size - InclusiveChunk.SIZE)
        super().unpack(body, version)

        if not body.is_empty():
            raise InclusiveLeftoverException(leftover=body.remaining)

    def pack(self, version=None) -> bytes:
        body = super().pack(version)
        size = len(body) + InclusiveChunk.SIZE

        if size > U32_MAX:
            raise SizeOverflowException(size=size)

        return struct.pack('<I', size) + body


class TaggedChunk(Chunk):
    '''Chunk introduced by its tag, indicated by the class attribute "tag".'''
    tag = None

    @property
    def static_size(self):
        width = super().static_size
        return None if width is None else Tag.SIZE + width

    def unpack(self, stream, version=None):
        Tag(self.tag).expect(stream)
        super().unpack(stream, version)

    def pack(self, version=None) -> bytes:
        return Tag(self.tag).pack() + super().pack(version)


class SizedChunk(Chunk):
    '''Chunk with a header, that is its tag and the size of the body.

    The body must be consumed completely by the fields.'''
    tag = None

    @property
    def static_size(self):
        return None

    def unpack(self, stream, version=None):
        header = Header.expect(self.tag, stream)

        if header.size > stream.remaining:
            raise ChunkNotEnoughInputException(size=header.size + Header.SIZE, available=stream.remaining + Header.SIZE)

        body = stream.window(header.size)
        super().unpack(body, version)

        if not body.is_empty():
            raise ChunkLeftoverException(tag=str(header.tag), leftover=body.remaining)

    def pack(self, version=None) -> bytes:
        body = super().pack(version)
        return Header(self.tag, len(body)).pack() + body


class UnknownChunk(SizedChunk):
    '''Chunk with a tag that the format doesn't know about: its body is kept as it is.'''
    data = PaddingField()

    def __init__(self, tag=b'\x00\x00\x00\x00', **kwargs):
        self.tag = Tag(tag)
        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.tag}, {len(self.data.value)} bytes)>'

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        return self.tag == other.tag and self.data == other.data

    def unpack(self, stream, version=None):
        self.tag = Header.peek(stream).tag
        super().unpack(stream, version)

