'''
# Tags and headers

Every record of the format is introduced by a four bytes identifier (the tag),
usually ASCII like b'VERS' or b'KGTR'. Top level chunks add an u32 with the
size of the body, excluding the header itself.
'''
import logging
import string
import struct

from .exceptions import TagMismatchException, SizeOverflowException


logger = logging.getLogger(__name__)

_PRINTABLE = set(string.printable.encode()) - set(string.whitespace.encode()) | {ord(' ')}

U32_MAX = 0xffffffff


class Tag(object):
    '''Four raw bytes compared byte-wise.

    It hashes like its raw bytes so that a dictionary keyed with tags can be
    indexed with plain bytes too.'''
    SIZE = 4

    __slots__ = ('raw',)

    def __init__(self, value):
        if isinstance(value, Tag):
            value = value.raw
        elif isinstance(value, str):
            value = value.encode('ascii')

        value = bytes(value)

        if len(value) != Tag.SIZE:
            raise ValueError(f'a tag must be {Tag.SIZE} bytes long, {value!r} is not')

        object.__setattr__(self, 'raw', value)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if isinstance(other, Tag):
            return self.raw == other.raw
        if isinstance(other, bytes):
            return self.raw == other

        return NotImplemented

    def __hash__(self):
        return hash(self.raw)

    def __str__(self):
        if all(_ in _PRINTABLE for _ in self.raw):
            return self.raw.decode('ascii')

        return repr(list(self.raw))

    def __repr__(self):
        return f'Tag({str(self)!r})'

    def __deepcopy__(self, memo):
        return self

    @classmethod
    def unpack(cls, stream) -> 'Tag':
        return cls(stream.read(Tag.SIZE))

    @classmethod
    def peek(cls, stream) -> 'Tag':
        return cls(stream.peek(Tag.SIZE))

    def pack(self) -> bytes:
        return self.raw

    def expect(self, stream) -> 'Tag':
        '''Read a tag from the stream and check it is this one.'''
        found = Tag.unpack(stream)

        if found != self:
            raise TagMismatchException(expected=str(self), found=str(found))

        return found


class Header(object):
    '''Tag followed by the size of the body as u32 (eight bytes on the wire).'''
    SIZE = 8

    def __init__(self, tag, size):
        self.tag = Tag(tag)
        self.size = size

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.tag}, {self.size})>'

    def __eq__(self, other):
        if not isinstance(other, Header):
            return NotImplemented

        return self.tag == other.tag and self.size == other.size

    @classmethod
    def unpack(cls, stream) -> 'Header':
        tag = Tag.unpack(stream)
        size, = struct.unpack('<I', stream.read(4))

        return cls(tag, size)

    @classmethod
    def peek(cls, stream) -> 'Header':
        raw = stream.peek(Header.SIZE)
        size, = struct.unpack('<I', raw[4:])

        return cls(raw[:4], size)

    @classmethod
    def expect(cls, tag, stream) -> 'Header':
        tag = Tag(tag)
        header = cls.unpack(stream)

        if header.tag != tag:
            raise TagMismatchException(expected=str(tag), found=str(header.tag))

        logger.debug('found header %r', header)

        return header

    def pack(self) -> bytes:
        if not 0 <= self.size <= U32_MAX:
            raise SizeOverflowException(size=self.size)

        return self.tag.pack() + struct.pack('<I', self.size)
