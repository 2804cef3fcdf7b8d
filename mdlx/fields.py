"""
A Field is "fundamental" datatype from the format point of view: something that
knows how to unpack itself from a stream and how to pack itself back into bytes.

All the unpack()/pack() methods accept the version of the format as an explicit
argument: it's None when the field is used outside of a versioned context.
"""
import copy
import logging
import struct
from enum import Enum, Flag, auto
from typing import Dict, List, Optional

from .enum import Compliant
from .meta import FieldBase
from .tags import Tag, Header
from .exceptions import (
    MdlxException,
    UnknownEnumException,
    UnknownTagException,
    LiteralTooShortException,
    LiteralDecodeException,
    LiteralOverflowException,
    ChunkNotEnoughInputException,
    ChunkLeftoverException,
    ValueEncodeException,
    SizeOverflowException,
)


def _exact(value):
    '''Key of a value that distinguishes the floats by their bits.'''
    if isinstance(value, float):
        return struct.pack('<d', value)
    if isinstance(value, (tuple, list)):
        return tuple(_exact(_) for _ in value)

    return value


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, default=None, father=None, compliant=Compliant.INHERIT):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.field_name = None
        self.father = father
        self.default = default
        self.compliant = compliant
        self._decoded = None

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        return self.value == other.value

    @property
    def static_size(self) -> Optional[int]:
        '''Size in bytes on the wire when it doesn't depend on the content.'''
        return None

    def is_compliant(self, level):
        '''Returns the compliant'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = getattr(instance, 'father', None)

        return False

    def _remember(self, snapshot, raw: bytes):
        '''Keep the bytes this field was unpacked from.

        Packing a value identical to the unpacked one gives back the very same
        bytes (floats like NaN don't survive the conversion otherwise); floats
        are compared by their bits, so -0.0 is not the same as 0.0.'''
        self._decoded = (_exact(snapshot), raw)

    def _recall(self, snapshot) -> Optional[bytes]:
        if self._decoded is None:
            return None

        decoded, raw = self._decoded

        return raw if decoded == _exact(snapshot) else None

    def pack(self, version=None) -> bytes:
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream, version=None):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    numbers to/from bytes. A format with more than one item (like '3f') has a tuple as value.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=None, enum=None, **kw):
        self.format = format
        self.enum = enum
        fmt = self.get_format()
        self.size = struct.calcsize(fmt)
        self.count = len(struct.unpack(fmt, b'\x00' * self.size))
        super().__init__(default=default, **kw)

    def get_format(self):
        return '<' + self.format

    def value_from_default(self):
        if self.default is not None:
            default = self.default
        else:
            default = 0 if self.count == 1 else struct.unpack(self.get_format(), b'\x00' * self.size)

        if self.enum is not None and not isinstance(default, self.enum):
            return self.enum(default)

        return default

    def __str__(self):
        if self.enum is not None or self.count > 1:
            return str(self.value)
        return repr(self.value)

    @property
    def static_size(self):
        return self.size

    def from_items(self, items: tuple):
        '''Build the value from the items unpacked by the struct module.'''
        value = items[0] if self.count == 1 else items
        if self.enum is not None:
            value = self._unpack_enum(value)

        return value

    def to_items(self, value) -> tuple:
        if isinstance(value, Enum):
            value = value.value

        return (value,) if self.count == 1 else tuple(value)

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnknownEnumException(enum=self.enum, value=value)

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def unpack(self, stream, version=None):
        raw = stream.read(self.size)
        self.value = self.from_items(struct.unpack(self.get_format(), raw))
        self._remember(self.value, raw)

    def encode_items(self, items) -> bytes:
        try:
            return struct.pack(self.get_format(), *items)
        except struct.error as e:
            raise ValueEncodeException(reason=f'{items!r} doesn\'t fit format \'{self.format}\': {e}')

    def pack(self, version=None) -> bytes:
        raw = self._recall(self.value)
        if raw is not None:
            return raw

        return self.encode_items(self.to_items(self.value))


class LiteralField(Field):
    """Fixed length text, padded with NUL bytes.

    The value keeps the padding found on the wire so that packing it back
    gives the same bytes; use the "text" property for the content only."""

    def __init__(self, n, default='', **kw):
        self.length = n
        super().__init__(default=default, **kw)

    def __len__(self):
        return self.length

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented

        # the padding is not part of the content
        return self.text == other.text

    @property
    def text(self) -> str:
        return self.value.rstrip('\x00')

    @property
    def static_size(self):
        return self.length

    def unpack(self, stream, version=None):
        if stream.remaining < self.length:
            raise LiteralTooShortException(expected=self.length, found=stream.remaining)

        raw = stream.read(self.length)

        try:
            self.value = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise LiteralDecodeException(reason=str(e)) from e

    def pack(self, version=None) -> bytes:
        raw = self.value.encode('utf-8')

        if len(raw) > self.length:
            raise LiteralOverflowException(expected=self.length, passed=len(raw))

        return raw + b'\x00' * (self.length - len(raw))


class TagField(Field):
    """A tag that must be present as it is: it doesn't carry any data."""

    def __init__(self, tag, **kw):
        super().__init__(default=Tag(tag), **kw)

    @property
    def static_size(self):
        return Tag.SIZE

    def unpack(self, stream, version=None):
        self.value.expect(stream)

    def pack(self, version=None) -> bytes:
        return self.value.pack()


class ArrayField(Field):
    '''Un/Pack an array of fields.

    The number of elements can be

     - read from the stream as an integer with the format indicated by "prefix"
     - fixed, via the parameter named "n"; if it's a string it's the name of the
       field of the father containing the number of elements
     - not indicated at all: the elements are read until the stream is exhausted;
       when the elements have a fixed width only the complete ones are read.

    When the element is a StructField the value is the list of plain values,
    otherwise it's the list of the unpacked fields.
    '''

    def __init__(self, element, n=None, prefix=None, **kw):
        self.element = element
        self.n = n
        self.prefix = '<' + prefix if prefix else None

        if 'default' not in kw:
            kw['default'] = []

        super().__init__(**kw)

    def value_from_default(self):
        if isinstance(self.n, int) and self.n and not self.default:
            return [self.instance_element() if not self.is_bulk() else self.element.value_from_default()
                    for _ in range(self.n)]

        return list(self.default)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    @property
    def static_size(self):
        if not isinstance(self.n, int) or self.prefix or self.element.static_size is None:
            return None

        return self.n * self.element.static_size

    def create(self, father):
        instance = super().create(father)
        instance.element.father = instance
        return instance

    def is_bulk(self) -> bool:
        return isinstance(self.element, StructField)

    def instance_element(self):
        return self.element.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        if isinstance(element, Field):
            element.father = self
        self.value.append(element)

    def clear(self):
        self.value.clear()

    def _unpack_count(self, stream) -> Optional[int]:
        if self.prefix:
            count, = struct.unpack(self.prefix, stream.read(struct.calcsize(self.prefix)))
            return count

        if isinstance(self.n, str):
            return getattr(self.father, self.n).value

        if self.n is not None:
            return self.n

        width = self.element.static_size
        if width is None:
            return None

        count, remainder = divmod(stream.remaining, width)
        if remainder:
            self.logger.warning('%d bytes at the end are not enough for another element of %d bytes',
                                remainder, width)

        return count

    def unpack(self, stream, version=None):
        count = self._unpack_count(stream)
        self.logger.debug('unpacking %s elements of %r', count if count is not None else 'all the', self.element)

        if self.is_bulk():
            raw = stream.read(count * self.element.static_size)
            self.value = [self.element.from_items(_) for _ in struct.iter_unpack(self.element.get_format(), raw)]
            self._remember(self.value, raw)
            return

        self.value = []

        while (count is None and not stream.is_empty()) or (count is not None and len(self.value) < count):
            element = self.instance_element()
            try:
                element.unpack(stream, version)
            except MdlxException as e:
                e.chain.insert(0, '[%d]' % len(self.value))
                raise
            self.value.append(element)

    def pack(self, version=None) -> bytes:
        header = b''
        if self.prefix:
            if len(self.value) > (1 << 8 * struct.calcsize(self.prefix)) - 1:
                raise SizeOverflowException(size=len(self.value))
            header = struct.pack(self.prefix, len(self.value))

        if self.is_bulk():
            raw = self._recall(self.value)
            if raw is None:
                raw = b''.join([self.element.encode_items(self.element.to_items(_)) for _ in self.value])

            return header + raw

        return header + b''.join([_.pack(version) for _ in self.value])


class SelectField(Field):
    """Allow to select the kind of final field based on condition in the parent chunk.
    You need to pass the name of the field to use as key and a dictionary with the mapping
    between value of the key and field. You can use Type.DEFAULT as a default;
    without it a key not in the mapping selects nothing and the field is empty.

    Like in the following example we have a shape whose type indicates what
    follows: for a sphere a single vertex, otherwise two

        shape2vertices = {
            ShapeType.SPHERE: fields.StructField('3f'),
            fields.SelectField.Type.DEFAULT: fields.StructField('6f'),
        }

        class Shape(Chunk):
            type     = fields.StructField('I', enum=ShapeType)
            vertices = fields.SelectField('type', shape2vertices)
    """
    class Type(Flag):
        DEFAULT = auto()

    def __init__(self, key, mapping, **kwargs):
        self._key = key
        self._mapping = mapping
        self._field = None
        self._selected = None

        super().__init__(**kwargs)

    def __repr__(self):
        return f'<{self.__class__.__name__}{self._field!r}>'

    def init(self):
        self._field = None
        self._selected = None

    def get_field(self) -> Optional[Field]:
        '''Return the field selected by the current value of the key, creating it when the key changed.'''
        key = getattr(self.father, self._key).value

        if self._field is None or key != self._selected:
            prototype = self._mapping.get(key, self._mapping.get(SelectField.Type.DEFAULT))
            self.logger.debug('using field %r for key \'%s\'', prototype, key)
            self._field = prototype.create(father=self) if prototype is not None else None
            self._selected = key

        return self._field

    @property
    def value(self):
        field = self.get_field()
        return field.value if field is not None else None

    @value.setter
    def value(self, value):
        field = self.get_field()
        if field is None:
            raise ValueError(f'no field selected by \'{self._key}\' for {self.field_name}')

        field.value = value

    def unpack(self, stream, version=None):
        self._field = None
        field = self.get_field()
        if field is not None:
            field.unpack(stream, version)

    def pack(self, version=None) -> bytes:
        field = self.get_field()
        return field.pack(version) if field is not None else b''


class VersionField(Field):
    '''The wrapped field is present only for version of the format greater than the
    one indicated; otherwise it keeps its default and takes no bytes.'''

    def __init__(self, field, greater_than, **kw):
        self.field = field
        self.greater_than = greater_than
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}(>{self.greater_than}, {self.field!r})>'

    def init(self):
        self.field.init()

    def create(self, father):
        instance = super().create(father)
        instance.field.father = instance
        instance.field.field_name = instance.field_name
        return instance

    def is_present(self, version) -> bool:
        return version is not None and version > self.greater_than

    @property
    def value(self):
        return self.field.value

    @value.setter
    def value(self, value):
        self.field.value = value

    def unpack(self, stream, version=None):
        if self.is_present(version):
            self.field.unpack(stream, version)
        else:
            self.field.init()

    def pack(self, version=None) -> bytes:
        return self.field.pack(version) if self.is_present(version) else b''


class PaddingField(Field):
    '''Takes as much stream as possible'''

    def __init__(self, **kw):
        kw.setdefault('default', b'')
        super().__init__(**kw)

    def unpack(self, stream, version=None):
        self.value = stream.read_all()

    def pack(self, version=None) -> bytes:
        return bytes(self.value)


class BlocksField(Field):
    '''Base class for the fields containing blocks identified by their tag:
    the prototypes passed are indexed by their "tag" attribute and the
    declaration order is the canonical one.

    The value is a dictionary from Tag to the block; the attribute "order"
    contains the tags in the order they were found while unpacking
    (it's None if the field has never been unpacked) and it's used to pack
    the blocks back in the same order.'''

    def __init__(self, prototypes: List[Field], **kw):
        self.blocks: Dict[Tag, Field] = {Tag(_.tag): _ for _ in prototypes}
        self.order: Optional[List[Tag]] = None
        kw.setdefault('default', {})
        super().__init__(**kw)

    def value_from_default(self):
        return dict(self.default)

    def __deepcopy__(self, memo):
        # the prototypes are shared between the copies
        cls = self.__class__
        instance = cls.__new__(cls)
        memo[id(self)] = instance
        for name, attr in self.__dict__.items():
            instance.__dict__[name] = attr if name == 'blocks' else copy.deepcopy(attr, memo)

        return instance

    def __getitem__(self, tag):
        return self.value[Tag(tag)]

    def __setitem__(self, tag, block):
        block.father = self
        self.value[Tag(tag)] = block

    def __delitem__(self, tag):
        del self.value[Tag(tag)]

    def __contains__(self, tag):
        return Tag(tag) in self.value

    def __len__(self):
        return len(self.value)

    def get(self, tag, default=None):
        return self.value.get(Tag(tag), default)

    def tags(self) -> List[Tag]:
        '''The keys of the blocks present, in the order they would be packed.'''
        tags = [_ for _ in (self.order or []) if _ in self.value]
        tags.extend([_ for _ in self.blocks if _ in self.value and _ not in tags])
        tags.extend([_ for _ in self.value if _ not in tags])

        return tags

    def items(self):
        return [(_, self.value[_]) for _ in self.tags()]

    def add(self, tag, block):
        '''Record the block found during the unpacking.'''
        if tag in self.value:
            if getattr(block, 'keep_first', False):
                self.logger.warning('block with tag %s is duplicated, the first one is kept', tag)
                return

            self.logger.warning('block with tag %s is duplicated, the last one is kept', tag)
        else:
            self.order.append(tag)

        self.value[tag] = block

    def propagate_version(self, block, version):
        return version

    def pack(self, version=None) -> bytes:
        for tag in self.order or []:
            if tag not in self.value:
                self.logger.warning('block with tag %s was found during unpacking but now is missing', tag)

        result = []
        for _, block in self.items():
            tag = Tag(block.tag)
            self.logger.debug('packing block %s', tag)
            try:
                result.append(block.pack(version))
            except MdlxException as e:
                e.chain.insert(0, str(tag))
                raise
            version = self.propagate_version(block, version)

        return b''.join(result)


class TaggedField(BlocksField):
    '''Sequence of optional blocks, each one introduced by its tag and present at most once.

    A tag without a block to dispatch to is an error, unless the sequence is "terminated":
    in that case it ends the sequence and it's left in the stream for who follows.'''

    def __init__(self, prototypes, terminated=False, **kw):
        self.terminated = terminated
        super().__init__(prototypes, **kw)

    def unpack(self, stream, version=None):
        self.value = {}
        self.order = []

        while not stream.is_empty():
            tag = Tag.peek(stream)
            prototype = self.blocks.get(tag)

            if prototype is None:
                if self.terminated:
                    self.logger.debug('tag %s terminates the blocks', tag)
                    break

                self.logger.error('unknown tag %s', tag)
                raise UnknownTagException(tag=str(tag))

            self.logger.debug('found block %s', tag)
            block = prototype.create(father=self)
            try:
                block.unpack(stream, version)
            except MdlxException as e:
                e.chain.insert(0, str(tag))
                raise
            self.add(tag, block)


class ChunksField(BlocksField):
    '''Sequence of chunks each one with its header (tag and size) until the
    end of the stream.

    The chunks with a tag not in the prototypes are kept as they are,
    so they can be packed back; being possibly repeated, their key is the
    tuple (tag, position). A chunk can change the version used for the
    following ones via its propagate_version() method.'''

    def __init__(self, prototypes, unknown=None, **kw):
        self.unknown = unknown
        super().__init__(prototypes, **kw)

    def propagate_version(self, block, version):
        return block.propagate_version(version)

    def unpack(self, stream, version=None):
        self.value = {}
        self.order = []

        while not stream.is_empty():
            header = Header.peek(stream)
            span = header.size + Header.SIZE

            if span > stream.remaining:
                raise ChunkNotEnoughInputException(size=span, available=stream.remaining)

            prototype = self.blocks.get(header.tag)
            if prototype is None:
                self.logger.warning('unknown chunk %s of %d bytes', header.tag, header.size)
                if self.unknown is None:
                    raise UnknownTagException(tag=str(header.tag))
                prototype = self.unknown

            self.logger.debug('found chunk %s of %d bytes', header.tag, header.size)

            window = stream.window(span)
            chunk = prototype.create(father=self)
            try:
                chunk.unpack(window, version)
            except MdlxException as e:
                e.chain.insert(0, str(header.tag))
                raise

            if not window.is_empty():
                raise ChunkLeftoverException(tag=str(header.tag), leftover=window.remaining)

            version = chunk.propagate_version(version)

            # unknown tags can repeat, so they are keyed by their position too
            key = header.tag if prototype is not self.unknown else (header.tag, len(self.order))
            self.add(key, chunk)
