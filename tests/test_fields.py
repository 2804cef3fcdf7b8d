import logging
import math
import struct
from enum import Enum, auto

import pytest

from mdlx.core import Chunk, InclusiveChunk, TaggedChunk
from mdlx.enum import Compliant
from mdlx.exceptions import (
    UnpackException,
    UnknownEnumException,
    UnknownTagException,
    LiteralTooShortException,
    LiteralDecodeException,
    LiteralOverflowException,
    IncompleteException,
    SizeOverflowException,
)
from mdlx.fields import (
    StructField,
    LiteralField,
    TagField,
    ArrayField,
    SelectField,
    VersionField,
    PaddingField,
    TaggedField,
)
from mdlx.streams import Stream
from mdlx.tags import Tag


class DummyEnum(Enum):
    NONE = 0
    FIRST = auto()
    SECOND = auto()


def test_structfield():
    field = StructField('I')

    assert field.static_size == 4
    assert field.value == 0
    assert field.pack() == b'\x00\x00\x00\x00'

    field.value = 0xcafe

    assert field.pack() == b'\xfe\xca\x00\x00'

    field.unpack(Stream(b'\x01\x02\x03\x04'))
    assert field.value == 0x04030201


def test_structfield_multiple_items():
    field = StructField('3f')

    assert field.static_size == 12
    assert field.value == (0.0, 0.0, 0.0)

    field.unpack(Stream(struct.pack('<3f', 1.0, 2.0, 0.5)))

    assert field.value == (1.0, 2.0, 0.5)
    assert field.pack() == struct.pack('<3f', 1.0, 2.0, 0.5)


def test_structfield_short_input():
    with pytest.raises(IncompleteException):
        StructField('I').unpack(Stream(b'\x01\x02'))


def test_structfield_nan_is_packed_as_found():
    raw = b'\x01\x00\xa0\x7f'  # a NaN with payload

    field = StructField('f')
    field.unpack(Stream(raw))

    assert math.isnan(field.value)
    assert field.pack() == raw


def test_structfield_negative_zero():
    field = StructField('f')
    field.unpack(Stream(b'\x00\x00\x00\x00'))

    field.value = 0.0
    assert field.pack() == b'\x00\x00\x00\x00'

    # equal to 0.0 but with the sign bit set
    field.value = -0.0
    assert field.pack() == b'\x00\x00\x00\x80'


def test_structfield_enum():
    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.pack() == b'\x02\x00\x00\x00'

    with pytest.raises(UnknownEnumException):
        field.unpack(Stream(b'\x04\x00\x00\x00'))


def test_structfield_enum_not_compliant(caplog):
    field = StructField('I', enum=DummyEnum)

    with caplog.at_level(logging.WARNING):
        field.unpack(Stream(b'\x04\x00\x00\x00'))

    assert field.value == 4
    assert field.pack() == b'\x04\x00\x00\x00'
    assert 'doesn\'t have element' in caplog.text


def test_literalfield():
    field = LiteralField(10)

    field.value = 'hi'

    assert field.static_size == 10
    assert field.pack() == b'hi' + b'\x00' * 8


def test_literalfield_keeps_padding():
    field = LiteralField(10)
    field.unpack(Stream(b'hi' + b'\x00' * 8))

    assert field.value == 'hi' + '\x00' * 8
    assert field.text == 'hi'
    assert str(field) == 'hi'
    assert field == LiteralField(10, default='hi')


def test_literalfield_errors():
    with pytest.raises(LiteralTooShortException) as excinfo:
        LiteralField(10).unpack(Stream(b'short'))

    assert excinfo.value.expected == 10
    assert excinfo.value.found == 5

    with pytest.raises(LiteralDecodeException):
        LiteralField(2).unpack(Stream(b'\xff\xfe'))

    field = LiteralField(4, default='toolong')

    with pytest.raises(LiteralOverflowException) as excinfo:
        field.pack()

    assert excinfo.value.expected == 4
    assert excinfo.value.passed == 7


def test_literalfield_utf8():
    field = LiteralField(4, default='è')

    assert field.pack() == b'\xc3\xa8\x00\x00'


def test_tagfield():
    field = TagField(b'LAYS')

    assert field.pack() == b'LAYS'

    field.unpack(Stream(b'LAYS'))

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'SYAL'))


def test_arrayfield_fixed():
    length = 10
    array = ArrayField(StructField('I'), n=length)

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array) == length
    assert array.static_size == 40
    assert array.pack() == b'\x00' * 40

    array.unpack(Stream(struct.pack('<10I', *range(10))))

    assert array.value == list(range(10))


def test_arrayfield_prefix():
    array = ArrayField(StructField('H'), prefix='I')

    array.unpack(Stream(b'\x03\x00\x00\x00' + b'\x01\x00\x02\x00\x03\x00'))

    assert array.value == [1, 2, 3]

    array.append(4)

    assert array.pack() == b'\x04\x00\x00\x00' + b'\x01\x00\x02\x00\x03\x00\x04\x00'


def test_arrayfield_negative_zero():
    array = ArrayField(StructField('f'), prefix='I')
    array.unpack(Stream(b'\x02\x00\x00\x00' + b'\x00' * 8))

    assert array.pack() == b'\x02\x00\x00\x00' + b'\x00' * 8

    array.value[1] = -0.0

    assert array.pack() == b'\x02\x00\x00\x00' + b'\x00' * 4 + b'\x00\x00\x00\x80'


def test_arrayfield_prefix_overflow():
    array = ArrayField(StructField('B'), prefix='B')

    for _ in range(255):
        array.append(0)

    assert array.pack() == b'\xff' + b'\x00' * 255

    array.append(0)

    with pytest.raises(SizeOverflowException) as excinfo:
        array.pack()

    assert excinfo.value.size == 256


def test_arrayfield_until_the_end(caplog):
    class Pair(Chunk):
        a = StructField('H')
        b = StructField('H')

    class Pairs(Chunk):
        pairs = ArrayField(Pair())
        padding = PaddingField()

    pairs = Pairs()

    with caplog.at_level(logging.WARNING):
        pairs.unpack(Stream(b'\x01\x00\x02\x00\x03\x00\x04\x00\xff'))

    assert [(_.a.value, _.b.value) for _ in pairs.pairs] == [(1, 2), (3, 4)]
    assert pairs.padding.value == b'\xff'
    assert pairs.pack() == b'\x01\x00\x02\x00\x03\x00\x04\x00\xff'
    assert 'not enough for another element' in caplog.text


def test_arrayfield_count_from_father():
    class Events(Chunk):
        frames_count = StructField('I')
        frames = ArrayField(StructField('I'), n='frames_count')
        tail = StructField('B')

    events = Events()
    events.unpack(Stream(b'\x02\x00\x00\x00' + b'\x0a\x00\x00\x00\x14\x00\x00\x00' + b'\x07'))

    assert events.frames.value == [10, 20]
    assert events.tail.value == 7


def test_arrayfield_elements_are_not_shared():
    class Item(Chunk):
        a = StructField('I')

    array = ArrayField(Item(), n=2)

    assert array[0] is not array[1]
    array[0].a.value = 1
    assert array[1].a.value == 0


def test_selectfield():
    type2field = {
        DummyEnum.FIRST: StructField('I', default=0xcafebabe),
        DummyEnum.SECOND: LiteralField(4, default='abcd'),
        SelectField.Type.DEFAULT: StructField('H', default=0xabad),
    }

    class Dummy(Chunk):
        kind = StructField('I', enum=DummyEnum)
        payload = SelectField('kind', type2field)

    dummy = Dummy()

    assert dummy.payload.value == 0xabad
    assert dummy.pack() == b'\x00\x00\x00\x00\xad\xab'

    dummy.kind = DummyEnum.SECOND

    assert dummy.payload.value == 'abcd'

    dummy.unpack(Stream(b'\x01\x00\x00\x00\xbe\xba\xfe\xca'))

    assert dummy.kind.value == DummyEnum.FIRST
    assert dummy.payload.value == 0xcafebabe


def test_selectfield_without_default():
    class Dummy(Chunk):
        kind = StructField('I', enum=DummyEnum)
        payload = SelectField('kind', {DummyEnum.FIRST: StructField('I')})

    dummy = Dummy()
    dummy.unpack(Stream(b'\x02\x00\x00\x00'))

    assert dummy.payload.value is None
    assert dummy.pack() == b'\x02\x00\x00\x00'


def test_versionfield():
    class Dummy(Chunk):
        a = StructField('I')
        b = VersionField(StructField('I', default=7), greater_than=800)

    dummy = Dummy()
    dummy.a = 1
    dummy.b = 2

    assert dummy.pack() == b'\x01\x00\x00\x00'
    assert dummy.pack(version=800) == b'\x01\x00\x00\x00'
    assert dummy.pack(version=900) == b'\x01\x00\x00\x00\x02\x00\x00\x00'

    dummy.unpack(Stream(b'\x03\x00\x00\x00\x04\x00\x00\x00'), version=900)
    assert dummy.b.value == 4

    # the field is reset when not present
    dummy.unpack(Stream(b'\x03\x00\x00\x00'), version=700)
    assert dummy.b.value == 7


class First(TaggedChunk):
    tag = Tag(b'AAAA')

    a = StructField('I')


class Second(TaggedChunk):
    tag = Tag(b'BBBB')

    b = StructField('H')


class Blocks(InclusiveChunk):
    blocks = TaggedField([First(), Second()])


class TerminatedBlocks(Chunk):
    blocks = TaggedField([First(), Second()], terminated=True)
    end = TagField(b'ENDS')


FIRST = b'AAAA\x01\x00\x00\x00'
SECOND = b'BBBB\x02\x00'


def test_taggedfield_canonical_order():
    blocks = Blocks()
    blocks.blocks[b'BBBB'] = Second()
    blocks.blocks[b'AAAA'] = First()

    assert blocks.blocks.order is None
    assert blocks.pack() == b'\x12\x00\x00\x00' + b'AAAA\x00\x00\x00\x00' + b'BBBB\x00\x00'


def test_taggedfield_keeps_order():
    data = b'\x12\x00\x00\x00' + SECOND + FIRST

    blocks = Blocks()
    blocks.unpack(Stream(data))

    assert blocks.blocks.order == [Tag(b'BBBB'), Tag(b'AAAA')]
    assert blocks.blocks[b'AAAA'].a.value == 1
    assert blocks.blocks[b'BBBB'].b.value == 2
    assert blocks.pack() == data

    # the order doesn't matter for the equality
    other = Blocks()
    other.unpack(Stream(b'\x12\x00\x00\x00' + FIRST + SECOND))

    assert other == blocks


def test_taggedfield_missing_and_added_blocks(caplog):
    blocks = Blocks()
    blocks.unpack(Stream(b'\x12\x00\x00\x00' + SECOND + FIRST))

    del blocks.blocks[b'AAAA']

    with caplog.at_level(logging.WARNING):
        assert blocks.pack() == b'\x0a\x00\x00\x00' + SECOND

    assert 'missing' in caplog.text

    blocks = Blocks()
    blocks.unpack(Stream(b'\x0a\x00\x00\x00' + SECOND))
    blocks.blocks[b'AAAA'] = First()

    assert blocks.pack() == b'\x12\x00\x00\x00' + SECOND + b'AAAA\x00\x00\x00\x00'


def test_taggedfield_duplicated(caplog):
    blocks = Blocks()

    with caplog.at_level(logging.WARNING):
        blocks.unpack(Stream(b'\x14\x00\x00\x00' + FIRST + b'AAAA\x05\x00\x00\x00'))

    assert blocks.blocks.order == [Tag(b'AAAA')]
    assert blocks.blocks[b'AAAA'].a.value == 5
    assert 'duplicated' in caplog.text


def test_taggedfield_unknown_tag():
    with pytest.raises(UnknownTagException) as excinfo:
        Blocks().unpack(Stream(b'\x10\x00\x00\x00' + FIRST + b'ZZZZ'))

    assert excinfo.value.tag == 'ZZZZ'
    assert excinfo.value.chain == ['blocks']


def test_taggedfield_terminated():
    data = SECOND + b'ENDS'

    blocks = TerminatedBlocks()
    blocks.unpack(Stream(data))

    assert list(blocks.blocks.value) == [Tag(b'BBBB')]
    assert blocks.pack() == data

    # no blocks at all
    blocks.unpack(Stream(b'ENDS'))
    assert len(blocks.blocks) == 0
