import logging

import pytest

from mdlx.core import Chunk, InclusiveChunk, TaggedChunk, SizedChunk, UnknownChunk
from mdlx.exceptions import (
    TagMismatchException,
    ChunkNotEnoughInputException,
    ChunkLeftoverException,
    InclusiveSizeTooSmallException,
    InclusiveNotEnoughInputException,
    InclusiveLeftoverException,
    LiteralOverflowException,
)
from mdlx.fields import StructField, LiteralField, ArrayField, PaddingField
from mdlx.streams import Stream
from mdlx.tags import Tag


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = LiteralField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert [_ for _, __ in dummy.get_fields()] == ['a', 'b', 'c']

    assert dummy.a.value == 0xbad
    assert dummy.a.father == dummy
    assert dummy.b.static_size == 0x10
    assert dummy.static_size == 0x18

    assert dummy.pack() == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )

    # fields are not shared between instances
    other = Dummy()
    other.a = 0xcafe

    assert dummy.a.value == 0xbad
    assert dummy != other


def test_chunk_from_bytes():
    class Dummy(Chunk):
        a = StructField('H')
        b = LiteralField(4)

    dummy = Dummy(b'\x01\x00abc\x00')

    assert dummy.a.value == 1
    assert dummy.b.text == 'abc'
    assert dummy == Dummy(dummy.pack())


def test_chunk_inheritance():
    class Base(Chunk):
        a = StructField('B')

    class Derived(Base):
        b = StructField('B', default=2)

    assert [_ for _, __ in Derived().get_fields()] == ['a', 'b']
    assert Derived().pack() == b'\x00\x02'


def test_chunk_nested():
    class Point(Chunk):
        x = StructField('h')
        y = StructField('h')

    class Segment(Chunk):
        start = Point()
        end = Point()

    segment = Segment(b'\x01\x00\x02\x00\xff\xff\xfe\xff')

    assert segment.start.x.value == 1
    assert segment.end.y.value == -2
    assert segment.end.father == segment
    assert segment.static_size == 8


def test_chunk_exception_chain():
    class Inner(Chunk):
        name = LiteralField(2)

    class Outer(Chunk):
        inner = Inner()

    outer = Outer()
    outer.inner.name = 'toolong'

    with pytest.raises(LiteralOverflowException) as excinfo:
        outer.pack()

    assert excinfo.value.chain == ['inner', 'name']
    assert str(excinfo.value).startswith('inner.name: ')


class Empty(InclusiveChunk):
    padding = PaddingField()


class Counted(InclusiveChunk):
    a = StructField('I')


def test_inclusive_chunk():
    empty = Empty(b'\x04\x00\x00\x00')

    assert empty.padding.value == b''
    assert empty.pack() == b'\x04\x00\x00\x00'

    counted = Counted()
    counted.a = 0x41

    assert counted.pack() == b'\x08\x00\x00\x00\x41\x00\x00\x00'


def test_inclusive_chunk_too_small():
    with pytest.raises(InclusiveSizeTooSmallException) as excinfo:
        Empty(b'\x03\x00\x00\x00')

    assert excinfo.value.size == 3


def test_inclusive_chunk_not_enough_input():
    with pytest.raises(InclusiveNotEnoughInputException) as excinfo:
        Counted(b'\x0c\x00\x00\x00\x41\x00\x00\x00')

    assert excinfo.value.size == 12
    assert excinfo.value.available == 4


def test_inclusive_chunk_leftover():
    with pytest.raises(InclusiveLeftoverException) as excinfo:
        Counted(b'\x0c\x00\x00\x00' + b'\x41\x00\x00\x00' + b'\x42\x00\x00\x00')

    assert excinfo.value.leftover == 4


class Marker(TaggedChunk):
    tag = Tag(b'MARK')

    index = StructField('I')


def test_tagged_chunk():
    marker = Marker(b'MARK\x05\x00\x00\x00')

    assert marker.index.value == 5
    assert marker.static_size == 8
    assert marker.pack() == b'MARK\x05\x00\x00\x00'

    with pytest.raises(TagMismatchException):
        Marker(b'KRAM\x05\x00\x00\x00')


class Entry(Chunk):
    name = LiteralField(8)
    weight = StructField('f')


class EntriesChunk(SizedChunk):
    tag = Tag(b'ENTS')

    entries = ArrayField(Entry())
    padding = PaddingField()


def test_sized_chunk(build):
    chunk = EntriesChunk()
    for name in ('a', 'b', 'c'):
        entry = Entry()
        entry.name = name
        entry.weight = 0.5
        chunk.entries.append(entry)

    data = chunk.pack()

    # the size in the header is the one of the body only
    assert data[:8] == b'ENTS' + build.u32(3 * 12)
    assert data[8:20] == build.literal('a', 8) + build.f32(0.5)

    other = EntriesChunk(data)

    assert [_.name.text for _ in other.entries] == ['a', 'b', 'c']
    assert other == chunk


def test_sized_chunk_remainder(build, caplog):
    data = build.sized(b'ENTS', build.literal('a', 8) + build.f32(2.0) + b'\x01\x02\x03')

    with caplog.at_level(logging.WARNING):
        chunk = EntriesChunk(data)

    assert len(chunk.entries) == 1
    assert chunk.padding.value == b'\x01\x02\x03'
    assert chunk.pack() == data


def test_sized_chunk_errors(build):
    with pytest.raises(TagMismatchException):
        EntriesChunk(build.sized(b'STNE', b''))

    with pytest.raises(ChunkNotEnoughInputException):
        EntriesChunk(b'ENTS' + build.u32(100) + b'\x00' * 12)


def test_sized_chunk_leftover(build):
    class Single(SizedChunk):
        tag = Tag(b'SNGL')

        index = StructField('I')

    assert Single(build.sized(b'SNGL', build.u32(7))).index.value == 7

    with pytest.raises(ChunkLeftoverException) as excinfo:
        Single(build.sized(b'SNGL', build.u32(7, 8)))

    assert excinfo.value.tag == 'SNGL'
    assert excinfo.value.leftover == 4


def test_unknown_chunk(build):
    data = build.sized(b'ZZZZ', b'abc')

    chunk = UnknownChunk()
    chunk.unpack(Stream(data))

    assert chunk.tag == b'ZZZZ'
    assert chunk.data.value == b'abc'
    assert chunk.pack() == data
    assert chunk == UnknownChunk(b'ZZZZ', filepath=data)
    assert chunk != UnknownChunk(b'YYYY')
