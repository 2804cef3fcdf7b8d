import struct
from types import SimpleNamespace

import pytest


def u32(*values):
    return struct.pack('<%dI' % len(values), *values)


def f32(*values):
    return struct.pack('<%df' % len(values), *values)


def literal(text, n):
    raw = text.encode('utf-8')
    return raw + b'\x00' * (n - len(raw))


def sized(tag, body):
    '''Chunk with header: the size doesn't include the header itself.'''
    return tag + u32(len(body)) + body


def inclusive(body):
    '''Record whose size includes the size itself.'''
    return u32(len(body) + 4) + body


def track(tag, fmt, keyframes, interpolation=1, global_sequence_id=0xffffffff):
    raw = tag + u32(len(keyframes), interpolation, global_sequence_id)
    for keyframe in keyframes:
        frame, values = keyframe[0], keyframe[1:]
        items = []
        for value in values:
            items.extend(value if isinstance(value, tuple) else (value,))
        raw += struct.pack('<i' + fmt * len(values), frame, *items)

    return raw


def node(name='', object_id=0, parent_id=0xffffffff, flags=0, tracks=b''):
    return inclusive(literal(name, 80) + u32(object_id, parent_id, flags) + tracks)


def extent(radius=1.0, minimum=(-1.0, -1.0, -1.0), maximum=(1.0, 1.0, 1.0)):
    return f32(radius, *minimum, *maximum)


@pytest.fixture
def build():
    '''Helpers to write by hand the binary data of the records.'''
    return SimpleNamespace(
        u32=u32,
        f32=f32,
        literal=literal,
        sized=sized,
        inclusive=inclusive,
        track=track,
        node=node,
        extent=extent,
    )
