#!/usr/bin/env python3
'''
Dump the chunks of a MDX model and check that packing it back gives the same data.

 $ DEBUG=1 ./scripts/mdxinfo.py Footman.mdx
'''
import logging
import sys
import os

from mdlx.core import UnknownChunk
from mdlx.exceptions import MdlxException
from mdlx.models.mdx import MDLXFile, encode_model


logging.basicConfig(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <mdx file path>')
    sys.exit(1)


def describe(chunk):
    if isinstance(chunk, UnknownChunk):
        return f'unknown, {len(chunk.data.value)} bytes'

    counts = []
    for name, field in chunk.get_fields():
        if hasattr(field, '__len__') and not isinstance(field.value, str):
            counts.append(f'{len(field)} {name}')

    return ', '.join(counts)


def dump_chunks(model):
    print(f'''MDX model:
  Version:                           {model.version}
  Chunks:                            {len(model.chunks)}''')
    for idx, (_, chunk) in enumerate(model.chunks.items()):
        print(f'''  [{idx:02d}] {chunk.tag!s:<6} {describe(chunk)}''')

    model_chunk = model.get(b'MODL')
    if model_chunk is not None:
        print(f'''  Name:                              {model_chunk.name.text}''')


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    path = sys.argv[1]

    try:
        model = MDLXFile(path)
    except MdlxException as e:
        logger.error(f'failed to unpack \'{path}\': {e}')
        sys.exit(2)

    dump_chunks(model)

    with open(path, 'rb') as f:
        original = f.read()

    packed = encode_model(model)
    print(f'''Round trip:                          {"identical" if packed == original else "DIFFERENT"}''')

    sys.exit(0 if packed == original else 3)
