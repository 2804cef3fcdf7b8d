'''
# MDX

Binary format of the models of Warcraft III: after the MDLX magic there is
a sequence of chunks, each one with its tag and size. The VERS chunk
carries the version of the format that decides the layout of some of the
records in the chunks that follow it.

    MDLX
    VERS (version)
    MODL (name, extent, ...)
    SEQS, GLBS, TEXS, MTLS, GEOS, BONE, ...

Chunks with a tag not known are kept as they are, so that packing a model
gives back exactly the data it was unpacked from.
'''
from mdlx.core import Chunk, UnknownChunk
from mdlx.streams import Stream
from mdlx import fields

from .chunks import CHUNKS, VersionChunk


class MDLXFile(Chunk):
    magic  = fields.TagField(b'MDLX')
    chunks = fields.ChunksField([_() for _ in CHUNKS], unknown=UnknownChunk())

    def __getitem__(self, tag):
        return self.chunks[tag]

    def __setitem__(self, tag, chunk):
        self.chunks[tag] = chunk

    def __contains__(self, tag):
        return tag in self.chunks

    def get(self, tag, default=None):
        return self.chunks.get(tag, default)

    @property
    def version(self):
        chunk = self.chunks.get(VersionChunk.tag)
        return chunk.version.value if chunk is not None else None

    @property
    def unknown_chunks(self):
        return [chunk for _, chunk in self.chunks.items() if isinstance(chunk, UnknownChunk)]


def parse_model(data) -> MDLXFile:
    '''Unpack a model from bytes, or from the path of a file.'''
    model = MDLXFile()
    model.unpack(Stream(data))

    return model


def encode_model(model: MDLXFile) -> bytes:
    return model.pack()
