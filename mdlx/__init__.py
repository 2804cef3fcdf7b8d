"""
# mdlx: chunked model formats for humans.

A format is described declaratively as a Chunk made of fields; two basic
operations are defined for the format and its sub components:

 1. unpack(): read the binary data and build a high-level representation
    of it; the stream is consumed field by field.

 2. pack(): encode the high-level representation into binary data.

Both operations take the version of the format as an explicit argument,
since some records change their layout depending on it: the version is
found in the data itself and passed down to the records that follow.

The MDX models of Warcraft III are implemented in mdlx.models.mdx:

    from mdlx import parse_model, encode_model

    model = parse_model('footman.mdx')
    assert encode_model(model) == open('footman.mdx', 'rb').read()
"""
from .models.mdx import MDLXFile, parse_model, encode_model  # noqa: F401
