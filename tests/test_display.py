import struct

import pytest

from pngchunk.enum import Compliant
from pngchunk.exceptions import ChunkException
from pngchunk.images.png import Chunk, IHDRData, PNGColorType, PNGInterlaceType
from pngchunk.images.png.display import describe, role2formatter


def test_describe_header(ihdr_data):
    chunk = Chunk.new('IHDR', ihdr_data)

    assert describe(chunk).endswith('1x1 depth=8 color=RGB compression=DEFLATE filter=ADAPTIVE interlace=NONE')


def test_describe_header_unknown_enum():
    chunk = Chunk.new('IHDR', struct.pack('>IIBBBBB', 640, 480, 8, 7, 0, 0, 1))

    assert describe(chunk).endswith('640x480 depth=8 color=unknown(7) compression=DEFLATE filter=ADAPTIVE interlace=ADAM7')


def test_describe_malformed_header():
    chunk = Chunk.new('IHDR', b'\x00' * 5)

    assert describe(chunk) == 'IHDR length=5 crc=0x%08x malformed header (5 bytes)' % chunk.crc


def test_ihdr_strict_enum():
    data = struct.pack('>IIBBBBB', 1, 1, 8, 7, 0, 0, 0)

    assert IHDRData.unpack(data).color == 7

    with pytest.raises(ChunkException):
        IHDRData.unpack(data, compliant=Compliant.ENUM)


def test_ihdr_roundtrip(ihdr_data):
    header = IHDRData.unpack(ihdr_data)

    assert header.color == PNGColorType.RGB
    assert header.interlace == PNGInterlaceType.NONE
    assert str(header) == '1x1x8'
    assert header.pack() == ihdr_data


@pytest.mark.parametrize('length,expected', [
    (6, 'palette of 2 entries'),
    (7, 'palette of 2 entries (1 trailing bytes)'),
])
def test_describe_palette(length, expected):
    assert describe(Chunk.new('PLTE', b'\x00' * length)).endswith(expected)


def test_describe_image_data():
    assert describe(Chunk.new('IDAT', b'x' * 100)).endswith('100 bytes of compressed image data')


def test_describe_other():
    assert describe(Chunk.new('RUST', b'\xff')).endswith('critical public reserved-ok unsafe-to-copy')
    assert describe(Chunk.new('ruxt', b'a' * 50)).endswith(
        "ancillary private reserved-invalid safe-to-copy text='%s...'" % ('a' * 40))


def test_every_role_has_a_formatter():
    from pngchunk.images.png import ChunkRole

    assert set(role2formatter) == set(ChunkRole)
