import io
import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image


PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def raw_chunk(chunk_type: bytes, data: bytes) -> bytes:
    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', zlib.crc32(chunk_type + data))


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent


@pytest.fixture
def ihdr_data():
    # 1x1, depth 8, RGB, deflate, adaptive, no interlace
    return struct.pack('>IIBBBBB', 1, 1, 8, 2, 0, 0, 0)


@pytest.fixture
def minimal_png(ihdr_data):
    '''Signature, IHDR and IEND: nothing else.'''
    return PNG_SIGNATURE + raw_chunk(b'IHDR', ihdr_data) + raw_chunk(b'IEND', b'')


@pytest.fixture
def palette_png():
    '''A real file, made by somebody else.'''
    image = Image.new('P', (5, 5))
    image.putpalette([255, 0, 0, 0, 255, 0])

    buffer = io.BytesIO()
    image.save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, minimal_png):
    path = tmp_path / 'image.png'
    path.write_bytes(minimal_png)

    return path
