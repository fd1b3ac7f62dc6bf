import pytest

from pngchunk.enum import Compliant
from pngchunk.exceptions import InvalidChunkType, InvalidLength, NotAscii, ReservedBitInvalid
from pngchunk.images.png import ChunkRole, ChunkType


def test_chunk_type_from_str_and_bytes():
    assert ChunkType.parse('RuSt') == ChunkType.parse(b'RuSt')
    assert ChunkType.parse('RuSt').value == bytes([82, 117, 83, 116])
    assert str(ChunkType.parse('RuSt')) == 'RuSt'


def test_chunk_type_properties():
    chunk_type = ChunkType.parse('RuSt')

    assert chunk_type.is_critical()
    assert not chunk_type.is_public()
    assert chunk_type.is_reserved_bit_valid()
    assert chunk_type.is_safe_to_copy()
    assert chunk_type.is_valid()


@pytest.mark.parametrize('code,method,expected', [
    ('ruSt', 'is_critical', False),
    ('RUSt', 'is_public', True),
    ('Rust', 'is_reserved_bit_valid', False),
    ('RuST', 'is_safe_to_copy', False),
])
def test_chunk_type_single_bit(code, method, expected):
    assert getattr(ChunkType.parse(code), method)() is expected


def test_reserved_bit_invalid_still_parses():
    chunk_type = ChunkType.parse('Rust')

    assert not chunk_type.is_valid()

    with pytest.raises(ReservedBitInvalid):
        ChunkType.parse('Rust', compliant=Compliant.RESERVED)


def test_chunk_type_not_ascii():
    with pytest.raises(NotAscii):
        ChunkType.parse('Ru1t')

    with pytest.raises(InvalidChunkType):
        ChunkType.parse(b'Ru\xfft')


@pytest.mark.parametrize('code', ['abcde', 'abc', '', 'Rùst'])
def test_chunk_type_wrong_length(code):
    with pytest.raises(InvalidLength):
        ChunkType.parse(code)


@pytest.mark.parametrize('code,role', [
    ('IHDR', ChunkRole.IHDR),
    ('PLTE', ChunkRole.PLTE),
    ('IDAT', ChunkRole.IDAT),
    ('IEND', ChunkRole.IEND),
    ('iend', ChunkRole.OTHER),
    ('ruSt', ChunkRole.OTHER),
])
def test_classify(code, role):
    assert ChunkType.parse(code).classify() == role


def test_chunk_type_constructor_validates():
    assert ChunkType(b'RuSt') == ChunkType.parse('RuSt')

    with pytest.raises(InvalidLength):
        ChunkType(b'12')

    with pytest.raises(NotAscii):
        ChunkType(b'Ru1t')
