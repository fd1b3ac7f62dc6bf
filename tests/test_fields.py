from enum import Enum, auto

import pytest

from pngchunk.enum import Compliant
from pngchunk.exceptions import ChunkException, TooShort
from pngchunk.fields import Endianess, StringField, StructField
from pngchunk.streams import Stream


def test_bytes_stream_read():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert stream.read_exactly(1) == b'\x01'
    assert stream.read_exactly(1) == b'\x02'
    assert stream.remaining == 3
    assert stream.read_exactly(3) == b'\x03\x04\x05'
    assert stream.tell() == 5
    assert stream.at_end()


def test_stream_read_exactly():
    stream = Stream(bytearray(b'\x01\x02\x03'))

    assert stream.read_exactly(2) == b'\x01\x02'

    with pytest.raises(TooShort) as exc:
        stream.read_exactly(2)

    assert exc.value.offset == 2
    assert stream.tell() == 2


def test_stream_memoryview():
    stream = Stream(memoryview(b'abcdef'))

    assert stream.remaining == 6
    assert stream.read_exactly(1) == b'a'


def test_stream_wrong_object():
    with pytest.raises(ValueError):
        Stream(1234)


def test_structfield_endianess():
    field = StructField('I', endianess=Endianess.LITTLE_ENDIAN)

    assert field.size == 4
    assert field.pack(0xcafe) == b'\xfe\xca\x00\x00'
    assert field.unpack(Stream(b'\x01\x02\x03\x04')) == 0x04030201

    field = StructField('I')

    assert field.pack(0xcafe) == b'\x00\x00\xca\xfe'
    assert field.unpack(Stream(b'\x01\x02\x03\x04')) == 0x01020304


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('B', enum=DummyEnum)

    assert field.pack(DummyEnum.SECOND) == b'\x02'
    assert field.unpack(Stream(b'\x01')) == DummyEnum.FIRST
    assert field.unpack(Stream(b'\x04')) == 4

    with pytest.raises(ChunkException):
        field.unpack(Stream(b'\x04'), compliant=Compliant.ENUM)


def test_structfield_too_short():
    with pytest.raises(TooShort):
        StructField('I').unpack(Stream(b'\x00\x00'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field) == 0x10
    assert field.unpack(Stream(b'A' * 0x20)) == b'A' * 0x10

    with pytest.raises(ValueError):
        field.pack(b'A' * 0x11)
