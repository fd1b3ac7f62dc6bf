"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable from a stream.

Here the fields are only layout descriptors: they don't hold any value, they
know how to read it from a Stream and how to write it back to bytes.
"""
import logging
import struct
from enum import Enum, auto

from .enum import Compliant
from .exceptions import ChunkException
from .streams import Stream


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class Field(object):
    """Base class to subclass from"""

    def __init__(self, name=None, endianess=Endianess.BIG_ENDIAN):
        self.name = name
        self.endianess = endianess

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def pack(self, value) -> bytes:
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream: Stream, compliant=Compliant.NONE):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.get_format())

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def pack(self, value) -> bytes:
        return struct.pack(self.get_format(), value.value if isinstance(value, Enum) else value)

    def _unpack_enum(self, value: int, compliant):
        try:
            return self.enum(value)
        except ValueError:
            if compliant & Compliant.ENUM:
                raise ChunkException(
                    f'enum {self.enum.__name__} doesn\'t have element with value 0x{value:x} in it',
                    chain=[self.name] if self.name else [])

            logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

        return value

    def unpack(self, stream: Stream, compliant=Compliant.NONE):
        raw = stream.read_exactly(self.size)
        value = struct.unpack(self.get_format(), raw)[0]

        if self.enum:
            value = self._unpack_enum(value, compliant)

        return value


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%d)>' % (self.__class__.__name__, self.length)

    def __len__(self):
        return self.length

    def _get_size(self):
        return self.length

    def pack(self, value) -> bytes:
        if len(value) != self.length:
            raise ValueError(f'you are trying to pack a value with the wrong size (that is {self.length} bytes)')

        return bytes(value)

    def unpack(self, stream: Stream, compliant=Compliant.NONE):
        return stream.read_exactly(self.length)
