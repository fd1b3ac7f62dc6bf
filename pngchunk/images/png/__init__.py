'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

A PNG file is an 8 bytes signature followed by a sequence of chunks, each one
made of

    length (4 bytes, big endian) | type (4 bytes) | data (length bytes) | crc (4 bytes, big endian)

Here we only care about the chunks' layout: we can add, find and remove chunks
of any type (also private ones) and write back the file without losing a single bit.
'''
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from bitstring import Bits

from pngchunk import fields
from pngchunk.common.crc import crc32
from pngchunk.enum import Compliant
from pngchunk.exceptions import (
    ChunkException,
    InvalidChunkType,
    InvalidCrc,
    InvalidLength,
    InvalidSignature,
    NotAscii,
    NotFound,
    NotText,
    PayloadTooLarge,
    ReservedBitInvalid,
    TooShort,
    TrailingGarbage,
)
from pngchunk.streams import Stream


logger = logging.getLogger(__name__)

SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

MAX_LENGTH = 0xffffffff


class ChunkRole(Enum):
    '''The well-known chunks we know how to describe, everything else is OTHER.'''
    IHDR  = b'IHDR'
    PLTE  = b'PLTE'
    IDAT  = b'IDAT'
    IEND  = b'IEND'
    OTHER = None


class PNGColorType(Enum):
    '''The color type definition of the PNG is a little tricky and doesn't seem
    to follow a bit-mask. We are going to list all the valid cases.'''
    GRAYSCALE = 0x00
    RGB       = 0x02
    RGB_PALETTE = 0x03
    GS_ALPHA    = 0x04
    RGBA        = 0x06


class PNGCompressionType(Enum):
    '''There is only one method of compression'''
    DEFLATE = 0x00


class PNGFilterType(Enum):
    '''This indicates the preprocessing method applied to the image data before compression. At present, only filter method 0 is defined'''
    ADAPTIVE = 0x00


class PNGInterlaceType(Enum):
    NONE  = 0x00
    ADAM7 = 0x01


# the fifth bit of each byte of the type (0x20) is the ASCII case bit
_PROPERTY_BIT = 2


class ChunkType(object):
    '''The 4 bytes identifying the kind of a chunk.

    Each byte must be an ASCII letter and the case of each letter carries
    a property of the chunk:

     1. ancillary bit (first byte): uppercase means critical
     2. private bit (second byte): uppercase means public
     3. reserved bit (third byte): must be uppercase to be conformant
     4. safe-to-copy bit (fourth byte): lowercase means safe to copy
    '''

    SIZE = 4

    def __init__(self, value: bytes):
        value = bytes(value)

        if len(value) != self.SIZE:
            raise InvalidLength(f'chunk type must be exactly {self.SIZE} bytes long, not {len(value)}')

        if not all(0x41 <= _ <= 0x5a or 0x61 <= _ <= 0x7a for _ in value):
            raise NotAscii(f'chunk type {value!r} must contain only ASCII letters')

        self.value = value

    @classmethod
    def parse(cls, code: Union[str, bytes], compliant=Compliant.NONE) -> 'ChunkType':
        raw = code.encode('utf-8') if isinstance(code, str) else bytes(code)

        chunk_type = cls(raw)

        if not chunk_type.is_reserved_bit_valid():
            if compliant & Compliant.RESERVED:
                raise ReservedBitInvalid(f'chunk type {raw!r} has the reserved bit set')
            logger.debug('accepting chunk type %r with the reserved bit set', raw)

        return chunk_type

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def __str__(self):
        return self.value.decode('ascii')

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def _is_lowercase(self, idx: int) -> bool:
        return Bits(self.value)[idx * 8 + _PROPERTY_BIT]

    def is_critical(self) -> bool:
        return not self._is_lowercase(0)

    def is_public(self) -> bool:
        return not self._is_lowercase(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._is_lowercase(2)

    def is_safe_to_copy(self) -> bool:
        return self._is_lowercase(3)

    def is_valid(self) -> bool:
        return all(_ < 0x80 for _ in self.value) and self.is_reserved_bit_valid()

    def classify(self) -> ChunkRole:
        try:
            return ChunkRole(self.value)
        except ValueError:
            return ChunkRole.OTHER


def _as_chunk_type(chunk_type: Union[ChunkType, str, bytes]) -> ChunkType:
    return chunk_type if isinstance(chunk_type, ChunkType) else ChunkType.parse(chunk_type)


@dataclass(frozen=True, repr=False)
class Chunk(object):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk

    A Chunk is a value: to modify one you build a new one with Chunk.new().
    '''
    length: int
    type: ChunkType
    data: bytes
    crc: int

    LENGTH = fields.StructField('I', name='length', endianess=fields.Endianess.BIG_ENDIAN)
    TYPE   = fields.StringField(ChunkType.SIZE, name='type')
    CRC    = fields.StructField('I', name='crc', endianess=fields.Endianess.BIG_ENDIAN)  # network byte order

    # length + type + crc
    OVERHEAD = 12

    def __post_init__(self):
        if not isinstance(self.type, ChunkType):
            raise InvalidChunkType(f'{self.type!r} is not a ChunkType', chain=['type'])

        if self.length != len(self.data):
            raise ChunkException(
                f'length {self.length} doesn\'t match the {len(self.data)} bytes of data', chain=['length'])

        expected = crc32(self.type.value, self.data)
        if self.crc != expected:
            raise InvalidCrc(
                f'crc 0x{self.crc:08x} doesn\'t match the computed one 0x{expected:08x}', chain=['crc'])

    @classmethod
    def new(cls, chunk_type: Union[ChunkType, str, bytes], data: bytes) -> 'Chunk':
        chunk_type = _as_chunk_type(chunk_type)
        data = bytes(data)

        if len(data) > MAX_LENGTH:
            raise PayloadTooLarge(f'data of {len(data)} bytes doesn\'t fit the length field')

        return cls(
            length=len(data),
            type=chunk_type,
            data=data,
            crc=crc32(chunk_type.value, data),
        )

    @classmethod
    def unpack(cls, stream: Stream, compliant=Compliant.NONE) -> 'Chunk':
        '''Read a chunk from the actual position of the stream.

        The CRC is checked before validating the type, so that any corruption
        of the bytes it covers is reported as InvalidCrc.'''
        offset = stream.tell()

        if stream.remaining < cls.OVERHEAD:
            raise TooShort(
                f'a chunk needs at least {cls.OVERHEAD} bytes, only {stream.remaining} available',
                offset=offset)

        length = cls.LENGTH.unpack(stream)

        if stream.remaining < length + cls.OVERHEAD - cls.LENGTH.size:
            raise TooShort(
                f'chunk declares {length} bytes of data but only {stream.remaining - 8} are available',
                chain=['data'], offset=offset)

        raw_type = cls.TYPE.unpack(stream)
        data = fields.StringField(length, name='data').unpack(stream)
        crc = cls.CRC.unpack(stream)

        logger.debug('unpacked chunk %r of %d bytes at offset 0x%x', raw_type, length, offset)

        expected = crc32(raw_type, data)
        if crc != expected:
            raise InvalidCrc(
                f'stored crc 0x{crc:08x} doesn\'t match the computed one 0x{expected:08x}',
                chain=['crc'], offset=offset)

        try:
            chunk_type = ChunkType.parse(raw_type, compliant=compliant)
        except InvalidChunkType as e:
            e.chain.insert(0, 'type')
            e.offset = offset
            raise

        return cls(length=length, type=chunk_type, data=data, crc=crc)

    @classmethod
    def parse(cls, data: bytes, compliant=Compliant.NONE) -> Tuple['Chunk', int]:
        '''It returns the chunk at the start of data and the number of bytes it takes.'''
        stream = Stream(data)
        chunk = cls.unpack(stream, compliant=compliant)

        return chunk, stream.tell()

    def pack(self) -> bytes:
        return b''.join([
            self.LENGTH.pack(self.length),
            self.TYPE.pack(self.type.value),
            self.data,
            self.CRC.pack(self.crc),
        ])

    @property
    def raw(self) -> bytes:
        return self.pack()

    @property
    def size(self) -> int:
        return self.OVERHEAD + self.length

    def as_text(self) -> str:
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise NotText(f'data of chunk {self.type} is not valid text: {e.reason}')

    def __repr__(self):
        return '<%s(length=%d,type=%r,crc=0x%08x)>' % (
            self.__class__.__name__,
            self.length,
            self.type.value,
            self.crc,
        )

    def __str__(self):
        return 'Chunk: Data_len=%d, type=%s, crc=%d' % (self.length, self.type, self.crc)


class IHDRData(object):
    '''
    Width and height give the image dimensions in pixels.
    Bit depth is a single-byte integer giving the number of bits per sample or per palette index (not per pixel).
    Color type is a single-byte integer that describes the interpretation of the image data.
    '''
    layout = [
        ('width',       fields.StructField('I', name='width', endianess=fields.Endianess.BIG_ENDIAN)),
        ('height',      fields.StructField('I', name='height', endianess=fields.Endianess.BIG_ENDIAN)),
        ('depth',       fields.StructField('B', name='depth')),
        ('color',       fields.StructField('B', name='color', enum=PNGColorType)),
        ('compression', fields.StructField('B', name='compression', enum=PNGCompressionType)),
        ('filter',      fields.StructField('B', name='filter', enum=PNGFilterType)),
        ('interlace',   fields.StructField('B', name='interlace', enum=PNGInterlaceType)),
    ]

    SIZE = 13

    def __init__(self, **kwargs):
        for name, _ in self.layout:
            setattr(self, name, kwargs[name])

    @classmethod
    def unpack(cls, data: bytes, compliant=Compliant.NONE) -> 'IHDRData':
        if len(data) != cls.SIZE:
            raise ChunkException(f'IHDR chunk must be exactly {cls.SIZE} bytes long, not {len(data)}')

        stream = Stream(data)

        values = {}
        for name, layout_field in cls.layout:
            values[name] = layout_field.unpack(stream, compliant=compliant)

        return cls(**values)

    def pack(self) -> bytes:
        return b''.join(layout_field.pack(getattr(self, name)) for name, layout_field in self.layout)

    def __str__(self):
        return '%dx%dx%d' % (
            self.width,
            self.height,
            self.depth,
        )


class PNGFile(object):
    '''The signature followed by the chunks, in the order they were found.

    No check is done on the ordering of the chunks: append() puts the new chunk
    at the very end, also after the IEND chunk.'''

    header = fields.StringField(len(SIGNATURE), name='header')

    def __init__(self, chunks: Optional[List[Chunk]] = None):
        self.chunks: List[Chunk] = list(chunks) if chunks else []

    @classmethod
    def unpack(cls, stream: Stream, compliant=Compliant.NONE) -> 'PNGFile':
        if stream.remaining < cls.header.size:
            raise InvalidSignature('not enough data for the signature', chain=['header'], offset=0)

        magic = cls.header.unpack(stream)
        if magic != SIGNATURE:
            raise InvalidSignature(f'the magic doesn\'t correspond: {magic!r}', chain=['header'], offset=0)

        chunks = []
        while not stream.at_end():
            offset = stream.tell()

            if stream.remaining < Chunk.OVERHEAD:
                raise TrailingGarbage(
                    f'{stream.remaining} bytes after the last chunk',
                    chain=['chunks[%d]' % len(chunks)], offset=offset)

            try:
                chunk = Chunk.unpack(stream, compliant=compliant)
            except ChunkException as e:
                e.chain.insert(0, 'chunks[%d]' % len(chunks))
                e.offset = offset
                raise

            chunks.append(chunk)

        logger.debug('unpacked %d chunks', len(chunks))

        return cls(chunks)

    @classmethod
    def parse(cls, data: bytes, compliant=Compliant.NONE) -> 'PNGFile':
        return cls.unpack(Stream(data), compliant=compliant)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self.chunks))

    def __str__(self):
        return ''.join('%s\n' % _ for _ in self.chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self):
        return len(self.chunks)

    def __getitem__(self, item):
        return self.chunks[item]

    def find_first(self, chunk_type: Union[ChunkType, str, bytes]) -> Optional[Chunk]:
        chunk_type = _as_chunk_type(chunk_type)

        for chunk in self.chunks:
            if chunk.type == chunk_type:
                return chunk

        return None

    def append(self, chunk: Chunk):
        if self.chunks and self.chunks[-1].type.classify() == ChunkRole.IEND:
            logger.debug('appending chunk %r after IEND', chunk)
        self.chunks.append(chunk)

    def remove_first(self, chunk_type: Union[ChunkType, str, bytes]) -> Chunk:
        chunk_type = _as_chunk_type(chunk_type)

        for idx, chunk in enumerate(self.chunks):
            if chunk.type == chunk_type:
                return self.chunks.pop(idx)

        raise NotFound(f'no chunk with type {chunk_type}')

    def pack(self) -> bytes:
        return SIGNATURE + b''.join(_.pack() for _ in self.chunks)

    @property
    def raw(self) -> bytes:
        return self.pack()

    @property
    def size(self) -> int:
        return len(SIGNATURE) + sum(_.size for _ in self.chunks)

    def verify(self) -> bool:
        '''Best effort check: the last chunk must be IEND.'''
        if not self.chunks:
            logger.warning('no chunks in the file')
            return False

        last = self.chunks[-1]
        if last.type.classify() != ChunkRole.IEND:
            logger.warning('the last chunk is %s and not IEND', last.type)
            return False

        return True
