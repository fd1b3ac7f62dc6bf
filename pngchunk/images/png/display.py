'''
Human readable description of the chunks.

Each role has its own formatter: to describe a new kind of chunk add a member
to ChunkRole and an entry to role2formatter.
'''
import logging
from typing import Callable, Dict

from pngchunk.enum import Compliant
from pngchunk.exceptions import ChunkException, NotText
from pngchunk.images.png import Chunk, ChunkRole, IHDRData


logger = logging.getLogger(__name__)

# how many characters of a textual payload to show
TEXT_PREVIEW = 40


def _enum_name(value) -> str:
    return getattr(value, 'name', 'unknown(%d)' % value if isinstance(value, int) else str(value))


def format_ihdr(chunk: Chunk, compliant=Compliant.NONE) -> str:
    try:
        header = IHDRData.unpack(chunk.data, compliant=compliant)
    except ChunkException as e:
        logger.warning('malformed IHDR: %s', e)
        return 'malformed header (%d bytes)' % chunk.length

    return '%s depth=%d color=%s compression=%s filter=%s interlace=%s' % (
        '%dx%d' % (header.width, header.height),
        header.depth,
        _enum_name(header.color),
        _enum_name(header.compression),
        _enum_name(header.filter),
        _enum_name(header.interlace),
    )


def format_plte(chunk: Chunk, compliant=Compliant.NONE) -> str:
    entries, extra = divmod(chunk.length, 3)
    if extra:
        return 'palette of %d entries (%d trailing bytes)' % (entries, extra)

    return 'palette of %d entries' % entries


def format_idat(chunk: Chunk, compliant=Compliant.NONE) -> str:
    return '%d bytes of compressed image data' % chunk.length


def format_iend(chunk: Chunk, compliant=Compliant.NONE) -> str:
    return 'end of image'


def format_other(chunk: Chunk, compliant=Compliant.NONE) -> str:
    chunk_type = chunk.type
    msg = '%s %s %s %s' % (
        'critical' if chunk_type.is_critical() else 'ancillary',
        'public' if chunk_type.is_public() else 'private',
        'reserved-ok' if chunk_type.is_reserved_bit_valid() else 'reserved-invalid',
        'safe-to-copy' if chunk_type.is_safe_to_copy() else 'unsafe-to-copy',
    )

    try:
        text = chunk.as_text()
    except NotText:
        return msg

    if len(text) > TEXT_PREVIEW:
        text = text[:TEXT_PREVIEW] + '...'

    return '%s text=%r' % (msg, text)


role2formatter: Dict[ChunkRole, Callable[..., str]] = {
    ChunkRole.IHDR: format_ihdr,
    ChunkRole.PLTE: format_plte,
    ChunkRole.IDAT: format_idat,
    ChunkRole.IEND: format_iend,
    ChunkRole.OTHER: format_other,
}


def describe(chunk: Chunk, compliant=Compliant.NONE) -> str:
    '''One line with type, length and crc followed by the detail for its role.'''
    formatter = role2formatter[chunk.type.classify()]

    return '%s length=%d crc=0x%08x %s' % (
        chunk.type,
        chunk.length,
        chunk.crc,
        formatter(chunk, compliant=compliant),
    )
