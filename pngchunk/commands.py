'''
Operations on the bytes of a PNG file: these are what the command line
(or any other tool) uses, nothing here touches the filesystem.
'''
import logging
from typing import List, Optional

from pngchunk.enum import Compliant
from pngchunk.exceptions import ChunkException
from pngchunk.images.png import Chunk, ChunkType, PNGFile
from pngchunk.images.png.display import describe


logger = logging.getLogger(__name__)


def encode(data: bytes, chunk_type: str, message: bytes, compliant=Compliant.NONE) -> bytes:
    '''Append a chunk of the given type containing message.'''
    png = PNGFile.parse(data, compliant=compliant)

    chunk = Chunk.new(ChunkType.parse(chunk_type, compliant=compliant), message)
    png.append(chunk)

    logger.debug('encoded %r', chunk)

    return png.pack()


def decode(data: bytes, chunk_type: str, compliant=Compliant.NONE) -> Optional[str]:
    png = PNGFile.parse(data, compliant=compliant)

    chunk = png.find_first(ChunkType.parse(chunk_type, compliant=compliant))
    if chunk is None:
        return None

    return chunk.as_text()


def remove(data: bytes, chunk_type: str, compliant=Compliant.NONE) -> bytes:
    png = PNGFile.parse(data, compliant=compliant)

    chunk = png.remove_first(ChunkType.parse(chunk_type, compliant=compliant))
    logger.debug('removed %r', chunk)

    return png.pack()


def inspect(data: bytes, compliant=Compliant.NONE) -> List[str]:
    png = PNGFile.parse(data, compliant=compliant)

    return [describe(chunk, compliant=compliant) for chunk in png]


def verify(data: bytes) -> bool:
    '''Differently from the other operations it never raises for malformed data.'''
    try:
        png = PNGFile.parse(data)
    except ChunkException as e:
        logger.warning('unable to parse: %s', e)
        return False

    return png.verify()
