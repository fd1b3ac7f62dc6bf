class ChunkException(Exception):
    '''Base class to extend in order to throw exception in pngchunk.

    It takes as argument the chain of the layers that caused the exception
    and, when known, the offset of the failing record inside the input.
    '''

    def __init__(self, message='', chain=None, offset=None):
        self.message = message
        self.chain = chain if chain is not None else []
        self.offset = offset
        super().__init__(message)

    def __str__(self):
        msg = self.message
        if self.chain:
            msg = '%s [%s]' % (msg, '.'.join(self.chain))
        if self.offset is not None:
            msg = '%s at offset 0x%x' % (msg, self.offset)
        return msg


class InvalidSignature(ChunkException):
    pass


class TooShort(ChunkException):
    pass


class TrailingGarbage(ChunkException):
    '''There are bytes after the last record that don't form a complete chunk.'''
    pass


class InvalidChunkType(ChunkException):
    pass


class InvalidLength(InvalidChunkType):
    pass


class NotAscii(InvalidChunkType):
    pass


class ReservedBitInvalid(InvalidChunkType):
    '''Raised only when the reserved bit is checked with Compliant.RESERVED.'''
    pass


class InvalidCrc(ChunkException):
    pass


class PayloadTooLarge(ChunkException):
    pass


class NotFound(ChunkException):
    pass


class NotText(ChunkException):
    pass
