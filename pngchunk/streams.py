import io

from .exceptions import TooShort


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: mainly we need to read exactly a given
    number of bytes and to know how much data is left.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

        init_method()

        self.size = len(self.obj.getbuffer())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def tell(self) -> int:
        return self.obj.tell()

    @property
    def remaining(self) -> int:
        return self.size - self.obj.tell()

    def read_exactly(self, n: int) -> bytes:
        '''Read n bytes or raise TooShort without moving the cursor.'''
        if n > self.remaining:
            raise TooShort(
                'expected %d bytes but only %d are available' % (n, self.remaining),
                offset=self.obj.tell())

        return self.obj.read(n)

    def at_end(self) -> bool:
        return self.remaining == 0
