import logging

from .exceptions import IncompleteException


logger = logging.getLogger(__name__)


class Stream(object):
    '''Read cursor over an immutable buffer.

    The object passed to the constructor is normalized by the init_<type>()
    method matching its class name: a str or a Path is taken as a path to
    read from, bytes-like objects are used directly.

    A sub-range of the stream can be obtained with window(): the returned
    stream shares the underlying memory and the parent cursor is moved past it.'''
    def __init__(self, obj, base=0):
        self._type = type(obj)
        self.obj = obj
        self.base = base  # absolute offset of this stream, used only for messages

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name)

        init_method()

        self.position = 0
        self.end = len(self.data)

    def __repr__(self):
        return '<%s(0x%x-0x%x @0x%x)>' % (
            self.__class__.__name__,
            self.base, self.base + self.end, self.base + self.position)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.data = memoryview(f.read())

    init_PosixPath = init_str
    init_WindowsPath = init_str

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.data = memoryview(self.obj)

    init_bytearray = init_bytes

    def init_memoryview(self):
        self.data = self.obj

    @property
    def remaining(self) -> int:
        return self.end - self.position

    def is_empty(self) -> bool:
        return self.position >= self.end

    def tell(self) -> int:
        return self.position

    def peek(self, n: int) -> bytes:
        if n > self.remaining:
            raise IncompleteException(needed=n, available=self.remaining, offset=self.base + self.position)

        return bytes(self.data[self.position:self.position + n])

    def read(self, n: int) -> bytes:
        data = self.peek(n)
        self.position += n

        return data

    def read_all(self) -> bytes:
        return self.read(self.remaining)

    def window(self, n: int) -> 'Stream':
        '''Return a stream over the next n bytes and skip them in this one.'''
        if n > self.remaining:
            raise IncompleteException(needed=n, available=self.remaining, offset=self.base + self.position)

        sub = Stream(self.data[self.position:self.position + n], base=self.base + self.position)
        self.position += n

        return sub
