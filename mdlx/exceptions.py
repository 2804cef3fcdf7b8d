class MdlxException(Exception):
    '''Base class to extend in order to throw exception in mdlx.

    The "chain" attribute represents the layers that caused the exception,
    from the outermost chunk to the failing field: every chunk the exception
    goes through prepends the name of its field.
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    def describe(self) -> str:
        return ''

    def __str__(self):
        where = '.'.join(self.chain)
        description = self.describe()

        if not where:
            return description

        return f'{where}: {description}' if description else where


class UnpackException(MdlxException):
    pass


class PackException(MdlxException):
    pass


class IncompleteException(UnpackException):
    '''The input ended before the record did: more data could fix it.'''

    def __init__(self, needed, available, offset=None, chain=None):
        self.needed = needed
        self.available = available
        self.offset = offset
        super().__init__(chain=chain)

    def describe(self):
        msg = f'incomplete input: needed {self.needed} bytes but only {self.available} available'
        if self.offset is not None:
            msg += f' at offset 0x{self.offset:x}'
        return msg


class TagMismatchException(UnpackException):

    def __init__(self, expected, found, chain=None):
        self.expected = expected
        self.found = found
        super().__init__(chain=chain)

    def describe(self):
        return f'expected tag {self.expected} but found {self.found}'


class UnknownTagException(UnpackException):

    def __init__(self, tag, chain=None):
        self.tag = tag
        super().__init__(chain=chain)

    def describe(self):
        return f'unknown tag {self.tag}'


class UnknownEnumException(UnpackException):
    '''This is useful when is not possible to let an unknown value
    slip through the parsing.'''

    def __init__(self, enum, value, chain=None):
        self.enum = enum
        self.value = value
        super().__init__(chain=chain)

    def describe(self):
        return f'{self.enum.__name__} has no element with value 0x{self.value:x}'


class LiteralTooShortException(UnpackException):

    def __init__(self, expected, found, chain=None):
        self.expected = expected
        self.found = found
        super().__init__(chain=chain)

    def describe(self):
        return f'literal needs {self.expected} bytes but only {self.found} found'


class LiteralDecodeException(UnpackException):

    def __init__(self, reason, chain=None):
        self.reason = reason
        super().__init__(chain=chain)

    def describe(self):
        return f'literal is not valid UTF-8: {self.reason}'


class ChunkNotEnoughInputException(UnpackException):

    def __init__(self, size, available, chain=None):
        self.size = size
        self.available = available
        super().__init__(chain=chain)

    def describe(self):
        return f'chunk of {self.size} bytes but only {self.available} bytes of input'


class ChunkLeftoverException(UnpackException):

    def __init__(self, tag, leftover, chain=None):
        self.tag = tag
        self.leftover = leftover
        super().__init__(chain=chain)

    def describe(self):
        return f'chunk {self.tag} has {self.leftover} bytes not consumed'


class InclusiveSizeTooSmallException(UnpackException):

    def __init__(self, size, chain=None):
        self.size = size
        super().__init__(chain=chain)

    def describe(self):
        return f'inclusive size {self.size} is smaller than the size field itself'


class InclusiveNotEnoughInputException(UnpackException):

    def __init__(self, size, available, chain=None):
        self.size = size
        self.available = available
        super().__init__(chain=chain)

    def describe(self):
        return f'inclusive size {self.size} but only {self.available} bytes follow the size field'


class InclusiveLeftoverException(UnpackException):

    def __init__(self, leftover, chain=None):
        self.leftover = leftover
        super().__init__(chain=chain)

    def describe(self):
        return f'{self.leftover} bytes not consumed inside inclusive sized record'


class SizeOverflowException(PackException):

    def __init__(self, size, chain=None):
        self.size = size
        super().__init__(chain=chain)

    def describe(self):
        return f'size {self.size} does not fit into its field'


class LiteralOverflowException(PackException):

    def __init__(self, expected, passed, chain=None):
        self.expected = expected
        self.passed = passed
        super().__init__(chain=chain)

    def describe(self):
        return f'literal of {self.passed} bytes does not fit into {self.expected} bytes'


class ValueEncodeException(PackException):
    '''The value of a field cannot be represented with its binary format.'''

    def __init__(self, reason, chain=None):
        self.reason = reason
        super().__init__(chain=chain)

    def describe(self):
        return self.reason
