class UncrushError(Exception):
    pass


class DefinitionError(UncrushError):
    pass


class ImpossibleToCalculateLengthError(DefinitionError):
    pass


class ParseError(UncrushError):
    pass


class StreamExhaustedError(ParseError):
    pass


class TruncatedChunkError(StreamExhaustedError):
    """A chunk declares more bytes than the buffer still holds."""


class WrongMagicError(ParseError):
    pass


class NotAPngError(WrongMagicError):
    """The buffer does not start with the PNG signature."""


class UnknownDependentFieldError(ParseError):
    pass


class CheckError(ParseError):
    pass


class ChecksumError(ParseError):
    pass


class InvalidChunkError(ParseError):
    pass


class CorruptImageDataError(ParseError):
    pass


class UnsupportedImageFormatError(ParseError):
    """The image header describes a layout other than non-interlaced 8-bit RGBA."""


class WriteError(UncrushError):
    pass
