class _NotProvided:
    def __repr__(self):
        return "NOT_PROVIDED"


#: Marks a field option that was not given, so that ``None`` can still be used as a value.
NOT_PROVIDED = _NotProvided()


from uncrush.exceptions import *
from uncrush.parsing import *
from uncrush.fields import *
from uncrush.structures import *
from uncrush.chunks import ChunkType, ColorType, InterlaceMethod, ChunkHeader, Chunk, ImageHeader
from uncrush.converter import PngNormalizer, ConversionResult, normalize, is_crushed


__version__ = '1.0.0'
