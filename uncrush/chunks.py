"""Structures describing the PNG chunk framing.

A chunk consists of a big-endian length, a four byte type tag, the data and a CRC-32 over the type tag and the
data. CgBI files use the same framing, so the same structures are used for reading and writing.
"""

import enum
from binascii import crc32

from .exceptions import UnsupportedImageFormatError
from .fields import IntegerField, StringField, BytesField, EnumField, PseudoMemberEnumMixin
from .structures import Structure

CHUNK_TYPE_ENCODING = "latin1"


class ChunkType(PseudoMemberEnumMixin, enum.Enum):
    CgBI = "CgBI"
    IHDR = "IHDR"
    IDAT = "IDAT"
    IEND = "IEND"

    @property
    def is_known(self):
        return self.name is not None

    @property
    def tag(self):
        return self.value.encode(CHUNK_TYPE_ENCODING)


class ColorType(enum.IntEnum):
    GrayScale = 0
    RGB = 2
    Palette = 3
    GrayScaleAlpha = 4
    RGBA = 6


class InterlaceMethod(enum.IntEnum):
    NoInterlace = 0
    Adam7 = 1


def calculate_crc(chunk_type, data):
    """Calculates the CRC of a chunk. The length field is not part of the checksum."""
    crc = crc32(ChunkType(chunk_type).tag)
    crc = crc32(data, crc)
    return crc & 0xffffffff


def _chunk_type_field():
    return EnumField(StringField(length=4, encoding=CHUNK_TYPE_ENCODING), enum=ChunkType)


class ChunkHeader(Structure):
    """The first eight bytes of a chunk. Used to look ahead without reading the chunk body."""

    length = IntegerField(4)
    chunk_type = _chunk_type_field()

    class Meta:
        byte_order = "big"


class Chunk(Structure):
    length = IntegerField(4)
    chunk_type = _chunk_type_field()
    data = BytesField(length='length', default=b"")
    crc = IntegerField(4, override=lambda f, v: calculate_crc(f.chunk_type, f.data) if v is None else v)

    class Meta:
        byte_order = "big"
        checks = [
            lambda f: len(f.data) == f.length,
        ]

    @property
    def header(self):
        return ChunkHeader(length=len(self.data), chunk_type=self.chunk_type)

    def compute_crc(self):
        return calculate_crc(self.chunk_type, self.data)

    @property
    def has_valid_crc(self):
        return self.crc == self.compute_crc()

    def replace_data(self, data):
        """Installs new chunk data, updating the length and recomputing the CRC."""
        self.data = bytes(data)
        self.length = len(self.data)
        self.crc = self.compute_crc()


class ImageHeader(Structure):
    """The contents of the IHDR chunk."""

    width = IntegerField(4)
    height = IntegerField(4)
    bit_depth = IntegerField(1, default=8)
    color_type = EnumField(IntegerField(1), ColorType, default=ColorType.RGBA)
    compression_method = IntegerField(1, default=0)
    filter_method = IntegerField(1, default=0)
    interlace_method = EnumField(IntegerField(1), InterlaceMethod, default=InterlaceMethod.NoInterlace)

    class Meta:
        byte_order = "big"

    bytes_per_pixel = 4

    @property
    def scanline_size(self):
        """The size of one scanline: a filter type byte followed by the pixels."""
        return 1 + self.width * self.bytes_per_pixel

    @property
    def image_data_size(self):
        return self.height * self.scanline_size

    def validate(self):
        """Raises :exc:`UnsupportedImageFormatError` unless the image is 8-bit, non-interlaced RGBA, the only layout
        of which the channel order can be restored.
        """
        if self.bit_depth != 8:
            raise UnsupportedImageFormatError("Unsupported bit depth %d, expected 8" % self.bit_depth)
        if self.color_type != ColorType.RGBA:
            raise UnsupportedImageFormatError("Unsupported color type %r, expected RGBA" % (self.color_type,))
        if self.interlace_method != InterlaceMethod.NoInterlace:
            raise UnsupportedImageFormatError("Interlaced images are not supported")
        if self.compression_method != 0 or self.filter_method != 0:
            raise UnsupportedImageFormatError("Unknown compression method %d or filter method %d" %
                                              (self.compression_method, self.filter_method))
