"""Converts crushed (CgBI) PNG files into standard PNG files.

The input is walked once, chunk by chunk. The CgBI marker is dropped, the image header is inspected for the image
dimensions, image data is decompressed, byte-swapped and recompressed, and all other chunks are copied verbatim.
"""

import io
import logging

from .chunks import Chunk, ChunkHeader, ChunkType, ImageHeader
from .exceptions import StreamExhaustedError, TruncatedChunkError, WrongMagicError, NotAPngError, ChecksumError, \
    InvalidChunkError, ParseError, UnsupportedImageFormatError
from .fields import MagicField
from .pixels import DEFAULT_COMPRESSION_LEVEL, transform_image_data
from .structures import Structure

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class PngSignature(Structure):
    magic = MagicField(PNG_SIGNATURE)


def read_signature(stream):
    """Consumes the PNG signature from the stream, raising :exc:`NotAPngError` if it is absent."""
    try:
        return PngSignature.from_stream(stream)[1]
    except (WrongMagicError, StreamExhaustedError) as exc:
        raise NotAPngError("The data does not start with the PNG signature") from exc


def peek_chunk_header(buffer, offset=len(PNG_SIGNATURE)):
    """Parses the chunk header at *offset* without consuming anything. Returns :const:`None` if the buffer does
    not hold a complete header at that position.
    """
    view = memoryview(buffer)[offset:offset + len(ChunkHeader)]
    if len(view) < len(ChunkHeader):
        return None
    return ChunkHeader.from_bytes(view)


def is_crushed(buffer):
    """Returns whether the buffer holds a PNG file whose first chunk is the CgBI marker."""
    read_signature(io.BytesIO(buffer))
    header = peek_chunk_header(buffer)
    return header is not None and header.chunk_type is ChunkType.CgBI


def iter_chunks(stream, verify_crc=False):
    """Reads chunks from the stream until the IEND chunk has been read or the stream is exhausted."""
    while True:
        position = stream.tell()
        if not stream.read(1):
            logger.warning("The data ended at offset %d without an IEND chunk", position)
            return
        stream.seek(position)

        try:
            chunk, consumed = Chunk.from_stream(stream)
        except StreamExhaustedError as exc:
            raise TruncatedChunkError("Chunk at offset %d is truncated" % position) from exc

        if verify_crc and not chunk.has_valid_crc:
            raise ChecksumError("Chunk %s at offset %d has CRC %08x, expected %08x" %
                                (chunk.chunk_type.value, position, chunk.crc, chunk.compute_crc()))

        logger.debug("Read %s chunk of %d bytes at offset %d", chunk.chunk_type.value, chunk.length, position)
        yield chunk

        if chunk.chunk_type is ChunkType.IEND:
            trailing = len(stream.read())
            if trailing:
                logger.warning("Ignoring %d bytes after the IEND chunk", trailing)
            return


def read_image_header(chunk):
    """Parses and validates the contents of an IHDR chunk."""
    if len(chunk.data) < len(ImageHeader):
        raise InvalidChunkError("IHDR chunk holds %d bytes, expected %d" % (len(chunk.data), len(ImageHeader)))
    try:
        image_header = ImageHeader.from_bytes(chunk.data)
    except ParseError as exc:
        raise UnsupportedImageFormatError("Could not interpret the image header: %s" % exc) from exc
    image_header.validate()
    return image_header


class ChunkWriter:
    """Writes the PNG signature and chunks to a stream. By default, writes to an in-memory buffer."""

    def __init__(self, stream=None):
        self.stream = io.BytesIO() if stream is None else stream

    def write_signature(self):
        return PngSignature().to_stream(self.stream)

    def write_chunk(self, chunk):
        logger.debug("Writing %s chunk of %d bytes", chunk.chunk_type.value, len(chunk.data))
        return chunk.to_stream(self.stream)

    def getvalue(self):
        return self.stream.getvalue()


class ConversionResult:
    """The outcome of a conversion: the standard PNG data, the image dimensions (:const:`None` if unknown) and
    whether the input was crushed at all.
    """

    def __init__(self, data, width=None, height=None, is_crushed=False):
        self.data = data
        self.width = width
        self.height = height
        self.is_crushed = is_crushed

    def __repr__(self):
        return '<%s: %d bytes, width=%r, height=%r, is_crushed=%r>' % (
            self.__class__.__name__, len(self.data), self.width, self.height, self.is_crushed)


class PngNormalizer:
    """Converts crushed PNG data into standard PNG data.

    :param int compression_level: The zlib compression level used for the recompressed image data.
    :param bool verify_crc: Whether the CRC of every input chunk should be verified.
    """

    def __init__(self, compression_level=DEFAULT_COMPRESSION_LEVEL, verify_crc=False):
        if not -1 <= compression_level <= 9:
            raise ValueError("compression_level must be between -1 and 9, not %r" % compression_level)
        self.compression_level = compression_level
        self.verify_crc = verify_crc

    def convert(self, buffer):
        """Converts the buffer. Data that is not crushed is returned unchanged.

        :raises NotAPngError: if the buffer is not a PNG file.
        :raises TruncatedChunkError: if the buffer ends inside a chunk.
        :raises UnsupportedImageFormatError: if the image is not non-interlaced 8-bit RGBA.
        :rtype: ConversionResult
        """
        stream = io.BytesIO(buffer)
        read_signature(stream)

        header = peek_chunk_header(buffer)
        if header is None or header.chunk_type is not ChunkType.CgBI:
            logger.debug("No CgBI chunk found, passing the data through")
            return self._passthrough(buffer, header)

        return self._uncrush(stream)

    def _passthrough(self, buffer, header):
        result = ConversionResult(bytes(buffer))
        if header is not None and header.chunk_type is ChunkType.IHDR:
            stream = io.BytesIO(buffer)
            stream.seek(len(PNG_SIGNATURE))
            try:
                image_header = ImageHeader.from_bytes(Chunk.from_stream(stream)[0].data)
            except ParseError:
                logger.debug("Could not read the dimensions of the uncrushed image")
            else:
                result.width, result.height = image_header.width, image_header.height
        return result

    def _uncrush(self, stream):
        writer = ChunkWriter()
        writer.write_signature()

        image_header = None
        image_data = []

        for chunk in iter_chunks(stream, verify_crc=self.verify_crc):
            if chunk.chunk_type is ChunkType.IDAT:
                if image_header is None:
                    raise InvalidChunkError("IDAT chunk found before the IHDR chunk")
                image_data.append(chunk.data)
                continue

            if image_data:
                writer.write_chunk(self._image_data_chunk(image_data, image_header))
                image_data = []

            if chunk.chunk_type is ChunkType.CgBI:
                logger.debug("Dropping CgBI chunk")
                continue
            if chunk.chunk_type is ChunkType.IHDR:
                image_header = read_image_header(chunk)
                logger.debug("Image is %dx%d", image_header.width, image_header.height)

            writer.write_chunk(chunk)

        if image_data:
            writer.write_chunk(self._image_data_chunk(image_data, image_header))

        return ConversionResult(
            writer.getvalue(),
            width=image_header.width if image_header is not None else None,
            height=image_header.height if image_header is not None else None,
            is_crushed=True,
        )

    def _image_data_chunk(self, image_data, image_header):
        """Builds a single standard IDAT chunk from the data of a run of consecutive crushed IDAT chunks."""
        if len(image_data) > 1:
            logger.debug("Joining %d consecutive IDAT chunks", len(image_data))
        chunk = Chunk(chunk_type=ChunkType.IDAT)
        chunk.replace_data(transform_image_data(b"".join(image_data), image_header, self.compression_level))
        return chunk


def normalize(buffer, **kwargs):
    """Converts crushed PNG data into standard PNG data. Keyword arguments are passed to :class:`PngNormalizer`.

    :rtype: ConversionResult
    """
    return PngNormalizer(**kwargs).convert(buffer)
