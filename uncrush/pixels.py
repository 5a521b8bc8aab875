"""Restores the pixel data of a crushed image.

Crushed images store their pixels as BGRA and compress them with bare DEFLATE. A standard PNG wants RGBA
compressed with zlib-wrapped DEFLATE.
"""

import logging
import zlib

from .exceptions import CorruptImageDataError

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = zlib.Z_BEST_SPEED


def inflate_raw(data, max_length=0):
    """Decompresses a DEFLATE stream that has no zlib header or trailer. With a *max_length*, decompression stops
    after that many bytes and the rest of the stream is ignored.
    """
    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        inflated = decompressor.decompress(data, max_length)
        if not max_length:
            inflated += decompressor.flush()
    except zlib.error as exc:
        raise CorruptImageDataError("Could not inflate image data: %s" % exc) from exc
    if decompressor.unconsumed_tail:
        logger.warning("Image data inflates to more than %d bytes, ignoring the rest", max_length)
    elif not decompressor.eof:
        logger.warning("Image data ends before the end of the DEFLATE stream")
    return inflated


def deflate_zlib(data, level=DEFAULT_COMPRESSION_LEVEL):
    return zlib.compress(data, level)


def swap_channels(inflated, width, height):
    """Swaps the first and third byte of every four byte pixel, leaving the filter type byte of every scanline
    untouched. Applied to BGRA data, this yields RGBA data and vice versa.

    PNG filters work on bytes of the same channel of neighbouring pixels, so the swap can be done on the filtered
    data directly.
    """
    scanline_size = 1 + width * 4
    required = height * scanline_size
    if len(inflated) < required:
        raise CorruptImageDataError("Image data is %d bytes, but %dx%d pixels require %d bytes" %
                                    (len(inflated), width, height, required))

    result = bytearray(inflated[:required])
    for start in range(0, required, scanline_size):
        pixels = slice(start + 1, start + scanline_size)
        row = result[pixels]
        row[0::4], row[2::4] = row[2::4], row[0::4]
        result[pixels] = row
    return bytes(result)


def transform_image_data(data, image_header, level=DEFAULT_COMPRESSION_LEVEL):
    """Converts the compressed contents of a crushed IDAT into the compressed contents of a standard IDAT."""
    # one byte more than the image needs, so surplus data is still reported
    inflated = inflate_raw(data, image_header.image_data_size + 1)
    logger.debug("Inflated %d bytes of image data to %d bytes", len(data), len(inflated))
    swapped = swap_channels(inflated, image_header.width, image_header.height)
    return deflate_zlib(swapped, level)
