import io
import struct
import unittest
import zlib
from binascii import crc32

from uncrush import ParsingContext

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def make_chunk(chunk_type, data=b"", crc=None):
    if crc is None:
        crc = crc32(chunk_type + data) & 0xffffffff
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def make_ihdr(width, height, bit_depth=8, color_type=6, interlace=0):
    return make_chunk(b"IHDR", struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, interlace))


def raw_deflate(data):
    compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(data) + compressor.flush()


def make_scanlines(rows):
    """Builds filtered image data from a list of (filter_type, [(c0, c1, c2, c3), ...]) rows."""
    return b"".join(bytes([filter_type]) + b"".join(bytes(pixel) for pixel in pixels) for filter_type, pixels in rows)


def make_crushed_png(width, height, bgra_data, *, extra_chunks=(), idat_splits=1, **ihdr_kwargs):
    """Builds a crushed PNG: CgBI marker, IHDR, optional extra chunks, raw-DEFLATE IDAT chunk(s) and IEND."""
    compressed = raw_deflate(bgra_data)
    size = -(-len(compressed) // idat_splits)
    idats = b"".join(make_chunk(b"IDAT", compressed[i:i + size]) for i in range(0, len(compressed), size))
    return (PNG_SIGNATURE + make_chunk(b"CgBI", b"\x50\x00\x20\x06") + make_ihdr(width, height, **ihdr_kwargs) +
            b"".join(extra_chunks) + idats + make_chunk(b"IEND"))


def make_standard_png(width, height, rgba_data):
    return (PNG_SIGNATURE + make_ihdr(width, height) + make_chunk(b"IDAT", zlib.compress(rgba_data)) +
            make_chunk(b"IEND"))


def split_chunks(data):
    """Splits PNG data (without signature) into a list of (type, data, crc) tuples."""
    result = []
    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        length, = struct.unpack(">I", data[offset:offset + 4])
        chunk_type = data[offset + 4:offset + 8]
        chunk_data = data[offset + 8:offset + 8 + length]
        crc, = struct.unpack(">I", data[offset + 8 + length:offset + 12 + length])
        result.append((chunk_type, chunk_data, crc))
        offset += 12 + length
    return result


class UncrushTestCase(unittest.TestCase):
    def call_field_to_stream(self, field, value, *, field_values=None):
        stream = io.BytesIO()
        context = ParsingContext(field_values)
        field.to_stream(stream, value, context)
        return stream.getvalue()

    def call_field_from_stream(self, field, value, *, field_values=None):
        context = ParsingContext(field_values)
        return field.from_stream(io.BytesIO(value), context)

    def assertFieldToStreamEqual(self, expected_bytes, python, field, *, parsed_fields=None):
        self.assertEqual(expected_bytes, self.call_field_to_stream(field, python, field_values=parsed_fields))

    def assertFieldFromStreamEqual(self, bytes, expected_python, field, *, expected_read=None, parsed_fields=None):
        res = self.call_field_from_stream(field, bytes, field_values=parsed_fields)
        self.assertEqual(expected_python, res[0])
        if expected_read is not None:
            self.assertEqual(expected_read, res[1])

    def assertFieldStreamEqual(self, expected_bytes, expected_python, field, *, parsed_fields=None):
        self.assertFieldToStreamEqual(expected_bytes, expected_python, field, parsed_fields=parsed_fields)
        self.assertFieldFromStreamEqual(expected_bytes, expected_python, field, parsed_fields=parsed_fields)

    def assertStructureStreamEqual(self, expected_bytes, expected_structure):
        self.assertEqual(expected_structure, expected_structure.__class__.from_bytes(expected_bytes))
        self.assertEqual(expected_bytes, expected_structure.to_bytes())

    def assertValidPngChunks(self, data):
        self.assertEqual(PNG_SIGNATURE, data[:8])
        for chunk_type, chunk_data, crc in split_chunks(data):
            self.assertEqual(crc32(chunk_type + chunk_data) & 0xffffffff, crc, chunk_type)
