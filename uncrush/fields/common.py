from .base import Field, resolve
from .. import NOT_PROVIDED
from ..exceptions import DefinitionError, StreamExhaustedError, WriteError, WrongMagicError


class BytesField(Field):
    """Raw bytes. The *length* is a number of bytes, the name of the field that holds it or a callable receiving
    the field values. A length field referenced by name is filled in from the data on writing, unless it has an
    override of its own.
    """

    def __init__(self, length, **kwargs):
        super().__init__(**kwargs)
        if length is None:
            raise DefinitionError("A %s needs a length" % self.__class__.__name__)
        self.length = length

    def __len__(self):
        if isinstance(self.length, int):
            return self.length
        return super().__len__()

    def prepare(self, fields):
        if isinstance(self.length, str):
            length_field = fields[self.length]
            if length_field.override is NOT_PROVIDED:
                length_field.override = lambda f, v, name=self.name: len(getattr(f, name))

    def from_stream(self, stream, context):
        length = resolve(self.length, context)
        value = stream.read(length)
        if len(value) < length:
            raise StreamExhaustedError("%s needs %d bytes, but only %d are left" %
                                       (self.full_name, length, len(value)))
        return value, length

    def to_stream(self, stream, value, context):
        length = resolve(self.length, context)
        if len(value) != length:
            raise WriteError("%s holds %d bytes, expected %d" % (self.full_name, len(value), length))
        return stream.write(value)


class StringField(BytesField):
    """Text in a fixed or dependent number of bytes. Without an *encoding*, ``Meta.encoding`` is used."""

    def __init__(self, length, *, encoding=None, **kwargs):
        super().__init__(length, **kwargs)
        self.encoding = encoding

    def bind(self, structure, name):
        super().bind(structure, name)
        self.encoding = self.encoding or structure._meta.encoding
        if self.encoding is None:
            raise DefinitionError("%s has no encoding" % self.full_name)

    def from_stream(self, stream, context):
        value, consumed = super().from_stream(stream, context)
        return value.decode(self.encoding), consumed

    def to_stream(self, stream, value, context):
        return super().to_stream(stream, value.encode(self.encoding), context)


class IntegerField(BytesField):
    """An unsigned integer of *length* bytes. Without a *byte_order*, ``Meta.byte_order`` is used."""

    def __init__(self, length, byte_order=None, **kwargs):
        super().__init__(length, **kwargs)
        self.byte_order = byte_order

    def bind(self, structure, name):
        super().bind(structure, name)
        self.byte_order = self.byte_order or structure._meta.byte_order
        if self.byte_order is None and self.length != 1:
            raise DefinitionError("%s has no byte order" % self.full_name)

    def from_stream(self, stream, context):
        value, consumed = super().from_stream(stream, context)
        return int.from_bytes(value, self.byte_order or 'big'), consumed

    def to_stream(self, stream, value, context):
        try:
            encoded = value.to_bytes(self.length, self.byte_order or 'big')
        except OverflowError as exc:
            raise WriteError("%r does not fit in %s" % (value, self.full_name)) from exc
        return super().to_stream(stream, encoded, context)


class MagicField(BytesField):
    """A fixed byte sequence, such as a file signature."""

    def __init__(self, magic, **kwargs):
        kwargs.setdefault('default', magic)
        super().__init__(len(magic), **kwargs)
        self.magic = magic

    def from_stream(self, stream, context):
        value, consumed = super().from_stream(stream, context)
        if value != self.magic:
            raise WrongMagicError("%s should be %r, found %r" % (self.full_name, self.magic, value))
        return value, consumed

    def to_stream(self, stream, value, context):
        if value != self.magic:
            raise WriteError("%s should be %r, not %r" % (self.full_name, self.magic, value))
        return super().to_stream(stream, value, context)
