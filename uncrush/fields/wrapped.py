from .base import Field
from ..exceptions import DefinitionError, ParseError, WriteError


class EnumField(Field):
    """Reads a value with *base_field* and converts it into a member of *enum*. Writing accepts a member or a raw
    value.
    """

    def __init__(self, base_field, enum, **kwargs):
        if not isinstance(base_field, Field):
            raise DefinitionError("The base field of an EnumField must be a Field instance, not %r" % (base_field,))
        super().__init__(**kwargs)
        self.base_field = base_field
        self.enum = enum

    def __len__(self):
        return len(self.base_field)

    def bind(self, structure, name):
        super().bind(structure, name)
        self.base_field.bind(structure, name)

    def from_stream(self, stream, context):
        value, consumed = self.base_field.from_stream(stream, context)
        try:
            return self.enum(value), consumed
        except ValueError as exc:
            raise ParseError("%r is not a valid %s for %s" % (value, self.enum.__name__, self.full_name)) from exc

    def to_stream(self, stream, value, context):
        try:
            value = self.enum(value).value
        except ValueError as exc:
            raise WriteError("%r is not a valid %s for %s" % (value, self.enum.__name__, self.full_name)) from exc
        return self.base_field.to_stream(stream, value, context)


class PseudoMemberEnumMixin:
    """Lets an :class:`enum.Enum` accept values it does not declare. Each lookup of such a value returns a new
    member whose :attr:`name` is :const:`None`. Members compare and hash by value, and nothing is registered on the
    enum class, so the enum does not grow with the input it sees.
    """

    @classmethod
    def _missing_(cls, value):
        member = object.__new__(cls)
        member._name_ = None
        member._value_ = value
        return member

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._value_ == other._value_
        return NotImplemented

    def __hash__(self):
        return hash(self._value_)
