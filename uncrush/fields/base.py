import itertools

from .. import NOT_PROVIDED
from ..exceptions import ImpossibleToCalculateLengthError

_declaration_order = itertools.count()


def resolve(option, context):
    """Turns a field option into a value: a callable is called with the field values, a string names another
    field and anything else is used as is.
    """
    if callable(option):
        return option(context.f)
    if isinstance(option, str):
        return context[option]
    return option


class Field:
    """A single value in a :class:`Structure`. Subclasses implement :meth:`from_stream` and :meth:`to_stream`.

    :param default: The value of the field when a structure is created without one.
    :param override: A value, or a callable receiving the field values and the current value, that replaces the
        value of the field just before it is written.
    """

    def __init__(self, *, default=NOT_PROVIDED, override=NOT_PROVIDED):
        self.name = None
        self.structure = None
        self.default = default
        self.override = override
        self.order = next(_declaration_order)

    def __repr__(self):
        return '<%s: %s>' % (self.__class__.__name__, self.full_name)

    @property
    def full_name(self):
        if self.structure is None:
            return self.name
        return '%s.%s' % (self.structure.__name__, self.name)

    def __len__(self):
        raise ImpossibleToCalculateLengthError("The size of %s depends on the data" % self.full_name)

    def bind(self, structure, name):
        """Attaches the field to the structure class it is declared on."""
        self.structure = structure
        self.name = name

    def prepare(self, fields):
        """Called once every field of the structure is bound, with a mapping of all of them by name."""

    def get_default(self):
        return None if self.default is NOT_PROVIDED else self.default

    def final_value(self, value, context):
        if self.override is NOT_PROVIDED:
            return value
        if callable(self.override):
            return self.override(context.f, value)
        return self.override

    def from_stream(self, stream, context):
        """Reads the field at the current position of *stream*.

        :returns: the value and the number of bytes consumed
        """
        raise NotImplementedError()

    def to_stream(self, stream, value, context):
        """Writes *value* to *stream* and returns the number of bytes written."""
        raise NotImplementedError()
