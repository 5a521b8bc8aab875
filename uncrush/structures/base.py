import io

from ..exceptions import CheckError
from ..fields import Field
from ..parsing import ParsingContext
from .options import StructureOptions


class StructureBase(type):
    """Collects the fields declared on a structure class, in the order in which they were created."""

    def __new__(mcs, name, bases, namespace):
        meta = namespace.pop('Meta', None)
        declared = sorted(((key, value) for key, value in namespace.items() if isinstance(value, Field)),
                          key=lambda item: item[1].order)
        for key, _ in declared:
            del namespace[key]

        cls = super().__new__(mcs, name, bases, namespace)
        cls._meta = StructureOptions(meta)
        for key, field in declared:
            field.bind(cls, key)
            cls._meta.fields[key] = field
        for field in cls._meta.fields.values():
            field.prepare(cls._meta.fields)
        return cls

    def __len__(cls):
        """The size of the structure in bytes, if it does not depend on the data."""
        return sum(len(field) for field in cls._meta.fields.values())


class Structure(metaclass=StructureBase):
    """Base class for binary structures. Fields are declared as class attributes, and instances hold the value of
    every field as an attribute of the same name.
    """

    def __init__(self, **kwargs):
        for name, field in self._meta.fields.items():
            setattr(self, name, kwargs.pop(name) if name in kwargs else field.get_default())
        if kwargs:
            raise TypeError("%s has no field(s) %s" % (self.__class__.__name__, ", ".join(kwargs)))

    def __repr__(self):
        values = ", ".join("%s=%r" % (name, getattr(self, name)) for name in self._meta.fields)
        return '<%s: %s>' % (self.__class__.__name__, values)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self._meta.fields)

    @classmethod
    def _run_checks(cls, context):
        for check in cls._meta.checks:
            if not check(context.f):
                raise CheckError("A check of %s failed" % cls.__name__)

    @classmethod
    def from_stream(cls, stream):
        """Reads the structure from the current position of *stream*.

        :rtype: Structure, int
        :return: the structure and the number of bytes read
        """
        context = ParsingContext()
        consumed = 0
        for name, field in cls._meta.fields.items():
            context[name], length = field.from_stream(stream, context)
            consumed += length

        cls._run_checks(context)
        return cls(**context.values), consumed

    def to_stream(self, stream):
        """Writes the structure to *stream* and returns the number of bytes written. Overrides are applied to all
        values before the first byte is written, so a field can depend on fields that come after it.
        """
        context = ParsingContext({name: getattr(self, name) for name in self._meta.fields})
        for name, field in self._meta.fields.items():
            context[name] = field.final_value(context[name], context)

        self._run_checks(context)
        return sum(field.to_stream(stream, context[name], context) for name, field in self._meta.fields.items())

    @classmethod
    def from_bytes(cls, data):
        return cls.from_stream(io.BytesIO(data))[0]

    def to_bytes(self):
        stream = io.BytesIO()
        self.to_stream(stream)
        return stream.getvalue()
