from uncrush.exceptions import UnknownDependentFieldError


class ParsingContext:
    """The field values of one structure while it is read or written. Fields that depend on other fields, such as
    a data field whose size is stored in a length field, look them up here.

    Callables given as a field option receive :attr:`f`, which exposes the values as attributes.
    """

    def __init__(self, values=None):
        self.values = dict(values or {})
        self.f = _FieldValues(self)

    def __getitem__(self, name):
        try:
            return self.values[name]
        except KeyError:
            raise UnknownDependentFieldError("The value of %s is needed, but is not known yet" % name) from None

    def __setitem__(self, name, value):
        self.values[name] = value

    def __contains__(self, name):
        return name in self.values


class _FieldValues:
    __slots__ = ('_context',)

    def __init__(self, context):
        self._context = context

    def __getattr__(self, name):
        return self._context[name]
