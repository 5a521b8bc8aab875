class StructureOptions:
    """The ``Meta`` options of a structure class, and its fields by name in declaration order.

    * ``byte_order``: the byte order of integer fields that do not specify one
    * ``encoding``: the encoding of string fields that do not specify one
    * ``checks``: callables receiving the field values, all of which must hold when reading and writing
    """

    option_names = ('byte_order', 'encoding', 'checks')

    def __init__(self, meta=None):
        self.fields = {}
        self.byte_order = None
        self.encoding = None
        self.checks = ()

        options = {k: v for k, v in vars(meta).items() if not k.startswith('_')} if meta is not None else {}
        unknown = set(options) - set(self.option_names)
        if unknown:
            raise TypeError("class Meta got unknown option(s): %s" % ", ".join(sorted(unknown)))
        for name, value in options.items():
            setattr(self, name, value)
