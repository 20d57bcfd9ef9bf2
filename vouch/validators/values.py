""" Schemas for specific values: `Nil`, `Any`, `Unknown`, `Never`, `Literal`, `Enum` """

import enum
from collections.abc import Mapping

from ..schema import Schema
from ..schema.const import CODES
from ..schema.errors import SchemaError
from ..schema.util import deep_equal


class Nil(Schema):
    """ Only `None` """

    kind = 'nil'
    handles_nil = True

    @property
    def values(self):
        return (None,)

    def _parse(self, payload, ctx):
        if payload.value is not None:
            self._type_issue(payload)
            return False


class Any(Schema):
    """ Anything, including `None` and a missing value. The input is returned as is """

    kind = 'any'
    handles_nil = True

    def _parse(self, payload, ctx):
        pass


class Unknown(Any):
    """ Anything: like `Any`, but meant to be narrowed with checks and pipes """

    kind = 'unknown'


class Never(Schema):
    """ Nothing: every value is rejected.

    Handy for keys that must be absent: `Object({'id': Never().optional()})`
    """

    kind = 'never'
    handles_nil = True

    def _parse(self, payload, ctx):
        self._type_issue(payload)
        return False


class Literal(Schema):
    """ One of the given values.

    Values are compared by type-aware equality: `True` does not match `1`, `NaN` matches `NaN`.

    ```python
    from vouch import Literal

    Literal('a', 'b').parse('a')  #-> 'a'
    Literal('a', 'b').parse('c')
    #-> Invalid: Invalid option: expected one of "a"|"b"
    ```
    """

    kind = 'literal'

    def __init__(self, *values, **opts):
        super(Literal, self).__init__(**opts)
        if not values:
            raise SchemaError('Literal requires at least one value')
        self._values = tuple(values)

    def __repr__(self):
        return 'Literal({})'.format(', '.join(map(repr, self._values)))

    @property
    def values(self):
        return self._values

    @property
    def handles_nil(self):
        # Nil gets through the gate only to be matched against a `None` option
        return any(v is None for v in self._values)

    @property
    def value(self):
        """ The value, when there's only one """
        if len(self._values) != 1:
            raise ValueError('Literal has multiple values')
        return self._values[0]

    def _parse(self, payload, ctx):
        for v in self._values:
            if deep_equal(v, payload.value):
                payload.value = v
                return
        self._issue(payload, CODES.INVALID_VALUE, values=list(self._values))
        return False


class Enum(Schema):
    """ One of the permitted values.

    Accepts a sequence of values, a name-to-value mapping, or a Python `enum.Enum` class:

    ```python
    import enum
    from vouch import Enum

    Enum(['red', 'green']).parse('red')  #-> 'red'
    Enum({'RED': 0xFF0000, 'GREEN': 0x00FF00}).parse(0xFF0000)  #-> 0xFF0000

    class Color(enum.Enum):
        RED = 1
        GREEN = 2

    Enum(Color).parse(1)  #-> Color.RED
    Enum(Color).parse(Color.GREEN)  #-> Color.GREEN
    ```

    With an `enum.Enum` class, members are accepted, and so are their values; the output is the member.
    """

    kind = 'enum'

    def __init__(self, values, **opts):
        super(Enum, self).__init__(**opts)
        self.enum_class = None
        if isinstance(values, type) and issubclass(values, enum.Enum):
            self.enum_class = values
            self.entries = {m.name: m for m in values}
        elif isinstance(values, Mapping):
            self.entries = dict(values)
        else:
            self.entries = {v if isinstance(v, str) else repr(v): v for v in values}
        if not self.entries:
            raise SchemaError('Enum requires at least one value')

    def __repr__(self):
        return 'Enum({!r})'.format(self.enum_class or list(self.entries.values()))

    @property
    def values(self):
        return tuple(self.entries.values())

    @property
    def handles_nil(self):
        return any(v is None for v in self.entries.values())

    @property
    def options(self):
        """ Permitted values """
        return list(self.entries.values())

    @property
    def enum(self):
        """ Name-to-value mapping """
        return dict(self.entries)

    def _parse(self, payload, ctx):
        v = payload.value
        for option in self.entries.values():
            if option is v or deep_equal(option, v):
                payload.value = option
                return
            if self.enum_class is not None and deep_equal(option.value, v):
                payload.value = option
                return
        self._issue(payload, CODES.INVALID_VALUE, values=[
            o.value if self.enum_class is not None else o for o in self.entries.values()])
        return False

    def _subset(self, names):
        return self._clone(entries=names)

    def _resolve(self, keys):
        found = {}
        for k in keys:
            if k in self.entries:
                found[k] = self.entries[k]
                continue
            for name, v in self.entries.items():
                if deep_equal(v, k):
                    found[name] = v
                    break
            else:
                raise SchemaError('Enum has no option {!r}'.format(k))
        return found

    def extract(self, *keys):
        """ Enum of the given options, by name or by value """
        return self._subset(self._resolve(keys))

    def exclude(self, *keys):
        """ Enum without the given options, by name or by value """
        drop = self._resolve(keys)
        return self._subset({k: v for k, v in self.entries.items() if k not in drop})


__all__ = ('Nil', 'Any', 'Unknown', 'Never', 'Literal', 'Enum')
