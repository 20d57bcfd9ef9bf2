""" Sequence schemas: `Array`, `Tuple`, `Set` """

from collections.abc import Set as AbstractSet

from ..schema import Schema, checks
from ..schema.const import CODES
from ..schema.util import UNDEFINED, is_sequence


class Array(Schema):
    """ A homogeneous sequence: a `list` or a `tuple` of `element` values. The output is a `list`.

    Issues of elements are reported with the index in the path:

    ```python
    from vouch import Array, Int

    Array(Int()).min(1).parse([1, 2])  #-> [1, 2]
    Array(Int()).parse([1, 'a'])
    #-> Invalid: Invalid input: expected int, received string @ [1]
    ```

    Length checks run even when some elements are invalid.

    :param element: Element schema
    :type element: Schema
    """

    kind = 'array'

    def __init__(self, element, **opts):
        super(Array, self).__init__(**opts)
        self.element = element

    def __repr__(self):
        return 'Array({!r})'.format(self.element)

    def unwrap(self):
        return self.element

    def _parse(self, payload, ctx):
        v = payload.value
        if not is_sequence(v):
            self._type_issue(payload)
            return False

        output = []
        for i, item in enumerate(v):
            child = payload.child(item, i)
            self.element.run(child, ctx)
            payload.merge(child, i)
            output.append(child.value)
            if ctx.abort_early and payload.issues:
                break
        payload.value = output

    def min(self, n, **opts):
        return self.check(checks.min_length(n, **opts))

    def max(self, n, **opts):
        return self.check(checks.max_length(n, **opts))

    def length(self, n, **opts):
        return self.check(checks.length(n, **opts))

    def nonempty(self, **opts):
        return self.min(1, **opts)


class Tuple(Schema):
    """ A fixed-length sequence, with an optional variadic tail. The output is a `tuple`.

    Trailing items that accept a missing value (e.g. `.optional()`) may be omitted.

    ```python
    from vouch import Tuple, String, Int

    point = Tuple([Int(), Int()])
    point.parse([1, 2])  #-> (1, 2)

    command = Tuple([String()], rest=Int())
    command.parse(['sum', 1, 2, 3])  #-> ('sum', 1, 2, 3)
    ```

    :param items: Schemas of the leading items
    :type items: list[Schema]
    :param rest: Schema of the items after them; when not given, extra items are rejected
    :type rest: Schema|None
    """

    kind = 'tuple'

    def __init__(self, items, rest=None, **opts):
        super(Tuple, self).__init__(**opts)
        self.items = tuple(items)
        self.rest = rest

    def __repr__(self):
        return 'Tuple({!r}, rest={!r})'.format(list(self.items), self.rest)

    def _parse(self, payload, ctx):
        v = payload.value
        if not is_sequence(v):
            self._type_issue(payload)
            return False

        n = len(self.items)
        if self.rest is None and len(v) > n:
            self._issue(payload, CODES.TOO_BIG, origin='array', maximum=n, inclusive=True)
            return False
        if len(v) < n and not all(s.is_optional() for s in self.items[len(v):]):
            required = max(i + 1 for i, s in enumerate(self.items) if not s.is_optional())
            self._issue(payload, CODES.TOO_SMALL, origin='array', minimum=required, inclusive=True)
            return False

        output = []
        for i, schema in enumerate(self.items):
            child = payload.child(v[i] if i < len(v) else UNDEFINED, i)
            schema.run(child, ctx)
            payload.merge(child, i)
            if child.value is UNDEFINED:
                break
            output.append(child.value)
            if ctx.abort_early and payload.issues:
                break

        for i in range(n, len(v)):
            if ctx.abort_early and payload.issues:
                break
            child = payload.child(v[i], i)
            self.rest.run(child, ctx)
            payload.merge(child, i)
            output.append(child.value)

        payload.value = tuple(output)


def _hashable(v):
    """ Set members must be hashable: nested sets become frozensets, lists become tuples """
    if isinstance(v, set):
        return frozenset(v)
    if isinstance(v, list):
        return tuple(v)
    return v


class Set(Schema):
    """ A `set` or a `frozenset` of `element` values. The output is a `set`.

    Element issues are reported without a path: sets are unordered.
    Element outputs which are mutable containers are frozen: `Set(Set(Int()))` gives a set of frozensets.

    :param element: Element schema
    :type element: Schema
    """

    kind = 'set'

    def __init__(self, element, **opts):
        super(Set, self).__init__(**opts)
        self.element = element

    def __repr__(self):
        return 'Set({!r})'.format(self.element)

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, AbstractSet):
            self._type_issue(payload)
            return False

        output = set()
        for item in v:
            child = payload.child(item)
            self.element.run(child, ctx)
            payload.merge(child)
            if not child.issues:
                value = _hashable(child.value)
                try:
                    output.add(value)
                except TypeError:
                    self._issue(payload, CODES.INVALID_ELEMENT, input=value, origin='set', issues=[])
            if ctx.abort_early and payload.issues:
                break
        payload.value = output

    def min(self, n, **opts):
        return self.check(checks.min_size(n, origin='set', **opts))

    def max(self, n, **opts):
        return self.check(checks.max_size(n, origin='set', **opts))

    def size(self, n, **opts):
        return self.check(checks.size(n, origin='set', **opts))

    def nonempty(self, **opts):
        return self.min(1, **opts)


__all__ = ('Array', 'Tuple', 'Set')
