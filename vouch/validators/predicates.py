""" Composite schemas: unions and intersections """

from collections.abc import Mapping

from ..schema import Schema
from ..schema.const import CODES
from ..schema.errors import SchemaError
from ..schema.merge import merge_values, MergeError
from ..schema.util import UNDEFINED, deep_equal
from ..i18n import _


class Union(Schema):
    """ Try the schemas in order and use the first one that succeeds.

    This is the *OR* condition: any of the schemas should match.
    When none does, a single `invalid_union` issue is reported, with the issues of every branch in `branches`.

    ```python
    from vouch import Union, String, Int

    schema = Union(String(), Int())
    schema.parse('a')  #-> 'a'
    schema.parse(1.5)
    #-> Invalid: Invalid input: no union member matched
    ```

    :param options: Schemas to try
    """

    kind = 'union'
    handles_nil = True

    def __init__(self, *options, **opts):
        super(Union, self).__init__(**opts)
        if len(options) == 1 and isinstance(options[0], (list, tuple)):
            options = tuple(options[0])

        # Flatten (for the sake of friendlier error messages)
        self.options = sum(tuple(s.options if type(s) == Union and not s.checks and s.error is None else (s,)
                                 for s in options), ())
        if not self.options:
            raise SchemaError('Union requires at least one option')

    def __repr__(self):
        return 'Union({})'.format(', '.join(map(repr, self.options)))

    def is_optional(self):
        return any(o.is_optional() for o in self.options)

    @property
    def expected(self):
        return u'|'.join(o.expected or '?' for o in self.options)

    @property
    def values(self):
        values = ()
        for o in self.options:
            if o.values is None:
                return None
            values += o.values
        return values

    def _parse(self, payload, ctx):
        branches = []
        for option in self.options:
            child = payload.child(payload.value)
            option.run(child, ctx)
            if not child.issues:
                payload.value = child.value
                return
            branches.append(child.issues)

        self._issue(payload, CODES.INVALID_UNION, branches=branches)
        return False


def _unwrap(schema):
    while True:
        if hasattr(schema, 'inner'):
            schema = schema.inner
        elif hasattr(schema, 'resolve'):  # Lazy
            schema = schema.resolve()
        else:
            return schema


class DiscriminatedUnion(Schema):
    """ A union of objects told apart by a literal field.

    The option is chosen by the value of the discriminator field, so only one of them is tried,
    and the issues are reported for that option only:

    ```python
    from vouch import DiscriminatedUnion, Object, Literal, String, Int

    Event = DiscriminatedUnion('type', [
        Object({'type': Literal('click'), 'x': Int(), 'y': Int()}),
        Object({'type': Literal('key'), 'key': String()}),
    ])

    Event.parse({'type': 'key', 'key': 'a'})  #-> {'type': 'key', 'key': 'a'}
    Event.parse({'type': 'scroll'})
    #-> Invalid: Invalid input: no matching discriminator @ type
    ```

    Options may also be discriminated unions over the same field.

    :param discriminator: The field name
    :param options: Object schemas with a `Literal` or `Enum` at the field
    """

    kind = 'discriminated_union'
    handles_nil = True

    def __init__(self, discriminator, options, **opts):
        super(DiscriminatedUnion, self).__init__(**opts)
        self.discriminator = discriminator
        self.options = tuple(options)

        # Discriminator value -> option
        self.lookup = []
        for option in self.options:
            values = self._option_values(option)
            if not values:
                raise SchemaError('Option {!r} has no literal discriminator {!r}'.format(option, discriminator))
            for v in values:
                if any(deep_equal(v, seen) for seen, _o in self.lookup):
                    raise SchemaError('Duplicate discriminator value {!r}'.format(v))
                self.lookup.append((v, option))

    def _option_values(self, option):
        option = _unwrap(option)
        if isinstance(option, DiscriminatedUnion):
            return tuple(v for v, _o in option.lookup) if option.discriminator == self.discriminator else None
        fields = getattr(option, 'fields', None)
        if fields is None or self.discriminator not in fields:
            return None
        return fields[self.discriminator].values

    def __repr__(self):
        return 'DiscriminatedUnion({!r}, {!r})'.format(self.discriminator, list(self.options))

    @property
    def expected(self):
        return 'object'

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, Mapping):
            self._type_issue(payload)
            return False

        d = v.get(self.discriminator, UNDEFINED)
        for value, option in self.lookup:
            if deep_equal(value, d):
                option.run(payload, ctx)
                return

        self._issue(payload, CODES.INVALID_UNION, path=[self.discriminator], input=d,
                    discriminator=self.discriminator, note=_(u'no matching discriminator'), branches=[])
        return False


class ExclusiveUnion(Union):
    """ Exactly one of the schemas must match.

    When none does, or several do, an `invalid_union` issue is reported;
    for several matches it has `inclusive=False`.
    """

    kind = 'exclusive_union'

    def _parse(self, payload, ctx):
        matches, branches = [], []
        for option in self.options:
            child = payload.child(payload.value)
            option.run(child, ctx)
            if child.issues:
                branches.append(child.issues)
            else:
                matches.append(child)

        if len(matches) == 1:
            payload.value = matches[0].value
            return
        if matches:
            self._issue(payload, CODES.INVALID_UNION, inclusive=False, branches=[])
        else:
            self._issue(payload, CODES.INVALID_UNION, branches=branches)
        return False


class Intersection(Schema):
    """ Both schemas must match; the outputs are merged.

    Mappings are merged by keys, sequences element-wise, other values must be equal.
    If the outputs conflict, an `invalid_intersection` issue is reported with the `reason`
    and the `merge_path` of the conflict.

    ```python
    from vouch import Intersection, Object, String, Int

    schema = Intersection(Object({'a': String()}), Object({'b': Int()}))
    schema.parse({'a': 'x', 'b': 1})  #-> {'a': 'x', 'b': 1}
    ```
    """

    kind = 'intersection'
    handles_nil = True

    def __init__(self, left, right, **opts):
        super(Intersection, self).__init__(**opts)
        self.left = left
        self.right = right

    def __repr__(self):
        return 'Intersection({!r}, {!r})'.format(self.left, self.right)

    def is_optional(self):
        return self.left.is_optional() and self.right.is_optional()

    @property
    def expected(self):
        return self.left.expected

    def _parse(self, payload, ctx):
        lp = payload.child(payload.value)
        self.left.run(lp, ctx)
        rp = payload.child(payload.value)
        self.right.run(rp, ctx)

        payload.merge(lp)
        payload.merge(rp)
        if lp.issues or rp.issues:
            return False

        try:
            payload.value = merge_values(lp.value, rp.value)
        except MergeError as e:
            self._issue(payload, CODES.INVALID_INTERSECTION, reason=e.reason, merge_path=e.path)
            return False


__all__ = ('Union', 'DiscriminatedUnion', 'ExclusiveUnion', 'Intersection')
