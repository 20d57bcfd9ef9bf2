""" Object schema: a fixed set of named fields """

from collections.abc import Mapping

from ..schema import Schema
from ..schema.const import CODES, UNKNOWN_KEYS
from ..schema.errors import SchemaError
from ..schema.util import UNDEFINED


class Object(Schema):
    """ A mapping with known fields. The output is a `dict`.

    Fields are validated in declaration order; a missing field is validated as `UNDEFINED`,
    so it's only accepted by schemas that admit a missing value: `.optional()`, `.default()`, ...

    ```python
    from vouch import Object, String, Int

    User = Object({
        'name': String(),
        'age': Int().gte(0),
        'email': String().email().optional(),
    })

    User.parse({'name': 'John', 'age': 30, 'admin': True})  #-> {'name': 'John', 'age': 30}
    User.strict().parse({'name': 'John', 'age': 30, 'admin': True})
    #-> Invalid: Unrecognised key: "admin"
    ```

    Keys that are not in the shape are handled according to the unknown-key mode:

    * `'strip'` (default): dropped from the output;
    * `'strict'`: reported with a single `unrecognised_keys` issue;
    * `'passthrough'`: copied to the output as is;
    * `'catchall'`: validated against the catchall schema.

    `ParseContext(strict=True)` makes the 'strip' objects behave as 'strict' ones.

    :param shape: Field name -> schema
    :type shape: dict
    :param unknown_keys: Unknown-key mode, one of `UNKNOWN_KEYS`
    :type unknown_keys: str
    :param catchall: Schema for the values of unknown keys; implies the 'catchall' mode
    :type catchall: Schema|None
    """

    kind = 'object'

    def __init__(self, shape=None, unknown_keys=UNKNOWN_KEYS.STRIP, catchall=None, **opts):
        super(Object, self).__init__(**opts)
        shape = dict(shape or {})
        for name, field in shape.items():
            if not isinstance(field, Schema):
                raise SchemaError('Object field {!r} is not a schema: {!r}'.format(name, field))
        if catchall is not None:
            unknown_keys = UNKNOWN_KEYS.CATCHALL
        elif unknown_keys == UNKNOWN_KEYS.CATCHALL:
            raise SchemaError('The catchall mode requires a catchall schema')
        if unknown_keys not in (UNKNOWN_KEYS.STRIP, UNKNOWN_KEYS.STRICT, UNKNOWN_KEYS.PASSTHROUGH,
                                UNKNOWN_KEYS.CATCHALL):
            raise SchemaError('Unknown unknown-key mode: {!r}'.format(unknown_keys))
        self.fields = shape
        self.unknown_keys = unknown_keys
        self.catchall_schema = catchall

    def __repr__(self):
        return 'Object({!r})'.format(self.fields)

    @property
    def shape(self):
        """ Field name -> schema """
        return dict(self.fields)

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, Mapping):
            self._type_issue(payload)
            return False

        output = {}
        for name, field in self.fields.items():
            child = payload.child(v[name] if name in v else UNDEFINED, name)
            field.run(child, ctx)
            payload.merge(child, name)
            if not child.issues and child.value is not UNDEFINED:
                output[name] = child.value
            if ctx.abort_early and payload.issues:
                return

        unknown = [k for k in v if k not in self.fields]
        if unknown:
            mode = self.unknown_keys
            if mode == UNKNOWN_KEYS.STRIP and ctx.strict:
                mode = UNKNOWN_KEYS.STRICT

            if mode == UNKNOWN_KEYS.STRICT:
                self._issue(payload, CODES.UNRECOGNISED_KEYS, origin='object', keys=unknown)
            elif mode == UNKNOWN_KEYS.PASSTHROUGH:
                for k in unknown:
                    output[k] = v[k]
            elif mode == UNKNOWN_KEYS.CATCHALL:
                for k in unknown:
                    child = payload.child(v[k], k)
                    self.catchall_schema.run(child, ctx)
                    payload.merge(child, k)
                    if not child.issues and child.value is not UNDEFINED:
                        output[k] = child.value
                    if ctx.abort_early and payload.issues:
                        break
        payload.value = output

    #region Shape operators

    def _derive(self, fields, **attrs):
        """ New object with another shape. Refinements are dropped: they were written for the old shape """
        return self._clone(fields=fields, checks=(), **attrs)

    def _known(self, keys):
        keys = _keys(keys)
        missing = [k for k in keys if k not in self.fields]
        if missing:
            raise SchemaError('Object has no fields: {!r}'.format(missing))
        return keys

    def pick(self, *keys):
        """ Object with the named fields only """
        keys = self._known(keys)
        return self._derive({k: f for k, f in self.fields.items() if k in keys})

    def omit(self, *keys):
        """ Object without the named fields """
        keys = self._known(keys)
        return self._derive({k: f for k, f in self.fields.items() if k not in keys})

    def partial(self, *keys):
        """ Make the named fields (or all of them) optional """
        from .wrappers import Optional
        keys = self._known(keys) if keys else list(self.fields)
        return self._derive({k: Optional(f) if k in keys else f for k, f in self.fields.items()})

    def required(self, *keys):
        """ Make the named fields (or all of them) required: neither missing nor `None` is accepted """
        from .wrappers import NonOptional
        keys = self._known(keys) if keys else list(self.fields)
        return self._derive({k: NonOptional(f) if k in keys else f for k, f in self.fields.items()})

    def extend(self, shape):
        """ Add fields; fields with the same name are replaced """
        fields = dict(self.fields)
        fields.update(shape.fields if isinstance(shape, Object) else shape)
        return self._derive(fields)

    def merge(self, other):
        """ Like `extend()` with the fields of another object; its unknown-key mode wins """
        return self.extend(other)._clone(unknown_keys=other.unknown_keys, catchall_schema=other.catchall_schema)

    def key_of(self):
        """ Enum of the field names """
        from .values import Enum
        return Enum(list(self.fields))

    #endregion

    #region Unknown-key modes

    def strict(self):
        return self._clone(unknown_keys=UNKNOWN_KEYS.STRICT, catchall_schema=None)

    def strip(self):
        return self._clone(unknown_keys=UNKNOWN_KEYS.STRIP, catchall_schema=None)

    def passthrough(self):
        return self._clone(unknown_keys=UNKNOWN_KEYS.PASSTHROUGH, catchall_schema=None)

    def catchall(self, schema):
        return self._clone(unknown_keys=UNKNOWN_KEYS.CATCHALL, catchall_schema=schema)

    #endregion


def _keys(keys):
    """ Accept both `pick('a', 'b')` and `pick(['a', 'b'])` """
    if len(keys) == 1 and isinstance(keys[0], (list, tuple, set, frozenset)):
        return list(keys[0])
    return list(keys)


__all__ = ('Object',)
