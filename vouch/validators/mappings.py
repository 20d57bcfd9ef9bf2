""" Key-value schemas: `Map` and `Record` """

from collections.abc import Mapping

from ..schema import Schema, checks
from ..schema.const import CODES
from ..schema.context import ParsePayload
from ..schema.util import UNDEFINED


class MappingBase(Schema):
    """ Common parts of `Map` and `Record` """

    def __init__(self, key, value, **opts):
        super(MappingBase, self).__init__(**opts)
        self.key = key
        self.value = value

    def __repr__(self):
        return '{}({!r}, {!r})'.format(type(self).__name__, self.key, self.value)

    def _parse_key(self, payload, k, ctx):
        """ Parse a key; an invalid key is reported as a single `invalid_key` issue

        :return: (ok, parsed key)
        """
        kp = ParsePayload(k, payload.path + [k])
        self.key.run(kp, ctx)
        if kp.issues:
            self._issue(payload, CODES.INVALID_KEY, origin=self.kind, path=[k], input=k, key=k, issues=kp.issues)
            return False, k
        return True, kp.value

    def min(self, n, **opts):
        return self.check(checks.min_size(n, origin=self.kind, **opts))

    def max(self, n, **opts):
        return self.check(checks.max_size(n, origin=self.kind, **opts))

    def size(self, n, **opts):
        return self.check(checks.size(n, origin=self.kind, **opts))

    def nonempty(self, **opts):
        return self.min(1, **opts)


class Map(MappingBase):
    """ A mapping with keys and values of the given schemas. The output is a `dict`.

    Invalid keys are reported as `invalid_key`, invalid values as `invalid_element`;
    both carry the key in the path, and the nested issues in `issues`:

    ```python
    from vouch import Map, String, Int

    Map(String(), Int()).parse({'a': 1})  #-> {'a': 1}
    Map(String(), Int()).parse({'a': 'x'})
    #-> Invalid: Invalid value in map @ a
    ```

    :param key: Key schema
    :type key: Schema
    :param value: Value schema
    :type value: Schema
    """

    kind = 'map'

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, Mapping):
            self._type_issue(payload)
            return False

        output = {}
        for k, val in v.items():
            key_ok, key = self._parse_key(payload, k, ctx)

            vp = payload.child(val, k)
            self.value.run(vp, ctx)
            if vp.issues:
                self._issue(payload, CODES.INVALID_ELEMENT, origin='map', path=[k], input=val, key=k,
                            issues=vp.issues)
            elif key_ok:
                output[key] = vp.value

            if ctx.abort_early and payload.issues:
                break
        payload.value = output


class Record(MappingBase):
    """ A mapping used as a dictionary: keys of one schema, values of another. The output is a `dict`.

    Invalid keys are reported as `invalid_key`; issues of values are reported directly, with the key in the path.

    When the key schema is enumerable (`Enum`, `Literal`), the record is exhaustive:
    every key must be present, and other keys are reported with `unrecognised_keys`.
    Use `partial=True` to make the keys optional.

    ```python
    from vouch import Record, Enum, Int

    Record(Enum(['a', 'b']), Int()).parse({'a': 1})
    #-> Invalid: Invalid input: expected int, received undefined @ b
    ```

    :param key: Key schema
    :type key: Schema
    :param value: Value schema
    :type value: Schema
    :param partial: With an enumerable key schema, do not require every key
    :type partial: bool
    """

    kind = 'record'

    def __init__(self, key, value, partial=False, **opts):
        super(Record, self).__init__(key, value, **opts)
        self.partial = partial

    def _parse_value(self, payload, k, val, output, ctx, out_key=UNDEFINED):
        vp = payload.child(val, k)
        self.value.run(vp, ctx)
        payload.merge(vp, k)
        if not vp.issues and vp.value is not UNDEFINED:
            output[k if out_key is UNDEFINED else out_key] = vp.value

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, Mapping):
            self._type_issue(payload)
            return False

        output = {}
        keys = self.key.values
        if keys is not None:
            # Exhaustive
            for k in keys:
                if k not in v and self.partial:
                    continue
                self._parse_value(payload, k, v.get(k, UNDEFINED), output, ctx)
                if ctx.abort_early and payload.issues:
                    return
            unknown = [k for k in v if k not in keys]
            if unknown:
                self._issue(payload, CODES.UNRECOGNISED_KEYS, origin='record', keys=unknown)
        else:
            for k, val in v.items():
                key_ok, key = self._parse_key(payload, k, ctx)
                if key_ok:
                    self._parse_value(payload, k, val, output, ctx, key)
                if ctx.abort_early and payload.issues:
                    break
        payload.value = output


__all__ = ('Map', 'Record')
