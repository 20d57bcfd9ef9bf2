""" Wrappers: schemas that change how another schema treats nil values, failures and outputs.

They compose as outer schemas delegating to the inner one, so the inner schema never changes:

```python
from vouch import Int

age = Int()
age.optional().parse(None)  #-> None
age.parse(None)
#-> Invalid: Invalid input: expected int, received nil
```
"""

import copy
from types import MappingProxyType
from collections.abc import Mapping, Set as AbstractSet

from ..schema import Schema
from ..schema.issues import finalize_issue
from ..schema.util import UNDEFINED, is_nil


class Wrapper(Schema):
    """ Base for wrappers: delegates to the inner schema

    :param inner: The wrapped schema
    :type inner: Schema
    """

    handles_nil = True

    def __init__(self, inner, **opts):
        super(Wrapper, self).__init__(**opts)
        self.inner = inner

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.inner)

    def unwrap(self):
        return self.inner

    def is_optional(self):
        return self.inner.is_optional()

    @property
    def expected(self):
        return self.inner.expected

    @property
    def values(self):
        return self.inner.values

    def _parse(self, payload, ctx):
        self.inner.run(payload, ctx)


def _with_none(values):
    return None if values is None else values + (None,)


class Optional(Wrapper):
    """ Accepts `None` and a missing value.

    A missing object field stays missing in the output; `None` is preserved.
    """

    kind = 'optional'

    def is_optional(self):
        return True

    @property
    def values(self):
        return _with_none(self.inner.values)

    def _parse(self, payload, ctx):
        if payload.value is UNDEFINED or payload.value is None:
            return False
        self.inner.run(payload, ctx)


class ExactOptional(Wrapper):
    """ Accepts a missing value, but not an explicit `None` (unless the inner schema does) """

    kind = 'exact_optional'

    def is_optional(self):
        return True

    def _parse(self, payload, ctx):
        if payload.value is UNDEFINED:
            return False
        self.inner.run(payload, ctx)


class Nilable(Wrapper):
    """ Accepts `None`, and preserves it on output.

    A missing value is not accepted: combine with `Optional` for that, see `Schema.nullish()`.
    """

    kind = 'nilable'

    @property
    def values(self):
        return _with_none(self.inner.values)

    def _parse(self, payload, ctx):
        if payload.value is None:
            return False
        self.inner.run(payload, ctx)


class NonOptional(Wrapper):
    """ Rejects `None` and a missing value, even if the inner schema accepts them.

    A value produced by the inner schema, e.g. a default, is fine.
    """

    kind = 'nonoptional'

    def is_optional(self):
        return False

    def _parse(self, payload, ctx):
        if not is_nil(payload.value):
            self.inner.run(payload, ctx)
            return

        n = len(payload.issues)
        original = payload.value
        self.inner.run(payload, ctx)
        if len(payload.issues) == n and is_nil(payload.value):
            payload.value = original
            self._type_issue(payload)
            return False


class Default(Wrapper):
    """ Short-circuit for nil input: `None` or a missing value gives the default, bypassing the inner schema.

    The default is returned as is: it should be a valid *output* of the inner schema.
    Static defaults are deep-copied for every parse.

    ```python
    from vouch import Number, Array, String

    Number().default(7).parse(None)  #-> 7
    Array(String()).default_fn(list).parse(None)  #-> []
    ```

    :param value: The default value
    :param factory: Callable producing the default; used instead of `value`
    """

    kind = 'default'

    def __init__(self, inner, value=UNDEFINED, factory=None, **opts):
        super(Default, self).__init__(inner, **opts)
        self.default_value = value
        self.factory = factory

    def is_optional(self):
        return True

    def get_default(self):
        if self.factory is not None:
            return self.factory()
        return copy.deepcopy(self.default_value)

    def _parse(self, payload, ctx):
        if is_nil(payload.value):
            payload.value = self.get_default()
            return False
        self.inner.run(payload, ctx)


class Prefault(Default):
    """ Substitution for nil input: `None` or a missing value is replaced with the value, which is then parsed.

    The value should be a valid *input* of the inner schema. Invalid non-nil input is reported as usual:

    ```python
    from vouch import Number

    Number().gte(0).prefault(7).parse(None)  #-> 7
    Number().prefault(7).parse('3')
    #-> Invalid: Invalid input: expected number, received string
    ```
    """

    kind = 'prefault'

    def _parse(self, payload, ctx):
        if is_nil(payload.value):
            payload.value = self.get_default()
        self.inner.run(payload, ctx)


class Catch(Wrapper):
    """ On failure, give a fallback value instead of the issues.

    :param value: The fallback value
    :param factory: `factory(issues)` producing the fallback; the issues are finalised `Invalid` errors
    """

    kind = 'catch'

    def __init__(self, inner, value=UNDEFINED, factory=None, **opts):
        super(Catch, self).__init__(inner, **opts)
        self.fallback = value
        self.factory = factory

    def is_optional(self):
        return True

    @property
    def values(self):
        return None

    def _parse(self, payload, ctx):
        child = payload.child(payload.value)
        self.inner.run(child, ctx)
        if not child.issues:
            payload.value = child.value
        elif self.factory is not None:
            payload.value = self.factory([finalize_issue(i, ctx, payload.path) for i in child.issues])
        else:
            payload.value = copy.deepcopy(self.fallback)


def freeze(v):
    """ Read-only view of a container: mappings become `MappingProxyType`, lists become tuples, sets frozensets """
    if isinstance(v, Mapping):
        return MappingProxyType(dict(v))
    if isinstance(v, list):
        return tuple(v)
    if isinstance(v, AbstractSet) and not isinstance(v, frozenset):
        return frozenset(v)
    return v


class Readonly(Wrapper):
    """ Makes the output read-only (shallow).

    ```python
    from vouch import Array, Int

    Array(Int()).readonly().parse([1, 2])  #-> (1, 2)
    ```
    """

    kind = 'readonly'

    def _parse(self, payload, ctx):
        if self.inner.run(payload, ctx):
            payload.value = freeze(payload.value)


__all__ = ('Optional', 'ExactOptional', 'Nilable', 'NonOptional', 'Default', 'Prefault', 'Catch', 'Readonly')
