""" The parse engine.

A schema is an immutable object describing the shape of a value. Parsing runs the input through a pipeline:

1. **Nil gate.** `None`, a missing object key (`UNDEFINED`) or an empty `Ref` is rejected with `invalid_type`
    unless the schema admits nil: `Optional`, `Nilable`, `Default`, `Prefault`, `Nil`, `Any`, ...

2. **Coercion.** When enabled with `.coerce()`, the input is converted to the schema type first:

    ```python
    Int().coerce().parse('42')  #-> 42
    ```

    A failed conversion leaves the input as is, so the type check reports it.

3. **Type check.** The input must be of the expected runtime kind. A `Ref` holder is unwrapped,
    and the output is wrapped into a new `Ref`.

4. **Kind-specific parsing.** Containers recurse into their elements, extending the path with keys and indexes.

5. **Checks.** Constraints run in insertion order (see [`Check`](#check)).

Wrappers (`optional()`, `default()`, `transform()`, `pipe()`, ...) are schemas themselves,
delegating to the inner schema: every modifier returns a new schema and never changes the original one.

```python
from vouch import String

name = String().trim().min(1)
name.parse('  John ')  #-> 'John'
name.safe_parse('   ')  #-> ParseResult(error=Invalid('Too small: expected string to have at least 1 characters'))
```
"""

import copy

from .const import CODES
from .util import UNDEFINED, Ref, is_nil, get_type_name
from .errors import SchemaError
from .context import ParseContext, ParsePayload
from .issues import finalize_error
from . import checks


class ParseResult(object):
    """ Outcome of `safe_parse()`.

    Unpacks into `(data, True)` on success, and into `(error, False)` on failure:

    ```python
    value, ok = schema.safe_parse(input)
    if not ok:
        print(value.prettify())
    ```

    :ivar data: The output value; `None` on failure
    :ivar error: `Invalid` or `MultipleInvalid`; `None` on success
    """

    __slots__ = ('data', 'error')

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error

    @property
    def ok(self):
        return self.error is None

    def __bool__(self):
        return self.ok

    def __iter__(self):
        yield self.data if self.ok else self.error
        yield self.ok

    def __repr__(self):
        if self.ok:
            return 'ParseResult(data={!r})'.format(self.data)
        return 'ParseResult(error={!r})'.format(self.error)


class Schema(object):
    """ Base for all schema kinds.

    Subclasses set `kind`, and implement `_parse()` (and `_coerce()` for coercible kinds).

    :param error: Error hook for the issues this schema reports: a string, or `(raw_issue) -> str|None`
    :type error: str|callable|None
    :param message: Alias for `error`
    :param coerce: Convert the input to the schema type before the type check
    :type coerce: bool
    """

    #: Schema kind
    kind = None

    #: Whether nil values reach `_parse()`; otherwise they're rejected by the nil gate
    handles_nil = False

    #: Whether `.coerce()` is supported
    coercible = False

    def __init__(self, error=None, message=None, coerce=False):
        if coerce and not self.coercible:
            raise SchemaError('{} does not support coercion'.format(type(self).__name__))
        self.checks = ()
        self.error = error if error is not None else message
        self.coerced = coerce
        self.metadata = {}
        self.brand_tag = None

    def __repr__(self):
        return '{}()'.format(type(self).__name__)

    #region Parsing

    @property
    def expected(self):
        """ What the schema expects, as reported in `invalid_type` issues """
        return self.kind

    @property
    def values(self):
        """ The complete set of values this schema accepts, if it's enumerable: literals, enums and such.

        :rtype: tuple|None
        """
        return None

    def run(self, payload, ctx):
        """ Parse the payload in place.

        `payload.value` is replaced with the output, issues are appended to `payload.issues`.

        :type payload: ParsePayload
        :type ctx: ParseContext
        :return: Whether the parse had no issues
        :rtype: bool
        """
        n = len(payload.issues)

        # Holder in, holder out
        holder = isinstance(payload.value, Ref)
        if holder:
            payload.value = None if payload.value.empty else payload.value.value

        # Nil gate
        if not self.handles_nil and is_nil(payload.value):
            self._type_issue(payload)
            return False

        # Coercion
        if self.coerced and not is_nil(payload.value):
            try:
                payload.value = self._coerce(payload.value)
            except (TypeError, ValueError, ArithmeticError):
                pass  # the type check will report it

        # Kind-specific parsing, then checks
        if self._parse(payload, ctx) is not False and self.checks:
            checks.run_checks(self.checks, payload, ctx, self, aborted=len(payload.issues) > n)

        ok = len(payload.issues) == n
        if holder and ok:
            payload.value = Ref(payload.value)
        return ok

    def _coerce(self, value):
        """ Convert the value to the schema type.

        :raises TypeError|ValueError: conversion failed
        """
        return value

    def _parse(self, payload, ctx):
        """ Kind-specific parsing.

        :return: `False` if the value was rejected as a whole: checks are skipped then
        """
        raise NotImplementedError

    def _issue(self, payload, code, **fields):
        return payload.add_issue(code, schema=self, **fields)

    def _type_issue(self, payload, **fields):
        return payload.add_issue(CODES.INVALID_TYPE, schema=self, expected=self.expected,
                                 received=get_type_name(payload.value), **fields)

    def safe_parse(self, value, ctx=None):
        """ Parse the value and report the outcome.

        Never raises for invalid input.

        :param value: The input
        :param ctx: Parse settings
        :type ctx: ParseContext|dict|None
        :rtype: ParseResult
        """
        ctx = ParseContext.make(ctx)
        payload = ParsePayload(value)
        self.run(payload, ctx)
        if payload.issues:
            return ParseResult(error=finalize_error(payload.issues, ctx))
        return ParseResult(None if payload.value is UNDEFINED else payload.value)

    def parse(self, value, ctx=None):
        """ Parse the value, or raise.

        :param value: The input
        :param ctx: Parse settings
        :type ctx: ParseContext|dict|None
        :return: The output value
        :raises Invalid: A single issue
        :raises MultipleInvalid: Several issues
        """
        result = self.safe_parse(value, ctx)
        if not result.ok:
            raise result.error
        return result.data

    __call__ = parse

    def is_optional(self):
        """ Whether the schema accepts a missing value.

        Wrappers answer from their structure, without parsing: default factories are not called.
        """
        if not self.handles_nil:
            return False
        return self.safe_parse(UNDEFINED).ok

    def is_nilable(self):
        """ Whether the schema accepts `None` """
        return self.safe_parse(None).ok

    #endregion

    #region Copy-on-write

    def _clone(self, **attrs):
        """ Shallow copy with some attributes replaced.

        Attributes are never mutated in place, so sharing them between copies is fine.
        """
        c = copy.copy(self)
        c.metadata = dict(self.metadata)
        for k, v in attrs.items():
            setattr(c, k, v)
        return c

    def check(self, *new_checks):
        """ Add checks: `Check` objects, or callables `fn(ctx)` taking a `RefinementContext` """
        return self._clone(checks=self.checks + tuple(
            c if isinstance(c, checks.Check) else checks.custom(c)
            for c in new_checks
        ))

    def refine(self, pred, error=None, message=None, path=None, params=None, abort=False, when=None):
        """ Add a predicate. A falsy result reports a 'custom' issue.

        ```python
        Int().refine(lambda v: v % 2 == 0, u'Must be even')
        ```

        :param pred: `pred(value) -> bool`
        :param error: Message or error hook
        :param path: Path of the issue, relative to the value
        :param params: Custom parameters reported on the issue
        :param abort: Stop running further checks on failure
        :param when: `when(payload) -> bool`: run only if it returns True
        """
        return self.check(checks.refine(pred, error, path, params, abort, when, message))

    def super_refine(self, fn, **opts):
        """ Add a refinement `fn(value, ctx)` which reports issues with `ctx.add_issue()` """
        return self.check(checks.super_refine(fn, **opts))

    def overwrite(self, fn, **opts):
        """ Replace the value with `fn(value)` as a check: later checks see the new value """
        return self.check(checks.overwrite(fn, **opts))

    def coerce(self, enabled=True):
        """ Enable coercion of the input """
        if enabled and not self.coercible:
            raise SchemaError('{} does not support coercion'.format(type(self).__name__))
        return self._clone(coerced=enabled)

    def with_error(self, error):
        """ Set the error hook of this schema """
        return self._clone(error=error)

    def describe(self, description):
        """ Attach a description """
        return self.meta(description=description)

    @property
    def description(self):
        return self.metadata.get('description')

    def meta(self, **metadata):
        """ Attach metadata: title, description, examples, ...

        The new schema is registered in the `global_registry`.
        """
        from .registry import global_registry
        c = self._clone()
        c.metadata.update(metadata)
        global_registry.add(c, **c.metadata)
        return c

    def brand(self, tag):
        """ Tag the schema with a brand. It's a lookup key for registries and doesn't change parsing """
        return self._clone(brand_tag=tag)

    #endregion

    #region Wrappers

    def optional(self):
        from ..validators.wrappers import Optional
        return Optional(self)

    def exact_optional(self):
        from ..validators.wrappers import ExactOptional
        return ExactOptional(self)

    def nilable(self):
        from ..validators.wrappers import Nilable
        return Nilable(self)

    def nullish(self):
        from ..validators.wrappers import Optional, Nilable
        return Optional(Nilable(self))

    def nonoptional(self):
        from ..validators.wrappers import NonOptional
        return NonOptional(self)

    def default(self, value):
        from ..validators.wrappers import Default
        return Default(self, value)

    def default_fn(self, factory):
        from ..validators.wrappers import Default
        return Default(self, factory=factory)

    def prefault(self, value):
        from ..validators.wrappers import Prefault
        return Prefault(self, value)

    def prefault_fn(self, factory):
        from ..validators.wrappers import Prefault
        return Prefault(self, factory=factory)

    def catch(self, value):
        from ..validators.wrappers import Catch
        return Catch(self, value)

    def catch_fn(self, fn):
        from ..validators.wrappers import Catch
        return Catch(self, factory=fn)

    def readonly(self):
        from ..validators.wrappers import Readonly
        return Readonly(self)

    def array(self):
        from ..validators.iterables import Array
        return Array(self)

    def or_(self, *others):
        from ..validators.predicates import Union
        return Union(self, *others)

    def and_(self, other):
        from ..validators.predicates import Intersection
        return Intersection(self, other)

    def transform(self, fn):
        """ Map the output with `fn(value)` or `fn(value, ctx)` """
        from ..helpers import Pipe, Transform
        return Pipe(self, Transform(fn))

    def pipe(self, other):
        """ Feed the output into another schema """
        from ..helpers import Pipe
        return Pipe(self, other)

    #endregion


def safe_parse(schema, value, ctx=None):
    """ Parse a value with a schema. See `Schema.safe_parse()`

    :rtype: ParseResult
    """
    return schema.safe_parse(value, ctx)


def parse(schema, value, ctx=None):
    """ Parse a value with a schema, or raise. See `Schema.parse()` """
    return schema.parse(value, ctx)
