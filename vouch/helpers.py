""" Schemas that alter the validation process: lazy resolution, pipes and transforms. """

import logging
import threading

from .schema import Schema
from .schema.checks import report_exception
from .schema.context import RefinementContext
from .schema.errors import SchemaError
from .schema.util import UNDEFINED, accepts_context, get_callable_name

logger = logging.getLogger(__name__)


class Lazy(Schema):
    """ A schema resolved on first use. This is how recursive schemas are defined:

    ```python
    from vouch import Lazy, Object, Number

    Node = Object({
        'v': Number(),
        'next': Lazy(lambda: Node).optional(),
    })

    Node.parse({'v': 1, 'next': {'v': 2, 'next': None}})
    ```

    The getter is called once; all callers observe the same resolved schema.

    :param getter: Callable returning the schema
    :type getter: callable
    """

    kind = 'lazy'
    handles_nil = True

    def __init__(self, getter, **opts):
        super(Lazy, self).__init__(**opts)
        self.getter = getter
        self._resolved = None
        self._lock = threading.RLock()

    def __repr__(self):
        return 'Lazy({})'.format(get_callable_name(self.getter))

    def resolve(self):
        """ Get the schema, calling the getter on first use

        :rtype: Schema
        """
        schema = self._resolved
        if schema is None:
            with self._lock:
                if self._resolved is None:
                    schema = self.getter()
                    if not isinstance(schema, Schema):
                        raise SchemaError('Lazy getter {} returned {!r}, not a schema'.format(
                            get_callable_name(self.getter), schema))
                    logger.debug('Resolved %r to %r', self, schema)
                    self._resolved = schema
                schema = self._resolved
        return schema

    schema = property(resolve)

    def is_optional(self):
        return self.resolve().is_optional()

    @property
    def expected(self):
        return self.resolve().expected

    @property
    def values(self):
        return self.resolve().values

    def _parse(self, payload, ctx):
        self.resolve().run(payload, ctx)


class Pipe(Schema):
    """ Parse with the first schema, then feed its output to the second one.

    The second stage only runs when the first one succeeds:

    ```python
    from vouch import Pipe, String

    schema = Pipe(String().trim(), String().min(1))
    schema.parse('  hi ')  #-> 'hi'
    schema.parse('   ')
    #-> Invalid: Too small: expected string to have at least 1 characters
    ```
    """

    kind = 'pipe'
    handles_nil = True

    def __init__(self, left, right, **opts):
        super(Pipe, self).__init__(**opts)
        self.left = left
        self.right = right

    def __repr__(self):
        return 'Pipe({!r}, {!r})'.format(self.left, self.right)

    def is_optional(self):
        return self.left.is_optional()

    @property
    def expected(self):
        return self.left.expected

    def _parse(self, payload, ctx):
        if not self.left.run(payload, ctx):
            return False
        self.right.run(payload, ctx)


class Transform(Schema):
    """ Map the value with a callable: `fn(value)`, or `fn(value, ctx)` to report issues.

    A transform which reports issues fails the parse, and produces no value.
    Exceptions are reported as 'custom' issues with the exception message;
    a raised `Invalid` keeps its code and message.

    ```python
    from vouch import String

    def to_int(value, ctx):
        try:
            return int(value)
        except ValueError:
            ctx.add_issue(u'Not a number')

    String().transform(len).parse('abc')  #-> 3
    String().transform(to_int).parse('x')
    #-> Invalid: Not a number
    ```

    :param fn: The mapping
    :type fn: callable
    """

    kind = 'transform'
    handles_nil = True

    def __init__(self, fn, **opts):
        super(Transform, self).__init__(**opts)
        self.fn = fn
        self.with_context = accepts_context(fn)

    def __repr__(self):
        return 'Transform({})'.format(get_callable_name(self.fn))

    def _parse(self, payload, ctx):
        n = len(payload.issues)
        try:
            if self.with_context:
                value = self.fn(payload.value, RefinementContext(payload, ctx, self))
            else:
                value = self.fn(payload.value)
        except Exception as e:
            report_exception(payload, e, schema=self)
            payload.value = UNDEFINED
            return False

        if len(payload.issues) > n:
            payload.value = UNDEFINED
            return False
        payload.value = value


def preprocess(fn, schema):
    """ Map the input with `fn` before parsing it with the schema

    :rtype: Pipe
    """
    return Pipe(Transform(fn), schema)


__all__ = ('Lazy', 'Pipe', 'Transform', 'preprocess')
