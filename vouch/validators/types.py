""" Schemas defined by Python objects: callables, classes, functions """

import functools

from ..schema import Schema
from ..schema.checks import report_exception
from ..schema.const import CODES
from ..schema.util import get_callable_name
from .iterables import Tuple


class Custom(Schema):
    """ A value accepted by a predicate. Without a predicate, anything is accepted.

    ```python
    from vouch import Custom

    Even = Custom(lambda v: isinstance(v, int) and v % 2 == 0, error=u'Must be even')
    Even.parse(4)  #-> 4
    Even.parse(3)
    #-> Invalid: Must be even
    ```

    The predicate also receives `None` and missing values.

    :param fn: `fn(value) -> bool`
    :type fn: callable|None
    """

    kind = 'custom'
    handles_nil = True

    def __init__(self, fn=None, **opts):
        super(Custom, self).__init__(**opts)
        self.fn = fn

    def __repr__(self):
        return 'Custom({})'.format(get_callable_name(self.fn) if self.fn else '')

    def _parse(self, payload, ctx):
        if self.fn is None:
            return
        try:
            ok = self.fn(payload.value)
        except Exception as e:
            report_exception(payload, e, schema=self)
            return False
        if not ok:
            self._issue(payload, CODES.CUSTOM)
            return False


class InstanceOf(Schema):
    """ An instance of the class (or of a subclass).

    ```python
    from decimal import Decimal
    from vouch import InstanceOf

    InstanceOf(Decimal).parse(Decimal('1.5'))
    InstanceOf(Decimal).parse(1.5)
    #-> Invalid: Invalid input: expected Decimal, received float
    ```

    :param cls: The class, or a tuple of classes
    """

    kind = 'custom'

    def __init__(self, cls, **opts):
        super(InstanceOf, self).__init__(**opts)
        self.cls = cls

    def __repr__(self):
        return 'InstanceOf({!r})'.format(self.cls)

    @property
    def expected(self):
        if isinstance(self.cls, tuple):
            return u'|'.join(c.__name__ for c in self.cls)
        return self.cls.__name__

    def _parse(self, payload, ctx):
        if not isinstance(payload.value, self.cls):
            self._type_issue(payload)
            return False


class Function(Schema):
    """ A callable, whose arguments and return value are validated on every call.

    The output is a wrapper: it parses the positional arguments with `input` and the result with `output`,
    raising `Invalid` when they don't match. Keyword arguments are passed as is.

    ```python
    from vouch import Function, Int, String

    repeat = Function([String(), Int().gte(0)], String()).implement(lambda s, n: s * n)

    repeat('ab', 2)  #-> 'abab'
    repeat('ab', -1)
    #-> Invalid: Too small: expected number to be at least 0 @ [1]
    ```

    :param input: Argument schemas: a list, or a `Tuple` for variadic arguments. `None` to skip
    :type input: list[Schema]|Tuple|None
    :param output: Return value schema. `None` to skip
    :type output: Schema|None
    """

    kind = 'function'

    def __init__(self, input=None, output=None, **opts):
        super(Function, self).__init__(**opts)
        if input is not None and not isinstance(input, Schema):
            input = Tuple(input)
        self.input = input
        self.output = output

    def __repr__(self):
        return 'Function({!r}, {!r})'.format(self.input, self.output)

    def args(self, *items, **kwargs):
        """ Set the argument schemas """
        return self._clone(input=Tuple(items, rest=kwargs.get('rest')))

    def returns(self, schema):
        """ Set the return value schema """
        return self._clone(output=schema)

    def implement(self, fn):
        """ Wrap the callable with validation

        :rtype: callable
        """
        input, output = self.input, self.output

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            if input is not None:
                args = input.parse(args)
            result = fn(*args, **kwargs)
            if output is not None:
                result = output.parse(result)
            return result
        return wrapper

    def _parse(self, payload, ctx):
        if not callable(payload.value):
            self._type_issue(payload)
            return False
        payload.value = self.implement(payload.value)


__all__ = ('Custom', 'InstanceOf', 'Function')
