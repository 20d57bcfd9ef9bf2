""" Misc utilities """

import math
import inspect
from collections.abc import Mapping, Sequence, Set as AbstractSet
from datetime import date, time, datetime, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction


class Undefined(object):
    """ Special singleton object to represent the case when no value was provided.

    It stands for a missing mapping key, an omitted tuple item, or an empty `Ref`.
    This value is never equal to anything: this makes sure it will never match any literal.
    """

    _instance = None

    def __new__(cls):
        # Singleton
        if cls._instance is None:
            cls._instance = super(Undefined, cls).__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return False

    def __ne__(self, other):
        return True

    def __hash__(self):
        return id(self)

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return '<Undefined>'

#: Undefined singleton
UNDEFINED = Undefined()


class Ref(object):
    """ A mutable holder for a single value: the pointer-like input.

    Schemas unwrap a `Ref` before validating, and wrap the output into a new `Ref`,
    so a holder in gives a holder out:

    ```python
    from vouch import String, Ref

    String().parse(Ref('abc'))  #-> Ref('abc')
    String().nilable().parse(Ref())  #-> Ref(None)
    ```

    An empty holder is nil.
    """

    __slots__ = ('value',)

    def __init__(self, value=UNDEFINED):
        self.value = value

    @property
    def empty(self):
        return self.value is None or self.value is UNDEFINED

    def __eq__(self, other):
        return isinstance(other, Ref) and deep_equal(self.value, other.value)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return 'Ref()' if self.value is UNDEFINED else 'Ref({!r})'.format(self.value)


def is_nil(v):
    """ Test whether the value is nil: `None`, `UNDEFINED`, or an empty `Ref` """
    return v is None or v is UNDEFINED or (isinstance(v, Ref) and v.empty)


def is_nan(v):
    if isinstance(v, float):
        return math.isnan(v)
    if isinstance(v, Decimal):
        return v.is_nan()
    return False


def is_sequence(v):
    """ Ordered container, but not a string """
    return isinstance(v, Sequence) and not isinstance(v, (str, bytes, bytearray))


def deep_equal(a, b):
    """ Structural equality used for literals, set uniqueness and merging.

    * `NaN` equals `NaN`, `0.0` equals `-0.0`;
    * booleans are never equal to numbers: `True != 1` here;
    * integers and floats compare numerically;
    * mappings, sequences and sets compare element-wise.

    :rtype: bool
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_nan(a) or is_nan(b):
        return is_nan(a) and is_nan(b)
    if isinstance(a, Mapping):
        return isinstance(b, Mapping) and len(a) == len(b) and \
               all(k in b and deep_equal(v, b[k]) for k, v in a.items())
    if is_sequence(a):
        return is_sequence(b) and len(a) == len(b) and \
               all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, AbstractSet):
        return isinstance(b, AbstractSet) and len(a) == len(b) and \
               all(any(deep_equal(x, y) for y in b) for x in a)
    if isinstance(a, Ref) or isinstance(b, Ref):
        return a == b
    try:
        return bool(a == b)
    except Exception:  # e.g. numpy arrays or exotic __eq__
        return False


__type_names = {
    type(None): 'nil',
    bool:       'bool',
    int:        'int',
    float:      'float',
    complex:    'complex',
    Decimal:    'decimal',
    Fraction:   'fraction',
    str:        'string',
    bytes:      'bytes',
    bytearray:  'bytes',
    list:       'array',
    tuple:      'array',
    set:        'set',
    frozenset:  'set',
    dict:       'object',
    datetime:   'datetime',
    date:       'date',
    time:       'time',
    timedelta:  'duration',
}


def register_type_name(t, name):
    """ Register a name for the given type. It's used as `received` in `invalid_type` issues

    :param t: The type to register
    :type t: type
    :param name: Name for the type
    :type name: str
    """
    assert isinstance(t, type)
    assert isinstance(name, str)
    __type_names[t] = name


def get_type_name(v):
    """ Get the name of the runtime kind of a value, as reported in `received`.

    :param v: Value
    :rtype: str
    """
    if v is UNDEFINED:
        return 'undefined'
    if isinstance(v, Ref):
        return 'nil' if v.empty else get_type_name(v.value)
    if isinstance(v, float):
        if math.isnan(v):
            return 'NaN'
        if math.isinf(v):
            return 'Infinity'
    if isinstance(v, Enum):
        return 'enum'

    # Lookup in the mapping, honoring subclasses
    for t in type(v).__mro__:
        if t in __type_names:
            return __type_names[t]

    # Abstract kinds
    if isinstance(v, Mapping):
        return 'object'
    if isinstance(v, Sequence):
        return 'array'
    if isinstance(v, AbstractSet):
        return 'set'
    if isinstance(v, type) or not callable(v):
        return type(v).__name__
    return 'function'


def get_literal_name(v):
    """ Get a human-friendly representation of a literal.

    :param v: Value
    :rtype: str
    """
    if isinstance(v, str):
        return u'"{}"'.format(v)
    if isinstance(v, Enum):
        return str(v)
    return repr(v)


def get_callable_name(c):
    """ Get a human-friendly name for the given callable.

    :param c: The callable to get the name for
    :type c: callable
    :rtype: str
    """
    if hasattr(c, 'name'):
        return str(c.name)
    elif hasattr(c, '__name__'):
        return str(c.__name__) + u'()'
    else:
        return str(c)


def accepts_context(fn):
    """ Test whether a callback takes a second (context) argument.

    Callbacks are either `fn(value)` or `fn(value, ctx)`.

    :type fn: callable
    :rtype: bool
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins without introspection data
        return False

    n = 0
    for p in sig.parameters.values():
        if p.kind == p.VAR_POSITIONAL:
            return True
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            n += 1
    return n >= 2
