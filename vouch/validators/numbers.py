""" Numeric schemas: `Number`, sized integers, floats and `BigInt` """

import re
import sys
import math
from decimal import Decimal
from fractions import Fraction

from ..schema import Schema, checks
from ..schema.const import CODES

_int_rex = re.compile(r'^[+-]?[0-9]+\Z')
_float_rex = re.compile(r'^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\Z')


def to_int(v):
    """ Strict integer conversion used by coercion.

    Accepts base-10 integer strings, whole floats and decimals, booleans.

    :raises ValueError: The value is not a whole number
    :raises TypeError: Unsupported type
    """
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        s = v.strip()
        if not _int_rex.match(s):
            raise ValueError(v)
        return int(s, 10)
    if isinstance(v, (float, Decimal)):
        if not math.isfinite(v) or v != int(v):
            raise ValueError(v)
        return int(v)
    if isinstance(v, Fraction):
        if v.denominator != 1:
            raise ValueError(v)
        return v.numerator
    raise TypeError(v)


def to_float(v):
    """ Float conversion used by coercion.

    Strings must be plain base-10 literals: no digit separators, and no 'inf' or 'nan' spellings.
    A literal beyond the float range is rejected as well.

    :raises ValueError: Not a number
    :raises TypeError: Unsupported type
    """
    if isinstance(v, str):
        s = v.strip()
        if _int_rex.match(s):
            return int(s, 10)
        if not _float_rex.match(s):
            raise ValueError(v)
        f = float(s)
        if math.isinf(f):
            raise ValueError(v)
        return f
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, (Decimal, Fraction)):
        return float(v)
    raise TypeError(v)


class NumberBase(Schema):
    """ Checks shared by all numeric schemas """

    coercible = True

    #: Origin reported by range checks
    origin = 'number'

    #: Numeric format: 'int8', 'uint32', 'float32', ...
    format = None

    @property
    def expected(self):
        return self.format or self.kind

    def gt(self, value, **opts):
        return self.check(checks.greater_than(value, False, self.origin, **opts))

    def gte(self, value, **opts):
        return self.check(checks.greater_than(value, True, self.origin, **opts))

    def lt(self, value, **opts):
        return self.check(checks.less_than(value, False, self.origin, **opts))

    def lte(self, value, **opts):
        return self.check(checks.less_than(value, True, self.origin, **opts))

    min = gte
    max = lte

    def positive(self, **opts):
        return self.gt(0, **opts)

    def negative(self, **opts):
        return self.lt(0, **opts)

    def non_negative(self, **opts):
        return self.gte(0, **opts)

    def non_positive(self, **opts):
        return self.lte(0, **opts)

    def multiple_of(self, divisor, **opts):
        return self.check(checks.multiple_of(divisor, self.origin, **opts))

    step = multiple_of


class Number(NumberBase):
    """ An `int` or a `float`. Booleans and NaN are rejected.

    ```python
    from vouch import Number

    Number().int().gte(0).parse(10)  #-> 10
    Number().parse(float('nan'))
    #-> Invalid: Invalid input: expected number, received NaN
    Number().coerce().parse(' 1.5 ')  #-> 1.5
    ```
    """

    kind = 'number'

    def _coerce(self, v):
        return to_float(v)

    def _accepts(self, v):
        return isinstance(v, (int, float)) and not isinstance(v, bool) and v == v

    def _parse(self, payload, ctx):
        if not self._accepts(payload.value):
            self._type_issue(payload)
            return False

    def int(self, **opts):
        """ Whole numbers only """
        return self.check(checks.integer(**opts))

    def safe_int(self, **opts):
        """ Whole numbers within ±(2**53 - 1) """
        return self.check(checks.safe_int(**opts))

    def finite(self, **opts):
        return self.check(checks.finite(**opts))


class Int(Number):
    """ An `int` within the bounds of its format.

    `Int()` is a signed 64-bit integer; see also `Int8` ... `Int64` and `Uint` ... `Uint64`.
    Out-of-range values are reported with `too_small` / `too_big`, also after coercion:

    ```python
    from vouch import Int8

    Int8().coerce().parse('100')  #-> 100
    Int8().coerce().parse('300')
    #-> Invalid: Too big: expected number to be at most 127
    ```
    """

    format = 'int'

    def __init__(self, **opts):
        super(Int, self).__init__(**opts)
        self.checks = (checks.number_format(self.format, self.origin),)

    def _coerce(self, v):
        return to_int(v)

    def _accepts(self, v):
        return isinstance(v, int) and not isinstance(v, bool)


class Int8(Int):
    format = 'int8'


class Int16(Int):
    format = 'int16'


class Int32(Int):
    format = 'int32'


class Int64(Int):
    format = 'int64'


class Uint(Int):
    format = 'uint'


class Uint8(Int):
    format = 'uint8'


class Uint16(Int):
    format = 'uint16'


class Uint32(Int):
    format = 'uint32'


class Uint64(Int):
    format = 'uint64'


class Float64(Number):
    """ A float. Integers are accepted and converted """

    format = 'float64'

    def _parse(self, payload, ctx):
        v = payload.value
        if not self._accepts(v):
            self._type_issue(payload)
            return False
        try:
            payload.value = float(v)
        except OverflowError:
            # Integers beyond the float range
            if v < 0:
                self._issue(payload, CODES.TOO_SMALL, origin=self.origin, minimum=-sys.float_info.max,
                            inclusive=True, format=self.format)
            else:
                self._issue(payload, CODES.TOO_BIG, origin=self.origin, maximum=sys.float_info.max,
                            inclusive=True, format=self.format)
            return False


class Float32(Float64):
    """ A float within the finite range of a 32-bit float, or an infinity """

    format = 'float32'

    def __init__(self, **opts):
        super(Float32, self).__init__(**opts)
        self.checks = (checks.number_format(self.format, self.origin),)


class BigInt(NumberBase):
    """ An unbounded `int` """

    kind = 'bigint'
    origin = 'bigint'

    def _coerce(self, v):
        return to_int(v)

    def _parse(self, payload, ctx):
        v = payload.value
        if not isinstance(v, int) or isinstance(v, bool):
            self._type_issue(payload)
            return False


__all__ = ('Number', 'Int', 'Int8', 'Int16', 'Int32', 'Int64',
           'Uint', 'Uint8', 'Uint16', 'Uint32', 'Uint64',
           'Float32', 'Float64', 'BigInt')
