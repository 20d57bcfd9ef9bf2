""" Boolean schema """

from decimal import Decimal

from ..schema import Schema
from ..schema.const import const


class Bool(Schema):
    """ A `bool`.

    With coercion, these strings are accepted (case-insensitive):

    * True: 'true', '1', 'yes', 'on', 'y'
    * False: 'false', '0', 'no', 'off', 'n', ''

    Numbers are True when non-zero.

    ```python
    from vouch import Bool

    Bool().parse(True)  #-> True
    Bool().coerce().parse('Yes')  #-> True
    Bool().parse(1)
    #-> Invalid: Invalid input: expected bool, received int
    ```
    """

    kind = 'bool'
    coercible = True

    def _coerce(self, v):
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            s = v.strip().lower()
            if s in const.bool_truthy:
                return True
            if s in const.bool_falsy:
                return False
            raise ValueError(v)
        if isinstance(v, (int, float, Decimal)):
            if v != v:
                raise ValueError(v)
            return v != 0
        raise TypeError(v)

    def _parse(self, payload, ctx):
        if not isinstance(payload.value, bool):
            self._type_issue(payload)
            return False


__all__ = ('Bool',)
