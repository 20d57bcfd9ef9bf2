""" String schemas """

from decimal import Decimal
from enum import Enum
from fractions import Fraction

from ..schema import Schema, checks
from ..schema.const import CODES, const
from ..schema.errors import SchemaError
from . import dates


class String(Schema):
    """ A `str` value.

    ```python
    from vouch import String

    schema = String().trim().min(3).email()

    schema.parse(' user@example.com ')  #-> 'user@example.com'
    schema.parse(123)
    #-> Invalid: Invalid input: expected string, received int
    ```

    With coercion, numbers and booleans are rendered, and bytes are decoded as UTF-8:

    ```python
    String().coerce().parse(True)  #-> 'true'
    ```

    Check methods take the common check options: `error` (or `message`), `abort`, `when`.
    """

    kind = 'string'
    coercible = True

    def _coerce(self, v):
        if isinstance(v, Enum):
            v = v.value
        if isinstance(v, str):
            return v
        if isinstance(v, bool):
            return 'true' if v else 'false'
        if isinstance(v, (int, float, Decimal, Fraction)):
            return str(v)
        if isinstance(v, (bytes, bytearray)):
            return bytes(v).decode('utf-8')
        raise TypeError(v)

    def _parse(self, payload, ctx):
        if not isinstance(payload.value, str):
            self._type_issue(payload)
            return False

    #region Length

    def min(self, n, **opts):
        """ At least `n` characters (code points) """
        return self.check(checks.min_length(n, **opts))

    def max(self, n, **opts):
        return self.check(checks.max_length(n, **opts))

    def length(self, n, **opts):
        return self.check(checks.length(n, **opts))

    def nonempty(self, **opts):
        return self.min(1, **opts)

    #endregion

    #region Formats

    def regex(self, pattern, flags=0, **opts):
        """ Must contain a match of the regular expression (use `^...$` to match the whole string) """
        return self.check(checks.regex(pattern, flags, **opts))

    def starts_with(self, prefix, **opts):
        return self.check(checks.starts_with(prefix, **opts))

    def ends_with(self, suffix, **opts):
        return self.check(checks.ends_with(suffix, **opts))

    def includes(self, substring, position=None, **opts):
        return self.check(checks.includes(substring, position, **opts))

    def lowercase(self, **opts):
        """ Must be in lowercase already. See `lower()` for the conversion """
        return self.check(checks.lowercase(**opts))

    def uppercase(self, **opts):
        return self.check(checks.uppercase(**opts))

    def email(self, **opts):
        return self.check(checks.email(**opts))

    def url(self, hostname=None, protocol=None, **opts):
        """ Absolute URL.

        :param hostname: Regular expression the hostname must match
        :param protocol: Regular expression the scheme must match, e.g. `r'^https?$'`
        """
        return self.check(checks.url(hostname, protocol, **opts))

    def uuid(self, version=None, **opts):
        return self.check(checks.uuid(version, **opts))

    def guid(self, **opts):
        return self.check(checks.guid(**opts))

    def cuid(self, **opts):
        return self.check(checks.cuid(**opts))

    def cuid2(self, **opts):
        return self.check(checks.cuid2(**opts))

    def ulid(self, **opts):
        return self.check(checks.ulid(**opts))

    def nanoid(self, **opts):
        return self.check(checks.nanoid(**opts))

    def e164(self, **opts):
        return self.check(checks.e164(**opts))

    def base64(self, **opts):
        return self.check(checks.base64(**opts))

    def base64url(self, **opts):
        return self.check(checks.base64url(**opts))

    def json(self, **opts):
        return self.check(checks.json_string(**opts))

    def ipv4(self, **opts):
        return self.check(checks.ipv4(**opts))

    def ipv6(self, **opts):
        return self.check(checks.ipv6(**opts))

    def cidrv4(self, **opts):
        return self.check(checks.cidrv4(**opts))

    def cidrv6(self, **opts):
        return self.check(checks.cidrv6(**opts))

    def iso_date(self, **opts):
        return self.check(dates.iso_date(**opts))

    def iso_time(self, precision=None, **opts):
        return self.check(dates.iso_time(precision, **opts))

    def iso_datetime(self, offset=False, local=False, precision=None, **opts):
        return self.check(dates.iso_datetime(offset, local, precision, **opts))

    def iso_duration(self, **opts):
        return self.check(dates.iso_duration(**opts))

    #endregion

    #region Transforms

    def trim(self, **opts):
        return self.check(checks.trim(**opts))

    def lower(self, **opts):
        return self.check(checks.to_lower(**opts))

    def upper(self, **opts):
        return self.check(checks.to_upper(**opts))

    def normalize(self, form='NFC', **opts):
        return self.check(checks.normalize(form, **opts))

    #endregion


class StringBool(Schema):
    """ A string which spells a boolean: 'yes', 'off', 'enabled', ...

    The output is a `bool`; a `bool` input is passed through.

    ```python
    from vouch import StringBool

    StringBool().parse('Yes')  #-> True
    StringBool().parse('nope')
    #-> Invalid: Invalid option: expected one of "true"|"1"|"yes"|...
    StringBool(truthy=['sure'], falsy=['nah'], case='sensitive').parse('nah')  #-> False
    ```

    :param truthy: Strings which mean True
    :type truthy: list[str]|None
    :param falsy: Strings which mean False
    :type falsy: list[str]|None
    :param case: 'insensitive' (default) or 'sensitive'
    :type case: str
    """

    kind = 'stringbool'

    def __init__(self, truthy=None, falsy=None, case='insensitive', **opts):
        super(StringBool, self).__init__(**opts)
        if case not in ('sensitive', 'insensitive'):
            raise SchemaError('StringBool: case must be "sensitive" or "insensitive"')
        self.truthy = tuple(truthy if truthy is not None else const.stringbool_truthy)
        self.falsy = tuple(falsy if falsy is not None else const.stringbool_falsy)
        self.case = case

        fold = (lambda s: s.lower()) if case == 'insensitive' else (lambda s: s)
        self._lookup = dict([(fold(s), False) for s in self.falsy] + [(fold(s), True) for s in self.truthy])
        self._fold = fold

    @property
    def expected(self):
        return 'string'

    def _parse(self, payload, ctx):
        v = payload.value
        if isinstance(v, bool):
            return
        if not isinstance(v, str):
            self._type_issue(payload)
            return False
        try:
            payload.value = self._lookup[self._fold(v.strip())]
        except KeyError:
            self._issue(payload, CODES.INVALID_VALUE, origin='string', values=list(self.truthy + self.falsy))
            return False


__all__ = ('String', 'StringBool')
