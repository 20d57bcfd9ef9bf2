""" Checks: ordered constraints which run on a payload once the value has passed the type check.

Every check records its `kind` and `params`, so external tools can inspect a schema:

```python
from vouch import String

[(c.kind, c.params) for c in String().min(3).email().checks]
#-> [('min_length', {'minimum': 3}), ('string_format', {'format': 'email', 'pattern': '...'})]
```

Checks run in insertion order. Checks which transform the value (`trim`, `to_lower`, ...) replace
`payload.value` and are visible to the checks that follow.
"""

import re
import json
import math
import logging
import ipaddress
import unicodedata
from collections.abc import Mapping, Set as AbstractSet
from decimal import Decimal
from urllib.parse import urlsplit

from .const import CODES, const
from .errors import Invalid, SchemaError
from .util import is_sequence, get_type_name, get_callable_name
from .context import RefinementContext

logger = logging.getLogger(__name__)


class Check(object):
    """ A constraint attached to a schema.

    :param kind: Check family, e.g. 'min_length', 'string_format', 'custom'
    :type kind: str
    :param fn: `fn(payload, ctx)`: inspects `payload.value`, reports issues with `payload.add_issue()`
    :type fn: callable
    :param params: Inspectable parameters
    :type params: dict|None
    :param abort: Stop running the remaining checks when this one fails
    :type abort: bool
    :param error: Error hook for the issues of this check: a string or `(raw_issue) -> str|None`
    :type error: str|callable|None
    :param when: `when(payload) -> bool`: run the check only if it returns True.

        Checks without `when` are skipped once the schema itself has reported issues
        (e.g. an invalid array element); checks with `when` decide for themselves.

    :type when: callable|None
    :param message: Alias for `error`
    """

    def __init__(self, kind, fn, params=None, abort=False, error=None, when=None, message=None):
        self.kind = kind
        self.fn = fn
        self.params = dict(params or {})
        self.abort = abort
        self.error = error if error is not None else message
        self.when = when

    def __call__(self, payload, ctx):
        return self.fn(payload, ctx)

    def __repr__(self):
        return 'Check({0.kind!r}, {0.params!r})'.format(self)


def report_exception(payload, e, **fields):
    """ Turn an exception raised by a user callback into issues.

    An `Invalid` keeps its code, message and path; any other exception becomes a 'custom' issue with its message.
    """
    if isinstance(e, Invalid):
        for err in e:
            info = {k: v for k, v in err.info.items() if k not in ('branches', 'issues', 'params')}
            payload.add_issue(err.code, message=err.message, path=err.path, origin=err.origin,
                              params=err.info.get('params'), **dict(fields, **info))
    else:
        logger.debug('Callback raised %s: %s', type(e).__name__, e, exc_info=True)
        payload.add_issue(CODES.CUSTOM, message=str(e) or type(e).__name__, **fields)


def run_checks(checks, payload, ctx, schema=None, aborted=False):
    """ Run checks over the payload in insertion order.

    :param checks: The checks to run
    :type checks: tuple[Check]
    :type payload: vouch.schema.context.ParsePayload
    :type ctx: vouch.schema.context.ParseContext
    :param schema: The schema the checks belong to; recorded on the issues
    :param aborted: Whether the schema has already reported issues
    """
    for check in checks:
        if check.when is not None:
            if not check.when(payload):
                continue
        elif aborted:
            continue

        n = len(payload.issues)
        try:
            check(payload, ctx)
        except Exception as e:
            report_exception(payload, e)

        new = payload.issues[n:]
        for issue in new:
            if issue.check is None:
                issue.check = check
            if issue.schema is None:
                issue.schema = schema

        if new and (check.abort or ctx.abort_early):
            break


#region Length & size

def origin_of(v):
    """ Origin of a sized value """
    if isinstance(v, str):
        return 'string'
    if isinstance(v, (bytes, bytearray)):
        return 'bytes'
    if isinstance(v, Mapping):
        return 'object'
    if isinstance(v, AbstractSet):
        return 'set'
    if is_sequence(v):
        return 'array'
    return get_type_name(v)


def _has_len(payload):
    return hasattr(payload.value, '__len__')


def _bound(kind, limit, small, exact=False, origin=None, sizer=len, when=_has_len, **opts):
    if not isinstance(limit, int) or limit < 0:
        raise SchemaError('{}: limit must be a non-negative integer, {!r} given'.format(kind, limit))

    def check(payload, ctx):
        size = sizer(payload.value)
        o = origin or origin_of(payload.value)
        if exact:
            if size < limit:
                payload.add_issue(CODES.TOO_SMALL, origin=o, minimum=limit, inclusive=True, exact=True)
            elif size > limit:
                payload.add_issue(CODES.TOO_BIG, origin=o, maximum=limit, inclusive=True, exact=True)
        elif small and size < limit:
            payload.add_issue(CODES.TOO_SMALL, origin=o, minimum=limit, inclusive=True)
        elif not small and size > limit:
            payload.add_issue(CODES.TOO_BIG, origin=o, maximum=limit, inclusive=True)

    params = {'length' if exact else 'minimum' if small else 'maximum': limit}
    if origin:
        params['origin'] = origin
    return Check(kind, check, params, when=when, **opts)


def min_length(n, **opts):
    """ At least `n` characters or items """
    return _bound('min_length', n, True, **opts)


def max_length(n, **opts):
    """ At most `n` characters or items """
    return _bound('max_length', n, False, **opts)


def length(n, **opts):
    """ Exactly `n` characters or items """
    return _bound('length_equals', n, True, exact=True, **opts)


def min_size(n, **opts):
    """ At least `n` entries (sets, maps) or bytes (files) """
    return _bound('min_size', n, True, **opts)


def max_size(n, **opts):
    return _bound('max_size', n, False, **opts)


def size(n, **opts):
    return _bound('size_equals', n, True, exact=True, **opts)

#endregion


#region Numbers

def greater_than(value, inclusive=False, origin='number', **opts):
    """ `v > value`, or `v >= value` when inclusive """
    def check(payload, ctx):
        v = payload.value
        if not (v >= value if inclusive else v > value):
            payload.add_issue(CODES.TOO_SMALL, origin=origin, minimum=value, inclusive=inclusive)
    return Check('greater_than', check, {'value': value, 'inclusive': inclusive}, **opts)


def less_than(value, inclusive=False, origin='number', **opts):
    """ `v < value`, or `v <= value` when inclusive """
    def check(payload, ctx):
        v = payload.value
        if not (v <= value if inclusive else v < value):
            payload.add_issue(CODES.TOO_BIG, origin=origin, maximum=value, inclusive=inclusive)
    return Check('less_than', check, {'value': value, 'inclusive': inclusive}, **opts)


def is_multiple(v, divisor):
    """ Exact for integers; floats are compared through their decimal representation, so `0.3` is a multiple of `0.1` """
    if isinstance(v, int) and isinstance(divisor, int):
        return v % divisor == 0
    if not math.isfinite(v):
        return False
    return Decimal(str(v)) % Decimal(str(divisor)) == 0


def multiple_of(divisor, origin='number', **opts):
    if not divisor:
        raise SchemaError('multiple_of: divisor must be non-zero')

    def check(payload, ctx):
        if not is_multiple(payload.value, divisor):
            payload.add_issue(CODES.NOT_MULTIPLE_OF, origin=origin, divisor=divisor)
    return Check('multiple_of', check, {'divisor': divisor}, **opts)


def finite(**opts):
    """ Reject infinities """
    def check(payload, ctx):
        v = payload.value
        if isinstance(v, float) and not math.isfinite(v):
            payload.add_issue(CODES.INVALID_TYPE, origin='number', expected='number', received=get_type_name(v))
    return Check('number_format', check, {'format': 'finite'}, **opts)


def _is_whole(v):
    return isinstance(v, int) or (isinstance(v, float) and v.is_integer())


def integer(**opts):
    """ Whole numbers only: `3.0` passes, `3.5` does not """
    def check(payload, ctx):
        v = payload.value
        if not _is_whole(v):
            payload.add_issue(CODES.INVALID_TYPE, origin='number', expected='int', received=get_type_name(v))
    return Check('number_format', check, {'format': 'int'}, abort=True, **opts)


def number_format(fmt, origin='number', **opts):
    """ Bounds of a numeric format: 'int8', 'uint32', 'safeint', 'float32', ...

    For 'safeint', the value must also be whole.
    """
    if fmt == 'float32':
        minimum, maximum = -const.float32_max, const.float32_max
    else:
        try:
            minimum, maximum = const.int_bounds[fmt]
        except KeyError:
            raise SchemaError('Unknown number format: {!r}'.format(fmt))

    def check(payload, ctx):
        v = payload.value
        if fmt == 'float32' and isinstance(v, float) and math.isinf(v):
            return
        if fmt == 'safeint' and not _is_whole(v):
            payload.add_issue(CODES.INVALID_TYPE, origin=origin, expected='int', received=get_type_name(v))
        elif v < minimum:
            payload.add_issue(CODES.TOO_SMALL, origin=origin, minimum=minimum, inclusive=True, format=fmt)
        elif v > maximum:
            payload.add_issue(CODES.TOO_BIG, origin=origin, maximum=maximum, inclusive=True, format=fmt)
    return Check('number_format', check, {'format': fmt, 'minimum': minimum, 'maximum': maximum}, **opts)


def safe_int(**opts):
    """ Whole number within ±(2**53 - 1) """
    return number_format('safeint', **opts)

#endregion


#region String formats

def string_format(fmt, test, pattern=None, extra=None, **opts):
    """ Generic string format check.

    :param fmt: Format name, reported as `format`
    :param test: `test(str) -> bool`
    :param pattern: The regular expression the format is based on, reported as `pattern`
    :param extra: More fields for the issue, e.g. `{'prefix': 'abc'}`
    """
    info = dict(extra or {})
    if pattern is not None:
        info['pattern'] = pattern

    def check(payload, ctx):
        if not test(payload.value):
            payload.add_issue(CODES.INVALID_FORMAT, origin='string', format=fmt, **info)
    return Check('string_format', check, dict(info, format=fmt), **opts)


def _rex_format(fmt, pattern, flags=0, **opts):
    rex = re.compile(pattern, flags)
    return string_format(fmt, lambda v: rex.fullmatch(v) is not None, pattern, **opts)


class rex:
    """ Regular expressions of string formats """

    email = r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-\.]*)[A-Za-z0-9_+-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
    uuid = r'^([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-8][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}' \
           r'|00000000-0000-0000-0000-000000000000|ffffffff-ffff-ffff-ffff-ffffffffffff)$'
    uuid_version = r'^[0-9a-fA-F]{{8}}-[0-9a-fA-F]{{4}}-{}[0-9a-fA-F]{{3}}-[89abAB][0-9a-fA-F]{{3}}-[0-9a-fA-F]{{12}}$'
    guid = r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'
    cuid = r'^[cC][^\s-]{8,}$'
    cuid2 = r'^[0-9a-z]+$'
    ulid = r'^[0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{26}$'
    nanoid = r'^[a-zA-Z0-9_-]{21}$'
    e164 = r'^\+(?:[0-9]){6,14}[0-9]$'
    base64 = r'^$|^(?:[0-9a-zA-Z+/]{4})*(?:(?:[0-9a-zA-Z+/]{2}==)|(?:[0-9a-zA-Z+/]{3}=))?$'
    base64url = r'^[A-Za-z0-9_-]*$'


def email(**opts):
    return _rex_format('email', rex.email, **opts)


def uuid(version=None, **opts):
    """ RFC 9562 UUID, optionally of the given version (1..8) """
    if version is None:
        return _rex_format('uuid', rex.uuid, **opts)
    if version not in range(1, 9):
        raise SchemaError('Unknown UUID version: {!r}'.format(version))
    return _rex_format('uuid', rex.uuid_version.format(version), **opts)


def guid(**opts):
    """ Any 8-4-4-4-12 hex string """
    return _rex_format('uuid', rex.guid, **opts)


def cuid(**opts):
    return _rex_format('cuid', rex.cuid, **opts)


def cuid2(**opts):
    return _rex_format('cuid2', rex.cuid2, **opts)


def ulid(**opts):
    return _rex_format('ulid', rex.ulid, **opts)


def nanoid(**opts):
    return _rex_format('nanoid', rex.nanoid, **opts)


def e164(**opts):
    return _rex_format('e164', rex.e164, **opts)


def base64(**opts):
    return _rex_format('base64', rex.base64, **opts)


def base64url(**opts):
    return _rex_format('base64url', rex.base64url, **opts)


def regex(pattern, flags=0, **opts):
    """ The string must contain a match of the regular expression """
    try:
        compiled = re.compile(pattern, flags)
    except re.error as e:
        raise SchemaError('Invalid regular expression {!r}: {}'.format(pattern, e))
    return string_format('regex', lambda v: compiled.search(v) is not None, compiled.pattern, **opts)


def starts_with(prefix, **opts):
    return string_format('starts_with', lambda v: v.startswith(prefix), extra={'prefix': prefix}, **opts)


def ends_with(suffix, **opts):
    return string_format('ends_with', lambda v: v.endswith(suffix), extra={'suffix': suffix}, **opts)


def includes(substring, position=None, **opts):
    extra = {'includes': substring}
    if position is not None:
        extra['position'] = position
    return string_format('includes', lambda v: v.find(substring, position or 0) != -1, extra=extra, **opts)


def lowercase(**opts):
    return string_format('lowercase', lambda v: v == v.lower(), **opts)


def uppercase(**opts):
    return string_format('uppercase', lambda v: v == v.upper(), **opts)


def _ip_test(cls):
    def test(v):
        try:
            cls(v)
        except ValueError:
            return False
        return True
    return test


def _cidr_test(version):
    def test(v):
        if '/' not in v:
            return False
        try:
            return ipaddress.ip_network(v, strict=False).version == version
        except ValueError:
            return False
    return test


def ipv4(**opts):
    return string_format('ipv4', _ip_test(ipaddress.IPv4Address), **opts)


def ipv6(**opts):
    return string_format('ipv6', _ip_test(ipaddress.IPv6Address), **opts)


def cidrv4(**opts):
    return string_format('cidrv4', _cidr_test(4), **opts)


def cidrv6(**opts):
    return string_format('cidrv6', _cidr_test(6), **opts)


def url(hostname=None, protocol=None, **opts):
    """ Absolute URL with a scheme and a host.

    :param hostname: Regular expression the hostname must match
    :param protocol: Regular expression the scheme must match
    """
    hostname_rex = re.compile(hostname) if hostname else None
    protocol_rex = re.compile(protocol) if protocol else None

    def test(v):
        # urlsplit() silently drops tabs and newlines
        if any(c.isspace() for c in v):
            return False
        try:
            parts = urlsplit(v)
            parts.port  # raises on a malformed port
        except ValueError:
            return False
        if not parts.scheme or not parts.netloc or not parts.hostname:
            return False
        if hostname_rex and not hostname_rex.search(parts.hostname):
            return False
        if protocol_rex and not protocol_rex.search(parts.scheme):
            return False
        return True

    extra = {}
    if hostname:
        extra['hostname'] = hostname
    if protocol:
        extra['protocol'] = protocol
    return string_format('url', test, extra=extra, **opts)


def json_string(**opts):
    """ The string must be a valid JSON document """
    def test(v):
        try:
            json.loads(v)
        except ValueError:
            return False
        return True
    return string_format('json_string', test, **opts)

#endregion


#region Transforming checks

def overwrite(fn, name=None, **opts):
    """ Replace the value with `fn(value)`. The type of the value should not change. """
    def check(payload, ctx):
        payload.value = fn(payload.value)
    return Check('overwrite', check, {'transform': name or get_callable_name(fn)}, **opts)


def trim(**opts):
    return overwrite(str.strip, 'trim', **opts)


def to_lower(**opts):
    return overwrite(str.lower, 'to_lower', **opts)


def to_upper(**opts):
    return overwrite(str.upper, 'to_upper', **opts)


def normalize(form='NFC', **opts):
    """ Unicode normalization: 'NFC', 'NFD', 'NFKC' or 'NFKD' """
    if form not in ('NFC', 'NFD', 'NFKC', 'NFKD'):
        raise SchemaError('Unknown normalization form: {!r}'.format(form))
    return overwrite(lambda v: unicodedata.normalize(form, v), 'normalize', **opts)

#endregion


#region Custom

def refine(pred, error=None, path=None, params=None, abort=False, when=None, message=None):
    """ Custom predicate: `pred(value)` returning a falsy value reports a 'custom' issue.

    :param pred: The predicate
    :type pred: callable
    :param error: Message or error hook
    :param path: Path of the issue, relative to the value
    :type path: list|None
    :param params: Custom parameters, reported on the issue
    :type params: dict|None
    """
    def check(payload, ctx):
        if not pred(payload.value):
            payload.add_issue(CODES.CUSTOM, path=path, params=params)
    return Check('custom', check, {'refine': get_callable_name(pred)},
                 abort=abort, error=error, when=when, message=message)


def super_refine(fn, **opts):
    """ Custom check: `fn(value, ctx)` reports any number of issues with `ctx.add_issue()` """
    def check(payload, ctx):
        fn(payload.value, RefinementContext(payload, ctx))
    return Check('custom', check, {'refine': get_callable_name(fn)}, **opts)


def custom(fn, **opts):
    """ Custom check: `fn(ctx)` with a `RefinementContext` """
    def check(payload, ctx):
        fn(RefinementContext(payload, ctx))
    return Check('custom', check, {'check': get_callable_name(fn)}, **opts)

#endregion
