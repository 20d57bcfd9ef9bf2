""" Raw issues and their finalisation.

A raw issue is what schemas and checks report while parsing: a code, the offending input, a relative path,
and some code-specific fields. Once the parse is over, raw issues are *finalised* into [`Invalid`](#invalid) errors:
the path becomes absolute and the message is rendered.

The message is the first non-empty result of:

1. the message given explicitly when the issue was reported;
2. the error hook of the check that has produced the issue;
3. the error hook of the schema that has produced the issue;
4. the `error_map` of the `ParseContext`;
5. the process-level `error_map` (see `configure()`);
6. the locale map for `ParseContext.locale` (or the configured locale);
7. the built-in English messages, translated with gettext.

A hook is either a string, or a callable `(raw_issue) -> str|None`.
"""

import logging

from .config import get_config
from .const import CODES
from .errors import Invalid
from .util import UNDEFINED, get_literal_name
from ..i18n import _

logger = logging.getLogger(__name__)


class RawIssue(object):
    """ An issue before finalisation.

    :param code: Issue code, one of `CODES`
    :param input: The offending value
    :param path: Path relative to the payload that has collected the issue
    :param message: Explicit message; skips the message resolution
    :param origin: Kind of the offending value: 'string', 'number', 'array', ...
    :param params: User-provided parameters of a custom issue
    :param schema: The schema that has produced the issue
    :param check: The check that has produced the issue
    :param info: Code-specific fields
    """

    def __init__(self, code, input=UNDEFINED, path=None, message=None, origin=None, params=None,
                 schema=None, check=None, **info):
        self.code = code
        self.input = input
        self.path = list(path or [])
        self.message = message
        self.origin = origin
        self.params = params
        self.schema = schema
        self.check = check
        self.info = info

    def __getattr__(self, name):
        # Code-specific fields, so error maps can read `issue.minimum`
        info = self.__dict__.get('info')
        if info is not None and name in info:
            return info[name]
        raise AttributeError(name)

    def __repr__(self):
        return 'RawIssue({0.code!r}, path={0.path!r}, info={0.info!r})'.format(self)


class MessageFormatter(object):
    """ Built-in English messages.

    Subclass it and register an instance with `register_locale()` to provide another language
    with Python code rather than a gettext catalogue.
    """

    #: Units for sized origins
    units = {
        'string': u'characters',
        'array': u'items',
        'set': u'items',
        'map': u'entries',
        'object': u'keys',
        'record': u'keys',
        'file': u'bytes',
    }

    #: Human-friendly names of string formats
    format_nouns = {
        'email': u'email address',
        'url': u'URL',
        'uuid': u'UUID',
        'ipv4': u'IPv4 address',
        'ipv6': u'IPv6 address',
        'cidrv4': u'IPv4 range',
        'cidrv6': u'IPv6 range',
        'base64': u'base64-encoded string',
        'base64url': u'base64url-encoded string',
        'e164': u'E.164 number',
        'json_string': u'JSON string',
        'iso_date': u'ISO date',
        'iso_time': u'ISO time',
        'iso_datetime': u'ISO datetime',
        'iso_duration': u'ISO duration',
        'cuid': u'cuid',
        'cuid2': u'cuid2',
        'ulid': u'ULID',
        'nanoid': u'nanoid',
    }

    def __call__(self, issue):
        method = getattr(self, 'format_' + issue.code, None)
        if method is None:
            return _(u'Invalid input')
        return method(issue)

    def format_invalid_type(self, issue):
        return _(u'Invalid input: expected {expected}, received {received}').format(
            expected=issue.info.get('expected', u'?'),
            received=issue.info.get('received', u'?'))

    def format_invalid_value(self, issue):
        values = issue.info.get('values', ())
        if len(values) == 1:
            return _(u'Invalid input: expected {}').format(get_literal_name(values[0]))
        return _(u'Invalid option: expected one of {}').format(u'|'.join(get_literal_name(v) for v in values))

    def _bound(self, issue, limit, small):
        origin = issue.origin or u'value'
        inclusive = issue.info.get('inclusive', True)
        unit = self.units.get(origin)
        unit = _(unit) if unit else None
        if issue.info.get('exact'):
            adj = _(u'exactly')
        elif unit:
            adj = (_(u'at least') if inclusive else _(u'more than')) if small else \
                  (_(u'at most') if inclusive else _(u'fewer than'))
        else:
            adj = (_(u'at least') if inclusive else _(u'greater than')) if small else \
                  (_(u'at most') if inclusive else _(u'less than'))

        if unit:
            return (_(u'Too small: expected {origin} to have {adj} {limit} {unit}') if small else
                    _(u'Too big: expected {origin} to have {adj} {limit} {unit}')).format(
                origin=origin, adj=adj, limit=limit, unit=unit)
        return (_(u'Too small: expected {origin} to be {adj} {limit}') if small else
                _(u'Too big: expected {origin} to be {adj} {limit}')).format(
            origin=origin, adj=adj, limit=limit)

    def format_too_small(self, issue):
        return self._bound(issue, issue.info.get('minimum'), True)

    def format_too_big(self, issue):
        return self._bound(issue, issue.info.get('maximum'), False)

    def format_invalid_format(self, issue):
        fmt = issue.info.get('format')
        if fmt == 'starts_with':
            return _(u'Invalid string: must start with "{}"').format(issue.info.get('prefix'))
        if fmt == 'ends_with':
            return _(u'Invalid string: must end with "{}"').format(issue.info.get('suffix'))
        if fmt == 'includes':
            return _(u'Invalid string: must include "{}"').format(issue.info.get('includes'))
        if fmt == 'regex':
            return _(u'Invalid string: must match pattern {}').format(issue.info.get('pattern'))
        if fmt == 'lowercase':
            return _(u'Invalid string: must be lowercase')
        if fmt == 'uppercase':
            return _(u'Invalid string: must be uppercase')
        return _(u'Invalid {}').format(_(self.format_nouns.get(fmt, fmt or u'format')))

    def format_not_multiple_of(self, issue):
        return _(u'Invalid number: must be a multiple of {}').format(issue.info.get('divisor'))

    def format_unrecognised_keys(self, issue):
        keys = issue.info.get('keys', ())
        return (_(u'Unrecognised key: {}') if len(keys) == 1 else _(u'Unrecognised keys: {}')).format(
            u', '.join(get_literal_name(k) for k in keys))

    def format_invalid_key(self, issue):
        return _(u'Invalid key in {}').format(issue.origin or u'object')

    def format_invalid_element(self, issue):
        return _(u'Invalid value in {}').format(issue.origin or u'object')

    def format_invalid_union(self, issue):
        if issue.info.get('note'):
            return _(u'Invalid input: {}').format(issue.info['note'])
        if issue.info.get('inclusive') is False:
            return _(u'Invalid input: multiple union members matched')
        return _(u'Invalid input: no union member matched')

    def format_invalid_intersection(self, issue):
        return _(u'Unmergeable intersection: {}').format(issue.info.get('reason', u'values differ'))

    def format_custom(self, issue):
        return _(u'Invalid input')


#: Built-in message formatter
default_formatter = MessageFormatter()


def _apply_hook(hook, issue):
    """ Get a message from an error hook: a string, or a callable `(issue) -> str|None` """
    if hook is None:
        return None
    if isinstance(hook, str):
        return hook or None
    try:
        msg = hook(issue)
    except Exception as e:
        logger.debug('Error hook %r failed on %r: %s', hook, issue, e, exc_info=True)
        return None
    if isinstance(msg, dict):
        msg = msg.get('message')
    return str(msg) if msg else None


def resolve_message(issue, ctx):
    """ Render the message of a raw issue.

    :type issue: RawIssue
    :type ctx: vouch.schema.context.ParseContext
    :rtype: str
    """
    config = get_config()

    hooks = (
        issue.message,
        issue.check.error if issue.check is not None else None,
        issue.schema.error if issue.schema is not None else None,
        ctx.error_map,
        config.error_map,
        config.locales.get(ctx.locale or config.locale),
    )
    for hook in hooks:
        msg = _apply_hook(hook, issue)
        if msg:
            return msg
    return default_formatter(issue)


def finalize_issue(issue, ctx, prefix=()):
    """ Promote a raw issue to a user-facing `Invalid` error.

    Nested issues (`branches` of a union, `issues` of a key or element) are finalised as well.

    :type issue: RawIssue
    :type ctx: vouch.schema.context.ParseContext
    :param prefix: Absolute path of the payload that has collected the issue
    :rtype: Invalid
    """
    path = list(prefix) + issue.path

    info = dict(issue.info)
    if 'branches' in info:
        info['branches'] = [[finalize_issue(i, ctx, path) for i in branch]
                            for branch in info['branches']]
    if 'issues' in info:
        info['issues'] = [finalize_issue(i, ctx, path) for i in info['issues']]
    if issue.params is not None:
        info['params'] = issue.params

    e = Invalid(
        resolve_message(issue, ctx),
        issue.code,
        path,
        issue.origin,
        issue.check if issue.check is not None else issue.schema,
        issue.input if ctx.report_input else UNDEFINED,
        **info
    )
    e.report_format = ctx.report_format
    return e


def finalize_error(issues, ctx):
    """ Finalise the collected issues into an error

    :type issues: list[RawIssue]
    :rtype: Invalid|MultipleInvalid
    """
    from .errors import MultipleInvalid
    error = MultipleInvalid.if_multiple([finalize_issue(i, ctx) for i in issues])
    error.report_format = ctx.report_format
    return error
