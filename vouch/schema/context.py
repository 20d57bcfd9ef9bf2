""" Parse context and payload """

from .const import CODES, REPORT_FORMAT
from .issues import RawIssue
from .util import UNDEFINED


class ParseContext(object):
    """ Per-call parse settings.

    A plain `dict` with the same keys is accepted wherever a context is.

    :param error_map: Error hook: a string or `(raw_issue) -> str|None`. Consulted after the schema hooks.
    :type error_map: str|callable|None
    :param locale: Name of a locale map registered with `register_locale()`
    :type locale: str|None
    :param strict: Treat objects in the 'strip' mode as 'strict'
    :type strict: bool
    :param abort_early: Stop at the first issue
    :type abort_early: bool
    :param report_format: Default shape of `Invalid.report()`: 'tree', 'flat' or 'pretty'
    :type report_format: str
    :param report_input: Include the offending input in the finalised issues
    :type report_input: bool
    """

    def __init__(self, error_map=None, locale=None, strict=False, abort_early=False,
                 report_format=REPORT_FORMAT.PRETTY, report_input=False):
        if report_format not in (REPORT_FORMAT.TREE, REPORT_FORMAT.FLAT, REPORT_FORMAT.PRETTY):
            raise ValueError('Unknown report format: {!r}'.format(report_format))
        self.error_map = error_map
        self.locale = locale
        self.strict = strict
        self.abort_early = abort_early
        self.report_format = report_format
        self.report_input = report_input

    @classmethod
    def make(cls, ctx=None):
        """ Get a context from whatever the caller has provided

        :type ctx: ParseContext|dict|None
        :rtype: ParseContext
        """
        if ctx is None:
            return cls()
        if isinstance(ctx, ParseContext):
            return ctx
        return cls(**ctx)

    def __repr__(self):
        return 'ParseContext({})'.format(', '.join(
            '{}={!r}'.format(k, v) for k, v in sorted(vars(self).items())))


class ParsePayload(object):
    """ The in-flight value, the issues collected so far, and the absolute path of the value.

    Issue paths are relative to the payload that has collected them: they're prefixed with the key
    when a child payload is merged into its parent.
    """

    def __init__(self, value, path=None):
        self.value = value
        self.issues = []
        self.path = list(path or [])

    def child(self, value, key=UNDEFINED):
        """ Payload for a sub-value found at `key`, or for the same position when no key is given

        :rtype: ParsePayload
        """
        return ParsePayload(value, self.path if key is UNDEFINED else self.path + [key])

    def merge(self, child, key=UNDEFINED):
        """ Adopt the issues of a child payload, prefixing their paths with `key`

        :type child: ParsePayload
        :return: True when the child had no issues
        :rtype: bool
        """
        for issue in child.issues:
            if key is not UNDEFINED:
                issue.path.insert(0, key)
            self.issues.append(issue)
        return not child.issues

    def add_issue(self, code, **fields):
        """ Report a raw issue about the current value

        :rtype: RawIssue
        """
        fields.setdefault('input', self.value)
        issue = RawIssue(code, **fields)
        self.issues.append(issue)
        return issue

    def __repr__(self):
        return 'ParsePayload({0.value!r}, issues={0.issues!r}, path={0.path!r})'.format(self)


class RefinementContext(object):
    """ Handed to refinements and transforms which take a second argument.

    ```python
    def check_passwords(value, ctx):
        if value['password'] != value['confirm']:
            ctx.add_issue(u'Passwords do not match', path=['confirm'])

    schema = Object({'password': String(), 'confirm': String()}).super_refine(check_passwords)
    ```
    """

    def __init__(self, payload, ctx, schema=None, check=None):
        self._payload = payload
        self._n = len(payload.issues)
        self.context = ctx
        self.schema = schema
        self.check = check

    @property
    def value(self):
        return self._payload.value

    @property
    def path(self):
        """ Absolute path of the value """
        return list(self._payload.path)

    @property
    def issues(self):
        """ Issues added through this context """
        return self._payload.issues[self._n:]

    def add_issue(self, message=None, code=CODES.CUSTOM, path=None, input=UNDEFINED, params=None, **info):
        """ Report an issue.

        :param message: Message; when not given, the regular message resolution applies
        :param code: Issue code; 'custom' by default
        :param path: Path relative to the value
        :param input: The offending value; the current value by default
        :param params: Custom parameters, exposed to error maps
        :param info: Code-specific fields
        """
        return self._payload.add_issue(
            code,
            input=self.value if input is UNDEFINED else input,
            path=path,
            message=message,
            params=params,
            schema=self.schema,
            check=self.check,
            **info)


__all__ = ('ParseContext', 'ParsePayload', 'RefinementContext')
