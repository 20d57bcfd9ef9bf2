"""
Source: [vouch/schema/errors.py](vouch/schema/errors.py)

When [parsing](#parsing) fails, the schema reports *every* issue it has found, not just the first one.
Each issue is an [`Invalid`](#invalid) error; several of them are wrapped into [`MultipleInvalid`](#multipleinvalid).

All errors are available right at the top-level:

```python
from vouch import Invalid, MultipleInvalid
```
"""

import re

from .const import CODES, REPORT_FORMAT
from .util import UNDEFINED


class BaseError(Exception):
    """ Base validation exception """


class SchemaError(BaseError):
    """ Schema error (e.g. malformed) """


class Invalid(BaseError):
    """ A single finalised issue.

    This exception is guaranteed to contain a message which is meaningful for the user.

    :param message: Rendered error message.
    :type message: str
    :param code: Issue code, one of `CODES`
    :type code: str
    :param path: Path to the offending value.

        E.g. if an invalid value was encountered at `root['a'][2]['b']`, then `path=['a', 2, 'b']`.

    :type path: list
    :param origin: The kind of value the issue is about: `'string'`, `'number'`, `'array'`, ...
    :type origin: str|None
    :param validator: The schema or check which has produced the issue
    :param input: The offending input value. Only reported when the context asks for it.
    :param info: Code-specific fields: `expected`, `received`, `minimum`, `keys`, `branches`, ...

        They're also readable as attributes: `e.minimum`.

    :type info: dict
    """

    def __init__(self, message, code=CODES.CUSTOM, path=None, origin=None, validator=None, input=UNDEFINED, **info):
        super(Invalid, self).__init__(message, code, path)
        self.message = message
        self.code = code
        self.path = list(path or [])
        self.origin = origin
        self.validator = validator
        self.input = input
        self.info = info
        self.report_format = REPORT_FORMAT.PRETTY

    def __getattr__(self, name):
        # Code-specific fields
        info = self.__dict__.get('info')
        if info is not None and name in info:
            return info[name]
        raise AttributeError(name)

    def __iter__(self):
        """ Iterate over contained errors.

        For `Invalid`, just yields self, however for `MultipleInvalid` it yields every contained error.

        Hence, it allows to iterate all issues without checking whether it's a multi-error or not.
        """
        yield self

    @property
    def issues(self):
        """ Ordered list of issues

        :rtype: list[Invalid]
        """
        return list(self)

    def __repr__(self):
        return '{cls}({0.message!r}, ' \
               'code={0.code!r}, ' \
               'path={0.path!r}, ' \
               'info={0.info!r})' \
            .format(self, cls=type(self).__name__)

    def __str__(self):
        if not self.path:
            return self.message
        return u'{} @ {}'.format(self.message, to_dot_path(self.path))

    def enrich(self, path=None, validator=None):
        """ Enrich this error with additional information.

        This works with both Invalid and MultipleInvalid (thanks to `Invalid` being iterable):
        in the latter case, the values are applied to all collected errors.

        `validator` is only set on errors which do not have one; `path` is prepended to `Invalid.path`.
        This is handy when validating parts of a larger document with separate schemas:

        ```python
        from vouch import Int, Invalid

        try:
            Int().parse(document['user']['age'])
        except Invalid as e:
            e.enrich(path=['user', 'age'])  # Make the path reflect the reality
            raise
        ```

        :param path: Prefix to prepend to Invalid.path
        :type path: list|None
        :param validator: Invalid.validator default
        :rtype: Invalid|MultipleInvalid
        """
        for e in self:
            if e.validator is None and validator is not None:
                e.validator = validator
            e.path = list(path or []) + e.path
        return self

    def to_dict(self):
        """ Export the issue as a plain dict

        :rtype: dict
        """
        d = {'code': self.code, 'path': list(self.path), 'message': self.message}
        if self.origin is not None:
            d['origin'] = self.origin
        if self.input is not UNDEFINED:
            d['input'] = self.input
        for k, v in self.info.items():
            if k == 'branches':
                v = [[e.to_dict() for e in branch] for branch in v]
            elif k == 'issues':
                v = [e.to_dict() for e in v]
            d[k] = v
        return d

    #region Reports

    def flatten(self):
        """ Flatten issues into path-indexed lists of messages. See `flatten_error()` """
        return flatten_error(self)

    def format(self):
        """ Nested report keyed by path elements. See `format_error()` """
        return format_error(self)

    def treeify(self):
        """ Tree-shaped report. See `treeify_error()` """
        return treeify_error(self)

    def prettify(self):
        """ Human-readable multi-line report. See `prettify_error()` """
        return prettify_error(self)

    def report(self, fmt=None):
        """ Render a report in the given format.

        :param fmt: One of `REPORT_FORMAT`; defaults to the format of the context that produced the error
        :type fmt: str|None
        """
        fmt = fmt or self.report_format
        try:
            return {
                REPORT_FORMAT.TREE: treeify_error,
                REPORT_FORMAT.FLAT: flatten_error,
                REPORT_FORMAT.PRETTY: prettify_error,
            }[fmt](self)
        except KeyError:
            raise ValueError('Unknown report format: {!r}'.format(fmt))

    #endregion


class MultipleInvalid(Invalid):
    """ Several issues at once.

    This error is produced when a parse has reported multiple issues, e.g. for several object fields.

    `MultipleInvalid` has the same attributes as [`Invalid`](#invalid),
    but the values are taken from the first error in the list.

    In addition, it has the `errors` attribute, which is a list of [`Invalid`](#invalid) errors collected by the schema.
    The list is guaranteed to be plain: there will be no underlying hierarchy of `MultipleInvalid`.

    Note that both `Invalid` and `MultipleInvalid` are iterable, which allows to process them in singularity:

    ```python
    try:
        schema.parse(input_value)
    except Invalid as ee:
        reported_problems = {}
        for e in ee:  # Iterate over `Invalid`
            reported_problems[to_dot_path(e.path)] = e.message
        #.. send reported_problems to the user
    ```

    :param errors: The reported errors.

        If it contains `MultipleInvalid` errors -- the list is recursively flattened
        so all of them are guaranteed to be instances of [`Invalid`](#invalid).

    :type errors: list[Invalid]
    """

    def __init__(self, errors):
        # Flatten errors
        errors = self.flatten_errors(errors)

        # Create from errors
        e = errors[0]
        super(MultipleInvalid, self).__init__(e.message, e.code, e.path, e.origin, e.validator, e.input, **e.info)

        #: The collected errors
        self.errors = errors

    def __iter__(self):
        return iter(self.errors)

    def __repr__(self):
        return '{cls}({0!r})'.format(self.errors, cls=type(self).__name__)

    @classmethod
    def flatten_errors(cls, errors):
        """ Unwind `MultipleInvalid` to have a plain list of `Invalid`

        :type errors: list[Invalid|MultipleInvalid]
        :rtype: list[Invalid]
        """
        ers = []
        for e in errors:
            if isinstance(e, MultipleInvalid):
                ers.extend(cls.flatten_errors(e.errors))
            else:
                ers.append(e)
        return ers

    @classmethod
    def if_multiple(cls, errors):
        """ Provided a list of errors, choose which one to throw: `Invalid` or `MultipleInvalid`.

        `MultipleInvalid` is only used for multiple errors.

        :param errors: The list of collected errors
        :type errors: list[Invalid]
        :rtype: Invalid|MultipleInvalid
        """
        assert errors, 'Errors list is empty'
        return errors[0] if len(errors) == 1 else MultipleInvalid(errors)


#region Report helpers

_identifier_rex = re.compile(r'^[A-Za-z_]\w*$')


def to_dot_path(path):
    """ Render a path as a JavaScript-friendly string: `['a', 2, 'b c']` -> `a[2]["b c"]`

    :type path: list
    :rtype: str
    """
    segs = []
    for seg in path:
        if isinstance(seg, int) and not isinstance(seg, bool):
            segs.append(u'[{}]'.format(seg))
        elif isinstance(seg, str) and _identifier_rex.match(seg):
            segs.append(u'.' + seg if segs else seg)
        elif isinstance(seg, str):
            segs.append(u'["{}"]'.format(seg))
        else:
            segs.append(u'[{!r}]'.format(seg))
    return u''.join(segs)


def _nested(e):
    """ Nested issue lists which replace the issue itself in structured reports """
    if e.code == CODES.INVALID_UNION and e.info.get('branches'):
        return [issue for branch in e.info['branches'] for issue in branch]
    if e.code in (CODES.INVALID_KEY, CODES.INVALID_ELEMENT) and e.info.get('issues'):
        return e.info['issues']
    return None


def flatten_error(error):
    """ Flatten issues into a shallow report.

    Issues at the root go to `form_errors`; the others are grouped by the first path element:

    ```python
    {'form_errors': ['Unrecognised key: "extra"'],
     'field_errors': {'age': ['Too small: expected number to be at least 0']}}
    ```

    :type error: Invalid
    :rtype: dict
    """
    form_errors, field_errors = [], {}
    for e in error:
        if e.path:
            field_errors.setdefault(e.path[0], []).append(e.message)
        else:
            form_errors.append(e.message)
    return {'form_errors': form_errors, 'field_errors': field_errors}


def format_error(error):
    """ Nested report which mirrors the shape of the input; every node has an `_errors` list:

    ```python
    {'_errors': [], 'user': {'_errors': [], 'age': {'_errors': ['Invalid input: expected int, received string']}}}
    ```

    :type error: Invalid
    :rtype: dict
    """
    result = {'_errors': []}

    def process(issues):
        for e in issues:
            nested = _nested(e)
            if nested:
                process(nested)
                continue
            if not e.path:
                result['_errors'].append(e.message)
                continue
            cur = result
            for i, seg in enumerate(e.path):
                cur = cur.setdefault(seg, {'_errors': []})
                if i == len(e.path) - 1:
                    cur['_errors'].append(e.message)

    process(error)
    return result


def treeify_error(error):
    """ Tree-shaped report: `errors` at every node, `properties` for keys and `items` for indexes.

    ```python
    {'errors': [],
     'properties': {'tags': {'errors': [], 'items': [None, {'errors': ['Invalid input: expected string, received int']}]}}}
    ```

    :type error: Invalid
    :rtype: dict
    """
    result = {'errors': []}

    def process(issues):
        for e in issues:
            nested = _nested(e)
            if nested:
                process(nested)
                continue
            cur = result
            for seg in e.path:
                if isinstance(seg, int) and not isinstance(seg, bool):
                    items = cur.setdefault('items', [])
                    if len(items) <= seg:
                        items.extend([None] * (seg + 1 - len(items)))
                    if items[seg] is None:
                        items[seg] = {'errors': []}
                    cur = items[seg]
                else:
                    cur = cur.setdefault('properties', {}).setdefault(seg, {'errors': []})
            cur['errors'].append(e.message)

    process(error)
    return result


def prettify_error(error):
    """ Human-readable report, shallow issues first:

    ```
    ✖ Unrecognised key: "extra"
    ✖ Too small: expected number to be at least 0
      → at age
    ```

    :type error: Invalid
    :rtype: str
    """
    lines = []
    for e in sorted(error, key=lambda e: len(e.path)):
        lines.append(u'✖ {}'.format(e.message))
        if e.path:
            lines.append(u'  → at {}'.format(to_dot_path(e.path)))
    return u'\n'.join(lines)

#endregion


__all__ = ('BaseError', 'SchemaError', 'Invalid', 'MultipleInvalid',
           'to_dot_path', 'flatten_error', 'format_error', 'treeify_error', 'prettify_error')
