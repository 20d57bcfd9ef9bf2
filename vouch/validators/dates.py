""" ISO 8601 string formats: dates, times, datetimes and durations.

These are string checks: the value stays a string.

```python
from vouch import String

String().iso_date().parse('2024-02-29')  #-> '2024-02-29'
String().iso_date().parse('2023-02-29')
#-> Invalid: Invalid ISO date
String().iso_datetime(offset=True).parse('2024-01-01T10:00:00+02:00')
```
"""

import re
from datetime import date

from ..schema.checks import string_format
from ..schema.errors import SchemaError


_date = r'\d{4}-\d{2}-\d{2}'


def time_pattern(precision=None):
    """ Regular expression for a time of day.

    :param precision: `None`: seconds and fractions are optional;
        `-1`: minutes only; `0`: seconds, no fractions; `n`: exactly `n` fractional digits
    :type precision: int|None
    :rtype: str
    """
    hhmm = r'(?:[01]\d|2[0-3]):[0-5]\d'
    if precision is None:
        return hhmm + r'(?::[0-5]\d(?:\.\d+)?)?'
    if precision == -1:
        return hhmm
    if precision == 0:
        return hhmm + r':[0-5]\d'
    if precision > 0:
        return hhmm + r':[0-5]\d\.\d{%d}' % precision
    raise SchemaError('Invalid time precision: {!r}'.format(precision))


def datetime_pattern(offset=False, local=False, precision=None):
    """ Regular expression for a datetime.

    :param offset: Allow numeric offsets like `+02:00`
    :param local: Allow datetimes without a timezone
    :param precision: See `time_pattern()`
    :rtype: str
    """
    tz = [r'Z']
    if offset:
        tz.append(r'[+-](?:[01]\d|2[0-3])(?::?[0-5]\d)?')
    tz = r'(?:{})'.format('|'.join(tz))
    if local:
        tz += '?'
    return r'^{}T{}{}$'.format(_date, time_pattern(precision), tz)


duration_pattern = r'^P(?:(\d+W)|(?!.*W)(?=\d|T\d)(\d+Y)?(\d+M)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+([.,]\d+)?S)?)?)$'


def _valid_date(s):
    """ Calendar check of the YYYY-MM-DD prefix """
    try:
        date.fromisoformat(s[:10])
    except ValueError:
        return False
    return True


def iso_date(**opts):
    """ Calendar date: YYYY-MM-DD """
    rex = re.compile(r'^{}$'.format(_date))
    return string_format('iso_date', lambda v: rex.fullmatch(v) is not None and _valid_date(v), rex.pattern, **opts)


def iso_time(precision=None, **opts):
    """ Time of day without a timezone: HH:MM[:SS[.s+]] """
    rex = re.compile(r'^{}$'.format(time_pattern(precision)))
    return string_format('iso_time', lambda v: rex.fullmatch(v) is not None, rex.pattern, **opts)


def iso_datetime(offset=False, local=False, precision=None, **opts):
    """ Datetime: YYYY-MM-DDTHH:MM[:SS[.s+]]Z by default """
    rex = re.compile(datetime_pattern(offset, local, precision))
    return string_format('iso_datetime', lambda v: rex.fullmatch(v) is not None and _valid_date(v), rex.pattern, **opts)


def iso_duration(**opts):
    """ Duration: P3Y6M4DT12H30M5S, P2W, ... """
    rex = re.compile(duration_pattern)
    return string_format('iso_duration', lambda v: rex.fullmatch(v) is not None, rex.pattern, **opts)


__all__ = ('iso_date', 'iso_time', 'iso_datetime', 'iso_duration')
