""" Process-level configuration.

```python
import vouch

vouch.configure(error_map=lambda issue: u'Nope' if issue.code == 'invalid_type' else None)
vouch.register_locale('pirate', lambda issue: u'Arr, that be wrong')
vouch.configure(locale='pirate')
```

Per-call settings live in `ParseContext`.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class Config(object):
    """ Process-level defaults.

    :ivar error_map: Error hook consulted after the context-level one: a string or `(raw_issue) -> str|None`
    :ivar locale: Name of the default locale map
    :ivar locales: Registered locale maps, by name
    """

    def __init__(self):
        self.error_map = None
        self.locale = None
        self.locales = {}
        self._lock = threading.Lock()


_config = Config()


def get_config():
    """ Get the process-level configuration

    :rtype: Config
    """
    return _config


_unset = object()


def configure(error_map=_unset, locale=_unset):
    """ Change the process-level defaults.

    Arguments which are not given are left unchanged; pass `None` to reset.

    :param error_map: Default error hook
    :type error_map: str|callable|None
    :param locale: Default locale name. Must be registered with `register_locale()`
    :type locale: str|None
    :rtype: Config
    """
    with _config._lock:
        if error_map is not _unset:
            _config.error_map = error_map
        if locale is not _unset:
            if locale is not None and locale not in _config.locales:
                raise ValueError('Unknown locale: {!r}'.format(locale))
            _config.locale = locale
    logger.debug('Configuration updated: error_map=%r, locale=%r', _config.error_map, _config.locale)
    return _config


def register_locale(name, error_map):
    """ Register a locale map: an error hook which provides messages in some language.

    Locale maps are consulted after the error maps and may return `None` to fall back to the built-in messages.

    :param name: Locale name, e.g. 'de'
    :type name: str
    :param error_map: `(raw_issue) -> str|None`, e.g. a `MessageFormatter` subclass instance
    :type error_map: callable
    """
    with _config._lock:
        _config.locales[name] = error_map
    logger.debug('Registered locale %r', name)


__all__ = ('Config', 'get_config', 'configure', 'register_locale')
