""" Translation hook for the default messages.

Every built-in message is wrapped with `_()`, so a gettext catalogue can translate them:

```python
import gettext
from vouch.i18n import install_translations

install_translations(gettext.translation('vouch', localedir='locale', languages=['de']))
```

Messages are looked up when an issue is finalised, so switching catalogues affects subsequent parses only.
"""

import gettext

_translations = gettext.NullTranslations()


def install_translations(translations):
    """ Replace the active catalogue.

    :param translations: Catalogue object, or `None` to restore the untranslated messages
    :type translations: gettext.NullTranslations|None
    """
    global _translations
    _translations = translations or gettext.NullTranslations()


def _(message):
    return _translations.gettext(message)


__all__ = ('install_translations', '_')
