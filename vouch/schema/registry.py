""" Schema registry: names and metadata for schemas.

```python
from vouch import Object, String, Registry

registry = Registry()
registry.register('User', Object({'name': String()}), title=u'User', version='1.0')

Post = Object({'author': registry.ref('User')})
registry.get(registry.lookup('User'))  #-> {'title': 'User', 'version': '1.0'}
```

Metadata is stored in a weak mapping, so registering a schema does not keep it alive;
named entries are strong references.
"""

import logging
import threading
import weakref

logger = logging.getLogger(__name__)


class Registry(object):
    """ Maps schemas to metadata, and names to schemas.

    Thread-safe.
    """

    def __init__(self):
        self._meta = weakref.WeakKeyDictionary()
        self._names = {}
        self._lock = threading.RLock()

    def add(self, schema, **metadata):
        """ Attach metadata to a schema. An `id` entry also registers the schema under that name

        :rtype: Registry
        """
        with self._lock:
            self._meta.setdefault(schema, {}).update(metadata)
            if 'id' in metadata:
                self._names[metadata['id']] = schema
        logger.debug('Registered %r: %r', schema, metadata)
        return self

    def register(self, name, schema, **metadata):
        """ Register a schema under a name, with optional metadata """
        with self._lock:
            self._names[name] = schema
            self.add(schema, **metadata)
        return schema

    def get(self, schema):
        """ Get the metadata of a schema

        :rtype: dict|None
        """
        with self._lock:
            meta = self._meta.get(schema)
            return dict(meta) if meta is not None else None

    def has(self, schema):
        with self._lock:
            return schema in self._meta

    def remove(self, schema):
        with self._lock:
            self._meta.pop(schema, None)
            for name in [n for n, s in self._names.items() if s is schema]:
                del self._names[name]
        return self

    def lookup(self, name):
        """ Get a schema by name

        :raises KeyError: Not registered
        """
        with self._lock:
            return self._names[name]

    def ref(self, name):
        """ A lazy reference to a named schema: resolved on the first parse, so it may be registered later

        :rtype: vouch.helpers.Lazy
        """
        from ..helpers import Lazy
        return Lazy(lambda: self.lookup(name))

    def by_brand(self, tag):
        """ Schemas branded with the tag, with their metadata

        :rtype: list[tuple[Schema, dict]]
        """
        with self._lock:
            return [(s, dict(m)) for s, m in self._meta.items() if s.brand_tag == tag]

    def names(self):
        with self._lock:
            return sorted(self._names)

    def clear(self):
        with self._lock:
            self._meta.clear()
            self._names.clear()

    def __contains__(self, schema):
        return self.has(schema)

    def __len__(self):
        with self._lock:
            return len(self._meta)


#: Registry which receives the schemas created by `Schema.meta()`
global_registry = Registry()
