""" Runtime validation with composable schemas.

Core features:

* Schemas are plain immutable objects, composed with methods: `String().trim().min(3).optional()`
* All issues are reported at once, each with the path to the offending value
* Coercion, defaults, transforms and pipes
* Objects with unknown-key modes, tuples, records, discriminated and exclusive unions, intersections
* Recursive schemas with `Lazy`
* Pluggable error messages: per check, per schema, per parse, process-wide, and gettext-translatable

```python
from vouch import Object, String, Int

User = Object({
    'name': String().trim().min(1),
    'age': Int().gte(0),
})

User.parse({'name': ' John ', 'age': 30})  #-> {'name': 'John', 'age': 30}

data, ok = User.safe_parse({'name': '', 'age': -1})
if not ok:
    print(data.prettify())
```
"""

import logging

# Core

from .schema.errors import BaseError, SchemaError, Invalid, MultipleInvalid, to_dot_path
from .schema.util import UNDEFINED, Undefined, Ref, register_type_name
from .schema.const import CODES, UNKNOWN_KEYS, REPORT_FORMAT
from .schema.config import configure, register_locale, get_config
from .schema.context import ParseContext, ParsePayload, RefinementContext
from .schema.issues import RawIssue, MessageFormatter
from .schema.checks import Check
from .schema.registry import Registry, global_registry

from .schema import Schema, ParseResult, parse, safe_parse

# Helpers
from .helpers import *

# Schema kinds
from .validators import *

logging.getLogger(__name__).addHandler(logging.NullHandler())
