""" File schema """

import io
import os
import mimetypes

from ..schema import Schema, checks
from ..schema.const import CODES


def is_file(v):
    """ File objects, and objects that can be read like one: uploads, spooled files, ... """
    return isinstance(v, io.IOBase) or callable(getattr(v, 'read', None))


def file_size(f):
    """ Size of a file in bytes.

    Uses the `size` attribute when there is one (uploaded files), then `fstat()`, then seeks to the end.
    """
    size = getattr(f, 'size', None)
    if isinstance(size, int):
        return size
    try:
        return os.fstat(f.fileno()).st_size
    except (AttributeError, OSError, io.UnsupportedOperation):
        pass
    pos = f.tell()
    try:
        return f.seek(0, io.SEEK_END)
    finally:
        f.seek(pos)


def file_mime(f):
    """ MIME type of a file: from `content_type` or `mimetype`, otherwise guessed from the file name

    :rtype: str|None
    """
    for attr in ('content_type', 'mimetype'):
        v = getattr(f, attr, None)
        if isinstance(v, str) and v:
            return v.split(';')[0].strip()
    name = getattr(f, 'filename', None) or getattr(f, 'name', None)
    if isinstance(name, str):
        return mimetypes.guess_type(name)[0]
    return None


class File(Schema):
    """ A file object.

    ```python
    from vouch import File

    Avatar = File().max(1024 * 1024).mime(['image/png', 'image/jpeg'])
    with open('avatar.png', 'rb') as f:
        Avatar.parse(f)
    ```
    """

    kind = 'file'

    def _parse(self, payload, ctx):
        if not is_file(payload.value):
            self._type_issue(payload)
            return False

    def min(self, n, **opts):
        """ At least `n` bytes """
        return self.check(checks.min_size(n, origin='file', sizer=file_size, when=None, **opts))

    def max(self, n, **opts):
        """ At most `n` bytes """
        return self.check(checks.max_size(n, origin='file', sizer=file_size, when=None, **opts))

    def size(self, n, **opts):
        return self.check(checks.size(n, origin='file', sizer=file_size, when=None, **opts))

    def mime(self, types, **opts):
        """ MIME type must be one of the given ones """
        types = [types] if isinstance(types, str) else list(types)

        def check(payload, ctx):
            mime = file_mime(payload.value)
            if mime not in types:
                payload.add_issue(CODES.INVALID_VALUE, origin='file', input=mime, values=types)
        return self.check(checks.Check('mime_type', check, {'mime': types}, **opts))


__all__ = ('File',)
