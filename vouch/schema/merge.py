""" Structural merge of two parsed values: the output of an intersection """

from collections.abc import Mapping

from .util import is_nil, is_sequence, deep_equal


class MergeError(Exception):
    """ The values can't be merged.

    :ivar reason: Why
    :ivar path: Where, relative to the merged values
    """

    def __init__(self, reason, path):
        super(MergeError, self).__init__(reason, path)
        self.reason = reason
        self.path = path


def merge_values(a, b, path=()):
    """ Merge two values.

    * nil merges to the other side;
    * mappings: union of keys, shared keys are merged recursively;
    * sequences: must have the same length, merged element-wise;
    * anything else: must be equal.

    :return: The merged value
    :raises MergeError: The values conflict
    """
    if is_nil(a):
        return b
    if is_nil(b):
        return a

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        merged = dict(a)
        for k, v in b.items():
            merged[k] = merge_values(a[k], v, path + (k,)) if k in a else v
        return merged

    if is_sequence(a) and is_sequence(b):
        if len(a) != len(b):
            raise MergeError('lengths differ', list(path))
        merged = [merge_values(x, y, path + (i,)) for i, (x, y) in enumerate(zip(a, b))]
        return tuple(merged) if isinstance(a, tuple) else merged

    if isinstance(a, Mapping) or isinstance(b, Mapping) or is_sequence(a) or is_sequence(b):
        raise MergeError('types differ', list(path))

    if deep_equal(a, b):
        return a
    raise MergeError('values differ', list(path))
