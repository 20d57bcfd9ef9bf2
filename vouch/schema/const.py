""" Constants shared by the engine and the schema kinds """


class UNKNOWN_KEYS:
    """ Object behaviour for keys that are not defined in the shape """

    #: Silently drop unknown keys from the output (default)
    STRIP = 'strip'

    #: Report unknown keys with a single `unrecognised_keys` issue
    STRICT = 'strict'

    #: Copy unknown keys to the output verbatim
    PASSTHROUGH = 'passthrough'

    #: Validate unknown values against the catchall schema
    CATCHALL = 'catchall'


class CODES:
    """ Issue codes. The set is closed: every issue carries one of these """

    INVALID_TYPE = 'invalid_type'
    INVALID_VALUE = 'invalid_value'
    TOO_SMALL = 'too_small'
    TOO_BIG = 'too_big'
    INVALID_FORMAT = 'invalid_format'
    NOT_MULTIPLE_OF = 'not_multiple_of'
    UNRECOGNISED_KEYS = 'unrecognised_keys'
    INVALID_UNION = 'invalid_union'
    INVALID_KEY = 'invalid_key'
    INVALID_ELEMENT = 'invalid_element'
    INVALID_INTERSECTION = 'invalid_intersection'
    CUSTOM = 'custom'


class REPORT_FORMAT:
    """ Shapes of `Invalid.report()` """

    TREE = 'tree'
    FLAT = 'flat'
    PRETTY = 'pretty'


class const:
    """ Misc constants """

    #: Integer bounds by format name: (minimum, maximum)
    int_bounds = {
        'int':    (-2 ** 63, 2 ** 63 - 1),
        'int8':   (-2 ** 7, 2 ** 7 - 1),
        'int16':  (-2 ** 15, 2 ** 15 - 1),
        'int32':  (-2 ** 31, 2 ** 31 - 1),
        'int64':  (-2 ** 63, 2 ** 63 - 1),
        'uint':   (0, 2 ** 64 - 1),
        'uint8':  (0, 2 ** 8 - 1),
        'uint16': (0, 2 ** 16 - 1),
        'uint32': (0, 2 ** 32 - 1),
        'uint64': (0, 2 ** 64 - 1),
        'safeint': (-(2 ** 53 - 1), 2 ** 53 - 1),
    }

    #: Largest finite float32
    float32_max = 3.4028234663852886e+38

    #: Strings accepted by bool coercion
    bool_truthy = frozenset(('true', '1', 'yes', 'on', 'y'))
    bool_falsy = frozenset(('false', '0', 'no', 'off', 'n', ''))

    #: Default StringBool vocabulary
    stringbool_truthy = ('true', '1', 'yes', 'on', 'y', 'enabled')
    stringbool_falsy = ('false', '0', 'no', 'off', 'n', 'disabled')
