import io
import enum
import math
import sys
from decimal import Decimal

from tests._util import VouchTestBase
from vouch import Invalid, SchemaError
from vouch import String, StringBool, Number, Int, Int8, Int64, Uint8, Float32, Float64, BigInt, Bool
from vouch import Nil, Any, Unknown, Never, Literal, Enum, Object, Custom, InstanceOf, Function, File


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Upload(object):
    """ Uploaded file, the way web frameworks represent it """

    def __init__(self, data, filename, content_type=None):
        self.data = data
        self.filename = filename
        self.content_type = content_type
        self.size = len(data)

    def read(self):
        return self.data


class StringTest(VouchTestBase):
    """ Test String() """

    def test_type(self):
        self.assertValid(String(), u'')
        self.assertValid(String(), u'abc')
        self.assertInvalid(String(), 1, {
            'code': 'invalid_type',
            'expected': 'string',
            'received': 'int',
            'message': u'Invalid input: expected string, received int',
        })
        self.assertInvalid(String(), b'abc', {'received': 'bytes'})

    def test_coerce(self):
        schema = String().coerce()
        self.assertValid(schema, 1, '1')
        self.assertValid(schema, 1.5, '1.5')
        self.assertValid(schema, True, 'true')
        self.assertValid(schema, b'ab', 'ab')
        self.assertValid(schema, Color.RED, '1')
        self.assertInvalid(schema, {}, {'code': 'invalid_type', 'received': 'object'})

    def test_length(self):
        self.assertValid(String().max(2), 'ab')
        self.assertInvalid(String().max(2), 'abc', {
            'code': 'too_big',
            'maximum': 2,
            'origin': 'string',
            'message': u'Too big: expected string to have at most 2 characters',
        })
        self.assertInvalid(String().length(3), 'ab', {
            'code': 'too_small',
            'minimum': 3,
            'exact': True,
            'message': u'Too small: expected string to have exactly 3 characters',
        })
        self.assertInvalid(String().length(1), 'ab', {'code': 'too_big', 'maximum': 1, 'exact': True})
        self.assertInvalid(String().nonempty(), '', {'code': 'too_small', 'minimum': 1})

        # Code points, not bytes
        self.assertValid(String().length(2), u'日本')

    def test_regex(self):
        schema = String().regex(r'^\d+$')
        self.assertValid(schema, '123')
        self.assertInvalid(schema, 'a1', {
            'code': 'invalid_format',
            'format': 'regex',
            'pattern': r'^\d+$',
            'message': u'Invalid string: must match pattern ^\\d+$',
        })

    def test_affixes(self):
        self.assertValid(String().starts_with('ab'), 'abc')
        self.assertInvalid(String().starts_with('ab'), 'xab', {
            'format': 'starts_with', 'prefix': 'ab', 'message': u'Invalid string: must start with "ab"',
        })
        self.assertValid(String().ends_with('bc'), 'abc')
        self.assertInvalid(String().ends_with('bc'), 'abx', {
            'format': 'ends_with', 'suffix': 'bc', 'message': u'Invalid string: must end with "bc"',
        })
        self.assertValid(String().includes('b'), 'abc')
        self.assertInvalid(String().includes('b', position=2), 'abc', {'format': 'includes', 'position': 2})

    def test_case(self):
        self.assertValid(String().lowercase(), 'abc')
        self.assertInvalid(String().lowercase(), 'Abc', {
            'format': 'lowercase', 'message': u'Invalid string: must be lowercase',
        })
        self.assertValid(String().uppercase(), 'ABC')
        self.assertInvalid(String().uppercase(), 'ABc', {'format': 'uppercase'})

    def test_transforms(self):
        self.assertValid(String().trim(), '  a b  ', 'a b')
        self.assertValid(String().lower(), 'ABC', 'abc')
        self.assertValid(String().upper(), 'abc', 'ABC')
        self.assertValid(String().normalize(), u'e\u0301', u'\u00e9')
        self.assertIdempotent(String().trim().lower(), '  ABC ')

    def test_email(self):
        schema = String().email()
        self.assertValid(schema, 'user@example.com')
        self.assertValid(schema, 'first.last+tag@mail.example.org')
        for v in ('user@', '@example.com', 'user@example', 'us..er@example.com', '.user@example.com'):
            self.assertInvalid(schema, v, {'format': 'email', 'message': u'Invalid email address'})

    def test_url(self):
        self.assertValid(String().url(), 'https://example.com/a?b=c')
        self.assertValid(String().url(), 'ftp://user@host:21/path')
        self.assertInvalid(String().url(), 'example.com', {'format': 'url', 'message': u'Invalid URL'})
        self.assertInvalid(String().url(), 'http://host:port/')

        self.assertValid(String().url(protocol=r'^https$'), 'https://example.com')
        self.assertInvalid(String().url(protocol=r'^https$'), 'http://example.com')
        self.assertValid(String().url(hostname=r'\.example\.com$'), 'https://api.example.com')
        self.assertInvalid(String().url(hostname=r'\.example\.com$'), 'https://example.org',
                           {'hostname': r'\.example\.com$'})

    def test_ids(self):
        u = '123e4567-e89b-12d3-a456-426614174000'
        self.assertValid(String().uuid(), u)
        self.assertValid(String().uuid(version=1), u)
        self.assertInvalid(String().uuid(version=4), u, {'format': 'uuid', 'message': u'Invalid UUID'})
        self.assertInvalid(String().uuid(), '123e4567-e89b-92d3-a456-426614174000')
        self.assertValid(String().guid(), '123e4567-e89b-92d3-a456-426614174000')
        self.assertValid(String().uuid(), '00000000-0000-0000-0000-000000000000')
        with self.assertRaises(SchemaError):
            String().uuid(version=9)

        self.assertValid(String().cuid(), 'cjld2cjxh0000qzrmn831i7rn')
        self.assertInvalid(String().cuid(), 'xjld2cjxh0000qzrmn831i7rn')
        self.assertValid(String().cuid2(), 'tz4a98xxat96iws9zmbrgj3a')
        self.assertInvalid(String().cuid2(), 'TZ4a98')
        self.assertValid(String().ulid(), '01ARZ3NDEKTSV4RRFFQ69G5FAV')
        self.assertInvalid(String().ulid(), '01ARZ3NDEKTSV4RRFFQ69G5FA')
        self.assertValid(String().nanoid(), 'V1StGXR8_Z5jdHi6B-myT')
        self.assertInvalid(String().nanoid(), 'V1StGXR8_Z5jdHi6B-my')

    def test_network(self):
        self.assertValid(String().ipv4(), '192.168.0.1')
        self.assertInvalid(String().ipv4(), '256.1.1.1', {'format': 'ipv4', 'message': u'Invalid IPv4 address'})
        self.assertInvalid(String().ipv4(), '::1')
        self.assertValid(String().ipv6(), '::1')
        self.assertValid(String().ipv6(), '2001:db8::ff00:42:8329')
        self.assertInvalid(String().ipv6(), '192.168.0.1', {'format': 'ipv6'})

        self.assertValid(String().cidrv4(), '10.0.0.0/8')
        self.assertInvalid(String().cidrv4(), '10.0.0.0', {'format': 'cidrv4'})
        self.assertInvalid(String().cidrv4(), '10.0.0.0/33')
        self.assertValid(String().cidrv6(), '2001:db8::/32')
        self.assertInvalid(String().cidrv6(), '10.0.0.0/8')

    def test_encodings(self):
        self.assertValid(String().base64(), 'aGVsbG8=')
        self.assertValid(String().base64(), '')
        self.assertInvalid(String().base64(), 'aGVsbG8', {'format': 'base64'})
        self.assertValid(String().base64url(), 'aGVsbG8_-w')
        self.assertInvalid(String().base64url(), 'aGVsbG8=')

        self.assertValid(String().e164(), '+14155552671')
        self.assertInvalid(String().e164(), '14155552671', {'message': u'Invalid E.164 number'})

        self.assertValid(String().json(), '{"a": [1, 2]}')
        self.assertInvalid(String().json(), '{', {'format': 'json_string', 'message': u'Invalid JSON string'})

    def test_iso(self):
        self.assertValid(String().iso_date(), '2024-02-29')
        self.assertInvalid(String().iso_date(), '2023-02-29', {'format': 'iso_date', 'message': u'Invalid ISO date'})
        self.assertInvalid(String().iso_date(), '2024-1-1')

        self.assertValid(String().iso_time(), '10:00')
        self.assertValid(String().iso_time(), '10:00:00.123')
        self.assertInvalid(String().iso_time(), '24:00', {'format': 'iso_time'})
        self.assertValid(String().iso_time(precision=0), '10:00:00')
        self.assertInvalid(String().iso_time(precision=0), '10:00')
        self.assertValid(String().iso_time(precision=3), '10:00:00.123')
        self.assertInvalid(String().iso_time(precision=3), '10:00:00.1')

        self.assertValid(String().iso_datetime(), '2024-01-01T10:00:00Z')
        self.assertInvalid(String().iso_datetime(), '2024-01-01T10:00:00+02:00', {'format': 'iso_datetime'})
        self.assertInvalid(String().iso_datetime(), '2024-01-01T10:00:00')
        self.assertInvalid(String().iso_datetime(), '2023-02-30T10:00:00Z')
        self.assertValid(String().iso_datetime(offset=True), '2024-01-01T10:00:00+02:00')
        self.assertValid(String().iso_datetime(local=True), '2024-01-01T10:00')

        self.assertValid(String().iso_duration(), 'P3Y6M4DT12H30M5S')
        self.assertValid(String().iso_duration(), 'P2W')
        self.assertValid(String().iso_duration(), 'PT0.5S')
        self.assertInvalid(String().iso_duration(), 'P', {'format': 'iso_duration'})
        self.assertInvalid(String().iso_duration(), 'PT')
        self.assertInvalid(String().iso_duration(), 'P1W2D')

    def test_trailing_newline(self):
        """ Formats match the whole string: a trailing newline is not ignored """
        cases = [
            (String().email(), 'user@example.com'),
            (String().url(), 'https://example.com'),
            (String().uuid(), '123e4567-e89b-12d3-a456-426614174000'),
            (String().uuid(version=1), '123e4567-e89b-12d3-a456-426614174000'),
            (String().ulid(), '01ARZ3NDEKTSV4RRFFQ69G5FAV'),
            (String().nanoid(), 'V1StGXR8_Z5jdHi6B-myT'),
            (String().e164(), '+14155552671'),
            (String().base64(), 'aGVsbG8='),
            (String().ipv4(), '192.168.0.1'),
            (String().iso_date(), '2024-01-01'),
            (String().iso_time(), '10:00'),
            (String().iso_datetime(), '2024-01-01T10:00:00Z'),
            (String().iso_duration(), 'P2W'),
        ]
        for schema, value in cases:
            self.assertValid(schema, value)
            self.assertInvalid(schema, value + '\n', {'code': 'invalid_format'})



class StringBoolTest(VouchTestBase):
    """ Test StringBool() """

    def test_stringbool(self):
        schema = StringBool()
        self.assertValid(schema, 'Yes', True)
        self.assertValid(schema, 'enabled', True)
        self.assertValid(schema, ' 0 ', False)
        self.assertValid(schema, 'disabled', False)
        self.assertIdempotent(schema, 'on')

        self.assertInvalid(schema, 'nope', {
            'code': 'invalid_value',
            'values': ['true', '1', 'yes', 'on', 'y', 'enabled', 'false', '0', 'no', 'off', 'n', 'disabled'],
        })
        self.assertInvalid(schema, 1, {
            'code': 'invalid_type', 'message': u'Invalid input: expected string, received int',
        })

    def test_vocabulary(self):
        schema = StringBool(truthy=['sure'], falsy=['nah'], case='sensitive')
        self.assertValid(schema, 'sure', True)
        self.assertValid(schema, 'nah', False)
        self.assertInvalid(schema, 'Nah', {'message': u'Invalid option: expected one of "sure"|"nah"'})
        self.assertInvalid(schema, 'yes')

        with self.assertRaises(SchemaError):
            StringBool(case='upper')


class NumberTest(VouchTestBase):
    """ Test numeric schemas """

    def test_number(self):
        self.assertValid(Number(), 1)
        self.assertValid(Number(), 1.5)
        self.assertValid(Number(), float('inf'))
        self.assertInvalid(Number(), True, {'expected': 'number', 'received': 'bool'})
        self.assertInvalid(Number(), float('nan'), {
            'code': 'invalid_type', 'received': 'NaN', 'message': u'Invalid input: expected number, received NaN',
        })
        self.assertInvalid(Number(), '1', {'received': 'string'})
        self.assertInvalid(Number().finite(), float('-inf'), {
            'code': 'invalid_type', 'expected': 'number', 'received': 'Infinity',
        })

    def test_coerce(self):
        schema = Number().coerce()
        self.assertValid(schema, '1.5', 1.5)
        self.assertValid(schema, ' 42 ', 42)
        self.assertValid(schema, True, 1)
        self.assertValid(schema, Decimal('2.5'), 2.5)
        self.assertInvalid(schema, 'abc', {'code': 'invalid_type', 'received': 'string'})
        self.assertInvalid(schema, [1], {'code': 'invalid_type', 'received': 'array'})

        # Plain base-10 literals only
        self.assertValid(schema, '.5', 0.5)
        self.assertValid(schema, '1e3', 1000.0)
        for s in ('1_000', 'inf', '-Infinity', 'nan', '1e400'):
            self.assertInvalid(schema, s, {'code': 'invalid_type', 'received': 'string'})

    def test_range(self):
        self.assertValid(Number().gte(0), 0)
        self.assertInvalid(Number().gte(0), -1, {
            'code': 'too_small',
            'minimum': 0,
            'inclusive': True,
            'origin': 'number',
            'message': u'Too small: expected number to be at least 0',
        })
        self.assertInvalid(Number().gt(0), 0, {
            'code': 'too_small', 'inclusive': False, 'message': u'Too small: expected number to be greater than 0',
        })
        self.assertValid(Number().lte(10), 10)
        self.assertInvalid(Number().lt(10), 10, {
            'code': 'too_big', 'maximum': 10, 'inclusive': False,
            'message': u'Too big: expected number to be less than 10',
        })
        self.assertInvalid(Number().max(10), 11, {'message': u'Too big: expected number to be at most 10'})
        self.assertValid(Number().min(1).max(3), 2)

        self.assertInvalid(Number().positive(), 0, {'code': 'too_small'})
        self.assertInvalid(Number().negative(), 0, {'code': 'too_big'})
        self.assertValid(Number().non_negative(), 0)
        self.assertValid(Number().non_positive(), 0)
        self.assertInvalid(Number().non_positive(), 0.1)

    def test_multiple_of(self):
        self.assertValid(Int().multiple_of(3), 9)
        self.assertInvalid(Int().multiple_of(3), 10, {
            'code': 'not_multiple_of', 'divisor': 3, 'message': u'Invalid number: must be a multiple of 3',
        })
        self.assertValid(Number().multiple_of(0.1), 0.3)
        self.assertValid(Number().step(0.25), 1.75)
        self.assertInvalid(Number().multiple_of(0.1), 0.35, {'divisor': 0.1})
        self.assertInvalid(Number().multiple_of(2), float('inf'))

    def test_int(self):
        self.assertValid(Number().int(), 2)
        self.assertValid(Number().int(), 2.0)
        self.assertInvalid(Number().int(), 1.5, {'code': 'invalid_type', 'expected': 'int', 'received': 'float'})

        # The rest of the checks are not run
        self.assertInvalid(Number().int().gte(10), 1.5, {'code': 'invalid_type'})

        self.assertValid(Number().safe_int(), 2 ** 53 - 1)
        self.assertInvalid(Number().safe_int(), 2 ** 53, {'code': 'too_big', 'maximum': 2 ** 53 - 1})
        self.assertInvalid(Number().safe_int(), 0.5, {'code': 'invalid_type', 'expected': 'int'})

    def test_sized_ints(self):
        self.assertValid(Int(), 2 ** 63 - 1)
        self.assertInvalid(Int(), 2 ** 63, {'code': 'too_big', 'maximum': 2 ** 63 - 1, 'format': 'int'})
        self.assertInvalid(Int(), 1.0, {'expected': 'int', 'received': 'float'})
        self.assertInvalid(Int(), True, {'expected': 'int', 'received': 'bool'})

        self.assertValid(Int8(), 127)
        self.assertValid(Int8(), -128)
        self.assertInvalid(Int8(), 128, {
            'code': 'too_big',
            'maximum': 127,
            'origin': 'number',
            'format': 'int8',
            'message': u'Too big: expected number to be at most 127',
        })
        self.assertInvalid(Int8(), -129, {'code': 'too_small', 'minimum': -128})
        self.assertInvalid(Int8(), 'a', {'expected': 'int8'})
        self.assertInvalid(Uint8(), -1, {'code': 'too_small', 'minimum': 0})
        self.assertValid(Uint8(), 255)
        self.assertInvalid(Int64(), -2 ** 63 - 1, {'code': 'too_small'})

    def test_int_coerce(self):
        schema = Int8().coerce()
        self.assertValid(schema, '100', 100)
        self.assertValid(schema, ' -5 ', -5)
        self.assertValid(schema, 2.0, 2)
        self.assertValid(schema, True, 1)
        self.assertInvalid(schema, '300', {'code': 'too_big', 'maximum': 127})
        self.assertInvalid(schema, '1.5', {'code': 'invalid_type', 'expected': 'int8', 'received': 'string'})
        self.assertInvalid(schema, 2.5, {'code': 'invalid_type', 'received': 'float'})
        self.assertInvalid(schema, '0x10', {'code': 'invalid_type'})

    def test_floats(self):
        self.assertValid(Float64(), 1, 1.0)
        self.assertIsInstance(Float64().parse(1), float)
        self.assertInvalid(Float64(), 'a', {'expected': 'float64'})

        # Integers too large for a float
        self.assertInvalid(Float64(), 10 ** 400, {
            'code': 'too_big', 'origin': 'number', 'maximum': sys.float_info.max, 'format': 'float64',
        })
        self.assertInvalid(Float64(), -10 ** 400, {'code': 'too_small', 'minimum': -sys.float_info.max})
        self.assertInvalid(Float32(), 10 ** 400, {'code': 'too_big'})

        self.assertValid(Float32(), 1.5)
        self.assertValid(Float32(), float('inf'))
        self.assertInvalid(Float32(), 1e39, {'code': 'too_big', 'format': 'float32'})
        self.assertInvalid(Float32(), -1e39, {'code': 'too_small'})

    def test_bigint(self):
        self.assertValid(BigInt(), 2 ** 100)
        self.assertInvalid(BigInt(), 1.5, {'expected': 'bigint', 'received': 'float'})
        self.assertInvalid(BigInt(), False, {'received': 'bool'})
        self.assertValid(BigInt().coerce(), '123456789012345678901234567890', 123456789012345678901234567890)
        self.assertInvalid(BigInt().gte(10), 5, {
            'origin': 'bigint', 'message': u'Too small: expected bigint to be at least 10',
        })


class BoolTest(VouchTestBase):
    """ Test Bool() """

    def test_bool(self):
        self.assertValid(Bool(), True)
        self.assertValid(Bool(), False)
        self.assertInvalid(Bool(), 1, {'expected': 'bool', 'received': 'int'})
        self.assertInvalid(Bool(), 'true', {'received': 'string'})

    def test_coerce(self):
        schema = Bool().coerce()
        self.assertValid(schema, 'Yes', True)
        self.assertValid(schema, 'off', False)
        self.assertValid(schema, '', False)
        self.assertValid(schema, 0, False)
        self.assertValid(schema, 2, True)
        self.assertInvalid(schema, 'maybe', {'code': 'invalid_type', 'expected': 'bool', 'received': 'string'})
        self.assertInvalid(schema, [], {'received': 'array'})


class ValuesTest(VouchTestBase):
    """ Test Nil, Any, Unknown, Never, Literal, Enum """

    def test_nil(self):
        self.assertValid(Nil(), None)
        self.assertInvalid(Nil(), 0, {'expected': 'nil', 'received': 'int'})
        self.assertInvalid(Object({'a': Nil()}), {}, {'path': ['a'], 'expected': 'nil', 'received': 'undefined'})

    def test_any(self):
        for schema in (Any(), Unknown()):
            self.assertValid(schema, None)
            self.assertValid(schema, [1, 'a'])
            self.assertValid(Object({'a': schema}), {}, {})
            self.assertValid(Object({'a': schema}), {'a': None})

    def test_never(self):
        self.assertInvalid(Never(), 1, {'code': 'invalid_type', 'expected': 'never', 'received': 'int'})
        self.assertInvalid(Never(), None)
        self.assertValid(Object({'a': Never().optional()}), {})
        self.assertInvalid(Object({'a': Never().optional()}), {'a': 1}, {'path': ['a']})

    def test_literal(self):
        schema = Literal('a', 'b')
        self.assertValid(schema, 'a')
        self.assertEqual(schema.values, ('a', 'b'))
        self.assertInvalid(schema, 'c', {
            'code': 'invalid_value',
            'values': ['a', 'b'],
            'message': u'Invalid option: expected one of "a"|"b"',
        })
        self.assertInvalid(Literal('a'), 'b', {'message': u'Invalid input: expected "a"'})
        self.assertEqual(Literal('a').value, 'a')
        with self.assertRaises(ValueError):
            Literal('a', 'b').value
        with self.assertRaises(SchemaError):
            Literal()

    def test_literal_equality(self):
        self.assertInvalid(Literal(1), True, {'code': 'invalid_value'})
        self.assertInvalid(Literal(True), 1)
        self.assertValid(Literal(1), 1.0, 1)
        self.assertValid(Literal(0.0), -0.0)
        self.assertValid(Literal(None), None)
        self.assertInvalid(Literal(None), 0)
        self.assertValid(Literal([1, 2]), [1, 2])

        result = Literal(float('nan')).safe_parse(float('nan'))
        self.assertTrue(result.ok)
        self.assertTrue(math.isnan(result.data))

    def test_nil_input(self):
        """ Nil is a type mismatch, unless `None` is one of the values """
        self.assertInvalid(Literal('a'), None, {'code': 'invalid_type', 'expected': 'literal', 'received': 'nil'})
        self.assertInvalid(Enum(['a', 'b']), None, {'code': 'invalid_type', 'expected': 'enum', 'received': 'nil'})
        self.assertInvalid(Object({'t': Literal('a')}), {}, {
            'code': 'invalid_type', 'path': ['t'], 'received': 'undefined',
        })
        self.assertInvalid(Object({'t': Enum(Color)}), {}, {'code': 'invalid_type', 'path': ['t']})

        self.assertValid(Literal('a', None), None)
        self.assertValid(Enum(['a', None]), None)
        self.assertValid(Object({'t': Literal('a').optional()}), {}, {})

    def test_enum(self):
        schema = Enum(['red', 'green'])
        self.assertValid(schema, 'red')
        self.assertEqual(schema.options, ['red', 'green'])
        self.assertEqual(schema.enum, {'red': 'red', 'green': 'green'})
        self.assertInvalid(schema, 'blue', {'code': 'invalid_value', 'values': ['red', 'green']})

        schema = Enum({'RED': 0xFF0000, 'GREEN': 0x00FF00})
        self.assertValid(schema, 0xFF0000)
        self.assertInvalid(schema, 'RED')

        self.assertEqual(Enum(['a', 'b', 'c']).extract('a', 'c').options, ['a', 'c'])
        self.assertEqual(Enum(['a', 'b', 'c']).exclude('b').options, ['a', 'c'])
        self.assertEqual(Enum([1, 2]).extract(1).options, [1])
        with self.assertRaises(SchemaError):
            Enum(['a']).extract('z')
        with self.assertRaises(SchemaError):
            Enum([])

    def test_enum_class(self):
        schema = Enum(Color)
        self.assertValid(schema, 1, Color.RED)
        self.assertValid(schema, Color.GREEN)
        self.assertInvalid(schema, 3, {
            'code': 'invalid_value', 'values': [1, 2], 'message': u'Invalid option: expected one of 1|2',
        })
        self.assertEqual(schema.enum, {'RED': Color.RED, 'GREEN': Color.GREEN})

        red = schema.extract('RED')
        self.assertValid(red, 1, Color.RED)
        self.assertInvalid(red, 2, {'values': [1]})
        self.assertValid(schema.exclude(Color.RED), Color.GREEN)


class TypesTest(VouchTestBase):
    """ Test Custom, InstanceOf, Function, File """

    def test_custom(self):
        schema = Custom(lambda v: v == 'x')
        self.assertValid(schema, 'x')
        self.assertInvalid(schema, 'y', {'code': 'custom', 'message': u'Invalid input'})
        self.assertInvalid(Custom(lambda v: v == 'x', error=u'Must be x'), 'y', {'message': u'Must be x'})

        self.assertValid(Custom(), None)
        self.assertValid(Custom(lambda v: v is None), None)
        self.assertInvalid(Custom(lambda v: v.missing), 1, {'code': 'custom'})

    def test_instance_of(self):
        self.assertValid(InstanceOf(Decimal), Decimal('1.5'))
        self.assertInvalid(InstanceOf(Decimal), 1.5, {
            'code': 'invalid_type', 'expected': 'Decimal', 'received': 'float',
        })
        self.assertInvalid(InstanceOf(Decimal), None, {'received': 'nil'})
        self.assertValid(InstanceOf((int, str)), 'a')
        self.assertInvalid(InstanceOf((int, str)), 1.5, {'expected': 'int|str'})

    def test_function(self):
        repeat = Function([String(), Int().gte(0)], String()).implement(lambda s, n: s * n)
        self.assertEqual(repeat('ab', 2), 'abab')
        self.assertEqual(repeat.__name__, '<lambda>')

        with self.assertRaises(Invalid) as cm:
            repeat('ab', -1)
        self.assertIssues(cm.exception, {'code': 'too_small', 'path': [1], 'minimum': 0})

        with self.assertRaises(Invalid) as cm:
            repeat('ab')
        self.assertIssues(cm.exception, {'code': 'too_small', 'minimum': 2, 'origin': 'array'})

        with self.assertRaises(Invalid):
            Function(output=Int()).implement(lambda: 'x')()

    def test_function_schema(self):
        fn = Function().parse(len)
        self.assertEqual(fn('abc'), 3)
        self.assertInvalid(Function(), 1, {'code': 'invalid_type', 'expected': 'function', 'received': 'int'})

        fn = Function().args(Int(), rest=Int()).returns(Int()).parse(lambda *a: sum(a))
        self.assertEqual(fn(1, 2, 3), 6)
        with self.assertRaises(Invalid):
            fn(1, 'a')

    def test_file(self):
        f = io.BytesIO(b'abc')
        self.assertIs(File().parse(f), f)
        self.assertInvalid(File(), 'abc', {'code': 'invalid_type', 'expected': 'file', 'received': 'string'})

        self.assertIs(File().min(3).max(3).size(3).parse(f), f)
        self.assertInvalid(File().min(5), io.BytesIO(b'abc'), {
            'code': 'too_small',
            'origin': 'file',
            'minimum': 5,
            'message': u'Too small: expected file to have at least 5 bytes',
        })
        self.assertInvalid(File().max(2), Upload(b'abc', 'a.txt'), {'code': 'too_big', 'maximum': 2})

    def test_file_mime(self):
        self.assertValid(File().mime(['image/png']), Upload(b'x', 'avatar.png'))
        self.assertValid(File().mime('image/png'), Upload(b'x', 'avatar', 'image/png; charset=binary'))
        self.assertInvalid(File().mime(['image/jpeg']), Upload(b'x', 'avatar.png'), {
            'code': 'invalid_value', 'origin': 'file', 'values': ['image/jpeg'],
        })
