import math

from tests._util import VouchTestBase
from vouch import SchemaError
from vouch import String, Int, Number, Bool, Any, Enum, Literal, Object
from vouch import Union, DiscriminatedUnion, ExclusiveUnion, Intersection
from vouch.schema.merge import merge_values, MergeError


class UnionTest(VouchTestBase):
    """ Test Union() """

    def test_union(self):
        schema = Union(String(), Int())
        self.assertValid(schema, 'a')
        self.assertValid(schema, 1)
        self.assertEqual(schema.expected, 'string|int')

        e = self.assertInvalid(schema, 1.5, {
            'code': 'invalid_union',
            'path': [],
            'message': u'Invalid input: no union member matched',
        })
        self.assertEqual(len(e.branches), 2)
        self.assertIssue(e.branches[0][0], {'code': 'invalid_type', 'expected': 'string', 'received': 'float'})
        self.assertIssue(e.branches[1][0], {'code': 'invalid_type', 'expected': 'int', 'received': 'float'})
        self.assertEqual(e.to_dict()['branches'][1][0]['expected'], 'int')

    def test_first_match(self):
        """ The first matching option gives the output """
        self.assertValid(Union(Int().coerce(), String()), '5', 5)
        self.assertValid(Union(String(), Int().coerce()), '5', '5')
        self.assertValid(String().or_(Int()), 1)

    def test_flatten(self):
        self.assertEqual(len(Union(Union(String(), Int()), Bool()).options), 3)
        self.assertEqual(len(Union([String(), Int()]).options), 2)
        with self.assertRaises(SchemaError):
            Union()

    def test_nil(self):
        self.assertValid(Union(Int(), Literal(None)), None)
        self.assertInvalid(Union(Int(), String()), None, {'code': 'invalid_union'})

    def test_nested_paths(self):
        e = self.assertInvalid(Object({'a': Union(String(), Int())}), {'a': 1.5}, {
            'code': 'invalid_union', 'path': ['a'],
        })
        self.assertEqual([b[0].path for b in e.branches], [['a'], ['a']])

        e = self.assertInvalid(
            Union(Object({'a': Int()}), Object({'b': Int()})),
            {'a': 'x', 'b': 'y'},
            {'code': 'invalid_union'},
        )
        self.assertEqual([b[0].path for b in e.branches], [['a'], ['b']])

    def test_values(self):
        self.assertEqual(Union(Literal('a'), Enum(['b', 'c'])).values, ('a', 'b', 'c'))
        self.assertIsNone(Union(Literal('a'), String()).values)


class DiscriminatedUnionTest(VouchTestBase):
    """ Test DiscriminatedUnion() """

    def setUp(self):
        self.Event = DiscriminatedUnion('type', [
            Object({'type': Literal('click'), 'x': Int(), 'y': Int()}),
            Object({'type': Literal('key'), 'key': String()}),
        ])

    def test_match(self):
        self.assertValid(self.Event, {'type': 'key', 'key': 'a'})
        self.assertValid(self.Event, {'type': 'click', 'x': 1, 'y': 2})

        # Only the chosen option reports its issues
        self.assertInvalid(self.Event, {'type': 'key', 'key': 1}, {
            'code': 'invalid_type', 'path': ['key'], 'expected': 'string',
        })

    def test_no_match(self):
        for value in ({'type': 'scroll'}, {}):
            self.assertInvalid(self.Event, value, {
                'code': 'invalid_union',
                'path': ['type'],
                'discriminator': 'type',
                'branches': [],
                'message': u'Invalid input: no matching discriminator',
            })
        self.assertInvalid(self.Event, 'x', {'code': 'invalid_type', 'expected': 'object', 'received': 'string'})
        self.assertInvalid(self.Event, None, {'code': 'invalid_type', 'received': 'nil'})

    def test_nested(self):
        schema = DiscriminatedUnion('type', [
            self.Event,
            Object({'type': Enum(['scroll', 'wheel']), 'delta': Number()}),
        ])
        self.assertValid(schema, {'type': 'key', 'key': 'a'})
        self.assertValid(schema, {'type': 'wheel', 'delta': 1.5})
        self.assertInvalid(schema, {'type': 'scroll'}, {'path': ['delta']})
        self.assertInvalid(schema, {'type': 'drag'}, {'code': 'invalid_union', 'path': ['type']})

    def test_wrapped_options(self):
        schema = DiscriminatedUnion('type', [
            Object({'type': Literal('a')}).readonly(),
            Object({'type': Literal('b')}),
        ])
        self.assertEqual(dict(schema.parse({'type': 'a'})), {'type': 'a'})

    def test_bad_options(self):
        with self.assertRaises(SchemaError):
            DiscriminatedUnion('type', [Object({'type': String()})])
        with self.assertRaises(SchemaError):
            DiscriminatedUnion('type', [Object({'kind': Literal('a')})])
        with self.assertRaises(SchemaError):
            DiscriminatedUnion('type', [
                Object({'type': Literal('a')}),
                Object({'type': Enum(['b', 'a'])}),
            ])


class ExclusiveUnionTest(VouchTestBase):
    """ Test ExclusiveUnion() """

    def test_exclusive(self):
        schema = ExclusiveUnion(Number(), Int())
        self.assertValid(schema, 1.5)
        self.assertInvalid(schema, 1, {
            'code': 'invalid_union',
            'inclusive': False,
            'message': u'Invalid input: multiple union members matched',
        })
        e = self.assertInvalid(schema, 'a', {
            'code': 'invalid_union', 'message': u'Invalid input: no union member matched',
        })
        self.assertEqual(len(e.branches), 2)

        self.assertValid(ExclusiveUnion(String(), Int()), 'a')


class IntersectionTest(VouchTestBase):
    """ Test Intersection() """

    def test_objects(self):
        schema = Intersection(Object({'a': String()}), Object({'b': Int()}))
        self.assertValid(schema, {'a': 'x', 'b': 1})
        self.assertInvalid(schema, {'a': 'x'}, {'path': ['b'], 'received': 'undefined'})
        self.assertInvalid(
            schema, {},
            {'path': ['a']},
            {'path': ['b']},
        )
        self.assertValid(Object({'a': String()}).and_(Object({'b': Int()})), {'a': 'x', 'b': 1})

    def test_primitives(self):
        schema = String().min(1).and_(String().max(3))
        self.assertValid(schema, 'ab')
        self.assertInvalid(schema, '', {'code': 'too_small'})
        self.assertInvalid(schema, 'abcd', {'code': 'too_big'})
        self.assertInvalid(Intersection(String(), Int()), 'a', {'code': 'invalid_type', 'expected': 'int'})

    def test_conflicts(self):
        self.assertInvalid(Intersection(Any().transform(lambda v: 1), Any().transform(lambda v: 2)), 'x', {
            'code': 'invalid_intersection',
            'reason': 'values differ',
            'merge_path': [],
            'message': u'Unmergeable intersection: values differ',
        })
        self.assertInvalid(
            Intersection(Object({'a': Int()}), Object({'a': Int().transform(lambda v: v + 1)})),
            {'a': 1},
            {'code': 'invalid_intersection', 'merge_path': ['a'], 'path': []},
        )
        self.assertInvalid(
            Intersection(Any().transform(lambda v: [1]), Any().transform(lambda v: [1, 2])), 'x',
            {'reason': 'lengths differ'},
        )
        self.assertInvalid(
            Intersection(Any().transform(lambda v: {}), Any().transform(lambda v: [])), 'x',
            {'reason': 'types differ'},
        )


class MergeTest(VouchTestBase):
    """ Test merge_values() """

    def test_merge(self):
        self.assertEqual(merge_values({'a': {'b': 1}}, {'a': {'c': 2}, 'd': 3}), {'a': {'b': 1, 'c': 2}, 'd': 3})
        self.assertEqual(merge_values([{'a': 1}], [{'b': 2}]), [{'a': 1, 'b': 2}])
        self.assertEqual(merge_values((1, 2), (1, 2)), (1, 2))
        self.assertEqual(merge_values(None, 1), 1)
        self.assertEqual(merge_values(1, None), 1)
        self.assertEqual(merge_values(1, 1.0), 1)
        self.assertTrue(math.isnan(merge_values(float('nan'), float('nan'))))

    def test_conflicts(self):
        with self.assertRaises(MergeError) as cm:
            merge_values({'a': [1, {'b': 1}]}, {'a': [1, {'b': 2}]})
        self.assertEqual(cm.exception.reason, 'values differ')
        self.assertEqual(cm.exception.path, ['a', 1, 'b'])

        with self.assertRaises(MergeError) as cm:
            merge_values(1, True)
        self.assertEqual(cm.exception.reason, 'values differ')

        with self.assertRaises(MergeError) as cm:
            merge_values({}, 'a')
        self.assertEqual(cm.exception.reason, 'types differ')
