#! /usr/bin/env python
""" Compare the parse speed of vouch and voluptuous on generated object schemas.

Usage: performance.py <samples> <size_min> <size_max>
"""

import voluptuous
import vouch

import sys
import itertools
from datetime import datetime
from random import choice, randrange


def generate_random_field(valid):
    """ Generate a random field kind and samples for it.

    :param valid: Generate valid samples?
    :type valid: bool
    :return: kind, sample-generator
    :rtype: str, generator
    """
    kind = choice(['int', 'str'])

    r = lambda: randrange(-1000000000, 1000000000)

    if kind == 'int':
        return kind, (r() if valid else str(r()) for i in itertools.count())
    elif kind == 'str':
        return kind, (str(r()) if valid else r() for i in itertools.count())
    else:
        raise AssertionError('!')


def build_schemas(fields):
    """ Build equivalent schemas for both libraries

    :param fields: Field name -> kind
    :type fields: dict
    :return: {library name: callable}
    """
    types = {'int': (vouch.Int64(), int), 'str': (vouch.String(), str)}
    return {
        'vouch': vouch.Object({k: types[kind][0] for k, kind in fields.items()}).strict().parse,
        'voluptuous': voluptuous.Schema({voluptuous.Required(k): types[kind][1] for k, kind in fields.items()}),
    }


def generate_object_schema(size, valid):
    """ Generate an object of `size` fields, and a samples generator

    :param size: Number of fields
    :type size: int
    :param valid: Generate valid samples?
    :type valid: bool
    :returns: fields, sample-generator
    """
    fields = {}
    generator_items = []

    for i in range(0, size):
        kind, gen = generate_random_field(valid)
        name = 'f{}'.format(i)
        fields[name] = kind
        generator_items.append((name, gen))

    generator = ({name: next(gen) for name, gen in generator_items} for i in itertools.count())
    return fields, generator


errors = {
    'vouch': vouch.Invalid,
    'voluptuous': voluptuous.Invalid,
}


if __name__ == '__main__':
    import argparse
    from collections import defaultdict

    parser = argparse.ArgumentParser(prog='Performance')
    parser.add_argument('samples', type=int, help='The number of samples to test with')
    parser.add_argument('size_min', type=int, help='Min object size')
    parser.add_argument('size_max', type=int, help='Max object size')
    args = parser.parse_args()

    # Test on both valid and invalid samples
    results = defaultdict(list)
    for valid in (True, False):

        # Generate objects of different size
        objects = []
        for size in range(args.size_min, args.size_max + 1):
            fields, gen = generate_object_schema(size, valid)
            samples = list(sample for i, sample in zip(range(0, args.samples), gen))
            objects.append((size, build_schemas(fields), samples))

        for lib_name in ('vouch', 'voluptuous'):
            for size, schemas, samples in objects:
                schema = schemas[lib_name]

                start = datetime.now()
                for sample in samples:
                    try:
                        schema(sample)
                    except errors[lib_name]:
                        pass
                stop = datetime.now()

                spent_time = (stop - start).total_seconds()
                results[valid, lib_name].append(dict(
                    size=size,
                    sec=spent_time,
                    vps=len(samples) / spent_time if spent_time else float('inf'),
                ))

    # Print dataset
    for (valid, lib_name), stats_list in sorted(results.items()):
        print('"{lib} ({valid})"'.format(lib=lib_name, valid='Valid' if valid else 'Invalid'))
        print("#size  time  vps")
        for stat in stats_list:
            print('{size: 5d} {sec: 4.2f} {vps: 10.2f}'.format(**stat))
        print('\n')

    # Averages
    for (valid, lib_name), stats_list in sorted(results.items()):
        vps = sum(x['vps'] for x in stats_list) / len(stats_list)
        print('AVG:{lib:<12} {valid:<8} {vps: 10.2f}'.format(
            lib=lib_name,
            valid='Valid' if valid else 'Invalid',
            vps=vps
        ), file=sys.stderr)
