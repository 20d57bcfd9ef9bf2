#!/usr/bin/env python
""" Runtime validation with composable schemas """

from setuptools import setup, find_packages

setup(
    # http://pythonhosted.org/setuptools/setuptools.html
    name='vouch',
    version='0.1.0',
    author='vouch contributors',

    license='BSD',
    description=__doc__,
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    keywords=['validation', 'schema', 'parsing'],

    packages=find_packages(exclude=('tests', 'tests.*', 'misc', 'misc.*')),
    scripts=[],
    entry_points={},

    python_requires='>=3.7',
    install_requires=[
    ],
    extras_require={
        'test': ['pytest'],
        'bench': ['voluptuous'],
    },
    include_package_data=True,

    platforms='any',
    classifiers=[
        # https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
