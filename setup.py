#!/usr/bin/env python
"""cgmon setup.py.
"""

import io

import setuptools


def _read_requires(filename):
    reqs = []
    with io.open(filename) as f:
        for line in f:
            line = line.split('#', 1)[0].strip()
            if line:
                reqs.append(line)
    return reqs


setuptools.setup(
    name='cgmon',
    version='1.0.0',
    description='Per container cgroup CPU usage monitor.',
    python_requires='>=3.9',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    package_data={'cgmon.logging': ['*.json']},
    install_requires=_read_requires('requirements.txt'),
    extras_require={
        'test': _read_requires('test-requirements.txt'),
    },
    entry_points={
        'console_scripts': [
            'cgmon = cgmon.console:run',
        ],
    },
)
