#!/usr/bin/env python
#
# Copyright (c) 2026 Wind River Systems, Inc.
#
# SPDX-License-Identifier: Apache-2.0
#
import setuptools

setuptools.setup(
    name='mayday',
    version='1.0.0',
    description='Host and container diagnostic dump collector',
    license='Apache-2.0',
    platforms=['any'],
    python_requires='>=3.8',
    install_requires=['oslo.config', 'oslo.log'],
    extras_require={
        'test': ['testtools', 'fixtures', 'mock', 'stestr', 'pytest'],
    },
    packages=['mayday', 'mayday.common', 'mayday.tests'],
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'mayday = mayday.__main__:main'
        ],
    }
)
