#!/usr/bin/env python
# This file is part of Stoik.
#
# Stoik is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Stoik is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Stoik.  If not, see <http://www.gnu.org/licenses/>.
#
# Copyright 2023-2024  The Stoik authors

from setuptools import setup, find_packages

# Read long description
with open('README.rst') as f:
    long_description = f.read()


setup(
    name='stoik',
    version='0.2.1',
    description='Chemical formula parsing and equation balance checking',
    license='GNU GPLv3+',

    long_description=long_description,
    long_description_content_type='text/x-rst',

    classifiers=[
        'Development Status :: 4 - Beta',
        (
            'License :: OSI Approved :: '
            'GNU General Public License v3 or later (GPLv3+)'),
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    python_requires='>=3.10',
    packages=find_packages(),

    entry_points='''
        [console_scripts]
        stoik = stoik.command:main
        stoik-balance = stoik.command:main_balance

        [stoik.commands]
        balance = stoik.commands.balance:BalanceCommand
        filecheck = stoik.commands.filecheck:FileCheckCommand
        formula = stoik.commands.formula:FormulaCommand
    ''',

    test_suite='stoik.tests',

    install_requires=[
        'pyyaml>=4.2b1',
    ],
    extras_require={
        'test': ['pytest'],
        'docs': ['sphinx', 'sphinx_rtd_theme'],
    })
