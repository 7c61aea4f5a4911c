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

"""Reading lists of equations from YAML files.

An equation file contains a list of equations, either directly or under the
``equations`` key. Each entry is an equation string or a mapping with an
``equation`` and optionally an ``id`` and a ``name``. An entry with an
``include`` key reads the equations of another file, relative to the
including file::

    equations:
      - id: water
        equation: 2H2 + O2 -> 2H2O
      - CH4 + 2O2 -> CO2 + 2H2O
      - include: more_equations.yaml
"""

import os
import logging

import yaml

from .error import StoikError
from .balancecheck import check_equation

logger = logging.getLogger(__name__)

_HAS_YAML_LIBRARY = None


class ParseError(Exception):
    """Exception used to signal errors in the structure of a file"""


def yaml_load(stream):
    """Load YAML file using safe loader."""
    global _HAS_YAML_LIBRARY

    if _HAS_YAML_LIBRARY is None:
        _HAS_YAML_LIBRARY = hasattr(yaml, 'CSafeLoader')
        if not _HAS_YAML_LIBRARY:
            logger.debug('libyaml was not found, using the pure Python'
                         ' YAML loader.')

    if _HAS_YAML_LIBRARY:
        loader = yaml.CSafeLoader(stream)
    else:
        loader = yaml.SafeLoader(stream)
    try:
        return loader.get_single_data()
    finally:
        loader.dispose()


class EquationEntry(object):
    """Equation string read from a file with its identifier."""

    def __init__(self, id, equation, name=None, filepath=None):
        self._id = id
        self._equation = equation
        self._name = name
        self._filepath = filepath

    @property
    def id(self):
        return self._id

    @property
    def equation(self):
        return self._equation

    @property
    def name(self):
        return self._name

    @property
    def filepath(self):
        """Path of the file that defined the entry, if any"""
        return self._filepath

    def __repr__(self):
        return 'EquationEntry({!r}, {!r})'.format(self._id, self._equation)


def parse_equation_list(path, equations, start=1, parents=()):
    """Parse a structured list of equations as obtained from a YAML file.

    Yields :class:`.EquationEntry` objects. Entries without an id are named
    by their position, counting from ``start``. ``path`` is used to resolve
    included files and can be ``None`` when nothing is included.
    ``parents`` holds the real paths of the files that include this one; an
    include of any of them is an error.
    """
    if isinstance(equations, dict):
        if 'equations' not in equations:
            raise ParseError('Expected `equations` list')
        equations = equations['equations']
    if equations is None:
        return
    if not isinstance(equations, list):
        raise ParseError('Expected list of equations, got {!r}'.format(
            type(equations).__name__))

    index = start
    for equation_def in equations:
        if isinstance(equation_def, dict) and 'include' in equation_def:
            if path is None:
                raise ParseError('Cannot include {} without a file path'.format(
                    equation_def['include']))
            include_path = os.path.join(
                os.path.dirname(path), equation_def['include'])
            for entry in parse_equation_file(
                    include_path, start=index,
                    parents=tuple(parents) + (os.path.realpath(path),)):
                index += 1
                yield entry
            continue

        if isinstance(equation_def, str):
            equation_def = {'equation': equation_def}
        elif not isinstance(equation_def, dict):
            raise ParseError('Invalid equation entry: {!r}'.format(
                equation_def))

        if 'equation' not in equation_def:
            raise ParseError('Equation entry without equation: {!r}'.format(
                equation_def))

        equation_id = equation_def.get('id')
        if equation_id is None:
            equation_id = 'eq_{}'.format(index)

        yield EquationEntry(
            str(equation_id), str(equation_def['equation']),
            name=equation_def.get('name'), filepath=path)
        index += 1


def parse_equation_file(path, start=1, parents=()):
    """Open and parse YAML equation file"""
    if os.path.realpath(path) in parents:
        raise ParseError('Recursive include of {}'.format(path))

    logger.debug('Parsing equation file {}'.format(path))
    with open(path, 'r') as f:
        try:
            equations = yaml_load(f)
        except yaml.YAMLError as e:
            raise ParseError('Unable to parse YAML in {}: {}'.format(
                path, e)) from e
    return list(parse_equation_list(
        path, equations, start=start, parents=parents))


def load_equation_file(path):
    """Return list of :class:`.EquationEntry` read from the file"""
    return parse_equation_file(path)


def equation_balance_check(entries):
    """Check balance of each equation entry.

    Yields (entry, result) pairs, where result is a
    :class:`stoik.balancecheck.EquationBalance` or ``None`` if the equation
    could not be parsed.
    """
    for entry in entries:
        try:
            result = check_equation(entry.equation)
        except StoikError:
            logger.warning(
                'Error parsing equation {}: {}'.format(
                    entry.id, entry.equation), exc_info=True)
            result = None
        yield entry, result
