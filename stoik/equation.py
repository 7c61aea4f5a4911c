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

"""Parser of equation strings.

Equations are written as formulas separated by ``+`` with an arrow
(``->`` or ``=>``) between the reactants and the products, e.g.
``2H2 + O2 -> 2H2O``.
"""

import re

from .error import InvalidInput

ARROWS = ('->', '=>')

_ARROW_PATTERN = re.compile('|'.join(re.escape(arrow) for arrow in ARROWS))


class Equation(object):
    """Reactant and product formula strings of an equation.

    >>> eq = parse_equation('H2 + O2 -> H2O')
    >>> eq.reactants, eq.products
    (('H2', 'O2'), ('H2O',))
    """

    def __init__(self, reactants, products):
        self._reactants = tuple(reactants)
        self._products = tuple(products)

    @property
    def reactants(self):
        return self._reactants

    @property
    def products(self):
        return self._products

    @property
    def formulas(self):
        """Iterate over all formulas of the equation in order"""
        for formula in self._reactants:
            yield formula
        for formula in self._products:
            yield formula

    def __eq__(self, other):
        return (isinstance(other, Equation) and
                self._reactants == other._reactants and
                self._products == other._products)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Equation, self._reactants, self._products))

    def __str__(self):
        return '{} -> {}'.format(
            ' + '.join(self._reactants), ' + '.join(self._products))

    def __repr__(self):
        return 'Equation({!r}, {!r})'.format(
            list(self._reactants), list(self._products))


def _split_side(s):
    return [term.strip() for term in s.split('+')]


def parse_equation(s):
    """Parse equation string into an :class:`.Equation`.

    Terms are not parsed as formulas here, so an empty term (as in
    ``H2 + -> H2``) is returned as an empty string.
    """
    arrows = list(_ARROW_PATTERN.finditer(s))
    if len(arrows) == 0:
        raise InvalidInput(
            'Products are not given, please use `=>` or `->` to separate'
            ' the two sides')
    elif len(arrows) > 1:
        raise InvalidInput('More than one equation arrow: {!r}'.format(
            arrows[1].group(0)))

    arrow = arrows[0]
    left = s[:arrow.start()].strip()
    right = s[arrow.end():].strip()
    return Equation(_split_side(left), _split_side(right))
