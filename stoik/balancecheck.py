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

"""Check whether chemical equations are balanced.

An equation is balanced when every atom occurs the same number of times on
both sides. Atom counts of all molecules on one side are summed (taking the
mole counts into account) and the totals of the two sides are compared atom
by atom.
"""

import logging
from collections import Counter, namedtuple

from .formula import Molecule
from .equation import parse_equation

logger = logging.getLogger(__name__)


def _molecule(entry):
    # Entries may be (molecule, formula text)-pairs
    if isinstance(entry, tuple):
        return entry[0]
    return entry


def side_totals(molecules):
    """Return dict of total atom counts of molecules on one side.

    The molecules can be given as :class:`stoik.formula.Molecule` or as
    (molecule, formula)-pairs.

    >>> totals = side_totals([Molecule.from_formula('H2'),
    ...                       Molecule.from_formula('2 H2O')])
    >>> totals == {'H': 6, 'O': 2}
    True
    """
    totals = Counter()
    for entry in molecules:
        totals.update(_molecule(entry).get_map())
    return dict(totals)


class AtomBalance(namedtuple('AtomBalance', ['atom', 'reactants', 'products'])):
    """Total count of one atom on each side of an equation"""

    __slots__ = ()

    @property
    def balanced(self):
        return self.reactants == self.products


class EquationBalance(object):
    """Atom balance of an equation.

    The totals are computed when the object is created; create a new object
    when the molecules change.

    >>> balance = equation_balance(
    ...     [Molecule.from_formula('H2'), Molecule.from_formula('O2')],
    ...     [Molecule.from_formula('H2O')])
    >>> balance.balanced
    False
    >>> [row.atom for row in balance.atoms(all_atoms=False)]
    ['O']
    """

    def __init__(self, reactants, products):
        self._reactants = list(reactants)
        self._products = list(products)
        self._reactant_totals = side_totals(self._reactants)
        self._product_totals = side_totals(self._products)

        self._rows = []
        for atom in sorted(
                set(self._reactant_totals) | set(self._product_totals)):
            self._rows.append(AtomBalance(
                atom, self._reactant_totals.get(atom, 0),
                self._product_totals.get(atom, 0)))

    @property
    def reactants(self):
        return list(self._reactants)

    @property
    def products(self):
        return list(self._products)

    @property
    def reactant_totals(self):
        """Dict of total atom counts of the reactants"""
        return dict(self._reactant_totals)

    @property
    def product_totals(self):
        """Dict of total atom counts of the products"""
        return dict(self._product_totals)

    @property
    def balanced(self):
        """Whether every atom has the same count on both sides"""
        return all(row.balanced for row in self._rows)

    def atoms(self, all_atoms=True):
        """Return :class:`.AtomBalance` rows sorted by atom.

        Only unbalanced atoms are returned when ``all_atoms`` is ``False``.
        """
        return [row for row in self._rows if all_atoms or not row.balanced]

    def missing(self):
        """Return atoms missing on the reactant and product side.

        Returns a tuple of two dicts. The first has the atom counts that the
        reactants lack compared to the products, the second what the
        products lack compared to the reactants.
        """
        reactant_missing = {}
        product_missing = {}
        for row in self._rows:
            delta = row.products - row.reactants
            if delta > 0:
                reactant_missing[row.atom] = delta
            elif delta < 0:
                product_missing[row.atom] = -delta
        return reactant_missing, product_missing


def equation_balance(reactants, products):
    """Return :class:`.EquationBalance` of the two sides of an equation"""
    return EquationBalance(reactants, products)


def parse_side(formulas):
    """Parse formulas into a list of (molecule, formula)-pairs.

    The first formula that fails to parse raises its
    :class:`stoik.error.StoikError`.
    """
    return [(Molecule.from_formula(formula), formula) for formula in formulas]


def check_equation(s):
    """Parse equation string and return its :class:`.EquationBalance`.

    >>> check_equation('2H2 + O2 -> 2H2O').balanced
    True
    """
    equation = parse_equation(s)
    reactants = parse_side(equation.reactants)
    products = parse_side(equation.products)
    result = equation_balance(reactants, products)
    logger.debug('Equation {!r} balanced: {}'.format(s, result.balanced))
    return result
