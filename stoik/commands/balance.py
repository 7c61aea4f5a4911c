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

import logging

from ..command import Command, FormulaParserMixin
from ..equation import parse_equation
from ..balancecheck import equation_balance
from ..error import StoikError, format_error
from ..util import format_table

logger = logging.getLogger(__name__)


class BalanceCommand(FormulaParserMixin, Command):
    """Check whether a chemical equation is balanced.

    The equation is given as formulas separated by ``+`` with ``->`` or
    ``=>`` between reactants and products, e.g. ``2H2 + O2 -> 2H2O``.
    Atoms with different counts on the two sides are printed in a table.
    """

    @classmethod
    def init_parser(cls, parser):
        parser.add_argument(
            'equation', nargs='+', help='Equation to check')
        parser.add_argument(
            '-a', '--all-atoms', action='store_true',
            help='Print the counts of all atoms, not only unbalanced ones')
        super(BalanceCommand, cls).init_parser(parser)

    def run(self):
        """Run balance command"""
        equation_str = ' '.join(self._args.equation).strip()

        try:
            equation = parse_equation(equation_str)
        except StoikError as e:
            self.fail(str(e), e)

        sides = []
        for formulas in (equation.reactants, equation.products):
            side = []
            for formula in formulas:
                try:
                    side.append((self._parse_formula(formula), formula))
                except StoikError as e:
                    self.fail(
                        'Unable to parse formula {}'.format(formula), e,
                        diagnostic=format_error(e, formula))
            sides.append(side)

        result = equation_balance(*sides)
        if result.balanced:
            print('`{}` is balanced'.format(equation_str))
        else:
            print('`{}` is not balanced'.format(equation_str))

        all_atoms = self._args.all_atoms
        if not result.balanced or all_atoms:
            rows = [
                [row.atom, row.reactants, row.products,
                 'true' if row.balanced else 'false']
                for row in result.atoms(all_atoms=all_atoms)]
            print(format_table(
                ['Element', 'Reactants', 'Products', 'Balanced'], rows))

        self._print_time_summary()
