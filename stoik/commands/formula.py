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

import sys
import logging

from ..command import Command, FormulaParserMixin
from ..error import StoikError, format_error
from ..util import format_table

logger = logging.getLogger(__name__)


class FormulaCommand(FormulaParserMixin, Command):
    """Print the atoms contained in chemical formulas.

    Every formula is parsed and the number of each atom is printed,
    taking the mole count of the formula into account. Formulas that
    cannot be parsed are reported and skipped.
    """

    @classmethod
    def init_parser(cls, parser):
        parser.add_argument(
            'formula', nargs='+', help='Formula to parse')
        super(FormulaCommand, cls).init_parser(parser)

    def run(self):
        """Run formula command"""
        failed = 0
        for formula in self._args.formula:
            try:
                molecule = self._parse_formula(formula)
            except StoikError as e:
                failed += 1
                print(format_error(e, formula), file=sys.stderr)
                logger.debug(
                    'Unable to parse {}'.format(formula), exc_info=True)
                continue

            print('{} contains:'.format(formula))
            rows = sorted(molecule.get_map().items())
            print(format_table(['Element', 'Count'], rows))

        self._print_time_summary()

        if failed > 0:
            self.fail('Unable to parse formulas: {}/{}'.format(
                failed, len(self._args.formula)))
