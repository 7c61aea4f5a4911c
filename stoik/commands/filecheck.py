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

from ..command import Command, FilePrefixAppendAction
from ..equationfile import ParseError, load_equation_file, \
    equation_balance_check
from ..formula import Molecule

logger = logging.getLogger(__name__)


def _format_totals(totals):
    return str(Molecule(values=totals))


class FileCheckCommand(Command):
    """Check whether the equations in a YAML file are balanced.

    Balanced equations are those where the number of each atom is the same
    on the reactant and product side. Unbalanced equations are printed with
    the atom totals of both sides and the atoms missing on each side.
    Equations that cannot be parsed are reported and skipped.
    """

    @classmethod
    def init_parser(cls, parser):
        parser.add_argument(
            'file', help='YAML file with the list of equations')
        parser.add_argument(
            '--exclude', metavar='equation', action=FilePrefixAppendAction,
            type=str, default=[], help='Exclude equation from balance check')
        parser.add_argument(
            '--all', action='store_true', dest='print_all',
            help='Print balanced equations as well')
        super(FileCheckCommand, cls).init_parser(parser)

    def run(self):
        """Run file check command"""
        try:
            entries = load_equation_file(self._args.file)
        except (IOError, ParseError) as e:
            self.fail('Unable to load equation file {}: {}'.format(
                self._args.file, e), e)

        exclude = set(self._args.exclude)
        count = 0
        unbalanced = 0
        unchecked = 0
        for entry, result in equation_balance_check(
                entry for entry in entries if entry.id not in exclude):
            count += 1
            if result is None:
                unchecked += 1
                continue

            if result.balanced and not self._args.print_all:
                continue

            if not result.balanced:
                unbalanced += 1

            reactant_missing, product_missing = result.missing()
            print('{}\t{}\t{}\t{}\t{}'.format(
                entry.id, _format_totals(result.reactant_totals),
                _format_totals(result.product_totals),
                _format_totals(reactant_missing),
                _format_totals(product_missing)))

        excluded = len(entries) - count
        logger.info('Unbalanced equations: {}/{}'.format(unbalanced, count))
        logger.info('Unchecked equations due to parse errors: {}/{}'.format(
            unchecked, count))
        logger.info('Equations excluded from check: {}/{}'.format(
            excluded, len(entries)))
