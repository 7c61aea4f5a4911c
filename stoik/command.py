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

"""Command line interface.

Each command in the command line interface is implemented as a subclass of
:class:`Command`. Commands are also referenced from ``setup.py`` using the
entry point mechanism which allows the commands to be automatically
discovered.

The :func:`.main` function is the entry point of command line interface.
"""

import os
import sys
import argparse
import logging
import abc
from importlib.metadata import entry_points

from . import __version__ as package_version
from .tokenstream import tokenize
from .formula import assemble_tree, Molecule
from .error import StoikError
from . import util

logger = logging.getLogger(__name__)


class Command(metaclass=abc.ABCMeta):
    """Base class of the commands of the interface.

    Subclasses implement :meth:`run` and can add arguments to the parser in
    :meth:`init_parser`. The parsed arguments are given to the constructor.
    The first paragraph of the doc string is the help text of the command.
    """

    def __init__(self, args):
        self._args = args

    @classmethod
    def init_parser(cls, parser):
        """Initialize command line parser (:class:`argparse.ArgumentParser`)"""

    @abc.abstractmethod
    def run(self):
        """Execute command"""

    def fail(self, msg, exc=None, diagnostic=None):
        """Exit command as a result of a failure.

        A diagnostic, such as a formula with the error marked below it, is
        written to stderr as is before the failure is logged.
        """
        if diagnostic is not None:
            print(diagnostic, file=sys.stderr)
        logger.error(msg)
        if exc is not None:
            logger.debug('Command failure caused by exception!', exc_info=exc)
        sys.exit(1)


class FormulaParserMixin(object):
    """Mixin for commands that parse formulas.

    This adds a ``--time`` parameter to the command. When given, the time
    spent in each parsing stage is recorded for every formula parsed with
    :meth:`_parse_formula` and can be printed with
    :meth:`_print_time_summary`.
    """

    _time_stages = ('Tokenise', 'Tree building', 'Parsing')

    @classmethod
    def init_parser(cls, parser):
        parser.add_argument(
            '-t', '--time', action='store_true',
            help='Print the time spent parsing each formula')
        super(FormulaParserMixin, cls).init_parser(parser)

    def __init__(self, *args, **kwargs):
        super(FormulaParserMixin, self).__init__(*args, **kwargs)
        self._time_rows = []

    def _parse_formula(self, formula):
        """Return :class:`stoik.formula.Molecule` parsed from formula"""
        if not self._args.time:
            return Molecule.from_formula(formula)

        timer = util.StageTimer()
        try:
            with timer.stage('Tokenise'):
                tokens = list(tokenize(formula))
            with timer.stage('Tree building'):
                root = assemble_tree(tokens)
            with timer.stage('Parsing'):
                molecule = Molecule.construct_from_tree(root)
        except StoikError as e:
            if e.formula is None:
                e.formula = formula
            raise

        times = timer.times
        self._time_rows.append(
            [formula] +
            [util.format_duration(times[stage])
             for stage in self._time_stages] +
            [util.format_duration(timer.total)])
        return molecule

    def _print_time_summary(self):
        if not self._args.time:
            return

        print()
        print('Time summary')
        print(util.format_table(
            ('Formula',) + self._time_stages + ('Total',), self._time_rows))


class FilePrefixAppendAction(argparse.Action):
    """Append an argument, or every line of a file given as ``@path``."""

    def __init__(self, option_strings, dest, nargs=None, **kwargs):
        if nargs is not None:
            raise ValueError('nargs not allowed')
        super(FilePrefixAppendAction, self).__init__(
            option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        arguments = list(getattr(namespace, self.dest) or [])
        if not values.startswith('@'):
            arguments.append(values)
        else:
            try:
                with open(values[1:], 'r') as f:
                    arguments.extend(line.strip() for line in f
                                     if line.strip() != '')
            except IOError:
                parser.error('Unable to read arguments from file: {}'.format(
                    values[1:]))
        setattr(namespace, self.dest, arguments)


def _setup_logging():
    if 'STOIK_DEBUG' in os.environ:
        level = getattr(logging, os.environ['STOIK_DEBUG'].upper(), None)
        if level is not None:
            logging.basicConfig(level=level)
    else:
        logging.basicConfig(level=logging.INFO)
        base_logger = logging.getLogger('stoik')
        if len(base_logger.handlers) == 0:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter('%(levelname)s: %(message)s'))
            base_logger.addHandler(handler)
            base_logger.propagate = False


def _discover_commands():
    commands = {}
    for entry in entry_points(group='stoik.commands'):
        canonical = entry.name.lower()
        if canonical not in commands:
            commands[canonical] = entry.load()
        else:
            logger.warning('Command {} was found more than once!'.format(
                canonical))
    return commands


def main(command_class=None, args=None):
    """Run the command line interface with the given :class:`Command`.

    If no command class is specified the user will be able to select a specific
    command through the first command line argument. If the ``args`` are
    provided, these should be a list of strings that will be used instead of
    ``sys.argv[1]``. This is mostly useful for testing.
    """
    _setup_logging()

    title = 'Stoichiometry tools'
    if command_class is not None:
        title, _, _ = command_class.__doc__.partition('\n\n')

    parser = argparse.ArgumentParser(description=title)
    parser.add_argument(
        '-V', '--version', action='version',
        version='%(prog)s ' + package_version)

    if command_class is not None:
        # Command explicitly given, only allow that command
        command_class.init_parser(parser)
        parser.set_defaults(command=command_class)
    else:
        # Create parsers for subcommands
        subparsers = parser.add_subparsers(
            title='Commands', metavar='command', required=True)
        for name, command_class in sorted(_discover_commands().items()):
            title, _, _ = command_class.__doc__.partition('\n\n')
            subparser = subparsers.add_parser(
                name, help=title.rstrip('.'),
                description=command_class.__doc__)
            subparser.set_defaults(command=command_class)
            command_class.init_parser(subparser)

    parsed_args = parser.parse_args(args)

    command = parsed_args.command(parsed_args)
    command.run()


def main_balance(args=None):
    """Entry point checking the balance of a single equation."""
    from .commands.balance import BalanceCommand
    main(BalanceCommand, args)
