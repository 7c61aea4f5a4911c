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

"""Errors raised while parsing formulas and checking equations.

Errors that can be traced back to a part of the formula carry a
:class:`stoik.tokenstream.TokenLocation`, which :func:`format_error` uses to
point at the offending characters.
"""


class StoikError(Exception):
    """Base class of errors raised by Stoik.

    When the error was raised while parsing a formula string, the string is
    available as :attr:`formula`.
    """

    formula = None


class InvalidInput(StoikError):
    """Input is invalid as a whole (e.g. an empty formula)."""


class FormulaError(StoikError):
    """Error located at a token of a formula."""

    diagnostic = 'Malformed formula'

    def __init__(self, location, *args):
        if len(args) == 0:
            args = (self.diagnostic,)
        super(FormulaError, self).__init__(*args)
        self._location = location

    @property
    def location(self):
        """:class:`stoik.tokenstream.TokenLocation` of the error"""
        return self._location

    @property
    def indicator(self):
        return self._location.indicator


class InvalidToken(FormulaError):
    """Token that cannot be part of a formula."""

    diagnostic = 'Illegal token'


class NumberFirst(FormulaError):
    """Number with nothing in front of it to multiply.

    ``2H2O`` is legal because the leading number is the mole count but in
    ``Cr2(5SO4)3`` the ``5`` has nothing to attach to.
    """

    diagnostic = 'Compound groups cannot start with numbers'


class UnpairedParenthesis(FormulaError):
    diagnostic = 'Unpaired parenthesis'


class UnpairedBracket(FormulaError):
    diagnostic = 'Unpaired bracket'


class NumberOverflow(FormulaError):
    """Number does not fit in a signed 64-bit integer."""

    diagnostic = 'Number is too large'


class EmptyMolecule(StoikError):
    """Molecule without any atoms was requested."""

    def __init__(self, *args):
        if len(args) == 0:
            args = ('Cannot have an empty molecule',)
        super(EmptyMolecule, self).__init__(*args)


class InvalidNode(StoikError):
    """Syntax node was found where it is not allowed.

    This signals a malformed syntax tree rather than a malformed formula.
    The molecule built up to the point of failure is kept for inspection.
    """

    def __init__(self, node, molecule):
        super(InvalidNode, self).__init__(
            'Invalid syntax node {!r}. Molecule: {}'.format(node, molecule))
        self._node = node
        self._molecule = molecule

    @property
    def node(self):
        return self._node

    @property
    def molecule(self):
        return self._molecule


def format_error(error, formula=None, msg='Malformed formula'):
    """Return a printable message for an error raised for the formula.

    Located errors show the formula with the offending token marked. The
    formula defaults to the one recorded on the error.
    """
    if formula is None:
        formula = error.formula
    if isinstance(error, FormulaError) and formula is not None:
        return error.location.format_msg(formula, msg, error.diagnostic)
    return str(error)
