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

"""Lexical tokens of chemical formulas.

A formula such as ``Rh2(SO4)3`` is split into :class:`Tokens <.Token>` by a
:class:`.TokenStream`. Every token remembers where it was found in the
formula (:class:`.TokenLocation`) so that parse errors can point at the
offending part of the input.

>>> ' '.join(str(token) for token in tokenize('Am(SUS)2[g]'))
'aAm ( aS aU aS ) #2 [ og ]'
"""

import re
import enum


@enum.unique
class TokenKind(enum.Enum):
    OpenParen = 0
    CloseParen = 1
    OpenBracket = 2
    CloseBracket = 3
    Number = 4
    Atom = 5
    Other = 6


_GROUP_KINDS = {
    '(': TokenKind.OpenParen,
    ')': TokenKind.CloseParen,
    '[': TokenKind.OpenBracket,
    ']': TokenKind.CloseBracket,
}


class TokenLocation(object):
    """Location of a token in a formula.

    The start is the 0-based offset of the first character of the token and
    the length is the number of characters in the token.

    >>> loc = TokenLocation(3, 1)
    >>> loc.start, loc.length
    (3, 1)
    """

    __slots__ = ('_start', '_length')

    def __init__(self, start=0, length=0):
        if start < 0:
            raise ValueError('Token location cannot start before the'
                             ' formula: {}'.format(start))
        self._start = start
        self._length = length

    @property
    def start(self):
        """Offset of the first character of the token"""
        return self._start

    @property
    def length(self):
        """Number of characters in the token"""
        return self._length

    @property
    def end(self):
        return self._start + self._length

    @property
    def indicator(self):
        """Line of spaces and carets pointing at the token

        >>> TokenLocation(2, 3).indicator
        '  ^^^'
        """
        return ' ' * self._start + '^' * max(1, self._length)

    def format_msg(self, formula, msg, diag):
        """Return message with the token highlighted in the formula.

        The formula is printed after ``msg``, the next line has carets under
        the token, and every line of ``diag`` follows at the same column.

        >>> print(TokenLocation(1, 1).format_msg('12345', 'numbers', 'one'))
        numbers: 12345
                  ^
                  one
        """
        pad = ' ' * (len(msg) + 2 + self._start)
        lines = ['{}: {}'.format(msg, formula),
                 pad + '^' * max(1, self._length)]
        for line in diag.splitlines():
            lines.append(pad + line)
        return '\n'.join(lines)

    def __eq__(self, other):
        return (isinstance(other, TokenLocation) and
                self._start == other._start and
                self._length == other._length)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((TokenLocation, self._start, self._length))

    def __repr__(self):
        return 'TokenLocation({}, {})'.format(self._start, self._length)


class Token(object):
    """One lexical token of a formula.

    The value is the integer for :attr:`TokenKind.Number` tokens, the text
    for :attr:`TokenKind.Atom` and :attr:`TokenKind.Other` tokens and
    ``None`` for parentheses and brackets. The location is not considered
    when comparing tokens.

    >>> Token(TokenKind.Atom, 'O', TokenLocation(0, 1)) == Token.atom('O')
    True
    """

    __slots__ = ('_kind', '_value', '_loc')

    def __init__(self, kind, value=None, loc=None):
        self._kind = kind
        self._value = value
        self._loc = loc if loc is not None else TokenLocation()

    @classmethod
    def open_paren(cls, loc=None):
        return cls(TokenKind.OpenParen, None, loc)

    @classmethod
    def close_paren(cls, loc=None):
        return cls(TokenKind.CloseParen, None, loc)

    @classmethod
    def open_bracket(cls, loc=None):
        return cls(TokenKind.OpenBracket, None, loc)

    @classmethod
    def close_bracket(cls, loc=None):
        return cls(TokenKind.CloseBracket, None, loc)

    @classmethod
    def number(cls, value, loc=None):
        return cls(TokenKind.Number, value, loc)

    @classmethod
    def atom(cls, name, loc=None):
        return cls(TokenKind.Atom, name, loc)

    @classmethod
    def other(cls, text, loc=None):
        return cls(TokenKind.Other, text, loc)

    @property
    def kind(self):
        return self._kind

    @property
    def value(self):
        return self._value

    @property
    def loc(self):
        """:class:`.TokenLocation` of the token"""
        return self._loc

    def __eq__(self, other):
        return (isinstance(other, Token) and
                self._kind == other._kind and
                self._value == other._value)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Token, self._kind, self._value))

    def __str__(self):
        if self._kind == TokenKind.Number:
            return '#{}'.format(self._value)
        elif self._kind == TokenKind.Atom:
            return 'a{}'.format(self._value)
        elif self._kind == TokenKind.Other:
            return 'o{}'.format(self._value)
        for symbol, kind in _GROUP_KINDS.items():
            if kind == self._kind:
                return symbol

    def __repr__(self):
        if self._value is None:
            return 'Token({}, {!r})'.format(self._kind.name, self._loc)
        return 'Token({}, {!r}, {!r})'.format(
            self._kind.name, self._value, self._loc)


class TokenStream(object):
    """Iterator over the tokens of a formula.

    Tokens are scanned on demand. Whitespace separates tokens but is
    otherwise ignored. The stream can only be consumed once; use
    ``list(stream)`` to keep the tokens around.

    Digits are ``0-9`` only, while atoms start at any uppercase letter
    (``Ω2`` is the atom ``Ω`` repeated twice).

    >>> stream = TokenStream('O2')
    >>> next(stream) == Token.atom('O')
    True
    >>> next(stream) == Token.number(2)
    True
    >>> next(stream, None) is None
    True
    """

    # Letter runs are split into atoms and other tokens by letter case
    _scanner = re.compile(r'''
        (\s+) |                 # whitespace
        ([()\[\]]) |            # group
        ([0-9]+) |              # number
        ([^\s0-9()\[\]]+)       # atoms and other
    ''', re.DOTALL | re.VERBOSE)

    def __init__(self, formula):
        self._formula = formula
        self._tokens = self._scan()

    @property
    def formula(self):
        return self._formula

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._tokens)

    def _scan(self):
        for match in self._scanner.finditer(self._formula):
            whitespace, group, number, text = match.groups()
            loc = TokenLocation(match.start(), match.end() - match.start())

            if whitespace is not None:
                continue
            elif group is not None:
                yield Token(_GROUP_KINDS[group], None, loc)
            elif number is not None:
                yield Token.number(int(number), loc)
            else:
                for token in _split_letters(text, match.start()):
                    yield token


def _split_letters(text, offset):
    """Split text into atoms and runs of other characters.

    An atom is an uppercase letter followed by any lowercase letters. Any
    other run continues up to the next uppercase letter.
    """
    start = 0
    while start < len(text):
        end = start + 1
        if text[start].isupper():
            while end < len(text) and text[end].islower():
                end += 1
            yield Token.atom(
                text[start:end], TokenLocation(offset + start, end - start))
        else:
            while end < len(text) and not text[end].isupper():
                end += 1
            yield Token.other(
                text[start:end], TokenLocation(offset + start, end - start))
        start = end


def tokenize(formula):
    """Return a :class:`.TokenStream` over the formula string."""
    return TokenStream(formula)
