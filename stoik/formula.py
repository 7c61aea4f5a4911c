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

"""Parser and representation of chemical formulas.

A formula string is parsed in three steps. The string is split into tokens
(:func:`stoik.tokenstream.tokenize`), the tokens are assembled into a tree of
:class:`SyntaxNodes <.SyntaxNode>` (:func:`.assemble_tree`) and finally the
tree is flattened into a :class:`.Molecule` counting every atom.

>>> mol = Molecule.from_formula('Rh2(SO4)3')
>>> mol.get_count('Rh'), mol.get_count('O')
(2, 12)
"""

import enum
import logging
from collections import deque
from itertools import chain

from .tokenstream import TokenKind, tokenize
from .error import (StoikError, FormulaError, InvalidInput, InvalidToken,
                    NumberFirst, NumberOverflow, UnpairedParenthesis,
                    UnpairedBracket, EmptyMolecule, InvalidNode)

logger = logging.getLogger(__name__)

# Numbers in formulas are limited to signed 64-bit integers
MAX_NUMBER = 2**63 - 1


@enum.unique
class NodeKind(enum.Enum):
    Subcompound = 0
    Multiplier = 1
    Mole = 2
    Atom = 3
    Empty = 4


class SyntaxNode(object):
    """Node in the syntax tree of a formula.

    The kind of node determines which attributes are used:

    * ``Subcompound``: :attr:`children`, the nodes of one group in order.
    * ``Multiplier``: :attr:`node` repeated :attr:`mul` times (``O2``).
    * ``Mole``: like ``Multiplier`` but only at the root, giving the number
      of molecules (``2H2O``).
    * ``Atom``: :attr:`name` of the atom.
    * ``Empty``: nothing.

    >>> SyntaxNode.multiplier(SyntaxNode.atom('O'), 2)
    Multiplier(Atom('O'), 2)
    """

    __slots__ = ('_kind', '_children', '_node', '_mul', '_name')

    def __init__(self, kind, children=(), node=None, mul=1, name=None):
        self._kind = kind
        self._children = tuple(children)
        self._node = node
        self._mul = mul
        self._name = name

    @classmethod
    def subcompound(cls, children):
        return cls(NodeKind.Subcompound, children=children)

    @classmethod
    def multiplier(cls, node, mul):
        return cls(NodeKind.Multiplier, node=node, mul=mul)

    @classmethod
    def mole(cls, node, mul):
        return cls(NodeKind.Mole, node=node, mul=mul)

    @classmethod
    def atom(cls, name):
        return cls(NodeKind.Atom, name=name)

    @classmethod
    def empty(cls):
        return cls(NodeKind.Empty)

    @property
    def kind(self):
        return self._kind

    @property
    def children(self):
        return self._children

    @property
    def node(self):
        return self._node

    @property
    def mul(self):
        return self._mul

    @property
    def name(self):
        return self._name

    def _key(self):
        return (self._kind, self._children, self._node, self._mul, self._name)

    def __eq__(self, other):
        return isinstance(other, SyntaxNode) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        if self._kind == NodeKind.Subcompound:
            return 'Subcompound([{}])'.format(
                ', '.join(repr(child) for child in self._children))
        elif self._kind in (NodeKind.Multiplier, NodeKind.Mole):
            return '{}({!r}, {})'.format(
                self._kind.name, self._node, self._mul)
        elif self._kind == NodeKind.Atom:
            return 'Atom({!r})'.format(self._name)
        return 'Empty()'


def assemble_tree(tokens):
    """Assemble a syntax tree from an iterable of tokens.

    A number as the first token is the mole count of the whole formula and
    results in a ``Mole`` node at the root.

    >>> assemble_tree(tokenize('O2'))
    Multiplier(Atom('O'), 2)
    >>> assemble_tree(tokenize('2H2O'))
    Mole(Subcompound([Multiplier(Atom('H'), 2), Atom('O')]), 2)
    """
    tokens = iter(tokens)
    first = next(tokens, None)
    if first is None:
        raise InvalidInput('Empty token stream cannot build a valid tree')

    if first.kind == TokenKind.Number:
        _check_number(first)
        return SyntaxNode.mole(_assemble_group(tokens), first.value)
    return _assemble_group(tokens, first)


assemble = assemble_tree


def _check_number(token):
    if token.value > MAX_NUMBER:
        raise NumberOverflow(token.loc)


# Change of the (parenthesis, bracket) levels caused by each group token
_LEVEL_CHANGE = {
    TokenKind.OpenParen: (1, 0),
    TokenKind.CloseParen: (-1, 0),
    TokenKind.OpenBracket: (0, 1),
    TokenKind.CloseBracket: (0, -1),
}


class _Scope(object):
    """Group of the formula that is being assembled.

    The levels are the parenthesis and bracket levels before the opening
    token. The group is closed when the levels are back at these values. The
    first error found inside the group is kept in :attr:`error` and raised
    once the group is closed.
    """

    __slots__ = ('levels', 'opener', 'nodes', 'error')

    def __init__(self, levels=None, opener=None):
        self.levels = levels
        self.opener = opener
        self.nodes = []
        self.error = None

    def collapse(self):
        if len(self.nodes) == 0:
            return SyntaxNode.empty()
        elif len(self.nodes) == 1:
            return self.nodes[0]
        return SyntaxNode.subcompound(self.nodes)


def _assemble_group(tokens, first=None):
    """Assemble the tokens of the top-level group.

    Nested groups are kept on an explicit stack. A group is added to its
    parent as a single node when it is closed, so an error inside a group
    that is never closed is reported as the unpaired opener.
    """
    if first is not None:
        tokens = chain([first], tokens)

    root = _Scope()
    stack = [root]
    depth_at = {}
    levels = (0, 0)

    for token in tokens:
        scope = stack[-1]
        change = _LEVEL_CHANGE.get(token.kind)
        if change is not None:
            before = levels
            levels = (levels[0] + change[0], levels[1] + change[1])
            if scope.error is None and sum(change) > 0:
                depth_at[before] = len(stack)
                stack.append(_Scope(before, token.loc))
                continue

            depth = depth_at.get(levels)
            if depth is not None:
                _close_group(stack, depth_at, depth)
                continue
            elif scope.error is not None:
                continue
            elif token.kind == TokenKind.CloseParen:
                error = UnpairedParenthesis(token.loc)
            else:
                error = UnpairedBracket(token.loc)
        elif scope.error is not None:
            continue
        else:
            try:
                _add_token(scope.nodes, token)
                continue
            except FormulaError as e:
                error = e

        if scope is root:
            raise error
        scope.error = error

    if len(stack) > 1:
        raise UnpairedParenthesis(stack[1].opener)
    return root.collapse()


def _add_token(nodes, token):
    if token.kind == TokenKind.Number:
        if len(nodes) == 0:
            raise NumberFirst(token.loc)
        _check_number(token)
        nodes.append(SyntaxNode.multiplier(nodes.pop(), token.value))
    elif token.kind == TokenKind.Atom:
        nodes.append(SyntaxNode.atom(token.value))
    else:
        raise InvalidToken(token.loc)


def _close_group(stack, depth_at, depth):
    scope = stack[depth]
    if len(stack) > depth + 1 and scope.error is None:
        scope.error = UnpairedParenthesis(stack[depth + 1].opener)

    for closed in stack[depth:]:
        del depth_at[closed.levels]
    del stack[depth:]

    parent = stack[-1]
    if scope.error is None:
        parent.nodes.append(scope.collapse())
    elif parent is stack[0]:
        raise scope.error
    else:
        parent.error = scope.error


class Molecule(object):
    """Atom counts of one formula and the number of molecules (moles).

    The counts are stored without the mole count applied; use
    :meth:`get_count` and :meth:`get_map` to read counts with the mole count
    taken into account.

    >>> water = Molecule.from_formula('2 H2O')
    >>> water.get_count('H')
    4
    >>> str(water)
    '2 H2O'
    """

    def __init__(self, moles=1, values={}):
        self.moles = moles
        self._map = dict(values)

    def increase_atom(self, atom, n):
        """Increase the count of an atom by ``n``.

        The count is changed before the mole count is applied, so for a
        molecule with two moles the result of :meth:`get_count` changes by
        ``2 * n``.

        >>> oxygen = Molecule.from_formula('O3')
        >>> oxygen.increase_atom('O', -1)
        >>> oxygen.get_count('O')
        2
        """
        self._map[atom] = self._map.get(atom, 0) + n

    @classmethod
    def construct_from_tree(cls, root):
        """Construct molecule from a :class:`.SyntaxNode` tree.

        The tree is traversed with a work queue instead of recursion so that
        deeply nested formulas cannot exhaust the stack.
        """
        molecule = cls()

        if root.kind == NodeKind.Mole:
            molecule.moles = root.mul
            root = root.node
        elif root.kind == NodeKind.Empty:
            raise EmptyMolecule()

        queue = deque([(root, 1)])
        while len(queue) > 0:
            node, mul = queue.popleft()
            if node.kind == NodeKind.Subcompound:
                for child in node.children:
                    queue.append((child, mul))
            elif node.kind == NodeKind.Multiplier:
                queue.appendleft((node.node, mul * node.mul))
            elif node.kind == NodeKind.Atom:
                molecule.increase_atom(node.name, mul)
            elif node.kind == NodeKind.Empty:
                continue
            else:
                raise InvalidNode(node, molecule)

        return molecule

    @classmethod
    def from_formula(cls, formula):
        """Parse molecule from a formula string (e.g. ``Rh2(SO4)3``)"""
        logger.debug('Parsing formula {!r}'.format(formula))
        try:
            return cls.construct_from_tree(assemble_tree(tokenize(formula)))
        except StoikError as e:
            if e.formula is None:
                e.formula = formula
            raise

    def get_count(self, atom):
        """Return count of the atom including the mole count"""
        return self._map.get(atom, 0) * self.moles

    def get_map(self):
        """Return dict of atom counts including the mole count

        >>> Molecule.from_formula('2 H2O').get_map() == {'H': 4, 'O': 2}
        True
        """
        return {atom: value * self.moles
                for atom, value in self._map.items()}

    def items(self):
        """Iterate over (atom, count)-pairs without the mole count"""
        return iter(self._map.items())

    def __eq__(self, other):
        return (isinstance(other, Molecule) and
                self.moles == other.moles and self._map == other._map)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __str__(self):
        s = ''
        if self.moles != 1:
            s += '{} '.format(self.moles)
        for atom, value in sorted(self._map.items()):
            s += '{}{}'.format(atom, value if value != 1 else '')
        return s

    def __repr__(self):
        return 'Molecule(moles={}, values={!r})'.format(
            self.moles, self._map)
