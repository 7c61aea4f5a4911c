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

"""Various utilities."""

import time
from contextlib import contextmanager


def format_table(header, rows):
    """Return table drawn with box characters for terminal output.

    >>> print(format_table(['Element', 'Count'], [['H', 2]]))
    ╔═════════╦═══════╗
    ║ Element ║ Count ║
    ╠═════════╬═══════╣
    ║ H       ║ 2     ║
    ╚═════════╩═══════╝
    """
    header = [str(value) for value in header]
    rows = [[str(value) for value in row] for row in rows]
    for row in rows:
        if len(row) != len(header):
            raise ValueError('Row has {} columns, expected {}'.format(
                len(row), len(header)))

    widths = [len(value) for value in header]
    for row in rows:
        widths = [max(width, len(value)) for width, value in zip(widths, row)]

    def rule(left, middle, right):
        return (left + '═' +
                ('═' + middle + '═').join('═' * width for width in widths) +
                '═' + right)

    def line(row):
        return '║ ' + ' ║ '.join(
            value.ljust(width) for value, width in zip(row, widths)) + ' ║'

    lines = [rule('╔', '╦', '╗'), line(header), rule('╠', '╬', '╣')]
    lines.extend(line(row) for row in rows)
    lines.append(rule('╚', '╩', '╝'))
    return '\n'.join(lines)


def format_duration(seconds):
    """Format duration in seconds with a readable unit.

    >>> format_duration(0.0025)
    '2.500ms'
    """
    for unit, factor in (('s', 1.0), ('ms', 1e-3), ('µs', 1e-6)):
        if seconds >= factor:
            return '{:.3f}{}'.format(seconds / factor, unit)
    return '{:.3f}ns'.format(seconds / 1e-9)


class StageTimer(object):
    """Measure the time spent in named stages.

    >>> timer = StageTimer()
    >>> with timer.stage('parse'):
    ...     pass
    >>> list(timer.times)
    ['parse']
    """

    def __init__(self):
        self._times = {}

    @contextmanager
    def stage(self, name):
        """Context manager recording the time spent in the block"""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._times[name] = time.perf_counter() - start

    @property
    def times(self):
        """Dict of stage name to seconds in order of completion"""
        return dict(self._times)

    @property
    def total(self):
        return sum(self._times.values())
