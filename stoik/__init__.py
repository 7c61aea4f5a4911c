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

"""Stoichiometry tools for chemical formulas and equations."""

__version__ = '0.2.1'
