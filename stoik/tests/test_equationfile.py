#!/usr/bin/env python
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

import os
import shutil
import tempfile
import unittest

from stoik import equationfile
from stoik.equationfile import ParseError


class TestParseEquationList(unittest.TestCase):
    def test_parse_strings(self):
        entries = list(equationfile.parse_equation_list(
            None, ['H2 + O2 -> H2O', '2H2 + O2 -> 2H2O']))
        self.assertEqual([e.id for e in entries], ['eq_1', 'eq_2'])
        self.assertEqual(entries[1].equation, '2H2 + O2 -> 2H2O')

    def test_parse_mappings(self):
        entries = list(equationfile.parse_equation_list(None, {
            'equations': [
                {'id': 'water', 'name': 'Water formation',
                 'equation': '2H2 + O2 -> 2H2O'},
                {'equation': 'CH4 + 2O2 -> CO2 + 2H2O'}]}))
        self.assertEqual(entries[0].id, 'water')
        self.assertEqual(entries[0].name, 'Water formation')
        self.assertEqual(entries[1].id, 'eq_2')
        self.assertIsNone(entries[1].name)

    def test_parse_empty_list(self):
        self.assertEqual(
            list(equationfile.parse_equation_list(None, {'equations': None})),
            [])

    def test_parse_missing_equations_key(self):
        with self.assertRaises(ParseError):
            list(equationfile.parse_equation_list(None, {'reactions': []}))

    def test_parse_entry_without_equation(self):
        with self.assertRaises(ParseError):
            list(equationfile.parse_equation_list(None, [{'id': 'x'}]))

    def test_parse_invalid_entry(self):
        with self.assertRaises(ParseError):
            list(equationfile.parse_equation_list(None, [42]))

    def test_parse_include_without_path(self):
        with self.assertRaises(ParseError):
            list(equationfile.parse_equation_list(
                None, [{'include': 'other.yaml'}]))


class TestEquationFile(unittest.TestCase):
    def setUp(self):
        self._dir = tempfile.mkdtemp()
        self._path = os.path.join(self._dir, 'equations.yaml')
        with open(self._path, 'w') as f:
            f.write('\n'.join([
                '---',
                'equations:',
                '  - id: water',
                '    equation: 2H2 + O2 -> 2H2O',
                '  - id: bad_water',
                '    equation: H2 + O2 -> H2O',
                '  - id: malformed',
                '    equation: Cr2(5SO4)3 -> Cr2',
                '  - include: more.yaml',
            ]))
        with open(os.path.join(self._dir, 'more.yaml'), 'w') as f:
            f.write('\n'.join([
                '- CH4 + 2O2 -> CO2 + 2H2O',
            ]))

    def tearDown(self):
        shutil.rmtree(self._dir)

    def test_load_equation_file(self):
        entries = equationfile.load_equation_file(self._path)
        self.assertEqual(
            [e.id for e in entries],
            ['water', 'bad_water', 'malformed', 'eq_4'])
        self.assertEqual(entries[3].equation, 'CH4 + 2O2 -> CO2 + 2H2O')
        self.assertEqual(
            entries[3].filepath, os.path.join(self._dir, 'more.yaml'))

    def test_equation_balance_check(self):
        entries = equationfile.load_equation_file(self._path)
        d = {entry.id: result for entry, result in
             equationfile.equation_balance_check(entries)}
        self.assertTrue(d['water'].balanced)
        self.assertFalse(d['bad_water'].balanced)
        self.assertIsNone(d['malformed'])
        self.assertTrue(d['eq_4'].balanced)

    def test_load_invalid_yaml(self):
        path = os.path.join(self._dir, 'invalid.yaml')
        with open(path, 'w') as f:
            f.write('equations: [unclosed\n')
        with self.assertRaises(ParseError):
            equationfile.load_equation_file(path)

    def test_load_file_including_itself(self):
        path = os.path.join(self._dir, 'self.yaml')
        with open(path, 'w') as f:
            f.write('- H2 -> H2\n- include: self.yaml\n')
        with self.assertRaises(ParseError):
            equationfile.load_equation_file(path)

    def test_load_include_cycle(self):
        with open(os.path.join(self._dir, 'a.yaml'), 'w') as f:
            f.write('- include: b.yaml\n')
        with open(os.path.join(self._dir, 'b.yaml'), 'w') as f:
            f.write('- H2 -> H2\n- include: a.yaml\n')
        with self.assertRaises(ParseError):
            equationfile.load_equation_file(
                os.path.join(self._dir, 'a.yaml'))

    def test_load_same_file_included_twice(self):
        path = os.path.join(self._dir, 'twice.yaml')
        with open(path, 'w') as f:
            f.write('- include: more.yaml\n- include: more.yaml\n')
        entries = equationfile.load_equation_file(path)
        self.assertEqual([e.id for e in entries], ['eq_1', 'eq_2'])

    def test_balance_check_skips_deeply_nested_equation(self):
        nested = '(' * 1200 + 'H' + ')' * 1200
        entries = [
            equationfile.EquationEntry('a', '{}2 -> H'.format(nested)),
            equationfile.EquationEntry('b', 'H2 -> H2')]
        results = list(equationfile.equation_balance_check(entries))
        self.assertEqual(len(results), 2)
        self.assertFalse(results[0][1].balanced)
        self.assertTrue(results[1][1].balanced)


if __name__ == '__main__':
    unittest.main()
