# SMBIOSVIEW: SMBIOS Structure Table Decoder
# Copyright (c) 2019-2021, Intel Corporation
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; Version 2.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

""""
To execute: python[3] -m unittest tests.hal.test_smbios
"""

import unittest
from random import Random
from unittest.mock import patch

from smbiosview.hal.smbios import (RawTableSet, SMBIOS_STRUCT_HEADER, count_structures, get_header, get_string_list,
                                   locate_structure, parse_raw_smbios_data)
from smbiosview.library.exceptions import EmptyInputError, NoStructuresError, SmbiosError, TruncatedHeaderError
from smbiosview.library.logger import LOGGER_NAME, logger
from tests.software.smbios_data import (baseboard_info, bios_info, default_table, end_of_table, raw_smbios_data,
                                        smbios_struct, system_info)


class TestCountStructures(unittest.TestCase):
    def test_count_default_table(self):
        table = default_table()
        self.assertEqual(count_structures(table, len(table)), 4)

    def test_count_end_of_table_only(self):
        table = end_of_table()
        self.assertEqual(count_structures(table, len(table)), 1)

    def test_count_random_tables(self):
        rand = Random(0x5B)
        for _ in range(200):
            struct_count = rand.randint(0, 20)
            table = b''
            for _ in range(struct_count):
                formatted = bytes(rand.randint(0, 0xFF) for _ in range(rand.randint(0, 30)))
                strings = [bytes(rand.randint(1, 0xFF) for _ in range(rand.randint(1, 12))) for _ in range(rand.randint(0, 4))]
                table += smbios_struct(rand.randint(0, 126), formatted, strings)
            table += end_of_table()
            self.assertEqual(count_structures(table, len(table)), struct_count + 1)

    def test_count_empty_region(self):
        self.assertEqual(count_structures(default_table(), 0), 0)

    def test_count_stops_at_buffer_end(self):
        table = bios_info() + system_info()[:10]
        self.assertEqual(count_structures(table, len(table) + 0x100), 2)


class TestLocateStructure(unittest.TestCase):
    def setUp(self):
        self.bios = bios_info()
        self.system = system_info()
        self.baseboard = baseboard_info()
        self.table = self.bios + self.system + self.baseboard + end_of_table()

    def test_locate_each_type(self):
        table_len = len(self.table)
        self.assertEqual(locate_structure(self.table, table_len, 4, 0), 0)
        self.assertEqual(locate_structure(self.table, table_len, 4, 1), len(self.bios))
        self.assertEqual(locate_structure(self.table, table_len, 4, 2), len(self.bios) + len(self.system))

    def test_locate_missing_type(self):
        with patch.object(logger(), 'log_warning') as log_warning:
            self.assertIsNone(locate_structure(self.table, len(self.table), 4, 17))
        log_warning.assert_not_called()

    def test_locate_end_of_table(self):
        self.assertEqual(locate_structure(self.table, len(self.table), 4, 127), len(self.table) - len(end_of_table()))

    def test_locate_first_match_wins(self):
        table = self.bios + system_info(serial=b'FIRST') + system_info(serial=b'SECOND') + end_of_table()
        self.assertEqual(locate_structure(table, len(table), 4, 1), len(self.bios))

    def test_locate_stops_at_end_of_table(self):
        table = self.bios + end_of_table() + self.system
        with patch.object(logger(), 'log_warning') as log_warning:
            self.assertIsNone(locate_structure(table, len(table), count_structures(table, len(table)), 1))
        self.assertEqual(log_warning.call_count, 2)

    def test_locate_malformed_length(self):
        table = self.bios + smbios_struct(1, length=3) + self.baseboard + end_of_table()
        count = count_structures(table, len(table))
        with self.assertLogs(LOGGER_NAME, level='WARNING') as cm:
            self.assertIsNone(locate_structure(table, len(table), count, 2))
        self.assertIn('Invalid SMBIOS structure length: 3', cm.output[0])
        self.assertEqual(locate_structure(table, len(table), count, 0), 0)

    def test_locate_count_mismatch(self):
        with patch.object(logger(), 'log_warning') as log_warning:
            self.assertIsNone(locate_structure(self.table, len(self.table), 7, 17))
        log_warning.assert_called_once()
        self.assertIn('4/7', log_warning.call_args[0][0])

    def test_locate_length_mismatch(self):
        table = self.table + b'\x00' * 8
        with patch.object(logger(), 'log_warning') as log_warning:
            self.assertIsNone(locate_structure(table, len(table), 4, 17))
        log_warning.assert_called_once()

    def test_locate_header_past_region(self):
        self.assertIsNone(locate_structure(self.table, 3, 1, 0))


class TestRawSmbiosData(unittest.TestCase):
    def test_parse_header(self):
        table = default_table()
        header = parse_raw_smbios_data(raw_smbios_data(table, 2, 8))
        self.assertEqual(header.MajorVer, 2)
        self.assertEqual(header.MinorVer, 8)
        self.assertEqual(header.Length, len(table))
        self.assertRegex(str(header), r'SMBIOS Version\s+: 2\.8')

    def test_parse_empty(self):
        with self.assertRaises(EmptyInputError):
            parse_raw_smbios_data(b'')

    def test_parse_truncated(self):
        with self.assertRaises(TruncatedHeaderError):
            parse_raw_smbios_data(b'\x00\x03\x00\x00')


class TestRawTableSet(unittest.TestCase):
    def test_create(self):
        table = default_table()
        table_set = RawTableSet.create(table, len(table), 3, 4)
        self.assertEqual(table_set.major_version(), 3)
        self.assertEqual(table_set.minor_version(), 4)
        self.assertEqual(table_set.version(), 0x0304)
        self.assertEqual(table_set.structure_count(), 4)
        self.assertEqual(table_set.table_length(), len(table))

    def test_create_from_bytearray_is_a_copy(self):
        table = bytearray(default_table())
        table_set = RawTableSet.create(table, len(table), 3, 0)
        table[0] = 0x7F
        self.assertEqual(table_set.locate(0), 0)
        self.assertIsInstance(table_set.data(), bytes)
        self.assertEqual(table_set.data(), default_table())

    def test_create_empty(self):
        with self.assertRaises(EmptyInputError):
            RawTableSet.create(b'', 0, 3, 0)
        with self.assertRaises(EmptyInputError):
            RawTableSet.create(None, 0, 3, 0)

    def test_create_no_structures(self):
        with self.assertRaises(NoStructuresError):
            RawTableSet.create(default_table(), 0, 3, 0)

    def test_errors_share_base_class(self):
        self.assertTrue(issubclass(EmptyInputError, SmbiosError))
        self.assertTrue(issubclass(NoStructuresError, SmbiosError))
        self.assertTrue(issubclass(TruncatedHeaderError, SmbiosError))

    def test_create_length_past_buffer(self):
        table = default_table()
        with patch.object(logger(), 'log_warning') as log_warning:
            table_set = RawTableSet.create(table, len(table) + 0x40, 3, 0)
        log_warning.assert_called_once()
        self.assertEqual(table_set.structure_count(), 4)

    def test_from_raw_smbios_data(self):
        table = default_table()
        table_set = RawTableSet.from_raw_smbios_data(raw_smbios_data(table, 2, 7))
        self.assertEqual((table_set.major_version(), table_set.minor_version()), (2, 7))
        self.assertEqual(table_set.structure_count(), 4)
        self.assertEqual(table_set.locate(2), len(bios_info()) + len(system_info()))

    def test_from_raw_smbios_data_header_only(self):
        with self.assertRaises(NoStructuresError):
            RawTableSet.from_raw_smbios_data(raw_smbios_data(b''))

    def test_malformed_structure_keeps_count(self):
        table = bios_info() + smbios_struct(1, length=3) + baseboard_info() + end_of_table()
        table_set = RawTableSet.create(table, len(table), 3, 0)
        count = table_set.structure_count()
        self.assertGreater(count, 0)
        with patch.object(logger(), 'log_warning'):
            self.assertEqual(table_set.locate(0), 0)
            self.assertIsNone(table_set.locate(1))
            self.assertIsNone(table_set.locate(2))
        self.assertEqual(table_set.structure_count(), count)

    def test_get_raw_structs(self):
        parts = [bios_info(), system_info(), baseboard_info(), end_of_table()]
        table = b''.join(parts)
        table_set = RawTableSet.create(table, len(table), 3, 0)
        self.assertEqual(table_set.get_raw_structs(), parts)
        self.assertEqual(table_set.get_raw_structs(1), [parts[1]])
        self.assertEqual(table_set.get_raw_structs(17), [])

    def test_get_raw_structs_duplicates(self):
        first = system_info(serial=b'FIRST')
        second = system_info(serial=b'SECOND')
        table = first + second + end_of_table()
        table_set = RawTableSet.create(table, len(table), 3, 0)
        self.assertEqual(table_set.get_raw_structs(1), [first, second])

    def test_get_raw_structs_stops_at_malformed(self):
        table = bios_info() + smbios_struct(1, length=2) + end_of_table()
        table_set = RawTableSet.create(table, len(table), 3, 0)
        with patch.object(logger(), 'log_warning') as log_warning:
            self.assertEqual(table_set.get_raw_structs(), [bios_info()])
        log_warning.assert_called_once()

    def test_get_structure_headers(self):
        table = default_table()
        table_set = RawTableSet.create(table, len(table), 3, 0)
        headers = table_set.get_structure_headers()
        self.assertEqual([header.Type for (_, header) in headers], [0, 1, 2, 127])
        self.assertEqual(headers[0], (0, SMBIOS_STRUCT_HEADER(0, 0x18, 0x0000)))


class TestStructHelpers(unittest.TestCase):
    def test_get_header(self):
        header = get_header(system_info())
        self.assertEqual(header, SMBIOS_STRUCT_HEADER(1, 0x1B, 0x0001))
        self.assertRegex(str(header), r'Handle\s+: 0x0001')

    def test_get_header_too_small(self):
        self.assertIsNone(get_header(b'\x01\x1B'))
        self.assertIsNone(get_header(None))

    def test_get_string_list(self):
        self.assertEqual(get_string_list(bios_info()), ['American Megatrends Inc.', '1.20', '05/14/2021'])

    def test_get_string_list_no_strings(self):
        self.assertEqual(get_string_list(end_of_table()), [])

    def test_get_string_list_truncated(self):
        self.assertIsNone(get_string_list(bios_info()[:0x10]))


if __name__ == '__main__':
    unittest.main()
