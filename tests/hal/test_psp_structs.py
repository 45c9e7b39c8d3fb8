# PSPSCAN: AMD PSP Firmware Inventory
# Copyright (c) 2024, PSPSCAN Team
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

import unittest

from pspscan.hal.psp_structs import (ComboDirectory, ComboDirectoryEntry, FirmwareEntryTable, Generation, PspDirectory,
                                     PspEntryHeader, Version)
from pspscan.library.exceptions import TruncatedData
from pspscan.library.structs import decode_record
from tests.software import image


class TestVersion(unittest.TestCase):

    def test_from_bytes_reads_major_last(self):
        self.assertEqual(Version.from_bytes(b'\x10\x00\x38\x00'), Version(0x00, 0x38, 0x00, 0x10))

    def test_major_dominates_ordering(self):
        self.assertGreater(Version(4, 0, 0, 18), Version(3, 0, 0, 99))
        self.assertGreater(Version(0, 0x38, 0, 1), Version(0, 0x2E, 0x99, 0x99))
        self.assertLess(Version(1, 2, 3, 4), Version(1, 2, 3, 5))

    def test_rendering(self):
        version = Version(0x00, 0x38, 0x00, 0x10)
        self.assertEqual(str(version), '0.56.0.16')
        self.assertEqual(version.hex(), '00.38.00.10')

    def test_is_zero(self):
        self.assertTrue(Version(0, 0, 0, 0).is_zero())
        self.assertFalse(Version(0, 0, 0, 1).is_zero())


class TestGeneration(unittest.TestCase):

    def test_psp_id(self):
        self.assertEqual(str(Generation(0, 0xBC0A0000)), 'PSP ID 0xBC0A0000')

    def test_family_id(self):
        self.assertEqual(str(Generation(1, 0x00A20F10)), 'Family ID 0x00A20F10')

    def test_combo_entry_generation(self):
        entry = ComboDirectoryEntry(1, 0x00830F10, 0xFF001000)
        self.assertEqual(entry.get_generation(), Generation(1, 0x00830F10))


class TestPspEntryHeader(unittest.TestCase):

    def test_packed_version(self):
        header = PspEntryHeader.new(image.entry_header((0, 0x38, 0, 0x10), 0x2000, legacy=(9, 9, 9, 9)), 0)
        self.assertEqual(header.get_version(), Version(0, 0x38, 0, 0x10))
        self.assertEqual(header.packed_size, 0x2000)
        self.assertEqual(header.signature, b'$PS1')

    def test_zero_packed_version_falls_back(self):
        header = PspEntryHeader.new(image.entry_header((0, 0, 0, 0), legacy=(0, 0x2E, 0, 0x48)), 0)
        self.assertTrue(header.get_packed_version().is_zero())
        self.assertEqual(header.get_version(), Version(0, 0x2E, 0, 0x48))

    def test_processor_arch(self):
        header = PspEntryHeader.new(image.entry_header((0, 0x38, 0, 0x10)), 0)
        self.assertEqual(header.try_get_processor_arch(), 'Vermeer')
        header = PspEntryHeader.new(image.entry_header((4, 0x19, 0, 1)), 0)
        self.assertEqual(header.try_get_processor_arch(), 'Whitehaven')

    def test_unknown_processor_arch(self):
        header = PspEntryHeader.new(image.entry_header((0x7F, 0x01, 0, 0)), 0)
        self.assertIsNone(header.try_get_processor_arch())
        self.assertIn('Unknown', str(header))

    def test_truncated_header(self):
        data = image.entry_header((1, 0, 0, 0))
        with self.assertRaises(TruncatedData):
            PspEntryHeader.new(data, 1)


class TestDirectories(unittest.TestCase):

    def test_psp_directory(self):
        data = image.psp_directory([(image.SMU_FIRMWARE, 0x1000, 0xFF030000), (image.PL2_DIRECTORY, 0x400, 0xFF022000)])
        directory = PspDirectory.new(data, 0)
        self.assertEqual(directory.header.signature, b'$PSP')
        self.assertEqual(directory.header.entries, 2)
        self.assertEqual([e.kind for e in directory.entries], [0x08, 0x40])
        self.assertEqual(directory.entries[0].location, 0xFF030000)
        self.assertEqual(directory.entries[0].size, 0x1000)

    def test_combo_directory(self):
        data = image.combo_directory([(0, 0xBC0A0000, 0xFF100000)], signature=b'2BHD')
        directory = ComboDirectory.new(b'\x00' * 8 + data, 8)
        self.assertEqual(directory.address, 8)
        self.assertEqual(directory.header.signature, b'2BHD')
        self.assertEqual(directory.entries, [ComboDirectoryEntry(0, 0xBC0A0000, 0xFF100000)])

    def test_entry_count_past_end(self):
        data = image.psp_directory([(image.SMU_FIRMWARE, 0x1000, 0xFF030000)], count=0x1000)
        with self.assertRaises(TruncatedData):
            PspDirectory.new(data, 0)

    def test_fet_pointer(self):
        table = decode_record(FirmwareEntryTable, image.fet(0xFF021000), 16)
        self.assertEqual(table.signature, b'\xAA\x55\xAA\x55')
        self.assertEqual(table.psp, 0xFF021000)


if __name__ == '__main__':
    unittest.main()
