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

import os
import tempfile
import unittest

from pspscan.library.defines import bytestostring
from pspscan.library.file import read_file


class TestReadFile(unittest.TestCase):

    def test_whole_file(self):
        fileno, name = tempfile.mkstemp()
        with os.fdopen(fileno, 'wb') as rom:
            rom.write(b'\xAA\x55' * 0x800)
        try:
            self.assertEqual(read_file(name), b'\xAA\x55' * 0x800)
        finally:
            os.remove(name)

    def test_missing_file(self):
        self.assertEqual(read_file('/nonexistent/pspscan.rom'), b'')

    def test_directory(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertEqual(read_file(temp_dir), b'')


class TestDefines(unittest.TestCase):

    def test_bytestostring(self):
        self.assertEqual(bytestostring(b'AGESA!V9 RenoirPI-FP6'), 'AGESA!V9 RenoirPI-FP6')
        self.assertEqual(bytestostring(b'\xE9'), '\xE9')


if __name__ == '__main__':
    unittest.main()
