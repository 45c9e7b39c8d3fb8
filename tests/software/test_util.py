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

from pspscan.library.returncode import ExitCode
from tests.software import image, util
from tests.software.image import SMU_FIRMWARE, mmio


class TestScanCommand(util.TestPSPScanUtil):

    def test_sample_image(self):
        rom = self._write_image(image.sample_image())
        self._pspscan_util(f'-nb scan {rom}')
        self.assertIn(b'[00020000] FirmwareEntryTable', self.log)
        self.assertIn(b'Location 00032000, Size 00002000 (  8 KB) // 0.56.0.16 Vermeer', self.log)
        self.assertIn(b'Location 00030000, Size 00001000 (  4 KB) // 2.0.0.0 Unknown', self.log)
        self.assertLess(self.log.index(b'00032000'), self.log.index(b'00031000'))
        self.assertLess(self.log.index(b'00031000'), self.log.index(b'00030000'))
        self.assertIn(b'WARNING: AGESA: not found', self.log)

    def test_fet_heading_with_debug(self):
        rom = self._write_image(image.sample_image())
        self._pspscan_util(f'-nb -d scan {rom}')
        self.assertEqual(self.log.count(b'[00020000] FirmwareEntryTable'), 1)
        self.assertLess(self.log.index(b'FirmwareEntryTable'), self.log.index(b'Location 00032000'))

    def test_agesa_in_report(self):
        img = image.Image()
        img.place(0, image.sample_image())
        img.place(0x38000, b'AGESA!V9\x00CezannePI-FP6 1.0.0.6\x00')
        rom = self._write_image(img.bytes())
        self._pspscan_util(f'-nb scan {rom}')
        self._assertLogValue('AGESA', r'AGESA!V9 CezannePI-FP6 1\.0\.0\.6')

    def test_failures_listed(self):
        img = image.Image()
        img.place_fet(image.FET_OFFSET, mmio(0x21000))
        img.place(0x21000, image.psp_directory([
            (SMU_FIRMWARE, 0x1000, mmio(0x30000)),
            (image.PL2_DIRECTORY, 0x400, mmio(0x22000)),
        ]))
        img.place(0x22000, b'JUNK')
        img.place(0x30000, image.entry_header((0, 0x2E, 0, 0x48)))
        rom = self._write_image(img.bytes())
        self._pspscan_util(f'-nb scan {rom}', ExitCode.FAIL)
        self.assertIn(b'0.46.0.72 Matisse', self.log)
        self.assertIn(b'ERROR: Location 00022000, Unknown PSP entry signature: JUNK', self.log)

    def test_failures_hidden(self):
        img = image.Image()
        img.place_fet(image.FET_OFFSET, mmio(0x21000))
        img.place(0x21000, b'JUNK')
        rom = self._write_image(img.bytes())
        self._pspscan_util(f'-nb scan {rom} --no-failures', ExitCode.FAIL)
        self.assertIn(b'FirmwareEntryTable', self.log)
        self.assertNotIn(b'JUNK', self.log)

    def test_combo_generation(self):
        img = image.Image()
        img.place_fet(image.FET_OFFSET, mmio(0x21000))
        img.place(0x21000, image.combo_directory([(1, 0x00A20F10, mmio(0x22000))]))
        img.place(0x22000, image.psp_directory([(SMU_FIRMWARE, 0x1000, mmio(0x30000))]))
        img.place(0x30000, image.entry_header((0, 0x40, 0, 0x12)))
        rom = self._write_image(img.bytes())
        self._pspscan_util(f'-nb scan {rom}')
        self.assertIn(b'0.64.0.18 Cezanne [Family ID 0x00A20F10]', self.log)

    def test_fet_base_option(self):
        img = image.Image(0x10000)
        img.place_fet(0x1000, mmio(0x1000))
        img.place(0x2000, image.psp_directory([(SMU_FIRMWARE, 0x1000, mmio(0x3000))]))
        img.place(0x4000, image.entry_header((0, 0x24, 0, 0x01)))
        rom = self._write_image(img.bytes())
        self._pspscan_util(f'-nb scan {rom} --fet-base 0x0')
        self.assertIn(b'Location 00004000', self.log)
        self.assertIn(b'Rome', self.log)

    def test_no_anchor(self):
        rom = self._write_image(b'\x00' * 0x1000)
        self._pspscan_util(f'-nb scan {rom}', ExitCode.ERROR)
        self.assertIn(b'Could not find FET header(s)!', self.log)
        self.assertNotIn(b'FILE:', self.log)

    def test_missing_file(self):
        self._pspscan_util('-nb scan /nonexistent/pspscan.rom', ExitCode.ERROR)
        self.assertIn(b'not found', self.log)


class TestFetCommand(util.TestPSPScanUtil):

    def test_list(self):
        rom = self._write_image(image.sample_image())
        self._pspscan_util(f'-nb fet {rom}')
        self.assertIn(b'Found 1 Firmware Entry Table(s)', self.log)
        self.assertIn(b'[00020000] PSP directory 0xFF021000 -> 0x00021000 (24505350)', self.log)

    def test_no_anchor(self):
        rom = self._write_image(b'\xFF' * 0x1000)
        self._pspscan_util(f'-nb fet {rom}', ExitCode.ERROR)


class TestAgesaCommand(util.TestPSPScanUtil):

    def test_plaintext(self):
        rom = self._write_image(b'\x00' * 0x40 + b'AGESA!V9\x00RenoirPI-FP6 1.0.0.4\x00')
        self._pspscan_util(f'-nb agesa {rom}')
        self.assertIn(b'[+] AGESA: AGESA!V9 RenoirPI-FP6 1.0.0.4', self.log)

    def test_compressed(self):
        rom = self._write_image(b'\x00' * 0x40 + image.lzma_section(b'AGESA!V9\x00VermeerPI 1.0.0.2\x00') + b'\x00' * 0x40)
        self._pspscan_util(f'-nb agesa {rom}')
        self.assertIn(b'AGESA!V9 VermeerPI 1.0.0.2', self.log)

    def test_not_found(self):
        rom = self._write_image(b'\x00' * 0x1000)
        self._pspscan_util(f'-nb agesa {rom}', ExitCode.WARNING)
        self.assertIn(b'No AGESA identifier found', self.log)

    def test_corrupt_section_reported_once(self):
        rom = self._write_image(b'\x00' * 0x40 + image.guid_defined_section(b'\xFF' * 0x40) + b'\x00' * 0x40)
        self._pspscan_util(f'-nb agesa {rom}', ExitCode.WARNING)
        self.assertEqual(self.log.count(b'[-] Section at 0x00000040:'), 1)
        self.assertEqual(self.log.count(b'Section at 0x00000040'), 1)


if __name__ == '__main__':
    unittest.main()
