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

"""
>>> pspscan_util fet <rom> [--fet-base <offset>]

Examples:

>>> pspscan_util fet E7B93AMS.1E0
"""

from argparse import ArgumentParser

from pspscan.command import BaseCommand
from pspscan.hal.psp_directory import FET_BASE_ADDRESS, find_fet_headers, resolve_location
from pspscan.hal.psp_structs import FirmwareEntryTable
from pspscan.library.exceptions import NoAnchorFound
from pspscan.library.file import read_file
from pspscan.library.logger import print_buffer_bytes
from pspscan.library.options import Options
from pspscan.library.returncode import ExitCode
from pspscan.library.structs import record_size


class FETCommand(BaseCommand):

    def parse_arguments(self) -> None:
        options = Options()
        parser = ArgumentParser(prog='pspscan_util fet', usage=__doc__)
        parser.add_argument('rom_file', type=str, help='Firmware image file name')
        parser.add_argument('--fet-base', dest='fet_base', type=lambda x: int(x, 0),
                            default=options.get_int_data('Scan_Config', 'fet_base_address', FET_BASE_ADDRESS),
                            help='Offset of the FET within the BIOS region (hex)')
        parser.set_defaults(func=self.list_fet)
        parser.parse_args(self.argv, namespace=self)

    def list_fet(self) -> None:
        rom = read_file(self.rom_file)
        if not rom:
            self.ExitCode = ExitCode.ERROR
            return

        try:
            fets = find_fet_headers(rom)
        except NoAnchorFound as err:
            self.logger.log_error(str(err))
            self.ExitCode = ExitCode.ERROR
            return

        self.logger.log(f'[pspscan] Found {len(fets):d} Firmware Entry Table(s)')
        for (address, fet) in fets:
            root = resolve_location(fet.psp, address - self.fet_base)
            signature = rom[root:root + 4] if 0 <= root < len(rom) else b''
            self.logger.log(f'[{address:08X}] PSP directory 0x{fet.psp:08X} -> 0x{root:08X} ({signature.hex().upper() or "out of bounds"})')
            self.logger.log_verbose(str(fet))
            if self.logger.HAL:
                print_buffer_bytes(rom[address:address + record_size(FirmwareEntryTable)])


commands = {'fet': FETCommand}
