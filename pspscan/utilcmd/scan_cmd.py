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
>>> pspscan_util scan <rom> [--fet-base <offset>] [--no-failures]

Lists every PSP firmware entry reachable from the Firmware Entry Tables of the
image together with the AGESA identifier.

Examples:

>>> pspscan_util scan E7B93AMS.1E0
>>> pspscan_util scan spi.bin --fet-base 0x0
"""

import os
from argparse import ArgumentParser

from pspscan.command import BaseCommand
from pspscan.hal.agesa import find_agesa
from pspscan.hal.psp_directory import FET_BASE_ADDRESS, scan_fet_directories
from pspscan.hal.psp_report import log_agesa, log_fet, log_image_info
from pspscan.library.exceptions import NoAnchorFound
from pspscan.library.file import read_file
from pspscan.library.options import Options
from pspscan.library.returncode import ExitCode


class ScanCommand(BaseCommand):

    def parse_arguments(self) -> None:
        options = Options()
        parser = ArgumentParser(prog='pspscan_util scan', usage=__doc__)
        parser.add_argument('rom_file', type=str, help='Firmware image file name')
        parser.add_argument('--fet-base', dest='fet_base', type=lambda x: int(x, 0),
                            default=options.get_int_data('Scan_Config', 'fet_base_address', FET_BASE_ADDRESS),
                            help='Offset of the FET within the BIOS region (hex)')
        parser.add_argument('--no-failures', dest='show_failures', action='store_false',
                            default=options.get_bool_data('Scan_Config', 'show_failures', True),
                            help='Do not list entries that could not be decoded')
        parser.set_defaults(func=self.scan)
        parser.parse_args(self.argv, namespace=self)

    def scan(self) -> None:
        rom = read_file(self.rom_file)
        if not rom:
            self.ExitCode = ExitCode.ERROR
            return

        try:
            fets = scan_fet_directories(rom, self.fet_base)
        except NoAnchorFound as err:
            self.logger.log_error(str(err))
            self.ExitCode = ExitCode.ERROR
            return

        log_image_info(os.path.basename(self.rom_file), len(rom))
        log_agesa(find_agesa(rom))
        for fet in fets:
            log_fet(fet, self.show_failures)

        if any(not entry.is_ok() for fet in fets for entry in fet.entries):
            self.ExitCode = ExitCode.FAIL


commands = {'scan': ScanCommand}
