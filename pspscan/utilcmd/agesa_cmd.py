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
>>> pspscan_util agesa <rom>

Examples:

>>> pspscan_util agesa E7B93AMS.1E0
"""

from argparse import ArgumentParser

from pspscan.command import BaseCommand
from pspscan.hal.agesa import find_agesa
from pspscan.library.exceptions import NoIdentifierFound
from pspscan.library.file import read_file
from pspscan.library.returncode import ExitCode


class AgesaCommand(BaseCommand):

    def parse_arguments(self) -> None:
        parser = ArgumentParser(prog='pspscan_util agesa', usage=__doc__)
        parser.add_argument('rom_file', type=str, help='Firmware image file name')
        parser.set_defaults(func=self.agesa)
        parser.parse_args(self.argv, namespace=self)

    def agesa(self) -> None:
        rom = read_file(self.rom_file)
        if not rom:
            self.ExitCode = ExitCode.ERROR
            return

        result = find_agesa(rom)
        for (offset, error) in result.failures:
            self.logger.log_bad(f'Section at 0x{offset:08X}: {error}')
        try:
            result.first()
        except NoIdentifierFound as err:
            self.logger.log_warning(str(err))
            self.ExitCode = ExitCode.WARNING
            return
        for identifier in result.identifiers:
            self.logger.log_good(f'AGESA: {identifier}')


commands = {'agesa': AgesaCommand}
