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
Text rendering of FET scan and AGESA results
"""

from pspscan.hal.agesa import AgesaResult
from pspscan.hal.psp_directory import DirectoryEntryResult, FetScanResult
from pspscan.hal.psp_structs import UNKNOWN_ARCH
from pspscan.library.defines import BOUNDARY_1KB, BOUNDARY_1MB
from pspscan.library.logger import logger


def format_entry(result: DirectoryEntryResult) -> str:
    if not result.is_ok():
        return f'Location {result.location:08X}, {result.error}'
    header = result.header
    text = (f'Location {result.location:08X}, Size {header.packed_size:08X} ({header.packed_size // BOUNDARY_1KB:>3d} KB)'
            f' // {header.get_version()} {header.try_get_processor_arch() or UNKNOWN_ARCH}')
    if result.generation is not None:
        text += f' [{result.generation}]'
    return text


def log_image_info(name: str, size: int) -> None:
    logger().log(f' FILE: {name} ({size // BOUNDARY_1MB:d} MB)')


def log_agesa(agesa: AgesaResult) -> None:
    if not agesa.identifiers:
        logger().log_warning('AGESA: not found')
    for identifier in agesa.identifiers:
        logger().log(f'AGESA: {identifier}')
    for (offset, error) in agesa.failures:
        logger().log_hal(f'[agesa] Section at 0x{offset:08X} skipped: {error}')


def log_fet(scan: FetScanResult, show_failures: bool = True) -> None:
    logger().log('')
    logger().log_heading(f'[{scan.address:08X}] FirmwareEntryTable')
    for result in scan.entries:
        if result.is_ok():
            logger().log(f'   {format_entry(result)}')
        elif show_failures:
            logger().log_error(f'{format_entry(result)}')
