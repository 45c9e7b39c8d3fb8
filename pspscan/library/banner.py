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
Banner functions
"""

import platform
import sys
from typing import Sequence

from pspscan.library.logger import logger


def pspscan_banner(arguments: Sequence[str], version: str) -> str:
    """Creates the PSPSCAN banner string"""
    args = ' '.join(arguments)
    is_python_64 = sys.maxsize > 2**32
    banner = f'''
################################################################
##                                                            ##
##  PSPSCAN: AMD PSP Firmware Inventory                       ##
##                                                            ##
################################################################
[PSPSCAN] Version  : {version}
[PSPSCAN] Arguments: {args}
[PSPSCAN] Python   : {platform.python_version()} ({'64-bit' if is_python_64 else '32-bit'})'''
    return banner


def print_banner(arguments: Sequence[str], version: str) -> None:
    logger().log(pspscan_banner(arguments, version))
