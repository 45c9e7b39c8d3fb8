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
from pspscan.library.file import get_main_dir

BOUNDARY_1KB = 0x400
BOUNDARY_1MB = 0x100000

MASK_24b = 0xFFFFFF


def bytestostring(mbytes: bytes) -> str:
    return mbytes.decode("latin_1")


def get_version() -> str:
    version_file = os.path.join(get_main_dir(), "pspscan", "VERSION")
    with open(version_file, "r") as verFile:
        return verFile.read().strip()
