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
AMD PSP Firmware Entry Table, directory and firmware entry header layouts

usage:
    >>> fet = decode_record(FirmwareEntryTable, rom, fet_offset)
    >>> header = PspEntryHeader.new(rom, location)
    >>> header.get_version(), header.try_get_processor_arch()
"""

from collections import namedtuple
from typing import Dict, Optional, Tuple

from pspscan.library.structs import decode_directory, decode_record

FET_SIGNATURE = b'\xAA\x55\xAA\x55'

COMBO_DIRECTORY_SIGNATURES = (b'2PSP', b'2BHD')
PSP_DIRECTORY_SIGNATURES = (b'$PSP', b'$PL2')

# Entry kinds pointing at another $PSP/$PL2 directory
PSP_DIRECTORY_ENTRY_KINDS = (0x40, 0x70)
# Entry kinds pointing at a firmware header (SMU firmware and its secondary image)
PSP_FIRMWARE_ENTRY_KINDS = (0x08, 0x12)

COMBO_ID_SELECT_PSP_ID = 0
COMBO_ID_SELECT_FAMILY_ID = 1

PROCESSOR_ARCH: Dict[Tuple[int, int], str] = {
    (0x00, 0x38): 'Vermeer',         # Ryzen 5XXX
    (0x00, 0x2E): 'Matisse',         # Ryzen 3XXX
    (0x00, 0x2B): 'Pinnacle Ridge',  # Ryzen 2XXX
    (0x00, 0x19): 'Summit Ridge',    # Ryzen 1XXX

    (0x00, 0x40): 'Cezanne',         # Ryzen 5XXX (APU)
    (0x00, 0x37): 'Renoir',          # Ryzen 4XXX (APU)
    (0x04, 0x1E): 'Picasso',         # Ryzen 3XXX (APU)
    (0x00, 0x25): 'Raven Ridge 2',   # Ryzen 2XXX (APU refresh)
    (0x00, 0x1E): 'Raven Ridge',     # Ryzen 2XXX (APU)

    (0x04, 0x24): 'Castle Peak',     # Threadripper 3XXX
    (0x04, 0x2B): 'Colfax',          # Threadripper 2XXX
    (0x04, 0x19): 'Whitehaven',      # Threadripper 1XXX, also Naples (EPYC 7001)

    (0x00, 0x24): 'Rome',            # EPYC 7002
    (0x00, 0x2D): 'Milan',           # EPYC 7003
}
UNKNOWN_ARCH = 'Unknown'


class Version(namedtuple('Version', 'major minor micro build')):
    """Firmware version, ordered with major as the most significant byte."""
    __slots__ = ()

    @classmethod
    def from_bytes(cls, raw: bytes) -> 'Version':
        # stored least significant byte first: build, micro, minor, major
        return cls(raw[3], raw[2], raw[1], raw[0])

    def is_zero(self) -> bool:
        return not any(self)

    def hex(self) -> str:
        return f'{self.major:02X}.{self.minor:02X}.{self.micro:02X}.{self.build:02X}'

    def __str__(self) -> str:
        return f'{self.major:d}.{self.minor:d}.{self.micro:d}.{self.build:d}'


class Generation(namedtuple('Generation', 'id_select id')):
    """Combo directory selector that led to a directory."""
    __slots__ = ()

    def __str__(self) -> str:
        if self.id_select == COMBO_ID_SELECT_PSP_ID:
            return f'PSP ID 0x{self.id:08X}'
        if self.id_select == COMBO_ID_SELECT_FAMILY_ID:
            return f'Family ID 0x{self.id:08X}'
        return f'ID 0x{self.id:08X} (select {self.id_select:d})'


class FirmwareEntryTable(namedtuple('FirmwareEntryTable', 'signature rsvd_04 psp')):
    __slots__ = ()
    FORMAT = '<4s16sI'

    def __str__(self) -> str:
        return f"""
Firmware Entry Table
--------------------------------
Signature           : {self.signature.hex().upper()}
PSP Directory       : 0x{self.psp:08X}
"""


class DirectoryHeader(namedtuple('DirectoryHeader', 'signature checksum entries rsvd_0c')):
    __slots__ = ()
    FORMAT = '<4s4sI4s'


class ComboDirectoryHeader(namedtuple('ComboDirectoryHeader', 'signature checksum entries look_up_mode rsvd_10')):
    __slots__ = ()
    FORMAT = '<4s4sII16s'


class PspDirectoryEntry(namedtuple('PspDirectoryEntry', 'kind sub_program rom_id rsvd_03 size location')):
    __slots__ = ()
    FORMAT = '<BBBBIQ'


class ComboDirectoryEntry(namedtuple('ComboDirectoryEntry', 'id_select id location')):
    __slots__ = ()
    FORMAT = '<IIQ'

    def get_generation(self) -> Generation:
        return Generation(self.id_select, self.id)


class PspEntryHeader(namedtuple('PspEntryHeader', 'rsvd_0 signature rsvd_14 version rsvd_64 packed_size rsvd_70')):
    __slots__ = ()
    FORMAT = '<16s4s76s4s8sI144s'

    @classmethod
    def new(cls, data: bytes, location: int) -> 'PspEntryHeader':
        return decode_record(cls, data, location)

    def get_packed_version(self) -> Version:
        return Version.from_bytes(self.version)

    def get_version(self) -> Version:
        version = self.get_packed_version()
        if version.is_zero():
            return Version.from_bytes(self.rsvd_0[:4])
        return version

    def try_get_processor_arch(self) -> Optional[str]:
        version = self.get_version()
        return PROCESSOR_ARCH.get((version.major, version.minor))

    def __str__(self) -> str:
        return f"""
PSP Entry Header
--------------------------------
Signature           : {self.signature.hex().upper()}
Version             : {self.get_version()}
Packed Size         : 0x{self.packed_size:08X}
Processor           : {self.try_get_processor_arch() or UNKNOWN_ARCH}
"""


class Directory(namedtuple('Directory', 'address header entries')):
    __slots__ = ()


class PspDirectory(Directory):
    __slots__ = ()

    @classmethod
    def new(cls, data: bytes, address: int) -> 'PspDirectory':
        return cls(address, *decode_directory(DirectoryHeader, PspDirectoryEntry, data, address))


class ComboDirectory(Directory):
    __slots__ = ()

    @classmethod
    def new(cls, data: bytes, address: int) -> 'ComboDirectory':
        return cls(address, *decode_directory(ComboDirectoryHeader, ComboDirectoryEntry, data, address))
