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
UEFI Firmware Volume section definitions used to locate compressed AGESA volumes
"""

from collections import namedtuple
from uuid import UUID

from pspscan.library.structs import decode_record, record_size

LZMA_CUSTOM_DECOMPRESS_GUID = UUID("EE4E5898-3914-4259-9D6E-DC7BD79403CF")


def get_3b_size(s_data: bytes) -> int:
    return s_data[0] | (s_data[1] << 8) | (s_data[2] << 16)


class EfiGuidDefinedSection(namedtuple('EfiGuidDefinedSection', 'size type guid data_offset attributes')):
    """EFI_COMMON_SECTION_HEADER followed by the GUID-defined section fields."""
    __slots__ = ()
    FORMAT = '<3sB16sHH'

    @classmethod
    def new(cls, data: bytes, offset: int) -> 'EfiGuidDefinedSection':
        return decode_record(cls, data, offset)

    @property
    def section_guid(self) -> UUID:
        return UUID(bytes_le=self.guid)

    def get_full_size(self) -> int:
        return get_3b_size(self.size)

    def get_body_size(self) -> int:
        return self.get_full_size() - record_size(EfiGuidDefinedSection)

    def __str__(self) -> str:
        return f'GUID-defined section {{{self.section_guid}}}: Type {self.type:02X}h, Size {self.get_full_size():06X}h, DataOffset {self.data_offset:04X}h, Attr {self.attributes:04X}h'
