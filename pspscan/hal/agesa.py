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
AGESA build identifier extraction

The identifier is either stored as plain text somewhere in the image or inside
an LZMA compressed GUID-defined section (usually the PEI volume).

usage:
    >>> result = find_agesa(rom)
    >>> result.identifiers
    ['AGESA!V9 CezannePI-FP6 1.0.0.6']
"""

import re
from collections import namedtuple
from typing import List, Optional, Tuple

from pspscan.hal.uefi_compression import COMPRESSION_TYPE_LZMA, UefiCompression
from pspscan.hal.uefi_fv import LZMA_CUSTOM_DECOMPRESS_GUID, EfiGuidDefinedSection
from pspscan.library.defines import bytestostring
from pspscan.library.exceptions import BodyOutOfBounds, NoIdentifierFound, PSPScanError
from pspscan.library.logger import logger
from pspscan.library.search import find_pattern
from pspscan.library.structs import record_size

AGESA_PATTERN = rb'AGESA![0-9A-Za-z]{0,10}\x00?[0-9A-Za-z ._\-]+'
AGESA_VOLUME_PATTERN = re.escape(LZMA_CUSTOM_DECOMPRESS_GUID.bytes_le)
# The GUID follows the 4 byte common section header
SECTION_GUID_OFFSET = 0x4


class AgesaResult(namedtuple('AgesaResult', 'identifiers failures')):
    """identifiers in image order, failures as (section offset, error) for volumes that could not be read."""
    __slots__ = ()

    def first(self) -> str:
        if not self.identifiers:
            raise NoIdentifierFound()
        return self.identifiers[0]


def render_agesa(raw: bytes) -> str:
    return bytestostring(raw.replace(b'\x00', b' '))


def find_agesa_strings(data: bytes) -> List[str]:
    return [render_agesa(raw) for (_, raw) in find_pattern(data, AGESA_PATTERN)]


def get_section_body(data: bytes, offset: int) -> bytes:
    section = EfiGuidDefinedSection.new(data, offset)
    start = offset + record_size(EfiGuidDefinedSection)
    end = start + section.get_body_size()
    if end < start or end > len(data):
        raise BodyOutOfBounds(start, end, len(data))
    logger().log_hal(f'[agesa] +{offset:08X}h {section}')
    return data[start:end]


def find_agesa_in_volume(data: bytes, offset: int) -> Optional[str]:
    """Decompresses the GUID-defined section at offset and returns its first identifier."""
    body = get_section_body(data, offset)
    decompressed = UefiCompression().decompress_efi_binary(body, COMPRESSION_TYPE_LZMA)
    identifiers = find_agesa_strings(decompressed)
    return identifiers[0] if identifiers else None


def find_agesa_volumes(data: bytes) -> AgesaResult:
    identifiers = []
    failures: List[Tuple[int, PSPScanError]] = []
    for (guid_offset, _) in find_pattern(data, AGESA_VOLUME_PATTERN):
        offset = guid_offset - SECTION_GUID_OFFSET
        try:
            identifier = find_agesa_in_volume(data, offset)
        except PSPScanError as err:
            failures.append((offset, err))
            continue
        if identifier is not None:
            identifiers.append(identifier)
    return AgesaResult(identifiers, failures)


def find_agesa(data: bytes) -> AgesaResult:
    identifiers = find_agesa_strings(data)
    if identifiers:
        return AgesaResult(identifiers, [])
    return find_agesa_volumes(data)
