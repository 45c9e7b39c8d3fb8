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
Decompression of GUID-defined firmware volume sections
"""

import lzma
from typing import Final, List

from pspscan.library.exceptions import DecompressionFailure
from pspscan.library.logger import logger

COMPRESSION_TYPE_NONE: Final[int] = 0
COMPRESSION_TYPE_LZMA: Final[int] = 3

COMPRESSION_TYPES: Final[List[int]] = [
    COMPRESSION_TYPE_LZMA,
    COMPRESSION_TYPE_NONE
]

# LZMA "alone" header: properties (1 byte), dictionary size (4), uncompressed size (8)
LZMA_HEADER_SIZE_OFFSET: Final[int] = 0x5
LZMA_HEADER_LENGTH: Final[int] = 0xD


class UefiCompression:
    """ UEFI Compression """

    def decompress_efi_binary(self, compressed_data: bytes, compression_type: int) -> bytes:
        """ Decompress EFI data, raises DecompressionFailure """

        if compression_type not in COMPRESSION_TYPES:
            raise DecompressionFailure(f'Unknown EFI compression type 0x{compression_type:X}')

        if compression_type == COMPRESSION_TYPE_NONE:
            return compressed_data
        return self._decompress_lzma(compressed_data)

    def _decompress_lzma(self, compressed_data: bytes) -> bytes:
        try:
            return lzma.decompress(compressed_data)
        except lzma.LZMAError as error:
            logger().log_debug(f'Cannot decompress LZMA data: {error}')

        # If lzma fails, patch the size within the header
        # https://github.com/python/cpython/issues/92018
        if len(compressed_data) < LZMA_HEADER_LENGTH:
            raise DecompressionFailure(f'LZMA data is shorter than its header (0x{len(compressed_data):X} bytes)')
        patched = compressed_data[:LZMA_HEADER_SIZE_OFFSET] + b'\xFF' * 0x8 + compressed_data[LZMA_HEADER_LENGTH:]
        try:
            return lzma.decompress(patched, format=lzma.FORMAT_ALONE)
        except lzma.LZMAError as error_fallback:
            raise DecompressionFailure(f'Cannot decompress LZMA data: {error_fallback}') from error_fallback
