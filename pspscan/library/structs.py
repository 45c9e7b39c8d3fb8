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
Fixed-layout binary record decoding

Record types are namedtuple classes carrying a ``FORMAT`` struct string.

usage:
    >>> decode_record(DirectoryHeader, rom, 0x1000)
    >>> decode_directory(DirectoryHeader, PspDirectoryEntry, rom, 0x1000)
"""

import struct
from typing import List, Tuple, Type, TypeVar

from pspscan.library.exceptions import TruncatedData

R = TypeVar('R')
H = TypeVar('H')
E = TypeVar('E')


def record_size(record_type: Type) -> int:
    return struct.calcsize(record_type.FORMAT)


def decode_record(record_type: Type[R], data: bytes, offset: int = 0) -> R:
    """Decodes exactly one record at offset or raises TruncatedData."""
    size = record_size(record_type)
    available = len(data) - offset
    if offset < 0 or available < size:
        raise TruncatedData(record_type.__name__, offset, size, available)
    return record_type._make(struct.unpack_from(record_type.FORMAT, data, offset))


def decode_array(entry_type: Type[E], data: bytes, offset: int, count: int) -> List[E]:
    """Decodes count consecutive records; chunks that do not decode are dropped."""
    size = record_size(entry_type)
    needed = count * size
    available = len(data) - offset
    if offset < 0 or available < needed:
        raise TruncatedData(f'{count:d} x {entry_type.__name__}', offset, needed, available)
    entries = []
    for off in range(offset, offset + needed, size):
        chunk = data[off:off + size]
        if len(chunk) != size:
            continue
        try:
            entries.append(entry_type._make(struct.unpack(entry_type.FORMAT, chunk)))
        except (struct.error, ValueError):
            continue
    return entries


def decode_directory(header_type: Type[H], entry_type: Type[E], data: bytes, address: int) -> Tuple[H, List[E]]:
    """Decodes a header followed by the array of header.entries records."""
    header = decode_record(header_type, data, address)
    entries = decode_array(entry_type, data, address + record_size(header_type), header.entries)
    return (header, entries)
