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
AMD PSP directory tree traversal

Every Firmware Entry Table (FET) points at a root directory. Combo directories
(2PSP/2BHD) select between nested directories, PSP directories ($PSP/$PL2) list
firmware entries and may point at further levels. Each reachable firmware entry
header is reported once, failures are kept as per-location results.

usage:
    >>> for address, fet in find_fet_headers(rom):
    >>>     entries = parse_directories(rom, fet.psp, address - FET_BASE_ADDRESS)
"""

from collections import namedtuple
from typing import AbstractSet, Iterable, Iterator, List, Optional, Tuple

from pspscan.hal.psp_structs import (COMBO_DIRECTORY_SIGNATURES, PSP_DIRECTORY_SIGNATURES, PSP_DIRECTORY_ENTRY_KINDS,
                                     PSP_FIRMWARE_ENTRY_KINDS, ComboDirectory, FirmwareEntryTable, Generation,
                                     PspDirectory, PspDirectoryEntry, PspEntryHeader)
from pspscan.library.defines import MASK_24b
from pspscan.library.exceptions import (CycleDetected, DirectoryTooDeep, NoAnchorFound, PSPScanError, TruncatedData,
                                        UnknownSignature)
from pspscan.library.search import find_pattern
from pspscan.library.structs import decode_record

FET_PATTERN = rb'\xFF{16}(\xAA\x55\xAA\x55.{76})\xFF{16}'
# Offset of the FET relative to the start of the BIOS region
FET_BASE_ADDRESS = 0x20000
MAX_DIRECTORY_DEPTH = 32
SIGNATURE_SIZE = 4


class DirectoryEntryResult(namedtuple('DirectoryEntryResult', 'location header error generation')):
    """A firmware entry header found at location, or the error that prevented decoding it."""
    __slots__ = ()

    def is_ok(self) -> bool:
        return self.error is None


class FetScanResult(namedtuple('FetScanResult', 'address fet entries')):
    __slots__ = ()


def resolve_location(location: int, offset: int) -> int:
    """Directory pointers are stored memory mapped, only the low 24 bits are an offset into the image."""
    return (location & MASK_24b) + offset


def _error(location: int, error: PSPScanError, generation: Optional[Generation]) -> Iterator[DirectoryEntryResult]:
    yield DirectoryEntryResult(location, None, error, generation)


def parse_combo_directory(data: bytes, address: int, offset: int, generation: Optional[Generation], visited: AbstractSet[int]) -> Iterator[DirectoryEntryResult]:
    try:
        directory = ComboDirectory.new(data, address)
    except PSPScanError as err:
        yield from _error(address, err, generation)
        return
    for entry in directory.entries:
        yield from parse_directory(data, entry.location, offset, entry.get_generation(), visited)


def parse_psp_entry(data: bytes, entry: PspDirectoryEntry, offset: int, generation: Optional[Generation], visited: AbstractSet[int]) -> Iterator[DirectoryEntryResult]:
    if entry.kind in PSP_DIRECTORY_ENTRY_KINDS:
        yield from parse_directory(data, entry.location, offset, generation, visited)
    elif entry.kind in PSP_FIRMWARE_ENTRY_KINDS:
        location = resolve_location(entry.location, offset)
        try:
            header = PspEntryHeader.new(data, location)
        except PSPScanError as err:
            yield from _error(location, err, generation)
            return
        yield DirectoryEntryResult(location, header, None, generation)


def parse_psp_directory(data: bytes, address: int, offset: int, generation: Optional[Generation], visited: AbstractSet[int]) -> Iterator[DirectoryEntryResult]:
    try:
        directory = PspDirectory.new(data, address)
    except PSPScanError as err:
        yield from _error(address, err, generation)
        return
    for entry in directory.entries:
        yield from parse_psp_entry(data, entry, offset, generation, visited)


def parse_directory(data: bytes, address: int, offset: int, generation: Optional[Generation] = None, visited: AbstractSet[int] = frozenset()) -> Iterator[DirectoryEntryResult]:
    """
    Walks the directory at the raw location address.

    visited holds the absolute addresses of the directories on the current path,
    a directory pointing back at one of them is reported instead of followed.
    """
    address = resolve_location(address, offset)
    if address in visited:
        yield from _error(address, CycleDetected(address), generation)
        return
    if len(visited) >= MAX_DIRECTORY_DEPTH:
        yield from _error(address, DirectoryTooDeep(address, MAX_DIRECTORY_DEPTH), generation)
        return
    signature = data[address:address + SIGNATURE_SIZE] if address >= 0 else b''
    if len(signature) != SIGNATURE_SIZE:
        yield from _error(address, TruncatedData('directory signature', address, SIGNATURE_SIZE, len(data) - address), generation)
        return

    visited = visited | {address}
    if signature in COMBO_DIRECTORY_SIGNATURES:
        yield from parse_combo_directory(data, address, offset, generation, visited)
    elif signature in PSP_DIRECTORY_SIGNATURES:
        yield from parse_psp_directory(data, address, offset, generation, visited)
    else:
        yield from _error(address, UnknownSignature(signature), generation)


def _presentation_key(result: DirectoryEntryResult) -> Tuple:
    if result.is_ok():
        return (0, result.header.get_version(), result.location)
    return (1, result.location)


def reconcile_entries(results: Iterable[DirectoryEntryResult]) -> List[DirectoryEntryResult]:
    """
    Keeps the first result per location, then orders decoded headers by
    version and location, followed by the failures in location order.
    """
    unique = []
    for result in sorted(results, key=lambda r: r.location):
        if unique and unique[-1].location == result.location:
            continue
        unique.append(result)
    unique.sort(key=_presentation_key)
    return unique


def parse_directories(data: bytes, address: int, offset: int) -> List[DirectoryEntryResult]:
    return reconcile_entries(parse_directory(data, address, offset))


def find_fet_headers(data: bytes) -> List[Tuple[int, FirmwareEntryTable]]:
    """Returns (offset, table) for every FET in the image, raises NoAnchorFound if there is none."""
    found = find_pattern(data, FET_PATTERN)
    if not found:
        raise NoAnchorFound()
    return [(address, decode_record(FirmwareEntryTable, table)) for (address, table) in found]


def scan_fet_directories(data: bytes, fet_base: int = FET_BASE_ADDRESS) -> List[FetScanResult]:
    return [FetScanResult(address, fet, parse_directories(data, fet.psp, address - fet_base))
            for (address, fet) in find_fet_headers(data)]
