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


# ================================================
# PSPSCAN common
# ================================================

class PSPScanError(RuntimeError):
    pass


class PSPScanConfigError(PSPScanError):
    pass


# Struct decoding
class TruncatedData(PSPScanError):
    """Requested byte range extends past the end of the buffer."""

    def __init__(self, what: str, offset: int, needed: int, available: int) -> None:
        super().__init__(f'Could not fetch {what} at 0x{offset:08X}: need 0x{needed:X} bytes, 0x{max(available, 0):X} available')
        self.what = what
        self.offset = offset
        self.needed = needed
        self.available = available


# Directory traversal
class UnknownSignature(PSPScanError):
    def __init__(self, signature: bytes) -> None:
        try:
            text = signature.decode('utf-8')
        except UnicodeDecodeError:
            text = '<invalid>'
        super().__init__(f'Unknown PSP entry signature: {text} (0x{int.from_bytes(signature, "big"):08X})')
        self.signature = signature


class CycleDetected(PSPScanError):
    def __init__(self, address: int) -> None:
        super().__init__(f'Directory at 0x{address:08X} is already being parsed (cycle)')
        self.address = address


class DirectoryTooDeep(PSPScanError):
    def __init__(self, address: int, depth: int) -> None:
        super().__init__(f'Directory at 0x{address:08X} is nested more than {depth:d} levels deep')
        self.address = address
        self.depth = depth


class NoAnchorFound(PSPScanError):
    def __init__(self) -> None:
        super().__init__('Could not find FET header(s)!')


# AGESA extraction
class BodyOutOfBounds(PSPScanError):
    def __init__(self, offset: int, end: int, size: int) -> None:
        super().__init__(f'Section body 0x{offset:08X}-0x{end:08X} exceeds image size 0x{size:08X}')
        self.offset = offset
        self.end = end
        self.size = size


class DecompressionFailure(PSPScanError):
    pass


class NoIdentifierFound(PSPScanError):
    def __init__(self) -> None:
        super().__init__('No AGESA identifier found')
