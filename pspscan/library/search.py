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
Raw pattern search over a firmware image

usage:
    >>> find_pattern(rom, rb'\xFF{16}(\xAA\x55\xAA\x55.{76})\xFF{16}')
"""

import re
from functools import lru_cache
from typing import List, Tuple, Union


@lru_cache(maxsize=32)
def _compile(pattern: bytes) -> re.Pattern:
    return re.compile(pattern, re.DOTALL)


def find_pattern(data: bytes, pattern: Union[bytes, re.Pattern]) -> List[Tuple[int, bytes]]:
    """
    Returns (offset, bytes) for every non-overlapping match of pattern in data.

    When the pattern has capture groups, the first group that participated in
    the match is reported instead of the whole match.
    """
    regex = pattern if isinstance(pattern, re.Pattern) else _compile(pattern)
    found = []
    for match in regex.finditer(data):
        group = 0
        for idx in range(1, (regex.groups or 0) + 1):
            if match.start(idx) != -1:
                group = idx
                break
        found.append((match.start(group), match.group(group)))
    return found
