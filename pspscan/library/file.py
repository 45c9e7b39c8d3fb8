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
Reading firmware images from files with validation support

usage:
    >>> read_file(filename)
    >>> validate_file_exists(filename)
"""

import os
from pspscan.library.logger import logger


def read_file(filename: str) -> bytes:
    """
    Read a whole file after validating it.

    Args:
        filename: Path to file to read

    Returns:
        File contents as bytes, or empty bytes if validation fails
    """
    if not validate_file_exists(filename, "input file"):
        return b''

    try:
        with open(filename, 'rb') as f:
            _file = f.read()
            logger().log_debug(f"[file] Read {len(_file):d} bytes from '{filename:.256}'")
            return _file
    except OSError:
        logger().log_error(f"Unable to open file '{filename:.256}' for read access")
        return b''


def get_main_dir() -> str:
    path = os.path.abspath(os.path.join(os.path.dirname(__file__), os.path.pardir, os.path.pardir))
    return path


# ================================================
# File Validation Functions
# ================================================

def validate_file_exists(filepath: str, file_type: str = "file") -> bool:
    """
    Validate that a file exists and is accessible.

    Args:
        filepath: Path to the file to validate
        file_type: Description of the file type for error messages

    Returns:
        True if file exists and is readable, False otherwise
    """
    if not filepath:
        logger().log_error(f"No {file_type} path specified")
        return False
    if not os.path.exists(filepath):
        logger().log_error(f"{file_type.capitalize()} not found: '{filepath:.256}'")
        return False
    if not os.path.isfile(filepath):
        logger().log_error(f"{file_type.capitalize()} is not a regular file: '{filepath:.256}'")
        return False
    if not os.access(filepath, os.R_OK):
        logger().log_error(f"{file_type.capitalize()} is not readable: '{filepath:.256}'")
        return False
    return True
