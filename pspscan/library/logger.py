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
Logging functions
"""
import logging
import platform
import sys
import os
from typing import Optional
from enum import Enum

LOGGER_NAME = 'PSPSCAN_LOGGER'


class level(Enum):
    DEBUG = 10
    HAL = 12
    VERBOSE = 13
    INFO = 20
    GOOD = 21
    BAD = 22
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


LEVEL_PREFIX = {
    level.ERROR.value: 'ERROR: ',
    level.WARNING.value: 'WARNING: ',
    level.GOOD.value: '[+] ',
    level.BAD.value: '[-] ',
    level.DEBUG.value: '[*] [DEBUG] ',
    level.VERBOSE.value: '[*] [VERBOSE] ',
    level.HAL.value: '[*] [HAL] ',
}


class pspscanFilter(logging.Filter):

    def filter(self, record):
        record.additional = LEVEL_PREFIX.get(record.levelno, '')
        return True


class pspscanLogFormatter(logging.Formatter):
    def __init__(self, fmt: Optional[str] = None) -> None:
        super().__init__(fmt)
        self.infmt = fmt

    def format(self, record):
        # args carry the color hint, never format arguments
        if record.args:
            record.args = tuple()
        return logging.Formatter(self.infmt).format(record)


class pspscanStreamFormatter(logging.Formatter):
    try:
        is_atty = sys.stdout.isatty()
    except AttributeError:
        is_atty = False
    # Respect https://no-color.org/ convention, and disable colorization
    # when the output is not a terminal (eg. redirection to a file)
    mPlatform = platform.system().lower()
    if is_atty and os.getenv('NO_COLOR') is None and mPlatform in ('windows', 'linux'):
        if mPlatform == 'windows':
            _ = os.system('color')
        colors = {
            'GREY': '\033[90m',
            'RED': '\033[91m',
            'GREEN': '\033[92m',
            'YELLOW': '\033[93m',
            'BLUE': '\033[94m',
            'PURPLE': '\033[95m',
            'CYAN': '\033[96m',
            'WHITE': '\033[97m',
            'END': '\033[0m'}
    else:
        colors = {}

    LEVEL_COLOR = {
        level.DEBUG.value: 'BLUE',
        level.VERBOSE.value: 'GREY',
        level.HAL.value: 'GREY',
        level.GOOD.value: 'GREEN',
        level.WARNING.value: 'YELLOW',
        level.ERROR.value: 'RED',
        level.BAD.value: 'RED',
        level.CRITICAL.value: 'PURPLE',
    }

    def __init__(self, fmt: Optional[str] = None) -> None:
        super().__init__(fmt)
        self.infmt = fmt

    def format(self, record):
        color = self.LEVEL_COLOR.get(record.levelno, 'WHITE')
        if record.args:
            if record.args[0] is not None and record.args[0] in self.colors:
                color = record.args[0]
            record.args = tuple()
        if color in self.colors:
            log_fmt = f'{self.colors[color]}{self.infmt}{self.colors["END"]}'
        else:
            log_fmt = self.infmt
        return logging.Formatter(log_fmt).format(record)


class Logger:
    """Class for logging to console and text file."""

    def __init__(self):
        self.logfile = None
        self.logstream = logging.StreamHandler(sys.stdout)
        self.pspscanLogger = logging.getLogger(LOGGER_NAME)
        self.pspscanLogger.setLevel(logging.INFO)
        if not self.pspscanLogger.handlers:
            self.pspscanLogger.addHandler(self.logstream)
        if not self.pspscanLogger.filters:
            self.pspscanLogger.addFilter(pspscanFilter(LOGGER_NAME))
        self.pspscanLogger.propagate = False
        for lvl in (level.VERBOSE, level.HAL, level.GOOD, level.BAD):
            logging.addLevelName(lvl.value, lvl.name)
        self.logstream.setFormatter(pspscanStreamFormatter('%(additional)s%(message)s'))
        self.logFormatter = pspscanLogFormatter('%(additional)s%(message)s')

    def log(self, text: str, level: level = level.INFO, color: Optional[str] = None) -> None:
        """Sends plain text to logging."""
        self.pspscanLogger.log(level.value, text, color)

    def log_verbose(self, text: str) -> None:
        self.log(text, level.VERBOSE)

    def log_hal(self, text: str) -> None:
        """Logs a hal message"""
        self.log(text, level.HAL)

    def log_debug(self, text: str) -> None:
        self.log(text, level.DEBUG)

    def log_error(self, text: str) -> None:
        self.log(text, level.ERROR)

    def log_warning(self, text: str) -> None:
        self.log(text, level.WARNING)

    def log_good(self, text: str) -> None:
        """Logs a message, if colors available, displays in green."""
        self.log(text, level.GOOD)

    def log_bad(self, text: str) -> None:
        """Logs a bad message, so it calls attention in the information displayed."""
        self.log(text, level.BAD)

    def log_heading(self, text: str) -> None:
        """Logs a heading message, if colors available, displays in blue."""
        self.log(text, level.INFO, 'BLUE')

    def set_log_level(self, verbose: bool, hal: bool, debug: bool, vverbose: bool) -> None:
        self.VERBOSE = True if verbose or vverbose else self.VERBOSE
        self.HAL = True if hal or vverbose else self.HAL
        self.DEBUG = True if debug or vverbose else self.DEBUG
        self.setlevel()

    def setlevel(self) -> None:
        if self.DEBUG:
            self.pspscanLogger.setLevel(level.DEBUG.value)
        elif self.HAL:
            self.pspscanLogger.setLevel(level.HAL.value)
        elif self.VERBOSE:
            self.pspscanLogger.setLevel(level.VERBOSE.value)
        else:
            self.pspscanLogger.setLevel(level.INFO.value)

    def set_log_file(self, name: str) -> None:
        """Sets the log file for the output."""
        # Close current log file if it's opened
        self.disable()

        # specifying empty string (name='') effectively disables logging to file
        if name:
            self.LOG_FILE_NAME = name
            try:
                self.logfile = logging.FileHandler(filename=self.LOG_FILE_NAME, mode='a')
            except OSError:
                print(f'WARNING: Could not open log file: {self.LOG_FILE_NAME}')
            else:
                self.pspscanLogger.addHandler(self.logfile)
                self.logfile.setFormatter(self.logFormatter)
                self.LOG_TO_FILE = True
                self.pspscanLogger.removeHandler(self.logstream)
        else:
            self.pspscanLogger.addHandler(self.logstream)

    def close(self) -> None:
        """Closes the log file."""
        if self.logfile:
            try:
                self.pspscanLogger.removeHandler(self.logfile)
                self.logfile.close()
                self.logstream.flush()
            except OSError:
                print('WARNING: Could not close log file')
            finally:
                self.logfile = None
                self.pspscanLogger.addHandler(self.logstream)

    def disable(self) -> None:
        """Disables the logging to file and closes the file if any."""
        self.LOG_TO_FILE = False
        self.LOG_FILE_NAME = ''
        self.close()

    VERBOSE: bool = False
    HAL: bool = False
    DEBUG: bool = False

    LOG_TO_FILE: bool = False
    LOG_FILE_NAME: str = ''


_logger = Logger()


def logger() -> Logger:
    """Returns a Logger instance."""
    return _logger


##################################################################################
# Hex dump functions
##################################################################################

def dump_buffer_bytes(arr: bytes, length: int = 16) -> str:
    """Dumps the buffer (bytes, bytearray) with ASCII"""
    output = []
    for start in range(0, len(arr), length):
        chunk = arr[start:start + length]
        hex_part = ''.join(f'{c:02X} ' for c in chunk).ljust(length * 3)
        ascii_part = ''.join(chr(c) if 0x20 < c < 0x7F else ' ' for c in chunk)
        output.append(f'{hex_part}| {ascii_part}')
    return '\n'.join(output)


def print_buffer_bytes(arr: bytes, length: int = 16) -> None:
    """Prints the buffer (bytes, bytearray) with ASCII"""
    logger().log(dump_buffer_bytes(arr, length))
