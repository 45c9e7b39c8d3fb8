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

import os
import configparser
from typing import Any
from pspscan.library.file import get_main_dir
from pspscan.library.exceptions import PSPScanConfigError


class NoDefault():
    pass


class Options(object):

    def __init__(self):
        options_path = os.path.join(get_main_dir(), 'pspscan', 'options')
        if not os.path.isdir(options_path):
            raise PSPScanConfigError(f'Unable to locate configuration options: {options_path}')
        options_name = os.path.join(options_path, 'cmd_options.ini')
        self.config = configparser.ConfigParser()
        with open(options_name) as options_file:
            self.config.read_file(options_file)

    def get_section_data(self, section: str, key: str, default: Any = NoDefault) -> str:
        try:
            ret_data = self.config.get(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            if default is NoDefault:
                raise
            return default
        return ret_data

    def get_bool_data(self, section: str, key: str, default: bool = False) -> bool:
        try:
            return self.config.getboolean(section, key)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return default
        except ValueError as err:
            raise PSPScanConfigError(f'Option {section}.{key} is not a boolean: {err}')

    def get_int_data(self, section: str, key: str, default: Any = NoDefault) -> int:
        raw_data = self.get_section_data(section, key, default)
        if isinstance(raw_data, int):
            return raw_data
        try:
            return int(raw_data, 0)
        except ValueError:
            raise PSPScanConfigError(f'Option {section}.{key} is not an integer: {raw_data}')
