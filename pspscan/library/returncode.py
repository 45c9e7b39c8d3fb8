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


class ExitCode:
    OK = 0
    WARNING = 2
    FAIL = 8
    ERROR = 16
    EXCEPTION = 32

    help_epilog = """\
  Exit Code
  ---------
  PSPSCAN returns an integer exit code:
  - Exit code is 0:       the command ran successfully
  - Exit code is not 0:   each bit means the following:
      - Bit 1: WARNING         something expected was not found (e.g. no AGESA identifier)
      - Bit 3: FAIL            at least one firmware entry could not be decoded
      - Bit 4: ERROR           the command wasn't able to run (e.g. no FET in the image)
      - Bit 5: EXCEPTION       the command threw an unexpected exception

"""
