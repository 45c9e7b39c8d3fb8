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
import tempfile
import unittest

import pspscan_util
from pspscan.library.returncode import ExitCode


class TestPSPScanUtil(unittest.TestCase):
    """Test the commands exposed by pspscan_util.

    Each test writes its firmware image with _write_image and then calls the
    _pspscan_util method with the command line arguments.
    """

    def setUp(self):
        fileno, self.log_file = tempfile.mkstemp()
        os.close(fileno)
        self.images = []

    def tearDown(self):
        os.remove(self.log_file)
        for name in self.images:
            os.remove(name)

    def _write_image(self, data):
        fileno, name = tempfile.mkstemp(suffix='.rom')
        with os.fdopen(fileno, 'wb') as rom:
            rom.write(data)
        self.images.append(name)
        return name

    def _pspscan_util(self, arg, expected=ExitCode.OK):
        """Run the pspscan_util command with the arguments.

        It verifies the exit code of the command. self.log will be populated
        with the output.
        """
        args = arg.split()
        par = pspscan_util.parse_args(args)
        util = pspscan_util.PSPScanUtil(par, args)
        util.logger.set_log_file(self.log_file)
        try:
            err_code = util.main()
        finally:
            util.logger.close()
        with open(self.log_file, 'rb') as log:
            self.log = log.read()
        self.assertEqual(err_code, expected)

    def _assertLogValue(self, name, value):
        """Shortcut to validate the output.

        Assert that at least one line exists within the log which matches the
        expression: name [:=] value.
        """
        exp = r'(^|\W){}\s*[:=]\s*{}($|\W)'.format(name, value)
        self.assertRegex(self.log, exp.encode())
