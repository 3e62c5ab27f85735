# SMBIOSVIEW: SMBIOS Structure Table Decoder
# Copyright (c) 2019-2021, Intel Corporation
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

import smbiosview_util


class TestSmbiosViewUtil(unittest.TestCase):
    """Test the commands exposed by smbiosview_util.

    Each test writes the SMBIOS dump it needs with _write_dump and then calls
    the _smbiosview_util method with the command line arguments.
    """

    def setUp(self):
        fileno, self.log_file = tempfile.mkstemp()
        os.close(fileno)
        self.dump_files = []

    def tearDown(self):
        os.remove(self.log_file)
        for dump_file in self.dump_files:
            os.remove(dump_file)
        logger = smbiosview_util.logger()
        logger.VERBOSE = False
        logger.HAL = False
        logger.DEBUG = False
        logger.setlevel()

    def _write_dump(self, data):
        fileno, dump_file = tempfile.mkstemp(suffix='.bin')
        os.write(fileno, data)
        os.close(fileno)
        self.dump_files.append(dump_file)
        return dump_file

    def _smbiosview_util(self, arg, expected_code=0):
        """Run the smbiosview_util command with the arguments.

        It verifies that the command returns `expected_code`. self.log will be
        populated with the output.
        """
        args = arg.split()
        par = smbiosview_util.parse_args(args)
        util = smbiosview_util.SmbiosViewUtil(par, args)
        util.logger.HAL = True
        util.logger.setlevel()
        util.logger.set_log_file(self.log_file)
        try:
            err_code = util.main()
        finally:
            util.logger.close()
        with open(self.log_file, 'rb') as log:
            self.log = log.read()
        self.assertEqual(err_code, expected_code)

    def _assertLogValue(self, name, value):
        """Shortcut to validate the output.

        Assert that at least one line exists within the log which matches the
        expression: name [:=] value.
        """
        exp = r'(^|\W){}\s*[:=]\s*{}($|\W)'.format(name, value)
        self.assertRegex(self.log, exp.encode())
