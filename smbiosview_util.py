#!/usr/bin/env python3
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

"""
Standalone utility
"""

import argparse
import importlib
import os
import sys
from time import time

from typing import Sequence, Optional, Dict, Any
from smbiosview.command import ExitCode
from smbiosview.library.banner import print_banner, print_banner_properties
from smbiosview.library.defines import get_version, os_version
from smbiosview.library.file import get_main_dir
from smbiosview.library.logger import logger


def import_cmds() -> Dict[str, Any]:
    """Determine available smbiosview_util commands"""
    cmds_dir = os.path.join(get_main_dir(), "smbiosview", "utilcmd")
    cmds = [i[:-3] for i in os.listdir(cmds_dir) if i[-3:] == ".py" and not i[:2] == "__"]

    if logger().DEBUG:
        logger().log('[SMBIOSVIEW] Loaded command-line extensions:')
        logger().log(f'   {cmds}')
    commands = {}
    for cmd in cmds:
        try:
            module = importlib.import_module(f'smbiosview.utilcmd.{cmd}')
            commands.update(getattr(module, 'commands'))
        except ImportError as msg:
            # Display the import error and continue to import commands
            logger().log_error(f"Exception occurred during import of {cmd}: '{str(msg)}'")
            continue
    commands.update({"help": ""})
    return commands


def parse_args(argv: Sequence[str]) -> Optional[Dict[str, Any]]:
    """Parse the arguments provided on the command line."""
    global_usage = "Additional arguments for specific command.\n\n"
    cmds = import_cmds()
    parser = argparse.ArgumentParser(usage='%(prog)s [options] <command>', add_help=False)
    options = parser.add_argument_group('Options')
    options.add_argument('-h', '--help', dest='show_help', help="Show this message and exit", action='store_true')
    options.add_argument('-v', '--verbose', help='Verbose logging', action='store_true')
    options.add_argument('--hal', help='HAL logging', action='store_true')
    options.add_argument('-d', '--debug', help='Debug logging', action='store_true')
    options.add_argument('-vv', '--vverbose', help='Very verbose logging (Verbose + HAL + Debug)', action='store_true')
    options.add_argument('-l', '--log', help='Output to log file')
    options.add_argument('-nb', '--no_banner', dest='_show_banner', action='store_false', help="Don't display banner information")
    options.add_argument('_cmd', metavar='Command', nargs='?', choices=sorted(cmds.keys()), type=str.lower, default="help",
                         help=f"Util command to run: {{{','.join(sorted(cmds.keys()))}}}")
    options.add_argument('_cmd_args', metavar='Command Args', nargs=argparse.REMAINDER, help=global_usage)
    par = vars(parser.parse_args(argv))

    if par['_cmd'] == 'help' or par['show_help']:
        if par['_show_banner']:
            print_banner(argv, get_version())
        parser.print_help()
        return None
    else:
        par['commands'] = cmds
        return par


class SmbiosViewUtil:

    def __init__(self, switches, argv):
        self.logger = logger()
        self.commands = switches['commands']
        self.__dict__.update(switches)
        self.argv = argv
        self.parse_switches()

    def parse_switches(self) -> None:
        self.logger.set_log_level(self.verbose, self.hal, self.debug, self.vverbose)
        if self.log:
            self.logger.set_log_file(self.log)

        if not self._cmd_args:
            self._cmd_args = ["--help"]

    ##################################################################################
    # Entry point
    ##################################################################################

    def main(self) -> int:
        """Receives and executes the commands"""
        if self._show_banner:
            print_banner(self.argv, get_version())
            print_banner_properties(os_version())

        comm = self.commands[self._cmd](self._cmd_args)
        comm.parse_arguments()

        self.logger.log(f"[SMBIOSVIEW] Executing command '{self._cmd}' with args {self._cmd_args}\n")

        try:
            comm.set_up()
        except Exception as msg:
            self.logger.log_error(str(msg))
            return ExitCode.EXCEPTION

        t = time()
        comm.run()
        self.logger.log(f"[SMBIOSVIEW] Time elapsed {time()-t:.3f}")

        comm.tear_down()
        return comm.ExitCode


def run(cli_cmd: str = '') -> int:
    cli_cmds = []
    if cli_cmd:
        cli_cmds = cli_cmd.strip().split(' ')
    return main(cli_cmds)


def main(argv: Sequence[str] = sys.argv[1:]) -> int:
    par = parse_args(argv)
    if par is not None:
        smbiosviewMain = SmbiosViewUtil(par, argv)
        return smbiosviewMain.main()
    return ExitCode.OK


if __name__ == "__main__":
    sys.exit(main())
