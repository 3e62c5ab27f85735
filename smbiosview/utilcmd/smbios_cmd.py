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
>>> smbiosview_util smbios count <dump> [-V MAJOR.MINOR]
>>> smbiosview_util smbios info <dump> [bios|system|baseboard|all] [-V MAJOR.MINOR]
>>> smbiosview_util smbios get <dump> [raw|decoded] [type] [-V MAJOR.MINOR]

<dump> is a RawSMBIOSData blob (as returned by GetSystemFirmwareTable('RSMB')),
or a bare structure table when the SMBIOS version is given with -V.

Examples:

>>> smbiosview_util smbios count rsmb.bin
>>> smbiosview_util smbios info rsmb.bin system
>>> smbiosview_util smbios get DMI raw 17 -V 3.3
"""

from argparse import ArgumentParser, ArgumentTypeError
from typing import Tuple
from smbiosview.command import BaseCommand, ExitCode
from smbiosview.hal.smbios import RawTableSet, get_header
from smbiosview.hal.smbios_tables import BiosInfo, SystemInfo, BaseboardInfo, get_decoded_structs
from smbiosview.library.exceptions import SmbiosError
from smbiosview.library.file import read_file
from smbiosview.library.logger import print_buffer_bytes
from smbiosview.library.options import Options

INFO_TABLES = {
    'bios': BiosInfo,
    'system': SystemInfo,
    'baseboard': BaseboardInfo,
}


def smbios_version(text: str) -> Tuple[int, int]:
    try:
        major, _, minor = text.partition('.')
        version = (int(major), int(minor or '0'))
    except ValueError:
        raise ArgumentTypeError(f"invalid SMBIOS version '{text}', expected MAJOR.MINOR")
    if not all(0 <= part <= 0xFF for part in version):
        raise ArgumentTypeError(f"SMBIOS version '{text}' out of range")
    return version


class smbios_cmd(BaseCommand):

    def parse_arguments(self) -> None:
        options = Options()
        default_type = options.get_section_data('Util_Config', 'smbios_get_type', 'decoded')
        self.info_tables = options.get_list_data('Util_Config', 'smbios_info_tables', list(INFO_TABLES))

        dump_parser = ArgumentParser(add_help=False)
        dump_parser.add_argument('dump', type=str, help='File holding the SMBIOS data')
        dump_parser.add_argument('-V', '--smbios-version', dest='smbios_version', type=smbios_version, default=None,
                                 help='Treat the file as a bare structure table reported with this SMBIOS version')

        parser = ArgumentParser(prog='smbiosview_util smbios', usage=__doc__)
        subparsers = parser.add_subparsers(dest='subcommand', required=True)
        parser_count = subparsers.add_parser('count', parents=[dump_parser])
        parser_count.set_defaults(func=self.smbios_count)
        parser_info = subparsers.add_parser('info', parents=[dump_parser])
        parser_info.add_argument('table', choices=sorted(INFO_TABLES) + ['all'], default='all', nargs='?',
                                 help='Decoded structure to display')
        parser_info.set_defaults(func=self.smbios_info)
        parser_get = subparsers.add_parser('get', parents=[dump_parser])
        parser_get.add_argument('method', choices=['raw', 'decoded'], default=default_type, nargs='?',
                                help='Get raw data or decoded data.  Decoded data may not exist for all structures')
        parser_get.add_argument('type', type=int, default=None, nargs='?',
                                help='SMBIOS type to search for')
        parser_get.set_defaults(func=self.smbios_get)
        parser.parse_args(self.argv, namespace=self)

    def load_table_set(self) -> RawTableSet:
        data = read_file(self.dump)
        if self.smbios_version is None:
            self.logger.log_verbose('[SMBIOSVIEW] Parsing RawSMBIOSData header')
            return RawTableSet.from_raw_smbios_data(data)
        (major, minor) = self.smbios_version
        self.logger.log_verbose(f'[SMBIOSVIEW] Treating dump as a bare SMBIOS {major:d}.{minor:d} structure table')
        return RawTableSet.create(data, len(data), major, minor)

    def smbios_count(self) -> None:
        self.logger.log(f'[SMBIOSVIEW] SMBIOS Version   : {self.table_set.major_version():d}.{self.table_set.minor_version():d}')
        self.logger.log(f'[SMBIOSVIEW] Table Length     : 0x{self.table_set.table_length():X}')
        self.logger.log(f'[SMBIOSVIEW] Structure Count  : {self.table_set.structure_count():d}')

    def smbios_info(self) -> None:
        tables = self.info_tables if self.table == 'all' else [self.table]
        for name in tables:
            if name not in INFO_TABLES:
                self.logger.log_warning(f"Unknown table '{name}' in configuration")
                continue
            self.logger.log(str(INFO_TABLES[name](self.table_set)))

    def smbios_get(self) -> None:
        if self.method == 'raw':
            self.logger.log('[SMBIOSVIEW] Dumping all requested structures in raw format')
            structs = self.table_set.get_raw_structs(self.type)
        else:
            self.logger.log('[SMBIOSVIEW] Dumping all requested structures in decoded format')
            structs = get_decoded_structs(self.table_set, self.type)
        if len(structs) == 0:
            self.logger.log('[SMBIOSVIEW] Structures not found')
            return

        for data in structs:
            if self.method == 'raw':
                header = get_header(data)
                if header is not None:
                    self.logger.log(str(header))
                self.logger.log('[SMBIOSVIEW] Raw Data')
                print_buffer_bytes(data)
            else:
                self.logger.log(str(data))
            self.logger.log('==================================================================')

    def run(self) -> None:
        try:
            self.logger.log(f"[SMBIOSVIEW] Reading SMBIOS data from '{self.dump}'")
            self.table_set = self.load_table_set()
        except SmbiosError as err:
            self.logger.log_error(f'Unable to decode SMBIOS data: {err}')
            self.ExitCode = ExitCode.ERROR
            return

        super().run()


commands = {'smbios': smbios_cmd}
