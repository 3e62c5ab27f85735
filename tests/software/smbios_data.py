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
Builders for synthetic SMBIOS tables used by the tests.
"""

import struct

from smbiosview.library.structs import DB, DW, DQ

END_OF_TABLE_TYPE = 127


def smbios_struct(struct_type, formatted=b'', strings=(), handle=0x0100, length=None):
    """Builds one structure: header, formatted area (bytes after the header) and string list."""
    if length is None:
        length = 4 + len(formatted)
    data = DB(struct_type) + DB(length) + DW(handle) + formatted
    if strings:
        return data + b''.join(s + b'\x00' for s in strings) + b'\x00'
    return data + b'\x00\x00'


def end_of_table(handle=0xFEFF):
    return smbios_struct(END_OF_TABLE_TYPE, handle=handle)


def raw_smbios_data(table, major=3, minor=0, length=None):
    if length is None:
        length = len(table)
    return struct.pack('=BBBBI', 0, major, minor, 0, length) + table


def bios_info(vendor=b'American Megatrends Inc.', version=b'1.20', date=b'05/14/2021', segment=0xF000, rom_size=0x0F,
              characteristics=0, ext1=0, ext2=0, bios_rev=(5, 17), fw_rev=(0xFF, 0xFF), length=0x18, handle=0x0000):
    formatted = (DB(1) + DB(2) + DW(segment) + DB(3) + DB(rom_size) + DQ(characteristics) + DB(ext1) + DB(ext2) +
                 DB(bios_rev[0]) + DB(bios_rev[1]) + DB(fw_rev[0]) + DB(fw_rev[1]))
    return smbios_struct(0, formatted[:length - 4], [vendor, version, date], handle)


def system_info(manufacturer=b'LENOVO', product=b'20XW0026GE', version=b'ThinkPad X1 Carbon Gen 9',
                serial=b'PF2ABCDE', uuid=bytes(range(1, 17)), wakeup=0x06, sku=b'LENOVO_MT_20XW',
                family=b'ThinkPad X1 Carbon', length=0x1B, handle=0x0001):
    formatted = DB(1) + DB(2) + DB(3) + DB(4) + uuid + DB(wakeup) + DB(5) + DB(6)
    return smbios_struct(1, formatted[:length - 4], [manufacturer, product, version, serial, sku, family], handle)


def baseboard_info(manufacturer=b'LENOVO', product=b'20XW0026GE', version=b'SDK0J40697 WIN', serial=b'L1HF16Y00A0',
                   asset_tag=b'Not Available', features=0x09, location=b'Not Available', board_type=0x0A,
                   length=0x0F, handle=0x0002):
    formatted = DB(1) + DB(2) + DB(3) + DB(4) + DB(5) + DB(features) + DB(6) + DW(0x0003) + DB(board_type) + DB(0)
    return smbios_struct(2, formatted[:length - 4], [manufacturer, product, version, serial, asset_tag, location], handle)


def default_table():
    return bios_info() + system_info() + baseboard_info() + end_of_table()
