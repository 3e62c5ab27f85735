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

import struct
from typing import Dict


def DB(val: int) -> bytes:
    return struct.pack('<B', val)


def DW(val: int) -> bytes:
    return struct.pack('<H', val)


def DD(val: int) -> bytes:
    return struct.pack('<L', val)


def DQ(val: int) -> bytes:
    return struct.pack('<Q', val)


SIZE2FORMAT: Dict[int, str] = {
    1: 'B',
    2: 'H',
    4: 'I',
    8: 'Q'
}


def unpack1(string: bytes, size: int) -> int:
    """Shortcut to unpack a single little-endian value from a string based on its size."""
    return struct.unpack(f'<{SIZE2FORMAT[size]}', string)[0]


def read_le(data: bytes, offset: int, size: int) -> int:
    """
    Reads a little-endian value of `size` bytes at `offset`.

    Returns 0 when the value does not fit entirely inside `data`.
    """
    if offset < 0 or offset + size > len(data):
        return 0
    return unpack1(data[offset:offset + size], size)
