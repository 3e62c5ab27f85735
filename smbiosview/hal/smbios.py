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
HAL component providing access to the structures of an SMBIOS table

usage:
    >>> table_set = RawTableSet.from_raw_smbios_data(blob)
    >>> table_set = RawTableSet.create(table, table_length, major, minor)
    >>> table_set.locate(SMBIOS_SYSTEM_INFO_ENTRY_ID)
    >>> table_set.get_raw_structs(struct_type)
"""

import struct
from collections import namedtuple
from typing import Iterator, List, Optional, Tuple, Union
from smbiosview.library.defines import SMBIOS_END_OF_TABLE_TYPE, bytestostring
from smbiosview.library.exceptions import EmptyInputError, NoStructuresError, TruncatedHeaderError
from smbiosview.library.logger import logger
from smbiosview.library.structs import read_le

SMBIOS_BIOS_INFO_ENTRY_ID = 0
SMBIOS_SYSTEM_INFO_ENTRY_ID = 1
SMBIOS_BASEBOARD_INFO_ENTRY_ID = 2

# Header of the blob returned by GetSystemFirmwareTable('RSMB', ...)
RAW_SMBIOS_DATA_FMT = '=BBBBI'
RAW_SMBIOS_DATA_SIZE = struct.calcsize(RAW_SMBIOS_DATA_FMT)


class RAW_SMBIOS_DATA(namedtuple('RAW_SMBIOS_DATA', 'Used20CallingMethod MajorVer MinorVer DmiRev Length')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""
Raw SMBIOS Data Header:
  Used 2.0 Calling Method   : 0x{self.Used20CallingMethod:02X}
  SMBIOS Version            : {self.MajorVer:d}.{self.MinorVer:d}
  DMI Revision              : 0x{self.DmiRev:02X}
  Structure Table Length    : 0x{self.Length:08X}
"""


SMBIOS_STRUCT_HEADER_FMT = "=BBH"
SMBIOS_STRUCT_HEADER_SIZE = struct.calcsize(SMBIOS_STRUCT_HEADER_FMT)


class SMBIOS_STRUCT_HEADER(namedtuple('SMBIOS_STRUCT_HEADER', 'Type Length Handle')):
    __slots__ = ()

    def __str__(self) -> str:
        return f"""
SMBIOS Struct Header:
  Type                      : 0x{self.Type:02X} ({self.Type:d})
  Length                    : 0x{self.Length:02X}
  Handle                    : 0x{self.Handle:04X}
"""


SMBIOS_STRUCT_TERM_SIZE = 2
SMBIOS_STRUCT_TERM_VAL = 0x0000
SMBIOS_STRUCT_MIN_LENGTH = SMBIOS_STRUCT_HEADER_SIZE

BufferType = Union[bytes, bytearray, memoryview]


def parse_raw_smbios_data(blob: BufferType) -> RAW_SMBIOS_DATA:
    if not blob:
        raise EmptyInputError('No SMBIOS data supplied')
    if len(blob) < RAW_SMBIOS_DATA_SIZE:
        raise TruncatedHeaderError(f'SMBIOS data is too small for its header: 0x{len(blob):X} bytes')
    return RAW_SMBIOS_DATA(*struct.unpack_from(RAW_SMBIOS_DATA_FMT, blob))


def _walk_end(table: bytes, table_length: int) -> int:
    return max(0, min(table_length, len(table)))


def _skip_string_list(table: bytes, offset: int, end: int) -> int:
    """Returns the offset that follows the double-null terminator of the string list starting at `offset`."""
    while offset < end and read_le(table, offset, SMBIOS_STRUCT_TERM_SIZE) != SMBIOS_STRUCT_TERM_VAL:
        offset += 1
    return offset + SMBIOS_STRUCT_TERM_SIZE


def _read_header(table: bytes, offset: int) -> SMBIOS_STRUCT_HEADER:
    return SMBIOS_STRUCT_HEADER(read_le(table, offset, 1), read_le(table, offset + 1, 1), read_le(table, offset + 2, 2))


def count_structures(table: bytes, table_length: int) -> int:
    """
    Counts the structures of a table without interpreting them.

    Only the length byte of each structure is trusted; the string list is
    walked until its double-null terminator.  Bytes past the end of the
    buffer read as zero.
    """
    end = _walk_end(table, table_length)
    count = 0
    offset = 0
    while offset < end:
        offset += read_le(table, offset + 1, 1)
        offset = _skip_string_list(table, offset, end)
        count += 1
    logger().log_hal(f'Structures counted: {count:d}, table size: 0x{table_length:04X}')
    return count


def locate_structure(table: bytes, table_length: int, expected_count: int, struct_type: int) -> Optional[int]:
    """
    Returns the offset of the first structure of `struct_type`.

    Error/End:
    None
    """
    end = _walk_end(table, table_length)
    offset = 0
    visited = 0
    while visited < expected_count and offset + SMBIOS_STRUCT_HEADER_SIZE <= end:
        header = _read_header(table, offset)
        visited += 1
        if header.Length < SMBIOS_STRUCT_MIN_LENGTH:
            # The next structure cannot be found reliably past a short one
            logger().log_warning(f'Invalid SMBIOS structure length: {header.Length:d} (offset 0x{offset:04X})')
            break
        if header.Type == struct_type:
            logger().log_hal(f'+ Found structure type {struct_type:d} @ 0x{offset:04X}')
            return offset
        offset = _skip_string_list(table, offset + header.Length, end)
        if header.Type == SMBIOS_END_OF_TABLE_TYPE:
            logger().log_hal('+ Reached end of table structure')
            break

    if visited != expected_count:
        logger().log_warning(f'The number of processed structures does not match the number of structures: {visited:d}/{expected_count:d}')
    if offset != table_length:
        logger().log_warning(f'The announced table size does not match the processed size: 0x{offset:X}/0x{table_length:X}')
    logger().log_hal(f'- Structure type {struct_type:d} not found')
    return None


def get_header(raw_data: bytes) -> Optional[SMBIOS_STRUCT_HEADER]:
    if raw_data is None:
        logger().log_hal('- Raw data pointer is None')
        return None
    if len(raw_data) < SMBIOS_STRUCT_HEADER_SIZE:
        logger().log_hal('- Raw data too small for header information')
        return None
    return SMBIOS_STRUCT_HEADER(*struct.unpack_from(SMBIOS_STRUCT_HEADER_FMT, raw_data))


def get_string_list(raw_data: bytes) -> Optional[List[str]]:
    header = get_header(raw_data)
    if header is None:
        return None
    if header.Length + SMBIOS_STRUCT_TERM_SIZE > len(raw_data):
        logger().log_hal('- Data buffer too small for structure')
        return None

    strings = []
    offset = header.Length
    while offset < len(raw_data):
        str_end = raw_data.find(b'\x00', offset)
        if str_end == -1 or str_end == offset:
            break
        strings.append(bytestostring(raw_data[offset:str_end]))
        offset = str_end + 1
    logger().log_hal(f'+ Found {len(strings):d} strings')
    return strings


class RawTableSet:
    """
    Immutable SMBIOS structure table plus the SMBIOS version it was reported with.

    Use create() or from_raw_smbios_data() rather than the constructor; both
    make sure the table holds at least one structure.
    """

    def __init__(self, data: bytes, table_length: int, major: int, minor: int, struct_count: int):
        self._data = data
        self._table_length = table_length
        self._major = major
        self._minor = minor
        self._struct_count = struct_count

    @classmethod
    def create(cls, buffer: BufferType, table_length: int, major: int, minor: int) -> 'RawTableSet':
        if not buffer:
            raise EmptyInputError('No SMBIOS data supplied')
        data = bytes(buffer)
        if table_length > len(data):
            logger().log_warning(f'SMBIOS table length 0x{table_length:X} exceeds the data size 0x{len(data):X}')
        struct_count = count_structures(data, table_length)
        if not struct_count:
            raise NoStructuresError('SMBIOS structures not found')
        logger().log_hal(f'SMBIOS {major:d}.{minor:d} table with {struct_count:d} structures')
        return cls(data, table_length, major, minor, struct_count)

    @classmethod
    def from_raw_smbios_data(cls, blob: BufferType) -> 'RawTableSet':
        header = parse_raw_smbios_data(blob)
        logger().log_hal(str(header))
        table = bytes(blob[RAW_SMBIOS_DATA_SIZE:])
        if not table:
            raise NoStructuresError('SMBIOS data holds no structure table')
        return cls.create(table, header.Length, header.MajorVer, header.MinorVer)

    def data(self) -> bytes:
        return self._data

    def major_version(self) -> int:
        return self._major

    def minor_version(self) -> int:
        return self._minor

    def version(self) -> int:
        return (self._major << 8) + self._minor

    def structure_count(self) -> int:
        return self._struct_count

    def table_length(self) -> int:
        return self._table_length

    def locate(self, struct_type: int) -> Optional[int]:
        return locate_structure(self._data, self._table_length, self._struct_count, struct_type)

    def _iter_structures(self) -> Iterator[Tuple[int, int, SMBIOS_STRUCT_HEADER]]:
        end = _walk_end(self._data, self._table_length)
        offset = 0
        while offset + SMBIOS_STRUCT_HEADER_SIZE <= end:
            header = _read_header(self._data, offset)
            if header.Length < SMBIOS_STRUCT_MIN_LENGTH:
                logger().log_warning(f'Invalid SMBIOS structure length: {header.Length:d} (offset 0x{offset:04X})')
                return
            next_offset = _skip_string_list(self._data, offset + header.Length, end)
            yield (offset, next_offset, header)
            if header.Type == SMBIOS_END_OF_TABLE_TYPE:
                return
            offset = next_offset

    def get_structure_headers(self, struct_type: Optional[int] = None) -> List[Tuple[int, SMBIOS_STRUCT_HEADER]]:
        """Returns (offset, header) of all structures, or of all structures of `struct_type`, in table order."""
        return [(offset, header) for (offset, _, header) in self._iter_structures()
                if struct_type is None or header.Type == struct_type]

    def get_raw_structs(self, struct_type: Optional[int] = None) -> List[bytes]:
        """
        Returns a list of raw data blobs for each SMBIOS structure, including
        its string list and terminator.
        """
        logger().log_hal('Getting SMBIOS structures...')
        return [self._data[offset:next_offset] for (offset, next_offset, header) in self._iter_structures()
                if struct_type is None or header.Type == struct_type]
