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
HAL component decoding the fields of individual SMBIOS structures
"""

from uuid import UUID
from typing import Dict, List, Optional, Sequence, Tuple, Type
from smbiosview.hal.smbios import (RawTableSet, SMBIOS_BIOS_INFO_ENTRY_ID, SMBIOS_SYSTEM_INFO_ENTRY_ID,
                                   SMBIOS_BASEBOARD_INFO_ENTRY_ID)
from smbiosview.library.defines import bytestostring
from smbiosview.library.logger import logger
from smbiosview.library.structs import read_le

FeatureList = List[Tuple[str, bool]]


def bit_features(value: int, names: Sequence[str], first_bit: int = 0) -> FeatureList:
    """Pairs each name with the state of its bit, starting at `first_bit`."""
    return [(name, bool(value & (1 << bit))) for bit, name in enumerate(names, first_bit)]


def format_features(features: FeatureList) -> str:
    return ''.join(f"    {'[+]' if supported else '[-]'} {name}\n" for (name, supported) in features)


class SmbiosTable:
    """
    Read access to the fields of one SMBIOS structure.

    The structure is located by type in the owning RawTableSet unless an
    explicit offset is given.  When no structure was found, every getter
    returns an empty value.
    """

    TYPE: Optional[int] = None
    NAME = 'SMBIOS Structure'

    def __init__(self, table_set: RawTableSet, struct_type: Optional[int] = None, offset: Optional[int] = None):
        self._table_set = table_set
        if struct_type is None:
            struct_type = self.TYPE
        if offset is None and struct_type is not None:
            offset = table_set.locate(struct_type)
        self._offset = offset

    def is_valid(self) -> bool:
        return self._offset is not None

    def _read(self, offset: int, size: int) -> int:
        if self._offset is None:
            return 0
        return read_le(self._table_set.data(), self._offset + offset, size)

    def get_byte(self, offset: int) -> int:
        return self._read(offset, 1)

    def get_word(self, offset: int) -> int:
        return self._read(offset, 2)

    def get_dword(self, offset: int) -> int:
        return self._read(offset, 4)

    def get_qword(self, offset: int) -> int:
        return self._read(offset, 8)

    def get_bytes(self, offset: int, size: int) -> bytes:
        if self._offset is None:
            return b''
        data = self._table_set.data()
        start = self._offset + offset
        if start < 0 or start + size > len(data):
            return b''
        return data[start:start + size]

    def get_type(self) -> int:
        return self.get_byte(0x00)

    def get_length(self) -> int:
        return self.get_byte(0x01)

    def get_handle(self) -> int:
        return self.get_word(0x02)

    def has_field(self, offset: int, size: int = 1) -> bool:
        """
        Whether the declared length of the structure covers [offset, offset + size)
        and those bytes lie inside the table.
        """
        if not self.is_valid() or offset + size > self.get_length():
            return False
        end = min(len(self._table_set.data()), self._table_set.table_length())
        return self._offset + offset + size <= end

    def get_string(self, offset: int) -> str:
        index = self.get_byte(offset)
        if not index:
            return ''

        data = self._table_set.data()
        end = min(len(data), self._table_set.table_length())
        pos = self._offset + self.get_length()
        while index > 1:
            str_end = data.find(b'\x00', pos, end)
            if str_end == -1 or str_end == pos:
                logger().log_hal(f'- String {self.get_byte(offset):d} not present in structure type {self.get_type():d}')
                return ''
            pos = str_end + 1
            index -= 1

        str_end = data.find(b'\x00', pos, end)
        if str_end == -1 or str_end == pos:
            return ''
        return bytestostring(data[pos:str_end])

    def _field_string(self, offset: int) -> str:
        return self.get_string(offset) if self.has_field(offset) else ''

    def __str__(self) -> str:
        if not self.is_valid():
            return f"""
{self.NAME}: not present
"""
        return f"""
{self.NAME}:
  Type                      : 0x{self.get_type():02X} ({self.get_type():d})
  Length                    : 0x{self.get_length():02X}
  Handle                    : 0x{self.get_handle():04X}
"""


BIOS_CHARACTERISTICS_NOT_SUPPORTED = 0x08

# bits 4 to 31 of the BIOS characteristics qword
BIOS_CHARACTERISTICS = (
    'ISA',
    'MCA',
    'EISA',
    'PCI',
    'PC Card (PCMCIA)',
    'PNP',
    'APM',
    'BIOS is upgradeable',
    'BIOS shadowing',
    'VLB',
    'ESCD',
    'Boot from CD',
    'Selectable boot',
    'BIOS ROM is socketed',
    'Boot from PC Card (PCMCIA)',
    'EDD',
    'Japanese floppy for NEC 9800 1.2 MB (int 13h)',
    'Japanese floppy for Toshiba 1.2 MB (int 13h)',
    '5.25"/360 kB floppy (int 13h)',
    '5.25"/1.2 MB floppy (int 13h)',
    '3.5"/720 kB floppy (int 13h)',
    '3.5"/2.88 MB floppy (int 13h)',
    'Print screen (int 5h)',
    '8042 keyboard (int 9h)',
    'Serial (int 14h)',
    'Printer (int 17h)',
    'CGA/mono video (int 10h)',
    'NEC PC-98',
)

BIOS_CHARACTERISTICS_EXT1 = (
    'ACPI',
    'USB legacy',
    'AGP',
    'I2O boot',
    'LS-120 boot',
    'ATAPI Zip drive boot',
    'IEEE 1394 boot',
    'Smart battery',
)

BIOS_CHARACTERISTICS_EXT2 = (
    'BIOS boot specification',
    'Function key-initiated network boot',
    'Targeted content distribution',
)


class BiosInfo(SmbiosTable):
    TYPE = SMBIOS_BIOS_INFO_ENTRY_ID
    NAME = 'SMBIOS BIOS Information'

    def get_manufacturer(self) -> str:
        return self._field_string(0x04)

    def get_version(self) -> str:
        return self._field_string(0x05)

    def get_date(self) -> str:
        return self._field_string(0x08)

    def get_size(self) -> int:
        """ROM size in kilobytes."""
        if not self.has_field(0x09):
            return 0
        return (self.get_byte(0x09) + 1) << 6

    def _revision(self, offset: int) -> str:
        if not self.has_field(offset, 2):
            return ''
        major = self.get_byte(offset)
        minor = self.get_byte(offset + 1)
        if major == 0xFF or minor == 0xFF:
            return ''
        return f'{major:d}.{minor:d}'

    def get_bios_revision(self) -> str:
        return self._revision(0x14)

    def get_firmware_revision(self) -> str:
        return self._revision(0x16)

    def _segment(self) -> int:
        return self.get_word(0x06) if self.has_field(0x06, 2) else 0

    def get_address(self) -> str:
        segment = self._segment()
        if not segment:
            return ''
        return f'{segment:04X}0h'

    def get_runtime_size(self) -> int:
        """Runtime size in bytes."""
        segment = self._segment()
        if not segment:
            return 0
        code = (0x10000 - segment) << 4
        if code & 0x3FF:
            return code
        return (code >> 10) * 1024

    def get_characteristics(self) -> FeatureList:
        features = []
        if self.has_field(0x0A, 8):
            characteristics = self.get_qword(0x0A)
            if not characteristics & BIOS_CHARACTERISTICS_NOT_SUPPORTED:
                features += bit_features(characteristics, BIOS_CHARACTERISTICS, 4)
        if self.has_field(0x12):
            features += bit_features(self.get_byte(0x12), BIOS_CHARACTERISTICS_EXT1)
        if self.has_field(0x13):
            features += bit_features(self.get_byte(0x13), BIOS_CHARACTERISTICS_EXT2)
        return features

    def __str__(self) -> str:
        if not self.is_valid():
            return super().__str__()
        return f"""{super().__str__()}  Vendor                    : {self.get_manufacturer():s}
  BIOS Version              : {self.get_version():s}
  BIOS Release Date         : {self.get_date():s}
  BIOS Starting Address     : {self.get_address():s}
  BIOS Runtime Size         : {self.get_runtime_size():d} bytes
  BIOS ROM Size             : {self.get_size():d} kB
  BIOS Revision             : {self.get_bios_revision():s}
  Firmware Revision         : {self.get_firmware_revision():s}
  BIOS Characteristics      :
{format_features(self.get_characteristics())}"""


SYSTEM_UUID_MIXED_ENDIAN_VERSION = 0x0206

SYSTEM_WAKEUP_TYPES = {
    0x01: 'Other',
    0x02: 'Unknown',
    0x03: 'APM Timer',
    0x04: 'Modem Ring',
    0x05: 'LAN Remote',
    0x06: 'Power Switch',
    0x07: 'PCI PME#',
    0x08: 'AC Power Restored',
}


class SystemInfo(SmbiosTable):
    TYPE = SMBIOS_SYSTEM_INFO_ENTRY_ID
    NAME = 'SMBIOS System Information'

    def get_manufacturer(self) -> str:
        return self._field_string(0x04)

    def get_product_name(self) -> str:
        return self._field_string(0x05)

    def get_version(self) -> str:
        return self._field_string(0x06)

    def get_serial_number(self) -> str:
        return self._field_string(0x07)

    def get_uuid(self) -> str:
        # UUID and wake-up type were both added in SMBIOS 2.1
        if not self.has_field(0x18):
            return ''
        raw_uuid = self.get_bytes(0x08, 16)
        if len(raw_uuid) != 16 or raw_uuid in (b'\x00' * 16, b'\xFF' * 16):
            return ''
        if self._table_set.version() >= SYSTEM_UUID_MIXED_ENDIAN_VERSION:
            return str(UUID(bytes_le=raw_uuid)).upper()
        return str(UUID(bytes=raw_uuid)).upper()

    def get_wakeup_type(self) -> str:
        if not self.has_field(0x18):
            return ''
        return SYSTEM_WAKEUP_TYPES.get(self.get_byte(0x18), '')

    def get_sku_number(self) -> str:
        # SKU number and family were both added in SMBIOS 2.4
        if not self.has_field(0x1A):
            return ''
        return self.get_string(0x19)

    def get_family(self) -> str:
        return self._field_string(0x1A)

    def __str__(self) -> str:
        if not self.is_valid():
            return super().__str__()
        return f"""{super().__str__()}  Manufacturer              : {self.get_manufacturer():s}
  Product Name              : {self.get_product_name():s}
  Version                   : {self.get_version():s}
  Serial Number             : {self.get_serial_number():s}
  UUID                      : {self.get_uuid():s}
  Wake-up Type              : {self.get_wakeup_type():s}
  SKU Number                : {self.get_sku_number():s}
  Family                    : {self.get_family():s}
"""


BASEBOARD_FEATURES = (
    'Board is a hosting board',
    'Board requires at least one daughter board',
    'Board is removable',
    'Board is replaceable',
    'Board is hot swappable',
)
BASEBOARD_FEATURES_MASK = 0x1F

# 1-based board type codes
BASEBOARD_TYPES = (
    'Unknown',
    'Other',
    'Server Blade',
    'Connectivity Switch',
    'System Management Module',
    'Processor Module',
    'I/O Module',
    'Memory Module',
    'Daughter Board',
    'Motherboard',
    'Processor+Memory Module',
    'Processor+I/O Module',
    'Interconnect Board',
)


class BaseboardInfo(SmbiosTable):
    TYPE = SMBIOS_BASEBOARD_INFO_ENTRY_ID
    NAME = 'SMBIOS Baseboard Information'

    def get_manufacturer(self) -> str:
        return self._field_string(0x04)

    def get_product_name(self) -> str:
        return self._field_string(0x05)

    def get_version(self) -> str:
        return self._field_string(0x06)

    def get_serial_number(self) -> str:
        return self._field_string(0x07)

    def get_asset_tag(self) -> str:
        return self._field_string(0x08)

    def get_features(self) -> FeatureList:
        if not self.has_field(0x09):
            return []
        features = self.get_byte(0x09)
        if not features & BASEBOARD_FEATURES_MASK:
            return []
        return bit_features(features, BASEBOARD_FEATURES)

    def get_location_in_chassis(self) -> str:
        # location, chassis handle and board type were added together
        if not self.has_field(0x0D):
            return ''
        return self.get_string(0x0A)

    def get_board_type(self) -> str:
        if not self.has_field(0x0D):
            return ''
        board_type = self.get_byte(0x0D)
        if not 1 <= board_type <= len(BASEBOARD_TYPES):
            return ''
        return BASEBOARD_TYPES[board_type - 1]

    def __str__(self) -> str:
        if not self.is_valid():
            return super().__str__()
        return f"""{super().__str__()}  Manufacturer              : {self.get_manufacturer():s}
  Product Name              : {self.get_product_name():s}
  Version                   : {self.get_version():s}
  Serial Number             : {self.get_serial_number():s}
  Asset Tag                 : {self.get_asset_tag():s}
  Location in Chassis       : {self.get_location_in_chassis():s}
  Board Type                : {self.get_board_type():s}
  Features                  :
{format_features(self.get_features())}"""


struct_decode_tree: Dict[int, Type[SmbiosTable]] = {
    SMBIOS_BIOS_INFO_ENTRY_ID: BiosInfo,
    SMBIOS_SYSTEM_INFO_ENTRY_ID: SystemInfo,
    SMBIOS_BASEBOARD_INFO_ENTRY_ID: BaseboardInfo,
}


def get_decoded_structs(table_set: RawTableSet, struct_type: Optional[int] = None) -> List[SmbiosTable]:
    """Returns a typed view for every structure that has a decoder, in table order."""
    ret_val = []
    logger().log_hal('Getting decoded SMBIOS structures')
    for (offset, header) in table_set.get_structure_headers(struct_type):
        if header.Type not in struct_decode_tree:
            logger().log_hal(f'- Structure {header.Type:d} not in decode list')
            continue
        ret_val.append(struct_decode_tree[header.Type](table_set, offset=offset))
    return ret_val
