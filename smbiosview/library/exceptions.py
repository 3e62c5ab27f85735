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


# ================================================
# SMBIOS table set
# ================================================

class SmbiosError(RuntimeError):
    """Base class for errors raised while building an SMBIOS table set."""
    pass


class EmptyInputError(SmbiosError):
    """Raised when no SMBIOS data was supplied."""
    pass


class TruncatedHeaderError(SmbiosError):
    """Raised when a RawSMBIOSData blob is shorter than its header."""
    pass


class NoStructuresError(SmbiosError):
    """Raised when the table does not hold a single parseable structure."""
    pass


#Cfg
class SmbiosConfigError(RuntimeError):
    pass
