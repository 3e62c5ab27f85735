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
Reading SMBIOS dumps from files

usage:
    >>> read_file(filename)
    >>> validate_file_exists(filename)
"""

import os
from smbiosview.library.logger import logger


def read_file(filename: str) -> bytes:
    """
    Read the whole file after validating it.

    Returns:
        File contents as bytes, or empty bytes if validation fails
    """
    if not validate_file_exists(filename, "input file"):
        return b''

    try:
        with open(filename, 'rb') as f:
            _file = f.read()
            logger().log_debug(f"[file] Read {len(_file):d} bytes from '{filename:.256}'")
            return _file
    except OSError:
        logger().log_error(f"Unable to open file '{filename:.256}' for read access")
        return b''


def get_main_dir() -> str:
    path = os.path.abspath(os.path.join(os.path.dirname(__file__), os.path.pardir, os.path.pardir))
    return path


def validate_file_exists(filepath: str, file_type: str = "file") -> bool:
    """
    Validate that a file exists and is accessible.

    Args:
        filepath: Path to the file to validate
        file_type: Description of the file type for error messages

    Returns:
        True if file exists and is accessible, False otherwise
    """
    if not filepath:
        logger().log_error(f"Empty filepath provided for {file_type}")
        return False

    if not os.path.exists(filepath):
        logger().log_error(f"File not found: {file_type} '{filepath}'")
        return False

    if not os.path.isfile(filepath):
        logger().log_error(f"Path '{filepath}' exists but is not a file")
        return False

    return True
