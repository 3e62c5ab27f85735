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
Banner functions
"""

import platform
import sys
from typing import Sequence, Tuple
from smbiosview.library.logger import logger


def smbiosview_banner(arguments: Sequence[str], version: str) -> str:
    """Creates the SMBIOSVIEW banner string"""
    args = ' '.join(arguments)
    banner = f'''
################################################################
##                                                            ##
##  SMBIOSVIEW: SMBIOS Structure Table Decoder                ##
##                                                            ##
################################################################
[SMBIOSVIEW] Version  : {version}
[SMBIOSVIEW] Arguments: {args}'''
    return banner


def print_banner(arguments: Sequence[str], version: str) -> None:
    logger().log(smbiosview_banner(arguments, version))


def smbiosview_banner_properties(os_version: Tuple[str, str, str, str]) -> str:
    """Creates the SMBIOSVIEW properties banner string"""
    (system, release, version, machine) = os_version
    is_python_64 = True if (sys.maxsize > 2**32) else False
    python_version = platform.python_version()
    python_arch = '64-bit' if is_python_64 else '32-bit'
    return f'''[SMBIOSVIEW] OS      : {system} {release} {version} {machine}
[SMBIOSVIEW] Python  : {python_version} ({python_arch})
'''


def print_banner_properties(os_version: Tuple[str, str, str, str]) -> None:
    logger().log(smbiosview_banner_properties(os_version))
