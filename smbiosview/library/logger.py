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
Logging functions
"""
import logging
import platform
import string
import sys
import os
from typing import Optional
from enum import Enum

LOGGER_NAME = 'SMBIOSVIEW_LOGGER'


class level(Enum):
    DEBUG = 10
    HAL = 12
    VERBOSE = 13
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class smbiosFilter(logging.Filter):
    def filter(self, record):
        if record.levelno == level.ERROR.value:
            record.additional = 'ERROR: '
        elif record.levelno == level.WARNING.value:
            record.additional = 'WARNING: '
        elif record.levelno == level.DEBUG.value:
            record.additional = '[*] [DEBUG] '
        elif record.levelno == level.VERBOSE.value:
            record.additional = '[*] [VERBOSE] '
        elif record.levelno == level.HAL.value:
            record.additional = '[*] [HAL] '
        else:
            record.additional = ''
        return True


class smbiosLogFormatter(logging.Formatter):
    def format(self, record):
        if not hasattr(record, 'additional'):
            record.additional = ''
        return super().format(record)


class smbiosStreamFormatter(logging.Formatter):
    try:
        is_atty = sys.stdout.isatty()
    except AttributeError:
        is_atty = False
    # Respect https://no-color.org/ convention, and disable colorization
    # when the output is not a terminal (eg. redirection to a file)
    mPlatform = platform.system().lower()
    if is_atty and os.getenv('NO_COLOR') is None and (("windows" == mPlatform) or "linux" == mPlatform):
        if mPlatform == 'windows':
            _ = os.system('color')
        colors = {
            'GREY': '\033[90m',
            'RED': '\033[91m',
            'YELLOW': '\033[93m',
            'BLUE': '\033[94m',
            'PURPLE': '\033[95m',
            'WHITE': '\033[97m',
            'END': '\033[0m'}
    else:
        colors = {}

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, style='%') -> None:
        super().__init__(fmt, datefmt, style)
        self.infmt = fmt

    def format(self, record):
        if record.levelno == level.DEBUG.value:
            color = 'BLUE'
        elif record.levelno in [level.VERBOSE.value, level.HAL.value]:
            color = 'GREY'
        elif record.levelno == level.WARNING.value:
            color = 'YELLOW'
        elif record.levelno == level.ERROR.value:
            color = 'RED'
        elif record.levelno == level.CRITICAL.value:
            color = 'PURPLE'
        else:
            color = 'WHITE'
        if not hasattr(record, 'additional'):
            record.additional = ''
        if color in self.colors:
            log_fmt = f'{self.colors[color]}{self.infmt}{self.colors["END"]}'
        else:
            log_fmt = self.infmt
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


class Logger:
    """Class for logging to console and text file."""

    def __init__(self):
        """The Constructor."""
        self.logfile = None
        self.logstream = logging.StreamHandler(sys.stdout)
        self.smbiosLogger = logging.getLogger(LOGGER_NAME)
        self.smbiosLogger.setLevel(logging.INFO)
        if not self.smbiosLogger.handlers:
            self.smbiosLogger.addHandler(self.logstream)
        if not self.smbiosLogger.filters:
            self.smbiosLogger.addFilter(smbiosFilter(LOGGER_NAME))
        self.smbiosLogger.propagate = False
        for lvl in (level.HAL, level.VERBOSE):
            logging.addLevelName(lvl.value, lvl.name)
        streamFormatter = smbiosStreamFormatter('%(additional)s%(message)s')
        self.logstream.setFormatter(streamFormatter)
        self.logFormatter = smbiosLogFormatter('%(additional)s%(message)s')

    def log(self, text: str, level: level = level.INFO) -> None:
        """Sends plain text to logging."""
        # firmware strings may contain '%'
        self.smbiosLogger.log(level.value, '%s', text)

    def log_verbose(self, text: str) -> None:
        """Logs a Verbose message"""
        self.log(text, level.VERBOSE)

    def log_hal(self, text: str) -> None:
        """Logs a hal message"""
        self.log(text, level.HAL)

    def log_debug(self, text: str) -> None:
        """Logs a debug message"""
        self.log(text, level.DEBUG)

    def log_error(self, text: str) -> None:
        """Logs an Error message"""
        self.log(text, level.ERROR)

    def log_warning(self, text: str) -> None:
        """Logs a Warning message"""
        self.log(text, level.WARNING)

    def set_log_level(self, verbose: bool, hal: bool, debug: bool, vverbose: bool) -> None:
        self.VERBOSE = True if verbose or vverbose else self.VERBOSE
        self.HAL = True if hal or vverbose else self.HAL
        self.DEBUG = True if debug or vverbose else self.DEBUG
        self.setlevel()

    def setlevel(self) -> None:
        if self.DEBUG:
            self.smbiosLogger.setLevel(level.DEBUG.value)
        elif self.HAL:
            self.smbiosLogger.setLevel(level.HAL.value)
        elif self.VERBOSE:
            self.smbiosLogger.setLevel(level.VERBOSE.value)
        else:
            self.smbiosLogger.setLevel(level.INFO.value)

    def set_log_file(self, name: str) -> None:
        """Sets the log file for the output."""
        # Close current log file if it's opened
        self.disable()

        # specifying empty string (name='') effectively disables logging to file
        if name:
            self.LOG_FILE_NAME = name
            try:
                self.logfile = logging.FileHandler(filename=self.LOG_FILE_NAME, mode='a')
            except OSError:
                print(f'WARNING: Could not open log file: {self.LOG_FILE_NAME}')
            else:
                self.smbiosLogger.addHandler(self.logfile)
                self.logfile.setFormatter(self.logFormatter)
                self.smbiosLogger.removeHandler(self.logstream)
        else:
            self.smbiosLogger.addHandler(self.logstream)

    def close(self) -> None:
        """Closes the log file."""
        if self.logfile:
            try:
                self.smbiosLogger.removeHandler(self.logfile)
                self.logfile.close()
                self.logstream.flush()
            finally:
                self.logfile = None
            self.smbiosLogger.addHandler(self.logstream)

    def disable(self) -> None:
        """Disables the logging to file and closes the file if any."""
        self.LOG_FILE_NAME = ''
        self.close()

    VERBOSE: bool = False
    HAL: bool = False
    DEBUG: bool = False

    LOG_FILE_NAME: str = ''


_logger = Logger()


def logger() -> Logger:
    """Returns a Logger instance."""
    return _logger

##################################################################################
# Hex dump functions
##################################################################################


def dump_buffer_bytes(arr: bytes, length: int = 8) -> str:
    """Dumps the buffer (bytes, bytearray) with ASCII"""
    output = []
    num_string = []
    ascii_string = []
    index = 1
    for c in arr:
        num_string += [f'{c:02X} ']
        if not (chr(c) in string.printable) or (chr(c) in string.whitespace):
            ascii_string += [' ']
        else:
            ascii_string += [chr(c)]
        if (index % length) == 0:
            num_string += ['| ']
            num_string += ascii_string
            output.append(''.join(num_string))
            ascii_string = []
            num_string = []
        index += 1
    if 0 != (len(arr) % length):
        num_string += [(length - len(arr) % length) * 3 * ' ']
        num_string += ['| ']
        num_string += ascii_string
        output.append(''.join(num_string))
    return '\n'.join(output)


def print_buffer_bytes(arr: bytes, length: int = 16) -> None:
    """Prints the buffer (bytes, bytearray) with ASCII"""
    prt_str = dump_buffer_bytes(arr, length)
    logger().log(prt_str)
