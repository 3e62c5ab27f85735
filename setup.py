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
Setup module to install smbiosview package via setuptools
"""

import os
from setuptools import setup, find_packages, __version__ as _sutver

if _sutver and int(_sutver.split('.')[0]) < 62:
    raise RuntimeError("Setuptools version must be greater than 62.0.0. Please upgrade using 'pip install setuptools --upgrade'")


def long_description():
    return open('README').read()


def version():
    return open(os.path.join('smbiosview', 'VERSION')).read().strip()


package_data = {
    # Include any configuration file.
    '': ['*.ini', '*.cfg', '*.json'],
    'smbiosview': ['*VERSION*', 'options/*.ini'],
}
install_requires = []

setup(
    name='smbiosview',
    version=version(),
    description='SMBIOSVIEW: SMBIOS Structure Table Decoder',
    license='GNU General Public License v2 (GPLv2)',
    platforms=['any'],
    long_description=long_description(),

    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'License :: OSI Approved :: GNU General Public License v2 (GPLv2)',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Hardware'
    ],

    packages=find_packages(exclude=['tests.*', 'tests']),
    package_data=package_data,
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },

    py_modules=['smbiosview_util'],
    entry_points={
        'console_scripts': [
            'smbiosview_util=smbiosview_util:main',
        ],
    },
    test_suite='tests',
)
