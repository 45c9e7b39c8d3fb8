#!/usr/bin/env python3
# PSPSCAN: AMD PSP Firmware Inventory
# Copyright (c) 2024, PSPSCAN Team
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
Setup module to install pspscan package via setuptools
"""

import os
from setuptools import setup, find_packages


def long_description():
    return open('README').read()


def version():
    return open(os.path.join('pspscan', 'VERSION')).read().strip()


package_data = {
    'pspscan': ['VERSION', 'options/*.ini'],
}
install_requires = []

setup(
    name='pspscan',
    version=version(),
    description='PSPSCAN: AMD PSP Firmware Inventory',
    author='PSPSCAN Team',
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
        'Topic :: Security',
        'Topic :: System :: Hardware'
    ],

    packages=find_packages(exclude=['tests.*', 'tests']),
    package_data=package_data,
    install_requires=install_requires,
    python_requires='>=3.8',

    py_modules=['pspscan_util'],
    entry_points={
        'console_scripts': [
            'pspscan_util=pspscan_util:main',
        ],
    },
)
