#
# ----------------------------------------------------------------------------------------------------
#
# Copyright (c) 2026, Oracle and/or its affiliates. All rights reserved.
# DO NOT ALTER OR REMOVE COPYRIGHT NOTICES OR THIS FILE HEADER.
#
# This code is free software; you can redistribute it and/or modify it
# under the terms of the GNU General Public License version 2 only, as
# published by the Free Software Foundation.
#
# This code is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# version 2 for more details (a copy is included in the LICENSE file that
# accompanied this code).
#
# You should have received a copy of the GNU General Public License version
# 2 along with this work; if not, write to the Free Software Foundation,
# Inc., 51 Franklin St, Fifth Floor, Boston, MA 02110-1301 USA.
#
# Please contact Oracle, 500 Oracle Parkway, Redwood Shores, CA 94065 USA
# or visit www.oracle.com if you need additional information or have any
# questions.
#
# ----------------------------------------------------------------------------------------------------
#
"""
Reading and writing of the jar files being modularized.
"""

from __future__ import annotations

__all__ = [
    "ArchiveException",
    "CLASS_SUFFIX",
    "JAR_SUFFIX",
    "MODULE_INFO_CLASS",
    "MODULE_INFO_JAVA",
    "allocate_scratch_dir",
    "extract_archive",
    "find_module_descriptor_entry",
    "output_archive_name",
    "package_of",
    "patch_archive",
]

import os
import re
import tempfile
import time
from os.path import basename, dirname, isabs, join, normpath
from typing import Optional, Set
from zipfile import ZipFile, ZipInfo, ZIP_DEFLATED

from . import util
from .support.logging import logvv

JAR_SUFFIX = '.jar'
CLASS_SUFFIX = '.class'
MODULE_INFO_CLASS = 'module-info.class'
MODULE_INFO_JAVA = 'module-info.java'

_identifier_re = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


class ArchiveException(Exception):
    def __init__(self, value):
        Exception.__init__(self, value)


def output_archive_name(jar_name: str) -> str:
    """
    Gets the name of the modularized version of the jar named `jar_name`
    (e.g. ``foo-1.0.jar`` -> ``foo-1.0-mod.jar``).
    """
    stem = jar_name[:-len(JAR_SUFFIX)] if jar_name.endswith(JAR_SUFFIX) else jar_name
    return stem + '-mod' + JAR_SUFFIX


def allocate_scratch_dir(dest_dir: str, jar_name: str) -> str:
    """
    Creates a new, uniquely named directory in `dest_dir` to extract the jar named `jar_name` into.
    """
    util.ensure_dir_exists(dest_dir)
    return tempfile.mkdtemp(prefix=jar_name + '-', suffix='-temp', dir=dest_dir)


def package_of(entry_name: str) -> Optional[str]:
    """
    Gets the Java package of the class file entry `entry_name` (e.g. ``org/foo/Bar.class`` -> ``org.foo``).
    Returns None for classes in the unnamed package and for entries whose directory is not
    a valid package name (e.g. ``META-INF/versions/9/org/foo/Bar.class``).
    """
    slash = entry_name.rfind('/')
    if slash <= 0:
        return None
    segments = entry_name[:slash].split('/')
    if not all(_identifier_re.match(s) for s in segments):
        return None
    return '.'.join(segments)


def find_module_descriptor_entry(zf: ZipFile) -> Optional[str]:
    """
    Gets the name of the first compiled module descriptor in `zf`, including
    versioned descriptors of multi-release jars.
    """
    for name in zf.namelist():
        if basename(name) == MODULE_INFO_CLASS:
            return name
    return None


def _target_path(dest_dir: str, entry_name: str) -> str:
    relative = normpath(entry_name.replace('/', os.sep))
    if isabs(relative) or relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise ArchiveException(f'Entry "{entry_name}" points outside of the extraction directory')
    return join(dest_dir, relative)


def extract_archive(zf: ZipFile, dest_dir: str) -> Set[str]:
    """
    Extracts all entries of `zf` into `dest_dir`. Entries are processed sorted by name so
    that directory entries are created before the entries they contain.

    :return: the packages containing at least one class file
    :raises OSError: if an entry cannot be written
    :raises ArchiveException: if an entry would be written outside of `dest_dir`
    """
    packages = set()
    for info in sorted(zf.infolist(), key=lambda i: i.filename):
        target = _target_path(dest_dir, info.filename)
        if info.is_dir():
            util.ensure_dir_exists(target)
            continue
        if info.filename.endswith(CLASS_SUFFIX):
            package = package_of(info.filename)
            if package is not None:
                packages.add(package)
            else:
                logvv(f'[INFO] {info.filename} does not belong to an exportable package')
        util.ensure_dir_exists(dirname(target))
        with open(target, 'wb') as fp:
            fp.write(zf.read(info))
    return packages


def patch_archive(jar_path: str, module_info: bytes, output_path: str) -> None:
    """
    Creates `output_path` as an exact copy of the jar in `jar_path` with an additional
    ``module-info.class`` entry holding `module_info`. The output only appears once it has
    been completely written.

    :raises OSError: if the jar cannot be read or the output cannot be written
    """
    with util.SafeFileCreation(output_path) as sfc:
        with ZipFile(jar_path, 'r') as inzf, ZipFile(sfc.tmpPath, 'w', ZIP_DEFLATED) as outzf:
            for info in inzf.infolist():
                outzf.writestr(info, inzf.read(info))
            module_info_entry = ZipInfo(MODULE_INFO_CLASS, date_time=time.localtime(time.time())[:6])
            module_info_entry.compress_type = ZIP_DEFLATED
            outzf.writestr(module_info_entry, module_info)
