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
#
# File system utility functions used by the modularization pipeline.
#
# This module must only import from the standard Python library
#

import errno
import os
import shutil
import stat
import sys
import tempfile
from os.path import basename, dirname, exists, isdir, islink

__all__ = ["ensure_dir_exists", "rmtree", "SafeFileCreation"]


def ensure_dir_exists(path):
    """
    Ensures all directories on 'path' exists, creating them first if necessary with os.makedirs().
    """
    if not isdir(path):
        try:
            os.makedirs(path)
        except OSError as e:
            if e.errno == errno.EEXIST and isdir(path):
                # be happy if another process already created the path
                pass
            else:
                raise e
    return path


def rmtree(path, ignore_errors=False):
    """
    Removes `path` recursively. Read-only files are made writable first on Windows.
    Errors propagate as `OSError` unless `ignore_errors` is true.
    """
    if ignore_errors:
        def on_error(*args):
            pass
    elif sys.platform.startswith('win32'):
        def on_error(func, _path, exc_info):
            os.chmod(_path, stat.S_IWRITE)
            if isdir(_path):
                os.rmdir(_path)
            else:
                os.unlink(_path)
    else:
        def on_error(func, _path, exc_info):
            raise exc_info[1]
    if isdir(path) and not islink(path):
        shutil.rmtree(path, onerror=on_error)
    elif exists(path) or islink(path):
        try:
            os.remove(path)
        except OSError:
            on_error(os.remove, path, sys.exc_info())


# Capture the current umask since there's no way to query it without mutating it.
_current_umask = os.umask(0)
os.umask(_current_umask)

class SafeFileCreation(object):
    """
    Context manager for creating a file that only appears under its final name once it has
    been completely written. If the body of the ``with`` statement raises, the temporary file
    is deleted and any pre-existing file at the destination is left untouched.

    :Example:

    with SafeFileCreation(dst) as sfc:
        with ZipFile(sfc.tmpPath, 'w') as zf:
            ...

    """
    def __init__(self, path):
        self.path = path

    def __enter__(self):
        path_dir = dirname(self.path) or os.curdir
        ensure_dir_exists(path_dir)
        # Temporary file must be on the same file system as self.path for os.replace to be atomic.
        fd, tmp = tempfile.mkstemp(suffix=basename(self.path), dir=path_dir)
        self.tmpFd = fd
        self.tmpPath = tmp
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        # Windows will complain about tmp being in use by another process
        # when renaming it if we don't close the file descriptor.
        os.close(self.tmpFd)
        if exists(self.tmpPath):
            if exc_value:
                # If an error occurred, delete the temp file
                # instead of renaming it
                os.remove(self.tmpPath)
            else:
                # Correct the permissions on the temporary file which is created with restrictive permissions
                os.chmod(self.tmpPath, 0o666 & ~_current_umask)
                os.replace(self.tmpPath, self.path)
