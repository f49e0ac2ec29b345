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
Compilation of ``module-info.java`` files with the ``javac`` of a JDK.

A `JavacCompiler` is created once per run and handed to the pipeline. Anything with a
compatible ``compile(source_dir, module_path)`` method can be used in its place.
"""

from __future__ import annotations

__all__ = [
    "CompilerTimeoutException",
    "DEFAULT_COMPILE_TIMEOUT",
    "JDKConfigException",
    "JavacCompiler",
    "escape_argument",
    "find_default_jdk_home",
    "validate_jdk_home",
]

import os
import shutil
from os.path import dirname, exists, isfile, join, realpath
from typing import List, Optional, Sequence

from .archive import MODULE_INFO_JAVA
from .support.envvars import get_env
from .support.logging import logv, warn
from .support.processes import list_to_cmd_line, run
from .support.system import exe_suffix

DEFAULT_COMPILE_TIMEOUT = 5.0
"""Seconds to wait for javac to compile a module descriptor"""

_SPECIAL_CHARS = [" ", "'", '"', "\n", "\r", "\t", "\f"]


class JDKConfigException(Exception):
    def __init__(self, value):
        Exception.__init__(self, value)


class CompilerTimeoutException(Exception):
    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        Exception.__init__(self, f'javac did not finish within {timeout} seconds. Command: {command}')


def escape_argument(arg: str) -> str:
    """
    Escapes a single command line argument for use in a javac ``@`` argument file.
    """
    if not arg:
        # Empty arguments need to be quoted, otherwise they are ignored
        return '""'
    if any((c in arg for c in _SPECIAL_CHARS)):
        escaped = (
            # Inside quotes, backslashes are escape characters
            arg.replace("\\", "\\\\")
            .replace("'", "\\'")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
            .replace("\f", "\\f")
        )
        return f'"{escaped}"'
    return arg


def _javac_path(jdk_home: str) -> str:
    return exe_suffix(join(jdk_home, 'bin', 'javac'))


def validate_jdk_home(jdk_home: Optional[str]) -> bool:
    """
    Determines if `jdk_home` is the root directory of a JDK with an executable javac.
    """
    if not jdk_home:
        return False
    javac = _javac_path(jdk_home)
    return isfile(javac) and os.access(javac, os.X_OK)


def find_default_jdk_home() -> Optional[str]:
    """
    Gets the JDK used when none is specified: the ``JAVA_HOME`` environment variable if it
    denotes a valid JDK, otherwise the JDK containing the ``javac`` found on the ``PATH``.
    """
    java_home = get_env('JAVA_HOME')
    if java_home:
        if validate_jdk_home(java_home):
            return java_home
        warn(f"JAVA_HOME '{java_home}' does not contain an executable javac. Searching the PATH.")
    javac = shutil.which('javac')
    if javac:
        # <jdk>/bin/javac
        return dirname(dirname(realpath(javac)))
    return None


class JavacCompiler(object):
    """
    Compiles module descriptors with ``javac``.

    :param str jdk_home: the JDK to use. If None, `find_default_jdk_home` is used.
    :param float timeout: seconds to wait for each javac invocation
    """
    def __init__(self, jdk_home: Optional[str] = None, timeout: Optional[float] = None):
        if jdk_home is None:
            jdk_home = find_default_jdk_home()
            if jdk_home is None:
                raise JDKConfigException('Could not find a JDK. Set JAVA_HOME or use --jdk-home.')
        if not validate_jdk_home(jdk_home):
            raise JDKConfigException(f"Invalid JDK_HOME '{jdk_home}'")
        self.jdk_home = realpath(jdk_home)
        self.javac = _javac_path(self.jdk_home)
        self.timeout = DEFAULT_COMPILE_TIMEOUT if timeout is None else timeout

    def __str__(self):
        return 'javac:' + self.jdk_home

    def command(self, source_dir: str, module_path: Optional[str]) -> List[str]:
        args = ['-d', source_dir]
        if module_path:
            args += ['--module-path', module_path]
        # Any output on stderr is treated as a failure so keep javac quiet about
        # options and modules it cannot check when compiling a lone descriptor.
        args.append('-Xlint:-options,-module')
        args.append(join(source_dir, MODULE_INFO_JAVA))
        return args

    def _write_args_file(self, source_dir: str, args: Sequence[str]) -> str:
        args_file = join(source_dir, '.javac_args')
        with open(args_file, 'w') as fp:
            for arg in args:
                fp.write(escape_argument(arg))
                fp.write(os.linesep)
        return args_file

    def compile(self, source_dir: str, module_path: Optional[str] = None) -> Optional[str]:
        """
        Compiles ``module-info.java`` in `source_dir`, writing ``module-info.class`` next to it.

        :param module_path: the module path containing the modules required by the descriptor
        :return: None if the compilation succeeded, otherwise the javac diagnostics
        :raises CompilerTimeoutException: if javac does not finish in time
        :raises OSError: if javac cannot be launched
        """
        assert exists(join(source_dir, MODULE_INFO_JAVA)), source_dir
        args = self.command(source_dir, module_path)
        cmd_line = list_to_cmd_line([self.javac] + args)
        logv('[INFO] ' + cmd_line)
        # Convert javac args to @args file
        args_file = self._write_args_file(source_dir, args)
        result = run([self.javac, '@' + args_file], timeout=self.timeout)
        if result.timed_out:
            raise CompilerTimeoutException(cmd_line, self.timeout)
        diagnostics = (result.stderr + result.stdout).strip()
        if result.returncode != 0 or result.stderr.strip():
            return 'Command: ' + cmd_line + '\n' + (diagnostics or f'javac exited with status {result.returncode}')
        return None
