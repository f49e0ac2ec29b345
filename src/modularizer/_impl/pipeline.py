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
The modularization of a single jar: extraction, synthesis and compilation of the module
descriptor, patching of a copy of the jar and cleanup of the scratch directory.

Failures never propagate as exceptions out of `modularize_archive`; they are returned
as recoverable results so that the remaining jars can still be processed.
"""

from __future__ import annotations

__all__ = ["compile_module_path", "modularize_archive"]

import os
import zipfile
from os.path import basename, join
from typing import Optional

from . import results, util
from .archive import (ArchiveException, allocate_scratch_dir, extract_archive,
                      find_module_descriptor_entry, output_archive_name, patch_archive)
from .descriptor import Artifact
from .module_info import synthesize_module_descriptor
from .results import StageResult
from .support.logging import logv, warn


def compile_module_path(dest_dir: str, module_path: Optional[str]) -> str:
    """
    Gets the module path used to compile descriptors: the destination directory, which holds
    the already modularized jars, followed by the user supplied module path.
    """
    return dest_dir + (os.pathsep + module_path if module_path else '')


def _extract(jar_path: str, scratch_dir: str) -> StageResult:
    try:
        with zipfile.ZipFile(jar_path, 'r') as zf:
            descriptor = find_module_descriptor_entry(zf)
            if descriptor is not None:
                return results.recoverable(results.ALREADY_MODULAR,
                                           f'JAR file contains at least one module definition ({descriptor}).')
            return results.success(extract_archive(zf, scratch_dir))
    except (OSError, zipfile.BadZipFile, ArchiveException) as e:
        return results.recoverable(results.EXTRACTION, f'Error extracting JAR file. {e}')


def _patch(jar_path: str, module_info: bytes, output_path: str) -> StageResult:
    try:
        patch_archive(jar_path, module_info, output_path)
        return results.success(output_path)
    except (OSError, zipfile.BadZipFile) as e:
        return results.recoverable(results.PATCH, f'Error patching original JAR file. {e}')


def _remove_scratch_dir(scratch_dir: str) -> None:
    try:
        util.rmtree(scratch_dir)
    except OSError as e:
        warn(f"Error while removing temp dir '{basename(scratch_dir)}'. {e}")


def modularize_archive(jar_path: str, artifact: Artifact, dest_dir: str, compiler,
                       module_path: Optional[str] = None, keep_scratch: bool = False) -> StageResult:
    """
    Creates the modular version of the jar in `jar_path` in `dest_dir`.

    :param Artifact artifact: the descriptor entry matching the jar
    :param compiler: the compiler used for ``module-info.java`` (see `JavacCompiler.compile`)
    :param str module_path: additional module path entries needed to compile the descriptor
    :param bool keep_scratch: do not delete the extraction directory afterwards
    :return: a successful result holding the path of the created jar or a recoverable failure
    """
    jar_name = basename(jar_path)
    try:
        scratch_dir = allocate_scratch_dir(dest_dir, jar_name)
    except OSError as e:
        return results.recoverable(results.SCRATCH_DIR, f'Can not create temp dir in {dest_dir}. {e}')
    logv(f'[INFO] Extracting {jar_name} to {scratch_dir}')
    try:
        extracted = _extract(jar_path, scratch_dir)
        if not extracted.ok:
            return extracted

        compiled = synthesize_module_descriptor(scratch_dir, artifact.module, extracted.value,
                                                compiler, compile_module_path(dest_dir, module_path))
        if not compiled.ok:
            return compiled

        return _patch(jar_path, compiled.value, join(dest_dir, output_archive_name(jar_name)))
    finally:
        if keep_scratch:
            logv(f'[INFO] Keeping temp dir {scratch_dir}')
        else:
            _remove_scratch_dir(scratch_dir)
