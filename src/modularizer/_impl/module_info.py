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
Synthesis of the module descriptor of an artifact.
"""

from __future__ import annotations

__all__ = ["as_module_info", "synthesize_module_descriptor"]

from io import StringIO
from os.path import exists, join
from typing import Iterable, Optional

from . import results
from .archive import MODULE_INFO_CLASS, MODULE_INFO_JAVA
from .descriptor import Module
from .javac import CompilerTimeoutException
from .results import StageResult


def as_module_info(module: Module, inferred_packages: Iterable[str]) -> str:
    """
    Gets the contents of the ``module-info.java`` file for `module`.

    :param inferred_packages: the packages exported if `module` does not list its exports explicitly
    """
    if module.exportsPackages is not None:
        exports = module.exportsPackages
    else:
        exports = sorted(inferred_packages)
    out = StringIO()
    print('module ' + module.name + ' {', file=out)
    for package in exports:
        print('    exports ' + package + ';', file=out)
    for required in module.requiresModules or []:
        print('    requires ' + required + ';', file=out)
    print('}', file=out)
    return out.getvalue()


def synthesize_module_descriptor(scratch_dir: str, module: Module, inferred_packages: Iterable[str],
                                 compiler, module_path: Optional[str]) -> StageResult:
    """
    Writes ``module-info.java`` for `module` into `scratch_dir`, compiles it with `compiler`
    and reads back the compiled descriptor.

    :return: a successful result holding the bytes of ``module-info.class`` or a recoverable failure
    """
    module_info_java = join(scratch_dir, MODULE_INFO_JAVA)
    try:
        with open(module_info_java, 'w', encoding='utf-8') as fp:
            fp.write(as_module_info(module, inferred_packages))
    except OSError as e:
        return results.recoverable(results.DESCRIPTOR_SOURCE, f'Error writing {MODULE_INFO_JAVA}. {e}')

    try:
        diagnostics = compiler.compile(scratch_dir, module_path)
    except CompilerTimeoutException as e:
        return results.recoverable(results.COMPILER_TIMEOUT, str(e))
    except OSError as e:
        return results.recoverable(results.COMPILER_LAUNCH, f'Can not run the compiler. {e}')
    if diagnostics:
        return results.recoverable(results.COMPILATION, f'Can not compile {MODULE_INFO_JAVA}.\n{diagnostics}')

    module_info_class = join(scratch_dir, MODULE_INFO_CLASS)
    if not exists(module_info_class):
        return results.recoverable(results.MISSING_OUTPUT, f'The compiler did not produce {MODULE_INFO_CLASS}')
    try:
        with open(module_info_class, 'rb') as fp:
            return results.success(fp.read())
    except OSError as e:
        return results.recoverable(results.MISSING_OUTPUT, f'Error reading {MODULE_INFO_CLASS}. {e}')
