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
The modularizer package: converts plain JAR files into Java modules as described
by a modularization descriptor.

DO NOT WRITE IMPLEMENTATION CODE HERE. The implementation lives in ``modularizer._impl``.
"""

from ._impl.descriptor import Artifact, DescriptorException, Module, load_descriptor, parse_descriptor
from ._impl.ordering import DependencyCycleError, sort_artifacts
from ._impl.javac import CompilerTimeoutException, JDKConfigException, JavacCompiler
from ._impl.pipeline import modularize_archive
from ._impl.modularizer import Modularizer, ModularizerConfig
from ._impl.results import StageResult
from ._impl.cli import main, version

__version__ = version

__all__ = [
    "Artifact",
    "CompilerTimeoutException",
    "DependencyCycleError",
    "DescriptorException",
    "JDKConfigException",
    "JavacCompiler",
    "Module",
    "Modularizer",
    "ModularizerConfig",
    "StageResult",
    "load_descriptor",
    "main",
    "modularize_archive",
    "parse_descriptor",
    "sort_artifacts",
]
