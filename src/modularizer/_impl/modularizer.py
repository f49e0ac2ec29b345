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
Drives a complete modularization run: loads the descriptor, orders the artifacts by
their dependencies and modularizes the matching jars of the source directory one by one.
"""

from __future__ import annotations

__all__ = ["ModularizerConfig", "Modularizer", "list_source_jars"]

import os
from dataclasses import dataclass
from os.path import isfile, join
from typing import List, Optional, Tuple

from . import results
from .archive import JAR_SUFFIX
from .descriptor import Artifact, DescriptorException, load_descriptor
from .ordering import DependencyCycleError, sort_artifacts
from .pipeline import modularize_archive
from .results import StageResult
from .support.logging import log, log_error, logv


@dataclass
class ModularizerConfig:
    descriptor: str
    source_dir: str
    dest_dir: Optional[str] = None
    """Defaults to the ``mods`` directory in `source_dir`"""
    module_path: Optional[str] = None
    sort_strategy: str = 'graph'
    keep_scratch: bool = False

    def __post_init__(self):
        if self.dest_dir is None:
            self.dest_dir = join(self.source_dir, 'mods')


def list_source_jars(source_dir: str) -> List[str]:
    """
    Gets the names of the jar files directly contained in `source_dir`, sorted by name.

    :raises OSError: if `source_dir` cannot be listed
    """
    return sorted(n for n in os.listdir(source_dir) if n.endswith(JAR_SUFFIX) and isfile(join(source_dir, n)))


class Modularizer(object):
    """
    A single modularization run. The run moves through the states
    ``idle -> loading -> sorting -> processing -> done`` or ends in ``failed`` when a
    fatal error prevents any jar from being processed.

    :param ModularizerConfig config: what to modularize
    :param compiler: the module descriptor compiler, typically a `JavacCompiler`
    """

    IDLE = 'idle'
    LOADING = 'loading'
    SORTING = 'sorting'
    PROCESSING = 'processing'
    DONE = 'done'
    FAILED = 'failed'

    def __init__(self, config: ModularizerConfig, compiler):
        self.config = config
        self.compiler = compiler
        self.state = Modularizer.IDLE
        self.artifacts: List[Artifact] = []
        self.order: List[Artifact] = []
        self.failures: List[Tuple[str, StageResult]] = []
        self.count_modularized = 0
        self.count_errors = 0

    @property
    def successful(self) -> bool:
        return self.state == Modularizer.DONE and self.count_errors == 0

    def _fail(self, result: StageResult) -> StageResult:
        self.state = Modularizer.FAILED
        log_error('[ERROR] ' + result.reason)
        return result

    def start(self) -> StageResult:
        """
        Runs the modularization.

        :return: a fatal result if the run could not be started, otherwise a successful result
                 whose value is True iff every matched jar was modularized
        """
        assert self.state == Modularizer.IDLE, self.state

        self.state = Modularizer.LOADING
        try:
            self.artifacts = load_descriptor(self.config.descriptor)
        except DescriptorException as e:
            return self._fail(results.fatal(results.DESCRIPTOR, str(e)))
        if not self.artifacts:
            return self._fail(results.fatal(results.DESCRIPTOR, 'Empty descriptor.'))
        try:
            jar_names = list_source_jars(self.config.source_dir)
        except OSError as e:
            return self._fail(results.fatal(results.NO_ARCHIVES, f'Can not read source directory. {e}'))
        if not jar_names:
            return self._fail(results.fatal(results.NO_ARCHIVES, 'There are no JAR files in source directory'))

        self.state = Modularizer.SORTING
        try:
            self.order = sort_artifacts(self.artifacts, self.config.sort_strategy)
        except DependencyCycleError as e:
            return self._fail(results.fatal(results.DEPENDENCY_CYCLE, str(e)))

        self.state = Modularizer.PROCESSING
        for artifact in self.order:
            jar_name = next((n for n in jar_names if n == artifact.name), None)
            if jar_name is None:
                logv(f"[INFO] '{artifact.name}' not found in source directory")
                continue
            self._process(join(self.config.source_dir, jar_name), artifact)

        self.state = Modularizer.DONE
        return results.success(self.count_errors == 0)

    def _process(self, jar_path: str, artifact: Artifact) -> None:
        jar_name = os.path.basename(jar_path)
        result = modularize_archive(jar_path, artifact, self.config.dest_dir, self.compiler,
                                    module_path=self.config.module_path, keep_scratch=self.config.keep_scratch)
        if result.ok:
            self.count_modularized += 1
            log(f"[INFO] '{jar_name}' modularized to module '{artifact.module.name}'")
        else:
            self.count_errors += 1
            self.failures.append((jar_name, result))
            log_error(f"[ERROR] Error modularizing JAR file '{jar_name}' [{result.kind}]. {result.reason}")
