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
Tagged results returned by the stages of a modularization run.

A stage either succeeds (optionally with a value), fails in a way that only affects the
artifact being processed (``recoverable``) or fails in a way that ends the whole run
(``fatal``). Callers decide whether to continue by looking at `StageResult.outcome`.
"""

from __future__ import annotations

__all__ = [
    "SUCCESS",
    "RECOVERABLE",
    "FATAL",
    "StageResult",
    "success",
    "recoverable",
    "fatal",
]

from dataclasses import dataclass
from typing import Any, Optional

SUCCESS = 'success'
RECOVERABLE = 'recoverable'
FATAL = 'fatal'

# Failure kinds
SCRATCH_DIR = 'scratch-dir'
ALREADY_MODULAR = 'already-modular'
EXTRACTION = 'extraction'
DESCRIPTOR_SOURCE = 'descriptor-source'
COMPILER_LAUNCH = 'compiler-launch'
COMPILATION = 'compilation'
COMPILER_TIMEOUT = 'compiler-timeout'
MISSING_OUTPUT = 'missing-output'
PATCH = 'patch'
DESCRIPTOR = 'descriptor'
NO_ARCHIVES = 'no-archives'
DEPENDENCY_CYCLE = 'dependency-cycle'


@dataclass
class StageResult:
    outcome: str
    value: Any = None
    kind: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == SUCCESS

    @property
    def is_fatal(self) -> bool:
        return self.outcome == FATAL

    def __str__(self):
        if self.ok:
            return SUCCESS
        return f'{self.outcome} [{self.kind}]: {self.reason}'


def success(value: Any = None) -> StageResult:
    return StageResult(SUCCESS, value=value)


def recoverable(kind: str, reason: str) -> StageResult:
    return StageResult(RECOVERABLE, kind=kind, reason=reason)


def fatal(kind: str, reason: str) -> StageResult:
    return StageResult(FATAL, kind=kind, reason=reason)
