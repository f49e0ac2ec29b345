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
from __future__ import annotations

__all__ = ["ERROR_TIMEOUT", "ProcessResult", "list_to_cmd_line", "run", "terminate_subprocesses"]

import os, shlex, signal, subprocess, time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .logging import log, log_error, logv, logvv
from .system import is_windows

Pid = int
Signal = int
Args = Sequence[str]
ReturnCode = int

# Makes the current subprocess accessible to the abort() function
# This is a list of tuples of the subprocess.Popen object and args.
_currentSubprocesses: List[Tuple[subprocess.Popen, Args]] = []

ERROR_TIMEOUT = 0x700000000  # not 32 bits


@dataclass
class ProcessResult:
    returncode: ReturnCode
    stdout: str = ""
    stderr: str = ""

    @property
    def timed_out(self) -> bool:
        return self.returncode == ERROR_TIMEOUT


def _is_process_alive(p: subprocess.Popen) -> bool:
    return p.poll() is None


def terminate_subprocesses(killsig: Signal = signal.SIGTERM) -> None:
    for p, args in list(_currentSubprocesses):
        if _is_process_alive(p):
            if is_windows():
                p.terminate()
            else:
                _kill_process(p.pid, killsig)
            time.sleep(0.1)
        if _is_process_alive(p):
            try:
                if is_windows():
                    p.terminate()
                else:
                    _kill_process(p.pid, signal.SIGKILL)
            except OSError as e:
                if _is_process_alive(p):
                    log_error(f"error while killing subprocess {p.pid} \"{' '.join(args)}\": {e}")


def _kill_process(pid: Pid, sig: Signal) -> bool:
    """
    Sends the signal `sig` to the process identified by `pid`. If `pid` is a process group
    leader, then signal is sent to the process group id.
    """
    try:
        logvv(f"[{os.getpid()} sending {sig} to {pid}]")
        pgid = os.getpgid(pid)
        if pgid == pid:
            os.killpg(pgid, sig)
        else:
            os.kill(pid, sig)
        return True
    except OSError as e:
        log("Error killing subprocess " + str(pid) + ": " + str(e))
        return False


def _addSubprocess(p: subprocess.Popen, args: Args) -> Tuple[subprocess.Popen, Args]:
    entry = (p, args)
    logvv(f"[{os.getpid()}: started subprocess {p.pid}: {args}]")
    _currentSubprocesses.append(entry)
    return entry


def _removeSubprocess(entry: Tuple[subprocess.Popen, Args]) -> None:
    if entry and entry in _currentSubprocesses:
        _currentSubprocesses.remove(entry)


def _get_new_progress_group_args():
    """
    Gets a tuple containing the `start_new_session` and `creationflags` parameters to subprocess.Popen
    required to create a subprocess that can be killed via os.killpg without killing the
    process group of the parent process.
    """
    start_new_session = False
    creationflags = 0
    if is_windows():
        creationflags = subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        start_new_session = True
    return start_new_session, creationflags


def list_to_cmd_line(args: Args) -> str:
    return subprocess.list2cmdline(args) if is_windows() else " ".join(shlex.quote(arg) for arg in args)


def run(args: List[str], timeout: Optional[float] = None, cwd=None, env=None) -> ProcessResult:
    """
    Runs a command in a subprocess, waits at most `timeout` seconds for it to complete and
    returns its exit status together with the captured output.

    If the command times out, the subprocess (and its process group) is killed and the
    returned result has `ERROR_TIMEOUT` as exit status. A command that cannot be launched
    at all raises `OSError`.
    """
    assert isinstance(args, list), "'args' must be a list: " + str(args)
    logv(list_to_cmd_line(args))

    start_new_session, creationflags = _get_new_progress_group_args()
    p = subprocess.Popen(args, cwd=cwd, env=env, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                         start_new_session=start_new_session, creationflags=creationflags)
    sub = _addSubprocess(p, args)
    try:
        try:
            out, err = p.communicate(timeout=timeout)
            returncode = p.returncode
        except subprocess.TimeoutExpired:
            log_error(f"Process timed out after {timeout} seconds: {list_to_cmd_line(args)}")
            if is_windows():
                p.kill()
            else:
                _kill_process(p.pid, signal.SIGKILL)
            out, err = p.communicate()
            returncode = ERROR_TIMEOUT
    finally:
        _removeSubprocess(sub)
    return ProcessResult(returncode, out.decode(errors="replace"), err.decode(errors="replace"))
