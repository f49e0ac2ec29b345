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
Command line interface of the jar modularizer.
"""

from __future__ import annotations

__all__ = ["ArgParser", "main", "version"]

import sys
import time
from argparse import ArgumentParser, HelpFormatter
from os.path import exists, isdir, isfile
from typing import List, Optional

from .javac import DEFAULT_COMPILE_TIMEOUT, JDKConfigException, JavacCompiler, validate_jdk_home
from .modularizer import Modularizer, ModularizerConfig
from .ordering import SORT_STRATEGIES
from .support.envvars import env_var_to_bool, env_var_to_float
from .support.logging import abort, log, warn
from .support.options import ArgsNamespace, _opts, set_opts

prod_name = 'JarModularizer'
version = '1.0.1'

EXIT_PARTIAL_FAILURE = 1
EXIT_FATAL = 2

_separator = '-' * 68


class ArgParser(ArgumentParser):
    # Override parent to append the environment variables
    def format_help(self):
        return ArgumentParser.format_help(self) + """
environment variables:
  JAVA_HOME                     Default JDK directory. Can be overridden with --jdk-home option.
  MODULARIZER_COMPILE_TIMEOUT   Default value for --compile-timeout.
  MODULARIZER_KEEP_SCRATCH      Keep extraction directories (same as --keep-scratch).
"""

    def __init__(self):
        ArgumentParser.__init__(self, prog='jar-modularizer',
                                description=f'Welcome to {prod_name}! Converts plain JAR files into Java modules.',
                                formatter_class=lambda prog: HelpFormatter(prog, max_help_position=32, width=120))
        self.add_argument('--descriptor', help='path to modularization descriptor file', metavar='<path>')
        self.add_argument('--source', help='path to directory containing source JAR files', metavar='<path>')
        self.add_argument('--dest', help='path to modularized JAR files destination directory. Will be created if it does not exist. Default is <source>/mods', metavar='<path>')
        self.add_argument('--module-path', dest='module_path', help='path group of directories and/or files containing depending modules', metavar='<path-group>')
        self.add_argument('--jdk-home', dest='jdk_home', help='path to JDK root directory. Default is $JAVA_HOME or the JDK of the javac on the PATH', metavar='<path>')
        self.add_argument('--compile-timeout', dest='compile_timeout', type=float,
                          default=env_var_to_float('MODULARIZER_COMPILE_TIMEOUT', DEFAULT_COMPILE_TIMEOUT),
                          help=f'seconds to wait for javac to compile a module descriptor (default: {DEFAULT_COMPILE_TIMEOUT})', metavar='<secs>')
        self.add_argument('--sort-strategy', dest='sort_strategy', choices=SORT_STRATEGIES, default='graph',
                          help='algorithm used to order the artifacts by their dependencies')
        self.add_argument('--keep-scratch', dest='keep_scratch', action='store_true',
                          default=env_var_to_bool('MODULARIZER_KEEP_SCRATCH'),
                          help='do not delete the directories the JAR files are extracted to')
        self.add_argument('-v', action='store_true', dest='verbose', help='enable verbose output')
        self.add_argument('-V', action='store_true', dest='very_verbose', help='enable very verbose output')
        self.add_argument('--no-warning', action='store_false', dest='warn', help='disable warning messages')
        self.add_argument('--quiet', action='store_true', help='disable log messages')
        self.add_argument('--version', action='store_true', help='display program version and exit')


def _check_args(opts: ArgsNamespace) -> None:
    """
    Validates the paths given on the command line, aborting on invalid mandatory arguments.
    """
    if not opts.descriptor or not opts.source:
        abort(EXIT_FATAL, 'Invalid execution. Mandatory params must be passed (--descriptor and --source).\n\nRun with --help or -h')
    if not exists(opts.descriptor):
        abort(EXIT_FATAL, f'[ERROR] Descriptor file not exist ({opts.descriptor})')
    if not isfile(opts.descriptor):
        abort(EXIT_FATAL, f'[ERROR] Descriptor is not a file ({opts.descriptor})')
    if not exists(opts.source):
        abort(EXIT_FATAL, f'[ERROR] Source directory not exist ({opts.source})')
    if not isdir(opts.source):
        abort(EXIT_FATAL, f'[ERROR] Source is not a directory ({opts.source})')
    if opts.dest and exists(opts.dest) and not isdir(opts.dest):
        abort(EXIT_FATAL, f'[ERROR] Destination is not a directory ({opts.dest})')
    if opts.jdk_home and not validate_jdk_home(opts.jdk_home):
        warn(f"Invalid JDK_HOME '{opts.jdk_home}'. Default will be used.")
        opts.jdk_home = None
    if opts.compile_timeout is not None and opts.compile_timeout <= 0:
        abort(EXIT_FATAL, f'[ERROR] --compile-timeout must be positive, not {opts.compile_timeout}')


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(int(minutes), 60)
    s = ''
    if hours:
        s += f'{hours}h '
    if hours or minutes:
        s += f'{minutes}m '
    return s + f'{secs:.3f}s'


def main(args: Optional[List[str]] = None) -> int:
    """
    Runs the modularizer with the command line arguments `args` (``sys.argv[1:]`` if None).

    :return: 0 if every JAR was modularized, 1 if some failed and 2 if the run could not be done
    :raises SystemExit: with status 2 for invalid arguments or when no JDK can be found
    """
    if args is None:
        args = sys.argv[1:]
    parser = ArgParser()
    if not args:
        abort(EXIT_FATAL, '\nInvalid execution\n\nRun with --help or -h')
    opts = parser.parse_args(args, namespace=ArgsNamespace())
    set_opts(opts)

    if _opts.version:
        log('Version: ' + version)
        return 0

    _check_args(_opts)

    try:
        compiler = JavacCompiler(_opts.jdk_home, timeout=_opts.compile_timeout)
    except JDKConfigException as e:
        abort(EXIT_FATAL, f'[ERROR] {e}')
    config = ModularizerConfig(_opts.descriptor, _opts.source, dest_dir=_opts.dest, module_path=_opts.module_path,
                               sort_strategy=_opts.sort_strategy, keep_scratch=_opts.keep_scratch)

    log()
    log('Starting modularization process...')
    log(_separator)
    log()
    log('[INFO] Using JDK_HOME: ' + compiler.jdk_home)
    log()

    modularizer = Modularizer(config, compiler)
    start_time = time.time()
    result = modularizer.start()
    duration = time.time() - start_time

    log()
    log(_separator)
    if result.is_fatal:
        log('  Process finish with ERROR :(')
        exit_code = EXIT_FATAL
    elif not result.value:
        log('  Process finish with some non fatal errors. Maybe some JAR files were modularized.')
        exit_code = EXIT_PARTIAL_FAILURE
    else:
        log('  SUCCESSFUL!!')
        exit_code = 0
    log()
    log(f'  {modularizer.count_modularized} JARs modularized in {_format_duration(duration)}')
    log(f'  {modularizer.count_errors} errors found')
    log()
    return exit_code


def _main_wrapper():
    sys.exit(main())
