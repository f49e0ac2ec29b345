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
The modularization descriptor: the JSON file that binds archive file names to the
Java modules they should become.

Example::

    [
      {
        "name": "commons-lang3-3.9.jar",
        "module": {
          "name": "org.apache.commons.lang3",
          "exportsPackages": ["org.apache.commons.lang3"],
          "requiresModules": ["java.desktop"]
        }
      }
    ]
"""

__all__ = [
    "Artifact",
    "DescriptorException",
    "Module",
    "load_descriptor",
    "parse_descriptor",
]

import json
from typing import Dict, Iterable, List, Optional

from .support.logging import logv


class DescriptorException(Exception):
    def __init__(self, value):
        Exception.__init__(self, value)


def _unique(values: Iterable[str]) -> List[str]:
    result = []
    for v in values:
        if v not in result:
            result.append(v)
    return result


class Module(object):
    """
    The definition of a Java module to be created from an archive.

    :param str name: the module name (e.g. ``org.apache.commons.lang3``)
    :param list exportsPackages: the packages exported by the module. None means the exports
             are inferred from the packages containing classes in the archive.
    :param list requiresModules: names of the modules this module depends on. None means no dependencies.
    """
    def __init__(self, name: str, exportsPackages: Optional[Iterable[str]] = None, requiresModules: Optional[Iterable[str]] = None):
        self.name = name
        self.exportsPackages = None if exportsPackages is None else _unique(exportsPackages)
        self.requiresModules = None if requiresModules is None else _unique(requiresModules)

    def __str__(self):
        return 'module:' + self.name

    def __repr__(self):
        return f'Module({self.name!r}, exportsPackages={self.exportsPackages!r}, requiresModules={self.requiresModules!r})'

    def __eq__(self, other):
        return isinstance(other, Module) and (self.name, self.exportsPackages, self.requiresModules) == \
            (other.name, other.exportsPackages, other.requiresModules)

    def __hash__(self):
        return hash(self.name)


class Artifact(object):
    """
    Binds the file name of an archive to the module it should become. Two artifacts
    are equal if they have the same name.

    An artifact without name and module is only used as the root of a dependency tree.
    """
    def __init__(self, name: Optional[str] = None, module: Optional[Module] = None):
        self.name = name
        self.module = module

    def __str__(self):
        return self.name if self.name is not None else '<root>'

    def __repr__(self):
        return f'Artifact({self.name!r}, {self.module!r})'

    def __eq__(self, other):
        return isinstance(other, Artifact) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    @property
    def module_name(self) -> Optional[str]:
        return self.module.name if self.module is not None else None


def _check_string_list(value, context: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(e, str) and e for e in value):
        raise DescriptorException(f'{context} must be a list of non-empty strings')
    return value


def _parse_module(obj, context: str) -> Module:
    if not isinstance(obj, dict):
        raise DescriptorException(f'{context}: "module" must be an object')
    unknown = set(obj.keys()) - {'name', 'exportsPackages', 'requiresModules'}
    if unknown:
        raise DescriptorException(f'{context}: unknown module attribute(s): {", ".join(sorted(unknown))}')
    name = obj.get('name')
    if not isinstance(name, str) or not name:
        raise DescriptorException(f'{context}: module "name" must be a non-empty string')
    exports = obj.get('exportsPackages')
    requires = obj.get('requiresModules')
    if exports is not None:
        exports = _check_string_list(exports, f'{context}: "exportsPackages"')
    if requires is not None:
        requires = _check_string_list(requires, f'{context}: "requiresModules"')
    return Module(name, exports, requires)


def parse_descriptor(data) -> List[Artifact]:
    """
    Creates the artifacts described by `data`, the decoded JSON content of a descriptor.
    If several entries have the same artifact name, only the first one is kept.

    :raises DescriptorException: if `data` does not have the expected structure
    """
    if not isinstance(data, list):
        raise DescriptorException('descriptor must be a JSON array of artifacts')
    artifacts: Dict[str, Artifact] = {}
    for i, obj in enumerate(data):
        context = f'artifact #{i}'
        if not isinstance(obj, dict):
            raise DescriptorException(f'{context} must be an object')
        unknown = set(obj.keys()) - {'name', 'module'}
        if unknown:
            raise DescriptorException(f'{context}: unknown attribute(s): {", ".join(sorted(unknown))}')
        name = obj.get('name')
        if not isinstance(name, str) or not name:
            raise DescriptorException(f'{context}: "name" must be a non-empty string')
        context = f'artifact "{name}"'
        module = _parse_module(obj.get('module'), context)
        if name in artifacts:
            logv(f'[INFO] Ignoring duplicate definition of artifact "{name}"')
            continue
        artifacts[name] = Artifact(name, module)
    return list(artifacts.values())


def load_descriptor(path: str) -> List[Artifact]:
    """
    Reads the modularization descriptor in `path`.

    :return: the artifacts in the order they appear in the file, without duplicates
    :raises DescriptorException: if the file cannot be read or is not a valid descriptor
    """
    try:
        with open(path, encoding='utf-8') as fp:
            data = json.load(fp)
    except (OSError, ValueError) as e:
        raise DescriptorException(f'Error parsing modularization descriptor file {path}. {e}')
    return parse_descriptor(data)
