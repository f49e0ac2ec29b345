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
Computes the order in which artifacts are modularized: the module of an artifact can
only be compiled once the modules it requires are available as modular jars, so every
artifact must come after the artifacts defining the modules it requires.

Only dependencies between modules defined in the descriptor are considered. Modules
required from elsewhere (e.g. ``java.sql``) do not influence the order.

Two strategies are supported:

``graph``
    levels every artifact by the length of the longest chain of artifacts requiring it
    and processes the deepest levels first.
``tree``
    builds a dependency tree below a synthetic root, moving a dependency below its
    dependent whenever it is not deeper than it, and processes the deepest tree levels first.

Both strategies reject dependency cycles with a `DependencyCycleError`.
"""

from __future__ import annotations

__all__ = [
    "DependencyCycleError",
    "SORT_STRATEGIES",
    "build_dependency_tree",
    "extract_order",
    "find_dependency_cycle",
    "graph_order",
    "same_module",
    "sort_artifacts",
    "tree_order",
]

from typing import Dict, List, Optional, Sequence

from .deptree import Tree, TreeNode
from .descriptor import Artifact
from .support.logging import logv, logvv, warn

SORT_STRATEGIES = ('graph', 'tree')


class DependencyCycleError(Exception):
    """
    Raised when modules defined in a descriptor require each other (transitively).

    :param list cycle: the module names on the cycle, the first name is repeated at the end
    """
    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        Exception.__init__(self, 'dependency cycle detected: ' + ' -> '.join(self.cycle))


def same_module(a1: Artifact, a2: Artifact) -> bool:
    """
    Determines if two artifacts define the same module. The tree root (no module) is never the same as anything.
    """
    if a1.module is not None and a2.module is not None:
        return a1.module.name == a2.module.name
    return False


def _defining_artifacts(artifacts: Sequence[Artifact]) -> Dict[str, Artifact]:
    """
    Maps each module name to the first artifact defining it.
    """
    definers = {}
    for a in artifacts:
        definers.setdefault(a.module.name, a)
    return definers


def _required_artifacts(artifact: Artifact, definers: Dict[str, Artifact]) -> List[Artifact]:
    return [definers[name] for name in (artifact.module.requiresModules or []) if name in definers]


def find_dependency_cycle(artifacts: Sequence[Artifact]) -> Optional[List[str]]:
    """
    Searches for a cycle among the "requires" relations of the modules defined by `artifacts`.

    :return: the module names on the first cycle found (first name repeated at the end) or None
    """
    definers = _defining_artifacts(artifacts)
    visited = set()
    for root in definers.values():
        if root.module.name in visited:
            continue
        # explicit stack so that long dependency chains do not exhaust the interpreter stack
        path: List[Artifact] = [root]
        on_path = {root.module.name}
        pending = [iter(_required_artifacts(root, definers))]
        while pending:
            dep = next(pending[-1], None)
            if dep is None:
                pending.pop(-1)
                done = path.pop(-1)
                on_path.discard(done.module.name)
                visited.add(done.module.name)
                continue
            name = dep.module.name
            if name in on_path:
                start = next(i for i, a in enumerate(path) if a.module.name == name)
                return [a.module.name for a in path[start:]] + [name]
            if name not in visited:
                path.append(dep)
                on_path.add(name)
                pending.append(iter(_required_artifacts(dep, definers)))
    return None


def graph_order(artifacts: Sequence[Artifact]) -> List[Artifact]:
    """
    Orders `artifacts` by the longest path over "requires" edges: an artifact nobody requires
    is at level 1 and a required artifact is one level deeper than its deepest dependent.
    Deeper levels come first; artifacts at the same level keep their relative input order.

    :raises DependencyCycleError: if the modules require each other in a cycle
    """
    definers = _defining_artifacts(artifacts)
    nodes = list(definers.values())
    dependents: Dict[str, List[Artifact]] = {a.module.name: [] for a in nodes}
    for a in nodes:
        for dep in _required_artifacts(a, definers):
            if a not in dependents[dep.module.name]:
                dependents[dep.module.name].append(a)

    levels: Dict[str, int] = {}
    for a in nodes:
        if a.module.name in levels:
            continue
        path: List[str] = [a.module.name]
        on_path = {a.module.name}
        pending = [iter(dependents[a.module.name])]
        while pending:
            dependent = next(pending[-1], None)
            if dependent is None:
                # all dependents of the artifact on top of the path are leveled
                pending.pop(-1)
                name = path.pop(-1)
                on_path.discard(name)
                levels[name] = 1 + max((levels[d.module.name] for d in dependents[name]), default=0)
                continue
            name = dependent.module.name
            if name in levels:
                continue
            if name in on_path:
                raise DependencyCycleError(path[path.index(name):] + [name])
            path.append(name)
            on_path.add(name)
            pending.append(iter(dependents[name]))

    order = sorted(nodes, key=lambda a: -levels[a.module.name])
    logvv('[INFO] Artifact levels: ' + ', '.join(f'{a.name}={levels[a.module.name]}' for a in order))
    return order


def _attach(tree: Tree[Artifact], node: TreeNode[Artifact], dependency: Artifact) -> bool:
    """
    Makes sure the node of `dependency` is deeper in `tree` than `node`.

    :return: True if the tree was modified
    """
    dep_node = tree.find_node_by_data(dependency, same_module)
    if dep_node is None:
        node.add_child(TreeNode(dependency))
        return True
    if tree.node_level(dep_node) > tree.node_level(node):
        return False
    if tree.is_descendant(node, dep_node):
        # `node` (transitively) is required by `dependency` and requires it
        raise DependencyCycleError([dependency.module.name, node.data.module.name, dependency.module.name])
    tree.remove_subtree(dep_node)
    node.add_child(dep_node)
    return True


def build_dependency_tree(artifacts: Sequence[Artifact]) -> Tree[Artifact]:
    """
    Builds the dependency tree of `artifacts`. The root of the tree is a synthetic artifact
    without module and every artifact whose module is required by another artifact ends up
    deeper in the tree than that artifact.

    The artifacts are inserted in order. Relocating a subtree can push a dependent down to the
    level of one of its dependencies placed earlier, so insertion passes are repeated until a
    pass does not move any node.

    :raises DependencyCycleError: if the modules require each other in a cycle
    """
    definers = _defining_artifacts(artifacts)
    tree: Tree[Artifact] = Tree(TreeNode(Artifact()))
    max_passes = len(artifacts) * len(artifacts) + 1
    passes = 0
    changed = True
    while changed:
        passes += 1
        if passes > max_passes:
            cycle = find_dependency_cycle(artifacts)
            raise DependencyCycleError(cycle or ['<unknown>'])
        changed = False
        for artifact in artifacts:
            node = tree.find_node_by_data(artifact, same_module)
            if node is None:
                node = tree.root.add_child(TreeNode(artifact))
                changed = True
            for dependency in _required_artifacts(artifact, definers):
                if _attach(tree, node, dependency):
                    changed = True
    logvv(f'[INFO] Dependency tree stable after {passes} pass(es)')
    return tree


def extract_order(tree: Tree[Artifact]) -> List[Artifact]:
    """
    Lists the artifacts in `tree` from the deepest level up to level 1. The root is excluded.
    """
    order = []
    for level in range(tree.tree_level(), 0, -1):
        order.extend(node.data for node in tree.nodes_at_level(level))
    return order


def tree_order(artifacts: Sequence[Artifact]) -> List[Artifact]:
    return extract_order(build_dependency_tree(artifacts))


def sort_artifacts(artifacts: Sequence[Artifact], strategy: str = 'graph') -> List[Artifact]:
    """
    Gets `artifacts` sorted such that each artifact comes after the artifacts
    defining the modules it requires.

    Artifacts defining a module already defined by an earlier artifact are dropped.

    :param strategy: one of `SORT_STRATEGIES`
    :raises DependencyCycleError: if the modules require each other in a cycle
    """
    if strategy not in SORT_STRATEGIES:
        raise ValueError(f'Unknown sort strategy "{strategy}", expected one of {", ".join(SORT_STRATEGIES)}')
    definers = _defining_artifacts(artifacts)
    for a in artifacts:
        if definers[a.module.name] is not a:
            warn(f'"{a.name}" defines module "{a.module.name}" which is already defined by "{definers[a.module.name].name}". It will be ignored.')
    cycle = find_dependency_cycle(artifacts)
    if cycle:
        raise DependencyCycleError(cycle)
    if strategy == 'tree':
        order = tree_order(artifacts)
    else:
        order = graph_order(artifacts)
    logv('[INFO] Modularization order: ' + ', '.join(a.name for a in order))
    return order
