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
A general rose tree used to level artifacts by their dependencies.

Structural operations (father lookup, removal, reattachment) are based on node
identity, never on equality of the data held by the nodes.
"""

from __future__ import annotations

__all__ = ["TreeNode", "Tree"]

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class TreeNode(Generic[T]):
    def __init__(self, data: T):
        if data is None:
            raise ValueError("'data' can't be None")
        self.data = data
        self.children: List[TreeNode[T]] = []

    def __repr__(self):
        return f'TreeNode({self.data!r})'

    def degree(self) -> int:
        return len(self.children)

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def add_child(self, node: TreeNode[T]) -> TreeNode[T]:
        self.children.append(node)
        return node

    def child_index(self, node: TreeNode[T]) -> int:
        """
        Gets the index of `node` among the children of this node or -1 if it is not a child.
        """
        for i, child in enumerate(self.children):
            if child is node:
                return i
        return -1

    def child_at(self, index: int) -> TreeNode[T]:
        return self.children[index]


class Tree(Generic[T]):
    """
    A tree with a single root. The level of a node is the number of edges between
    the node and the root, so the root is at level 0.
    """
    def __init__(self, root: Optional[TreeNode[T]]):
        self.root = root

    def is_empty(self) -> bool:
        return self.root is None

    def preorder(self) -> List[TreeNode[T]]:
        """
        Lists the nodes of the tree level by level, starting at the root. Nodes at the same
        level are listed in the order their fathers were listed, children in insertion order.
        """
        nodes = []
        if not self.is_empty():
            nodes.append(self.root)
            i = 0
            while i < len(nodes):
                nodes.extend(nodes[i].children)
                i += 1
        return nodes

    def leaves(self) -> List[TreeNode[T]]:
        return [n for n in self.preorder() if n.is_leaf()]

    def degree(self) -> int:
        """
        Gets the maximum degree of the nodes in this tree.
        """
        return max((n.degree() for n in self.preorder()), default=0)

    def father(self, node: TreeNode[T]) -> Optional[TreeNode[T]]:
        """
        Gets the father of `node` or None if `node` is the root or is not part of this tree.
        """
        if node is self.root:
            return None
        for candidate in self.preorder():
            if candidate.child_index(node) != -1:
                return candidate
        return None

    def contains(self, node: TreeNode[T]) -> bool:
        return any(n is node for n in self.preorder())

    def node_level(self, node: TreeNode[T]) -> int:
        level = 0
        current = node
        while current is not self.root:
            current = self.father(current)
            if current is None:
                raise ValueError(f'{node} is not part of the tree')
            level += 1
        return level

    def levels(self) -> List[List[TreeNode[T]]]:
        """
        Gets the nodes of this tree grouped by level: element ``i`` of the result holds the
        nodes at level ``i`` in traversal order.
        """
        result = []
        current = [self.root] if not self.is_empty() else []
        while current:
            result.append(current)
            current = [child for n in current for child in n.children]
        return result

    def tree_level(self) -> int:
        """
        Gets the maximum level of the nodes in this tree.
        """
        return max(len(self.levels()) - 1, 0)

    def nodes_at_level(self, level: int) -> List[TreeNode[T]]:
        levels = self.levels()
        return levels[level] if 0 <= level < len(levels) else []

    def find_node_by_data(self, data: T, predicate: Optional[Callable[[T, T], bool]] = None) -> Optional[TreeNode[T]]:
        """
        Finds the first node (in traversal order) whose data matches `data`.

        :param predicate: called with the data of a node and `data`. If None, equality is used.
        """
        for node in self.preorder():
            if predicate is None:
                if node.data == data:
                    return node
            elif predicate(node.data, data):
                return node
        return None

    def remove(self, node: TreeNode[T]) -> Optional[T]:
        """
        Removes `node` from the tree. The children of `node` become children of its father.

        :return: the data of the removed node or None if `node` has no father
        """
        father = self.father(node)
        if father is None:
            return None
        index = father.child_index(node)
        father.children[index:index + 1] = node.children
        node.children = []
        return node.data

    def remove_subtree(self, node: TreeNode[T]) -> None:
        """
        Detaches `node`, together with all its descendants, from its father.
        """
        father = self.father(node)
        if father is not None:
            del father.children[father.child_index(node)]

    def is_descendant(self, node: TreeNode[T], ancestor: TreeNode[T]) -> bool:
        """
        Determines if `node` is `ancestor` or is in the subtree rooted at `ancestor`.
        """
        pending = [ancestor]
        while pending:
            current = pending.pop()
            if current is node:
                return True
            pending.extend(current.children)
        return False
