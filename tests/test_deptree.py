from modularizer._impl.deptree import Tree, TreeNode


def _sample_tree():
    """
    root
     +- a
     |   +- c
     |   +- d
     |       +- f
     +- b
         +- e
    """
    nodes = {name: TreeNode(name) for name in 'abcdef'}
    root = TreeNode('root')
    root.add_child(nodes['a'])
    root.add_child(nodes['b'])
    nodes['a'].add_child(nodes['c'])
    nodes['a'].add_child(nodes['d'])
    nodes['b'].add_child(nodes['e'])
    nodes['d'].add_child(nodes['f'])
    return Tree(root), root, nodes


def _data(nodes):
    return [n.data for n in nodes]


def test_node_requires_data():
    try:
        TreeNode(None)
    except ValueError:
        pass
    else:
        assert False, 'should have raised ValueError'


def test_node_children():
    parent = TreeNode('p')
    x, y = TreeNode('x'), TreeNode('x')
    parent.add_child(x)
    parent.add_child(y)
    assert parent.degree() == 2
    assert not parent.is_leaf()
    assert x.is_leaf()
    # identity, not equality of the data
    assert parent.child_index(y) == 1
    assert parent.child_index(TreeNode('x')) == -1
    assert parent.child_at(0) is x


def test_traversal():
    tree, root, nodes = _sample_tree()
    assert not tree.is_empty()
    assert Tree(None).is_empty()
    assert Tree(None).preorder() == []
    assert _data(tree.preorder()) == ['root', 'a', 'b', 'c', 'd', 'e', 'f']
    assert _data(tree.leaves()) == ['c', 'e', 'f']
    assert tree.degree() == 2


def test_levels():
    tree, root, nodes = _sample_tree()
    assert tree.node_level(root) == 0
    assert tree.node_level(nodes['a']) == 1
    assert tree.node_level(nodes['e']) == 2
    assert tree.node_level(nodes['f']) == 3
    assert tree.tree_level() == 3
    assert _data(tree.nodes_at_level(2)) == ['c', 'd', 'e']
    assert tree.nodes_at_level(4) == []
    assert Tree(TreeNode('only')).tree_level() == 0

    try:
        tree.node_level(TreeNode('stranger'))
    except ValueError:
        pass
    else:
        assert False, 'should have raised ValueError'


def test_father():
    tree, root, nodes = _sample_tree()
    assert tree.father(root) is None
    assert tree.father(nodes['f']) is nodes['d']
    assert tree.father(nodes['b']) is root
    assert tree.father(TreeNode('a')) is None


def test_find_node_by_data():
    tree, root, nodes = _sample_tree()
    assert tree.find_node_by_data('d') is nodes['d']
    assert tree.find_node_by_data('z') is None
    assert tree.find_node_by_data('E', lambda data, wanted: data.upper() == wanted) is nodes['e']


def test_remove_promotes_children():
    tree, root, nodes = _sample_tree()
    assert tree.remove(nodes['d']) == 'd'
    assert _data(nodes['a'].children) == ['c', 'f']
    assert tree.node_level(nodes['f']) == 2
    assert tree.remove(root) is None


def test_remove_subtree_and_reattach():
    tree, root, nodes = _sample_tree()
    tree.remove_subtree(nodes['d'])
    assert not tree.contains(nodes['d'])
    assert not tree.contains(nodes['f'])
    assert _data(nodes['a'].children) == ['c']

    nodes['e'].add_child(nodes['d'])
    assert tree.node_level(nodes['d']) == 3
    assert tree.node_level(nodes['f']) == 4
    assert tree.tree_level() == 4


def test_is_descendant():
    tree, root, nodes = _sample_tree()
    assert tree.is_descendant(nodes['f'], nodes['a'])
    assert tree.is_descendant(nodes['a'], nodes['a'])
    assert not tree.is_descendant(nodes['e'], nodes['a'])
    assert not tree.is_descendant(nodes['a'], nodes['f'])
