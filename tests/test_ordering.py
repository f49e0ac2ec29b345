import pytest

from modularizer._impl.descriptor import Artifact, Module
from modularizer._impl.ordering import (DependencyCycleError, SORT_STRATEGIES, build_dependency_tree, extract_order,
                                        find_dependency_cycle, graph_order, same_module, sort_artifacts)


def _artifact(name, requires=None, module=None):
    return Artifact(name + '.jar', Module(module or name, requiresModules=requires))


def _names(order):
    return [a.name[:-len('.jar')] for a in order]


def _assert_dependencies_first(artifacts, order):
    position = {a.module.name: i for i, a in enumerate(order)}
    for a in artifacts:
        for required in a.module.requiresModules or []:
            if required in position and a.module.name in position:
                assert position[required] < position[a.module.name], f'{required} must come before {a.module.name}: {_names(order)}'


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_diamond(strategy):
    artifacts = [_artifact('A', ['B', 'C']), _artifact('B', ['C']), _artifact('C')]
    assert _names(sort_artifacts(artifacts, strategy)) == ['C', 'B', 'A']


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_dependencies_come_first(strategy):
    artifacts = [
        _artifact('app', ['web', 'db', 'java.logging']),
        _artifact('web', ['http', 'json']),
        _artifact('db', ['pool', 'java.sql']),
        _artifact('http', ['io']),
        _artifact('json'),
        _artifact('pool', ['io', 'json']),
        _artifact('io'),
        _artifact('cli', ['app', 'json']),
    ]
    order = sort_artifacts(artifacts, strategy)
    assert sorted(_names(order)) == sorted(_names(artifacts))
    _assert_dependencies_first(artifacts, order)


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_late_relocation_of_dependent(strategy):
    # "b" is moved below "c" after "x" was placed below "a"; "x" must still precede "b"
    artifacts = [_artifact('a', ['x']), _artifact('b', ['x']), _artifact('x'), _artifact('c', ['b'])]
    order = sort_artifacts(artifacts, strategy)
    _assert_dependencies_first(artifacts, order)
    assert len(order) == 4


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_independent_artifacts_appear_once(strategy):
    artifacts = [_artifact('a'), _artifact('b', ['java.base', 'org.external']), _artifact('c')]
    order = sort_artifacts(artifacts, strategy)
    assert sorted(_names(order)) == ['a', 'b', 'c']


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_cycles_are_reported(strategy):
    artifacts = [_artifact('a', ['b']), _artifact('b', ['c']), _artifact('c', ['a']), _artifact('d')]
    try:
        sort_artifacts(artifacts, strategy)
    except DependencyCycleError as e:
        assert e.cycle[0] == e.cycle[-1]
        assert set(e.cycle) == {'a', 'b', 'c'}
        assert 'dependency cycle detected' in str(e)
    else:
        assert False, 'should have raised DependencyCycleError'


def test_self_requirement_is_a_cycle():
    artifacts = [_artifact('a', ['a'])]
    assert find_dependency_cycle(artifacts) == ['a', 'a']
    for order in (graph_order, lambda arts: extract_order(build_dependency_tree(arts))):
        try:
            order(artifacts)
        except DependencyCycleError:
            pass
        else:
            assert False, 'should have raised DependencyCycleError'


def test_no_cycle():
    assert find_dependency_cycle([_artifact('A', ['B', 'C']), _artifact('B', ['C']), _artifact('C')]) is None


def test_unknown_strategy():
    try:
        sort_artifacts([_artifact('a')], 'random')
    except ValueError:
        pass
    else:
        assert False, 'should have raised ValueError'


def test_same_module():
    assert same_module(_artifact('a'), _artifact('other', module='a'))
    assert not same_module(_artifact('a'), _artifact('b'))
    assert not same_module(Artifact(), Artifact())


@pytest.mark.parametrize('strategy', SORT_STRATEGIES)
def test_second_definition_of_module_is_dropped(strategy):
    artifacts = [_artifact('a1', module='org.a'), _artifact('a2', module='org.a'), _artifact('b', ['org.a'])]
    assert _names(sort_artifacts(artifacts, strategy)) == ['a1', 'b']


def test_tree_levels_dependencies_deeper_than_dependents():
    artifacts = [_artifact('a', ['x']), _artifact('b', ['x']), _artifact('x'), _artifact('c', ['b']), _artifact('d', ['c', 'x'])]
    tree = build_dependency_tree(artifacts)
    by_module = {n.data.module.name: n for n in tree.preorder() if n is not tree.root}
    assert sorted(by_module) == ['a', 'b', 'c', 'd', 'x']
    for a in artifacts:
        for required in a.module.requiresModules or []:
            assert tree.node_level(by_module[required]) > tree.node_level(by_module[a.module.name])
    assert tree.root.data.module is None


def test_tree_reuses_nodes():
    artifacts = [_artifact('A', ['B', 'C']), _artifact('B', ['C']), _artifact('C')]
    tree = build_dependency_tree(artifacts)
    assert len(tree.preorder()) == 4
    assert [_names(n.data for n in tree.nodes_at_level(level)) for level in (1, 2, 3)] == [['A'], ['B'], ['C']]


def test_graph_order_keeps_input_order_within_level():
    artifacts = [_artifact('z'), _artifact('y', ['w']), _artifact('x'), _artifact('w')]
    assert _names(graph_order(artifacts)) == ['w', 'z', 'y', 'x']


def test_long_dependency_chain():
    # deeper than the interpreter's recursion limit
    depth = 3000
    artifacts = [_artifact(f'm{i}', [f'm{i + 1}'] if i + 1 < depth else None) for i in range(depth)]
    assert find_dependency_cycle(artifacts) is None
    order = sort_artifacts(artifacts, 'graph')
    assert _names(order) == [f'm{i}' for i in reversed(range(depth))]

    artifacts[-1] = _artifact(f'm{depth - 1}', ['m0'])
    cycle = find_dependency_cycle(artifacts)
    assert cycle is not None and len(cycle) == depth + 1
    try:
        graph_order(artifacts)
    except DependencyCycleError as e:
        assert len(e.cycle) == depth + 1
    else:
        assert False, 'should have raised DependencyCycleError'
