import pytest

from structkit.dependency_graph import DependencyGraph, Node, dependency_graph


def assert_valid_sort(graph, expected):
    assert graph.topo_sort(list(expected)) == list(expected)


@pytest.mark.parametrize("expected", [[], [0], [0, 1], [0, 1, 2], [0, 1, 2, 3]])
def test_identity(expected):
    assert_valid_sort(dependency_graph(), expected)


@pytest.mark.parametrize(
    "expected, rules",
    [
        ([1, 0], [(1, 0)]),
        ([0, 2, 1, 3], [(2, 1)]),
        ([1, 0, 3, 2], [(1, 0), (3, 2)]),
    ],
)
def test_non_overlapping_rules(expected, rules):
    assert_valid_sort(dependency_graph(*rules), expected)


@pytest.mark.parametrize(
    "expected, rules",
    [
        ([4, 3, 2, 1, 0], [(4, 3), (3, 2), (2, 1), (1, 0)]),
        ([4, 3, 2, 1, 0], [(3, 2), (4, 3), (1, 0), (2, 1)]),
        ([4, 3, 2, 1, 0], [(1, 0), (2, 1), (3, 2), (4, 3)]),
        (
            [1, 8, 2, 7, 3, 6, 4, 5],
            [(1, 8), (8, 2), (2, 7), (7, 3), (3, 6), (6, 4), (4, 5)],
        ),
    ],
)
def test_overlapping_rules(expected, rules):
    assert_valid_sort(dependency_graph(*rules), expected)


@pytest.mark.parametrize(
    "expected, rules",
    [
        ([0], [(0, 0)]),
        ([1, 2, 0], [(0, 0)]),
        ([0, 2, 1], [(1, 1)]),
        ([0, 1, 2], [(2, 2)]),
        ([0, 1], [(0, 1), (1, 0)]),
        ([0, 1, 2], [(0, 1), (1, 2), (2, 0)]),
        (
            [0, 1, 2],
            [(a, b) for a in range(3) for b in range(3)],
        ),
    ],
)
def test_non_dag(expected, rules):
    graph = dependency_graph(*rules)
    assert graph.topo_sort(expected) == expected


def test_keys_are_sorted_before_topo_sort():
    graph = dependency_graph((2, 1))
    assert graph.topo_sort([3, 1, 0, 2]) == [0, 2, 1, 3]


def test_long_ascending_chain():
    keys = list(range(1000))
    graph = DependencyGraph()
    for first, second in zip(keys, keys[1:]):
        graph.insert_dependency(first, second)
    assert graph.topo_sort(keys) == keys


def test_long_descending_chain():
    keys = list(reversed(range(1000)))
    graph = DependencyGraph()
    for first, second in zip(keys, keys[1:]):
        graph.insert_dependency(first, second)
    assert graph.topo_sort(keys) == keys


def test_topo_sort_does_not_modify_graph():
    graph = dependency_graph((1, 0), (2, 1))
    before = list(graph)
    graph.topo_sort([0, 1])
    assert list(graph) == before


def test_insert_duplicate_returns_false():
    graph = DependencyGraph()
    assert graph.insert_dependency(1, 2) is True
    assert graph.insert_dependency(1, 2) is False
    assert list(graph) == [(1, Node([], [2])), (2, Node([1], []))]


def test_remove_dependency():
    graph = dependency_graph((1, 2), (2, 3))
    assert graph.remove_dependency(1, 2) is True
    assert list(graph) == [(2, Node([], [3])), (3, Node([2], []))]
    assert graph.remove_dependency(1, 2) is False
    assert graph.remove_dependency(2, 3) is True
    assert len(graph) == 0


def test_remove_missing_dependency_between_existing_nodes():
    graph = dependency_graph((1, 2), (3, 4))
    assert graph.remove_dependency(1, 4) is False
    assert len(graph) == 4


def test_keep_only_drops_edges_of_other_nodes():
    graph = dependency_graph((1, 2), (2, 3))
    graph.keep_only([1, 2])
    assert list(graph) == [
        (1, Node([], [2])),
        (2, Node([1], [])),
        (3, Node([], [])),
    ]


def test_kept_only_leaves_original_untouched():
    graph = dependency_graph((1, 2), (2, 3))
    kept = graph.kept_only([3])
    assert list(kept) == [(1, Node()), (2, Node()), (3, Node())]
    assert list(graph) == [
        (1, Node([], [2])),
        (2, Node([1], [3])),
        (3, Node([2], [])),
    ]


def test_sort_ignores_edges_through_excluded_nodes():
    graph = dependency_graph((2, 1), (1, 0))
    assert graph.topo_sort([0, 2]) == [0, 2]


def test_update_replaces_nodes():
    graph = dependency_graph((1, 2))
    graph.update([(1, Node([], [5])), (7, Node([3], []))])
    assert list(graph) == [
        (1, Node([], [5])),
        (2, Node([1], [])),
        (7, Node([3], [])),
    ]
    assert len(graph) == 3


def test_node_is_empty():
    assert Node().is_empty() is True
    assert Node([1], []).is_empty() is False
    assert Node([], [1]).is_empty() is False


def test_string_keys():
    graph = dependency_graph(("c", "a"), ("b", "c"))
    assert graph.topo_sort(["a", "b", "c"]) == ["b", "c", "a"]