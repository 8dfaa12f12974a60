import random

import pytest

from jobdag import dag
from jobdag.dag import check_connected, preprocess_dag, toposort
from jobdag.errors import CycleError, DisconnectedError, EmptyGraphError
from jobdag.model import JobGraph


def assert_respects_edges(graph, order):
    assert sorted(order) == sorted(graph.ids)
    index = {job_id: i for i, job_id in enumerate(order)}
    for job in graph.values():
        for dep in job.needs:
            assert index[dep] < index[job.id], f"{dep} must run before {job.id}"


def test_siblings_follow_id_order(make_graph):
    """A -> B, A -> C: B and C keep sorted order."""
    graph = make_graph({"A": [], "B": ["A"], "C": ["A"]})

    assert preprocess_dag(graph) == ["A", "B", "C"]


def test_single_job():
    from jobdag.model import Job, build_graph

    graph = build_graph([Job("A", "true")])

    assert preprocess_dag(graph) == ["A"]


def test_linear_chain_against_id_order(make_graph):
    """c -> b -> a: dependencies win over sorted order."""
    graph = make_graph({"a": ["b"], "b": ["c"], "c": []})

    assert toposort(graph) == ["c", "b", "a"]


def test_diamond(make_graph):
    graph = make_graph({"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]})

    assert preprocess_dag(graph) == ["A", "B", "C", "D"]


def test_unrelated_roots_keep_id_order(make_graph):
    graph = make_graph({"A": [], "B": [], "C": ["A", "B"]})

    assert preprocess_dag(graph) == ["A", "B", "C"]


def test_unrelated_job_placed_by_id_order(make_graph):
    graph = make_graph({"a": ["b"], "b": [], "c": []})

    order = toposort(graph)

    assert order == ["b", "a", "c"]


def test_two_job_cycle(make_graph):
    graph = make_graph({"A": ["B"], "B": ["A"]})

    with pytest.raises(CycleError, match="Not a DAG") as exc_info:
        toposort(graph)

    cycle = exc_info.value.details["cycle"]
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {"A", "B"}


def test_self_loop_is_a_cycle(make_graph):
    graph = make_graph({"A": ["A"]})

    with pytest.raises(CycleError) as exc_info:
        preprocess_dag(graph)

    assert exc_info.value.details["cycle"] == ["A", "A"]


def test_longer_cycle_inside_larger_graph(make_graph):
    graph = make_graph({
        "build": [],
        "lint": ["build"],
        "p": ["r", "build"],
        "q": ["p"],
        "r": ["q"],
    })

    with pytest.raises(CycleError) as exc_info:
        preprocess_dag(graph)

    cycle = exc_info.value.details["cycle"]
    assert set(cycle) == {"p", "q", "r"}
    assert len(cycle) == 4


def test_two_components(make_graph):
    graph = make_graph({"A": [], "B": []})

    with pytest.raises(DisconnectedError, match="More than one component") as exc_info:
        preprocess_dag(graph)

    assert exc_info.value.details["unreachable"] == ["B"]


def test_component_reached_only_through_needs(make_graph):
    """Traversal follows edges in both directions."""
    graph = make_graph({"a": ["z"], "b": ["z"], "z": []})

    check_connected(graph)


def test_disconnected_pipelines(make_graph):
    graph = make_graph({"A": [], "B": ["A"], "X": [], "Y": ["X"]})

    with pytest.raises(DisconnectedError) as exc_info:
        check_connected(graph)

    assert exc_info.value.details["unreachable"] == ["X", "Y"]


def test_cycle_reported_before_disconnection(make_graph):
    graph = make_graph({"A": ["B"], "B": ["A"], "C": []})

    with pytest.raises(CycleError):
        preprocess_dag(graph)


def test_empty_graph_never_reaches_sorter(monkeypatch):
    def boom(graph):
        raise AssertionError("sorter must not run")

    monkeypatch.setattr(dag, "toposort", boom)
    monkeypatch.setattr(dag, "check_connected", boom)

    with pytest.raises(EmptyGraphError, match="DAG is empty"):
        preprocess_dag(JobGraph({}))


def test_deep_chain_does_not_recurse(make_graph):
    n = 5000
    ids = [f"job{i:05d}" for i in range(n)]
    deps = {ids[0]: []}
    deps.update({ids[i]: [ids[i - 1]] for i in range(1, n)})
    graph = make_graph(deps)

    assert preprocess_dag(graph) == ids


def test_deep_chain_reversed_ids(make_graph):
    n = 3000
    ids = [f"job{i:05d}" for i in range(n)]
    deps = {ids[-1]: []}
    deps.update({ids[i]: [ids[i + 1]] for i in range(n - 1)})
    graph = make_graph(deps)

    assert preprocess_dag(graph) == list(reversed(ids))


def test_random_dags_respect_edges_and_are_deterministic(make_graph):
    rng = random.Random(1234)
    for _ in range(50):
        n = rng.randint(2, 30)
        names = [f"n{i}" for i in range(n)]
        rng.shuffle(names)
        deps = {names[0]: []}
        for i in range(1, n):
            # at least one edge back to an earlier job keeps the graph connected
            k = rng.randint(1, min(i, 3))
            deps[names[i]] = rng.sample(names[:i], k)
        graph = make_graph(deps)

        first = preprocess_dag(graph)
        second = preprocess_dag(make_graph(deps))

        assert_respects_edges(graph, first)
        assert first == second


def test_random_cycles_detected(make_graph):
    rng = random.Random(99)
    for _ in range(30):
        n = rng.randint(2, 15)
        names = [f"n{i}" for i in range(n)]
        deps = {names[0]: [names[-1]]}
        deps.update({names[i]: [names[i - 1]] for i in range(1, n)})
        graph = make_graph(deps)

        with pytest.raises(CycleError):
            toposort(graph)


def recursive_toposort(graph):
    """Plain recursive three-colour DFS, used as a reference ordering."""
    permanent, temporary, order = set(), set(), []

    def visit(job_id):
        if job_id in permanent:
            return
        if job_id in temporary:
            raise CycleError("Not a DAG.")
        temporary.add(job_id)
        for nxt in graph[job_id].dependents:
            visit(nxt)
        temporary.discard(job_id)
        permanent.add(job_id)
        order.append(job_id)

    for job_id in reversed(graph.ids):
        if job_id not in permanent:
            visit(job_id)

    order.reverse()
    return order


def test_matches_recursive_reference(make_graph):
    rng = random.Random(2024)
    cyclic = acyclic = 0
    for _ in range(3000):
        n = rng.randint(1, 12)
        names = [f"j{i}" for i in range(n)]
        edge_prob = rng.random() * 0.4
        deps = {
            name: [other for other in names if rng.random() < edge_prob]
            for name in names
        }
        graph = make_graph(deps)

        try:
            expected = recursive_toposort(graph)
        except CycleError:
            cyclic += 1
            with pytest.raises(CycleError):
                toposort(graph)
            continue

        acyclic += 1
        assert toposort(graph) == expected

    assert cyclic and acyclic
