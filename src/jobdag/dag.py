# dag.py
from __future__ import annotations

from itertools import chain
from typing import Iterator, List, Set, Tuple

from .errors import CycleError, DisconnectedError, EmptyGraphError
from .model import JobGraph


def toposort(graph: JobGraph) -> List[str]:
    """
    Depth-first topological sort over dependent edges.

    Every job comes after all of its `needs`. Jobs with no (transitive)
    relation keep the graph's sorted id order.

    Raises:
      CycleError: if a job is re-entered while still on the DFS stack.
    """
    marks_permanent: Set[str] = set()
    marks_temporary: Set[str] = set()
    ids_ordered: List[str] = []

    # Drive in reverse so that the final reversal restores sorted order
    # among unrelated jobs.
    for root in reversed(graph.ids):
        if root in marks_permanent:
            continue

        marks_temporary.add(root)
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph[root].dependents))]

        while stack:
            node, dependents = stack[-1]
            for nxt in dependents:
                if nxt in marks_permanent:
                    continue
                if nxt in marks_temporary:
                    path = [n for n, _ in stack]
                    cycle = path[path.index(nxt):] + [nxt]
                    raise CycleError("Not a DAG.", details={"cycle": cycle})
                marks_temporary.add(nxt)
                stack.append((nxt, iter(graph[nxt].dependents)))
                break
            else:
                stack.pop()
                marks_temporary.discard(node)
                marks_permanent.add(node)
                ids_ordered.append(node)

    ids_ordered.reverse()
    return ids_ordered


def check_connected(graph: JobGraph) -> None:
    """
    Verify the jobs form one connected component, ignoring edge direction.

    Raises:
      DisconnectedError: if some job is unreachable from the first job.
    """
    first = graph.ids[0]
    visited: Set[str] = {first}
    stack = [first]

    while stack:
        job = graph[stack.pop()]
        for nxt in chain(job.dependents, job.needs):
            if nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)

    if len(visited) < len(graph):
        unreachable = [i for i in graph.ids if i not in visited]
        raise DisconnectedError(
            "More than one component.",
            details={"unreachable": unreachable},
        )


def preprocess_dag(graph: JobGraph) -> List[str]:
    """
    Validate the graph and return the execution order.

    Cycles are checked before connectivity, so a graph that is both cyclic
    and disconnected reports the cycle.
    """
    if not graph:
        raise EmptyGraphError("DAG is empty.")

    ids_ordered = toposort(graph)
    check_connected(graph)

    return ids_ordered
