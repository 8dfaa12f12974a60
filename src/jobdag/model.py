# model.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Tuple

from .errors import LoadError


@dataclass(frozen=True)
class Job:
    """
    A single job: one shell command plus its dependency edges.

    `needs` are the jobs that must run BEFORE this one.
    `dependents` are the jobs that must run AFTER it; filled in by build_graph.
    """
    id: str
    command: str
    needs: Tuple[str, ...] = ()
    dependents: Tuple[str, ...] = field(default=(), compare=False)


class JobGraph(Mapping):
    """Read-only id -> Job mapping that always iterates ids in sorted order."""

    def __init__(self, jobs: Dict[str, Job]):
        self._ids: Tuple[str, ...] = tuple(sorted(jobs))
        self._jobs: Dict[str, Job] = {i: jobs[i] for i in self._ids}

    @property
    def ids(self) -> Tuple[str, ...]:
        return self._ids

    def __getitem__(self, job_id: str) -> Job:
        return self._jobs[job_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"JobGraph({list(self._ids)!r})"


def build_graph(jobs: Iterable[Job]) -> JobGraph:
    """
    Build a JobGraph from loose Job objects.

    Requires:
      - job.id: str (unique)
      - job.needs: ids of jobs that must run BEFORE this job
    Every edge is stored in both directions: if A needs B, then
    B.dependents contains A and A.needs contains B.
    """
    by_id: Dict[str, Job] = {}
    for j in jobs:
        if j.id in by_id:
            raise LoadError("duplicate job id", job=j.id)
        by_id[j.id] = j

    dependents: Dict[str, List[str]] = {i: [] for i in by_id}
    needs_of: Dict[str, Tuple[str, ...]] = {}

    for j in by_id.values():
        needs = tuple(dict.fromkeys(j.needs))  # dedupe, keep order
        for dep in needs:
            if dep not in by_id:
                raise LoadError(f"dependency not found: {dep}", job=j.id)
            # Edge dep -> j.id (dep must run before j)
            dependents[dep].append(j.id)
        needs_of[j.id] = needs

    return JobGraph({
        i: replace(j, needs=needs_of[i], dependents=tuple(sorted(dependents[i])))
        for i, j in by_id.items()
    })
