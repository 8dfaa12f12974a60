# dsl.py
from __future__ import annotations

from typing import List, Optional

from .model import Job


def job(name: str, command: str, *, needs: Optional[List[str]] = None) -> Job:
    """Create a job that runs `command` after every job listed in `needs`."""
    if not command or not command.strip():
        raise ValueError(f"job({name!r}) must have a command")
    return Job(id=name, command=command, needs=tuple(needs or []))


def wf(*jobs: Job) -> List[Job]:
    """
    Workflow definition helper.

    Users can write:
        from jobdag import wf, job

        def workflow():
            return wf(
                job("build", "make"),
                job("test", "make test", needs=["build"]),
            )

    Or use JOBS directly:
        JOBS = wf(job(...), job(...))
    """
    return list(jobs)
