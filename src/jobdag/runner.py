# runner.py
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .errors import JobFailure
from .model import Job, JobGraph
from .ui.console import Console, get_console


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _run_job(
    job: Job,
    cwd: Optional[Path],
    shell: Optional[str],
    console: Console,
) -> None:
    try:
        proc = subprocess.run(
            job.command,
            shell=True,
            cwd=str(cwd) if cwd is not None else None,
            executable=shell,
        )
    except OSError as e:
        console.print_job_result(job.id, job.command, reason=str(e))
        raise JobFailure("A job failed.", job=job.id, details={"reason": str(e)}) from e

    console.print_job_result(job.id, job.command, exit_code=proc.returncode)
    if proc.returncode != 0:
        raise JobFailure(
            "A job failed.",
            job=job.id,
            details={"exit_code": proc.returncode},
        )


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def execute_dag(
    graph: JobGraph,
    ids_ordered: List[str],
    *,
    cwd: str | Path | None = None,
    shell: Optional[str] = None,
    console: Optional[Console] = None,
) -> Dict[str, str]:
    """
    Run every job's command, one at a time, in `ids_ordered`.

    Stops at the first job that exits non-zero or cannot be launched and
    raises JobFailure; jobs after it never run.

    Returns:
      {job_id: "ok"} for every job, in execution order.
    """
    console = console or get_console()
    cwd_p = Path(cwd).resolve() if cwd is not None else None
    results: Dict[str, str] = {}

    for job_id in ids_ordered:
        job = graph[job_id]
        console.print_debug(f"running {job_id}: {job.command}")
        _run_job(job, cwd_p, shell, console)
        results[job_id] = "ok"

    return results
