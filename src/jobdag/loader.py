# loader.py
from __future__ import annotations

import json
import runpy
import sys
from pathlib import Path
from typing import Any, List, TextIO

from .errors import LoadError
from .model import Job, JobGraph, build_graph


# ----------------------------------------------------------------------
# JSON shape
# ----------------------------------------------------------------------

def parse_jobs(data: Any) -> List[Job]:
    """
    Turn the JSON-shaped workflow into Job objects.

    Expected shape:
      {"<job id>": {"command": "<shell command>", "deps": ["<job id>", ...]}, ...}
    """
    if not isinstance(data, dict):
        raise LoadError("JSON input must be an object.")

    jobs: List[Job] = []
    for job_id, spec in data.items():
        if not isinstance(spec, dict):
            raise LoadError("job must be an object", job=job_id)

        command = spec.get("command")
        if not isinstance(command, str):
            raise LoadError("'command' must be a string", job=job_id)

        deps = spec.get("deps")
        if not isinstance(deps, list):
            raise LoadError("'deps' must be a list", job=job_id)
        for dep in deps:
            if not isinstance(dep, str):
                raise LoadError(f"dependency must be a string, got {dep!r}", job=job_id)

        jobs.append(Job(id=job_id, command=command, needs=tuple(deps)))

    return jobs


def read_json(stream: TextIO) -> Any:
    try:
        return json.load(stream)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(str(e)) from e


# ----------------------------------------------------------------------
# Workflow loading (stdin, .json file, .py file)
# ----------------------------------------------------------------------

def _load_python_workflow(wf_path: Path) -> List[Job]:
    """
    The file must define either:
      - workflow() -> List[Job] | dict
      - JOBS = [Job, ...] | {...}
    """
    module_name = f"jobdag_workflow_{wf_path.stem}"
    try:
        globals_dict = runpy.run_path(str(wf_path), run_name=module_name)

        if "workflow" in globals_dict and callable(globals_dict["workflow"]):
            jobs = globals_dict["workflow"]()
        elif "JOBS" in globals_dict:
            jobs = globals_dict["JOBS"]
        else:
            raise LoadError(
                f"Workflow {wf_path.name} must define workflow() or JOBS."
            )
    except ValueError as e:
        # job(...) rejects bad definitions with ValueError
        raise LoadError(f"Workflow {wf_path.name}: {e}") from e

    if isinstance(jobs, dict):
        return parse_jobs(jobs)
    if not isinstance(jobs, list) or not all(isinstance(j, Job) for j in jobs):
        raise LoadError(
            "Workflow must return/define a List[Job] or a job mapping. "
            "Define workflow() -> List[Job] or JOBS = [Job, ...]."
        )
    return jobs


def load_workflow(source: str | Path) -> List[Job]:
    """
    Load jobs from `source`:
      - "-"         JSON read from stdin
      - *.json      JSON file
      - *.py        Python workflow file (see jobdag.dsl)
    """
    if str(source) == "-":
        return parse_jobs(read_json(sys.stdin))

    wf_path = Path(source).expanduser().resolve()
    if not wf_path.exists():
        raise LoadError(f"Workflow file not found: {wf_path}")

    if wf_path.suffix == ".json":
        try:
            with wf_path.open(encoding="utf-8") as f:
                data = read_json(f)
        except OSError as e:
            raise LoadError(str(e)) from e
        return parse_jobs(data)
    if wf_path.suffix == ".py":
        return _load_python_workflow(wf_path)

    raise LoadError(f"Workflow must be a .json or .py file, got: {wf_path.name}")


def load_graph(source: str | Path) -> JobGraph:
    return build_graph(load_workflow(source))
