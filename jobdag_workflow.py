# jobdag_workflow.py
# Workflow for checking jobdag itself: `jobdag run` picks this file up from the repo root.
from __future__ import annotations
from jobdag import wf, job


def workflow():
    return wf(
        job("install", "python -m pip install -e '.[test]'"),
        job("compile", "python -m compileall -q src", needs=["install"]),
        job("test", "python -m pytest -q", needs=["compile"]),
        job("plan", "jobdag plan --workflow jobdag_workflow.py", needs=["install"]),
    )
