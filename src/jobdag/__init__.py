from .dsl import job, wf
from .dag import toposort, check_connected, preprocess_dag
from .errors import JobDagError, LoadError, EmptyGraphError, CycleError, DisconnectedError, JobFailure
from .model import Job, JobGraph, build_graph
from .runner import execute_dag

__all__ = [
    "job", "wf",
    "toposort", "check_connected", "preprocess_dag",
    "JobDagError", "LoadError", "EmptyGraphError", "CycleError", "DisconnectedError", "JobFailure",
    "Job", "JobGraph", "build_graph",
    "execute_dag",
]
