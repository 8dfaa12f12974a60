# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

STAGE_LOAD = "load"
STAGE_VALIDATE = "validate"
STAGE_EXECUTE = "execute"


@dataclass(eq=False)
class JobDagError(Exception):
    """
    Structured error with enough context for:
      - clean CLI output
      - mapping the failing pipeline stage to an exit status
      - debugging without full tracebacks
    """
    message: str
    job: Optional[str] = None
    details: dict = field(default_factory=dict)

    kind: ClassVar[str] = "error"
    stage: ClassVar[str] = STAGE_LOAD

    def __str__(self) -> str:
        if self.job is not None:
            return f"Job {self.job}: {self.message}"
        return self.message


class LoadError(JobDagError):
    kind = "load"
    stage = STAGE_LOAD


class EmptyGraphError(JobDagError):
    kind = "empty"
    stage = STAGE_VALIDATE


class CycleError(JobDagError):
    kind = "cycle"
    stage = STAGE_VALIDATE


class DisconnectedError(JobDagError):
    kind = "disconnected"
    stage = STAGE_VALIDATE


class JobFailure(JobDagError):
    kind = "job"
    stage = STAGE_EXECUTE

    def __str__(self) -> str:
        if self.job is not None:
            return f"{self.message} ({self.job})"
        return self.message
