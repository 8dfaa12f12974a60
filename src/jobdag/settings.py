from __future__ import annotations
import os

# "-" means read the workflow from stdin
WORKFLOW = os.environ.get("JOBDAG_WORKFLOW")
SHELL = os.environ.get("JOBDAG_SHELL") or None
DEBUG = os.environ.get("JOBDAG_DEBUG", "").lower() in ("1", "true", "yes")

WORKFLOW_CANDIDATES = ("jobdag.json", "jobdag_workflow.py")
