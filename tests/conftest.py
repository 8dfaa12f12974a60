"""Common fixtures."""

from __future__ import annotations

from typing import Callable, Dict, List

import pytest

from jobdag.model import Job, JobGraph, build_graph
from jobdag.ui.console import Console, set_console


@pytest.fixture
def make_graph() -> Callable[..., JobGraph]:
    """Build a graph from {id: [deps]} with placeholder commands."""

    def _make(deps: Dict[str, List[str]], commands: Dict[str, str] | None = None) -> JobGraph:
        commands = commands or {}
        return build_graph(
            Job(id=i, command=commands.get(i, f"echo {i}"), needs=tuple(d))
            for i, d in deps.items()
        )

    return _make


@pytest.fixture(autouse=True)
def quiet_console():
    """Reset the global console between tests."""
    console = Console()
    set_console(console)
    return console
