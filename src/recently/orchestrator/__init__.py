"""Run orchestration: the run-all pipeline."""

from recently.orchestrator.run_all import run_all

__all__ = ["run_all"]
