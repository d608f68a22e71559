"""Workflow definitions module."""

from workflows.regeneration_workflow import DSRRegenerationWorkflow, RegenerationSweepInput

__all__ = ["DSRRegenerationWorkflow", "RegenerationSweepInput"]
